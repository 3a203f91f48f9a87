import sys
from pathlib import Path

# Allow importing rconfig from repository root
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
