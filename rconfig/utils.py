"""
Utility functions for rconfig.

This module provides colored output and command execution
used throughout the package.
"""

import subprocess
from typing import List, NamedTuple, Optional


# =============================================================================
# COLOR CODES AND OUTPUT
# =============================================================================

class Colors:
    BLUE = '\033[94m'
    YELLOW = '\033[93m'
    RESET = '\033[0m'


def print_info(message: str):
    """Print info message with color."""
    print(f"{Colors.BLUE}[INFO]{Colors.RESET} {message}")


def print_warning(message: str):
    """Print warning message with color."""
    print(f"{Colors.YELLOW}[WARNING]{Colors.RESET} {message}")


def print_diagnostic(message: str):
    """Print output relayed from an external tool, uncolored."""
    print(f"> {message}")


# =============================================================================
# COMMAND EXECUTION
# =============================================================================

class RawOutput(NamedTuple):
    """Undecoded result of running a command."""
    returncode: int
    stdout: bytes
    stderr: bytes


def run_command(cmd: List[str], timeout: Optional[float] = None,
                verbose: bool = False) -> RawOutput:
    """Run a command to completion and capture both streams as bytes.

    Launch failures are raised as OSError. An expired timeout kills the
    child and is raised as TimeoutError, which is an OSError too.
    """
    from .config import VERBOSE

    if verbose or VERBOSE:
        print_info(f"Running: {' '.join(cmd)}")

    try:
        process = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise TimeoutError(f"{cmd[0]} did not finish within {timeout}s") from e

    return RawOutput(process.returncode, process.stdout, process.stderr)


def print_configuration_summary(config_data: dict):
    """Print current configuration summary."""
    print_info("R Toolchain Configuration")
    for key, value in config_data.items():
        print_info(f"{key}: {value}")
