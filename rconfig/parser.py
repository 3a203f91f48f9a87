"""
Parsing of `R CMD config --all` output.

The output is a block of `NAME = value` lines followed by a commentary
section whose first line starts with `##`. Everything from that line on is
ignored.
"""

import re
from collections.abc import Mapping
from typing import Dict, Iterator, Optional

from .config import COMMENT_MARKER

# Only \n and \r\n end a line; other control characters belong to the value
_LINE_END = re.compile(r'\r?\n')


class MissingConfigValue(KeyError):
    """A configuration variable required by the caller is not set."""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self):
        return f"R CMD config does not report {self.key}"


class ConfigTable(Mapping):
    """Read-only mapping of R configuration variables to their values."""

    def __init__(self, values: Optional[Dict[str, str]] = None):
        self._values = dict(values or {})

    @classmethod
    def empty(cls) -> 'ConfigTable':
        return cls()

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self):
        return f"ConfigTable({self._values!r})"

    def lookup(self, key: str) -> Optional[str]:
        """Get the value of a variable, or None if R does not report it."""
        return self._values.get(key)

    def require(self, key: str) -> str:
        """Get the value of a variable, raising MissingConfigValue if absent."""
        value = self._values.get(key)
        if value is None:
            raise MissingConfigValue(key)
        return value


def parse_config_text(text: str) -> ConfigTable:
    """Parse decoded `R CMD config --all` output into a ConfigTable."""
    values = {}
    for line in _LINE_END.split(text):
        if line.startswith(COMMENT_MARKER):
            break
        parts = [part.strip() for part in line.split('=')]
        # Lines without exactly one '=' are not assignments
        if len(parts) == 2:
            name, value = parts
            values[name] = value
    return ConfigTable(values)
