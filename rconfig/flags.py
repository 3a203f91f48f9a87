"""
Splitting of linker flags into search paths and library names.
"""

from typing import Iterable, List, NamedTuple, Union

from .config import PATH_FLAG, LIBRARY_FLAG


class FlagLists(NamedTuple):
    paths: List[str]
    libraries: List[str]


def split_flags(values: Union[str, Iterable[str]]) -> FlagLists:
    """Collect `-L` search paths and `-l` library names from flag strings.

    Both lists keep the order in which the flags appear. Other flags are
    ignored.
    """
    if isinstance(values, str):
        values = [values]

    paths = []
    libraries = []
    for value in values:
        for token in value.split():
            if token.startswith(PATH_FLAG):
                paths.append(token[len(PATH_FLAG):])
            elif token.startswith(LIBRARY_FLAG):
                libraries.append(token[len(LIBRARY_FLAG):])
    return FlagLists(paths, libraries)


def table_flags(table, *keys: str) -> FlagLists:
    """Split the flags stored under the given keys, skipping absent keys."""
    values = [table.lookup(key) for key in keys]
    return split_flags(value for value in values if value is not None)
