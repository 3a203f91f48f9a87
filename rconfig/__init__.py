"""
rconfig - R Toolchain Configuration Discovery

This package queries an installed R for its build configuration
(compilers, include paths, BLAS/LAPACK flags) so build scripts can link
against R's native libraries without hardcoding paths.

Main modules:
- config: Settings and environment variable overrides
- utils: Colored output and command execution
- decoder: Platform-specific decoding of subprocess output
- parser: Parsing of `R CMD config --all` output
- flags: Splitting of linker flags
- provider: Running R and caching the result

Usage:
    from rconfig import get_config, split_flags
    paths, libs = split_flags([get_config().lookup('BLAS_LIBS')])
"""

__version__ = "1.0.0"
__author__ = "rconfig"
__description__ = "R toolchain configuration discovery"

# Make common functionality easily accessible
from .decoder import decode_output
from .flags import FlagLists, split_flags, table_flags
from .parser import ConfigTable, MissingConfigValue, parse_config_text
from .provider import (
    ConfigProvider, RCommandFailed,
    build_config, get_config, run_r_cmd_config
)

__all__ = [
    'get_config',
    'build_config',
    'run_r_cmd_config',
    'ConfigProvider',
    'RCommandFailed',
    'ConfigTable',
    'MissingConfigValue',
    'parse_config_text',
    'FlagLists',
    'split_flags',
    'table_flags',
    'decode_output'
]
