"""
Configuration for rconfig.

This module holds the settings used to locate and query the R toolchain,
with environment variable overrides.
"""

import os

from .utils import print_warning


def parse_timeout(value: str):
    """Parse a timeout in seconds, None if unset or not a positive number."""
    if not value:
        return None
    try:
        timeout = float(value)
    except ValueError:
        print_warning(f"Ignoring invalid R_CONFIG_TIMEOUT: {value!r}")
        return None
    if timeout <= 0:
        print_warning(f"Ignoring non-positive R_CONFIG_TIMEOUT: {value!r}")
        return None
    return timeout


# =============================================================================
# CONFIGURATION VARIABLES - Override via environment variables
# =============================================================================

# R executable, looked up on PATH unless an absolute path is given
R_BINARY = os.environ.get('R_BINARY', 'R')

# Seconds to wait for `R CMD config` before giving up (unset = wait forever)
R_CONFIG_TIMEOUT = parse_timeout(os.environ.get('R_CONFIG_TIMEOUT', ''))

# Verbose output flag
VERBOSE = os.environ.get('VERBOSE', '').lower() in ('1', 'true', 'yes')


# =============================================================================
# OUTPUT FORMAT OF `R CMD config --all`
# =============================================================================

# Subcommand asking R for all of its configuration variables
R_CONFIG_ARGS = ['CMD', 'config', '--all']

# Lines starting with this marker begin the trailing commentary
COMMENT_MARKER = '##'

# Linker flag prefixes
PATH_FLAG = '-L'
LIBRARY_FLAG = '-l'


def get_settings():
    """Get the effective settings as a dict, for diagnostics."""
    return {
        'R binary': R_BINARY,
        'Command': ' '.join([R_BINARY] + R_CONFIG_ARGS),
        'Timeout': R_CONFIG_TIMEOUT if R_CONFIG_TIMEOUT is not None else 'none',
        'Verbose': VERBOSE,
    }
