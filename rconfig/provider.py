"""
Discovery of the R toolchain configuration.

This module runs `R CMD config --all`, decodes and parses its output, and
keeps the resulting table for the rest of the process.
"""

import threading
from typing import Callable, Optional

from . import config
from .decoder import decode_output, to_lossy_text
from .parser import ConfigTable, parse_config_text
from .utils import (
    print_configuration_summary, print_diagnostic, print_warning, run_command
)


class RCommandFailed(OSError):
    """R ran but exited with a non-zero status."""

    def __init__(self, cmd, returncode: int):
        super().__init__(f"{' '.join(cmd)} exited with status {returncode}")
        self.cmd = cmd
        self.returncode = returncode


def run_r_cmd_config(r_binary: Optional[str] = None) -> str:
    """Execute `R CMD config --all` and return its decoded standard output.

    Anything R writes to stderr is echoed, since it usually explains a
    broken installation. Launch failures and non-zero exits raise OSError.
    """
    cmd = [r_binary or config.R_BINARY] + config.R_CONFIG_ARGS
    out = run_command(cmd, timeout=config.R_CONFIG_TIMEOUT)

    if out.stderr:
        print_diagnostic(to_lossy_text(decode_output(out.stderr)))

    if out.returncode != 0:
        raise RCommandFailed(cmd, out.returncode)

    return decode_output(out.stdout)


def build_config(r_binary: Optional[str] = None) -> ConfigTable:
    """Build the configuration table, empty if R could not be queried."""
    if config.VERBOSE:
        print_configuration_summary(config.get_settings())

    try:
        output = run_r_cmd_config(r_binary)
    except RCommandFailed as e:
        print_warning(f"R CMD config failed: {e}")
        return ConfigTable.empty()
    except OSError as e:
        print_warning(f"Could not run R: {e}")
        return ConfigTable.empty()

    return parse_config_text(to_lossy_text(output))


class ConfigProvider:
    """Computes a ConfigTable on first use and shares it afterwards."""

    def __init__(self, builder: Callable[[], ConfigTable] = build_config):
        self._builder = builder
        self._lock = threading.Lock()
        self._table = None

    def get(self) -> ConfigTable:
        table = self._table
        if table is not None:
            return table
        with self._lock:
            if self._table is None:
                self._table = self._builder()
            return self._table


_provider = ConfigProvider()


def get_config() -> ConfigTable:
    """Get the R configuration, running R only on the first call."""
    return _provider.get()
