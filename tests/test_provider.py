import sys
import threading
import time

import pytest

from rconfig import config, provider
from rconfig.parser import ConfigTable
from rconfig.provider import (
    ConfigProvider, RCommandFailed, build_config, run_r_cmd_config
)
from rconfig.utils import RawOutput


R_OUTPUT = b"""\
CC = gcc
FC = gfortran
BLAS_LIBS = -L/usr/lib/R/lib -lRblas
## trailing notes
CXX = g++
"""


class FakeRunner:
    def __init__(self, output):
        self.output = output
        self.commands = []

    def __call__(self, cmd, timeout=None, verbose=False):
        self.commands.append(cmd)
        return self.output


def test_run_r_cmd_config_invokes_config_all(monkeypatch):
    runner = FakeRunner(RawOutput(0, R_OUTPUT, b''))
    monkeypatch.setattr(provider, 'run_command', runner)
    text = run_r_cmd_config('/opt/R/bin/R')
    assert runner.commands == [['/opt/R/bin/R', 'CMD', 'config', '--all']]
    assert text.startswith('CC = gcc')


def test_run_r_cmd_config_defaults_to_configured_binary(monkeypatch):
    runner = FakeRunner(RawOutput(0, b'', b''))
    monkeypatch.setattr(provider, 'run_command', runner)
    monkeypatch.setattr(config, 'R_BINARY', 'Rdev')
    run_r_cmd_config()
    assert runner.commands[0][0] == 'Rdev'


def test_stderr_is_echoed_but_not_fatal(monkeypatch, capsys):
    runner = FakeRunner(RawOutput(0, R_OUTPUT, b'WARNING: ignoring environment value of R_HOME'))
    monkeypatch.setattr(provider, 'run_command', runner)
    table = build_config()
    out = capsys.readouterr().out
    assert '> WARNING: ignoring environment value of R_HOME' in out
    assert table.lookup('FC') == 'gfortran'


def test_build_config_parses_up_to_comment(monkeypatch):
    monkeypatch.setattr(provider, 'run_command', FakeRunner(RawOutput(0, R_OUTPUT, b'')))
    table = build_config()
    assert dict(table) == {
        'CC': 'gcc',
        'FC': 'gfortran',
        'BLAS_LIBS': '-L/usr/lib/R/lib -lRblas',
    }


def test_non_zero_exit_gives_empty_table(monkeypatch, capsys):
    runner = FakeRunner(RawOutput(1, b'CC = gcc\n', b'Error: no such command'))
    monkeypatch.setattr(provider, 'run_command', runner)
    with pytest.raises(RCommandFailed) as excinfo:
        run_r_cmd_config()
    assert excinfo.value.returncode == 1
    assert '> Error: no such command' in capsys.readouterr().out

    table = build_config()
    assert len(table) == 0
    out = capsys.readouterr().out
    assert '> Error: no such command' in out
    assert 'R CMD config failed' in out


def test_missing_binary_gives_empty_table(tmp_path, capsys):
    table = build_config(str(tmp_path / 'no-such-R'))
    assert table == ConfigTable.empty()
    assert 'Could not run R' in capsys.readouterr().out


def test_timeout_counts_as_launch_failure(monkeypatch, tmp_path, capsys):
    script = tmp_path / 'slow.py'
    script.write_text("import time\ntime.sleep(30)\n")
    monkeypatch.setattr(config, 'R_CONFIG_ARGS', [str(script)])
    monkeypatch.setattr(config, 'R_CONFIG_TIMEOUT', 0.5)
    table = build_config(sys.executable)
    assert len(table) == 0
    assert 'did not finish' in capsys.readouterr().out


def test_verbose_prints_settings(monkeypatch, capsys):
    monkeypatch.setattr(provider, 'run_command', FakeRunner(RawOutput(0, b'', b'')))
    monkeypatch.setattr(config, 'VERBOSE', True)
    build_config()
    assert 'R Toolchain Configuration' in capsys.readouterr().out


def test_provider_builds_once():
    calls = []

    def builder():
        calls.append(1)
        return ConfigTable({'CC': 'gcc'})

    configs = ConfigProvider(builder)
    first = configs.get()
    second = configs.get()
    assert first is second
    assert first == second
    assert len(calls) == 1


def test_provider_caches_empty_result():
    calls = []

    def builder():
        calls.append(1)
        return ConfigTable.empty()

    configs = ConfigProvider(builder)
    configs.get()
    configs.get()
    assert len(calls) == 1


def test_concurrent_callers_share_one_build():
    calls = []
    results = []

    def builder():
        calls.append(1)
        time.sleep(0.1)
        return ConfigTable({'CC': 'gcc'})

    configs = ConfigProvider(builder)
    threads = [threading.Thread(target=lambda: results.append(configs.get()))
               for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(calls) == 1
    assert len(results) == 8
    assert all(result is results[0] for result in results)


def test_get_config_runs_r_once(monkeypatch):
    runner = FakeRunner(RawOutput(0, R_OUTPUT, b''))
    monkeypatch.setattr(provider, 'run_command', runner)
    monkeypatch.setattr(provider, '_provider', ConfigProvider())
    first = provider.get_config()
    second = provider.get_config()
    assert first == second
    assert len(runner.commands) == 1
