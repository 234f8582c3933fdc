from __future__ import annotations

from pathlib import Path

import pytest

from shipsheet.cli import main as cli_main

"""Exit code contract: 0 = success, 1 = fatal (config / open / write errors)."""


def test_exit_code_success(orders_excel: Path, write_config: Path, capsys):
    assert cli_main(["convert", str(orders_excel), "--mapping", str(write_config)]) == 0


def test_exit_code_missing_config(orders_excel: Path, temp_workdir: Path, capsys):
    code = cli_main(["convert", str(orders_excel), "--mapping", str(temp_workdir / "nope.yml")])
    assert code == 1
    assert "ERROR config: config file not found" in capsys.readouterr().out


def test_exit_code_unreadable_source(temp_workdir: Path, write_config: Path, capsys):
    bad = temp_workdir / "data" / "bad.xlsx"
    bad.write_bytes(b"garbage")
    code = cli_main(["convert", str(bad), "--mapping", str(write_config)])
    assert code == 1
    assert "ERROR convert: cannot open file" in capsys.readouterr().out


def test_exit_code_usage_error(capsys):
    with pytest.raises(SystemExit) as e:
        cli_main([])
    assert e.value.code == 2
