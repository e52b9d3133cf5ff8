from __future__ import annotations

from pathlib import Path

import pytest

from ledgercoder import cli
from ledgercoder import config as config_module


@pytest.fixture(autouse=True)
def isolate_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", tmp_path / "absent.yaml")
    monkeypatch.setattr(config_module, "_CONFIG_PATH_OVERRIDE", None)
    monkeypatch.delenv("LEDGERCODER_CONFIG", raising=False)
    monkeypatch.delenv("LEDGERCODER_MAX_SYMBOLS", raising=False)
    yield


def test_encode_prints_eight_place_amounts(capsys) -> None:
    cli.main(["encode", "a"])

    assert capsys.readouterr().out.strip() == "0.06000000"


def test_encode_then_decode(capsys) -> None:
    cli.main(["encode", "--sanitize", "Hello, World!"])
    amounts = capsys.readouterr().out.strip()

    cli.main(["decode", amounts])
    assert capsys.readouterr().out.strip() == "hello world"


def test_decode_show_chunks_marks_corrupt_amounts(capsys) -> None:
    cli.main(["decode", "0.00000001,0.06,0.81249", "--show-chunks"])

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "az"
    assert lines[1] == "0.00000001 → corrupt (dropped)"
    assert lines[2] == "0.06000000 → 'a'"
    assert lines[3] == "0.81249000 → 'z'"


def test_encode_rejects_unsupported_characters(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["encode", "hello."])

    assert excinfo.value.code == 1
    assert "unsupported character '.'" in capsys.readouterr().err


def test_decode_rejects_malformed_amounts(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["decode", "0.123456789"])

    assert excinfo.value.code == 1
    assert "fractional digits" in capsys.readouterr().err


def test_table_lists_every_symbol(capsys) -> None:
    cli.main(["table"])

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 29
    assert lines[-1].startswith(". (terminator)")


def test_plan_reports_totals(capsys) -> None:
    cli.main(["plan", "zzz", "--address", "dest"])

    out = capsys.readouterr().out
    assert "0 | dest | 0.81249000" in out
    assert "transactions: 3" in out
    assert "total: 2.43747000" in out


def test_config_flag_changes_chunking(tmp_path: Path, capsys) -> None:
    config_path = tmp_path / "coder.yaml"
    config_path.write_text("coder:\n  max_symbols_per_codeword: 1\n")

    cli.main(["--config", str(config_path), "encode", "ab"])

    assert len(capsys.readouterr().out.strip().split(",")) == 2


def test_missing_config_file_exits(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--config", str(tmp_path / "nope.yaml"), "table"])

    assert excinfo.value.code == 1
    assert "Config file not found" in capsys.readouterr().err
