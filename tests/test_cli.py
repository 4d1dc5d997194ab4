from __future__ import annotations

from pathlib import Path

import pytest

from fx_ledger import cli


def _run(tmp_path: Path, *args: str) -> int:
    return cli.main(["--home", str(tmp_path), *args])


def test_init_and_list(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "init") == 0
    assert (tmp_path / ".currencies.txt").exists()
    assert (tmp_path / ".rates.txt").exists()

    assert _run(tmp_path, "init") == 0
    assert _run(tmp_path, "list") == 0

    out = capsys.readouterr().out
    assert "stores already present" in out
    assert "INR (isf)" in out
    assert "USD (usf)" in out


def test_add_rate_and_convert(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _run(tmp_path, "init")
    assert _run(tmp_path, "add", "jpy", "usf") == 0
    assert _run(tmp_path, "set-rate", "usd", "inr", "83.5") == 0
    capsys.readouterr()

    assert _run(tmp_path, "convert", "20000", "USD", "INR") == 0

    out = capsys.readouterr().out
    assert "1670000.0 INR (16.70000 lakh)" in out
    assert "JPY:usf" in (tmp_path / ".currencies.txt").read_text(encoding="utf-8")


def test_words_command(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "words", "1000000") == 0
    assert _run(tmp_path, "words", "1000000", "--format", "isf") == 0

    assert capsys.readouterr().out.splitlines() == ["1.00000 million", "10.00000 lakh"]


def test_clear_and_remove(tmp_path: Path) -> None:
    _run(tmp_path, "init")
    _run(tmp_path, "set-rate", "USD", "INR", "83")
    _run(tmp_path, "set-rate", "EUR", "INR", "90")

    assert _run(tmp_path, "clear-rates", "USD") == 0
    assert (tmp_path / ".rates.txt").read_text(encoding="utf-8") == "EUR:INR:90.0\n"

    assert _run(tmp_path, "clear-all-rates") == 0
    assert (tmp_path / ".rates.txt").read_text(encoding="utf-8") == ""

    assert _run(tmp_path, "remove", "gbp") == 0
    assert "GBP" not in (tmp_path / ".currencies.txt").read_text(encoding="utf-8")


def test_rates_command(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    pytest.importorskip("pandas")
    _run(tmp_path, "init")
    _run(tmp_path, "set-rate", "USD", "INR", "83")
    capsys.readouterr()

    assert _run(tmp_path, "rates") == 0

    out = capsys.readouterr().out
    assert "83.0" in out
    assert "INR" in out


def test_errors_exit_with_status_one(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _run(tmp_path, "init")

    assert _run(tmp_path, "convert", "1", "USD", "INR") == 1
    assert _run(tmp_path, "set-rate", "XYZ", "INR", "1") == 1
    assert _run(tmp_path, "set-rate", "USD", "INR", "-2") == 1

    err = capsys.readouterr().err
    assert "no rate stored from USD to INR" in err
    assert "unknown currency XYZ" in err
    assert "positive" in err


def test_invalid_format_is_rejected_by_parser(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        _run(tmp_path, "add", "JPY", "xyz")
