from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

import pytest

from fx_ledger.db import flat_store as flat_store_module
from fx_ledger.db.flat_store import FlatFileStore
from fx_ledger.exceptions import StoreWriteError


def test_missing_store_reads_as_empty_and_logs(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    store = FlatFileStore(tmp_path / "missing.txt")

    with caplog.at_level(logging.ERROR):
        assert store.read_lines() == []

    assert "not found" in caplog.text
    assert not store.exists()


def test_write_and_append_lines(tmp_path: Path) -> None:
    store = FlatFileStore(tmp_path / "store.txt")

    store.write_lines(["A:1", "B:2"])
    store.append_line("C:3")

    assert store.path.read_text(encoding="utf-8") == "A:1\nB:2\nC:3\n"
    assert store.read_lines() == ["A:1", "B:2", "C:3"]


def test_append_creates_missing_store(tmp_path: Path) -> None:
    store = FlatFileStore(tmp_path / "nested" / "store.txt")

    store.append_line("INR:isf")

    assert store.read_lines() == ["INR:isf"]


def test_remove_blank_lines_keeps_order(tmp_path: Path) -> None:
    path = tmp_path / "store.txt"
    path.write_text("\nA:1\n\n\n   \nB:2\n\nC:3\n\n", encoding="utf-8")
    store = FlatFileStore(path)

    removed = store.remove_blank_lines()

    assert removed == 6
    assert path.read_text(encoding="utf-8") == "A:1\nB:2\nC:3\n"
    assert store.remove_blank_lines() == 0


def test_remove_blank_lines_on_missing_store(tmp_path: Path) -> None:
    store = FlatFileStore(tmp_path / "missing.txt")

    assert store.remove_blank_lines() == 0
    assert not store.exists()


def test_truncate_empties_the_store(tmp_path: Path) -> None:
    store = FlatFileStore(tmp_path / "store.txt")
    store.write_lines(["A:1"])

    store.truncate()

    assert store.exists()
    assert store.read_lines() == []


def test_seed_from_never_overwrites(tmp_path: Path) -> None:
    template = tmp_path / "template.txt"
    template.write_text("INR:isf\n", encoding="utf-8")
    store = FlatFileStore(tmp_path / "store.txt")

    assert store.seed_from(template) is True
    store.write_lines(["USD:usf"])
    assert store.seed_from(template) is False

    assert store.read_lines() == ["USD:usf"]


def test_failed_replace_keeps_previous_content(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    store = FlatFileStore(tmp_path / "store.txt")
    store.write_lines(["A:1"])

    def _fail(source: Path, destination: Path) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(flat_store_module, "_replace", _fail)

    with pytest.raises(StoreWriteError) as excinfo:
        store.write_lines(["B:2"])

    assert excinfo.value.path == store.path
    assert store.read_lines() == ["A:1"]
    assert [entry.name for entry in tmp_path.iterdir()] == ["store.txt"]


def test_replace_retries_permission_errors(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    calls: list[tuple[Path, Path]] = []
    real_replace = flat_store_module.os.replace

    def _flaky_replace(source: Path, destination: Path) -> None:
        calls.append((source, destination))
        if len(calls) == 1:
            raise PermissionError("locked")
        real_replace(source, destination)

    monkeypatch.setattr(flat_store_module.os, "replace", _flaky_replace)
    store = FlatFileStore(tmp_path / "store.txt")

    store.write_lines(["A:1"])

    assert len(calls) == 2
    assert store.read_lines() == ["A:1"]


def test_crlf_line_endings_are_read_as_plain_lines(tmp_path: Path) -> None:
    path = tmp_path / "store.txt"
    path.write_bytes(b"INR:isf\r\nUSD:usf\r\n")

    assert FlatFileStore(path).read_lines() == ["INR:isf", "USD:usf"]


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_rewrite_keeps_store_permissions(tmp_path: Path) -> None:
    store = FlatFileStore(tmp_path / "store.txt")
    store.write_lines(["A:1"])
    os.chmod(store.path, 0o644)

    store.write_lines(["B:2"])

    assert stat.S_IMODE(store.path.stat().st_mode) == 0o644
    assert store.read_lines() == ["B:2"]
