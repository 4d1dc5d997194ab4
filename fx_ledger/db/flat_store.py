"""Line-oriented text store with whole-file atomic rewrites."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path
from typing import Iterable

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from fx_ledger.exceptions import StoreWriteError
from fx_ledger.utils.logger import get_logger

LOGGER = get_logger(__name__)

# Undecodable bytes become lone surrogates on read and the same bytes again on
# write, so lines nobody touched survive a rewrite unchanged.
ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"


def is_blank(line: str) -> bool:
    return not line.strip()


# Windows (and some virus scanners) briefly lock the destination while it is
# being read, which surfaces as PermissionError on os.replace.
@retry(
    retry=retry_if_exception_type(PermissionError),
    wait=wait_exponential(multiplier=0.05, max=1),
    stop=stop_after_attempt(3),
    reraise=True,
)
def _replace(source: Path, destination: Path) -> None:
    os.replace(source, destination)


class FlatFileStore:
    """A UTF-8 text file treated as an ordered list of lines."""

    __slots__ = ("path",)

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def __repr__(self) -> str:
        return f"FlatFileStore({str(self.path)!r})"

    def exists(self) -> bool:
        return self.path.is_file()

    def read_lines(self) -> list[str]:
        """Return every line of the store; a missing file reads as empty."""

        if not self.exists():
            LOGGER.error("Store %s not found; treating it as empty", self.path)
            return []
        text = self.path.read_bytes().decode("utf-8-sig", errors=ENCODING_ERRORS)
        # Only line feeds separate records; str.splitlines would also break on
        # form feeds, vertical tabs and the unicode line separators.
        lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
        if lines and lines[-1] == "":
            lines.pop()
        return lines

    def write_lines(self, lines: Iterable[str]) -> None:
        """Replace the store content with ``lines``."""

        self._write_text("".join(f"{line}\n" for line in lines))

    def append_line(self, line: str) -> None:
        lines = [existing for existing in self.read_lines() if not is_blank(existing)]
        lines.append(line)
        self.write_lines(lines)

    def truncate(self) -> None:
        self._write_text("")

    def remove_blank_lines(self) -> int:
        """Drop empty and whitespace-only lines; return how many were removed."""

        if not self.exists():
            LOGGER.error("Store %s not found; nothing to clean", self.path)
            return 0
        lines = self.read_lines()
        kept = [line for line in lines if not is_blank(line)]
        removed = len(lines) - len(kept)
        if removed:
            self.write_lines(kept)
            LOGGER.debug("Removed %s blank lines from %s", removed, self.path)
        return removed

    def seed_from(self, template: str | Path) -> bool:
        """Copy ``template`` into place unless the store already exists."""

        if self.exists():
            return False
        self._write_text(Path(template).read_text(encoding="utf-8"))
        LOGGER.info("Created %s from template %s", self.path, template)
        return True

    def _write_text(self, content: str) -> None:
        # The full content is staged next to the store so the final rename
        # stays on one filesystem and the old file survives any failure.
        temp_path: Path | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding=ENCODING,
                errors=ENCODING_ERRORS,
                newline="\n",
                dir=self.path.parent,
                prefix=f"{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                temp_path = Path(handle.name)
                handle.write(content)
                handle.flush()
                os.fsync(handle.fileno())
            if self.path.exists():
                # NamedTemporaryFile creates 0600 files; keep the store's mode.
                os.chmod(temp_path, stat.S_IMODE(self.path.stat().st_mode))
            _replace(temp_path, self.path)
        except OSError as exc:
            LOGGER.error("Failed to write %s: %s", self.path, exc)
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
            raise StoreWriteError(self.path, exc) from exc


__all__ = ["FlatFileStore", "is_blank"]
