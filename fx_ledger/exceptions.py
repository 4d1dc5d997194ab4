"""Exception hierarchy for fx_ledger."""

from __future__ import annotations

from pathlib import Path


class FxLedgerError(Exception):
    """Base class for every error raised by the package."""


class MalformedLineError(FxLedgerError, ValueError):
    """A store line does not split into the expected fields."""

    def __init__(self, line: str, reason: str) -> None:
        super().__init__(f"malformed line {line!r}: {reason}")
        self.line = line
        self.reason = reason


class RateNotFoundError(FxLedgerError, KeyError):
    """No conversion rate is stored for the requested currency pair."""

    def __init__(self, source: str, target: str) -> None:
        super().__init__(f"no rate stored from {source} to {target}")
        self.source = source
        self.target = target

    def __str__(self) -> str:
        return str(self.args[0])


class CurrencyNotFoundError(FxLedgerError, KeyError):
    """The currency store has no entry with the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"unknown currency {name}")
        self.name = name

    def __str__(self) -> str:
        return str(self.args[0])


class StoreWriteError(FxLedgerError, OSError):
    """Rewriting a store failed; the previous content is left untouched."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"could not write {path}: {cause}")
        self.path = path
        self.cause = cause


__all__ = [
    "CurrencyNotFoundError",
    "FxLedgerError",
    "MalformedLineError",
    "RateNotFoundError",
    "StoreWriteError",
]
