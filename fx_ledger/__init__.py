"""Public interface for the fx_ledger package."""

from __future__ import annotations

from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import TYPE_CHECKING, Any

from fx_ledger.db.database import CurrencyDatabase
from fx_ledger.exceptions import (
    CurrencyNotFoundError,
    FxLedgerError,
    MalformedLineError,
    RateNotFoundError,
    StoreWriteError,
)
from fx_ledger.models import CurrencyFormat, normalise_name
from fx_ledger.registry import (
    Currency,
    clear_all_rates,
    create_database_if_missing,
    initialize_all_currencies,
    remove_blank_lines,
)
from fx_ledger.utils.units import INDIAN_FORMAT, WESTERN_FORMAT, MagnitudeScale, scale, unscale

if TYPE_CHECKING:  # pragma: no cover - import only for static analyzers
    import pandas as pd

__all__ = [
    "__version__",
    "Currency",
    "CurrencyDatabase",
    "CurrencyFormat",
    "CurrencyNotFoundError",
    "FxLedger",
    "FxLedgerError",
    "INDIAN_FORMAT",
    "MagnitudeScale",
    "MalformedLineError",
    "RateNotFoundError",
    "StoreWriteError",
    "WESTERN_FORMAT",
    "clear_all_rates",
    "create_database_if_missing",
    "initialize_all_currencies",
    "rate_table",
    "remove_blank_lines",
    "scale",
    "unscale",
]

try:
    __version__ = importlib_metadata.version("fx-ledger")
except importlib_metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "0.1.0"


class FxLedger:
    """Package facade that centralises where the stores live."""

    __slots__ = ("database",)

    __version__ = __version__

    def __init__(self, home: CurrencyDatabase | str | Path | None = None) -> None:
        """Point the facade at a store directory.

        ``home`` may be a directory holding ``.currencies.txt`` and
        ``.rates.txt`` or a ready-made :class:`CurrencyDatabase`. When omitted
        the stores in the user's home directory are used.
        """

        if isinstance(home, CurrencyDatabase):
            self.database = home
        elif home is None:
            self.database = CurrencyDatabase.default()
        else:
            self.database = CurrencyDatabase.at(home)

    def init(self) -> list[Path]:
        """Create missing stores from the bundled templates."""

        return create_database_if_missing(self.database)

    def currencies(self) -> dict[str, Currency]:
        return initialize_all_currencies(self.database)

    def currency(self, name: str) -> Currency:
        """Return the stored currency called ``name``."""

        key = normalise_name(name)
        for line in self.database.currency_lines():
            if line.name == key:
                return Currency(line.name, line.currency_format, database=self.database)
        raise CurrencyNotFoundError(key)

    def add_currency(self, name: str, currency_format: CurrencyFormat | str) -> Currency:
        currency = Currency(name, currency_format, database=self.database)
        currency.add_to_database()
        return currency

    def remove_currency(self, name: str) -> int:
        return self.currency(name).remove_from_database()

    def set_rate(self, source: str, target: str, rate: float) -> Currency:
        currency = self.currency(source)
        currency.set_rate(target, rate)
        return currency

    def clear_rates(self, name: str) -> int:
        return self.currency(name).clear_rates()

    def clear_all_rates(self) -> None:
        clear_all_rates(self.database)

    def convert(self, amount: float, source: str, target: str) -> float:
        """Convert ``amount`` from ``source`` into ``target`` using the stored rate."""

        return self.currency(source).convert(amount, target)

    def to_words(self, amount: float, name: str) -> str:
        return self.currency(name).to_words(amount)

    def rate_table(self) -> "pd.DataFrame":
        from fx_ledger.reports import rate_table as _rate_table

        return _rate_table(self.currencies())


def __getattr__(name: str) -> Any:
    """Lazily expose pandas-backed helpers so importing the package stays light."""

    if name == "rate_table":
        from fx_ledger.reports import rate_table as _rate_table

        return _rate_table
    raise AttributeError(f"module 'fx_ledger' has no attribute {name}")
