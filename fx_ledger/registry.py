"""Currency registry backed by the flat currency and rate stores.

A :class:`Currency` hydrates its outbound conversion rates from the rate
store as soon as it is created. Mutations write through to the stores and
re-read them, so the in-memory ``rates`` mapping always mirrors the file.

The stores are plain files without locking: a single process and a single
thread are expected to use a given database at a time.
"""

from __future__ import annotations

import math
from pathlib import Path

from fx_ledger.db.database import CurrencyDatabase
from fx_ledger.db.flat_store import FlatFileStore, is_blank
from fx_ledger.exceptions import RateNotFoundError
from fx_ledger.models import (
    FIELD_SEPARATOR,
    CurrencyFormat,
    CurrencyLine,
    RateLine,
    name_token,
    normalise_name,
)
from fx_ledger.utils.logger import get_logger

LOGGER = get_logger(__name__)


def _resolve(database: CurrencyDatabase | None) -> CurrencyDatabase:
    return database if database is not None else CurrencyDatabase.default()


class Currency:
    """A named currency, its format tag and its stored conversion rates."""

    __slots__ = ("name", "currency_format", "rates", "database")

    def __init__(
        self,
        name: str,
        currency_format: CurrencyFormat | str,
        *,
        database: CurrencyDatabase | None = None,
    ) -> None:
        self.name = normalise_name(name)
        self.currency_format = CurrencyFormat.from_code(currency_format)
        self.database = _resolve(database)
        self.rates: dict[str, float] = {}
        self.reload_rates()

    def __repr__(self) -> str:
        return (
            f"Currency(name={self.name!r}, format={self.format_code!r}, "
            f"rates={self.rates!r})"
        )

    @property
    def format_code(self) -> str:
        return self.currency_format.code

    def reload_rates(self) -> None:
        """Re-read this currency's outbound rates from the rate store."""

        self.rates = self.database.rates_from(self.name)

    def add_to_database(self) -> bool:
        """Append this currency to the currency store unless already listed."""

        store = self.database.currencies
        if any(
            name_token(line) == self.name for line in store.read_lines() if not is_blank(line)
        ):
            LOGGER.info("%s already present in %s", self.name, store.path)
            return False
        store.append_line(CurrencyLine(self.name, self.currency_format).render())
        LOGGER.info("Added %s to %s", self.name, store.path)
        return True

    def remove_from_database(self) -> int:
        """Delete this currency's lines from the currency store.

        Rates stored by other currencies towards this one are left alone.
        """

        return self._remove_own_lines(self.database.currencies)

    def converts_to(self, other: str) -> bool:
        return str(other).strip().upper() in self.rates

    def get_rate(self, other: str) -> float:
        """Return the stored rate towards ``other``.

        Raises :class:`RateNotFoundError` when no conversion is stored; call
        :meth:`converts_to` first when absence is expected.
        """

        target = str(other).strip().upper()
        try:
            return self.rates[target]
        except KeyError:
            raise RateNotFoundError(self.name, target) from None

    def set_rate(self, other: str, rate: float) -> None:
        """Store ``rate`` for this currency towards ``other``, replacing any previous value."""

        target = normalise_name(other)
        if target == self.name:
            raise ValueError(f"{self.name} cannot store a rate to itself")
        value = float(rate)
        if not math.isfinite(value) or value <= 0:
            raise ValueError(f"Rate must be a positive number, got {rate!r}")

        new_line = RateLine(self.name, target, value).render()
        lines: list[str] = []
        replaced = False
        for line in self.database.rates.read_lines():
            if is_blank(line):
                continue
            if self._is_pair(line, target):
                # Collapse duplicates of the pair into the single new line.
                if not replaced:
                    lines.append(new_line)
                    replaced = True
                continue
            lines.append(line)
        if not replaced:
            lines.append(new_line)
        self.database.rates.write_lines(lines)
        LOGGER.debug("Stored %s", new_line)
        self.reload_rates()

    def clear_rates(self) -> int:
        """Delete every rate stored from this currency."""

        removed = self._remove_own_lines(self.database.rates)
        self.reload_rates()
        return removed

    def convert(self, amount: float, other: str) -> float:
        """Return ``amount`` of this currency expressed in ``other``."""

        return float(amount) * self.get_rate(other)

    def to_words(self, amount: float) -> str:
        """Render ``amount`` with the unit names of this currency's format."""

        return self.currency_format.scale.scale(amount)

    def _is_pair(self, line: str, target: str) -> bool:
        tokens = line.split(FIELD_SEPARATOR)
        return (
            len(tokens) >= 2
            and tokens[0].strip().upper() == self.name
            and tokens[1].strip().upper() == target
        )

    def _remove_own_lines(self, store: FlatFileStore) -> int:
        if not store.exists():
            LOGGER.error("Store %s not found; nothing to remove for %s", store.path, self.name)
            return 0
        lines = [line for line in store.read_lines() if not is_blank(line)]
        kept = [line for line in lines if name_token(line) != self.name]
        store.write_lines(kept)
        return len(lines) - len(kept)


def initialize_all_currencies(database: CurrencyDatabase | None = None) -> dict[str, Currency]:
    """Instantiate every currency listed in the currency store, in file order.

    Blank lines are pruned from both stores first. When a name is listed more
    than once the first entry wins.
    """

    db = _resolve(database)
    db.remove_blank_lines()
    currencies: dict[str, Currency] = {}
    for line in db.currency_lines():
        if line.name in currencies:
            LOGGER.debug("Ignoring duplicate entry for %s", line.name)
            continue
        currencies[line.name] = Currency(line.name, line.currency_format, database=db)
    return currencies


def clear_all_rates(database: CurrencyDatabase | None = None) -> None:
    _resolve(database).clear_all_rates()


def remove_blank_lines(database: CurrencyDatabase | None = None) -> int:
    return _resolve(database).remove_blank_lines()


def create_database_if_missing(database: CurrencyDatabase | None = None) -> list[Path]:
    """Seed the stores from the bundled templates; existing stores are kept."""

    return _resolve(database).create_if_missing()


__all__ = [
    "Currency",
    "clear_all_rates",
    "create_database_if_missing",
    "initialize_all_currencies",
    "remove_blank_lines",
]
