"""The currency store and rate store managed as one database."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from fx_ledger.db import (
    CURRENCIES_FILENAME,
    RATES_FILENAME,
    bundled_template_path,
    default_home,
)
from fx_ledger.db.flat_store import FlatFileStore
from fx_ledger.exceptions import MalformedLineError
from fx_ledger.models import CurrencyLine, RateLine
from fx_ledger.utils.logger import get_logger

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class CurrencyDatabase:
    """Pair of flat stores: ``NAME:formatcode`` lines and ``FROM:TO:rate`` lines."""

    currencies: FlatFileStore
    rates: FlatFileStore

    @classmethod
    def at(cls, home: str | Path) -> "CurrencyDatabase":
        """Return the database whose stores live directly inside ``home``."""

        directory = Path(home).expanduser()
        return cls(
            currencies=FlatFileStore(directory / CURRENCIES_FILENAME),
            rates=FlatFileStore(directory / RATES_FILENAME),
        )

    @classmethod
    def default(cls) -> "CurrencyDatabase":
        return cls.at(default_home())

    def create_if_missing(self) -> list[Path]:
        """Seed absent stores from the bundled templates; return the created paths."""

        created: list[Path] = []
        for store in (self.currencies, self.rates):
            if store.seed_from(bundled_template_path(store.path.name)):
                created.append(store.path)
        return created

    def remove_blank_lines(self) -> int:
        return self.currencies.remove_blank_lines() + self.rates.remove_blank_lines()

    def clear_all_rates(self) -> None:
        self.rates.truncate()
        LOGGER.info("Cleared every rate in %s", self.rates.path)

    def currency_lines(self) -> list[CurrencyLine]:
        """Parse the currency store in file order, skipping malformed lines."""

        return [
            record
            for record in (
                self._parse(CurrencyLine, line) for line in self.currencies.read_lines()
            )
            if record is not None
        ]

    def rate_lines(self) -> list[RateLine]:
        return [
            record
            for record in (self._parse(RateLine, line) for line in self.rates.read_lines())
            if record is not None
        ]

    def rates_from(self, name: str) -> dict[str, float]:
        """Return ``{target: rate}`` for every stored conversion out of ``name``."""

        return {line.target: line.rate for line in self.rate_lines() if line.source == name}

    def _parse(
        self, model: type[CurrencyLine] | type[RateLine], line: str
    ) -> CurrencyLine | RateLine | None:
        if not line.strip():
            return None
        try:
            return model.parse(line)
        except MalformedLineError as exc:
            LOGGER.warning("Skipping %s", exc)
            return None


__all__ = ["CurrencyDatabase"]
