"""Records persisted in the currency and rate stores."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from fx_ledger.exceptions import MalformedLineError
from fx_ledger.utils.units import INDIAN_FORMAT, WESTERN_FORMAT, MagnitudeScale

FIELD_SEPARATOR = ":"


class CurrencyFormat(str, Enum):
    """Magnitude naming convention used when a currency is written in words."""

    INDIAN = "isf"
    WESTERN = "usf"

    @classmethod
    def from_code(cls, code: "str | CurrencyFormat") -> "CurrencyFormat":
        """Normalise ``isf``/``usf`` codes (any case) into a format tag."""

        if isinstance(code, CurrencyFormat):
            return code
        cleaned = str(code).strip().lower()
        for member in cls:
            if member.value == cleaned:
                return member
        raise ValueError(f"Unknown currency format code {code!r}; expected 'isf' or 'usf'")

    @property
    def code(self) -> str:
        return self.value

    @property
    def scale(self) -> MagnitudeScale:
        return INDIAN_FORMAT if self is CurrencyFormat.INDIAN else WESTERN_FORMAT


def normalise_name(name: str) -> str:
    """Return the canonical upper-case currency name."""

    cleaned = str(name).strip().upper()
    if not cleaned:
        raise ValueError("Currency name must not be empty")
    if FIELD_SEPARATOR in cleaned:
        raise ValueError(f"Currency name must not contain {FIELD_SEPARATOR!r}")
    # Undecodable store bytes arrive as lone surrogates, which are not printable.
    if not cleaned.isprintable():
        raise ValueError(f"Currency name {cleaned!r} contains unprintable characters")
    return cleaned


def name_token(line: str) -> str:
    """Return the upper-cased first field of a store line."""

    return line.split(FIELD_SEPARATOR, 1)[0].strip().upper()


@dataclass(slots=True)
class CurrencyLine:
    """One ``NAME:formatcode`` entry of the currency store."""

    name: str
    currency_format: CurrencyFormat

    @classmethod
    def parse(cls, line: str) -> "CurrencyLine":
        tokens = line.strip().split(FIELD_SEPARATOR)
        if len(tokens) != 2:
            raise MalformedLineError(line, "expected NAME:formatcode")
        try:
            return cls(
                name=normalise_name(tokens[0]),
                currency_format=CurrencyFormat.from_code(tokens[1]),
            )
        except ValueError as exc:
            raise MalformedLineError(line, str(exc)) from exc

    def render(self) -> str:
        return f"{self.name}{FIELD_SEPARATOR}{self.currency_format.code}"


@dataclass(slots=True)
class RateLine:
    """One ``FROM:TO:rate`` entry of the rate store."""

    source: str
    target: str
    rate: float

    @classmethod
    def parse(cls, line: str) -> "RateLine":
        tokens = line.strip().split(FIELD_SEPARATOR)
        if len(tokens) != 3:
            raise MalformedLineError(line, "expected FROM:TO:rate")
        try:
            source = normalise_name(tokens[0])
            target = normalise_name(tokens[1])
            rate = float(tokens[2])
        except ValueError as exc:
            raise MalformedLineError(line, str(exc)) from exc
        if not math.isfinite(rate) or rate <= 0:
            raise MalformedLineError(line, "rate must be a positive number")
        return cls(source=source, target=target, rate=rate)

    def render(self) -> str:
        return FIELD_SEPARATOR.join((self.source, self.target, str(float(self.rate))))


__all__ = [
    "CurrencyFormat",
    "CurrencyLine",
    "FIELD_SEPARATOR",
    "RateLine",
    "name_token",
    "normalise_name",
]
