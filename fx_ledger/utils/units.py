"""Render large magnitudes in Indian or Western unit names.

``INDIAN_FORMAT`` names values in thousand/lakh/crore while
``WESTERN_FORMAT`` uses thousand/million/billion. Custom scales can be built
with :meth:`MagnitudeScale.from_pairs`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

BASE_LABEL = "-"
DECIMAL_PLACES = 5


@dataclass(frozen=True)
class MagnitudeScale:
    """Ordered ``(label, multiplier)`` pairs, ascending by multiplier."""

    entries: tuple[tuple[str, int], ...]

    def __post_init__(self) -> None:
        if not self.entries:
            raise ValueError("a scale needs at least one entry")
        labels = [label for label, _ in self.entries]
        if len(set(labels)) != len(labels):
            raise ValueError("scale labels must be unique")
        previous = 0
        for label, multiplier in self.entries:
            if isinstance(multiplier, bool) or not isinstance(multiplier, int):
                raise ValueError(f"multiplier for {label!r} must be an integer")
            if multiplier <= previous:
                raise ValueError(
                    f"multiplier for {label!r} must be positive and larger than {previous}"
                )
            previous = multiplier

    @classmethod
    def from_pairs(cls, labels: Sequence[str], multipliers: Sequence[int]) -> "MagnitudeScale":
        """Build a scale from parallel label and multiplier sequences."""

        if len(labels) != len(multipliers):
            raise ValueError("labels and multipliers must be the same length")
        return cls(
            tuple((str(label), _integral(label, value)) for label, value in zip(labels, multipliers))
        )

    def scale(self, value: float) -> str:
        """Return ``value`` divided by the largest fitting unit, e.g. ``"1.20000 thousand"``.

        Raises :class:`ValueError` for NaN and infinite values, which have no
        magnitude to name.
        """

        number = float(value)
        if not math.isfinite(number):
            raise ValueError(f"cannot scale non-finite value {value!r}")
        sign = "-" if number < 0 else ""
        magnitude = abs(number)
        label = ""
        for unit, multiplier in reversed(self.entries):
            if magnitude >= multiplier:
                magnitude /= multiplier
                label = "" if unit == BASE_LABEL else unit
                break
        rendered = f"{sign}{magnitude:.{DECIMAL_PLACES}f}"
        return f"{rendered} {label}" if label else rendered

    def unscale(self, label: str) -> int:
        """Return the multiplier for ``label``; unknown labels map to 1."""

        for unit, multiplier in self.entries:
            if unit == label:
                return multiplier
        return 1

    def labels(self) -> list[str]:
        """Return a copy of the unit labels in ascending order."""

        return [label for label, _ in self.entries]


def _integral(label: str, value: float) -> int:
    """Accept ``1000`` or ``1e3`` but not ``1.5``."""

    if isinstance(value, bool):
        raise ValueError(f"multiplier for {label!r} must be an integer")
    try:
        multiplier = int(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ValueError(f"multiplier for {label!r} must be an integer") from exc
    if multiplier != value:
        raise ValueError(f"multiplier for {label!r} must be an integer, got {value!r}")
    return multiplier


INDIAN_FORMAT = MagnitudeScale.from_pairs(
    (BASE_LABEL, "thousand", "lakh", "crore"),
    (1, 1_000, 100_000, 10_000_000),
)
WESTERN_FORMAT = MagnitudeScale.from_pairs(
    (BASE_LABEL, "thousand", "million", "billion"),
    (1, 1_000, 1_000_000, 1_000_000_000),
)


def scale(value: float, table: MagnitudeScale = WESTERN_FORMAT) -> str:
    return table.scale(value)


def unscale(label: str, table: MagnitudeScale = WESTERN_FORMAT) -> int:
    return table.unscale(label)


def labels(table: MagnitudeScale) -> list[str]:
    return table.labels()


__all__ = [
    "BASE_LABEL",
    "INDIAN_FORMAT",
    "MagnitudeScale",
    "WESTERN_FORMAT",
    "labels",
    "scale",
    "unscale",
]
