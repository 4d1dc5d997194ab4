"""Locations of the flat-file stores and their bundled seed templates."""

from __future__ import annotations

from pathlib import Path
from typing import Final

__all__ = [
    "CURRENCIES_FILENAME",
    "RATES_FILENAME",
    "TEMPLATES_DIR",
    "default_home",
    "bundled_template_path",
]

CURRENCIES_FILENAME: Final[str] = ".currencies.txt"
RATES_FILENAME: Final[str] = ".rates.txt"

# Templates ship next to this module so the seeding step works from an
# installed wheel as well as from a source checkout.
TEMPLATES_DIR: Final[Path] = Path(__file__).resolve().with_name("templates")


def default_home() -> Path:
    """Return the directory holding the per-user stores."""

    return Path.home()


def bundled_template_path(filename: str) -> Path:
    """Return the packaged template used to seed ``filename``."""

    return TEMPLATES_DIR / filename.lstrip(".")
