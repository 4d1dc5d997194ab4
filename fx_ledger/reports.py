"""Tabular views over loaded currencies."""

from __future__ import annotations

from typing import Mapping

import pandas as pd

from fx_ledger.registry import Currency


def rate_table(currencies: Mapping[str, Currency]) -> pd.DataFrame:
    """Return a square frame of rates: row = source currency, column = target.

    Pairs without a stored rate are ``NaN`` and the diagonal is ``1.0``.
    Rates towards currencies that are not part of ``currencies`` are dropped.
    """

    names = list(currencies)
    frame = pd.DataFrame(index=names, columns=names, dtype="float64")
    for name, currency in currencies.items():
        frame.loc[name, name] = 1.0
        for target, rate in currency.rates.items():
            if target in frame.columns:
                frame.loc[name, target] = rate
    frame.index.name = "from"
    frame.columns.name = "to"
    return frame


__all__ = ["rate_table"]
