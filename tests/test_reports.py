from __future__ import annotations

import math
from pathlib import Path

import pytest

pd = pytest.importorskip("pandas")

from fx_ledger.db.database import CurrencyDatabase  # noqa: E402
from fx_ledger.registry import initialize_all_currencies  # noqa: E402
from fx_ledger.reports import rate_table  # noqa: E402


def test_rate_table_is_square_in_load_order(tmp_path: Path) -> None:
    db = CurrencyDatabase.at(tmp_path)
    db.currencies.write_lines(["USD:usf", "INR:isf", "EUR:usf"])
    db.rates.write_lines(["USD:INR:83.2", "INR:USD:0.012", "USD:JPY:150.0"])

    frame = rate_table(initialize_all_currencies(db))

    assert list(frame.index) == ["USD", "INR", "EUR"]
    assert list(frame.columns) == ["USD", "INR", "EUR"]
    assert frame.loc["USD", "INR"] == pytest.approx(83.2)
    assert frame.loc["INR", "USD"] == pytest.approx(0.012)
    assert frame.loc["EUR", "EUR"] == 1.0
    assert math.isnan(frame.loc["EUR", "USD"])
    assert "JPY" not in frame.columns


def test_rate_table_for_no_currencies() -> None:
    frame = rate_table({})

    assert isinstance(frame, pd.DataFrame)
    assert frame.empty
