"""Bundled sample dataset for the workshop examples."""

from __future__ import annotations

import numpy as np
import pandas as pd

SERIES = ("Subscriptions", "Advertising", "Events", "Grants")

# Starting monthly revenue (dollars) and yearly drift per series
_START = {
    "Subscriptions": 120_000.0,
    "Advertising": 180_000.0,
    "Events": 40_000.0,
    "Grants": 60_000.0,
}
_DRIFT = {
    "Subscriptions": 0.18,
    "Advertising": -0.12,
    "Events": 0.05,
    "Grants": 0.02,
}


def load_sample(seed: int = 42) -> pd.DataFrame:
    """Monthly newsroom revenue by source, 2019-01 through 2023-12.

    Columns: date (datetime64), series (categorical, SERIES order),
    revenue (float, dollars), share (float, that month's fraction of
    total revenue). Long format, one row per (date, series), sorted by
    date then series order.
    """
    rng = np.random.default_rng(seed)
    dates = pd.date_range("2019-01-01", "2023-12-01", freq="MS")
    years = np.arange(len(dates)) / 12

    frames = []
    for name in SERIES:
        trend = _START[name] * (1 + _DRIFT[name]) ** years
        noise = rng.normal(0, 0.04, len(dates))
        frames.append(
            pd.DataFrame(
                {
                    "date": dates,
                    "series": name,
                    "revenue": np.round(trend * (1 + noise), 2),
                }
            )
        )

    df = pd.concat(frames, ignore_index=True)
    df["series"] = pd.Categorical(df["series"], categories=SERIES)
    df = df.sort_values(["date", "series"], ignore_index=True)
    df["share"] = df["revenue"] / df.groupby("date")["revenue"].transform("sum")
    return df
