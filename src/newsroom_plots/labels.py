"""Direct labeling helpers: per-group reductions and text justification.

Reducers are callables on a DataFrame, so they can stand in for a layer's
data. The label layer then sees only the reduced rows while the lines
underneath keep the full dataset:

    ggplot(df, aes("date", "revenue", color="series"))
        + geom_line()
        + geom_text(aes(label="series"), data=last_points("series", "date"), hjust=0)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pandas as pd

from .errors import MappingError


def _require(data: pd.DataFrame, *columns: str) -> None:
    missing = [c for c in columns if c not in data.columns]
    if missing:
        raise MappingError(f"columns {missing} not in data (have {list(data.columns)})")


def reduce_per_group(
    data: pd.DataFrame,
    group: str,
    by: str,
    how: str = "max",
) -> pd.DataFrame:
    """One row per ``group``: the row holding the group's max (or min) ``by`` value.

    Groups keep order of first appearance; ties go to the earliest row.
    Rows with a missing ``by`` value are ignored, so a group with none left
    gives no row. The input frame is left untouched.
    """
    if how not in ("max", "min"):
        raise ValueError(f"how must be 'max' or 'min', got {how!r}")
    _require(data, group, by)

    # positional index, so duplicate labels in the caller's index can't fan out
    frame = data.reset_index(drop=True)
    frame = frame[frame[by].notna()]
    if frame.empty:
        return frame.reset_index(drop=True)
    grouped = frame.groupby(group, sort=False, dropna=False, observed=True)[by]
    rows = grouped.idxmax() if how == "max" else grouped.idxmin()
    return frame.loc[rows.to_numpy()].reset_index(drop=True)


def filter_rows(data: pd.DataFrame, column: str, value: Any) -> pd.DataFrame:
    """Rows where ``column == value``; may be empty."""
    _require(data, column)
    return data[data[column] == value].reset_index(drop=True)


@dataclass(frozen=True)
class GroupReducer:
    group: str
    by: str
    how: str = "max"

    def __call__(self, data: pd.DataFrame) -> pd.DataFrame:
        return reduce_per_group(data, self.group, self.by, self.how)


@dataclass(frozen=True)
class RowFilter:
    column: str
    value: Any

    def __call__(self, data: pd.DataFrame) -> pd.DataFrame:
        return filter_rows(data, self.column, self.value)


def last_points(group: str, by: str) -> GroupReducer:
    """Reducer keeping the last row (max ``by``) of each group."""
    return GroupReducer(group, by, "max")


def first_points(group: str, by: str) -> GroupReducer:
    return GroupReducer(group, by, "min")


def at_value(column: str, value: Any) -> RowFilter:
    return RowFilter(column, value)


def justify_offset(
    width: float,
    height: float,
    hjust: float,
    vjust: float,
) -> tuple[float, float]:
    """Shift from a data point to the lower-left corner of its text box.

    0 puts the left/bottom edge on the point, 0.5 centres the box, 1 puts
    the right/top edge on the point. Values outside [0, 1] push the box
    further away by the same fraction of its size.
    """
    return -hjust * width, -vjust * height
