"""Tests for per-group label reductions and text justification."""

from __future__ import annotations

import pandas as pd
import pytest

from newsroom_plots import MappingError, at_value, first_points, justify_offset, last_points, reduce_per_group

pytestmark = pytest.mark.unit


def test_max_reduction_gives_one_row_per_group(groups: pd.DataFrame) -> None:
    """Groups {A, B} reduce to exactly two rows."""

    reduced = reduce_per_group(groups, "grp", "t", how="max")
    assert list(reduced["grp"]) == ["A", "B"]
    assert len(reduced) == 2


def test_max_reduction_keeps_the_row_with_the_group_maximum(groups: pd.DataFrame) -> None:
    """Each kept row holds its group's largest ordering value."""

    reduced = reduce_per_group(groups, "grp", "value", how="max")
    expected = groups.groupby("grp")["value"].max()
    for _, row in reduced.iterrows():
        assert row["value"] == expected[row["grp"]]
    assert list(reduced["t"]) == [2, 3]


def test_min_reduction(groups: pd.DataFrame) -> None:
    """how='min' keeps each group's first point."""

    reduced = reduce_per_group(groups, "grp", "t", how="min")
    assert list(reduced["value"]) == [10.0, 5.0]


def test_ties_go_to_the_earliest_row() -> None:
    """Equal maxima resolve to the first row in the frame."""

    frame = pd.DataFrame({"g": ["A", "A"], "v": [1, 1], "tag": ["first", "second"]})
    assert list(reduce_per_group(frame, "g", "v")["tag"]) == ["first"]


def test_reduction_does_not_modify_the_input(groups: pd.DataFrame) -> None:
    """The caller's frame is left untouched."""

    before = groups.copy()
    reduce_per_group(groups, "grp", "t")
    pd.testing.assert_frame_equal(groups, before)


def test_reduction_ignores_a_duplicated_index() -> None:
    """Duplicate index labels don't multiply the result."""

    frame = pd.DataFrame({"g": ["A", "B"], "v": [1, 2]}, index=[0, 0])
    assert len(reduce_per_group(frame, "g", "v")) == 2


def test_empty_input_gives_empty_output(groups: pd.DataFrame) -> None:
    """An empty reduction is not an error."""

    reduced = reduce_per_group(groups.iloc[0:0], "grp", "t")
    assert reduced.empty
    assert list(reduced.columns) == list(groups.columns)


def test_missing_ordering_values_are_ignored() -> None:
    """A group whose ordering values are all missing gives no row."""

    frame = pd.DataFrame({"g": ["A", "A", "B"], "t": [1, 2, float("nan")]})
    reduced = reduce_per_group(frame, "g", "t")
    assert list(reduced["g"]) == ["A"]
    assert list(reduced["t"]) == [2]


def test_last_points_skips_missing_ordering_values() -> None:
    """The reducer form skips NaN rows the same way."""

    frame = pd.DataFrame({"g": ["A", "B", "B"], "t": [1.0, float("nan"), 4.0], "v": [10, 20, 30]})
    assert list(last_points("g", "t")(frame)["v"]) == [10, 30]


def test_missing_column(groups: pd.DataFrame) -> None:
    """Reducing by a column the frame lacks is a mapping error."""

    with pytest.raises(MappingError, match="missing"):
        reduce_per_group(groups, "grp", "missing")


def test_unknown_reduction(groups: pd.DataFrame) -> None:
    """Only max and min are supported."""

    with pytest.raises(ValueError):
        reduce_per_group(groups, "grp", "t", how="median")


def test_reducers_are_callables_on_frames(revenue: pd.DataFrame) -> None:
    """last_points() and first_points() reduce the sample to one row per series."""

    last = last_points("series", "date")(revenue)
    first = first_points("series", "date")(revenue)
    assert len(last) == len(first) == 4
    assert (last["date"] == revenue["date"].max()).all()
    assert (first["date"] == revenue["date"].min()).all()


def test_categorical_groups_keep_appearance_order(revenue: pd.DataFrame) -> None:
    """Series come back in the order they appear."""

    last = last_points("series", "date")(revenue)
    assert list(last["series"]) == ["Subscriptions", "Advertising", "Events", "Grants"]


def test_at_value_filter(groups: pd.DataFrame) -> None:
    """at_value() keeps the rows equal to a value, possibly none."""

    assert list(at_value("t", 2)(groups)["grp"]) == ["A", "B"]
    assert at_value("t", 99)(groups).empty


@pytest.mark.parametrize(
    ("hjust", "vjust", "expected"),
    [
        (0.0, 0.0, (0.0, 0.0)),
        (0.5, 0.5, (-20.0, -5.0)),
        (1.0, 1.0, (-40.0, -10.0)),
        (-0.25, 1.5, (10.0, -15.0)),
    ],
)
def test_justify_offset(hjust: float, vjust: float, expected: tuple[float, float]) -> None:
    """The shift is minus the justification fraction of the text box size."""

    assert justify_offset(40.0, 10.0, hjust, vjust) == pytest.approx(expected)
