"""Pytest fixtures shared across the newsroom_plots tests."""

from __future__ import annotations

from collections.abc import Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402
import pytest  # noqa: E402

from newsroom_plots import load_sample  # noqa: E402


@pytest.fixture
def revenue() -> pd.DataFrame:
    """Return the bundled monthly revenue sample."""

    return load_sample()


@pytest.fixture
def groups() -> pd.DataFrame:
    """Return a small long-format frame with two groups, A and B."""

    return pd.DataFrame(
        {
            "t": [1, 2, 3, 1, 2, 3],
            "value": [10.0, 30.0, 20.0, 5.0, 7.0, 9.0],
            "grp": ["A", "A", "A", "B", "B", "B"],
        }
    )


@pytest.fixture
def categories() -> pd.DataFrame:
    """Return one numeric value per category."""

    return pd.DataFrame({"desk": ["Metro", "Politics", "Sports"], "stories": [12, 30, 18]})


@pytest.fixture(autouse=True)
def close_figures():
    """Close every figure a test leaves open."""

    yield
    plt.close("all")


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no figures or files.
    - `integration`: tests that render with matplotlib or touch the filesystem.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            invalid.append(item.nodeid)

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
