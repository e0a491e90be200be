"""Label formatters: number(), comma(), currency(), percent(), date_format().

A formatter is a frozen, callable object. Called on a single value it
returns one string; called on a sequence it returns a list of strings.
Numbers are rescaled, rounded to ``accuracy``, digit-grouped and wrapped
in a prefix and suffix:

    >>> currency(scale=0.001, suffix="K", accuracy=0)(123456)
    '123K'
    >>> percent(accuracy=0.1)(0.5134)
    '51.3%'
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Sequence

import matplotlib.dates as mdates
import matplotlib.ticker as mticker
import numpy as np
import pandas as pd
from numpy.typing import ArrayLike

from .errors import FormatterTypeError, ScaleError

# Tolerance for log10 of float accuracies like 0.1 or 0.01
_EPS = 1e-9


def _as_numeric(values: ArrayLike) -> np.ndarray:
    arr = np.asarray(values)
    if arr.dtype.kind not in "iuf":
        raise FormatterTypeError(
            f"numeric formatter needs numbers, got values of dtype {arr.dtype}"
        )
    return np.atleast_1d(arr).astype(float)


def _all_multiples(values: np.ndarray, accuracy: float) -> bool:
    ratio = values / accuracy
    return bool(np.allclose(ratio, np.round(ratio), rtol=0.0, atol=1e-6))


def auto_accuracy(values: np.ndarray) -> float:
    """Pick the coarsest power of ten that keeps distinct values distinct.

    Capped at 1, so whole numbers never gain decimals. Steps like 2.5 get
    one more decimal when that makes every value exact.
    """
    finite = np.unique(values[np.isfinite(values)])
    if finite.size == 0:
        return 1.0
    if finite.size == 1:
        return 1.0 if float(finite[0]).is_integer() else 0.01
    gap = float(np.min(np.diff(finite)))
    exponent = min(math.floor(math.log10(gap) + _EPS), 0)
    if not _all_multiples(finite, 10.0 ** exponent) and _all_multiples(finite, 10.0 ** (exponent - 1)):
        exponent -= 1
    return 10.0 ** exponent


def decimal_digits(accuracy: float) -> int:
    """Number of decimals implied by a rounding accuracy."""
    if accuracy <= 0:
        return 0
    return max(0, math.ceil(-math.log10(accuracy) - _EPS))


@dataclass(frozen=True)
class NumberFormat:
    """Rescale, round, group digits, and wrap in prefix/suffix."""

    accuracy: float | None = None
    scale: float = 1.0
    prefix: str = ""
    suffix: str = ""
    big_mark: str = ""
    decimal_mark: str = "."
    na_text: str = "NA"

    def __call__(self, values: ArrayLike) -> str | list[str]:
        scalar = np.ndim(values) == 0
        labels = self.format_many(_as_numeric(values))
        return labels[0] if scalar else labels

    def format_many(self, values: np.ndarray) -> list[str]:
        scaled = values * self.scale
        accuracy = self.accuracy
        if accuracy is None:
            accuracy = auto_accuracy(scaled)
        elif accuracy <= 0:
            # accuracy=0 rounds to whole units
            accuracy = 1.0
        digits = decimal_digits(accuracy)
        return [self._format_one(v, accuracy, digits) for v in scaled]

    def _format_one(self, value: float, accuracy: float, digits: int) -> str:
        if not math.isfinite(value):
            return self.na_text
        rounded = round(value / accuracy) * accuracy
        body = f"{abs(rounded):,.{digits}f}"
        body = (
            body.replace(",", "\0")
            .replace(".", self.decimal_mark)
            .replace("\0", self.big_mark)
        )
        sign = "-" if rounded < 0 and float(f"{abs(rounded):.{digits}f}") != 0 else ""
        return f"{sign}{self.prefix}{body}{self.suffix}"

    def ticker(self) -> mticker.FuncFormatter:
        """matplotlib tick formatter that renders through this formatter."""
        return mticker.FuncFormatter(lambda x, pos: self(x))


@dataclass(frozen=True)
class DateFormat:
    """strftime() labels for datetimes or matplotlib date numbers."""

    fmt: str = "%Y-%m-%d"
    na_text: str = "NA"

    def __call__(self, values: Any) -> str | list[str]:
        scalar = np.ndim(values) == 0
        items = [values] if scalar else list(values)
        labels = [self._format_one(v) for v in items]
        return labels[0] if scalar else labels

    def _format_one(self, value: Any) -> str:
        if isinstance(value, (bool, np.bool_)):
            raise FormatterTypeError(f"date formatter needs dates, got {value!r}")
        if isinstance(value, (int, float, np.integer, np.floating)):
            if not math.isfinite(value):
                return self.na_text
            return mdates.num2date(float(value)).strftime(self.fmt)
        if isinstance(value, (datetime, date, np.datetime64, pd.Timestamp)):
            stamp = pd.Timestamp(value)
            if pd.isna(stamp):
                return self.na_text
            return stamp.strftime(self.fmt)
        raise FormatterTypeError(f"date formatter needs dates, got {value!r}")

    def ticker(self) -> mticker.FuncFormatter:
        return mticker.FuncFormatter(lambda x, pos: self(x))


def number(
    accuracy: float | None = None,
    scale: float = 1.0,
    prefix: str = "",
    suffix: str = "",
    big_mark: str = "",
    decimal_mark: str = ".",
) -> NumberFormat:
    return NumberFormat(
        accuracy=accuracy,
        scale=scale,
        prefix=prefix,
        suffix=suffix,
        big_mark=big_mark,
        decimal_mark=decimal_mark,
    )


def comma(
    accuracy: float | None = None,
    scale: float = 1.0,
    prefix: str = "",
    suffix: str = "",
) -> NumberFormat:
    """Digit grouping only: 1234567 -> '1,234,567'."""
    return number(accuracy=accuracy, scale=scale, prefix=prefix, suffix=suffix, big_mark=",")


def currency(
    prefix: str = "",
    suffix: str = "",
    accuracy: float | None = None,
    scale: float = 1.0,
    big_mark: str = ",",
) -> NumberFormat:
    """Money with digit grouping. Pass prefix="$" for '-$1,234.50'; scale/suffix for '12K'."""
    return number(accuracy=accuracy, scale=scale, prefix=prefix, suffix=suffix, big_mark=big_mark)


def percent(
    accuracy: float | None = None,
    scale: float = 100.0,
    suffix: str = "%",
) -> NumberFormat:
    """Proportions as percentages: 0.5134 -> '51.3%' with accuracy=0.1."""
    return number(accuracy=accuracy, scale=scale, suffix=suffix)


def date_format(fmt: str = "%Y-%m-%d") -> DateFormat:
    return DateFormat(fmt=fmt)


def apply_labels(labels: Any, breaks: Sequence[Any]) -> list[str]:
    """Produce label text for ``breaks`` from a formatter, callable, or list."""
    if labels is None:
        return [str(b) for b in breaks]
    if callable(labels):
        out = labels(breaks)
        if isinstance(out, str):
            out = [out]
        return [str(s) for s in out]
    out = [str(s) for s in labels]
    if len(out) != len(breaks):
        raise ScaleError(
            f"got {len(out)} labels for {len(breaks)} breaks"
        )
    return out
