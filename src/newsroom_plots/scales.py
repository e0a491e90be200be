"""Scales: map a trained data domain to limits, breaks, label text, and output values.

One scale per channel (x, y, color, fill). Position scales come in three
kinds: continuous, date and discrete. Color scales are discrete (palette or
manual values) or continuous (two-color gradient). ``Scale.resolve(domain)``
returns a ``ResolvedScale`` holding everything the renderer needs.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Mapping, Sequence

import matplotlib.dates as mdates
import matplotlib.ticker as mticker
import numpy as np
import pandas as pd
from matplotlib.colors import LinearSegmentedColormap, to_hex

from .errors import ScaleError, ScaleTypeError
from .formatters import DateFormat, apply_labels, number
from .constants import GRADIENT, PALETTES

POSITION_CHANNELS = ("x", "y")
COLOR_CHANNELS = ("color", "fill")

# Tolerance when keeping breaks that sit exactly on an expanded limit
_EDGE = 1e-10


# --- Expansion ---

@dataclass(frozen=True)
class Expansion:
    """Padding beyond the data range: ``mult`` * span + ``add`` per side."""

    mult: tuple[float, float] = (0.0, 0.0)
    add: tuple[float, float] = (0.0, 0.0)

    def expand(self, lo: float, hi: float) -> tuple[float, float]:
        span = hi - lo
        pad_lo = self.mult[0] * span + self.add[0]
        pad_hi = self.mult[1] * span + self.add[1]
        if span == 0:
            # a single value still gets a visible range
            pad_lo = pad_lo or 0.5
            pad_hi = pad_hi or 0.5
        return lo - pad_lo, hi + pad_hi


def _pair(value: float | Sequence[float]) -> tuple[float, float]:
    if isinstance(value, (int, float)):
        return float(value), float(value)
    lo, hi = value
    return float(lo), float(hi)


def expansion(
    mult: float | Sequence[float] = 0.0,
    add: float | Sequence[float] = 0.0,
) -> Expansion:
    """Scalars pad both sides; (lower, upper) pairs pad each side independently."""
    return Expansion(mult=_pair(mult), add=_pair(add))


DEFAULT_CONTINUOUS_EXPANSION = expansion(mult=0.05)
DEFAULT_DISCRETE_EXPANSION = expansion(add=0.6)


# --- Training ---

def data_kind(series: pd.Series) -> str:
    """'date', 'continuous' or 'discrete', from the column dtype."""
    if pd.api.types.is_datetime64_any_dtype(series):
        return "date"
    if pd.api.types.is_bool_dtype(series):
        return "discrete"
    if pd.api.types.is_numeric_dtype(series):
        return "continuous"
    return "discrete"


def to_numeric(series: pd.Series, kind: str) -> np.ndarray:
    """Position values in axis units; dates become matplotlib date numbers."""
    if kind == "date":
        return np.asarray(mdates.date2num(pd.to_datetime(series).to_numpy()), dtype=float)
    return series.to_numpy(dtype=float)


def train(columns: Sequence[pd.Series], kind: str) -> tuple:
    """Domain over every column mapped to one channel.

    Continuous and date domains are ``(min, max)``; discrete domains are the
    ordered categories.
    """
    if kind == "discrete":
        categories: list[Any] = []
        for col in columns:
            if isinstance(col.dtype, pd.CategoricalDtype):
                values = list(col.cat.categories)
            else:
                values = list(pd.unique(col.dropna()))
            for v in values:
                if v not in categories:
                    categories.append(v)
        return tuple(categories)

    lo, hi = math.inf, -math.inf
    for col in columns:
        values = to_numeric(col, kind)
        values = values[np.isfinite(values)]
        if values.size:
            lo = min(lo, float(values.min()))
            hi = max(hi, float(values.max()))
    if lo > hi:
        return ()
    return lo, hi


# --- Resolved form ---

@dataclass(frozen=True)
class ResolvedScale:
    channel: str
    kind: str
    domain: tuple
    limits: tuple[float, float] | None
    breaks: tuple
    labels: tuple[str, ...]
    name: str | None = None
    mapper: Callable[[Any], Any] = field(default=lambda v: v, repr=False, compare=False)

    def map(self, values: Any) -> Any:
        return self.mapper(values)


# --- Scale types ---

@dataclass(frozen=True)
class Scale:
    channel: str
    name: str | None = None
    labels: Any = None
    breaks: Sequence[Any] | None = None
    limits: Sequence[Any] | None = None

    kind = "continuous"
    accepts = ()

    def check(self, data_kind: str) -> None:
        if data_kind not in self.accepts:
            raise ScaleTypeError(
                f"{type(self).__name__} on {self.channel!r} cannot show {data_kind} data"
            )

    def resolve(self, domain: tuple) -> ResolvedScale:
        raise NotImplementedError


def _numeric_limits(limits: Sequence[Any] | None, domain: tuple) -> tuple[float, float]:
    lo, hi = domain if domain else (0.0, 1.0)
    if limits is not None:
        lim_lo, lim_hi = limits
        lo = lo if lim_lo is None else _as_axis_number(lim_lo)
        hi = hi if lim_hi is None else _as_axis_number(lim_hi)
    return float(lo), float(hi)


def _as_axis_number(value: Any) -> float:
    if isinstance(value, (datetime, date, np.datetime64, pd.Timestamp)):
        return float(mdates.date2num(pd.Timestamp(value).to_pydatetime()))
    return float(value)


def _within(values: Sequence[float], limits: tuple[float, float]) -> np.ndarray:
    arr = np.asarray(values, dtype=float)
    lo, hi = limits
    tol = _EDGE * max(1.0, abs(hi - lo))
    return arr[(arr >= lo - tol) & (arr <= hi + tol)]


def _rescaler(limits: tuple[float, float]) -> Callable[[Any], np.ndarray]:
    lo, hi = limits

    def rescale(values: Any) -> np.ndarray:
        return (np.asarray(values, dtype=float) - lo) / (hi - lo)

    return rescale


@dataclass(frozen=True)
class ContinuousScale(Scale):
    expand: Expansion | None = None

    kind = "continuous"
    accepts = ("continuous",)

    def _breaks(self, lo: float, hi: float, limits: tuple[float, float]) -> np.ndarray:
        if self.breaks is not None:
            return _within([_as_axis_number(b) for b in self.breaks], limits)
        if lo == hi:
            return np.asarray([lo])
        locator = mticker.MaxNLocator(nbins=5, steps=[1, 2, 2.5, 5, 10])
        return _within(locator.tick_values(lo, hi), limits)

    def _labels(self, breaks: np.ndarray) -> list[str]:
        return apply_labels(self.labels if self.labels is not None else number(), breaks)

    def resolve(self, domain: tuple) -> ResolvedScale:
        lo, hi = _numeric_limits(self.limits, domain)
        limits = (self.expand or DEFAULT_CONTINUOUS_EXPANSION).expand(lo, hi)
        breaks = self._breaks(lo, hi, limits)
        return ResolvedScale(
            channel=self.channel,
            kind=self.kind,
            domain=(lo, hi),
            limits=limits,
            breaks=tuple(float(b) for b in breaks),
            labels=tuple(self._labels(breaks)),
            name=self.name,
            mapper=_rescaler(limits),
        )


_INTERVAL = re.compile(r"^\s*(\d+)?\s*(year|month|week|day)s?\s*$")


def date_locator(interval: str) -> mdates.DateLocator:
    """Locator for intervals like '1 year', '6 months', '2 weeks', 'day'."""
    m = _INTERVAL.match(interval)
    if not m:
        raise ScaleError(f"cannot parse date_breaks {interval!r}")
    n = int(m.group(1) or 1)
    unit = m.group(2)
    if unit == "year":
        return mdates.YearLocator(base=n)
    if unit == "month":
        return mdates.MonthLocator(interval=n)
    if unit == "week":
        return mdates.DayLocator(interval=7 * n)
    return mdates.DayLocator(interval=n)


def _auto_date_format(breaks: np.ndarray) -> str:
    stamps = [mdates.num2date(b) for b in breaks]
    if stamps and all(s.month == 1 and s.day == 1 for s in stamps):
        return "%Y"
    if stamps and all(s.day == 1 for s in stamps):
        return "%b %Y"
    return "%Y-%m-%d"


@dataclass(frozen=True)
class DateScale(ContinuousScale):
    date_labels: str | None = None
    date_breaks: str | None = None

    kind = "date"
    accepts = ("date",)

    def _breaks(self, lo: float, hi: float, limits: tuple[float, float]) -> np.ndarray:
        if self.breaks is not None or lo == hi:
            return super()._breaks(lo, hi, limits)
        if self.date_breaks is not None:
            locator = date_locator(self.date_breaks)
        else:
            locator = mdates.AutoDateLocator(minticks=3, maxticks=7)
        return _within(locator.tick_values(mdates.num2date(lo), mdates.num2date(hi)), limits)

    def _labels(self, breaks: np.ndarray) -> list[str]:
        if self.labels is not None:
            return apply_labels(self.labels, breaks)
        fmt = self.date_labels or _auto_date_format(breaks)
        return apply_labels(DateFormat(fmt), breaks)


def _category_labels(labels: Any, categories: Sequence[Any]) -> list[str]:
    if isinstance(labels, Mapping):
        return [str(labels.get(c, c)) for c in categories]
    if labels is None:
        return [str(c) for c in categories]
    return apply_labels(labels, list(categories))


def _categories(limits: Sequence[Any] | None, domain: tuple) -> tuple:
    return tuple(limits) if limits is not None else tuple(domain)


@dataclass(frozen=True)
class DiscreteScale(Scale):
    """Categories at positions 1..n, in domain order."""

    expand: Expansion | None = None

    kind = "discrete"
    accepts = ("discrete",)

    def resolve(self, domain: tuple) -> ResolvedScale:
        categories = _categories(self.limits, domain)
        n = max(len(categories), 1)
        limits = (self.expand or DEFAULT_DISCRETE_EXPANSION).expand(1.0, float(n))
        shown = categories if self.breaks is None else tuple(c for c in categories if c in self.breaks)
        index = {c: i + 1 for i, c in enumerate(categories)}

        def position(values: Any) -> np.ndarray:
            return np.asarray([index.get(v, np.nan) for v in values], dtype=float)

        return ResolvedScale(
            channel=self.channel,
            kind=self.kind,
            domain=categories,
            limits=limits,
            breaks=tuple(float(index[c]) for c in shown),
            labels=tuple(_category_labels(self.labels, shown)),
            name=self.name,
            mapper=position,
        )


@dataclass(frozen=True)
class DiscreteColorScale(Scale):
    """Palette list (assigned in category order) or explicit {category: color}."""

    values: Sequence[str] | Mapping[Any, str] = field(default_factory=lambda: tuple(PALETTES["house"]))
    na_value: str = "#7F7F7F"

    kind = "discrete"
    accepts = ("discrete",)

    def resolve(self, domain: tuple) -> ResolvedScale:
        categories = _categories(self.limits, domain)
        if isinstance(self.values, Mapping):
            missing = [c for c in categories if c not in self.values]
            if missing:
                raise ScaleError(f"no color given for {missing} on {self.channel!r}")
            colors = {c: self.values[c] for c in categories}
        else:
            if len(categories) > len(self.values):
                raise ScaleError(
                    f"{len(categories)} categories on {self.channel!r} but only "
                    f"{len(self.values)} colors in the palette"
                )
            colors = dict(zip(categories, self.values))
        na_value = self.na_value

        def lookup(values: Any) -> list[str]:
            return [colors.get(v, na_value) for v in values]

        shown = categories if self.breaks is None else tuple(c for c in categories if c in self.breaks)
        return ResolvedScale(
            channel=self.channel,
            kind=self.kind,
            domain=categories,
            limits=None,
            breaks=shown,
            labels=tuple(_category_labels(self.labels, shown)),
            name=self.name,
            mapper=lookup,
        )


@dataclass(frozen=True)
class GradientColorScale(Scale):
    low: str = GRADIENT["low"]
    high: str = GRADIENT["high"]

    kind = "continuous"
    accepts = ("continuous",)

    def resolve(self, domain: tuple) -> ResolvedScale:
        lo, hi = _numeric_limits(self.limits, domain)
        cmap = LinearSegmentedColormap.from_list(f"{self.channel}_gradient", [self.low, self.high])

        def gradient(values: Any) -> list[str]:
            arr = np.asarray(values, dtype=float)
            scaled = np.full(arr.shape, 0.5) if hi == lo else (arr - lo) / (hi - lo)
            return [to_hex(cmap(float(np.clip(v, 0.0, 1.0)))) for v in scaled]

        breaks = (
            np.asarray([lo]) if lo == hi
            else _within(mticker.MaxNLocator(nbins=5).tick_values(lo, hi), (lo, hi))
        )
        if self.breaks is not None:
            breaks = _within(self.breaks, (lo, hi))
        return ResolvedScale(
            channel=self.channel,
            kind=self.kind,
            domain=(lo, hi),
            limits=(lo, hi),
            breaks=tuple(float(b) for b in breaks),
            labels=tuple(apply_labels(self.labels if self.labels is not None else number(), breaks)),
            name=self.name,
            mapper=gradient,
        )


# --- Factories ---

def scale_x_continuous(
    name: str | None = None,
    labels: Any = None,
    breaks: Sequence[float] | None = None,
    limits: Sequence[float | None] | None = None,
    expand: Expansion | None = None,
) -> ContinuousScale:
    return ContinuousScale("x", name=name, labels=labels, breaks=breaks, limits=limits, expand=expand)


def scale_y_continuous(
    name: str | None = None,
    labels: Any = None,
    breaks: Sequence[float] | None = None,
    limits: Sequence[float | None] | None = None,
    expand: Expansion | None = None,
) -> ContinuousScale:
    return ContinuousScale("y", name=name, labels=labels, breaks=breaks, limits=limits, expand=expand)


def scale_x_date(
    name: str | None = None,
    labels: Any = None,
    breaks: Sequence[Any] | None = None,
    limits: Sequence[Any] | None = None,
    expand: Expansion | None = None,
    date_labels: str | None = None,
    date_breaks: str | None = None,
) -> DateScale:
    """Date axis; ``date_labels`` is a strftime pattern, ``date_breaks`` reads like "1 year"."""
    return DateScale("x", name=name, labels=labels, breaks=breaks, limits=limits, expand=expand,
                     date_labels=date_labels, date_breaks=date_breaks)


def scale_y_date(
    name: str | None = None,
    labels: Any = None,
    breaks: Sequence[Any] | None = None,
    limits: Sequence[Any] | None = None,
    expand: Expansion | None = None,
    date_labels: str | None = None,
    date_breaks: str | None = None,
) -> DateScale:
    return DateScale("y", name=name, labels=labels, breaks=breaks, limits=limits, expand=expand,
                     date_labels=date_labels, date_breaks=date_breaks)


def scale_x_discrete(
    name: str | None = None,
    labels: Any = None,
    breaks: Sequence[Any] | None = None,
    limits: Sequence[Any] | None = None,
    expand: Expansion | None = None,
) -> DiscreteScale:
    return DiscreteScale("x", name=name, labels=labels, breaks=breaks, limits=limits, expand=expand)


def scale_y_discrete(
    name: str | None = None,
    labels: Any = None,
    breaks: Sequence[Any] | None = None,
    limits: Sequence[Any] | None = None,
    expand: Expansion | None = None,
) -> DiscreteScale:
    return DiscreteScale("y", name=name, labels=labels, breaks=breaks, limits=limits, expand=expand)


def _palette(name: str) -> tuple[str, ...]:
    try:
        return tuple(PALETTES[name])
    except KeyError:
        raise ScaleError(f"unknown palette {name!r}; choose from {sorted(PALETTES)}") from None


def _manual_values(values: Sequence[str] | Mapping[Any, str]) -> tuple[str, ...] | dict[Any, str]:
    return dict(values) if isinstance(values, Mapping) else tuple(values)


def scale_color_manual(
    values: Sequence[str] | Mapping[Any, str],
    name: str | None = None,
    labels: Any = None,
    breaks: Sequence[Any] | None = None,
    limits: Sequence[Any] | None = None,
) -> DiscreteColorScale:
    """Colors in order, or keyed by category: ``{"Advertising": "#d1495b"}``."""
    return DiscreteColorScale("color", name=name, labels=labels, breaks=breaks, limits=limits,
                              values=_manual_values(values))


def scale_fill_manual(
    values: Sequence[str] | Mapping[Any, str],
    name: str | None = None,
    labels: Any = None,
    breaks: Sequence[Any] | None = None,
    limits: Sequence[Any] | None = None,
) -> DiscreteColorScale:
    return DiscreteColorScale("fill", name=name, labels=labels, breaks=breaks, limits=limits,
                              values=_manual_values(values))


def scale_color_palette(
    palette: str = "house",
    name: str | None = None,
    labels: Any = None,
    breaks: Sequence[Any] | None = None,
    limits: Sequence[Any] | None = None,
) -> DiscreteColorScale:
    return DiscreteColorScale("color", name=name, labels=labels, breaks=breaks, limits=limits,
                              values=_palette(palette))


def scale_fill_palette(
    palette: str = "house",
    name: str | None = None,
    labels: Any = None,
    breaks: Sequence[Any] | None = None,
    limits: Sequence[Any] | None = None,
) -> DiscreteColorScale:
    return DiscreteColorScale("fill", name=name, labels=labels, breaks=breaks, limits=limits,
                              values=_palette(palette))


def scale_color_gradient(
    low: str = GRADIENT["low"],
    high: str = GRADIENT["high"],
    name: str | None = None,
    labels: Any = None,
    breaks: Sequence[float] | None = None,
    limits: Sequence[float | None] | None = None,
) -> GradientColorScale:
    return GradientColorScale("color", name=name, labels=labels, breaks=breaks, limits=limits,
                              low=low, high=high)


def scale_fill_gradient(
    low: str = GRADIENT["low"],
    high: str = GRADIENT["high"],
    name: str | None = None,
    labels: Any = None,
    breaks: Sequence[float] | None = None,
    limits: Sequence[float | None] | None = None,
) -> GradientColorScale:
    return GradientColorScale("fill", name=name, labels=labels, breaks=breaks, limits=limits,
                              low=low, high=high)


def default_scale(channel: str, kind: str) -> Scale:
    """Scale used when a plot maps ``channel`` without declaring one."""
    if channel in POSITION_CHANNELS:
        if kind == "date":
            return DateScale(channel)
        if kind == "discrete":
            return DiscreteScale(channel)
        return ContinuousScale(channel)
    if kind == "discrete":
        return DiscreteColorScale(channel)
    if kind == "continuous":
        return GradientColorScale(channel)
    raise ScaleTypeError(f"no default scale for {kind} data on {channel!r}")
