"""Plots: aesthetics, layers, labels, and the build step.

A Plot is immutable. Adding a component returns a new Plot:

    p = (
        ggplot(df, aes("date", "revenue", color="series"))
        + geom_line()
        + scale_y_continuous(labels=currency(scale=0.001, suffix="K"))
        + theme_minimal()
    )

``build(p)`` resolves every layer's data and mapping, trains one scale per
mapped channel, and merges the theme over the default base theme.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from functools import reduce
from typing import Any, Callable, Mapping, Union

import pandas as pd

from .errors import MappingError, PlotSpecError, ScaleTypeError
from .scales import ResolvedScale, Scale, data_kind, default_scale, train
from .theming import DEFAULT_THEME, Theme, get_theme, resolve_theme

logger = logging.getLogger(__name__)

CHANNELS = ("x", "y", "color", "fill", "label", "group")
SCALED_CHANNELS = ("x", "y", "color", "fill")

_ALIASES = {"colour": "color"}


# --- Aesthetics ---

@dataclass(frozen=True)
class Aes:
    x: str | None = None
    y: str | None = None
    color: str | None = None
    fill: str | None = None
    label: str | None = None
    group: str | None = None

    def merged(self, other: "Aes | None") -> "Aes":
        """``other`` wins on every channel it sets."""
        if other is None:
            return self
        return replace(
            self,
            **{f.name: getattr(other, f.name) for f in fields(other) if getattr(other, f.name) is not None},
        )

    def items(self) -> list[tuple[str, str]]:
        return [(f.name, getattr(self, f.name)) for f in fields(self) if getattr(self, f.name) is not None]

    def get(self, channel: str) -> str | None:
        return getattr(self, channel)


def aes(x: str | None = None, y: str | None = None, **channels: str) -> Aes:
    """Bind channels to column names: ``aes("date", "revenue", color="series")``."""
    resolved = {}
    for name, column in channels.items():
        name = _ALIASES.get(name, name)
        if name not in CHANNELS:
            raise MappingError(f"unknown aesthetic {name!r}; choose from {CHANNELS}")
        resolved[name] = column
    return Aes(x=x, y=y, **resolved)


# --- Layers ---

LayerData = Union[pd.DataFrame, Callable[[pd.DataFrame], pd.DataFrame], None]

_TEXT_PARAMS = {"color", "size", "alpha", "hjust", "vjust", "nudge_x", "nudge_y", "fontweight", "format"}

GEOM_PARAMS: dict[str, set[str]] = {
    "line": {"color", "linewidth", "linetype", "alpha"},
    "point": {"color", "fill", "size", "alpha"},
    "col": {"color", "fill", "alpha", "width", "position"},
    "text": _TEXT_PARAMS,
    "label": _TEXT_PARAMS | {"fill"},
}

GEOM_REQUIRES: dict[str, tuple[str, ...]] = {
    "line": ("x", "y"),
    "point": ("x", "y"),
    "col": ("x", "y"),
    "text": ("x", "y", "label"),
    "label": ("x", "y", "label"),
}


@dataclass(frozen=True, eq=False)
class Layer:
    geom: str
    mapping: Aes | None = None
    data: LayerData = None
    params: Mapping[str, Any] = field(default_factory=dict)
    inherit_aes: bool = True

    def param(self, name: str, default: Any = None) -> Any:
        return self.params.get(name, default)


def _layer(geom: str, mapping: Aes | None, data: LayerData, inherit_aes: bool, params: dict) -> Layer:
    params = {_ALIASES.get(k, k): v for k, v in params.items()}
    unknown = set(params) - GEOM_PARAMS[geom]
    if unknown:
        raise PlotSpecError(f"geom_{geom} does not take {sorted(unknown)}")
    if geom == "col" and params.get("position", "dodge") not in ("dodge", "identity"):
        raise PlotSpecError(f"geom_col position must be 'dodge' or 'identity', got {params['position']!r}")
    return Layer(geom=geom, mapping=mapping, data=data, params=params, inherit_aes=inherit_aes)


def geom_line(mapping: Aes | None = None, data: LayerData = None, inherit_aes: bool = True, **params: Any) -> Layer:
    return _layer("line", mapping, data, inherit_aes, params)


def geom_point(mapping: Aes | None = None, data: LayerData = None, inherit_aes: bool = True, **params: Any) -> Layer:
    return _layer("point", mapping, data, inherit_aes, params)


def geom_col(mapping: Aes | None = None, data: LayerData = None, inherit_aes: bool = True, **params: Any) -> Layer:
    """Bars from zero to y. Several fill groups at one x are dodged side by side."""
    return _layer("col", mapping, data, inherit_aes, params)


def geom_text(mapping: Aes | None = None, data: LayerData = None, inherit_aes: bool = True, **params: Any) -> Layer:
    """Text at (x, y). ``format`` turns label values into text, e.g. currency()."""
    return _layer("text", mapping, data, inherit_aes, params)


def geom_label(mapping: Aes | None = None, data: LayerData = None, inherit_aes: bool = True, **params: Any) -> Layer:
    """geom_text() drawn on a filled box."""
    return _layer("label", mapping, data, inherit_aes, params)


# --- Labels ---

@dataclass(frozen=True)
class Labs:
    title: str | None = None
    subtitle: str | None = None
    caption: str | None = None
    x: str | None = None
    y: str | None = None
    color: str | None = None
    fill: str | None = None

    def __add__(self, other: "Labs") -> "Labs":
        return replace(
            self,
            **{f.name: getattr(other, f.name) for f in fields(other) if getattr(other, f.name) is not None},
        )


def labs(**kwargs: str) -> Labs:
    return Labs(**{_ALIASES.get(k, k): v for k, v in kwargs.items()})


# --- Plot ---

@dataclass(frozen=True, eq=False)
class Plot:
    data: pd.DataFrame | None = None
    mapping: Aes = field(default_factory=Aes)
    layers: tuple[Layer, ...] = ()
    scales: tuple[Scale, ...] = ()
    theme: Theme | None = None
    labels: Labs = field(default_factory=Labs)

    def __add__(self, other: Any) -> "Plot":
        if isinstance(other, (list, tuple)):
            return reduce(lambda acc, item: acc + item, other, self)
        if isinstance(other, Layer):
            return replace(self, layers=self.layers + (other,))
        if isinstance(other, Scale):
            kept = tuple(s for s in self.scales if s.channel != other.channel)
            if len(kept) != len(self.scales):
                logger.warning(
                    "Scale for %r is already present; replacing it with %s",
                    other.channel,
                    type(other).__name__,
                )
            return replace(self, scales=kept + (other,))
        if isinstance(other, Theme):
            return replace(self, theme=other if self.theme is None else self.theme + other)
        if isinstance(other, Labs):
            return replace(self, labels=self.labels + other)
        raise PlotSpecError(f"cannot add {type(other).__name__} to a plot")

    def scale(self, channel: str) -> Scale | None:
        for s in self.scales:
            if s.channel == channel:
                return s
        return None


def ggplot(data: pd.DataFrame | None = None, mapping: Aes | None = None) -> Plot:
    return Plot(data=data, mapping=mapping if mapping is not None else Aes())


# --- Build ---

@dataclass(frozen=True, eq=False)
class BuiltLayer:
    layer: Layer
    data: pd.DataFrame
    mapping: Aes
    texts: tuple[str, ...] | None = None

    @property
    def geom(self) -> str:
        return self.layer.geom

    @property
    def empty(self) -> bool:
        return self.data.empty

    def column(self, channel: str) -> pd.Series | None:
        name = self.mapping.get(channel)
        return None if name is None else self.data[name]


@dataclass(frozen=True, eq=False)
class BuiltPlot:
    layers: tuple[BuiltLayer, ...]
    scales: Mapping[str, ResolvedScale]
    theme: Theme
    labels: Labs

    def scale(self, channel: str) -> ResolvedScale | None:
        return self.scales.get(channel)


def _layer_data(plot: Plot, layer: Layer, index: int) -> pd.DataFrame:
    data = layer.data
    if data is None:
        data = plot.data
    elif not isinstance(data, pd.DataFrame):
        if plot.data is None:
            raise MappingError(f"layer {index} (geom_{layer.geom}) reduces plot data, but the plot has none")
        data = data(plot.data)
    if data is None:
        raise MappingError(f"layer {index} (geom_{layer.geom}) has no data")
    return data


def _layer_mapping(plot: Plot, layer: Layer) -> Aes:
    if layer.inherit_aes:
        return plot.mapping.merged(layer.mapping)
    return layer.mapping if layer.mapping is not None else Aes()


def _check_columns(layer: Layer, mapping: Aes, data: pd.DataFrame, index: int) -> None:
    missing_channels = [c for c in GEOM_REQUIRES[layer.geom] if mapping.get(c) is None]
    if missing_channels:
        raise MappingError(f"layer {index} (geom_{layer.geom}) needs aesthetics {missing_channels}")
    missing = [column for _, column in mapping.items() if column not in data.columns]
    if missing:
        raise MappingError(
            f"layer {index} (geom_{layer.geom}) maps columns {missing} not in its data "
            f"(have {list(data.columns)})"
        )


def _label_texts(layer: Layer, mapping: Aes, data: pd.DataFrame) -> tuple[str, ...] | None:
    if layer.geom not in ("text", "label"):
        return None
    if data.empty:
        return ()
    values = data[mapping.label]
    fmt = layer.param("format")
    if fmt is None:
        return tuple(str(v) for v in values)
    return tuple(fmt(values.to_numpy()))


def _train_scales(plot: Plot, layers: list[BuiltLayer]) -> dict[str, ResolvedScale]:
    resolved: dict[str, ResolvedScale] = {}
    for channel in SCALED_CHANNELS:
        mapped = [bl for bl in layers if bl.mapping.get(channel) is not None]
        if not mapped:
            continue
        # empty layers only decide the kind when nothing else maps the channel
        trained = [bl for bl in mapped if not bl.empty] or mapped
        kinds = {data_kind(bl.column(channel)) for bl in trained}
        if len(kinds) > 1:
            raise ScaleTypeError(f"layers map {sorted(kinds)} data onto {channel!r}")
        kind = kinds.pop()

        scale = plot.scale(channel) or default_scale(channel, kind)
        scale.check(kind)

        domain = train([bl.column(channel) for bl in trained if not bl.empty], kind)
        if channel == "y" and kind == "continuous" and any(bl.geom == "col" for bl in mapped):
            # bars grow from zero
            lo, hi = domain if domain else (0.0, 0.0)
            domain = (min(lo, 0.0), max(hi, 0.0))
        resolved[channel] = scale.resolve(domain)
    return resolved


def build(plot: Plot) -> BuiltPlot:
    """Resolve layers, scales and theme. Configuration errors surface here."""
    layers = []
    for index, layer in enumerate(plot.layers):
        data = _layer_data(plot, layer, index)
        mapping = _layer_mapping(plot, layer)
        _check_columns(layer, mapping, data, index)
        if data.empty:
            logger.debug("layer %d (geom_%s) has no rows; nothing to draw", index, layer.geom)
        layers.append(
            BuiltLayer(
                layer=layer,
                data=data,
                mapping=mapping,
                texts=_label_texts(layer, mapping, data),
            )
        )

    scales = _train_scales(plot, layers)
    base = get_theme(DEFAULT_THEME)
    resolved_theme = base if plot.theme is None else resolve_theme(base, plot.theme)

    logger.debug(
        "built plot: %d layers, scales %s, theme %s",
        len(layers),
        sorted(scales),
        resolved_theme.name,
    )
    return BuiltPlot(
        layers=tuple(layers),
        scales=scales,
        theme=resolved_theme,
        labels=plot.labels,
    )
