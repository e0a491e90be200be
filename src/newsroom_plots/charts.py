"""Rendering: draw(), save(), figure(), and the line()/bar()/scatter() shortcuts."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import matplotlib as mpl
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.collections import LineCollection
from matplotlib.lines import Line2D
from matplotlib.transforms import offset_copy

from .elements import ElementText, is_blank
from .labels import justify_offset
from .plot import BuiltLayer, BuiltPlot, Plot, aes, build, geom_col, geom_line, geom_point, ggplot, labs
from .scales import to_numeric
from .style import apply, halign, key_handler_map, legend_patch, rc_params, style_axes, style_legend
from .constants import COLOR_CYCLE, COLORS, LAYOUT
from .theming import Theme

logger = logging.getLogger(__name__)

OUTPUT_DIR_ENV = "NEWSROOM_PLOTS_OUTPUT_DIR"


def default_output_dir() -> Path:
    """$NEWSROOM_PLOTS_OUTPUT_DIR, else ./charts."""
    env = os.environ.get(OUTPUT_DIR_ENV)
    return Path(env) if env else Path.cwd() / "charts"


def _ensure_style() -> None:
    """Apply the house style if not already applied."""
    apply()


def figure(
    figsize: tuple[float, float] | None = None,
) -> tuple[plt.Figure, plt.Axes]:
    """Create a styled (fig, ax) pair. Escape hatch for custom charts."""
    _ensure_style()
    fig, ax = plt.subplots(figsize=figsize)
    return fig, ax


def save(
    fig: plt.Figure | Plot,
    filename: str,
    output_dir: str | Path | None = None,
) -> Path:
    """Save a figure (or draw and save a Plot) and close it.

    The format follows the file extension. Returns the path to the saved file.
    """
    if isinstance(fig, Plot):
        fig, _ = draw(fig)
    dest = Path(output_dir) if output_dir else default_output_dir()
    dest.mkdir(parents=True, exist_ok=True)
    path = dest / filename
    fig.savefig(path, bbox_inches="tight", pad_inches=0.3)
    plt.close(fig)
    logger.info("saved chart to %s", path)
    return path


# --- Layer drawing ---

def _positions(built: BuiltPlot, layer: BuiltLayer, channel: str) -> np.ndarray:
    series = layer.column(channel)
    scale = built.scale(channel)
    if scale.kind == "discrete":
        return np.asarray(scale.map(series), dtype=float)
    return to_numeric(series, scale.kind)


def _colors(built: BuiltPlot, layer: BuiltLayer, channel: str, default: str) -> list[str]:
    series = layer.column(channel)
    if series is None:
        return [layer.layer.param(channel, default)] * len(layer.data)
    return list(built.scale(channel).map(series))


def _group_keys(built: BuiltPlot, layer: BuiltLayer) -> list[str]:
    keys = []
    for channel in ("color", "fill", "group"):
        column = layer.mapping.get(channel)
        if column is None or column in keys:
            continue
        scale = built.scale(channel)
        if channel == "group" or scale.kind == "discrete":
            keys.append(column)
    return keys


def _groups(built: BuiltPlot, layer: BuiltLayer) -> list[np.ndarray]:
    """Row positions for each group, in order of first appearance."""
    keys = _group_keys(built, layer)
    if not keys:
        return [np.arange(len(layer.data))]
    frame = layer.data.reset_index(drop=True)
    codes = frame.groupby(keys, sort=False, observed=True, dropna=False).ngroup().to_numpy()
    return [np.flatnonzero(codes == g) for g in range(codes.max() + 1)]


def _draw_line(ax, built: BuiltPlot, layer: BuiltLayer) -> None:
    x = _positions(built, layer, "x")
    y = _positions(built, layer, "y")
    colors = _colors(built, layer, "color", COLOR_CYCLE[0])
    linewidth = layer.layer.param("linewidth", LAYOUT["line_width"])
    linestyle = layer.layer.param("linetype", "-")
    alpha = layer.layer.param("alpha")
    continuous = layer.mapping.color is not None and built.scale("color").kind != "discrete"

    for rows in _groups(built, layer):
        order = rows[np.argsort(x[rows], kind="stable")]
        if continuous:
            points = np.column_stack([x[order], y[order]])
            segments = np.stack([points[:-1], points[1:]], axis=1)
            ax.add_collection(
                LineCollection(
                    segments,
                    colors=[colors[i] for i in order[:-1]],
                    linewidths=linewidth,
                    linestyles=linestyle,
                    alpha=alpha,
                )
            )
        else:
            ax.plot(
                x[order],
                y[order],
                color=colors[order[0]],
                linewidth=linewidth,
                linestyle=linestyle,
                alpha=alpha,
                solid_capstyle="round",
            )


def _draw_point(ax, built: BuiltPlot, layer: BuiltLayer) -> None:
    size = layer.layer.param("size", LAYOUT["point_size"])
    ax.scatter(
        _positions(built, layer, "x"),
        _positions(built, layer, "y"),
        color=_colors(built, layer, "color", COLOR_CYCLE[0]),
        s=size ** 2,
        alpha=layer.layer.param("alpha"),
        zorder=3,
    )


def _resolution(x: np.ndarray) -> float:
    values = np.unique(x[np.isfinite(x)])
    if values.size < 2:
        return 1.0
    return float(np.min(np.diff(values)))


def _draw_col(ax, built: BuiltPlot, layer: BuiltLayer) -> None:
    x = _positions(built, layer, "x")
    y = _positions(built, layer, "y")
    fills = _colors(built, layer, "fill", COLOR_CYCLE[0])
    edge = layer.layer.param("color", "none")
    width = layer.layer.param("width", LAYOUT["bar_width"]) * _resolution(x)

    groups = _groups(built, layer)
    n = len(groups)
    dodge = layer.layer.param("position", "dodge") == "dodge" and n > 1
    bar_width = width / n if dodge else width
    offsets = (
        np.linspace(-(n - 1) / 2 * bar_width, (n - 1) / 2 * bar_width, n)
        if dodge else np.zeros(n)
    )
    for offset, rows in zip(offsets, groups):
        ax.bar(
            x[rows] + offset,
            y[rows],
            width=bar_width,
            color=[fills[i] for i in rows],
            edgecolor=edge,
            alpha=layer.layer.param("alpha"),
            zorder=2,
        )


def _draw_text(ax, built: BuiltPlot, layer: BuiltLayer) -> None:
    """Text anchored at each point, shifted by hjust/vjust fractions of its own size."""
    params = layer.layer
    x = _positions(built, layer, "x") + params.param("nudge_x", 0.0)
    y = _positions(built, layer, "y") + params.param("nudge_y", 0.0)
    colors = _colors(built, layer, "color", COLORS["text"])
    hjust = params.param("hjust", 0.5)
    vjust = params.param("vjust", 0.5)
    size = params.param("size", LAYOUT["text_size"])
    fig = ax.figure
    renderer = fig.canvas.get_renderer()

    for xi, yi, text, color in zip(x, y, layer.texts, colors):
        artist = ax.text(
            xi,
            yi,
            text,
            color=color,
            fontsize=size,
            fontweight=params.param("fontweight", "normal"),
            alpha=params.param("alpha"),
            ha="left",
            va="bottom",
            zorder=4,
            clip_on=False,
        )
        if layer.geom == "label":
            artist.set_bbox(
                dict(
                    boxstyle="round,pad=0.25",
                    facecolor=params.param("fill", "white"),
                    edgecolor=color,
                    linewidth=0.5,
                )
            )
        extent = artist.get_window_extent(renderer=renderer)
        dx, dy = justify_offset(extent.width, extent.height, hjust, vjust)
        # points, so the shift survives saving at another dpi
        points = 72.0 / fig.dpi
        artist.set_transform(offset_copy(ax.transData, fig=fig, x=dx * points, y=dy * points, units="points"))


_DRAW = {
    "line": _draw_line,
    "point": _draw_point,
    "col": _draw_col,
    "text": _draw_text,
    "label": _draw_text,
}


# --- Axes, titles, legend ---

def _axis_title(built: BuiltPlot, channel: str) -> str:
    scale = built.scale(channel)
    if scale is not None and scale.name is not None:
        return scale.name
    explicit = getattr(built.labels, channel)
    if explicit is not None:
        return explicit
    for layer in built.layers:
        column = layer.mapping.get(channel)
        if column is not None:
            return column
    return ""


def _apply_position_scales(ax, built: BuiltPlot) -> None:
    for channel in ("x", "y"):
        scale = built.scale(channel)
        if scale is None:
            continue
        set_lim, set_ticks, set_label = (
            (ax.set_xlim, ax.set_xticks, ax.set_xlabel)
            if channel == "x"
            else (ax.set_ylim, ax.set_yticks, ax.set_ylabel)
        )
        set_lim(*scale.limits)
        set_ticks(list(scale.breaks), labels=list(scale.labels))
        set_label(_axis_title(built, channel))


def _add_titles(fig, ax, built: BuiltPlot) -> None:
    theme, titles = built.theme, built.labels

    subtitle_el = theme.element("plot_subtitle")
    subtitle_height = 0.0
    if titles.subtitle and isinstance(subtitle_el, ElementText):
        ax.annotate(
            titles.subtitle,
            xy=(subtitle_el.hjust, 1.0),
            xycoords="axes fraction",
            xytext=(0, subtitle_el.margin.b),
            textcoords="offset points",
            ha=halign(subtitle_el.hjust),
            va="bottom",
            color=subtitle_el.color,
            fontsize=subtitle_el.size,
            fontweight=subtitle_el.weight,
        )
        subtitle_height = subtitle_el.size * 1.4 + subtitle_el.margin.b

    title_el = theme.element("plot_title")
    if titles.title and isinstance(title_el, ElementText):
        ax.set_title(
            titles.title,
            loc=halign(title_el.hjust),
            color=title_el.color,
            fontsize=title_el.size,
            fontweight=title_el.weight,
            pad=title_el.margin.b + subtitle_height,
        )

    caption_el = theme.element("plot_caption")
    if titles.caption and isinstance(caption_el, ElementText):
        fig.text(
            0.02 + 0.96 * caption_el.hjust,
            0.01,
            titles.caption,
            ha=halign(caption_el.hjust),
            va="bottom",
            color=caption_el.color,
            fontsize=caption_el.size,
            fontweight=caption_el.weight,
        )


_LEGEND_LOC = {
    "right": dict(loc="center left", bbox_to_anchor=(1.02, 0.5)),
    "left": dict(loc="center right", bbox_to_anchor=(-0.12, 0.5)),
    "top": dict(loc="lower center", bbox_to_anchor=(0.5, 1.02)),
    "bottom": dict(loc="upper center", bbox_to_anchor=(0.5, -0.12)),
}


def _legend_handle(built: BuiltPlot, channel: str, color: str):
    geoms = {layer.geom for layer in built.layers if layer.mapping.get(channel) is not None}
    if "line" in geoms:
        return Line2D([], [], color=color, linewidth=LAYOUT["line_width"])
    if "col" in geoms:
        return legend_patch(color)
    return Line2D([], [], color=color, marker="o", linestyle="")


def _add_legend(ax, built: BuiltPlot) -> None:
    position = built.theme.legend_position or "right"
    if position == "none":
        return

    handles, labels, title = [], [], None
    seen_columns = set()
    for channel in ("color", "fill"):
        scale = built.scale(channel)
        if scale is None:
            continue
        column = next(
            layer.mapping.get(channel) for layer in built.layers if layer.mapping.get(channel) is not None
        )
        if column in seen_columns:
            continue
        seen_columns.add(column)
        colors = scale.map(list(scale.breaks))
        for color, label in zip(colors, scale.labels):
            handles.append(_legend_handle(built, channel, color))
            labels.append(label)
        if title is None:
            title = scale.name or getattr(built.labels, channel) or column
    if not handles:
        return

    if isinstance(position, tuple):
        placement = dict(loc="center", bbox_to_anchor=position)
    else:
        placement = dict(_LEGEND_LOC[position])
        if position in ("top", "bottom"):
            placement["ncol"] = len(handles)

    legend = ax.legend(
        handles,
        labels,
        title=None if is_blank(built.theme.element("legend_title")) else title,
        handler_map=key_handler_map(handles, built.theme),
        **placement,
    )
    style_legend(legend, built.theme)


def draw(plot: Plot) -> tuple[plt.Figure, plt.Axes]:
    """Build ``plot`` and render it onto a new figure.

    rcParams are scoped to this call; global matplotlib state is untouched.
    """
    built = build(plot)
    with mpl.rc_context(rc_params(built.theme)):
        fig, ax = plt.subplots(figsize=LAYOUT["figsize"], dpi=LAYOUT["dpi"])
        _apply_position_scales(ax, built)
        for layer in built.layers:
            if layer.empty:
                continue
            _DRAW[layer.geom](ax, built, layer)
        minor_axes = tuple(
            channel for channel in ("x", "y")
            if built.scale(channel) is not None and built.scale(channel).kind == "continuous"
        )
        style_axes(fig, ax, built.theme, minor_axes=minor_axes)
        _add_titles(fig, ax, built)
        _add_legend(ax, built)
    return fig, ax


# --- Shortcuts ---

def _quick(
    geom,
    data: pd.DataFrame,
    x: str,
    y: str,
    color: str | None,
    *,
    title: str | None,
    xlabel: str | None,
    ylabel: str | None,
    filename: str | None,
    output_dir: str | Path | None,
    theme: Theme | None,
    **kwargs: Any,
) -> tuple[plt.Figure, plt.Axes]:
    channel = "fill" if geom is geom_col else "color"
    mapping = aes(x, y, **({channel: color} if color else {}))
    plot = ggplot(data, mapping) + geom(**kwargs) + labs(title=title, x=xlabel, y=ylabel)
    if theme is not None:
        plot = plot + theme
    fig, ax = draw(plot)
    if filename:
        save(fig, filename, output_dir)
    return fig, ax


def line(
    data: pd.DataFrame,
    x: str,
    y: str,
    color: str | None = None,
    *,
    title: str | None = None,
    xlabel: str | None = None,
    ylabel: str | None = None,
    filename: str | None = None,
    output_dir: str | Path | None = None,
    theme: Theme | None = None,
    **kwargs: Any,
) -> tuple[plt.Figure, plt.Axes]:
    """Line chart. Pass ``color`` to draw one line per category."""
    return _quick(
        geom_line, data, x, y, color,
        title=title, xlabel=xlabel, ylabel=ylabel,
        filename=filename, output_dir=output_dir, theme=theme, **kwargs,
    )


def bar(
    data: pd.DataFrame,
    x: str,
    y: str,
    fill: str | None = None,
    *,
    title: str | None = None,
    xlabel: str | None = None,
    ylabel: str | None = None,
    filename: str | None = None,
    output_dir: str | Path | None = None,
    theme: Theme | None = None,
    **kwargs: Any,
) -> tuple[plt.Figure, plt.Axes]:
    """Bar chart. Pass ``fill`` for grouped (dodged) bars."""
    return _quick(
        geom_col, data, x, y, fill,
        title=title, xlabel=xlabel, ylabel=ylabel,
        filename=filename, output_dir=output_dir, theme=theme, **kwargs,
    )


def scatter(
    data: pd.DataFrame,
    x: str,
    y: str,
    color: str | None = None,
    *,
    title: str | None = None,
    xlabel: str | None = None,
    ylabel: str | None = None,
    filename: str | None = None,
    output_dir: str | Path | None = None,
    theme: Theme | None = None,
    **kwargs: Any,
) -> tuple[plt.Figure, plt.Axes]:
    """Scatter plot. ``color`` may be categorical or numeric."""
    return _quick(
        geom_point, data, x, y, color,
        title=title, xlabel=xlabel, ylabel=ylabel,
        filename=filename, output_dir=output_dir, theme=theme, **kwargs,
    )
