"""Translate a resolved Theme into matplotlib rcParams and per-axes styling."""

from __future__ import annotations

import matplotlib as mpl
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.legend import Legend
from matplotlib.legend_handler import HandlerBase
from matplotlib.patches import Patch, Rectangle
from matplotlib.ticker import AutoMinorLocator

from .elements import Element, ElementRect, ElementText, is_blank
from .constants import COLOR_CYCLE, FONTS, LAYOUT
from .theming import Theme, theme_timberline


def _fill(element: Element | None) -> str:
    if isinstance(element, ElementRect) and element.fill:
        return element.fill
    return "none"


def _text(theme: Theme, name: str) -> ElementText:
    element = theme.element(name)
    return element if isinstance(element, ElementText) else ElementText()


def rc_params(theme: Theme) -> dict:
    """matplotlib rcParams for a resolved theme."""
    title = _text(theme, "plot_title")
    axis_title = _text(theme, "axis_title_x")
    tick_x = _text(theme, "axis_text_x")
    tick_y = _text(theme, "axis_text_y")
    legend = _text(theme, "legend_text")
    family = tick_x.family

    return {
        # Figure
        "figure.figsize": LAYOUT["figsize"],
        "figure.dpi": LAYOUT["dpi"],
        "figure.facecolor": _fill(theme.element("plot_background")),
        "figure.edgecolor": "none",
        "savefig.dpi": LAYOUT["dpi"],
        "savefig.facecolor": "auto",
        "savefig.edgecolor": "none",
        "savefig.bbox": "tight",
        "savefig.pad_inches": 0.3,

        # Axes
        "axes.facecolor": _fill(theme.element("panel_background")),
        "axes.titlesize": title.size,
        "axes.titleweight": title.weight,
        "axes.titlecolor": title.color,
        "axes.labelsize": axis_title.size,
        "axes.labelcolor": axis_title.color,
        "axes.labelweight": axis_title.weight,
        "axes.prop_cycle": mpl.cycler(color=COLOR_CYCLE),
        "axes.axisbelow": True,

        # Ticks
        "xtick.labelsize": tick_x.size,
        "ytick.labelsize": tick_y.size,
        "xtick.labelcolor": tick_x.color,
        "ytick.labelcolor": tick_y.color,
        "xtick.direction": "out",
        "ytick.direction": "out",

        # Lines
        "lines.linewidth": LAYOUT["line_width"],
        "lines.markersize": LAYOUT["point_size"],

        # Legend
        "legend.fontsize": legend.size,
        "legend.labelcolor": legend.color,
        "legend.framealpha": LAYOUT["legend_alpha"],

        # Font
        "font.family": family if family else "sans-serif",
        "font.sans-serif": FONTS["sans"],
        "font.size": tick_x.size,
    }


# rcParams for the house theme
STYLE: dict = rc_params(theme_timberline())


def apply(theme: Theme | None = None) -> None:
    """Apply a theme (house style by default) to matplotlib globally."""
    plt.rcParams.update(STYLE if theme is None else rc_params(theme))


def style_rect(patch: Rectangle, element: Element | None) -> None:
    if is_blank(element):
        patch.set_visible(False)
        return
    patch.set_visible(True)
    patch.set_facecolor(element.fill or "none")
    patch.set_edgecolor(element.color or "none")
    patch.set_linewidth(element.linewidth if element.color else 0)


def _style_spines(ax: Axes, theme: Theme) -> None:
    for spine in ax.spines.values():
        spine.set_visible(False)

    border = theme.element("panel_border")
    if not is_blank(border) and border.color:
        for spine in ax.spines.values():
            spine.set_visible(True)
            spine.set_color(border.color)
            spine.set_linewidth(border.linewidth)

    for name, side in (("axis_line_x", "bottom"), ("axis_line_y", "left")):
        line = theme.element(name)
        if is_blank(line):
            continue
        spine = ax.spines[side]
        spine.set_visible(True)
        spine.set_color(line.color)
        spine.set_linewidth(line.linewidth)
        spine.set_linestyle(line.linetype)


def _style_grid(ax: Axes, theme: Theme, minor_axes: tuple[str, ...]) -> None:
    for which in ("major", "minor"):
        for axis in ("x", "y"):
            line = theme.element(f"panel_grid_{which}_{axis}")
            if is_blank(line) or (which == "minor" and axis not in minor_axes):
                ax.grid(False, which=which, axis=axis)
                continue
            if which == "minor":
                getattr(ax, f"{axis}axis").set_minor_locator(AutoMinorLocator(2))
            ax.grid(
                True,
                which=which,
                axis=axis,
                color=line.color,
                linewidth=line.linewidth,
                linestyle=line.linetype,
            )
    # minor breaks carry grid lines only
    ax.tick_params(which="minor", length=0)
    ax.set_axisbelow(True)


def _style_ticks(ax: Axes, theme: Theme) -> None:
    for axis in ("x", "y"):
        ticks = theme.element(f"axis_ticks_{axis}")
        if is_blank(ticks):
            ax.tick_params(axis=axis, which="major", length=0)
        else:
            ax.tick_params(axis=axis, which="major", length=3.5, color=ticks.color, width=ticks.linewidth)

        text = theme.element(f"axis_text_{axis}")
        label_side = "labelbottom" if axis == "x" else "labelleft"
        if is_blank(text):
            ax.tick_params(axis=axis, which="major", **{label_side: False})
            continue
        ax.tick_params(
            axis=axis,
            which="major",
            labelcolor=text.color,
            labelsize=text.size,
            labelrotation=text.angle,
            pad=2.5 + (text.margin.t if axis == "x" else text.margin.r),
            **{label_side: True},
        )
        labels = ax.get_xticklabels() if axis == "x" else ax.get_yticklabels()
        for label in labels:
            label.set_fontweight(text.weight)
            if text.family:
                label.set_fontfamily(text.family)
            if axis == "x" and text.angle:
                label.set_horizontalalignment(halign(text.hjust))


def _style_axis_titles(ax: Axes, theme: Theme) -> None:
    for axis in ("x", "y"):
        label = ax.xaxis.label if axis == "x" else ax.yaxis.label
        text = theme.element(f"axis_title_{axis}")
        if is_blank(text):
            label.set_visible(False)
            continue
        label.set_color(text.color)
        label.set_fontsize(text.size)
        label.set_fontweight(text.weight)
        if text.family:
            label.set_fontfamily(text.family)
        label.set_rotation(text.angle)
        pad = text.margin.t if axis == "x" else text.margin.r
        (ax.xaxis if axis == "x" else ax.yaxis).labelpad = pad


def style_axes(fig: Figure, ax: Axes, theme: Theme, minor_axes: tuple[str, ...] = ("x", "y")) -> None:
    """Apply every non-text-layer element of ``theme`` to a figure and axes.

    Blank elements are hidden no matter what matplotlib's defaults would draw.
    ``minor_axes`` names the axes with continuous scales; only those can
    carry minor grid lines.
    """
    style_rect(fig.patch, theme.element("plot_background"))
    style_rect(ax.patch, theme.element("panel_background"))
    _style_spines(ax, theme)
    _style_grid(ax, theme, minor_axes)
    _style_ticks(ax, theme)
    _style_axis_titles(ax, theme)


class KeyHandler(HandlerBase):
    """Legend handler that draws the legend_key rectangle behind another handler."""

    def __init__(self, inner: HandlerBase, key: ElementRect) -> None:
        super().__init__()
        self.inner = inner
        self.key = key

    def create_artists(self, legend, orig_handle, xdescent, ydescent, width, height, fontsize, trans):
        background = Rectangle(
            (-xdescent, -ydescent),
            width,
            height,
            facecolor=self.key.fill or "none",
            edgecolor=self.key.color or "none",
            linewidth=self.key.linewidth if self.key.color else 0,
            transform=trans,
        )
        artists = self.inner.create_artists(
            legend, orig_handle, xdescent, ydescent, width, height, fontsize, trans
        )
        return [background, *artists]


def key_handler_map(handles: list, theme: Theme) -> dict:
    key = theme.element("legend_key")
    if is_blank(key):
        return {}
    defaults = Legend.get_default_handler_map()
    return {h: KeyHandler(Legend.get_legend_handler(defaults, h), key) for h in handles}


def style_legend(legend: Legend, theme: Theme) -> None:
    background = theme.element("legend_background")
    frame = legend.get_frame()
    if is_blank(background):
        legend.set_frame_on(False)
    else:
        legend.set_frame_on(True)
        frame.set_facecolor(background.fill or "none")
        frame.set_edgecolor(background.color or "none")
        frame.set_linewidth(background.linewidth if background.color else 0)

    text = theme.element("legend_text")
    for label in legend.get_texts():
        if is_blank(text):
            label.set_visible(False)
            continue
        label.set_color(text.color)
        label.set_fontsize(text.size)
        label.set_fontweight(text.weight)

    title = theme.element("legend_title")
    legend_title = legend.get_title()
    if is_blank(title):
        legend_title.set_visible(False)
    else:
        legend_title.set_color(title.color)
        legend_title.set_fontsize(title.size)
        legend_title.set_fontweight(title.weight)
    legend.set_alignment(halign(title.hjust) if isinstance(title, ElementText) else "left")


def halign(hjust: float) -> str:
    """matplotlib horizontal alignment closest to a 0..1 justification."""
    if hjust < 0.25:
        return "left"
    if hjust > 0.75:
        return "right"
    return "center"


def legend_patch(color: str) -> Patch:
    return Patch(facecolor=color, edgecolor="none")
