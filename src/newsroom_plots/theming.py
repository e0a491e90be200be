"""Themes: named base themes and override merging.

A Theme maps element identifiers (``ELEMENTS``) to style variants from
elements.py. Complete themes set every element; ``theme(...)`` builds a
partial theme of overrides. Adding a partial theme replaces each named
element wholesale and leaves every other element exactly as it was:

    theme_minimal() + theme(axis_text_x=element_text(angle=45), legend_position="none")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import reduce
from typing import Any, Callable, Mapping

from .elements import (
    Element,
    ElementBlank,
    element_blank,
    element_line,
    element_rect,
    element_text,
    margin,
)
from .errors import ThemeElementError
from .constants import COLORS, LAYOUT

# Element identifier -> style kind it accepts (blank is always accepted)
ELEMENTS: dict[str, str] = {
    "plot_background": "rect",
    "panel_background": "rect",
    "panel_border": "rect",
    "legend_background": "rect",
    "legend_key": "rect",
    "panel_grid_major_x": "line",
    "panel_grid_major_y": "line",
    "panel_grid_minor_x": "line",
    "panel_grid_minor_y": "line",
    "axis_line_x": "line",
    "axis_line_y": "line",
    "axis_ticks_x": "line",
    "axis_ticks_y": "line",
    "plot_title": "text",
    "plot_subtitle": "text",
    "plot_caption": "text",
    "axis_text_x": "text",
    "axis_text_y": "text",
    "axis_title_x": "text",
    "axis_title_y": "text",
    "legend_text": "text",
    "legend_title": "text",
}

LEGEND_POSITIONS = ("right", "left", "top", "bottom", "none")


@dataclass(frozen=True)
class Theme:
    elements: Mapping[str, Element] = field(default_factory=dict)
    legend_position: str | tuple[float, float] | None = None
    complete: bool = False
    name: str | None = None

    def __add__(self, other: "Theme") -> "Theme":
        if not isinstance(other, Theme):
            return NotImplemented
        if other.complete:
            return other
        merged = dict(self.elements)
        merged.update(other.elements)
        return Theme(
            elements=merged,
            legend_position=(
                other.legend_position
                if other.legend_position is not None
                else self.legend_position
            ),
            complete=self.complete,
            name=self.name,
        )

    def element(self, name: str) -> Element | None:
        """Style for ``name``; None when a partial theme leaves it unset."""
        _check_name(name)
        return self.elements.get(name)

    def is_blank(self, name: str) -> bool:
        return isinstance(self.element(name), ElementBlank)


def _check_name(name: str) -> None:
    if name not in ELEMENTS:
        raise ThemeElementError(f"unknown theme element {name!r}")


def _check_element(name: str, value: Any) -> None:
    _check_name(name)
    kind = getattr(value, "kind", None)
    if kind == "blank":
        return
    if kind != ELEMENTS[name]:
        raise ThemeElementError(
            f"theme element {name!r} needs element_{ELEMENTS[name]}() "
            f"or element_blank(), got {value!r}"
        )


def _check_legend_position(value: Any) -> None:
    if isinstance(value, str) and value in LEGEND_POSITIONS:
        return
    if (
        isinstance(value, tuple)
        and len(value) == 2
        and all(isinstance(v, (int, float)) for v in value)
    ):
        return
    raise ThemeElementError(
        f"legend_position must be one of {LEGEND_POSITIONS} or an (x, y) pair, got {value!r}"
    )


def theme(legend_position: str | tuple[float, float] | None = None, **elements: Element) -> Theme:
    """Partial theme of overrides. Unknown identifiers fail here, not at draw time."""
    for name, value in elements.items():
        _check_element(name, value)
    if legend_position is not None:
        _check_legend_position(legend_position)
    return Theme(elements=dict(elements), legend_position=legend_position)


def resolve_theme(base: Theme, *overrides: Theme) -> Theme:
    return reduce(lambda acc, t: acc + t, overrides, base)


def _complete(name: str, elements: dict[str, Element], legend_position: str = "right") -> Theme:
    missing = set(ELEMENTS) - set(elements)
    if missing:
        raise ThemeElementError(f"theme {name!r} leaves elements unset: {sorted(missing)}")
    return Theme(elements=elements, legend_position=legend_position, complete=True, name=name)


def _grey_elements(base_size: float, base_family: str | None) -> dict[str, Element]:
    small = base_size * 0.8

    def text(**kw: Any) -> Element:
        kw.setdefault("family", base_family)
        return element_text(**kw)

    return {
        "plot_background": element_rect(fill=COLORS["white"], color=COLORS["white"]),
        "panel_background": element_rect(fill=COLORS["grey92"]),
        "panel_border": element_blank(),
        "legend_background": element_rect(fill=COLORS["white"]),
        "legend_key": element_rect(fill="#F2F2F2"),
        "panel_grid_major_x": element_line(color=COLORS["white"], linewidth=0.8),
        "panel_grid_major_y": element_line(color=COLORS["white"], linewidth=0.8),
        "panel_grid_minor_x": element_line(color=COLORS["white"], linewidth=0.4),
        "panel_grid_minor_y": element_line(color=COLORS["white"], linewidth=0.4),
        "axis_line_x": element_blank(),
        "axis_line_y": element_blank(),
        "axis_ticks_x": element_line(color=COLORS["grey20"]),
        "axis_ticks_y": element_line(color=COLORS["grey20"]),
        "plot_title": text(size=base_size * 1.2, hjust=0.0, margin=margin(b=base_size / 2)),
        "plot_subtitle": text(size=base_size, hjust=0.0, margin=margin(b=base_size / 2)),
        "plot_caption": text(size=small, hjust=1.0, margin=margin(t=base_size / 2)),
        "axis_text_x": text(color=COLORS["grey30"], size=small, vjust=1.0),
        "axis_text_y": text(color=COLORS["grey30"], size=small, hjust=1.0),
        "axis_title_x": text(size=base_size, margin=margin(t=base_size / 4)),
        "axis_title_y": text(size=base_size, angle=90.0, margin=margin(r=base_size / 4)),
        "legend_text": text(size=small),
        "legend_title": text(size=base_size, hjust=0.0),
    }


def theme_grey(base_size: float = 11, base_family: str | None = None) -> Theme:
    """Grey panel with white grid lines."""
    return _complete("grey", _grey_elements(base_size, base_family))


def theme_bw(base_size: float = 11, base_family: str | None = None) -> Theme:
    """White panel, grey grid, dark border."""
    elements = _grey_elements(base_size, base_family)
    elements.update(
        panel_background=element_rect(fill=COLORS["white"]),
        panel_border=element_rect(color=COLORS["grey20"]),
        panel_grid_major_x=element_line(color=COLORS["grey92"], linewidth=0.8),
        panel_grid_major_y=element_line(color=COLORS["grey92"], linewidth=0.8),
        panel_grid_minor_x=element_line(color=COLORS["grey92"], linewidth=0.4),
        panel_grid_minor_y=element_line(color=COLORS["grey92"], linewidth=0.4),
        legend_key=element_rect(fill=COLORS["white"]),
    )
    return _complete("bw", elements)


def theme_minimal(base_size: float = 11, base_family: str | None = None) -> Theme:
    """Grid lines only: no background, border, or ticks."""
    elements = dict(theme_bw(base_size, base_family).elements)
    elements.update(
        plot_background=element_blank(),
        panel_background=element_blank(),
        panel_border=element_blank(),
        axis_ticks_x=element_blank(),
        axis_ticks_y=element_blank(),
        legend_background=element_blank(),
        legend_key=element_blank(),
    )
    return _complete("minimal", elements)


def theme_classic(base_size: float = 11, base_family: str | None = None) -> Theme:
    """Axis lines and no grid."""
    elements = dict(theme_bw(base_size, base_family).elements)
    elements.update(
        panel_border=element_blank(),
        panel_grid_major_x=element_blank(),
        panel_grid_major_y=element_blank(),
        panel_grid_minor_x=element_blank(),
        panel_grid_minor_y=element_blank(),
        axis_line_x=element_line(color="black"),
        axis_line_y=element_line(color="black"),
        legend_key=element_blank(),
    )
    return _complete("classic", elements)


def theme_timberline(base_size: float = LAYOUT["base_size"], base_family: str | None = None) -> Theme:
    """House style: parchment background, horizontal grid only, open top/right."""
    k = base_size / LAYOUT["base_size"]
    spine = LAYOUT["spine_width"]

    def text(**kw: Any) -> Element:
        kw.setdefault("color", COLORS["text"])
        kw.setdefault("family", base_family)
        return element_text(**kw)

    elements: dict[str, Element] = {
        "plot_background": element_rect(fill=COLORS["bg"], color=COLORS["bg"]),
        "panel_background": element_rect(fill=COLORS["bg"]),
        "panel_border": element_blank(),
        "legend_background": element_rect(fill=COLORS["surface"], color=COLORS["border"]),
        "legend_key": element_blank(),
        "panel_grid_major_x": element_blank(),
        "panel_grid_major_y": element_line(color=COLORS["border"], linewidth=0.5),
        "panel_grid_minor_x": element_blank(),
        "panel_grid_minor_y": element_blank(),
        "axis_line_x": element_line(color=COLORS["border"], linewidth=spine),
        "axis_line_y": element_line(color=COLORS["border"], linewidth=spine),
        "axis_ticks_x": element_line(color=COLORS["muted"], linewidth=spine),
        "axis_ticks_y": element_line(color=COLORS["muted"], linewidth=spine),
        "plot_title": text(size=LAYOUT["title_size"] * k, weight="bold", hjust=0.0, margin=margin(b=16)),
        "plot_subtitle": text(color=COLORS["muted"], size=LAYOUT["label_size"] * k, hjust=0.0, margin=margin(b=8)),
        "plot_caption": text(color=COLORS["muted"], size=LAYOUT["tick_size"] * k, hjust=1.0, margin=margin(t=8)),
        "axis_text_x": text(size=LAYOUT["tick_size"] * k, vjust=1.0),
        "axis_text_y": text(size=LAYOUT["tick_size"] * k, hjust=1.0),
        "axis_title_x": text(size=LAYOUT["label_size"] * k, margin=margin(t=8)),
        "axis_title_y": text(size=LAYOUT["label_size"] * k, angle=90.0, margin=margin(r=8)),
        "legend_text": text(size=LAYOUT["tick_size"] * k),
        "legend_title": text(size=LAYOUT["label_size"] * k, hjust=0.0),
    }
    return _complete("timberline", elements)


_THEMES: dict[str, Callable[..., Theme]] = {
    "grey": theme_grey,
    "gray": theme_grey,
    "bw": theme_bw,
    "minimal": theme_minimal,
    "classic": theme_classic,
    "timberline": theme_timberline,
}

DEFAULT_THEME = "timberline"


def get_theme(name: str, **kwargs: Any) -> Theme:
    try:
        factory = _THEMES[name]
    except KeyError:
        raise ThemeElementError(
            f"unknown theme {name!r}; choose from {sorted(_THEMES)}"
        ) from None
    return factory(**kwargs)
