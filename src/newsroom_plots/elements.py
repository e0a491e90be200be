"""Style variants for theme elements: rect, line, text, or blank."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class Margin:
    """Space around a text element, in points."""

    t: float = 0.0
    r: float = 0.0
    b: float = 0.0
    l: float = 0.0


@dataclass(frozen=True)
class ElementRect:
    fill: str | None = None
    color: str | None = None
    linewidth: float = 0.5
    kind = "rect"


@dataclass(frozen=True)
class ElementLine:
    color: str = "black"
    linewidth: float = 0.5
    linetype: str = "-"
    kind = "line"


@dataclass(frozen=True)
class ElementText:
    color: str = "black"
    size: float = 11.0
    weight: str = "normal"
    family: str | None = None
    angle: float = 0.0
    hjust: float = 0.5
    vjust: float = 0.5
    margin: Margin = field(default_factory=Margin)
    kind = "text"


@dataclass(frozen=True)
class ElementBlank:
    """Suppress the element entirely."""

    kind = "blank"


Element = Union[ElementRect, ElementLine, ElementText, ElementBlank]


def element_rect(
    fill: str | None = None,
    color: str | None = None,
    linewidth: float = 0.5,
) -> ElementRect:
    return ElementRect(fill=fill, color=color, linewidth=linewidth)


def element_line(
    color: str = "black",
    linewidth: float = 0.5,
    linetype: str = "-",
) -> ElementLine:
    return ElementLine(color=color, linewidth=linewidth, linetype=linetype)


def element_text(
    color: str = "black",
    size: float = 11.0,
    weight: str = "normal",
    family: str | None = None,
    angle: float = 0.0,
    hjust: float = 0.5,
    vjust: float = 0.5,
    margin: Margin | None = None,
) -> ElementText:
    return ElementText(
        color=color,
        size=size,
        weight=weight,
        family=family,
        angle=angle,
        hjust=hjust,
        vjust=vjust,
        margin=margin if margin is not None else Margin(),
    )


def element_blank() -> ElementBlank:
    return ElementBlank()


def margin(t: float = 0.0, r: float = 0.0, b: float = 0.0, l: float = 0.0) -> Margin:
    return Margin(t=t, r=r, b=b, l=l)


def is_blank(element: Element | None) -> bool:
    return element is None or isinstance(element, ElementBlank)
