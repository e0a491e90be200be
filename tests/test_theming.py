"""Tests for element styles, theme overrides and the named base themes."""

from __future__ import annotations

import dataclasses

import pytest

from newsroom_plots import (
    ThemeElementError,
    element_blank,
    element_line,
    element_rect,
    element_text,
    get_theme,
    margin,
    theme,
    theme_bw,
    theme_classic,
    theme_grey,
    theme_minimal,
    theme_timberline,
)
from newsroom_plots.elements import ElementBlank, ElementText, is_blank
from newsroom_plots.theming import ELEMENTS, resolve_theme

pytestmark = pytest.mark.unit

BASE_THEMES = [theme_grey, theme_bw, theme_minimal, theme_classic, theme_timberline]


@pytest.mark.parametrize("factory", BASE_THEMES)
def test_base_themes_are_complete(factory) -> None:
    """Every named base theme sets every element identifier."""

    base = factory()
    assert base.complete is True
    assert set(base.elements) == set(ELEMENTS)


@pytest.mark.parametrize("factory", BASE_THEMES)
def test_blank_override_removes_the_element(factory) -> None:
    """element_blank() wins no matter what the base sets."""

    merged = factory() + theme(panel_grid_major_y=element_blank())
    assert merged.is_blank("panel_grid_major_y")


def test_override_preserves_unmentioned_elements_exactly() -> None:
    """Only the named element changes; every other element is the same object."""

    base = theme_minimal()
    merged = base + theme(axis_text_x=element_text(angle=45, hjust=1.0))
    for name in ELEMENTS:
        if name == "axis_text_x":
            continue
        assert merged.element(name) is base.element(name)
    assert merged.element("axis_text_x").angle == 45


def test_override_replaces_the_element_wholesale() -> None:
    """Fields not given in the override come from the element default, not the base."""

    base = theme_timberline()
    merged = base + theme(plot_title=element_text(size=20))
    title = merged.element("plot_title")
    assert title.size == 20
    assert title.weight == "normal"
    assert base.element("plot_title").weight == "bold"


def test_adding_a_complete_theme_replaces_everything() -> None:
    """A complete theme on the right discards earlier overrides."""

    custom = theme_grey() + theme(panel_grid_major_y=element_blank(), legend_position="none")
    replaced = custom + theme_bw()
    assert replaced == theme_bw()
    assert not replaced.is_blank("panel_grid_major_y")


def test_overrides_apply_left_to_right() -> None:
    """Later overrides win over earlier ones."""

    merged = resolve_theme(
        theme_bw(),
        theme(axis_line_x=element_line(color="red")),
        theme(axis_line_x=element_line(color="blue")),
    )
    assert merged.element("axis_line_x").color == "blue"


def test_merge_keeps_the_base_identity() -> None:
    """Overrides don't change which base theme the result came from."""

    merged = theme_classic() + theme(legend_position="bottom")
    assert merged.complete is True
    assert merged.name == "classic"
    assert merged.legend_position == "bottom"


def test_unknown_element_fails_at_theme_time() -> None:
    """Misspelled element identifiers are caught by theme() itself."""

    with pytest.raises(ThemeElementError, match="panel_grid_mayor"):
        theme(panel_grid_mayor=element_blank())


def test_wrong_style_kind_for_element() -> None:
    """Text elements only take element_text() or element_blank()."""

    with pytest.raises(ThemeElementError, match="element_text"):
        theme(plot_title=element_line())


def test_rect_element_rejects_text_style() -> None:
    """Rect elements only take element_rect() or element_blank()."""

    with pytest.raises(ThemeElementError):
        theme(panel_background=element_text())


def test_bad_legend_position() -> None:
    """Legend position is a side name, 'none', or an (x, y) pair."""

    with pytest.raises(ThemeElementError):
        theme(legend_position="middle")


def test_legend_position_may_be_a_coordinate_pair() -> None:
    """An (x, y) pair places the legend inside the axes."""

    assert theme(legend_position=(0.1, 0.9)).legend_position == (0.1, 0.9)


def test_element_lookup_checks_the_name() -> None:
    """Reading an unknown element is as much an error as setting one."""

    with pytest.raises(ThemeElementError):
        theme_bw().element("panel_grid")


def test_partial_theme_leaves_other_elements_unset() -> None:
    """theme() only carries the elements it names."""

    partial = theme(plot_background=element_rect(fill="white"))
    assert partial.complete is False
    assert partial.element("panel_background") is None


def test_get_theme_by_name() -> None:
    """Named base themes are looked up by identifier."""

    assert get_theme("minimal") == theme_minimal()
    assert get_theme("gray") == theme_grey()


def test_get_theme_unknown_name() -> None:
    """Unknown theme names list the valid ones."""

    with pytest.raises(ThemeElementError, match="timberline"):
        get_theme("solarized")


def test_base_size_scales_text() -> None:
    """Doubling base_size doubles the axis title size."""

    small = theme_grey(base_size=10).element("axis_title_x")
    large = theme_grey(base_size=20).element("axis_title_x")
    assert large.size == 2 * small.size


def test_minimal_has_no_backgrounds_or_ticks() -> None:
    """theme_minimal() keeps grid lines only."""

    minimal = theme_minimal()
    for name in ("plot_background", "panel_background", "panel_border", "axis_ticks_x", "axis_ticks_y"):
        assert minimal.is_blank(name)
    assert not minimal.is_blank("panel_grid_major_y")


def test_elements_are_immutable() -> None:
    """Style variants are frozen values."""

    text = element_text(margin=margin(t=4))
    with pytest.raises(dataclasses.FrozenInstanceError):
        text.size = 30
    assert isinstance(text, ElementText)
    assert text.margin.t == 4


def test_is_blank_covers_unset_elements() -> None:
    """A missing element draws nothing, same as a blank one."""

    assert is_blank(None)
    assert is_blank(ElementBlank())
    assert not is_blank(element_rect())
