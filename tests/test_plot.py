"""Tests for plot composition and the build step."""

from __future__ import annotations

import logging

import pandas as pd
import pytest

from newsroom_plots import (
    MappingError,
    PlotSpecError,
    ScaleTypeError,
    aes,
    build,
    currency,
    element_blank,
    geom_col,
    geom_line,
    geom_point,
    geom_text,
    ggplot,
    labs,
    last_points,
    scale_x_discrete,
    scale_y_continuous,
    theme,
    theme_bw,
)
from newsroom_plots.plot import Aes

pytestmark = pytest.mark.unit


def test_aes_binds_positional_and_named_channels() -> None:
    """aes(x, y, color=...) maps each channel to a column name."""

    mapping = aes("date", "revenue", color="series")
    assert mapping == Aes(x="date", y="revenue", color="series")


def test_aes_accepts_british_spelling() -> None:
    """colour is an alias for color."""

    assert aes("a", "b", colour="c").color == "c"


def test_aes_rejects_unknown_channels() -> None:
    """Only known channels can be mapped."""

    with pytest.raises(MappingError, match="shape"):
        aes("a", "b", shape="c")


def test_layer_mapping_overrides_plot_mapping() -> None:
    """Layer channels win; unset layer channels inherit."""

    merged = aes("a", "b", color="c").merged(aes(y="z"))
    assert merged == Aes(x="a", y="z", color="c")


def test_geoms_reject_unknown_parameters() -> None:
    """Typos in geom parameters fail when the layer is created."""

    with pytest.raises(PlotSpecError, match="linewidht"):
        geom_line(linewidht=2)


def test_col_position_must_be_known() -> None:
    """Bars dodge or overlap; nothing else."""

    with pytest.raises(PlotSpecError):
        geom_col(position="stack")


def test_adding_returns_a_new_plot(groups: pd.DataFrame) -> None:
    """Composition never mutates the left-hand plot."""

    base = ggplot(groups, aes("t", "value"))
    with_line = base + geom_line()
    assert base.layers == ()
    assert len(with_line.layers) == 1
    assert with_line is not base


def test_adding_a_list_adds_each_component(groups: pd.DataFrame) -> None:
    """Lists of components are added left to right."""

    plot = ggplot(groups, aes("t", "value")) + [geom_line(), geom_point(), labs(title="T")]
    assert [layer.geom for layer in plot.layers] == ["line", "point"]
    assert plot.labels.title == "T"


def test_adding_something_unknown(groups: pd.DataFrame) -> None:
    """Only layers, scales, themes and labels can be added."""

    with pytest.raises(PlotSpecError):
        ggplot(groups) + "geom_line"


def test_second_scale_on_a_channel_replaces_the_first(groups: pd.DataFrame, caplog) -> None:
    """The newest scale wins and the replacement is logged."""

    first = scale_y_continuous(name="first")
    second = scale_y_continuous(name="second")
    with caplog.at_level(logging.WARNING, logger="newsroom_plots.plot"):
        plot = ggplot(groups, aes("t", "value")) + first + second
    assert plot.scale("y") is second
    assert len(plot.scales) == 1
    assert "already present" in caplog.text


def test_labs_accumulate(groups: pd.DataFrame) -> None:
    """Later labs() calls only change the labels they name."""

    plot = ggplot(groups) + labs(title="Revenue", x="Month") + labs(x="Date")
    assert plot.labels.title == "Revenue"
    assert plot.labels.x == "Date"


def test_themes_accumulate_on_the_plot(groups: pd.DataFrame) -> None:
    """A base theme followed by overrides resolves to the merged theme."""

    plot = ggplot(groups, aes("t", "value")) + geom_line() + theme_bw() + theme(panel_border=element_blank())
    built = build(plot)
    assert built.theme.name == "bw"
    assert built.theme.is_blank("panel_border")


def test_default_theme_is_the_house_theme(groups: pd.DataFrame) -> None:
    """Plots without a theme get timberline."""

    built = build(ggplot(groups, aes("t", "value")) + geom_line())
    assert built.theme.name == "timberline"


def test_partial_theme_without_base_merges_over_house_theme(groups: pd.DataFrame) -> None:
    """Overrides alone still resolve to a complete theme."""

    built = build(ggplot(groups, aes("t", "value")) + geom_line() + theme(legend_position="none"))
    assert built.theme.complete
    assert built.theme.legend_position == "none"


def test_build_trains_one_scale_per_mapped_channel(groups: pd.DataFrame) -> None:
    """x, y and color are trained; unmapped channels are absent."""

    built = build(ggplot(groups, aes("t", "value", color="grp")) + geom_line())
    assert set(built.scales) == {"x", "y", "color"}
    assert built.scale("color").domain == ("A", "B")
    assert built.scale("y").domain == (5.0, 30.0)


def test_columns_widen_the_y_domain_to_zero(categories: pd.DataFrame) -> None:
    """Bars grow from zero, so zero is always in range."""

    built = build(ggplot(categories, aes("desk", "stories")) + geom_col())
    assert built.scale("y").domain == (0.0, 30.0)
    assert built.scale("x").kind == "discrete"


def test_missing_column_fails_at_build(groups: pd.DataFrame) -> None:
    """Mapping a column the data lacks is caught by build()."""

    plot = ggplot(groups, aes("t", "revenue")) + geom_line()
    with pytest.raises(MappingError, match="revenue"):
        build(plot)


def test_text_layer_needs_a_label_channel(groups: pd.DataFrame) -> None:
    """geom_text() without a label aesthetic cannot be built."""

    with pytest.raises(MappingError, match="label"):
        build(ggplot(groups, aes("t", "value")) + geom_text())


def test_layer_without_any_data() -> None:
    """A layer with no data of its own needs plot data."""

    with pytest.raises(MappingError):
        build(ggplot(mapping=aes("t", "value")) + geom_line())


def test_continuous_scale_on_discrete_data(groups: pd.DataFrame) -> None:
    """A declared scale must fit the data it is trained on."""

    plot = ggplot(groups, aes("grp", "value")) + geom_point() + scale_y_continuous() + scale_x_discrete()
    build(plot)
    with pytest.raises(ScaleTypeError):
        build(ggplot(groups, aes("t", "value")) + geom_point() + scale_x_discrete())


def test_layers_mixing_data_kinds_on_one_channel(groups: pd.DataFrame) -> None:
    """Numbers and categories cannot share an axis."""

    plot = ggplot(groups, aes("t", "value")) + geom_line() + geom_point(aes(x="grp"))
    with pytest.raises(ScaleTypeError):
        build(plot)


def test_reducer_as_layer_data(groups: pd.DataFrame) -> None:
    """Callable layer data is applied to the plot data."""

    plot = (
        ggplot(groups, aes("t", "value", color="grp"))
        + geom_line()
        + geom_text(aes(label="grp"), data=last_points("grp", "t"))
    )
    built = build(plot)
    text_layer = built.layers[1]
    assert len(text_layer.data) == 2
    assert text_layer.texts == ("A", "B")
    assert len(built.layers[0].data) == 6


def test_label_text_goes_through_the_format_parameter(groups: pd.DataFrame) -> None:
    """format= renders label values with a formatter."""

    plot = ggplot(groups, aes("t", "value")) + geom_text(
        aes(label="value"), data=last_points("grp", "t"), format=currency(prefix="$", accuracy=1)
    )
    assert build(plot).layers[0].texts == ("$20", "$9")


def test_empty_label_layer_builds_and_logs(groups: pd.DataFrame, caplog) -> None:
    """A reduction with no rows is allowed and noted at debug level."""

    empty = groups.iloc[0:0]
    plot = ggplot(groups, aes("t", "value")) + geom_line() + geom_text(aes(label="grp"), data=empty)
    with caplog.at_level(logging.DEBUG, logger="newsroom_plots.plot"):
        built = build(plot)
    assert built.layers[1].empty
    assert built.layers[1].texts == ()
    assert "has no rows" in caplog.text


def test_inherit_aes_false_ignores_plot_mapping(groups: pd.DataFrame) -> None:
    """Layers may opt out of the plot mapping."""

    plot = ggplot(groups, aes("t", "value", color="grp")) + geom_point(aes("t", "value"), inherit_aes=False)
    built = build(plot)
    assert built.layers[0].mapping.color is None
    assert "color" not in built.scales


def test_empty_layer_takes_no_part_in_scale_training(groups: pd.DataFrame) -> None:
    """An empty frame with untyped columns doesn't clash with numeric layers."""

    empty = pd.DataFrame({"t": [], "value": [], "grp": []}, dtype=object)
    plot = ggplot(groups, aes("t", "value")) + geom_line() + geom_text(aes(label="grp"), data=empty)
    built = build(plot)
    assert built.scale("x").kind == "continuous"
    assert built.scale("y").domain == (5.0, 30.0)
