"""newsroom-plots: declarative chart styling for newsroom graphics."""

from .charts import bar, default_output_dir, draw, figure, line, save, scatter
from .constants import COLORS, COLOR_CYCLE, FONTS, LAYOUT, PALETTES, SYNTAX
from .datasets import load_sample
from .elements import element_blank, element_line, element_rect, element_text, margin
from .errors import (
    FormatterTypeError,
    MappingError,
    NewsroomPlotsError,
    PlotSpecError,
    ScaleError,
    ScaleTypeError,
    ThemeElementError,
)
from .formatters import comma, currency, date_format, number, percent
from .labels import at_value, first_points, justify_offset, last_points, reduce_per_group
from .logging_config import configure_logging
from .plot import aes, build, geom_col, geom_label, geom_line, geom_point, geom_text, ggplot, labs
from .scales import (
    expansion,
    scale_color_gradient,
    scale_color_manual,
    scale_color_palette,
    scale_fill_gradient,
    scale_fill_manual,
    scale_fill_palette,
    scale_x_continuous,
    scale_x_date,
    scale_x_discrete,
    scale_y_continuous,
    scale_y_date,
    scale_y_discrete,
)
from .theming import (
    get_theme,
    theme,
    theme_bw,
    theme_classic,
    theme_grey,
    theme_minimal,
    theme_timberline,
)

__all__ = [
    "bar",
    "default_output_dir",
    "draw",
    "figure",
    "line",
    "save",
    "scatter",
    "load_sample",
    "element_blank",
    "element_line",
    "element_rect",
    "element_text",
    "margin",
    "FormatterTypeError",
    "MappingError",
    "NewsroomPlotsError",
    "PlotSpecError",
    "ScaleError",
    "ScaleTypeError",
    "ThemeElementError",
    "comma",
    "currency",
    "date_format",
    "number",
    "percent",
    "at_value",
    "first_points",
    "justify_offset",
    "last_points",
    "reduce_per_group",
    "configure_logging",
    "aes",
    "build",
    "geom_col",
    "geom_label",
    "geom_line",
    "geom_point",
    "geom_text",
    "ggplot",
    "labs",
    "expansion",
    "scale_color_gradient",
    "scale_color_manual",
    "scale_color_palette",
    "scale_fill_gradient",
    "scale_fill_manual",
    "scale_fill_palette",
    "scale_x_continuous",
    "scale_x_date",
    "scale_x_discrete",
    "scale_y_continuous",
    "scale_y_date",
    "scale_y_discrete",
    "COLORS",
    "COLOR_CYCLE",
    "FONTS",
    "LAYOUT",
    "PALETTES",
    "SYNTAX",
    "get_theme",
    "theme",
    "theme_bw",
    "theme_classic",
    "theme_grey",
    "theme_minimal",
    "theme_timberline",
]
