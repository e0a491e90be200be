"""Exceptions raised by newsroom_plots.

Configuration mistakes surface as soon as they can be detected: theme
overrides in ``theme()``, geom parameters when a layer is created, and
mappings and scale kinds in ``build()``.
"""


class NewsroomPlotsError(Exception):
    """Base class for every newsroom_plots error."""


class ThemeElementError(NewsroomPlotsError):
    """Unknown theme element, wrong style kind for an element, or a bad theme option."""


class PlotSpecError(NewsroomPlotsError):
    """A component that cannot be added to a Plot."""


class MappingError(PlotSpecError):
    """Aesthetic mapping that doesn't match the layer data.

    Unknown channel names and columns missing from the frame both land here.
    """


class ScaleError(NewsroomPlotsError):
    """A scale that cannot be resolved against its trained domain."""


class ScaleTypeError(ScaleError):
    """Continuous scale on discrete data, or discrete scale on numeric data."""


class FormatterTypeError(NewsroomPlotsError, TypeError):
    """Numeric formatter applied to a non-numeric value."""
