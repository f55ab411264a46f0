"""Bullet chart widget built on Plotly."""

from .chart import BulletChart
from .colormaps import interpolate_colormap, resolve_color, resolve_colormap
from .errors import (
    BulletChartError,
    InsufficientArgumentsError,
    ActualDataNonScalarError,
    InvalidCategoryError,
    InvalidLimitsError,
    FaceColorScalarError,
    DisplayNameMismatchError,
    InvalidExpectedDataError,
    InvalidTargetDataError,
    InvalidColormapError,
    InvalidOrientationError,
    InvalidSwitchError,
    InvalidColorError,
    UnknownPropertyError,
)
from .state import ChartState

__all__ = [
    "BulletChart",
    "ChartState",
    "interpolate_colormap",
    "resolve_color",
    "resolve_colormap",
    "BulletChartError",
    "InsufficientArgumentsError",
    "ActualDataNonScalarError",
    "InvalidCategoryError",
    "InvalidLimitsError",
    "FaceColorScalarError",
    "DisplayNameMismatchError",
    "InvalidExpectedDataError",
    "InvalidTargetDataError",
    "InvalidColormapError",
    "InvalidOrientationError",
    "InvalidSwitchError",
    "InvalidColorError",
    "UnknownPropertyError",
]
