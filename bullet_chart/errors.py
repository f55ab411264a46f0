"""
Error types raised by the bullet chart.

Every error carries a stable ``identifier`` (e.g. ``"BulletChart:InvalidLimits"``)
so callers can branch on the condition without matching message text.
All of them derive from ``BulletChartError``, itself a ``ValueError``.
"""

from __future__ import annotations


class BulletChartError(ValueError):
    """Base class for bullet chart validation errors.

    Attributes:
        identifier: Stable "BulletChart:<Condition>" string.
    """

    identifier = "BulletChart:Error"
    default_message = "Invalid bullet chart configuration."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    def __str__(self) -> str:
        return f"{self.args[0]} ({self.identifier})"


class InsufficientArgumentsError(BulletChartError):
    identifier = "BulletChart:InsufficientArguments"
    default_message = "Not enough arguments."


class ActualDataNonScalarError(BulletChartError):
    identifier = "BulletChart:ActualDataNonScalar"
    default_message = "actualData must be specified as a scalar numeric."


class InvalidCategoryError(BulletChartError):
    identifier = "BulletChart:InvalidCategory"
    default_message = "Category must be specified as a scalar string."


class InvalidLimitsError(BulletChartError):
    identifier = "BulletChart:InvalidLimits"
    default_message = "Specify limits as two increasing values."


class FaceColorScalarError(BulletChartError):
    identifier = "BulletChart:FaceColorScalar"
    default_message = "Specify a single color for FaceColor."


class DisplayNameMismatchError(BulletChartError):
    identifier = "BulletChart:DisplayNameNotEqualToExpectedBars"
    default_message = "Number of DisplayNames must match number of expected bars."


class InvalidExpectedDataError(BulletChartError):
    identifier = "BulletChart:InvalidExpectedData"
    default_message = "ExpectedData must be a numeric vector."


class InvalidColormapError(BulletChartError):
    identifier = "BulletChart:InvalidColormap"
    default_message = (
        "Colormap must be an N-by-3 matrix with values in [0, 1] "
        "or the name of a Plotly colorscale."
    )


class InvalidOrientationError(BulletChartError):
    identifier = "BulletChart:InvalidOrientation"
    default_message = "Orientation must be 'horizontal' or 'vertical'."


class InvalidSwitchError(BulletChartError):
    identifier = "BulletChart:InvalidSwitch"
    default_message = "Specify 'on', 'off', True or False."


class InvalidColorError(BulletChartError):
    identifier = "BulletChart:InvalidColor"
    default_message = "Specify a color as an RGB triplet, hex code or color name."


class UnknownPropertyError(BulletChartError):
    identifier = "BulletChart:UnknownProperty"
    default_message = "Unrecognized property name."


class InvalidTargetDataError(BulletChartError):
    identifier = "BulletChart:InvalidTargetData"
    default_message = "TargetData must be a numeric scalar."
