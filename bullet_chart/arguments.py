"""
Constructor argument parsing and property validators.

``parse_chart_args`` turns the flexible call forms

    BulletChart(expected, actual)
    BulletChart(expected, actual, category)
    BulletChart(..., "Name", value, ...)
    BulletChart(parent_figure, ...)

into a parent figure (or None) plus an ordered dict of canonical property
names to raw values. The ``validate_*`` functions normalize one property value
each and raise the matching ``BulletChartError`` subclass on bad input. Nothing
here touches a figure.
"""

from __future__ import annotations

import math
from numbers import Real

import numpy as np
import plotly.graph_objects as go

from .errors import (
    ActualDataNonScalarError,
    DisplayNameMismatchError,
    InsufficientArgumentsError,
    InvalidCategoryError,
    InvalidExpectedDataError,
    InvalidLimitsError,
    InvalidOrientationError,
    InvalidSwitchError,
    InvalidTargetDataError,
    UnknownPropertyError,
)

# Public property names in the order they are applied.
PROPERTY_NAMES = (
    "ExpectedData",
    "ActualData",
    "TargetData",
    "Category",
    "Colormap",
    "Grid",
    "FaceColor",
    "Orientation",
    "Title",
    "LegendDisplayName",
    "LegendVisible",
    "TargetLineVisible",
    "Limits",
)

ORIENTATIONS = ("horizontal", "vertical")

_ON_VALUES = frozenset({"on", "true", "1"})
_OFF_VALUES = frozenset({"off", "false", "0"})


def _snake_case(name: str) -> str:
    out = []
    for i, ch in enumerate(name):
        if ch.isupper() and i > 0:
            out.append("_")
        out.append(ch.lower())
    return "".join(out)


# "expecteddata" and "expected_data" both map to "ExpectedData"
_NAME_LOOKUP = {}
for _name in PROPERTY_NAMES:
    _NAME_LOOKUP[_name.lower()] = _name
    _NAME_LOOKUP[_snake_case(_name)] = _name


def canonical_name(name) -> str:
    """Map a user-supplied property name to its canonical PascalCase form."""
    if not isinstance(name, str):
        raise UnknownPropertyError(
            f"Property names must be strings, got {type(name).__name__}."
        )
    key = name.strip().lower()
    if key in _NAME_LOOKUP:
        return _NAME_LOOKUP[key]
    raise UnknownPropertyError(
        f"Unrecognized property '{name}'. "
        f"Valid properties: {', '.join(PROPERTY_NAMES)}"
    )


def snake_name(name: str) -> str:
    """Python attribute name for a canonical property (``ExpectedData`` -> ``expected_data``)."""
    return _snake_case(name)


def parse_chart_args(*args, **kwargs) -> tuple[go.Figure | None, dict]:
    """Split constructor arguments into a parent figure and a property dict.

    Args:
        *args: ``[parent,] expected, actual[, category][, name, value, ...]``.
        **kwargs: Extra properties by name, applied after positional pairs.

    Returns:
        ``(parent, properties)`` where *properties* maps canonical property
        names to raw (unvalidated) values, except ``ActualData`` whose
        element count has already been checked.

    Raises:
        InsufficientArgumentsError: Fewer than two data arguments.
        ActualDataNonScalarError: ``actual`` does not hold exactly one element.
        UnknownPropertyError: A name in a name/value pair is not a property.
    """
    parent = None
    if args and isinstance(args[0], go.Figure):
        parent = args[0]
        args = args[1:]

    if len(args) < 2:
        raise InsufficientArgumentsError()

    expected, actual = args[0], args[1]
    if len(args) % 2 == 1:
        category = [("Category", args[2])]
        rest = args[3:]
    else:
        category = []
        rest = args[2:]

    if np.size(actual) != 1:
        raise ActualDataNonScalarError()

    properties: dict = {"ExpectedData": expected, "ActualData": actual}
    for name, value in category:
        properties[name] = value
    for i in range(0, len(rest), 2):
        properties[canonical_name(rest[i])] = rest[i + 1]
    for name, value in kwargs.items():
        properties[canonical_name(name)] = value
    return parent, properties


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------

def _numeric_array(value) -> np.ndarray | None:
    """Return *value* as a float array, or None unless it is numeric or bool.

    Strings, None and mixed object arrays are rejected rather than coerced.
    """
    try:
        arr = np.asarray(value)
    except (TypeError, ValueError):
        return None
    if arr.dtype.kind not in "biuf":
        return None
    return arr.astype(float)


def validate_expected(value) -> np.ndarray:
    """Return ExpectedData as a 1-D float array (scalars become length 1)."""
    arr = _numeric_array(value)
    if arr is None:
        raise InvalidExpectedDataError()
    if arr.ndim > 1:
        if sum(d != 1 for d in arr.shape) > 1:
            raise InvalidExpectedDataError(
                f"ExpectedData must be a vector, got shape {arr.shape}."
            )
    return arr.reshape(-1)


def _numeric_scalar(value):
    arr = _numeric_array(value)
    if arr is None or arr.size != 1:
        return None
    return float(arr.reshape(-1)[0])


def validate_actual(value) -> float:
    """Return ActualData as a float; anything but one numeric element fails."""
    result = _numeric_scalar(value)
    if result is None:
        raise ActualDataNonScalarError()
    return result


def validate_target(value) -> float:
    result = _numeric_scalar(value)
    if result is None:
        raise InvalidTargetDataError()
    return result


def validate_category(value) -> str:
    if not isinstance(value, str):
        raise InvalidCategoryError()
    return value


def validate_title(value) -> str:
    if value is None:
        return ""
    return str(value)


def validate_orientation(value) -> str:
    if isinstance(value, str) and value.strip().lower() in ORIENTATIONS:
        return value.strip().lower()
    raise InvalidOrientationError(f"Orientation must be one of {ORIENTATIONS}, got {value!r}.")


def validate_switch(value, name: str = "switch") -> bool:
    """Accept bool, 0/1 or 'on'/'off' style strings."""
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, str):
        key = value.strip().lower()
        if key in _ON_VALUES:
            return True
        if key in _OFF_VALUES:
            return False
    elif isinstance(value, Real) and value in (0, 1):
        return bool(value)
    raise InvalidSwitchError(f"{name} must be 'on', 'off', True or False, got {value!r}.")


def validate_limits(value) -> tuple[float, float]:
    """Return limits as a ``(low, high)`` tuple with ``high > low``."""
    if isinstance(value, (str, bytes)):
        raise InvalidLimitsError()
    try:
        arr = np.asarray(value, dtype=float).reshape(-1)
    except (TypeError, ValueError) as e:
        raise InvalidLimitsError() from e
    if arr.size != 2:
        raise InvalidLimitsError()
    low, high = float(arr[0]), float(arr[1])
    if not (math.isfinite(low) and math.isfinite(high)) or high <= low:
        raise InvalidLimitsError()
    return (low, high)


def validate_display_names(value) -> list[str]:
    """Normalize LegendDisplayName to a list of strings (None -> empty)."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


def check_display_names(names: list[str], num_bars: int) -> None:
    """Reconciliation-time check of LegendDisplayName against the bar count."""
    if names and len(names) != num_bars:
        raise DisplayNameMismatchError(
            f"Number of DisplayNames ({len(names)}) must match "
            f"number of expected bars ({num_bars})."
        )
