"""
Palette and color helpers for the bullet chart.

Colors are handled internally as RGB triples with channels in [0, 1] and
converted to Plotly ``"rgb(r, g, b)"`` strings only when written to a trace.
Palettes are P-by-3 float arrays; named Plotly colorscales are resolved to
that form so that interpolation works the same way for both.
"""

from __future__ import annotations

import re

import numpy as np
from plotly import colors as plotly_colors
from plotly.exceptions import PlotlyError

from .errors import FaceColorScalarError, InvalidColorError, InvalidColormapError

# Basic color names understood by FaceColor, short and long spellings.
_NAMED_COLORS = {
    "k": (0.0, 0.0, 0.0),
    "black": (0.0, 0.0, 0.0),
    "w": (1.0, 1.0, 1.0),
    "white": (1.0, 1.0, 1.0),
    "r": (1.0, 0.0, 0.0),
    "red": (1.0, 0.0, 0.0),
    "g": (0.0, 1.0, 0.0),
    "green": (0.0, 1.0, 0.0),
    "b": (0.0, 0.0, 1.0),
    "blue": (0.0, 0.0, 1.0),
    "c": (0.0, 1.0, 1.0),
    "cyan": (0.0, 1.0, 1.0),
    "m": (1.0, 0.0, 1.0),
    "magenta": (1.0, 0.0, 1.0),
    "y": (1.0, 1.0, 0.0),
    "yellow": (1.0, 1.0, 0.0),
}

_HEX_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def _parse_color_string(text: str) -> tuple[float, float, float]:
    """Convert a color name, hex code or ``rgb(...)`` string to a [0, 1] triple."""
    value = text.strip().lower()
    if value in _NAMED_COLORS:
        return _NAMED_COLORS[value]
    if _HEX_RE.match(value):
        if len(value) == 4:
            value = "#" + "".join(ch * 2 for ch in value[1:])
        r, g, b = plotly_colors.hex_to_rgb(value)
        return (r / 255.0, g / 255.0, b / 255.0)
    if value.startswith("rgb(") and value.endswith(")"):
        try:
            r, g, b = plotly_colors.unlabel_rgb(value)
        except ValueError as e:
            raise InvalidColorError(f"Could not parse color '{text}'.") from e
        if not all(0 <= c <= 255 for c in (r, g, b)):
            raise InvalidColorError(f"RGB components of '{text}' must be in 0-255.")
        return (r / 255.0, g / 255.0, b / 255.0)
    raise InvalidColorError(f"Unrecognized color '{text}'.")


def resolve_color(value) -> tuple[float, float, float]:
    """Resolve *value* to exactly one RGB triple with channels in [0, 1].

    Accepts an RGB triple, a 1-by-3 matrix, a hex code, an ``rgb(...)``
    string, a basic color name, or a one-element list of those.

    Raises:
        FaceColorScalarError: If *value* describes more than one color.
        InvalidColorError: If *value* is not a recognizable color.
    """
    if isinstance(value, str):
        return _parse_color_string(value)

    if isinstance(value, (list, tuple)) and value and all(isinstance(v, str) for v in value):
        if len(value) > 1:
            raise FaceColorScalarError()
        return _parse_color_string(value[0])

    try:
        arr = np.asarray(value, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidColorError() from e

    if arr.ndim == 2 and arr.shape[1] == 3:
        if arr.shape[0] > 1:
            raise FaceColorScalarError()
        arr = arr[0]
    if arr.shape != (3,) or not np.all(np.isfinite(arr)):
        raise InvalidColorError()
    if np.any(arr < 0) or np.any(arr > 1):
        raise InvalidColorError("RGB triplet values must be in the range [0, 1].")
    return (float(arr[0]), float(arr[1]), float(arr[2]))


def to_plotly_color(rgb) -> str:
    """Format a [0, 1] RGB triple as a Plotly ``"rgb(r, g, b)"`` string."""
    return plotly_colors.label_rgb(plotly_colors.convert_to_RGB_255(tuple(rgb)))


def named_colormap(name: str) -> np.ndarray:
    """Return the P-by-3 palette of a named Plotly colorscale (e.g. "Viridis")."""
    try:
        scale = plotly_colors.get_colorscale(name)
    except (PlotlyError, ValueError, AttributeError) as e:
        raise InvalidColormapError(f"Unknown colorscale '{name}'.") from e
    rows = [_parse_color_string(color) for _, color in scale]
    return np.array(rows, dtype=float)


def resolve_colormap(value) -> np.ndarray:
    """Validate a palette and return it as a float P-by-3 array.

    Raises:
        InvalidColormapError: On bad shape, non-finite values, values
            outside [0, 1], or an unknown colorscale name.
    """
    if isinstance(value, str):
        return named_colormap(value)
    try:
        arr = np.array(value, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidColormapError() from e
    if arr.ndim != 2 or arr.shape[1] != 3 or arr.shape[0] == 0:
        raise InvalidColormapError(
            f"Colormap must be an N-by-3 matrix, got shape {arr.shape}."
        )
    if not np.all(np.isfinite(arr)) or np.any(arr < 0) or np.any(arr > 1):
        raise InvalidColormapError("Colormap values must be in the range [0, 1].")
    return arr


def interpolate_colormap(palette, num_colors: int) -> np.ndarray:
    """Derive *num_colors* colors from *palette* by linear interpolation.

    Samples the palette at ``num_colors`` evenly spaced points over its row
    index, so one color yields the first row and two or more colors span the
    whole palette. Returns an empty (0, 3) array for zero colors.
    """
    palette = np.asarray(palette, dtype=float)
    if num_colors <= 0:
        return np.empty((0, 3))
    rows = palette.shape[0]
    index = np.arange(1, rows + 1, dtype=float)
    samples = np.linspace(1, rows, num_colors)
    return np.column_stack(
        [np.interp(samples, index, palette[:, channel]) for channel in range(3)]
    )
