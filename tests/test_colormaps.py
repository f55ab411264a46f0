"""
Tests for bullet_chart.colormaps — palette interpolation and color parsing.

Run with: python -m pytest tests/test_colormaps.py
"""

import numpy as np
import pytest

from bullet_chart.colormaps import (
    interpolate_colormap,
    named_colormap,
    resolve_color,
    resolve_colormap,
    to_plotly_color,
)
from bullet_chart.errors import FaceColorScalarError, InvalidColorError, InvalidColormapError

GRAY = np.array([[0.0, 0.0, 0.0], [1.0, 1.0, 1.0]])


class TestInterpolateColormap:
    def test_spans_palette(self):
        result = interpolate_colormap(GRAY, 3)
        np.testing.assert_allclose(result, [[0, 0, 0], [0.5, 0.5, 0.5], [1, 1, 1]])

    def test_single_color_is_first_row(self):
        result = interpolate_colormap(GRAY, 1)
        np.testing.assert_allclose(result, [[0, 0, 0]])

    def test_zero_colors(self):
        assert interpolate_colormap(GRAY, 0).shape == (0, 3)

    def test_fewer_samples_than_rows(self):
        palette = np.array([[1, 0, 0], [0, 1, 0], [0, 0, 1], [1, 1, 1], [0, 0, 0]], dtype=float)
        result = interpolate_colormap(palette, 2)
        np.testing.assert_allclose(result, [[1, 0, 0], [0, 0, 0]])

    def test_single_row_palette(self):
        result = interpolate_colormap([[0.2, 0.4, 0.6]], 3)
        np.testing.assert_allclose(result, [[0.2, 0.4, 0.6]] * 3)

    @pytest.mark.parametrize("n", [1, 2, 3, 7, 20])
    def test_deterministic(self, n):
        palette = named_colormap("Viridis")
        first = interpolate_colormap(palette, n)
        second = interpolate_colormap(palette, n)
        assert first.shape == (n, 3)
        assert np.array_equal(first, second)


class TestResolveColormap:
    def test_matrix(self):
        result = resolve_colormap([[0, 0, 0], [1, 1, 1]])
        assert result.shape == (2, 3)
        assert result.dtype == float

    def test_named(self):
        viridis = resolve_colormap("Viridis")
        np.testing.assert_allclose(viridis[0], np.array([0x44, 0x01, 0x54]) / 255.0)

    @pytest.mark.parametrize("bad", [
        [[0, 0]],
        [0, 0, 0],
        [],
        [[1.5, 0, 0]],
        [[-0.1, 0, 0]],
        [[np.nan, 0, 0]],
        "NotAColorscale",
    ])
    def test_invalid(self, bad):
        with pytest.raises(InvalidColormapError):
            resolve_colormap(bad)


class TestResolveColor:
    @pytest.mark.parametrize("value,expected", [
        ("k", (0.0, 0.0, 0.0)),
        ("Red", (1.0, 0.0, 0.0)),
        ("#00ff00", (0.0, 1.0, 0.0)),
        ("#00F", (0.0, 0.0, 1.0)),
        ("rgb(255, 255, 0)", (1.0, 1.0, 0.0)),
        ([0.25, 0.5, 0.75], (0.25, 0.5, 0.75)),
        ([[0.25, 0.5, 0.75]], (0.25, 0.5, 0.75)),
        (["white"], (1.0, 1.0, 1.0)),
    ])
    def test_single_color(self, value, expected):
        assert resolve_color(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", [
        [[1, 0, 0], [0, 1, 0]],
        ["red", "blue"],
    ])
    def test_multiple_colors(self, value):
        with pytest.raises(FaceColorScalarError):
            resolve_color(value)

    @pytest.mark.parametrize("value", [
        "chartreuse-ish",
        "#12345",
        [2, 0, 0],
        [0.5, 0.5],
        None,
    ])
    def test_invalid_color(self, value):
        with pytest.raises(InvalidColorError):
            resolve_color(value)

    def test_to_plotly_color(self):
        assert to_plotly_color((1.0, 0.0, 0.0)) == "rgb(255, 0, 0)"
        assert to_plotly_color((0.0, 0.0, 0.0)) == "rgb(0, 0, 0)"
