"""
Persisted chart state.

Only manual axis limits survive a save/load cycle; everything else is rebuilt
from the chart's public properties. An axis is in manual mode when its layout
has ``autorange=False`` and an explicit ``range``.
"""

from __future__ import annotations

import plotly.graph_objects as go

_AXES = (("XLim", "xaxis"), ("YLim", "yaxis"))


def is_manual(axis) -> bool:
    """True if a Plotly layout axis has a pinned range."""
    return axis.autorange is False and axis.range is not None


def set_manual_range(figure: go.Figure, axis_name: str, limits) -> None:
    """Pin *axis_name* ("xaxis" or "yaxis") to *limits*, switching it to manual."""
    figure.update_layout({axis_name: dict(range=[float(limits[0]), float(limits[1])], autorange=False)})


def set_auto_range(figure: go.Figure, axis_name: str) -> None:
    figure.update_layout({axis_name: dict(range=None, autorange=True)})


class ChartState:
    """Axis-limit overrides captured from, or applied to, a figure.

    Attributes:
        xlim: ``(low, high)`` of the X axis, or None if it was auto.
        ylim: ``(low, high)`` of the Y axis, or None if it was auto.
    """

    def __init__(self, xlim: tuple | None = None, ylim: tuple | None = None):
        self.xlim = tuple(xlim) if xlim is not None else None
        self.ylim = tuple(ylim) if ylim is not None else None

    def __eq__(self, other) -> bool:
        if not isinstance(other, ChartState):
            return NotImplemented
        return self.xlim == other.xlim and self.ylim == other.ylim

    def __repr__(self) -> str:
        return f"ChartState(xlim={self.xlim!r}, ylim={self.ylim!r})"

    @property
    def is_empty(self) -> bool:
        return self.xlim is None and self.ylim is None

    @classmethod
    def capture(cls, figure: go.Figure) -> ChartState:
        """Record the range of every axis currently in manual mode."""
        limits = {}
        for key, axis_name in _AXES:
            axis = figure.layout[axis_name]
            if is_manual(axis):
                limits[key] = (float(axis.range[0]), float(axis.range[1]))
        return cls(xlim=limits.get("XLim"), ylim=limits.get("YLim"))

    def apply(self, figure: go.Figure) -> None:
        """Pin the recorded axis ranges on *figure*."""
        if self.xlim is not None:
            set_manual_range(figure, "xaxis", self.xlim)
        if self.ylim is not None:
            set_manual_range(figure, "yaxis", self.ylim)

    def to_dict(self) -> dict:
        data = {}
        if self.xlim is not None:
            data["XLim"] = list(self.xlim)
        if self.ylim is not None:
            data["YLim"] = list(self.ylim)
        return data

    @classmethod
    def from_dict(cls, d: dict | None) -> ChartState:
        d = d or {}
        return cls(xlim=d.get("XLim"), ylim=d.get("YLim"))
