"""
Plotly-based bullet chart.

A bullet chart overlays a single actual value on a set of expected-range
bands. ``BulletChart`` owns a ``go.Figure`` whose traces are, in paint order:

    [expected bar * N, actual bar, target line]

Every property write re-runs ``update()``, a full reconciliation pass that
rebuilds trace styling and axis state from the current properties. Expected-bar
traces are only recreated when their count no longer matches ``expected_data``.

Only manual axis limits are persisted separately (see ``state.ChartState``);
all other state is rebuilt from the public properties.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Optional

import numpy as np
import plotly.graph_objects as go

import config
from .arguments import (
    PROPERTY_NAMES,
    canonical_name,
    check_display_names,
    parse_chart_args,
    snake_name,
    validate_actual,
    validate_category,
    validate_display_names,
    validate_expected,
    validate_limits,
    validate_orientation,
    validate_switch,
    validate_target,
    validate_title,
)
from .colormaps import interpolate_colormap, resolve_color, resolve_colormap, to_plotly_color
from .errors import BulletChartError, UnknownPropertyError
from .logging import log_error
from .state import ChartState, is_manual, set_auto_range, set_manual_range

logger = logging.getLogger("bullet-chart")

_EXPECTED_BAR_WIDTH = 0.8
_ACTUAL_BAR_WIDTH = 0.3
_TARGET_HALF_SPAN = 0.25  # half-length of the target line along the category axis
_TARGET_LINE_WIDTH = 5
_TICK_LENGTH = 5
_AUTO_PAD = 0.05  # fraction of the data span added to auto limits

# Explicit layout defaults for a white, boxed axes area
_DEFAULT_LAYOUT = dict(
    template="plotly_white",
    paper_bgcolor="white",
    plot_bgcolor="white",
    font_color="#2a3f5f",
    barmode="overlay",
    showlegend=False,
)

_BOX_AXIS = dict(showline=True, mirror=True, linecolor="black", zeroline=False)

_EXPORT_FORMATS = ("png", "pdf", "svg", "html")


def _validate_property(name: str, value):
    if name == "ExpectedData":
        return validate_expected(value)
    if name == "ActualData":
        return validate_actual(value)
    if name == "TargetData":
        return validate_target(value)
    if name == "Category":
        return validate_category(value)
    if name == "Colormap":
        return resolve_colormap(value)
    if name == "FaceColor":
        return resolve_color(value)
    if name == "Orientation":
        return validate_orientation(value)
    if name == "Title":
        return validate_title(value)
    if name == "LegendDisplayName":
        return validate_display_names(value)
    if name in ("Grid", "LegendVisible", "TargetLineVisible"):
        return validate_switch(value, name)
    if name == "Limits":
        return validate_limits(value)
    raise UnknownPropertyError(f"Unrecognized property '{name}'.")


def _chart_property(name: str, doc: str) -> property:
    """Build a public property that validates, stores and reconciles on write."""
    attr = "_" + snake_name(name)

    def fget(self):
        value = getattr(self, attr)
        if isinstance(value, (np.ndarray, list)):
            return value.copy()
        return value

    def fset(self, value):
        self.set(name, value)

    return property(fget, fset, doc=doc)


def _json_number(value: float):
    return None if math.isnan(value) else value


class BulletChart:
    """Bullet chart of expected-range bars with an overlaid actual-value bar.

    Construction forms::

        BulletChart(expected, actual)
        BulletChart(expected, actual, category)
        BulletChart(..., "Name", value, ...)
        BulletChart(parent_figure, ...)
        BulletChart(..., Name=value)

    ``expected`` values are drawn largest-index-first so that, given values in
    ascending order (e.g. poor/satisfactory/good thresholds), no band hides a
    smaller one. The actual bar and the target line always paint on top.
    """

    expected_data = _chart_property("ExpectedData", "Expected-range values, one bar each.")
    actual_data = _chart_property("ActualData", "The single actual value.")
    target_data = _chart_property("TargetData", "Value marked by the target line.")
    category = _chart_property("Category", "Label shown on the category axis.")
    colormap = _chart_property("Colormap", "P-by-3 palette the expected-bar colors are interpolated from.")
    grid = _chart_property("Grid", "Gridlines on the numeric axis.")
    face_color = _chart_property("FaceColor", "Color of the actual bar as an RGB triple.")
    orientation = _chart_property("Orientation", "'horizontal' or 'vertical'.")
    title = _chart_property("Title", "Chart title.")
    legend_display_name = _chart_property("LegendDisplayName", "Legend names, one per expected bar.")
    legend_visible = _chart_property("LegendVisible", "Show a legend of the expected bars.")
    target_line_visible = _chart_property("TargetLineVisible", "Show the target line.")

    def __init__(self, *args, **kwargs):
        parent, properties = parse_chart_args(*args, **kwargs)
        self._initialize(parent, properties, loaded_state=None)

    def _initialize(self, parent: Optional[go.Figure], properties: dict,
                    loaded_state: Optional[ChartState]) -> None:
        defaults = config.get_chart_defaults()
        self._figure: go.Figure = parent if parent is not None else go.Figure()
        self._expected_data = np.array([np.nan])
        self._actual_data = math.nan
        self._target_data = math.nan
        self._category = ""
        self._colormap = resolve_colormap(defaults["Colormap"])
        self._grid = True
        self._face_color = resolve_color(defaults["FaceColor"])
        self._orientation = validate_orientation(defaults["Orientation"])
        self._title = ""
        self._legend_display_name: list[str] = []
        self._legend_visible = False
        self._target_line_visible = False
        # Present after deserialization until the limits are next changed
        self._loaded_state = loaded_state

        validated = self._validate_all(list(properties.items()))
        limits = None
        for name, value in validated:
            if name == "Limits":
                limits = value
            else:
                setattr(self, "_" + snake_name(name), value)

        self._setup(own_figure=parent is None)
        if limits is not None:
            set_manual_range(self._figure, self._numeric_axis_name, limits)
            self._loaded_state = None
        self.update()

    # ------------------------------------------------------------------
    # Property access
    # ------------------------------------------------------------------

    def _validate_all(self, pairs: list) -> list:
        """Validate every (name, value) pair before any of them is stored."""
        validated = []
        for name, value in pairs:
            try:
                validated.append((name, _validate_property(name, value)))
            except BulletChartError as e:
                logger.debug(f"Rejected {name}={value!r}: {e}")
                raise
        return validated

    def set(self, *args, **kwargs) -> None:
        """Set one or more properties, then run one reconciliation pass.

        Accepts name/value pairs positionally (``chart.set("Grid", "off")``)
        and/or as keywords (``chart.set(Grid=False, Title="Q3")``). All values
        are validated before any is applied.
        """
        if len(args) % 2 == 1:
            raise UnknownPropertyError("Property names and values must come in pairs.")
        pairs = [(canonical_name(args[i]), args[i + 1]) for i in range(0, len(args), 2)]
        pairs += [(canonical_name(k), v) for k, v in kwargs.items()]
        validated = self._validate_all(pairs)

        limits = None
        for name, value in validated:
            if name == "Limits":
                limits = value
            elif name == "Orientation":
                self._switch_orientation(value)
            else:
                setattr(self, "_" + snake_name(name), value)

        # Limits apply to whichever axis is numeric after any orientation change
        if limits is not None:
            set_manual_range(self._figure, self._numeric_axis_name, limits)
            self._loaded_state = None
        self.update()

    def get(self, name: str):
        """Return a property value by its PascalCase or snake_case name."""
        return getattr(self, snake_name(canonical_name(name)))

    def _property_values(self) -> dict:
        """JSON-friendly snapshot of every stored property."""
        return {
            "ExpectedData": [_json_number(float(v)) for v in self._expected_data],
            "ActualData": _json_number(self._actual_data),
            "TargetData": _json_number(self._target_data),
            "Category": self._category,
            "Colormap": self._colormap.tolist(),
            "Grid": self._grid,
            "FaceColor": list(self._face_color),
            "Orientation": self._orientation,
            "Title": self._title,
            "LegendDisplayName": list(self._legend_display_name),
            "LegendVisible": self._legend_visible,
            "TargetLineVisible": self._target_line_visible,
        }

    @property
    def figure(self) -> go.Figure:
        """The underlying Plotly figure."""
        return self._figure

    def __repr__(self) -> str:
        return (
            f"BulletChart(expected_data={self._expected_data.tolist()!r}, "
            f"actual_data={self._actual_data!r}, orientation={self._orientation!r})"
        )

    # ------------------------------------------------------------------
    # Traces
    # ------------------------------------------------------------------

    @property
    def _expected_bars(self) -> tuple:
        return self._figure.data[:-2]

    @property
    def _actual_bar(self) -> go.Bar:
        return self._figure.data[-2]

    @property
    def _target_line(self) -> go.Scatter:
        return self._figure.data[-1]

    @property
    def num_expected_bars(self) -> int:
        return len(self._expected_bars)

    def _setup(self, own_figure: bool) -> None:
        """Create the actual bar and target line, then apply any loaded state."""
        fig = self._figure
        if fig.data:
            logger.debug(f"Replacing {len(fig.data)} existing trace(s) on parent figure")
        fig.data = ()
        # Ranges pinned on a parent figure are not the chart's limits
        set_auto_range(fig, "xaxis")
        set_auto_range(fig, "yaxis")

        fig.update_layout(**_DEFAULT_LAYOUT, xaxis=_BOX_AXIS, yaxis=_BOX_AXIS)
        if own_figure:
            width, height = config.get_canvas_size()
            fig.update_layout(width=width, height=height)

        fig.add_trace(go.Bar(
            x=[0], y=[np.nan],
            width=_ACTUAL_BAR_WIDTH,
            marker=dict(color=to_plotly_color(self._face_color), line=dict(width=0)),
            name="Actual",
            showlegend=False,
        ))
        fig.add_trace(go.Scatter(
            x=[np.nan, np.nan], y=[np.nan, np.nan],
            mode="lines",
            line=dict(color="black", width=_TARGET_LINE_WIDTH),
            name="Target",
            visible=False,
            showlegend=False,
        ))

        self._load_state()

    def _initialize_bars(self, num_bars: int) -> None:
        """Replace all expected-bar traces with *num_bars* fresh ones."""
        fig = self._figure
        logger.debug(f"Recreating expected bars: {self.num_expected_bars} -> {num_bars}")

        # Drop the old expected bars, keeping the actual bar and target line
        fig.data = fig.data[-2:]
        if num_bars:
            fig.add_traces([
                go.Bar(x=[0], y=[np.nan], width=_EXPECTED_BAR_WIDTH,
                       marker=dict(line=dict(width=0)), showlegend=True)
                for _ in range(num_bars)
            ])
        # The actual bar and target line have to paint last (in front)
        fig.data = fig.data[2:] + fig.data[:2]

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    def update(self) -> None:
        """Rebuild every trace and axis setting from the current properties."""
        fig = self._figure
        num_bars = int(self._expected_data.size)

        if self.num_expected_bars != num_bars:
            self._initialize_bars(num_bars)

        cmap = interpolate_colormap(self._colormap, num_bars)

        # Largest index first so the smaller bands are not covered
        reverse_ordered = self._expected_data[::-1]
        horizontal = self._orientation == "horizontal"
        for i, bar in enumerate(self._expected_bars):
            bar.marker.color = to_plotly_color(cmap[i])
            self._set_bar_value(bar, reverse_ordered[i], horizontal)

        actual = self._actual_bar
        actual.marker.color = to_plotly_color(self._face_color)
        self._actual_data = validate_actual(self._actual_data)
        self._set_bar_value(actual, self._actual_data, horizontal)

        self._update_target_line(horizontal)
        self._update_orientation(horizontal)
        self._update_legend(num_bars)

        fig.update_layout(title_text=self._title)

    @staticmethod
    def _set_bar_value(bar: go.Bar, value: float, horizontal: bool) -> None:
        # Every bar sits at category position 0
        if horizontal:
            bar.update(x=[value], y=[0], orientation="h")
        else:
            bar.update(x=[0], y=[value], orientation="v")

    def _update_target_line(self, horizontal: bool) -> None:
        line = self._target_line
        span = [-_TARGET_HALF_SPAN, _TARGET_HALF_SPAN]
        at = [self._target_data, self._target_data]
        if horizontal:
            line.update(x=at, y=span)
        else:
            line.update(x=span, y=at)
        line.visible = self._target_line_visible

    def _update_orientation(self, horizontal: bool) -> None:
        """Put the numeric scale and the category label on the right axes."""
        if horizontal:
            numeric_axis, category_axis = "xaxis", "yaxis"
        else:
            numeric_axis, category_axis = "yaxis", "xaxis"

        self._figure.update_layout({
            numeric_axis: dict(
                showgrid=self._grid,
                ticks="outside",
                ticklen=_TICK_LENGTH,
                showticklabels=True,
                title=dict(text=""),
            ),
            category_axis: dict(
                showgrid=False,
                ticks="",
                ticklen=0,
                showticklabels=False,
                title=dict(text=self._category),
            ),
        })

    def _update_legend(self, num_bars: int) -> None:
        """Legend entries come from the expected bars only."""
        self._figure.update_layout(showlegend=self._legend_visible)
        names = self._legend_display_name
        if self._legend_visible:
            try:
                check_display_names(names, num_bars)
            except BulletChartError as e:
                logger.debug(f"Legend update failed: {e}")
                raise
        if len(names) != num_bars:
            names = [f"data{i + 1}" for i in range(num_bars)]
        for bar, name in zip(self._expected_bars, names):
            bar.name = name

    # ------------------------------------------------------------------
    # Orientation and limits
    # ------------------------------------------------------------------

    @property
    def _numeric_axis_name(self) -> str:
        return "xaxis" if self._orientation == "horizontal" else "yaxis"

    def _switch_orientation(self, orientation: str) -> None:
        """Change orientation, carrying a pinned numeric range to the new numeric axis."""
        if orientation == self._orientation:
            return
        fig = self._figure
        old_axis = self._numeric_axis_name
        pinned = None
        if is_manual(fig.layout[old_axis]):
            pinned = tuple(fig.layout[old_axis].range)

        logger.debug(f"Orientation {self._orientation} -> {orientation}")
        self._orientation = orientation
        set_auto_range(fig, old_axis)
        if pinned is not None:
            set_manual_range(fig, self._numeric_axis_name, pinned)
        else:
            set_auto_range(fig, self._numeric_axis_name)
        self._loaded_state = None

    @property
    def limits(self) -> tuple[float, float]:
        """Range of the numeric axis (X when horizontal, Y when vertical).

        Setting it pins that axis (manual mode). In auto mode the returned range
        is the one the bars autorange to: zero and all finite data, padded.
        """
        axis = self._figure.layout[self._numeric_axis_name]
        if is_manual(axis):
            return (float(axis.range[0]), float(axis.range[1]))
        return self._auto_limits()

    @limits.setter
    def limits(self, value) -> None:
        self.set("Limits", value)

    @property
    def limits_mode(self) -> str:
        """'manual' if the numeric axis range is pinned, otherwise 'auto'."""
        axis = self._figure.layout[self._numeric_axis_name]
        return "manual" if is_manual(axis) else "auto"

    def reset_limits(self) -> None:
        """Return the numeric axis to automatic range."""
        set_auto_range(self._figure, self._numeric_axis_name)
        self._loaded_state = None
        self.update()

    def _auto_limits(self) -> tuple[float, float]:
        values = list(self._expected_data) + [self._actual_data]
        if self._target_line_visible:
            values.append(self._target_data)
        finite = [v for v in values if np.isfinite(v)]
        if not finite:
            return (0.0, 1.0)
        low, high = min(0.0, min(finite)), max(0.0, max(finite))
        if low == high:
            return (0.0, 1.0)
        span = high - low
        if high > 0:
            high += _AUTO_PAD * span
        if low < 0:
            low -= _AUTO_PAD * span
        return (float(low), float(high))

    # ------------------------------------------------------------------
    # Persisted state
    # ------------------------------------------------------------------

    @property
    def chart_state(self) -> ChartState:
        """State to persist: the loaded state if still current, else a fresh capture."""
        if self._loaded_state is not None:
            return self._loaded_state
        return ChartState.capture(self._figure)

    def capture_state(self) -> ChartState:
        """Capture the manual axis limits now, discarding any loaded state."""
        self._loaded_state = None
        return ChartState.capture(self._figure)

    def _load_state(self) -> None:
        if self._loaded_state is not None:
            self._loaded_state.apply(self._figure)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        """Serialize public properties plus the persisted chart state."""
        return {
            "properties": self._property_values(),
            "chart_state": self.chart_state.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict, parent: Optional[go.Figure] = None) -> BulletChart:
        """Rebuild a chart from a dict produced by to_dict()."""
        properties = {
            canonical_name(name): value
            for name, value in (data.get("properties") or {}).items()
        }
        # NaN is written as null
        for name in ("ActualData", "TargetData"):
            if name in properties and properties[name] is None:
                properties[name] = math.nan
        if isinstance(properties.get("ExpectedData"), list):
            properties["ExpectedData"] = [
                math.nan if v is None else v for v in properties["ExpectedData"]
            ]
        state = ChartState.from_dict(data.get("chart_state"))
        chart = cls.__new__(cls)
        chart._initialize(parent, properties, loaded_state=None if state.is_empty else state)
        return chart

    def save(self, filepath) -> Path:
        """Write the chart to a JSON file and return its resolved path."""
        path = Path(filepath).resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.debug(f"Saved chart to {path}")
        return path

    @classmethod
    def load(cls, filepath, parent: Optional[go.Figure] = None) -> BulletChart:
        """Read a chart written by save()."""
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)
        logger.debug(f"Loaded chart from {filepath}")
        return cls.from_dict(data, parent=parent)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export(self, filepath: str, format: str = "png") -> dict:
        """Export the chart to an image or HTML file.

        Args:
            filepath: Output file path.
            format: 'png' (default), 'pdf', 'svg' or 'html'. Image formats
                need kaleido installed.

        Returns:
            Result dict with status, filepath, and size_bytes.
        """
        if format not in _EXPORT_FORMATS:
            return {"status": "error",
                    "message": f"Unsupported format '{format}'. Use one of {', '.join(_EXPORT_FORMATS)}."}

        filepath = str(filepath)
        # Ensure correct extension
        if not filepath.endswith(f".{format}"):
            filepath += f".{format}"

        filepath = str(Path(filepath).resolve())
        parent = Path(filepath).parent
        if parent and not parent.exists():
            parent.mkdir(parents=True, exist_ok=True)

        logger.debug(f"Exporting {format.upper()} to {filepath}...")
        try:
            if format == "html":
                self._figure.write_html(filepath)
            else:
                self._figure.write_image(filepath, format=format)
        except Exception as e:
            log_error(f"{format.upper()} export failed", exc=e, context={"filepath": filepath})
            return {"status": "error", "message": f"{format.upper()} export failed: {e}"}

        path_obj = Path(filepath)
        if path_obj.exists() and path_obj.stat().st_size > 0:
            return {
                "status": "success",
                "filepath": str(path_obj.resolve()),
                "size_bytes": path_obj.stat().st_size,
            }
        return {"status": "error", "message": f"{format.upper()} file not created or is empty: {filepath}"}


# PascalCase aliases for the name/value spelling (chart.ExpectedData, ...)
for _name in PROPERTY_NAMES:
    setattr(BulletChart, _name, getattr(BulletChart, snake_name(_name)))
