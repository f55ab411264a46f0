import json
import logging
import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger("bullet-chart")

# User config — loaded from ~/.bullet-chart/config.json (primary)
# or project-root config.json (fallback).
CONFIG_PATH = Path.home() / ".bullet-chart" / "config.json"
_LOCAL_CONFIG_PATH = Path(__file__).resolve().parent / "config.json"
_user_config: dict = {}


def _load_config() -> dict:
    # Project-local config.json as base, user home config overlaid on top
    merged: dict = {}
    for path in (_LOCAL_CONFIG_PATH, CONFIG_PATH):
        if path is not None and path.exists():
            try:
                with open(path, "r", encoding="utf-8") as f:
                    merged.update(json.load(f))
            except (json.JSONDecodeError, OSError) as e:
                logger.warning(f"Ignoring unreadable config file {path}: {e}")
    return merged


def get(key: str, default=None):
    """Get a config value by dot-separated key. E.g. get('chart.width', 400)"""
    keys = key.split(".")
    val = _user_config
    for k in keys:
        if isinstance(val, dict):
            val = val.get(k)
        else:
            return default
    return val if val is not None else default


_user_config = _load_config()


# ---- Data directory -----------------------------------------------------------
# Base directory for logs and saved charts.
# Priority: BULLET_CHART_DIR env var > "data_dir" config key > ~/.bullet-chart

_data_dir: Optional[Path] = None


def get_data_dir() -> Path:
    """Return the resolved base data directory.

    Resolution order:
    1. ``BULLET_CHART_DIR`` environment variable (highest — useful for CI/Docker)
    2. ``"data_dir"`` key in config.json
    3. ``~/.bullet-chart`` (default)
    """
    global _data_dir
    if _data_dir is not None:
        return _data_dir
    env_val = os.environ.get("BULLET_CHART_DIR")
    if env_val:
        _data_dir = Path(env_val).expanduser().resolve()
    else:
        configured = get("data_dir")
        if configured:
            _data_dir = Path(configured).expanduser().resolve()
        else:
            _data_dir = Path.home() / ".bullet-chart"
    return _data_dir


def _reset_data_dir() -> None:
    """Reset the cached data directory (for testing only)."""
    global _data_dir
    _data_dir = None


# ---- Chart defaults -----------------------------------------------------------
# Read when a chart is constructed, so tests can patch config.get.

def get_chart_defaults() -> dict:
    """Return the default property values for a new chart."""
    return {
        "Colormap": get("colormap", "Viridis"),
        "FaceColor": get("face_color", "black"),
        "Orientation": get("orientation", "vertical"),
    }


def get_canvas_size() -> tuple[int, int]:
    """Return the default (width, height) in px of a chart's own figure."""
    return int(get("width", 400)), int(get("height", 500))
