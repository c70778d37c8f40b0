from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from .data_model import LineChartStyle

log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".linechart_style.json"


def config_path() -> Path:
    """
    Resolution order:
    1) LINECHART_CONFIG env var
    2) ~/.linechart_style.json
    """
    env = os.environ.get("LINECHART_CONFIG", "").strip()
    if env:
        return Path(env).expanduser()
    return DEFAULT_CONFIG_PATH


def load_style(path: Optional[Path] = None) -> LineChartStyle:
    path = Path(path) if path is not None else config_path()
    if not path.exists():
        return LineChartStyle()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("style config must be a JSON object")
        return LineChartStyle.from_dict(data)
    except (OSError, ValueError, TypeError, AttributeError) as e:
        # A bad config file should not stop the chart from drawing.
        log.warning("ignoring style config %s: %s", path, e)
        return LineChartStyle()


def save_style(style: LineChartStyle, path: Optional[Path] = None) -> Path:
    path = Path(path) if path is not None else config_path()
    path.write_text(json.dumps(style.to_dict(), indent=2), encoding="utf-8")
    return path


def configure_logging(level: Optional[str] = None) -> None:
    level = (level or os.environ.get("LINECHART_LOG_LEVEL", "") or "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
