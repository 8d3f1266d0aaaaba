import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_PATH = Path("config/app.yaml")

DEFAULTS: Dict[str, Any] = {
    "api": {"base_url": "http://localhost:8000", "timeout_seconds": 30},
    "event": {"date": "2025-12-13", "title": "13th December 2025 Flood Relief"},
    "logging": {"level": "INFO"},
}


def _merge(base: dict, override: dict) -> dict:
    out = dict(base)
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def load_config(path: Optional[Path] = None) -> dict:
    """Read config/app.yaml (or $RELIEF_CONFIG) over the defaults, then apply env overrides."""
    if path is None:
        path = Path(os.getenv("RELIEF_CONFIG") or CONFIG_PATH)
    raw = {}
    if path.exists():
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    cfg = _merge(copy.deepcopy(DEFAULTS), raw)

    if os.getenv("RELIEF_API_BASE_URL"):
        cfg["api"]["base_url"] = os.environ["RELIEF_API_BASE_URL"]
    if os.getenv("RELIEF_API_TIMEOUT"):
        cfg["api"]["timeout_seconds"] = float(os.environ["RELIEF_API_TIMEOUT"])
    if os.getenv("RELIEF_LOG_LEVEL"):
        cfg["logging"]["level"] = os.environ["RELIEF_LOG_LEVEL"]
    return cfg


def configure_logging(cfg: Optional[dict] = None) -> None:
    cfg = cfg or load_config()
    level = str(cfg["logging"].get("level", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
