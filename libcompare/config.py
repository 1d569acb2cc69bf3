#!/usr/bin/env python3
"""
Centralized configuration for libcompare with env var overrides.
- User config file: ~/.config/libcompare/config.json
- Precedence: environment > user config file > built-in defaults
- Types exposed to the app:
  - OUTPUT_DIR: Path
  - EXPORT_FORMAT: str ("csv", "xml" or "both")
  - LOG_LEVEL: str
  - OTHER_SECTION_LABEL: str
The similarity threshold is fixed in libcompare.similarity and is not configurable.
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from rich.console import Console

# Paths
CONFIG_DIR = Path.home() / ".config" / "libcompare"
CONFIG_FILE = CONFIG_DIR / "config.json"

console = Console()

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("csv", "xml", "both")

# Built-in defaults (sane, user-agnostic)
DEFAULTS = {
    "OUTPUT_DIR": str(Path.cwd() / "reports"),
    "EXPORT_FORMAT": "csv",
    "LOG_LEVEL": "WARNING",
    "OTHER_SECTION_LABEL": "Local Only Songs",
}

# Environment variable mapping
ENV_MAP = {
    "OUTPUT_DIR": "LIBCOMPARE_OUTPUT_DIR",
    "EXPORT_FORMAT": "LIBCOMPARE_EXPORT_FORMAT",
    "LOG_LEVEL": "LIBCOMPARE_LOG_LEVEL",
    "OTHER_SECTION_LABEL": "LIBCOMPARE_OTHER_SECTION_LABEL",
}


def _load_user_file() -> Dict[str, Any]:
    # Skip file loading during tests - just return defaults
    if os.environ.get("PYTEST_CURRENT_TEST"):
        return DEFAULTS.copy()

    if not CONFIG_FILE.exists():
        return DEFAULTS.copy()
    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", CONFIG_FILE, e)
        data = {}
    if not isinstance(data, dict):
        data = {}
    # ensure keys exist
    for k, v in DEFAULTS.items():
        data.setdefault(k, v)
    return data


def _apply_env_overrides(cfg: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(cfg)
    for key, env_name in ENV_MAP.items():
        val = os.getenv(env_name)
        if val is None:
            continue
        out[key] = val.strip()
    return out


def _coerce_types(eff: Dict[str, Any]) -> Dict[str, Any]:
    eff["OUTPUT_DIR"] = Path(str(eff["OUTPUT_DIR"])).expanduser()
    fmt = str(eff.get("EXPORT_FORMAT", "")).strip().lower()
    eff["EXPORT_FORMAT"] = fmt if fmt in EXPORT_FORMATS else DEFAULTS["EXPORT_FORMAT"]
    level = str(eff.get("LOG_LEVEL", "")).strip().upper()
    eff["LOG_LEVEL"] = level if isinstance(logging.getLevelName(level), int) else DEFAULTS["LOG_LEVEL"]
    label = str(eff.get("OTHER_SECTION_LABEL") or "").strip()
    eff["OTHER_SECTION_LABEL"] = label or DEFAULTS["OTHER_SECTION_LABEL"]
    return eff


def save_config(data: Dict[str, Any]) -> Path:
    """Persist config values (as plain JSON types) to the user config file."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    serializable = {k: str(v) for k, v in data.items() if k in DEFAULTS}
    with open(CONFIG_FILE, "w", encoding="utf-8") as f:
        json.dump(serializable, f, indent=2)
    return CONFIG_FILE


def load_config() -> Dict[str, Any]:
    """Load effective config: env > file > defaults, coerced to expected types."""
    file_cfg = _load_user_file()
    merged = DEFAULTS | file_cfg
    merged = _apply_env_overrides(merged)
    effective = _coerce_types(merged)
    return effective


# Exposed module-level config used by the CLI
config = load_config()
