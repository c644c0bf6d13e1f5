# passforge/config.py
"""
Simple settings persistence for PassForge.
Settings saved as JSON in <data dir>/config.json, where the data dir is
$PASSFORGE_HOME, %APPDATA%/PassForge (Windows) or ~/.passforge (fallback).
"""

import os
import json
import logging
from typing import Dict, Any, Optional

from .generator import GenerationConfig
from .storage import data_dir, default_accounts_path

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "length": 16,
    "include_uppercase": True,
    "include_lowercase": True,
    "include_numbers": True,
    "include_special": True,
    "exclude_similar": False,
    "memorable_mode": False,
    "accounts_path": None,  # if None, storage.default_accounts_path() is used
    "log_level": "WARNING",
}


def config_path() -> str:
    return os.path.join(data_dir(), "config.json")


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    p = path or config_path()
    if not os.path.exists(p):
        return DEFAULTS.copy()
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("ignoring unreadable settings file %s: %s", p, e)
        return DEFAULTS.copy()
    # merge defaults
    out = DEFAULTS.copy()
    out.update(data or {})
    return out


def save_config(cfg: Dict[str, Any], path: Optional[str] = None) -> None:
    p = path or config_path()
    os.makedirs(os.path.dirname(p) or ".", exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        json.dump(cfg, f, ensure_ascii=False, indent=2)


def default_generation_config(cfg: Optional[Dict[str, Any]] = None) -> GenerationConfig:
    """GenerationConfig built from the generator keys of a settings dict."""
    cfg = cfg if cfg is not None else load_config()
    return GenerationConfig.from_dict(cfg)


def accounts_path(cfg: Optional[Dict[str, Any]] = None) -> str:
    cfg = cfg if cfg is not None else load_config()
    return cfg.get("accounts_path") or default_accounts_path()
