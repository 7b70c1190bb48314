from __future__ import annotations

from dotenv import dotenv_values
import copy
import os
from pathlib import Path
from functools import lru_cache

import yaml

from ecotrace.utils import find_project_root

DEFAULT_CONFIG: dict = {
    "app": {"title": "EcoTrace - Carbon Footprint Simulator", "page_icon": "🌱", "layout": "centered"},
    "ui": {"show_breakdown": True},
    "theme": {"primary": "#2E7D32", "secondary": "#81C784"},
    "logging": {"level": "INFO"},
}


def load_env_once(dotenv_path: str | None = None):
    """
    Load .env without relying on find_dotenv() to avoid assertion errors in -c / REPL contexts.
    Call this early (e.g., in app entrypoint). Existing environment variables win.
    """
    dp = dotenv_path or ".env"
    if not os.environ.get("_ENV_LOADED", ""):
        if Path(dp).exists():
            env = dotenv_values(dp)
            for k, v in env.items():
                if v is not None and k not in os.environ:
                    os.environ[k] = str(v)
        os.environ["_ENV_LOADED"] = "1"


def load_config(config_path: str | Path | None = None) -> dict:
    """Load YAML config with defaults backfilled for any missing section or key."""
    p = Path(config_path) if config_path else find_project_root() / "config" / "config.yaml"
    cfg: dict = {}
    if p.exists():
        with p.open("r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    # backfill minimal keys if cfg is partial
    for section, defaults in DEFAULT_CONFIG.items():
        node = cfg.setdefault(section, {})
        if node is None:
            node = cfg[section] = {}
        for key, value in defaults.items():
            node.setdefault(key, copy.deepcopy(value))
    return cfg


def _truthy(value, default: bool = False) -> bool:
    if value is None:
        return bool(default)
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def env_flag(name: str, default: bool | str = False) -> bool:
    """Return boolean interpretation of an environment flag (loads .env once)."""
    load_env_once()
    val = os.getenv(name)
    if val is None:
        return _truthy(default, default=False)
    return _truthy(val, default=False)


@lru_cache(maxsize=None)
def is_production_env() -> bool:
    """True when ECOTRACE_ENV is 'production'."""
    load_env_once()
    return os.getenv("ECOTRACE_ENV", "").strip().lower() == "production"
