import os
from pathlib import Path

import yaml

CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "family_tree_layout.yml"
CONFIG_ENV_VAR = "FAMILY_TREE_LAYOUT_CONFIG"


class FTLConfig:
    def __init__(self, data):
        self.paths = data.get("paths", {}) or {}
        self.layout = data.get("layout", {}) or {}
        self.viewport = data.get("viewport", {}) or {}
        self.logging = data.get("logging", {}) or {}
        self.debug = data.get("debug", False)


def _resolve_config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return CONFIG_PATH


def load_config(path: Path | None = None) -> 'FTLConfig':
    explicit = path is not None or bool(os.environ.get(CONFIG_ENV_VAR))
    config_path = Path(path) if path is not None else _resolve_config_path()

    if not config_path.exists():
        if explicit:
            raise FileNotFoundError(f"Config file not found: {config_path}")
        # Installed without the repo's config/ directory: built-in defaults
        return FTLConfig({})

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return FTLConfig(data)


_config_cache = None


def get_config() -> 'FTLConfig':
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache


def reset_config_cache() -> None:
    """Drop the cached config so the next ``get_config`` re-reads the file."""
    global _config_cache
    _config_cache = None
