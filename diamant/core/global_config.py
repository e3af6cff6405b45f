# diamant/core/global_config.py

import os
from pathlib import Path
from typing import Optional, Any
import yaml

BUNDLED_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates" / "components"

def get_global_dir() -> Path:
    """~/.diamant, or $DIAMANT_HOME when set."""
    if env_home := os.getenv("DIAMANT_HOME"):
        return Path(env_home)
    return Path.home() / ".diamant"


def load_global_config() -> Optional[dict]:
    """Load config from ~/.diamant/config.yaml"""
    config_path = get_global_dir() / "config.yaml"

    if not config_path.exists():
        return None

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError):
        return None
    return data if isinstance(data, dict) else None


def get_templates_dir() -> Path:
    """
    Get the component templates directory from:
    1. Environment variable DIAMANT_TEMPLATES_DIR
    2. Global config ~/.diamant/config.yaml (templates.dir)
    3. Templates bundled with the package
    """

    # 1. Env var (highest priority)
    if env_dir := os.getenv("DIAMANT_TEMPLATES_DIR"):
        return Path(env_dir)

    # 2. Global config
    config = load_global_config()
    templates = config.get("templates") if config else None
    if isinstance(templates, dict) and templates.get("dir"):
        return Path(templates["dir"]).expanduser()

    # 3. Default
    return BUNDLED_TEMPLATES_DIR


def get_package_manager() -> Optional[str]:
    """Package manager forced by DIAMANT_PACKAGE_MANAGER or the global config."""
    if env_pm := os.getenv("DIAMANT_PACKAGE_MANAGER"):
        return env_pm

    config = load_global_config()
    if config and config.get("package_manager"):
        return str(config["package_manager"])
    return None


def set_global(key: str, value: Any):
    """Set global configuration key in ~/.diamant/config.yaml"""
    config_path = get_global_dir() / "config.yaml"
    config_path.parent.mkdir(parents=True, exist_ok=True)

    config = load_global_config() or {}
    config[key] = value

    config_path.write_text(yaml.dump(config, default_flow_style=False), encoding="utf-8")
