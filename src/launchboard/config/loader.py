import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULT_CONFIG_PATH = Path("launchboard.config.yaml")
BASE_URL_ENV_VAR = "LAUNCHBOARD_BASE_URL"

DEFAULT_CONFIG: Dict[str, Any] = {
    "version": 1,
    "api": {
        "base_url": "https://api.spacexdata.com",
        "timeout_seconds": 30,
        "retries": 0,
        "user_agent": "launchboard/0.1",
    },
    "executor": {
        "max_workers": 4,
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge override into a copy of base, recursing into nested dictionaries."""
    merged = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _validate_config(config: Dict[str, Any]) -> None:
    if "version" not in config:
        raise ValueError("Config must have 'version' field")

    api = config.get("api")
    if not isinstance(api, dict):
        raise ValueError("Config 'api' must be a dictionary")
    if not isinstance(api.get("base_url"), str) or not api["base_url"].strip():
        raise ValueError("Config 'api.base_url' must be a non-empty string")

    retries = api.get("retries")
    if not isinstance(retries, int) or isinstance(retries, bool) or retries < 0:
        raise ValueError("Config 'api.retries' must be a non-negative integer")

    timeout = api.get("timeout_seconds")
    if not isinstance(timeout, (int, float)) or isinstance(timeout, bool) or timeout <= 0:
        raise ValueError("Config 'api.timeout_seconds' must be a positive number")

    executor = config.get("executor")
    if not isinstance(executor, dict):
        raise ValueError("Config 'executor' must be a dictionary")
    max_workers = executor.get("max_workers")
    if not isinstance(max_workers, int) or isinstance(max_workers, bool) or max_workers <= 0:
        raise ValueError("Config 'executor.max_workers' must be a positive integer")


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load launchboard configuration from YAML, layered over built-in defaults.

    Args:
        path: Optional path to a config file. Defaults to launchboard.config.yaml
            in the working directory; if that file is absent, defaults are used.

    Returns:
        Dictionary with 'version', 'api' and 'executor' sections

    Raises:
        FileNotFoundError: If an explicitly given config file doesn't exist
        ValueError: If config structure or values are invalid
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    user_config: Dict[str, Any] = {}

    if cfg_path.exists():
        with cfg_path.open("r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ValueError("Config must be a dictionary")
        if "version" not in loaded:
            raise ValueError("Config must have 'version' field")
        user_config = loaded
    elif path is not None:
        raise FileNotFoundError(f"Config file not found: {cfg_path}")

    config = _deep_merge(DEFAULT_CONFIG, user_config)

    env_base_url = os.environ.get(BASE_URL_ENV_VAR, "").strip()
    if env_base_url:
        config["api"]["base_url"] = env_base_url

    _validate_config(config)
    return config


def get_api_settings(config: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """
    Get the 'api' section of the config.

    Args:
        config: Optional config dict. If None, loads from default path.

    Returns:
        Dictionary with base_url, timeout_seconds, retries and user_agent
    """
    if config is None:
        config = load_config()
    return dict(config["api"])
