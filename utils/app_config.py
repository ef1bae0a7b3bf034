"""Pre-session bootstrap configuration. Zero imports from the rest of the app
except constants.

Stores settings that must be known before the API client exists (backend
environment, session file location). Config lives in ~/.finance_tracker/config.json.
"""
import json
import os
from pathlib import Path

from utils.constants import API_URLS, CONFIG_DIR_NAME, DEFAULT_ENVIRONMENT, SESSION_FILE

CONFIG_DIR = Path.home() / CONFIG_DIR_NAME
CONFIG_FILE = CONFIG_DIR / "config.json"


def load_config(path: Path | None = None) -> dict:
    """Returns {} on missing or corrupt file; never raises."""
    try:
        with open(path or CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(config: dict, path: Path | None = None) -> None:
    """Creates the config folder if needed; atomic write via .tmp + os.replace()."""
    target = Path(path or CONFIG_FILE)
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp = target.with_suffix(".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        os.replace(tmp, target)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise


def get_environment(config: dict | None = None) -> str:
    """Return 'production' or 'development'; unknown values fall back to the default."""
    env = (config if config is not None else load_config()).get("environment")
    return env if env in API_URLS else DEFAULT_ENVIRONMENT


def set_environment(env: str) -> None:
    if env not in API_URLS:
        raise ValueError(
            f"Unknown environment '{env}'. Must be one of: {', '.join(API_URLS)}."
        )
    config = load_config()
    config["environment"] = env
    save_config(config)


def get_api_base_url(config: dict | None = None) -> str:
    return API_URLS[get_environment(config)]


def get_session_file(config: dict | None = None) -> Path:
    """Return config["session_file"] or the default file next to config.json."""
    custom = (config if config is not None else load_config()).get("session_file")
    return Path(custom) if custom else CONFIG_DIR / SESSION_FILE
