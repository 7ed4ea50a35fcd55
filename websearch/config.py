import json
import os

from .errors import ConfigError
from .settings import CONFIG_KEYS, DEFAULT_CONFIG_FILE, ENV_ACTION, ENV_ENGINE


def resolve_config_path(config_file):
    if config_file:
        return os.path.expanduser(config_file)

    candidate = os.path.join(os.getcwd(), DEFAULT_CONFIG_FILE)
    if os.path.exists(candidate):
        return candidate
    return None


def load_defaults(config_file=None):
    """Return option defaults from the JSON config file and the environment."""
    defaults = {}

    path = resolve_config_path(config_file)
    if path:
        try:
            with open(path, "r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigError(f"Failed to read config file '{path}': {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Config file '{path}' must contain a JSON object.")
        unknown = sorted(set(data) - set(CONFIG_KEYS))
        if unknown:
            raise ConfigError(
                f"Unknown key(s) in config file '{path}': {', '.join(unknown)}"
            )
        defaults.update(data)

    engine = os.environ.get(ENV_ENGINE)
    if engine:
        defaults["engine"] = engine
    action = os.environ.get(ENV_ACTION)
    if action:
        defaults["action"] = action

    return defaults
