"""Shell configuration.

Values resolve with priority: CLI option > environment > config file >
default. The config file is YAML; a missing file is created with defaults on
first load so users have something to edit.
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from pish.core.errors import ConfigError
from pish.core.paths import expand_path

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "~/.config/pish/config.yaml"

# Environment variable -> config field
ENV_OVERRIDES = {
    "PISH_STARTUP_FILE": "startup_file",
    "PISH_HISTORY_FILE": "history_file",
}

DEFAULT_STARTUP_SCRIPT = '''\
# pish startup script
#
# Everything here runs in the shell namespace before the first prompt.
# Every executable on $PATH is already callable by name, e.g.
#
#     ls("-la")
#     git("status")
#
# Builtins: cd, run, source, find, history, drop, get_env, set_env, exit
# Environment variables are bound on `env`, e.g. env.HOME

def ll(*args):
    return run("ls -la", *args)
'''


@dataclass
class ShellConfig:
    """Persistent shell settings.

    Attributes:
        startup_file: Script sourced at launch.
        history_file: Newline-delimited history log.
        prompt: Prompt text written before the edit buffer.
        theme: Console theme name for messages.
    """

    startup_file: str = "~/.pishrc.py"
    history_file: str = "~/.pish_history"
    prompt: str = ">"
    theme: str = "default"

    @property
    def startup_path(self) -> Path:
        return expand_path(self.startup_file)

    @property
    def history_path(self) -> Path:
        return expand_path(self.history_file)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _from_mapping(data: dict[str, Any]) -> ShellConfig:
    known = {f.name for f in fields(ShellConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
    values = {k: str(v) for k, v in data.items() if k in known and v is not None}
    return ShellConfig(**values)


def load_config(path: str | None = None, write_default: bool = True) -> ShellConfig:
    """Load configuration from YAML, creating the file when missing.

    Args:
        path: Config file path. Defaults to PISH_CONFIG or
              ~/.config/pish/config.yaml.
        write_default: Write a default file if none exists.

    Returns:
        Resolved ShellConfig with environment overrides applied.

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping.
    """
    config_path = expand_path(path or os.environ.get("PISH_CONFIG", DEFAULT_CONFIG_PATH))

    if config_path.exists():
        try:
            data = yaml.safe_load(config_path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid config file {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {config_path} must contain a mapping")
        config = _from_mapping(data)
    else:
        config = ShellConfig()
        if write_default:
            try:
                config_path.parent.mkdir(parents=True, exist_ok=True)
                config_path.write_text(yaml.safe_dump(config.to_dict(), sort_keys=False))
                logger.debug("Wrote default config to %s", config_path)
            except OSError as e:
                logger.warning("Could not write default config %s: %s", config_path, e)

    for env_key, field_name in ENV_OVERRIDES.items():
        value = os.environ.get(env_key)
        if value:
            setattr(config, field_name, value)

    return config


def ensure_startup_file(config: ShellConfig) -> Path:
    """Write the default starter script if the startup file does not exist.

    Returns:
        Expanded path of the startup file.
    """
    startup_path = config.startup_path
    if not startup_path.exists():
        startup_path.parent.mkdir(parents=True, exist_ok=True)
        startup_path.write_text(DEFAULT_STARTUP_SCRIPT)
        logger.info("Created startup file %s", startup_path)
    return startup_path
