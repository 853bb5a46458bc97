# SPDX-License-Identifier: MIT

import os
from pathlib import Path
from typing import Any, Optional, TypedDict

from yaml import YAMLError, load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "stint"
CONFIG_DIR_ENV_VAR = "STINT_CONFIG_DIR"

CONFIG_PATH = Path(
    os.environ.get(CONFIG_DIR_ENV_VAR) or platformdirs.user_config_path(APP_NAME)
)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_ENTRIES_PATH: Path = DATA_PATH / "entries.yaml"
DATA_LOCK_PATH: Path = DATA_PATH / "entries.lock"


class ConfigurationError(Exception):
    """Raised when the config file cannot be read or holds bad settings."""


class Configuration(TypedDict):
    data_path: Optional[str]
    show_header: bool
    log_ascending: bool
    lock_entries_file: bool
    log_level: str


def get_default_configuration() -> Configuration:
    return {
        "data_path": None,
        "show_header": True,
        "log_ascending": False,
        "lock_entries_file": True,
        "log_level": "WARNING",
    }


def set_data_path(data_path: Path) -> None:
    global DATA_PATH, DATA_ENTRIES_PATH, DATA_LOCK_PATH

    DATA_PATH = data_path
    DATA_ENTRIES_PATH = DATA_PATH / "entries.yaml"
    DATA_LOCK_PATH = DATA_PATH / "entries.lock"


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before the
    entry list repository is first used.
    """
    config = read_configuration_file()
    if config is None:
        # Config doesn't exist yet, use defaults
        return

    data_path_setting = config.get("data_path")
    if data_path_setting is not None:
        if not isinstance(data_path_setting, str):
            raise ConfigurationError(f"data_path in {APP_CONFIG_PATH} is not a string")
        set_data_path(Path(data_path_setting).expanduser())


def read_configuration_file() -> Optional[dict[str, Any]]:
    """Read the raw settings from the config file, or None if there are none."""
    if not APP_CONFIG_PATH.is_file():
        return None

    try:
        raw_config = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    except OSError as e:
        raise ConfigurationError(f"could not read {APP_CONFIG_PATH}: {e}") from e
    except YAMLError as e:
        raise ConfigurationError(f"{APP_CONFIG_PATH} is not valid YAML: {e}") from e

    if raw_config is None:
        return None
    if not isinstance(raw_config, dict):
        raise ConfigurationError(f"{APP_CONFIG_PATH} does not hold a mapping")
    return raw_config
