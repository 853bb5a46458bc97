# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional, cast

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from stint import configuration

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        raw_config = configuration.read_configuration_file()

        # Fill in settings added after the config file was written
        defaults = configuration.get_default_configuration()
        if raw_config is None:
            raw_config = {}
        for key, value in defaults.items():
            if key not in raw_config:
                raw_config[key] = value

        log_level = raw_config["log_level"]
        if not isinstance(log_level, str) or log_level.upper() not in LOG_LEVELS:
            raise configuration.ConfigurationError(
                f"unknown log_level {log_level!r} in {configuration.APP_CONFIG_PATH}"
            )
        raw_config["log_level"] = log_level.upper()

        self._config = cast(configuration.Configuration, raw_config)

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))

    def flush(self) -> bool:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False
            return True
        return False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
        show_header: Optional[bool] = None,
        log_ascending: Optional[bool] = None,
        lock_entries_file: Optional[bool] = None,
        log_level: Optional[str] = None,
    ) -> None:
        self.is_dirty = True

        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None
        if show_header is not None:
            self.config["show_header"] = show_header
        if log_ascending is not None:
            self.config["log_ascending"] = log_ascending
        if lock_entries_file is not None:
            self.config["lock_entries_file"] = lock_entries_file
        if log_level is not None:
            if log_level.upper() not in LOG_LEVELS:
                raise ValueError(f"unknown log level: {log_level}")
            self.config["log_level"] = log_level.upper()


CONFIGURATION_REPO = ConfigurationRepository()
