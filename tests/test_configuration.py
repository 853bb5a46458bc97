import sys
from pathlib import Path

import pytest
from yaml import safe_dump, safe_load

from stint import configuration
from stint.initialize import initialize

# `stint` re-exports the `initialize` function, which shadows the submodule
# for dotted-string monkeypatch targets, so patch the module object directly.
initialize_module = sys.modules["stint.initialize"]
from stint.repository.configuration import ConfigurationRepository
from stint.repository.lock import release_entries_lock
from stint.view.state import get_show_header, set_show_header


def test_missing_config_file_gives_defaults(isolated_config) -> None:
    assert isolated_config.get_config() == configuration.get_default_configuration()


def test_missing_keys_are_filled_with_defaults(isolated_config) -> None:
    configuration.APP_CONFIG_PATH.parent.mkdir(parents=True)
    configuration.APP_CONFIG_PATH.write_text(safe_dump({"show_header": False}))

    config = isolated_config.get_config()

    assert config["show_header"] is False
    assert config["log_ascending"] is False
    assert config["lock_entries_file"] is True
    assert config["log_level"] == "WARNING"


def test_update_config_flushes_to_disk(isolated_config) -> None:
    isolated_config.update_config(log_ascending=True, data_path="/tmp/stint-data")
    assert isolated_config.flush() is True

    stored = safe_load(configuration.APP_CONFIG_PATH.read_text())
    assert stored["log_ascending"] is True
    assert stored["data_path"] == "/tmp/stint-data"

    isolated_config.update_config(remove_data_path=True)
    assert ConfigurationRepository().get_config()["data_path"] == "/tmp/stint-data"
    isolated_config.flush()
    assert ConfigurationRepository().get_config()["data_path"] is None


def test_update_config_rejects_unknown_log_level(isolated_config) -> None:
    with pytest.raises(ValueError):
        isolated_config.update_config(log_level="loud")


def test_data_path_setting_relocates_entries(isolated_config, tmp_path: Path) -> None:
    relocated = tmp_path / "relocated"
    configuration.APP_CONFIG_PATH.parent.mkdir(parents=True)
    configuration.APP_CONFIG_PATH.write_text(safe_dump({"data_path": str(relocated)}))

    configuration.load_data_path_configuration()

    assert configuration.DATA_PATH == relocated
    assert configuration.DATA_ENTRIES_PATH == relocated / "entries.yaml"
    assert configuration.DATA_LOCK_PATH == relocated / "entries.lock"


def test_initialize_creates_config_and_data_dirs(
    isolated_config, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(initialize_module, "CONFIGURATION_REPO", isolated_config)
    log_levels: list[str] = []
    monkeypatch.setattr(initialize_module, "configure_logging", log_levels.append)
    configuration.APP_CONFIG_PATH.parent.mkdir(parents=True)
    configuration.APP_CONFIG_PATH.write_text(
        safe_dump({"show_header": False, "lock_entries_file": False})
    )

    try:
        initialize()
        assert configuration.DATA_PATH.is_dir()
        assert get_show_header() is False
        assert log_levels == ["WARNING"]
    finally:
        release_entries_lock()
        set_show_header(True)


def test_initialize_writes_default_config(
    isolated_config, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(initialize_module, "CONFIGURATION_REPO", isolated_config)
    log_levels: list[str] = []
    monkeypatch.setattr(initialize_module, "configure_logging", log_levels.append)

    try:
        initialize()
        stored = safe_load(configuration.APP_CONFIG_PATH.read_text())
        assert stored == dict(configuration.get_default_configuration())
        assert configuration.DATA_PATH.is_dir()
    finally:
        release_entries_lock()


def test_hand_edited_bad_log_level_is_a_configuration_error(isolated_config) -> None:
    configuration.APP_CONFIG_PATH.parent.mkdir(parents=True)
    configuration.APP_CONFIG_PATH.write_text(safe_dump({"log_level": "loud"}))

    with pytest.raises(configuration.ConfigurationError, match="loud"):
        isolated_config.get_config()


def test_lowercase_log_level_is_accepted(isolated_config) -> None:
    configuration.APP_CONFIG_PATH.parent.mkdir(parents=True)
    configuration.APP_CONFIG_PATH.write_text(safe_dump({"log_level": "debug"}))

    assert isolated_config.get_config()["log_level"] == "DEBUG"


@pytest.mark.parametrize("text", ["show_header: [unclosed\n", "- just\n- a list\n"])
def test_corrupt_config_file_is_a_configuration_error(
    isolated_config, text: str
) -> None:
    configuration.APP_CONFIG_PATH.parent.mkdir(parents=True)
    configuration.APP_CONFIG_PATH.write_text(text)

    with pytest.raises(configuration.ConfigurationError):
        configuration.load_data_path_configuration()
    with pytest.raises(configuration.ConfigurationError):
        isolated_config.get_config()


def test_initialize_refuses_a_bad_log_level(
    isolated_config, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(initialize_module, "CONFIGURATION_REPO", isolated_config)
    monkeypatch.setattr(initialize_module, "configure_logging", lambda level: None)
    configuration.APP_CONFIG_PATH.parent.mkdir(parents=True)
    configuration.APP_CONFIG_PATH.write_text(
        safe_dump({"log_level": "loud", "lock_entries_file": False})
    )

    with pytest.raises(configuration.ConfigurationError):
        initialize()
