from pathlib import Path

import pendulum
import pytest

from stint import configuration
from stint.model.entry_list import EntryList
from stint.repository.configuration import ConfigurationRepository
from stint.repository.entry_list import EntryListRepository
from stint.template.entry_list import get_entry_list_template


class FakeClock:
    """Stands in for stint.time.now_utc so tests control every timestamp."""

    def __init__(self, start: pendulum.DateTime) -> None:
        self.now = start

    def __call__(self) -> pendulum.DateTime:
        return self.now

    def advance(self, **kwargs: int) -> pendulum.DateTime:
        self.now = self.now.add(**kwargs)
        return self.now


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    fake = FakeClock(pendulum.datetime(2024, 3, 4, 9, 0, 0, tz="UTC"))
    monkeypatch.setattr("stint.template.entry.now_utc", fake)
    monkeypatch.setattr("stint.service.entry.now_utc", fake)
    return fake


@pytest.fixture
def entry_list() -> EntryList:
    return get_entry_list_template()


@pytest.fixture
def entries_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "entries.yaml"


@pytest.fixture
def repository(entries_path: Path) -> EntryListRepository:
    return EntryListRepository(entries_path)


@pytest.fixture
def isolated_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> ConfigurationRepository:
    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"
    monkeypatch.setattr(configuration, "CONFIG_PATH", config_dir)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_dir / "config.yaml")
    monkeypatch.setattr(configuration, "DATA_PATH", data_dir)
    monkeypatch.setattr(configuration, "DATA_ENTRIES_PATH", data_dir / "entries.yaml")
    monkeypatch.setattr(configuration, "DATA_LOCK_PATH", data_dir / "entries.lock")

    config_repo = ConfigurationRepository()
    monkeypatch.setattr("stint.terminal.entry.CONFIGURATION_REPO", config_repo)
    monkeypatch.setattr("stint.terminal.configuration.CONFIGURATION_REPO", config_repo)
    return config_repo


@pytest.fixture
def cli_repository(
    entries_path: Path,
    isolated_config: ConfigurationRepository,
    monkeypatch: pytest.MonkeyPatch,
) -> EntryListRepository:
    repo = EntryListRepository(entries_path)
    monkeypatch.setattr("stint.terminal.entry.ENTRY_LIST_REPO", repo)
    return repo
