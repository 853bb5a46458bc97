import pytest

from stint.service.entry import start_entry, stop_current_entry
from stint.template.entry import get_entry_template
from stint.view.view.util import format_entry, format_tags, render_entry_duration
from stint.view.view.views.entry import entries_view, no_entry_view, single_entry_view


def test_format_entry_shows_project_description_and_tags() -> None:
    entry = get_entry_template("acme", "design review", ["urgent", "client"])

    assert format_entry(entry) == "acme: design review [urgent, client]"


def test_format_entry_with_nothing_set() -> None:
    assert format_entry(get_entry_template()) == ":  []"


def test_format_tags() -> None:
    assert format_tags(None) == ""
    assert format_tags([]) == ""
    assert format_tags(["a", "a"]) == "a, a"


def test_render_entry_duration_for_long_entries(clock) -> None:
    entry = get_entry_template()
    clock.advance(hours=26, minutes=3, seconds=9)

    assert render_entry_duration(entry) == "26:03:09"


def test_single_entry_view(clock, capsys: pytest.CaptureFixture[str]) -> None:
    entry = get_entry_template("acme", "design review", ["urgent"])

    single_entry_view("status", entry, now=clock.now.add(minutes=5))

    out = capsys.readouterr().out
    assert "acme" in out
    assert "design review" in out
    assert "urgent" in out
    assert "0:05:00" in out


def test_entries_view_groups_by_day(
    entry_list, clock, capsys: pytest.CaptureFixture[str]
) -> None:
    start_entry(entry_list, "first day")
    stop_current_entry(entry_list)
    clock.advance(days=2)
    start_entry(entry_list, "third day")

    entries_view("log", list(entry_list["entries"].values()), now=clock.now)

    out = capsys.readouterr().out
    assert "first day" in out
    assert "third day" in out
    assert out.count("2024-03-") == 2


def test_no_entry_view(capsys: pytest.CaptureFixture[str]) -> None:
    no_entry_view("No entry is running")

    assert "No entry is running" in capsys.readouterr().out
