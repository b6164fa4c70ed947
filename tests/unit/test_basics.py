import csv
import io
from datetime import date
from pathlib import Path

import pytest
from rich.console import Console
from typer.testing import CliRunner

from roster import config
from roster import main as cli
from roster.domain.models import Record
from roster.domain.sorting import SortKey
from roster.reporter import build_table, render_view
from roster.sources import HttpRecordSource, MemoryRecordSource, available_sources, build_source
from roster.view_state import PageState, ViewSnapshot
from scripts import generate_data


def _snapshot(**overrides) -> ViewSnapshot:
    values = dict(
        records=(Record(id="1", name="Mila", birth_date="2015-06-15"),),
        total_count=25,
        current_page=2,
        pages=(1, 2, 3),
        loading=False,
        state=PageState.LOADED_OK,
        filter_text="",
        name_ascending=True,
        birth_date_ascending=True,
        sort_key=SortKey.NAME,
        error=None,
    )
    values.update(overrides)
    return ViewSnapshot(**values)


def _render(snapshot: ViewSnapshot, today: date | None = None) -> str:
    console = Console(file=io.StringIO(), record=True, width=120)
    if today is None:
        render_view(snapshot, console)
    else:
        console.print(build_table(snapshot, today=today))
    return console.export_text()


def test_get_settings_defaults():
    settings = config.Settings()
    assert settings.children_per_page == 10
    assert settings.source in ("http", "postgres", "memory")
    assert settings.api_children_path
    assert settings.db_port == 5432


def test_settings_reject_non_positive_page_size():
    with pytest.raises(ValueError):
        config.Settings(children_per_page=0)


def test_available_sources_contains_known_entries():
    names = available_sources()
    assert names == ["http", "memory", "postgres"]


def test_build_source_resolves_and_rejects():
    assert isinstance(build_source("memory"), MemoryRecordSource)
    assert isinstance(build_source("http"), HttpRecordSource)
    with pytest.raises(ValueError, match="Unknown source"):
        build_source("ftp")


def test_table_computes_age_for_render_date():
    text = _render(_snapshot(), today=date(2024, 6, 14))
    assert "2015-06-15" in text
    assert "Name ▲" in text
    row = next(line for line in text.splitlines() if "Mila" in line)
    assert " 8 " in row


def test_table_marks_birth_date_direction():
    text = _render(_snapshot(sort_key=SortKey.BIRTH_DATE, birth_date_ascending=False))
    assert "Birth date ▼" in text


def test_render_view_shows_error_and_loading_banner():
    text = _render(_snapshot(error="Error loading children for page 2: boom", loading=True))
    assert "boom" in text
    assert "Loading" in text
    assert "Mila" not in text


def test_render_view_handles_empty_page():
    assert "No children to display" in _render(_snapshot(records=()))


@pytest.fixture
def runner(monkeypatch) -> CliRunner:
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: None)
    return CliRunner()


def test_cli_browse_memory_source(runner: CliRunner):
    result = runner.invoke(
        cli.app, ["browse", "--source", "memory", "--sort", "birthdate", "--filter", "MILA"]
    )
    assert result.exit_code == 0, result.output
    assert "Mila Berger" in result.output
    assert "Emma Wagner" not in result.output


def test_cli_cancel_memory_source(runner: CliRunner):
    result = runner.invoke(cli.app, ["cancel", "3", "--source", "memory"])
    assert result.exit_code == 0, result.output
    assert "Children (11 registered)" in result.output
    assert "Emma Wagner" not in result.output


def test_cli_cancel_unknown_child_fails(runner: CliRunner):
    result = runner.invoke(cli.app, ["cancel", "999", "--source", "memory"])
    assert result.exit_code == 1
    assert "999" in result.output


def test_cli_unknown_source_is_rejected(runner: CliRunner):
    result = runner.invoke(cli.app, ["browse", "--source", "ftp"])
    assert result.exit_code != 0


def test_generate_data_writes_csv(tmp_path: Path):
    csv_path = tmp_path / "children.csv"
    generate_data._generate_rows_csv(csv_path, rows=5, seed=123, today=date(2024, 6, 1))
    with csv_path.open("r", newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    # header + 5 rows = 6 lines
    assert len(rows) == 6
    assert rows[0] == ["name", "birth_date"]
    for name, born in rows[1:]:
        assert name
        assert date.fromisoformat(born) <= date(2024, 6, 1)


def test_generate_data_is_deterministic(tmp_path: Path):
    first, second = tmp_path / "a.csv", tmp_path / "b.csv"
    generate_data._generate_rows_csv(first, rows=20, seed=7, today=date(2024, 6, 1))
    generate_data._generate_rows_csv(second, rows=20, seed=7, today=date(2024, 6, 1))
    assert first.read_text(encoding="utf-8") == second.read_text(encoding="utf-8")
