from __future__ import annotations

from datetime import date
from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from roster.domain.age import age
from roster.domain.sorting import SortKey
from roster.view_state import PageState, ViewSnapshot


def _arrow(ascending: bool) -> str:
    return "▲" if ascending else "▼"


def build_table(view: ViewSnapshot, today: Optional[date] = None) -> Table:
    """
    Render one view snapshot as a rich table.

    Ages are derived here, once per render pass, from a single reference date so
    every row of the table agrees on "today".
    """
    today = today or date.today()

    caption_parts = []
    if view.pages:
        caption_parts.append(
            "Pages: "
            + " ".join(
                f"[bold]{page}[/bold]" if page == view.current_page else str(page)
                for page in view.pages
            )
        )
    if view.filter_text:
        caption_parts.append(f"Filter: '{view.filter_text}'")

    table = Table(
        title=f"Children ({view.total_count} registered)",
        box=box.ROUNDED,
        caption=" │ ".join(caption_parts) or None,
    )

    name_header = "Name"
    birth_header = "Birth date"
    if view.sort_key is SortKey.NAME:
        name_header = f"Name {_arrow(view.name_ascending)}"
    elif view.sort_key is SortKey.BIRTH_DATE:
        birth_header = f"Birth date {_arrow(view.birth_date_ascending)}"

    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column(name_header, style="cyan")
    table.add_column(birth_header, justify="right", style="magenta")
    table.add_column("Age", justify="right", style="green")

    for record in view.records:
        table.add_row(
            record.id,
            record.name,
            record.birth_date.isoformat(),
            str(age(record.birth_date, today)),
        )
    return table


def render_view(view: ViewSnapshot, console: Optional[Console] = None) -> None:
    """Print a snapshot, or the loading/error banner in its place."""
    console = console or Console()

    if view.error:
        console.print(f"[red]{view.error}[/red]")
    if view.state is PageState.LOADING or view.loading:
        console.print("[yellow]Loading…[/yellow]")
        return
    if not view.records:
        console.print("[yellow]No children to display.[/yellow]")
        return

    console.print(build_table(view))
