from __future__ import annotations

import asyncio
import sys
from typing import List, Optional

import typer
from rich.console import Console

from roster.config import get_settings
from roster.controller import PageController
from roster.domain.sorting import SortKey
from roster.reporter import render_view
from roster.sources import available_sources, build_source
from roster.utils.logging import configure_logging

app = typer.Typer(help="Roster pager CLI.")


def _controller(source: Optional[str]) -> PageController:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    name = source or settings.source
    try:
        backend = build_source(name)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--source") from exc
    return PageController(backend, page_size=settings.children_per_page)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"source={settings.source} | per_page={settings.children_per_page} | "
        f"api={settings.api_base_url}/{settings.api_children_path} | "
        f"DB={settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )
    typer.echo("Available sources: " + ", ".join(available_sources()))


@app.command()
def browse(
    page: int = typer.Option(1, "--page", "-p", min=1, help="1-based page to load."),
    filter_text: str = typer.Option("", "--filter", "-f", help="Case-insensitive text filter."),
    sort: List[SortKey] = typer.Option(
        [],
        "--sort",
        "-s",
        help="Toggle a sort key after loading (name, birthdate). Repeat to toggle again.",
    ),
    source: Optional[str] = typer.Option(
        None, "--source", help="Record source (http, postgres, memory)."
    ),
) -> None:
    """
    Load one page, apply sort toggles and the filter, and print it.
    """
    controller = _controller(source)

    async def _run() -> bool:
        try:
            loaded = await controller.on_select_page(page)
            for key in sort:
                if key is SortKey.NAME:
                    controller.on_sort_by_name()
                else:
                    controller.on_sort_by_birthdate()
            controller.on_filter_input(filter_text)
            render_view(controller.view_state(), Console())
            return loaded
        finally:
            await controller.aclose()

    if not asyncio.run(_run()):
        raise typer.Exit(code=1)


@app.command()
def cancel(
    record_id: str = typer.Argument(..., help="Identifier of the child to remove."),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page the child is listed on."),
    source: Optional[str] = typer.Option(
        None, "--source", help="Record source (http, postgres, memory)."
    ),
) -> None:
    """
    Cancel one registration and print the refreshed page.
    """
    controller = _controller(source)

    async def _run() -> bool:
        try:
            await controller.on_select_page(page)
            cancelled = await controller.on_cancel_registration(record_id)
            render_view(controller.view_state(), Console())
            return cancelled
        finally:
            await controller.aclose()

    if not asyncio.run(_run()):
        raise typer.Exit(code=1)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
