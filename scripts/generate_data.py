"""
Seed data script for the roster pager.

Generates a deterministic pseudo-random roster of children as CSV and loads it
into Postgres with COPY.
"""

from __future__ import annotations

import csv
import random
import sys
import tempfile
import time
from datetime import date, timedelta
from pathlib import Path

import psycopg
import typer

from roster.infrastructure.db_factory import build_dsn, get_sync_connection

app = typer.Typer(help="Generate a synthetic roster and load it into Postgres (CSV + COPY).")

FIRST_NAMES = [
    "Mila", "Noah", "Emma", "Ben", "Lena", "Paul", "Clara", "Felix",
    "Sophie", "Jonas", "Hanna", "Elias", "Ida", "Leon", "Marie", "Finn",
]
LAST_NAMES = [
    "Berger", "Fischer", "Wagner", "Schulz", "Hoffmann", "Becker",
    "Koch", "Richter", "Klein", "Wolf", "Neumann", "Schwarz",
]


def _generate_rows_csv(csv_path: Path, rows: int, seed: int, today: date | None = None) -> None:
    """Write `rows` children born within the last twelve years."""
    rng = random.Random(seed)
    reference = today or date.today()

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["name", "birth_date"])
        for _ in range(rows):
            first = rng.choice(FIRST_NAMES)
            last = rng.choice(LAST_NAMES)
            # Lower-case a share of names so case-insensitive sorting is visible.
            if rng.random() < 0.2:
                first = first.lower()
            born = reference - timedelta(days=rng.randint(0, 12 * 365))
            writer.writerow([f"{first} {last}", born.isoformat()])


def _copy_into_db(conn: psycopg.Connection, csv_path: Path) -> int:
    with conn.cursor() as cur:
        with cur.copy(
            "COPY public.children (name, birth_date) FROM STDIN WITH (FORMAT csv, HEADER TRUE)"
        ) as copy:
            with csv_path.open("r", encoding="utf-8") as f:
                for line in f:
                    copy.write(line)
        loaded = cur.rowcount
    conn.commit()
    return loaded


@app.command()
def main(
    rows: int = typer.Option(95, "--rows", "-r", help="Number of children to generate."),
    seed: int = typer.Option(42, "--seed", help="Deterministic RNG seed."),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Optional CSV output path (if omitted, a temp file will be used).",
    ),
    dsn: str | None = typer.Option(None, "--dsn", help="Optional DSN override for Postgres."),
    no_load: bool = typer.Option(
        False, "--no-load", help="Only generate CSV; skip loading into Postgres."
    ),
) -> None:
    """
    Generate a synthetic roster and optionally load it into Postgres using COPY.
    """
    start = time.perf_counter()
    if output:
        csv_path = output
        csv_path.parent.mkdir(parents=True, exist_ok=True)
    else:
        tmpdir = Path(tempfile.mkdtemp(prefix="roster_csv_"))
        csv_path = tmpdir / "children.csv"

    typer.echo(f"Generating {rows:,} children -> {csv_path} (seed={seed})")
    _generate_rows_csv(csv_path, rows=rows, seed=seed)

    if no_load:
        typer.echo("Skipping load (no-load flag set).")
        return

    typer.echo("Loading CSV into Postgres via COPY...")
    with get_sync_connection(dsn or build_dsn()) as conn:
        _copy_into_db(conn, csv_path)

    typer.echo(f"Done in {time.perf_counter() - start:.2f}s.")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
