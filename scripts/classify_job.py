#!/usr/bin/env python3
"""
Show how each line of a job posting is classified.

Usage:
    python scripts/classify_job.py /tmp/jobtailor/posting.md
    python scripts/classify_job.py /tmp/jobtailor/posting.md --all
"""

from pathlib import Path

import typer

from jobtailor.contexts.intake import (
    DROP_SET,
    build_nodes,
    count_node_types,
    filter_nodes,
    find_title,
)

app = typer.Typer(help="Inspect line classification for a job posting.")


@app.command()
def main(
    input_file: Path = typer.Argument(..., help="Posting markdown file"),
    show_all: bool = typer.Option(
        False, "--all", help="Include structural noise that the filter would drop"
    ),
):
    """Print each surviving line with its category, then a per-category summary."""
    if not input_file.exists():
        typer.echo(f"Error: File not found: {input_file}", err=True)
        raise typer.Exit(1)

    built = build_nodes(input_file.read_text(encoding="utf-8"))
    kept = filter_nodes(built)
    shown = built if show_all else kept

    width = max((len(node.node_type.value) for node in shown), default=0)
    for node in shown:
        marker = "x" if node.node_type in DROP_SET else " "
        preview = node.content if len(node.content) <= 80 else node.content[:77] + "..."
        typer.echo(f"{marker} {node.node_type.value:<{width}}  {preview}")

    typer.echo(f"\n=== Summary ({len(kept)} kept, {len(built) - len(kept)} dropped) ===")
    typer.echo(f"  title: {find_title(kept) or '(none detected)'}")
    for node_type, count in count_node_types(kept).items():
        typer.echo(f"  {node_type.value}: {count}")


if __name__ == "__main__":
    app()
