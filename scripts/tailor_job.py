#!/usr/bin/env python3
"""
Tailor the base resume (and cover letter) to a job posting.

Usage:
    python scripts/tailor_job.py https://jobs.ashbyhq.com/Felix/0d65c993-...
    python scripts/tailor_job.py --file /tmp/jobtailor/posting.md
    python scripts/tailor_job.py https://... --reply-format json --timeout 90
"""

from pathlib import Path

import typer
from dotenv import load_dotenv

from jobtailor.contexts.applications import (
    ensure_workspace,
    load_base_cover,
    load_base_resume,
    save_application,
)
from jobtailor.contexts.intake.fetch import fetch_job_markdown
from jobtailor.contexts.tailoring import tailor_job
from jobtailor.contexts.tailoring.logger import setup_tailoring_logger
from jobtailor.utils import session_stamp
from jobtailor.utils.config import (
    REPLY_FORMATS,
    create_default_config,
    get_workspace_paths,
    load_settings,
)
from jobtailor.utils.exceptions import AuthError, JobTailorError
from jobtailor.utils.http import CancelToken

load_dotenv()

app = typer.Typer(help="Tailor your resume to a job posting.")


@app.command()
def main(
    url: str | None = typer.Argument(None, help="Job posting URL (fetched via r.jina.ai)"),
    file: Path | None = typer.Option(
        None, "-f", "--file", help="Read posting markdown from a file instead of a URL"
    ),
    reply_format: str | None = typer.Option(
        None, "--reply-format", help="Override reply format from config (tags or json)"
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", help="Overall deadline in seconds (default: none)"
    ),
    home: Path | None = typer.Option(
        None, "--home", help="Workspace root (default: JOBTAILOR_HOME or ~/.jobtailor)"
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Show debug messages on the console"),
):
    """Fetch or read a posting, tailor the resume, and save the application."""
    if (url is None) == (file is None):
        typer.echo("Error: give exactly one of URL or --file", err=True)
        raise typer.Exit(1)

    paths = get_workspace_paths(home)
    ensure_workspace(paths)

    if not paths.config_file.exists():
        create_default_config(paths.config_file)
        typer.echo(f"Created config at {paths.config_file} - fill in your API key and re-run.")
        raise typer.Exit(0)

    try:
        settings = load_settings(paths.config_file)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if reply_format is not None:
        if reply_format not in REPLY_FORMATS:
            typer.echo(f"Error: --reply-format must be one of {', '.join(REPLY_FORMATS)}", err=True)
            raise typer.Exit(1)
        settings.reply_format = reply_format

    log_file = setup_tailoring_logger(
        paths.logs_dir / f"tailor_{session_stamp()}",
        settings.deepseek_model,
        settings.reply_format,
        verbose=verbose,
    )

    if file is not None and not file.exists():
        typer.echo(f"Error: File not found: {file}", err=True)
        raise typer.Exit(1)

    cancel = CancelToken(timeout=timeout)

    try:
        base_resume = load_base_resume(paths.templates_dir)
        base_cover = load_base_cover(paths.templates_dir)

        if file is not None:
            raw_text = file.read_text(encoding="utf-8")
        else:
            raw_text = fetch_job_markdown(url, cancel=cancel)

        outcome = tailor_job(raw_text, base_resume, base_cover, settings, cancel=cancel)
        application_dir = save_application(paths.jobs_dir, outcome.nodes, outcome.result)
    except AuthError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        typer.echo(f"Check {paths.config_file}", err=True)
        raise typer.Exit(1)
    except (JobTailorError, FileNotFoundError, FileExistsError) as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        typer.echo(f"Log: {log_file}", err=True)
        raise typer.Exit(1)

    result = outcome.result
    typer.echo(f"\nCompany:     {result.company}")
    typer.echo(f"Role:        {result.role}")
    typer.echo(f"Match score: {result.score}/10")
    typer.echo(f"Tokens used: {result.tokens_used}")
    typer.secho(f"✓ Saved: {application_dir}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
