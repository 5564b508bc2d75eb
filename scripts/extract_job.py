#!/usr/bin/env python3
"""
Extract structured job data from a pasted job posting.

Usage:
    python scripts/extract_job.py posting.txt
    python scripts/extract_job.py posting.txt --offline
    python scripts/extract_job.py posting.txt --json --config configs/extraction.yaml
    python scripts/extract_job.py posting.txt --log-dir outs/logs/extract
"""

import json
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from jobsift.contexts.intake.exceptions import InvalidInputError
from jobsift.contexts.intake.logger import setup_intake_logger
from jobsift.contexts.intake.options import ExtractionOptions
from jobsift.contexts.intake.orchestrator import JobExtractionOrchestrator

load_dotenv()

app = typer.Typer(help="Extract structured job data from posting text.")


@app.command()
def main(
    posting_path: Path = typer.Argument(..., help="Text file containing the pasted job posting"),
    offline: bool = typer.Option(False, "--offline", help="Heuristics only, no remote call"),
    as_json: bool = typer.Option(False, "--json", help="Print the record as JSON"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Directory for the log file"),
    config: Optional[Path] = typer.Option(None, "--config", help="YAML file with extraction options"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show DEBUG messages"),
):
    """Extract title, company, skills, experience, location, salary and a summary."""
    if not posting_path.exists():
        typer.echo(f"ERROR: File not found: {posting_path}", err=True)
        raise typer.Exit(1)

    try:
        options = ExtractionOptions.from_yaml(config) if config else ExtractionOptions.from_env()
    except ValueError as e:
        typer.echo(f"ERROR: Invalid configuration: {e}", err=True)
        raise typer.Exit(1)

    setup_intake_logger(log_dir, model=None if offline else options.model, verbose=verbose)

    try:
        text = posting_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        typer.echo(f"ERROR: {posting_path} is not valid UTF-8 text: {e.reason}", err=True)
        raise typer.Exit(1)

    orchestrator = JobExtractionOrchestrator(options)

    try:
        if offline:
            record = orchestrator.extract_with_heuristics(text)
        else:
            record = orchestrator.extract(text)
    except InvalidInputError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))
        return

    typer.echo("\n=== Job ===")
    typer.echo(f"  title: {record.title}")
    typer.echo(f"  company: {record.company}")
    typer.echo(f"  experience: {record.experience_level}")
    typer.echo(f"  location: {record.location}")
    typer.echo(f"  salary: {record.salary_range}")

    typer.echo(f"\n=== Skills ({len(record.skills)}) ===")
    typer.echo(f"  {', '.join(record.skills)}")

    typer.echo("\n=== Summary ===")
    typer.echo(record.summary)

    typer.secho("\n✓ Extraction complete", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
