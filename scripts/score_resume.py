#!/usr/bin/env python3
"""
ATS Scoring CLI

Scores resume YAML files for ATS compatibility using the scoring context.
Requires an API key for the configured LLM provider (LLM_PROVIDER).

Commands:
    score - Score a resume, optionally against a job description

Examples:\n

    score_resume.py score data/ana_ruiz.yaml                       # General ATS score

    score_resume.py score data/ana_ruiz.yaml --job posting.txt     # Score against a job posting
"""

from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from resumecraft.contexts.authoring import ResumeDocument
from resumecraft.contexts.scoring import ScoringSession
from resumecraft.contexts.scoring.logger import setup_scoring_logger
from resumecraft.contexts.scoring.session import STATE_EMPTY, STATE_ERROR
from resumecraft.utils.logger import session_log_dir

app = typer.Typer(
    help="Score resumes for ATS compatibility",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _score_color(score: int) -> str:
    if score >= 80:
        return typer.colors.GREEN
    if score >= 60:
        return typer.colors.YELLOW
    return typer.colors.RED


@app.command("score")
def score_command(
    resume_file: Annotated[
        Path,
        typer.Argument(help="Resume YAML file"),
    ],
    job_file: Annotated[
        Optional[Path],
        typer.Option(
            "--job",
            "-j",
            help="Text file with the job description to score against",
        ),
    ] = None,
):
    """
    Score a resume for ATS compatibility.

    Examples:\n

        $ score_resume.py score data/ana_ruiz.yaml

        $ score_resume.py score data/ana_ruiz.yaml --job posting.txt
    """
    log_file = setup_scoring_logger(session_log_dir("score"))

    try:
        document = ResumeDocument.from_yaml(resume_file)
        job_description = job_file.read_text(encoding="utf-8") if job_file else None
    except (OSError, ValueError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"\nScoring: {resume_file}", fg=typer.colors.BLUE, bold=True)
    if job_file:
        typer.echo(f"Job description: {job_file}")
    typer.echo("")

    report = ScoringSession(job_description=job_description).refresh(document)

    if report.state == STATE_EMPTY:
        typer.secho(report.message, fg=typer.colors.YELLOW)
        raise typer.Exit(code=0)

    if report.state == STATE_ERROR:
        typer.secho("✗ Analysis error", fg=typer.colors.RED, bold=True)
        typer.secho(f"  {report.message}", fg=typer.colors.RED)
        typer.echo(f"  Log: {log_file}")
        raise typer.Exit(code=1)

    score = report.score
    typer.secho(f"Overall ATS compatibility: {score.overall}/100", fg=_score_color(score.overall), bold=True)
    if job_description:
        typer.echo("  (analyzed against job description)")

    typer.echo("\nScore breakdown:")
    for name, value in score.breakdown.as_dict().items():
        typer.secho(f"  {name.capitalize():<12} {value:>3}", fg=_score_color(value))

    if score.analysis:
        typer.echo(f"\nAnalysis:\n  {score.analysis}")

    if score.suggestions:
        typer.echo("\nSuggestions:")
        for suggestion in score.suggestions:
            typer.echo(f"  - {suggestion}")

    if score.missing_keywords:
        typer.echo("\nConsider adding keywords:")
        typer.echo(f"  {', '.join(score.missing_keywords)}")

    typer.echo(f"\nLog: {log_file}\n")


if __name__ == "__main__":
    app()
