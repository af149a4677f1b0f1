#!/usr/bin/env python3
"""
AI-assisted resume editing CLI

Commands:
    advise  - Ask a career/resume question about a resume
    improve - Rewrite one section of a resume

Examples:\n

    assist_resume.py advise data/ana_ruiz.yaml "How do I make my summary stronger?"

    assist_resume.py improve summary "Backend developer who likes APIs."
"""

from pathlib import Path

import typer
from typing_extensions import Annotated

from resumecraft.contexts.authoring import AssistantError, ResumeDocument
from resumecraft.contexts.authoring.assistant import generate_resume_advice, improve_section
from resumecraft.contexts.authoring.logger import setup_authoring_logger
from resumecraft.utils.logger import session_log_dir

app = typer.Typer(
    help="AI-assisted resume advice and rewriting",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("advise")
def advise_command(
    resume_file: Annotated[Path, typer.Argument(help="Resume YAML file")],
    question: Annotated[str, typer.Argument(help="Question for the assistant")],
):
    """Ask a question about a resume."""
    setup_authoring_logger(session_log_dir("assist"))
    try:
        document = ResumeDocument.from_yaml(resume_file)
        answer = generate_resume_advice(question, document)
    except (FileNotFoundError, ValueError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    except AssistantError as e:
        typer.secho(f"✗ {e.message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo(f"\n{answer}\n")


@app.command("improve")
def improve_command(
    section: Annotated[str, typer.Argument(help="Section name (e.g., summary, experience)")],
    content: Annotated[str, typer.Argument(help="Current section text")],
):
    """Rewrite one section of a resume."""
    setup_authoring_logger(session_log_dir("assist"))
    try:
        improved = improve_section(section, content)
    except AssistantError as e:
        typer.secho(f"✗ {e.message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo(f"\n{improved}\n")


if __name__ == "__main__":
    app()
