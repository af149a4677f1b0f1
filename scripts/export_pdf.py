#!/usr/bin/env python3
"""
PDF Export CLI

Lays out resume YAML files and exports them to PDF using the rendering context.

Commands:
    export  - Export a resume YAML file to PDF
    layout  - Show page count and block positions without writing a PDF
    presets - List available layout presets

Examples:\n

    export_pdf.py export data/ana_ruiz.yaml                          # Export to RESULTS_PATH

    export_pdf.py export data/ana_ruiz.yaml --out build/             # Custom output directory

    export_pdf.py export data/ana_ruiz.yaml -p spacing_compact       # Apply a layout preset

    export_pdf.py layout data/ana_ruiz.yaml                          # Inspect pagination
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf
from typing_extensions import Annotated

from resumecraft.contexts.authoring import ResumeDocument
from resumecraft.contexts.rendering import Typography, export_resume, layout_document
from resumecraft.contexts.rendering.config_resolver import LAYOUT_PRESETS_PATH, apply_presets
from resumecraft.contexts.rendering.layout_engine import KIND_TEXT
from resumecraft.contexts.rendering.logger import setup_rendering_logger
from resumecraft.utils.logger import session_log_dir

load_dotenv()
RESULTS_PATH = Path(os.getenv("RESULTS_PATH", "outs/results"))


app = typer.Typer(
    help="Lay out resume YAML files and export them to PDF",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load(resume_file: Path, presets: Optional[List[str]]):
    """Load a resume and resolve its typography, exiting on bad input."""
    try:
        document = ResumeDocument.from_yaml(resume_file)
        typography = apply_presets(Typography(), presets or [])
    except (FileNotFoundError, ValueError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return document, typography


@app.command("export")
def export_command(
    resume_file: Annotated[
        Path,
        typer.Argument(help="Resume YAML file"),
    ],
    output_dir: Annotated[
        Path,
        typer.Option(
            "--out",
            "-o",
            help="Output directory (default: RESULTS_PATH)",
        ),
    ] = RESULTS_PATH,
    presets: Annotated[
        Optional[List[str]],
        typer.Option(
            "--preset",
            "-p",
            help="Layout preset to apply (repeatable, later overrides earlier)",
        ),
    ] = None,
):
    """
    Export a resume YAML file to PDF.

    The PDF is named after the person (e.g., Ana_María_Ruiz.pdf).

    Examples:\n

        $ export_pdf.py export data/ana_ruiz.yaml

        $ export_pdf.py export data/ana_ruiz.yaml -p fonts_times -p spacing_compact
    """
    log_file = setup_rendering_logger(session_log_dir("export"), presets=presets)
    document, typography = _load(resume_file, presets)

    typer.secho(f"\nExporting: {resume_file}", fg=typer.colors.BLUE, bold=True)
    if presets:
        typer.echo(f"Presets: {', '.join(presets)}")
    typer.echo("")

    result = export_resume(document, output_dir, typography=typography)

    if result.success:
        typer.secho("✓ Export succeeded", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  Pages: {result.page_count}")
        typer.echo(f"  PDF: {result.pdf_path}")
    else:
        typer.secho("✗ Export failed", fg=typer.colors.RED, bold=True)
        for error in result.errors:
            typer.secho(f"  - {error}", fg=typer.colors.RED)

    typer.echo(f"  Log: {log_file}")
    typer.echo("")
    raise typer.Exit(code=0 if result.success else 1)


@app.command("layout")
def layout_command(
    resume_file: Annotated[
        Path,
        typer.Argument(help="Resume YAML file"),
    ],
    presets: Annotated[
        Optional[List[str]],
        typer.Option(
            "--preset",
            "-p",
            help="Layout preset to apply (repeatable)",
        ),
    ] = None,
):
    """
    Show the page count and the position of every text line.

    Examples:\n

        $ export_pdf.py layout data/ana_ruiz.yaml
    """
    document, typography = _load(resume_file, presets)
    layout = layout_document(document, typography=typography)

    typer.secho(f"\n{resume_file}: {layout.page_count} page(s)", fg=typer.colors.BLUE, bold=True)
    for page in range(layout.page_count):
        typer.secho(f"\nPage {page + 1}", bold=True)
        for instr in layout.on_page(page):
            if instr.kind != KIND_TEXT:
                continue
            typer.echo(f"  y={instr.y:6.1f}  {instr.align:<6}  {instr.text[:70]}")
    typer.echo("")


@app.command("presets")
def presets_command():
    """
    List available layout presets.

    Examples:\n

        $ export_pdf.py presets
    """
    nested = OmegaConf.to_container(OmegaConf.load(LAYOUT_PRESETS_PATH), resolve=True)
    for category, presets in nested.items():
        typer.secho(category, bold=True)
        for name in presets:
            typer.echo(f"  {category}_{name}")


if __name__ == "__main__":
    app()
