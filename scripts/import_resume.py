#!/usr/bin/env python3
"""
Import an existing PDF resume into structured YAML.

Extracts the PDF text and parses it into the resume schema with the configured
LLM provider (LLM_PROVIDER). The result can be written to YAML and/or saved to
the record store.

Examples:\n

    import_resume.py resume.pdf                                # Print parsed YAML

    import_resume.py resume.pdf -o data/imported.yaml          # Write YAML

    import_resume.py resume.pdf --save --owner user-1          # Save to record store
"""

from pathlib import Path
from typing import Optional

import typer
from omegaconf import OmegaConf
from typing_extensions import Annotated

from resumecraft.contexts.authoring import AssistantError, ResumeStore, UploadValidationError
from resumecraft.contexts.authoring.logger import setup_authoring_logger
from resumecraft.contexts.authoring.pdf_import import import_resume
from resumecraft.contexts.authoring.resume_store import RESUME_STORE_PATH
from resumecraft.utils.logger import session_log_dir

app = typer.Typer(
    help="Import a PDF resume into structured YAML",
    add_completion=False,
)


@app.command()
def main(
    pdf_file: Annotated[Path, typer.Argument(help="PDF resume to import (max 10MB)")],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the parsed resume to this YAML file"),
    ] = None,
    save: Annotated[
        bool,
        typer.Option("--save", help="Store the parsed resume in the record store"),
    ] = False,
    owner: Annotated[
        Optional[str],
        typer.Option("--owner", "-u", help="Owner id (required with --save)"),
    ] = None,
    store_path: Annotated[
        Path,
        typer.Option("--store", "-s", help="Record store database (default: RESUME_STORE_PATH)"),
    ] = RESUME_STORE_PATH,
):
    """
    Import a PDF resume.

    Examples:\n

        $ import_resume.py resume.pdf -o data/imported.yaml

        $ import_resume.py resume.pdf --save --owner user-1
    """
    if save and not owner:
        typer.secho("Error: --owner is required with --save", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    log_file = setup_authoring_logger(session_log_dir("import"), store_path=store_path if save else None)

    typer.secho(f"\nImporting: {pdf_file}", fg=typer.colors.BLUE, bold=True)
    try:
        document = import_resume(pdf_file)
    except UploadValidationError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    except AssistantError as e:
        typer.secho(f"✗ {e.message}", fg=typer.colors.RED, err=True)
        typer.echo(f"  Log: {log_file}")
        raise typer.Exit(code=1)

    yaml_text = OmegaConf.to_yaml(OmegaConf.create(document.to_dict()))

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(yaml_text, encoding="utf-8")
        typer.secho(f"✓ Wrote {output}", fg=typer.colors.GREEN)
    elif not save:
        typer.echo(yaml_text)

    if save:
        with ResumeStore.initialize(store_path) as store:
            record = store.create(owner, document)
        typer.secho(f"✓ Saved '{record.name}' ({record.id})", fg=typer.colors.GREEN)

    typer.echo(f"  Log: {log_file}\n")


if __name__ == "__main__":
    app()
