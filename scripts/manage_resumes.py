#!/usr/bin/env python3
"""
Command-line interface for managing stored resumes.

The record store (RESUME_STORE_PATH, default outs/resumes.db) holds resume
snapshots keyed by record id and owner id.

Commands:
    init      - Create the record store
    save      - Store a resume YAML file as a new record
    show      - Print a stored resume as YAML
    list      - List an owner's resumes, most recently updated first
    rename    - Rename a stored resume
    update    - Replace a stored resume with a YAML file
    delete    - Delete a stored resume
    templates - Browse and search the starter template gallery
    start     - Start a new resume from a starter template
"""

from pathlib import Path
from typing import Optional

import typer
from omegaconf import OmegaConf
from typing_extensions import Annotated

from resumecraft.contexts.authoring import (
    RecordNotFoundError,
    ResumeDocument,
    ResumeStore,
    TemplateGallery,
    TemplateNotFoundError,
)
from resumecraft.contexts.authoring.resume_store import RESUME_STORE_PATH
from resumecraft.contexts.authoring.template_gallery import TEMPLATE_CATEGORIES, TEMPLATE_LEVELS
from resumecraft.utils.timestamp import format_timestamp

app = typer.Typer(
    add_completion=False,
    help="Manage stored resumes and start new ones from templates",
    invoke_without_command=True,
)

StorePath = Annotated[
    Path,
    typer.Option("--store", "-s", help="Record store database (default: RESUME_STORE_PATH)"),
]


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _open_store(store_path: Path) -> ResumeStore:
    try:
        return ResumeStore(store_path)
    except FileNotFoundError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _load_document(resume_file: Path) -> ResumeDocument:
    try:
        return ResumeDocument.from_yaml(resume_file)
    except (FileNotFoundError, ValueError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _not_found(e: RecordNotFoundError):
    typer.secho(str(e), fg=typer.colors.RED, err=True)
    return typer.Exit(code=1)


@app.command("init")
def init_command(store_path: StorePath = RESUME_STORE_PATH):
    """Create the record store (existing records are kept)."""
    ResumeStore.initialize(store_path).close()
    typer.secho(f"✓ Record store ready: {store_path}", fg=typer.colors.GREEN)


@app.command("save")
def save_command(
    resume_file: Annotated[Path, typer.Argument(help="Resume YAML file")],
    owner: Annotated[str, typer.Option("--owner", "-u", help="Owner id")],
    name: Annotated[
        Optional[str],
        typer.Option("--name", "-n", help="Display name (default: 'Resume YYYY-MM-DD')"),
    ] = None,
    store_path: StorePath = RESUME_STORE_PATH,
):
    """
    Store a resume YAML file as a new record.

    Examples:\n
        $ manage_resumes.py save data/ana_ruiz.yaml --owner user-1 --name "Backend roles"
    """
    document = _load_document(resume_file)
    with _open_store(store_path) as store:
        record = store.create(owner, document, name=name)

    typer.secho(f"✓ Saved '{record.name}'", fg=typer.colors.GREEN)
    typer.echo(f"  Id: {record.id}")


@app.command("show")
def show_command(
    resume_id: Annotated[str, typer.Argument(help="Record id")],
    store_path: StorePath = RESUME_STORE_PATH,
):
    """Print a stored resume as YAML."""
    with _open_store(store_path) as store:
        try:
            record = store.get(resume_id)
        except RecordNotFoundError as e:
            raise _not_found(e)

    typer.secho(f"# {record.name} (updated {format_timestamp(record.updated_at)})", bold=True)
    typer.echo(OmegaConf.to_yaml(OmegaConf.create(record.document.to_dict())).rstrip())


@app.command("list")
def list_command(
    owner: Annotated[str, typer.Option("--owner", "-u", help="Owner id")],
    store_path: StorePath = RESUME_STORE_PATH,
):
    """List an owner's resumes, most recently updated first."""
    with _open_store(store_path) as store:
        records = store.list(owner)

    if not records:
        typer.echo(f"No resumes stored for {owner}")
        return

    typer.secho(f"{'ID':<34} {'UPDATED':<22} NAME", bold=True)
    for record in records:
        typer.echo(f"{record.id:<34} {format_timestamp(record.updated_at):<22} {record.name}")
    typer.echo(f"\nTotal: {len(records)}")


@app.command("rename")
def rename_command(
    resume_id: Annotated[str, typer.Argument(help="Record id")],
    name: Annotated[str, typer.Argument(help="New display name")],
    store_path: StorePath = RESUME_STORE_PATH,
):
    """Rename a stored resume."""
    with _open_store(store_path) as store:
        try:
            record = store.update(resume_id, name=name)
        except RecordNotFoundError as e:
            raise _not_found(e)

    typer.secho(f"✓ Renamed to '{record.name}'", fg=typer.colors.GREEN)


@app.command("update")
def update_command(
    resume_id: Annotated[str, typer.Argument(help="Record id")],
    resume_file: Annotated[Path, typer.Argument(help="Resume YAML file")],
    store_path: StorePath = RESUME_STORE_PATH,
):
    """Replace a stored resume's content with a YAML file."""
    document = _load_document(resume_file)
    with _open_store(store_path) as store:
        try:
            record = store.update(resume_id, document=document)
        except RecordNotFoundError as e:
            raise _not_found(e)

    typer.secho(f"✓ Updated '{record.name}'", fg=typer.colors.GREEN)


@app.command("delete")
def delete_command(
    resume_id: Annotated[str, typer.Argument(help="Record id")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
    store_path: StorePath = RESUME_STORE_PATH,
):
    """Delete a stored resume."""
    if not yes:
        typer.confirm(f"Delete resume {resume_id}?", abort=True)

    with _open_store(store_path) as store:
        try:
            store.delete(resume_id)
        except RecordNotFoundError as e:
            raise _not_found(e)

    typer.secho(f"✓ Deleted {resume_id}", fg=typer.colors.GREEN)


@app.command("templates")
def templates_command(
    query: Annotated[str, typer.Argument(help="Search name, description, and tags")] = "",
    category: Annotated[
        str, typer.Option("--category", "-c", help=f"One of {', '.join(TEMPLATE_CATEGORIES)} or 'all'")
    ] = "all",
    level: Annotated[str, typer.Option("--level", "-l", help=f"One of {', '.join(TEMPLATE_LEVELS)} or 'all'")] = "all",
):
    """
    Browse the starter template gallery.

    Examples:\n
        $ manage_resumes.py templates\n
        $ manage_resumes.py templates react --level entry
    """
    try:
        templates = TemplateGallery().filter(query, category=category, level=level)
    except (FileNotFoundError, ValueError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if not templates:
        typer.echo("No templates match")
        return

    for template in templates:
        typer.secho(f"{template.id}", bold=True)
        typer.echo(f"  {template.name} ({template.category}, {template.level})")
        typer.echo(f"  {template.description}")
        typer.echo(f"  Tags: {', '.join(template.tags)}")
    typer.echo(f"\nTotal: {len(templates)}")


@app.command("start")
def start_command(
    template_id: Annotated[str, typer.Argument(help="Starter template id (see 'templates')")],
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Write the new resume to this YAML file")
    ] = None,
    owner: Annotated[
        Optional[str], typer.Option("--owner", "-u", help="Save the new resume to the store for this owner")
    ] = None,
    name: Annotated[Optional[str], typer.Option("--name", "-n", help="Display name when saving")] = None,
    store_path: StorePath = RESUME_STORE_PATH,
):
    """
    Start a new resume from a starter template.

    Contact details are left blank for you to fill in.

    Examples:\n
        $ manage_resumes.py start entry-level-developer --output my_resume.yaml\n
        $ manage_resumes.py start product-manager-senior --owner user-1
    """
    if output is None and owner is None:
        typer.secho("Error: pass --output and/or --owner", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    try:
        document = TemplateGallery().instantiate(template_id)
    except (FileNotFoundError, ValueError, TemplateNotFoundError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if output is not None:
        OmegaConf.save(OmegaConf.create(document.to_dict()), output)
        typer.secho(f"✓ Wrote {output}", fg=typer.colors.GREEN)

    if owner is not None:
        with _open_store(store_path) as store:
            record = store.create(owner, document, name=name)
        typer.secho(f"✓ Saved '{record.name}'", fg=typer.colors.GREEN)
        typer.echo(f"  Id: {record.id}")


if __name__ == "__main__":
    app()
