"""Command-line interface for Inkwell.

This module defines the CLI commands using the Click framework. Running
``inkwell`` without a command builds the project in the current directory.

Commands:
- build: Build the site into the output directory.
- new: Scaffold a new Inkwell project.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

import click

from . import __version__
from .config import load_config
from .errors import InkwellError

# Path to the files copied into new projects
_SCAFFOLD_DIR = Path(__file__).parent / "scaffold"


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="inkwell")
@click.option("-v", "--verbose", is_flag=True, help="Log every build stage")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """Inkwell static site generator."""
    _configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        ctx.invoke(build)


@cli.command()
@click.option(
    "--project",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project root (defaults to the current directory)",
)
def build(project: Path | None):
    """Build the site into the output directory."""
    project_root = project or Path.cwd()
    from .build import build_site

    try:
        config = load_config(project_root)
        report = build_site(config)
    except InkwellError as exc:
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        click.echo(click.style(f"  {exc}", fg="yellow"), err=True)
        raise SystemExit(1) from None
    click.echo(f"Build successful. Generated {report.published} post(s).")


@cli.command()
@click.argument("name")
def new(name: str):
    """Scaffold a new Inkwell project."""
    target = Path(name).resolve()
    if target.exists() and any(target.iterdir()):
        raise click.ClickException(
            f"Refusing to initialize into non-empty directory: {target}"
        )
    _scaffold(target)
    click.echo(f"New Inkwell site created at {target}")


def main():
    """Entry point for the CLI application."""
    cli()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _scaffold(root: Path) -> None:
    """Create the directory structure and files for a new Inkwell project.

    Args:
        root: Root directory for the new project.
    """
    for src_path in _SCAFFOLD_DIR.rglob("*"):
        if src_path.is_dir():
            continue
        rel_path = src_path.relative_to(_SCAFFOLD_DIR)
        dest_path = root / rel_path
        dest_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src_path, dest_path)
