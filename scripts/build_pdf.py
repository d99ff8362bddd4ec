#!/usr/bin/env python3
"""
Guide Build CLI

Renders the "Optimizing Python" guide to PDF and removes the generated file.

Commands:
    all      - Render the Markdown source to PDF (default when no command is given)
    clean    - Delete the generated PDF
    validate - Check the generated PDF against the source's metadata

Examples:\n

    build_pdf.py                                 # Render with configs/build.yaml

    build_pdf.py all --verbose                   # Render, logging every converter warning

    build_pdf.py all --config configs/draft.yaml # Render with an alternate config

    build_pdf.py clean --force                   # Delete the PDF, ignoring a missing file
"""

from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from optbook.contexts.authoring import read_front_matter
from optbook.contexts.rendering import (
    build_document,
    clean_output,
    load_build_config,
    validate_pdf,
)
from optbook.contexts.rendering.build_config import PROJECT_ROOT
from optbook.exceptions import ConversionError, NotFoundError, RenderingError


def display_path(path: Path) -> str:
    """Return path relative to PROJECT_ROOT for cleaner display."""
    try:
        return str(Path(path).relative_to(PROJECT_ROOT))
    except ValueError:
        return str(path)


def _load_options(config: Optional[Path]):
    try:
        return load_build_config(config)
    except ValueError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


app = typer.Typer(
    help="Render the Optimizing Python guide to PDF with pandoc",
    add_completion=False,
)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """Render the guide when no command is provided."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(all_command)


@app.command("all")
def all_command(
    config: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            "-c",
            help="Build config YAML (default: configs/build.yaml)",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show all converter warnings and raw converter output in the log",
        ),
    ] = False,
):
    """
    Render the Markdown source to PDF.

    Runs pandoc with the eisvogel template and listings enabled, replacing any
    previously generated PDF.

    Examples:\n

        $ build_pdf.py all                      # Render

        $ build_pdf.py all --verbose            # Verbose log
    """
    options = _load_options(config)

    typer.secho(f"\nRendering: {display_path(options.source_path)}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Template: {options.template or '(pandoc default)'}")
    typer.echo(f"Listings: {'on' if options.listings else 'off'}")
    typer.echo("")

    try:
        result = build_document(options, verbose=verbose)
    except ConversionError as e:
        typer.secho(f"\n✗ Conversion failed: {e}\n", fg=typer.colors.RED, bold=True, err=True)
        raise typer.Exit(code=1)
    except RenderingError as e:
        typer.secho(f"\n✗ Could not write output: {e}\n", fg=typer.colors.RED, bold=True, err=True)
        raise typer.Exit(code=1)

    typer.echo("")
    typer.secho("✓ Render succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  pandoc warnings: {len(result.warnings)}")
    if verbose and result.warnings:
        for warning in result.warnings[:10]:
            typer.echo(f"  - {warning}")
        if len(result.warnings) > 10:
            typer.echo(f"  ... and {len(result.warnings) - 10} more")
    if result.page_count is not None:
        typer.echo(f"  Pages: {result.page_count}")
    typer.echo(f"  PDF: {display_path(result.output_path)}")
    if result.log_dir:
        typer.echo(f"  Log: {display_path(result.log_dir / 'render.log')}")
    typer.echo("")


@app.command("clean")
def clean_command(
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Build config YAML (default: configs/build.yaml)"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Succeed even if the PDF does not exist"),
    ] = False,
):
    """
    Delete the generated PDF.

    Fails when there is nothing to delete unless --force is given.
    """
    options = _load_options(config)

    try:
        removed = clean_output(options.output_path, missing_ok=force)
    except RenderingError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if removed:
        typer.secho(f"✓ Removed {display_path(options.output_path)}", fg=typer.colors.GREEN)
    else:
        typer.echo(f"Nothing to remove: {display_path(options.output_path)}")


@app.command("validate")
def validate_command(
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Build config YAML (default: configs/build.yaml)"),
    ] = None,
):
    """
    Validate the generated PDF.

    Checks that the PDF parses, has pages, and that its title matches the
    title in the source's metadata header.
    """
    options = _load_options(config)

    typer.secho(f"\nValidating: {display_path(options.output_path)}", fg=typer.colors.BLUE, bold=True)

    metadata = None
    if options.source_path.is_file():
        try:
            metadata = read_front_matter(options.source_path)
        except ConversionError as e:
            typer.secho(f"Warning: metadata not checked: {e}", fg=typer.colors.YELLOW, err=True)

    try:
        result = validate_pdf(options.output_path, metadata=metadata)
    except NotFoundError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if result.is_valid:
        typer.secho("\n✓ Validation passed", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho("\n✗ Validation failed", fg=typer.colors.RED, bold=True)
        for issue in result.issues:
            typer.secho(f"  - {issue}", fg=typer.colors.RED)
    typer.echo(f"  Page count: {result.page_count}")
    typer.echo("")

    raise typer.Exit(code=0 if result.is_valid else 1)


if __name__ == "__main__":
    app()
