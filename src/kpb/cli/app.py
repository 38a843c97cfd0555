# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typer application exposing saved-project inspection and generation."""

from __future__ import annotations

from pathlib import Path

import typer

from ..config import ConfigError, KpbConfig, load_config
from ..errors import ErrorKind, KpbError
from ..filesystem import generate_project
from ..logging import configure_logging
from ..persistence import api
from .shared import CLIError, CLILogger, build_cli_logger, unwrap_outcome

app = typer.Typer(
    name="kpb",
    help="Inspect, convert and generate saved Kotlin/Gradle project descriptions.",
    no_args_is_help=True,
    add_completion=False,
)


def _context_config(ctx: typer.Context) -> KpbConfig:
    config = ctx.obj
    if not isinstance(config, KpbConfig):
        config = load_config()
        ctx.obj = config
    return config


def _logger(ctx: typer.Context) -> CLILogger:
    return build_cli_logger(emoji=_context_config(ctx).emoji)


@app.callback()
def main(
    ctx: typer.Context,
    root: Path | None = typer.Option(None, "--root", "-r", help="Directory holding pyproject.toml / kpb.toml."),
    log_level: str | None = typer.Option(None, "--log-level", help="Library log level (DEBUG, INFO, ...)."),
    emoji: bool | None = typer.Option(None, "--emoji/--no-emoji", help="Toggle emoji in console output."),
) -> None:
    """Load configuration and set up logging for every command."""

    try:
        config = load_config(root, overrides={"log_level": log_level, "emoji": emoji})
    except ConfigError as exc:
        build_cli_logger(emoji=False).fail(str(exc))
        raise typer.Exit(code=1) from exc
    configure_logging(config.log_level)
    ctx.obj = config


@app.command("show")
def show(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Saved project file or folder."),
) -> None:
    """Print the structure of a saved project."""

    logger = _logger(ctx)
    try:
        project = unwrap_outcome(api.load_any(path), action=f"load '{path}'")
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    for line in project.structure():
        logger.echo(line)


@app.command("verify")
def verify(
    ctx: typer.Context,
    folder: Path = typer.Argument(..., help="Project folder containing project.json and files/."),
) -> None:
    """Load a project folder and check every stored body against its checksum."""

    logger = _logger(ctx)
    logger.info(f"Verifying checksums under '{folder}'")
    outcome = api.load_folder(folder)
    if outcome.kind is ErrorKind.PERSISTENCE_INTEGRITY:
        logger.fail(f"Integrity check failed for '{folder}': {outcome.error}")
        raise typer.Exit(code=1)
    try:
        project = unwrap_outcome(outcome, action=f"load '{folder}'")
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    logger.ok(f"Project '{project.name}' verified ({len(project.modules)} modules)")


@app.command("convert")
def convert(
    ctx: typer.Context,
    source: Path = typer.Argument(..., help="Saved project file or folder."),
    destination: Path = typer.Argument(..., help="Where to write the converted project."),
    folder: bool | None = typer.Option(
        None,
        "--folder/--inline",
        help="Write a checksummed folder or a single JSON file (default from config).",
    ),
) -> None:
    """Re-save a project in folder or inline form."""

    logger = _logger(ctx)
    as_folder = _context_config(ctx).folder_format if folder is None else folder
    try:
        project = unwrap_outcome(api.load_any(source), action=f"load '{source}'")
        saver = api.save_folder if as_folder else api.save_inline
        written = unwrap_outcome(saver(project, destination), action=f"save '{destination}'")
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    logger.ok(f"Saved '{project.name}' to {written} ({'folder' if as_folder else 'inline'})")


@app.command("generate")
def generate(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Saved project file or folder."),
    out: Path | None = typer.Option(None, "--out", "-o", help="Output root (default from config)."),
) -> None:
    """Render a saved project into a Gradle source tree."""

    logger = _logger(ctx)
    target_root = _context_config(ctx).output_root if out is None else out
    try:
        project = unwrap_outcome(api.load_any(path), action=f"load '{path}'")
        if (target_root / project.name).exists():
            logger.warn(f"Overwriting existing files in {target_root / project.name}")
        destination = generate_project(project, target_root)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    except KpbError as exc:
        logger.fail(f"Failed to generate '{path}' [{exc.kind.value}]: {exc.message}")
        raise typer.Exit(code=1) from exc
    logger.ok(f"Generated '{project.name}' in {destination}")


__all__ = ["app"]
