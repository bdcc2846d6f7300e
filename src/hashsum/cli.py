"""Command line interface for hashsum."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import click

from hashsum.config import ConfigError, ConfigManager, HashsumConfig
from hashsum.logging_setup import configure_logging
from hashsum.pipeline import (
    FatalPipelineError,
    ListingFailedError,
    PipelineOrchestrator,
    ScanRequest,
)


def _load_config(config_path: Path | None, *, verbose: bool) -> HashsumConfig:
    """Resolve configuration for a run.

    Args:
        config_path: Explicit configuration file, if one was given.
        verbose: Whether debug logging was requested on the command line.

    Returns:
        HashsumConfig: Resolved configuration.

    Raises:
        click.ClickException: If the configuration cannot be loaded.
    """
    overrides: dict[str, Any] = {}
    if verbose:
        overrides["logging.level"] = "DEBUG"
    try:
        return ConfigManager(config_path).load(cli_overrides=overrides or None)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


def _emit_line(line: str) -> None:
    # Names may carry bytes that are not valid in the locale encoding.
    click.echo(os.fsencode(line), nl=False)


@click.command(
    name="hashsum",
    context_settings={"help_option_names": ["-h", "--help"]},
    options_metavar="[-i ignoreprefix] [OPTIONS]",
)
@click.version_option(package_name="hashsum")
@click.argument("directory", metavar="<directory>")
@click.option(
    "-i",
    "--ignore",
    "ignore_prefixes",
    multiple=True,
    metavar="PREFIX",
    help="Skip entries whose names start with PREFIX (case-insensitive).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Read settings from this YAML file instead of ~/.hashsum/config.yaml.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log pipeline activity to stderr.")
@click.pass_context
def cli(
    ctx: click.Context,
    directory: str,
    ignore_prefixes: tuple[str, ...],
    config_path: Path | None,
    verbose: bool,
) -> None:
    """Print the MD5 hash and file type of every entry in DIRECTORY.

    Each line has the form ``name hash type``. Entries the hashing or type
    detection tools cannot handle, such as subdirectories, are left out.
    """
    if len(ignore_prefixes) > 1:
        raise click.UsageError("Option '-i' may only be given once.", ctx=ctx)
    ignore_prefix = ignore_prefixes[0] if ignore_prefixes else None

    config = _load_config(config_path, verbose=verbose)
    try:
        configure_logging(config.logging.level)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc

    orchestrator = PipelineOrchestrator(
        ScanRequest(directory=directory, ignore_prefix=ignore_prefix),
        config,
    )
    try:
        orchestrator.run(_emit_line)
    except ListingFailedError:
        click.echo(ctx.get_usage(), err=True)
        ctx.exit(1)
    except FatalPipelineError as exc:
        raise click.ClickException(str(exc)) from exc


def main() -> None:
    """Invoke the Click CLI as the console script entry point."""
    cli()


if __name__ == "__main__":
    main()
