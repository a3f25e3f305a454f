"""
hostprep — CLI entrypoint.

Usage:
    hostprep                 # provision everything (same as 'run')
    hostprep run
    hostprep status
    hostprep config check
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

import click

from hostprep import __version__
from hostprep.core.observability.logging_config import setup_logging

logger = logging.getLogger(__name__)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="hostprep")
@click.option("--verbose", "-v", is_flag=True, help="Show every command that runs.")
@click.option("--quiet", "-q", is_flag=True, help="Only show warnings and errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging with module and line.")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to hostprep.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """hostprep — install Docker, Docker Compose, Python and Django on this host."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug or verbose:
        level = "DEBUG"
    elif quiet:
        level = "WARNING"
    else:
        level = os.environ.get("HOSTPREP_LOG_LEVEL", "INFO")

    setup_logging(
        level=level,
        log_file=os.environ.get("HOSTPREP_LOG_FILE"),
        log_file_level=os.environ.get("HOSTPREP_LOG_FILE_LEVEL"),
        show_origin=debug,
    )

    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


def _load_config(ctx: click.Context):
    from hostprep.core.config.loader import ConfigError, load_config

    try:
        return load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        logger.error("%s", e)
        sys.exit(1)


def _print_summary(summary) -> None:
    click.echo()
    click.echo("Version check:")
    for label, value in summary.lines():
        click.echo(f"  {label + ':':<18}{value}")
    click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output the run report as JSON.")
@click.pass_context
def run(ctx: click.Context, as_json: bool = False) -> None:
    """Install and verify every tool (the default command)."""
    from hostprep.core.errors import HostprepError
    from hostprep.core.models.host import HostEnvironment
    from hostprep.core.use_cases.provision import provision

    config = _load_config(ctx)
    try:
        outcome = provision(config, HostEnvironment.from_environ())
    except HostprepError as e:
        logger.error("%s", e)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(outcome.to_dict(), indent=2))
        return

    _print_summary(outcome.summary)
    if outcome.report.group_changed:
        group = config.docker.group
        logger.warning("If you were just added to the %s group, log out/in or run 'newgrp %s'.", group, group)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show detected tool versions without installing anything."""
    from hostprep.core.use_cases.provision import summarize

    summary = summarize(_load_config(ctx))

    if as_json:
        click.echo(json.dumps(summary.to_dict(), indent=2))
        return

    _print_summary(summary)


@cli.group()
def config() -> None:
    """Configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate hostprep.yml."""
    from hostprep.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.config is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        if result.config_path:
            click.echo(f"   File: {result.config_path}")
        click.echo(f"   Python minimum: {result.config.python.minimum}")
        click.echo(f"   Framework: {result.config.framework.package}")
        click.echo(f"   Strict: {'yes' if result.config.strict else 'no'}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
