"""
Aftman bootstrap — CLI entrypoint.

Usage:
    python -m aftman_bootstrap.main --help
    aftboot provision path/to/project
    aftboot platform
    aftboot release --json
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from aftman_bootstrap import __version__
from aftman_bootstrap.core.config.loader import BootstrapConfig, ConfigError, load_config
from aftman_bootstrap.core.observability.logging_config import resolve_level, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="aftboot")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to aftman-bootstrap.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Aftman bootstrap — install Aftman and make a tool available in a project."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(level=resolve_level(debug=debug, verbose=verbose, quiet=quiet))


def _load_config(
    ctx: click.Context, as_json: bool, start_dir: Path | None = None
) -> BootstrapConfig:
    try:
        return load_config(ctx.obj.get("config_path"), start_dir=start_dir)
    except ConfigError as e:
        if as_json:
            click.echo(json.dumps({"error": {"kind": "config_error", "message": str(e)}}))
        else:
            click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


@cli.command()
@click.argument(
    "folder",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def provision(ctx: click.Context, folder: Path, as_json: bool) -> None:
    """Install Aftman if needed and ensure the tool is available in FOLDER."""
    from aftman_bootstrap.core.use_cases.provision import run_provision

    config = _load_config(ctx, as_json, start_dir=folder)
    quiet = ctx.obj.get("quiet", False)

    def notify(message: str) -> None:
        if not as_json and not quiet:
            click.secho(f"ℹ️  {message}", fg="cyan")

    result = run_provision(folder, config=config, notify=notify)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if not result.ok:
        assert result.error is not None
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    if not quiet:
        click.secho(
            f"✅ {config.tool.name} is available in {result.folder}", fg="green", bold=True
        )
        for command in result.commands:
            click.echo(f"   • {command.display}")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def platform(as_json: bool) -> None:
    """Show the release platform/arch this host resolves to."""
    from aftman_bootstrap.core.use_cases.inspect_release import inspect_platform

    report = inspect_platform()

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        sys.exit(1 if report.error else 0)

    if report.error:
        click.secho(f"❌ {report.error}", fg="red")
        sys.exit(1)

    assert report.key is not None
    click.echo(f"{report.key.platform}-{report.key.arch}")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def release(ctx: click.Context, as_json: bool) -> None:
    """Fetch the latest Aftman release and show the asset for this host."""
    from aftman_bootstrap.core.use_cases.inspect_release import inspect_release

    config = _load_config(ctx, as_json)
    report = inspect_release(config)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        sys.exit(1 if report.error else 0)

    if report.release:
        click.secho(f"\n📦 {report.release.label}", fg="cyan", bold=True)
        for asset in report.release.assets:
            marker = " ←" if report.asset and asset.name == report.asset.name else ""
            click.echo(f"     • {asset.name}{marker}")
        click.echo()

    if report.error:
        click.secho(f"❌ {report.error}", fg="red")
        sys.exit(1)


if __name__ == "__main__":
    cli()
