"""
cmake-index — CLI entrypoint.

Usage:
    python -m cmake_index.main --help
    python -m cmake_index.main list
    python -m cmake_index.main show ECM
    python -m cmake_index.main --prefix /mingw64 prefix
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from cmake_index import __version__
from cmake_index.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="cmake-index")
@click.option("--verbose", "-v", is_flag=True, help="Log scan progress.")
@click.option("--quiet", "-q", is_flag=True, help="Only log errors.")
@click.option("--debug", is_flag=True, help="Log every skipped file and directory.")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to cmake-index.yml (default: auto-detect).",
)
@click.option(
    "--prefix",
    "-p",
    type=click.Path(file_okay=False),
    default=None,
    help="Installation prefix to scan (default: $MSYSTEM_PREFIX, then $CMAKE_PREFIX_PATH).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    prefix: str | None,
) -> None:
    """CMake package index — find what find_package() can see under a prefix."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = Path(config_path) if config_path else None
    ctx.obj["prefix"] = Path(prefix).absolute() if prefix else None

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("CMAKE_INDEX_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("CMAKE_INDEX_LOG_FILE"),
        log_file_level=os.environ.get("CMAKE_INDEX_LOG_FILE_LEVEL"),
    )


def _run(ctx: click.Context, build: bool = True):
    from cmake_index.core.use_cases.index import run_index

    return run_index(
        config_path=ctx.obj.get("config_path"),
        prefix=ctx.obj.get("prefix"),
        build=build,
    )


@cli.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_packages(ctx: click.Context, as_json: bool) -> None:
    """List every package in the index."""
    result = _run(ctx)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    if not result.configured:
        click.secho(
            "⚠️  No prefix configured (set MSYSTEM_PREFIX or CMAKE_PREFIX_PATH, or pass --prefix)",
            fg="yellow",
        )
        return

    index = result.index
    assert index is not None  # guaranteed once a prefix is configured

    click.secho(f"\n📦 CMake packages: {index.prefix}", fg="cyan", bold=True)
    click.echo(f"   Packages: {len(index)}")
    click.echo()

    for package in index:
        kind = "dir " if package.is_dir else "file"
        version_label = f" v{package.version}" if package.version else ""
        click.echo(f"   {kind}  {package.name}{version_label}")
        if ctx.obj.get("verbose"):
            click.echo(f"         → {package.location}")

    click.echo()


@cli.command()
@click.argument("name")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show(ctx: click.Context, name: str, as_json: bool) -> None:
    """Show one package: location, version and navigation targets."""
    result = _run(ctx)

    if result.error:
        if as_json:
            click.echo(json.dumps(result.to_dict(), indent=2))
        else:
            click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    package = result.index.get(name) if result.index is not None else None

    if package is None:
        if as_json:
            click.echo(json.dumps({"error": f"Package not found: {name}"}, indent=2))
        else:
            click.secho(f"❌ Package not found: {name}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(package.to_dict(), indent=2))
        return

    click.secho(f"\n📦 {package.name}", fg="cyan", bold=True)
    click.echo(f"   Type:     {package.filetype.value}")
    click.echo(f"   Version:  {package.version or '—'}")
    click.echo(f"   Location: {package.location}")
    if package.navigation_targets:
        click.echo("   Files:")
        for target in package.navigation_targets:
            click.echo(f"     • {target}")
    click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def prefix(ctx: click.Context, as_json: bool) -> None:
    """Show the resolved prefix and which library roots exist."""
    result = _run(ctx, build=False)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    if not result.configured:
        click.secho("⚠️  No prefix configured", fg="yellow")
        return

    assert result.config is not None  # guaranteed by the configured check above
    click.secho(f"📁 Prefix: {result.config.prefix}", fg="cyan", bold=True)
    if not result.library_roots:
        click.echo("   No library roots found")
    for root in result.library_roots:
        click.echo(f"   • {root}")


if __name__ == "__main__":
    cli()
