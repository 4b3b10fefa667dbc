"""
resourcegen — CLI entrypoint.

Usage:
    python -m resourcegen.main --help
    python -m resourcegen.main generate order
    python -m resourcegen.main generate order --only form --force
    python -m resourcegen.main generate-all
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from resourcegen import __version__
from resourcegen.core.models.artifact import WriteOutcome
from resourcegen.core.models.wiring import WiringOutcome
from resourcegen.core.observability.logging_config import TAG_ENV, resolve_level, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="resourcegen")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to codegen.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """resourcegen — generate and wire resources from their schema files."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(
            debug=debug,
            verbose=verbose,
            quiet=quiet,
            env_level=os.environ.get("RGEN_LOG_LEVEL"),
        ),
        log_file=os.environ.get("RGEN_LOG_FILE"),
        log_file_level=os.environ.get("RGEN_LOG_FILE_LEVEL"),
        tag=os.environ.get(TAG_ENV),
    )

    # ── Config + project root ───────────────────────────────────
    from resourcegen.core.config.loader import ConfigError, find_config_file, load_config, project_root
    from resourcegen.core.context import set_project_root

    cfg_path = Path(config_path) if config_path else find_config_file()
    ctx.obj["config_path"] = cfg_path
    try:
        ctx.obj["config"] = load_config(cfg_path)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    set_project_root(project_root(cfg_path))


def _global_args(ctx: click.Context) -> list[str]:
    """Group flags to forward to child generator processes."""
    args: list[str] = []
    if ctx.obj.get("debug"):
        args.append("--debug")
    elif ctx.obj.get("verbose"):
        args.append("--verbose")
    elif ctx.obj.get("quiet"):
        args.append("--quiet")
    return args


def _echo_write(outcome: WriteOutcome) -> None:
    if outcome.written:
        click.secho(f"   ✅ Created {outcome.path}", fg="green")
    elif outcome.skipped:
        click.secho(f"   ⏭️  Skipped {outcome.path} (exists — use --force to overwrite)", fg="yellow")
    elif outcome.failed:
        click.secho(f"   ❌ {outcome.path}: {outcome.error}", fg="red")


def _echo_wiring(outcome: WiringOutcome, quiet: bool) -> None:
    if outcome.status == "created":
        click.secho(f"   🆕 Created {outcome.path}", fg="green")
    elif outcome.status == "updated":
        click.secho(f"   🔗 Updated {outcome.path}", fg="green")
    elif outcome.status == "unchanged" and not quiet:
        click.echo(f"   · {outcome.path} already wired")
    elif outcome.status == "marker_missing":
        click.secho(f"   ⚠️  {outcome.path}: {outcome.message} — left unchanged", fg="yellow")
    elif outcome.status == "failed":
        click.secho(f"   ❌ {outcome.path}: {outcome.message}", fg="red")


# ── Generate ────────────────────────────────────────────────────


@cli.command()
@click.argument("name", required=False)
@click.option("--force", is_flag=True, help="Overwrite existing artifact files.")
@click.option("--only", "only", default=None, metavar="KIND", help="Generate only one artifact kind.")
@click.option("--skip-wiring", is_flag=True, help="Do not update the hub files.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(
    ctx: click.Context,
    name: str | None,
    force: bool,
    only: str | None,
    skip_wiring: bool,
    as_json: bool,
) -> None:
    """Generate artifacts for one resource and wire it into the hubs."""
    if not name:
        click.echo(ctx.get_usage(), err=True)
        click.secho("❌ Missing resource name, e.g. `resourcegen generate order`", fg="red", err=True)
        sys.exit(1)

    from resourcegen.core.models.artifact import GenerateOptions
    from resourcegen.core.use_cases.generate import generate_resource

    result = generate_resource(
        name,
        GenerateOptions(force=force, only=only, skip_wiring=skip_wiring),
        config=ctx.obj.get("config"),
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    quiet = ctx.obj.get("quiet", False)
    if not quiet:
        click.secho(f"\n🧩 Generating {name}", fg="cyan", bold=True)

    if result.writes:
        for outcome in result.writes:
            _echo_write(outcome)
    elif only:
        click.secho(f"   No artifacts of kind '{only}'", fg="yellow")

    if result.wiring_skipped:
        if not quiet:
            click.echo("   · Wiring skipped")
    else:
        for outcome in result.wiring:
            _echo_wiring(outcome, quiet)

    if not quiet:
        click.echo()
        click.echo(f"   {result.written} written, {result.skipped} skipped, {result.failed} failed")
        click.echo()


@cli.command("generate-all")
@click.option("--force", is_flag=True, help="Overwrite existing artifact files.")
@click.option("--only", "only", default=None, metavar="KIND", help="Generate only one artifact kind.")
@click.option("--skip-wiring", is_flag=True, help="Do not update the hub files.")
@click.pass_context
def generate_all_cmd(ctx: click.Context, force: bool, only: str | None, skip_wiring: bool) -> None:
    """Generate every resource found in the schemas directory."""
    from resourcegen.core.models.artifact import GenerateOptions
    from resourcegen.core.use_cases.generate_all import generate_all

    config_path: Path | None = ctx.obj.get("config_path")
    report = generate_all(
        GenerateOptions(force=force, only=only, skip_wiring=skip_wiring),
        config=ctx.obj.get("config"),
        config_path=config_path.resolve() if config_path else None,
        global_args=_global_args(ctx),
    )

    if not report.resources:
        click.secho("No resource schemas found.", fg="yellow")
        return

    click.secho(f"\n📦 {len(report.resources)} resource(s): {', '.join(report.resources)}", fg="cyan", bold=True)
    click.echo()

    if report.failures:
        click.secho(f"❌ {len(report.failures)} failed:", fg="red", bold=True)
        for failure in report.failures:
            click.echo(f"   • {failure}")
        click.echo()
        sys.exit(1)

    click.secho(f"✅ Generated {len(report.succeeded)} resource(s)", fg="green", bold=True)
    click.echo()


# ── Register command groups ─────────────────────────────────────

from resourcegen.ui.cli.resources import inspect_resource, list_resources  # noqa: E402

cli.add_command(inspect_resource)
cli.add_command(list_resources)


if __name__ == "__main__":
    cli()
