"""
CLI commands for looking at resource schemas without generating anything.

Thin wrappers over ``resourcegen.core.services.extractor``.
"""

from __future__ import annotations

import json
import sys

import click

from resourcegen.core.context import resolve_project_root
from resourcegen.core.models.config import CodegenConfig


def _config(ctx: click.Context) -> CodegenConfig:
    return (ctx.obj or {}).get("config") or CodegenConfig()


@click.command("inspect")
@click.argument("name")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def inspect_resource(ctx: click.Context, name: str, as_json: bool) -> None:
    """Show what the extractor reads from a resource schema."""
    from resourcegen.core.errors import CodegenError
    from resourcegen.core.services.extractor import extract_file

    cfg = _config(ctx)
    path = resolve_project_root() / cfg.schema_path(name)
    try:
        descriptor = extract_file(path, factory=cfg.factory)
    except CodegenError as e:
        if as_json:
            click.echo(json.dumps({"error": str(e)}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(descriptor.model_dump(mode="json"), indent=2))
        return

    click.secho(f"\n🧩 {descriptor.name}", fg="cyan", bold=True)
    click.echo(f"   Plural:      {descriptor.plural_name}")
    click.echo(f"   Variable:    {descriptor.var_name}")
    click.echo(f"   Data source: {descriptor.data_source}")
    if descriptor.description:
        click.echo(f"   {descriptor.description}")
    click.echo()

    click.secho(f"   Fields ({len(descriptor.fields)}):", fg="white", bold=True)
    for f in descriptor.fields:
        optional = "?" if f.is_optional else " "
        flags = [flag for flag, on in (("hidden", f.hidden), ("read-only", f.read_only)) if on]
        extra = f"  [{', '.join(flags)}]" if flags else ""
        click.echo(f"     • {f.name}{optional} {f.base_kind:<8} {f.input_type:<9} {f.label}{extra}")
        if f.enum_values:
            click.echo(f"         values: {', '.join(f.enum_values)}")

    unknown = descriptor.unrecognized_config_keys
    if unknown:
        click.echo()
        click.secho("⚠️  Config keys not interpreted:", fg="yellow")
        for key in unknown:
            click.echo(f"   • {key}")
    click.echo()


@click.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_resources(ctx: click.Context, as_json: bool) -> None:
    """List the resource schemas in the project."""
    from resourcegen.core.services.extractor import discover_schema_files, resource_name_for

    cfg = _config(ctx)
    root = resolve_project_root()
    names = [resource_name_for(p, cfg) for p in discover_schema_files(root, cfg)]

    if as_json:
        click.echo(json.dumps({"schemas_dir": cfg.schemas_dir, "resources": names}, indent=2))
        return

    if not names:
        click.secho(f"No resource schemas found in {cfg.schemas_dir}.", fg="yellow")
        return

    click.secho(f"📦 Resources ({len(names)}):", fg="cyan", bold=True)
    for name in names:
        click.echo(f"   • {name}")
    click.echo()
