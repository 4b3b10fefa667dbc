"""
Hub targets — the five shared files every resource is registered in.

Order matters: later hubs reference identifiers exported by earlier
ones (the registry imports the schema var, the db client imports the
collection from the collections barrel).
"""

from __future__ import annotations

import re

from resourcegen.core.models.config import CodegenConfig
from resourcegen.core.models.descriptor import ResourceDescriptor
from resourcegen.core.models.wiring import ImportLine, WiringTarget
from resourcegen.core.services.producers.common import ts_str

HUB_HEADER = "// AUTO-UPDATED by resourcegen - entries are added below the marker comments\n"

SCHEMAS_MARKER = "// === RESOURCE EXPORTS (auto-generated) ==="
COLLECTIONS_MARKER = "// === COLLECTION EXPORTS (auto-generated) ==="
REGISTRY_MARKER = "// === REGISTRY ENTRIES ==="
DB_CLIENT_MARKER = "// === COLLECTIONS ==="
NAVIGATION_MARKER = "// === RESOURCE NAV ITEMS ==="

_ANY_IMPORT = re.compile(r"^import .+ from .+$", re.MULTILINE)
_SCHEMA_IMPORT = re.compile(r"^.*from '@/schemas.*$", re.MULTILINE)
_COLLECTION_IMPORT = re.compile(r"^.*from '@/collections.*$", re.MULTILINE)
_LUCIDE_CLOSE = re.compile(r"^\} from 'lucide-react'", re.MULTILINE)


def _reexports(content: str, module: str) -> bool:
    """Is there an ``export ... from './module'`` line, in either quote style?"""
    pattern = rf"^\s*export\b[^\n]*\bfrom\s*['\"]\./{re.escape(module)}['\"]"
    return re.search(pattern, content, re.MULTILINE) is not None


def _below(content: str, marker: str) -> str:
    """The part of *content* after *marker*, or all of it when the marker is gone."""
    pos = content.find(marker)
    return content if pos == -1 else content[pos:]


def _imports(content: str, ident: str, source: str | None = None) -> bool:
    """Is *ident* named inside an ``import { ... }`` (optionally from *source*)?"""
    tail = rf"\s*from\s*'{re.escape(source)}'" if source else r"\s*from"
    pattern = rf"^import\s+(?:type\s+)?\{{[^}}]*\b{re.escape(ident)}\b[^}}]*\}}{tail}"
    return re.search(pattern, content, re.MULTILINE) is not None


# ── 1. Schemas barrel ───────────────────────────────────────────


def _schema_export(d: ResourceDescriptor) -> str:
    return f"export {{ {d.var_name} }} from './{d.name}.schema'"


def _schemas_barrel(config: CodegenConfig) -> WiringTarget:
    base_module = config.base_schema.removesuffix(".ts")
    return WiringTarget(
        name="schemas_barrel",
        hub_path=config.hubs.schemas_barrel,
        marker=SCHEMAS_MARKER,
        render_entry=_schema_export,
        probe=lambda content, d: _reexports(content, f"{d.name}.schema"),
        skeleton=f"{HUB_HEADER}export * from './{base_module}'\n\n{SCHEMAS_MARKER}\n",
    )


# ── 2. Collections barrel ───────────────────────────────────────


def _collection_export(d: ResourceDescriptor) -> str:
    if d.is_parquet:
        return f"export * from './{d.plural_name}.collection'"
    return f"export {{ {d.collection_name}, type {d.type_name} }} from './{d.plural_name}.collection'"


def _collections_barrel(config: CodegenConfig) -> WiringTarget:
    return WiringTarget(
        name="collections_barrel",
        hub_path=config.hubs.collections_barrel,
        marker=COLLECTIONS_MARKER,
        render_entry=_collection_export,
        probe=lambda content, d: _reexports(content, f"{d.plural_name}.collection"),
        skeleton=f"{HUB_HEADER}\n{COLLECTIONS_MARKER}\n",
    )


# ── 3. Registry ─────────────────────────────────────────────────


def _registry_entry(d: ResourceDescriptor) -> str:
    lines = [
        f"  {d.name}: {{",
        f"    config: {d.var_name}.config,",
    ]
    if not d.is_parquet:
        lines.append(f"    collection: {d.collection_name},")
    lines += [
        f"    dataSource: '{d.data_source}',",
        "    routes: {",
        f"      list: '/{d.plural_name}',",
        f"      new: '/{d.plural_name}/new',",
        f"      edit: (id: string) => `/{d.plural_name}/${{id}}`,",
        "    },",
        "  },",
    ]
    return "\n".join(lines)


def _registry_has(content: str, d: ResourceDescriptor) -> bool:
    # Entries sit at two-space indent below the marker; nested keys are deeper
    pattern = rf"^  {re.escape(d.name)}\s*:\s*\{{"
    return re.search(pattern, _below(content, REGISTRY_MARKER), re.MULTILINE) is not None


def _route_taken(content: str, d: ResourceDescriptor) -> bool:
    return f"'/{d.plural_name}'" in content


_REGISTRY_SKELETON = (
    HUB_HEADER
    + "\n"
    "import type { ResourceConfig } from '@/schemas/_resource.schema'\n"
    "\n"
    "export type ResourceEntry = {\n"
    "  config: ResourceConfig & { pluralName: string }\n"
    "  collection?: unknown\n"
    "  dataSource: 'json' | 'parquet'\n"
    "  routes: {\n"
    "    list: string\n"
    "    new: string\n"
    "    edit: (id: string) => string\n"
    "  }\n"
    "}\n"
    "\n"
    "export const resourceRegistry: Record<string, ResourceEntry> = {\n"
    f"  {REGISTRY_MARKER}\n"
    "}\n"
)


def _registry(config: CodegenConfig) -> WiringTarget:
    return WiringTarget(
        name="registry",
        hub_path=config.hubs.registry,
        marker=REGISTRY_MARKER,
        render_entry=_registry_entry,
        probe=_registry_has,
        skeleton=_REGISTRY_SKELETON,
        imports=(
            ImportLine(
                render=lambda d: f"import {{ {d.var_name} }} from '@/schemas/{d.name}.schema'",
                present=lambda content, d: _imports(content, d.var_name),
                anchor=_SCHEMA_IMPORT,
            ),
            ImportLine(
                render=lambda d: f"import {{ {d.collection_name} }} from '@/collections'",
                present=lambda content, d: _imports(content, d.collection_name),
                anchor=_ANY_IMPORT,
                applies=lambda d: not d.is_parquet,
            ),
        ),
        collision=_route_taken,
    )


# ── 4. Client-state wiring (db client) ──────────────────────────


def _db_entry(d: ResourceDescriptor) -> str:
    return f"    {d.plural_name}: {d.collection_name},"


def _db_client_has(content: str, d: ResourceDescriptor) -> bool:
    pattern = rf"^\s*{re.escape(d.plural_name)}\s*:\s*{re.escape(d.collection_name)}\b"
    return re.search(pattern, content, re.MULTILINE) is not None


_DB_CLIENT_SKELETON = (
    HUB_HEADER
    + "\n"
    "import { createDbClient } from '@tanstack/db'\n"
    "import { queryClient } from './query-client'\n"
    "\n"
    "export const db = createDbClient({\n"
    "  queryClient,\n"
    "  collections: {\n"
    f"    {DB_CLIENT_MARKER}\n"
    "  },\n"
    "})\n"
    "\n"
    "export type DbCollections = typeof db.collections\n"
)


def _db_client(config: CodegenConfig) -> WiringTarget:
    return WiringTarget(
        name="db_client",
        hub_path=config.hubs.db_client,
        marker=DB_CLIENT_MARKER,
        render_entry=_db_entry,
        probe=_db_client_has,
        skeleton=_DB_CLIENT_SKELETON,
        imports=(
            ImportLine(
                render=lambda d: f"import {{ {d.collection_name} }} from '@/collections'",
                present=lambda content, d: _imports(content, d.collection_name),
                anchor=_COLLECTION_IMPORT,
                fallback=_ANY_IMPORT,
            ),
        ),
        applies=lambda d: not d.is_parquet,
    )


# ── 5. Navigation ───────────────────────────────────────────────


_NAVIGATION_SKELETON = (
    HUB_HEADER
    + "\n"
    "import {\n"
    "  type LucideIcon,\n"
    "} from 'lucide-react'\n"
    "\n"
    "export type NavItem = {\n"
    "  title: string\n"
    "  href: string\n"
    "  icon: LucideIcon\n"
    "  description?: string\n"
    "}\n"
    "\n"
    "export const resourceNavItems: NavItem[] = [\n"
    f"  {NAVIGATION_MARKER}\n"
    "]\n"
)


def _navigation(config: CodegenConfig) -> WiringTarget:
    def icon(d: ResourceDescriptor) -> str:
        return d.icon or config.default_icon

    def entry(d: ResourceDescriptor) -> str:
        description = d.description or f"Manage {d.plural_name}"
        return (
            "    {\n"
            f"      title: {ts_str(d.display_name)},\n"
            f"      href: '/{d.plural_name}',\n"
            f"      icon: {icon(d)},\n"
            f"      description: {ts_str(description)},\n"
            "    },"
        )

    return WiringTarget(
        name="navigation",
        hub_path=config.hubs.navigation,
        marker=NAVIGATION_MARKER,
        render_entry=entry,
        probe=lambda content, d: f"href: '/{d.plural_name}'" in content,
        skeleton=_NAVIGATION_SKELETON,
        imports=(
            ImportLine(
                render=lambda d: f"  {icon(d)},",
                present=lambda content, d: _imports(content, icon(d), "lucide-react"),
                anchor=_LUCIDE_CLOSE,
                position="before_first",
            ),
        ),
    )


def default_targets(config: CodegenConfig | None = None) -> list[WiringTarget]:
    """The hub targets in dependency order."""
    cfg = config or CodegenConfig()
    return [
        _schemas_barrel(cfg),
        _collections_barrel(cfg),
        _registry(cfg),
        _db_client(cfg),
        _navigation(cfg),
    ]
