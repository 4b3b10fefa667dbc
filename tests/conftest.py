"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest

from resourcegen.core import context

WIDGET_SCHEMA = """\
import { z } from 'zod'
import { defineResource } from './_resource.schema'

// Lifecycle states; defineResource( in a comment is not a call
export const widgetStatusEnum = z.enum(['draft', 'active', 'retired'])

export const widgetResource = defineResource(
  {
    name: 'widget',
    icon: 'Box',
    description: 'Things we sell',
    primaryKey: 'id',
    form: {
      sections: [
        { title: 'Basics', fields: ['title', 'status'] },
        { title: 'Pricing', description: 'Money matters', fields: ['price'] },
      ],
    },
  },
  {
    id: z.string().meta({ hidden: true }),
    title: z.string().min(1).meta({ label: 'Title', placeholder: 'Widget name' }),
    status: widgetStatusEnum.optional(),
    price: z.coerce.number().meta({ inputType: 'currency', columnWidth: 120 }),
    active: z.boolean().default(true),
  },
)
"""

BASE_SCHEMA = """\
import { z } from 'zod'

export function defineResource<C, F>(config: C, fields: F) {
  return { config, fields }
}
"""

SCHEMAS_INDEX = """\
// AUTO-UPDATED by codegen
export * from './_resource.schema'

// === RESOURCE EXPORTS (auto-generated) ===
"""

COLLECTIONS_INDEX = """\
// AUTO-UPDATED by codegen

// === COLLECTION EXPORTS (auto-generated) ===
"""

REGISTRY = """\
// AUTO-UPDATED by codegen - imports and entries added here

import type { ResourceConfig } from '@/schemas/_resource.schema'

export type ResourceEntry = {
  config: ResourceConfig & { pluralName: string }
  collection?: unknown
  dataSource: 'json' | 'parquet'
}

export const resourceRegistry: Record<string, ResourceEntry> = {
  // === REGISTRY ENTRIES ===
}
"""

DB_CLIENT = """\
// AUTO-UPDATED by codegen - collection imports added here

import { createDbClient } from '@tanstack/db'
import { queryClient } from './query-client'

export const db = createDbClient({
  queryClient,
  collections: {
    // === COLLECTIONS ===
  },
})
"""

NAVIGATION = """\
// AUTO-UPDATED by codegen - nav items and icons added here

import {
  LayoutDashboard,
  Package,
  type LucideIcon,
} from 'lucide-react'

export const mainNavigation = [
  {
    title: 'Resources',
    items: [
      // === RESOURCE NAV ITEMS ===
    ],
  },
]
"""

HUB_FILES = {
    "src/schemas/index.ts": SCHEMAS_INDEX,
    "src/collections/index.ts": COLLECTIONS_INDEX,
    "src/lib/registry.ts": REGISTRY,
    "src/lib/db-client.ts": DB_CLIENT,
    "src/lib/navigation.ts": NAVIGATION,
}


def write(root: Path, rel: str, content: str) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _isolate_process_state(monkeypatch: pytest.MonkeyPatch):
    """Reset the registered project root and root-logger config per test."""
    monkeypatch.setattr(context, "_project_root", None)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """A project with the widget schema, the base schema and all five hubs."""
    write(tmp_path, "codegen.yml", "schemas_dir: src/schemas\n")
    write(tmp_path, "src/schemas/_resource.schema.ts", BASE_SCHEMA)
    write(tmp_path, "src/schemas/widget.schema.ts", WIDGET_SCHEMA)
    for rel, content in HUB_FILES.items():
        write(tmp_path, rel, content)
    return tmp_path


@pytest.fixture
def widget_source() -> str:
    return WIDGET_SCHEMA


@pytest.fixture
def hub_contents() -> dict[str, str]:
    """Pristine hub file contents, keyed by relative path."""
    return dict(HUB_FILES)
