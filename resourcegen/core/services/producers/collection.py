"""
Collection producer — the client-side data access module for a resource.

JSON resources get a TanStack DB collection backed by the REST API.
Parquet resources get query hooks over the parquet file instead; they
have no collection object and are not registered with the db client.
"""

from __future__ import annotations

from resourcegen.core.models.descriptor import ResourceDescriptor
from resourcegen.core.services.producers.common import HEADER, ts_str


def produce_collection(descriptor: ResourceDescriptor) -> str:
    if descriptor.is_parquet:
        return _parquet_collection(descriptor)
    return _api_collection(descriptor)


def _api_collection(d: ResourceDescriptor) -> str:
    api = d.api_base_path
    sync_mode = d.config.get("syncMode")
    sync_line = f"    syncMode: {ts_str(sync_mode)},\n" if isinstance(sync_mode, str) else ""
    return (
        HEADER
        + "import { createCollection } from '@tanstack/react-db'\n"
        "import { queryCollectionOptions } from '@tanstack/query-db-collection'\n"
        "import { apiClient } from '@/api/client'\n"
        "import { queryClient } from '@/lib/query-client'\n"
        f"import {{ {d.var_name} }} from '@/schemas/{d.name}.schema'\n"
        "\n"
        f"export type {d.type_name} = typeof {d.var_name}.type\n"
        "\n"
        f"export const {d.collection_name} = createCollection(\n"
        "  queryCollectionOptions({\n"
        f"    id: {ts_str(d.plural_name)},\n"
        f"    queryKey: [{ts_str(d.plural_name)}],\n"
        "    queryClient,\n"
        f"    schema: {d.var_name}.schema,\n"
        f"    getKey: (item: {d.type_name}) => item.{d.primary_key},\n"
        f"{sync_line}"
        "    queryFn: async () => {\n"
        f"      const res = await apiClient.get<{d.type_name}[]>({ts_str(api)})\n"
        "      return res.data\n"
        "    },\n"
        "    onInsert: async ({ transaction }) => {\n"
        "      await Promise.all(\n"
        f"        transaction.mutations.map((m) => apiClient.post({ts_str(api)}, m.modified))\n"
        "      )\n"
        "    },\n"
        "    onUpdate: async ({ transaction }) => {\n"
        "      await Promise.all(\n"
        "        transaction.mutations.map((m) =>\n"
        f"          apiClient.patch(`{api}/${{m.key}}`, m.changes)\n"
        "        )\n"
        "      )\n"
        "    },\n"
        "    onDelete: async ({ transaction }) => {\n"
        "      await Promise.all(\n"
        f"        transaction.mutations.map((m) => apiClient.delete(`{api}/${{m.key}}`))\n"
        "      )\n"
        "    },\n"
        "  })\n"
        ")\n"
    )


def _parquet_collection(d: ResourceDescriptor) -> str:
    plural = d.display_name
    return (
        HEADER
        + "import { useDuckDBQuery, useWindowedQuery } from '@/hooks/use-duckdb-query'\n"
        f"import {{ {d.var_name} }} from '@/schemas/{d.name}.schema'\n"
        "\n"
        f"export type {d.type_name} = typeof {d.var_name}.type\n"
        "\n"
        f"export const {d.plural_name}ParquetUrl =\n"
        f"  import.meta.env.VITE_{d.plural_name.upper()}_PARQUET_URL ?? "
        f"{ts_str('/data/' + d.plural_name + '.parquet')}\n"
        "\n"
        f"export function use{plural}(sql?: string) {{\n"
        f"  return useDuckDBQuery<{d.type_name}>({{\n"
        f"    url: {d.plural_name}ParquetUrl,\n"
        f"    sql: sql ?? `SELECT * FROM {d.plural_name}`,\n"
        f"    table: {ts_str(d.plural_name)},\n"
        "  })\n"
        "}\n"
        "\n"
        f"export function use{plural}Window(pageSize = 100) {{\n"
        f"  return useWindowedQuery<{d.type_name}>({{\n"
        f"    url: {d.plural_name}ParquetUrl,\n"
        f"    table: {ts_str(d.plural_name)},\n"
        "    pageSize,\n"
        "  })\n"
        "}\n"
    )
