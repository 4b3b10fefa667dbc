"""
Columns producer — table column definitions for the list view.

Columns follow ``config.table.columns`` when set, otherwise every
visible field in declaration order.
"""

from __future__ import annotations

from resourcegen.core.models.descriptor import FieldDescriptor, ResourceDescriptor
from resourcegen.core.services.producers.common import HEADER, ts_str

# inputType → cell helper from _column-helpers.tsx
_CELL_HELPERS = {
    "currency": "currencyCell",
    "date": "dateCell",
    "datetime": "dateTimeCell",
    "checkbox": "booleanCell",
    "select": "badgeCell",
}


def _columns(d: ResourceDescriptor) -> list[FieldDescriptor]:
    table = d.config.get("table")
    names = table.get("columns") if isinstance(table, dict) else None
    if isinstance(names, list) and names:
        return [f for f in (d.get_field(n) for n in names if isinstance(n, str)) if f is not None]
    return d.visible_fields()


def _column(f: FieldDescriptor) -> str:
    lines = [
        "  {",
        f"    accessorKey: {ts_str(f.name)},",
        f"    header: ({{ column }}) => <SortableHeader column={{column}} title={ts_str(f.label)} />,",
    ]
    helper = _CELL_HELPERS.get(f.input_type)
    if helper:
        lines.append(f"    cell: {helper}({ts_str(f.name)}),")
    width = f.metadata.get("columnWidth")
    if isinstance(width, (int, float)) and not isinstance(width, bool):
        lines.append(f"    size: {width},")
    if f.metadata.get("sortable") is False:
        lines.append("    enableSorting: false,")
    if f.metadata.get("filterable") is True:
        lines.append("    enableColumnFilter: true,")
    lines.append("  },")
    return "\n".join(lines) + "\n"


def produce_columns(d: ResourceDescriptor) -> str:
    columns = _columns(d)
    helpers = sorted({_CELL_HELPERS[f.input_type] for f in columns if f.input_type in _CELL_HELPERS})
    helper_import = ", ".join(["SortableHeader", *helpers])
    return (
        HEADER
        + "import type { ColumnDef } from '@tanstack/react-table'\n"
        f"import {{ {helper_import} }} from '@/components/tables/_column-helpers'\n"
        f"import type {{ {d.type_name} }} from '@/collections/{d.plural_name}.collection'\n"
        "\n"
        f"export const {d.name}Columns: ColumnDef<{d.type_name}>[] = [\n"
        + "".join(_column(f) for f in columns)
        + "]\n"
    )
