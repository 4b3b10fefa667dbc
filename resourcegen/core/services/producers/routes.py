"""
Route producers — list, create, edit and analytics pages for a resource.

The analytics page is only emitted for parquet resources whose config
has ``analytics.enabled``; otherwise the producer returns None.
"""

from __future__ import annotations

from typing import Any

from resourcegen.core.models.descriptor import ResourceDescriptor
from resourcegen.core.services.producers.common import HEADER, jsx_text, ts_str


def produce_route_index(d: ResourceDescriptor) -> str:
    title = jsx_text(d.display_name)
    description = jsx_text(d.description or f"Manage {d.plural_name}")
    if d.is_parquet:
        data_import = f"import {{ use{d.display_name} }} from '@/collections/{d.plural_name}.collection'\n"
        data_hook = f"  const {{ data, isLoading }} = use{d.display_name}()\n"
        table = "      <DataTableVirtual columns={columns} data={data ?? []} loading={isLoading} />\n"
        table_import = "import { DataTableVirtual } from '@/components/shared/data-table-virtual'\n"
        new_button = ""
    else:
        data_import = (
            "import { useLiveQuery } from '@tanstack/react-db'\n"
            f"import {{ {d.collection_name} }} from '@/collections'\n"
        )
        data_hook = (
            f"  const {{ data, isLoading }} = useLiveQuery((q) => q.from({{ item: {d.collection_name} }}))\n"
        )
        table = "      <DataTableFull columns={columns} data={data ?? []} loading={isLoading} />\n"
        table_import = "import { DataTableFull } from '@/components/shared/data-table-full'\n"
        new_button = (
            f"        <Link to=\"/{d.plural_name}/new\" className=\"btn btn-primary\">"
            f"New {jsx_text(d.name)}</Link>\n"
        )
    return (
        HEADER
        + "import { createFileRoute, Link } from '@tanstack/react-router'\n"
        + data_import
        + table_import
        + "import { PageHeader } from '@/components/shared/page-header'\n"
        f"import {{ {d.name}Columns as columns }} from '@/components/tables/{d.name}-columns'\n"
        "\n"
        f"export const Route = createFileRoute('/_app/{d.plural_name}/')({{\n"
        f"  component: {d.display_name}Page,\n"
        "})\n"
        "\n"
        f"function {d.display_name}Page() {{\n"
        + data_hook
        + "  return (\n"
        "    <div className=\"flex flex-col gap-4\">\n"
        f"      <PageHeader title=\"{title}\" description=\"{description}\">\n"
        + new_button
        + "      </PageHeader>\n"
        + table
        + "    </div>\n"
        "  )\n"
        "}\n"
    )


def produce_route_new(d: ResourceDescriptor) -> str:
    return (
        HEADER
        + "import { createFileRoute, useNavigate } from '@tanstack/react-router'\n"
        f"import {{ {d.collection_name} }} from '@/collections'\n"
        f"import {{ {d.type_name}Form }} from '@/components/forms/{d.name}-form'\n"
        "import { PageHeader } from '@/components/shared/page-header'\n"
        "\n"
        f"export const Route = createFileRoute('/_app/{d.plural_name}/new')({{\n"
        f"  component: New{d.type_name}Page,\n"
        "})\n"
        "\n"
        f"function New{d.type_name}Page() {{\n"
        "  const navigate = useNavigate()\n"
        "  return (\n"
        "    <div className=\"flex flex-col gap-4\">\n"
        f"      <PageHeader title=\"New {jsx_text(d.name)}\" />\n"
        f"      <{d.type_name}Form\n"
        "        onSubmit={(values) => {\n"
        f"          {d.collection_name}.insert({{ ...values, {d.primary_key}: crypto.randomUUID() }})\n"
        f"          navigate({{ to: '/{d.plural_name}' }})\n"
        "        }}\n"
        "      />\n"
        "    </div>\n"
        "  )\n"
        "}\n"
    )


def produce_route_edit(d: ResourceDescriptor) -> str:
    param = f"{d.name}Id"
    return (
        HEADER
        + "import { createFileRoute, useNavigate } from '@tanstack/react-router'\n"
        "import { eq, useLiveQuery } from '@tanstack/react-db'\n"
        f"import {{ {d.collection_name} }} from '@/collections'\n"
        f"import {{ {d.type_name}Form }} from '@/components/forms/{d.name}-form'\n"
        "import { PageHeader } from '@/components/shared/page-header'\n"
        "\n"
        f"export const Route = createFileRoute('/_app/{d.plural_name}/${param}')({{\n"
        f"  component: Edit{d.type_name}Page,\n"
        "})\n"
        "\n"
        f"function Edit{d.type_name}Page() {{\n"
        f"  const {{ {param} }} = Route.useParams()\n"
        "  const navigate = useNavigate()\n"
        "  const { data } = useLiveQuery((q) =>\n"
        "    q\n"
        f"      .from({{ item: {d.collection_name} }})\n"
        f"      .where(({{ item }}) => eq(item.{d.primary_key}, {param}))\n"
        "  )\n"
        "  const record = data?.[0]\n"
        "  if (!record) {\n"
        f"    return <div className=\"text-muted-foreground\">{jsx_text(d.type_name)} not found</div>\n"
        "  }\n"
        "  return (\n"
        "    <div className=\"flex flex-col gap-4\">\n"
        f"      <PageHeader title=\"Edit {jsx_text(d.name)}\" />\n"
        f"      <{d.type_name}Form\n"
        "        defaultValues={record}\n"
        "        onSubmit={(values) => {\n"
        f"          {d.collection_name}.update({param}, (draft) => Object.assign(draft, values))\n"
        f"          navigate({{ to: '/{d.plural_name}' }})\n"
        "        }}\n"
        "      />\n"
        "    </div>\n"
        "  )\n"
        "}\n"
    )


# ── Analytics ───────────────────────────────────────────────────

# Lucide icon names used in configs → tabler icon components
_ICON_MAP = {
    "DollarSign": "IconCurrencyDollar",
    "ShoppingCart": "IconShoppingCart",
    "TrendingUp": "IconTrendingUp",
    "Clock": "IconClock",
    "Users": "IconUsers",
    "Package": "IconPackage",
    "FileText": "IconFileText",
    "Activity": "IconActivity",
    "BarChart": "IconChartBar",
    "PieChart": "IconChartPie",
    "Hash": "IconHash",
    "Percent": "IconPercentage",
}


def _dicts(value: Any) -> list[dict[str, Any]]:
    return [v for v in value if isinstance(v, dict)] if isinstance(value, list) else []


def _int(value: Any, default: int) -> int:
    return value if isinstance(value, int) and not isinstance(value, bool) else default


def produce_route_analytics(d: ResourceDescriptor) -> str | None:
    if not d.analytics_enabled:
        return None

    kpis = _dicts(d.analytics.get("kpis"))
    grouped = _dicts(d.analytics.get("groupedCharts"))
    series = _dicts(d.analytics.get("timeSeriesCharts"))

    icons = ["IconActivity"] + sorted(
        {_ICON_MAP[str(k.get("icon"))] for k in kpis if str(k.get("icon")) in _ICON_MAP} - {"IconActivity"}
    )
    kpi_metrics = ",\n".join(
        f"    {{ name: {ts_str(str(k.get('name', f'kpi{i}')))}, sql: {ts_str(str(k.get('sql', 'COUNT(*)')))}, "
        f"label: {ts_str(str(k.get('label', '')))}, format: {ts_str(str(k.get('format', 'number')))} }}"
        for i, k in enumerate(kpis)
    )

    hooks: list[str] = []
    for i, c in enumerate(grouped):
        hooks.append(
            f"  const {{ data: grouped{i}Data, isLoading: grouped{i}Loading }} = useGroupedAnalytics({{\n"
            "    baseUrl: DATA_URL,\n"
            f"    groupBy: {ts_str(str(c.get('groupBy', '')))},\n"
            f"    metric: {ts_str(str(c.get('metric', 'count')))},\n"
            f"    metricSql: {ts_str(str(c.get('metricSql', 'COUNT(*)')))},\n"
            f"    limit: {_int(c.get('limit'), 10)},\n"
            "  })\n"
        )
    for i, c in enumerate(series):
        hooks.append(
            f"  const {{ data: timeSeries{i}Data, isLoading: timeSeries{i}Loading }} = useTimeSeriesAnalytics({{\n"
            "    baseUrl: DATA_URL,\n"
            f"    dateField: {ts_str(str(c.get('dateField', 'created_at')))},\n"
            f"    metric: {ts_str(str(c.get('metric', 'count')))},\n"
            f"    metricSql: {ts_str(str(c.get('metricSql', 'COUNT(*)')))},\n"
            f"    granularity: {ts_str(str(c.get('granularity', 'month')))},\n"
            "  })\n"
        )

    cards: list[str] = []
    for i, k in enumerate(kpis):
        icon = _ICON_MAP.get(str(k.get("icon")), "IconActivity")
        fmt = "formatCurrency" if k.get("format") == "currency" else "formatNumber"
        cards.append(
            "        <Card>\n"
            f"          <CardHeader><CardTitle>{jsx_text(str(k.get('label', '')))}</CardTitle>"
            f"<{icon} className=\"h-4 w-4\" /></CardHeader>\n"
            f"          <CardContent>{{kpisLoading ? '...' : {fmt}(Number(kpis[{i}]?.value ?? 0))}}</CardContent>\n"
            "        </Card>\n"
        )
    charts: list[str] = []
    for prefix, configs in (("grouped", grouped), ("timeSeries", series)):
        for i, c in enumerate(configs):
            charts.append(
                "        <Card>\n"
                f"          <CardHeader><CardTitle>{jsx_text(str(c.get('title', '')))}</CardTitle></CardHeader>\n"
                "          <CardContent>\n"
                f"            <AnalyticsChart type={ts_str(str(c.get('type', 'bar')))} "
                f"data={{{prefix}{i}Data ?? []}} loading={{{prefix}{i}Loading}} />\n"
                "          </CardContent>\n"
                "        </Card>\n"
            )

    return (
        HEADER
        + "import { createFileRoute } from '@tanstack/react-router'\n"
        f"import {{ {', '.join(icons)} }} from '@tabler/icons-react'\n"
        "import {\n"
        "  useGroupedAnalytics,\n"
        "  useKPIMetrics,\n"
        "  useTimeSeriesAnalytics,\n"
        "} from '@/hooks/use-analytics-query'\n"
        "import { Card, CardContent, CardHeader, CardTitle } from '@/components/ui/card'\n"
        "import { AnalyticsChart } from '@/components/charts/analytics-chart'\n"
        "import { formatCurrency, formatNumber } from '@/lib/utils'\n"
        f"import {{ {d.plural_name}ParquetUrl as DATA_URL }} from '@/collections/{d.plural_name}.collection'\n"
        "\n"
        f"export const Route = createFileRoute('/_app/{d.plural_name}/analytics')({{\n"
        f"  component: {d.display_name}AnalyticsPage,\n"
        "})\n"
        "\n"
        f"function {d.display_name}AnalyticsPage() {{\n"
        "  const { data: kpis, isLoading: kpisLoading } = useKPIMetrics({\n"
        "    baseUrl: DATA_URL,\n"
        "    metrics: [\n"
        + (kpi_metrics + "\n" if kpi_metrics else "")
        + "    ],\n"
        "  })\n"
        + "".join(hooks)
        + "\n"
        "  return (\n"
        "    <div className=\"flex flex-col gap-4\">\n"
        "      <div className=\"grid gap-4 md:grid-cols-4\">\n"
        + "".join(cards)
        + "      </div>\n"
        "      <div className=\"grid gap-4 md:grid-cols-2\">\n"
        + "".join(charts)
        + "      </div>\n"
        "    </div>\n"
        "  )\n"
        "}\n"
    )
