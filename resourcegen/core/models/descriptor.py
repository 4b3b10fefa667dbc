"""
Resource descriptor — the parsed form of one ``defineResource(...)`` call.

Built once by the extractor, read by the orchestrator, the producers and
the wiring engine, then thrown away.  Nothing here is persisted.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

BaseKind = Literal["string", "number", "boolean", "enum", "array", "object", "unknown"]

# Config keys the generator interprets.  Anything else is kept verbatim.
RECOGNIZED_CONFIG_KEYS = frozenset({
    "name",
    "pluralName",
    "icon",
    "description",
    "apiBasePath",
    "primaryKey",
    "syncMode",
    "dataSource",
    "search",
    "table",
    "form",
    "searchParams",
    "analytics",
})

# Field ``.meta({...})`` keys the generator reads.  Others are dropped.
RECOGNIZED_FIELD_META_KEYS = frozenset({
    "label",
    "placeholder",
    "description",
    "hidden",
    "readOnly",
    "columnWidth",
    "sortable",
    "filterable",
    "inputType",
    "relation",
})


def capitalize(s: str) -> str:
    """Upper-case the first character only ('orderItem' → 'OrderItem')."""
    return s[:1].upper() + s[1:]


def humanize(name: str) -> str:
    """'transaction_date' → 'Transaction Date'."""
    return " ".join(capitalize(part) for part in name.replace("-", "_").split("_") if part)


class FieldDescriptor(BaseModel):
    """One entry of the field map, in declaration order.

    Attributes:
        name:        Property name in the field map.
        base_kind:   Coarse kind inferred from the head of the modifier chain.
        type_name:   Raw constructor name (``string``, ``enum``, ``record``...).
        is_optional: Chain contains ``.optional()``, ``.nullable()`` or ``.nullish()``.
        enum_values: Literal members when the constructor is ``z.enum([...])``.
        metadata:    Recognised keys of the terminal ``.meta({...})`` argument.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    base_kind: BaseKind = "unknown"
    type_name: str = "unknown"
    is_optional: bool = False
    enum_values: list[str] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def label(self) -> str:
        label = self.metadata.get("label")
        return label if isinstance(label, str) and label else humanize(self.name)

    @property
    def hidden(self) -> bool:
        return self.metadata.get("hidden") is True

    @property
    def read_only(self) -> bool:
        return self.metadata.get("readOnly") is True

    @property
    def input_type(self) -> str:
        """Explicit ``inputType`` or a default derived from the base kind."""
        explicit = self.metadata.get("inputType")
        if isinstance(explicit, str) and explicit:
            return explicit
        return {
            "number": "number",
            "boolean": "checkbox",
            "enum": "select",
        }.get(self.base_kind, "text")

    @property
    def relation(self) -> dict[str, Any] | None:
        rel = self.metadata.get("relation")
        return rel if isinstance(rel, dict) and rel.get("resource") else None


class ResourceDescriptor(BaseModel):
    """Canonical description of one resource.

    ``plural_name`` defaults to ``name + "s"`` and ``var_name`` to
    ``name + "Resource"`` when the source does not supply them.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    plural_name: str = ""
    var_name: str = ""
    config: dict[str, Any] = Field(default_factory=dict)
    fields: list[FieldDescriptor] = Field(default_factory=list)
    source_path: str = ""

    @model_validator(mode="before")
    @classmethod
    def _derive_names(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        name = data.get("name")
        if isinstance(name, str) and name:
            if not data.get("plural_name"):
                data = {**data, "plural_name": f"{name}s"}
            if not data.get("var_name"):
                data = {**data, "var_name": f"{name}Resource"}
        return data

    # ── Derived names ────────────────────────────────────────────

    @property
    def type_name(self) -> str:
        """Type identifier exported by the collection ('order' → 'Order')."""
        return capitalize(self.name)

    @property
    def display_name(self) -> str:
        """Navigation title ('orders' → 'Orders')."""
        return capitalize(self.plural_name)

    @property
    def collection_name(self) -> str:
        return f"{self.plural_name}Collection"

    # ── Config accessors ─────────────────────────────────────────

    @property
    def icon(self) -> str | None:
        icon = self.config.get("icon")
        return icon if isinstance(icon, str) and icon else None

    @property
    def description(self) -> str | None:
        desc = self.config.get("description")
        return desc if isinstance(desc, str) and desc else None

    @property
    def data_source(self) -> str:
        source = self.config.get("dataSource")
        return source if isinstance(source, str) and source else "json"

    @property
    def is_parquet(self) -> bool:
        return self.data_source == "parquet"

    @property
    def primary_key(self) -> str:
        pk = self.config.get("primaryKey")
        return pk if isinstance(pk, str) and pk else "id"

    @property
    def api_base_path(self) -> str:
        path = self.config.get("apiBasePath")
        return path if isinstance(path, str) and path else f"/api/{self.plural_name}"

    @property
    def analytics(self) -> dict[str, Any]:
        analytics = self.config.get("analytics")
        return analytics if isinstance(analytics, dict) else {}

    @property
    def analytics_enabled(self) -> bool:
        return self.is_parquet and self.analytics.get("enabled") is True

    @property
    def unrecognized_config_keys(self) -> list[str]:
        return [k for k in self.config if k not in RECOGNIZED_CONFIG_KEYS]

    # ── Field lookups ────────────────────────────────────────────

    def get_field(self, name: str) -> FieldDescriptor | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def visible_fields(self) -> list[FieldDescriptor]:
        """Fields not marked ``hidden``, in declaration order."""
        return [f for f in self.fields if not f.hidden]
