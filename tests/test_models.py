"""
Tests for domain models — descriptor defaults, derived properties, outcomes.
"""

import pytest
from pydantic import ValidationError

from resourcegen.core.models import (
    FieldDescriptor,
    GenerateOptions,
    ResourceDescriptor,
    WiringOutcome,
    WriteOutcome,
)
from resourcegen.core.models.descriptor import capitalize, humanize


class TestHelpers:
    def test_capitalize(self):
        assert capitalize("orderItem") == "OrderItem"
        assert capitalize("") == ""

    def test_humanize(self):
        assert humanize("transaction_date") == "Transaction Date"
        assert humanize("unit-price") == "Unit Price"


class TestFieldDescriptor:
    def test_defaults(self):
        f = FieldDescriptor(name="x")
        assert f.base_kind == "unknown"
        assert f.is_optional is False
        assert f.enum_values == []
        assert f.label == "X"

    @pytest.mark.parametrize("kind, expected", [
        ("number", "number"),
        ("boolean", "checkbox"),
        ("enum", "select"),
        ("string", "text"),
        ("unknown", "text"),
    ])
    def test_default_input_type(self, kind, expected):
        assert FieldDescriptor(name="x", base_kind=kind).input_type == expected

    def test_explicit_input_type(self):
        f = FieldDescriptor(name="x", base_kind="number", metadata={"inputType": "currency"})
        assert f.input_type == "currency"

    def test_flags(self):
        f = FieldDescriptor(name="x", metadata={"hidden": True, "readOnly": True})
        assert f.hidden and f.read_only

    def test_relation_needs_resource(self):
        assert FieldDescriptor(name="x", metadata={"relation": {"labelField": "n"}}).relation is None
        rel = {"resource": "customer"}
        assert FieldDescriptor(name="x", metadata={"relation": rel}).relation == rel

    def test_invalid_kind_rejected(self):
        with pytest.raises(ValidationError):
            FieldDescriptor(name="x", base_kind="date")


class TestResourceDescriptor:
    def test_derived_names(self):
        d = ResourceDescriptor(name="order")
        assert d.plural_name == "orders"
        assert d.var_name == "orderResource"
        assert d.type_name == "Order"
        assert d.display_name == "Orders"
        assert d.collection_name == "ordersCollection"

    def test_explicit_names_kept(self):
        d = ResourceDescriptor(name="person", plural_name="people", var_name="personDef")
        assert d.plural_name == "people"
        assert d.var_name == "personDef"

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            ResourceDescriptor(name="")

    def test_config_defaults(self):
        d = ResourceDescriptor(name="order")
        assert d.data_source == "json"
        assert d.primary_key == "id"
        assert d.api_base_path == "/api/orders"
        assert d.icon is None
        assert d.analytics_enabled is False

    def test_analytics_requires_parquet(self):
        analytics = {"enabled": True}
        json_d = ResourceDescriptor(name="o", config={"analytics": analytics})
        parquet_d = ResourceDescriptor(name="o", config={"dataSource": "parquet", "analytics": analytics})
        assert json_d.analytics_enabled is False
        assert parquet_d.analytics_enabled is True

    def test_visible_fields(self):
        d = ResourceDescriptor(
            name="o",
            fields=[FieldDescriptor(name="id", metadata={"hidden": True}), FieldDescriptor(name="title")],
        )
        assert [f.name for f in d.visible_fields()] == ["title"]
        assert d.get_field("id") is not None
        assert d.get_field("missing") is None

    def test_frozen(self):
        d = ResourceDescriptor(name="order")
        with pytest.raises(ValidationError):
            d.name = "other"


class TestOutcomes:
    def test_write_outcome_factories(self):
        assert WriteOutcome.success("a").written
        assert WriteOutcome.skip("a").skipped
        assert WriteOutcome.omit("a").status == "omitted"
        failed = WriteOutcome.failure("a", "disk full", "form")
        assert failed.failed
        assert failed.error == "disk full"
        assert failed.kind == "form"

    def test_wiring_outcome_changed(self):
        assert WiringOutcome(hub="h", path="p", status="created").changed
        assert WiringOutcome(hub="h", path="p", status="updated").changed
        assert not WiringOutcome(hub="h", path="p", status="marker_missing").changed
        assert WiringOutcome(hub="h", path="p", status="failed").failed

    def test_generate_options_defaults(self):
        opts = GenerateOptions()
        assert (opts.force, opts.only, opts.skip_wiring) == (False, None, False)
