"""
Tests for the artifact orchestrator — planning and execution.
"""

import logging
from pathlib import Path
from unittest.mock import patch

from resourcegen.core.models.artifact import GenerateOptions
from resourcegen.core.models.descriptor import ResourceDescriptor
from resourcegen.core.services.file_writer import write_generated
from resourcegen.core.services.orchestrator import execute, plan
from resourcegen.core.services.producers import ProducerRegistry, default_registry


def _descriptor() -> ResourceDescriptor:
    return ResourceDescriptor(name="widget")


def _registry(*entries) -> ProducerRegistry:
    reg = ProducerRegistry()
    for kind, template, producer in entries:
        reg.register(kind, template, producer)
    return reg


class TestPlan:
    def test_full_plan_in_declaration_order(self):
        artifacts = plan(_descriptor())
        assert [a.kind for a in artifacts] == [
            "collection", "routes", "routes", "routes", "analytics", "form", "columns",
        ]

    def test_only_filters_to_kind(self):
        artifacts = plan(_descriptor(), GenerateOptions(only="routes"))
        assert [a.destination for a in artifacts] == [
            "src/routes/_app/widgets/index.tsx",
            "src/routes/_app/widgets/new.tsx",
            "src/routes/_app/widgets/$widgetId.tsx",
        ]

    def test_only_matches_registry_exactly(self):
        reg = default_registry()
        for kind in reg.kinds():
            planned = [a.destination for a in plan(_descriptor(), GenerateOptions(only=kind), reg)]
            expected = [e.destination(_descriptor()) for e in reg.entries(kind)]
            assert planned == expected

    def test_unknown_kind_is_empty_plan(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert plan(_descriptor(), GenerateOptions(only="stylesheet")) == []
        assert "stylesheet" in caplog.text

    def test_injected_registry(self):
        reg = _registry(("doc", "docs/{plural}.md", lambda d: "x"))
        artifacts = plan(_descriptor(), registry=reg)
        assert [(a.kind, a.destination) for a in artifacts] == [("doc", "docs/widgets.md")]


class TestExecute:
    def test_writes_each_artifact(self, tmp_path: Path):
        reg = _registry(
            ("a", "out/{name}.a", lambda d: "A"),
            ("b", "out/{name}.b", lambda d: "B"),
        )
        outcomes = execute(plan(_descriptor(), registry=reg), _descriptor(), tmp_path)
        assert [o.status for o in outcomes] == ["written", "written"]
        assert (tmp_path / "out/widget.a").read_text() == "A"
        assert (tmp_path / "out/widget.b").read_text() == "B"

    def test_none_is_omitted_not_written(self, tmp_path: Path):
        reg = _registry(("a", "out/{name}.a", lambda d: None))
        outcomes = execute(plan(_descriptor(), registry=reg), _descriptor(), tmp_path)
        assert outcomes[0].status == "omitted"
        assert not (tmp_path / "out/widget.a").exists()

    def test_existing_file_skipped_without_force(self, tmp_path: Path):
        target = tmp_path / "out/widget.a"
        target.parent.mkdir(parents=True)
        target.write_text("keep")
        reg = _registry(("a", "out/{name}.a", lambda d: "new"))
        outcomes = execute(plan(_descriptor(), registry=reg), _descriptor(), tmp_path)
        assert outcomes[0].skipped
        assert target.read_text() == "keep"

        outcomes = execute(plan(_descriptor(), registry=reg), _descriptor(), tmp_path, force=True)
        assert outcomes[0].written
        assert target.read_text() == "new"

    def test_producer_error_collected(self, tmp_path: Path):
        def boom(d):
            raise KeyError("title")

        reg = _registry(
            ("a", "out/{name}.a", boom),
            ("b", "out/{name}.b", lambda d: "B"),
        )
        outcomes = execute(plan(_descriptor(), registry=reg), _descriptor(), tmp_path)
        assert outcomes[0].failed
        assert "producer error" in outcomes[0].error
        assert outcomes[1].written

    def test_write_error_collected(self, tmp_path: Path):
        reg = _registry(
            ("a", "out/{name}.a", lambda d: "A"),
            ("b", "out/{name}.b", lambda d: "B"),
        )

        def flaky(root, rel, content, **kw):
            if rel.endswith(".a"):
                raise PermissionError("read-only filesystem")
            return write_generated(root, rel, content, **kw)

        with patch("resourcegen.core.services.orchestrator.write_generated", side_effect=flaky):
            outcomes = execute(plan(_descriptor(), registry=reg), _descriptor(), tmp_path)

        assert outcomes[0].failed
        assert "read-only" in outcomes[0].error
        assert outcomes[1].written
