"""
Content producers — descriptor in, file text out.

Each producer is a pure ``(ResourceDescriptor) -> str | None`` function.
``default_registry()`` wires them to artifact kinds and destination
templates in the order artifacts are generated.  Callers that want
different output build their own ``ProducerRegistry``.
"""

from __future__ import annotations

from resourcegen.core.services.producers.collection import produce_collection
from resourcegen.core.services.producers.columns import produce_columns
from resourcegen.core.services.producers.form import produce_form
from resourcegen.core.services.producers.registry import ProducerEntry, ProducerRegistry
from resourcegen.core.services.producers.routes import (
    produce_route_analytics,
    produce_route_edit,
    produce_route_index,
    produce_route_new,
)

ARTIFACT_KINDS = ("collection", "routes", "analytics", "form", "columns")


def default_registry() -> ProducerRegistry:
    registry = ProducerRegistry()
    registry.register("collection", "src/collections/{plural}.collection.ts", produce_collection)
    registry.register("routes", "src/routes/_app/{plural}/index.tsx", produce_route_index)
    registry.register("routes", "src/routes/_app/{plural}/new.tsx", produce_route_new)
    registry.register("routes", "src/routes/_app/{plural}/${name}Id.tsx", produce_route_edit)
    registry.register("analytics", "src/routes/_app/{plural}/analytics.tsx", produce_route_analytics)
    registry.register("form", "src/components/forms/{name}-form.tsx", produce_form)
    registry.register("columns", "src/components/tables/{name}-columns.tsx", produce_columns)
    return registry


__all__ = [
    "ARTIFACT_KINDS",
    "ProducerEntry",
    "ProducerRegistry",
    "default_registry",
]
