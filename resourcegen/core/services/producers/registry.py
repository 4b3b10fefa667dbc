"""
Producer registry — which artifact kinds exist and where each one lands.

A producer is any callable ``(ResourceDescriptor) -> str | None``.  The
registry only knows kinds, destination templates and callables; it has
no idea what text a producer emits.
"""

from __future__ import annotations

from dataclasses import dataclass

from resourcegen.core.models.artifact import ContentProducer
from resourcegen.core.models.descriptor import ResourceDescriptor


@dataclass(frozen=True)
class ProducerEntry:
    """One destination of one artifact kind.

    ``path_template`` is formatted with ``name`` and ``plural``:
    ``"src/components/forms/{name}-form.tsx"``.
    """

    kind: str
    path_template: str
    producer: ContentProducer

    def destination(self, descriptor: ResourceDescriptor) -> str:
        return self.path_template.format(name=descriptor.name, plural=descriptor.plural_name)


class ProducerRegistry:
    """Ordered collection of producer entries.

    A kind may own several entries (the three route files share the
    ``routes`` kind).  Declaration order is preserved and is the order
    artifacts are planned and written in.
    """

    def __init__(self) -> None:
        self._entries: list[ProducerEntry] = []

    def register(self, kind: str, path_template: str, producer: ContentProducer) -> None:
        self._entries.append(ProducerEntry(kind, path_template, producer))

    def entries(self, kind: str | None = None) -> list[ProducerEntry]:
        if kind is None:
            return list(self._entries)
        return [e for e in self._entries if e.kind == kind]

    def kinds(self) -> list[str]:
        """Distinct kinds in declaration order."""
        seen: list[str] = []
        for e in self._entries:
            if e.kind not in seen:
                seen.append(e.kind)
        return seen

    def __len__(self) -> int:
        return len(self._entries)
