"""
Artifact orchestrator — decide which files a resource needs, then write them.

``plan`` is pure: it walks the producer registry in declaration order,
applies the ``--only`` filter and resolves destinations.  ``execute``
runs each producer and hands its text to the safe writer.  One failed
artifact never stops the others.
"""

from __future__ import annotations

import logging
from pathlib import Path

from resourcegen.core.models.artifact import Artifact, GenerateOptions, WriteOutcome
from resourcegen.core.models.descriptor import ResourceDescriptor
from resourcegen.core.services.file_writer import write_generated
from resourcegen.core.services.producers import ProducerRegistry, default_registry

logger = logging.getLogger(__name__)


def plan(
    descriptor: ResourceDescriptor,
    options: GenerateOptions | None = None,
    registry: ProducerRegistry | None = None,
) -> list[Artifact]:
    """Artifacts to produce for *descriptor*, in declaration order.

    An ``only`` value that names no registered kind yields an empty plan.
    """
    opts = options or GenerateOptions()
    reg = registry or default_registry()

    if opts.only is not None and opts.only not in reg.kinds():
        logger.warning(
            "Unknown artifact kind '%s' (known: %s); nothing to generate",
            opts.only, ", ".join(reg.kinds()),
        )

    artifacts = [
        Artifact(kind=entry.kind, destination=entry.destination(descriptor), producer=entry.producer)
        for entry in reg.entries(opts.only)
    ]
    logger.debug("Planned %d artifact(s) for %s", len(artifacts), descriptor.name)
    return artifacts


def execute(
    artifacts: list[Artifact],
    descriptor: ResourceDescriptor,
    project_root: Path,
    *,
    force: bool = False,
) -> list[WriteOutcome]:
    """Produce and write each artifact in order; collect every outcome.

    A producer returning None is an ``omitted`` outcome.  A producer or
    write error is a ``failed`` outcome; the remaining artifacts still run.
    """
    outcomes: list[WriteOutcome] = []

    for artifact in artifacts:
        try:
            content = artifact.producer(descriptor)
        except Exception as e:
            logger.error("Producer for %s failed: %s", artifact.destination, e)
            outcomes.append(WriteOutcome.failure(artifact.destination, f"producer error: {e}", artifact.kind))
            continue

        if content is None:
            logger.debug("Producer for %s emitted nothing", artifact.destination)
            outcomes.append(WriteOutcome.omit(artifact.destination, artifact.kind))
            continue

        try:
            outcome = write_generated(
                project_root, artifact.destination, content, force=force, kind=artifact.kind,
            )
        except OSError as e:
            logger.error("Cannot write %s: %s", artifact.destination, e)
            outcome = WriteOutcome.failure(artifact.destination, str(e), artifact.kind)
        outcomes.append(outcome)

    return outcomes
