"""
Generate use case — one resource from schema file to wired-in artifacts.

    schema file → extract → plan → execute (safe writes) → merge (hubs)

Artifacts are always written before any hub is touched, and hubs are
updated in dependency order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from resourcegen.core.context import resolve_project_root
from resourcegen.core.errors import CodegenError
from resourcegen.core.models.artifact import GenerateOptions, WriteOutcome
from resourcegen.core.models.config import CodegenConfig
from resourcegen.core.models.descriptor import ResourceDescriptor
from resourcegen.core.models.wiring import WiringOutcome, WiringTarget
from resourcegen.core.services.extractor import extract_file
from resourcegen.core.services.orchestrator import execute, plan
from resourcegen.core.services.producers import ProducerRegistry
from resourcegen.core.services.wiring import default_targets, merge

logger = logging.getLogger(__name__)


@dataclass
class GenerateResult:
    """Result of generating one resource."""

    resource: str = ""
    descriptor: ResourceDescriptor | None = None
    writes: list[WriteOutcome] = field(default_factory=list)
    wiring: list[WiringOutcome] = field(default_factory=list)
    wiring_skipped: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        """The descriptor was found and parsed.  Write and hub failures don't count."""
        return self.error is None

    @property
    def written(self) -> int:
        return sum(1 for w in self.writes if w.written)

    @property
    def skipped(self) -> int:
        return sum(1 for w in self.writes if w.skipped)

    @property
    def failed(self) -> int:
        return sum(1 for w in self.writes if w.failed) + sum(1 for o in self.wiring if o.failed)

    def to_dict(self) -> dict:
        result: dict = {"resource": self.resource}
        if self.error:
            result["error"] = self.error
            return result

        if self.descriptor is not None:
            result["plural_name"] = self.descriptor.plural_name
        result["writes"] = [w.model_dump() for w in self.writes]
        result["wiring"] = [o.model_dump() for o in self.wiring]
        result["wiring_skipped"] = self.wiring_skipped
        result["summary"] = {
            "written": self.written,
            "skipped": self.skipped,
            "failed": self.failed,
        }
        return result


def generate_resource(
    name: str,
    options: GenerateOptions | None = None,
    project_root: Path | None = None,
    config: CodegenConfig | None = None,
    registry: ProducerRegistry | None = None,
    targets: list[WiringTarget] | None = None,
) -> GenerateResult:
    """Generate every artifact for *name* and wire it into the hubs.

    Args:
        name: Resource name; the schema file is ``<schemas_dir>/<name><suffix>``.
        options: force / only / skip_wiring.
        project_root: Project directory.  None = registered root or cwd.
        config: Generator configuration.  None = defaults.
        registry: Producer registry.  None = the default producers.
        targets: Hub targets.  None = the default five hubs.

    Returns:
        GenerateResult; ``error`` is set when the schema is missing or invalid.
    """
    opts = options or GenerateOptions()
    cfg = config or CodegenConfig()
    root = resolve_project_root(project_root)
    result = GenerateResult(resource=name)

    # ── Extract ──────────────────────────────────────────────────
    schema_path = root / cfg.schema_path(name)
    try:
        descriptor = extract_file(schema_path, factory=cfg.factory)
    except CodegenError as e:
        logger.error("%s", e)
        result.error = str(e)
        return result
    result.descriptor = descriptor

    if descriptor.name != name:
        logger.warning(
            "%s declares resource '%s', not '%s'; generating '%s'",
            cfg.schema_path(name), descriptor.name, name, descriptor.name,
        )

    # ── Artifacts ────────────────────────────────────────────────
    artifacts = plan(descriptor, opts, registry)
    result.writes = execute(artifacts, descriptor, root, force=opts.force)

    # ── Hubs ─────────────────────────────────────────────────────
    if opts.skip_wiring:
        logger.info("Wiring skipped for %s", descriptor.name)
        result.wiring_skipped = True
    else:
        result.wiring = merge(targets if targets is not None else default_targets(cfg), descriptor, root)

    logger.info(
        "Generated %s: %d written, %d skipped, %d failed",
        descriptor.name, result.written, result.skipped, result.failed,
    )
    return result
