"""
Generate-all use case — run the single-resource pipeline for every schema.

Each resource gets its own interpreter (``python -m resourcegen.main
generate <name>``) so nothing parsed for one resource can leak into the
next.  A failing resource is recorded as a ``BatchItemFailure`` and the
batch moves on.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path

import resourcegen
from resourcegen.core.context import resolve_project_root
from resourcegen.core.errors import BatchItemFailure
from resourcegen.core.models.artifact import GenerateOptions
from resourcegen.core.models.config import CodegenConfig
from resourcegen.core.observability.logging_config import TAG_ENV
from resourcegen.core.services.extractor import discover_schema_files, resource_name_for

logger = logging.getLogger(__name__)


@dataclass
class BatchReport:
    """Result of a batch run."""

    resources: list[str] = field(default_factory=list)
    succeeded: list[str] = field(default_factory=list)
    failures: list[BatchItemFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def to_dict(self) -> dict:
        return {
            "resources": self.resources,
            "succeeded": self.succeeded,
            "failed": [{"resource": f.resource, "reason": f.reason} for f in self.failures],
        }


def build_command(
    name: str,
    options: GenerateOptions,
    *,
    config_path: Path | None = None,
    global_args: list[str] | None = None,
) -> list[str]:
    """The child command line for one resource."""
    cmd = [sys.executable, "-m", "resourcegen.main"]
    if config_path is not None:
        cmd += ["--config", str(config_path)]
    cmd += list(global_args or [])
    cmd += ["generate", name]
    if options.force:
        cmd.append("--force")
    if options.only:
        cmd += ["--only", options.only]
    if options.skip_wiring:
        cmd.append("--skip-wiring")
    return cmd


def _child_env(name: str) -> dict[str, str]:
    """Current environment with this package importable and logs tagged by *name*."""
    env = dict(os.environ)
    env[TAG_ENV] = name
    package_parent = str(Path(resourcegen.__file__).resolve().parent.parent)
    existing = env.get("PYTHONPATH")
    env["PYTHONPATH"] = package_parent + (os.pathsep + existing if existing else "")
    return env


def _run_one(name: str, cmd: list[str], project_root: Path) -> None:
    """Run one child; raise BatchItemFailure if it did not succeed."""
    logger.debug("Running: %s", " ".join(cmd))
    try:
        proc = subprocess.run(cmd, cwd=str(project_root), env=_child_env(name), check=False)
    except OSError as e:
        raise BatchItemFailure(name, f"could not start generator: {e}") from e
    if proc.returncode != 0:
        raise BatchItemFailure(name, f"exit code {proc.returncode}")


def generate_all(
    options: GenerateOptions | None = None,
    project_root: Path | None = None,
    config: CodegenConfig | None = None,
    config_path: Path | None = None,
    global_args: list[str] | None = None,
) -> BatchReport:
    """Generate every discovered resource, one subprocess each.

    Args:
        options: Passed through to each child as CLI flags.
        project_root: Project directory (child working directory).
        config: Used for discovery only; children reload *config_path*.
        config_path: codegen.yml to hand to each child, if any.
        global_args: Extra group-level flags for the children (verbosity).

    Returns:
        BatchReport listing successes and per-resource failures.
    """
    opts = options or GenerateOptions()
    cfg = config or CodegenConfig()
    root = resolve_project_root(project_root)
    report = BatchReport()

    schema_files = discover_schema_files(root, cfg)
    report.resources = [resource_name_for(p, cfg) for p in schema_files]
    if not report.resources:
        logger.info("No resource schemas found under %s", root / cfg.schemas_dir)
        return report

    for name in report.resources:
        cmd = build_command(name, opts, config_path=config_path, global_args=global_args)
        try:
            _run_one(name, cmd, root)
        except BatchItemFailure as e:
            logger.error("%s", e)
            report.failures.append(e)
            continue
        report.succeeded.append(name)

    logger.info(
        "Batch finished: %d succeeded, %d failed",
        len(report.succeeded), len(report.failures),
    )
    return report
