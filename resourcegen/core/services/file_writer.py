"""
Safe writer — the only place generated artifacts touch the disk.

Creates parent directories, refuses to replace an existing file unless
forced, and reports what it did as a ``WriteOutcome``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from resourcegen.core.models.artifact import WriteOutcome

logger = logging.getLogger(__name__)


def write_generated(
    project_root: Path,
    rel_path: str,
    content: str,
    *,
    force: bool = False,
    kind: str = "",
) -> WriteOutcome:
    """Write *content* to ``project_root / rel_path``.

    An existing file is left untouched unless *force* is set; that is a
    ``skipped`` outcome, not an error.

    Raises:
        OSError: Directory creation or the write itself failed.  The
            orchestrator turns this into a ``failed`` outcome.
    """
    target = project_root / rel_path
    target.parent.mkdir(parents=True, exist_ok=True)

    if target.exists() and not force:
        logger.info("Skipped existing file: %s", target)
        return WriteOutcome.skip(rel_path, kind)

    target.write_text(content, encoding="utf-8")
    logger.info("Wrote generated file: %s", target)
    return WriteOutcome.success(rel_path, kind)


def read_text(path: Path) -> str:
    """Read a hub file as UTF-8, keeping its line endings as-is."""
    with path.open("r", encoding="utf-8", newline="") as fh:
        return fh.read()


def rewrite(path: Path, content: str) -> None:
    """Replace a hub file's contents (directories created as needed)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(content)
