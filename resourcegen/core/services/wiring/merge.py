"""
Wiring merge engine — register a resource in every hub file.

For each target, in order:

    1. Not applicable to this descriptor → ``not_applicable``.
    2. Hub absent → start from the target's skeleton (``created``).
    3. Existing hub and its uniqueness probe matches → ``unchanged``.
    4. Marker missing → warning, ``marker_missing``, file untouched.
    5. Otherwise insert imports near their anchors, splice the entry on
       the line right after the marker and rewrite the hub.

Hubs are independent.  An I/O error on one hub is a ``failed`` outcome
and the remaining hubs are still processed; nothing is rolled back.
"""

from __future__ import annotations

import logging
from pathlib import Path

from resourcegen.core.models.descriptor import ResourceDescriptor
from resourcegen.core.models.wiring import ImportLine, WiringOutcome, WiringTarget
from resourcegen.core.services.file_writer import read_text, rewrite

logger = logging.getLogger(__name__)


def merge(
    targets: list[WiringTarget],
    descriptor: ResourceDescriptor,
    project_root: Path,
) -> list[WiringOutcome]:
    """Apply every target to its hub file and report one outcome per hub."""
    outcomes: list[WiringOutcome] = []
    for target in targets:
        try:
            outcome = _merge_one(target, descriptor, project_root)
        except OSError as e:
            logger.error("Failed to update %s: %s", target.hub_path, e)
            outcome = WiringOutcome(hub=target.name, path=target.hub_path, status="failed", message=str(e))
        outcomes.append(outcome)
    return outcomes


def _merge_one(target: WiringTarget, d: ResourceDescriptor, project_root: Path) -> WiringOutcome:
    def outcome(status: str, message: str = "") -> WiringOutcome:
        return WiringOutcome(hub=target.name, path=target.hub_path, status=status, message=message)

    if not target.applies(d):
        return outcome("not_applicable")

    path = project_root / target.hub_path
    exists = path.is_file()
    original = read_text(path) if exists else target.skeleton

    if exists and target.probe(original, d):
        logger.debug("%s already wired into %s", d.name, target.hub_path)
        return outcome("unchanged")

    if target.marker not in original:
        logger.warning(
            "Wiring marker missing in %s (expected %r); leaving it unchanged",
            target.hub_path, target.marker,
        )
        return outcome("marker_missing", f"marker not found: {target.marker}")

    if target.collision is not None and target.collision(original, d):
        logger.warning(
            "Route '/%s' is already registered in %s; adding '%s' anyway",
            d.plural_name, target.hub_path, d.name,
        )

    nl = "\r\n" if "\r\n" in original else "\n"
    content = original
    for line in target.imports:
        content = _insert_import(content, line, d, nl, target.hub_path)
    content = _splice_after_marker(content, target.marker, target.render_entry(d), nl)

    rewrite(path, content)
    if exists:
        logger.info("Updated %s", target.hub_path)
        return outcome("updated")
    logger.info("Created %s", target.hub_path)
    return outcome("created")


def _line_end(content: str, pos: int) -> int:
    """Index just past the newline ending the line that contains *pos*."""
    eol = content.find("\n", pos)
    return len(content) if eol == -1 else eol + 1


def _insert_at(content: str, pos: int, text: str, nl: str) -> str:
    if pos == len(content) and content and not content.endswith("\n"):
        return content + nl + text + nl
    return content[:pos] + text + nl + content[pos:]


def _splice_after_marker(content: str, marker: str, entry: str, nl: str) -> str:
    pos = _line_end(content, content.index(marker))
    return _insert_at(content, pos, entry.replace("\n", nl), nl)


def _insert_import(content: str, line: ImportLine, d: ResourceDescriptor, nl: str, hub: str) -> str:
    if not line.applies(d) or line.present(content, d):
        return content
    text = line.render(d)

    matches = list(line.anchor.finditer(content))
    if matches and line.position == "before_first":
        start = content.rfind("\n", 0, matches[0].start()) + 1
        return _insert_at(content, start, text, nl)
    if matches:
        return _insert_at(content, _line_end(content, matches[-1].start()), text, nl)

    fallback = list(line.fallback.finditer(content)) if line.fallback is not None else []
    if fallback:
        return _insert_at(content, _line_end(content, fallback[-1].start()), text, nl)

    if line.position == "before_first":
        logger.warning("No place for %r in %s; add it by hand", text.strip(), hub)
        return content

    # After a leading comment line, else at the very top
    pos = _line_end(content, 0) if content.startswith("//") else 0
    return _insert_at(content, pos, text, nl)
