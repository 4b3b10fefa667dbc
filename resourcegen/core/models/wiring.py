"""
Wiring models — hub targets and their per-run outcomes.

A ``WiringTarget`` is static configuration: where a hub lives, which
marker comment anchors new entries, how to render the entry, and how to
tell that a resource is already wired in.  The merge engine in
``resourcegen.core.services.wiring.merge`` is the only consumer.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Literal

from pydantic import BaseModel

from resourcegen.core.models.descriptor import ResourceDescriptor

Renderer = Callable[[ResourceDescriptor], str]
Probe = Callable[[str, ResourceDescriptor], bool]


@dataclass(frozen=True)
class ImportLine:
    """A reference line that must exist before the entry can compile.

    Attributes:
        render:   Descriptor → line text (without trailing newline).
        present:  Already imported?  Checked against the current contents.
        anchor:   Regex (MULTILINE) locating where the line goes.
        position: ``after_last`` inserts below the last anchor match;
                  ``before_first`` inserts above the first one.
        fallback: Regex used when ``anchor`` matches nothing; same
                  ``after_last`` semantics.  With no match either, an
                  ``after_last`` line goes right after the header
                  comment and a ``before_first`` line is skipped.
        applies:  Whether this descriptor needs the line at all.
    """

    render: Renderer
    present: Probe
    anchor: re.Pattern[str]
    position: Literal["after_last", "before_first"] = "after_last"
    fallback: re.Pattern[str] | None = None
    applies: Callable[[ResourceDescriptor], bool] = field(default=lambda d: True)


@dataclass(frozen=True)
class WiringTarget:
    """One hub file and how to register a resource in it.

    ``skeleton`` is the content written when the hub does not exist yet;
    it must contain ``marker``.  The entry and imports are then spliced
    into it exactly as they would be into an existing hub.
    """

    name: str
    hub_path: str                     # relative to the project root
    marker: str
    render_entry: Renderer
    probe: Probe
    skeleton: str
    imports: tuple[ImportLine, ...] = ()
    applies: Callable[[ResourceDescriptor], bool] = field(default=lambda d: True)
    collision: Probe | None = None


class WiringOutcome(BaseModel):
    """What happened to one hub file during a merge."""

    hub: str
    path: str
    status: Literal[
        "created",
        "updated",
        "unchanged",
        "marker_missing",
        "not_applicable",
        "failed",
    ]
    message: str = ""

    @property
    def changed(self) -> bool:
        return self.status in ("created", "updated")

    @property
    def failed(self) -> bool:
        return self.status == "failed"
