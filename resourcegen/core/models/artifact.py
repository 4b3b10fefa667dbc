"""
Artifact and write-outcome models — the contract between the
orchestrator, the producers and the safe writer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal

from pydantic import BaseModel

from resourcegen.core.models.descriptor import ResourceDescriptor

# A producer maps a descriptor to file text, or None for "nothing to emit".
ContentProducer = Callable[[ResourceDescriptor], "str | None"]


class GenerateOptions(BaseModel):
    """Run options for a single resource.

    Attributes:
        force:       Overwrite artifacts that already exist.
        only:        Restrict the plan to one artifact kind.  An unknown
                     kind yields an empty plan, not an error.
        skip_wiring: Do not touch the hub files.
    """

    force: bool = False
    only: str | None = None
    skip_wiring: bool = False


@dataclass(frozen=True)
class Artifact:
    """One planned output file.  Computed per run, never persisted."""

    kind: str
    destination: str          # relative to the project root
    producer: ContentProducer


class WriteOutcome(BaseModel):
    """Result of handing one artifact to the safe writer.

    ``skipped`` is informational (file exists, no --force).  ``omitted``
    means the producer chose not to emit anything.  Only ``failed``
    carries an error.
    """

    path: str
    kind: str = ""
    status: Literal["written", "skipped", "omitted", "failed"] = "written"
    error: str | None = None

    @property
    def written(self) -> bool:
        return self.status == "written"

    @property
    def skipped(self) -> bool:
        return self.status == "skipped"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def success(cls, path: str, kind: str = "") -> WriteOutcome:
        return cls(path=path, kind=kind, status="written")

    @classmethod
    def skip(cls, path: str, kind: str = "") -> WriteOutcome:
        return cls(path=path, kind=kind, status="skipped")

    @classmethod
    def omit(cls, path: str, kind: str = "") -> WriteOutcome:
        return cls(path=path, kind=kind, status="omitted")

    @classmethod
    def failure(cls, path: str, error: str, kind: str = "") -> WriteOutcome:
        return cls(path=path, kind=kind, status="failed", error=error)
