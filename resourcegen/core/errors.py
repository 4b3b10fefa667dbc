"""
Error taxonomy for resource generation.

Only the failures that end a resource's run are exceptions.  Skipped
writes and hubs without a marker are outcome statuses on
``WriteOutcome`` / ``WiringOutcome``; they never raise.
"""

from __future__ import annotations


class CodegenError(Exception):
    """Base class for every error raised by the generator."""


class DescriptorNotFound(CodegenError):
    """The schema file for a resource does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Schema not found: {path}")
        self.path = path


class InvalidDescriptor(CodegenError):
    """The schema file exists but does not declare exactly one usable resource."""


class BatchItemFailure(CodegenError):
    """One resource failed inside a batch run.

    Raised and caught at the per-resource boundary of ``generate_all``;
    it never reaches sibling resources.
    """

    def __init__(self, resource: str, reason: str) -> None:
        super().__init__(f"Failed to generate {resource}: {reason}")
        self.resource = resource
        self.reason = reason
