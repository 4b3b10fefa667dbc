"""
Hub wiring — idempotent registration of a resource in the shared hub files.
"""

from resourcegen.core.services.wiring.merge import merge
from resourcegen.core.services.wiring.targets import default_targets

__all__ = ["default_targets", "merge"]
