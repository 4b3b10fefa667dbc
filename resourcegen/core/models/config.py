"""
Generator configuration model — loaded from codegen.yml.

Every key is optional; an absent file means all defaults.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class HubPaths(BaseModel):
    """Locations of the shared hub files, relative to the project root."""

    model_config = ConfigDict(extra="forbid")

    schemas_barrel: str = "src/schemas/index.ts"
    collections_barrel: str = "src/collections/index.ts"
    registry: str = "src/lib/registry.ts"
    db_client: str = "src/lib/db-client.ts"
    navigation: str = "src/lib/navigation.ts"


class CodegenConfig(BaseModel):
    """Project-level generator settings.

    Attributes:
        schemas_dir:   Directory holding ``<name><schema_suffix>`` files.
        schema_suffix: File suffix of resource declarations.
        base_schema:   Shared declaration file excluded from discovery.
        factory:       Callee name of the resource factory.
        default_icon:  Navigation icon when the resource sets none.
        hubs:          Hub file locations.
    """

    model_config = ConfigDict(extra="forbid")

    schemas_dir: str = "src/schemas"
    schema_suffix: str = ".schema.ts"
    base_schema: str = "_resource.schema.ts"
    factory: str = "defineResource"
    default_icon: str = "Package"
    hubs: HubPaths = Field(default_factory=HubPaths)

    def schema_path(self, resource_name: str) -> str:
        """Relative path of the declaration file for *resource_name*."""
        return f"{self.schemas_dir}/{resource_name}{self.schema_suffix}"
