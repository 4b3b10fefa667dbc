"""
Domain models — pydantic types for the generator.

All models are re-exported here for convenient access:

    from resourcegen.core.models import ResourceDescriptor, WriteOutcome, WiringTarget
"""

from resourcegen.core.models.artifact import (
    Artifact,
    ContentProducer,
    GenerateOptions,
    WriteOutcome,
)
from resourcegen.core.models.config import CodegenConfig, HubPaths
from resourcegen.core.models.descriptor import (
    RECOGNIZED_CONFIG_KEYS,
    RECOGNIZED_FIELD_META_KEYS,
    FieldDescriptor,
    ResourceDescriptor,
)
from resourcegen.core.models.wiring import ImportLine, WiringOutcome, WiringTarget

__all__ = [
    # artifact.py
    "Artifact",
    "ContentProducer",
    "GenerateOptions",
    "WriteOutcome",
    # config.py
    "CodegenConfig",
    "HubPaths",
    # descriptor.py
    "FieldDescriptor",
    "RECOGNIZED_CONFIG_KEYS",
    "RECOGNIZED_FIELD_META_KEYS",
    "ResourceDescriptor",
    # wiring.py
    "ImportLine",
    "WiringOutcome",
    "WiringTarget",
]
