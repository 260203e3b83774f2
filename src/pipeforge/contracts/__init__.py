"""Shared contracts: enums and semantic types used by every subsystem.

Leaf package: no intra-package imports beyond its own modules.
"""

from pipeforge.contracts.enums import (
    BlockCategory,
    BlockType,
    EnvironmentKind,
    NodeRole,
    OutputFormat,
    Stage,
    TriggerEvent,
)
from pipeforge.contracts.types import JobID, NodeID, RepositoryName

__all__ = [
    "BlockCategory",
    "BlockType",
    "EnvironmentKind",
    "JobID",
    "NodeID",
    "NodeRole",
    "OutputFormat",
    "RepositoryName",
    "Stage",
    "TriggerEvent",
]
