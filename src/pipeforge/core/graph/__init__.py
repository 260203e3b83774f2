# src/pipeforge/core/graph/__init__.py
"""Pipeline graph model: nodes, edges, and typed block configuration."""

from pipeforge.core.graph.blocks import (
    CONFIG_MODELS,
    BlockConfig,
    DockerJobConfig,
    GoJobConfig,
    JobConfig,
    NodeJobConfig,
    PythonJobConfig,
    TriggerConfig,
    config_model_for,
    parse_block_config,
)
from pipeforge.core.graph.models import (
    GraphValidationError,
    GraphValidationWarning,
    PipelineEdge,
    PipelineGraph,
    PipelineNode,
)

__all__ = [
    "CONFIG_MODELS",
    "BlockConfig",
    "DockerJobConfig",
    "GoJobConfig",
    "GraphValidationError",
    "GraphValidationWarning",
    "JobConfig",
    "NodeJobConfig",
    "PipelineEdge",
    "PipelineGraph",
    "PipelineNode",
    "PythonJobConfig",
    "TriggerConfig",
    "config_model_for",
    "parse_block_config",
]
