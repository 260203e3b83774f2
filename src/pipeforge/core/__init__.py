# src/pipeforge/core/__init__.py
"""Core infrastructure: graph model, block catalog, documents, configuration, logging."""

from pipeforge.core.catalog import (
    BLOCK_CATALOG,
    TEMPLATES,
    BlockSpec,
    PipelineTemplate,
    create_node,
    get_block,
    get_template,
    list_blocks,
)
from pipeforge.core.config import GitHubSettings, PipeforgeSettings, load_settings
from pipeforge.core.documents import GraphLoadError, dump_graph, load_graph
from pipeforge.core.graph import (
    GraphValidationError,
    GraphValidationWarning,
    PipelineEdge,
    PipelineGraph,
    PipelineNode,
)
from pipeforge.core.logging import configure_logging, get_logger

__all__ = [
    "BLOCK_CATALOG",
    "TEMPLATES",
    "BlockSpec",
    "GitHubSettings",
    "GraphLoadError",
    "GraphValidationError",
    "GraphValidationWarning",
    "PipeforgeSettings",
    "PipelineEdge",
    "PipelineGraph",
    "PipelineNode",
    "PipelineTemplate",
    "configure_logging",
    "create_node",
    "dump_graph",
    "get_block",
    "get_logger",
    "get_template",
    "list_blocks",
    "load_graph",
    "load_settings",
]
