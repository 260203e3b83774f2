# src/pipeforge/core/graph/models.py
"""Pipeline graph snapshot: nodes, edges, and analysis result types.

Leaf module for the graph layer: imports only contracts and block configs.

The graph is owned by the editor. The compiler receives an immutable
snapshot, reads it, and never writes back. Node and edge order is insertion
order and is significant: it decides trigger selection, job order, and
dependency order in the emitted text.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny, model_validator

from pipeforge.contracts.enums import NodeRole
from pipeforge.contracts.types import NodeID
from pipeforge.core.graph.blocks import BlockConfig, JobConfig, parse_block_config

# Keys the canvas stores on exported nodes that have no meaning to the compiler.
_PRESENTATION_KEYS = frozenset({"position", "icon", "color", "description", "selected", "dragging", "width", "height"})


class GraphValidationError(ValueError):
    """Raised when strict validation finds problems in a graph.

    Carries every warning found, not just the first, so callers can report
    them together.
    """

    def __init__(self, message: str, warnings: tuple[GraphValidationWarning, ...] = ()) -> None:
        super().__init__(message)
        self.warnings = warnings


@dataclass(frozen=True, slots=True)
class GraphValidationWarning:
    """Non-fatal finding about a graph.

    Warnings never stop generation. They flag graphs that compile to text
    the user probably did not intend (a second trigger that is ignored, two
    jobs sharing a key, a dependency cycle).
    """

    code: str
    message: str
    node_ids: tuple[str, ...]


class PipelineNode(BaseModel):
    """A block placed on the canvas."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: NodeID
    role: NodeRole = NodeRole.JOB
    block_type: str = Field(default="", alias="blockType")
    label: str = ""
    config: SerializeAsAny[BlockConfig] = Field(default_factory=JobConfig)

    @model_validator(mode="before")
    @classmethod
    def _from_document(cls, data: Any) -> Any:
        """Accept both flat nodes and the canvas export shape.

        Canvas exports nest block fields under ``data`` and use ``type`` for
        the role; anything other than ``"trigger"`` is a job. Options may be
        given as ``config`` or ``configuration``.
        """
        if not isinstance(data, Mapping):
            return data

        raw: dict[str, Any] = {k: v for k, v in data.items() if k not in _PRESENTATION_KEYS and k != "data"}
        nested = data.get("data")
        if isinstance(nested, Mapping):
            raw.update({k: v for k, v in nested.items() if k not in _PRESENTATION_KEYS})

        role_value = raw.pop("role", None)
        type_value = raw.pop("type", None)
        if not isinstance(role_value, NodeRole):
            role_value = role_value if role_value is not None else type_value
            role_value = NodeRole.TRIGGER if str(role_value) == NodeRole.TRIGGER else NodeRole.JOB

        block_type = raw.pop("blockType", raw.pop("block_type", None))
        block_type = "" if block_type is None else str(block_type)

        node_id = raw.get("id")
        if node_id is not None and not isinstance(node_id, str):
            raw["id"] = str(node_id)
        label = raw.get("label")
        raw["label"] = "" if label is None else str(label)

        options = raw.pop("configuration", None)
        if "config" in raw:
            options = raw["config"]

        raw["role"] = role_value
        raw["block_type"] = block_type
        raw["config"] = parse_block_config(block_type, role_value, options)
        return raw

    @property
    def is_trigger(self) -> bool:
        return self.role == NodeRole.TRIGGER

    def to_document(self) -> dict[str, Any]:
        """Serialize in the flat graph-document shape."""
        return {
            "id": self.id,
            "type": str(self.role),
            "blockType": self.block_type,
            "label": self.label,
            "config": self.config.to_document(),
        }


class PipelineEdge(BaseModel):
    """Directed link from an upstream node to a downstream node."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    source: NodeID
    target: NodeID

    @model_validator(mode="before")
    @classmethod
    def _coerce_ids(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        coerced = dict(data)
        for key in ("source", "target"):
            value = coerced.get(key)
            if value is not None and not isinstance(value, str):
                coerced[key] = str(value)
        return coerced

    def to_document(self) -> dict[str, Any]:
        return {"source": self.source, "target": self.target}


class PipelineGraph(BaseModel):
    """Ordered nodes and edges making up one pipeline.

    Nothing here enforces that edge endpoints exist, that the graph is
    acyclic, or that labels are unique. See ``pipeforge.compiler.analysis``
    for the checks that report those conditions.
    """

    model_config = ConfigDict(frozen=True)

    nodes: tuple[PipelineNode, ...] = ()
    edges: tuple[PipelineEdge, ...] = ()

    @classmethod
    def from_document(cls, document: Mapping[str, Any] | None) -> PipelineGraph:
        """Build a graph from a parsed YAML/JSON document.

        A missing or null ``nodes``/``edges`` key is an empty sequence.
        """
        document = document or {}
        return cls.model_validate(
            {
                "nodes": list(document.get("nodes") or []),
                "edges": list(document.get("edges") or []),
            }
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "nodes": [node.to_document() for node in self.nodes],
            "edges": [edge.to_document() for edge in self.edges],
        }

    def node_index(self) -> dict[str, PipelineNode]:
        """Map node id to node; the first node wins when ids repeat."""
        index: dict[str, PipelineNode] = {}
        for node in self.nodes:
            index.setdefault(node.id, node)
        return index

    def get_node(self, node_id: str) -> PipelineNode | None:
        return self.node_index().get(node_id)

    @property
    def trigger_nodes(self) -> list[PipelineNode]:
        return [node for node in self.nodes if node.is_trigger]

    @property
    def job_nodes(self) -> list[PipelineNode]:
        return [node for node in self.nodes if not node.is_trigger]

    @property
    def is_empty(self) -> bool:
        return not self.nodes
