# tests/fixtures/factories.py
"""Builders for graph documents and graphs.

Builders return plain document mappings (the shape graph files use) so
tests exercise the same validation path as real input. ``make_graph``
turns them into a PipelineGraph.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pipeforge.core.graph.models import PipelineGraph


def trigger_doc(
    node_id: str = "t1",
    label: str = "Push Trigger",
    block_type: str = "trigger_push",
    **config: Any,
) -> dict[str, Any]:
    if not config:
        config = {"trigger": "push", "branch": "main"}
    return {"id": node_id, "type": "trigger", "blockType": block_type, "label": label, "config": config}


def job_doc(node_id: str, label: str, block_type: str, **config: Any) -> dict[str, Any]:
    return {"id": node_id, "type": "job", "blockType": block_type, "label": label, "config": config}


def edge_doc(source: str, target: str) -> dict[str, Any]:
    return {"source": source, "target": target}


def make_graph(nodes: Iterable[Mapping[str, Any]], edges: Iterable[Mapping[str, Any]] = ()) -> PipelineGraph:
    return PipelineGraph.from_document({"nodes": list(nodes), "edges": list(edges)})
