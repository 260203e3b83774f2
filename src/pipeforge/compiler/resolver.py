# src/pipeforge/compiler/resolver.py
"""Trigger selection and dependency resolution over a graph snapshot."""

from __future__ import annotations

from pipeforge.compiler.identifiers import normalize_label
from pipeforge.contracts.types import JobID
from pipeforge.core.graph.models import PipelineGraph, PipelineNode


def select_trigger(graph: PipelineGraph) -> PipelineNode | None:
    """Return the pipeline trigger: the first trigger node in node order.

    Later trigger nodes are ignored for emission. They are reported by
    ``analyze_graph`` as ``multiple_triggers``.
    """
    for node in graph.nodes:
        if node.is_trigger:
            return node
    return None


def resolve_dependencies(graph: PipelineGraph, node: PipelineNode) -> list[JobID]:
    """Normalized ids of the job nodes feeding directly into ``node``.

    Walks the edge sequence in order and keeps each edge whose target is
    ``node`` and whose source exists and is a job. Edges from triggers and
    edges from unknown node ids contribute nothing. No deduplication and no
    cycle detection happen here: a self-edge yields the node's own id.
    """
    index = graph.node_index()
    dependencies: list[JobID] = []
    for edge in graph.edges:
        if edge.target != node.id:
            continue
        source = index.get(edge.source)
        if source is None or source.is_trigger:
            continue
        dependencies.append(normalize_label(source.label))
    return dependencies
