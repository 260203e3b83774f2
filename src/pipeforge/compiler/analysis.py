# src/pipeforge/compiler/analysis.py
"""Structural checks over a pipeline graph.

Emission is permissive: any graph compiles. The checks here find the graphs
whose output is probably not what the user meant (ignored triggers, colliding
job keys, edges to nowhere, dependency cycles) and report them as warnings.
``validate_graph`` turns those warnings into an error for strict callers.
"""

from __future__ import annotations

from collections import defaultdict

import networkx as nx

from pipeforge.compiler.identifiers import normalize_label
from pipeforge.contracts.types import JobID
from pipeforge.core.catalog import BLOCK_CATALOG
from pipeforge.core.graph.models import GraphValidationError, GraphValidationWarning, PipelineGraph

MULTIPLE_TRIGGERS = "multiple_triggers"
DUPLICATE_JOB_ID = "duplicate_job_id"
DANGLING_EDGE = "dangling_edge"
DEPENDENCY_CYCLE = "dependency_cycle"
UNKNOWN_BLOCK_TYPE = "unknown_block_type"


def build_job_graph(graph: PipelineGraph) -> nx.DiGraph:
    """Directed job-to-job dependency graph keyed by node id.

    Trigger nodes and edges touching them are left out, as are edges whose
    endpoints do not exist. Each node carries its position in the node
    sequence as ``order``.
    """
    index = graph.node_index()
    dependency_graph: nx.DiGraph = nx.DiGraph()
    for position, node in enumerate(graph.nodes):
        if not node.is_trigger and index[node.id] is node:
            dependency_graph.add_node(node.id, order=position, job_id=normalize_label(node.label))
    for edge in graph.edges:
        if edge.source in dependency_graph and edge.target in dependency_graph:
            dependency_graph.add_edge(edge.source, edge.target)
    return dependency_graph


def _check_triggers(graph: PipelineGraph) -> list[GraphValidationWarning]:
    triggers = graph.trigger_nodes
    if len(triggers) <= 1:
        return []
    ignored = ", ".join(f"'{node.id}'" for node in triggers[1:])
    return [
        GraphValidationWarning(
            code=MULTIPLE_TRIGGERS,
            message=f"Graph has {len(triggers)} trigger nodes; only '{triggers[0].id}' is used, {ignored} ignored.",
            node_ids=tuple(node.id for node in triggers),
        )
    ]


def _check_job_ids(graph: PipelineGraph) -> list[GraphValidationWarning]:
    by_job_id: dict[JobID, list[str]] = defaultdict(list)
    for node in graph.job_nodes:
        by_job_id[normalize_label(node.label)].append(node.id)
    return [
        GraphValidationWarning(
            code=DUPLICATE_JOB_ID,
            message=f"{len(node_ids)} jobs share the job id '{job_id}'; later definitions override earlier ones.",
            node_ids=tuple(node_ids),
        )
        for job_id, node_ids in by_job_id.items()
        if len(node_ids) > 1
    ]


def _check_edges(graph: PipelineGraph) -> list[GraphValidationWarning]:
    index = graph.node_index()
    warnings: list[GraphValidationWarning] = []
    for edge in graph.edges:
        missing = [endpoint for endpoint in (edge.source, edge.target) if endpoint not in index]
        if missing:
            warnings.append(
                GraphValidationWarning(
                    code=DANGLING_EDGE,
                    message=f"Edge '{edge.source}' -> '{edge.target}' refers to unknown node(s): {', '.join(missing)}.",
                    node_ids=(edge.source, edge.target),
                )
            )
    return warnings


def _check_cycles(graph: PipelineGraph) -> list[GraphValidationWarning]:
    dependency_graph = build_job_graph(graph)
    if nx.is_directed_acyclic_graph(dependency_graph):
        return []

    order = nx.get_node_attributes(dependency_graph, "order")
    cycles: list[list[str]] = []
    for cycle in nx.simple_cycles(dependency_graph):
        # Rotate so the cycle starts at its earliest node; keeps output stable.
        start = min(range(len(cycle)), key=lambda i: order[cycle[i]])
        cycles.append(cycle[start:] + cycle[:start])
    cycles.sort(key=lambda cycle: [order[node_id] for node_id in cycle])

    warnings: list[GraphValidationWarning] = []
    for cycle in cycles:
        path = " -> ".join([*cycle, cycle[0]])
        warnings.append(
            GraphValidationWarning(
                code=DEPENDENCY_CYCLE,
                message=f"Job dependencies form a cycle: {path}",
                node_ids=tuple(cycle),
            )
        )
    return warnings


def _check_block_types(graph: PipelineGraph) -> list[GraphValidationWarning]:
    return [
        GraphValidationWarning(
            code=UNKNOWN_BLOCK_TYPE,
            message=f"Node '{node.id}' has unknown block type {node.block_type!r}; it compiles to a checkout-only job.",
            node_ids=(node.id,),
        )
        for node in graph.nodes
        if node.block_type not in BLOCK_CATALOG
    ]


def analyze_graph(graph: PipelineGraph) -> list[GraphValidationWarning]:
    """Report every structural problem in ``graph``.

    Never raises. Warnings come grouped by check, in a fixed check order,
    and within a check in graph order.
    """
    return [
        *_check_triggers(graph),
        *_check_job_ids(graph),
        *_check_edges(graph),
        *_check_cycles(graph),
        *_check_block_types(graph),
    ]


def validate_graph(graph: PipelineGraph) -> None:
    """Raise if ``analyze_graph`` finds anything.

    Raises:
        GraphValidationError: Carrying all warnings found.
    """
    warnings = analyze_graph(graph)
    if warnings:
        summary = "; ".join(warning.message for warning in warnings)
        raise GraphValidationError(f"Graph has {len(warnings)} problem(s): {summary}", tuple(warnings))


def job_execution_order(graph: PipelineGraph) -> list[JobID]:
    """Job ids in an order that satisfies every dependency.

    Jobs without an ordering constraint between them keep node order.

    Raises:
        GraphValidationError: If the job dependencies contain a cycle.
    """
    dependency_graph = build_job_graph(graph)
    order = nx.get_node_attributes(dependency_graph, "order")
    try:
        sorted_ids = list(nx.lexicographical_topological_sort(dependency_graph, key=lambda node_id: order[node_id]))
    except nx.NetworkXUnfeasible as e:
        raise GraphValidationError(f"Cannot order jobs: {e}", tuple(_check_cycles(graph))) from e
    return [dependency_graph.nodes[node_id]["job_id"] for node_id in sorted_ids]
