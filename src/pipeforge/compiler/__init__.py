# src/pipeforge/compiler/__init__.py
"""Pipeline compiler: graph snapshot in, CI configuration text out.

Generation is a pure function of the graph and the output format. It never
raises for graph content; structural problems are reported separately by
``analyze_graph``.

Example:
    >>> from pipeforge.core.catalog import get_template
    >>> text = generate(get_template("nodejs"), "github")
    >>> text.splitlines()[0]
    'name: Push Trigger'
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pipeforge.compiler.analysis import analyze_graph, job_execution_order, validate_graph
from pipeforge.compiler.emitters import EMPTY_CANVAS_PLACEHOLDER, get_emitter
from pipeforge.compiler.identifiers import normalize_label
from pipeforge.compiler.resolver import resolve_dependencies, select_trigger
from pipeforge.compiler.stages import classify_stage, stage_order
from pipeforge.compiler.steps import Step, synthesize_steps
from pipeforge.contracts.enums import OutputFormat
from pipeforge.core.graph.models import GraphValidationWarning, PipelineEdge, PipelineGraph, PipelineNode


@dataclass(frozen=True, slots=True)
class CompiledPipeline:
    """Generated text plus where it conventionally lives and what analysis found."""

    format: OutputFormat
    text: str
    path: str
    warnings: tuple[GraphValidationWarning, ...] = ()


def generate(graph: PipelineGraph, fmt: OutputFormat | str = OutputFormat.GITHUB) -> str:
    """Compile ``graph`` to configuration text in ``fmt``.

    Raises:
        ValueError: If ``fmt`` is not a supported format.
    """
    return get_emitter(fmt).emit(graph)


def generate_yaml(
    nodes: Iterable[PipelineNode | Mapping[str, Any]],
    edges: Iterable[PipelineEdge | Mapping[str, Any]],
    fmt: OutputFormat | str = OutputFormat.GITHUB,
) -> str:
    """Compile loose node and edge sequences, as the editor holds them."""
    graph = PipelineGraph.model_validate({"nodes": list(nodes), "edges": list(edges)})
    return generate(graph, fmt)


def output_path(fmt: OutputFormat | str) -> str:
    """Repository path the generated file conventionally lives at."""
    return get_emitter(fmt).output_path


def download_name(fmt: OutputFormat | str) -> str:
    """File name offered when the text is downloaded."""
    return get_emitter(fmt).download_name


def compile_pipeline(graph: PipelineGraph, fmt: OutputFormat | str = OutputFormat.GITHUB) -> CompiledPipeline:
    """Generate text and run analysis in one call."""
    emitter = get_emitter(fmt)
    return CompiledPipeline(
        format=emitter.dialect,
        text=emitter.emit(graph),
        path=emitter.output_path,
        warnings=tuple(analyze_graph(graph)),
    )


__all__ = [
    "EMPTY_CANVAS_PLACEHOLDER",
    "CompiledPipeline",
    "Step",
    "analyze_graph",
    "classify_stage",
    "compile_pipeline",
    "download_name",
    "generate",
    "generate_yaml",
    "job_execution_order",
    "normalize_label",
    "output_path",
    "resolve_dependencies",
    "select_trigger",
    "stage_order",
    "synthesize_steps",
    "validate_graph",
]
