# src/pipeforge/compiler/emitters/base.py
"""Shared emitter machinery.

Every dialect resolves a graph the same way: pick the trigger, plan one job
per job node (identifier, dependencies, stage, steps), then hand the plan to
the dialect's renderer. Only rendering differs between dialects.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from pipeforge.compiler.identifiers import normalize_label
from pipeforge.compiler.resolver import resolve_dependencies, select_trigger
from pipeforge.compiler.stages import classify_stage
from pipeforge.compiler.steps import Step, synthesize_steps
from pipeforge.contracts.enums import OutputFormat, Stage
from pipeforge.contracts.types import JobID
from pipeforge.core.graph.blocks import TriggerConfig
from pipeforge.core.graph.models import PipelineGraph, PipelineNode

EMPTY_CANVAS_PLACEHOLDER = "# Drag blocks onto the canvas to start building your pipeline"

DEFAULT_BRANCH = "main"


@dataclass(frozen=True, slots=True)
class JobPlan:
    """A job node resolved against its graph, ready for rendering."""

    job_id: JobID
    node: PipelineNode
    needs: tuple[JobID, ...]
    stage: Stage
    steps: tuple[Step, ...]


@dataclass(frozen=True, slots=True)
class PipelinePlan:
    """Dialect-neutral resolution of a whole graph."""

    graph: PipelineGraph
    trigger: PipelineNode | None
    jobs: tuple[JobPlan, ...]

    @property
    def trigger_config(self) -> TriggerConfig:
        if self.trigger is not None and isinstance(self.trigger.config, TriggerConfig):
            return self.trigger.config
        return TriggerConfig()

    @property
    def branch(self) -> str:
        return self.trigger_config.branch or DEFAULT_BRANCH


class PipelineEmitter(ABC):
    """Base class for CI dialect emitters.

    Subclasses set ``dialect`` and the output locations and implement
    ``render``.
    """

    dialect: ClassVar[OutputFormat]
    output_path: ClassVar[str]
    download_name: ClassVar[str]

    def plan(self, graph: PipelineGraph) -> PipelinePlan:
        jobs = tuple(self._plan_job(graph, node) for node in graph.job_nodes)
        return PipelinePlan(graph=graph, trigger=select_trigger(graph), jobs=jobs)

    def _plan_job(self, graph: PipelineGraph, node: PipelineNode) -> JobPlan:
        return JobPlan(
            job_id=normalize_label(node.label),
            node=node,
            needs=tuple(resolve_dependencies(graph, node)),
            stage=classify_stage(node.block_type),
            steps=tuple(synthesize_steps(node, self.dialect)),
        )

    def emit(self, graph: PipelineGraph) -> str:
        """Compile ``graph`` to configuration text in this dialect."""
        if graph.is_empty:
            return EMPTY_CANVAS_PLACEHOLDER
        return self.render(self.plan(graph))

    @abstractmethod
    def render(self, plan: PipelinePlan) -> str:
        """Render a non-empty graph's plan to text."""
