# src/pipeforge/compiler/emitters/__init__.py
"""Dialect emitters and their registry."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from pipeforge.compiler.emitters.base import EMPTY_CANVAS_PLACEHOLDER, JobPlan, PipelineEmitter, PipelinePlan
from pipeforge.compiler.emitters.github import GitHubActionsEmitter
from pipeforge.compiler.emitters.gitlab import GitLabCIEmitter
from pipeforge.contracts.enums import OutputFormat

EMITTERS: Mapping[OutputFormat, PipelineEmitter] = MappingProxyType(
    {
        OutputFormat.GITHUB: GitHubActionsEmitter(),
        OutputFormat.GITLAB: GitLabCIEmitter(),
    }
)


def get_emitter(fmt: OutputFormat | str) -> PipelineEmitter:
    """Return the emitter for an output format.

    Raises:
        ValueError: If ``fmt`` names no supported format.
    """
    try:
        return EMITTERS[OutputFormat(fmt)]
    except ValueError:
        supported = ", ".join(EMITTERS)
        raise ValueError(f"Unsupported output format: {fmt!r}. Supported: {supported}") from None


__all__ = [
    "EMITTERS",
    "EMPTY_CANVAS_PLACEHOLDER",
    "GitHubActionsEmitter",
    "GitLabCIEmitter",
    "JobPlan",
    "PipelineEmitter",
    "PipelinePlan",
    "get_emitter",
]
