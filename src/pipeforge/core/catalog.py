# src/pipeforge/core/catalog.py
"""Static block catalog and starter templates.

The catalog is the palette the editor draws from: for every block type it
records the role, a human label, palette grouping, the toolchain the block
needs, and the default option values a freshly placed node starts with.

Templates are complete starter graphs built from catalog entries.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pipeforge.contracts.enums import BlockCategory, BlockType, EnvironmentKind, NodeRole
from pipeforge.core.graph.models import PipelineEdge, PipelineGraph, PipelineNode


@dataclass(frozen=True, slots=True)
class BlockSpec:
    """Catalog entry for one block type."""

    block_type: BlockType
    role: NodeRole
    label: str
    description: str
    category: BlockCategory
    defaults: Mapping[str, Any] = field(default_factory=dict)
    environment: EnvironmentKind | None = None

    def __post_init__(self) -> None:
        # Freeze defaults so catalog entries cannot be edited through a node.
        object.__setattr__(self, "defaults", MappingProxyType(dict(self.defaults)))

    @property
    def is_trigger(self) -> bool:
        return self.role == NodeRole.TRIGGER


def _trigger(block_type: BlockType, label: str, description: str, **defaults: Any) -> BlockSpec:
    return BlockSpec(block_type, NodeRole.TRIGGER, label, description, BlockCategory.TRIGGERS, defaults)


def _job(
    block_type: BlockType,
    label: str,
    description: str,
    category: BlockCategory,
    environment: EnvironmentKind | None = None,
    **defaults: Any,
) -> BlockSpec:
    return BlockSpec(block_type, NodeRole.JOB, label, description, category, defaults, environment)


_BLOCKS: tuple[BlockSpec, ...] = (
    _trigger(BlockType.TRIGGER_PUSH, "Push Trigger", "Runs on git push", trigger="push", branch="main"),
    _trigger(BlockType.TRIGGER_PR, "Pull Request", "Runs on PR open/sync", trigger="pull_request", branch="main"),
    _trigger(BlockType.TRIGGER_SCHEDULE, "Scheduled", "Runs on a cron schedule", trigger="schedule", cron="0 0 * * *"),
    _job(
        BlockType.NODE_TEST,
        "Node.js Tests",
        "npm ci + npm test",
        BlockCategory.TEST_AND_QUALITY,
        EnvironmentKind.NODE,
        nodeVersion="20",
        checkout=True,
    ),
    _job(
        BlockType.PYTHON_TEST,
        "Python Tests",
        "pip install + pytest",
        BlockCategory.TEST_AND_QUALITY,
        EnvironmentKind.PYTHON,
        pythonVersion="3.11",
        checkout=True,
    ),
    _job(
        BlockType.GO_BUILD,
        "Go Build & Test",
        "go build + go test",
        BlockCategory.TEST_AND_QUALITY,
        EnvironmentKind.GO,
        goVersion="1.21",
        checkout=True,
    ),
    _job(BlockType.LINT, "Lint Code", "Run ESLint/Prettier", BlockCategory.TEST_AND_QUALITY, checkout=True),
    _job(BlockType.SECURITY_SCAN, "Security Scan", "Snyk vulnerability scan", BlockCategory.TEST_AND_QUALITY, checkout=True),
    _job(
        BlockType.NODE_BUILD,
        "Node.js Build",
        "npm ci + npm run build",
        BlockCategory.BUILD,
        EnvironmentKind.NODE,
        nodeVersion="20",
        checkout=True,
    ),
    _job(
        BlockType.PYTHON_BUILD,
        "Python Build",
        "python -m build",
        BlockCategory.BUILD,
        EnvironmentKind.PYTHON,
        pythonVersion="3.11",
        checkout=True,
    ),
    _job(
        BlockType.DOCKER_BUILD,
        "Docker Build",
        "Build & tag Docker image",
        BlockCategory.BUILD,
        EnvironmentKind.DOCKER,
        imageName="my-app",
        checkout=True,
    ),
    _job(BlockType.CACHE, "Cache Deps", "Cache node_modules/pip", BlockCategory.BUILD, checkout=False),
    _job(BlockType.DEPLOY_VERCEL, "Deploy Vercel", "Deploy to Vercel", BlockCategory.DEPLOY, checkout=True),
    _job(BlockType.DEPLOY_AWS, "Deploy AWS", "Deploy to AWS", BlockCategory.DEPLOY, checkout=True),
    _job(BlockType.DEPLOY_GCP, "Deploy GCP", "Deploy to Google Cloud", BlockCategory.DEPLOY, checkout=True),
    _job(BlockType.NOTIFY_SLACK, "Slack Notify", "Send Slack notification", BlockCategory.DEPLOY, checkout=False),
)

BLOCK_CATALOG: Mapping[str, BlockSpec] = MappingProxyType({spec.block_type: spec for spec in _BLOCKS})


def get_block(block_type: str) -> BlockSpec | None:
    """Look up a catalog entry; None for block types the catalog does not know."""
    return BLOCK_CATALOG.get(block_type)


def list_blocks() -> list[BlockSpec]:
    """All catalog entries in palette order."""
    return list(_BLOCKS)


def blocks_by_category() -> dict[BlockCategory, list[BlockSpec]]:
    grouped: dict[BlockCategory, list[BlockSpec]] = {category: [] for category in BlockCategory}
    for spec in _BLOCKS:
        grouped[spec.category].append(spec)
    return grouped


def default_config(block_type: str) -> dict[str, Any]:
    """Fresh, independent copy of a block type's default options."""
    spec = get_block(block_type)
    if spec is None:
        return {}
    return copy.deepcopy(dict(spec.defaults))


def create_node(block_type: BlockType | str, node_id: str, label: str | None = None, **overrides: Any) -> PipelineNode:
    """Place a catalog block as a new node.

    Options start from the catalog defaults; ``overrides`` replace individual
    options the way the editor's configuration panel does.

    Raises:
        KeyError: If the block type is not in the catalog.
    """
    spec = get_block(block_type)
    if spec is None:
        raise KeyError(f"Unknown block type: {block_type!r}. Available: {', '.join(BLOCK_CATALOG)}")
    config = default_config(spec.block_type)
    config.update(overrides)
    return PipelineNode.model_validate(
        {
            "id": node_id,
            "role": spec.role,
            "blockType": spec.block_type,
            "label": label if label is not None else spec.label,
            "config": config,
        }
    )


# =============================================================================
# Starter templates
# =============================================================================


@dataclass(frozen=True, slots=True)
class PipelineTemplate:
    """A named starter graph: ordered (node id, block type) pairs plus edges."""

    name: str
    title: str
    blocks: tuple[tuple[str, BlockType], ...]
    edges: tuple[tuple[str, str], ...]

    def build(self) -> PipelineGraph:
        nodes = [create_node(block_type, node_id) for node_id, block_type in self.blocks]
        edges = [PipelineEdge(source=source, target=target) for source, target in self.edges]
        return PipelineGraph(nodes=tuple(nodes), edges=tuple(edges))


TEMPLATES: Mapping[str, PipelineTemplate] = MappingProxyType(
    {
        "nodejs": PipelineTemplate(
            name="nodejs",
            title="Node.js App",
            blocks=(
                ("t1", BlockType.TRIGGER_PUSH),
                ("j1", BlockType.LINT),
                ("j2", BlockType.NODE_TEST),
                ("j3", BlockType.NODE_BUILD),
                ("j4", BlockType.DEPLOY_VERCEL),
            ),
            edges=(("t1", "j1"), ("t1", "j2"), ("j1", "j3"), ("j2", "j3"), ("j3", "j4")),
        ),
        "python": PipelineTemplate(
            name="python",
            title="Python App",
            blocks=(
                ("t1", BlockType.TRIGGER_PUSH),
                ("j1", BlockType.SECURITY_SCAN),
                ("j2", BlockType.PYTHON_TEST),
                ("j3", BlockType.PYTHON_BUILD),
                ("j4", BlockType.DEPLOY_AWS),
            ),
            edges=(("t1", "j1"), ("t1", "j2"), ("j1", "j3"), ("j2", "j3"), ("j3", "j4")),
        ),
        "docker": PipelineTemplate(
            name="docker",
            title="Docker",
            blocks=(
                ("t1", BlockType.TRIGGER_PUSH),
                ("j1", BlockType.SECURITY_SCAN),
                ("j2", BlockType.DOCKER_BUILD),
                ("j3", BlockType.DEPLOY_GCP),
            ),
            edges=(("t1", "j1"), ("j1", "j2"), ("j2", "j3")),
        ),
        "fullstack": PipelineTemplate(
            name="fullstack",
            title="Full Stack",
            blocks=(
                ("t1", BlockType.TRIGGER_PR),
                ("j1", BlockType.LINT),
                ("j2", BlockType.NODE_TEST),
                ("j3", BlockType.SECURITY_SCAN),
                ("j4", BlockType.NODE_BUILD),
                ("j5", BlockType.DEPLOY_VERCEL),
                ("j6", BlockType.NOTIFY_SLACK),
            ),
            edges=(
                ("t1", "j1"),
                ("t1", "j2"),
                ("t1", "j3"),
                ("j1", "j4"),
                ("j2", "j4"),
                ("j3", "j4"),
                ("j4", "j5"),
                ("j4", "j6"),
            ),
        ),
    }
)


def get_template(name: str) -> PipelineGraph:
    """Build the starter graph for a template name.

    Raises:
        KeyError: If no template has that name.
    """
    template = TEMPLATES.get(name)
    if template is None:
        raise KeyError(f"Unknown template: {name!r}. Available: {', '.join(TEMPLATES)}")
    return template.build()
