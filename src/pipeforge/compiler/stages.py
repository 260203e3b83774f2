"""GitLab stage classification."""

from __future__ import annotations

from pipeforge.contracts.enums import BlockType, Stage
from pipeforge.core.graph.models import PipelineGraph

_BUILD_TYPES = frozenset({BlockType.CACHE, BlockType.DOCKER_BUILD})
_TEST_TYPES = frozenset({BlockType.LINT, BlockType.SECURITY_SCAN})


def classify_stage(block_type: str) -> Stage:
    """Map a block type to its stage bucket.

    Precedence: ``deploy*`` is deploy; anything mentioning ``build`` (plus
    cache and docker_build) is build; everything else, including unknown
    block types, is test.
    """
    if block_type.startswith("deploy"):
        return Stage.DEPLOY
    if "build" in block_type or block_type in _BUILD_TYPES:
        return Stage.BUILD
    if "test" in block_type or block_type in _TEST_TYPES:
        return Stage.TEST
    return Stage.TEST


def stage_order(graph: PipelineGraph) -> list[Stage]:
    """Distinct stages of the job nodes in first-seen order.

    The order follows the graph, not a canonical test/build/deploy order.
    """
    stages: list[Stage] = []
    for node in graph.job_nodes:
        stage = classify_stage(node.block_type)
        if stage not in stages:
            stages.append(stage)
    return stages
