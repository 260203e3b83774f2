# src/pipeforge/compiler/emitters/gitlab.py
"""GitLab CI emitter."""

from __future__ import annotations

from pipeforge.compiler.emitters.base import JobPlan, PipelineEmitter, PipelinePlan
from pipeforge.compiler.stages import stage_order
from pipeforge.compiler.steps import environment_for, toolchain_version
from pipeforge.contracts.enums import EnvironmentKind, OutputFormat

HEADER = "# GitLab CI Pipeline\n# Generated by PipeForge\n\ndefault:\n  image: ubuntu:latest\n\n"


def job_image(job: JobPlan) -> list[str]:
    """Image (and service) lines for a job; empty when the default image applies."""
    version = toolchain_version(job.node.config)
    match environment_for(job.node.block_type):
        case EnvironmentKind.NODE:
            return [f"  image: node:{version}-alpine\n"]
        case EnvironmentKind.PYTHON:
            return [f"  image: python:{version}-slim\n"]
        case EnvironmentKind.GO:
            return [f"  image: golang:{version}\n"]
        case EnvironmentKind.DOCKER:
            return ["  image: docker:latest\n", "  services:\n", "    - docker:dind\n"]
        case None:
            return []


class GitLabCIEmitter(PipelineEmitter):
    dialect = OutputFormat.GITLAB
    output_path = ".gitlab-ci.yml"
    download_name = ".gitlab-ci.yml"

    def render(self, plan: PipelinePlan) -> str:
        stages = "\n".join(f"  - {stage}" for stage in stage_order(plan.graph))
        parts = [HEADER, f"stages:\n{stages}\n\n"]
        parts.extend(self._render_job(job, plan.branch) for job in plan.jobs)
        return "".join(parts)

    def _render_job(self, job: JobPlan, branch: str) -> str:
        lines = [f"{job.job_id}:\n", f"  stage: {job.stage}\n"]
        lines.extend(job_image(job))
        if job.needs:
            needs = ", ".join(f'"{dependency}"' for dependency in job.needs)
            lines.append(f"  needs: [{needs}]\n")
        lines.append("  script:\n")
        lines.extend(f"    - {step.run}\n" for step in job.steps if step.run is not None)
        lines.append(f'  rules:\n    - if: $CI_COMMIT_BRANCH == "{branch}"\n\n')
        return "".join(lines)
