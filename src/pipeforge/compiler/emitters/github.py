# src/pipeforge/compiler/emitters/github.py
"""GitHub Actions workflow emitter."""

from __future__ import annotations

from pipeforge.compiler.emitters.base import DEFAULT_BRANCH, JobPlan, PipelineEmitter, PipelinePlan
from pipeforge.compiler.steps import Step
from pipeforge.contracts.enums import OutputFormat, TriggerEvent
from pipeforge.core.graph.blocks import JobConfig, TriggerConfig

DEFAULT_WORKFLOW_NAME = "My Pipeline"
DEFAULT_RUNNER = "ubuntu-latest"
DEFAULT_CRON = "0 0 * * *"
NO_JOBS_PLACEHOLDER = "# Add job blocks to define your pipeline steps"


class GitHubActionsEmitter(PipelineEmitter):
    dialect = OutputFormat.GITHUB
    output_path = ".github/workflows/ci.yml"
    download_name = "ci.yml"

    def render(self, plan: PipelinePlan) -> str:
        name = plan.trigger.label if plan.trigger is not None and plan.trigger.label else DEFAULT_WORKFLOW_NAME
        parts = [f"name: {name}\n\n", self._render_on(plan.trigger_config)]
        if not plan.jobs:
            parts.append(NO_JOBS_PLACEHOLDER)
            return "".join(parts)

        parts.append("jobs:\n")
        parts.extend(self._render_job(job) for job in plan.jobs)
        return "".join(parts)

    def _render_on(self, config: TriggerConfig) -> str:
        event = config.trigger or TriggerEvent.PUSH
        if event in (TriggerEvent.PUSH, TriggerEvent.PULL_REQUEST):
            branch = config.branch or DEFAULT_BRANCH
            return f'on:\n  {event}:\n    branches: ["{branch}"]\n\n'
        if event == TriggerEvent.SCHEDULE:
            return f'on:\n  schedule:\n    - cron: "{config.cron or DEFAULT_CRON}"\n\n'
        return f"on: [{event}]\n\n"

    def _render_job(self, job: JobPlan) -> str:
        config = job.node.config
        runs_on = config.runs_on if isinstance(config, JobConfig) and config.runs_on else DEFAULT_RUNNER
        lines = [f"\n  {job.job_id}:\n", f"    runs-on: {runs_on}\n"]
        if job.needs:
            lines.append(f"    needs: [{', '.join(job.needs)}]\n")
        lines.append("    steps:\n")
        lines.extend(_render_step(step) for step in job.steps)
        return "".join(lines)


def _render_step(step: Step) -> str:
    fields: list[str] = []
    if step.name is not None:
        fields.append(f"name: {step.name}")
    if step.uses is not None:
        fields.append(f"uses: {step.uses}")
    if step.run is not None:
        fields.append(f"run: {step.run}")

    lines = [f"      - {fields[0]}\n"] if fields else ["      -\n"]
    lines.extend(f"        {field}\n" for field in fields[1:])
    for section, pairs in (("with", step.with_), ("env", step.env)):
        if pairs:
            lines.append(f"        {section}:\n")
            lines.extend(f"          {key}: {value}\n" for key, value in pairs)
    lines.append("\n")
    return "".join(lines)
