# src/pipeforge/compiler/steps.py
"""Step synthesis: the ordered work a job performs, per target dialect.

Both dialects walk the same decision tree for a job node:

1. checkout (GitHub only; GitLab runners check out implicitly)
2. toolchain setup for environment-bearing block types
3. dependency cache for the ``cache`` block
4. either the node's custom ``command`` or the block type's default steps,
   never both

Unknown block types fall through every branch and get checkout only.

Steps are plain values. ``with_`` and ``env`` hold YAML scalars exactly as
they are written to the output (quoted where the output quotes them).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from pipeforge.contracts.enums import BlockType, EnvironmentKind, OutputFormat
from pipeforge.core.catalog import list_blocks
from pipeforge.core.graph.blocks import (
    BlockConfig,
    DockerJobConfig,
    GoJobConfig,
    JobConfig,
    NodeJobConfig,
    PythonJobConfig,
)
from pipeforge.core.graph.models import PipelineNode


@dataclass(frozen=True, slots=True)
class Step:
    """One step of a job.

    GitHub renders every field; GitLab keeps only ``run`` as a script line.
    """

    name: str | None = None
    uses: str | None = None
    run: str | None = None
    with_: tuple[tuple[str, str], ...] = ()
    env: tuple[tuple[str, str], ...] = ()


DEFAULT_VERSIONS: Mapping[EnvironmentKind, str] = MappingProxyType(
    {
        EnvironmentKind.NODE: "20",
        EnvironmentKind.PYTHON: "3.11",
        EnvironmentKind.GO: "1.21",
    }
)
DEFAULT_IMAGE_NAME = "my-app"

# Environment-bearing block types, read from the catalog.
ENVIRONMENTS: Mapping[str, EnvironmentKind] = MappingProxyType(
    {spec.block_type: spec.environment for spec in list_blocks() if spec.environment is not None}
)


def environment_for(block_type: str) -> EnvironmentKind | None:
    return ENVIRONMENTS.get(block_type)


def toolchain_version(config: BlockConfig) -> str | None:
    """Configured toolchain version, or the default for the toolchain.

    None for configurations that carry no toolchain.
    """
    match config:
        case NodeJobConfig(node_version=version):
            return version or DEFAULT_VERSIONS[EnvironmentKind.NODE]
        case PythonJobConfig(python_version=version):
            return version or DEFAULT_VERSIONS[EnvironmentKind.PYTHON]
        case GoJobConfig(go_version=version):
            return version or DEFAULT_VERSIONS[EnvironmentKind.GO]
        case _:
            return None


def image_name(config: BlockConfig) -> str:
    if isinstance(config, DockerJobConfig) and config.image_name:
        return config.image_name
    return DEFAULT_IMAGE_NAME


def _quoted(value: str) -> str:
    return f'"{value}"'


def _secret(name: str) -> str:
    return f"${{{{ secrets.{name} }}}}"


CHECKOUT_STEP = Step(name="Checkout code", uses="actions/checkout@v4")

CACHE_STEP = Step(
    name="Cache dependencies",
    uses="actions/cache@v3",
    with_=(
        ("path", "~/.npm"),
        ("key", "${{ runner.os }}-node-${{ hashFiles('**/package-lock.json') }}"),
    ),
)

_GITHUB_DEFAULT_STEPS: Mapping[str, tuple[Step, ...]] = MappingProxyType(
    {
        BlockType.NODE_TEST: (Step(name="Run tests", run="npm test"),),
        BlockType.NODE_BUILD: (Step(name="Build application", run="npm run build"),),
        BlockType.PYTHON_TEST: (Step(name="Run tests", run="pytest"),),
        BlockType.PYTHON_BUILD: (Step(name="Build package", run="python -m build"),),
        BlockType.GO_BUILD: (
            Step(name="Build", run="go build ./..."),
            Step(name="Test", run="go test ./..."),
        ),
        BlockType.LINT: (Step(name="Run linter", run="npm run lint"),),
        BlockType.SECURITY_SCAN: (
            Step(
                name="Security scan",
                uses="snyk/actions/node@master",
                env=(("SNYK_TOKEN", _secret("SNYK_TOKEN")),),
            ),
        ),
        BlockType.DEPLOY_VERCEL: (
            Step(
                name="Deploy to Vercel",
                uses="amondnet/vercel-action@v25",
                with_=(
                    ("vercel-token", _secret("VERCEL_TOKEN")),
                    ("vercel-org-id", _secret("ORG_ID")),
                    ("vercel-project-id", _secret("PROJECT_ID")),
                ),
            ),
        ),
        BlockType.DEPLOY_AWS: (
            Step(
                name="Deploy to AWS",
                uses="aws-actions/configure-aws-credentials@v4",
                with_=(
                    ("aws-access-key-id", _secret("AWS_ACCESS_KEY_ID")),
                    ("aws-secret-access-key", _secret("AWS_SECRET_ACCESS_KEY")),
                    ("aws-region", "us-east-1"),
                ),
            ),
        ),
        BlockType.DEPLOY_GCP: (
            Step(
                name="Deploy to GCP",
                uses="google-github-actions/deploy-cloudrun@v1",
                with_=(
                    ("service", "my-service"),
                    ("region", "us-central1"),
                    ("credentials", _secret("GCP_CREDENTIALS")),
                ),
            ),
        ),
        BlockType.NOTIFY_SLACK: (
            Step(
                name="Notify Slack",
                uses="slackapi/slack-github-action@v1.26.0",
                with_=(("payload", """'{"text":"Pipeline completed for ${{ github.repository }}"}'"""),),
                env=(("SLACK_WEBHOOK_URL", _secret("SLACK_WEBHOOK_URL")),),
            ),
        ),
    }
)

# GitLab scripts mirror the GitHub defaults but install dependencies inline,
# since there is no separate setup phase.
_GITLAB_DEFAULT_SCRIPTS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        BlockType.NODE_TEST: ("npm ci", "npm test"),
        BlockType.NODE_BUILD: ("npm ci", "npm run build"),
        BlockType.PYTHON_TEST: ("pip install -r requirements.txt", "pytest"),
        BlockType.PYTHON_BUILD: ("pip install build", "python -m build"),
        BlockType.GO_BUILD: ("go build ./...", "go test ./..."),
        BlockType.LINT: ("npm ci", "npm run lint"),
        BlockType.SECURITY_SCAN: ("npm audit --audit-level=high",),
        BlockType.DEPLOY_VERCEL: ("npx vercel --token=$VERCEL_TOKEN --prod",),
        BlockType.DEPLOY_AWS: ("aws s3 sync ./build s3://my-bucket",),
        BlockType.NOTIFY_SLACK: (
            r"""'curl -X POST -H "Content-type: application/json" --data "{\"text\":\"Pipeline complete\"}" $SLACK_WEBHOOK_URL'""",
        ),
    }
)


def _github_setup_steps(block_type: str, config: JobConfig) -> list[Step]:
    match environment_for(block_type):
        case EnvironmentKind.NODE:
            return [
                Step(
                    name="Setup Node.js",
                    uses="actions/setup-node@v4",
                    with_=(("node-version", _quoted(toolchain_version(config) or DEFAULT_VERSIONS[EnvironmentKind.NODE])),),
                ),
                Step(name="Install dependencies", run="npm ci"),
            ]
        case EnvironmentKind.PYTHON:
            return [
                Step(
                    name="Setup Python",
                    uses="actions/setup-python@v4",
                    with_=(("python-version", _quoted(toolchain_version(config) or DEFAULT_VERSIONS[EnvironmentKind.PYTHON])),),
                ),
                Step(name="Install dependencies", run="pip install -r requirements.txt"),
            ]
        case EnvironmentKind.GO:
            return [
                Step(
                    name="Setup Go",
                    uses="actions/setup-go@v4",
                    with_=(("go-version", _quoted(toolchain_version(config) or DEFAULT_VERSIONS[EnvironmentKind.GO])),),
                ),
            ]
        case EnvironmentKind.DOCKER:
            return [
                Step(name="Set up Docker Buildx", uses="docker/setup-buildx-action@v3"),
                Step(name="Build Docker image", run=f"docker build -t {image_name(config)}:latest ."),
            ]
        case None:
            return []


def _gitlab_default_script(block_type: str, config: JobConfig) -> list[Step]:
    if block_type == BlockType.DOCKER_BUILD:
        return [Step(run=f"docker build -t {image_name(config)}:latest .")]
    return [Step(run=command) for command in _GITLAB_DEFAULT_SCRIPTS.get(block_type, ())]


def synthesize_steps(node: PipelineNode, dialect: OutputFormat) -> list[Step]:
    """Build the ordered steps for a job node in ``dialect``."""
    config = node.config if isinstance(node.config, JobConfig) else JobConfig()
    github = dialect == OutputFormat.GITHUB
    steps: list[Step] = []

    if github and config.wants_checkout:
        steps.append(CHECKOUT_STEP)
    if github:
        steps.extend(_github_setup_steps(node.block_type, config))
        if node.block_type == BlockType.CACHE:
            steps.append(CACHE_STEP)

    command = config.custom_command
    if command:
        steps.append(Step(name=node.label, run=command))
    elif github:
        steps.extend(_GITHUB_DEFAULT_STEPS.get(node.block_type, ()))
    else:
        steps.extend(_gitlab_default_script(node.block_type, config))
    return steps
