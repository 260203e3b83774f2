"""All roles, kinds, and dialects used across subsystem boundaries.

Values are the exact strings used in graph documents and CLI options, so
they round-trip through YAML without translation.
"""

from enum import StrEnum


class NodeRole(StrEnum):
    """Role of a block placed on the canvas.

    Only triggers are special: every other node is compiled into a job.
    """

    TRIGGER = "trigger"
    JOB = "job"


class BlockType(StrEnum):
    """Block types known to the catalog.

    Graph documents may carry block types outside this set; those nodes are
    kept as plain strings and compile to a checkout-only job.
    """

    TRIGGER_PUSH = "trigger_push"
    TRIGGER_PR = "trigger_pr"
    TRIGGER_SCHEDULE = "trigger_schedule"

    NODE_TEST = "node_test"
    PYTHON_TEST = "python_test"
    GO_BUILD = "go_build"
    LINT = "lint"
    SECURITY_SCAN = "security_scan"

    NODE_BUILD = "node_build"
    PYTHON_BUILD = "python_build"
    DOCKER_BUILD = "docker_build"
    CACHE = "cache"

    DEPLOY_VERCEL = "deploy_vercel"
    DEPLOY_AWS = "deploy_aws"
    DEPLOY_GCP = "deploy_gcp"
    NOTIFY_SLACK = "notify_slack"


class BlockCategory(StrEnum):
    """Palette grouping for catalog entries."""

    TRIGGERS = "Triggers"
    TEST_AND_QUALITY = "Test & Quality"
    BUILD = "Build"
    DEPLOY = "Deploy"


class EnvironmentKind(StrEnum):
    """Toolchain a job block needs installed before it runs.

    Values:
        NODE: Node.js via setup-node, versioned by ``nodeVersion``
        PYTHON: CPython via setup-python, versioned by ``pythonVersion``
        GO: Go via setup-go, versioned by ``goVersion``
        DOCKER: Docker Buildx / docker-in-docker, unversioned
    """

    NODE = "node"
    PYTHON = "python"
    GO = "go"
    DOCKER = "docker"


class OutputFormat(StrEnum):
    """Target CI dialect for emitted configuration."""

    GITHUB = "github"
    GITLAB = "gitlab"


class Stage(StrEnum):
    """GitLab execution-order bucket."""

    TEST = "test"
    BUILD = "build"
    DEPLOY = "deploy"


class TriggerEvent(StrEnum):
    """Trigger events with a dedicated ``on:`` clause.

    Any other literal event name is emitted as an inline event list.
    """

    PUSH = "push"
    PULL_REQUEST = "pull_request"
    SCHEDULE = "schedule"
