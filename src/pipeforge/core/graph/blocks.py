# src/pipeforge/core/graph/blocks.py
"""Typed block configuration, one model per block family.

The editor stores each node's options as a loose camelCase mapping. On the
way into the graph that mapping is validated against the model registered
for the node's block type, so the step synthesizer works with named
attributes instead of ad hoc key lookups.

Editor semantics preserved here:
- An empty string means "unset" (the editor clears inputs to ``""``).
- Version numbers typed as YAML numbers (``20``, ``3.12``) become strings;
  a zero, a boolean or a structured value in a text option means "unset".
- Only a literal ``false`` disables checkout.
- A value the model rejects falls back to the option default.
- Unknown option keys are kept, so documents round-trip.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, get_args

from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError, model_validator

from pipeforge.contracts.enums import BlockType, NodeRole


class BlockConfig(BaseModel):
    """Base for every block configuration model."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    @classmethod
    def _text_keys(cls) -> frozenset[str]:
        keys: set[str] = set()
        for name, info in cls.model_fields.items():
            if str in get_args(info.annotation):
                keys.add(name)
                if info.alias:
                    keys.add(info.alias)
        return frozenset(keys)

    @model_validator(mode="before")
    @classmethod
    def _normalize_editor_values(cls, data: Any) -> Any:
        """Drop blank and falsy text values and stringify numeric ones."""
        if not isinstance(data, Mapping):
            return data
        text_keys = cls._text_keys()
        normalized: dict[str, Any] = {}
        for key, value in data.items():
            if isinstance(value, str) and value == "":
                continue
            if key in text_keys and not isinstance(value, str):
                if isinstance(value, bool) or not isinstance(value, int | float) or not value:
                    continue
                value = str(value)
            normalized[str(key)] = value
        return normalized

    def to_document(self) -> dict[str, Any]:
        """Serialize back to the editor's camelCase mapping."""
        return self.model_dump(by_alias=True, exclude_none=True)


class TriggerConfig(BlockConfig):
    """Options of a trigger block.

    ``trigger`` is the CI event name (push, pull_request, schedule, or any
    other literal event), ``branch`` filters push/PR events, ``cron`` drives
    scheduled runs.
    """

    trigger: str | None = None
    branch: str | None = None
    cron: str | None = None


class JobConfig(BlockConfig):
    """Options shared by every job block."""

    checkout: StrictBool | None = None
    runs_on: str | None = Field(default=None, alias="runsOn")
    command: str | None = None

    @property
    def wants_checkout(self) -> bool:
        """Checkout is skipped only when explicitly disabled."""
        return self.checkout is not False

    @property
    def custom_command(self) -> str | None:
        return self.command or None


class NodeJobConfig(JobConfig):
    node_version: str | None = Field(default=None, alias="nodeVersion")


class PythonJobConfig(JobConfig):
    python_version: str | None = Field(default=None, alias="pythonVersion")


class GoJobConfig(JobConfig):
    go_version: str | None = Field(default=None, alias="goVersion")


class DockerJobConfig(JobConfig):
    image_name: str | None = Field(default=None, alias="imageName")


# Block types without a dedicated model use the base model for their role.
CONFIG_MODELS: dict[str, type[BlockConfig]] = {
    BlockType.TRIGGER_PUSH: TriggerConfig,
    BlockType.TRIGGER_PR: TriggerConfig,
    BlockType.TRIGGER_SCHEDULE: TriggerConfig,
    BlockType.NODE_TEST: NodeJobConfig,
    BlockType.NODE_BUILD: NodeJobConfig,
    BlockType.PYTHON_TEST: PythonJobConfig,
    BlockType.PYTHON_BUILD: PythonJobConfig,
    BlockType.GO_BUILD: GoJobConfig,
    BlockType.DOCKER_BUILD: DockerJobConfig,
}


def config_model_for(block_type: str, role: NodeRole) -> type[BlockConfig]:
    """Return the configuration model for a block type.

    Trigger nodes always validate as TriggerConfig so that a trigger with an
    unfamiliar block type still exposes its event and branch.
    """
    if role == NodeRole.TRIGGER:
        return TriggerConfig
    model = CONFIG_MODELS.get(block_type, JobConfig)
    if issubclass(model, TriggerConfig):
        return JobConfig
    return model


def parse_block_config(block_type: str, role: NodeRole, raw: Mapping[str, Any] | BlockConfig | None) -> BlockConfig:
    """Validate a raw option mapping into the model for ``block_type``."""
    model = config_model_for(block_type, role)
    if type(raw) is model:
        return raw
    if isinstance(raw, BlockConfig):
        raw = raw.to_document()
    if not isinstance(raw, Mapping):
        # Missing or malformed options compile with every default.
        raw = {}
    data = dict(raw)
    while True:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            rejected = {str(error["loc"][0]) for error in e.errors() if error["loc"]}
            bad_keys = [key for key in data if str(key) in rejected]
            if not bad_keys:
                raise
            # Each rejected option falls back to its default.
            for key in bad_keys:
                del data[key]
