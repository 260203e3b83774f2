# src/pipeforge/core/documents.py
"""Reading and writing graph documents.

A graph document is a YAML (or JSON, which YAML parses) mapping with
``nodes`` and ``edges`` lists, in either the flat shape or the canvas export
shape ``PipelineNode`` accepts.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from pipeforge.core.graph.models import PipelineGraph


class GraphLoadError(Exception):
    """A graph document could not be read or does not describe a graph."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


def parse_graph(text: str, source: Path) -> PipelineGraph:
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise GraphLoadError(source, f"not valid YAML/JSON: {e}") from e

    if document is None:
        return PipelineGraph()
    if not isinstance(document, Mapping):
        raise GraphLoadError(source, f"expected a mapping with 'nodes' and 'edges', got {type(document).__name__}")

    for key in ("nodes", "edges"):
        value = document.get(key)
        if value is not None and not isinstance(value, list):
            raise GraphLoadError(source, f"'{key}' must be a list, got {type(value).__name__}")

    try:
        return PipelineGraph.from_document(document)
    except ValidationError as e:
        raise GraphLoadError(source, f"invalid graph: {e}") from e


def load_graph(path: Path) -> PipelineGraph:
    """Read a graph document from ``path``.

    Raises:
        GraphLoadError: If the file is unreadable or malformed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise GraphLoadError(path, f"cannot read file: {e.strerror or e}") from e
    return parse_graph(text, path)


def dump_graph(graph: PipelineGraph) -> str:
    """Serialize ``graph`` as a YAML graph document."""
    return yaml.safe_dump(graph.to_document(), sort_keys=False, allow_unicode=True)
