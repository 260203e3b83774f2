# tests/conftest.py
"""Shared test fixtures.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
import structlog
import yaml
from hypothesis import Phase, Verbosity, settings

# =============================================================================
# Environment isolation
# =============================================================================

_PIPEFORGE_ENV_PREFIX = "PIPEFORGE_"


@pytest.fixture(autouse=True)
def _isolate_pipeforge_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep a developer's PIPEFORGE_* variables out of settings tests."""
    for name in list(os.environ):
        if name.startswith(_PIPEFORGE_ENV_PREFIX):
            monkeypatch.delenv(name, raising=False)
    yield
    structlog.reset_defaults()


# =============================================================================
# Graph document fixtures
# =============================================================================


@pytest.fixture
def write_graph(tmp_path: Path) -> Callable[..., Path]:
    """Write a graph document to a temp file and return its path."""

    def _write(nodes: list[dict[str, Any]], edges: list[dict[str, Any]] | None = None, name: str = "pipeline.yaml") -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump({"nodes": nodes, "edges": edges or []}, sort_keys=False), encoding="utf-8")
        return path

    return _write


# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
