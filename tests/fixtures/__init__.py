# tests/fixtures/__init__.py
"""Shared builders for PipeForge tests."""

from tests.fixtures.factories import edge_doc, job_doc, make_graph, trigger_doc

__all__ = [
    "edge_doc",
    "job_doc",
    "make_graph",
    "trigger_doc",
]
