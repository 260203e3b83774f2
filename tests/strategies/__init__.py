# tests/strategies/__init__.py
"""Hypothesis strategies for property-based tests.

Re-exports commonly used strategies for convenience:
    from tests.strategies import graph_documents, labels
"""

from tests.strategies.graphs import block_types, graph_documents, job_docs, labels, trigger_docs

__all__ = [
    "block_types",
    "graph_documents",
    "job_docs",
    "labels",
    "trigger_docs",
]
