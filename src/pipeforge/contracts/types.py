"""Semantic type aliases for compile-time type safety.

NewType creates distinct types that mypy treats as incompatible,
preventing accidental misuse of semantically different string values.
"""

from typing import NewType

NodeID = NewType("NodeID", str)
"""Opaque node identifier assigned by the editor (e.g., 'j1', 't1')"""

JobID = NewType("JobID", str)
"""Normalized job key derived from a node label (e.g., 'node_js_tests')"""

RepositoryName = NewType("RepositoryName", str)
"""Remote repository in owner/name form (e.g., 'octo/app')"""
