"""Job identifier derivation.

Emitted job keys and dependency tokens are derived from node labels, not
from the editor's node ids, so the generated YAML reads naturally.
"""

from __future__ import annotations

import re

from pipeforge.contracts.types import JobID

_NON_IDENTIFIER = re.compile(r"[^a-z0-9]")


def normalize_label(label: str) -> JobID:
    """Lowercase ``label`` and replace every character outside [a-z0-9] with ``_``.

    Labels that differ only by case or punctuation collide; callers that
    care use ``analyze_graph`` to detect it.

    Example:
        >>> normalize_label("Node.js Tests")
        'node_js_tests'
    """
    return JobID(_NON_IDENTIFIER.sub("_", label.lower()))
