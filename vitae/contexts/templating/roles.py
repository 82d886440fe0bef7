"""
Role Classification

Maps a section node to the semantic role that selects its renderer, and tracks
which top-level section closes the document.
"""

from enum import Enum
from typing import Iterable, Optional

from vitae.contexts.intake.document_tree import Node

ROLE_PROPERTY = "CV_ROLE"


class Role(str, Enum):
    """Semantic role of a section; exactly one per node."""

    SUMMARY = "summary"
    ENTRY = "entry"
    SKILLS = "skills"
    SKILLS_SUBSECTION = "skills_subsection"
    GROUP = "group"
    GENERIC = "generic"
    PASSTHROUGH = "passthrough"


# Explicit roles in precedence order, with the tags that select them
EXPLICIT_ROLE_TAGS = [
    (Role.SUMMARY, ("summary", "cvsummary")),
    (Role.ENTRY, ("entry", "cventry")),
    (Role.SKILLS, ("skills", "cvskills")),
]

SKILLS_ROLES = {Role.SKILLS, Role.SKILLS_SUBSECTION}


def classify(node: Node, parent_role: Optional[Role] = None) -> Role:
    """
    Classify a node; the first matching rule wins.

    1. summary / entry / skills, by tag or CV_ROLE property
    2. inside a skills subtree -> SKILLS_SUBSECTION
    3. level 1 -> GROUP, level 2 -> GENERIC
    4. anything deeper -> PASSTHROUGH

    Args:
        node: Section to classify (never modified)
        parent_role: Resolved role of the parent, None for top-level nodes
    """
    role_property = (node.get_property(ROLE_PROPERTY) or "").strip().lower()

    for role, tags in EXPLICIT_ROLE_TAGS:
        if node.has_tag(*tags) or role_property == role.value:
            return role

    if parent_role in SKILLS_ROLES:
        return Role.SKILLS_SUBSECTION
    if node.level == 1:
        return Role.GROUP
    if node.level == 2:
        return Role.GENERIC
    return Role.PASSTHROUGH


class SiblingBoundaryTracker:
    """
    Knows the last top-level section of a document.

    Only level-1 nodes take part; children and deeper nodes never count as
    trailing siblings.
    """

    def __init__(self, roots: Iterable[Node]):
        top_level = [node for node in roots if node.level == 1]
        self._last = top_level[-1] if top_level else None

    def is_last_top_level_sibling(self, node: Node) -> bool:
        return node.level == 1 and node is self._last
