"""
Outline Parser

Reads org-style outlines into a DocumentTree:

    #+FIRSTNAME: Jane
    #+LATEX_HEADER: \\setdefaultlanguage{english}

    * Experience
    ** Acme Corp                                        :employer:
    :PROPERTIES:
    :LOCATION: Athens
    :END:
    *** Backend Engineer                                 :cventry:
    :PROPERTIES:
    :FROM: <2019-03-05>
    :END:
    Built things.
"""

import re
from pathlib import Path
from typing import Dict, List, Tuple

from vitae.contexts.intake.document_tree import DocumentMetadata, DocumentTree, Node
from vitae.contexts.intake.logger import _log_debug, _log_warning

HEADING_RE = re.compile(r"^(\*+)\s+(.*?)(?:\s+(:(?:[\w@#%]+:)+))?\s*$")
KEYWORD_RE = re.compile(r"^#\+(\w+):\s*(.*?)\s*$")
PROPERTY_RE = re.compile(r"^\s*:([\w-]+):\s*(.*?)\s*$")
DRAWER_START_RE = re.compile(r"^\s*:PROPERTIES:\s*$", re.IGNORECASE)
DRAWER_END_RE = re.compile(r"^\s*:END:\s*$", re.IGNORECASE)
COMMENT_RE = re.compile(r"^\s*#(\s|$)")

# Keywords that may appear more than once and accumulate
REPEATABLE_KEYWORDS = {"latex_header"}


def _finish_body(lines: List[str]) -> str:
    return "\n".join(lines).strip("\n")


def parse_outline(text: str) -> DocumentTree:
    """
    Parse outline text into a DocumentTree.

    Headings that skip levels are clamped to one below their parent, so the
    resulting tree always satisfies child.level == parent.level + 1.

    Args:
        text: Outline source

    Returns:
        DocumentTree with roots and metadata
    """
    keywords: Dict[str, object] = {}
    roots: List[Node] = []
    # (raw star depth, node) pairs along the current path
    stack: List[Tuple[int, Node]] = []
    bodies: Dict[int, List[str]] = {}

    in_drawer = False
    expect_drawer = False

    for line in text.splitlines():
        heading = HEADING_RE.match(line)
        if heading:
            stars, title, tag_string = heading.groups()
            depth = len(stars)
            while stack and stack[-1][0] >= depth:
                stack.pop()

            level = stack[-1][1].level + 1 if stack else 1
            if level != depth:
                _log_warning(f"Heading '{title}' skips levels ({depth} stars); placed at level {level}")

            tags = frozenset(t for t in (tag_string or "").split(":") if t)
            node = Node(level=level, title=title.strip(), tags=tags)
            bodies[id(node)] = []

            if stack:
                stack[-1][1].children.append(node)
            else:
                roots.append(node)
            stack.append((depth, node))

            in_drawer = False
            expect_drawer = True
            continue

        if expect_drawer and DRAWER_START_RE.match(line):
            in_drawer = True
            expect_drawer = False
            continue
        expect_drawer = False

        if in_drawer:
            if DRAWER_END_RE.match(line):
                in_drawer = False
                continue
            prop = PROPERTY_RE.match(line)
            if prop:
                stack[-1][1].properties[prop.group(1)] = prop.group(2)
            continue

        keyword = KEYWORD_RE.match(line)
        if keyword:
            key = keyword.group(1).lower()
            value = keyword.group(2)
            if key in REPEATABLE_KEYWORDS:
                keywords.setdefault(key, []).append(value)
            else:
                keywords[key] = value
            continue

        if COMMENT_RE.match(line):
            continue

        if stack:
            bodies[id(stack[-1][1])].append(line)

    tree = DocumentTree(roots=roots, metadata=DocumentMetadata.from_mapping(keywords))
    for node in tree.walk():
        node.inline_text = _finish_body(bodies[id(node)])

    _log_debug(f"Parsed outline with {len(roots)} top-level sections")
    return tree


def load_outline(path: Path) -> DocumentTree:
    """Read and parse an outline file (UTF-8)."""
    return parse_outline(Path(path).read_text(encoding="utf-8"))
