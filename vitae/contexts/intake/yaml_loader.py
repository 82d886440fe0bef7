"""
YAML Tree Loader

Loads a CV outline expressed as YAML:

    metadata:
      first_name: Jane
      last_name: Doe
      latex_header:
        - \\setdefaultlanguage{english}
    sections:
      - title: Experience
        children:
          - title: Backend Engineer
            tags: [cventry]
            properties: {FROM: "<2019-03-05>"}
            text: Built things.
"""

from pathlib import Path
from typing import Any, Dict, List

import yaml
from omegaconf import OmegaConf

from vitae.contexts.intake.document_tree import DocumentMetadata, DocumentTree, Node
from vitae.contexts.intake.exceptions import InvalidYAMLStructureError
from vitae.contexts.intake.logger import _log_debug
from vitae.contexts.intake.outline_parser import load_outline

OUTLINE_SUFFIXES = {".org", ".txt"}


def _build_node(data: Any, level: int) -> Node:
    if not isinstance(data, dict) or "title" not in data:
        raise InvalidYAMLStructureError(
            f"Section at level {level} must be a mapping with a 'title': {data!r}"
        )

    properties = {str(k): "" if v is None else str(v) for k, v in (data.get("properties") or {}).items()}
    children = [_build_node(child, level + 1) for child in data.get("children") or []]

    return Node(
        level=level,
        title=str(data["title"]),
        tags=frozenset(str(tag) for tag in data.get("tags") or []),
        properties=properties,
        children=children,
        inline_text=str(data.get("text") or "").strip("\n"),
    )


def tree_from_dict(data: Dict[str, Any]) -> DocumentTree:
    """
    Build a DocumentTree from a plain dict with 'metadata' and 'sections'.

    Raises:
        InvalidYAMLStructureError: If 'sections' is missing or malformed
    """
    if not isinstance(data, dict) or not isinstance(data.get("sections"), list):
        raise InvalidYAMLStructureError("YAML must contain a 'sections' list at root level")

    roots: List[Node] = [_build_node(section, 1) for section in data["sections"]]
    metadata = DocumentMetadata.from_mapping(data.get("metadata") or {})
    return DocumentTree(roots=roots, metadata=metadata)


def load_yaml_tree(path: Path) -> DocumentTree:
    """
    Load a YAML CV source into a DocumentTree.

    Raises:
        InvalidYAMLStructureError: If the file is not valid YAML or lacks sections
    """
    try:
        # ${...} in CV text is literal, not an interpolation
        data = OmegaConf.to_container(OmegaConf.load(path), resolve=False)
    except yaml.YAMLError as e:
        raise InvalidYAMLStructureError(f"Could not parse {path}: {e}") from e
    tree = tree_from_dict(data)
    _log_debug(f"Loaded {path} with {len(tree.roots)} top-level sections")
    return tree


def load_tree(path: Path) -> DocumentTree:
    """Load a CV source, choosing the loader from the file suffix."""
    path = Path(path)
    if path.suffix.lower() in OUTLINE_SUFFIXES:
        return load_outline(path)
    return load_yaml_tree(path)
