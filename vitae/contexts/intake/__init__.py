"""
Intake Context

Responsibilities:
- Reads CV outlines (org-style text or YAML) into a section tree
- Collects document-level header metadata

Owns: Section tree and metadata data structures, input loaders
Never: Decides how sections are rendered
"""

from vitae.contexts.intake.document_tree import DocumentMetadata, DocumentTree, Node
from vitae.contexts.intake.outline_parser import load_outline, parse_outline
from vitae.contexts.intake.yaml_loader import load_tree, load_yaml_tree

__all__ = [
    "Node",
    "DocumentMetadata",
    "DocumentTree",
    "parse_outline",
    "load_outline",
    "load_yaml_tree",
    "load_tree",
]
