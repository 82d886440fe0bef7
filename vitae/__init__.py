"""
vitae - Section tree to LaTeX CV transcoder

Converts an outline of titled sections (tags, properties, inline text) into a
LaTeX document following a fixed CV schema.

Architecture:
- Intake Context: Reading outlines (org-style or YAML) into a section tree
- Templating Context: Role classification, rendering and document assembly
- Rendering Context: PDF compilation through the LaTeX toolchain
"""

__version__ = "0.1.0"
