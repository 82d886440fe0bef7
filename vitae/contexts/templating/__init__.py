"""
Templating Context

Responsibilities:
- Classifies section nodes into CV roles
- Normalizes dates and detects the document locale
- Renders each role into the fixed LaTeX schema
- Assembles header, body and document envelope

Owns: CV schema templates, role rendering, document assembly
Never: Reads input files or runs the LaTeX toolchain
"""

from vitae.contexts.templating.assembler import DocumentAssembler
from vitae.contexts.templating.converter import ExportResult, export_cv
from vitae.contexts.templating.dates import DateContext, format_date, format_date_range, parse_date
from vitae.contexts.templating.locale import Locale, detect_locale
from vitae.contexts.templating.renderers import RenderContext, RoleRenderers
from vitae.contexts.templating.roles import Role, SiblingBoundaryTracker, classify
from vitae.contexts.templating.schema import SchemaTemplate

__all__ = [
    # Orchestration
    "export_cv",
    "ExportResult",
    # Assembly
    "DocumentAssembler",
    "SchemaTemplate",
    # Rendering
    "RenderContext",
    "RoleRenderers",
    # Classification
    "Role",
    "classify",
    "SiblingBoundaryTracker",
    # Dates and locale
    "DateContext",
    "format_date",
    "format_date_range",
    "parse_date",
    "Locale",
    "detect_locale",
]
