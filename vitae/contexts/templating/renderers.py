"""
Role Renderers

One rendering strategy per role. Each takes the node, its already rendered
content (converted inline text followed by the children's output) and the
RenderContext, and returns a LaTeX fragment.
"""

from dataclasses import dataclass, field
from typing import Tuple

from vitae.contexts.intake.document_tree import Node
from vitae.contexts.templating.dates import DateContext, format_date_range
from vitae.contexts.templating.latex_patterns import FormattingPatterns, SchemaMacros
from vitae.contexts.templating.locale import Locale
from vitae.contexts.templating.markup import (
    collapse_doubled_emphasis,
    convert_inline,
    escape_url,
    generic_heading,
)
from vitae.contexts.templating.registries import LocaleStringsRegistry, default_locale_strings
from vitae.contexts.templating.roles import Role
from vitae.contexts.templating.schema import SchemaTemplate
from vitae.utils.text_processing import join_nonblank, split_blank_line_groups

BLOCK_SEPARATOR = "\n\n"


@dataclass(frozen=True)
class RenderContext:
    """
    Read-only context threaded through one render call.

    Attributes:
        locale: Document locale, detected once per document
        ancestor_roles: Roles from the root down to the parent of the node
        is_last_top_level_sibling: Node is the final level-1 section
        date_context: Date granularity for this node's dates
    """

    locale: Locale = Locale.EN
    ancestor_roles: Tuple[Role, ...] = field(default_factory=tuple)
    is_last_top_level_sibling: bool = False
    date_context: DateContext = DateContext.DEFAULT

    def in_entry(self, role: Role) -> bool:
        """True when the node itself or one of its ancestors is an entry."""
        return role == Role.ENTRY or Role.ENTRY in self.ancestor_roles


def render_title(node: Node) -> str:
    return collapse_doubled_emphasis(convert_inline(node.title))


class RoleRenderers:
    """Renders single nodes into schema fragments."""

    def __init__(self, schema: SchemaTemplate, strings: LocaleStringsRegistry = None):
        self.schema = schema
        self.strings = strings or default_locale_strings()

    def render(self, role: Role, node: Node, content: str, context: RenderContext) -> str:
        """Dispatch to the renderer for role."""
        if role == Role.SUMMARY:
            return self.render_summary(node, content, context)
        elif role == Role.ENTRY:
            return self.render_entry(node, content, context)
        elif role in (Role.SKILLS, Role.SKILLS_SUBSECTION):
            return self.render_skills(node, content, context)
        elif role == Role.GROUP:
            return self.render_group(node, content, context)
        elif role == Role.GENERIC:
            return self.render_generic(node, content, context)
        elif role == Role.PASSTHROUGH:
            return self.render_passthrough(node, content, context)
        raise ValueError(f"Unhandled role: {role}")

    def render_summary(self, node: Node, content: str, context: RenderContext) -> str:
        """
        Two-column intro from the first two paragraph groups, remaining groups
        below, always followed by a separator.
        """
        groups = split_blank_line_groups(content)
        return self.schema.render_type(
            "summary",
            title=render_title(node),
            intro=groups[:2],
            rest=groups[2:],
            separator=SchemaMacros.SEPARATOR,
        )

    def render_entry(self, node: Node, content: str, context: RenderContext) -> str:
        """
        Three-slot entry: title, date range and body.

        In an education context the EMPLOYER property (institution) prefixes
        the body in italics.
        """
        dates = format_date_range(
            node.get_property("FROM"),
            node.get_property("TO"),
            context.date_context,
            context.locale,
            self.strings,
        )

        body = content
        employer = (node.get_property("EMPLOYER") or "").strip()
        if context.date_context == DateContext.EDUCATION and employer:
            lead = f"{FormattingPatterns.TEXTIT}{{{convert_inline(employer)}}}"
            body = f"{lead}{FormattingPatterns.LINE_BREAK}\n{content}" if content else lead

        return self.schema.render_type(
            "entry", title=render_title(node), dates=dates, body=body
        )

    def render_skills(self, node: Node, content: str, context: RenderContext) -> str:
        """
        Level 1: heading, children verbatim, separator unless last. Deeper:
        inline label and body.
        """
        if node.level > 1:
            return self.schema.render_type(
                "skills_subsection", title=render_title(node), body=content.strip()
            )

        separator = ""
        if not context.is_last_top_level_sibling:
            separator = SchemaMacros.SEPARATOR
            if f"{SchemaMacros.SKILL}{{" in content:
                separator = f"{SchemaMacros.SKILLS_GAP}\n{SchemaMacros.SEPARATOR}"

        return self.schema.render_type(
            "skills", title=render_title(node), content=content, separator=separator
        )

    def render_group(self, node: Node, content: str, context: RenderContext) -> str:
        """Top-level section: heading, content, separator unless last."""
        separator = "" if context.is_last_top_level_sibling else SchemaMacros.SEPARATOR
        return self.schema.render_type(
            "group", title=render_title(node), content=content, separator=separator
        )

    def render_generic(self, node: Node, content: str, context: RenderContext) -> str:
        """Mid-level block (employer, institution); separators belong to the group."""
        url = (node.get_property("URL") or "").strip()
        location = (node.get_property("LOCATION") or "").strip()
        return self.schema.render_type(
            "generic",
            title=render_title(node),
            url=escape_url(url) if url else "",
            location=convert_inline(location) if location else "",
            content=content,
        )

    def render_passthrough(self, node: Node, content: str, context: RenderContext) -> str:
        """Plain nested content with a generic heading and no schema structure."""
        return join_nonblank(
            [generic_heading(node.level, render_title(node)), content], BLOCK_SEPARATOR
        )
