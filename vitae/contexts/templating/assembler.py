"""
Document Assembler

Top-level driver: builds the header from document metadata, walks the section
tree once (children rendered before their parent), and wraps everything in the
schema's document envelope.
"""

import re
from typing import List, Optional

from vitae.contexts.intake.document_tree import DocumentMetadata, DocumentTree, Node
from vitae.contexts.templating.dates import DateContext
from vitae.contexts.templating.latex_patterns import (
    ContactLinkPrefixes,
    FormattingPatterns,
    SchemaMacros,
)
from vitae.contexts.templating.locale import Locale, detect_locale
from vitae.contexts.templating.logger import _log_debug, _log_info
from vitae.contexts.templating.markup import convert_body, convert_inline, escape_latex, escape_url
from vitae.contexts.templating.registries import LocaleStringsRegistry, default_locale_strings
from vitae.contexts.templating.renderers import BLOCK_SEPARATOR, RenderContext, RoleRenderers
from vitae.contexts.templating.roles import Role, SiblingBoundaryTracker, classify
from vitae.contexts.templating.schema import SchemaTemplate
from vitae.utils.text_processing import (
    fold_for_matching,
    join_nonblank,
    prepend_without_overlap,
    set_max_consecutive_blank_lines,
)

FIELD_SEPARATOR = f" {SchemaMacros.BULLET} "
DIAL_PREFIX_RE = re.compile(r"^\+\s*")
SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)


def _link(url: str, label: str) -> str:
    return f"{FormattingPatterns.HREF}{{{escape_url(url)}}}{{{escape_latex(label)}}}"


def format_phone(number: str) -> str:
    """
    Render a phone number, setting a leading international "+" apart.

    Example:
        >>> format_phone("+30 210 1234567")
        '\\\\cvdial{30 210 1234567}'
        >>> format_phone("210 1234567")
        '210 1234567'
    """
    number = number.strip()
    if DIAL_PREFIX_RE.match(number):
        return f"{SchemaMacros.DIAL}{{{escape_latex(DIAL_PREFIX_RE.sub('', number))}}}"
    return escape_latex(number)


def build_name_line(metadata: DocumentMetadata) -> str:
    """First and last name, or the author field when both are empty."""
    name = join_nonblank([metadata.first_name.strip(), metadata.last_name.strip()], " ")
    return convert_inline(name or metadata.author.strip())


def build_contact_line(metadata: DocumentMetadata) -> str:
    """Present contact channels joined by the bullet separator."""
    parts: List[str] = []

    email = metadata.email.strip()
    if email:
        parts.append(_link(prepend_without_overlap(ContactLinkPrefixes.EMAIL, email), email))

    phone = metadata.phone.strip() or metadata.mobile.strip()
    if phone:
        parts.append(format_phone(phone))

    homepage = metadata.homepage.strip()
    if homepage:
        url = homepage if SCHEME_RE.match(homepage) else prepend_without_overlap(ContactLinkPrefixes.HOMEPAGE, homepage)
        parts.append(_link(url, SCHEME_RE.sub("", homepage).rstrip("/")))

    github = metadata.github.strip()
    if github:
        url = prepend_without_overlap(ContactLinkPrefixes.GITHUB, github)
        parts.append(_link(url, SCHEME_RE.sub("", url)))

    linkedin = metadata.linkedin.strip()
    if linkedin:
        url = prepend_without_overlap(ContactLinkPrefixes.LINKEDIN, linkedin)
        parts.append(_link(url, SCHEME_RE.sub("", url).replace("www.", "", 1)))

    return join_nonblank(parts, FIELD_SEPARATOR)


def build_address_line(metadata: DocumentMetadata) -> str:
    """Street, city, state and country joined by the bullet separator."""
    fields = [metadata.street, metadata.city, metadata.state, metadata.country]
    return join_nonblank([convert_inline(value.strip()) for value in fields], FIELD_SEPARATOR)


class DocumentAssembler:
    """
    Assembles a complete LaTeX CV from a section tree and header metadata.

    The schema is injected; the assembler holds no per-document state, so
    assembling the same input twice yields identical output.
    """

    def __init__(self, schema: SchemaTemplate = None, strings: LocaleStringsRegistry = None):
        self.schema = schema or SchemaTemplate()
        self.strings = strings or default_locale_strings()
        self.renderers = RoleRenderers(self.schema, self.strings)

    def _is_education_title(self, node: Node, locale: Locale) -> bool:
        title = fold_for_matching(node.title)
        markers = self.strings.get_strings(locale.value)["education_markers"]
        return any(fold_for_matching(marker) in title for marker in markers)

    def _render_node(
        self,
        node: Node,
        parent_role: Optional[Role],
        context: RenderContext,
        tracker: SiblingBoundaryTracker,
    ) -> str:
        role = classify(node, parent_role)
        context = RenderContext(
            locale=context.locale,
            ancestor_roles=context.ancestor_roles,
            is_last_top_level_sibling=tracker.is_last_top_level_sibling(node),
            date_context=context.date_context,
        )
        _log_debug(f"'{node.title}' (level {node.level}) -> {role.value}")

        education = (
            context.date_context == DateContext.EDUCATION
            or self._is_education_title(node, context.locale)
        )
        child_context = RenderContext(
            locale=context.locale,
            ancestor_roles=context.ancestor_roles + (role,),
            date_context=DateContext.EDUCATION if education else DateContext.DEFAULT,
        )

        rendered_children = [
            self._render_node(child, role, child_context, tracker) for child in node.children
        ]
        body = convert_body(node.inline_text, in_entry=context.in_entry(role))
        content = join_nonblank([body] + rendered_children, BLOCK_SEPARATOR)

        return self.renderers.render(role, node, content, context)

    def render_body(self, tree: DocumentTree, locale: Locale) -> str:
        """Render all top-level sections in document order."""
        tracker = SiblingBoundaryTracker(tree.roots)
        root_context = RenderContext(locale=locale)
        fragments = [self._render_node(node, None, root_context, tracker) for node in tree.roots]
        return join_nonblank(fragments, BLOCK_SEPARATOR)

    def render_header(self, metadata: DocumentMetadata, stamp: Optional[str] = None) -> str:
        """Header block: name, headline, birthdate, contact and address lines."""
        return self.schema.render_structure(
            "header",
            name=build_name_line(metadata),
            headline=convert_inline(metadata.headline.strip()),
            birthdate=escape_latex(metadata.birthdate.strip()),
            contact_line=build_contact_line(metadata),
            address_line=build_address_line(metadata),
            stamp=escape_latex(stamp) if stamp else "",
        ).strip("\n")

    def assemble(
        self,
        tree: DocumentTree,
        metadata: Optional[DocumentMetadata] = None,
        stamp: Optional[str] = None,
    ) -> str:
        """
        Assemble the complete LaTeX document.

        Args:
            tree: Section tree
            metadata: Header fields (defaults to tree.metadata)
            stamp: Optional date stamp; output carries no date unless given

        Returns:
            Complete LaTeX document string
        """
        metadata = metadata if metadata is not None else tree.metadata

        header_lines = [line for line in metadata.latex_header if line.strip()]
        locale = detect_locale("\n".join(header_lines))
        _log_info(f"Assembling {len(tree.roots)} top-level sections (locale: {locale.value})")

        document = self.schema.render_structure(
            "document",
            preamble=self.schema.render_structure("preamble").strip("\n"),
            header_lines=header_lines,
            header=self.render_header(metadata, stamp),
            body=self.render_body(tree, locale),
        )

        return set_max_consecutive_blank_lines(document, max_consecutive=1)
