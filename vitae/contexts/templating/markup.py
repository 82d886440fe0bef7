"""
Generic Markup Conversion

Converts outline body text and titles to LaTeX: paragraphs, plain lists,
emphasis, links, verbatim and raw export snippets. Roles without a dedicated
renderer go through this conversion unmodified.
"""

import re
from typing import Callable, List

from vitae.contexts.templating.latex_patterns import (
    EnvironmentPatterns,
    FormattingPatterns,
    GenericHeadings,
)
from vitae.utils.text_processing import split_blank_line_groups

LATEX_SPECIALS = {
    "\\": r"\textbackslash{}",
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "{": r"\{",
    "}": r"\}",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}
LATEX_SPECIALS_RE = re.compile("|".join(re.escape(char) for char in LATEX_SPECIALS))

SNIPPET_RE = re.compile(r"@@latex:(.*?)@@", re.DOTALL)
LINK_RE = re.compile(r"\[\[([^\[\]]+)\](?:\[([^\[\]]+)\])?\]")
VERBATIM_RE = re.compile(r"(?<![\w=~])([=~])(?=\S)(.+?)(?<=\S)\1(?![\w=~])")
LINE_BREAK_RE = re.compile(r"\\\\[ \t]*$", re.MULTILINE)
BOLD_RE = re.compile(r"(?<![\w*])\*(?=\S)(.+?)(?<=\S)\*(?![\w*])")
ITALIC_RE = re.compile(r"(?<![\w/:])/(?=\S)(.+?)(?<=\S)/(?![\w/])")
LIST_ITEM_RE = re.compile(r"^\s*[-+]\s+(.*)$")
PLACEHOLDER_RE = re.compile("\x00(\\d+)\x00")

TRAILING_BREAK_RE = re.compile(r"\s*(?:\\\\|\\par)\s*$")


def escape_latex(text: str) -> str:
    """
    Escape LaTeX special characters.

    Example:
        >>> escape_latex("R&D at 50%")
        'R\\\\&D at 50\\\\%'
    """
    return LATEX_SPECIALS_RE.sub(lambda m: LATEX_SPECIALS[m.group(0)], text)


def escape_url(url: str) -> str:
    """Escape the characters hyperref still needs escaped inside \\href."""
    return url.replace("%", r"\%").replace("#", r"\#")


def convert_inline(text: str) -> str:
    """
    Convert one run of inline markup to LaTeX.

    Example:
        >>> convert_inline("*Senior* engineer at [[https://acme.example][Acme]]")
        '\\\\textbf{Senior} engineer at \\\\href{https://acme.example}{Acme}'
    """
    protected: List[str] = []

    def stash(latex: str) -> str:
        protected.append(latex)
        return f"\x00{len(protected) - 1}\x00"

    def link(match: re.Match) -> str:
        url, description = match.groups()
        if description:
            return stash(f"{FormattingPatterns.HREF}{{{escape_url(url)}}}{{{convert_inline(description)}}}")
        return stash(f"{FormattingPatterns.URL}{{{escape_url(url)}}}")

    text = SNIPPET_RE.sub(lambda m: stash(m.group(1)), text)
    text = LINK_RE.sub(link, text)
    text = VERBATIM_RE.sub(
        lambda m: stash(f"{FormattingPatterns.TEXTTT}{{{escape_latex(m.group(2))}}}"), text
    )
    text = LINE_BREAK_RE.sub(lambda m: stash(FormattingPatterns.LINE_BREAK), text)

    text = escape_latex(text)
    text = BOLD_RE.sub(lambda m: f"{FormattingPatterns.TEXTBF}{{{m.group(1)}}}", text)
    text = ITALIC_RE.sub(lambda m: f"{FormattingPatterns.EMPH}{{{m.group(1)}}}", text)

    return PLACEHOLDER_RE.sub(lambda m: protected[int(m.group(1))], text)


def collapse_doubled_emphasis(fragment: str) -> str:
    """
    Collapse emphasis applied twice by composition.

    Example:
        >>> collapse_doubled_emphasis(r"\\textbf{\\textbf{Lead}}")
        '\\\\textbf{Lead}'
    """
    for command in FormattingPatterns.emphasis():
        pattern = re.compile(rf"\\{command}\{{\\{command}\{{([^{{}}]*)\}}\}}")
        previous = None
        while previous != fragment:
            previous = fragment
            fragment = pattern.sub(rf"\\{command}{{\1}}", fragment)
    return fragment


def fixup_paragraph(fragment: str, in_entry: bool = False) -> str:
    """
    Text fixups applied to every paragraph fragment.

    Doubled emphasis is collapsed; inside an entry a trailing line break is
    dropped so the entry body adds no extra vertical space.
    """
    fragment = collapse_doubled_emphasis(fragment)
    if in_entry:
        fragment = TRAILING_BREAK_RE.sub("", fragment)
    return fragment


def _convert_list(items: List[str], convert: Callable[[str], str]) -> str:
    lines = [EnvironmentPatterns.BEGIN_ITEMIZE]
    lines.extend(f"{EnvironmentPatterns.ITEM} {convert(item)}" for item in items)
    lines.append(EnvironmentPatterns.END_ITEMIZE)
    return "\n".join(lines)


def convert_body(text: str, in_entry: bool = False) -> str:
    """
    Convert body text (paragraphs and lists) to LaTeX blocks.

    Blocks are separated by one blank line. Every paragraph passes through
    fixup_paragraph.

    Args:
        text: Inline text of a section
        in_entry: Whether the section is an entry or sits inside one
    """
    blocks: List[str] = []

    def paragraph(lines: List[str]) -> None:
        if lines:
            blocks.append(fixup_paragraph(convert_inline("\n".join(lines)), in_entry))

    def item(content: str) -> str:
        return fixup_paragraph(convert_inline(content), in_entry)

    for group in split_blank_line_groups(text or ""):
        prose: List[str] = []
        items: List[str] = []
        for line in group.splitlines():
            list_item = LIST_ITEM_RE.match(line)
            if list_item:
                paragraph(prose)
                prose = []
                items.append(list_item.group(1).strip())
            elif items and line[:1].isspace():
                items[-1] = f"{items[-1]} {line.strip()}"
            else:
                if items:
                    blocks.append(_convert_list(items, item))
                    items = []
                prose.append(line.strip())
        paragraph(prose)
        if items:
            blocks.append(_convert_list(items, item))

    return "\n\n".join(blocks)


def generic_heading(level: int, title_latex: str) -> str:
    """Heading used by the pass-through conversion for untagged deep sections."""
    command = GenericHeadings.LEVEL_3 if level <= 3 else GenericHeadings.DEEPER
    return f"{command}{{{title_latex}}}"
