"""
LaTeX Pattern Constants

Centralized LaTeX strings of the CV schema used during generation.
Organized into frozen dataclasses by category for immutability and clear grouping.
"""

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class SchemaMacros:
    """
    Schema macros that renderers build in Python code.

    The role templates spell out the remaining macros themselves.
    """
    SKILL: str = r'\cvskill'
    SEPARATOR: str = r'\cvseparator'
    SKILLS_GAP: str = r'\cvskillsgap'
    BULLET: str = r'\cvbullet{}'
    DIAL: str = r'\cvdial'


@dataclass(frozen=True)
class EnvironmentPatterns:
    """Environments used in generated content."""
    BEGIN_ITEMIZE: str = r'\begin{cvitemize}'
    END_ITEMIZE: str = r'\end{cvitemize}'
    ITEM: str = r'\item'


@dataclass(frozen=True)
class GenericHeadings:
    """Headings the pass-through conversion emits for untagged deep sections."""
    LEVEL_3: str = r'\subsubsection*'
    DEEPER: str = r'\paragraph*'


@dataclass(frozen=True)
class FormattingPatterns:
    """
    Inline formatting commands.

    EMPHASIS lists the commands whose accidental doubling is collapsed.
    """
    TEXTBF: str = r'\textbf'
    EMPH: str = r'\emph'
    TEXTIT: str = r'\textit'
    TEXTTT: str = r'\texttt'
    UNDERLINE: str = r'\underline'
    HREF: str = r'\href'
    URL: str = r'\url'
    LINE_BREAK: str = '\\\\'

    @classmethod
    def emphasis(cls) -> List[str]:
        """Return names (without backslash) of emphasis commands."""
        return [
            cls.TEXTBF[1:],
            cls.EMPH[1:],
            cls.TEXTIT[1:],
            cls.TEXTTT[1:],
            cls.UNDERLINE[1:],
        ]


@dataclass(frozen=True)
class ContactLinkPrefixes:
    """URL prefixes for linked contact fields."""
    EMAIL: str = 'mailto:'
    HOMEPAGE: str = 'https://'
    GITHUB: str = 'https://github.com/'
    LINKEDIN: str = 'https://www.linkedin.com/in/'
