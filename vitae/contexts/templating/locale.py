"""
Locale Detection

Infers the document language from the author's preamble text. Only this module
looks at preamble markers; everything downstream works with the Locale enum.
"""

import re
from enum import Enum


class Locale(str, Enum):
    """Language variant controlling dates and fallback literals."""

    EN = "en"
    EL = "el"


DEFAULT_LOCALE = Locale.EN

LANGUAGE_NAMES = {
    "english": Locale.EN,
    "greek": Locale.EL,
}

# \setdefaultlanguage{greek}, \setmainlanguage[variant=mono]{greek},
# or a plain "default language = greek" directive
DIRECTIVE_RE = re.compile(
    r"\\set(?:default|main)language\s*(?:\[[^\]]*\])?\s*\{\s*(greek|english)\s*\}"
    r"|default[ _-]?language\s*[=:]\s*\{?\s*(greek|english)\b",
    re.IGNORECASE,
)

# Package options such as \usepackage[english,greek]{babel}
BRACKET_RE = re.compile(r"\[([^\[\]]*)\]")


def _from_bracket_options(text: str):
    for match in BRACKET_RE.finditer(text):
        options = [option.strip().lower() for option in match.group(1).split(",")]
        languages = [LANGUAGE_NAMES[option] for option in options if option in LANGUAGE_NAMES]
        if languages:
            # babel: the last language listed is the main one
            return languages[-1]
    return None


def detect_locale(preamble_text: str) -> Locale:
    """
    Detect the locale of a document from its preamble text.

    An explicit default-language directive wins over bracketed package
    options; with neither present the locale is English.

    Args:
        preamble_text: Assembled preamble/header text of the document

    Returns:
        Detected Locale

    Example:
        >>> detect_locale(r"\\usepackage[greek]{babel}")
        <Locale.EL: 'el'>
        >>> detect_locale(r"\\usepackage[greek]{babel} \\setdefaultlanguage{english}")
        <Locale.EN: 'en'>
        >>> detect_locale("")
        <Locale.EN: 'en'>
    """
    directive = DIRECTIVE_RE.search(preamble_text or "")
    if directive:
        language = (directive.group(1) or directive.group(2)).lower()
        return LANGUAGE_NAMES[language]

    bracketed = _from_bracket_options(preamble_text or "")
    if bracketed is not None:
        return bracketed

    return DEFAULT_LOCALE
