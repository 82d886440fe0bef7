"""
Text processing utilities for formatting LaTeX output.
"""

import re
import unicodedata
from typing import Iterable, List


def prepend_without_overlap(prefix: str, value: str) -> str:
    """
    Prepend prefix to value unless value already starts with it.

    Handles partial overlap, so a handle that already carries part of the
    prefix is not duplicated.

    Example:
        >>> prepend_without_overlap("https://github.com/", "octocat")
        'https://github.com/octocat'
        >>> prepend_without_overlap("https://github.com/", "github.com/octocat")
        'https://github.com/octocat'
        >>> prepend_without_overlap("mailto:", "mailto:me@example.org")
        'mailto:me@example.org'
    """
    if value.startswith(prefix):
        return value
    for start in range(1, len(prefix)):
        if value.startswith(prefix[start:]):
            return prefix[:start] + value
    return prefix + value


def fold_for_matching(text: str) -> str:
    """
    Lowercase text and drop combining accents, for accent-insensitive matching.

    Example:
        >>> fold_for_matching("ΕΚΠΑΙΔΕΥΣΗ") == fold_for_matching("Εκπαίδευση")
        True
    """
    decomposed = unicodedata.normalize("NFD", text.casefold())
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def split_blank_line_groups(content: str) -> List[str]:
    """
    Split text into groups separated by one or more blank lines.

    Example:
        >>> split_blank_line_groups("a\\nb\\n\\n\\nc")
        ['a\\nb', 'c']
    """
    return [group.strip() for group in re.split(r"\n\s*\n", content) if group.strip()]


def join_nonblank(parts: Iterable[str], separator: str) -> str:
    """
    Join the parts that are not empty or whitespace-only.

    Example:
        >>> join_nonblank(["a", "", "  ", "b"], " | ")
        'a | b'
    """
    return separator.join(part for part in parts if part and part.strip())


def set_max_consecutive_blank_lines(content: str, max_consecutive: int = 1) -> str:
    """
    Normalize consecutive blank lines to a maximum number.

    Args:
        content: The text content to normalize
        max_consecutive: Maximum number of consecutive blank lines to allow.
                        Use 0 to remove all blank lines, 1 for standard
                        normalization (default: 1)

    Returns:
        Content with normalized blank lines

    Example:
        >>> set_max_consecutive_blank_lines("text\\n\\n\\n\\nmore", max_consecutive=1)
        'text\\n\\nmore'
        >>> set_max_consecutive_blank_lines("text\\n\\n\\n\\nmore", max_consecutive=0)
        'text\\nmore'
    """
    if max_consecutive == 0:
        pattern = r'\n[ \t]*\n([ \t]*\n)*'
    else:
        pattern = r'\n[ \t]*\n([ \t]*\n)+'

    replacement = '\n' * (max_consecutive + 1)

    return re.sub(pattern, replacement, content)
