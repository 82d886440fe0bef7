"""
Date Normalization

Parses loosely structured date tokens (org timestamps, ISO dates, bare years,
"present") and renders them per locale and date context.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from vitae.contexts.templating.locale import Locale
from vitae.contexts.templating.registries import LocaleStringsRegistry, default_locale_strings


class DateContext(str, Enum):
    """Granularity context: education sections show years only."""

    DEFAULT = "default"
    EDUCATION = "education"


@dataclass(frozen=True)
class ExactDate:
    year: int
    month: int
    day: int


@dataclass(frozen=True)
class YearMonth:
    year: int
    month: int


@dataclass(frozen=True)
class YearOnly:
    year: int


@dataclass(frozen=True)
class Present:
    """Sentinel for an ongoing period."""


@dataclass(frozen=True)
class Unparsed:
    raw: str


DateToken = Union[ExactDate, YearMonth, YearOnly, Present, Unparsed]

EXACT_DATE_RE = re.compile(r"(?<!\d)(\d{4})-(\d{1,2})-(\d{1,2})(?!\d)")
YEAR_MONTH_RE = re.compile(r"(?<!\d)(\d{4})-(\d{1,2})(?![\d-])")
YEAR_RE = re.compile(r"(?<!\d)(\d{4})(?!\d)")

# Org timestamp delimiters around a literal, e.g. "<now>" or "[present]"
LITERAL_STRIP = " \t<>[]"

RANGE_SEPARATOR = " -- "


def _is_present_literal(raw: str, strings: LocaleStringsRegistry) -> bool:
    candidate = raw.strip(LITERAL_STRIP).lower()
    for vocabulary in strings.all_strings().values():
        if candidate in (alias.lower() for alias in vocabulary["present_aliases"]):
            return True
    return False


def parse_date(raw: str, strings: LocaleStringsRegistry = None) -> DateToken:
    """
    Parse a raw date token; first match wins.

    Precedence: present literal, YYYY-MM-DD, YYYY-MM, bare YYYY. Anything else,
    including an out-of-range month, is Unparsed.

    Example:
        >>> parse_date("<2019-03-05 Tue>")
        ExactDate(year=2019, month=3, day=5)
        >>> parse_date("Spring term")
        Unparsed(raw='Spring term')
    """
    strings = strings or default_locale_strings()

    if _is_present_literal(raw, strings):
        return Present()

    exact = EXACT_DATE_RE.search(raw)
    if exact:
        year, month, day = (int(part) for part in exact.groups())
        if 1 <= month <= 12:
            return ExactDate(year, month, day)
        return Unparsed(raw)

    year_month = YEAR_MONTH_RE.search(raw)
    if year_month:
        year, month = (int(part) for part in year_month.groups())
        if 1 <= month <= 12:
            return YearMonth(year, month)
        return Unparsed(raw)

    year_only = YEAR_RE.search(raw)
    if year_only:
        return YearOnly(int(year_only.group(1)))

    return Unparsed(raw)


def present_literal(locale: Locale, strings: LocaleStringsRegistry = None) -> str:
    """The localized word for an ongoing period."""
    strings = strings or default_locale_strings()
    return strings.get_strings(locale.value)["present"]


def render_token(
    token: DateToken,
    context: DateContext,
    locale: Locale,
    strings: LocaleStringsRegistry = None,
) -> str:
    """Render a parsed token for the given context and locale."""
    strings = strings or default_locale_strings()

    if isinstance(token, Present):
        return present_literal(locale, strings)
    if isinstance(token, Unparsed):
        return token.raw
    if context == DateContext.EDUCATION or isinstance(token, YearOnly):
        return f"{token.year:04d}"

    month = strings.get_strings(locale.value)["months"][token.month - 1]
    return f"{month} '{token.year % 100:02d}"


def format_date(
    raw: str,
    context: DateContext = DateContext.DEFAULT,
    locale: Locale = Locale.EN,
    strings: LocaleStringsRegistry = None,
) -> str:
    """
    Parse and render one date token.

    Example:
        >>> format_date("<2019-03-05>", DateContext.DEFAULT, Locale.EN)
        "Mar '19"
        >>> format_date("<2019-03-05>", DateContext.EDUCATION, Locale.EN)
        '2019'
    """
    return render_token(parse_date(raw, strings), DateContext(context), locale, strings)


def format_date_range(
    date_from: Optional[str],
    date_to: Optional[str],
    context: DateContext = DateContext.DEFAULT,
    locale: Locale = Locale.EN,
    strings: LocaleStringsRegistry = None,
) -> str:
    """
    Render a FROM/TO pair as "<from> -- <to>".

    A missing end renders as the present literal; a missing start with an
    end renders the end alone; both missing renders "".
    """
    has_from = bool(date_from and date_from.strip())
    has_to = bool(date_to and date_to.strip())

    if not has_from and not has_to:
        return ""
    if not has_from:
        return format_date(date_to, context, locale, strings)

    start = format_date(date_from, context, locale, strings)
    end = (
        format_date(date_to, context, locale, strings)
        if has_to
        else present_literal(locale, strings)
    )
    return f"{start}{RANGE_SEPARATOR}{end}"
