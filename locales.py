"""Locale normalization and system locale detection backed by Babel's CLDR data."""

from __future__ import annotations

import locale as locale_module
import logging
import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from babel import Locale, UnknownLocaleError
from babel.core import get_locale_identifier, parse_locale

log = logging.getLogger(__name__)

DEFAULT_FALLBACK = "en-US"

LocaleSource = tuple[str, Callable[[], str | None]]


@dataclass(frozen=True)
class LocaleResolution:
    """Outcome of system locale detection."""

    locale: str
    source: str | None  # name of the source that matched, None on fallback
    fallback: bool


@dataclass(frozen=True)
class LocaleDetails:
    name: str
    display_name: str
    english_name: str
    language: str
    territory: str | None


def normalize_locale(candidate: str | None) -> str | None:
    """Canonicalize a locale identifier to hyphenated form, e.g. 'en_us' -> 'en-US'.

    The result keeps only the subtags the input spelled out (no script or
    region is added) and drops POSIX encoding and @modifier suffixes.
    Returns None for blank input or identifiers unknown to CLDR; never raises
    for malformed input.
    """
    if not isinstance(candidate, str) or not candidate.strip():
        return None

    sanitized = candidate.strip().replace("_", "-")
    try:
        parts = parse_locale(sanitized, sep="-")
        Locale.parse(sanitized, sep="-")
    except (ValueError, TypeError, UnknownLocaleError):
        return None
    return get_locale_identifier(tuple(parts[:4]), sep="-")


def _getlocale(category: int) -> Callable[[], str | None]:
    def accessor() -> str | None:
        return locale_module.getlocale(category)[0]
    return accessor


def _environ(name: str) -> Callable[[], str | None]:
    return lambda: os.environ.get(name)


def default_sources() -> list[LocaleSource]:
    """Locale candidates from the host, in priority order."""
    sources: list[LocaleSource] = [("current", _getlocale(locale_module.LC_CTYPE))]
    if hasattr(locale_module, "LC_MESSAGES"):
        sources.append(("messages", _getlocale(locale_module.LC_MESSAGES)))
    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        sources.append((var, _environ(var)))
    return sources


def get_normalized_system_locale(
    sources: Iterable[LocaleSource] | None = None,
    fallback: str = DEFAULT_FALLBACK,
) -> LocaleResolution:
    """Return the first source whose value normalizes, else *fallback*.

    Sources are called lazily in order. A source that raises ValueError or
    OSError is treated like one that returned nothing.
    """
    for name, accessor in (default_sources() if sources is None else sources):
        try:
            candidate = accessor()
        except (ValueError, OSError) as exc:
            log.debug("Locale source '%s' unavailable: %s", name, exc)
            continue

        normalized = normalize_locale(candidate)
        if normalized is not None:
            log.debug("Locale source '%s' gave %r -> %s", name, candidate, normalized)
            return LocaleResolution(locale=normalized, source=name, fallback=False)
        log.debug("Locale source '%s' gave unusable value %r", name, candidate)

    return LocaleResolution(locale=fallback, source=None, fallback=True)


def describe_locale(name: str) -> LocaleDetails:
    """Look up display information for a normalized locale name."""
    parsed = Locale.parse(name, sep="-")
    return LocaleDetails(
        name=normalize_locale(name) or name,
        display_name=parsed.get_display_name() or name,
        english_name=parsed.english_name or name,
        language=parsed.language,
        territory=parsed.territory,
    )
