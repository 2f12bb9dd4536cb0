"""Resolve string identifiers against a catalog with language fallback.

Text and audio are resolved independently through three tiers:

1. the translation in the requested language;
2. the translation in the catalog's base language, with text suffixed by
   ``" (missing)"``;
3. a ``"<id> (string missing)"`` marker for text and no audio.

A missing translation is never an error. It is logged and surfaces as a
degraded :class:`Resolution` so a running UI keeps displaying something.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, cast

from .errors import UnknownIdentifierError
from .schema import Catalog, StringEntry

_LOGGER = logging.getLogger(__name__)

MISSING_SUFFIX = " (missing)"
STRING_MISSING_SUFFIX = " (string missing)"


class ResolutionSource(str, Enum):
    """Tier that produced a resolved value."""

    EXACT = "exact"
    BASE_LANGUAGE = "base_language"
    MISSING = "missing"


@dataclass(frozen=True)
class Resolution:
    """Resolved text and audio of one string; unpacks as ``(text, audio)``."""

    text: str | None
    audio: str | None
    text_source: ResolutionSource = ResolutionSource.EXACT
    audio_source: ResolutionSource = ResolutionSource.EXACT

    def __iter__(self) -> Iterator[str | None]:
        yield self.text
        yield self.audio

    @property
    def degraded(self) -> bool:
        """True when the text is not an exact match for the requested language."""

        return self.text_source is not ResolutionSource.EXACT

    def as_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "audio": self.audio,
            "text_source": self.text_source.value,
            "audio_source": self.audio_source.value,
            "degraded": self.degraded,
        }


NOT_FOUND = Resolution(
    text=None,
    audio=None,
    text_source=ResolutionSource.MISSING,
    audio_source=ResolutionSource.MISSING,
)


def missing_marker(string_id: str) -> str:
    return f"{string_id}{STRING_MISSING_SUFFIX}"


def _resolve_field(
    entry: StringEntry,
    field: str,
    language: str,
    base_language: str | None,
) -> tuple[str | None, ResolutionSource]:
    translation = entry.translation(language)
    value = getattr(translation, field) if translation is not None else None
    if value is not None:
        return value, ResolutionSource.EXACT

    if base_language is not None and base_language != language:
        fallback = entry.translation(base_language)
        value = getattr(fallback, field) if fallback is not None else None
        if value is not None:
            return value, ResolutionSource.BASE_LANGUAGE

    return None, ResolutionSource.MISSING


def resolve(catalog: Catalog, string_id: str, language: str) -> Resolution:
    """Return the best available text and audio of ``string_id`` in ``language``."""

    entry = catalog.find_entry(string_id)
    if entry is None:
        _LOGGER.warning("String '%s' is not defined in the catalog", string_id)
        return Resolution(
            text=missing_marker(string_id),
            audio=None,
            text_source=ResolutionSource.MISSING,
            audio_source=ResolutionSource.MISSING,
        )

    base_language = catalog.base_language
    text, text_source = _resolve_field(entry, "text", language, base_language)
    if text_source is ResolutionSource.BASE_LANGUAGE:
        _LOGGER.debug(
            "String '%s' has no '%s' text; using base language '%s'",
            string_id,
            language,
            base_language,
        )
        text = f"{text}{MISSING_SUFFIX}"
    elif text_source is ResolutionSource.MISSING:
        _LOGGER.warning(
            "String '%s' has no text in '%s' or in the base language", string_id, language
        )
        text = missing_marker(string_id)

    audio, audio_source = _resolve_field(entry, "audio", language, base_language)

    return Resolution(
        text=text,
        audio=audio,
        text_source=text_source,
        audio_source=audio_source,
    )


def resolve_text(catalog: Catalog, string_id: str, language: str) -> str:
    return cast(str, resolve(catalog, string_id, language).text)


def resolve_audio(catalog: Catalog, string_id: str, language: str) -> str | None:
    return resolve(catalog, string_id, language).audio


def resolve_any(catalog: Catalog, string_id: str, *, strict: bool = False) -> Resolution:
    """Return the first text and audio of ``string_id`` regardless of language.

    Intended for debugging and placeholders only. Unknown identifiers yield
    :data:`NOT_FOUND`, or raise :class:`UnknownIdentifierError` when ``strict``.
    """

    entry = catalog.find_entry(string_id)
    if entry is None:
        if strict:
            raise UnknownIdentifierError(string_id)
        _LOGGER.debug("String '%s' is not defined in the catalog", string_id)
        return NOT_FOUND

    text = entry.translations[entry.text_order[0]].text if entry.text_order else None
    audio = entry.translations[entry.audio_order[0]].audio if entry.audio_order else None

    return Resolution(
        text=text,
        audio=audio,
        text_source=ResolutionSource.EXACT if text is not None else ResolutionSource.MISSING,
        audio_source=ResolutionSource.EXACT if audio is not None else ResolutionSource.MISSING,
    )


def match_language(catalog: Catalog, hint: str | None) -> str | None:
    """Map a language hint to an enabled code, or ``None`` when nothing matches.

    ``"de-CH"`` and ``"DE_ch"`` both map to ``"de"`` when only ``de`` is
    enabled.
    """

    if not hint:
        return None

    available = {code.lower(): code for code in catalog.available_languages}
    normalised = hint.strip().replace("_", "-").lower()
    for candidate in (normalised, normalised.split("-")[0]):
        if candidate in available:
            return available[candidate]
    return None


def negotiate_language(
    catalog: Catalog,
    hint: str | None,
    default: str | None = None,
) -> str | None:
    """Like :func:`match_language`, falling back to ``default`` then the base language."""

    return (
        match_language(catalog, hint)
        or match_language(catalog, default)
        or catalog.base_language
    )


__all__ = [
    "MISSING_SUFFIX",
    "NOT_FOUND",
    "Resolution",
    "ResolutionSource",
    "STRING_MISSING_SUFFIX",
    "match_language",
    "missing_marker",
    "negotiate_language",
    "resolve",
    "resolve_any",
    "resolve_audio",
    "resolve_text",
]
