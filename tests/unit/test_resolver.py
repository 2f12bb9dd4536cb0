"""Tests for the three-tier string resolution."""

from __future__ import annotations

import logging

import pytest

from stringcat.core import (
    NOT_FOUND,
    Catalog,
    ResolutionSource,
    UnknownIdentifierError,
    load_catalog,
    match_language,
    negotiate_language,
    resolve,
    resolve_any,
)
from stringcat.core.resolver import resolve_audio, resolve_text


def test_exact_match_is_returned_unmodified(example_catalog: Catalog) -> None:
    resolution = resolve(example_catalog, "greet", "en")

    assert tuple(resolution) == ("Hello", None)
    assert resolution.text_source is ResolutionSource.EXACT
    assert not resolution.degraded


def test_base_language_text_is_flagged_as_missing(example_catalog: Catalog) -> None:
    text, audio = resolve(example_catalog, "greet", "de")

    assert text == "Hello (missing)"
    assert audio is None


def test_empty_entry_resolves_to_missing_marker(example_catalog: Catalog) -> None:
    resolution = resolve(example_catalog, "farewell", "en")

    assert tuple(resolution) == ("farewell (string missing)", None)
    assert resolution.text_source is ResolutionSource.MISSING
    assert resolution.degraded


def test_text_and_audio_fall_back_independently(example_catalog: Catalog) -> None:
    resolution = resolve(example_catalog, "door", "de")

    assert resolution.text == "Tür"
    assert resolution.text_source is ResolutionSource.EXACT
    assert resolution.audio == "audio/en/door.ogg"
    assert resolution.audio_source is ResolutionSource.BASE_LANGUAGE
    assert not resolution.degraded


def test_unavailable_language_falls_back_to_base(example_catalog: Catalog) -> None:
    resolution = resolve(example_catalog, "door", "fr")

    assert resolution.text == "Door (missing)"
    assert resolution.text_source is ResolutionSource.BASE_LANGUAGE


def test_unknown_identifier_resolves_to_missing_marker(
    example_catalog: Catalog, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.WARNING, logger="stringcat.core.resolver")

    resolution = resolve(example_catalog, "nope", "en")

    assert tuple(resolution) == ("nope (string missing)", None)
    assert "'nope' is not defined" in caplog.text


def test_missing_text_is_logged_not_raised(
    example_catalog: Catalog, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.DEBUG, logger="stringcat.core.resolver")

    resolve(example_catalog, "greet", "de")
    resolve(example_catalog, "farewell", "de")

    messages = [record.getMessage() for record in caplog.records]
    assert "String 'greet' has no 'de' text; using base language 'en'" in messages
    assert "String 'farewell' has no text in 'de' or in the base language" in messages


def test_resolution_is_idempotent(example_catalog: Catalog) -> None:
    first = resolve(example_catalog, "greet", "de")
    second = resolve(example_catalog, "greet", "de")

    assert first == second
    assert first.text.encode("utf-8") == second.text.encode("utf-8")


def test_catalog_without_base_language_skips_fallback_tier() -> None:
    catalog = load_catalog(
        """
meta:
  enabledLanguages:
    - {id: en, fullName: English}
    - {id: de, fullName: Deutsch}
strings:
  - id: greet
    translations:
      en: {text: Hello, audio: greet.ogg}
"""
    )

    resolution = resolve(catalog, "greet", "de")

    assert tuple(resolution) == ("greet (string missing)", None)
    assert resolution.audio_source is ResolutionSource.MISSING


def test_empty_text_counts_as_present() -> None:
    catalog = load_catalog(
        "<localizableStrings><meta><enabledLanguages>"
        '<language id="en" fullName="English" default="true"/>'
        '<language id="de" fullName="Deutsch"/>'
        "</enabledLanguages></meta>"
        '<string id="blank"><text lang="en">Blank</text><text lang="de"/></string>'
        "</localizableStrings>"
    )

    resolution = resolve(catalog, "blank", "de")

    assert resolution.text == ""
    assert resolution.text_source is ResolutionSource.EXACT


def test_resolve_text_and_audio_helpers(example_catalog: Catalog) -> None:
    assert resolve_text(example_catalog, "door", "de") == "Tür"
    assert resolve_audio(example_catalog, "door", "en") == "audio/en/door.ogg"
    assert resolve_audio(example_catalog, "greet", "en") is None
    assert resolve_text(example_catalog, "nope", "de") == "nope (string missing)"
    assert resolve_text(example_catalog, "farewell", "de") == "farewell (string missing)"


def test_resolve_any_returns_first_values_in_document_order() -> None:
    catalog = load_catalog(
        """
meta:
  enabledLanguages:
    - {id: en, fullName: English, default: true}
    - {id: de, fullName: Deutsch}
strings:
  - id: door
    translations:
      de: {text: Tür}
      en: {text: Door, audio: audio/en/door.ogg}
"""
    )

    resolution = resolve_any(catalog, "door")

    assert tuple(resolution) == ("Tür", "audio/en/door.ogg")
    assert resolution.text_source is ResolutionSource.EXACT


def test_resolve_any_follows_element_order_per_field() -> None:
    catalog = load_catalog(
        """<localizableStrings>
  <meta><enabledLanguages>
    <language id="en" fullName="English" default="true"/>
    <language id="de" fullName="Deutsch"/>
  </enabledLanguages></meta>
  <string id="door">
    <audio lang="de">de.ogg</audio>
    <text lang="en">EN</text>
    <text lang="de">DE</text>
  </string>
</localizableStrings>"""
    )

    resolution = resolve_any(catalog, "door")

    assert tuple(resolution) == ("EN", "de.ogg")
    assert resolution.audio_source is ResolutionSource.EXACT


def test_resolve_any_unknown_identifier_returns_sentinel(example_catalog: Catalog) -> None:
    resolution = resolve_any(example_catalog, "nope")

    assert resolution is NOT_FOUND
    assert tuple(resolution) == (None, None)


def test_resolve_any_strict_raises_for_unknown_identifier(example_catalog: Catalog) -> None:
    with pytest.raises(UnknownIdentifierError):
        resolve_any(example_catalog, "nope", strict=True)


def test_resolve_any_known_empty_entry_does_not_raise(example_catalog: Catalog) -> None:
    resolution = resolve_any(example_catalog, "farewell", strict=True)

    assert tuple(resolution) == (None, None)
    assert resolution.text_source is ResolutionSource.MISSING


def test_resolution_as_dict(example_catalog: Catalog) -> None:
    payload = resolve(example_catalog, "greet", "de").as_dict()

    assert payload == {
        "text": "Hello (missing)",
        "audio": None,
        "text_source": "base_language",
        "audio_source": "missing",
        "degraded": True,
    }


@pytest.mark.parametrize(
    ("hint", "expected"),
    [("de", "de"), ("DE-ch", "de"), ("de_AT", "de"), ("fr", None), ("", None), (None, None)],
)
def test_match_language(example_catalog: Catalog, hint: str | None, expected: str | None) -> None:
    assert match_language(example_catalog, hint) == expected


def test_negotiate_language_falls_back_to_default_then_base(example_catalog: Catalog) -> None:
    assert negotiate_language(example_catalog, "de-CH") == "de"
    assert negotiate_language(example_catalog, "fr", default="de") == "de"
    assert negotiate_language(example_catalog, "fr", default="it") == "en"
    assert negotiate_language(example_catalog, None) == "en"
