"""Tests for the language-bound translator helper."""

from __future__ import annotations

from stringcat.core import Catalog, CatalogProvider, ResolutionSource, Translator


def test_translator_follows_the_current_language(example_catalog: Catalog) -> None:
    preferences = {"language": "en"}
    translator = Translator(example_catalog, lambda: preferences["language"])

    assert translator("door") == "Door"
    assert translator.language == "en"

    preferences["language"] = "de"

    assert translator("door") == "Tür"
    assert translator("greet") == "Hello (missing)"
    assert translator.audio("door") == "audio/en/door.ogg"


def test_fixed_translator_over_provider(example_catalog: Catalog) -> None:
    provider = CatalogProvider.from_catalog(example_catalog)
    translator = Translator.fixed(provider, "de")

    resolution = translator.resolve("farewell")

    assert translator.catalog is example_catalog
    assert resolution.text == "farewell (string missing)"
    assert resolution.text_source is ResolutionSource.MISSING
    assert translator.audio("greet") is None
