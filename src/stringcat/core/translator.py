"""Callable helper binding a catalog to the caller's current language."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .provider import CatalogProvider
from .resolver import Resolution, resolve, resolve_audio, resolve_text
from .schema import Catalog


@dataclass(frozen=True)
class Translator:
    """Callable helper for retrieving localized strings.

    ``language_provider`` is consulted on every call, so UI code keeps a single
    translator while the user switches languages in their preferences.
    """

    source: Catalog | CatalogProvider
    language_provider: Callable[[], str]

    @classmethod
    def fixed(cls, source: Catalog | CatalogProvider, language: str) -> Translator:
        return cls(source=source, language_provider=lambda: language)

    @property
    def catalog(self) -> Catalog:
        if isinstance(self.source, CatalogProvider):
            return self.source.get()
        return self.source

    @property
    def language(self) -> str:
        return self.language_provider()

    def __call__(self, string_id: str) -> str:
        return resolve_text(self.catalog, string_id, self.language)

    def audio(self, string_id: str) -> str | None:
        return resolve_audio(self.catalog, string_id, self.language)

    def resolve(self, string_id: str) -> Resolution:
        return resolve(self.catalog, string_id, self.language)


__all__ = ["Translator"]
