"""Pydantic models describing an in-memory string catalog."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing_extensions import Self

from .errors import UnknownIdentifierError

TRANSLATION_FIELDS = ("text", "audio")


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


def _coerce_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, str) and value.strip().lower() in {"0", "false"}:
        return False
    if isinstance(value, str) and value.strip().lower() in {"1", "true"}:
        return True
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ValueError("Default markers must be explicit true/false values")


def _freeze(value: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(value))


class Translation(ImmutableModel):
    """Text and audio reference of one string in one language."""

    text: str | None = None
    audio: str | None = Field(default=None, alias="audioReference")

    @field_validator("text", "audio", mode="before")
    @classmethod
    def _coerce_scalar(cls, value: Any) -> str | None:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        raise ValueError("Translation values must be plain strings")


class LanguageInfo(ImmutableModel):
    """An enabled language as declared in the document metadata."""

    code: str = Field(alias="id", min_length=1)
    display_name: str = Field(alias="fullName")
    is_default: bool = Field(default=False, alias="default")

    @field_validator("is_default", mode="before")
    @classmethod
    def _coerce_default(cls, value: Any) -> bool:
        return _coerce_boolean(value)


class StringEntry(ImmutableModel):
    """A localizable string and its language-tagged translations."""

    id: str = Field(min_length=1)
    group: str | None = None
    translations: Mapping[str, Translation] = Field(default_factory=dict)
    text_order: tuple[str, ...] = ()
    audio_order: tuple[str, ...] = ()

    @field_validator("translations", mode="after")
    @classmethod
    def _freeze_translations(cls, value: Mapping[str, Translation]) -> Mapping[str, Translation]:
        return _freeze(value)

    @model_validator(mode="after")
    def _complete_document_order(self) -> Self:
        # Languages without a recorded position follow in translation order.
        for field in TRANSLATION_FIELDS:
            present = [
                language
                for language, translation in self.translations.items()
                if getattr(translation, field) is not None
            ]
            recorded = (
                language for language in getattr(self, f"{field}_order") if language in present
            )
            order = dict.fromkeys([*recorded, *present])
            object.__setattr__(self, f"{field}_order", tuple(order))
        return self

    @property
    def languages(self) -> tuple[str, ...]:
        return tuple(self.translations)

    def translation(self, language: str | None) -> Translation | None:
        if language is None:
            return None
        return self.translations.get(language)


class Catalog(ImmutableModel):
    """Immutable index of every string in a document.

    ``base_language`` defaults to the last language carrying a true default
    marker. Several languages claiming the default is tolerated; the claims
    remain visible through :attr:`default_claims` so tooling can flag them.
    """

    languages: tuple[LanguageInfo, ...] = ()
    base_language: str | None = None
    entries: Mapping[str, StringEntry] = Field(default_factory=dict)

    @field_validator("entries", mode="after")
    @classmethod
    def _freeze_entries(cls, value: Mapping[str, StringEntry]) -> Mapping[str, StringEntry]:
        return _freeze(value)

    @model_validator(mode="after")
    def _validate_languages(self) -> Self:
        codes = [language.code for language in self.languages]
        duplicates = sorted({code for code in codes if codes.count(code) > 1})
        if duplicates:
            raise ValueError(f"Duplicate language codes declared: {', '.join(duplicates)}")

        if self.base_language is None:
            claims = self.default_claims
            if claims:
                object.__setattr__(self, "base_language", claims[-1])
        elif self.base_language not in codes:
            raise ValueError(
                f"Base language '{self.base_language}' is not an enabled language"
            )

        for string_id, entry in self.entries.items():
            if string_id != entry.id:
                raise ValueError(
                    f"Catalog key '{string_id}' does not match entry id '{entry.id}'"
                )
        return self

    @property
    def available_languages(self) -> dict[str, str]:
        """Map every enabled language code to its display name."""

        return {language.code: language.display_name for language in self.languages}

    @property
    def default_claims(self) -> tuple[str, ...]:
        return tuple(language.code for language in self.languages if language.is_default)

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(self.entries)

    def __contains__(self, string_id: object) -> bool:
        return string_id in self.entries

    def find_entry(self, string_id: str) -> StringEntry | None:
        return self.entries.get(string_id)

    def get_entry(self, string_id: str) -> StringEntry:
        entry = self.entries.get(string_id)
        if entry is None:
            raise UnknownIdentifierError(string_id)
        return entry


__all__ = [
    "Catalog",
    "ImmutableModel",
    "LanguageInfo",
    "StringEntry",
    "Translation",
]
