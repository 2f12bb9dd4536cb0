"""Exception taxonomy shared by the catalog loader and resolver."""

from __future__ import annotations


class LocalizationError(Exception):
    """Base class for every error raised by the string catalog."""


class MalformedDocumentError(LocalizationError, ValueError):
    """Raised when a string document cannot be parsed into a catalog."""


class MissingMetadataError(LocalizationError, ValueError):
    """Raised when a string document lacks its enabled-languages section."""


class UnknownIdentifierError(LocalizationError, LookupError):
    """Raised when an unqualified lookup targets an id the catalog lacks."""

    def __init__(self, string_id: str) -> None:
        super().__init__(f"Unknown string identifier '{string_id}'")
        self.string_id = string_id


__all__ = [
    "LocalizationError",
    "MalformedDocumentError",
    "MissingMetadataError",
    "UnknownIdentifierError",
]
