"""Catalog loading and language-fallback string resolution."""

from .errors import (
    LocalizationError,
    MalformedDocumentError,
    MissingMetadataError,
    UnknownIdentifierError,
)
from .loader import load_catalog, load_catalog_file
from .provider import CatalogProvider
from .resolver import (
    NOT_FOUND,
    Resolution,
    ResolutionSource,
    match_language,
    negotiate_language,
    resolve,
    resolve_any,
)
from .schema import Catalog, LanguageInfo, StringEntry, Translation
from .translator import Translator

__all__ = [
    "Catalog",
    "CatalogProvider",
    "LanguageInfo",
    "LocalizationError",
    "MalformedDocumentError",
    "MissingMetadataError",
    "NOT_FOUND",
    "Resolution",
    "ResolutionSource",
    "StringEntry",
    "Translation",
    "Translator",
    "UnknownIdentifierError",
    "load_catalog",
    "load_catalog_file",
    "match_language",
    "negotiate_language",
    "resolve",
    "resolve_any",
]
