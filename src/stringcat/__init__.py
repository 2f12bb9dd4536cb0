"""Localized string catalogs with base-language fallback."""

from .core import (
    Catalog,
    CatalogProvider,
    NOT_FOUND,
    Resolution,
    Translator,
    load_catalog,
    load_catalog_file,
    resolve,
    resolve_any,
)

__all__ = [
    "Catalog",
    "CatalogProvider",
    "NOT_FOUND",
    "Resolution",
    "Translator",
    "load_catalog",
    "load_catalog_file",
    "resolve",
    "resolve_any",
]
