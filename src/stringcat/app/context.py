"""Accessors for the catalog provider and settings bound to the Flask app."""

from __future__ import annotations

from flask import current_app

from stringcat.core import Catalog, CatalogProvider
from stringcat.settings import Settings

EXTENSION_KEY = "stringcat"


def current_provider() -> CatalogProvider:
    return current_app.extensions[EXTENSION_KEY]["provider"]


def current_settings() -> Settings:
    return current_app.extensions[EXTENSION_KEY]["settings"]


def current_catalog() -> Catalog:
    return current_provider().get()


__all__ = ["EXTENSION_KEY", "current_catalog", "current_provider", "current_settings"]
