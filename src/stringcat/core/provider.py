"""Construct-once holder that publishes a single catalog to many readers."""

from __future__ import annotations

import logging
import os
from functools import partial
from pathlib import Path
from threading import Lock
from typing import Callable

from typing_extensions import Self

from .loader import load_catalog_file
from .schema import Catalog

_LOGGER = logging.getLogger(__name__)

CatalogSource = Callable[[], Catalog]


class CatalogProvider:
    """Build a catalog on first use and hand the same instance to every caller.

    Builds run under a lock, so racing first callers trigger exactly one build
    and all observe its result. A failed build publishes nothing; the next call
    retries. :meth:`reload` swaps in a freshly built catalog with a single
    reference assignment, leaving readers of the previous one unaffected.
    """

    def __init__(self, source: CatalogSource) -> None:
        self._source = source
        self._catalog: Catalog | None = None
        self._lock = Lock()

    @classmethod
    def from_catalog(cls, catalog: Catalog) -> Self:
        provider = cls(lambda: catalog)
        provider._catalog = catalog
        return provider

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> Self:
        return cls(partial(load_catalog_file, Path(path)))

    @property
    def loaded(self) -> bool:
        return self._catalog is not None

    def _build_locked(self) -> Catalog:
        catalog = self._source()
        if not isinstance(catalog, Catalog):
            raise TypeError(
                f"Catalog source returned {type(catalog).__name__}, expected Catalog"
            )
        _LOGGER.info(
            "Published string catalog with %d entries (base language: %s)",
            len(catalog.entries),
            catalog.base_language,
        )
        return catalog

    def get(self) -> Catalog:
        """Return the published catalog, building it on first use."""

        catalog = self._catalog
        if catalog is not None:
            return catalog

        with self._lock:
            if self._catalog is None:
                self._catalog = self._build_locked()
            return self._catalog

    def reload(self) -> Catalog:
        """Build a new catalog from the source and publish it."""

        with self._lock:
            catalog = self._build_locked()
            self._catalog = catalog
        return catalog


__all__ = ["CatalogProvider", "CatalogSource"]
