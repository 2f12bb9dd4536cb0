"""Environment-driven settings for services embedding the string catalog."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Mapping

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

DATA_DIRECTORY = Path(__file__).resolve().parent / "data"
DEFAULT_DOCUMENT = DATA_DIRECTORY / "strings.xml"

DOCUMENT_ENV = "STRINGCAT_DOCUMENT"
DEFAULT_LANGUAGE_ENV = "STRINGCAT_DEFAULT_LANGUAGE"

_LANGUAGE_PATTERN = re.compile(r"^[A-Za-z0-9]+(?:[-_][A-Za-z0-9]+)*$")


class Settings(BaseModel):
    """Resolved runtime settings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    document: Path = DEFAULT_DOCUMENT
    default_language: str | None = None


def _parse_document(value: str | None) -> Path | None:
    if value is None or not value.strip():
        return None
    return Path(value.strip()).expanduser()


def _parse_language(value: str | None, *, env: str) -> str | None:
    if value is None or not value.strip():
        return None
    candidate = value.strip()
    if not _LANGUAGE_PATTERN.match(candidate):
        logger.warning("Ignoring invalid value for %s: %s", env, value)
        return None
    return candidate


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build settings from ``environ`` (defaults to ``os.environ``)."""

    source = os.environ if environ is None else environ

    values: dict[str, object] = {}
    document = _parse_document(source.get(DOCUMENT_ENV))
    if document is not None:
        values["document"] = document
    language = _parse_language(source.get(DEFAULT_LANGUAGE_ENV), env=DEFAULT_LANGUAGE_ENV)
    if language is not None:
        values["default_language"] = language

    return Settings(**values)


__all__ = [
    "DEFAULT_DOCUMENT",
    "DEFAULT_LANGUAGE_ENV",
    "DOCUMENT_ENV",
    "Settings",
    "load_settings",
]
