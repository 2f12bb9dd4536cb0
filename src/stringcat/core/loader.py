"""Build immutable string catalogs from XML or YAML/JSON documents."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Iterator, Mapping
from xml.etree import ElementTree

import yaml
from pydantic import ValidationError

from .errors import MalformedDocumentError, MissingMetadataError
from .schema import TRANSLATION_FIELDS, Catalog

_LOGGER = logging.getLogger(__name__)

XML_ROOT_TAG = "localizableStrings"

_SUFFIX_FORMATS = {
    ".xml": "xml",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".json": "json",
}


def _decode(document: str | bytes) -> str:
    if isinstance(document, bytes):
        try:
            return document.decode("utf-8-sig")
        except UnicodeDecodeError as error:
            raise MalformedDocumentError(f"String document is not valid UTF-8: {error}") from error
    return document.lstrip("\ufeff")


def _detect_format(text: str) -> str:
    return "xml" if text.lstrip().startswith("<") else "yaml"


def _optional_str(value: Any) -> Any:
    """Stringify scalar identifiers while leaving other values for the schema."""

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


# XML ------------------------------------------------------------------------


def _iter_xml_strings(
    element: ElementTree.Element, group: str | None = None
) -> Iterator[tuple[str | None, ElementTree.Element]]:
    for child in element:
        if child.tag == "string":
            yield group, child
        elif child.tag == "group":
            yield from _iter_xml_strings(child, child.get("id", group))
        elif child.tag != "meta":
            yield from _iter_xml_strings(child, group)


def _read_xml_entry(element: ElementTree.Element, string_id: str, group: str | None) -> dict[str, Any]:
    translations: dict[str, dict[str, str]] = {}
    order: dict[str, list[str]] = {field: [] for field in TRANSLATION_FIELDS}
    for child in element:
        if child.tag not in TRANSLATION_FIELDS:
            continue
        field = child.tag
        language = child.get("lang")
        if not language:
            _LOGGER.warning(
                "Ignoring %s element without a language on string '%s'", child.tag, string_id
            )
            continue
        values = translations.setdefault(language, {})
        if field in values:
            _LOGGER.debug(
                "Keeping first %s value for string '%s' in language '%s'",
                field,
                string_id,
                language,
            )
            continue
        values[field] = "".join(child.itertext())
        order[field].append(language)
    return {
        "id": string_id,
        "group": group,
        "translations": translations,
        "text_order": order["text"],
        "audio_order": order["audio"],
    }


def _collect_xml(text: str) -> tuple[list[Any], list[dict[str, Any]]]:
    try:
        root = ElementTree.fromstring(text)
    except ElementTree.ParseError as error:
        raise MalformedDocumentError(f"Unable to parse XML string document: {error}") from error

    languages_node = root.find("meta/enabledLanguages") if root.tag == XML_ROOT_TAG else None
    if languages_node is None:
        raise MissingMetadataError(
            f"String document does not declare '{XML_ROOT_TAG}/meta/enabledLanguages'"
        )

    languages = [
        {
            "id": node.get("id"),
            "fullName": node.get("fullName"),
            "default": node.get("default"),
        }
        for node in languages_node.findall("language")
    ]

    entries: list[dict[str, Any]] = []
    for group, node in _iter_xml_strings(root):
        string_id = node.get("id")
        if not string_id:
            raise MalformedDocumentError("Encountered a string element without an 'id'")
        entries.append(_read_xml_entry(node, string_id, group))

    return languages, entries


# YAML / JSON ----------------------------------------------------------------


def _parse_yaml(text: str) -> Any:
    try:
        return yaml.safe_load(text) or {}
    except yaml.YAMLError as error:
        raise MalformedDocumentError(f"Unable to parse string document: {error}") from error


def _read_mapping_language(item: Any) -> dict[str, Any]:
    if not isinstance(item, Mapping):
        raise MalformedDocumentError("Enabled language entries must be mappings")
    return {
        "id": _optional_str(item.get("id", item.get("code"))),
        "fullName": item.get("fullName", item.get("displayName")),
        "default": item.get("default", item.get("isDefault")),
    }


def _read_mapping_translations(raw: Any, string_id: str) -> dict[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise MalformedDocumentError(
            f"Translations of string '{string_id}' must be a mapping of languages"
        )

    translations: dict[str, Any] = {}
    for language, value in raw.items():
        if value is None:
            value = {}
        elif not isinstance(value, Mapping):
            # ``en: Hello`` is shorthand for a text-only translation.
            value = {"text": value}
        translations[str(language)] = dict(value)
    return translations


def _read_mapping_strings(items: Any, group: str | None) -> list[dict[str, Any]]:
    if items is None:
        return []
    if not isinstance(items, list):
        raise MalformedDocumentError("String collections must be lists")

    entries: list[dict[str, Any]] = []
    for item in items:
        if not isinstance(item, Mapping):
            raise MalformedDocumentError("String entries must be mappings")
        string_id = _optional_str(item.get("id", item.get("stringId")))
        if not string_id:
            raise MalformedDocumentError("Encountered a string entry without an 'id'")
        entries.append(
            {
                "id": string_id,
                "group": group,
                "translations": _read_mapping_translations(item.get("translations"), string_id),
            }
        )
    return entries


def _collect_mapping(payload: Any) -> tuple[list[Any], list[dict[str, Any]]]:
    if not isinstance(payload, Mapping):
        raise MalformedDocumentError("String document must define a mapping at the top level")

    meta = payload.get("meta")
    raw_languages = meta.get("enabledLanguages") if isinstance(meta, Mapping) else None
    if raw_languages is None:
        raise MissingMetadataError("String document does not declare 'meta.enabledLanguages'")
    if not isinstance(raw_languages, list):
        raise MalformedDocumentError("'meta.enabledLanguages' must be a list")

    languages = [_read_mapping_language(item) for item in raw_languages]

    entries: list[dict[str, Any]] = []
    for key, value in payload.items():
        if key == "strings":
            entries.extend(_read_mapping_strings(value, None))
        elif key == "groups":
            if not isinstance(value, list):
                raise MalformedDocumentError("'groups' must be a list")
            for group in value:
                if not isinstance(group, Mapping):
                    raise MalformedDocumentError("Group entries must be mappings")
                group_id = _optional_str(group.get("id"))
                entries.extend(_read_mapping_strings(group.get("strings"), group_id))

    return languages, entries


# Catalog construction -------------------------------------------------------


def _index_entries(entries: list[dict[str, Any]]) -> dict[str, dict[str, Any]]:
    """Key entries by id; a repeated id replaces the earlier entry in place."""

    index: dict[str, dict[str, Any]] = {}
    for entry in entries:
        string_id = entry["id"]
        previous = index.get(string_id)
        if previous is not None:
            _LOGGER.warning(
                "Duplicate string id '%s' (groups %r and %r); keeping the later entry",
                string_id,
                previous["group"],
                entry["group"],
            )
        index[string_id] = entry
    return index


def _build_catalog(languages: list[Any], entries: list[dict[str, Any]]) -> Catalog:
    try:
        catalog = Catalog.model_validate(
            {"languages": languages, "entries": _index_entries(entries)}
        )
    except ValidationError as error:
        raise MalformedDocumentError(f"String document validation failed: {error}") from error

    claims = catalog.default_claims
    if len(claims) > 1:
        _LOGGER.warning(
            "Several languages are marked as default (%s); using '%s'",
            ", ".join(claims),
            catalog.base_language,
        )

    enabled = set(catalog.available_languages)
    unknown = sorted(
        {
            language
            for entry in catalog.entries.values()
            for language in entry.translations
            if language not in enabled
        }
    )
    if unknown:
        _LOGGER.warning(
            "String entries use languages that are not enabled: %s", ", ".join(unknown)
        )

    _LOGGER.debug(
        "Loaded string catalog with %d entries in %d languages",
        len(catalog.entries),
        len(catalog.languages),
    )
    return catalog


def load_catalog(
    document: str | bytes | Mapping[str, Any],
    *,
    document_format: str | None = None,
) -> Catalog:
    """Parse a string document and return its immutable catalog.

    ``document`` may be raw XML, YAML or JSON text, or an already parsed
    mapping. When ``document_format`` is omitted, text starting with ``<`` is
    read as XML and anything else as YAML (a superset of JSON).
    """

    if isinstance(document, Mapping):
        languages, entries = _collect_mapping(document)
        return _build_catalog(languages, entries)

    text = _decode(document)
    resolved_format = (document_format or _detect_format(text)).lower()

    if resolved_format == "xml":
        languages, entries = _collect_xml(text)
    elif resolved_format in {"yaml", "json"}:
        languages, entries = _collect_mapping(_parse_yaml(text))
    else:
        raise ValueError(f"Unsupported string document format '{document_format}'")

    return _build_catalog(languages, entries)


def load_catalog_file(path: str | os.PathLike[str]) -> Catalog:
    """Read a UTF-8 string document from disk and build its catalog."""

    document_path = Path(path)
    text = document_path.read_text(encoding="utf-8")
    return load_catalog(text, document_format=_SUFFIX_FORMATS.get(document_path.suffix.lower()))


__all__ = ["XML_ROOT_TAG", "load_catalog", "load_catalog_file"]
