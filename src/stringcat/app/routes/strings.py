"""Resolve localized strings for HTTP consumers."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify, request

from stringcat.app.context import current_catalog, current_settings
from stringcat.core import Catalog, match_language, negotiate_language, resolve, resolve_any

blueprint = Blueprint("strings", __name__, url_prefix="/api/v1/strings")


def _requested_language(catalog: Catalog) -> str | None:
    """Pick the language from ``?lang=``, then ``Accept-Language``, then defaults.

    An explicit ``?lang=`` that matches no enabled language is passed through
    unchanged so the response shows the fallback markers.
    """

    hint = request.args.get("lang", "").strip()
    if hint:
        return match_language(catalog, hint) or hint

    preferred = request.accept_languages.best_match(list(catalog.available_languages))
    return negotiate_language(catalog, preferred, current_settings().default_language)


@blueprint.get("")
def resolve_all_strings():
    """Return every string of the catalog resolved for one language."""

    catalog = current_catalog()
    language = _requested_language(catalog)

    strings: dict[str, Any] = {}
    for string_id in catalog.ids:
        if language is None:
            resolution = resolve_any(catalog, string_id)
        else:
            resolution = resolve(catalog, string_id, language)
        strings[string_id] = resolution.as_dict()

    payload = {
        "language": language,
        "base_language": catalog.base_language,
        "strings": strings,
    }
    return jsonify(payload), 200


@blueprint.get("/<path:string_id>")
def resolve_string(string_id: str):
    """Resolve a single string.

    Without ``?lang=`` the lookup is language-blind and unknown identifiers
    produce a 404 problem response.
    """

    catalog = current_catalog()

    if request.args.get("lang", "").strip():
        language = _requested_language(catalog)
        resolution = resolve(catalog, string_id, language)
    else:
        language = None
        resolution = resolve_any(catalog, string_id, strict=True)

    payload = {"id": string_id, "language": language, **resolution.as_dict()}
    return jsonify(payload), 200
