"""Expose the enabled languages for building language pickers."""

from __future__ import annotations

from flask import Blueprint, jsonify

from stringcat.app.context import current_catalog

blueprint = Blueprint("languages", __name__, url_prefix="/api/v1/languages")


@blueprint.get("")
def list_languages():
    """Return enabled languages in document order."""

    catalog = current_catalog()
    languages = [
        {
            "code": language.code,
            "name": language.display_name,
            "default": language.code == catalog.base_language,
        }
        for language in catalog.languages
    ]
    return jsonify({"languages": languages, "base_language": catalog.base_language}), 200
