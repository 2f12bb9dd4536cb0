"""Report translation gaps and document quirks in string catalogs."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from stringcat.settings import load_settings

from .errors import LocalizationError
from .loader import load_catalog_file
from .schema import Catalog, StringEntry


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _has_text(entry: StringEntry, language: str) -> bool:
    translation = entry.translation(language)
    return translation is not None and translation.text is not None


def _validate_metadata(catalog: Catalog) -> list[str]:
    errors: list[str] = []

    if not catalog.languages:
        errors.append(_format_scope("meta", "no enabled languages declared"))

    claims = catalog.default_claims
    if not claims:
        errors.append(
            _format_scope(
                "meta",
                "no default language declared; untranslated strings show the missing marker",
            )
        )
    elif len(claims) > 1:
        errors.append(
            _format_scope(
                "meta",
                (
                    f"multiple default languages declared ({', '.join(claims)}); "
                    f"'{catalog.base_language}' wins"
                ),
            )
        )

    return errors


def _validate_entries(catalog: Catalog) -> list[str]:
    errors: list[str] = []
    enabled = catalog.available_languages
    base_language = catalog.base_language

    for entry in catalog.entries.values():
        scope = f"strings.{entry.id}"

        if not entry.translations:
            errors.append(_format_scope(scope, "defines no translations"))
            continue

        unknown = [language for language in entry.translations if language not in enabled]
        if unknown:
            errors.append(
                _format_scope(scope, f"uses languages that are not enabled: {', '.join(unknown)}")
            )

        if base_language is not None and not _has_text(entry, base_language):
            errors.append(
                _format_scope(scope, f"has no text in base language '{base_language}'")
            )

    return errors


def _validate_coverage(catalog: Catalog) -> list[str]:
    errors: list[str] = []
    total = len(catalog.entries)

    for language in catalog.available_languages:
        if language == catalog.base_language:
            continue
        missing = [
            entry.id
            for entry in catalog.entries.values()
            if not _has_text(entry, language)
        ]
        if missing:
            errors.append(
                _format_scope(
                    f"languages.{language}",
                    f"{len(missing)} of {total} strings have no text",
                )
            )

    return errors


def validate_catalog(catalog: Catalog) -> list[str]:
    """Return a list of validation issues for the provided catalog."""

    errors: list[str] = []
    errors.extend(_validate_metadata(catalog))
    errors.extend(_validate_entries(catalog))
    errors.extend(_validate_coverage(catalog))
    return errors


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate string documents and report untranslated entries."
    )
    parser.add_argument(
        "documents",
        nargs="*",
        type=Path,
        help="String documents to validate (defaults to the configured document)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with a non-zero status when any issue is reported",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show loader warnings such as duplicate string ids",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING if args.verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )

    documents = args.documents or [load_settings().document]
    exit_code = 0

    for document in documents:
        try:
            catalog = load_catalog_file(document)
        except (OSError, LocalizationError) as error:
            print(f"[{document}] failed to load string document: {error}")
            exit_code = 1
            continue

        issues = validate_catalog(catalog)
        if issues:
            if args.strict:
                exit_code = 1
            print(f"[{document}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{document}] OK")

    return exit_code


__all__ = ["main", "validate_catalog"]


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
