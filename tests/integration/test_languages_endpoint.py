"""Integration tests for the languages endpoint."""

from http import HTTPStatus

from flask.testing import FlaskClient


def test_languages_endpoint_lists_enabled_languages(client: FlaskClient) -> None:
    response = client.get("/api/v1/languages")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["base_language"] == "en"
    assert payload["languages"] == [
        {"code": "en", "name": "English", "default": True},
        {"code": "de", "name": "Deutsch", "default": False},
        {"code": "fr", "name": "Français", "default": False},
    ]
