"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from stringcat.app import create_app  # noqa: E402
from stringcat.core import Catalog, load_catalog  # noqa: E402
from stringcat.settings import Settings  # noqa: E402

EXAMPLE_DOCUMENT = """<?xml version="1.0" encoding="utf-8"?>
<localizableStrings>
  <meta>
    <enabledLanguages>
      <language id="en" fullName="English" default="true"/>
      <language id="de" fullName="Deutsch"/>
    </enabledLanguages>
  </meta>
  <group id="general">
    <string id="greet">
      <text lang="en">Hello</text>
    </string>
    <string id="farewell"/>
    <string id="door">
      <text lang="en">Door</text>
      <text lang="de">Tür</text>
      <audio lang="en">audio/en/door.ogg</audio>
    </string>
  </group>
</localizableStrings>
"""


@pytest.fixture()
def example_document() -> str:
    """Return the two-language XML document used across unit tests."""

    return EXAMPLE_DOCUMENT


@pytest.fixture()
def example_catalog() -> Catalog:
    return load_catalog(EXAMPLE_DOCUMENT)


@pytest.fixture()
def app() -> Flask:
    """Return a Flask application serving the bundled string document."""

    application = create_app(settings=Settings())
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()
