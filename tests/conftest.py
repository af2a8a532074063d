"""Pytest configuration and fixtures for slides-writer tests."""

import json
import socket
from pathlib import Path
from typing import Any

import pytest
from google.oauth2.credentials import Credentials

from config import SlidesWriterConfig
from connectors.google.slides_connector import SlidesServiceAsync
from tests.helpers.slides_fakes import FakeSlidesApi, make_presentation, text_box


def free_port() -> int:
    """Find a local TCP port nobody is listening on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port: int = sock.getsockname()[1]
        return port


@pytest.fixture
def client_secrets(tmp_path: Path) -> Path:
    """Write an installed-app OAuth client file."""
    path = tmp_path / "gcp-oauth.keys.json"
    path.write_text(
        json.dumps({"installed": {"client_id": "test_client_id", "client_secret": "test_secret"}})
    )
    return path


@pytest.fixture
def config(tmp_path: Path, client_secrets: Path) -> SlidesWriterConfig:
    """Configuration pointing every file at a temp directory and the listener at a free port."""
    return SlidesWriterConfig(
        presentation_id="deck-1",
        credentials_path=client_secrets,
        token_path=tmp_path / ".slides-server-credentials.json",
        callback_host="127.0.0.1",
        callback_port=free_port(),
        auth_timeout=5.0,
    )


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(
        token="access-token-123",
        refresh_token="refresh-token-456",
        token_uri="https://oauth2.googleapis.com/token",
        client_id="test_client_id",
        client_secret="test_secret",
        scopes=["https://www.googleapis.com/auth/presentations"],
    )


@pytest.fixture
def quiz_presentation() -> dict[str, Any]:
    """Slide 1 has one title box; slide 2 has boxes at offsets 200 and 50, listed out of order."""
    return make_presentation(
        [text_box("title_box", 20, "OLD TITLE")],
        [text_box("clue_box", 200, "Old clue"), text_box("category_box", 50)],
    )


@pytest.fixture
def fake_api(quiz_presentation: dict[str, Any]) -> FakeSlidesApi:
    return FakeSlidesApi(quiz_presentation)


@pytest.fixture
def slides_service(fake_api: FakeSlidesApi) -> SlidesServiceAsync:
    return SlidesServiceAsync(service=fake_api)
