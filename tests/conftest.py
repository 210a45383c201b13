"""Shared pytest fixtures for gws-markdown-docs tests."""

import json
import tempfile
from unittest.mock import MagicMock

import pytest
from googleapiclient.errors import HttpError

import core.config
from core.config import ConverterSettings
from core.container import reset_container


@pytest.fixture(autouse=True)
def clean_global_state():
    """Reset cached settings and the dependency container around each test."""
    core.config._settings = None
    reset_container()
    yield
    core.config._settings = None
    reset_container()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def settings():
    """Default converter settings, independent of the environment."""
    return ConverterSettings()


@pytest.fixture
def mock_docs_service():
    """Create a mock Google Docs service."""
    service = MagicMock()
    documents = service.documents.return_value
    documents.get.return_value.execute.return_value = {
        "title": "Test Doc",
        "body": {"content": [{"endIndex": 1}, {"endIndex": 12}]},
    }
    documents.create.return_value.execute.return_value = {"documentId": "doc_new", "title": "Test Doc"}
    documents.batchUpdate.return_value.execute.return_value = {"replies": [{}]}
    return service


@pytest.fixture
def mock_drive_service():
    """Create a mock Google Drive service."""
    service = MagicMock()
    service.files.return_value.list.return_value.execute.return_value = {
        "files": [
            {"id": "file1", "name": "Test File 1", "mimeType": "application/vnd.google-apps.document"},
            {"id": "file2", "name": "Test File 2", "mimeType": "application/vnd.google-apps.folder"},
        ]
    }
    return service


@pytest.fixture
def make_http_error():
    """Factory for googleapiclient HttpError instances with a given status."""

    def _make(status: int, message: str = "API failure") -> HttpError:
        resp = MagicMock(status=status, reason=message)
        content = json.dumps({"error": {"code": status, "message": message}}).encode("utf-8")
        return HttpError(resp, content)

    return _make


@pytest.fixture
def env_override(monkeypatch):
    """Helper to override environment variables."""

    def _override(**kwargs):
        for key, value in kwargs.items():
            if value is None:
                monkeypatch.delenv(key, raising=False)
            else:
                monkeypatch.setenv(key, value)

    return _override
