"""
Tests for Firebase credential loading
"""

import base64
import json

import pytest

from app.core.config import settings
from app.services import firebase_client
from app.services.firebase_client import get_firestore_client

CREDENTIALS = {"type": "service_account", "project_id": "seat-board-test"}

@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Start every test with no credentials configured and an empty client cache"""
    monkeypatch.setattr(settings, "FIREBASE_CREDENTIALS_JSON", None)
    monkeypatch.setattr(settings, "FIREBASE_CREDENTIALS_B64", None)
    monkeypatch.setattr(settings, "FIREBASE_CREDENTIALS_FILE", None)
    get_firestore_client.cache_clear()
    yield
    get_firestore_client.cache_clear()

def test_credentials_from_json(monkeypatch):
    monkeypatch.setattr(settings, "FIREBASE_CREDENTIALS_JSON", json.dumps(CREDENTIALS))
    assert firebase_client._load_credentials_info() == CREDENTIALS

def test_credentials_from_base64(monkeypatch):
    encoded = base64.b64encode(json.dumps(CREDENTIALS).encode("utf-8")).decode("ascii")
    monkeypatch.setattr(settings, "FIREBASE_CREDENTIALS_B64", encoded)
    assert firebase_client._load_credentials_info() == CREDENTIALS

def test_credentials_from_file(monkeypatch, tmp_path):
    path = tmp_path / "credentials.json"
    path.write_text(json.dumps(CREDENTIALS), encoding="utf-8")
    monkeypatch.setattr(settings, "FIREBASE_CREDENTIALS_FILE", str(path))
    assert firebase_client._load_credentials_info() == CREDENTIALS

def test_credentials_json_takes_precedence(monkeypatch, tmp_path):
    path = tmp_path / "credentials.json"
    path.write_text(json.dumps({"project_id": "from-file"}), encoding="utf-8")
    monkeypatch.setattr(settings, "FIREBASE_CREDENTIALS_FILE", str(path))
    monkeypatch.setattr(settings, "FIREBASE_CREDENTIALS_JSON", json.dumps(CREDENTIALS))
    assert firebase_client._load_credentials_info() == CREDENTIALS

def test_missing_credentials_file(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "FIREBASE_CREDENTIALS_FILE", str(tmp_path / "missing.json"))
    assert firebase_client._load_credentials_info() is None

def test_client_disabled_without_firebase(monkeypatch):
    monkeypatch.setattr(settings, "USE_FIREBASE", False)
    assert get_firestore_client() is None

def test_client_requires_credentials(monkeypatch):
    """Test enabling Firebase without credentials fails loudly"""
    monkeypatch.setattr(settings, "USE_FIREBASE", True)
    monkeypatch.setattr(firebase_client.firebase_admin, "_apps", {})
    with pytest.raises(RuntimeError):
        get_firestore_client()
