import json
from unittest.mock import MagicMock

import pytest

import firebase_util


def stub_store(monkeypatch, value):
    root = MagicMock()
    node = root.child.return_value.child.return_value.child.return_value
    node.get.return_value = value
    monkeypatch.setattr(firebase_util, "get_db_ref", lambda: root)
    return root


def test_fetch_reads_namespaced_key(monkeypatch, config_blob):
    root = stub_store(monkeypatch, config_blob)
    assert firebase_util.fetch_metafield_value("volume_discount", "rules") == config_blob
    root.child.assert_called_once_with("metafields")
    root.child.return_value.child.assert_called_once_with("volume_discount")
    root.child.return_value.child.return_value.child.assert_called_once_with("rules")


def test_fetch_missing_value(monkeypatch):
    stub_store(monkeypatch, None)
    assert firebase_util.fetch_metafield_value() is None


def test_fetch_serializes_native_json(monkeypatch):
    stored = {"products": ["P1"], "minQty": 2, "percentOff": 10}
    stub_store(monkeypatch, stored)
    assert json.loads(firebase_util.fetch_metafield_value()) == stored


def test_fetch_store_error_is_absent(monkeypatch, caplog):
    def broken():
        raise RuntimeError("Firebase initialization failed: no credentials")

    monkeypatch.setattr(firebase_util, "get_db_ref", broken)
    assert firebase_util.fetch_metafield_value() is None
    assert "Error reading metafield" in caplog.text


def test_get_db_ref_wraps_init_failure(monkeypatch):
    def bad_cert(path):
        raise ValueError(f"cannot read {path}")

    monkeypatch.setattr(firebase_util.firebase_admin, "_apps", {})
    monkeypatch.setattr(firebase_util.credentials, "Certificate", bad_cert)
    with pytest.raises(RuntimeError, match="Firebase initialization failed"):
        firebase_util.get_db_ref()
