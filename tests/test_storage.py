"""Tests for design persistence."""

import logging

import pytest

from event_canvas.design.document import DesignDocument
from event_canvas.design.elements import CertificateDesign, CredentialDesign
from event_canvas.storage.design_store import DesignStore, JsonFileStore, MemoryStore, design_key


class TestKeyValueBackends:
    def test_memory_round_trip(self):
        store = MemoryStore()
        store.set("a", {"x": 1})
        assert store.get("a") == {"x": 1}
        assert store.delete("a") is True
        assert store.get("a") is None
        assert store.delete("a") is False

    def test_memory_returns_copies(self):
        store = MemoryStore()
        store.set("a", {"x": [1]})
        store.get("a")["x"].append(2)
        assert store.get("a") == {"x": [1]}

    def test_json_file_round_trip(self, tmp_path):
        store = JsonFileStore(tmp_path / "designs")
        store.set("design_credential_u1", {"nombre": "María"})
        assert (tmp_path / "designs" / "design_credential_u1.json").exists()
        assert store.get("design_credential_u1") == {"nombre": "María"}
        assert store.delete("design_credential_u1") is True
        assert store.get("design_credential_u1") is None

    @pytest.mark.parametrize("key", ["../escape", "a/b", ".hidden", ""])
    def test_json_file_rejects_unsafe_keys(self, tmp_path, key):
        with pytest.raises(ValueError):
            JsonFileStore(tmp_path).get(key)


class TestDesignStore:
    def test_missing_design_is_default(self, memory_store):
        design = memory_store.load("credential", "event-1")
        assert isinstance(design, CredentialDesign)
        assert not memory_store.exists("credential", "event-1")

    def test_save_and_load(self, memory_store, certificate_design):
        document = DesignDocument(certificate_design)
        document.apply_patch("title", x=40, content="CONSTANCIA")
        memory_store.save("event-1", document.design)

        loaded = memory_store.load("certificate", "event-1")
        assert isinstance(loaded, CertificateDesign)
        assert loaded.get_element("title").content == "CONSTANCIA"
        assert loaded.get_element("title").x == 40
        assert loaded.signer_name == "Dra. Ana López"
        assert [e.id for e in loaded.elements] == [e.id for e in certificate_design.elements]

    def test_kinds_are_separate(self, memory_store, certificate_design):
        memory_store.save("event-1", certificate_design)
        assert memory_store.exists("certificate", "event-1")
        assert not memory_store.exists("credential", "event-1")

    def test_last_write_wins(self, memory_store, credential_design):
        memory_store.save("event-1", credential_design)
        memory_store.save("event-1", credential_design.model_copy(update={"show_qr": False}))
        assert memory_store.load("credential", "event-1").show_qr is False

    def test_reset(self, memory_store, credential_design):
        memory_store.save("event-1", credential_design.model_copy(update={"show_photo": False}))
        design = memory_store.reset("credential", "event-1")
        assert design.show_photo is True
        assert not memory_store.exists("credential", "event-1")

    def test_invalid_stored_design_falls_back(self, caplog):
        backend = MemoryStore()
        backend.set(design_key("credential", "event-1"), {"kind": "credential", "elements": [{"id": "x"}]})
        with caplog.at_level(logging.WARNING):
            design = DesignStore(backend).load("credential", "event-1")
        assert isinstance(design, CredentialDesign)
        assert "invalid" in caplog.text

    def test_corrupt_file_falls_back(self, tmp_path, caplog):
        (tmp_path / "design_certificate_event-1.json").write_text("{not json", encoding="utf-8")
        store = DesignStore(JsonFileStore(tmp_path))
        with caplog.at_level(logging.WARNING):
            design = store.load("certificate", "event-1")
        assert isinstance(design, CertificateDesign)
        assert caplog.records

    def test_file_backed_round_trip(self, tmp_path, credential_design):
        store = DesignStore(JsonFileStore(tmp_path))
        store.save("event-1", credential_design)
        assert DesignStore(JsonFileStore(tmp_path)).load("credential", "event-1") == credential_design
