"""Tests for LocalStore persistence."""

from __future__ import annotations

import json
import logging
import sqlite3
from unittest.mock import patch

import pytest

from resume_builder.errors import StorageParseError
from resume_builder.models.customization import CustomizationBundle, CustomizationOptions
from resume_builder.models.resume import DEFAULT_DECLARATION, ResumeData
from resume_builder.storage.local_store import (
    CUSTOMIZATION_KEY,
    RESUME_DATA_KEY,
    LocalStore,
    decode_payload,
)


class TestRoundTrip:
    def test_resume_data(self, store, sample_doc):
        assert store.save_resume_data(sample_doc) is True
        assert store.load_resume_data() == sample_doc

    def test_customization(self, store):
        bundle = CustomizationBundle(options=CustomizationOptions(layout="sidebar", spacing="compact"))
        assert store.save_customization(bundle) is True
        assert store.load_customization() == bundle

    def test_survives_reopen(self, tmp_path, sample_doc):
        LocalStore(tmp_path / "s.db").save_resume_data(sample_doc)
        assert LocalStore(tmp_path / "s.db").load_resume_data() == sample_doc

    def test_keys_are_independent(self, store, sample_doc):
        store.save_resume_data(sample_doc)
        assert store.load_customization() == CustomizationBundle()
        store.save_raw(CUSTOMIZATION_KEY, "{broken")
        assert store.load_resume_data() == sample_doc


class TestDegradedLoads:
    def test_missing_blob_gives_defaults(self, store):
        assert store.load_resume_data() == ResumeData()
        assert store.load_customization() == CustomizationBundle()

    def test_corrupt_json_gives_defaults(self, store, caplog):
        store.save_raw(RESUME_DATA_KEY, "{not json")
        with caplog.at_level(logging.WARNING):
            assert store.load_resume_data() == ResumeData()
        assert "not valid JSON" in caplog.text

    def test_missing_declaration_key(self, store, sample_doc):
        raw = sample_doc.model_dump()
        del raw["declaration"]
        store.save_raw(RESUME_DATA_KEY, json.dumps(raw))
        doc = store.load_resume_data()
        assert doc.declaration.enabled is False
        assert doc.declaration.text == DEFAULT_DECLARATION
        assert doc.experience == sample_doc.experience

    def test_old_schema_version_still_loads(self, store, sample_doc):
        store.save_raw(RESUME_DATA_KEY, sample_doc.model_dump_json(), version=0)
        assert store.load_resume_data().personal_info.full_name == "Ada Lovelace"

    def test_decode_payload_raises(self):
        with pytest.raises(StorageParseError):
            decode_payload(RESUME_DATA_KEY, "[")


class TestSaveFailures:
    def test_failed_save_returns_false(self, store, sample_doc, caplog):
        with patch.object(LocalStore, "_connect", side_effect=sqlite3.OperationalError("disk I/O error")):
            assert store.save_resume_data(sample_doc) is False
        assert "Failed to persist resume_data" in caplog.text

    def test_failed_read_gives_defaults(self, store):
        with patch.object(LocalStore, "_connect", side_effect=sqlite3.OperationalError("locked")):
            assert store.load_resume_data() == ResumeData()


def test_clear(store, sample_doc):
    store.save_resume_data(sample_doc)
    store.save_customization(CustomizationBundle())
    assert store.clear() == 2
    assert store.load_resume_data() == ResumeData()
