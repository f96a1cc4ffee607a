# -*- encoding: utf-8 -*-
"""
Tests for IndexManager - append-only subject and schema indexes.
"""

import threading

from keri_attest.indexes import IndexManager


class TestAppendAndQuery:

    def test_unseen_keys_return_empty(self):
        idx = IndexManager()
        assert idx.query_by_subject("BNOBODY") == []
        assert idx.query_by_schema("ENOSCHEMA") == []

    def test_query_does_not_create_entries(self):
        idx = IndexManager()
        idx.query_by_subject("BNOBODY")
        assert idx.subjects() == []

    def test_append_order_preserved(self):
        idx = IndexManager()
        for att_id in ("E1", "E2", "E3"):
            idx.append_to_subject_index("BU", att_id)
            idx.append_to_schema_index("ES", att_id)
        assert idx.query_by_subject("BU") == ["E1", "E2", "E3"]
        assert idx.query_by_schema("ES") == ["E1", "E2", "E3"]

    def test_keys_are_independent(self):
        idx = IndexManager()
        idx.append_to_subject_index("BU1", "E1")
        idx.append_to_subject_index("BU2", "E2")
        idx.append_to_schema_index("ES1", "E1")
        assert idx.query_by_subject("BU1") == ["E1"]
        assert idx.query_by_subject("BU2") == ["E2"]
        assert idx.query_by_schema("ES2") == []

    def test_query_returns_copy(self):
        idx = IndexManager()
        idx.append_to_subject_index("BU", "E1")
        result = idx.query_by_subject("BU")
        result.append("EFORGED")
        result.clear()
        assert idx.query_by_subject("BU") == ["E1"]


class TestDiscardLast:
    """Rollback helpers only undo the most recent, matching append."""

    def test_discard_matching_last(self):
        idx = IndexManager()
        idx.append_to_subject_index("BU", "E1")
        idx.append_to_subject_index("BU", "E2")
        idx.discard_last_from_subject_index("BU", "E2")
        assert idx.query_by_subject("BU") == ["E1"]

    def test_discard_non_matching_is_ignored(self):
        idx = IndexManager()
        idx.append_to_schema_index("ES", "E1")
        idx.discard_last_from_schema_index("ES", "E0")
        idx.discard_last_from_schema_index("EOTHER", "E1")
        assert idx.query_by_schema("ES") == ["E1"]

    def test_discard_only_entry_removes_key(self):
        idx = IndexManager()
        idx.append_to_subject_index("BU", "E1")
        idx.discard_last_from_subject_index("BU", "E1")
        assert idx.subjects() == []
        assert idx.query_by_subject("BU") == []


class TestStats:

    def test_stats(self):
        idx = IndexManager()
        idx.append_to_subject_index("BU1", "E1")
        idx.append_to_subject_index("BU2", "E2")
        idx.append_to_schema_index("ES", "E1")
        idx.append_to_schema_index("ES", "E2")
        assert idx.stats() == {"subjects": 2, "schemas": 1, "entries": 2}
        assert idx.stats(schema_id="ES") == {"attestations": 2}


def test_concurrent_appends_keep_every_entry():
    idx = IndexManager()

    def worker(n):
        for i in range(100):
            idx.append_to_subject_index("BU", f"E{n}-{i}")

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    entries = idx.query_by_subject("BU")
    assert len(entries) == 400
    for n in range(4):
        mine = [e for e in entries if e.startswith(f"E{n}-")]
        assert mine == [f"E{n}-{i}" for i in range(100)]
