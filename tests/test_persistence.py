"""Tests for the named-blob stores and the load/save helpers."""

import json
import logging

import pytest

from calculators.brackets import INFINITY, TaxBracket
from calculators.persistence import (
    JsonFileStore,
    MemoryStore,
    commit_state,
    load_state,
    load_table,
    load_tables,
    save_state,
    save_table,
    save_tables,
)

DEFAULTS = {"income": "", "filing_status": "single", "standard_deduction": True}
TABLE = (TaxBracket(0, 1000, 0.1), TaxBracket(1000, INFINITY, 0.2))


def test_missing_blob_gives_defaults():
    state = load_state(MemoryStore(), "llcInputs", DEFAULTS)
    assert state == DEFAULTS
    assert state is not DEFAULTS


def test_stored_fields_merge_over_defaults():
    store = MemoryStore({"llcInputs": json.dumps({"income": "90000", "extra": 1})})
    assert load_state(store, "llcInputs", DEFAULTS) == {
        "income": "90000",
        "filing_status": "single",
        "standard_deduction": True,
        "extra": 1,
    }


def test_merge_is_shallow():
    store = MemoryStore({"k": json.dumps({"nested": {"a": 1}})})
    state = load_state(store, "k", {"nested": {"a": 0, "b": 0}})
    assert state["nested"] == {"a": 1}


@pytest.mark.parametrize("text", ["{not json", "[1, 2]", "42", "null"])
def test_malformed_blob_falls_back(text, caplog):
    store = MemoryStore({"llcInputs": text})
    with caplog.at_level(logging.WARNING, logger="tax_dashboard"):
        assert load_state(store, "llcInputs", DEFAULTS) == DEFAULTS


def test_commit_only_writes_changes():
    store = MemoryStore()
    assert commit_state(store, "k", DEFAULTS, dict(DEFAULTS)) is False
    assert store.load("k") is None
    assert commit_state(store, "k", DEFAULTS, {**DEFAULTS, "income": "5"}) is True
    assert load_state(store, "k", DEFAULTS)["income"] == "5"


def test_table_round_trip_keeps_infinity():
    store = MemoryStore()
    save_table(store, "oregonBrackets", TABLE)
    assert json.loads(store.load("oregonBrackets"))[-1]["max"] is None
    assert load_table(store, "oregonBrackets", ()) == TABLE


def test_bad_table_blob_keeps_default():
    store = MemoryStore({"oregonBrackets": json.dumps([{"min": 0}])})
    assert load_table(store, "oregonBrackets", TABLE) is TABLE


def test_tables_merge_per_status():
    store = MemoryStore()
    save_tables(store, "federalBrackets", {"single": TABLE})
    defaults = {"single": (), "marriedJoint": TABLE}
    tables = load_tables(store, "federalBrackets", defaults)
    assert tables == {"single": TABLE, "marriedJoint": TABLE}

    store.save("federalBrackets", json.dumps({"single": "oops"}))
    assert load_tables(store, "federalBrackets", defaults) == defaults


def test_file_store_round_trip(tmp_path):
    store = JsonFileStore(tmp_path / "blobs")
    assert store.load("llcInputs") is None
    save_state(store, "llcInputs", {"income": "1"})
    assert (tmp_path / "blobs" / "llcInputs.json").exists()
    assert load_state(JsonFileStore(tmp_path / "blobs"), "llcInputs", DEFAULTS)["income"] == "1"


def test_file_store_rejects_path_keys(tmp_path):
    with pytest.raises(ValueError):
        JsonFileStore(tmp_path).save("../escape", "{}")


def test_file_store_undecodable_blob_falls_back(tmp_path, caplog):
    (tmp_path / "llcInputs.json").write_bytes(b"\xff\xfe")
    (tmp_path / "oregonBrackets.json").write_bytes(b"\xff\xfe")
    store = JsonFileStore(tmp_path)
    with caplog.at_level(logging.WARNING, logger="tax_dashboard"):
        assert load_state(store, "llcInputs", DEFAULTS) == DEFAULTS
        assert load_table(store, "oregonBrackets", TABLE) is TABLE
    assert "llcInputs" in caplog.text
