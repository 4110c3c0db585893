"""Tests for the persisted settings document (infra/settings_store.py)."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from socket_cli.infra.settings_store import (
    API_KEY,
    ENFORCED_ORG,
    FileSettingsStore,
    MemorySettingsStore,
    decode_settings,
    encode_settings,
)


class TestEncoding:
    def test_decode_inverts_encode(self) -> None:
        document = {API_KEY: "abc", ENFORCED_ORG: ["org-1"]}
        assert decode_settings(encode_settings(document)) == document

    def test_not_plain_json_on_disk(self) -> None:
        raw = encode_settings({API_KEY: "abc"})
        assert raw != json.dumps({API_KEY: "abc"}).encode()

    def test_rejects_non_object(self) -> None:
        with pytest.raises(ValueError, match="JSON object"):
            decode_settings(encode_settings([1, 2]))  # type: ignore[arg-type]


class TestFileSettingsStore:
    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        store = FileSettingsStore(tmp_path / "socket" / "settings")
        assert store.get(API_KEY) is None

    def test_set_persists_whole_document(self, tmp_path: Path) -> None:
        path = tmp_path / "socket" / "settings"
        store = FileSettingsStore(path)
        store.set(API_KEY, "abc")
        store.set(ENFORCED_ORG, ["org-1"])

        reread = FileSettingsStore(path)
        assert reread.get(API_KEY) == "abc"
        assert reread.get(ENFORCED_ORG) == ["org-1"]
        assert decode_settings(path.read_bytes()) == {API_KEY: "abc", ENFORCED_ORG: ["org-1"]}

    def test_clearing_a_value(self, tmp_path: Path) -> None:
        path = tmp_path / "settings"
        FileSettingsStore(path).set(API_KEY, "abc")
        store = FileSettingsStore(path)
        store.set(API_KEY, None)
        assert FileSettingsStore(path).get(API_KEY) is None

    def test_corrupt_file_is_ignored(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        path = tmp_path / "settings"
        path.write_bytes(b"{not encoded}")
        store = FileSettingsStore(path)
        with caplog.at_level(logging.WARNING, logger="socket_cli.infra.settings_store"):
            assert store.get(API_KEY) is None
        assert "unreadable settings file" in caplog.text

        store.set(API_KEY, "fresh")
        assert FileSettingsStore(path).get(API_KEY) == "fresh"


def test_memory_store() -> None:
    store = MemorySettingsStore({API_KEY: "abc"})
    store.set(ENFORCED_ORG, [])
    assert store.get(API_KEY) == "abc"
    assert store.data == {API_KEY: "abc", ENFORCED_ORG: []}
