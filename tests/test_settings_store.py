"""
Test: Stored API key and mode selection.
"""
import os
import json
import stat
import pytest
from autofeedback.config import config, set_mode
from autofeedback.settings_store import (
    API_KEY_SETTING, MemoryStore, SettingsStore,
    clear_api_key, get_api_key, looks_like_openai_key, set_api_key,
)

VALID_KEY = "sk-test-0123456789abcdef"


class TestSettingsStore:
    def test_round_trip_survives_new_instance(self, tmp_path):
        path = str(tmp_path / "settings.json")
        SettingsStore(path).set("openai_api_key", VALID_KEY)
        assert SettingsStore(path).get("openai_api_key") == VALID_KEY

    def test_missing_file(self, tmp_path):
        assert SettingsStore(str(tmp_path / "none.json")).get("x") is None

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json")
        assert SettingsStore(str(path)).get("x", "default") == "default"

    def test_keeps_other_keys(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"theme": "dark"}))
        SettingsStore(str(path)).set("openai_api_key", VALID_KEY)
        assert json.loads(path.read_text())["theme"] == "dark"

    def test_delete(self, tmp_path):
        store = SettingsStore(str(tmp_path / "settings.json"))
        store.set("k", "v")
        store.delete("k")
        assert store.get("k") is None

    def test_owner_only_permissions(self, tmp_path):
        path = tmp_path / "settings.json"
        SettingsStore(str(path)).set("openai_api_key", VALID_KEY)
        assert stat.S_IMODE(os.stat(path).st_mode) == 0o600

    def test_permissions_tightened_on_existing_file(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{}")
        os.chmod(path, 0o644)
        SettingsStore(str(path)).set("openai_api_key", VALID_KEY)
        assert stat.S_IMODE(os.stat(path).st_mode) == 0o600

    def test_default_path_from_config(self):
        assert SettingsStore().path == config.settings_file


class TestApiKey:
    def test_set_and_get(self, memory_store):
        set_api_key(VALID_KEY, store=memory_store)
        assert get_api_key(store=memory_store) == VALID_KEY

    def test_strips_whitespace(self, memory_store):
        set_api_key(f"  {VALID_KEY}\n", store=memory_store)
        assert memory_store.get(API_KEY_SETTING) == VALID_KEY

    def test_blank_rejected(self, memory_store):
        with pytest.raises(ValueError):
            set_api_key("   ", store=memory_store)

    def test_non_ascii_rejected(self, memory_store):
        with pytest.raises(ValueError):
            set_api_key("sk-abc…defghijklmnopqrstuv", store=memory_store)
        assert get_api_key(store=memory_store) == ""

    def test_odd_format_still_saved(self, memory_store, caplog):
        set_api_key("not-an-openai-key", store=memory_store)
        assert get_api_key(store=memory_store) == "not-an-openai-key"
        assert "doesn't look right" in caplog.text

    def test_env_fallback(self, monkeypatch, memory_store):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env-0000000000")
        assert get_api_key(store=memory_store) == "sk-from-env-0000000000"

    def test_missing_key_is_empty(self, memory_store):
        assert get_api_key(store=memory_store) == ""

    def test_clear(self, memory_store):
        set_api_key(VALID_KEY, store=memory_store)
        clear_api_key(store=memory_store)
        assert get_api_key(store=memory_store) == ""

    def test_default_store_is_file_backed(self):
        set_api_key(VALID_KEY)
        assert SettingsStore().get(API_KEY_SETTING) == VALID_KEY
        assert get_api_key() == VALID_KEY

    def test_custom_store_with_only_get_and_set(self):
        class DictStore:
            def __init__(self):
                self.data = {}

            def get(self, key, default=None):
                return self.data.get(key, default)

            def set(self, key, value):
                self.data[key] = value

        store = DictStore()
        set_api_key(VALID_KEY, store=store)
        clear_api_key(store=store)
        assert get_api_key(store=store) == ""


class TestLooksLikeOpenAIKey:
    def test_valid(self):
        assert looks_like_openai_key(VALID_KEY)

    def test_wrong_prefix(self):
        assert not looks_like_openai_key("pk-0123456789abcdefghij")

    def test_too_short(self):
        assert not looks_like_openai_key("sk-short")


class TestSetMode:
    def test_last_writer_wins(self):
        set_mode(True)
        set_mode(False)
        assert config.use_free_model is False
        set_mode(True)
        assert config.use_free_model is True


class TestMemoryStore:
    def test_initial(self):
        assert MemoryStore({"a": "b"}).get("a") == "b"
