from __future__ import annotations

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from src.config.defaults import DEFAULT_LANGUAGE, DEFAULT_SERVICE_URL, default_settings_path
from src.lib.settings import JsonSettingsStore, Settings, SettingsManager


class TestSettingsModel(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = Settings()
        self.assertTrue(settings.use_remote_correction)
        self.assertEqual(settings.remote_service_url, DEFAULT_SERVICE_URL)
        self.assertEqual(settings.language, DEFAULT_LANGUAGE)

    def test_from_mapping_merges_partial_record(self) -> None:
        settings = Settings.from_mapping({"language": "de-DE", "legacyField": 1})
        self.assertEqual(settings.language, "de-DE")
        self.assertTrue(settings.use_remote_correction)
        self.assertEqual(Settings.from_mapping(None), Settings())


class TestJsonSettingsStore(unittest.TestCase):
    def test_missing_file_loads_empty_record(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            store = JsonSettingsStore(Path(tmpdir) / "missing.json")
            self.assertEqual(store.load(), {})

    def test_invalid_json_loads_empty_record(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "settings.json"
            path.write_text("{not json", encoding="utf-8")

            with self.assertLogs("src.lib.settings.storage", level="WARNING"):
                self.assertEqual(JsonSettingsStore(path).load(), {})

    def test_save_creates_parent_directories(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "dir" / "settings.json"
            store = JsonSettingsStore(path)

            store.save(Settings(language="fr-FR"))

            saved = json.loads(path.read_text(encoding="utf-8"))
            self.assertEqual(saved["language"], "fr-FR")
            self.assertEqual(Settings.from_mapping(store.load()), Settings(language="fr-FR"))

    def test_default_path_respects_environment(self) -> None:
        with mock.patch.dict(os.environ, {"AUTOCORRECT_SETTINGS_PATH": "/tmp/ac/settings.json"}):
            self.assertEqual(default_settings_path(), Path("/tmp/ac/settings.json"))
            self.assertEqual(JsonSettingsStore().path, Path("/tmp/ac/settings.json"))


class TestSettingsManager(unittest.TestCase):
    def test_update_persists_each_change(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            store = JsonSettingsStore(Path(tmpdir) / "settings.json")
            manager = SettingsManager.load(store)

            updated = manager.update(language="en-GB")
            manager.update(use_remote_correction="false")

            self.assertEqual(updated.language, "en-GB")
            reloaded = SettingsManager.load(store).settings
            self.assertEqual(reloaded.language, "en-GB")
            self.assertFalse(reloaded.use_remote_correction)
            self.assertEqual(manager.settings, reloaded)

    def test_update_rejects_unknown_key(self) -> None:
        store = mock.Mock()
        manager = SettingsManager(store)

        with self.assertRaises(ValueError):
            manager.update(colour="blue")
        store.save.assert_not_called()

    def test_update_rejects_invalid_value_and_keeps_previous(self) -> None:
        store = mock.Mock()
        manager = SettingsManager(store, Settings(timeout_seconds=5.0))

        with self.assertRaises(ValueError):
            manager.update(timeout_seconds=-1)

        self.assertEqual(manager.settings.timeout_seconds, 5.0)
        store.save.assert_not_called()


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
