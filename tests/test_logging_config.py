from __future__ import annotations

import logging
import os
import unittest
from unittest import mock

from src.config.logging import resolve_log_level, setup_logging


class TestLoggingConfig(unittest.TestCase):
    def test_resolve_log_level_accepts_names_aliases_and_numbers(self) -> None:
        self.assertEqual(resolve_log_level("debug"), logging.DEBUG)
        self.assertEqual(resolve_log_level("WARN"), logging.WARNING)
        self.assertEqual(resolve_log_level("15"), 15)
        self.assertEqual(resolve_log_level(logging.ERROR), logging.ERROR)
        self.assertEqual(resolve_log_level("nonsense"), logging.INFO)

    def test_resolve_log_level_skips_missing_candidates(self) -> None:
        self.assertEqual(resolve_log_level(None, "", "ERROR"), logging.ERROR)
        self.assertEqual(resolve_log_level(None, default="DEBUG"), logging.DEBUG)
        self.assertEqual(resolve_log_level(), logging.INFO)

    def test_setup_logging_prefers_explicit_level_over_environment(self) -> None:
        root = logging.getLogger()
        previous = root.level
        try:
            with mock.patch.dict(os.environ, {"AUTOCORRECT_LOG_LEVEL": "ERROR"}, clear=True):
                self.assertEqual(setup_logging("DEBUG"), logging.DEBUG)
                self.assertEqual(root.level, logging.DEBUG)
                self.assertEqual(setup_logging(), logging.ERROR)
        finally:
            root.setLevel(previous)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
