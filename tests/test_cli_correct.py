from __future__ import annotations

import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock

from src.cmd import cli
from src.lib.languagetool import CorrectionMatch


class _StaticChecker:
    def __init__(self, matches: list[dict]) -> None:
        self.matches = [CorrectionMatch.model_validate(item) for item in matches]
        self.calls: list[tuple[str, str | None]] = []

    def check(self, text: str, *, language: str | None = None) -> list[CorrectionMatch]:
        self.calls.append((text, language))
        return self.matches


class CLICorrectionTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.root = Path(self._tmpdir.name)
        self.settings_path = self.root / "settings.json"

    def tearDown(self) -> None:
        self._tmpdir.cleanup()

    def _write(self, name: str, text: str) -> Path:
        path = self.root / name
        path.write_text(text, encoding="utf-8")
        return path

    def test_parse_args_defaults_to_document_command(self) -> None:
        args = cli.parse_args(["note.md", "--no-remote"])
        self.assertEqual(args.command, "document")
        self.assertEqual(args.path, "note.md")
        self.assertTrue(args.no_remote)

    def test_document_command_applies_quick_fixes(self) -> None:
        note = self._write("note.md", "i recieve it .")
        args = cli.parse_args(["document", str(note), "--no-remote", "--settings", str(self.settings_path)])

        result = cli.run_cli(args)

        self.assertEqual(result.text, "I receive it.")
        self.assertFalse(result.written)
        self.assertEqual(note.read_text(encoding="utf-8"), "i recieve it .")

    def test_document_command_in_place(self) -> None:
        note = self._write("note.md", "teh  end")
        cli.main(["document", str(note), "--no-remote", "--in-place", "--settings", str(self.settings_path)])
        self.assertEqual(note.read_text(encoding="utf-8"), "the end")

    def test_document_command_uses_remote_with_overrides(self) -> None:
        note = self._write("note.md", "Helo world")
        checker = _StaticChecker([{"offset": 0, "length": 4, "replacements": [{"value": "Hello"}]}])
        args = cli.parse_args(
            [
                "document",
                str(note),
                "--language",
                "en-GB",
                "--service-url",
                "http://localhost:8081/v2/check",
                "--settings",
                str(self.settings_path),
            ]
        )

        with mock.patch("src.lib.corrector.pipeline.build_client", return_value=checker) as mock_build:
            result = cli.run_cli(args)

        self.assertEqual(result.text, "Hello world")
        settings = mock_build.call_args.args[0]
        self.assertEqual(settings.remote_service_url, "http://localhost:8081/v2/check")
        self.assertEqual(checker.calls, [("Helo world", "en-GB")])
        self.assertFalse(self.settings_path.exists())

    def test_selection_command_replaces_range(self) -> None:
        note = self._write("note.md", "keep teh  rest")
        args = cli.parse_args(
            ["selection", str(note), "--start", "5", "--end", "10", "--no-remote", "--settings", str(self.settings_path)]
        )

        result = cli.run_cli(args)

        self.assertEqual(result.text, "keep the rest")

    def test_selection_command_rejects_range_past_end(self) -> None:
        note = self._write("note.md", "short")
        args = cli.parse_args(
            ["selection", str(note), "--start", "0", "--end", "50", "--no-remote", "--settings", str(self.settings_path)]
        )
        with self.assertRaises(ValueError):
            cli.run_cli(args)

    def test_in_place_with_stdin_is_rejected(self) -> None:
        with self.assertRaises(SystemExit):
            cli.main(["document", "-", "--in-place", "--settings", str(self.settings_path)])

    def test_main_prints_corrected_text(self) -> None:
        note = self._write("note.md", "Hello ,world")
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            cli.main(["document", str(note), "--no-remote", "--settings", str(self.settings_path)])
        self.assertEqual(stdout.getvalue(), "Hello, world")

    def test_settings_set_and_show(self) -> None:
        cli.main(["settings", "set", "language", "de-DE", "--settings", str(self.settings_path)])

        stdout = io.StringIO()
        with redirect_stdout(stdout):
            cli.main(["settings", "show", "--settings", str(self.settings_path)])

        shown = json.loads(stdout.getvalue())
        self.assertEqual(shown["language"], "de-DE")
        self.assertTrue(shown["use_remote_correction"])

    def test_settings_set_unknown_key_fails(self) -> None:
        stderr = io.StringIO()
        with redirect_stderr(stderr), self.assertRaises(SystemExit):
            cli.main(["settings", "set", "colour", "blue", "--settings", str(self.settings_path)])
        self.assertFalse(self.settings_path.exists())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
