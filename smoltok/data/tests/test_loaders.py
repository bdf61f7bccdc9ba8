"""Unit tests for loaders.py."""

import json
from pathlib import Path
import tempfile
import unittest

from smoltok.data.loaders import load_json_file, load_text_file, write_json_file, write_text_file


class TestLoaders(unittest.TestCase):
    """Unit tests for the text and JSON file helpers."""

    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.base_dir = Path(self.temp_dir.name)

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def test_text_round_trip(self) -> None:
        file_path = Path(self.base_dir, "merges.txt")
        text = "#version: 0.2\nĠ t\n안 녕\n"
        write_text_file(file_path, text)
        self.assertEqual(load_text_file(file_path), text)

    def test_json_round_trip(self) -> None:
        file_path = Path(self.base_dir, "vocab.json")
        data = {"Ġworld": 1, "안녕": 2}
        write_json_file(file_path, data)
        self.assertEqual(load_json_file(file_path), data)

    def test_json_keeps_unicode_readable(self) -> None:
        file_path = Path(self.base_dir, "vocab.json")
        write_json_file(file_path, {"Ġ": 0})
        self.assertIn("Ġ", load_text_file(file_path))

    def test_invalid_json(self) -> None:
        file_path = Path(self.base_dir, "bad.json")
        write_text_file(file_path, "{")
        with self.assertRaises(json.JSONDecodeError):
            load_json_file(file_path)

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_text_file(Path(self.base_dir, "missing.txt"))
