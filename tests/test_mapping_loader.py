"""
Unit tests for loading the JSON mapping.
"""

import os
import shutil
import tempfile
import unittest

from doc_merger.core.config import Config
from doc_merger.core.errors import MappingError
from doc_merger.document.mapping_loader import Mapping, load_mapping, normalize_key, parse_mapping


class TestMapping(unittest.TestCase):
    """Test cases for the case-insensitive Mapping."""

    def test_lookup_ignores_case_and_spaces(self):
        mapping = Mapping({"Barcode1": "123"})
        self.assertEqual(mapping["BARCODE1"], "123")
        self.assertEqual(mapping[" barcode1 "], "123")
        self.assertIn("barCode1", mapping)
        self.assertNotIn(1, mapping)

    def test_get_default(self):
        self.assertIsNone(Mapping().get("missing"))
        self.assertEqual(len(Mapping({"a": "1", "B": "2"})), 2)

    def test_is_true(self):
        mapping = Mapping({"a": "TRUE", "b": " true ", "c": "yes", "d": ""})
        self.assertTrue(mapping.is_true("a"))
        self.assertTrue(mapping.is_true("b"))
        self.assertFalse(mapping.is_true("c"))
        self.assertFalse(mapping.is_true("d"))
        self.assertFalse(mapping.is_true("missing"))

    def test_checkbox_true_value_from_config(self):
        mapping = Mapping({"accept": Config.CHECKBOX_TRUE_VALUE.upper()})
        self.assertTrue(mapping.is_true("Accept"))

    def test_normalize_key(self):
        self.assertEqual(normalize_key("  QRCode "), "qrcode")


class TestParseMapping(unittest.TestCase):
    """Test cases for validating decoded JSON."""

    def test_rejects_non_object(self):
        with self.assertRaises(MappingError):
            parse_mapping(["a", "b"])

    def test_rejects_non_string_values(self):
        with self.assertRaises(MappingError) as ctx:
            parse_mapping({"count": 3})
        self.assertIn("count", str(ctx.exception))
        with self.assertRaises(MappingError):
            parse_mapping({"nested": {"a": "b"}})


class TestLoadMapping(unittest.TestCase):
    """Test cases for reading mapping files."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def write(self, content):
        path = os.path.join(self.temp_dir, "mappings.json")
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def test_load_valid_file(self):
        path = self.write('{"Name": "Zoë", "qrcode1": "https://example.com"}')
        mapping = load_mapping(path)
        self.assertEqual(mapping["name"], "Zoë")
        self.assertEqual(mapping["QRCODE1"], "https://example.com")

    def test_invalid_json(self):
        path = self.write('{"Name": ')
        with self.assertRaises(MappingError):
            load_mapping(path)

    def test_missing_file(self):
        with self.assertRaises(OSError):
            load_mapping(os.path.join(self.temp_dir, "missing.json"))


if __name__ == '__main__':
    unittest.main()
