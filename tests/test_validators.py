"""
Unit tests for the Validators utility class.
"""

import os
import shutil
import tempfile
import unittest

from doc_merger.utils.validators import Validators

from tests.docx_fixtures import write_pdf


class TestValidators(unittest.TestCase):
    """Test cases for Validators class."""

    def setUp(self):
        self.validators = Validators()
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def create_temp_file(self, filename, content="test content"):
        filepath = os.path.join(self.temp_dir, filename)
        with open(filepath, 'w') as f:
            f.write(content)
        return filepath

    def test_docx_path_valid(self):
        path = self.create_temp_file("letter.DOCX")
        result = self.validators.validate_docx_path(path)
        self.assertTrue(result['valid'])
        self.assertEqual(result['resolved_path'], os.path.abspath(path))

    def test_docx_path_missing(self):
        result = self.validators.validate_docx_path(os.path.join(self.temp_dir, "missing.docx"))
        self.assertFalse(result['valid'])
        self.assertIn("not found", result["error_message"])

    def test_docx_path_wrong_extension(self):
        result = self.validators.validate_docx_path(self.create_temp_file("letter.txt"))
        self.assertFalse(result['valid'])
        self.assertIn(".docx", result["error_message"])

    def test_docx_path_directory(self):
        os.makedirs(os.path.join(self.temp_dir, "folder.docx"))
        result = self.validators.validate_docx_path(os.path.join(self.temp_dir, "folder.docx"))
        self.assertFalse(result['valid'])

    def test_json_path(self):
        self.assertTrue(self.validators.validate_json_path(self.create_temp_file("m.json", "{}"))['valid'])
        self.assertFalse(self.validators.validate_json_path(self.create_temp_file("m.yaml"))['valid'])

    def test_output_path_requires_pdf(self):
        result = self.validators.validate_output_path(os.path.join(self.temp_dir, "out.docx"))
        self.assertFalse(result['valid'])

    def test_output_path_creates_directory(self):
        path = os.path.join(self.temp_dir, "new", "out.pdf")
        result = self.validators.validate_output_path(path)
        self.assertTrue(result['valid'])
        self.assertTrue(os.path.isdir(os.path.dirname(path)))
        self.assertFalse(result['file_exists'])

    def test_output_path_existing_file(self):
        result = self.validators.validate_output_path(self.create_temp_file("out.pdf"))
        self.assertTrue(result['valid'])
        self.assertTrue(result['file_exists'])

    def test_output_path_is_directory(self):
        os.makedirs(os.path.join(self.temp_dir, "out.pdf"))
        result = self.validators.validate_output_path(os.path.join(self.temp_dir, "out.pdf"))
        self.assertFalse(result['valid'])

    def test_pdf_output_valid(self):
        path = write_pdf(os.path.join(self.temp_dir, "ok.pdf"), pages=2)
        result = self.validators.validate_pdf_output(path)
        self.assertTrue(result['valid'])
        self.assertEqual(result['page_count'], 2)

    def test_pdf_output_invalid(self):
        result = self.validators.validate_pdf_output(self.create_temp_file("bad.pdf", "not a pdf"))
        self.assertFalse(result['valid'])
        self.assertIsNotNone(result['error_message'])

    def test_pdf_output_missing(self):
        result = self.validators.validate_pdf_output(os.path.join(self.temp_dir, "none.pdf"))
        self.assertFalse(result['valid'])


if __name__ == '__main__':
    unittest.main()
