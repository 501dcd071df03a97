"""
Unit tests for the FileManager utility class.
"""

import os
import shutil
import tempfile
import unittest

from doc_merger.utils.file_manager import FileManager


class TestFileManager(unittest.TestCase):
    """Test cases for FileManager class."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.test_file = os.path.join(self.temp_dir, "test.txt")
        with open(self.test_file, 'w') as f:
            f.write("test content")

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_create_temp_filename(self):
        fm = FileManager()
        name = fm.create_temp_filename("/some/dir/letter.docx", "merged")
        self.assertRegex(name, r"^letter_merged_\d{8}_\d{6}_\d{6}\.docx$")

    def test_create_temp_filename_with_different_extension(self):
        name = FileManager().create_temp_filename("letter.docx", "converted", ".pdf")
        self.assertTrue(name.startswith("letter_converted_"))
        self.assertTrue(name.endswith(".pdf"))

    def test_generate_temp_path_tracks_file(self):
        fm = FileManager()
        other_dir = os.path.join(self.temp_dir, "out")
        path = fm.generate_temp_path(self.test_file, "merged", directory=other_dir)
        self.assertEqual(os.path.dirname(path), other_dir)
        self.assertEqual(fm.temp_files, [path])

        default = fm.generate_temp_path(self.test_file, "x")
        self.assertEqual(os.path.dirname(default), self.temp_dir)

    def test_register_temp_file_once(self):
        fm = FileManager()
        fm.register_temp_file(self.test_file)
        fm.register_temp_file(self.test_file)
        self.assertEqual(fm.temp_files, [self.test_file])

    def test_cleanup_removes_files(self):
        fm = FileManager(keep_temp=False)
        fm.register_temp_file(self.test_file)
        fm.register_temp_file(os.path.join(self.temp_dir, "never_created.pdf"))
        fm.cleanup()
        self.assertFalse(os.path.exists(self.test_file))
        self.assertEqual(fm.temp_files, [])

    def test_cleanup_keeps_files(self):
        fm = FileManager(keep_temp=True)
        fm.register_temp_file(self.test_file)
        fm.cleanup()
        self.assertTrue(os.path.exists(self.test_file))

    def test_context_manager_cleans_up_on_error(self):
        with self.assertRaises(RuntimeError):
            with FileManager() as fm:
                fm.register_temp_file(self.test_file)
                raise RuntimeError("boom")
        self.assertFalse(os.path.exists(self.test_file))

    def test_move_file_replaces_destination(self):
        destination = os.path.join(self.temp_dir, "sub", "dest.txt")
        os.makedirs(os.path.dirname(destination))
        with open(destination, 'w') as f:
            f.write("old")

        FileManager().move_file(self.test_file, destination)

        self.assertFalse(os.path.exists(self.test_file))
        with open(destination) as f:
            self.assertEqual(f.read(), "test content")


if __name__ == '__main__':
    unittest.main()
