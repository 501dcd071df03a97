"""
Temporary file management for the merge pipeline.
"""

import os
import shutil
from datetime import datetime
from typing import List, Optional

from .logging_config import get_module_logger


class FileManager:
    """Creates, tracks and removes temporary files."""

    def __init__(self, keep_temp: bool = False):
        self.keep_temp = keep_temp
        self.temp_files: List[str] = []
        self.logger = get_module_logger(__name__)

    def create_temp_filename(self, original_path: str, suffix: str,
                             extension: Optional[str] = None) -> str:
        """
        Build a timestamped file name derived from an existing path.

        Args:
            original_path: Path whose base name is reused
            suffix: Marker inserted after the base name
            extension: New extension (defaults to the original one)

        Returns:
            File name such as ``document_merged_20240101_120000_123456.docx``
        """
        base, original_ext = os.path.splitext(os.path.basename(original_path))
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        return f"{base}_{suffix}_{timestamp}{extension or original_ext}"

    def generate_temp_path(self, original_path: str, suffix: str,
                           extension: Optional[str] = None,
                           directory: Optional[str] = None) -> str:
        """Create and track a temp path next to original_path (or in directory)."""
        target_dir = directory or os.path.dirname(os.path.abspath(original_path))
        temp_path = os.path.join(target_dir, self.create_temp_filename(original_path, suffix, extension))
        self.register_temp_file(temp_path)
        return temp_path

    def register_temp_file(self, path: str) -> None:
        """Track a file created by another tool so cleanup() removes it."""
        if path not in self.temp_files:
            self.temp_files.append(path)
            self.logger.debug("Tracking temp file: %s", path)

    def move_file(self, source: str, destination: str) -> None:
        """Move a file, replacing the destination if it exists."""
        os.makedirs(os.path.dirname(os.path.abspath(destination)), exist_ok=True)
        if os.path.exists(destination):
            os.remove(destination)
        shutil.move(source, destination)
        self.logger.debug("Moved %s -> %s", source, destination)

    def cleanup(self) -> None:
        """Remove tracked temp files unless keep_temp is set."""
        if self.keep_temp:
            for path in self.temp_files:
                if os.path.exists(path):
                    self.logger.info("  > Kept temp file: %s", path)
            return

        for path in self.temp_files:
            if os.path.exists(path):
                try:
                    os.remove(path)
                    self.logger.debug("Removed temp file: %s", path)
                except OSError as e:
                    self.logger.warning("Could not remove temp file %s: %s", path, e)
        self.temp_files = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cleanup()
