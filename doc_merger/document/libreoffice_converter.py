"""
LibreOffice automation for DOCX to PDF conversion.
"""

import os
import shutil
import subprocess

from ..core.config import Config
from ..utils.logging_config import get_logger


class LibreOfficeConverter:
    """Handles DOCX to PDF conversion using headless LibreOffice."""

    def __init__(self, executable: str = None):
        self.executable = executable or Config.LIBREOFFICE_EXECUTABLE
        self.logger = get_logger()

    def is_available(self) -> bool:
        """True if the soffice executable can be found."""
        return bool(self.executable) and (
            os.path.isfile(self.executable) or shutil.which(self.executable) is not None
        )

    def convert_to_pdf(self, docx_path: str, pdf_path: str) -> bool:
        """
        Convert DOCX to PDF using headless LibreOffice.

        LibreOffice names its output after the input file; the result is
        moved to pdf_path afterwards.
        """
        output_dir = os.path.dirname(os.path.abspath(pdf_path))
        os.makedirs(output_dir, exist_ok=True)
        cmd = [
            self.executable,
            '--headless',
            '--convert-to', 'pdf',
            '--outdir', output_dir,
            os.path.abspath(docx_path)
        ]
        self.logger.debug("Running: %s", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE,
                timeout=Config.LIBREOFFICE_TIMEOUT
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            self.logger.error("  > ❌ Error running LibreOffice: %s", e)
            return False

        if result.returncode != 0:
            self.logger.error("  > ❌ LibreOffice conversion failed: %s",
                              result.stderr.decode(errors="replace").strip())
            return False

        expected_pdf = os.path.join(output_dir, os.path.splitext(os.path.basename(docx_path))[0] + '.pdf')
        if not os.path.exists(expected_pdf):
            self.logger.error("  > ❌ LibreOffice did not produce %s", expected_pdf)
            return False
        if os.path.abspath(expected_pdf) != os.path.abspath(pdf_path):
            os.replace(expected_pdf, pdf_path)

        self.logger.info("  > Converted '%s' to PDF with LibreOffice", os.path.basename(docx_path))
        return True
