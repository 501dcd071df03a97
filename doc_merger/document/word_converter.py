"""
PDF export of merged documents through Microsoft Word (Windows only).
"""

import os
import sys

from ..core.config import Config
from ..utils.logging_config import get_logger

try:
    import win32com.client  # type: ignore
except ImportError:
    win32com = None


class WordConverter:
    """Exports DOCX files to PDF with a private, hidden Word instance."""

    def __init__(self):
        self.word_app = None
        self.is_connected = False
        self.logger = get_logger()

    @staticmethod
    def is_available() -> bool:
        """Word automation needs Windows and pywin32."""
        return sys.platform.startswith("win") and win32com is not None

    def connect(self) -> bool:
        """
        Start a dedicated Word instance.

        DispatchEx is used so that a Word window the user already has open is
        never reused or closed by disconnect().

        Returns:
            True if Word was started
        """
        if not self.is_available():
            self.logger.debug("Word automation is not available on this platform")
            return False

        try:
            self.word_app = win32com.client.DispatchEx("Word.Application")
            self.word_app.Visible = False
            self.word_app.DisplayAlerts = 0  # wdAlertsNone
        except Exception as e:
            self.logger.error("Could not start MS Word: %s", e, exc_info=True)
            self.word_app = None
            self.is_connected = False
            return False

        self.is_connected = True
        self.logger.debug("Started hidden Word instance")
        return True

    def convert_to_pdf(self, docx_path: str, pdf_path: str) -> bool:
        """
        Export a merged DOCX to PDF.

        Returns:
            True if Word wrote the PDF, False on any automation error
        """
        if not self.is_connected and not self.connect():
            return False

        docx_path = os.path.abspath(docx_path)
        pdf_path = os.path.abspath(pdf_path)
        self.logger.debug("Word export %s -> %s", docx_path, pdf_path)

        doc = None
        try:
            os.makedirs(os.path.dirname(pdf_path), exist_ok=True)
            doc = self.word_app.Documents.Open(docx_path, ReadOnly=True, AddToRecentFiles=False)
            doc.ExportAsFixedFormat(
                OutputFileName=pdf_path,
                ExportFormat=Config.WORD_EXPORT_FORMAT,
                OpenAfterExport=False,
                OptimizeFor=0,  # wdExportOptimizeForPrint
            )
        except Exception as e:
            self.logger.error("  > ❌ MS Word could not export '%s': %s",
                              os.path.basename(docx_path), e, exc_info=True)
            return False
        finally:
            if doc is not None:
                try:
                    doc.Close(False)
                except Exception as e:
                    self.logger.warning("Could not close '%s' in Word: %s", os.path.basename(docx_path), e)

        self.logger.info("  > Converted '%s' to PDF with MS Word", os.path.basename(docx_path))
        return True

    def disconnect(self) -> None:
        """Quit the Word instance started by connect()."""
        if self.word_app is None:
            return
        try:
            self.word_app.Quit()
            self.logger.debug("Word instance closed")
        except Exception as e:
            self.logger.warning("Error quitting Word: %s", e)
        finally:
            self.word_app = None
            self.is_connected = False

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
