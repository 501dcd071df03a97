"""
Document Merger - mail-merge values into DOCX templates and export them as PDF.

Merge fields receive text, checkbox form fields receive checked states, and
``{barcode…}`` / ``{qrcode…}`` placeholders are replaced by Code128 and QR
images before the document is converted to PDF.
"""

__version__ = "1.0.0"
__author__ = "Document Merger Team"

from .core.config import Config
from .core.licensing import Credentials, MergeContext, activate
from .core.merger import DocumentMerger

__all__ = ['Config', 'Credentials', 'MergeContext', 'activate', 'DocumentMerger']
