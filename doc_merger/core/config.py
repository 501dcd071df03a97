"""
Configuration constants for the document merger.
"""

import os
import shutil


class Config:
    """Central configuration for file names, code sizes and render settings."""

    __version__ = "1.0.0"

    # Default file names (relative to the working directory)
    DEFAULT_DOCUMENT = "document.docx"
    DEFAULT_MAPPINGS = "mappings.json"
    DEFAULT_OUTPUT = "output.pdf"

    # Environment variables for credentials
    ENV_LICENSE_KEY = "LICENSE_KEY"
    ENV_CUSTOMER_NAME = "CUSTOMER_NAME"
    ENV_API_KEY = "API_KEY"

    # Placeholder delimiters and recognised prefixes
    PLACEHOLDER_OPEN = '{'
    PLACEHOLDER_CLOSE = '}'
    BARCODE_PREFIX = "barcode"
    QRCODE_PREFIX = "qrcode"

    # Physical size of embedded codes, in centimeters
    # {barcode}: 3.88 x 0.74 cm
    BARCODE_WIDTH_CM = 3.88
    BARCODE_HEIGHT_CM = 0.74
    # {qrcode}: 1.4 x 1.4 cm
    QRCODE_SIZE_CM = 1.4

    # Raster size of generated codes, in pixels; the picture is stretched to the physical size
    BARCODE_RASTER = (300, 50)
    QRCODE_RASTER = (100, 100)

    # qrcode.constants.ERROR_CORRECT_M
    QR_ERROR_CORRECTION = "M"

    # Checkbox values
    CHECKBOX_TRUE_VALUE = "true"
    CHECKBOX_CHECKED_GLYPH = "☒"
    CHECKBOX_UNCHECKED_GLYPH = "☐"

    # Rendering
    DOCX_RENDER_ENGINE = os.environ.get("DOCX_RENDER_ENGINE", "auto")
    RENDER_ENGINES = ("auto", "word", "libreoffice")
    LIBREOFFICE_EXECUTABLE = os.environ.get(
        "LIBREOFFICE_PATH",
        shutil.which("soffice") or shutil.which("libreoffice") or "soffice"
    )
    LIBREOFFICE_TIMEOUT = 300
    WORD_EXPORT_FORMAT = 17  # wdExportFormatPDF

    # File types
    SUPPORTED_DOCX_EXTENSIONS = ['.docx']
    SUPPORTED_JSON_EXTENSIONS = ['.json']
    SUPPORTED_PDF_EXTENSIONS = ['.pdf']

    # Temp file naming
    TEMP_DOCX_SUFFIX = "merged"

    @classmethod
    def code_size_cm(cls, is_qrcode: bool):
        """Return the (width, height) in centimeters for an embedded code."""
        if is_qrcode:
            return cls.QRCODE_SIZE_CM, cls.QRCODE_SIZE_CM
        return cls.BARCODE_WIDTH_CM, cls.BARCODE_HEIGHT_CM
