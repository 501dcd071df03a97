"""
Validation of merge inputs, the output location and converted PDFs.

Every check returns a plain dict with at least ``valid`` and
``error_message`` so the pipeline can decide how to report a failure.
"""

import os
from typing import Dict, List

import fitz  # PyMuPDF

from ..core.config import Config


def _new_result(**fields) -> Dict[str, any]:
    result = {'valid': False, 'resolved_path': None, 'error_message': None}
    result.update(fields)
    return result


def _has_extension(path: str, extensions: List[str]) -> bool:
    return os.path.splitext(path)[1].lower() in extensions


class Validators:
    """Utility class for validating files and paths."""

    @staticmethod
    def _validate_input_path(path: str, extensions: List[str], label: str) -> Dict[str, any]:
        result = _new_result(file_size_mb=0.0)
        resolved_path = os.path.abspath(path)

        if not os.path.isfile(resolved_path):
            reason = "is not a file" if os.path.exists(resolved_path) else "not found"
            result['error_message'] = f"{label} {reason}: {resolved_path}"
            return result
        if not _has_extension(resolved_path, extensions):
            result['error_message'] = (f"{label} must be one of {', '.join(extensions)}: "
                                       f"{resolved_path}")
            return result

        result['file_size_mb'] = os.path.getsize(resolved_path) / (1024 * 1024)
        result['valid'] = True
        result['resolved_path'] = resolved_path
        return result

    @staticmethod
    def validate_docx_path(docx_path: str) -> Dict[str, any]:
        """
        Validate the template document path.

        Args:
            docx_path: Path to the DOCX template

        Returns:
            Dict with 'valid', 'resolved_path', 'file_size_mb', 'error_message'
        """
        return Validators._validate_input_path(docx_path, Config.SUPPORTED_DOCX_EXTENSIONS, "Template")

    @staticmethod
    def validate_json_path(json_path: str) -> Dict[str, any]:
        """Validate the mapping file path (same result keys as validate_docx_path)."""
        return Validators._validate_input_path(json_path, Config.SUPPORTED_JSON_EXTENSIONS, "Mapping file")

    @staticmethod
    def validate_output_path(output_path: str) -> Dict[str, any]:
        """
        Check that the final PDF can be written, creating its directory if needed.

        Returns:
            Dict with 'valid', 'resolved_path', 'error_message' and
            'file_exists' (an existing file will be replaced)
        """
        result = _new_result(file_exists=False)
        resolved_path = os.path.abspath(output_path)
        directory = os.path.dirname(resolved_path)

        if not _has_extension(resolved_path, Config.SUPPORTED_PDF_EXTENSIONS):
            result['error_message'] = f"Output must be a .pdf file: {resolved_path}"
            return result

        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as e:
            result['error_message'] = f"Cannot create output directory {directory}: {e}"
            return result

        if os.path.isdir(resolved_path):
            result['error_message'] = f"Output path is a directory: {resolved_path}"
            return result
        if not os.access(directory, os.W_OK):
            result['error_message'] = f"Output directory is not writable: {directory}"
            return result

        result['file_exists'] = os.path.exists(resolved_path)
        result['valid'] = True
        result['resolved_path'] = resolved_path
        return result

    @staticmethod
    def validate_pdf_output(pdf_path: str) -> Dict[str, any]:
        """
        Check that a converted PDF opens with PyMuPDF and has pages.

        Returns:
            Dict with 'valid', 'page_count' and 'error_message'
        """
        result = _new_result(page_count=0)

        if not os.path.isfile(pdf_path):
            result['error_message'] = f"Converter produced no PDF at {pdf_path}"
            return result

        try:
            with fitz.open(pdf_path) as pdf_doc:
                result['page_count'] = pdf_doc.page_count
        except (fitz.FileDataError, RuntimeError) as e:
            result['error_message'] = f"Converted file is not a readable PDF: {e}"
            return result

        if result['page_count'] == 0:
            result['error_message'] = f"Converted PDF has no pages: {pdf_path}"
            return result

        result['valid'] = True
        result['resolved_path'] = os.path.abspath(pdf_path)
        return result
