"""
Document merger core orchestration module.

This module contains the DocumentMerger class that runs the whole merge:
open the template, fill fields and codes, persist a copy, convert it to PDF
and write the final file.
"""

import io
import os
from typing import Optional

from docx import Document

from .config import Config
from .errors import ConfigurationError, ConversionError, MergeError
from .licensing import MergeContext
from ..document.field_filler import FieldFiller
from ..document.image_embedder import ImageEmbedder
from ..document.libreoffice_converter import LibreOfficeConverter
from ..document.mapping_loader import Mapping, load_mapping
from ..document.word_converter import WordConverter
from ..utils.file_manager import FileManager
from ..utils.logging_config import get_merger_logger
from ..utils.validators import Validators

TOTAL_STAGES = 8


class DocumentMerger:
    """Main orchestrator class for a single merge run."""

    def __init__(self, context: MergeContext, document_path: str = Config.DEFAULT_DOCUMENT,
                 mappings_path: str = Config.DEFAULT_MAPPINGS,
                 output_path: str = Config.DEFAULT_OUTPUT, keep_temp: bool = False,
                 word_converter: Optional[WordConverter] = None,
                 libreoffice_converter: Optional[LibreOfficeConverter] = None):
        """
        Initialize the merger.

        Args:
            context: Activated merge context
            document_path: Template DOCX file
            mappings_path: JSON mapping file
            output_path: Final PDF file
            keep_temp: Keep the intermediate DOCX/PDF for debugging
        """
        self.context = context
        self.document_path = os.path.abspath(document_path)
        self.mappings_path = os.path.abspath(mappings_path)
        self.output_path = os.path.abspath(output_path)
        self.keep_temp = keep_temp
        self.logger = get_merger_logger()

        # Components
        self.file_manager = FileManager(keep_temp)
        self.validators = Validators()
        self.field_filler = FieldFiller()
        self.image_embedder = ImageEmbedder()
        self.word_converter = word_converter or WordConverter()
        self.libreoffice_converter = libreoffice_converter or LibreOfficeConverter()

        # Process state
        self.document = None
        self.mapping: Optional[Mapping] = None
        self.codes_embedded = 0
        self.error: Optional[BaseException] = None

        # File paths
        self.temp_docx_path = None
        self.temp_pdf_path = None

    def run(self) -> bool:
        """
        Run every stage in order. The first failure stops the merge.

        Returns:
            True on success; on failure the exception is kept in ``self.error``
        """
        self.logger.info("Merging '%s' (%s mode, licensed to %s)", os.path.basename(self.document_path),
                         self.context.mode, self.context.licensee)
        try:
            with self.file_manager:
                self._open()
                self._fill_fields()
                self._fill_placeholders()
                copy = self._copy()
                self._save_temp(copy)
                self._reopen_temp()
                self._convert_to_pdf()
                self._write_final_pdf()
            self.logger.info("=== Merge Successful ===")
            return True
        except (MergeError, OSError) as e:
            self.error = e
            self.logger.error("  > ❌ %s", e)
            self.logger.debug("Merge failed", exc_info=True)
            return False
        except Exception as e:
            self.error = e
            self.logger.error("❌ A critical error occurred: %s", e, exc_info=True)
            return False
        finally:
            self.word_converter.disconnect()

    def _stage(self, number: int, name: str) -> None:
        self.logger.info("[Stage %d/%d: %s]", number, TOTAL_STAGES, name)

    def _open(self) -> None:
        """[Stage 1: Open] Validate inputs, open the template and load the mapping."""
        self._stage(1, "Open")

        docx_result = self.validators.validate_docx_path(self.document_path)
        if not docx_result['valid']:
            raise ConfigurationError(docx_result['error_message'])
        json_result = self.validators.validate_json_path(self.mappings_path)
        if not json_result['valid']:
            raise ConfigurationError(json_result['error_message'])
        output_result = self.validators.validate_output_path(self.output_path)
        if not output_result['valid']:
            raise ConfigurationError(output_result['error_message'])
        if output_result['file_exists']:
            self.logger.warning("  > ⚠️ Output file exists and will be overwritten.")

        self.document = Document(self.document_path)
        self.logger.info("  > Opened %s (%.1f MB)", self.document_path, docx_result['file_size_mb'])
        self.mapping = load_mapping(self.mappings_path)
        self.logger.info("  > Loaded %d mapping(s) from %s", len(self.mapping), self.mappings_path)

    def _fill_fields(self) -> None:
        """[Stage 2: Mail merge] Merge fields and set checkboxes."""
        self._stage(2, "Mail Merge")
        self.field_filler.fill(self.document, self.mapping)

    def _fill_placeholders(self) -> None:
        """[Stage 3: Placeholders] Replace barcode and QR code placeholders."""
        self._stage(3, "Barcode/QR Placeholders")
        self.codes_embedded = self.image_embedder.fill_codes(self.document, self.mapping)

    def _copy(self):
        """[Stage 4: Copy] Serialize and reload the document so added images are persisted."""
        self._stage(4, "Copy")
        buffer = io.BytesIO()
        self.document.save(buffer)
        buffer.seek(0)
        return Document(buffer)

    def _save_temp(self, document) -> None:
        """[Stage 5: Save] Write the merged document to a temp DOCX."""
        self._stage(5, "Save Temp DOCX")
        self.temp_docx_path = self.file_manager.generate_temp_path(
            self.document_path, Config.TEMP_DOCX_SUFFIX,
            directory=os.path.dirname(self.output_path)
        )
        document.save(self.temp_docx_path)
        self.logger.debug("  > Temp DOCX: %s", self.temp_docx_path)

    def _reopen_temp(self) -> None:
        """[Stage 6: Reopen] Check the temp DOCX can be read back."""
        self._stage(6, "Reopen Temp DOCX")
        self.document = Document(self.temp_docx_path)
        self.logger.debug("  > Reopened %s (%d paragraphs)", self.temp_docx_path, len(self.document.paragraphs))

    def _convert_to_pdf(self) -> None:
        """[Stage 7: Convert] Convert the temp DOCX to a temp PDF."""
        self._stage(7, "PDF Conversion")
        self.temp_pdf_path = self.file_manager.generate_temp_path(
            self.temp_docx_path, "converted", extension=".pdf"
        )
        # LibreOffice writes <docx stem>.pdf before it is renamed
        self.file_manager.register_temp_file(os.path.splitext(self.temp_docx_path)[0] + ".pdf")

        engine = self.context.render_engine
        use_libreoffice = engine == "libreoffice"

        if engine in ("auto", "word"):
            if self.word_converter.is_available():
                self.logger.info("  > Attempting conversion with MS Word...")
                if self.word_converter.convert_to_pdf(self.temp_docx_path, self.temp_pdf_path):
                    return
                if engine == "word":
                    raise ConversionError("MS Word conversion failed")
                self.logger.warning("  > MS Word conversion failed. Falling back to LibreOffice.")
            elif engine == "word":
                raise ConversionError("MS Word is not available on this system")
            use_libreoffice = True

        if use_libreoffice:
            if not self.libreoffice_converter.is_available():
                raise ConversionError("Neither MS Word nor LibreOffice is available for PDF conversion")
            self.logger.info("  > Attempting conversion with LibreOffice...")
            if not self.libreoffice_converter.convert_to_pdf(self.temp_docx_path, self.temp_pdf_path):
                raise ConversionError("LibreOffice conversion failed")

    def _write_final_pdf(self) -> None:
        """[Stage 8: Write] Validate the converted PDF and move it into place."""
        self._stage(8, "Write PDF")
        pdf_result = self.validators.validate_pdf_output(self.temp_pdf_path)
        if not pdf_result['valid']:
            raise ConversionError(pdf_result['error_message'])
        self.file_manager.move_file(self.temp_pdf_path, self.output_path)
        self.logger.info("  > Final PDF is ready: %s (%d page(s))", self.output_path, pdf_result['page_count'])
