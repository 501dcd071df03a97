"""
Replacement of barcode / QR code placeholders with inline pictures.
"""

import io

from docx.document import Document as DocumentObject
from docx.shared import Cm
from docx.text.paragraph import Paragraph
from docx.text.run import Run

from ..core.config import Config
from ..core.errors import PlaceholderError
from ..utils.logging_config import get_docx_logger
from .code_generator import CodeImage, generate_code_image
from .docx_utils import iter_paragraphs
from .mapping_loader import Mapping
from .placeholder_scanner import extract_placeholders, is_barcode, is_qrcode


def replace_with_image(run: Run, png: bytes, width_cm: float, height_cm: float):
    """
    Replace the content of a run with an inline picture.

    The run's text and character formatting are removed before the picture
    is added.

    Returns:
        The python-docx InlineShape that was created
    """
    run.clear()
    run._r._remove_rPr()
    return run.add_picture(io.BytesIO(png), width=Cm(width_cm), height=Cm(height_cm))


def embed_code(run: Run, code: CodeImage, append: bool = False):
    """
    Embed a generated code in a run at its fixed physical size.

    With ``append`` the picture is added after the run's current content
    instead of replacing it.
    """
    width_cm, height_cm = Config.code_size_cm(code.is_qrcode)
    if append:
        return run.add_picture(io.BytesIO(code.png), width=Cm(width_cm), height=Cm(height_cm))
    return replace_with_image(run, code.png, width_cm, height_cm)


class ImageEmbedder:
    """Fills ``{barcode…}`` and ``{qrcode…}`` placeholders in a document."""

    def __init__(self, open_tag: str = Config.PLACEHOLDER_OPEN,
                 close_tag: str = Config.PLACEHOLDER_CLOSE):
        self.open_tag = open_tag
        self.close_tag = close_tag
        self.logger = get_docx_logger()

    def fill_paragraph(self, paragraph: Paragraph, mapping: Mapping) -> int:
        """
        Replace code placeholders of one paragraph.

        The first run of a placeholder receives the picture; the other runs
        are cleared. Placeholders whose value is missing or empty are left
        as they are.

        Returns:
            Number of placeholders replaced

        Raises:
            PlaceholderError: If a placeholder with a value is not a code
            CodeGenerationError: If the value cannot be encoded
        """
        placeholders = extract_placeholders(paragraph.runs, self.open_tag, self.close_tag)
        replaced = 0
        # runs that already hold a picture from an earlier placeholder
        holders = set()

        for name, runs in placeholders.items():
            value = mapping.get(name)
            if not value:
                continue

            if not (is_barcode(name) or is_qrcode(name)):
                raise PlaceholderError(f"invalid placeholder detected: [{name}]")

            code = generate_code_image(name, value)
            embed_code(runs[0], code, append=runs[0]._r in holders)
            holders.add(runs[0]._r)
            for run in runs[1:]:
                if run._r not in holders:
                    run.clear()

            self.logger.info("   • Replaced {%s} with %s (%d run(s))", name, code.kind, len(runs))
            replaced += 1

        return replaced

    def fill_codes(self, document: DocumentObject, mapping: Mapping) -> int:
        """
        Replace code placeholders in footers, headers, body and tables.

        Returns:
            Total number of placeholders replaced
        """
        total = 0
        for paragraph in iter_paragraphs(document):
            total += self.fill_paragraph(paragraph, mapping)
        self.logger.info("   ✅ Embedded %d code image(s)", total)
        return total
