"""
Barcode and QR code raster generation.

Codes are encoded to a module matrix (one cell per bar or square), scaled by
the largest integer factor that fits the target raster, centred, and written
as PNG.
"""

import io
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import qrcode
import qrcode.constants
from PIL import Image
from qrcode.exceptions import DataOverflowError
from reportlab.graphics.barcode.code128 import Code128

from ..core.config import Config
from ..core.errors import CodeGenerationError
from ..utils.logging_config import get_module_logger
from .placeholder_scanner import is_barcode, is_qrcode

KIND_BARCODE = "barcode"
KIND_QRCODE = "qrcode"

QR_ERROR_LEVELS = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}

logger = get_module_logger(__name__)


@dataclass(frozen=True)
class CodeImage:
    """A rendered code ready to be embedded."""

    kind: str
    png: bytes
    size_px: Tuple[int, int]

    @property
    def is_qrcode(self) -> bool:
        return self.kind == KIND_QRCODE


def code_kind(key: str) -> str:
    """
    Classify a placeholder name by its prefix.

    Raises:
        CodeGenerationError: If the name is neither a barcode nor a QR code
    """
    if is_qrcode(key):
        return KIND_QRCODE
    if is_barcode(key):
        return KIND_BARCODE
    raise CodeGenerationError("unsupported code as input")


def encode_qrcode(value: str, level: str = Config.QR_ERROR_CORRECTION) -> List[List[bool]]:
    """Encode a value as a QR module matrix (no quiet zone), automatic version."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=QR_ERROR_LEVELS[level],
        box_size=1,
        border=0,
    )
    try:
        qr.add_data(value)
        qr.make(fit=True)
    except (DataOverflowError, ValueError) as e:
        raise CodeGenerationError(f"cannot encode '{value}' as QR code: {e}") from e
    return qr.get_matrix()


def encode_barcode(value: str) -> List[List[bool]]:
    """Encode a value as a one-row Code128 module matrix (no quiet zone)."""
    symbol = Code128(value, quiet=0)
    symbol.validate()
    if not symbol.valid:
        raise CodeGenerationError(f"cannot encode '{value}' as Code128: unsupported characters")
    try:
        symbol.encode()
        symbol.decompose()
    except (KeyError, IndexError) as e:
        raise CodeGenerationError(f"cannot encode '{value}' as Code128: {e}") from e

    # upper-case letters are bars, lower-case letters are spaces; the letter is the width
    modules = []
    for element in symbol.decomposed:
        if element.isupper():
            modules.extend([True] * (ord(element) - ord('A') + 1))
        else:
            modules.extend([False] * (ord(element) - ord('a') + 1))
    return [modules]


def scale_matrix(matrix: Sequence[Sequence[bool]], width: int, height: int,
                 one_dimensional: bool = False) -> Image.Image:
    """
    Render a module matrix into a width x height grayscale image.

    2D codes keep square modules (same factor on both axes). 1D codes are
    scaled horizontally and stretched to the full height.

    Raises:
        CodeGenerationError: If the code does not fit the target size
    """
    rows = len(matrix)
    cols = len(matrix[0]) if rows else 0
    if rows == 0 or cols == 0:
        raise CodeGenerationError("cannot scale an empty code")

    if one_dimensional:
        factor_x = width // cols
        factor_y = None
        if factor_x <= 0:
            raise CodeGenerationError(
                f"can not scale barcode to an image smaller than {cols}x1"
            )
    else:
        factor_x = min(width // cols, height // rows)
        factor_y = factor_x
        if factor_x <= 0:
            raise CodeGenerationError(
                f"can not scale barcode to an image smaller than {cols}x{rows}"
            )

    modules = Image.new("L", (cols, rows), 255)
    for y, row in enumerate(matrix):
        for x, dark in enumerate(row):
            if dark:
                modules.putpixel((x, y), 0)

    scaled_height = height if one_dimensional else rows * factor_y
    scaled = modules.resize((cols * factor_x, scaled_height), Image.Resampling.NEAREST)

    canvas = Image.new("L", (width, height), 255)
    offset_x = (width - scaled.width) // 2
    offset_y = (height - scaled.height) // 2
    canvas.paste(scaled, (offset_x, offset_y))
    return canvas


def generate_code_image(key: str, value: str) -> CodeImage:
    """
    Render the code requested by a placeholder name.

    Args:
        key: Placeholder name, prefixed ``qrcode`` or ``barcode``
        value: Data to encode

    Returns:
        CodeImage with PNG bytes at the fixed raster size for its kind

    Raises:
        CodeGenerationError: On unsupported prefix, illegal data or overflow
    """
    kind = code_kind(key)
    if kind == KIND_QRCODE:
        width, height = Config.QRCODE_RASTER
        image = scale_matrix(encode_qrcode(value), width, height)
    else:
        width, height = Config.BARCODE_RASTER
        image = scale_matrix(encode_barcode(value), width, height, one_dimensional=True)

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    logger.debug("Generated %s for '%s' (%dx%d px)", kind, key, width, height)
    return CodeImage(kind=kind, png=buffer.getvalue(), size_px=(width, height))
