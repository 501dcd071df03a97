"""
Exception types raised while merging a document.
"""


class MergeError(Exception):
    """Base class for all merge failures."""


class ConfigurationError(MergeError):
    """Missing or inconsistent command-line / environment configuration."""


class LicenseError(ConfigurationError):
    """Credentials are missing or form an invalid combination."""


class MappingError(MergeError):
    """The mapping file is not a flat JSON object of strings."""


class PlaceholderError(MergeError):
    """A placeholder with a value uses an unrecognised prefix."""


class CodeGenerationError(MergeError):
    """A barcode or QR code could not be encoded or scaled."""


class ConversionError(MergeError):
    """DOCX to PDF conversion failed or produced an unusable file."""
