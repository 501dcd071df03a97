"""
Command-line interface for the document merger.
"""

import argparse
import os
import sys
from typing import List, Optional

from .core.config import Config
from .core.errors import ConfigurationError
from .core.licensing import Credentials, activate
from .core.merger import DocumentMerger
from .utils.logging_config import get_logger, setup_logging


class MergeArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> MergeArgumentParser:
    parser = MergeArgumentParser(
        prog="doc-merger",
        description='Fill a DOCX template from a JSON mapping and convert it to PDF',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  %(prog)s --key $API_KEY
  %(prog)s --license $LICENSE_KEY --name "ACME Corp" --document letter.docx --output letter.pdf

Credentials (flag or environment variable):
  --key      / {Config.ENV_API_KEY}         metered API key
  --license  / {Config.ENV_LICENSE_KEY}     license key (requires --name)
  --name     / {Config.ENV_CUSTOMER_NAME}   customer name

Placeholders:
  MERGEFIELD fields      - replaced with the mapped text
  Checkbox form fields   - checked when the mapped value is "true"
  {{barcodeXXX}}           - Code128 barcode, 3.88 x 0.74 cm
  {{qrcodeXXX}}            - QR code (level M), 1.4 x 1.4 cm
        """)

    parser.add_argument('--license', dest='license_key', help='License key')
    parser.add_argument('--name', dest='customer_name', help='Customer name for the license key')
    parser.add_argument('--key', dest='api_key', help='Metered API key')
    parser.add_argument('--document', default=Config.DEFAULT_DOCUMENT,
                        help=f'Template DOCX file (default: {Config.DEFAULT_DOCUMENT})')
    parser.add_argument('--mappings', default=Config.DEFAULT_MAPPINGS,
                        help=f'JSON mapping file (default: {Config.DEFAULT_MAPPINGS})')
    parser.add_argument('--output', default=Config.DEFAULT_OUTPUT,
                        help=f'Output PDF file (default: {Config.DEFAULT_OUTPUT})')
    parser.add_argument('--engine', choices=Config.RENDER_ENGINES, default=Config.DOCX_RENDER_ENGINE,
                        help='DOCX to PDF engine (default: %(default)s)')
    parser.add_argument('--keep-temp', action='store_true', help='Keep temporary files for debugging')
    parser.add_argument('--verbose', '-v', '--debug', action='store_true', help='Enable verbose logging (DEBUG level)')
    parser.add_argument('--log-file', help='Log to file in addition to console')
    parser.add_argument('--version', action='version', version=f'%(prog)s {Config.__version__}')
    return parser


def main(argv: Optional[List[str]] = None, environ=None) -> int:
    """Main CLI entry point. Returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    environ = os.environ if environ is None else environ

    setup_logging(log_file=args.log_file, verbose=args.verbose)
    logger = get_logger()

    credentials = Credentials.from_sources(
        license_key=args.license_key,
        customer_name=args.customer_name,
        api_key=args.api_key,
        environ=environ,
    )
    try:
        context = activate(credentials, render_engine=args.engine)
    except ConfigurationError as e:
        logger.error("❌ %s", e)
        return 1
    logger.debug("Activated: %r", credentials)

    merger = DocumentMerger(
        context,
        document_path=args.document,
        mappings_path=args.mappings,
        output_path=args.output,
        keep_temp=args.keep_temp,
    )

    try:
        success = merger.run()
    except KeyboardInterrupt:
        logger.warning("⚠️ Merge interrupted by user.")
        return 1

    if not success:
        logger.error("❌ Merge failed!")
        return 1

    logger.info("📄 Output: %s", merger.output_path)
    return 0


if __name__ == '__main__':
    sys.exit(main())
