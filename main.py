#!/usr/bin/env python3
"""
Document Merger - Main CLI entry point.

Fills a DOCX template (merge fields, checkboxes, barcodes, QR codes) from a
JSON mapping and converts it to PDF.
"""

import os
import sys

# Add the package to the path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from doc_merger.cli import main


if __name__ == '__main__':
    sys.exit(main())
