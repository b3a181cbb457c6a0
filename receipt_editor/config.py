"""Runtime configuration defaults for printing, export and extraction."""

from __future__ import annotations

import os

EXPORT_DIR = os.environ.get("RECEIPT_EXPORT_DIR", "exports")
DEBUG_LOG_PATH = os.environ.get("RECEIPT_DEBUG_LOG", "/tmp/receipt-editor-debug.log")

# Indonesian grouping: 4400000 -> 4.400.000
CURRENCY_GROUP_SEPARATOR = os.environ.get("RECEIPT_CURRENCY_SEPARATOR", ".")

ANTHROPIC_API_KEY_ENV = "ANTHROPIC_API_KEY"
EXTRACTION_MODEL = os.environ.get("RECEIPT_EXTRACTION_MODEL", "claude-sonnet-4-5")
EXTRACTION_MAX_TOKENS = 2048

# 80mm thermal paper, 203 dpi head.
PRINTER_USB_VENDOR_ID = 0x28E9
PRINTER_USB_PRODUCT_ID = 0x0289
PRINTER_WIDTH_PX = 576
PRINTER_FONT_SIZE = 22
PRINTER_FONT_PATH = "/System/Library/Fonts/Menlo.ttc"
PRINTER_MARGIN_PX = 12

RECEIPT_WIDTH_CHARS = 40
PDF_PAGE_WIDTH_MM = 80
PDF_RASTER_SCALE = 2
