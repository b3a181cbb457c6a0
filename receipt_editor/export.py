"""PDF export of the rendered receipt."""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, timezone
from pathlib import Path

from receipt_editor.config import EXPORT_DIR, PDF_PAGE_WIDTH_MM, PDF_RASTER_SCALE
from receipt_editor.printer import render_receipt_image
from receipt_editor.rendering import ReceiptLayout

logger = logging.getLogger(__name__)

_MM_PER_INCH = 25.4
_UNSAFE_NAME_RE = re.compile(r"[^a-z0-9]", re.IGNORECASE)


class ExportError(RuntimeError):
    """Raised when the receipt could not be written as a PDF."""


def pdf_page_size(width_px: int, height_px: int, page_width_mm: float = PDF_PAGE_WIDTH_MM) -> tuple[float, float]:
    """Page size in mm: fixed width, height following the capture's aspect ratio."""
    if width_px <= 0 or height_px <= 0:
        raise ValueError("capture must have a positive size")
    return (page_width_mm, height_px / width_px * page_width_mm)


def export_filename(restaurant_name: str, today: date | None = None) -> str:
    """``Receipt-<name>-<YYYY-MM-DD>.pdf`` with unsafe characters replaced."""
    if today is None:
        today = datetime.now(timezone.utc).date()
    safe_name = _UNSAFE_NAME_RE.sub("_", restaurant_name)
    return f"Receipt-{safe_name}-{today.isoformat()}.pdf"


def export_pdf(
    layout: ReceiptLayout,
    restaurant_name: str,
    directory: str | Path = EXPORT_DIR,
    font: object | None = None,
    today: date | None = None,
) -> Path:
    """Rasterize the receipt and save it as a single-page PDF."""
    target = Path(directory) / export_filename(restaurant_name, today)
    try:
        image = render_receipt_image(layout, font=font, scale=PDF_RASTER_SCALE)
        page_width_mm, _ = pdf_page_size(image.width, image.height)
        # Pillow derives the page size from the resolution: pick the dpi that
        # maps the capture width onto the page width.
        resolution = image.width / (page_width_mm / _MM_PER_INCH)
        target.parent.mkdir(parents=True, exist_ok=True)
        image.convert("RGB").save(target, "PDF", resolution=resolution)
    except (OSError, RuntimeError, ValueError) as exc:
        logger.exception("pdf_export_failed target=%s", target)
        raise ExportError(f"PDF generation failed: {exc}") from exc

    logger.info("pdf_exported target=%s", target)
    return target
