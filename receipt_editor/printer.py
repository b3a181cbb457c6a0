"""Thermal printer integration and receipt rasterization."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from receipt_editor.config import (
    PRINTER_FONT_PATH,
    PRINTER_FONT_SIZE,
    PRINTER_MARGIN_PX,
    PRINTER_USB_PRODUCT_ID,
    PRINTER_USB_VENDOR_ID,
    PRINTER_WIDTH_PX,
    RECEIPT_WIDTH_CHARS,
)
from receipt_editor.rendering import ReceiptLayout, render_styled_lines

logger = logging.getLogger(__name__)

_FONT_OVERRIDE_ENV = "RECEIPT_PRINTER_FONT_PATH"
_LINUX_FONT_FALLBACKS = (
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/liberation/LiberationMono-Regular.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
    "/usr/share/fonts/noto/NotoSansMono-Regular.ttf",
)
# Extra vertical space between receipt lines.
_LINE_SPACING_PX = 4


def receipt_font_candidates() -> list[str]:
    """Font files to try, in order: env override, configured path, Linux fallbacks."""
    ordered = [os.environ.get(_FONT_OVERRIDE_ENV, "").strip(), PRINTER_FONT_PATH, *_LINUX_FONT_FALLBACKS]
    return list(dict.fromkeys(path for path in ordered if path))


def load_receipt_font(size: int = PRINTER_FONT_SIZE) -> object:
    """
    Load the first candidate Pillow can open as a TrueType/OpenType font.

    Missing files are skipped. Files Pillow cannot read as a font are logged
    and skipped.
    """
    from PIL import ImageFont

    candidates = receipt_font_candidates()
    for path in candidates:
        if not Path(path).is_file():
            continue
        try:
            return ImageFont.truetype(path, size)
        except OSError as exc:
            logger.warning("receipt_font_unreadable path=%s error=%r", path, exc)
    raise RuntimeError(
        f"No usable monospace font. Set {_FONT_OVERRIDE_ENV} to a .ttf/.otf file. Tried: {', '.join(candidates)}"
    )


def check_printer_dependencies() -> tuple[bool, str]:
    """Check whether printer dependencies are importable."""
    try:
        from escpos.printer import Usb  # noqa: F401

        load_receipt_font()
    except Exception as exc:
        return (False, f"Printer deps unavailable: {exc}")
    return (True, "Printer ready")


def render_receipt_image(
    layout: ReceiptLayout,
    font: object | None = None,
    scale: int = 1,
    width_chars: int = RECEIPT_WIDTH_CHARS,
) -> object:
    """Draw the receipt text onto a white grayscale image."""
    from PIL import Image, ImageDraw

    if font is None:
        font = load_receipt_font(PRINTER_FONT_SIZE * scale)

    lines = render_styled_lines(layout, width_chars)
    margin = PRINTER_MARGIN_PX * scale
    width = PRINTER_WIDTH_PX * scale

    probe = Image.new("L", (1, 1), color=255)
    bbox = ImageDraw.Draw(probe).textbbox((0, 0), "Ag", font=font)
    line_height = (bbox[3] - bbox[1]) + _LINE_SPACING_PX * scale
    # Offset by bbox top so ascenders are not clipped.
    top_offset = bbox[1]

    height = margin * 2 + line_height * len(lines)
    img = Image.new("L", (width, height), color=255)
    draw = ImageDraw.Draw(img)

    y = margin
    for line, style in lines:
        if line:
            stroke = scale if style == "bold" else 0
            draw.text((margin, y - top_offset), line, font=font, fill=0, stroke_width=stroke, stroke_fill=0)
        y += line_height
    return img


def print_receipt(layout: ReceiptLayout) -> None:
    """Print the receipt on the USB thermal printer and cut the paper."""
    try:
        from escpos.printer import Usb
    except Exception as exc:
        raise RuntimeError(f"Printer dependencies unavailable: {exc}") from exc

    img = render_receipt_image(layout)
    printer = Usb(PRINTER_USB_VENDOR_ID, PRINTER_USB_PRODUCT_ID)
    printer.image(img.convert("1"))
    printer.cut()
    logger.info("receipt_printed rows=%d", len(layout.rows))
