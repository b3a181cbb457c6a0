"""Receipt preview layout and its fixed-width text rendering."""

from __future__ import annotations

import textwrap
from dataclasses import dataclass

from rich.text import Text

from receipt_editor.config import RECEIPT_WIDTH_CHARS
from receipt_editor.constant import (
    COLUMN_HEADERS,
    LABEL_CASHIER,
    LABEL_CHANGE,
    LABEL_DATE,
    LABEL_PAYMENT,
    LABEL_PHONE,
    LABEL_TABLE,
    LABEL_TOTAL,
    MIN_ROWS,
)
from receipt_editor.formatting import format_currency, format_display_date
from receipt_editor.models import Amount, ReceiptData

_QTY_WIDTH = 4
_PRICE_WIDTH = 9
_TOTAL_WIDTH = 10
_BOLD = "bold"


@dataclass(frozen=True)
class ReceiptRow:
    """One printed item row. Padding rows carry no values."""

    qty: str = ""
    name: str = ""
    price: str = ""
    total: str = ""
    is_padding: bool = False


@dataclass(frozen=True)
class ReceiptLayout:
    """Everything the preview shows, already formatted."""

    title: str
    header_lines: tuple[str, ...]
    date_line: str
    table_line: str | None
    cashier_line: str | None
    rows: tuple[ReceiptRow, ...]
    total: Amount
    payment: Amount
    change: Amount
    footer_lines: tuple[str, ...]

    @property
    def padding_count(self) -> int:
        return sum(1 for row in self.rows if row.is_padding)


def build_layout(data: ReceiptData, min_rows: int = MIN_ROWS) -> ReceiptLayout:
    """Pure mapping from receipt data to its preview layout."""
    config = data.config
    total = data.total_amount
    change = max(0, data.payment_amount - total)

    rows = [
        ReceiptRow(
            qty=str(item.qty),
            name=item.name,
            price=format_currency(item.price),
            total=format_currency(item.total),
        )
        for item in data.items
    ]
    rows.extend(ReceiptRow(is_padding=True) for _ in range(max(0, min_rows - len(rows))))

    return ReceiptLayout(
        title=config.restaurant_name.upper(),
        header_lines=(config.address_line1, config.address_line2, f"{LABEL_PHONE}{config.phone}"),
        date_line=f"{LABEL_DATE}{format_display_date(data.date)}",
        table_line=f"{LABEL_TABLE}{config.table_number}" if config.table_number_visible else None,
        cashier_line=f"{LABEL_CASHIER}{config.cashier_name}" if config.cashier_name_visible else None,
        rows=tuple(rows),
        total=total,
        payment=data.payment_amount,
        change=change,
        footer_lines=(config.footer1, config.footer2),
    )


def _split_line(left: str, right: str, width: int) -> str:
    gap = max(1, width - len(left) - len(right))
    return f"{left}{' ' * gap}{right}"


def _row_lines(row: ReceiptRow, width: int) -> list[str]:
    if row.is_padding:
        return [""]
    name_width = max(1, width - _QTY_WIDTH - _PRICE_WIDTH - _TOTAL_WIDTH - 3)
    name_parts = textwrap.wrap(row.name, name_width, break_long_words=True) or [""]
    first = (
        f"{row.qty:<{_QTY_WIDTH}} {name_parts[0]:<{name_width}} "
        f"{row.price:>{_PRICE_WIDTH}} {row.total:>{_TOTAL_WIDTH}}"
    )
    rest = [f"{'':<{_QTY_WIDTH}} {part}" for part in name_parts[1:]]
    return [first, *rest]


def render_styled_lines(layout: ReceiptLayout, width: int = RECEIPT_WIDTH_CHARS) -> list[tuple[str, str]]:
    """Fixed-width receipt lines paired with a style name ("" or "bold")."""
    divider = ("-" * width, "")
    lines: list[tuple[str, str]] = [(layout.title.center(width).rstrip(), _BOLD)]
    lines.extend((line.center(width).rstrip(), "") for line in layout.header_lines)
    lines.append(("", ""))

    if layout.table_line is None:
        lines.append((layout.date_line, ""))
    elif len(layout.date_line) + len(layout.table_line) + 1 <= width:
        lines.append((_split_line(layout.date_line, layout.table_line, width), ""))
    else:
        lines.append((layout.date_line, ""))
        lines.append((layout.table_line, ""))
    if layout.cashier_line is not None:
        lines.append((layout.cashier_line, ""))

    lines.append(divider)
    name_width = max(1, width - _QTY_WIDTH - _PRICE_WIDTH - _TOTAL_WIDTH - 3)
    qty_label, menu_label, price_label, total_label = COLUMN_HEADERS
    lines.append(
        (
            f"{qty_label:<{_QTY_WIDTH}} {menu_label:<{name_width}} "
            f"{price_label:>{_PRICE_WIDTH}} {total_label:>{_TOTAL_WIDTH}}",
            _BOLD,
        )
    )
    lines.append(divider)

    for row in layout.rows:
        lines.extend((line.rstrip(), "") for line in _row_lines(row, width))

    lines.append(divider)
    for label, amount in (
        (LABEL_TOTAL, layout.total),
        (LABEL_PAYMENT, layout.payment),
        (LABEL_CHANGE, layout.change),
    ):
        lines.append((_split_line(label, format_currency(amount), width), _BOLD))
    lines.append(divider)

    lines.extend((line.center(width).rstrip(), "") for line in layout.footer_lines)
    lines.append(divider)
    return lines


def render_lines(layout: ReceiptLayout, width: int = RECEIPT_WIDTH_CHARS) -> list[str]:
    """Plain fixed-width receipt text, one string per line."""
    return [line for line, _ in render_styled_lines(layout, width)]


def render_preview(layout: ReceiptLayout, width: int = RECEIPT_WIDTH_CHARS) -> Text:
    """Render the receipt for the terminal preview pane."""
    text = Text()
    for idx, (line, style) in enumerate(render_styled_lines(layout, width)):
        if idx > 0:
            text.append("\n")
        text.append(line.ljust(width), style=style or None)
    return text
