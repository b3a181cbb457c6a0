"""Default receipt built from the static configuration."""

from __future__ import annotations

from dataclasses import replace

from receipt_editor.constant import (
    DEFAULT_CONFIG,
    DEFAULT_DATE,
    DEFAULT_ITEMS,
    DEFAULT_PAYMENT_AMOUNT,
    RESET_CONFIG,
)
from receipt_editor.models import OrderItem, ReceiptConfig, ReceiptData


def default_receipt() -> ReceiptData:
    """Return the receipt shown when the editor starts."""
    items = tuple(
        OrderItem.create(
            qty=int(raw["qty"]),  # type: ignore[arg-type]
            name=str(raw["name"]),
            price=raw["price"],  # type: ignore[arg-type]
            item_id=str(raw["id"]),
        )
        for raw in DEFAULT_ITEMS
    )
    return ReceiptData(
        config=ReceiptConfig(**DEFAULT_CONFIG),  # type: ignore[arg-type]
        date=DEFAULT_DATE,
        items=items,
        payment_amount=DEFAULT_PAYMENT_AMOUNT,
    )


def reset_config(config: ReceiptConfig) -> ReceiptConfig:
    """Apply the placeholder header; fields outside RESET_CONFIG are kept."""
    return replace(config, **RESET_CONFIG)  # type: ignore[arg-type]
