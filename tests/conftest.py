"""
Shared fixtures for receipt-editor tests.

Nothing here touches the network or a printer: extraction is driven by
``FakeExtractor`` and ids come from a predictable counter so assertions can
name them.
"""
from __future__ import annotations

from datetime import timedelta, timezone
from itertools import count

import pytest

from receipt_editor.data import default_receipt
from receipt_editor.extraction import ExtractionError
from receipt_editor.models import ExtractionResult, OrderItem, ReceiptConfig, ReceiptData

# Western Indonesia Time, UTC+7
WIB = timezone(timedelta(hours=7))


class FakeExtractor:
    """Returns a canned result (or raises) and records the texts it saw."""

    def __init__(self, result: ExtractionResult | None = None, error: Exception | None = None) -> None:
        self.result = result if result is not None else ExtractionResult()
        self.error = error
        self.calls: list[str] = []

    async def extract(self, text: str) -> ExtractionResult:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.result


class FailingExtractor(FakeExtractor):
    def __init__(self, message: str = "API Key is missing") -> None:
        super().__init__(error=ExtractionError(message))


def make_item(item_id: str, qty: int, name: str, price: int) -> OrderItem:
    return OrderItem.create(qty=qty, name=name, price=price, item_id=item_id)


@pytest.fixture
def id_factory():
    """Yields ids new-1, new-2, ... in order."""
    counter = count(1)
    return lambda: f"new-{next(counter)}"


@pytest.fixture
def receipt() -> ReceiptData:
    return default_receipt()


@pytest.fixture
def empty_receipt() -> ReceiptData:
    return ReceiptData(
        config=ReceiptConfig(restaurant_name="Warung Sederhana", cashier_name="Sri", table_number="4"),
        date="2025-09-04T12:30:00.000Z",
        items=(),
        payment_amount=0,
    )
