"""Domain models for receipt-editor."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Union

Amount = Union[int, float]

CONFIG_FIELDS: tuple[str, ...] = (
    "restaurant_name",
    "address_line1",
    "address_line2",
    "phone",
    "footer1",
    "footer2",
    "cashier_name",
    "table_number",
    "show_table_number",
    "show_cashier_name",
    "tax_percentage",
    "service_percentage",
)


@dataclass(frozen=True)
class OrderItem:
    """One receipt line. ``total`` always equals ``qty * price``."""

    id: str
    qty: int
    name: str
    price: Amount
    total: Amount

    @classmethod
    def create(cls, qty: int, name: str, price: Amount, item_id: str) -> OrderItem:
        return cls(id=item_id, qty=qty, name=name, price=price, total=qty * price)


@dataclass(frozen=True)
class ReceiptConfig:
    """Header, footer and display toggles of a receipt."""

    restaurant_name: str = ""
    address_line1: str = ""
    address_line2: str = ""
    phone: str = ""
    footer1: str = ""
    footer2: str = ""
    cashier_name: str = ""
    table_number: str = ""
    show_table_number: bool | None = None
    show_cashier_name: bool | None = None
    tax_percentage: float | None = None
    service_percentage: float | None = None

    @property
    def table_number_visible(self) -> bool:
        """Absent toggle counts as shown."""
        return self.show_table_number is not False

    @property
    def cashier_name_visible(self) -> bool:
        """Shown when toggled on (or unset) and a cashier name exists."""
        return self.show_cashier_name is not False and bool(self.cashier_name)


@dataclass(frozen=True)
class ReceiptData:
    """The whole editable receipt."""

    config: ReceiptConfig
    date: str
    items: tuple[OrderItem, ...] = ()
    payment_amount: Amount = 0

    @property
    def total_amount(self) -> Amount:
        return sum(item.total for item in self.items)

    def find_item(self, item_id: str) -> OrderItem | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None


@dataclass(frozen=True)
class ExtractedItem:
    """An item proposed by extraction; it has no identifier yet."""

    qty: int
    name: str
    price: Amount


@dataclass(frozen=True)
class ExtractionResult:
    """Partial receipt returned by the extraction service."""

    items: tuple[ExtractedItem, ...] = ()
    config: Mapping[str, object] = field(default_factory=dict)
    date: str | None = None
    payment_amount: Amount | None = None
