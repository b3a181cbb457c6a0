"""Editor controller owning the session's receipt."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable

from receipt_editor.constant import NEW_ITEM_NAME, NEW_ITEM_QTY
from receipt_editor.data import default_receipt, reset_config
from receipt_editor.extraction import ExtractionError, Extractor
from receipt_editor.formatting import from_local_input
from receipt_editor.merge import IdFactory, merge_extraction, new_item_id, random_item_id
from receipt_editor.models import CONFIG_FIELDS, Amount, OrderItem, ReceiptData
from receipt_editor.rendering import ReceiptLayout, build_layout

logger = logging.getLogger(__name__)

Listener = Callable[[ReceiptData], None]


class ReceiptEditor:
    """
    Holds the current receipt and replaces it wholesale on every edit.

    Callers never see a half-applied change: each operation computes a new
    ReceiptData from the old one and swaps it in.
    """

    def __init__(self, data: ReceiptData | None = None, id_factory: IdFactory = random_item_id) -> None:
        self._data = data if data is not None else default_receipt()
        self._id_factory = id_factory
        self._listeners: list[Listener] = []
        self.is_importing = False

    @property
    def data(self) -> ReceiptData:
        return self._data

    def subscribe(self, listener: Listener) -> None:
        """Call ``listener`` with the new receipt after every change."""
        self._listeners.append(listener)

    def _commit(self, new_data: ReceiptData) -> None:
        if new_data == self._data:
            return
        self._data = new_data
        for listener in list(self._listeners):
            listener(new_data)

    def layout(self) -> ReceiptLayout:
        return build_layout(self._data)

    def edit_config(self, field: str, value: object) -> None:
        if field not in CONFIG_FIELDS:
            raise KeyError(field)
        self._commit(replace(self._data, config=replace(self._data.config, **{field: value})))

    def set_date_from_input(self, value: str) -> bool:
        """Commit a local date edit; unparsable input keeps the old date."""
        try:
            iso = from_local_input(value)
        except ValueError:
            logger.debug("date_edit_rejected value=%r", value)
            return False
        self._commit(replace(self._data, date=iso))
        return True

    def set_payment(self, amount: Amount) -> None:
        self._commit(replace(self._data, payment_amount=amount))

    def add_item(self) -> str:
        item_id = new_item_id((item.id for item in self._data.items), self._id_factory)
        item = OrderItem.create(qty=NEW_ITEM_QTY, name=NEW_ITEM_NAME, price=0, item_id=item_id)
        self._commit(replace(self._data, items=self._data.items + (item,)))
        return item_id

    def update_item(self, item_id: str, field: str, value: object) -> None:
        """Change one item field; qty/price changes recompute the total."""
        if field not in {"qty", "name", "price"}:
            raise KeyError(field)
        if self._data.find_item(item_id) is None:
            return

        def apply(item: OrderItem) -> OrderItem:
            if item.id != item_id:
                return item
            updated = replace(item, **{field: value})
            return replace(updated, total=updated.qty * updated.price)

        self._commit(replace(self._data, items=tuple(apply(item) for item in self._data.items)))

    def remove_item(self, item_id: str) -> None:
        remaining = tuple(item for item in self._data.items if item.id != item_id)
        if len(remaining) == len(self._data.items):
            return
        self._commit(replace(self._data, items=remaining))

    def reset(self) -> None:
        """Clear items and payment and restore the placeholder header."""
        self._commit(
            replace(self._data, items=(), payment_amount=0, config=reset_config(self._data.config))
        )

    async def import_text(self, text: str, extractor: Extractor) -> bool:
        """
        Send ``text`` to the extractor and merge the answer.

        Returns False when nothing was merged: blank text, a request already in
        flight, or an extractor failure. State is untouched in those cases.
        """
        if not text.strip():
            return False
        if self.is_importing:
            logger.debug("import_blocked reason=in_flight")
            return False

        self.is_importing = True
        try:
            result = await extractor.extract(text)
        except ExtractionError as exc:
            logger.warning("import_failed error=%s", exc)
            return False
        finally:
            self.is_importing = False

        self._commit(merge_extraction(self._data, result, self._id_factory))
        logger.info("import_merged items=%d", len(result.items))
        return True
