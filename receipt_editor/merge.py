"""Merge extracted receipt fields into the current receipt."""

from __future__ import annotations

import secrets
import string
from dataclasses import replace
from typing import Callable, Iterable

from receipt_editor.models import CONFIG_FIELDS, ExtractionResult, OrderItem, ReceiptData

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_LENGTH = 9

IdFactory = Callable[[], str]


def random_item_id() -> str:
    """Return a 9-character base-36 identifier."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


def new_item_id(existing: Iterable[str], factory: IdFactory = random_item_id) -> str:
    """Generate an id that does not collide with ``existing``."""
    taken = set(existing)
    candidate = factory()
    while candidate in taken:
        candidate = factory()
    return candidate


def merge_extraction(data: ReceiptData, result: ExtractionResult, id_factory: IdFactory = random_item_id) -> ReceiptData:
    """
    Fold an extraction result into ``data`` without losing existing fields.

    - items are appended after the current ones, never replacing them
    - config fields overwrite one by one; absent or null fields are kept
    - date and payment amount are replaced only when present
    """
    updates: dict[str, object] = {}

    if result.items:
        taken = [item.id for item in data.items]
        appended: list[OrderItem] = []
        for proposed in result.items:
            item_id = new_item_id(taken, id_factory)
            taken.append(item_id)
            appended.append(OrderItem.create(proposed.qty, proposed.name, proposed.price, item_id))
        updates["items"] = data.items + tuple(appended)

    config_updates = {
        key: value for key, value in result.config.items() if key in CONFIG_FIELDS and value is not None
    }
    if config_updates:
        updates["config"] = replace(data.config, **config_updates)

    if result.date:
        updates["date"] = result.date

    if result.payment_amount is not None:
        updates["payment_amount"] = result.payment_amount

    if not updates:
        return data
    return replace(data, **updates)
