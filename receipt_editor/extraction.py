"""
Extraction adapter: turns free-form pasted receipt text into structured
fields using Claude.

The rest of the app only depends on the ``Extractor`` protocol, so the
controller can be driven by a fake extractor in tests. ``ClaudeExtractor`` is
the real implementation; every failure (missing key, network, malformed JSON,
missing item fields) is raised as ``ExtractionError``.
"""

from __future__ import annotations

import json
import logging
import os
import re
from typing import List, Optional, Protocol, Union

import anthropic
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from receipt_editor.config import ANTHROPIC_API_KEY_ENV, EXTRACTION_MAX_TOKENS, EXTRACTION_MODEL
from receipt_editor.constant import EXTRACTION_PROMPT, EXTRACTION_SYSTEM_PROMPT
from receipt_editor.models import ExtractedItem, ExtractionResult

logger = logging.getLogger(__name__)

_FENCE_OPEN_RE = re.compile(r"^```[a-zA-Z]*\n?")
_FENCE_CLOSE_RE = re.compile(r"\n?```$")


class ExtractionError(RuntimeError):
    """Raised when text could not be turned into an ExtractionResult."""


class Extractor(Protocol):
    async def extract(self, text: str) -> ExtractionResult: ...


# ── Response schema ──────────────────────────────────────────────────────────

class _Payload(BaseModel):
    # Accept both snake_case and camelCase keys from the model.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ExtractedConfigPayload(_Payload):
    restaurant_name: Optional[str] = None
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    phone: Optional[str] = None
    footer1: Optional[str] = None
    footer2: Optional[str] = None
    table_number: Optional[str] = None
    cashier_name: Optional[str] = None


class ExtractedItemPayload(_Payload):
    qty: int
    name: str
    price: Union[int, float]


class ExtractionPayload(_Payload):
    config: Optional[ExtractedConfigPayload] = None
    date: Optional[str] = None
    payment_amount: Optional[Union[int, float]] = None
    items: Optional[List[ExtractedItemPayload]] = None


def strip_code_fences(raw: str) -> str:
    raw = raw.strip()
    raw = _FENCE_OPEN_RE.sub("", raw)
    return _FENCE_CLOSE_RE.sub("", raw).strip()


def parse_extraction_payload(raw: str) -> ExtractionResult:
    """Decode the service's JSON answer into an ExtractionResult."""
    try:
        data = json.loads(strip_code_fences(raw))
        payload = ExtractionPayload.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ExtractionError(f"Malformed extraction response: {exc}") from exc

    config = payload.config.model_dump(exclude_none=True) if payload.config else {}
    return ExtractionResult(
        items=tuple(ExtractedItem(qty=item.qty, name=item.name, price=item.price) for item in payload.items or ()),
        config=config,
        date=payload.date or None,
        payment_amount=payload.payment_amount,
    )


class ClaudeExtractor:
    """Extractor backed by the Anthropic messages API."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = EXTRACTION_MODEL,
        client: anthropic.AsyncAnthropic | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self._client = client

    def _resolve_client(self) -> anthropic.AsyncAnthropic:
        if self._client is not None:
            return self._client
        api_key = self.api_key or os.environ.get(ANTHROPIC_API_KEY_ENV, "").strip()
        if not api_key:
            raise ExtractionError("API Key is missing")
        self._client = anthropic.AsyncAnthropic(api_key=api_key)
        return self._client

    async def extract(self, text: str) -> ExtractionResult:
        client = self._resolve_client()
        prompt = EXTRACTION_PROMPT.format(text=text)
        try:
            message = await client.messages.create(
                model=self.model,
                max_tokens=EXTRACTION_MAX_TOKENS,
                system=EXTRACTION_SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as exc:
            logger.warning("Claude extraction request failed: %s", exc)
            raise ExtractionError(f"Extraction request failed: {exc}") from exc

        raw = "".join(block.text for block in message.content if getattr(block, "type", "") == "text")
        if not raw.strip():
            raise ExtractionError("No response text generated")
        logger.debug("Claude extraction raw response: %s", raw)
        return parse_extraction_payload(raw)
