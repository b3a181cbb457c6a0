"""Editable static receipt defaults, labels and prompt text."""

from __future__ import annotations

DEFAULT_CONFIG: dict[str, object] = {
    "restaurant_name": "R.M ROSO JOYO 2",
    "address_line1": "Jln. Irian, Nglorog",
    "address_line2": "Sragen - Jawa Tengah",
    "phone": "(0271) 8821037",
    "footer1": "Terima Kasih",
    "footer2": "Selamat Menikmati",
    "cashier_name": "Admin",
    "table_number": "-",
    "show_table_number": True,
}

# 04/09/2025 12:30
DEFAULT_DATE = "2025-09-04T12:30:00.000Z"

DEFAULT_ITEMS: list[dict[str, object]] = [
    {"id": "1", "qty": 100, "name": "Paket 1", "price": 44000},
]

DEFAULT_PAYMENT_AMOUNT = 4400000

# Applied by "Reset Form". Footers and cashier are kept.
RESET_CONFIG: dict[str, object] = {
    "restaurant_name": "RESTAURANT NAME",
    "address_line1": "Address Line 1",
    "address_line2": "City - Region",
    "phone": "(000) 000000",
    "table_number": "-",
    "show_table_number": True,
}

MIN_ROWS = 10
NEW_ITEM_NAME = "New Item"
NEW_ITEM_QTY = 1

LABEL_PHONE = "Telp : "
LABEL_DATE = "Tgl  : "
LABEL_TABLE = "Meja : "
LABEL_CASHIER = "Kasir: "
COLUMN_HEADERS = ("QTY", "MENU", "@HARGA", "TOTAL")
LABEL_TOTAL = "TOTAL"
LABEL_PAYMENT = "BAYAR"
LABEL_CHANGE = "KEMBALI"

EXTRACTION_SYSTEM_PROMPT = "You are a helpful assistant that parses restaurant receipts into structured JSON."

EXTRACTION_PROMPT = """You are a cashier assistant. Extract receipt details from the text below.

1. Extract restaurant details (name, address lines, phone, footer lines).
2. Extract the transaction date and convert it to ISO 8601 format.
   - NOTE: The input date format is likely DD/MM/YYYY (e.g., 04/09/2025 is September 4th).
3. Extract order items (qty, name, price).
   - Interpret prices like "44.000" or "15.000" as numbers 44000 and 15000 (dot is a thousand separator).
4. Extract the total payment amount (Bayar).
5. Extract the table number (Meja) if present.
6. Extract the cashier name (Kasir) if present.

Output ONLY this JSON (no prose, no markdown). Use null for anything not present:

{{
  "config": {{
    "restaurant_name": "string or null",
    "address_line1": "string or null",
    "address_line2": "string or null",
    "phone": "string or null",
    "footer1": "string or null",
    "footer2": "string or null",
    "table_number": "string or null",
    "cashier_name": "string or null"
  }},
  "date": "ISO 8601 date string or null",
  "payment_amount": number or null,
  "items": [
    {{"qty": number, "name": "string", "price": number}}
  ]
}}

Text to parse: "{text}"
"""

RESET_CONFIRM_PROMPT = "Are you sure you want to clear all items and details?"
IMPORT_FAILED_NOTICE = "Failed to parse order with AI. Please check your API Key or try again."
PDF_FAILED_NOTICE = "Failed to generate PDF. You can try printing to PDF instead."
