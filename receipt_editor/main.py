"""Entry point for the receipt-editor Textual app."""

from __future__ import annotations

from receipt_editor.receipt_app import ReceiptEditorApp, configure_logging


def main() -> None:
    """Run the Textual application."""
    configure_logging()
    ReceiptEditorApp().run()


if __name__ == "__main__":
    main()
