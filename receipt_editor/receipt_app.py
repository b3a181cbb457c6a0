"""Main Textual app class."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.css.query import NoMatches
from textual.widgets import Button, Checkbox, Footer, Header, Input, Static, TextArea

from receipt_editor.config import DEBUG_LOG_PATH, EXPORT_DIR
from receipt_editor.confirm_modal import ConfirmModal
from receipt_editor.constant import IMPORT_FAILED_NOTICE, PDF_FAILED_NOTICE, RESET_CONFIRM_PROMPT
from receipt_editor.editor import ReceiptEditor
from receipt_editor.export import ExportError, export_pdf
from receipt_editor.extraction import ClaudeExtractor, Extractor
from receipt_editor.formatting import format_currency, parse_amount, round_amount, to_local_input
from receipt_editor.models import OrderItem, ReceiptData
from receipt_editor.printer import check_printer_dependencies, print_receipt
from receipt_editor.rendering import render_preview

logger = logging.getLogger(__name__)

# (field, label) pairs shown in the header form, in display order.
_HEADER_FIELDS: tuple[tuple[str, str], ...] = (
    ("restaurant_name", "Restaurant Name"),
    ("phone", "Phone"),
    ("address_line1", "Address Line 1"),
    ("address_line2", "Address Line 2"),
    ("footer1", "Footer Line 1"),
    ("footer2", "Footer Line 2"),
)
# (toggle field, value field, label)
_TOGGLED_FIELDS: tuple[tuple[str, str, str], ...] = (
    ("show_table_number", "table_number", "Table Number"),
    ("show_cashier_name", "cashier_name", "Cashier Name"),
)


def configure_logging(path: str = DEBUG_LOG_PATH) -> None:
    """Send debug records to a file; the terminal belongs to the UI."""
    log_file = Path(path)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


class ItemRow(Horizontal):
    """Editable qty / name / price row for one order item."""

    def __init__(self, item: OrderItem) -> None:
        super().__init__(classes="item-row")
        self.item_id = item.id
        self.item = item

    def compose(self) -> ComposeResult:
        yield Input(str(self.item.qty), type="integer", name="qty", classes="item-qty")
        yield Input(self.item.name, name="name", classes="item-name")
        yield Input(str(round_amount(self.item.price)), type="integer", name="price", classes="item-price")
        yield Button("x", name="remove", variant="error", classes="item-remove")


class ReceiptEditorApp(App):
    """A Textual app for editing and previewing a restaurant receipt."""

    TITLE = "Roso Joyo POS"
    SUB_TITLE = "Digital Receipt System"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #editor-pane {
        width: 3fr;
        border: round $primary;
        padding: 0 1;
    }

    #preview-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
        align-horizontal: center;
    }

    #preview {
        width: auto;
        background: white;
        color: black;
        padding: 1 2;
    }

    .section-title {
        text-style: bold;
        margin-top: 1;
    }

    .field-label {
        color: $text-muted;
    }

    #import-text {
        height: 6;
    }

    .toggle-row {
        height: auto;
    }

    .toggle-row Input {
        width: 1fr;
    }

    #items-list {
        height: auto;
    }

    .item-row {
        height: auto;
    }

    .item-qty {
        width: 10;
    }

    .item-name {
        width: 1fr;
    }

    .item-price {
        width: 16;
    }

    .item-remove {
        min-width: 5;
        width: 5;
    }

    #actions {
        height: auto;
        margin-top: 1;
    }

    #status {
        height: 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("f2", "print_receipt", "Print", priority=True),
        Binding("ctrl+s", "download_pdf", "Download PDF", priority=True),
        Binding("ctrl+n", "add_item", "Add item", priority=True),
        Binding("ctrl+r", "reset_form", "Reset", priority=True),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        editor: ReceiptEditor | None = None,
        extractor: Extractor | None = None,
        export_dir: str | Path = EXPORT_DIR,
    ) -> None:
        super().__init__()
        self.editor = editor if editor is not None else ReceiptEditor()
        self.extractor = extractor if extractor is not None else ClaudeExtractor()
        self.export_dir = Path(export_dir)
        self.system_status = ""
        self._shown_item_ids: tuple[str, ...] = ()
        self.editor.subscribe(self._on_receipt_changed)

    def compose(self) -> ComposeResult:
        data = self.editor.data
        config = data.config
        yield Header()
        with Horizontal(id="main-layout"):
            with VerticalScroll(id="editor-pane"):
                yield Static("AI Smart Import", classes="section-title")
                yield Static("Paste a full receipt or simple order text to auto-fill details.", classes="field-label")
                yield TextArea(id="import-text")
                yield Button("Import", id="import-button", variant="primary", disabled=True)

                yield Static("Header Details", classes="section-title")
                for field, label in _HEADER_FIELDS[:2]:
                    yield Static(label, classes="field-label")
                    yield Input(str(getattr(config, field)), id=f"config-{field}", name=field, placeholder=label)
                yield Static("Date & Time (YYYY-MM-DDTHH:MM, Enter to apply)", classes="field-label")
                yield Input(to_local_input(data.date), id="date-input", placeholder="YYYY-MM-DDTHH:MM")
                for toggle, field, label in _TOGGLED_FIELDS:
                    yield Static(label, classes="field-label")
                    with Horizontal(classes="toggle-row"):
                        yield Input(
                            str(getattr(config, field)),
                            id=f"config-{field}",
                            name=field,
                            placeholder=label,
                            disabled=getattr(config, toggle) is False,
                        )
                        yield Checkbox("Show", getattr(config, toggle) is not False, id=f"toggle-{toggle}", name=toggle)
                for field, label in _HEADER_FIELDS[2:]:
                    yield Static(label, classes="field-label")
                    yield Input(str(getattr(config, field)), id=f"config-{field}", name=field, placeholder=label)

                yield Static("Order Items  (qty / name / @price)", classes="section-title")
                yield Vertical(id="items-list")
                yield Static("No items yet. Add manually or use AI Import.", id="items-empty", classes="field-label")
                yield Button("+ Add Item", id="add-item-button", variant="success")

                yield Static("Payment Details", classes="section-title")
                yield Static(id="total-bill")
                yield Static("Payment Amount (Bayar)", classes="field-label")
                yield Input(str(data.payment_amount), type="integer", id="payment-input")

                with Horizontal(id="actions"):
                    yield Button("Print", id="print-button")
                    yield Button("Download PDF", id="pdf-button", variant="primary")
                    yield Button("Reset Form", id="reset-button", variant="error")
            with Vertical(id="preview-pane"):
                yield Static("Live Preview", classes="section-title")
                yield Static(id="preview")
        yield Static(id="status")
        yield Footer()

    async def on_mount(self) -> None:
        _, msg = check_printer_dependencies()
        self.system_status = msg
        logger.debug("on_mount printer_status=%r", msg)
        await self._rebuild_items()
        self._refresh_preview()
        self._refresh_status()

    # ── State -> view ────────────────────────────────────────────────────────

    def _on_receipt_changed(self, data: ReceiptData) -> None:
        self._refresh_preview()
        self._sync_form(data)
        if tuple(item.id for item in data.items) != self._shown_item_ids:
            self.call_later(self._rebuild_items)

    def _refresh_preview(self) -> None:
        try:
            form = self.screen_stack[0]
            preview = form.query_one("#preview", Static)
            total_bill = form.query_one("#total-bill", Static)
        except NoMatches:
            return
        preview.update(render_preview(self.editor.layout()))
        total_bill.update(f"Total Bill: Rp {format_currency(self.editor.data.total_amount)}")

    def _refresh_status(self) -> None:
        self.screen_stack[0].query_one("#status", Static).update(self.system_status or "Ready")

    def _set_input(self, widget: Input, value: str) -> None:
        if widget.value == value:
            return
        with widget.prevent(Input.Changed):
            widget.value = value

    def _sync_form(self, data: ReceiptData) -> None:
        """Push state into form widgets after resets and imports."""
        config = data.config
        # Resets arrive from the confirm modal; the form lives on the base screen.
        form = self.screen_stack[0]
        try:
            for field, _ in _HEADER_FIELDS:
                self._set_input(form.query_one(f"#config-{field}", Input), str(getattr(config, field)))
            for toggle, field, _ in _TOGGLED_FIELDS:
                field_input = form.query_one(f"#config-{field}", Input)
                self._set_input(field_input, str(getattr(config, field)))
                shown = getattr(config, toggle) is not False
                field_input.disabled = not shown
                checkbox = form.query_one(f"#toggle-{toggle}", Checkbox)
                if checkbox.value != shown:
                    with checkbox.prevent(Checkbox.Changed):
                        checkbox.value = shown
            date_input = form.query_one("#date-input", Input)
            if not date_input.has_focus:
                self._set_input(date_input, to_local_input(data.date))
            payment_input = form.query_one("#payment-input", Input)
            if parse_amount(payment_input.value) != data.payment_amount:
                self._set_input(payment_input, str(data.payment_amount))
        except NoMatches:
            return

    async def _rebuild_items(self) -> None:
        items = self.editor.data.items
        form = self.screen_stack[0]
        container = form.query_one("#items-list", Vertical)
        await container.remove_children()
        await container.mount_all([ItemRow(item) for item in items])
        self._shown_item_ids = tuple(item.id for item in items)
        form.query_one("#items-empty", Static).display = not items

    # ── Form -> state ────────────────────────────────────────────────────────

    @on(Input.Changed)
    def _on_input_changed(self, event: Input.Changed) -> None:
        widget = event.input
        row = widget.parent
        if isinstance(row, ItemRow):
            value: object = widget.value if widget.name == "name" else parse_amount(widget.value)
            self.editor.update_item(row.item_id, widget.name or "", value)
            return
        if widget.id == "payment-input":
            self.editor.set_payment(parse_amount(widget.value))
            return
        if widget.id and widget.id.startswith("config-") and widget.name:
            self.editor.edit_config(widget.name, widget.value)

    @on(Input.Submitted, "#date-input")
    def _on_date_submitted(self, event: Input.Submitted) -> None:
        if not self.editor.set_date_from_input(event.value):
            self._set_input(event.input, to_local_input(self.editor.data.date))

    @on(Checkbox.Changed)
    def _on_toggle_changed(self, event: Checkbox.Changed) -> None:
        if event.checkbox.name:
            self.editor.edit_config(event.checkbox.name, event.value)

    @on(TextArea.Changed, "#import-text")
    def _on_import_text_changed(self, event: TextArea.Changed) -> None:
        button = self.query_one("#import-button", Button)
        button.disabled = self.editor.is_importing or not event.text_area.text.strip()

    @on(Button.Pressed)
    def _on_button_pressed(self, event: Button.Pressed) -> None:
        button = event.button
        row = button.parent
        if isinstance(row, ItemRow) and button.name == "remove":
            self.editor.remove_item(row.item_id)
            return
        if button.id == "import-button":
            self.import_order_text()
        elif button.id == "add-item-button":
            self.action_add_item()
        elif button.id == "print-button":
            self.action_print_receipt()
        elif button.id == "pdf-button":
            self.action_download_pdf()
        elif button.id == "reset-button":
            self.action_reset_form()

    # ── Actions ──────────────────────────────────────────────────────────────

    def action_add_item(self) -> None:
        item_id = self.editor.add_item()
        logger.debug("item_added id=%s", item_id)

    def action_reset_form(self) -> None:
        self.push_screen(ConfirmModal(RESET_CONFIRM_PROMPT, title="Reset Form"), self._on_reset_confirmed)

    def _on_reset_confirmed(self, confirmed: bool | None) -> None:
        if not confirmed:
            return
        self.editor.reset()
        logger.debug("form_reset")

    def action_print_receipt(self) -> None:
        try:
            print_receipt(self.editor.layout())
        except Exception as exc:
            logger.warning("print_failed error=%r", exc)
            self.system_status = f"Print failed: {exc}"
            self.notify(f"Print failed: {exc}", severity="error")
        else:
            self.system_status = "Printed"
        self._refresh_status()

    def action_download_pdf(self) -> None:
        self.download_pdf()

    @work(exclusive=True, group="pdf")
    async def download_pdf(self) -> None:
        button = self.query_one("#pdf-button", Button)
        button.disabled = True
        try:
            target = await asyncio.to_thread(
                export_pdf, self.editor.layout(), self.editor.data.config.restaurant_name, self.export_dir
            )
        except ExportError:
            self.notify(PDF_FAILED_NOTICE, severity="error")
            return
        finally:
            button.disabled = False
        self.system_status = f"Saved {target}"
        self._refresh_status()
        self.notify(f"Saved {target}")

    @work(exclusive=True, group="import")
    async def import_order_text(self) -> None:
        text_area = self.query_one("#import-text", TextArea)
        button = self.query_one("#import-button", Button)
        text = text_area.text
        if not text.strip() or self.editor.is_importing:
            return

        button.disabled = True
        button.label = "..."
        merged = await self.editor.import_text(text, self.extractor)
        button.label = "Import"
        if merged:
            text_area.clear()
        else:
            self.notify(IMPORT_FAILED_NOTICE, severity="error")
        button.disabled = not text_area.text.strip()
