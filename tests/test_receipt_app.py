"""
Smoke tests for the Textual app, driven through ``App.run_test``.

The extractor is a fake; printing and PDF export are monkeypatched so no
printer or font is needed.
"""
from dataclasses import replace

import pytest
from textual.widgets import Button, Input, TextArea

from receipt_editor.confirm_modal import ConfirmModal
from receipt_editor.constant import PDF_FAILED_NOTICE
from receipt_editor.editor import ReceiptEditor
from receipt_editor.export import ExportError
from receipt_editor.models import ExtractedItem, ExtractionResult
from receipt_editor.receipt_app import ItemRow, ReceiptEditorApp
from tests.conftest import FailingExtractor, FakeExtractor, make_item

SIZE = (160, 80)


def _app(receipt, id_factory, extractor=None, tmp_path=None):
    return ReceiptEditorApp(
        editor=ReceiptEditor(receipt, id_factory=id_factory),
        extractor=extractor or FakeExtractor(),
        export_dir=tmp_path or "exports",
    )


class TestReceiptEditorApp:

    @pytest.mark.asyncio
    async def test_mount_shows_one_item_row(self, receipt, id_factory):
        app = _app(receipt, id_factory)
        async with app.run_test(size=SIZE) as pilot:
            await pilot.pause()
            assert len(app.query(ItemRow)) == 1

    @pytest.mark.asyncio
    async def test_add_item_binding(self, receipt, id_factory):
        app = _app(receipt, id_factory)
        async with app.run_test(size=SIZE) as pilot:
            await pilot.press("ctrl+n")
            await pilot.pause()

            assert [item.id for item in app.editor.data.items] == ["1", "new-1"]
            assert len(app.query(ItemRow)) == 2

    @pytest.mark.asyncio
    async def test_config_input_updates_receipt(self, receipt, id_factory):
        app = _app(receipt, id_factory)
        async with app.run_test(size=SIZE) as pilot:
            app.query_one("#config-restaurant_name", Input).value = "Warung Bu Tini"
            await pilot.pause()

            assert app.editor.data.config.restaurant_name == "Warung Bu Tini"

    @pytest.mark.asyncio
    async def test_item_qty_input_recomputes_total(self, receipt, id_factory):
        app = _app(receipt, id_factory)
        async with app.run_test(size=SIZE) as pilot:
            await pilot.pause()
            row = app.query_one(ItemRow)
            row.query_one(".item-qty", Input).value = "2"
            await pilot.pause()

            assert app.editor.data.items[0].total == 88000

    @pytest.mark.asyncio
    async def test_reset_requires_confirmation(self, receipt, id_factory):
        app = _app(receipt, id_factory)
        async with app.run_test(size=SIZE) as pilot:
            await pilot.press("ctrl+r")
            await pilot.pause()
            assert isinstance(app.screen, ConfirmModal)

            await pilot.press("n")
            await pilot.pause()
            assert app.editor.data.items == receipt.items

            await pilot.press("ctrl+r")
            await pilot.pause()
            await pilot.press("y")
            await pilot.pause()
            assert app.editor.data.items == ()
            assert app.query_one("#config-restaurant_name", Input).value == "RESTAURANT NAME"

    @pytest.mark.asyncio
    async def test_import_merges_and_clears_text(self, receipt, id_factory):
        extractor = FakeExtractor(
            ExtractionResult(items=(ExtractedItem(qty=2, name="Tea", price=5000),), payment_amount=10000)
        )
        app = _app(receipt, id_factory, extractor)
        async with app.run_test(size=SIZE) as pilot:
            text_area = app.query_one("#import-text", TextArea)
            text_area.load_text("2 tea 5000, bayar 10000")
            app.import_order_text()
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert [item.name for item in app.editor.data.items] == ["Paket 1", "Tea"]
            assert app.editor.data.payment_amount == 10000
            assert text_area.text == ""
            assert len(app.query(ItemRow)) == 2

    @pytest.mark.asyncio
    async def test_import_failure_keeps_state_and_text(self, receipt, id_factory):
        app = _app(receipt, id_factory, FailingExtractor())
        async with app.run_test(size=SIZE) as pilot:
            text_area = app.query_one("#import-text", TextArea)
            text_area.load_text("2 tea")
            app.import_order_text()
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert app.editor.data == receipt
            assert text_area.text == "2 tea"

    @pytest.mark.asyncio
    async def test_fractional_price_shown_rounded(self, empty_receipt, id_factory):
        receipt = replace(empty_receipt, items=(make_item("1", 1, "Kopi", 7500.5),))
        app = _app(receipt, id_factory)
        async with app.run_test(size=SIZE) as pilot:
            await pilot.pause()
            price_input = app.query_one(ItemRow).query_one(".item-price", Input)

            assert price_input.value == "7501"


# ── Print and PDF actions ────────────────────────────────────────────────────

def _record_notices(app) -> list[tuple[str, str]]:
    notices: list[tuple[str, str]] = []
    app.notify = lambda message, *, severity="information", **kwargs: notices.append((message, severity))
    return notices


class TestOutputActions:

    @pytest.mark.asyncio
    async def test_pdf_saved_reports_path(self, receipt, id_factory, tmp_path, monkeypatch):
        target = tmp_path / "Receipt-R_M_ROSO_JOYO-2025-09-04.pdf"
        seen = []

        def fake_export(layout, restaurant_name, directory):
            seen.append((restaurant_name, directory))
            return target

        monkeypatch.setattr("receipt_editor.receipt_app.export_pdf", fake_export)
        app = _app(receipt, id_factory, tmp_path=tmp_path)
        async with app.run_test(size=SIZE) as pilot:
            notices = _record_notices(app)
            await pilot.press("ctrl+s")
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert seen == [(receipt.config.restaurant_name, tmp_path)]
            assert notices == [(f"Saved {target}", "information")]
            assert app.system_status == f"Saved {target}"
            assert not app.query_one("#pdf-button", Button).disabled

    @pytest.mark.asyncio
    async def test_pdf_failure_notifies_and_keeps_state(self, receipt, id_factory, tmp_path, monkeypatch):
        def failing_export(layout, restaurant_name, directory):
            raise ExportError("PDF generation failed: disk full")

        monkeypatch.setattr("receipt_editor.receipt_app.export_pdf", failing_export)
        app = _app(receipt, id_factory, tmp_path=tmp_path)
        async with app.run_test(size=SIZE) as pilot:
            notices = _record_notices(app)
            app.download_pdf()
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert notices == [(PDF_FAILED_NOTICE, "error")]
            assert app.editor.data == receipt
            assert not app.query_one("#pdf-button", Button).disabled

    @pytest.mark.asyncio
    async def test_print_failure_sets_status(self, receipt, id_factory, monkeypatch):
        def failing_print(layout):
            raise RuntimeError("USB device not found")

        monkeypatch.setattr("receipt_editor.receipt_app.print_receipt", failing_print)
        app = _app(receipt, id_factory)
        async with app.run_test(size=SIZE) as pilot:
            notices = _record_notices(app)
            await pilot.press("f2")
            await pilot.pause()

            assert app.system_status == "Print failed: USB device not found"
            assert notices == [("Print failed: USB device not found", "error")]
            assert app.editor.data == receipt

    @pytest.mark.asyncio
    async def test_print_success_sets_status(self, receipt, id_factory, monkeypatch):
        printed = []
        monkeypatch.setattr("receipt_editor.receipt_app.print_receipt", printed.append)
        app = _app(receipt, id_factory)
        async with app.run_test(size=SIZE) as pilot:
            await pilot.press("f2")
            await pilot.pause()

            assert len(printed) == 1
            assert printed[0].title == receipt.config.restaurant_name.upper()
            assert app.system_status == "Printed"
