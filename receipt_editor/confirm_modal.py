"""Yes/no confirmation modal screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static


class ConfirmModal(ModalScreen[bool]):
    """Ask before a destructive action. Dismisses with True on confirm."""

    CSS = """
    ConfirmModal {
        align: center middle;
        background: $background 60%;
    }

    #confirm-dialog {
        width: 56;
        height: auto;
        border: round $error;
        background: $panel;
        padding: 1 2;
    }

    #confirm-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #confirm-prompt {
        color: white;
        margin-bottom: 1;
    }

    #confirm-help {
        color: #dddddd;
    }
    """

    def __init__(self, prompt: str, title: str = "Confirm") -> None:
        super().__init__()
        self.prompt = prompt
        self.title_text = title

    def compose(self) -> ComposeResult:
        with Container(id="confirm-dialog"):
            yield Static(self.title_text, id="confirm-title")
            yield Static(self.prompt, id="confirm-prompt")
            yield Static("y / Enter confirm. n / Esc cancel.", id="confirm-help")

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "n", "q", "ctrl+c"}:
            self.dismiss(False)
            event.stop()
            return

        if event.key in {"enter", "y"}:
            self.dismiss(True)
            event.stop()
