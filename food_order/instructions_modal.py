"""Special instructions modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from food_order.models import CartLine
from food_order.rendering import format_cart_line

MAX_INSTRUCTIONS_LENGTH = 200


class InstructionsModal(ModalScreen[str | None]):
    """Edit the free-text instructions of one cart line. Dismisses with the new text or None."""

    CSS = """
    InstructionsModal {
        align: center middle;
        background: $background 70%;
    }

    #instructions-box {
        width: 70;
        height: auto;
        max-height: 14;
        border: tall $accent;
        background: $surface;
        padding: 1 2;
    }

    #instructions-heading {
        text-style: bold underline;
        color: $accent;
    }

    #instructions-item {
        margin: 1 0;
    }

    #instructions-editor {
        border: round $accent;
        padding: 0 1;
        min-height: 3;
    }

    #instructions-footer {
        text-style: dim;
        margin-top: 1;
    }
    """

    def __init__(self, line: CartLine) -> None:
        super().__init__()
        self.line = line
        self.draft = line.special_instructions or ""

    def compose(self) -> ComposeResult:
        with Vertical(id="instructions-box"):
            yield Static("Special Instructions", id="instructions-heading")
            yield Static(format_cart_line(self.line), id="instructions-item")
            yield Static(id="instructions-editor")
            yield Static(id="instructions-footer")

    def on_mount(self) -> None:
        self._redraw()

    def on_key(self, event: Key) -> None:
        # The modal owns the keyboard until it is dismissed.
        event.stop()
        key = event.key

        if key in ("escape", "ctrl+c"):
            self.dismiss(None)
            return
        if key == "enter":
            self.dismiss(self.draft.strip())
            return

        if key == "ctrl+u":
            self.draft = ""
        elif key == "backspace":
            self.draft = self.draft[:-1]
        elif event.is_printable and event.character:
            if len(self.draft) >= MAX_INSTRUCTIONS_LENGTH:
                return
            self.draft += event.character
        else:
            return
        self._redraw()

    def _redraw(self) -> None:
        editor = Text()
        editor.append(self.draft)
        editor.append("▏", style="bold")
        self.query_one("#instructions-editor", Static).update(editor)

        remaining = MAX_INSTRUCTIONS_LENGTH - len(self.draft)
        self.query_one("#instructions-footer", Static).update(
            f"Enter save · Ctrl+U clear · Esc cancel · {remaining} chars left"
        )
