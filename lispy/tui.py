"""
Textual front end for the Lispy REPL.

One input line with history, one scrolling log of results.

Usage:
    lispy --tui
    python -m lispy --tui
"""

from __future__ import annotations

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Input, RichLog

from lispy.repl import BANNER, PROMPT, run_line


def _esc(text: str) -> str:
    """Escape Rich markup characters in text."""
    return text.replace("[", "\\[")


# ---------------------------------------------------------------------------
# CSS
# ---------------------------------------------------------------------------

REPL_CSS = """
#output-log {
    border: solid $accent;
    border-title-align: left;
    height: 1fr;
}

#prompt {
    dock: bottom;
    margin-bottom: 1;
}
"""


# ---------------------------------------------------------------------------
# Widgets
# ---------------------------------------------------------------------------

class HistoryInput(Input):
    """Input line that recalls earlier submissions with Up/Down."""

    BINDINGS = [
        Binding("up", "history_prev", "Previous", show=False),
        Binding("down", "history_next", "Next", show=False),
    ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.history: list[str] = []
        self._cursor = 0

    def remember(self, line: str) -> None:
        if line and (not self.history or self.history[-1] != line):
            self.history.append(line)
        self._cursor = len(self.history)

    def action_history_prev(self) -> None:
        if self._cursor > 0:
            self._cursor -= 1
            self.value = self.history[self._cursor]
            self.cursor_position = len(self.value)

    def action_history_next(self) -> None:
        if self._cursor < len(self.history):
            self._cursor += 1
        self.value = self.history[self._cursor] if self._cursor < len(self.history) else ""
        self.cursor_position = len(self.value)


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

class LispyApp(App):
    """Full-screen Lispy REPL."""

    CSS = REPL_CSS
    TITLE = BANNER

    BINDINGS = [
        Binding("ctrl+d", "quit", "Quit"),
    ]

    def __init__(self):
        super().__init__()
        self.transcript: list[str] = []

    def compose(self) -> ComposeResult:
        log = RichLog(id="output-log", markup=True, wrap=True)
        log.border_title = "Output"
        yield log
        yield HistoryInput(placeholder=PROMPT, id="prompt")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#prompt", HistoryInput).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        line = event.value
        prompt = self.query_one("#prompt", HistoryInput)
        prompt.remember(line)
        prompt.value = ""

        output, failed = run_line(line)
        self.transcript.append(PROMPT + line)
        self.transcript.append(output)

        log = self.query_one("#output-log", RichLog)
        log.write(f"[dim]{_esc(PROMPT + line)}[/dim]")
        if failed:
            log.write(f"[red]{_esc(output)}[/red]")
        else:
            log.write(_esc(output))
