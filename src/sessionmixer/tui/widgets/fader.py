"""Widget representing a single fader column."""

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Static

from sessionmixer.core import FaderView

BAR_HEIGHT = 16


def render_bar(position: float, height: int = BAR_HEIGHT) -> str:
    """Vertical fader bar, top row first."""
    position = max(0.0, min(1.0, position))
    filled = round(position * height)
    rows = []
    for row in range(height):
        rows.append(" ███ " if height - row <= filled else "  │  ")
    return "\n".join(rows)


class FaderWidget(Vertical):
    """
    One fader column (presentation only).

    Shows the gang name, a vertical bar and the value label. The bar is
    tinted with the gang's level color when it has level meters.
    """

    DEFAULT_CSS = """
    FaderWidget {
        width: 14;
        height: auto;
        border: solid $surface;
        padding: 0 1;
    }

    FaderWidget.selected {
        border: double $warning 80%;
    }

    FaderWidget .fader-name {
        width: 100%;
        height: 2;
        content-align: center top;
        text-style: bold;
    }

    FaderWidget .fader-bar {
        width: 100%;
        height: 16;
        content-align: center middle;
    }

    FaderWidget .fader-label {
        width: 100%;
        height: 1;
        content-align: center middle;
    }
    """

    def __init__(self, view: FaderView) -> None:
        super().__init__(id=f"fader-{view.index}")
        self._view = view

    def compose(self) -> ComposeResult:
        yield Static(self._view.name, classes="fader-name")
        yield Static(render_bar(self._view.position), classes="fader-bar")
        yield Static(self._view.label, classes="fader-label")

    def update_view(self, view: FaderView, selected: bool) -> None:
        """Redraw from this frame's view."""
        self.set_class(selected, "selected")
        self._view = view
        bar = self.query_one(".fader-bar", Static)
        bar.update(render_bar(view.position))
        # no reading means no tint, not the last one
        bar.styles.background = view.color.to_hex() if view.color is not None else None
        self.query_one(".fader-label", Static).update(view.label)
