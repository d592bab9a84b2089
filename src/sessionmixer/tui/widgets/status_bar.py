"""Status bar widget showing card, sync state and the selected fader."""

from textual.widgets import Static


class StatusBar(Static):
    """
    Status bar displaying current mixer state.

    Shows:
    - Card index
    - Whether hardware changes are being followed
    - Selected fader and its value
    """

    DEFAULT_CSS = """
    StatusBar {
        height: 1;
        background: $panel;
        color: $text;
        padding: 0 1;
    }

    StatusBar.synced {
        background: $success;
    }

    StatusBar.sync_lost {
        background: $error;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self._card: int | None = None
        self._synced = False
        self._selected = ""

    def update_state(self, card: int, synced: bool, selected: str = "") -> None:
        """
        Update all status information.

        Args:
            card: Card index
            synced: Whether hardware events are being received
            selected: Description of the selected fader
        """
        if (card, synced, selected) == (self._card, self._synced, self._selected):
            return
        self._card = card
        self._synced = synced
        self._selected = selected
        self._update_display()

    def _update_display(self) -> None:
        self.set_class(self._synced, "synced")
        self.set_class(not self._synced, "sync_lost")

        parts = [f"card {self._card}", "● SYNC" if self._synced else "○ NO SYNC"]
        if self._selected:
            parts.append(self._selected)
        self.update(" | ".join(parts))
