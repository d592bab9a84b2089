"""Terminal fader bank."""

import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Footer, Header, Static

from sessionmixer.core import SessionMixer
from sessionmixer.exceptions import SubscriptionError

from .widgets import FaderWidget, StatusBar

logger = logging.getLogger(__name__)


class MixerApp(App):
    """
    Textual UI for the session mixer.

    A pure presentation layer: every frame it reads ``SessionMixer.faders()``
    and redraws; keyboard input is turned into ``set_fader`` calls. It never
    waits on the hardware.
    """

    TITLE = "SessionMixer"

    CSS = """
    #bank {
        height: auto;
        padding: 1 2;
    }

    #empty {
        padding: 2 4;
    }
    """

    BINDINGS = [
        Binding("left", "select(-1)", "Prev", show=True),
        Binding("right", "select(1)", "Next", show=True),
        Binding("up", "step(0.01)", "+1%", show=True),
        Binding("down", "step(-0.01)", "-1%", show=True),
        Binding("pageup", "step(0.1)", "+10%", show=False),
        Binding("pagedown", "step(-0.1)", "-10%", show=False),
        Binding("end", "extreme('max')", "Max", show=False),
        Binding("home", "extreme('min')", "Min", show=False),
        Binding("q", "quit", "Quit", show=True),
    ]

    def __init__(self, mixer: SessionMixer, frame_rate: float = 30.0):
        """
        Args:
            mixer: The assembled mixer (dispatcher already started)
            frame_rate: Redraws per second
        """
        super().__init__()
        self.mixer = mixer
        self._frame_rate = frame_rate
        self._selected = 0
        self._sync_lost_shown = False
        logger.info("MixerApp created")

    def compose(self) -> ComposeResult:
        yield Header()
        views = self.mixer.faders()
        if views:
            with Horizontal(id="bank"):
                for view in views:
                    yield FaderWidget(view)
        else:
            yield Static("No controls configured", id="empty")
        yield StatusBar()
        yield Footer()

    def on_mount(self) -> None:
        dispatcher = self.mixer.dispatcher
        if dispatcher is not None:
            dispatcher.on_failure(lambda error: self.call_from_thread(self._show_sync_lost, error))
            if dispatcher.failure is not None:
                self._show_sync_lost(dispatcher.failure)

        self.refresh_faders()
        self.set_interval(1.0 / self._frame_rate, self.refresh_faders)

    def refresh_faders(self) -> None:
        """Redraw every fader from the mixer's cached values."""
        views = self.mixer.faders()
        for view in views:
            widget = self.query_one(f"#fader-{view.index}", FaderWidget)
            widget.update_view(view, selected=view.index == self._selected)

        selected = ""
        if views:
            view = views[self._selected]
            selected = f"{view.name}: {view.label}"
        self.query_one(StatusBar).update_state(
            self.mixer.provider.card, self.mixer.is_synchronized, selected
        )

    def _show_sync_lost(self, error: SubscriptionError) -> None:
        if self._sync_lost_shown:
            return
        self._sync_lost_shown = True
        self.notify(error.get_full_message(), title="Hardware sync lost", severity="error", timeout=30)

    # =================================================================
    # Actions
    # =================================================================

    def action_select(self, delta: int) -> None:
        count = len(self.mixer.gangs)
        if count:
            self._selected = (self._selected + delta) % count
            self.refresh_faders()

    def action_step(self, fraction: float) -> None:
        if not self.mixer.gangs:
            return
        error = self.mixer.step_fader(self._selected, fraction)
        if error is not None:
            self.notify(error.user_message, severity="warning")
        self.refresh_faders()

    def action_extreme(self, which: str) -> None:
        if not self.mixer.gangs:
            return
        gang = self.mixer.gangs[self._selected]
        error = self.mixer.set_fader(self._selected, gang.max if which == "max" else gang.min)
        if error is not None:
            self.notify(error.user_message, severity="warning")
        self.refresh_faders()
