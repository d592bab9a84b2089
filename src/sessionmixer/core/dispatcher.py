"""Routes hardware change notifications to the owning gang."""

import logging
import threading
from collections.abc import Callable, Sequence
from typing import Optional

from sessionmixer.exceptions import HardwareError, SubscriptionError
from sessionmixer.hardware import ControlProvider, Subscription

from .gang import Gang

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Event monitor for the hardware -> UI direction.

    Consumes the provider's blocking notification stream on a daemon thread
    and hands each ``(parameter_id, value)`` to the gang owning that
    parameter. Parameters that belong to no gang are dropped.

    Losing the stream is fatal to live synchronization: it is logged,
    stored in ``failure`` and reported to the ``on_failure`` callback. The
    loop is not restarted.
    """

    def __init__(self, provider: ControlProvider, gangs: Sequence[Gang]):
        self._provider = provider
        self._gangs = tuple(gangs)
        self._owners: dict[int, Gang] = {}
        for gang in self._gangs:
            for channel in gang.channels:
                # first gang listing a parameter owns it
                self._owners.setdefault(channel.parameter_id, gang)

        self._subscription: Optional[Subscription] = None
        self._thread: Optional[threading.Thread] = None
        self._stopping = threading.Event()
        self._running = False
        self._failure: Optional[SubscriptionError] = None
        self._on_failure: Optional[Callable[[SubscriptionError], None]] = None

    @property
    def gangs(self) -> tuple[Gang, ...]:
        return self._gangs

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def failure(self) -> Optional[SubscriptionError]:
        """The error that ended the dispatch loop, if it failed."""
        return self._failure

    def on_failure(self, callback: Callable[[SubscriptionError], None]) -> None:
        """
        Register callback for loss of the event stream.

        Called from the dispatcher thread.
        """
        self._on_failure = callback

    def start(self) -> None:
        """Subscribe to hardware events and start dispatching."""
        if self._running:
            logger.warning("Dispatcher is already running")
            return

        self._stopping.clear()
        self._failure = None
        self._subscription = self._provider.subscribe()
        self._running = True
        self._thread = threading.Thread(
            target=self._run, args=(self._subscription,), name="sessionmixer-dispatcher", daemon=True
        )
        self._thread.start()
        logger.debug(f"Dispatcher started for card {self._provider.card} ({len(self._owners)} controls)")

    def stop(self) -> None:
        """Release the subscription and wait for the dispatch thread to end."""
        if self._subscription is None:
            return

        self._stopping.set()
        subscription, self._subscription = self._subscription, None
        try:
            subscription.stop()
        except HardwareError as e:
            logger.error(f"Error stopping hardware subscription: {e.technical_message}")

        if self._thread and self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout=1.0)
        self._running = False
        logger.debug("Dispatcher stopped")

    def _run(self, subscription: Subscription) -> None:
        try:
            subscription.watch(self.dispatch)
        except HardwareError as e:
            if not self._stopping.is_set():
                self._fail(SubscriptionError(e.technical_message, e))
            return
        except Exception as e:
            if not self._stopping.is_set():
                self._fail(SubscriptionError(f"{type(e).__name__}: {e}", e))
            return
        finally:
            self._running = False

        if not self._stopping.is_set():
            self._fail(SubscriptionError("stream closed"))

    def _fail(self, error: SubscriptionError) -> None:
        logger.error(error.technical_message)
        self._failure = error
        if self._on_failure:
            try:
                self._on_failure(error)
            except Exception as e:
                logger.error(f"Error in dispatcher failure callback: {e}")

    def dispatch(self, parameter_id: int, value: int) -> None:
        """
        Route one notification. Called from the subscription thread.

        Handler errors are logged and do not end the loop.
        """
        gang = self._owners.get(parameter_id)
        if gang is None:
            return

        try:
            gang.handle_hw_change(parameter_id, value)
        except Exception as e:
            logger.error(f"Error handling change of control {parameter_id} in '{gang.name}': {e}")

    def __enter__(self):
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.stop()
