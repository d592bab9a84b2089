"""In-memory hardware provider.

Behaves like a card driver: every write is echoed back to all open
subscriptions with the identical value, external changes can be injected,
and failures can be switched on per parameter. Used by the test suite and
by ``sessionmixer run --simulate``.
"""

import logging
import math
import queue
import threading
import time
from typing import Optional

from sessionmixer.exceptions import HardwareIOError, ParameterNotFoundError
from sessionmixer.models import MixerConfig, ParameterType

from .protocols import ChangeCallback

logger = logging.getLogger(__name__)

_STOP = object()


class SimulatedParameter:
    """A control element living in a SimulatedCard."""

    def __init__(
        self,
        card: "SimulatedCard",
        id: int,
        name: str,
        min: int,
        max: int,
        value: int,
        type: ParameterType = ParameterType.INTEGER,
        writable: bool = True,
    ):
        self._card = card
        self.id = id
        self.name = name
        self.min = min
        self.max = max
        self.type = type
        self.writable = writable
        self._value = value
        self.fail_reads = False
        self.fail_writes = False
        self.write_count = 0
        self.read_count = 0

    @property
    def value(self) -> int:
        """Value currently held by the simulated hardware."""
        return self._value

    def read(self) -> int:
        self.read_count += 1
        if self.fail_reads:
            raise HardwareIOError(f"Simulated read failure on '{self.name}'")
        return self._value

    def write(self, value: int) -> None:
        if not self.writable:
            raise HardwareIOError(f"Control '{self.name}' is read-only")
        if self.fail_writes:
            raise HardwareIOError(f"Simulated write failure on '{self.name}'")
        self.write_count += 1
        self._value = max(self.min, min(self.max, value))
        self._card._notify(self.id, self._value)

    def __repr__(self) -> str:
        return f"SimulatedParameter(id={self.id}, name={self.name!r}, value={self._value})"


class SimulatedSubscription:
    """Change-notification stream of a SimulatedCard."""

    def __init__(self, card: "SimulatedCard"):
        self._card = card
        self._queue: queue.Queue = queue.Queue()
        self._stopped = threading.Event()

    def _push(self, item) -> None:
        self._queue.put(item)

    def watch(self, callback: ChangeCallback) -> None:
        while not self._stopped.is_set():
            try:
                item = self._queue.get(timeout=0.1)
            except queue.Empty:
                continue

            if item is _STOP:
                return
            if isinstance(item, BaseException):
                raise item
            parameter_id, value = item
            callback(parameter_id, value)

    def stop(self) -> None:
        self._stopped.set()
        self._queue.put(_STOP)
        self._card._unsubscribe(self)


class SimulatedCard:
    """
    In-memory control provider.

    Example:
        ```python
        card = SimulatedCard()
        card.add_parameter("Mix A Input 01 Playback Volume", max=65536, value=0)
        card.inject("Mix A Input 01 Playback Volume", 40000)  # external change
        ```
    """

    def __init__(self, card: int = 0):
        self._card = card
        self._parameters: dict[str, SimulatedParameter] = {}
        self._subscriptions: list[SimulatedSubscription] = []
        self._lock = threading.Lock()
        self._next_id = 1
        self._meter_thread: Optional[threading.Thread] = None
        self._meters_running = False

    @property
    def card(self) -> int:
        return self._card

    def add_parameter(
        self,
        name: str,
        min: int = 0,
        max: int = 65536,
        value: int = 0,
        type: ParameterType = ParameterType.INTEGER,
        writable: bool = True,
    ) -> SimulatedParameter:
        """Create a control element and return it."""
        if name in self._parameters:
            raise ValueError(f"Parameter '{name}' already exists")
        parameter = SimulatedParameter(
            self, self._next_id, name, min, max, value, type=type, writable=writable
        )
        self._next_id += 1
        self._parameters[name] = parameter
        return parameter

    def find_parameter(self, name: str) -> SimulatedParameter:
        try:
            return self._parameters[name]
        except KeyError:
            raise ParameterNotFoundError(name, card=self._card) from None

    def list_parameters(self) -> list[SimulatedParameter]:
        return list(self._parameters.values())

    def subscribe(self) -> SimulatedSubscription:
        subscription = SimulatedSubscription(self)
        with self._lock:
            self._subscriptions.append(subscription)
        return subscription

    def _unsubscribe(self, subscription: SimulatedSubscription) -> None:
        with self._lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

    def _notify(self, parameter_id: int, value: int) -> None:
        with self._lock:
            subscriptions = list(self._subscriptions)
        for subscription in subscriptions:
            subscription._push((parameter_id, value))

    def inject(self, name: str, value: int) -> None:
        """Simulate a change made outside the application (front panel, other software)."""
        parameter = self.find_parameter(name)
        parameter._value = max(parameter.min, min(parameter.max, value))
        self._notify(parameter.id, parameter._value)

    def set_level(self, name: str, value: int) -> None:
        """Set a meter reading. Meters are polled, so no notification is sent."""
        parameter = self.find_parameter(name)
        parameter._value = max(parameter.min, min(parameter.max, value))

    def break_stream(self, reason: str = "device disconnected") -> None:
        """Make every open subscription fail as if the device went away."""
        with self._lock:
            subscriptions = list(self._subscriptions)
        for subscription in subscriptions:
            subscription._push(HardwareIOError(f"Event stream failed: {reason}"))

    @classmethod
    def from_config(
        cls,
        config: MixerConfig,
        control_max: int = 65536,
        level_max: int = 4095,
        initial_value: Optional[int] = None,
    ) -> "SimulatedCard":
        """
        Build a card providing every control a session file names.

        Args:
            config: Session configuration
            control_max: Upper bound of fader controls
            level_max: Upper bound of level meters
            initial_value: Starting fader value (defaults to half travel)
        """
        card = cls(card=config.card)
        start = control_max // 2 if initial_value is None else initial_value
        for gang in config.gang_controls:
            for name in gang.controls:
                if name not in card._parameters:
                    card.add_parameter(name, min=0, max=control_max, value=start)
            for name in gang.levels:
                if name not in card._parameters:
                    card.add_parameter(name, min=0, max=level_max, value=0, writable=False)
        logger.info(f"Simulated card {config.card} with {len(card._parameters)} controls")
        return card

    def start_meters(self, interval: float = 0.05) -> None:
        """Animate every read-only meter with a slow sine so level colors move."""
        if self._meters_running:
            return
        self._meters_running = True
        self._meter_thread = threading.Thread(target=self._pump_meters, args=(interval,), daemon=True)
        self._meter_thread.start()

    def _pump_meters(self, interval: float) -> None:
        meters = [p for p in self._parameters.values() if not p.writable]
        while self._meters_running:
            t = time.time()
            for offset, meter in enumerate(meters):
                phase = 0.5 + 0.5 * math.sin(1.3 * t + offset)
                meter._value = int(meter.max * phase ** 3)
            time.sleep(interval)

    def close(self) -> None:
        self._meters_running = False
        if self._meter_thread and self._meter_thread.is_alive():
            self._meter_thread.join(timeout=1.0)
        with self._lock:
            subscriptions = list(self._subscriptions)
        for subscription in subscriptions:
            subscription.stop()
