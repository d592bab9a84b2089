"""Protocols for the hardware control provider boundary.

The engine never assumes a transport. It needs five operations: look up a
parameter by name, read it, write it, subscribe to change notifications and
stop the subscription. A provider must echo every write the engine issues
back through the subscription with the identical value.
"""

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from sessionmixer.models import ParameterType

ChangeCallback = Callable[[int, int], None]
"""Receives (parameter_id, new_value) for every hardware-side change."""


@runtime_checkable
class ParameterBinding(Protocol):
    """
    Handle to one hardware control element.

    Attributes:
        id: Stable identity, used to route change notifications
        name: Control name as shown by the card
        min: Inclusive lower bound
        max: Inclusive upper bound
        type: Value classification
        writable: False for read-only elements such as level meters
    """

    id: int
    name: str
    min: int
    max: int
    type: ParameterType
    writable: bool

    def read(self) -> int:
        """Read the current value. Raises HardwareIOError."""
        ...

    def write(self, value: int) -> None:
        """Write a new value. Raises HardwareIOError."""
        ...


@runtime_checkable
class Subscription(Protocol):
    """A change-notification stream opened on a provider."""

    def watch(self, callback: ChangeCallback) -> None:
        """
        Deliver notifications until stopped.

        Blocks the calling thread. Returns normally only after stop() was
        called; any other end of the stream raises HardwareIOError.

        Args:
            callback: Called with (parameter_id, value) for each change
        """
        ...

    def stop(self) -> None:
        """Release the stream and make watch() return."""
        ...


@runtime_checkable
class ControlProvider(Protocol):
    """Source of parameter bindings and change notifications for one card."""

    @property
    def card(self) -> int:
        """Card index this provider talks to."""
        ...

    def find_parameter(self, name: str) -> ParameterBinding:
        """Resolve a control by name. Raises ParameterNotFoundError."""
        ...

    def list_parameters(self) -> list[ParameterBinding]:
        """All controls on the card, in card order."""
        ...

    def subscribe(self) -> Subscription:
        """Open a new change-notification stream."""
        ...

    def close(self) -> None:
        """Release any resources held by the provider."""
        ...
