"""Hardware control providers."""

from .alsa import AlsaCard, AlsaParameter, AlsaSubscription
from .protocols import ChangeCallback, ControlProvider, ParameterBinding, Subscription
from .simulated import SimulatedCard, SimulatedParameter, SimulatedSubscription

__all__ = [
    # Protocols
    "ChangeCallback",
    "ControlProvider",
    "ParameterBinding",
    "Subscription",
    # ALSA
    "AlsaCard",
    "AlsaParameter",
    "AlsaSubscription",
    # Simulation
    "SimulatedCard",
    "SimulatedParameter",
    "SimulatedSubscription",
]
