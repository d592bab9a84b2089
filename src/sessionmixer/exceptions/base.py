"""Root of the SessionMixer error hierarchy.

Errors travel from the hardware provider up through the engine to the CLI
or the TUI, and each carries two texts: a short one for the operator and a
detailed one for the log file. ``recoverable`` separates the runtime errors
the mixer keeps running through (a rejected write) from the ones that stop
startup or live synchronization.
"""

from typing import Optional


class SessionMixerError(Exception):
    """
    Base exception for all SessionMixer errors.

    Attributes:
        user_message: One line for the status area or the CLI error frame
        technical_message: Log text, with transport details where known
        recoverable: True if the mixer can keep running after this error
        recovery_hint: What the operator can do about it, if anything
    """

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
    ):
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.user_message!r}, recoverable={self.recoverable})"

    def get_full_message(self) -> str:
        """Operator message followed by the recovery hint, for notifications."""
        if not self.recovery_hint:
            return self.user_message
        return f"{self.user_message}\n\nSuggestion: {self.recovery_hint}"
