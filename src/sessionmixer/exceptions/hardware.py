"""Exceptions raised by hardware control providers."""

from typing import Optional

from .base import SessionMixerError


class HardwareError(SessionMixerError):
    """Hardware control provider operation failed."""

    def __init__(self, user_message: str, card: Optional[int] = None, **kwargs):
        """
        Initialize hardware error.

        Args:
            user_message: User-friendly error message
            card: The card index involved (if known)
        """
        super().__init__(user_message, **kwargs)
        self.card = card


class ParameterNotFoundError(HardwareError):
    """A named parameter does not exist on the card."""

    def __init__(self, name: str, card: Optional[int] = None):
        """
        Initialize parameter-not-found error.

        Args:
            name: The parameter name that was looked up
            card: The card index that was searched
        """
        where = f" on card {card}" if card is not None else ""
        super().__init__(
            user_message=f"Control '{name}' not found{where}.",
            card=card,
            recoverable=True,
            recovery_hint="Run 'sessionmixer controls list' to see available controls.",
        )
        self.name = name


class HardwareIOError(HardwareError):
    """Reading, writing or watching a parameter failed."""

    def __init__(self, user_message: str, original_error: Optional[str] = None, **kwargs):
        """
        Initialize hardware I/O error.

        Args:
            user_message: User-friendly error message
            original_error: Message from the underlying transport
        """
        tech_msg = user_message
        if original_error:
            tech_msg += f"\nOriginal error: {original_error}"
        super().__init__(user_message, technical_message=tech_msg, recoverable=True, **kwargs)
        self.original_error = original_error
