"""Exceptions raised by the synchronization engine."""

from typing import Optional

from .base import SessionMixerError


def _gang_context(gang_index: Optional[int], gang_name: Optional[str]) -> str:
    if gang_index is None:
        return ""
    return f"gang {gang_index} ({gang_name}), "


class ResolutionError(SessionMixerError):
    """A configured hardware parameter could not be resolved or is unusable."""

    def __init__(
        self,
        gang_index: int,
        gang_name: str,
        kind: str,
        entry_index: int,
        parameter: str,
        reason: str,
    ):
        """
        Initialize resolution error.

        Args:
            gang_index: Position of the gang in the configuration
            gang_name: Name of the gang
            kind: "control" or "level"
            entry_index: Position of the failing entry within its list
            parameter: The parameter name that failed
            reason: Why it failed
        """
        user_msg = (
            f"{_gang_context(gang_index, gang_name)}{kind} {entry_index} ({parameter}): {reason}"
        )
        super().__init__(
            user_message=user_msg,
            recoverable=False,
            recovery_hint=(
                "Check the control names in your session file. "
                "Run 'sessionmixer controls list' to see what the card provides."
            ),
        )
        self.gang_index = gang_index
        self.gang_name = gang_name
        self.kind = kind
        self.entry_index = entry_index
        self.parameter = parameter
        self.reason = reason


class InitError(SessionMixerError):
    """Initial hardware read failed while constructing a channel."""

    def __init__(
        self,
        parameter: Optional[str],
        cause: Optional[BaseException] = None,
        gang_index: Optional[int] = None,
        gang_name: Optional[str] = None,
    ):
        """
        Initialize channel init error.

        Args:
            parameter: Parameter name (None when the binding itself was missing)
            cause: The underlying exception
            gang_index: Gang position, when raised during assembly
            gang_name: Gang name, when raised during assembly
        """
        if parameter is None:
            user_msg = f"{_gang_context(gang_index, gang_name)}channel has no hardware control"
        else:
            user_msg = (
                f"{_gang_context(gang_index, gang_name)}failed to read initial value of '{parameter}'"
            )
        tech_msg = user_msg if cause is None else f"{user_msg}: {cause}"
        super().__init__(user_message=user_msg, technical_message=tech_msg, recoverable=False)
        self.parameter = parameter
        self.cause = cause
        self.gang_index = gang_index
        self.gang_name = gang_name


class WriteError(SessionMixerError):
    """A hardware write failed during a UI-originated change.

    Recoverable: the cached value keeps the user's intent and the next
    hardware event (or another move of the fader) reconciles it.
    """

    def __init__(self, parameter_id: int, parameter: str, cause: BaseException):
        """
        Initialize write error.

        Args:
            parameter_id: Identity of the binding that rejected the write
            parameter: Name of the binding
            cause: The underlying exception
        """
        super().__init__(
            user_message=f"Failed to write to '{parameter}'",
            technical_message=f"Failed to write to '{parameter}' (id {parameter_id}): {cause}",
            recoverable=True,
        )
        self.parameter_id = parameter_id
        self.parameter = parameter
        self.cause = cause


class SubscriptionError(SessionMixerError):
    """The hardware change-notification stream failed or closed.

    Live synchronization is lost: the mixer no longer reflects changes made
    outside the application until it is restarted.
    """

    def __init__(self, reason: str, cause: Optional[BaseException] = None):
        """
        Initialize subscription error.

        Args:
            reason: Short description of what happened
            cause: The underlying exception, if any
        """
        tech_msg = f"Hardware event stream stopped: {reason}"
        if cause is not None:
            tech_msg += f" ({cause})"
        super().__init__(
            user_message="Lost connection to hardware events; external changes are no longer shown.",
            technical_message=tech_msg,
            recoverable=False,
            recovery_hint="Restart sessionmixer. If it keeps happening, check the card connection.",
        )
        self.reason = reason
        self.cause = cause
