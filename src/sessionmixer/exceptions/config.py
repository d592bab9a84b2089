"""Configuration-related exceptions."""

from typing import Any, Optional

from .base import SessionMixerError


class ConfigError(SessionMixerError):
    """Configuration is invalid or cannot be loaded.

    Also raised directly for malformed gang definitions (a gang with no
    channels). Always fatal at startup.
    """
    pass


class ConfigFileNotFoundError(ConfigError):
    """Configuration file does not exist."""

    def __init__(self, file_path: str):
        """
        Initialize config file not found error.

        Args:
            file_path: Path that was looked up
        """
        super().__init__(
            user_message=f"Configuration file not found: {file_path}",
            recoverable=True,
            recovery_hint=(
                "Run 'sessionmixer config init' to write an example configuration, "
                "or pass --config with the path to your session file."
            ),
        )
        self.file_path = file_path


class ConfigFileInvalidError(ConfigError):
    """Configuration file has invalid YAML syntax."""

    def __init__(self, file_path: str, parse_error: str):
        """
        Initialize config file invalid error.

        Args:
            file_path: Path to the invalid config file
            parse_error: The parsing error message
        """
        user_msg = "Configuration file has invalid syntax"
        recovery = "Check for common YAML errors:\n"
        recovery += "  - Inconsistent indentation (use spaces, not tabs)\n"
        recovery += "  - Missing ':' after a key\n"
        recovery += "  - Unquoted strings containing ': ' or '#'\n"
        recovery += f"  - Edit: {file_path}"

        if "tab" in parse_error.lower():
            user_msg = "Configuration file contains tab characters"
            recovery = f"Replace tabs with spaces in {file_path}"
        elif "empty" in parse_error.lower():
            user_msg = "Configuration file is empty"
            recovery = f"Run 'sessionmixer config init --force' to rewrite {file_path}"

        super().__init__(
            user_message=user_msg,
            technical_message=f"YAML parse error in {file_path}: {parse_error}",
            recoverable=True,
            recovery_hint=recovery
        )
        self.file_path = file_path
        self.parse_error = parse_error


class ConfigValidationError(ConfigError):
    """Configuration values fail validation."""

    def __init__(self, field: str, value: Any, error_msg: str, file_path: Optional[str] = None):
        """
        Initialize config validation error.

        Args:
            field: The configuration field that failed validation
            value: The invalid value
            error_msg: Why the value is invalid
            file_path: Path to the config file (optional)
        """
        user_msg = f"Invalid configuration value for '{field}': {error_msg}"

        recovery = f"Update the '{field}' value in your configuration"
        if file_path:
            recovery += f"\nConfig file: {file_path}"

        if field.endswith("controls") or ".controls." in field or field.endswith("levels") or ".levels." in field:
            recovery += "\nRun 'sessionmixer controls list' to see the parameter names on your card"
        elif "taper_db" in field:
            recovery += "\nThe taper range must be a positive number of decibels (typically 72)"
        elif "unit" in field:
            recovery += "\nValid units: db, raw"

        super().__init__(
            user_message=user_msg,
            technical_message=f"Config validation failed for {field}={value!r}: {error_msg}",
            recoverable=True,
            recovery_hint=recovery
        )
        self.field = field
        self.value = value
        self.file_path = file_path
