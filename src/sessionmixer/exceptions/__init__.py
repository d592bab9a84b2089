"""
Custom exception hierarchy for SessionMixer.

## Exception Hierarchy

```
SessionMixerError (base)
├── ConfigError                  malformed config or gang definition (fatal)
│   ├── ConfigFileNotFoundError
│   ├── ConfigFileInvalidError
│   └── ConfigValidationError
├── ResolutionError              control missing or unsupported (fatal)
├── InitError                    initial hardware read failed (fatal)
├── WriteError                   hardware write failed (recoverable)
├── SubscriptionError            hardware event stream lost (fatal to sync)
└── HardwareError
    ├── ParameterNotFoundError
    └── HardwareIOError
```

Startup errors (config, resolution, init) abort the application; there is
no partially-assembled mode. Write errors are logged and the fader keeps the
requested position. A subscription error is surfaced to the operator.
"""

from .base import SessionMixerError
from .config import (
    ConfigError,
    ConfigFileInvalidError,
    ConfigFileNotFoundError,
    ConfigValidationError,
)
from .handlers import format_error_for_display, wrap_pydantic_error
from .hardware import HardwareError, HardwareIOError, ParameterNotFoundError
from .mixer import InitError, ResolutionError, SubscriptionError, WriteError

__all__ = [
    # Base
    "SessionMixerError",
    # Config
    "ConfigError",
    "ConfigFileInvalidError",
    "ConfigFileNotFoundError",
    "ConfigValidationError",
    # Engine
    "InitError",
    "ResolutionError",
    "SubscriptionError",
    "WriteError",
    # Hardware
    "HardwareError",
    "HardwareIOError",
    "ParameterNotFoundError",
    # Handlers
    "format_error_for_display",
    "wrap_pydantic_error",
]
