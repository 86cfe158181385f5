"""
Timeouts and artifact locations for polling assertions.

Values come from the environment so CI can stretch or shrink waits without
touching test code:

    WAITASSERT_DEFAULT_TIMEOUT   seconds to poll before failing (default 20)
    WAITASSERT_FAILURE_TIMEOUT   seconds to poll once any assertion failed (default 3)
    WAITASSERT_POLL_INTERVAL     seconds between attempts (default 0.5)
    WAITASSERT_SCREENSHOTS_PATH  where failure screenshots go ("" disables)
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class WaitOptions:
    """Configuration for polling assertions."""
    default_timeout: float = 20.0  # Total timeout in seconds
    failure_timeout: float = 3.0  # Used after the first failure in the run
    poll_interval: float = 0.5  # Time between retries
    screenshots_path: Optional[str] = "screenshots"

    @classmethod
    def from_env(cls) -> "WaitOptions":
        screenshots_path = os.environ.get("WAITASSERT_SCREENSHOTS_PATH", "screenshots")
        return cls(
            default_timeout=_float_env("WAITASSERT_DEFAULT_TIMEOUT", 20.0),
            failure_timeout=_float_env("WAITASSERT_FAILURE_TIMEOUT", 3.0),
            poll_interval=_float_env("WAITASSERT_POLL_INTERVAL", 0.5),
            screenshots_path=screenshots_path or None,
        )


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number of seconds, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {raw!r}")
    return value


_options: Optional[WaitOptions] = None


def get_options() -> WaitOptions:
    """Process-wide options, read from the environment on first use."""
    global _options
    if _options is None:
        _options = WaitOptions.from_env()
    return _options


def set_options(options: Optional[WaitOptions]) -> None:
    """Replace the process-wide options (None re-reads the environment)."""
    global _options
    _options = options
