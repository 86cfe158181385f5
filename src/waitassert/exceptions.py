"""Errors raised by polling assertions."""

import os
from typing import Optional, Sequence

from .context import ConsoleLog


class BrowserLogErrorsError(Exception):
    """Raised inside a polled check to stop polling because the console has errors."""

    def __init__(self, errors: Sequence[ConsoleLog]):
        self.errors = list(errors)
        super().__init__(f"The browser console logged {len(self.errors)} error(s)")


class BrowserAssertFailedError(AssertionError):
    """
    A polling assertion never passed.

    Carries the last failure of the assertion itself, the browser console
    errors seen while polling, and the screenshot taken at the moment of
    failure.
    """

    def __init__(
        self,
        errors: Sequence[ConsoleLog],
        inner_exception: BaseException,
        screenshot_path: Optional[str],
    ):
        self.errors = list(errors)
        self.inner_exception = inner_exception
        self.screenshot_path = screenshot_path
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        lines = [str(self.inner_exception) or type(self.inner_exception).__name__]
        if self.screenshot_path and os.path.exists(self.screenshot_path):
            lines.append(f"Screen shot captured at '{self.screenshot_path}'.")
        if self.errors:
            lines.append("Encountered browser errors while running the assertion.")
            lines.extend(str(entry) for entry in self.errors)
        else:
            lines.append("No browser errors found while running the assertion.")
        return "\n".join(lines)
