"""
Pytest configuration and shared fixtures for waitassert tests.

Unit tests drive a FakePage that mimics the slice of the Playwright page
API the library touches. Real-browser tests are opt-in via
WAITASSERT_BROWSER_TESTS=1.
"""

import os
import sys
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from waitassert import WaitOptions, reset_failure_state


def browser_tests_enabled() -> bool:
    return os.environ.get("WAITASSERT_BROWSER_TESTS", "").lower() in ("1", "true", "yes")


@dataclass
class FakeConsoleMessage:
    type: str
    text: str
    location: Dict[str, Any] = field(default_factory=dict)


class FakePage:
    """Stand-in for playwright.sync_api.Page."""

    def __init__(self):
        self.selectors: Dict[str, Callable[[], List[Any]]] = {}
        self.handlers: Dict[str, List[Callable]] = {}
        self.waits: List[float] = []
        self.screenshots: List[str] = []
        self.screenshot_error: Optional[Exception] = None

    def set_elements(self, selector: str, elements):
        """Elements may be a list or a callable returning a list."""
        self.selectors[selector] = elements if callable(elements) else (lambda: list(elements))

    def query_selector_all(self, selector: str) -> List[Any]:
        return self.selectors.get(selector, lambda: [])()

    def wait_for_timeout(self, timeout: float) -> None:
        self.waits.append(timeout)
        time.sleep(timeout / 1000)

    def screenshot(self, path: Optional[str] = None, **kwargs) -> bytes:
        if self.screenshot_error is not None:
            raise self.screenshot_error
        data = b"\x89PNG fake"
        if path:
            with open(path, "wb") as f:
                f.write(data)
            self.screenshots.append(path)
        return data

    def on(self, event: str, handler: Callable) -> None:
        self.handlers.setdefault(event, []).append(handler)

    def emit(self, event: str, payload: Any) -> None:
        for handler in self.handlers.get(event, []):
            handler(payload)

    def console(self, type_: str, text: str, **location) -> None:
        self.emit("console", FakeConsoleMessage(type=type_, text=text, location=location))


@pytest.fixture(autouse=True)
def clean_failure_state():
    """Each test starts as if no assertion had failed yet."""
    reset_failure_state()
    yield
    reset_failure_state()


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture
def fast_options(tmp_path) -> WaitOptions:
    """Short timeouts and a throwaway screenshots directory."""
    return WaitOptions(
        default_timeout=0.3,
        failure_timeout=0.05,
        poll_interval=0.01,
        screenshots_path=str(tmp_path / "screenshots"),
    )
