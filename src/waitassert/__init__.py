"""
waitassert - Polling assertions for Playwright E2E tests

Pages render asynchronously, so a check that fails right now may pass half
a second later. waitassert retries ordinary assertions against the live
page until they pass or a timeout runs out. When they never pass you get a
single failure carrying:
1. The last assertion error
2. A screenshot of the page at the moment of failure
3. Error-level browser console messages captured during the test

Quick Start:
    ```python
    from playwright.sync_api import sync_playwright
    from waitassert import create_wait_assert

    with sync_playwright() as p:
        browser = p.chromium.launch()
        page = browser.new_page()

        # Attaches a console Context before navigation
        waits = create_wait_assert(page)
        page.goto("http://localhost:5000")

        waits.equal("Counter: 1", lambda: page.inner_text("#counter"))
        waits.exists("table.results tr")
        waits.wait_until_element_exists_or_logs_contain_errors("#app")

        browser.close()
    ```

Custom checks:
    ```python
    from waitassert import checks, wait_assert

    def cart_has_items():
        checks.equal(3, len(page.query_selector_all(".cart-item")))

    wait_assert(page, cart_has_items, timeout=5)
    ```
"""

from .assertions import (
    WaitAssert,
    create_wait_assert,
    has_failed,
    reset_failure_state,
    take_screenshot,
    wait_assert,
    wait_until,
)
from .context import (
    ConsoleLog,
    Context,
    LogLevel,
)
from .exceptions import (
    BrowserAssertFailedError,
    BrowserLogErrorsError,
)
from .options import (
    WaitOptions,
    get_options,
    set_options,
)

__version__ = "0.1.0"
__license__ = "MIT"

__all__ = [
    # Main entry points
    "WaitAssert",
    "create_wait_assert",
    "wait_assert",
    "wait_until",
    "reset_failure_state",
    "has_failed",
    "take_screenshot",
    # Context
    "Context",
    "ConsoleLog",
    "LogLevel",
    # Errors
    "BrowserAssertFailedError",
    "BrowserLogErrorsError",
    # Configuration
    "WaitOptions",
    "get_options",
    "set_options",
]
