"""
Polling Assertions

Plain assertions hooked into Playwright's wait loop: a check is retried
against the live page until it passes or the timeout runs out, and a
timeout surfaces as one BrowserAssertFailedError with a screenshot and the
browser console errors attached.
"""

import logging
import os
import time
import uuid
from typing import Any, Callable, Iterable, List, Optional

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from . import checks
from .context import ConsoleLog, Context, LogLevel
from .exceptions import BrowserAssertFailedError, BrowserLogErrorsError
from .options import WaitOptions, get_options

logger = logging.getLogger(__name__)

# Set once any polling assertion in the process fails. Later assertions then
# use the shorter failure timeout. Concurrent callers may race on it; the
# worst case is one more assertion using the default timeout.
_test_run_failed = False


def reset_failure_state() -> None:
    """Forget earlier failures so the default timeout applies again."""
    global _test_run_failed
    _test_run_failed = False


def has_failed() -> bool:
    """True once any polling assertion in this process has failed."""
    return _test_run_failed


def wait_until(
    page,
    condition: Callable[[], bool],
    timeout: float,
    poll_interval: float,
) -> None:
    """
    Call condition until it returns True, waiting on the page in between.

    The wait goes through page.wait_for_timeout rather than time.sleep so
    Playwright keeps dispatching console and page events while we poll.

    Raises:
        playwright.sync_api.TimeoutError: if the deadline passes first
    """
    deadline = time.monotonic() + timeout
    attempts = 0

    while True:
        attempts += 1
        if condition():
            return

        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise PlaywrightTimeoutError(
                f"Condition not met after {attempts} attempt(s) in {timeout}s"
            )
        page.wait_for_timeout(min(poll_interval, remaining) * 1000)


def wait_assert(
    page,
    assertion: Callable[[], Any],
    timeout: Optional[float] = None,
    context: Optional[Context] = None,
    options: Optional[WaitOptions] = None,
) -> None:
    """
    Retry an assertion against the page until it passes or times out.

    Args:
        page: Playwright page the assertion reads from
        assertion: Zero-argument callable that raises when the check fails
        timeout: Seconds to poll (defaults from options, shorter after a failure)
        context: Console capture attached to the page, for error reporting
        options: Overrides the process-wide WaitOptions

    Raises:
        BrowserAssertFailedError: if the assertion never passed, or the
            console logged errors during a fail-fast check
    """
    global _test_run_failed

    options = options or get_options()
    if timeout is None:
        timeout = options.failure_timeout if _test_run_failed else options.default_timeout

    last_exception: Optional[BaseException] = None

    def attempt() -> bool:
        nonlocal last_exception
        try:
            assertion()
            return True
        except BrowserLogErrorsError:
            raise
        except Exception as e:
            last_exception = e
            logger.debug("Assertion not satisfied yet: %s", e)
            return False

    try:
        wait_until(page, attempt, timeout, options.poll_interval)
    except (BrowserLogErrorsError, PlaywrightTimeoutError) as e:
        _test_run_failed = True

        if isinstance(e, BrowserLogErrorsError):
            logger.warning("Browser console errors while waiting: %d error(s)", len(e.errors))
            errors = e.errors
        else:
            logger.warning("Assertion still failing after %ss", timeout)
            errors = _severe_logs(context)

        screenshot_path = _screenshot_path(options)
        if screenshot_path:
            take_screenshot(page, screenshot_path)

        inner = last_exception if last_exception is not None else _capture_exception(assertion)
        raise BrowserAssertFailedError(errors, inner, screenshot_path) from inner


def _severe_logs(context: Optional[Context]) -> List[ConsoleLog]:
    if context is None or not context.attached:
        return []
    return context.take_browser_logs(LogLevel.ERROR)


def _screenshot_path(options: WaitOptions) -> Optional[str]:
    if not options.screenshots_path:
        return None
    file_id = f"{uuid.uuid4().hex}.png"
    return os.path.join(os.path.abspath(options.screenshots_path), file_id)


def _capture_exception(assertion: Callable[[], Any]) -> BaseException:
    try:
        assertion()
    except Exception as e:
        return e
    return RuntimeError("The assertion succeeded after the timeout.")


def take_screenshot(page, screenshot_path: str) -> bool:
    """Save a PNG of the page. Failures are logged, never raised."""
    try:
        os.makedirs(os.path.dirname(screenshot_path), exist_ok=True)
        page.screenshot(path=screenshot_path)
        return True
    except Exception:
        logger.warning("Failed to take a screenshot at %s", screenshot_path, exc_info=True)
        return False


class WaitAssert:
    """
    Polling versions of the usual assertions, bound to one page.

    Usage:
        waits = WaitAssert(page, context=context)

        waits.equal("Welcome", lambda: page.inner_text("h1"))
        waits.exists("#dashboard")
        button = waits.element("button.submit")
        waits.true(lambda: button.is_enabled(), timeout=5)

    Each call polls until its check passes and raises
    BrowserAssertFailedError otherwise.
    """

    def __init__(
        self,
        page,
        context: Optional[Context] = None,
        options: Optional[WaitOptions] = None,
    ):
        self.page = page
        self.context = context
        self.options = options

    @staticmethod
    def reset_failure_state() -> None:
        reset_failure_state()

    def that(self, assertion: Callable[[], Any], timeout: Optional[float] = None) -> None:
        """Poll an arbitrary assertion."""
        wait_assert(self.page, assertion, timeout, self.context, self.options)

    def equal(self, expected: Any, actual: Callable[[], Any], timeout: Optional[float] = None) -> None:
        self.that(lambda: checks.equal(expected, actual()), timeout)

    def true(self, actual: Callable[[], Any], timeout: Optional[float] = None) -> None:
        self.that(lambda: checks.true(actual()), timeout)

    def false(self, actual: Callable[[], Any], timeout: Optional[float] = None) -> None:
        self.that(lambda: checks.false(actual()), timeout)

    def contains(
        self,
        expected_substring: str,
        actual_string: Callable[[], str],
        timeout: Optional[float] = None,
    ) -> None:
        self.that(lambda: checks.contains(expected_substring, actual_string()), timeout)

    def collection(
        self,
        actual_values: Callable[[], Iterable],
        *inspectors: Callable[[Any], Any],
        timeout: Optional[float] = None,
    ) -> None:
        self.that(lambda: checks.collection(actual_values(), *inspectors), timeout)

    def empty(self, actual_values: Callable[[], Iterable], timeout: Optional[float] = None) -> None:
        self.that(lambda: checks.empty(actual_values()), timeout)

    def single(self, actual_values: Callable[[], Iterable], timeout: Optional[float] = None) -> Any:
        """Wait for exactly one item and return it."""
        found = []

        def check():
            found[:] = [checks.single(actual_values())]

        self.that(check, timeout)
        return found[0]

    def exists(self, selector: str, timeout: Optional[float] = None) -> None:
        """Wait until the selector matches at least one element."""
        self.that(lambda: checks.not_empty(self.page.query_selector_all(selector)), timeout)

    def element(self, selector: str, timeout: Optional[float] = None):
        """Wait for the selector and return the first matching ElementHandle."""
        found = []

        def check():
            found[:] = [self._first_match(selector)]

        self.that(check, timeout)
        return found[0]

    def _first_match(self, selector: str):
        elements = self.page.query_selector_all(selector)
        checks.not_empty(elements)
        return elements[0]

    def wait_until_element_exists_or_logs_contain_errors(
        self,
        selector: str,
        timeout: Optional[float] = None,
    ):
        """
        Wait for the selector, but give up as soon as the console logs an error.

        Without an attached Context there is nothing to watch, and this
        behaves like element().
        """

        found = []

        def check():
            if self.context is not None and self.context.attached:
                # Consumes what it reads, so errors already reported
                # don't fail later waits.
                errors = self.context.take_browser_logs(LogLevel.ERROR)
                if errors:
                    raise BrowserLogErrorsError(errors)
            found[:] = [self._first_match(selector)]

        self.that(check, timeout)
        return found[0]


def create_wait_assert(page, options: Optional[WaitOptions] = None) -> WaitAssert:
    """
    Create a WaitAssert with a console Context attached to the page.

    Attach before navigating so errors from the initial load are captured.
    """
    context = Context().attach_to_page(page)
    return WaitAssert(page, context=context, options=options)
