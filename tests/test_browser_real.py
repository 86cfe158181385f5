"""
End-to-end tests against a real Chromium page.

These need `playwright install chromium` and are skipped unless
WAITASSERT_BROWSER_TESTS=1 is set.
"""

import os

import pytest
from playwright.sync_api import sync_playwright

from conftest import browser_tests_enabled
from waitassert import BrowserAssertFailedError, WaitOptions, checks, create_wait_assert

pytestmark = [
    pytest.mark.browser,
    pytest.mark.skipif(not browser_tests_enabled(), reason="WAITASSERT_BROWSER_TESTS not set"),
]

DELAYED_PAGE = """
<html><body>
<div id="status">loading</div>
<script>
  setTimeout(() => {
    document.getElementById('status').textContent = 'ready';
    const list = document.createElement('ul');
    list.innerHTML = '<li>one</li><li>two</li>';
    document.body.appendChild(list);
  }, 300);
</script>
</body></html>
"""

BROKEN_PAGE = """
<html><body>
<script>
  console.error('Failed to boot the app');
</script>
</body></html>
"""


@pytest.fixture(scope="session")
def browser():
    """Shared browser instance for all tests."""
    with sync_playwright() as p:
        browser = p.chromium.launch(headless=True)
        yield browser
        browser.close()


@pytest.fixture
def page(browser):
    """Fresh page for each test."""
    page = browser.new_page()
    yield page
    page.close()


@pytest.fixture
def options(tmp_path):
    return WaitOptions(
        default_timeout=5.0,
        failure_timeout=1.0,
        poll_interval=0.05,
        screenshots_path=str(tmp_path / "screenshots"),
    )


class TestRealBrowser:

    def test_waits_for_async_render(self, page, options):
        waits = create_wait_assert(page, options=options)
        page.set_content(DELAYED_PAGE)

        waits.equal("ready", lambda: page.inner_text("#status"))
        items = waits.element("ul")
        assert items.inner_text().split() == ["one", "two"]
        waits.collection(
            lambda: [li.inner_text() for li in page.query_selector_all("li")],
            lambda text: checks.equal("one", text),
            lambda text: checks.equal("two", text),
        )

    def test_failure_has_screenshot(self, page, options):
        waits = create_wait_assert(page, options=options)
        page.set_content(DELAYED_PAGE)

        with pytest.raises(BrowserAssertFailedError) as exc_info:
            waits.exists("#never", timeout=0.3)

        assert os.path.exists(exc_info.value.screenshot_path)

    def test_console_error_fails_fast(self, page, options):
        waits = create_wait_assert(page, options=options)
        page.set_content(BROKEN_PAGE)

        with pytest.raises(BrowserAssertFailedError) as exc_info:
            waits.wait_until_element_exists_or_logs_contain_errors("#app")

        assert "Failed to boot the app" in str(exc_info.value)
