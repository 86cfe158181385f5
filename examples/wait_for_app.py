"""
Example: Waiting for a single-page app to finish rendering

Opens a URL, waits for an element to show up (or for the console to report
an error), then checks its text with a polling assertion. On failure the
error names the screenshot and lists the console errors.

Usage:
    python examples/wait_for_app.py http://localhost:5000 "#app" "Hello"

    # Stretch the wait on slow machines
    WAITASSERT_DEFAULT_TIMEOUT=60 python examples/wait_for_app.py ...
"""

import logging
import os
import sys

from playwright.sync_api import sync_playwright

# Add src to path for local development
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from waitassert import BrowserAssertFailedError, create_wait_assert


def main():
    url = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:5000"
    selector = sys.argv[2] if len(sys.argv) > 2 else "#app"
    expected_text = sys.argv[3] if len(sys.argv) > 3 else ""

    logging.basicConfig(level=logging.INFO)

    with sync_playwright() as p:
        browser = p.chromium.launch(headless=True)
        page = browser.new_page()

        waits = create_wait_assert(page)
        page.goto(url)

        try:
            element = waits.wait_until_element_exists_or_logs_contain_errors(selector)
            if expected_text:
                waits.contains(expected_text, element.inner_text)
        except BrowserAssertFailedError as e:
            print(e)
            print()
            print(waits.context.generate_report())
            sys.exit(1)
        finally:
            browser.close()

    print(f"{selector} rendered on {url}")


if __name__ == "__main__":
    main()
