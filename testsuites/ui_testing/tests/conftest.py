"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for UI tests, providing fixtures for browser
management, page objects, and failure screenshots.

Key Features:
- Browser and page lifecycle management (skips when no browser is installed)
- Browser capability and page object fixtures
- Screenshot capture on failure

================================================================================
"""

from typing import AsyncGenerator

import allure
import pytest
from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, async_playwright

from testsuites.ui_testing.framework import PlaywrightCapability
from testsuites.ui_testing.pages import SearchOperations


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Keep each phase's report on the item so fixtures can see the outcome."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture
async def page(request) -> AsyncGenerator[Page, None]:
    """
    Function-scoped page fixture.

    Launches headless Chromium in a fresh context for each test. Tests are
    skipped when the browser cannot be launched (e.g. `playwright install`
    was never run). A full-page screenshot is attached to the Allure
    report when the test fails.
    """
    async with async_playwright() as playwright:
        try:
            browser = await playwright.chromium.launch(headless=True)
        except PlaywrightError as e:
            pytest.skip(f"Chromium could not be launched: {e}")

        context = await browser.new_context(viewport={"width": 1280, "height": 720})
        page = await context.new_page()
        yield page

        report = getattr(request.node, "rep_call", None)
        if report is not None and report.failed:
            try:
                allure.attach(
                    await page.screenshot(full_page=True),
                    name="failure_screenshot",
                    attachment_type=allure.attachment_type.PNG,
                )
            except PlaywrightError as e:
                logger.warning(f"Failed to capture screenshot on failure: {e}")

        await context.close()
        await browser.close()


@pytest.fixture
def capability(page: Page) -> PlaywrightCapability:
    return PlaywrightCapability(page, poll_interval_ms=50)


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def search_operations(capability: PlaywrightCapability) -> SearchOperations:
    """Provides SearchOperations bound to the test page."""
    return SearchOperations(capability)
