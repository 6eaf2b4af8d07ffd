"""
================================================================================
Browser Capability
================================================================================

The boundary between page elements and the browser-driving engine.

Page elements only need four operations from a browser:

    locate(selector, timeout_ms, index)   -> element handle
    locate_all(selector)                  -> list of element handles
    wait_until(handle, condition, ...)    -> None, or WaitTimeoutError
    perform(action, handle, *args)        -> action result

`BrowserCapability` spells that contract out as a Protocol, and
`PlaywrightCapability` implements it on top of an already opened
Playwright async Page. Launching browsers is left to the caller.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
import time
from enum import Enum
from typing import Any, Awaitable, Callable, List, Protocol

from loguru import logger
from playwright.async_api import ElementHandle, Page

from .exceptions import WaitTimeoutError
from .locator_config import Selector


# Predicate evaluated against a located element
Condition = Callable[[Any], Awaitable[bool]]


class ElementAction(str, Enum):
    """Actions and reads a capability can perform on an element handle."""
    CLICK = "click"
    CONTEXT_CLICK = "context_click"
    DOUBLE_CLICK = "double_click"
    HOVER = "hover"
    SEND_KEYS = "send_keys"
    CLEAR = "clear"
    GET_ATTRIBUTE = "get_attribute"
    GET_TEXT = "get_text"
    GET_TAG_NAME = "get_tag_name"
    GET_VALUE = "get_value"
    IS_ENABLED = "is_enabled"
    IS_SELECTED = "is_selected"
    IS_DISPLAYED = "is_displayed"


class BrowserCapability(Protocol):
    """Operations a browser-driving engine must provide to page elements."""

    async def locate(self, selector: Selector, timeout_ms: int, index: int = 0) -> Any:
        """Return the ``index``-th match, waiting up to ``timeout_ms`` for it to exist."""
        ...

    async def locate_all(self, selector: Selector) -> List[Any]:
        """Return every current match, in document order."""
        ...

    async def wait_until(
        self,
        handle: Any,
        condition: Condition,
        timeout_ms: int,
        description: str,
    ) -> None:
        """Wait until ``condition(handle)`` holds, or raise WaitTimeoutError."""
        ...

    async def perform(self, action: ElementAction, handle: Any, *args: Any) -> Any:
        """Perform ``action`` on ``handle`` and return its result (if any)."""
        ...


class PlaywrightCapability:
    """
    BrowserCapability backed by a Playwright async Page.

    Usage:
        async with async_playwright() as pw:
            browser = await pw.chromium.launch()
            page = await browser.new_page()
            capability = PlaywrightCapability(page)
            handle = await capability.locate(Selector.css("#kw"), timeout_ms=5000)
    """

    def __init__(self, page: Page, poll_interval_ms: int = 100):
        """
        Args:
            page: Open Playwright page
            poll_interval_ms: Delay between wait_until condition checks
        """
        self.page = page
        self.poll_interval_ms = poll_interval_ms

    async def locate(self, selector: Selector, timeout_ms: int, index: int = 0) -> ElementHandle:
        locator = self.page.locator(selector.engine_query()).nth(index)
        await locator.wait_for(state="attached", timeout=timeout_ms)
        return await locator.element_handle(timeout=timeout_ms)

    async def locate_all(self, selector: Selector) -> List[ElementHandle]:
        return await self.page.query_selector_all(selector.engine_query())

    async def wait_until(
        self,
        handle: Any,
        condition: Condition,
        timeout_ms: int,
        description: str,
    ) -> None:
        deadline = time.monotonic() + timeout_ms / 1000
        while True:
            if await condition(handle):
                return
            if time.monotonic() >= deadline:
                raise WaitTimeoutError(description, timeout_ms)
            await asyncio.sleep(self.poll_interval_ms / 1000)

    async def perform(self, action: ElementAction, handle: ElementHandle, *args: Any) -> Any:
        action = ElementAction(action)
        logger.trace(f"perform {action.value} {args!r}")

        if action is ElementAction.CLICK:
            return await handle.click()
        if action is ElementAction.CONTEXT_CLICK:
            return await handle.click(button="right")
        if action is ElementAction.DOUBLE_CLICK:
            return await handle.dblclick()
        if action is ElementAction.HOVER:
            return await handle.hover()
        if action is ElementAction.SEND_KEYS:
            await handle.focus()
            return await self.page.keyboard.type(*args)
        if action is ElementAction.CLEAR:
            return await handle.fill("")
        if action is ElementAction.GET_ATTRIBUTE:
            return await handle.get_attribute(*args)
        if action is ElementAction.GET_TEXT:
            return await handle.inner_text()
        if action is ElementAction.GET_TAG_NAME:
            return await handle.evaluate("el => el.tagName.toLowerCase()")
        if action is ElementAction.GET_VALUE:
            return await handle.input_value()
        if action is ElementAction.IS_ENABLED:
            return await handle.is_enabled()
        if action is ElementAction.IS_SELECTED:
            return await handle.evaluate("el => Boolean(el.checked || el.selected)")
        if action is ElementAction.IS_DISPLAYED:
            return await handle.is_visible()

        raise ValueError(f"Unsupported element action: {action}")


__all__ = [
    "Condition",
    "ElementAction",
    "BrowserCapability",
    "PlaywrightCapability",
]
