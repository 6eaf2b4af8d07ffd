"""
================================================================================
Page Element
================================================================================

Resilient wrapper around a single element on the page.

A PageElement holds a selector and a LocatorConfig. Every action first
resolves a fresh element handle through a two-phase wait:

    START -> LOCATING -> LOCATED -> VERIFYING_VISIBLE -> READY
                 |                          |
                 v                          v
           LOCATE_FAILED             VISIBILITY_FAILED

then performs the action through the browser capability. Intermediate
attempts fail silently; only exhaustion surfaces as LocateError or
VisibilityError. Driver failures during the action itself surface as
ElementActionError.

Usage:
    search_box = PageElement(capability, Selector.css("#kw"), max_attempts=3)
    await search_box.send_keys("playwright")
    assert await search_box.get_textarea_value() == "playwright"

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, List, Optional, Union

import allure
from loguru import logger

from uitest_tools.report_tools.allure_utils import attach_text

from .capability import BrowserCapability, ElementAction
from .exceptions import ElementActionError, LocateError, VisibilityError
from .locator_config import ConfigOverrides, LocatorConfig, Selector, config_as_dict, merge_config

if TYPE_CHECKING:
    from .page_elements import PageElements


class ResolutionState(str, Enum):
    """States of a single element resolution."""
    START = "start"
    LOCATING = "locating"
    LOCATED = "located"
    VERIFYING_VISIBLE = "verifying_visible"
    READY = "ready"
    LOCATE_FAILED = "locate_failed"
    VISIBILITY_FAILED = "visibility_failed"


TERMINAL_STATES = frozenset({
    ResolutionState.READY,
    ResolutionState.LOCATE_FAILED,
    ResolutionState.VISIBILITY_FAILED,
})


@dataclass
class Resolution:
    """
    Record of one resolution call.

    Created fresh for every call and only kept afterwards when attached to
    a raised error.
    """
    selector: Selector
    states: List[ResolutionState] = field(default_factory=lambda: [ResolutionState.START])
    locate_attempts: int = 0
    visibility_checks: int = 0

    @property
    def state(self) -> ResolutionState:
        return self.states[-1]

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES

    def advance(self, state: ResolutionState) -> None:
        self.states.append(state)
        logger.debug(f"{self.selector}: {self.states[-2].value} -> {state.value}")


class PageElement:
    """
    A single element on the page, resolved anew for every action.

    Args:
        capability: Browser capability used to locate and act
        selector: Selector, or a plain string taken as CSS
        config: LocatorConfig or mapping of config fields
        **overrides: Individual config fields (max_attempts, timeout_ms, ...)
    """

    def __init__(
        self,
        capability: BrowserCapability,
        selector: Union[Selector, str],
        config: ConfigOverrides = None,
        **overrides: Any,
    ):
        if isinstance(selector, str):
            selector = Selector.css(selector)
        self.capability = capability
        self.selector = selector
        self.config: LocatorConfig = merge_config(config, **overrides)
        # Injected awaitables are awaited once and shared by every action
        self._injected_future: Optional[asyncio.Future] = None

    def __repr__(self) -> str:
        return f"PageElement({self.selector}, description={self.config.description!r})"

    @property
    def description(self) -> str:
        return self.config.description

    # =========================================================================
    # Resolution
    # =========================================================================

    async def resolve(self) -> Any:
        """
        Resolve the live element handle.

        Returns the injected element when one is configured. Otherwise runs
        the locate phase (``max_attempts`` tries) and the visibility phase
        (``effective_visibility_attempts`` tries), each try waiting up to
        ``timeout_ms``.

        Raises:
            LocateError: The element never appeared
            VisibilityError: The element appeared but never became visible
            ElementActionError: The injected element could not be awaited
        """
        config = self.config
        resolution = Resolution(self.selector)

        if config.has_preresolved_element:
            return await self._injected_element(resolution)

        logger.trace(f"Resolving {self.selector} with {config_as_dict(config)}")
        handle = await self._locate(resolution)
        await self._verify_visible(resolution, handle)
        resolution.advance(ResolutionState.READY)
        return handle

    async def _injected_element(self, resolution: Resolution) -> Any:
        element = self.config.preresolved_element
        if inspect.isawaitable(element):
            if self._injected_future is None:
                self._injected_future = asyncio.ensure_future(element)
            try:
                element = await self._injected_future
            except Exception as e:
                raise ElementActionError(
                    self.selector, self.description, "resolve injected element", cause=e
                ) from e
        resolution.advance(ResolutionState.READY)
        return element

    async def _locate(self, resolution: Resolution) -> Any:
        config = self.config
        resolution.advance(ResolutionState.LOCATING)
        last_error: Optional[Exception] = None

        for attempt in range(1, config.max_attempts + 1):
            resolution.locate_attempts = attempt
            try:
                handle = await self.capability.locate(
                    self.selector, config.timeout_ms, index=config.element_index
                )
            except Exception as e:
                last_error = e
                logger.debug(
                    f"Locate attempt {attempt}/{config.max_attempts} failed for "
                    f"{self.selector}: {e}"
                )
                continue
            resolution.advance(ResolutionState.LOCATED)
            return handle

        resolution.advance(ResolutionState.LOCATE_FAILED)
        error = LocateError(
            self.selector,
            self.description,
            attempts=config.max_attempts,
            cause=last_error,
            resolution=resolution,
        )
        logger.warning(str(error))
        raise error from last_error

    async def _verify_visible(self, resolution: Resolution, handle: Any) -> None:
        config = self.config
        attempts = config.effective_visibility_attempts
        resolution.advance(ResolutionState.VERIFYING_VISIBLE)
        last_error: Optional[Exception] = None

        for attempt in range(1, attempts + 1):
            resolution.visibility_checks = attempt
            try:
                await self.capability.wait_until(
                    handle,
                    self._is_displayed,
                    config.timeout_ms,
                    f"Element is not visible: {self.description}",
                )
            except Exception as e:
                last_error = e
                logger.debug(
                    f"Visibility check {attempt}/{attempts} failed for "
                    f"{self.selector}: {e}"
                )
                continue
            return

        resolution.advance(ResolutionState.VISIBILITY_FAILED)
        error = VisibilityError(
            self.selector,
            self.description,
            attempts=attempts,
            cause=last_error,
            resolution=resolution,
        )
        logger.warning(str(error))
        raise error from last_error

    async def _is_displayed(self, handle: Any) -> bool:
        return bool(await self.capability.perform(ElementAction.IS_DISPLAYED, handle))

    async def _act(self, action: ElementAction, *args: Any) -> Any:
        verb = action.value.replace("_", " ")
        with allure.step(f"{verb}: {self.selector}"):
            try:
                handle = await self.resolve()
            except ElementActionError as error:
                attach_text(str(error), name=f"{verb} failed")
                raise

            try:
                return await self.capability.perform(action, handle, *args)
            except Exception as e:
                error = ElementActionError(self.selector, self.description, verb, cause=e)
                logger.warning(str(error))
                attach_text(str(error), name=f"{verb} failed")
                raise error from e

    # =========================================================================
    # Actions
    # =========================================================================

    async def click(self) -> None:
        """Click the element."""
        await self._act(ElementAction.CLICK)

    async def context_click(self) -> None:
        """Right-click the element."""
        await self._act(ElementAction.CONTEXT_CLICK)

    async def double_click(self) -> None:
        await self._act(ElementAction.DOUBLE_CLICK)

    async def hover(self) -> None:
        """Move the mouse over the element."""
        await self._act(ElementAction.HOVER)

    async def send_keys(self, text: str) -> None:
        """
        Type ``text`` into the element.

        Existing content is kept; call clear() first to replace it.
        """
        await self._act(ElementAction.SEND_KEYS, text)

    async def clear(self) -> None:
        await self._act(ElementAction.CLEAR)

    # =========================================================================
    # Reads
    # =========================================================================

    async def get_attribute(self, name: str) -> Optional[str]:
        """
        Read an attribute of the element.

        Returns:
            Attribute value, or None when the element has no such attribute
        """
        return await self._act(ElementAction.GET_ATTRIBUTE, name)

    async def get_text(self) -> str:
        """Rendered text of the element."""
        return await self._act(ElementAction.GET_TEXT)

    async def get_tag_name(self) -> str:
        return await self._act(ElementAction.GET_TAG_NAME)

    async def get_textarea_value(self) -> str:
        """Current value of a textarea (or input), including typed text."""
        return await self._act(ElementAction.GET_VALUE)

    async def is_enabled(self) -> bool:
        return bool(await self._act(ElementAction.IS_ENABLED))

    async def is_selected(self) -> bool:
        """Whether a checkbox/radio is checked or an option is selected."""
        return bool(await self._act(ElementAction.IS_SELECTED))

    async def is_displayed(self) -> bool:
        return bool(await self._act(ElementAction.IS_DISPLAYED))

    # =========================================================================
    # Scoping
    # =========================================================================

    def _scoped(self, selector: Selector, config: ConfigOverrides, overrides: dict) -> "PageElement":
        return PageElement(self.capability, selector, config, **overrides)

    def child_id(self, element_id: str, config: ConfigOverrides = None, **overrides: Any) -> "PageElement":
        """Descendant element with the given id (CSS selectors only)."""
        return self._scoped(self.selector.child_id(element_id), config, overrides)

    def child_class(self, class_name: str, config: ConfigOverrides = None, **overrides: Any) -> "PageElement":
        return self._scoped(self.selector.child_class(class_name), config, overrides)

    def child_tag(self, tag: str, config: ConfigOverrides = None, **overrides: Any) -> "PageElement":
        return self._scoped(self.selector.child_tag(tag), config, overrides)

    def child_attribute(
        self,
        key: str,
        value: str,
        config: ConfigOverrides = None,
        **overrides: Any,
    ) -> "PageElement":
        return self._scoped(self.selector.child_attribute(key, value), config, overrides)

    def child_css(self, css: str, config: ConfigOverrides = None, **overrides: Any) -> "PageElement":
        return self._scoped(self.selector.child_css(css), config, overrides)

    def child_xpath(self, expression: str, config: ConfigOverrides = None, **overrides: Any) -> "PageElement":
        """Element found by appending ``expression`` to this XPath selector."""
        return self._scoped(self.selector.child_xpath(expression), config, overrides)

    def elements(self) -> "PageElements":
        """All elements matching this element's selector."""
        from .page_elements import PageElements

        return PageElements(self.capability, self.selector, description=self.description)


__all__ = [
    "ResolutionState",
    "Resolution",
    "PageElement",
]
