"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Page objects declare their elements through the find_* factories; each
factory returns a PageElement bound to the page's browser capability:

    class LoginPage(BasePage):
        def __init__(self, capability):
            super().__init__(capability)
            self.username = self.find_by_id("username", max_attempts=3)
            self.submit = self.find_by_css("button[type='submit']")

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Union

from playwright.async_api import Page

from .capability import BrowserCapability, PlaywrightCapability
from .locator_config import ConfigOverrides, Selector
from .page_element import PageElement
from .page_elements import PageElements


class BasePage:
    """
    Base class for all page objects.

    Args:
        capability: Browser capability shared by every element of the page
    """

    def __init__(self, capability: BrowserCapability):
        self.capability = capability

    @classmethod
    def from_page(cls, page: Page, **kwargs: Any) -> "BasePage":
        """Build the page object on top of an open Playwright page."""
        return cls(PlaywrightCapability(page), **kwargs)

    def _element(self, selector: Selector, config: ConfigOverrides, overrides: dict) -> PageElement:
        return PageElement(self.capability, selector, config, **overrides)

    # =========================================================================
    # Element Factories
    # =========================================================================

    def find_by_id(self, element_id: str, config: ConfigOverrides = None, **overrides: Any) -> PageElement:
        """Element by id attribute."""
        return self._element(Selector.css(f"#{element_id}"), config, overrides)

    def find_by_class_name(self, class_name: str, config: ConfigOverrides = None, **overrides: Any) -> PageElement:
        return self._element(Selector.css(f".{class_name}"), config, overrides)

    def find_by_tag(self, tag: str, config: ConfigOverrides = None, **overrides: Any) -> PageElement:
        return self._element(Selector.css(tag), config, overrides)

    def find_by_attribute(
        self,
        key: str,
        value: str,
        config: ConfigOverrides = None,
        **overrides: Any,
    ) -> PageElement:
        """Element by attribute value, e.g. find_by_attribute("data-testid", "save")."""
        return self._element(Selector.css("").child_attribute(key, value), config, overrides)

    def find_by_css(self, selector: str, config: ConfigOverrides = None, **overrides: Any) -> PageElement:
        return self._element(Selector.css(selector), config, overrides)

    def find_by_xpath(self, expression: str, config: ConfigOverrides = None, **overrides: Any) -> PageElement:
        return self._element(Selector.xpath(expression), config, overrides)

    def find_all(self, selector: Union[Selector, str], description: str = "elements not found") -> PageElements:
        """Every element matching ``selector`` (plain strings are CSS)."""
        return PageElements(self.capability, selector, description=description)


__all__ = [
    "BasePage",
]
