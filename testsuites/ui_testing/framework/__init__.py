"""
================================================================================
UI Testing Framework
================================================================================

Resilient page elements on top of a pluggable browser capability.

Components:
    - locator_config: Selector and LocatorConfig value objects
    - capability: Browser capability protocol and its Playwright implementation
    - page_element: Single element with two-phase locate/visibility waits
    - page_elements: Element-set accessor with bulk actions
    - page_base: Base page object with element factories
    - exceptions: Error taxonomy

Author: Automation Team
License: MIT
================================================================================
"""

from .capability import BrowserCapability, ElementAction, PlaywrightCapability
from .exceptions import (
    AggregateActionError,
    ElementActionError,
    EmptyResultError,
    IndexOutOfRangeError,
    LocateError,
    PageElementError,
    VisibilityError,
    WaitTimeoutError,
)
from .locator_config import LocatorConfig, Selector, SelectorStrategy, merge_config
from .page_base import BasePage
from .page_element import PageElement, Resolution, ResolutionState
from .page_elements import PageElements

__all__ = [
    "BrowserCapability",
    "ElementAction",
    "PlaywrightCapability",
    "Selector",
    "SelectorStrategy",
    "LocatorConfig",
    "merge_config",
    "PageElement",
    "PageElements",
    "Resolution",
    "ResolutionState",
    "BasePage",
    "PageElementError",
    "ElementActionError",
    "LocateError",
    "VisibilityError",
    "IndexOutOfRangeError",
    "EmptyResultError",
    "AggregateActionError",
    "WaitTimeoutError",
]
