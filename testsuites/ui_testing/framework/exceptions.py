"""
================================================================================
Page Element Errors
================================================================================

Error taxonomy for element location and interaction.

    PageElementError
    ├── ElementActionError        action on a resolved element failed
    │   ├── LocateError           element never appeared
    │   └── VisibilityError       element appeared but never became visible
    ├── IndexOutOfRangeError      element set has no element at the index
    ├── EmptyResultError          element set is empty
    └── AggregateActionError      bulk action failed for one or more elements

    WaitTimeoutError              raised by a browser capability when a wait
                                  condition does not hold in time

Every error carries the selector and description it was raised for, so a
failure can be diagnosed without re-running the test.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from .page_element import Resolution


def _detail(cause: Optional[BaseException]) -> str:
    if cause is None:
        return ""
    text = str(cause).strip()
    return f"{type(cause).__name__}: {text}" if text else type(cause).__name__


class PageElementError(Exception):
    """Base class for all page element errors."""

    def __init__(self, message: str, selector: Any = None, description: str = ""):
        super().__init__(message)
        self.selector = selector
        self.description = description


class ElementActionError(PageElementError):
    """Raised when an action on an element fails at the driver level."""

    def __init__(
        self,
        selector: Any,
        description: str,
        action: str,
        cause: Optional[BaseException] = None,
        message: Optional[str] = None,
    ):
        self.action = action
        self.cause = cause
        if message is None:
            message = f"Failed to {action} on element: {selector}, describe: {description}"
            if cause is not None:
                message += f"\n{_detail(cause)}"
        super().__init__(message, selector=selector, description=description)


class LocateError(ElementActionError):
    """Raised when the element never appeared in the document."""

    def __init__(
        self,
        selector: Any,
        description: str,
        attempts: int,
        cause: Optional[BaseException] = None,
        resolution: Optional["Resolution"] = None,
    ):
        self.attempts = attempts
        self.resolution = resolution
        message = (
            f"Failed to find element using {selector} after {attempts} "
            f"attempt(s), describe: {description}"
        )
        if cause is not None:
            message += f"\n{_detail(cause)}"
        super().__init__(selector, description, "locate", cause=cause, message=message)


class VisibilityError(ElementActionError):
    """Raised when the element was located but never became visible."""

    def __init__(
        self,
        selector: Any,
        description: str,
        attempts: int,
        cause: Optional[BaseException] = None,
        resolution: Optional["Resolution"] = None,
    ):
        self.attempts = attempts
        self.resolution = resolution
        message = (
            f"Element is not visible: {selector} after {attempts} "
            f"attempt(s), describe: {description}"
        )
        if cause is not None:
            message += f"\n{_detail(cause)}"
        super().__init__(selector, description, "verify visibility", cause=cause, message=message)


class IndexOutOfRangeError(PageElementError):
    """Raised when an element set has no element at the requested index."""

    def __init__(self, selector: Any, index: int, count: int, description: str = ""):
        self.index = index
        self.count = count
        super().__init__(
            f"Element not found at index {index} using {selector} "
            f"({count} element(s) matched)",
            selector=selector,
            description=description,
        )


class EmptyResultError(PageElementError):
    """Raised when first/last is requested from an empty element set."""

    def __init__(self, selector: Any, description: str = ""):
        super().__init__(
            f"No elements found using {selector}",
            selector=selector,
            description=description,
        )


class AggregateActionError(PageElementError):
    """
    Raised when a bulk action failed for at least one element.

    Attributes:
        action: Name of the bulk action (e.g. "click")
        failures: (index, underlying exception) for every failed element
        total: Number of elements the action was issued to
    """

    def __init__(
        self,
        selector: Any,
        action: str,
        failures: Sequence[Tuple[int, BaseException]],
        total: int,
        description: str = "",
    ):
        self.action = action
        self.failures: List[Tuple[int, BaseException]] = list(failures)
        self.total = total
        lines = [
            f"Failed to {action} {len(self.failures)} of {total} element(s) using {selector}:"
        ]
        lines.extend(f"  - index {index}: {_detail(error)}" for index, error in self.failures)
        super().__init__("\n".join(lines), selector=selector, description=description)

    @property
    def failed_indexes(self) -> List[int]:
        return [index for index, _ in self.failures]


class WaitTimeoutError(Exception):
    """Raised when a wait condition does not hold within the timeout."""

    def __init__(self, description: str, timeout_ms: int):
        self.description = description
        self.timeout_ms = timeout_ms
        super().__init__(f"Timeout after {timeout_ms}ms waiting for: {description}")


__all__ = [
    "PageElementError",
    "ElementActionError",
    "LocateError",
    "VisibilityError",
    "IndexOutOfRangeError",
    "EmptyResultError",
    "AggregateActionError",
    "WaitTimeoutError",
]
