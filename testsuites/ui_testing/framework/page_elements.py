"""
================================================================================
Page Elements
================================================================================

Accessor for every element matching a selector.

Nothing is cached: each call re-queries the document, so the result always
reflects the page at call time.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
from typing import Any, List, Tuple, Union

import allure
from loguru import logger

from uitest_tools.report_tools.allure_utils import attach_json

from .capability import BrowserCapability, ElementAction
from .exceptions import (
    AggregateActionError,
    ElementActionError,
    EmptyResultError,
    IndexOutOfRangeError,
)
from .locator_config import DEFAULT_DESCRIPTION, Selector


class PageElements:
    """
    A group of elements located by one selector.

    Usage:
        rows = PageElements(capability, Selector.css("table tr"))
        assert await rows.count() == 3
        header = await rows.first()
        await rows.click_all()
    """

    def __init__(
        self,
        capability: BrowserCapability,
        selector: Union[Selector, str],
        description: str = DEFAULT_DESCRIPTION,
    ):
        if isinstance(selector, str):
            selector = Selector.css(selector)
        self.capability = capability
        self.selector = selector
        self.description = description

    def __repr__(self) -> str:
        return f"PageElements({self.selector})"

    async def all(self) -> List[Any]:
        """
        Get every matching element handle, in document order.

        Raises:
            ElementActionError: The browser failed to evaluate the selector
        """
        try:
            return list(await self.capability.locate_all(self.selector))
        except Exception as e:
            raise ElementActionError(
                self.selector, self.description, "find elements", cause=e
            ) from e

    async def count(self) -> int:
        return len(await self.all())

    async def by_index(self, index: int) -> Any:
        """
        Get the element at ``index``.

        Raises:
            IndexOutOfRangeError: ``index`` is negative or not below count()
        """
        elements = await self.all()
        if index < 0 or index >= len(elements):
            raise IndexOutOfRangeError(self.selector, index, len(elements), self.description)
        return elements[index]

    async def first(self) -> Any:
        elements = await self.all()
        if not elements:
            raise EmptyResultError(self.selector, self.description)
        return elements[0]

    async def last(self) -> Any:
        elements = await self.all()
        if not elements:
            raise EmptyResultError(self.selector, self.description)
        return elements[-1]

    async def click_all(self) -> None:
        """
        Click every matching element concurrently.

        All clicks are issued and awaited even when some of them fail.

        Raises:
            AggregateActionError: One or more clicks failed; lists each
                failed index with its underlying error
        """
        with allure.step(f"click all: {self.selector}"):
            elements = await self.all()
            results = await asyncio.gather(
                *(self.capability.perform(ElementAction.CLICK, element) for element in elements),
                return_exceptions=True,
            )

            failures: List[Tuple[int, BaseException]] = [
                (index, result)
                for index, result in enumerate(results)
                if isinstance(result, BaseException)
            ]
            if not failures:
                logger.debug(f"Clicked {len(elements)} element(s) using {self.selector}")
                return

            error = AggregateActionError(
                self.selector, "click", failures, total=len(elements), description=self.description
            )
            logger.error(str(error))
            attach_json(
                [{"index": index, "error": repr(cause)} for index, cause in failures],
                name="click all failures",
            )
            raise error


__all__ = [
    "PageElements",
]
