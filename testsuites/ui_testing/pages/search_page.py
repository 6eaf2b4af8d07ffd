"""
================================================================================
Search Page Object
================================================================================

Minimal page object for a search form with a keyword box (#kw) and a
search button (#su1), plus a SearchOperations helper that composes the
two into a business-level action.

================================================================================
"""

from __future__ import annotations

from typing import List

import allure

from testsuites.ui_testing.framework.capability import BrowserCapability
from testsuites.ui_testing.framework.page_base import BasePage
from testsuites.ui_testing.framework.page_element import PageElement


class SearchPage(BasePage):
    """Search form page object."""

    def __init__(self, capability: BrowserCapability):
        super().__init__(capability)
        # Search box
        self.search_input = self.find_by_id("kw", description="search input not found")
        # Search button
        self.search_button = self.find_by_id("su1", description="search button not found")
        self.results = self.find_all(".result", description="search results not found")


class SearchOperations:
    """Business-level actions on the search page."""

    def __init__(self, capability: BrowserCapability):
        self.page = SearchPage(capability)

    @allure.step("Search for {keyword}")
    async def search(self, keyword: str) -> None:
        await self.page.search_input.send_keys(keyword)
        await self.page.search_button.click()

    async def result_count(self) -> int:
        return await self.page.results.count()

    async def result_titles(self) -> List[str]:
        titles = []
        for handle in await self.page.results.all():
            # Reuse the handle already found instead of locating again
            result = PageElement(
                self.page.capability,
                self.page.results.selector,
                preresolved_element=handle,
            )
            titles.append(await result.get_text())
        return titles
