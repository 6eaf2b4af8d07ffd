"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations built on the UI testing framework.

Each page class encapsulates:
    - Element declarations (PageElement / PageElements)
    - Page-specific actions

Author: Automation Team
License: MIT
================================================================================
"""

from .search_page import SearchOperations, SearchPage

__all__ = [
    "SearchPage",
    "SearchOperations",
]
