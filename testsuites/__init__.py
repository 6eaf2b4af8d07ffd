"""
Test suites package.

Kept importable so page objects and the framework can be imported by
tests, by `run_tests.py` and by other tooling:

    from testsuites.ui_testing.framework import PageElement, Selector
    from testsuites.ui_testing.pages import SearchPage
"""
