"""
================================================================================
Fake Browser Capability
================================================================================

In-memory browser capability for exercising page elements without a
browser.

FakeCapability keeps a registry of selector value -> FakeElement list and
lets tests script failures:

    capability.add("#kw", FakeElement(tag="textarea"))
    capability.fail_locate(2)                  # next two locates time out
    capability.script_visibility(False, True)  # first check fails
    capability.fail_action(element, RuntimeError("stale"))

================================================================================
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from testsuites.ui_testing.framework.capability import Condition, ElementAction
from testsuites.ui_testing.framework.exceptions import WaitTimeoutError
from testsuites.ui_testing.framework.locator_config import Selector


@dataclass(eq=False)
class FakeElement:
    """Stand-in for a browser element handle."""
    tag: str = "div"
    text: str = ""
    value: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)
    visible: bool = True
    enabled: bool = True
    selected: bool = False
    clicks: int = 0
    context_clicks: int = 0
    double_clicks: int = 0
    hovered: bool = False


class FakeCapability:
    """BrowserCapability implementation backed by in-memory elements."""

    def __init__(self):
        self.elements: Dict[str, List[FakeElement]] = {}
        self.locate_calls: List[Tuple[str, int, int]] = []
        self.wait_calls: List[FakeElement] = []
        self.perform_calls: List[Tuple[ElementAction, FakeElement, tuple]] = []
        self._locate_failures: Optional[int] = 0
        self._visibility: List[bool] = []
        self._action_failures: Dict[int, BaseException] = {}
        self._locate_all_error: Optional[BaseException] = None

    # =========================================================================
    # Scripting
    # =========================================================================

    def add(self, selector: str, *elements: FakeElement) -> List[FakeElement]:
        self.elements.setdefault(selector, []).extend(elements)
        return list(elements)

    def fail_locate(self, times: Optional[int] = None) -> None:
        """Fail the next ``times`` locate calls (every call when None)."""
        self._locate_failures = times

    def script_visibility(self, *outcomes: bool) -> None:
        """Outcomes of the next wait_until calls, in order."""
        self._visibility = list(outcomes)

    def fail_action(self, element: FakeElement, error: BaseException) -> None:
        self._action_failures[id(element)] = error

    def fail_locate_all(self, error: BaseException) -> None:
        self._locate_all_error = error

    # =========================================================================
    # BrowserCapability
    # =========================================================================

    async def locate(self, selector: Selector, timeout_ms: int, index: int = 0) -> FakeElement:
        self.locate_calls.append((selector.value, timeout_ms, index))
        if self._locate_failures is None:
            raise WaitTimeoutError(f"locate {selector}", timeout_ms)
        if self._locate_failures > 0:
            self._locate_failures -= 1
            raise WaitTimeoutError(f"locate {selector}", timeout_ms)

        matches = self.elements.get(selector.value, [])
        if index >= len(matches):
            raise WaitTimeoutError(f"locate {selector}", timeout_ms)
        return matches[index]

    async def locate_all(self, selector: Selector) -> List[FakeElement]:
        if self._locate_all_error is not None:
            raise self._locate_all_error
        return list(self.elements.get(selector.value, []))

    async def wait_until(
        self,
        handle: FakeElement,
        condition: Condition,
        timeout_ms: int,
        description: str,
    ) -> None:
        self.wait_calls.append(handle)
        if self._visibility:
            holds = self._visibility.pop(0)
        else:
            holds = await condition(handle)
        if not holds:
            raise WaitTimeoutError(description, timeout_ms)

    async def perform(self, action: ElementAction, handle: FakeElement, *args: Any) -> Any:
        self.perform_calls.append((action, handle, args))
        # Let concurrently gathered actions interleave
        await asyncio.sleep(0)

        error = self._action_failures.get(id(handle))
        if error is not None and action is not ElementAction.IS_DISPLAYED:
            raise error

        if action is ElementAction.CLICK:
            handle.clicks += 1
        elif action is ElementAction.CONTEXT_CLICK:
            handle.context_clicks += 1
        elif action is ElementAction.DOUBLE_CLICK:
            handle.double_clicks += 1
        elif action is ElementAction.HOVER:
            handle.hovered = True
        elif action is ElementAction.SEND_KEYS:
            handle.value += args[0]
        elif action is ElementAction.CLEAR:
            handle.value = ""
        elif action is ElementAction.GET_ATTRIBUTE:
            return handle.attributes.get(args[0])
        elif action is ElementAction.GET_TEXT:
            return handle.text
        elif action is ElementAction.GET_TAG_NAME:
            return handle.tag
        elif action is ElementAction.GET_VALUE:
            return handle.value
        elif action is ElementAction.IS_ENABLED:
            return handle.enabled
        elif action is ElementAction.IS_SELECTED:
            return handle.selected
        elif action is ElementAction.IS_DISPLAYED:
            return handle.visible
        return None

    def actions_on(self, handle: FakeElement) -> List[ElementAction]:
        return [action for action, target, _ in self.perform_calls if target is handle]
