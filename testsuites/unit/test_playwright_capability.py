import pytest

from testsuites.ui_testing.framework import (
    ElementAction,
    PlaywrightCapability,
    Selector,
    WaitTimeoutError,
)


class RecordingHandle:
    """Records the ElementHandle calls made by PlaywrightCapability."""

    def __init__(self, visible=True):
        self.calls = []
        self.visible = visible

    def __getattr__(self, name):
        async def method(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            if name == "is_visible":
                return self.visible
            return f"{name}-result"
        return method


class RecordingLocator:
    def __init__(self, page, query):
        self.page = page
        self.query = query

    def nth(self, index):
        self.page.calls.append(("nth", self.query, index))
        return self

    async def wait_for(self, state, timeout):
        self.page.calls.append(("wait_for", state, timeout))

    async def element_handle(self, timeout):
        return self.page.handle


class RecordingKeyboard:
    def __init__(self, page):
        self.page = page

    async def type(self, text):
        self.page.calls.append(("keyboard.type", text))


class RecordingPage:
    def __init__(self):
        self.calls = []
        self.handle = RecordingHandle()
        self.keyboard = RecordingKeyboard(self)

    def locator(self, query):
        return RecordingLocator(self, query)

    async def query_selector_all(self, query):
        self.calls.append(("query_selector_all", query))
        return [self.handle, self.handle]


@pytest.mark.asyncio
async def test_locate_waits_for_attached_match():
    page = RecordingPage()

    handle = await PlaywrightCapability(page).locate(Selector.css("li"), 1500, index=2)

    assert handle is page.handle
    assert page.calls == [("nth", "css=li", 2), ("wait_for", "attached", 1500)]


@pytest.mark.asyncio
async def test_locate_all_uses_engine_query():
    page = RecordingPage()

    handles = await PlaywrightCapability(page).locate_all(Selector.xpath("//li"))

    assert len(handles) == 2
    assert page.calls == [("query_selector_all", "xpath=//li")]


@pytest.mark.parametrize(
    "action, args, expected",
    [
        (ElementAction.CLICK, (), ("click", (), {})),
        (ElementAction.CONTEXT_CLICK, (), ("click", (), {"button": "right"})),
        (ElementAction.DOUBLE_CLICK, (), ("dblclick", (), {})),
        (ElementAction.HOVER, (), ("hover", (), {})),
        (ElementAction.CLEAR, (), ("fill", ("",), {})),
        (ElementAction.GET_ATTRIBUTE, ("href",), ("get_attribute", ("href",), {})),
        (ElementAction.GET_TEXT, (), ("inner_text", (), {})),
        (ElementAction.GET_VALUE, (), ("input_value", (), {})),
        (ElementAction.IS_ENABLED, (), ("is_enabled", (), {})),
        (ElementAction.IS_DISPLAYED, (), ("is_visible", (), {})),
    ],
)
@pytest.mark.asyncio
async def test_perform_maps_actions(action, args, expected):
    handle = RecordingHandle()

    await PlaywrightCapability(RecordingPage()).perform(action, handle, *args)

    assert handle.calls == [expected]


@pytest.mark.asyncio
async def test_send_keys_types_at_focused_element():
    page = RecordingPage()
    handle = RecordingHandle()

    await PlaywrightCapability(page).perform(ElementAction.SEND_KEYS, handle, "a+b")

    assert handle.calls == [("focus", (), {})]
    assert page.calls == [("keyboard.type", "a+b")]


@pytest.mark.asyncio
async def test_perform_evaluates_tag_and_selection():
    handle = RecordingHandle()
    capability = PlaywrightCapability(RecordingPage())

    await capability.perform(ElementAction.GET_TAG_NAME, handle)
    await capability.perform("is_selected", handle)

    assert [name for name, _, _ in handle.calls] == ["evaluate", "evaluate"]
    assert "tagName" in handle.calls[0][1][0]
    assert "checked" in handle.calls[1][1][0]


@pytest.mark.asyncio
async def test_perform_rejects_unknown_action():
    with pytest.raises(ValueError):
        await PlaywrightCapability(RecordingPage()).perform("drag", RecordingHandle())


@pytest.mark.asyncio
async def test_wait_until_polls_condition():
    results = iter([False, False, True])
    checks = []

    async def condition(handle):
        checks.append(handle)
        return next(results)

    await PlaywrightCapability(RecordingPage(), poll_interval_ms=1).wait_until(
        "handle", condition, 2000, "ready"
    )

    assert checks == ["handle"] * 3


@pytest.mark.asyncio
async def test_wait_until_times_out():
    async def never(handle):
        return False

    with pytest.raises(WaitTimeoutError) as exc_info:
        await PlaywrightCapability(RecordingPage(), poll_interval_ms=5).wait_until(
            "handle", never, 20, "banner visible"
        )

    assert exc_info.value.timeout_ms == 20
    assert "banner visible" in str(exc_info.value)
