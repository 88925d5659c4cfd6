import asyncio

import pytest
from unittest.mock import MagicMock

from crawler.core.events import InputEvent
from crawler.input.dispatcher import InputDispatcher, KeyEvent, KeyOptions


def test_key_handler_called_case_insensitive(dispatcher):
    handler = MagicMock()
    dispatcher.on_key_press("S", handler)

    dispatcher.key_down("s")

    handler.assert_called_once()
    event = handler.call_args[0][0]
    assert isinstance(event, KeyEvent)
    assert event.key == "s"

def test_uppercase_press_reaches_lowercase_registration(dispatcher):
    handler = MagicMock()
    dispatcher.on_key_press("a", handler)

    dispatcher.key_down("A")

    handler.assert_called_once()

def test_handlers_run_in_registration_order(dispatcher):
    order = []
    first = dispatcher.on_key_press("a", lambda e: order.append("first"))
    dispatcher.on_key_press("a", lambda e: order.append("second"))

    dispatcher.key_down("A")
    assert order == ["first", "second"]

    first()
    dispatcher.key_down("A")
    assert order == ["first", "second", "second"]

def test_same_handler_registered_twice_fires_twice(dispatcher):
    handler = MagicMock()
    unsubscribe = dispatcher.on_key_press("a", handler)
    dispatcher.on_key_press("a", handler)

    dispatcher.key_down("a")
    assert handler.call_count == 2

    unsubscribe()
    unsubscribe()  # second call must not remove the other registration
    dispatcher.key_down("a")
    assert handler.call_count == 3

def test_unsubscribe_drops_empty_key(dispatcher):
    unsubscribe = dispatcher.on_key_press("q", lambda e: None)
    assert "q" in dispatcher.get_input_state().key_handlers

    unsubscribe()

    assert "q" not in dispatcher.get_input_state().key_handlers

def test_case_sensitive_registration(dispatcher):
    upper = MagicMock()
    dispatcher.on_key_press("Q", upper, KeyOptions(case_sensitive=True))

    dispatcher.key_down("q")
    upper.assert_not_called()

    dispatcher.key_down("Q")
    upper.assert_called_once()
    assert "Q" in dispatcher.get_input_state().key_handlers

def test_handler_may_unsubscribe_itself(dispatcher):
    calls = []

    def once(event):
        calls.append("once")
        unsubscribe()

    unsubscribe = dispatcher.on_key_press("x", once)
    dispatcher.on_key_press("x", lambda e: calls.append("other"))

    dispatcher.key_down("x")
    dispatcher.key_down("x")

    assert calls == ["once", "other", "other"]

def test_failing_handler_does_not_stop_others(dispatcher):
    later = MagicMock()
    dispatcher.on_key_press("a", MagicMock(side_effect=RuntimeError("boom")))
    dispatcher.on_key_press("a", later)

    dispatcher.key_down("a")

    later.assert_called_once()

def test_off_key_press_removes_all(dispatcher):
    h1, h2 = MagicMock(), MagicMock()
    dispatcher.on_key_press("S", h1)
    dispatcher.on_key_press("s", h2)

    dispatcher.off_key_press("S")
    dispatcher.key_down("s")

    h1.assert_not_called()
    h2.assert_not_called()
    assert dispatcher.get_input_state().key_handlers == {}

def test_pressed_keys_tracking(dispatcher):
    dispatcher.key_down("Shift")
    assert dispatcher.is_key_pressed("shift")
    assert dispatcher.is_key_pressed("SHIFT")

    dispatcher.key_up("shift")
    assert not dispatcher.is_key_pressed("shift")

def test_disabled_input_blocks_handlers(dispatcher):
    handler = MagicMock()
    dispatcher.on_key_press("S", handler)

    dispatcher.set_input_enabled(False)
    dispatcher.key_down("s")

    handler.assert_not_called()
    assert not dispatcher.is_key_pressed("s")

def test_reenabled_input_fires_again(dispatcher):
    handler = MagicMock()
    dispatcher.on_key_press("S", handler)

    dispatcher.set_input_enabled(False)
    dispatcher.set_input_enabled(True)
    dispatcher.key_down("s")

    handler.assert_called_once()

def test_key_up_clears_even_when_disabled(dispatcher):
    dispatcher.key_down("a")
    dispatcher.set_input_enabled(False)

    dispatcher.key_up("A")

    assert not dispatcher.is_key_pressed("a")
    assert dispatcher.get_input_state().pressed_keys == set()

def test_input_state_is_a_copy(dispatcher):
    handler = MagicMock()
    dispatcher.on_key_press("a", handler)
    dispatcher.on_button_click("start-button", MagicMock())
    dispatcher.key_down("a")

    snapshot = dispatcher.get_input_state()
    snapshot.pressed_keys.clear()
    snapshot.key_handlers["a"].clear()
    snapshot.key_handlers["z"] = [handler]
    snapshot.click_handlers.clear()
    snapshot.enabled = False

    live = dispatcher.get_input_state()
    assert live.enabled is True
    assert live.pressed_keys == {"a"}
    assert live.key_handlers == {"a": [handler]}
    assert "start-button" in live.click_handlers

def test_clear_all_handlers(dispatcher, elements):
    key_handler = MagicMock()
    click_handler = MagicMock()
    dispatcher.on_key_press("S", key_handler)
    dispatcher.on_button_click("start-button", click_handler)
    dispatcher.key_down("s")
    dispatcher.set_input_enabled(False)

    dispatcher.clear_all_handlers()
    dispatcher.set_input_enabled(True)
    dispatcher.key_down("s")
    elements.find("start-button").click()

    assert key_handler.call_count == 1
    click_handler.assert_not_called()
    state = dispatcher.get_input_state()
    assert state.key_handlers == {}
    assert state.click_handlers == {}
    assert state.pressed_keys == {"s"}

def test_clear_all_handlers_keeps_gate(dispatcher):
    dispatcher.set_input_enabled(False)
    dispatcher.clear_all_handlers()
    assert dispatcher.enabled is False


class TestButtonClick:
    def test_click_invokes_handler(self, dispatcher, elements):
        handler = MagicMock()
        dispatcher.on_button_click("start-button", handler)

        elements.find("start-button").click()

        handler.assert_called_once()
        assert handler.call_args[0][0].element_id == "start-button"

    def test_click_ignored_while_disabled(self, dispatcher, elements):
        handler = MagicMock()
        dispatcher.on_button_click("start-button", handler)

        dispatcher.set_input_enabled(False)
        elements.find("start-button").click()

        handler.assert_not_called()

    def test_missing_element_logs_and_returns_noop(self, dispatcher, caplog):
        handler = MagicMock()

        with caplog.at_level("ERROR"):
            unsubscribe = dispatcher.on_button_click("no-such-button", handler)

        assert "no-such-button" in caplog.text
        assert "not found" in caplog.text
        unsubscribe()
        assert dispatcher.get_input_state().click_handlers == {}

    def test_no_locator_behaves_like_missing_element(self):
        dispatcher = InputDispatcher()
        unsubscribe = dispatcher.on_button_click("start-button", MagicMock())
        unsubscribe()
        assert dispatcher.get_input_state().click_handlers == {}

    def test_unsubscribe_detaches_listener(self, dispatcher, elements):
        handler = MagicMock()
        unsubscribe = dispatcher.on_button_click("start-button", handler)

        unsubscribe()
        elements.find("start-button").click()

        handler.assert_not_called()
        assert elements.find("start-button").listeners == []
        assert dispatcher.get_input_state().click_handlers == {}

    def test_reregistration_replaces_previous(self, dispatcher, elements):
        old, new = MagicMock(), MagicMock()
        unsubscribe_old = dispatcher.on_button_click("start-button", old)
        dispatcher.on_button_click("start-button", new)

        elements.find("start-button").click()

        old.assert_not_called()
        new.assert_called_once()
        assert len(elements.find("start-button").listeners) == 1

        # A stale unsubscribe leaves the newer registration alone
        unsubscribe_old()
        assert dispatcher.get_input_state().click_handlers == {"start-button": new}
        elements.find("start-button").click()
        assert new.call_count == 2


def test_events_published(event_bus, elements):
    dispatcher = InputDispatcher(elements=elements, event_bus=event_bus)
    received = []
    for event_type in InputEvent:
        event_bus.subscribe(event_type, received.append, weak=False)

    dispatcher.on_button_click("start-button", lambda e: None)
    dispatcher.key_down("A")
    dispatcher.key_up("A")
    elements.find("start-button").click()
    dispatcher.set_input_enabled(False)

    assert [e.type for e in received] == [
        InputEvent.KEY_PRESSED,
        InputEvent.KEY_RELEASED,
        InputEvent.BUTTON_CLICKED,
        InputEvent.INPUT_DISABLED,
    ]
    assert received[0]["key"] == "a"
    assert received[2]["element_id"] == "start-button"


class TestWaitForSingleKeystroke:
    @pytest.mark.asyncio
    async def test_resolves_on_any_key(self, dispatcher):
        future = dispatcher.wait_for_single_keystroke()

        asyncio.get_running_loop().call_later(0.01, dispatcher.key_down, "s")

        assert await asyncio.wait_for(future, timeout=1) == "s"
        assert dispatcher.pending_keystroke_waits == 0

    @pytest.mark.asyncio
    async def test_filters_valid_keys(self, dispatcher):
        future = dispatcher.wait_for_single_keystroke(["y", "n"])

        dispatcher.key_down("x")
        assert not future.done()

        dispatcher.key_down("y")
        assert await future == "y"

    @pytest.mark.asyncio
    async def test_valid_keys_case_insensitive(self, dispatcher):
        future = dispatcher.wait_for_single_keystroke(["Y", "N"])

        dispatcher.key_down("Y")

        assert await future == "y"

    @pytest.mark.asyncio
    async def test_ignored_while_disabled(self, dispatcher):
        future = dispatcher.wait_for_single_keystroke(["y"])

        dispatcher.set_input_enabled(False)
        dispatcher.key_down("y")
        assert not future.done()

        dispatcher.set_input_enabled(True)
        dispatcher.key_down("y")
        assert await future == "y"

    @pytest.mark.asyncio
    async def test_resolves_only_once(self, dispatcher):
        future = dispatcher.wait_for_single_keystroke()

        dispatcher.key_down("a")
        dispatcher.key_down("b")

        assert await future == "a"
        assert dispatcher.pending_keystroke_waits == 0

    @pytest.mark.asyncio
    async def test_does_not_consume_key_handlers(self, dispatcher):
        handler = MagicMock()
        dispatcher.on_key_press("y", handler)
        future = dispatcher.wait_for_single_keystroke(["y"])

        dispatcher.key_down("y")

        assert await future == "y"
        handler.assert_called_once()

    @pytest.mark.asyncio
    async def test_cancel_deregisters_waiter(self, dispatcher):
        future = dispatcher.wait_for_single_keystroke(["y"])
        assert dispatcher.pending_keystroke_waits == 1

        future.cancel()
        await asyncio.sleep(0)

        assert dispatcher.pending_keystroke_waits == 0
        dispatcher.key_down("y")  # must not raise InvalidStateError

    @pytest.mark.asyncio
    async def test_cancelling_awaiting_task_cancels_wait(self, dispatcher):
        async def prompt():
            return await dispatcher.wait_for_single_keystroke(["y", "n"])

        task = asyncio.get_running_loop().create_task(prompt())
        await asyncio.sleep(0)
        assert dispatcher.pending_keystroke_waits == 1

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        await asyncio.sleep(0)

        assert dispatcher.pending_keystroke_waits == 0

    @pytest.mark.asyncio
    async def test_wait_opened_by_handler_starts_with_next_key(self, dispatcher):
        futures = []
        dispatcher.on_key_press("d", lambda e: futures.append(dispatcher.wait_for_single_keystroke()))

        dispatcher.key_down("d")
        assert len(futures) == 1
        assert not futures[0].done()
        assert dispatcher.pending_keystroke_waits == 1

        dispatcher.key_down("e")
        assert await futures[0] == "e"

    @pytest.mark.asyncio
    async def test_handler_disabling_input_blocks_pending_wait(self, dispatcher):
        future = dispatcher.wait_for_single_keystroke()
        dispatcher.on_key_press("p", lambda e: dispatcher.set_input_enabled(False))

        dispatcher.key_down("p")

        assert not future.done()
        assert dispatcher.pending_keystroke_waits == 1

        dispatcher.set_input_enabled(True)
        dispatcher.key_down("q")
        assert await future == "q"
