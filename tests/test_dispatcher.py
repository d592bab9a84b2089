"""Tests for the hardware event dispatcher."""

import pytest

from sessionmixer.core import Channel, Dispatcher, Gang
from sessionmixer.exceptions import SubscriptionError
from sessionmixer.models import GangMode

NAMES = [f"Mix {c} Input 01 Playback Volume" for c in "ABC"]


@pytest.fixture
def dispatcher(card, gang3):
    """Running dispatcher over the three-channel gang."""
    dispatcher = Dispatcher(card, [gang3])
    dispatcher.start()
    yield dispatcher
    dispatcher.stop()


@pytest.mark.unit
class TestDispatchRouting:
    """Test routing without the event thread."""

    def test_routes_to_owner(self, card, gang3):
        dispatcher = Dispatcher(card, [gang3])
        dispatcher.dispatch(card.find_parameter(NAMES[1]).id, 500)

        assert gang3.get_current_value() == 500
        assert gang3.channels[1].last_hw_value == 500

    def test_unowned_parameter_is_dropped(self, card, gang3):
        stray = card.add_parameter("Monitor Volume", value=0)
        dispatcher = Dispatcher(card, [gang3])
        dispatcher.dispatch(stray.id, 999)

        assert gang3.get_current_value() == 0

    def test_first_gang_wins(self, card, gang3):
        """A parameter listed by two gangs is routed to the first one."""
        shared = card.find_parameter(NAMES[0])
        other = Gang("Other", "raw", GangMode.MIRROR, [Channel(shared, "Other [A]")])
        dispatcher = Dispatcher(card, [gang3, other])

        dispatcher.dispatch(shared.id, 7000)

        assert gang3.get_current_value() == 7000
        assert other.get_current_value() == 0

    def test_handler_error_is_logged(self, card, gang3, monkeypatch, caplog):
        """An exception in a gang handler does not escape dispatch."""

        def boom(parameter_id, value):
            raise RuntimeError("handler exploded")

        monkeypatch.setattr(gang3, "handle_hw_change", boom)
        dispatcher = Dispatcher(card, [gang3])
        dispatcher.dispatch(card.find_parameter(NAMES[0]).id, 1)

        assert "handler exploded" in caplog.text


@pytest.mark.integration
class TestDispatcherThread:
    """Test the event loop against a simulated card."""

    def test_start_stop(self, card, gang3):
        dispatcher = Dispatcher(card, [gang3])
        assert not dispatcher.is_running

        dispatcher.start()
        assert dispatcher.is_running

        dispatcher.stop()
        assert not dispatcher.is_running
        assert dispatcher.failure is None

    def test_stop_is_idempotent(self, card, gang3):
        dispatcher = Dispatcher(card, [gang3])
        dispatcher.stop()
        dispatcher.start()
        dispatcher.stop()
        dispatcher.stop()
        assert not dispatcher.is_running

    def test_context_manager(self, card, gang3):
        with Dispatcher(card, [gang3]) as dispatcher:
            assert dispatcher.is_running
        assert not dispatcher.is_running

    def test_external_change_reaches_gang(self, dispatcher, card, gang3, wait):
        card.inject(NAMES[2], 12345)

        assert wait(lambda: gang3.get_current_value() == 12345)
        assert gang3.channels[2].last_ui_value == 12345
        assert [card.find_parameter(n).write_count for n in NAMES] == [0, 0, 0]

    def test_echo_is_absorbed(self, dispatcher, card, gang3, wait):
        """A UI write comes back as an event and causes no further writes."""
        gang3.handle_ui_change(32768)

        assert wait(lambda: all(c.last_hw_value == 32768 for c in gang3.channels))
        assert [card.find_parameter(n).write_count for n in NAMES] == [1, 1, 1]
        assert gang3.get_current_value() == 32768

    def test_unowned_events_are_dropped(self, dispatcher, card, gang3, wait):
        card.add_parameter("Monitor Volume", value=0)
        card.inject("Monitor Volume", 100)
        card.inject(NAMES[0], 200)

        assert wait(lambda: gang3.get_current_value() == 200)

    def test_loop_survives_handler_error(self, card, gang3, make_channel, monkeypatch, wait):
        calls = []

        def boom(parameter_id, value):
            calls.append(value)
            raise RuntimeError("handler exploded")

        second = Gang("Second", "raw", GangMode.MIRROR, [make_channel("Aux")])
        monkeypatch.setattr(gang3, "handle_hw_change", boom)

        with Dispatcher(card, [gang3, second]) as dispatcher:
            card.inject(NAMES[0], 10)
            card.inject("Aux", 20)

            assert wait(lambda: second.get_current_value() == 20)
            assert calls == [10]
            assert dispatcher.failure is None

    def test_stream_failure(self, dispatcher, card, wait):
        """Losing the stream stores a SubscriptionError and notifies once."""
        failures = []
        dispatcher.on_failure(failures.append)

        card.break_stream("cable pulled")

        assert wait(lambda: len(failures) == 1)
        assert isinstance(dispatcher.failure, SubscriptionError)
        assert "cable pulled" in dispatcher.failure.technical_message
        assert failures[0] is dispatcher.failure
        assert wait(lambda: not dispatcher.is_running)

    def test_no_failure_reported_on_stop(self, card, gang3):
        failures = []
        dispatcher = Dispatcher(card, [gang3])
        dispatcher.on_failure(failures.append)
        dispatcher.start()
        dispatcher.stop()

        assert failures == []
        assert dispatcher.failure is None

    def test_failure_callback_error_is_contained(self, dispatcher, card, wait):
        def bad_callback(error):
            raise RuntimeError("callback exploded")

        dispatcher.on_failure(bad_callback)
        card.break_stream()

        assert wait(lambda: dispatcher.failure is not None)
