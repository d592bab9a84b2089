"""Tests for Channel."""

import pytest

from sessionmixer.core import Channel
from sessionmixer.exceptions import InitError, WriteError


@pytest.mark.unit
class TestChannelInit:
    """Test channel construction."""

    def test_initial_value_from_hardware(self, card):
        """Both caches start from a single hardware read."""
        parameter = card.add_parameter("Vol", max=100, value=42)
        channel = Channel(parameter, "Vol", "raw")

        assert parameter.read_count == 1
        assert channel.last_ui_value == 42
        assert channel.last_hw_value == 42
        assert channel.get_current_value() == 42
        assert channel.current_value == 42

    def test_missing_binding(self):
        """A missing binding cannot be turned into a channel."""
        with pytest.raises(InitError) as exc_info:
            Channel(None, "Nothing", "raw")
        assert exc_info.value.parameter is None

    def test_read_failure(self, card):
        """A failed initial read raises InitError carrying the cause."""
        parameter = card.add_parameter("Vol", max=100, value=42)
        parameter.fail_reads = True

        with pytest.raises(InitError) as exc_info:
            Channel(parameter, "Vol", "raw")

        assert exc_info.value.parameter == "Vol"
        assert exc_info.value.cause is not None

    def test_properties(self, card):
        """Range and identity come from the binding."""
        parameter = card.add_parameter("Vol", min=-10, max=10, value=0)
        channel = Channel(parameter, "Main [Vol]", "db")

        assert channel.parameter_id == parameter.id
        assert channel.min == -10
        assert channel.max == 10
        assert channel.display_name == "Main [Vol]"
        assert channel.unit == "db"


@pytest.mark.unit
class TestChannelUIChange:
    """Test the UI -> hardware direction."""

    def test_writes_once(self, make_channel, card):
        """A changed value is written immediately, once."""
        channel = make_channel("Vol")
        channel.handle_ui_change(1000)

        parameter = card.find_parameter("Vol")
        assert parameter.write_count == 1
        assert parameter.value == 1000
        assert channel.get_current_value() == 1000

    def test_repeated_value_writes_once(self, make_channel, card):
        """N identical UI changes produce exactly one write."""
        channel = make_channel("Vol")
        for _ in range(10):
            channel.handle_ui_change(500)

        assert card.find_parameter("Vol").write_count == 1

    def test_unchanged_value_is_noop(self, make_channel, card):
        """Setting the current value does not write."""
        channel = make_channel("Vol", value=300)
        channel.handle_ui_change(300)
        assert card.find_parameter("Vol").write_count == 0

    def test_value_is_clamped(self, make_channel, card):
        """Values outside the binding range are clamped before writing."""
        channel = make_channel("Vol", max=100)
        channel.handle_ui_change(1000)

        assert channel.last_ui_value == 100
        assert card.find_parameter("Vol").value == 100

        channel.handle_ui_change(-5)
        assert channel.last_ui_value == 0

    def test_write_failure_keeps_intent(self, make_channel, card):
        """A failed write raises WriteError and the cache keeps the user's value."""
        channel = make_channel("Vol")
        parameter = card.find_parameter("Vol")
        parameter.fail_writes = True

        with pytest.raises(WriteError) as exc_info:
            channel.handle_ui_change(2000)

        assert exc_info.value.parameter_id == parameter.id
        assert exc_info.value.parameter == "Vol"
        assert exc_info.value.cause is not None
        assert channel.get_current_value() == 2000
        assert parameter.value == 0


@pytest.mark.unit
class TestChannelHWChange:
    """Test the hardware -> UI direction."""

    def test_echo_does_not_write(self, make_channel, card):
        """The hardware echo of a UI write triggers no further write."""
        channel = make_channel("Vol")
        channel.handle_ui_change(32768)
        channel.handle_hw_change(32768)

        assert card.find_parameter("Vol").write_count == 1
        assert channel.last_ui_value == 32768
        assert channel.last_hw_value == 32768

    def test_external_change_updates_both(self, make_channel, card):
        """An external change overrides the UI cache without writing."""
        channel = make_channel("Vol")
        channel.handle_ui_change(1000)
        channel.handle_hw_change(40000)

        assert channel.last_ui_value == 40000
        assert channel.last_hw_value == 40000
        assert card.find_parameter("Vol").write_count == 1

    def test_equal_hw_value_is_noop(self, make_channel):
        """A hardware value equal to the last one leaves a pending UI value alone."""
        channel = make_channel("Vol", value=10)
        channel._last_ui_value.store(20)
        channel.handle_hw_change(10)

        assert channel.last_ui_value == 20

    def test_ui_after_hw_change(self, make_channel, card):
        """Moving back to the pre-change UI value writes again."""
        channel = make_channel("Vol")
        channel.handle_ui_change(1000)
        channel.handle_hw_change(5000)
        channel.handle_ui_change(1000)

        assert card.find_parameter("Vol").write_count == 2
        assert card.find_parameter("Vol").value == 1000


@pytest.mark.unit
class TestChannelDecibels:
    """Test the generic dB helpers."""

    def test_bounds(self, make_channel):
        channel = make_channel("Vol", max=72)
        assert channel.to_db(0) == -60.0
        assert channel.to_db(72) == 12.0
        assert channel.from_db(12.0) == 72
        assert channel.from_db(-60.0) == 0

    def test_from_db_clamps(self, make_channel):
        channel = make_channel("Vol", max=72)
        assert channel.from_db(100.0) == 72
        assert channel.from_db(-100.0) == 0

    def test_round_trip_on_grid(self, make_channel):
        channel = make_channel("Vol", max=72)
        assert channel.from_db(channel.to_db(36)) == 36
