"""Tests for the per-frame mixer surface."""

import pytest

from sessionmixer.core import Dispatcher, GangAssembler, SessionMixer
from sessionmixer.exceptions import WriteError
from sessionmixer.hardware import SimulatedCard
from sessionmixer.models import Color, MixerConfig


@pytest.fixture
def config(session_yaml):
    return MixerConfig.load(session_yaml)


@pytest.fixture
def sim(config):
    card = SimulatedCard.from_config(config, initial_value=0)
    yield card
    card.close()


@pytest.fixture
def mixer(sim, config):
    gangs = GangAssembler(sim, config).load_gangs()
    dispatcher = Dispatcher(sim, gangs)
    dispatcher.start()
    yield SessionMixer(sim, config, gangs, dispatcher)
    dispatcher.stop()


@pytest.mark.unit
class TestFaders:
    """Test the frame view."""

    def test_one_view_per_gang(self, mixer):
        views = mixer.faders()

        assert [v.index for v in views] == [0, 1]
        assert [v.name for v in views] == ["DAW 1/2", "Mic 1"]

    def test_initial_view(self, mixer):
        daw, mic = mixer.faders()

        assert daw.value == 0
        assert daw.label == "-∞ dB"
        assert daw.position == 0.0
        assert daw.color == Color.off()
        assert mic.label == "0"
        assert mic.color is None

    def test_view_after_set(self, mixer):
        mixer.set_fader(0, 65536)
        daw = mixer.faders()[0]

        assert daw.value == 65536
        assert daw.label == "12.00 dB"
        assert daw.position == 1.0

    def test_level_color(self, mixer, sim):
        sim.set_level("Level Meter 01", 4095)
        assert mixer.faders()[0].color == Color(r=255, g=0, b=0)

    def test_faders_do_not_write(self, mixer, sim):
        for _ in range(10):
            mixer.faders()
        assert all(p.write_count == 0 for p in sim.list_parameters())


@pytest.mark.unit
class TestSetFader:
    """Test user input."""

    def test_set_fader_writes_all_channels(self, mixer, sim):
        assert mixer.set_fader(0, 30000) is None

        assert sim.find_parameter("Mix A Input 01 Playback Volume").read() == 30000
        assert sim.find_parameter("Mix B Input 02 Playback Volume").read() == 30000

    def test_write_error_is_returned(self, mixer, sim):
        sim.find_parameter("Mix B Input 02 Playback Volume").fail_writes = True

        error = mixer.set_fader(0, 30000)

        assert isinstance(error, WriteError)
        assert mixer.faders()[0].value == 30000

    def test_step_fader(self, mixer):
        mixer.step_fader(1, 0.1)
        assert mixer.faders()[1].value == round(0.1 * 65536)

        mixer.step_fader(1, -1.0)
        assert mixer.faders()[1].value == 0

    def test_step_fader_minimum_step(self, mixer):
        mixer.step_fader(1, 1e-9)
        assert mixer.faders()[1].value == 1

        mixer.step_fader(1, -1e-9)
        assert mixer.faders()[1].value == 0


@pytest.mark.integration
class TestSynchronization:
    """Test the mixer following hardware."""

    def test_is_synchronized(self, mixer):
        assert mixer.is_synchronized

    def test_not_synchronized_without_dispatcher(self, sim, config):
        mixer = SessionMixer(sim, config, GangAssembler(sim, config).load_gangs())
        assert not mixer.is_synchronized

    def test_external_change_shows_next_frame(self, mixer, sim, wait):
        sim.inject("Mix A Input 05 Playback Volume", 777)
        assert wait(lambda: mixer.faders()[1].value == 777)

    def test_stream_loss(self, mixer, sim, wait):
        sim.break_stream()
        assert wait(lambda: not mixer.is_synchronized)
        assert mixer.dispatcher.failure is not None
