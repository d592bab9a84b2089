"""Pytest fixtures for tests."""

import time
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from sessionmixer.core import Channel, Gang
from sessionmixer.hardware import SimulatedCard
from sessionmixer.models import GangMode

CONTROL_MAX = 65536
LEVEL_MAX = 4095


def wait_until(predicate, timeout: float = 2.0, interval: float = 0.01) -> bool:
    """Poll until predicate() is true or the timeout expires."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def card():
    """Simulated card with no controls."""
    card = SimulatedCard(card=1)
    yield card
    card.close()


@pytest.fixture
def make_channel(card):
    """Factory creating a parameter on the card and a channel bound to it."""

    def factory(name: str, value: int = 0, max: int = CONTROL_MAX) -> Channel:
        parameter = card.add_parameter(name, min=0, max=max, value=value)
        return Channel(parameter, f"Test [{name}]", "db")

    return factory


@pytest.fixture
def channels3(make_channel):
    """Three channels at zero, full 0..65536 range."""
    return [make_channel(f"Mix {c} Input 01 Playback Volume") for c in "ABC"]


@pytest.fixture
def gang3(channels3):
    """Mirror gang over three channels with a 72 dB taper."""
    return Gang("Main", "db", GangMode.MIRROR, channels3, taper_range_db=72.0)


@pytest.fixture
def session_yaml(temp_dir):
    """A valid session file on disk."""
    path = temp_dir / "session.yaml"
    path.write_text(
        "card: 1\n"
        "gang_controls:\n"
        "  - name: DAW 1/2\n"
        "    controls:\n"
        "      - Mix A Input 01 Playback Volume\n"
        "      - Mix B Input 02 Playback Volume\n"
        "    unit: db\n"
        "    taper_db: 72\n"
        "    levels:\n"
        "      - Level Meter 01\n"
        "  - name: Mic 1\n"
        "    controls:\n"
        "      - Mix A Input 05 Playback Volume\n"
    )
    return path


@pytest.fixture
def wait():
    """The wait_until helper, for tests that cross the dispatcher thread."""
    return wait_until
