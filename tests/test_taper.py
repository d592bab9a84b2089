"""Tests for fader tapers."""

import math

import pytest

from sessionmixer.core.taper import (
    DEFAULT_RANGE_DB,
    SILENT,
    SILENT_LABEL,
    DecibelTaper,
    LinearTaper,
    make_taper,
)
from sessionmixer.models import DisplayUnit


@pytest.mark.unit
class TestLinearTaper:
    """Test LinearTaper position mapping."""

    def test_boundaries(self):
        """Position 0 is min and position 1 is max exactly."""
        taper = LinearTaper(0, 65536)
        assert taper.to_raw(0.0) == 0
        assert taper.to_raw(1.0) == 65536

    def test_offset_range(self):
        """Non-zero minimum is honored at both ends."""
        taper = LinearTaper(-100, 100)
        assert taper.to_raw(0.0) == -100
        assert taper.to_raw(1.0) == 100
        assert taper.to_raw(0.5) == 0

    def test_position_is_clamped(self):
        """Positions outside 0..1 clamp to the range."""
        taper = LinearTaper(0, 127)
        assert taper.to_raw(-0.5) == 0
        assert taper.to_raw(1.5) == 127

    def test_inverse(self):
        """to_normalized is the affine inverse of to_raw."""
        taper = LinearTaper(0, 65536)
        assert taper.to_normalized(0) == 0.0
        assert taper.to_normalized(65536) == 1.0
        assert taper.to_normalized(taper.to_raw(0.25)) == pytest.approx(0.25)

    def test_degenerate_range(self):
        """A zero-width range normalizes to 0 instead of dividing by zero."""
        assert LinearTaper(5, 5).to_normalized(5) == 0.0

    def test_monotonic(self):
        """Raw values grow with position."""
        taper = LinearTaper(0, 1000)
        values = [taper.to_raw(p / 20) for p in range(21)]
        assert values == sorted(values)

    def test_format_shows_raw_integer(self):
        """Linear labels are the raw integer."""
        assert LinearTaper(0, 127).format(64) == "64"


@pytest.mark.unit
class TestDecibelTaper:
    """Test DecibelTaper labels."""

    def test_min_is_silent(self):
        """raw == min reads as the silent sentinel."""
        taper = DecibelTaper(0, 65536, 72.0)
        assert taper.to_db(0) == SILENT
        assert math.isinf(taper.to_db(0))
        assert taper.format(0) == SILENT_LABEL

    def test_max_is_headroom(self):
        """raw == max reads +12 dB exactly."""
        taper = DecibelTaper(0, 65536, 72.0)
        assert taper.to_db(65536) == 12.0
        assert taper.format(65536) == "12.00 dB"

    def test_half_scale(self):
        """Half of full scale is about 6 dB below the headroom."""
        taper = DecibelTaper(0, 65536, 72.0)
        assert taper.to_db(32768) == pytest.approx(12.0 + 20 * math.log10(0.5))
        assert taper.format(32768) == "5.98 dB"

    def test_floor_clamps_to_silent(self):
        """Values quieter than 12 - range_db read as silent."""
        taper = DecibelTaper(0, 65536, 72.0)
        assert taper.floor_db == -60.0
        assert taper.to_db(10) == SILENT
        assert taper.to_db(100) > -60.0

    def test_narrower_range_raises_floor(self):
        """A smaller range cuts off more of the bottom."""
        wide = DecibelTaper(0, 65536, 72.0)
        narrow = DecibelTaper(0, 65536, 24.0)
        assert wide.to_db(1000) != SILENT
        assert narrow.to_db(1000) == SILENT

    def test_monotonic(self):
        """dB labels never decrease as raw grows."""
        taper = DecibelTaper(0, 65536, 72.0)
        values = [taper.to_db(raw) for raw in range(0, 65537, 512)]
        assert values == sorted(values)

    def test_position_stays_linear(self):
        """Fader travel uses the raw domain, not decibels."""
        taper = DecibelTaper(0, 65536, 72.0)
        assert taper.to_raw(0.5) == 32768
        assert taper.to_normalized(32768) == 0.5

    @pytest.mark.parametrize("range_db", [0.0, -10.0])
    def test_range_must_be_positive(self, range_db):
        """Non-positive ranges are rejected."""
        with pytest.raises(ValueError):
            DecibelTaper(0, 100, range_db)


@pytest.mark.unit
class TestMakeTaper:
    """Test taper selection."""

    def test_range_selects_decibel(self):
        """An explicit range always selects the decibel taper."""
        taper = make_taper(DisplayUnit.RAW, 48.0, 0, 100)
        assert isinstance(taper, DecibelTaper)
        assert taper.range_db == 48.0

    def test_db_unit_uses_default_range(self):
        """The db unit without a range uses the default window."""
        taper = make_taper("db", None, 0, 100)
        assert isinstance(taper, DecibelTaper)
        assert taper.range_db == DEFAULT_RANGE_DB

    def test_raw_unit_is_linear(self):
        """The raw unit without a range is linear."""
        taper = make_taper("raw", None, 0, 100)
        assert type(taper) is LinearTaper
