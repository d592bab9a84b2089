"""Level meter reading to fader tint.

Meter readings are mapped on a logarithmic scale into a 96 dB window and
then through a three-segment HSV curve::

    0.0 - 0.5   dark green -> bright green    (H 120°,      V 0.3 -> 0.6)
    0.5 - 0.8   green -> yellow               (H 120° -> 60°, V 0.6 -> 0.8)
    0.8 - 1.0   yellow -> red                 (H 60° -> 0°,  V 0.8 -> 1.0)

so the indicator keeps moving over the whole practical signal range instead
of reaching red early. A reading of exactly zero is black.
"""

import math

from sessionmixer.models import Color

LEVEL_RANGE_DB = 96.0

SILENT_COLOR = Color.off()


def normalize_level(level: int, level_min: int, level_max: int) -> float:
    """Meter reading to 0..1 on a dB scale (0 dB at ``level_max``, floor -96 dB)."""
    if level <= level_min or level <= 0 or level_max <= 0:
        return 0.0

    db = 20.0 * math.log10(level / level_max)
    db = max(db, -LEVEL_RANGE_DB)
    normalized = (db + LEVEL_RANGE_DB) / LEVEL_RANGE_DB
    return max(0.0, min(1.0, normalized))


def intensity_to_hsv(normalized: float) -> tuple[float, float, float]:
    """Position on the three-segment curve to (h, s, v), each in 0..1."""
    if normalized <= 0.5:
        h = 120.0
        v = 0.3 + (normalized / 0.5) * 0.3
    elif normalized <= 0.8:
        t = (normalized - 0.5) / 0.3
        h = 120.0 - t * 60.0
        v = 0.6 + t * 0.2
    else:
        t = (normalized - 0.8) / 0.2
        h = 60.0 - t * 60.0
        v = 0.8 + t * 0.2
    return h / 360.0, 1.0, v


def level_to_color(level: int, level_min: int, level_max: int) -> Color:
    """Map a peak meter reading to the fader tint."""
    if level == 0:
        return SILENT_COLOR
    return Color.from_hsv(*intensity_to_hsv(normalize_level(level, level_min, level_max)))
