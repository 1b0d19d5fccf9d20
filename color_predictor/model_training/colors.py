import random
import re

_HEX_PATTERN = re.compile(r'([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})', re.IGNORECASE)


def hex_to_rgb(value):
    """Convert a hex color string to RGB channels normalized to [0, 1].

    Accepts ``#rrggbb``, ``rrggbb``, ``#rgb`` and ``rgb`` in any case.
    Returns ``None`` for anything that is not a valid color string.
    """
    if not value or not isinstance(value, str):
        return None

    cleaned = value[1:] if value.startswith('#') else value

    # Shorthand: each digit is doubled
    if len(cleaned) == 3:
        cleaned = ''.join(char * 2 for char in cleaned)

    match = _HEX_PATTERN.fullmatch(cleaned)
    if not match:
        return None

    return tuple(int(channel, 16) / 255 for channel in match.groups())


def rgb_to_hex(rgb):
    """Convert normalized RGB channels back to a lowercase ``#rrggbb`` string."""
    channels = [max(0, min(255, round(float(c) * 255))) for c in rgb]
    return '#%02x%02x%02x' % tuple(channels)


def random_hex_color(rng=None):
    """Pick a random color to show the user next."""
    rng = rng or random
    return '#%06x' % rng.randint(0, 0xFFFFFF)
