"""
Foreground color selection for category badges.
"""

import re

BLACK = "#000000"
WHITE = "#FFFFFF"

# Perceived brightness above which dark text is easier to read
BRIGHTNESS_THRESHOLD = 150

_HEX_PAIR_RE = re.compile(r"[0-9a-fA-F]{2}")


def _channel(pair: str) -> int:
    if not _HEX_PAIR_RE.fullmatch(pair):
        return 0
    return int(pair, 16)


def brightness(background_hex: str) -> int:
    """
    Perceived brightness (0-255) of a ``#RRGGBB`` color using the
    ``(299*R + 587*G + 114*B) / 1000`` weighting. Unparseable channels count as 0.
    """
    value = background_hex[1:] if background_hex.startswith("#") else background_hex
    red, green, blue = _channel(value[0:2]), _channel(value[2:4]), _channel(value[4:6])
    return (red * 299 + green * 587 + blue * 114) // 1000


def text_color_for(background_hex: str) -> str:
    """
    Return black text for light backgrounds and white text for dark ones.

    Anything that is not six characters after an optional ``#`` falls back
    to black; this function never raises.
    """
    if not isinstance(background_hex, str):
        return BLACK

    value = background_hex[1:] if background_hex.startswith("#") else background_hex
    if len(value) != 6:
        return BLACK

    return BLACK if brightness(value) > BRIGHTNESS_THRESHOLD else WHITE
