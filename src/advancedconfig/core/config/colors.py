"""Minecraft-style colour code helpers."""

from __future__ import annotations

COLOR_CHAR = "§"
DEFAULT_ALT_COLOR_CHAR = "&"
COLOR_CODES = "0123456789AaBbCcDdEeFfKkLlMmNnOoRrXx"


def translate_alternate_color_codes(alt_char: str, text: str) -> str:
    """Replace ``alt_char`` + code pairs (``&a``) with the section-sign form (``§a``)."""
    chars = list(text)
    for i in range(len(chars) - 1):
        if chars[i] == alt_char and chars[i + 1] in COLOR_CODES:
            chars[i] = COLOR_CHAR
            chars[i + 1] = chars[i + 1].lower()
    return "".join(chars)
