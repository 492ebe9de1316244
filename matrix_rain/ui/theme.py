# matrix_rain/ui/theme.py

from __future__ import annotations

# Katakana and symbols inspired by The Matrix film
MATRIX_CHARS = (
    "ﾊﾐﾑﾒﾓﾔﾕﾖﾗﾘﾙﾚﾛﾜｦﾝ"  # Common katakana
    "ｱｲｳｴｵｶｷｸｹｺｻｼｽｾｿﾀﾁﾂﾃﾄﾅﾆﾇﾈﾉ"  # Additional katakana
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"  # Latin capitals
    "0123456789"  # Numerals for variety
)

HEAD_STYLE = "bold white"

# (minimum brightness, style) from brightest to dimmest
FADE_STYLES = (
    (0.75, "bold bright_green"),
    (0.45, "bright_green"),
    (0.2, "green"),
    (0.0, "dim green"),
)


def style_for(brightness: float) -> str:
    """
    Map a cell brightness in (0, 1] to a rich style.
    Only the head of a trail reaches 1.0.
    """
    if brightness >= 1.0:
        return HEAD_STYLE
    for floor, style in FADE_STYLES:
        if brightness >= floor:
            return style
    return FADE_STYLES[-1][1]
