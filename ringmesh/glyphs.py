"""Block glyphs for ring labels.

Each glyph is a set of axis-aligned rectangles ``(x1, y1, x2, y2)`` inside the
unit square, x to the right and y up. Characters missing from the table have
no geometry but still take up a character slot when laid out.
"""
from types import MappingProxyType

Rect = tuple[float, float, float, float]

_BAR_BOTTOM = (0.0, 0.0, 1.0, 0.2)
_BAR_MIDDLE = (0.0, 0.4, 1.0, 0.6)
_BAR_TOP = (0.0, 0.8, 1.0, 1.0)
_RING = (_BAR_BOTTOM, _BAR_TOP, (0.0, 0.2, 0.2, 0.8), (0.8, 0.2, 1.0, 0.8))
_STEM = ((0.4, 0.0, 0.6, 1.0),)

GLYPHS = MappingProxyType({
    '0': _RING,
    '1': _STEM,
    '2': (_BAR_BOTTOM, _BAR_MIDDLE, _BAR_TOP, (0.8, 0.6, 1.0, 0.8), (0.0, 0.2, 0.2, 0.4)),
    '3': (_BAR_BOTTOM, _BAR_MIDDLE, _BAR_TOP, (0.8, 0.2, 1.0, 0.4), (0.8, 0.6, 1.0, 0.8)),
    '4': (_BAR_MIDDLE, (0.0, 0.6, 0.2, 1.0), (0.8, 0.0, 1.0, 1.0)),
    '5': (_BAR_BOTTOM, _BAR_MIDDLE, _BAR_TOP, (0.0, 0.6, 0.2, 0.8), (0.8, 0.2, 1.0, 0.4)),
    '6': (_BAR_BOTTOM, _BAR_MIDDLE, _BAR_TOP, (0.0, 0.2, 0.2, 0.8), (0.8, 0.2, 1.0, 0.4)),
    '7': (_BAR_TOP, (0.8, 0.0, 1.0, 0.8)),
    '8': (_BAR_BOTTOM, _BAR_MIDDLE, _BAR_TOP,
          (0.0, 0.2, 0.2, 0.4), (0.0, 0.6, 0.2, 0.8), (0.8, 0.2, 1.0, 0.4), (0.8, 0.6, 1.0, 0.8)),
    '9': (_BAR_BOTTOM, _BAR_MIDDLE, _BAR_TOP, (0.0, 0.6, 0.2, 0.8), (0.8, 0.2, 1.0, 0.8)),
    'I': _STEM,
    'D': ((0.0, 0.0, 0.8, 0.2), (0.0, 0.8, 0.8, 1.0), (0.0, 0.2, 0.2, 0.8), (0.8, 0.2, 1.0, 0.8)),
    'O': _RING,
    'M': ((0.0, 0.0, 0.2, 1.0), (0.8, 0.0, 1.0, 1.0), (0.2, 0.8, 0.4, 1.0), (0.6, 0.8, 0.8, 1.0)),
    'm': ((0.0, 0.0, 0.2, 1.0), (0.4, 0.0, 0.6, 1.0), (0.8, 0.0, 1.0, 1.0), (0.0, 0.8, 1.0, 1.0)),
    ' ': (),
})


def glyph_rects(ch: str) -> tuple[Rect, ...]:
    """Rectangles for ``ch``; empty for spaces and unsupported characters."""
    return GLYPHS.get(ch, ())


def is_supported(ch: str) -> bool:
    return ch in GLYPHS
