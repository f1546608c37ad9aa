"""Block text wrapped around a cylinder.

Each glyph rectangle becomes a small curved box spanning an angle range, a z
range and a radial range ``[r_lo, r_hi]``. One radius is the cylinder surface
the text sits on; the other is offset by the text depth. The box face lying on
the surface is left out, since it coincides with the ring wall.

Raised text adds material, so its faces point out of the box. Recessed text
describes a cavity, so every face is wound the other way and points into it.
Nothing is subtracted from the ring; the text triangles are simply added.
"""
import logging
import math
from dataclasses import dataclass

from .glyphs import glyph_rects
from .mesh import FacetList, Triangle
from .settings import CHAR_SPACING, MAX_TEXT_ARC

logger = logging.getLogger(__name__)

OUTER_DIRECTION = 1
INNER_DIRECTION = -1


@dataclass(frozen=True)
class TextLayout:
    """Angular placement of a string around the cylinder axis.

    ``angle_per_char`` is the pitch from one character slot to the next and
    ``glyph_angle`` the angular width of a glyph inside its slot. ``direction``
    is +1 when the text is read from outside the cylinder and -1 when read
    from inside, where increasing angle runs right to left.
    """
    count: int
    start_angle: float
    angle_per_char: float
    glyph_angle: float
    direction: int = OUTER_DIRECTION

    @property
    def span(self) -> float:
        return self.angle_per_char * self.count

    def char_center(self, index: int) -> float:
        return self.direction * (self.start_angle + (index + 0.5) * self.angle_per_char)

    def glyph_angles(self, index: int, x1: float, x2: float) -> tuple[float, float]:
        """Angle range covered by glyph x-extent ``[x1, x2]`` of character ``index``."""
        center = self.char_center(index)
        a1 = center + self.direction * (x1 - 0.5) * self.glyph_angle
        a2 = center + self.direction * (x2 - 0.5) * self.glyph_angle
        return min(a1, a2), max(a1, a2)


def layout_text(text: str, radius: float, char_width: float, spacing: float = CHAR_SPACING,
                max_arc: float = MAX_TEXT_ARC, direction: int = OUTER_DIRECTION) -> TextLayout:
    """Centre ``text`` on angle 0, shrinking it if it would exceed ``max_arc``."""
    if radius <= 0.0:
        raise ValueError(f"text radius must be > 0, got {radius}")
    if char_width <= 0.0:
        raise ValueError(f"char_width must be > 0, got {char_width}")
    if direction not in (OUTER_DIRECTION, INNER_DIRECTION):
        raise ValueError(f"direction must be +1 or -1, got {direction}")

    count = len(text)
    glyph_angle = char_width / radius
    pitch = glyph_angle * spacing
    if count and pitch * count > max_arc:
        scale = max_arc / (pitch * count)
        logger.debug("Text %r spans %.3f rad, clamping to %.3f", text, pitch * count, max_arc)
        pitch *= scale
        glyph_angle *= scale

    return TextLayout(
        count=count,
        start_angle=-(pitch * count) / 2.0,
        angle_per_char=pitch,
        glyph_angle=glyph_angle,
        direction=direction,
    )


def _point(r, a, z):
    return (r * math.cos(a), r * math.sin(a), z)


def _radial(a):
    return (math.cos(a), math.sin(a), 0.0)


def _tangent(a):
    return (-math.sin(a), math.cos(a), 0.0)


def add_curved_box(facets: FacetList, a1, a2, z1, z2, r_lo, r_hi, omit: str, cavity: bool = False):
    """Add the faces of a curved box, leaving out the ``"lo"`` or ``"hi"`` radial face.

    Quads are listed with outward winding; for a cavity the winding and the
    expected normal are both reversed.
    """
    am = (a1 + a2) / 2.0
    out_r, out_t1, out_t2 = _radial(am), _tangent(a1), _tangent(a2)
    faces = [
        ("hi", [(r_hi, a1, z1), (r_hi, a2, z1), (r_hi, a2, z2), (r_hi, a1, z2)], out_r),
        ("lo", [(r_lo, a1, z1), (r_lo, a1, z2), (r_lo, a2, z2), (r_lo, a2, z1)],
         tuple(-c for c in out_r)),
        ("top", [(r_lo, a1, z2), (r_hi, a1, z2), (r_hi, a2, z2), (r_lo, a2, z2)], (0.0, 0.0, 1.0)),
        ("bottom", [(r_lo, a1, z1), (r_lo, a2, z1), (r_hi, a2, z1), (r_hi, a1, z1)], (0.0, 0.0, -1.0)),
        ("start", [(r_lo, a1, z1), (r_hi, a1, z1), (r_hi, a1, z2), (r_lo, a1, z2)],
         tuple(-c for c in out_t1)),
        ("end", [(r_lo, a2, z1), (r_lo, a2, z2), (r_hi, a2, z2), (r_hi, a2, z1)], out_t2),
    ]
    for side, corners, expect in faces:
        if side == omit:
            continue
        points = [_point(*c) for c in corners]
        if cavity:
            points = points[::-1]
            expect = tuple(-c for c in expect)
        facets.add_quad(*points, expect=expect, label=f"text {side}")


def create_curved_text_facets(text: str, radius: float, z_bottom: float, z_top: float,
                              char_width: float, depth: float, on_inner: bool = False,
                              raised: bool = True, spacing: float = CHAR_SPACING,
                              max_arc: float = MAX_TEXT_ARC) -> list[Triangle]:
    """Triangles for ``text`` wrapped onto the cylinder of ``radius``.

    Raised text stands ``depth`` proud of the surface (into the bore for inner
    text, away from the axis for outer text); recessed text is cut ``depth``
    into the wall.
    """
    if not text:
        return []
    if depth <= 0.0:
        raise ValueError(f"text depth must be > 0, got {depth}")
    if z_top <= z_bottom:
        raise ValueError(f"text band must have z_top > z_bottom, got [{z_bottom}, {z_top}]")

    direction = INNER_DIRECTION if on_inner else OUTER_DIRECTION
    layout = layout_text(text, radius, char_width, spacing, max_arc, direction)

    # Text pointing into the bore or recessed into the outer wall lies below the surface
    below = on_inner == raised
    offset_radius = radius - depth if below else radius + depth
    if offset_radius <= 0.0:
        raise ValueError(f"text depth {depth} reaches the axis from radius {radius}")
    r_lo, r_hi = (offset_radius, radius) if below else (radius, offset_radius)
    omit = "hi" if below else "lo"

    facets = FacetList()
    band = z_top - z_bottom
    for i, ch in enumerate(text):
        for x1, y1, x2, y2 in glyph_rects(ch):
            a1, a2 = layout.glyph_angles(i, x1, x2)
            z1 = z_bottom + y1 * band
            z2 = z_bottom + y2 * band
            add_curved_box(facets, a1, a2, z1, z2, r_lo, r_hi, omit, cavity=not raised)

    logger.debug("Laid out %r on r=%.3f: %d facets", text, radius, len(facets))
    return list(facets.freeze("text").triangles)
