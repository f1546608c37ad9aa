"""Ring parameters and defaults."""
import math
from dataclasses import dataclass
from typing import Optional

DEFAULT_THICKNESS = 2.0  # mm, radial wall
DEFAULT_HEIGHT = 20.0  # mm
DEFAULT_SEGMENTS = 128
MIN_SEGMENTS = 16

# Label proportions relative to the ring
TEXT_HEIGHT_RATIO = 0.6  # of ring height
TEXT_DEPTH_RATIO = 0.3  # of wall thickness
CHAR_WIDTH_RATIO = 0.8  # glyph width per unit of text height
CHAR_SPACING = 1.5  # pitch between glyphs, in glyph widths
MAX_TEXT_ARC = math.pi * 0.8  # 144 degrees


def _check_finite(field_name, value):
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValueError(f"{field_name} must be a finite number, got {value!r}")


@dataclass(frozen=True)
class RingSpec:
    """Validated, immutable description of one ring.

    All lengths are in millimetres. Construction fails with ``ValueError`` when
    the parameters cannot describe a closed ring or a label that fits on it.
    """
    inner_radius: float
    outer_radius: float
    height: float
    segments: int = DEFAULT_SEGMENTS
    label: Optional[str] = None
    label_on_inner: bool = True
    label_raised: bool = True
    text_depth: Optional[float] = None
    text_height: Optional[float] = None
    name: str = "ring"

    def __post_init__(self):
        for field_name in ("inner_radius", "outer_radius", "height"):
            _check_finite(field_name, getattr(self, field_name))
        if not (self.outer_radius > self.inner_radius and self.inner_radius >= 0.0):
            raise ValueError(
                f"outer_radius must be > inner_radius >= 0 "
                f"(got inner={self.inner_radius}, outer={self.outer_radius})"
            )
        if not self.height > 0.0:
            raise ValueError(f"height must be > 0, got {self.height}")
        if isinstance(self.segments, bool) or not isinstance(self.segments, int):
            raise ValueError(f"segments must be an integer, got {self.segments!r}")
        if self.segments < MIN_SEGMENTS:
            raise ValueError(f"segments must be >= {MIN_SEGMENTS}, got {self.segments}")
        if not self.name or any(ch.isspace() for ch in self.name):
            raise ValueError(f"name must be a non-empty token without whitespace, got {self.name!r}")
        if self.label:
            self._validate_label()

    def _validate_label(self):
        if self.label_on_inner and self.inner_radius == 0.0:
            raise ValueError("a solid disc has no inner surface for the label")
        for field_name in ("text_depth", "text_height"):
            if getattr(self, field_name) is not None:
                _check_finite(field_name, getattr(self, field_name))
        depth = self.effective_text_depth
        text_height = self.effective_text_height
        if not depth > 0.0:
            raise ValueError(f"text_depth must be > 0, got {depth}")
        if not 0.0 < text_height <= self.height:
            raise ValueError(f"text_height must be in (0, {self.height}], got {text_height}")
        if not self.label_raised and depth >= self.thickness:
            raise ValueError(
                f"recessed text_depth {depth} must be less than wall thickness {self.thickness}"
            )
        if self.label_raised and self.label_on_inner and depth >= self.inner_radius:
            raise ValueError(
                f"raised inner text_depth {depth} must be less than inner radius {self.inner_radius}"
            )

    @property
    def thickness(self) -> float:
        return self.outer_radius - self.inner_radius

    @property
    def inner_diameter(self) -> float:
        return self.inner_radius * 2.0

    @property
    def outer_diameter(self) -> float:
        return self.outer_radius * 2.0

    @property
    def label_radius(self) -> float:
        return self.inner_radius if self.label_on_inner else self.outer_radius

    @property
    def effective_text_depth(self) -> float:
        if self.text_depth is not None:
            return float(self.text_depth)
        return self.thickness * TEXT_DEPTH_RATIO

    @property
    def effective_text_height(self) -> float:
        if self.text_height is not None:
            return float(self.text_height)
        return self.height * TEXT_HEIGHT_RATIO

    @property
    def text_band(self) -> tuple[float, float]:
        """Bottom and top z of the label, centred on the ring height."""
        bottom = (self.height - self.effective_text_height) / 2.0
        return bottom, bottom + self.effective_text_height

    @property
    def char_width(self) -> float:
        return self.effective_text_height * CHAR_WIDTH_RATIO
