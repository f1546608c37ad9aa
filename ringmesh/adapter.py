"""Tapered adapters joining two fittings of different diameter.

An adapter is a hollow tube in three sections: a straight sleeve sized for the
first fitting, a conical transition, then a straight sleeve for the second
fitting. Each side is given by one measured diameter (inner or outer) and the
other is derived from a fixed wall.
"""
import logging
import math
from dataclasses import dataclass
from typing import NamedTuple, Optional

from .mesh import Mesh
from .ring import create_revolved_shell_facets
from .settings import DEFAULT_SEGMENTS, MIN_SEGMENTS

logger = logging.getLogger(__name__)

# 2mm radial wall, so 4mm across the diameter
DEFAULT_WALL_THICKNESS = 4.0

SECTION_LENGTH_MM = 50.8  # 2 inches
TRANSITION_LENGTH_MM = 25.4  # 1 inch
MM_PER_INCH = 25.4


class DiameterPair(NamedTuple):
    inner: float
    outer: float


def calculate_diameter_pair(inner: Optional[float] = None, outer: Optional[float] = None,
                            wall_thickness: float = DEFAULT_WALL_THICKNESS) -> DiameterPair:
    """Inner and outer diameter of one adapter side from exactly one of them.

    ``wall_thickness`` is the difference between the two diameters.
    """
    if inner is not None and outer is not None:
        raise ValueError("Specify either inner OR outer diameter, not both")
    if inner is None and outer is None:
        raise ValueError("Must specify either inner or outer diameter")
    if not wall_thickness > 0:
        raise ValueError(f"wall thickness must be > 0, got {wall_thickness}")

    if inner is not None:
        if not inner > 0:
            raise ValueError(f"inner diameter must be > 0, got {inner}")
        return DiameterPair(inner, inner + wall_thickness)

    calculated_inner = outer - wall_thickness
    if not calculated_inner > 0:
        raise ValueError("Outer diameter too small for wall thickness")
    return DiameterPair(calculated_inner, outer)


def create_diameter_spec(inner: Optional[float] = None, outer: Optional[float] = None) -> str:
    """File-name token for a measured side: ``i50`` or ``o63.5``."""
    if inner is not None:
        return f"i{inner:g}"
    if outer is not None:
        return f"o{outer:g}"
    raise ValueError("Must specify either inner or outer diameter")


def generate_adapter_filename(side1_spec: str, side2_spec: str, extension: str = ".stl") -> str:
    return f"adapter_{side1_spec}_to_{side2_spec}{extension}"


def calculate_total_length(section_length: float = SECTION_LENGTH_MM,
                           transition_length: float = TRANSITION_LENGTH_MM) -> float:
    return (section_length * 2) + transition_length


def mm_to_inches(mm: float) -> float:
    return mm / MM_PER_INCH


@dataclass(frozen=True)
class AdapterSpec:
    """Validated description of one tapered adapter, in millimetres."""
    side1: DiameterPair
    side2: DiameterPair
    section_length: float = SECTION_LENGTH_MM
    transition_length: float = TRANSITION_LENGTH_MM
    segments: int = DEFAULT_SEGMENTS
    name: str = "adapter"

    def __post_init__(self):
        for side_name in ("side1", "side2"):
            inner, outer = getattr(self, side_name)
            if not all(isinstance(v, (int, float)) and math.isfinite(v) for v in (inner, outer)):
                raise ValueError(f"{side_name} diameters must be finite numbers, got {inner!r}, {outer!r}")
            if not outer > inner > 0:
                raise ValueError(f"{side_name} needs outer > inner > 0, got {inner}, {outer}")
        for field_name in ("section_length", "transition_length"):
            value = getattr(self, field_name)
            if not (isinstance(value, (int, float)) and math.isfinite(value) and value > 0):
                raise ValueError(f"{field_name} must be a finite number > 0, got {value!r}")
        if isinstance(self.segments, bool) or not isinstance(self.segments, int):
            raise ValueError(f"segments must be an integer, got {self.segments!r}")
        if self.segments < MIN_SEGMENTS:
            raise ValueError(f"segments must be >= {MIN_SEGMENTS}, got {self.segments}")
        if not self.name or any(ch.isspace() for ch in self.name):
            raise ValueError(f"name must be a non-empty token without whitespace, got {self.name!r}")

    @property
    def total_length(self) -> float:
        return calculate_total_length(self.section_length, self.transition_length)

    def profile(self) -> list[tuple[float, float, float]]:
        """``(z, r_in, r_out)`` stations from the side 1 end to the side 2 end."""
        r1 = (self.side1.inner / 2.0, self.side1.outer / 2.0)
        r2 = (self.side2.inner / 2.0, self.side2.outer / 2.0)
        taper_start = self.section_length
        taper_end = self.section_length + self.transition_length
        return [
            (0.0, *r1),
            (taper_start, *r1),
            (taper_end, *r2),
            (self.total_length, *r2),
        ]


def adapter_from_measurements(inner1: Optional[float] = None, outer1: Optional[float] = None,
                              inner2: Optional[float] = None, outer2: Optional[float] = None,
                              wall_thickness: float = DEFAULT_WALL_THICKNESS,
                              segments: int = DEFAULT_SEGMENTS, **kwargs) -> AdapterSpec:
    """Adapter from one measured diameter per side, named after the measurements."""
    side1 = calculate_diameter_pair(inner=inner1, outer=outer1, wall_thickness=wall_thickness)
    side2 = calculate_diameter_pair(inner=inner2, outer=outer2, wall_thickness=wall_thickness)
    name = generate_adapter_filename(
        create_diameter_spec(inner=inner1, outer=outer1),
        create_diameter_spec(inner=inner2, outer=outer2),
        extension="",
    )
    return AdapterSpec(side1, side2, segments=segments, name=kwargs.pop("name", name), **kwargs)


def build_adapter_mesh(spec: AdapterSpec) -> Mesh:
    mesh = create_revolved_shell_facets(spec.profile(), spec.segments).freeze(spec.name)
    logger.debug(
        "Built %s: side1 %s/%s, side2 %s/%s, length %.1fmm (%.1f in), %d facets",
        spec.name, spec.side1.inner, spec.side1.outer, spec.side2.inner, spec.side2.outer,
        spec.total_length, mm_to_inches(spec.total_length), len(mesh),
    )
    return mesh
