"""Diameter arithmetic, fit clearances and naming for dust-collection rings."""
import logging
import math
from dataclasses import dataclass
from typing import Optional

from .settings import DEFAULT_HEIGHT, DEFAULT_SEGMENTS, DEFAULT_THICKNESS, RingSpec

logger = logging.getLogger(__name__)

# Fitted to measured fits: 45.8mm -> 0.6mm, 101mm -> 0.1mm
CLEARANCE_COEFFICIENT = 3476.1064
CLEARANCE_EXPONENT = -2.266
CLEARANCE_STEP = 0.05  # mm

COMMON_SIZES = (25, 32, 38, 50, 63, 76, 100, 125, 150)  # mm

# Tight, snug, optimal, loose
FIT_MULTIPLIERS = (0.5, 0.75, 1.0, 1.5)
FIT_NAMES = ("tight", "snug", "optimal", "loose")


def dust_collection_clearance(diameter_mm: float) -> float:
    """Empirical fit clearance in mm for a fitting of ``diameter_mm``."""
    if not (math.isfinite(diameter_mm) and diameter_mm > 0):
        raise ValueError(f"diameter must be a finite number > 0, got {diameter_mm}")
    try:
        clearance = CLEARANCE_COEFFICIENT * diameter_mm ** CLEARANCE_EXPONENT
    except OverflowError:
        clearance = math.inf
    if not math.isfinite(clearance):
        raise ValueError(f"diameter {diameter_mm} is too small for the clearance formula")
    return clearance


def calculate_dust_collection_clearance(diameter_mm: float) -> float:
    """Clearance rounded to 0.05mm steps, as used for printed test rings."""
    clearance = dust_collection_clearance(diameter_mm)
    steps = 1.0 / CLEARANCE_STEP
    return round(clearance * steps) / steps


def clearance_table(sizes=COMMON_SIZES) -> list[dict]:
    rows = []
    for diameter in sizes:
        optimal = calculate_dust_collection_clearance(diameter)
        rows.append({
            "diameter": diameter,
            "optimal": optimal,
            "tight": optimal * 0.5,
            "snug": optimal * 0.75,
            "loose": optimal * 1.5,
        })
    return rows


def calculate_inner_diameter(outer_diameter: float, thickness: float) -> float:
    inner_diameter = outer_diameter - (thickness * 2)
    if not inner_diameter > 0:
        raise ValueError("Thickness too large: inner diameter <= 0")
    return inner_diameter


def calculate_outer_diameter(inner_diameter: float, thickness: float) -> float:
    return inner_diameter + (thickness * 2)


def default_label(diameter: float, inner: bool) -> str:
    """``"ID50MM"`` for an inner diameter, ``"OD50MM"`` for an outer one."""
    prefix = "ID" if inner else "OD"
    return f"{prefix}{int(diameter)}MM"


def generate_filename(inner_diameter, thickness, height, is_inner_mode,
                      outer_diameter=None, extension=".stl") -> str:
    if is_inner_mode:
        return f"ring_id{inner_diameter:.1f}_t{thickness:.1f}_h{height:.1f}{extension}"
    if outer_diameter is None:
        outer_diameter = calculate_outer_diameter(inner_diameter, thickness)
    return f"ring_od{outer_diameter:.1f}_t{thickness:.1f}_h{height:.1f}{extension}"


def spec_from_inner_diameter(inner_diameter: float, thickness: float = DEFAULT_THICKNESS,
                             height: float = DEFAULT_HEIGHT, segments: int = DEFAULT_SEGMENTS,
                             label: Optional[str] = None, **kwargs) -> RingSpec:
    """Ring sized by its bore; the label goes on the inner surface."""
    if not inner_diameter > 0:
        raise ValueError(f"inner diameter must be > 0, got {inner_diameter}")
    if not thickness > 0:
        raise ValueError(f"thickness must be > 0, got {thickness}")
    name = generate_filename(inner_diameter, thickness, height, True, extension="")
    return RingSpec(
        inner_radius=inner_diameter / 2.0,
        outer_radius=calculate_outer_diameter(inner_diameter, thickness) / 2.0,
        height=height,
        segments=segments,
        label=default_label(inner_diameter, True) if label is None else label,
        label_on_inner=True,
        name=kwargs.pop("name", name),
        **kwargs,
    )


def spec_from_outer_diameter(outer_diameter: float, thickness: float = DEFAULT_THICKNESS,
                             height: float = DEFAULT_HEIGHT, segments: int = DEFAULT_SEGMENTS,
                             label: Optional[str] = None, **kwargs) -> RingSpec:
    """Ring sized by its outside; the label goes on the outer surface."""
    if not outer_diameter > 0:
        raise ValueError(f"outer diameter must be > 0, got {outer_diameter}")
    if not thickness > 0:
        raise ValueError(f"thickness must be > 0, got {thickness}")
    inner_diameter = calculate_inner_diameter(outer_diameter, thickness)
    name = generate_filename(inner_diameter, thickness, height, False,
                             outer_diameter=outer_diameter, extension="")
    return RingSpec(
        inner_radius=inner_diameter / 2.0,
        outer_radius=outer_diameter / 2.0,
        height=height,
        segments=segments,
        label=default_label(outer_diameter, False) if label is None else label,
        label_on_inner=False,
        name=kwargs.pop("name", name),
        **kwargs,
    )


def ring_series(base_diameter: float, inner_mode: bool, step: float = 0.1, count: int = 5,
                up: bool = True, thickness: float = DEFAULT_THICKNESS,
                height: float = DEFAULT_HEIGHT, segments: int = DEFAULT_SEGMENTS) -> list[RingSpec]:
    """Rings whose measured diameter steps by ``step`` from ``base_diameter``.

    Rings whose bore would vanish are skipped.
    """
    if count < 1:
        raise ValueError(f"count must be >= 1, got {count}")
    if not step > 0:
        raise ValueError(f"step must be > 0, got {step}")

    sign = 1 if up else -1
    rings = []
    for i in range(count):
        diameter = base_diameter + sign * i * step
        if inner_mode:
            if not diameter > 0:
                logger.warning("Ring %d would have inner diameter %.2fmm. Skipping.", i + 1, diameter)
                continue
            spec = spec_from_inner_diameter(
                diameter, thickness, height, segments,
                label=f"I{diameter:.1f}mm", name=f"ring_id{diameter:.2f}",
            )
        else:
            if not diameter - thickness * 2 > 0:
                logger.warning("Ring %d would have inner diameter %.2fmm. Skipping.",
                               i + 1, diameter - thickness * 2)
                continue
            spec = spec_from_outer_diameter(
                diameter, thickness, height, segments,
                label=f"O{diameter:.1f}mm", name=f"ring_od{diameter:.2f}",
            )
        rings.append(spec)
    return rings


@dataclass(frozen=True)
class FitKitRing:
    name: str
    description: str
    spec: RingSpec


def fit_kit(base_diameter: float, is_outer_mode: bool, thickness: float = DEFAULT_THICKNESS,
            height: float = DEFAULT_HEIGHT, segments: int = DEFAULT_SEGMENTS) -> list[FitKitRing]:
    """Replica of a measured part plus test rings at each standard clearance.

    For an outer measurement the test rings slide over the part; for an inner
    measurement they slide into it.
    """
    base_clearance = calculate_dust_collection_clearance(base_diameter)
    rings = []

    if is_outer_mode:
        replica = spec_from_outer_diameter(
            base_diameter, thickness, height, segments,
            label=f"O{base_diameter:g}mm", name=f"replica_od{base_diameter:g}",
        )
    else:
        replica = spec_from_inner_diameter(
            base_diameter, thickness, height, segments,
            label=f"I{base_diameter:g}mm", name=f"replica_id{base_diameter:g}",
        )
    rings.append(FitKitRing(replica.name, "Replica of measured part", replica))

    for multiplier, fit_name in zip(FIT_MULTIPLIERS, FIT_NAMES):
        clearance = base_clearance * multiplier
        name = f"test_fit_{clearance:.2f}mm_clearance"
        if is_outer_mode:
            test_inner = base_diameter + clearance
            spec = spec_from_inner_diameter(
                test_inner, thickness, height, segments,
                label=f"I{test_inner:.1f}mm", name=name,
            )
        else:
            test_outer = base_diameter - clearance
            spec = spec_from_outer_diameter(
                test_outer, thickness, height, segments,
                label=f"O{test_outer:.1f}mm", name=name,
            )
        rings.append(FitKitRing(name, f"Test ring - {fit_name} fit", spec))

    return rings


def adapter_pair(base_diameter: float, is_outer_mode: bool, thickness: float = DEFAULT_THICKNESS,
                 height: float = DEFAULT_HEIGHT, segments: int = DEFAULT_SEGMENTS) -> list[FitKitRing]:
    """Replica of a measured part plus one ring at the optimal clearance.

    The second ring slides over the replica for an outer measurement and into
    it for an inner one.
    """
    clearance = calculate_dust_collection_clearance(base_diameter)

    if is_outer_mode:
        replica = spec_from_outer_diameter(
            base_diameter, thickness, height, segments,
            label=f"O{base_diameter:g}mm", name=f"replica_od{base_diameter:g}",
        )
        adapter_inner = base_diameter + clearance
        name = f"adapter_id{adapter_inner:.1f}"
        adapter = spec_from_inner_diameter(
            adapter_inner, thickness, height, segments,
            label=f"I{adapter_inner:.1f}mm", name=name,
        )
        description = "Adapter that fits over replica"
    else:
        replica = spec_from_inner_diameter(
            base_diameter, thickness, height, segments,
            label=f"I{base_diameter:g}mm", name=f"replica_id{base_diameter:g}",
        )
        adapter_outer = base_diameter - clearance
        name = f"adapter_od{adapter_outer:.1f}"
        adapter = spec_from_outer_diameter(
            adapter_outer, thickness, height, segments,
            label=f"O{adapter_outer:.1f}mm", name=name,
        )
        description = "Adapter that fits inside replica"

    return [
        FitKitRing(replica.name, "Replica of measured part", replica),
        FitKitRing(name, description, adapter),
    ]
