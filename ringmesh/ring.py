"""Ring (washer) shell generation.

The shell is built directly as triangles: for every angular step one quad on
each of the outer wall, inner wall, top annulus and bottom annulus. A solid
disc (inner radius 0) has no inner wall and closes its caps with fans instead.

The hollow case is one instance of a revolved profile: a stack of z stations,
each with its own inner and outer radius, which is also how tapered adapters
are built.
"""
import logging

import numpy as np

from .curved_text import create_curved_text_facets
from .mesh import FacetList, Mesh
from .settings import RingSpec

logger = logging.getLogger(__name__)

UP = (0.0, 0.0, 1.0)
DOWN = (0.0, 0.0, -1.0)


def ring_angles(segments: int) -> np.ndarray:
    """``segments + 1`` angles round the circle; the last one repeats the first."""
    angles = np.linspace(0.0, 2.0 * np.pi, segments, endpoint=False)
    return np.append(angles, angles[0])


def create_ring_shell_facets(spec: RingSpec) -> FacetList:
    """Closed, outward-facing shell between ``spec.inner_radius`` and ``spec.outer_radius``."""
    r_in, r_out = spec.inner_radius, spec.outer_radius
    if r_in > 0.0:
        return create_revolved_shell_facets(
            [(0.0, r_in, r_out), (spec.height, r_in, r_out)], spec.segments
        )

    # Solid disc: no inner wall, caps fanned into the axis
    hz0, hz1 = 0.0, spec.height
    angles = ring_angles(spec.segments)
    cos = np.cos(angles)
    sin = np.sin(angles)
    mid = angles[:-1] + np.pi / spec.segments

    facets = FacetList()
    for i in range(spec.segments):
        i2 = i + 1
        outward = (float(np.cos(mid[i])), float(np.sin(mid[i])), 0.0)

        ob0 = (r_out * cos[i], r_out * sin[i], hz0)
        ob1 = (r_out * cos[i2], r_out * sin[i2], hz0)
        ot0 = (r_out * cos[i], r_out * sin[i], hz1)
        ot1 = (r_out * cos[i2], r_out * sin[i2], hz1)

        facets.add(ob0, ob1, ot1, expect=outward, label="outer wall")
        facets.add(ob0, ot1, ot0, expect=outward, label="outer wall")
        facets.add(ot0, ot1, (0.0, 0.0, hz1), expect=UP, label="top cap")
        facets.add(ob1, ob0, (0.0, 0.0, hz0), expect=DOWN, label="bottom cap")

    return facets


def create_revolved_shell_facets(profile, segments: int) -> FacetList:
    """Closed shell of a hollow solid of revolution.

    ``profile`` lists ``(z, r_in, r_out)`` stations with strictly increasing z
    and ``r_out > r_in > 0``. Between stations the walls are straight in
    profile, so a radius change between two stations gives a conical band.
    """
    profile = [(float(z), float(r_in), float(r_out)) for z, r_in, r_out in profile]
    if len(profile) < 2:
        raise ValueError("profile needs at least two stations")
    for (z0, _, _), (z1, _, _) in zip(profile, profile[1:]):
        if not z1 > z0:
            raise ValueError(f"profile z must strictly increase, got {z0} then {z1}")
    for z, r_in, r_out in profile:
        if not r_out > r_in > 0.0:
            raise ValueError(f"profile at z={z} needs r_out > r_in > 0, got {r_in}, {r_out}")

    # Precompute rings
    angles = ring_angles(segments)
    cos = np.cos(angles)
    sin = np.sin(angles)
    mid = angles[:-1] + np.pi / segments
    bands = list(zip(profile, profile[1:]))
    z_bottom, rb_in, rb_out = profile[0]
    z_top, rt_in, rt_out = profile[-1]

    facets = FacetList()
    for i in range(segments):
        i2 = i + 1
        c, s = float(np.cos(mid[i])), float(np.sin(mid[i]))

        # Outer wall, normal away from the axis (tilted up or down on a taper)
        for (z0, _, r0), (z1, _, r1) in bands:
            outward = ((z1 - z0) * c, (z1 - z0) * s, -(r1 - r0))
            ob0 = (r0 * cos[i], r0 * sin[i], z0)
            ob1 = (r0 * cos[i2], r0 * sin[i2], z0)
            ot0 = (r1 * cos[i], r1 * sin[i], z1)
            ot1 = (r1 * cos[i2], r1 * sin[i2], z1)
            facets.add(ob0, ob1, ot1, expect=outward, label="outer wall")
            facets.add(ob0, ot1, ot0, expect=outward, label="outer wall")

        # Inner wall, wound opposite to the outer wall so the normal faces the axis
        for (z0, r0, _), (z1, r1, _) in bands:
            inward = (-(z1 - z0) * c, -(z1 - z0) * s, r1 - r0)
            ib0 = (r0 * cos[i], r0 * sin[i], z0)
            ib1 = (r0 * cos[i2], r0 * sin[i2], z0)
            it0 = (r1 * cos[i], r1 * sin[i], z1)
            it1 = (r1 * cos[i2], r1 * sin[i2], z1)
            facets.add(ib1, ib0, it0, expect=inward, label="inner wall")
            facets.add(it1, ib1, it0, expect=inward, label="inner wall")

        # Top annulus, counter-clockwise seen from above
        ot0 = (rt_out * cos[i], rt_out * sin[i], z_top)
        ot1 = (rt_out * cos[i2], rt_out * sin[i2], z_top)
        it0 = (rt_in * cos[i], rt_in * sin[i], z_top)
        it1 = (rt_in * cos[i2], rt_in * sin[i2], z_top)
        facets.add(ot0, ot1, it1, expect=UP, label="top annulus")
        facets.add(ot0, it1, it0, expect=UP, label="top annulus")

        # Bottom annulus, clockwise seen from above
        ob0 = (rb_out * cos[i], rb_out * sin[i], z_bottom)
        ob1 = (rb_out * cos[i2], rb_out * sin[i2], z_bottom)
        ib0 = (rb_in * cos[i], rb_in * sin[i], z_bottom)
        ib1 = (rb_in * cos[i2], rb_in * sin[i2], z_bottom)
        facets.add(ob1, ob0, ib0, expect=DOWN, label="bottom annulus")
        facets.add(ib1, ob1, ib0, expect=DOWN, label="bottom annulus")

    return facets


def build_ring_mesh(spec: RingSpec) -> Mesh:
    """Shell of ``spec`` plus its label, if any, as one immutable mesh."""
    facets = create_ring_shell_facets(spec)
    shell_count = len(facets)

    if spec.label:
        z_bottom, z_top = spec.text_band
        facets.extend(create_curved_text_facets(
            spec.label,
            spec.label_radius,
            z_bottom,
            z_top,
            spec.char_width,
            spec.effective_text_depth,
            on_inner=spec.label_on_inner,
            raised=spec.label_raised,
        ))

    mesh = facets.freeze(spec.name)
    logger.debug(
        "Built %s: r_in=%s r_out=%s h=%s segments=%d, %d shell + %d text facets",
        spec.name, spec.inner_radius, spec.outer_radius, spec.height, spec.segments,
        shell_count, len(mesh) - shell_count,
    )
    return mesh
