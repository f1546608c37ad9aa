"""Inspection of generated rings and STL files.

Uses trimesh as an independent check on what the generator produced: whether
the shell is closed and consistently wound, its bounds and volume, the radii
of the ring itself and how many vertices belong to the label.
"""
import logging
from dataclasses import asdict, dataclass
from typing import Optional

import numpy as np
import trimesh

from .mesh import Mesh

logger = logging.getLogger(__name__)

PLANE_TOLERANCE = 0.1  # mm, for picking vertices on the bottom/top planes
RADIUS_TOLERANCE = 1e-6  # mm


@dataclass(frozen=True)
class MeshReport:
    facet_count: int
    vertex_count: int
    bounds: list
    is_watertight: bool
    is_winding_consistent: bool
    volume: float
    inner_radius: Optional[float]
    outer_radius: Optional[float]
    text_vertex_count: int

    def as_dict(self) -> dict:
        return asdict(self)


def _report(tm: trimesh.Trimesh, facet_count: int) -> MeshReport:
    vertices = np.asarray(tm.vertices)
    if len(vertices) == 0:
        raise ValueError("mesh has no vertices")

    z_min, z_max = vertices[:, 2].min(), vertices[:, 2].max()
    radii = np.hypot(vertices[:, 0], vertices[:, 1])
    on_caps = (np.abs(vertices[:, 2] - z_min) < PLANE_TOLERANCE) | \
              (np.abs(vertices[:, 2] - z_max) < PLANE_TOLERANCE)

    inner_radius = outer_radius = None
    text_vertex_count = 0
    if on_caps.any():
        inner_radius = float(radii[on_caps].min())
        outer_radius = float(radii[on_caps].max())
        off_shell = (np.abs(radii - inner_radius) > RADIUS_TOLERANCE) & \
                    (np.abs(radii - outer_radius) > RADIUS_TOLERANCE)
        text_vertex_count = int(off_shell.sum())

    return MeshReport(
        facet_count=facet_count,
        vertex_count=len(vertices),
        bounds=tm.bounds.tolist(),
        is_watertight=bool(tm.is_watertight),
        is_winding_consistent=bool(tm.is_winding_consistent),
        volume=float(tm.volume),
        inner_radius=inner_radius,
        outer_radius=outer_radius,
        text_vertex_count=text_vertex_count,
    )


def analyze_mesh(mesh: Mesh) -> MeshReport:
    return _report(mesh.to_trimesh(), len(mesh))


def analyze_stl(file_obj, file_type: str = "stl") -> MeshReport:
    """Report on an STL file given by path or open binary file object.

    Anything trimesh cannot turn into a non-empty triangle mesh raises
    ``ValueError``.
    """
    try:
        tm = trimesh.load(file_obj, file_type=file_type, force="mesh")
    except Exception as e:
        raise ValueError(f"could not read {file_type} data: {e}") from e
    if not isinstance(tm, trimesh.Trimesh) or len(tm.faces) == 0:
        raise ValueError("file does not contain a triangle mesh")
    report = _report(tm, len(tm.faces))
    logger.info(
        "Analyzed STL: %d facets, watertight=%s, radii=%s..%s",
        report.facet_count, report.is_watertight, report.inner_radius, report.outer_radius,
    )
    return report
