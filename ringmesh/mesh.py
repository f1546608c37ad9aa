"""Triangle and mesh containers.

A triangle's orientation is carried only by its vertex order: the STL format
has no separate flag, so the stored normal is always derived from the winding
(right-hand rule). ``FacetList.add`` can additionally check that derived normal
against the direction the surface is supposed to face.
"""
import math
from dataclasses import dataclass
from typing import NamedTuple, Optional

import numpy as np
import trimesh

from .vecmath import Vector3, as_vector, dot, triangle_normal, ZERO


class WindingError(RuntimeError):
    """A facet's winding produced a normal facing the wrong way."""


class Triangle(NamedTuple):
    normal: Vector3
    v0: Vector3
    v1: Vector3
    v2: Vector3

    @property
    def vertices(self) -> tuple[Vector3, Vector3, Vector3]:
        return (self.v0, self.v1, self.v2)


class FacetList:
    """Mutable accumulator used while a mesh is being built."""

    def __init__(self):
        self._facets: list[Triangle] = []

    def __len__(self):
        return len(self._facets)

    def add(self, a, b, c, expect: Optional[Vector3] = None, label: str = "facet") -> Triangle:
        """Append triangle ``a, b, c`` with its normal taken from the winding.

        When ``expect`` is given the normal must point into that half-space.
        A zero normal (degenerate triangle) is accepted as-is; a non-finite
        one never is.
        """
        a, b, c = as_vector(a), as_vector(b), as_vector(c)
        n = triangle_normal(a, b, c)
        if not all(math.isfinite(x) for x in n):
            raise WindingError(f"{label} has non-finite normal {n} from vertices {a}, {b}, {c}")
        if expect is not None and n != ZERO and dot(n, expect) <= 0.0:
            raise WindingError(
                f"{label} normal {n} does not face expected direction {tuple(expect)}"
            )
        tri = Triangle(n, a, b, c)
        self._facets.append(tri)
        return tri

    def add_quad(self, p0, p1, p2, p3, expect: Optional[Vector3] = None, label: str = "quad"):
        """Append quad ``p0..p3`` (in winding order) as two triangles."""
        self.add(p0, p1, p2, expect, label)
        self.add(p0, p2, p3, expect, label)

    def extend(self, triangles):
        self._facets.extend(triangles)

    def freeze(self, name: str) -> "Mesh":
        return Mesh(name=name, triangles=tuple(self._facets))


@dataclass(frozen=True)
class Mesh:
    name: str
    triangles: tuple[Triangle, ...]

    def __len__(self):
        return len(self.triangles)

    def vertex_array(self) -> np.ndarray:
        """Triangle corners as an ``(n, 3, 3)`` float array."""
        if not self.triangles:
            return np.zeros((0, 3, 3))
        return np.array([t.vertices for t in self.triangles], dtype=float)

    def normal_array(self) -> np.ndarray:
        if not self.triangles:
            return np.zeros((0, 3))
        return np.array([t.normal for t in self.triangles], dtype=float)

    @property
    def bounds(self) -> np.ndarray:
        """``[[xmin, ymin, zmin], [xmax, ymax, zmax]]``."""
        verts = self.vertex_array().reshape(-1, 3)
        return np.array([verts.min(axis=0), verts.max(axis=0)])

    def to_trimesh(self) -> trimesh.Trimesh:
        """Merged-vertex trimesh view, used for validation and analysis."""
        tris = self.vertex_array()
        faces = np.arange(len(tris) * 3).reshape(-1, 3)
        return trimesh.Trimesh(vertices=tris.reshape(-1, 3), faces=faces, process=True)
