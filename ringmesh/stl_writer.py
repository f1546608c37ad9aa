"""ASCII STL output."""
import io
import logging
import os
import tempfile

from .mesh import Mesh
from .ring import build_ring_mesh
from .settings import RingSpec

logger = logging.getLogger(__name__)


def _fmt(v) -> str:
    # repr() of a float round-trips exactly through float()
    return f"{float(v[0])!r} {float(v[1])!r} {float(v[2])!r}"


def write_stl_stream(stream, mesh: Mesh):
    """Write ``mesh`` as ASCII STL to a text stream, one facet block per triangle."""
    stream.write(f"solid {mesh.name}\n")
    for n, a, b, c in mesh.triangles:
        stream.write(f"  facet normal {_fmt(n)}\n")
        stream.write("    outer loop\n")
        stream.write(f"      vertex {_fmt(a)}\n")
        stream.write(f"      vertex {_fmt(b)}\n")
        stream.write(f"      vertex {_fmt(c)}\n")
        stream.write("    endloop\n")
        stream.write("  endfacet\n")
    stream.write(f"endsolid {mesh.name}\n")


def format_ascii_stl(mesh: Mesh) -> str:
    buf = io.StringIO()
    write_stl_stream(buf, mesh)
    return buf.getvalue()


def stl_bytes(mesh: Mesh) -> io.BytesIO:
    """In-memory STL, rewound and ready for ``send_file``."""
    stl_io = io.BytesIO(format_ascii_stl(mesh).encode("ascii"))
    stl_io.seek(0)
    return stl_io


def write_ascii_stl(path, mesh: Mesh) -> str:
    """Write ``mesh`` to ``path``.

    The file is written next to its destination and renamed into place, so a
    failure part-way never leaves a truncated STL behind.
    """
    path = os.fspath(path)
    directory = os.path.dirname(os.path.abspath(path))
    fd, tmp_path = tempfile.mkstemp(prefix=".tmp-", suffix=".stl", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="ascii", newline="\n") as f:
            write_stl_stream(f, mesh)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise
    logger.info("Wrote %s (%d facets)", path, len(mesh))
    return path


def write_ring_stl(path, spec: RingSpec) -> Mesh:
    """Build the ring for ``spec`` and write it to ``path``."""
    mesh = build_ring_mesh(spec)
    write_ascii_stl(path, mesh)
    return mesh
