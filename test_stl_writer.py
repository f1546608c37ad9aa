#!/usr/bin/env python3
"""
Tests for ASCII STL output.
"""
import numpy as np
import pytest
import trimesh

import ringmesh.stl_writer as stl_writer
from ringmesh import RingSpec, build_ring_mesh, format_ascii_stl, stl_bytes, write_ascii_stl, write_ring_stl


@pytest.fixture
def labelled_mesh():
    spec = RingSpec(inner_radius=25.0, outer_radius=27.0, height=20.0, segments=32,
                    label="ID50MM", name="ring_id50.0_t2.0_h20.0")
    return build_ring_mesh(spec)


def _parse_vertices(text):
    coords = [
        tuple(float(x) for x in line.split()[1:4])
        for line in text.splitlines()
        if line.strip().startswith("vertex")
    ]
    return np.array(coords).reshape(-1, 3, 3)


def test_layout_of_ascii_stl(labelled_mesh):
    text = format_ascii_stl(labelled_mesh)
    lines = text.splitlines()

    assert lines[0] == "solid ring_id50.0_t2.0_h20.0"
    assert lines[-1] == "endsolid ring_id50.0_t2.0_h20.0"
    assert len(lines) == 2 + 7 * len(labelled_mesh)
    assert lines[1].startswith("  facet normal ")
    assert lines[2] == "    outer loop"
    assert lines[3].startswith("      vertex ")
    assert lines[6] == "    endloop"
    assert lines[7] == "  endfacet"
    assert text.count("facet normal") == len(labelled_mesh)


def test_round_trip_preserves_triangles(tmp_path, labelled_mesh):
    path = tmp_path / "ring.stl"
    write_ascii_stl(path, labelled_mesh)

    parsed = _parse_vertices(path.read_text())
    assert parsed.shape[0] == len(labelled_mesh)
    assert np.array_equal(parsed, labelled_mesh.vertex_array())

    loaded = trimesh.load(str(path), file_type="stl", process=False)
    assert len(loaded.faces) == len(labelled_mesh)
    assert np.allclose(loaded.triangles, labelled_mesh.vertex_array())


def test_written_shell_reloads_watertight(tmp_path):
    spec = RingSpec(inner_radius=10.0, outer_radius=12.0, height=5.0, segments=48)
    path = tmp_path / "plain.stl"
    mesh = write_ring_stl(path, spec)

    loaded = trimesh.load(str(path), file_type="stl")
    assert loaded.is_watertight
    assert loaded.volume == pytest.approx(mesh.to_trimesh().volume)


def test_stl_bytes_is_rewound(labelled_mesh):
    stl_io = stl_bytes(labelled_mesh)
    assert stl_io.tell() == 0
    assert stl_io.read().startswith(b"solid ring_id50.0_t2.0_h20.0\n")


def test_failed_write_leaves_no_file(tmp_path, monkeypatch, labelled_mesh):
    def broken_writer(stream, mesh):
        stream.write("solid partial\n")
        raise RuntimeError("disk full")

    monkeypatch.setattr(stl_writer, "write_stl_stream", broken_writer)
    path = tmp_path / "ring.stl"
    with pytest.raises(RuntimeError):
        write_ascii_stl(path, labelled_mesh)
    assert list(tmp_path.iterdir()) == []


def test_invalid_ring_writes_nothing(tmp_path):
    path = tmp_path / "bad.stl"
    with pytest.raises(ValueError):
        write_ring_stl(path, RingSpec(inner_radius=5.0, outer_radius=4.0, height=1.0))
    assert not path.exists()
