from collections import Counter

import numpy as np
import pytest

from voronoi_diagram2d import triangulation as dt
from voronoi_diagram2d.config import VoronoiConfig
from voronoi_diagram2d.datastructures import BoundaryEdgeFace, DegenerateFace, InteriorFace
from voronoi_diagram2d.errors import CoincidentVerticesError
from voronoi_diagram2d.geometry import cross, rotate_ccw


def _identity(p):
    return p


def _kinds(t):
    return Counter(type(f).__name__ for f in dt.faces(t))


def test_empty_triangulation():
    t = dt.empty()
    assert dt.vertices(t) == ()
    assert dt.faces(t) == ()
    assert not t.has_interior_face()


def test_single_vertex_is_one_degenerate_face():
    t = dt.from_vertices_by(_identity, [(3.0, 4.0)])
    faces = dt.faces(t)
    assert len(faces) == 1
    assert isinstance(faces[0], DegenerateFace)
    assert faces[0].site.index == 0


def test_square_faces():
    t = dt.from_vertices_by(_identity, [(0, 0), (1, 0), (1, 1), (0, 1)])
    assert _kinds(t) == {"InteriorFace": 2, "BoundaryEdgeFace": 4}

    for f in dt.faces(t):
        if isinstance(f, InteriorFace):
            a, b, c = (s.position for s in f.sites)
            assert cross(b - a, c - a) > 0
            assert np.allclose(f.circumcenter, [0.5, 0.5])
            assert f.circumradius == pytest.approx(np.sqrt(0.5))


def test_boundary_bisectors_point_outward():
    rng = np.random.default_rng(7)
    pts = rng.uniform(0, 10, size=(25, 2))
    t = dt.from_vertices_by(_identity, [tuple(p) for p in pts])
    centroid = pts.mean(axis=0)

    boundary = [f for f in dt.faces(t) if isinstance(f, BoundaryEdgeFace)]
    assert boundary
    for f in boundary:
        # triangulation on the right of first -> second
        assert cross(f.direction, centroid - f.first.position) < 0
        outward = rotate_ccw(f.direction)
        assert np.dot(outward, f.first.position - centroid) > 0


def test_hull_sites_start_and_end_exactly_one_edge():
    rng = np.random.default_rng(3)
    pts = rng.uniform(-5, 5, size=(40, 2))
    t = dt.from_vertices_by(_identity, [tuple(p) for p in pts])

    boundary = [f for f in dt.faces(t) if isinstance(f, BoundaryEdgeFace)]
    firsts = Counter(f.first.index for f in boundary)
    seconds = Counter(f.second.index for f in boundary)

    assert set(firsts) == set(seconds)
    assert all(n == 1 for n in firsts.values())
    assert all(n == 1 for n in seconds.values())


def test_collinear_vertices_have_no_interior_face():
    t = dt.from_vertices_by(_identity, [(4, 0), (0, 0), (2, 0)])
    assert not t.has_interior_face()
    assert _kinds(t) == {"BoundaryEdgeFace": 4, "DegenerateFace": 2}

    ends = sorted(f.site.vertex for f in dt.faces(t) if isinstance(f, DegenerateFace))
    assert ends == [(0, 0), (4, 0)]


def test_two_vertices_have_no_interior_face():
    t = dt.from_vertices_by(_identity, [(0, 0), (1, 1)])
    assert _kinds(t) == {"BoundaryEdgeFace": 2, "DegenerateFace": 2}


def test_coincident_vertices_are_reported():
    verts = [
        {"name": "a", "p": (0.0, 0.0)},
        {"name": "b", "p": (1.0, 1.0)},
        {"name": "c", "p": (0.0, 0.0)},
    ]
    with pytest.raises(CoincidentVerticesError) as info:
        dt.from_vertices_by(lambda v: v["p"], verts)

    assert info.value.first["name"] == "a"
    assert info.value.second["name"] == "c"


def test_insert_keeps_indices_and_adds_one():
    t0 = dt.from_vertices_by(_identity, [(0, 0), (4, 0), (0, 4)])
    t1 = dt.insert_vertex_by(_identity, (1, 1), t0)

    assert dt.vertices(t1) == ((0, 0), (4, 0), (0, 4), (1, 1))
    assert [s.index for s in dt.sites(t1)] == [0, 1, 2, 3]
    assert _kinds(t1)["InteriorFace"] == 3
    # original untouched
    assert len(dt.vertices(t0)) == 3


def test_vertices_are_stored_not_rebuilt():
    vs = [{"name": "a", "xy": (0, 0)}, {"name": "b", "xy": (3, 0)}, {"name": "c", "xy": (0, 3)}]
    t = dt.from_vertices_by(lambda v: v["xy"], vs)

    assert dt.vertices(t) is dt.vertices(t)
    assert [v["name"] for v in dt.vertices(t)] == ["a", "b", "c"]
    assert dt.vertices(t)[1] is vs[1]


def test_insert_into_collinear_set_makes_triangles():
    t0 = dt.from_vertices_by(_identity, [(0, 0), (1, 0), (2, 0)])
    t1 = dt.insert_vertex_by(_identity, (1, 1), t0)
    assert t1.has_interior_face()


def test_insert_coincident_vertex_fails():
    t0 = dt.from_vertices_by(_identity, [(0, 0), (4, 0), (0, 4)])
    with pytest.raises(CoincidentVerticesError) as info:
        dt.insert_vertex_by(_identity, (4.0, 0.0), t0)
    assert info.value.first == (4, 0)


def test_non_finite_position_rejected():
    with pytest.raises(ValueError):
        dt.from_vertices_by(_identity, [(0, 0), (np.nan, 1)])


def test_invalid_config_rejected():
    with pytest.raises(ValueError, match="clip_tolerance"):
        dt.empty(config=VoronoiConfig(clip_tolerance=-1.0))


def test_config_travels_with_insertions():
    cfg = VoronoiConfig(clip_tolerance=1e-6)
    t0 = dt.from_vertices_by(_identity, [(0, 0)], config=cfg)
    t1 = dt.insert_vertex_by(_identity, (1, 0), t0)
    assert t1.config is cfg
