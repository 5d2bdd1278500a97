from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import structlog
from scipy.spatial import Delaunay, QhullError

from .config import VoronoiConfig, resolve_config
from .datastructures import BoundaryEdgeFace, DegenerateFace, DelaunayFace, InteriorFace, Site
from .errors import CoincidentVerticesError
from .geometry import as_point, circumcircle, cross, direction_from, dominant_axis_order

logger = structlog.get_logger(__name__)

PositionFn = Callable[[Any], Sequence[float]]


@dataclass(frozen=True, eq=False)
class DelaunayTriangulation:
    """
    Immutable Delaunay triangulation of indexed sites.
    - sites: site i has index i
    - payloads: the vertex of each site, in index order
    - faces: interior triangles, hull edges, and degenerate end faces
    """
    sites: Tuple[Site, ...]
    payloads: Tuple[Any, ...]
    faces: Tuple[DelaunayFace, ...]
    config: VoronoiConfig

    def has_interior_face(self) -> bool:
        return any(isinstance(f, InteriorFace) for f in self.faces)


def empty(*, config: Optional[VoronoiConfig] = None) -> DelaunayTriangulation:
    return DelaunayTriangulation(sites=(), payloads=(), faces=(), config=resolve_config(config))


def from_vertices_by(
    position: PositionFn,
    vertices: Iterable[Any],
    *,
    config: Optional[VoronoiConfig] = None,
) -> DelaunayTriangulation:
    """
    Triangulate vertices located by position(vertex).

    Raises CoincidentVerticesError on the first repeated position.
    """
    cfg = resolve_config(config)

    sites: List[Site] = []
    seen = {}
    for index, vertex in enumerate(vertices):
        p = _checked_position(position, vertex)
        key = (float(p[0]), float(p[1]))
        if key in seen:
            raise CoincidentVerticesError(seen[key].vertex, vertex)
        site = Site(index=index, vertex=vertex, position=p)
        seen[key] = site
        sites.append(site)

    return _build(tuple(sites), cfg)


def insert_vertex_by(position: PositionFn, vertex: Any, triangulation: DelaunayTriangulation) -> DelaunayTriangulation:
    """
    New triangulation with vertex added; existing indices are kept.
    The whole point set is retriangulated.
    """
    p = _checked_position(position, vertex)
    for site in triangulation.sites:
        if site.position[0] == p[0] and site.position[1] == p[1]:
            raise CoincidentVerticesError(site.vertex, vertex)

    site = Site(index=len(triangulation.sites), vertex=vertex, position=p)
    return _build(triangulation.sites + (site,), triangulation.config)


def vertices(triangulation: DelaunayTriangulation) -> Tuple[Any, ...]:
    return triangulation.payloads


def sites(triangulation: DelaunayTriangulation) -> Tuple[Site, ...]:
    return triangulation.sites


def faces(triangulation: DelaunayTriangulation) -> Tuple[DelaunayFace, ...]:
    return triangulation.faces


def _checked_position(position: PositionFn, vertex: Any) -> np.ndarray:
    p = as_point(position(vertex))
    if not np.all(np.isfinite(p)):
        raise ValueError(f"Vertex {vertex!r} has a non-finite position {p.tolist()}")
    return p


def _build(all_sites: Tuple[Site, ...], cfg: VoronoiConfig) -> DelaunayTriangulation:
    face_list = _triangulate(all_sites, cfg)
    logger.debug("Triangulated sites", n_sites=len(all_sites), n_faces=len(face_list))
    return DelaunayTriangulation(
        sites=all_sites,
        payloads=tuple(s.vertex for s in all_sites),
        faces=tuple(face_list),
        config=cfg,
    )


def _triangulate(all_sites: Tuple[Site, ...], cfg: VoronoiConfig) -> List[DelaunayFace]:
    if len(all_sites) == 0:
        return []
    if len(all_sites) == 1:
        return [DegenerateFace(all_sites[0])]

    points = np.array([s.position for s in all_sites], dtype=np.float64)
    if len(all_sites) < 3 or _is_collinear(points, cfg.collinear_tolerance):
        return _collinear_faces(all_sites, points)

    try:
        tri = Delaunay(points, qhull_options=cfg.qhull_options)
    except QhullError as exc:
        logger.warning("Qhull rejected sites, treating them as collinear", n_sites=len(all_sites), error=str(exc))
        return _collinear_faces(all_sites, points)

    if len(tri.coplanar):
        logger.warning("Qhull left sites out of the triangulation",
                       indices=[int(i) for i in tri.coplanar[:, 0]])

    return _faces_from_qhull(tri, all_sites)


def _is_collinear(points: np.ndarray, tol: float) -> bool:
    rel = points - points[0]
    far = rel[int(np.argmax(np.einsum("ij,ij->i", rel, rel)))]
    scale2 = float(far @ far)
    crosses = rel[:, 0] * far[1] - rel[:, 1] * far[0]
    return bool(np.all(np.abs(crosses) <= tol * scale2))


def _faces_from_qhull(tri: Delaunay, all_sites: Tuple[Site, ...]) -> List[DelaunayFace]:
    P = tri.points
    out: List[DelaunayFace] = []

    for simplex, neighbors in zip(tri.simplices, tri.neighbors):
        a, b, c = (int(i) for i in simplex)
        na, nb, nc = (int(i) for i in neighbors)
        # make (a, b, c) counterclockwise
        if cross(P[b] - P[a], P[c] - P[a]) < 0:
            b, c = c, b
            nb, nc = nc, nb

        circle = circumcircle(P[a], P[b], P[c])
        if circle is None:
            logger.warning("Skipping flat Delaunay triangle", indices=[a, b, c])
            continue
        center, radius = circle
        out.append(InteriorFace(sites=(all_sites[a], all_sites[b], all_sites[c]),
                                circumcenter=center, circumradius=radius))

        # neighbor k is across the edge opposite vertex k; no neighbor => hull edge,
        # emitted reversed so the triangle ends up on its right
        for opposite, (i, j) in ((na, (b, c)), (nb, (c, a)), (nc, (a, b))):
            if opposite == -1:
                out.append(_boundary_face(all_sites[j], all_sites[i]))

    return out


def _collinear_faces(all_sites: Tuple[Site, ...], points: np.ndarray) -> List[DelaunayFace]:
    ordered = [all_sites[int(i)] for i in dominant_axis_order(points)]
    out: List[DelaunayFace] = [DegenerateFace(ordered[0])]
    for s0, s1 in zip(ordered, ordered[1:]):
        out.append(_boundary_face(s0, s1))
        out.append(_boundary_face(s1, s0))
    out.append(DegenerateFace(ordered[-1]))
    return out


def _boundary_face(first: Site, second: Site) -> BoundaryEdgeFace:
    return BoundaryEdgeFace(first=first, second=second,
                            direction=direction_from(first.position, second.position))
