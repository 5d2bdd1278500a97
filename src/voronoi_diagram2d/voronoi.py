from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple

import structlog
from shapely.geometry import Polygon

from . import triangulation as dt
from .clipping import clip_region
from .config import VoronoiConfig
from .datastructures import Region
from .geometry import BoundingBox
from .regions import build_regions
from .triangulation import DelaunayTriangulation, PositionFn

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, eq=False)
class VoronoiDiagram:
    """
    Immutable Voronoi diagram: a Delaunay triangulation together with the
    regions derived from it. Clipping reuses the cached regions.
    """
    triangulation: DelaunayTriangulation
    regions: Tuple[Region, ...]

    def cell_count(self) -> int:
        return len(self.regions)


def _point_position(point) -> Tuple[float, float]:
    return point


def _as_point_tuple(point) -> Tuple[float, float]:
    x, y = point
    return float(x), float(y)


def empty(*, config: Optional[VoronoiConfig] = None) -> VoronoiDiagram:
    return VoronoiDiagram(triangulation=dt.empty(config=config), regions=())


def from_points(points: Iterable, *, config: Optional[VoronoiConfig] = None) -> VoronoiDiagram:
    """
    Diagram whose vertices are the points themselves, as (x, y) float tuples.
    """
    return from_vertices_by(_point_position, [_as_point_tuple(p) for p in points], config=config)


def from_vertices_by(
    position: PositionFn,
    vertices: Iterable[Any],
    *,
    config: Optional[VoronoiConfig] = None,
) -> VoronoiDiagram:
    """
    Build a diagram of arbitrary vertices located by position(vertex).

    Raises CoincidentVerticesError if two vertices share a position.
    """
    return from_delaunay_triangulation(dt.from_vertices_by(position, vertices, config=config))


def insert_point(point, diagram: VoronoiDiagram) -> VoronoiDiagram:
    return insert_vertex_by(_point_position, _as_point_tuple(point), diagram)


def insert_vertex_by(position: PositionFn, vertex: Any, diagram: VoronoiDiagram) -> VoronoiDiagram:
    """
    New diagram with vertex added. Regions are rebuilt from scratch, so n
    successive inserts cost O(n^2) overall.
    """
    return from_delaunay_triangulation(dt.insert_vertex_by(position, vertex, diagram.triangulation))


def vertices(diagram: VoronoiDiagram) -> Tuple[Any, ...]:
    return dt.vertices(diagram.triangulation)


def regions(diagram: VoronoiDiagram) -> Tuple[Region, ...]:
    return diagram.regions


def clipped_regions(box: BoundingBox, diagram: VoronoiDiagram) -> List[Tuple[Region, Polygon]]:
    """
    (region, polygon) for every region that intersects or touches box.
    """
    tolerance = diagram.triangulation.config.clip_tolerance
    out = []
    for region in diagram.regions:
        clipped = clip_region(region, box, tolerance=tolerance)
        if clipped is not None:
            out.append((region, clipped[1]))
    return out


def polygons(box: BoundingBox, diagram: VoronoiDiagram) -> List[Tuple[Any, Polygon]]:
    """
    Every region clipped to box, as (vertex, polygon) pairs.
    Regions missing the box are left out; order follows the region list.
    """
    return [(region.site.vertex, polygon) for region, polygon in clipped_regions(box, diagram)]


def from_delaunay_triangulation(triangulation: DelaunayTriangulation) -> VoronoiDiagram:
    region_list = build_regions(triangulation.sites, triangulation.faces)
    logger.debug("Derived Voronoi diagram", n_vertices=len(triangulation.sites), n_regions=len(region_list))
    return VoronoiDiagram(triangulation=triangulation, regions=tuple(region_list))


def to_delaunay_triangulation(diagram: VoronoiDiagram) -> DelaunayTriangulation:
    return diagram.triangulation
