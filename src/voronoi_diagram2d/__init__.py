from .config import VoronoiConfig
from .datastructures import (
    Site,
    InteriorFace,
    BoundaryEdgeFace,
    DegenerateFace,
    Polygonal,
    UShaped,
    Strip,
    HalfPlane,
    Unbounded,
)
from .errors import CoincidentVerticesError
from .geometry import Axis2D, BoundingBox
from .sampling import sample_points_in_box
from .triangulation import DelaunayTriangulation
from .voronoi import (
    VoronoiDiagram,
    empty,
    from_points,
    from_vertices_by,
    insert_point,
    insert_vertex_by,
    vertices,
    regions,
    polygons,
    clipped_regions,
    from_delaunay_triangulation,
    to_delaunay_triangulation,
)

__all__ = [
    "VoronoiConfig",
    "Site",
    "InteriorFace",
    "BoundaryEdgeFace",
    "DegenerateFace",
    "Polygonal",
    "UShaped",
    "Strip",
    "HalfPlane",
    "Unbounded",
    "CoincidentVerticesError",
    "Axis2D",
    "BoundingBox",
    "sample_points_in_box",
    "DelaunayTriangulation",
    "VoronoiDiagram",
    "empty",
    "from_points",
    "from_vertices_by",
    "insert_point",
    "insert_vertex_by",
    "vertices",
    "regions",
    "polygons",
    "clipped_regions",
    "from_delaunay_triangulation",
    "to_delaunay_triangulation",
]
