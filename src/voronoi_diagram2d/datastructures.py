from __future__ import annotations
from dataclasses import dataclass
import numpy as np
from shapely.geometry import Polygon
from typing import Any, Tuple, Union

from .geometry import Axis2D


@dataclass(frozen=True, eq=False)
class Site:
    index: int           # stable, assigned by the triangulation
    vertex: Any          # caller payload
    position: np.ndarray  # (2,)


# --- Delaunay faces ---

@dataclass(frozen=True, eq=False)
class InteriorFace:
    sites: Tuple[Site, Site, Site]  # counterclockwise
    circumcenter: np.ndarray        # (2,)
    circumradius: float


@dataclass(frozen=True, eq=False)
class BoundaryEdgeFace:
    """
    Convex hull edge; the triangulation lies to the right of first -> second.
    """
    first: Site
    second: Site
    direction: np.ndarray  # unit, first -> second


@dataclass(frozen=True, eq=False)
class DegenerateFace:
    site: Site


DelaunayFace = Union[InteriorFace, BoundaryEdgeFace, DegenerateFace]


# --- Voronoi regions ---

@dataclass(frozen=True, eq=False)
class Polygonal:
    site: Site
    polygon: Polygon  # counterclockwise


@dataclass(frozen=True, eq=False)
class UShaped:
    """
    Open chain of Voronoi vertices closed off by two outward rays.
    The region lies right of left_axis, left of right_axis and left of the
    polyline walked from its first to its last point.
    """
    site: Site
    left_axis: Axis2D
    right_axis: Axis2D
    polyline: np.ndarray  # (N,2), N >= 1


@dataclass(frozen=True, eq=False)
class Strip:
    site: Site
    left_axis: Axis2D
    right_axis: Axis2D


@dataclass(frozen=True, eq=False)
class HalfPlane:
    site: Site
    axis: Axis2D  # region is on the right


@dataclass(frozen=True, eq=False)
class Unbounded:
    site: Site


Region = Union[Polygonal, UShaped, Strip, HalfPlane, Unbounded]
