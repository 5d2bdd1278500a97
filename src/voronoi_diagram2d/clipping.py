"""
Clip Voronoi regions to an axis-aligned box.

Every region kind is convex, so its clipped shape is the convex polygon
spanned by: region vertices inside the box, region boundary crossings with
the box edges, and box corners inside the region. Each trimmer gathers those
candidates and hands them to construct_polygon.
"""
from __future__ import annotations

from typing import Any, List, Optional, Tuple

import numpy as np
from shapely.geometry import Polygon

from .datastructures import HalfPlane, Polygonal, Region, Strip, UShaped, Unbounded
from .geometry import Axis2D, BoundingBox, axis_segment_intersection, cross, pseudo_angles, segment_intersection


def clip_region(region: Region, box: BoundingBox, *, tolerance: float = 1e-9) -> Optional[Tuple[Any, Polygon]]:
    """
    (vertex, polygon) for the part of region inside box, or None when they
    share less than a proper polygon.

    tolerance is relative to the box size.
    """
    eps = float(tolerance) * max(1.0, *box.dimensions)
    polygon = _TRIMMERS[type(region)](region, box, eps)
    if polygon is None:
        return None
    return region.site.vertex, polygon


# --- candidate accumulators ---

def add_contained_points(candidates: List[np.ndarray], points, box: BoundingBox, eps: float) -> None:
    for p in points:
        if box.contains(p, eps):
            candidates.append(np.asarray(p, dtype=np.float64))


def add_edge_intersections(candidates: List[np.ndarray], p0, p1, box: BoundingBox, eps: float) -> None:
    for q0, q1 in box.edges():
        hit = segment_intersection(p0, p1, q0, q1, tol=eps)
        if hit is not None:
            candidates.append(hit)


def add_half_axis_intersections(candidates: List[np.ndarray], axis: Axis2D, box: BoundingBox, eps: float) -> None:
    for q0, q1 in box.edges():
        hit = axis_segment_intersection(axis, q0, q1, half=True, tol=eps)
        if hit is not None:
            candidates.append(hit)


def add_full_axis_intersections(candidates: List[np.ndarray], axis: Axis2D, box: BoundingBox, eps: float) -> None:
    for q0, q1 in box.edges():
        hit = axis_segment_intersection(axis, q0, q1, tol=eps)
        if hit is not None:
            candidates.append(hit)


def left_of(chain, point, eps: float) -> bool:
    """
    True when point is on or left of every segment of the ordered chain.
    Zero-length segments are ignored.
    """
    point = np.asarray(point, dtype=np.float64)
    for a, b in zip(chain, chain[1:]):
        d = b - a
        length = float(np.hypot(d[0], d[1]))
        if length <= eps:
            continue
        if cross(d, point - a) / length < -eps:
            return False
    return True


def construct_polygon(candidates: List[np.ndarray], eps: float) -> Optional[Polygon]:
    """
    Order candidates around their centroid and close them into a polygon.
    """
    if not candidates:
        return None

    P = np.asarray(candidates, dtype=np.float64)
    centroid = P.mean(axis=0)
    P = P[np.argsort(pseudo_angles(P - centroid), kind="stable")]

    ring: List[np.ndarray] = []
    for p in P:
        if ring and _same_point(p, ring[-1], eps):
            continue
        ring.append(p)
    if len(ring) > 1 and _same_point(ring[0], ring[-1], eps):
        ring.pop()

    # an edge or corner touch still yields a (zero-area) polygon
    while len(ring) < 3:
        ring.append(ring[-1])
    return Polygon(ring)


def _same_point(p, q, eps: float) -> bool:
    return abs(p[0] - q[0]) <= eps and abs(p[1] - q[1]) <= eps


def _right_of_axis(axis: Axis2D, p, eps: float) -> bool:
    return axis.signed_distance_from(p) <= eps


def _left_of_axis(axis: Axis2D, p, eps: float) -> bool:
    return axis.signed_distance_from(p) >= -eps


# --- per-kind trimming ---

def _trim_polygonal(region: Polygonal, box: BoundingBox, eps: float) -> Optional[Polygon]:
    polygon = region.polygon
    if BoundingBox.from_bounds(polygon.bounds).is_contained_in(box):
        return polygon

    ring = np.asarray(polygon.exterior.coords, dtype=np.float64)  # closed
    candidates: List[np.ndarray] = []
    add_contained_points(candidates, ring[:-1], box, eps)
    for p0, p1 in zip(ring, ring[1:]):
        add_edge_intersections(candidates, p0, p1, box, eps)
    for corner in box.corners():
        if left_of(ring, corner, eps):
            candidates.append(corner)
    return construct_polygon(candidates, eps)


def _trim_u_shaped(region: UShaped, box: BoundingBox, eps: float) -> Optional[Polygon]:
    polyline = region.polyline
    candidates: List[np.ndarray] = []
    add_contained_points(candidates, polyline, box, eps)
    for p0, p1 in zip(polyline, polyline[1:]):
        add_edge_intersections(candidates, p0, p1, box, eps)
    add_half_axis_intersections(candidates, region.left_axis, box, eps)
    add_half_axis_intersections(candidates, region.right_axis, box, eps)
    for corner in box.corners():
        if (_right_of_axis(region.left_axis, corner, eps)
                and left_of(polyline, corner, eps)
                and _left_of_axis(region.right_axis, corner, eps)):
            candidates.append(corner)
    return construct_polygon(candidates, eps)


def _trim_strip(region: Strip, box: BoundingBox, eps: float) -> Optional[Polygon]:
    candidates: List[np.ndarray] = []
    add_full_axis_intersections(candidates, region.left_axis, box, eps)
    add_full_axis_intersections(candidates, region.right_axis, box, eps)
    for corner in box.corners():
        if _right_of_axis(region.left_axis, corner, eps) and _left_of_axis(region.right_axis, corner, eps):
            candidates.append(corner)
    return construct_polygon(candidates, eps)


def _trim_half_plane(region: HalfPlane, box: BoundingBox, eps: float) -> Optional[Polygon]:
    candidates: List[np.ndarray] = []
    add_full_axis_intersections(candidates, region.axis, box, eps)
    for corner in box.corners():
        if _right_of_axis(region.axis, corner, eps):
            candidates.append(corner)
    return construct_polygon(candidates, eps)


def _trim_unbounded(region: Unbounded, box: BoundingBox, eps: float) -> Optional[Polygon]:
    return box.to_polygon()


_TRIMMERS = {
    Polygonal: _trim_polygonal,
    UShaped: _trim_u_shaped,
    Strip: _trim_strip,
    HalfPlane: _trim_half_plane,
    Unbounded: _trim_unbounded,
}
