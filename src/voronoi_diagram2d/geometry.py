from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
from shapely.geometry import Polygon, box as shapely_box


def as_point(p) -> np.ndarray:
    return np.asarray(p, dtype=np.float64).reshape(2)


def cross(a, b) -> float:
    return float(a[0] * b[1] - a[1] * b[0])


def rotate_ccw(d: np.ndarray) -> np.ndarray:
    return np.array([-d[1], d[0]], dtype=np.float64)


def rotate_cw(d: np.ndarray) -> np.ndarray:
    return np.array([d[1], -d[0]], dtype=np.float64)


def midpoint(p, q) -> np.ndarray:
    return 0.5 * (as_point(p) + as_point(q))


def direction_from(p, q) -> Optional[np.ndarray]:
    """Unit vector from p towards q, None when the two points coincide."""
    d = as_point(q) - as_point(p)
    n = float(np.hypot(d[0], d[1]))
    if n == 0.0:
        return None
    return d / n


def pseudo_angles(vectors) -> np.ndarray:
    """
    Cheap monotonic substitute for atan2 over (N,2) vectors.

    Keys increase counterclockwise from -2 (just below the negative x axis)
    to 2 (the negative x axis); only meaningful for ordering.
    """
    v = np.asarray(vectors, dtype=np.float64).reshape(-1, 2)
    dx, dy = v[:, 0], v[:, 1]
    s = np.abs(dx) + np.abs(dy)
    p = np.divide(dx, s, out=np.zeros_like(dx), where=s > 0)
    return np.where(dy >= 0, 1.0 - p, p - 1.0)


def circumcircle(a, b, c) -> Optional[Tuple[np.ndarray, float]]:
    """
    Center and radius of the circle through a, b, c.
    Returns None for a flat triangle.
    """
    a = as_point(a)
    bx, by = as_point(b) - a
    cx, cy = as_point(c) - a
    d = 2.0 * (bx * cy - by * cx)
    if d == 0.0:
        return None
    b2 = bx * bx + by * by
    c2 = cx * cx + cy * cy
    ux = (cy * b2 - by * c2) / d
    uy = (bx * c2 - cx * b2) / d
    return a + np.array([ux, uy]), float(np.hypot(ux, uy))


def dominant_axis_order(points: np.ndarray) -> np.ndarray:
    """
    Indices sorting points along x or y, whichever spans more (ties pick x).
    """
    P = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    extent = P.max(axis=0) - P.min(axis=0)
    column = 0 if extent[0] >= extent[1] else 1
    return np.argsort(P[:, column], kind="stable")


def _line_params(p, r, q, s) -> Optional[Tuple[float, float]]:
    # p + t*r == q + u*s
    denom = cross(r, s)
    if denom == 0.0:
        return None
    qp = q - p
    return cross(qp, s) / denom, cross(qp, r) / denom


@dataclass(frozen=True, eq=False)
class Axis2D:
    """
    Directed line: origin + t * direction, direction of unit length.
    """
    origin: np.ndarray
    direction: np.ndarray

    @classmethod
    def through(cls, origin, direction) -> "Axis2D":
        d = as_point(direction)
        return cls(origin=as_point(origin), direction=d / float(np.hypot(d[0], d[1])))

    def reverse(self) -> "Axis2D":
        return Axis2D(origin=self.origin, direction=-self.direction)

    def signed_distance_along(self, p) -> float:
        return float(np.dot(as_point(p) - self.origin, self.direction))

    def signed_distance_from(self, p) -> float:
        # positive on the left of the axis
        return cross(self.direction, as_point(p) - self.origin)

    def point_at(self, t: float) -> np.ndarray:
        return self.origin + t * self.direction


def segment_intersection(p0, p1, q0, q1, tol: float = 0.0) -> Optional[np.ndarray]:
    """
    Crossing point of segments p0-p1 and q0-q1, endpoints included.
    tol is a length by which either segment may be overshot.
    Parallel segments never intersect here; their shared points show up as
    contained endpoints instead.
    """
    p0, p1, q0, q1 = map(as_point, (p0, p1, q0, q1))
    r, s = p1 - p0, q1 - q0
    params = _line_params(p0, r, q0, s)
    if params is None:
        return None
    t, u = params
    t_tol = tol / float(np.hypot(r[0], r[1]))
    u_tol = tol / float(np.hypot(s[0], s[1]))
    if -t_tol <= t <= 1.0 + t_tol and -u_tol <= u <= 1.0 + u_tol:
        return p0 + t * r
    return None


def axis_segment_intersection(axis: Axis2D, q0, q1, *, half: bool = False, tol: float = 0.0) -> Optional[np.ndarray]:
    """
    Where the axis meets segment q0-q1. With half=True only the part of the
    axis ahead of its origin counts.
    """
    q0, q1 = as_point(q0), as_point(q1)
    s = q1 - q0
    params = _line_params(axis.origin, axis.direction, q0, s)
    if params is None:
        return None
    t, u = params
    if half and t < -tol:
        return None
    u_tol = tol / float(np.hypot(s[0], s[1]))
    if -u_tol <= u <= 1.0 + u_tol:
        return q0 + u * s
    return None


@dataclass(frozen=True)
class BoundingBox:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    def __post_init__(self):
        if not (self.min_x <= self.max_x and self.min_y <= self.max_y):
            raise ValueError(f"Invalid bounding box extrema: {self}")

    @classmethod
    def from_extrema(cls, *, min_x: float, max_x: float, min_y: float, max_y: float) -> "BoundingBox":
        return cls(float(min_x), float(max_x), float(min_y), float(max_y))

    @classmethod
    def from_bounds(cls, bounds) -> "BoundingBox":
        """From shapely-style (minx, miny, maxx, maxy)."""
        minx, miny, maxx, maxy = map(float, bounds)
        return cls(minx, maxx, miny, maxy)

    @classmethod
    def from_points(cls, points) -> "BoundingBox":
        P = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        if len(P) == 0:
            raise ValueError("Cannot build a bounding box from zero points")
        mn = P.min(axis=0)
        mx = P.max(axis=0)
        return cls(float(mn[0]), float(mx[0]), float(mn[1]), float(mx[1]))

    @property
    def extrema(self) -> Tuple[float, float, float, float]:
        return self.min_x, self.max_x, self.min_y, self.max_y

    @property
    def dimensions(self) -> Tuple[float, float]:
        return self.max_x - self.min_x, self.max_y - self.min_y

    def contains(self, p, tol: float = 0.0) -> bool:
        x, y = as_point(p)
        return (self.min_x - tol <= x <= self.max_x + tol
                and self.min_y - tol <= y <= self.max_y + tol)

    def is_contained_in(self, other: "BoundingBox", tol: float = 0.0) -> bool:
        return (other.min_x - tol <= self.min_x and self.max_x <= other.max_x + tol
                and other.min_y - tol <= self.min_y and self.max_y <= other.max_y + tol)

    def corners(self) -> np.ndarray:
        """(4,2) counterclockwise from the lower-left corner."""
        return np.array([
            [self.min_x, self.min_y],
            [self.max_x, self.min_y],
            [self.max_x, self.max_y],
            [self.min_x, self.max_y],
        ], dtype=np.float64)

    def edges(self) -> List[Tuple[np.ndarray, np.ndarray]]:
        c = self.corners()
        return [(c[i], c[(i + 1) % 4]) for i in range(4)]

    def to_polygon(self) -> Polygon:
        return shapely_box(self.min_x, self.min_y, self.max_x, self.max_y)
