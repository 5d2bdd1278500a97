"""
Dual construction: one Voronoi region per Delaunay site.

Interior triangles contribute their circumcenters, hull edges contribute
outward bisector rays. Sites that never saw a hull edge get a closed polygon;
hull sites get a U-shaped region. Collinear input has no triangles at all and
is split into parallel strips instead.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np
import structlog
from shapely.geometry import Polygon

from .datastructures import (
    BoundaryEdgeFace,
    DelaunayFace,
    HalfPlane,
    InteriorFace,
    Polygonal,
    Region,
    Site,
    Strip,
    UShaped,
    Unbounded,
)
from .geometry import Axis2D, direction_from, dominant_axis_order, midpoint, pseudo_angles, rotate_ccw, rotate_cw

logger = structlog.get_logger(__name__)


@dataclass
class RegionAccumulator:
    points: List[np.ndarray] = field(default_factory=list)
    start_direction: Optional[np.ndarray] = None
    end_direction: Optional[np.ndarray] = None


def accumulate(faces: Iterable[DelaunayFace]) -> Dict[int, RegionAccumulator]:
    """
    Fold faces into per-site accumulators keyed by site index.
    """
    acc: Dict[int, RegionAccumulator] = {}

    def get(site: Site) -> RegionAccumulator:
        if site.index not in acc:
            acc[site.index] = RegionAccumulator()
        return acc[site.index]

    for face in faces:
        if isinstance(face, InteriorFace):
            for site in face.sites:
                get(site).points.append(face.circumcenter)
        elif isinstance(face, BoundaryEdgeFace):
            bisector = rotate_ccw(face.direction)
            get(face.first).end_direction = bisector
            get(face.second).start_direction = bisector
        # degenerate faces carry no region information

    return acc


def build_regions(sites: Sequence[Site], faces: Sequence[DelaunayFace]) -> List[Region]:
    if not any(isinstance(f, InteriorFace) for f in faces):
        return build_line_regions(sites)

    accumulators = accumulate(faces)
    regions: List[Region] = []
    for site in sites:
        acc = accumulators.get(site.index)
        if acc is None:
            logger.warning("Site has no incident faces, no region built", index=site.index)
            continue
        region = _region_from_accumulator(site, acc)
        if region is None:
            logger.warning("Inconsistent region accumulator, no region built",
                           index=site.index,
                           n_points=len(acc.points),
                           has_start=acc.start_direction is not None,
                           has_end=acc.end_direction is not None)
            continue
        regions.append(region)

    logger.debug("Built Voronoi regions", n_sites=len(sites), n_regions=len(regions))
    return regions


def build_line_regions(sites: Sequence[Site]) -> List[Region]:
    """
    Regions for sites that all lie on one line (or number fewer than three).
    """
    if len(sites) == 0:
        return []
    if len(sites) == 1:
        return [Unbounded(sites[0])]

    positions = np.array([s.position for s in sites], dtype=np.float64)
    ordered = [sites[int(i)] for i in dominant_axis_order(positions)]

    direction = direction_from(ordered[0].position, ordered[-1].position)
    if direction is None:
        raise ValueError("Collinear sites must not share a position")
    perpendicular = rotate_ccw(direction)

    bisectors = [
        Axis2D(origin=midpoint(s0.position, s1.position), direction=perpendicular)
        for s0, s1 in zip(ordered, ordered[1:])
    ]

    regions: List[Region] = [HalfPlane(ordered[0], bisectors[0].reverse())]
    for site, left, right in zip(ordered[1:-1], bisectors, bisectors[1:]):
        regions.append(Strip(site, left_axis=left, right_axis=right))
    regions.append(HalfPlane(ordered[-1], bisectors[-1]))
    return regions


def _region_from_accumulator(site: Site, acc: RegionAccumulator) -> Optional[Region]:
    start, end = acc.start_direction, acc.end_direction

    if start is None and end is None:
        return _polygonal(site, acc.points)

    if start is not None and end is not None and acc.points:
        return _u_shaped(site, acc.points, start, end)

    return None


def _polygonal(site: Site, points: List[np.ndarray]) -> Optional[Polygonal]:
    P = np.asarray(points, dtype=np.float64)
    order = np.argsort(pseudo_angles(P - site.position), kind="stable")
    ring = _drop_repeats(P[order])
    if len(ring) > 1 and np.array_equal(ring[0], ring[-1]):
        ring = ring[:-1]
    if len(ring) < 3:
        return None
    return Polygonal(site, Polygon(ring))


def _u_shaped(site: Site, points: List[np.ndarray], start: np.ndarray, end: np.ndarray) -> UShaped:
    # rotate_cw(start) points from the previous hull site towards this one,
    # so the anchor of the start ray sorts first
    sort_axis = Axis2D(origin=site.position, direction=rotate_cw(start))
    ordered = sorted(points, key=sort_axis.signed_distance_along)
    polyline = _drop_repeats(np.asarray(ordered, dtype=np.float64))
    return UShaped(
        site,
        left_axis=Axis2D(origin=polyline[0], direction=start),
        right_axis=Axis2D(origin=polyline[-1], direction=end),
        polyline=polyline,
    )


def _drop_repeats(P: np.ndarray) -> np.ndarray:
    if len(P) < 2:
        return P
    keep = np.ones(len(P), dtype=bool)
    keep[1:] = np.any(P[1:] != P[:-1], axis=1)
    return P[keep]
