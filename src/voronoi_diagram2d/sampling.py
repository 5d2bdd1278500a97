import numpy as np

from .geometry import BoundingBox


def sample_points_in_box(
    box: BoundingBox,
    *,
    n_points: int | None = None,
    target_cell_area: float | None = None,
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Uniform sites inside box, (N,2).
    Either n_points or target_cell_area (N ~ box area / target) is required.
    """
    width, height = box.dimensions

    if n_points is None:
        if target_cell_area is None:
            raise ValueError("Either target_cell_area or n_points required")
        if target_cell_area <= 0:
            raise ValueError("target_cell_area must be > 0")
        n_points = max(1, int(width * height / target_cell_area))
    if n_points < 0:
        raise ValueError("n_points must be >= 0")

    pts = np.empty((n_points, 2), dtype=np.float64)
    pts[:, 0] = box.min_x + rng.random(n_points) * width
    pts[:, 1] = box.min_y + rng.random(n_points) * height
    return pts
