from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class VoronoiConfig:
    """
    Numeric settings shared by triangulation and clipping.

    Attributes:
        qhull_options: options passed to scipy.spatial.Delaunay (SciPy's 2D default)
        collinear_tolerance: relative cross-product bound under which sites count as collinear
        clip_tolerance: inside/between slack, scaled by the clip box size
    """
    qhull_options: str = "Qbb Qc Qz Q12"
    collinear_tolerance: float = 1e-12
    clip_tolerance: float = 1e-9

    def validate(self) -> list[str]:
        """
        Validate configuration values.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        if not self.qhull_options.strip():
            errors.append("qhull_options must not be empty")

        if self.collinear_tolerance < 0:
            errors.append(f"collinear_tolerance cannot be negative, got {self.collinear_tolerance}")

        if self.clip_tolerance < 0:
            errors.append(f"clip_tolerance cannot be negative, got {self.clip_tolerance}")
        if self.clip_tolerance > 1e-3:
            errors.append(f"clip_tolerance {self.clip_tolerance} is excessive (max recommended: 1e-3)")

        return errors


def resolve_config(config: Optional[VoronoiConfig]) -> VoronoiConfig:
    if config is None:
        return VoronoiConfig()
    errors = config.validate()
    if errors:
        raise ValueError("Invalid VoronoiConfig: " + "; ".join(errors))
    return config
