from __future__ import annotations

from typing import Any


class CoincidentVerticesError(ValueError):
    """
    Two vertices were given the same position.
    `first` is the vertex already present, `second` the one being added.
    """

    def __init__(self, first: Any, second: Any):
        super().__init__(f"Vertices {first!r} and {second!r} have the same position")
        self.first = first
        self.second = second
