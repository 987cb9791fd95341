"""
Grid topologies for encoder bit spaces.

A topology declares the 1-3 dimensional shape of a bit space and its
addressing scheme: flat bit index <-> grid coordinate, plus neighbourhood
queries used by the spatial encoders.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from functools import cached_property

import numpy as np

from t4dsense.core.validation import ValidationError, validate_dimensions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Topology:
    """
    Immutable grid shape with row-major (C order) addressing.

    Example:
        topo = Topology((10, 20))
        topo.size                    # 200
        topo.coord_to_index((1, 2))  # 22
        topo.index_to_coord(22)      # (1, 2)
    """

    dimensions: tuple[int, ...]

    def __post_init__(self):
        object.__setattr__(self, "dimensions", validate_dimensions(self.dimensions))

    @cached_property
    def size(self) -> int:
        """Total number of bits."""
        return int(np.prod(self.dimensions))

    @property
    def rank(self) -> int:
        return len(self.dimensions)

    def coord_to_index(self, coord: Sequence[int]) -> int:
        """
        Flatten a grid coordinate to a bit index.

        Raises:
            ValidationError: If the coordinate has the wrong rank or is out of bounds
        """
        coord = tuple(int(c) for c in coord)
        if len(coord) != self.rank:
            raise ValidationError("coord", f"Expected {self.rank} components, got {len(coord)}", coord)
        if not self.contains(coord):
            raise ValidationError("coord", f"Out of bounds for {self.dimensions}", coord)
        return int(np.ravel_multi_index(coord, self.dimensions))

    def index_to_coord(self, index: int) -> tuple[int, ...]:
        """
        Expand a bit index to its grid coordinate.

        Raises:
            ValidationError: If the index is outside [0, size)
        """
        if not 0 <= index < self.size:
            raise ValidationError("index", f"Must be in [0, {self.size}), got {index}", index)
        return tuple(int(c) for c in np.unravel_index(index, self.dimensions))

    def contains(self, coord: Sequence[int]) -> bool:
        return len(coord) == self.rank and all(0 <= c < d for c, d in zip(coord, self.dimensions))

    def neighbours(
        self,
        center_index: int,
        max_radius: int,
        min_radius_exclusive: int = -1,
    ) -> list[int]:
        """
        Indices in a Chebyshev radius band around a centre.

        Returns every in-bounds index at distance d with
        ``min_radius_exclusive < d <= max_radius``, ordered by (d, index).
        ``max_radius=0`` with the default lower bound yields only the centre.

        Args:
            center_index: Flat index of the centre cell
            max_radius: Outer radius (inclusive)
            min_radius_exclusive: Inner radius (exclusive)

        Returns:
            Ordered list of flat indices
        """
        center = self.index_to_coord(center_index)
        if max_radius < 0 or max_radius <= min_radius_exclusive:
            return []

        axes = [
            range(max(0, c - max_radius), min(d, c + max_radius + 1))
            for c, d in zip(center, self.dimensions)
        ]
        band: list[tuple[int, int]] = []
        for coord in itertools.product(*axes):
            dist = max(abs(a - b) for a, b in zip(coord, center))
            if dist > min_radius_exclusive:
                band.append((dist, int(np.ravel_multi_index(coord, self.dimensions))))

        band.sort()
        return [idx for _, idx in band]

    def __repr__(self) -> str:
        return f"Topology({self.dimensions})"


def combined_dimensions(topologies: Iterable[Topology]) -> Topology:
    """
    Shape of several bit spaces laid end to end.

    Topologies of equal rank with identical trailing extents stack along the
    first axis; anything else collapses to a 1-D space of the total size.

    Raises:
        ValidationError: If no topologies are given
    """
    topologies = list(topologies)
    if not topologies:
        raise ValidationError("topologies", "Need at least one topology to combine")

    first = topologies[0]
    same_shape = all(
        t.rank == first.rank and t.dimensions[1:] == first.dimensions[1:]
        for t in topologies
    )
    if same_shape:
        lead = sum(t.dimensions[0] for t in topologies)
        return Topology((lead, *first.dimensions[1:]))

    return Topology((sum(t.size for t in topologies),))
