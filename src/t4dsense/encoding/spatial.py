"""
Spatial encoders.

Linear2DEncoder maps a bounded (x, y) position onto a 2-D grid and
activates the patch of cells closest to it, so nearby positions share most
of their bits.

CoordinateEncoder handles unbounded integer coordinates in 1-3 dimensions.
Every coordinate in a rectangular neighbourhood around the (scaled) input
gets a pseudo-random "order" and a pseudo-random bit index, both seeded by
the neighbour's own coordinate. The highest-order neighbours win, so two
inputs that share neighbours tend to share winners and therefore bits.
"""

from __future__ import annotations

import itertools
import logging
import math
from collections.abc import Sequence
from functools import lru_cache
from typing import Any

import numpy as np

from t4dsense.core.config import get_settings
from t4dsense.core.rng import make_random, random_double, random_int, split, stable_hash
from t4dsense.core.topology import Topology
from t4dsense.core.types import EMPTY_BITS, BitSet, BitVotes
from t4dsense.core.validation import (
    ValidationError,
    validate_active_bits,
    validate_list,
    validate_non_negative_int,
    validate_number,
)
from t4dsense.encoding.base import DecodeNotSupportedError, Encoder
from t4dsense.encoding.decode import DecodeCandidate, decode_by_brute_force, default_n

logger = logging.getLogger(__name__)

# Cached per-coordinate draws
COORDINATE_CACHE_SIZE = 1 << 16

CELL_EPSILON = 1e-9


class Linear2DEncoder(Encoder):
    """
    Encodes a position in [0, x_max] x [0, y_max] as a patch of grid cells.

    The position is clamped into the box and mapped to a cell; the patch
    grows ring by ring (radius 0, 1, 2, ...) around that cell until
    ``n_active`` cells are collected or ``max_radius`` is reached.
    """

    def __init__(
        self,
        dimensions: Sequence[int],
        n_active: int,
        x_max: float,
        y_max: float,
        max_radius: int | None = None,
    ):
        self._topology = Topology(dimensions)
        if self._topology.rank != 2:
            raise ValidationError("dimensions", f"Expected 2 dimensions, got {self._topology.rank}", dimensions)
        self.n_active = validate_active_bits(n_active, self._topology.size)

        self.x_max = validate_number(x_max, "x_max")
        self.y_max = validate_number(y_max, "y_max")
        if self.x_max <= 0 or self.y_max <= 0:
            raise ValidationError("x_max/y_max", f"Must be positive, got ({x_max}, {y_max})")

        if max_radius is None:
            max_radius = get_settings().spatial_max_radius
        self.max_radius = validate_non_negative_int(max_radius, "max_radius")
        logger.debug(f"Created {self!r}")

    @property
    def topology(self) -> Topology:
        return self._topology

    def cell_of(self, x: float, y: float) -> tuple[int, int]:
        """Grid cell for a (clamped) position."""
        w, h = self._topology.dimensions
        xz = min(max(x, 0.0), self.x_max) / self.x_max
        yz = min(max(y, 0.0), self.y_max) / self.y_max
        # Tolerance keeps grid-aligned inputs (e.g. decode candidates) in their own cell
        return (
            int(math.floor(xz * (w - 1) + CELL_EPSILON)),
            int(math.floor(yz * (h - 1) + CELL_EPSILON)),
        )

    def encode(self, value: Sequence[float] | None) -> BitSet:
        if value is None:
            return EMPTY_BITS
        if len(value) != 2:
            raise ValidationError("value", f"Expected 2 components, got {len(value)}", value)
        x, y = value
        if x is None or y is None:
            return EMPTY_BITS
        x, y = validate_number(x, "x"), validate_number(y, "y")
        if math.isnan(x) or math.isnan(y):
            return EMPTY_BITS

        center = self._topology.coord_to_index(self.cell_of(x, y))
        bits: list[int] = []
        for radius in range(self.max_radius + 1):
            bits.extend(self._topology.neighbours(center, radius, radius - 1))
            if len(bits) >= self.n_active:
                break
        return frozenset(bits[: self.n_active])

    def cell_values(self) -> list[tuple[float, float]]:
        """One representative position per grid cell."""
        w, h = self._topology.dimensions
        xs = np.linspace(0.0, self.x_max, w) if w > 1 else np.zeros(1)
        ys = np.linspace(0.0, self.y_max, h) if h > 1 else np.zeros(1)
        return [(float(x), float(y)) for x in xs for y in ys]

    def decode(self, bit_votes: BitVotes, n: int | None = None) -> list[DecodeCandidate]:
        return decode_by_brute_force(self.encode, self.cell_values(), bit_votes, default_n(n))

    def __repr__(self) -> str:
        return (
            f"Linear2DEncoder(dimensions={self._topology.dimensions}, n_active={self.n_active}, "
            f"x_max={self.x_max}, y_max={self.y_max})"
        )


@lru_cache(maxsize=COORDINATE_CACHE_SIZE)
def coordinate_draws(coord: tuple[int, ...], size: int) -> tuple[float, int]:
    """
    Order value and bit index of one coordinate.

    Both come from one seed derived from the coordinate, split into two
    independent streams so that a coordinate's rank among its neighbours
    says nothing about where its bit lands.
    """
    order_stream, bit_stream = split(make_random(stable_hash(coord)))
    return random_double(order_stream), random_int(bit_stream, size)


class CoordinateEncoder(Encoder):
    """
    Encodes unbounded integer coordinates (1-3 D) into a fixed bit space.

    Args:
        dimensions: Shape of the bit space
        n_active: Number of neighbours selected per input
        scale_factors: Per-axis multiplier applied before rounding
        radii: Per-axis neighbourhood radius

    The value domain is unbounded, so there is no brute-force decode.
    """

    supports_decode = False

    def __init__(
        self,
        dimensions: int | Sequence[int],
        n_active: int,
        scale_factors: Sequence[float],
        radii: Sequence[int],
    ):
        self._topology = Topology(dimensions)
        self.n_active = validate_active_bits(n_active, self._topology.size)

        self.scale_factors = tuple(
            validate_number(s, f"scale_factors[{i}]")
            for i, s in enumerate(validate_list(scale_factors, "scale_factors", min_length=1, max_length=3))
        )
        self.radii = tuple(
            validate_non_negative_int(r, f"radii[{i}]")
            for i, r in enumerate(validate_list(radii, "radii", min_length=1, max_length=3))
        )
        if len(self.scale_factors) != len(self.radii):
            raise ValidationError(
                "radii",
                f"Need one radius per scale factor ({len(self.scale_factors)}), got {len(self.radii)}",
            )

        neighbourhood = int(np.prod([2 * r + 1 for r in self.radii]))
        if neighbourhood < self.n_active:
            raise ValidationError(
                "radii",
                f"Neighbourhood of {neighbourhood} coordinates cannot supply {self.n_active} active bits",
            )
        logger.debug(f"Created {self!r}")

    @property
    def topology(self) -> Topology:
        return self._topology

    def scaled(self, coord: Sequence[float]) -> tuple[int, ...]:
        """Scale and round (half up) a raw coordinate."""
        if len(coord) != len(self.scale_factors):
            raise ValidationError(
                "value",
                f"Expected {len(self.scale_factors)} components, got {len(coord)}",
                coord,
            )
        return tuple(
            int(math.floor(validate_number(c, "value") * s + 0.5))
            for c, s in zip(coord, self.scale_factors)
        )

    def neighbourhood(self, center: tuple[int, ...]) -> list[tuple[int, ...]]:
        """Every coordinate within the per-axis radii of center."""
        axes = [range(c - r, c + r + 1) for c, r in zip(center, self.radii)]
        return list(itertools.product(*axes))

    def encode(self, value: Sequence[float] | None) -> BitSet:
        if value is None or len(value) == 0 or value[0] is None:
            return EMPTY_BITS
        raw = [validate_number(c, "value") for c in value]
        if any(math.isnan(c) for c in raw):
            return EMPTY_BITS

        draws = [
            (coordinate_draws(coord, self.size), coord)
            for coord in self.neighbourhood(self.scaled(raw))
        ]
        # Highest order first; the coordinate breaks exact ties
        draws.sort(key=lambda d: (d[0][0], d[1]), reverse=True)
        return frozenset(bit for (_, bit), _ in draws[: self.n_active])

    def decode(self, bit_votes: BitVotes, n: int | None = None) -> list[Any]:
        raise DecodeNotSupportedError(
            "CoordinateEncoder has an unbounded value domain and cannot be brute-force decoded"
        )

    def __repr__(self) -> str:
        return (
            f"CoordinateEncoder(dimensions={self._topology.dimensions}, n_active={self.n_active}, "
            f"scale_factors={self.scale_factors}, radii={self.radii})"
        )
