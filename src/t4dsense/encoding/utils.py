"""
Utility functions for bit sets.

Alignment merges several encoders' bit spaces into one flat space by
offsetting each component by the total width of the components before it;
splitting is the exact inverse. Dense helpers convert to and from numpy
boolean arrays for overlap statistics.
"""

from collections.abc import Iterable, Sequence

import numpy as np

from t4dsense.core.types import BitSet, BitVotes


def bit_offsets(widths: Sequence[int]) -> list[int]:
    """
    Start offset of each component in the combined space.

    Args:
        widths: Bit width of each component

    Returns:
        Cumulative offsets, one per component (first is 0)
    """
    return [0, *np.cumsum(widths[:-1]).tolist()] if widths else []


def align_indices(widths: Sequence[int], bit_sets: Iterable[Iterable[int]]) -> list[BitSet]:
    """
    Shift each component's bits into the combined space.

    Args:
        widths: Bit width of each component
        bit_sets: One bit set per component

    Returns:
        Shifted bit sets, one per component
    """
    return [
        frozenset(b + offset for b in bits)
        for offset, bits in zip(bit_offsets(widths), bit_sets)
    ]


def split_votes(widths: Sequence[int], bit_votes: BitVotes) -> list[dict[int, float]]:
    """
    Split combined bit votes into per-component votes re-based to [0, width).

    Votes outside the combined space are dropped.

    Args:
        widths: Bit width of each component
        bit_votes: Votes over the combined space (not mutated)

    Returns:
        One vote mapping per component
    """
    offsets = bit_offsets(widths)
    total_width = sum(widths)
    parts: list[dict[int, float]] = [{} for _ in widths]

    for index, weight in bit_votes.items():
        if not 0 <= index < total_width:
            continue
        component = int(np.searchsorted(offsets, index, side="right")) - 1
        parts[component][index - offsets[component]] = weight

    return parts


def to_dense(bits: Iterable[int], size: int) -> np.ndarray:
    """
    Boolean array with the given bits set.

    Args:
        bits: Active positions
        size: Length of the array

    Returns:
        Array of shape (size,) and dtype bool
    """
    dense = np.zeros(size, dtype=bool)
    indices = np.fromiter(bits, dtype=np.int64)
    dense[indices] = True
    return dense


def from_dense(dense: np.ndarray) -> BitSet:
    """Active positions of a dense array."""
    return frozenset(int(i) for i in np.flatnonzero(dense))


def overlap(a: Iterable[int], b: Iterable[int]) -> int:
    """Number of shared active bits."""
    return len(set(a) & set(b))


def compute_sparsity(bits: Iterable[int], size: int) -> float:
    """
    Fraction of the bit space that is active.

    Args:
        bits: Active positions
        size: Total bit count

    Returns:
        len(bits) / size
    """
    return len(set(bits)) / size if size else 0.0


def overlap_matrix(bit_sets: Sequence[Iterable[int]], size: int) -> np.ndarray:
    """
    Pairwise overlap counts.

    Args:
        bit_sets: N bit sets in one space
        size: Total bit count

    Returns:
        Integer matrix of shape (N, N); the diagonal holds each set's size
    """
    if not bit_sets:
        return np.zeros((0, 0), dtype=np.int64)
    dense = np.stack([to_dense(bits, size) for bits in bit_sets]).astype(np.int64)
    return dense @ dense.T
