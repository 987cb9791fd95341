"""
Encoders from raw values to sparse bit sets, and back.

- Scalar: LinearEncoder, CategoryEncoder, NoEncoder
- Unique: UniqueEncoder (memoised random bit sets)
- Spatial: Linear2DEncoder, CoordinateEncoder
- Composite: ConcatEncoder, SplatEncoder
- Decoding: brute-force ranking of candidate values against bit votes
"""

from t4dsense.encoding.base import DecodeNotSupportedError, Encoder
from t4dsense.encoding.composite import ConcatEncoder, SplatEncoder, ensplat
from t4dsense.encoding.decode import (
    DecodeCandidate,
    decode_by_brute_force,
    score_candidate,
)
from t4dsense.encoding.scalar import CategoryEncoder, LinearEncoder, NoEncoder
from t4dsense.encoding.spatial import CoordinateEncoder, Linear2DEncoder
from t4dsense.encoding.unique import UniqueEncoder
from t4dsense.encoding.utils import (
    align_indices,
    bit_offsets,
    compute_sparsity,
    from_dense,
    overlap,
    overlap_matrix,
    split_votes,
    to_dense,
)

__all__ = [
    # Interface
    "DecodeNotSupportedError",
    "Encoder",
    # Scalar
    "CategoryEncoder",
    "LinearEncoder",
    "NoEncoder",
    # Unique
    "UniqueEncoder",
    # Spatial
    "CoordinateEncoder",
    "Linear2DEncoder",
    # Composite
    "ConcatEncoder",
    "SplatEncoder",
    "ensplat",
    # Decoding
    "DecodeCandidate",
    "decode_by_brute_force",
    "score_candidate",
    # Utils
    "align_indices",
    "bit_offsets",
    "compute_sparsity",
    "from_dense",
    "overlap",
    "overlap_matrix",
    "split_votes",
    "to_dense",
]
