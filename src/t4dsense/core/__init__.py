"""Core building blocks: topology, seeded randomness, config and validation."""

from t4dsense.core.config import (
    Settings,
    configure_logging,
    get_settings,
    load_settings_from_yaml,
    reset_settings,
)
from t4dsense.core.rng import (
    make_random,
    random_double,
    random_int,
    random_ints,
    split,
    stable_hash,
)
from t4dsense.core.topology import Topology, combined_dimensions
from t4dsense.core.types import EMPTY_BITS, BitSet, BitVotes
from t4dsense.core.validation import ValidationError

__all__ = [
    # Config
    "Settings",
    "configure_logging",
    "get_settings",
    "load_settings_from_yaml",
    "reset_settings",
    # Randomness
    "make_random",
    "random_double",
    "random_int",
    "random_ints",
    "split",
    "stable_hash",
    # Topology
    "Topology",
    "combined_dimensions",
    # Types
    "BitSet",
    "BitVotes",
    "EMPTY_BITS",
    # Errors
    "ValidationError",
]
