"""
T4DSense - Sparse bit-set encoders for sequence-learning models.

Turns scalars, categories, coordinates, positions and collections into
sparse binary representations in which similar inputs overlap, and ranks
candidate values against weighted bit votes coming back from a model.

Quick Start:
    from t4dsense import CategoryEncoder, KeySelector, LinearEncoder, compose

    sensor = compose([
        (KeySelector("speed"), LinearEncoder(200, 20, lower=0, upper=40)),
        (KeySelector("gear"), CategoryEncoder(60, ["low", "mid", "high"])),
    ])
    bits = sensor.sense({"speed": 12.5, "gear": "mid"})
    per_component = sensor.decode({i: 1.0 for i in bits}, n=3)
"""

__version__ = "0.1.0"

from t4dsense.core.config import Settings, configure_logging, get_settings, reset_settings
from t4dsense.core.topology import Topology, combined_dimensions
from t4dsense.core.validation import ValidationError
from t4dsense.encoding import (
    CategoryEncoder,
    ConcatEncoder,
    CoordinateEncoder,
    DecodeCandidate,
    DecodeNotSupportedError,
    Encoder,
    Linear2DEncoder,
    LinearEncoder,
    NoEncoder,
    SplatEncoder,
    UniqueEncoder,
    decode_by_brute_force,
    ensplat,
)
from t4dsense.selectors import (
    KeySelector,
    PathSelector,
    TupleSelector,
    extract,
    selector_from_dict,
    selector_to_dict,
)
from t4dsense.sensors import Sensor, compose

__all__ = [
    # Config
    "Settings",
    "configure_logging",
    "get_settings",
    "reset_settings",
    # Topology
    "Topology",
    "combined_dimensions",
    # Errors
    "DecodeNotSupportedError",
    "ValidationError",
    # Encoders
    "CategoryEncoder",
    "ConcatEncoder",
    "CoordinateEncoder",
    "Encoder",
    "Linear2DEncoder",
    "LinearEncoder",
    "NoEncoder",
    "SplatEncoder",
    "UniqueEncoder",
    "ensplat",
    # Decoding
    "DecodeCandidate",
    "decode_by_brute_force",
    # Selectors
    "KeySelector",
    "PathSelector",
    "TupleSelector",
    "extract",
    "selector_from_dict",
    "selector_to_dict",
    # Sensors
    "Sensor",
    "compose",
]
