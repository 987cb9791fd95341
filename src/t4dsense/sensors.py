"""
Sensors: selectors paired with encoders.

``compose`` turns a list of (selector, encoder) pairs into a single sensor
whose selector reads every component from one state and whose encoder
produces one combined bit set.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, NamedTuple

from t4dsense.core.types import BitSet, BitVotes
from t4dsense.core.validation import ValidationError
from t4dsense.encoding.base import Encoder
from t4dsense.encoding.composite import ConcatEncoder
from t4dsense.encoding.decode import DecodeCandidate
from t4dsense.selectors import Selector, TupleSelector, extract

logger = logging.getLogger(__name__)


class Sensor(NamedTuple):
    """A selector and the encoder for what it selects."""

    selector: Selector
    encoder: Encoder

    def sense(self, state: Any) -> BitSet:
        """Encode the selected part of a state."""
        return self.encoder.encode(extract(self.selector, state))

    def decode(self, bit_votes: BitVotes, n: int | None = None) -> list[Any]:
        return self.encoder.decode(bit_votes, n)


def compose(pairs: Sequence[tuple[Selector, Encoder]]) -> Sensor:
    """
    Combine several sensors into one.

    Args:
        pairs: (selector, encoder) pairs, in bit-space order

    Returns:
        Sensor with a TupleSelector and a ConcatEncoder

    Raises:
        ValidationError: If pairs is empty
    """
    if not pairs:
        raise ValidationError("pairs", "Need at least one (selector, encoder) pair")

    selectors, encoders = zip(*pairs)
    sensor = Sensor(TupleSelector(selectors), ConcatEncoder(encoders))
    logger.debug(f"Composed sensor of {len(pairs)} components, {sensor.encoder.size} bits")
    return sensor


def decode_components(sensor: Sensor, bit_votes: BitVotes, n: int | None = None) -> list[list[DecodeCandidate]]:
    """Per-component ranked candidates for a composed sensor."""
    if not isinstance(sensor.encoder, ConcatEncoder):
        return [sensor.decode(bit_votes, n)]
    return sensor.encoder.decode(bit_votes, n)
