"""
Encoder interface.

Every encoder answers three questions: what shape its bit space has
(``topology``), which bits a value activates (``encode``) and which values
best explain a weighted vote over bits (``decode``).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from t4dsense.core.topology import Topology
from t4dsense.core.types import BitSet, BitVotes

if TYPE_CHECKING:
    from t4dsense.encoding.decode import DecodeCandidate


class DecodeNotSupportedError(NotImplementedError):
    """Raised by encoders whose value domain cannot be enumerated."""


class Encoder(ABC):
    """
    Abstract base for all encoders.

    Subclasses must return ``frozenset()`` from ``encode(None)`` and must
    not mutate the bit votes handed to ``decode``.
    """

    supports_decode: bool = True

    @property
    @abstractmethod
    def topology(self) -> Topology:
        """Shape of the encoded bit space."""
        ...

    @abstractmethod
    def encode(self, value: Any) -> BitSet:
        """Active bit positions for a value (empty for None)."""
        ...

    @abstractmethod
    def decode(self, bit_votes: BitVotes, n: int | None = None) -> list[DecodeCandidate]:
        """Up to n candidate values ranked by agreement with bit_votes."""
        ...

    @property
    def size(self) -> int:
        """Total number of bits."""
        return self.topology.size
