"""
Input validation utilities for T4DSense.

Provides consistent construction-time validation across encoders, topologies
and selectors. Data-level problems (missing values, unknown categories) are
never validation errors; they encode to the empty bit set instead.
"""

import logging
import numbers
from collections.abc import Sequence
from typing import Any

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

# Supported topology ranks
MIN_DIMENSIONS = 1
MAX_DIMENSIONS = 3


class ValidationError(ValueError):
    """Raised when input validation fails."""

    def __init__(self, field: str, message: str, value: Any = None):
        self.field = field
        self.message = message
        self.value = value
        super().__init__(f"{field}: {message}")

    def to_dict(self) -> dict:
        """Convert to error response format."""
        return {
            "error": "validation_error",
            "field": self.field,
            "message": self.message,
        }


# =============================================================================
# Numeric Validation
# =============================================================================


def validate_positive_int(
    value: int,
    field: str,
    max_val: int | None = None,
) -> int:
    """
    Validate positive integer (>= 1).

    Args:
        value: Value to validate
        field: Field name for error messages
        max_val: Optional maximum value

    Returns:
        Validated value

    Raises:
        ValidationError: If value is not a positive integer
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(field, f"Expected integer, got {type(value).__name__}", value)

    if value < 1:
        raise ValidationError(field, f"Must be positive, got {value}", value)

    if max_val is not None and value > max_val:
        raise ValidationError(field, f"Must be <= {max_val}, got {value}", value)

    return value


def validate_non_negative_int(
    value: int,
    field: str,
    max_val: int | None = None,
) -> int:
    """
    Validate non-negative integer (>= 0).

    Raises:
        ValidationError: If value is not a non-negative integer
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(field, f"Expected integer, got {type(value).__name__}", value)

    if value < 0:
        raise ValidationError(field, f"Must be non-negative, got {value}", value)

    if max_val is not None and value > max_val:
        raise ValidationError(field, f"Must be <= {max_val}, got {value}", value)

    return value


def validate_number(value: Any, field: str) -> float:
    """Validate a real (non-bool) number and return it as float."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValidationError(field, f"Expected number, got {type(value).__name__}", value)
    return float(value)


def validate_bounds(lower: Any, upper: Any, field: str = "bounds") -> tuple[float, float]:
    """
    Validate a numeric interval with lower strictly below upper.

    Returns:
        (lower, upper) as floats

    Raises:
        ValidationError: If either bound is not numeric or the interval is empty
    """
    lo = validate_number(lower, f"{field}.lower")
    hi = validate_number(upper, f"{field}.upper")
    if not lo < hi:
        raise ValidationError(field, f"lower must be < upper, got [{lo}, {hi}]", (lower, upper))
    return lo, hi


# =============================================================================
# Encoder Validation
# =============================================================================


def validate_dimensions(dimensions: Any, field: str = "dimensions") -> tuple[int, ...]:
    """
    Validate a topology shape of 1 to 3 positive extents.

    Args:
        dimensions: Sequence of extents
        field: Field name for error messages

    Returns:
        Dimensions as a tuple of ints

    Raises:
        ValidationError: If the shape has the wrong rank or a non-positive extent
    """
    if isinstance(dimensions, int) and not isinstance(dimensions, bool):
        dimensions = (dimensions,)

    if not isinstance(dimensions, Sequence) or isinstance(dimensions, str):
        raise ValidationError(field, f"Expected sequence of ints, got {type(dimensions).__name__}", dimensions)

    if not MIN_DIMENSIONS <= len(dimensions) <= MAX_DIMENSIONS:
        raise ValidationError(
            field,
            f"Must have {MIN_DIMENSIONS} to {MAX_DIMENSIONS} dimensions, got {len(dimensions)}",
            dimensions,
        )

    return tuple(validate_positive_int(d, f"{field}[{i}]") for i, d in enumerate(dimensions))


def validate_active_bits(n_active: Any, size: int, field: str = "n_active") -> int:
    """
    Validate an active-bit count against the bit space it lives in.

    Raises:
        ValidationError: If n_active is not positive or exceeds size
    """
    n_active = validate_positive_int(n_active, field)
    if n_active > size:
        raise ValidationError(field, f"Active bits ({n_active}) exceed bit count ({size})", n_active)
    return n_active


def validate_list(
    value: Any,
    field: str,
    min_length: int = 0,
    max_length: int | None = None,
) -> list:
    """
    Validate a sequence with length constraints.

    Tuples are accepted and returned as lists.

    Raises:
        ValidationError: If value is not a list/tuple or wrong length
    """
    if value is None:
        if min_length > 0:
            raise ValidationError(field, "Cannot be None")
        return []

    if not isinstance(value, (list, tuple)):
        raise ValidationError(field, f"Expected list, got {type(value).__name__}", value)

    if len(value) < min_length:
        raise ValidationError(field, f"Must have at least {min_length} items", value)

    if max_length is not None and len(value) > max_length:
        raise ValidationError(field, f"Cannot exceed {max_length} items", value)

    return list(value)
