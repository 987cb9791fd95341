"""
Selectors: what part of an input state an encoder looks at.

Selectors are small frozen dataclasses interpreted by ``extract``, so sensor
configurations stay comparable, hashable and serialisable. Missing data
never raises; it yields ``None``, which every encoder turns into an empty
bit set.

Example:
    state = {"pos": {"x": 3, "y": 4}, "label": "cat"}
    sel = TupleSelector((PathSelector(("pos", "x")), KeySelector("label")))
    extract(sel, state)   # (3, "cat")
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

# Signals "no value" to encoders
ABSENT = None


@dataclass(frozen=True)
class KeySelector:
    """Looks up one key (mapping key, sequence index or attribute)."""

    key: Any


@dataclass(frozen=True)
class PathSelector:
    """Follows a path of keys into nested state."""

    path: tuple[Any, ...]

    def __post_init__(self):
        object.__setattr__(self, "path", tuple(self.path))


@dataclass(frozen=True)
class TupleSelector:
    """Applies several selectors to the same state."""

    selectors: tuple[Selector, ...]

    def __post_init__(self):
        object.__setattr__(self, "selectors", tuple(self.selectors))


Selector = Union[KeySelector, PathSelector, TupleSelector]


def _lookup(state: Any, key: Any) -> Any:
    if state is None:
        return ABSENT
    if isinstance(state, Mapping):
        return state.get(key, ABSENT)
    if isinstance(state, Sequence) and not isinstance(state, str):
        if isinstance(key, int) and -len(state) <= key < len(state):
            return state[key]
        return ABSENT
    if isinstance(key, str):
        return getattr(state, key, ABSENT)
    return ABSENT


def extract(selector: Selector, state: Any) -> Any:
    """
    Evaluate a selector against a state.

    Args:
        selector: KeySelector, PathSelector or TupleSelector
        state: Arbitrary nested mappings / sequences / objects

    Returns:
        The selected value, ``None`` when missing, or a tuple for TupleSelector

    Raises:
        TypeError: If selector is not a known selector type
    """
    if isinstance(selector, KeySelector):
        return _lookup(state, selector.key)
    if isinstance(selector, PathSelector):
        value = state
        for key in selector.path:
            value = _lookup(value, key)
            if value is ABSENT:
                return ABSENT
        return value
    if isinstance(selector, TupleSelector):
        return tuple(extract(child, state) for child in selector.selectors)
    raise TypeError(f"Unknown selector type: {type(selector).__name__}")


def selector_to_dict(selector: Selector) -> dict[str, Any]:
    """JSON-ready form of a selector."""
    if isinstance(selector, KeySelector):
        return {"type": "key", "key": selector.key}
    if isinstance(selector, PathSelector):
        return {"type": "path", "path": list(selector.path)}
    if isinstance(selector, TupleSelector):
        return {"type": "tuple", "selectors": [selector_to_dict(s) for s in selector.selectors]}
    raise TypeError(f"Unknown selector type: {type(selector).__name__}")


def selector_from_dict(data: Mapping[str, Any]) -> Selector:
    """Inverse of selector_to_dict."""
    kind = data.get("type")
    if kind == "key":
        return KeySelector(data["key"])
    if kind == "path":
        return PathSelector(tuple(data["path"]))
    if kind == "tuple":
        return TupleSelector(tuple(selector_from_dict(s) for s in data["selectors"]))
    raise ValueError(f"Unknown selector type: {kind!r}")
