"""Structural copy of plain containers.

`copy.deepcopy` follows bound methods and callable objects into the
instances behind them. Subscription maps hold exactly those, so they are
copied here instead: containers are duplicated, everything else is shared.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


def deep_clone(value: Any, memo: Optional[Dict[int, Any]] = None) -> Any:
    """Return a copy of `value` with every nested container duplicated.

    `dict`, `list`, `tuple`, `set` and `frozenset` are copied recursively.
    Any other value, including functions and callable objects, is returned
    as is. A container referenced twice in the input is copied once.

    Parameters:
        value (Any): Structure to copy.
        memo (Optional[Dict[int, Any]]): Copies already made, keyed by the
            `id` of their source. Used by recursive calls.

    Returns:
        Any: The structural copy.
    """
    if memo is None:
        memo = {}
    key = id(value)
    if key in memo:
        return memo[key]

    if isinstance(value, dict):
        result: Any = type(value)()
        memo[key] = result
        for k, v in value.items():
            result[k] = deep_clone(v, memo)
        return result
    if isinstance(value, list):
        result = type(value)()
        memo[key] = result
        result.extend(deep_clone(v, memo) for v in value)
        return result
    if isinstance(value, (tuple, set, frozenset)):
        result = type(value)(deep_clone(v, memo) for v in value)
        memo[key] = result
        return result
    return value
