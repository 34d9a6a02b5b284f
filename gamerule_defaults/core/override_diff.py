"""
Override Diff
=============
Computes the minimal set of overrides: the rules whose live value differs from
the host's built-in default.
"""

import logging
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from gamerule_defaults.models.rule_descriptor import RuleValue

logger = logging.getLogger(__name__)


def canonical_value(value: Any) -> RuleValue:
    """
    Normalize a snapshot value into what gets persisted.
    Enum members are stored by their canonical name.
    """
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, (bool, int, float, str)):
        return value
    raise ValueError(f"Unsupported rule value {value!r} ({type(value).__name__})")


def values_equal(left: Any, right: Any) -> bool:
    """
    Kind-appropriate equality.
    - booleans only ever equal booleans (True is not 1 here)
    - integers and doubles compare numerically
    - enums compare by canonical name
    """
    a = canonical_value(left)
    b = canonical_value(right)

    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a == b
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    return False


def diff_overrides(
    live: Optional[Mapping[str, Any]], baseline: Mapping[str, Any]
) -> Dict[str, RuleValue]:
    """
    Returns {name: live value} for every rule present in both snapshots whose
    live value differs from the baseline. A None live snapshot means "reset to
    defaults" and always yields an empty map.
    """
    if live is None:
        return {}

    overrides: Dict[str, RuleValue] = {}
    for name, live_value in live.items():
        if name not in baseline:
            logger.debug(f"Rule '{name}' has no baseline value, not diffed")
            continue
        if not values_equal(live_value, baseline[name]):
            overrides[name] = canonical_value(live_value)

    return overrides
