from gamerule_defaults.models.rule_descriptor import (
    INT_MAX,
    INT_MIN,
    RuleDescriptor,
    RuleKind,
    RuleValue,
)
from gamerule_defaults.models.mod_config import ModConfig, OverrideMap, OverrideValue

__all__ = [
    "INT_MAX",
    "INT_MIN",
    "RuleDescriptor",
    "RuleKind",
    "RuleValue",
    "ModConfig",
    "OverrideMap",
    "OverrideValue",
]
