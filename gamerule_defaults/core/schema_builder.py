import logging
import math
from typing import Any, Dict, Iterable, Optional, Union

from gamerule_defaults.models.rule_descriptor import INT_MAX, INT_MIN, RuleDescriptor, RuleKind
from gamerule_defaults.settings import GENERATE_ME, JSON_SCHEMA_DRAFT, MOD_NAME

logger = logging.getLogger(__name__)

# =============================================================================
# FIXED TEXT
# =============================================================================

SCHEMA_TITLE = f"{MOD_NAME} Configuration File"
SCHEMA_DESCRIPTION = f'The config file for the "{MOD_NAME}" mod.'

SCHEMA_POINTER_DESCRIPTION = (
    "The standard method of assigning a JSON schema to a JSON file. If the value is "
    f'set as "{GENERATE_ME}", {MOD_NAME} will regenerate the path to the schema.'
)
DEFAULT_GAME_RULES_DESCRIPTION = (
    "Defines the default game rules, whose values will override the original default "
    "values. This mod provides game rule suggestions by generating a JSON schema."
)
GENERATE_SCHEMA_DESCRIPTION = (
    "If enabled, this mod will generate a JSON schema in order to aid with configuration. "
    "You may disable this if you don't plan to change the settings and want to save space, "
    'and once disabled, you can safely remove both the schema and the "$schema" property.'
)


# =============================================================================
# SCHEMA BUILDER
# =============================================================================


class SchemaBuilder:
    """
    Renders rule descriptors into the JSON-Schema (draft 2020-12) document that
    describes the config file. Pure: identical inputs give identical output.
    """

    def build(self, fingerprint: str, rules: Iterable[RuleDescriptor]) -> Dict[str, Any]:
        rule_properties: Dict[str, Any] = {}
        for rule in sorted(rules, key=lambda r: r.name):
            rule_properties[rule.name] = self.build_rule_fragment(rule)

        logger.debug(f"Built schema fragments for {len(rule_properties)} rules")

        return {
            "$schema": JSON_SCHEMA_DRAFT,
            "title": SCHEMA_TITLE,
            "gameRulesHash": fingerprint,
            "description": SCHEMA_DESCRIPTION,
            "type": "object",
            "properties": {
                "$schema": {
                    "type": "string",
                    "title": "$schema",
                    "description": SCHEMA_POINTER_DESCRIPTION,
                },
                "default_game_rules": {
                    "type": "object",
                    "title": "Default Game Rules",
                    "description": DEFAULT_GAME_RULES_DESCRIPTION,
                    "properties": rule_properties,
                },
                "generate_json_schema": {
                    "type": "boolean",
                    "title": "Generate JSON Schema",
                    "description": GENERATE_SCHEMA_DESCRIPTION,
                },
            },
            "required": ["default_game_rules", "generate_json_schema"],
        }

    def build_rule_fragment(self, rule: RuleDescriptor) -> Dict[str, Any]:
        """Map RuleKind -> JSON-Schema fragment."""
        k = rule.kind

        if k == RuleKind.BOOLEAN:
            fragment = self._base_fragment("boolean", rule)
            fragment["default"] = bool(rule.default_value)
            return fragment

        if k == RuleKind.INTEGER:
            fragment = self._base_fragment("integer", rule)
            fragment["default"] = int(rule.default_value)
            if _is_int_bound(rule.minimum, INT_MIN):
                fragment["minimum"] = int(rule.minimum)
            if _is_int_bound(rule.maximum, INT_MAX):
                fragment["maximum"] = int(rule.maximum)
            return fragment

        if k == RuleKind.DOUBLE:
            fragment = self._base_fragment("number", rule)
            fragment["default"] = float(rule.default_value)
            if _is_finite_bound(rule.minimum):
                fragment["minimum"] = float(rule.minimum)
            if _is_finite_bound(rule.maximum):
                fragment["maximum"] = float(rule.maximum)
            return fragment

        if k == RuleKind.ENUM:
            fragment = self._base_fragment("string", rule)
            fragment["default"] = str(rule.default_value)
            fragment["enum"] = list(rule.allowed_values or [])
            return fragment

        raise ValueError(f"Unsupported rule kind '{k}' for rule '{rule.name}'")

    @staticmethod
    def _base_fragment(json_type: str, rule: RuleDescriptor) -> Dict[str, Any]:
        fragment: Dict[str, Any] = {"type": json_type, "title": rule.display_name}
        if rule.description is not None:
            fragment["description"] = rule.description
        return fragment


def _is_int_bound(value: Optional[Union[int, float]], natural: int) -> bool:
    return value is not None and int(value) != natural


def _is_finite_bound(value: Optional[Union[int, float]]) -> bool:
    return value is not None and not math.isinf(value) and not math.isnan(value)


def build_schema_document(fingerprint: str, rules: Iterable[RuleDescriptor]) -> Dict[str, Any]:
    """Shortcut for SchemaBuilder().build(...)."""
    return SchemaBuilder().build(fingerprint, rules)
