"""
Rule Enumeration
================
The contract a host adapter satisfies so the synchronizer can see its game
rules, plus a file-backed catalog used by the CLI and the tests.
"""

import json
import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from gamerule_defaults.host.localization import Localizer
from gamerule_defaults.models.rule_descriptor import RuleDescriptor, RuleKind, RuleValue

logger = logging.getLogger(__name__)


class RuleCatalogError(ValueError):
    pass


@dataclass(frozen=True)
class RuleSpec:
    """One rule as the host enumerates it, before localization."""

    name: str
    kind: RuleKind
    default: RuleValue
    translation_key: str = ""
    minimum: Optional[Union[int, float]] = None
    maximum: Optional[Union[int, float]] = None
    allowed_values: List[str] = field(default_factory=list)

    def __post_init__(self):
        if not self.translation_key:
            object.__setattr__(self, "translation_key", f"gamerule.{self.name}")

    def describe(self, localizer: Localizer) -> RuleDescriptor:
        description_key = f"{self.translation_key}.description"
        description = (
            localizer.translate(description_key)
            if localizer.has_translation(description_key)
            else None
        )
        return RuleDescriptor(
            name=self.name,
            kind=self.kind,
            display_name=localizer.translate(self.translation_key),
            description=description,
            default_value=self.default,
            minimum=self.minimum,
            maximum=self.maximum,
            allowed_values=list(self.allowed_values) if self.kind == RuleKind.ENUM else None,
        )

    def coerce(self, value: Any) -> RuleValue:
        """
        Turns a persisted override into a value of this rule's kind.
        Raises ValueError when it does not fit the kind, bounds or allowed values.
        """
        k = self.kind

        if k == RuleKind.BOOLEAN:
            if isinstance(value, bool):
                return value
            if isinstance(value, str) and value.lower() in ("true", "false"):
                return value.lower() == "true"
            raise ValueError(f"expected a boolean, got {value!r}")

        if k == RuleKind.INTEGER:
            if isinstance(value, bool):
                raise ValueError(f"expected an integer, got {value!r}")
            if isinstance(value, float) and value.is_integer():
                value = int(value)
            elif isinstance(value, str):
                try:
                    value = int(value.strip())
                except ValueError:
                    raise ValueError(f"expected an integer, got {value!r}") from None
            if not isinstance(value, int):
                raise ValueError(f"expected an integer, got {value!r}")
            self._check_bounds(value)
            return value

        if k == RuleKind.DOUBLE:
            if isinstance(value, bool):
                raise ValueError(f"expected a number, got {value!r}")
            try:
                number = float(value)
            except (TypeError, ValueError):
                raise ValueError(f"expected a number, got {value!r}") from None
            if math.isnan(number):
                raise ValueError("NaN is not a valid rule value")
            self._check_bounds(number)
            return number

        if k == RuleKind.ENUM:
            if not isinstance(value, str) or value not in self.allowed_values:
                raise ValueError(f"expected one of {self.allowed_values}, got {value!r}")
            return value

        raise ValueError(f"Unsupported rule kind '{k}'")

    def _check_bounds(self, value: Union[int, float]):
        if self.minimum is not None and value < self.minimum:
            raise ValueError(f"{value} is below the minimum of {self.minimum}")
        if self.maximum is not None and value > self.maximum:
            raise ValueError(f"{value} is above the maximum of {self.maximum}")

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "name": self.name,
            "kind": self.kind.value,
            "default": self.default,
            "translation_key": self.translation_key,
        }
        if self.minimum is not None:
            result["minimum"] = self.minimum
        if self.maximum is not None:
            result["maximum"] = self.maximum
        if self.allowed_values:
            result["allowed_values"] = list(self.allowed_values)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RuleSpec":
        try:
            name = data["name"]
            kind = RuleKind(data["kind"])
            default = data["default"]
        except KeyError as e:
            raise RuleCatalogError(f"Rule entry is missing the {e} field: {data}") from None
        except ValueError:
            raise RuleCatalogError(
                f"Rule '{data.get('name')}' has unknown kind '{data.get('kind')}'"
            ) from None

        spec = cls(
            name=name,
            kind=kind,
            default=default,
            translation_key=data.get("translation_key", ""),
            minimum=data.get("minimum"),
            maximum=data.get("maximum"),
            allowed_values=list(data.get("allowed_values", [])),
        )
        # Store the default in its kind's type ("false" -> False, "10" -> 10)
        try:
            return replace(spec, default=spec.coerce(default))
        except ValueError as e:
            raise RuleCatalogError(f"Rule '{name}' has an invalid default: {e}") from None


class RuleEnumerator(ABC):
    """
    Host-side view of the game rules.
    Implementations must return fresh objects on every call.
    """

    @abstractmethod
    def list_rules(self) -> List[RuleSpec]:
        pass

    def rule_names(self) -> List[str]:
        return [spec.name for spec in self.list_rules()]

    def get_rule(self, name: str) -> Optional[RuleSpec]:
        for spec in self.list_rules():
            if spec.name == name:
                return spec
        return None

    def create_defaults(self) -> Dict[str, RuleValue]:
        """A freshly constructed all-default snapshot (the baseline)."""
        return {spec.name: spec.default for spec in self.list_rules()}

    def describe_rules(self, localizer: Localizer) -> List[RuleDescriptor]:
        return [spec.describe(localizer) for spec in self.list_rules()]


class RuleCatalog(RuleEnumerator):
    """
    An in-memory rule enumerator, optionally loaded from a JSON catalog file:

        [{"name": "doMobSpawning", "kind": "boolean", "default": true}, ...]
    """

    def __init__(self, specs: List[RuleSpec]):
        names = [s.name for s in specs]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise RuleCatalogError(f"Duplicate rule names in catalog: {duplicates}")
        self._specs = list(specs)

    def list_rules(self) -> List[RuleSpec]:
        return list(self._specs)

    @classmethod
    def from_list(cls, data: List[Dict[str, Any]]) -> "RuleCatalog":
        if not isinstance(data, list):
            raise RuleCatalogError("A rule catalog must be a JSON list of rule entries")
        return cls([RuleSpec.from_dict(entry) for entry in data])

    @classmethod
    def from_file(cls, path: Path) -> "RuleCatalog":
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise RuleCatalogError(f"Rule catalog {path} is not valid JSON: {e}") from e
        catalog = cls.from_list(data)
        logger.info(f"Loaded {len(catalog._specs)} rules from {path}")
        return catalog
