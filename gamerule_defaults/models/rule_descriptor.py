from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

# A rule value as it appears in snapshots and in the persisted config.
RuleValue = Union[bool, int, float, str]

# Natural bounds of the host's 32-bit integer rules; a bound equal to one of
# these means "unbounded".
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


class RuleKind(str, Enum):
    BOOLEAN = "boolean"
    INTEGER = "integer"
    DOUBLE = "double"
    ENUM = "enum"


class RuleDescriptor(BaseModel):
    """
    Everything the schema builder needs to know about one game rule.
    Produced fresh on every synchronization pass and never persisted directly.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Host-assigned unique rule name (e.g. 'doMobSpawning').")
    kind: RuleKind = Field(..., description="Which of the four rule kinds this is.")
    display_name: str = Field(..., description="Localized title of the rule.")
    description: Optional[str] = Field(
        None, description="Localized description, when the host has one."
    )
    default_value: RuleValue = Field(
        ..., description="The host's built-in default for this rule."
    )
    minimum: Optional[Union[int, float]] = Field(
        None, description="Lower bound for 'integer' and 'double' rules. None = unbounded."
    )
    maximum: Optional[Union[int, float]] = Field(
        None, description="Upper bound for 'integer' and 'double' rules. None = unbounded."
    )
    allowed_values: Optional[List[str]] = Field(
        None, description="For 'enum' rules, the ordered canonical value names."
    )

    @model_validator(mode="after")
    def _check_kind_payload(self):
        value = self.default_value
        if self.kind == RuleKind.BOOLEAN and not isinstance(value, bool):
            raise ValueError(f"{self.name}: boolean rules need a boolean default, got {value!r}")
        if self.kind == RuleKind.INTEGER and (isinstance(value, bool) or not isinstance(value, int)):
            raise ValueError(f"{self.name}: integer rules need an integer default, got {value!r}")
        if self.kind == RuleKind.DOUBLE and (
            isinstance(value, bool) or not isinstance(value, (int, float))
        ):
            raise ValueError(f"{self.name}: double rules need a numeric default, got {value!r}")

        if self.kind == RuleKind.INTEGER:
            for bound in (self.minimum, self.maximum):
                if isinstance(bound, float) and not bound.is_integer():
                    raise ValueError(f"{self.name}: integer bounds must be whole numbers, got {bound}")

        if self.kind in (RuleKind.INTEGER, RuleKind.DOUBLE):
            if self.allowed_values is not None:
                raise ValueError(f"{self.name}: allowed_values only applies to enum rules")
            if (
                self.minimum is not None
                and self.maximum is not None
                and self.maximum < self.minimum
            ):
                raise ValueError(f"{self.name}: maximum must be >= minimum")
        else:
            if self.minimum is not None or self.maximum is not None:
                raise ValueError(
                    f"{self.name}: minimum/maximum only apply to integer or double rules"
                )

        if self.kind == RuleKind.ENUM:
            if not self.allowed_values:
                raise ValueError(f"{self.name}: enum rules need a non-empty allowed_values")
            if self.default_value not in self.allowed_values:
                raise ValueError(
                    f"{self.name}: default '{self.default_value}' is not one of {self.allowed_values}"
                )
        return self
