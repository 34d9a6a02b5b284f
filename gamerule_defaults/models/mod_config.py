from typing import Dict, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr

from gamerule_defaults.settings import GENERATE_ME

# Strict types keep `true` a bool and `3` an int instead of letting pydantic
# coerce one into the other.
OverrideValue = Union[StrictBool, StrictInt, StrictFloat, StrictStr]
OverrideMap = Dict[str, OverrideValue]


class ModConfig(BaseModel):
    """The user-facing config file."""

    model_config = ConfigDict(
        populate_by_name=True, extra="forbid", validate_assignment=True
    )

    schema_pointer: str = Field(
        GENERATE_ME,
        alias="$schema",
        description="Path to the JSON schema, or one of the GENERATE_ME sentinels.",
    )
    default_game_rules: OverrideMap = Field(
        default_factory=dict,
        description="Rule name -> value that replaces the host's built-in default.",
    )
    generate_json_schema: bool = Field(
        True, description="Whether a JSON schema for this file should be generated."
    )

    def to_file_dict(self) -> Dict[str, object]:
        """Serialized form, using the on-disk key names."""
        return self.model_dump(by_alias=True)
