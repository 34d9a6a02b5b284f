from gamerule_defaults.core.fingerprint import compute_fingerprint
from gamerule_defaults.core.override_diff import (
    canonical_value,
    diff_overrides,
    values_equal,
)
from gamerule_defaults.core.schema_builder import SchemaBuilder, build_schema_document

__all__ = [
    "compute_fingerprint",
    "canonical_value",
    "diff_overrides",
    "values_equal",
    "SchemaBuilder",
    "build_schema_document",
]
