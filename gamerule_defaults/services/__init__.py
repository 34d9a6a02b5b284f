from gamerule_defaults.services.config_manager import (
    ConfigNotInitializedError,
    ModConfigManager,
    RuleEditor,
)
from gamerule_defaults.services.config_store import ConfigError, ConfigStore
from gamerule_defaults.services.schema_sync import SchemaState, SchemaSynchronizer

__all__ = [
    "ConfigNotInitializedError",
    "ModConfigManager",
    "RuleEditor",
    "ConfigError",
    "ConfigStore",
    "SchemaState",
    "SchemaSynchronizer",
]
