"""Static settings and the environment-driven config directory."""

import os
from pathlib import Path

MOD_ID = "boring_default_game_rules"
MOD_NAME = "Boring Default Game Rules"

CONFIG_FILE_NAME = "config.json5"
SCHEMA_FILE_NAME = "config.schema.json"

# Sentinels accepted in the config's "$schema" field
GENERATE_ME = "GENERATE_ME"
GENERATE_ME_MAYBE = "GENERATE_ME_MAYBE"

JSON_SCHEMA_DRAFT = "https://json-schema.org/draft/2020-12/schema"

CONFIG_DIR_ENV = "GAMERULE_DEFAULTS_CONFIG_DIR"
DEFAULT_CONFIG_ROOT = Path("config")


def get_config_dir() -> Path:
    """
    Directory holding both the config file and its schema.
    Reads GAMERULE_DEFAULTS_CONFIG_DIR (a .env file is honoured by the entry point).
    """
    override = os.getenv(CONFIG_DIR_ENV)
    if override:
        return Path(override)
    return DEFAULT_CONFIG_ROOT / MOD_ID
