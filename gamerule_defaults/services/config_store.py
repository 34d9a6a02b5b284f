import logging
from pathlib import Path

import json5
from pydantic import ValidationError

from gamerule_defaults.models.mod_config import ModConfig
from gamerule_defaults.utils.files import write_json_atomic

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """The config file exists but cannot be used as-is."""

    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(f"Invalid config file {path}: {message}")


class ConfigStore:
    """
    Loads and saves the config document.
    Reads JSON5 (comments, trailing commas) so hand edits survive; writes
    plain JSON, which every JSON5 reader accepts.

    Usage:
        store = ConfigStore(Path("config/boring_default_game_rules/config.json5"))
        config = store.load()
        config.generate_json_schema = False
        store.save(config)
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> ModConfig:
        """Reads the config, creating it with defaults when absent."""
        if not self.exists():
            logger.info(f"No config found at {self.path}, creating one with defaults")
            config = ModConfig()
            self.try_save(config)
            return config

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json5.load(f)
        except ValueError as e:
            # json5 syntax errors and UnicodeDecodeError
            raise ConfigError(self.path, str(e)) from e

        if not isinstance(raw, dict):
            raise ConfigError(self.path, "the top level must be a JSON object")

        try:
            config = ModConfig.model_validate(raw)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ConfigError(self.path, problems) from e

        logger.debug(
            f"Loaded config from {self.path} ({len(config.default_game_rules)} overrides)"
        )
        return config

    def save(self, config: ModConfig):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        write_json_atomic(self.path, config.to_file_dict())
        logger.debug(f"Saved config to {self.path}")

    def try_save(self, config: ModConfig) -> bool:
        """
        Like save(), but a file-system failure is logged instead of raised.
        The in-memory config stays usable either way.
        """
        try:
            self.save(config)
        except OSError as e:
            logger.error(f"Failed to save config to {self.path}: {e}")
            return False
        return True
