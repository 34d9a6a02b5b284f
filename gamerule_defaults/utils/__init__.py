from gamerule_defaults.utils.files import write_json_atomic
from gamerule_defaults.utils.logger_config import EmojiFormatter, setup_logging

__all__ = [
    "EmojiFormatter",
    "setup_logging",
    "write_json_atomic",
]
