import logging
from pathlib import Path
from typing import Optional


class EmojiFormatter(logging.Formatter):
    """
    A log formatter that prefixes each message with an emoji for its level.
    """

    LEVEL_EMOJIS = {
        logging.DEBUG: "🐛",
        logging.INFO: "✅",
        logging.WARNING: "⚠️",
        logging.ERROR: "❌",
        logging.CRITICAL: "💥",
    }

    def format(self, record):
        s = super().format(record)
        emoji = self.LEVEL_EMOJIS.get(record.levelno, "")
        return f"{emoji} {s}"


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.INFO, log_file: Optional[Path] = None):
    """
    Configures the root logger: emoji-prefixed console output, plus a plain
    file log when `log_file` is given (e.g. next to the host's own logs).
    Call once from the entry point; library modules only create named loggers.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Avoid duplicate lines when called more than once
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(EmojiFormatter(LOG_FORMAT))
    root_logger.addHandler(console_handler)

    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(file_handler)
