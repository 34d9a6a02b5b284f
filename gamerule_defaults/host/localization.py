import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


class Localizer(ABC):
    """Supplies display strings for translation keys."""

    @abstractmethod
    def has_translation(self, key: str) -> bool:
        pass

    @abstractmethod
    def translate(self, key: str) -> str:
        """Returns the text for `key`, or the key itself when there is none."""
        pass


class LanguageTable(Localizer):
    """
    Server-side localizer backed by a flat language file
    ({"gamerule.doMobSpawning": "Spawn mobs", ...}).
    """

    def __init__(self, entries: Optional[Dict[str, str]] = None):
        self.entries: Dict[str, str] = dict(entries or {})

    def has_translation(self, key: str) -> bool:
        return key in self.entries

    def translate(self, key: str) -> str:
        return self.entries.get(key, key)

    @classmethod
    def from_file(cls, path: Path) -> "LanguageTable":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Language file {path} must be a JSON object")
        entries = {str(k): str(v) for k, v in data.items()}
        logger.debug(f"Loaded {len(entries)} translations from {path}")
        return cls(entries)


class CallbackLocalizer(Localizer):
    """
    Client-side localizer that delegates to the host's UI text system.
    The host passes its own lookup functions.
    """

    def __init__(self, translate: Callable[[str], str], has_translation: Callable[[str], bool]):
        self._translate = translate
        self._has_translation = has_translation

    def has_translation(self, key: str) -> bool:
        return self._has_translation(key)

    def translate(self, key: str) -> str:
        return self._translate(key)
