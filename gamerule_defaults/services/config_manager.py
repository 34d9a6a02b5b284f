import logging
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

from gamerule_defaults.core.fingerprint import compute_fingerprint
from gamerule_defaults.core.override_diff import diff_overrides
from gamerule_defaults.host.localization import Localizer
from gamerule_defaults.host.rules import RuleEnumerator
from gamerule_defaults.models.mod_config import ModConfig
from gamerule_defaults.models.rule_descriptor import RuleValue
from gamerule_defaults.services.config_store import ConfigStore
from gamerule_defaults.services.schema_sync import SchemaSynchronizer
from gamerule_defaults.settings import CONFIG_FILE_NAME, SCHEMA_FILE_NAME

logger = logging.getLogger(__name__)

# Receives the effective rules, returns the edited snapshot or None if cancelled.
RuleEditor = Callable[[Dict[str, RuleValue]], Optional[Mapping[str, Any]]]


class ConfigNotInitializedError(RuntimeError):
    pass


class ModConfigManager:
    """
    The configuration context for one process.
    Constructed once at startup, `init()`-ed on the host's initialization
    thread, then passed explicitly to whatever needs it.

    Usage:
        manager = ModConfigManager(config_dir, enumerator, LanguageTable.from_file(lang))
        manager.init()
        rules = manager.effective_rules()
    """

    def __init__(
        self,
        config_dir: Path,
        enumerator: RuleEnumerator,
        localizer: Localizer,
        client_localizer: Optional[Localizer] = None,
    ):
        self.config_dir = Path(config_dir)
        self.enumerator = enumerator
        self.localizer = localizer
        self.client_localizer = client_localizer
        self.store = ConfigStore(self.config_dir / CONFIG_FILE_NAME)
        self.schema_path = self.config_dir / SCHEMA_FILE_NAME

        self._config: Optional[ModConfig] = None
        self._fingerprint: Optional[str] = None
        self._lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def initialized(self) -> bool:
        return self._config is not None

    def _require_init(self):
        if self._config is None:
            raise ConfigNotInitializedError(
                "The mod config manager was used before init() ran! "
                "Something went wrong in the initialization order."
            )

    @property
    def config(self) -> ModConfig:
        self._require_init()
        return self._config

    @property
    def fingerprint(self) -> str:
        if self._fingerprint is None:
            raise ConfigNotInitializedError(
                "The game rules fingerprint was requested before init() ran!"
            )
        return self._fingerprint

    def init(self, client: bool = False, force_schema: bool = False) -> bool:
        """
        Loads (or creates) the config, brings the schema up to date and saves
        the config. `client` selects the client localizer when one was given.
        Returns True if a new schema was written.
        """
        with self._lock:
            config = self.store.load()
            fingerprint = compute_fingerprint(self.enumerator.rule_names())
            logger.debug(f"Current game rules fingerprint: {fingerprint}")

            localizer = self.client_localizer if client and self.client_localizer else self.localizer
            synchronizer = SchemaSynchronizer(
                config, self.schema_path, self.enumerator, localizer
            )
            written = synchronizer.sync(fingerprint, force=force_schema)
            self.store.try_save(config)

            self._config = config
            self._fingerprint = fingerprint

        logger.info(
            f"Config ready: {len(config.default_game_rules)} default game rule overrides"
        )
        return written

    def reload(self) -> ModConfig:
        """Re-reads the config from disk, picking up hand edits."""
        with self._lock:
            self._require_init()
            self._config = self.store.load()
            return self._config

    # -------------------------------------------------------------------------
    # Overrides
    # -------------------------------------------------------------------------

    def update_config(self, live: Optional[Mapping[str, Any]]):
        """
        Replaces the stored overrides with the rules in `live` that differ
        from a freshly built default snapshot, then saves.
        """
        with self._lock:
            config = self.config
            baseline = self.enumerator.create_defaults()
            overrides = diff_overrides(live, baseline)
            config.default_game_rules = overrides
            saved = self.store.try_save(config)
        if saved:
            logger.info(f"Saved {len(overrides)} default game rule overrides")
        else:
            logger.warning(f"Keeping {len(overrides)} default game rule overrides in memory only")

    def reset_defaults(self):
        self.update_config(None)

    def apply_overrides(self, snapshot: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Returns a copy of `snapshot` with the stored overrides applied.
        Overrides for unknown rules, or with values that do not fit the rule,
        are skipped with a warning.
        """
        result = dict(snapshot)
        specs = {spec.name: spec for spec in self.enumerator.list_rules()}

        for name, value in self.config.default_game_rules.items():
            spec = specs.get(name)
            if spec is None:
                logger.warning(f"Ignoring override for unknown game rule '{name}'")
                continue
            try:
                result[name] = spec.coerce(value)
            except ValueError as e:
                logger.warning(f"Ignoring override for game rule '{name}': {e}")
        return result

    def effective_rules(self) -> Dict[str, Any]:
        """The host's defaults with the stored overrides applied."""
        return self.apply_overrides(self.enumerator.create_defaults())

    def edit_defaults(self, editor: RuleEditor) -> bool:
        """
        Reloads the config and hands the effective rules to `editor`.
        If the editor returns a snapshot it becomes the new override set;
        None means the edit was cancelled. Returns True if the config changed.
        """
        self.reload()
        edited = editor(self.effective_rules())
        if edited is None:
            logger.debug("Default game rule edit cancelled")
            return False
        self.update_config(edited)
        return True
