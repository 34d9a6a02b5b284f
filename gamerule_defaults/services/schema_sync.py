"""
Schema Synchronizer
===================
Keeps the generated JSON schema in step with the host's rule set.

The persisted schema stores the fingerprint of the rule names it was built
from (`gameRulesHash`). On every pass the stored value is compared with a
freshly computed one; on mismatch, or when the file is missing or unreadable,
the schema is rebuilt and written in full. Schema generation is a convenience,
so I/O failures are logged and never propagated to the host.
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Optional

from gamerule_defaults.core.schema_builder import SchemaBuilder
from gamerule_defaults.host.localization import Localizer
from gamerule_defaults.host.rules import RuleEnumerator
from gamerule_defaults.models.mod_config import ModConfig
from gamerule_defaults.settings import GENERATE_ME, GENERATE_ME_MAYBE
from gamerule_defaults.utils.files import write_json_atomic

logger = logging.getLogger(__name__)

FINGERPRINT_KEY = "gameRulesHash"


class SchemaState(str, Enum):
    UP_TO_DATE = "up_to_date"
    STALE = "stale"


class SchemaSynchronizer:
    def __init__(
        self,
        config: ModConfig,
        schema_path: Path,
        enumerator: RuleEnumerator,
        localizer: Localizer,
        builder: Optional[SchemaBuilder] = None,
    ):
        self.config = config
        self.schema_path = Path(schema_path)
        self.enumerator = enumerator
        self.localizer = localizer
        self.builder = builder or SchemaBuilder()
        self.state: Optional[SchemaState] = None

    @property
    def schema_uri(self) -> str:
        """Canonical URI of the on-disk schema."""
        return self.schema_path.resolve().as_uri()

    def read_stored_fingerprint(self) -> Optional[str]:
        """Fingerprint recorded in the persisted schema, or None if unavailable."""
        if not self.schema_path.is_file():
            return None
        try:
            with open(self.schema_path, "r", encoding="utf-8") as f:
                schema = json.load(f)
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError are both ValueErrors
            logger.warning(f"Schema at {self.schema_path} is not valid JSON ({e}), treating it as stale")
            return None
        except OSError as e:
            logger.error(f"Failed to read schema at {self.schema_path}: {e}")
            return None

        stored = schema.get(FINGERPRINT_KEY) if isinstance(schema, dict) else None
        if not isinstance(stored, str):
            logger.warning(f"Schema at {self.schema_path} has no '{FINGERPRINT_KEY}', treating it as stale")
            return None
        return stored

    def evaluate(self, fingerprint: str) -> SchemaState:
        stored = self.read_stored_fingerprint()
        if stored is None:
            self.state = SchemaState.STALE
        elif stored != fingerprint:
            logger.info(
                "The loaded set of game rules doesn't match the current schema's ones! "
                "This schema will be regenerated."
            )
            self.state = SchemaState.STALE
        else:
            self.state = SchemaState.UP_TO_DATE
        return self.state

    def resolve_schema_pointer(self) -> bool:
        """
        Replaces a GENERATE_ME sentinel in the config's "$schema" field.
        Any other value is left alone. Returns True if the pointer changed.
        """
        pointer = self.config.schema_pointer
        if pointer == GENERATE_ME:
            resolved = self.schema_uri
        elif pointer == GENERATE_ME_MAYBE:
            resolved = self.schema_uri if self.config.generate_json_schema else ""
        else:
            return False

        self.config.schema_pointer = resolved
        logger.debug(f"Resolved schema pointer {pointer} -> '{resolved}'")
        return True

    def sync(self, fingerprint: str, force: bool = False) -> bool:
        """
        Runs one synchronization pass. Returns True if a new schema was written.
        """
        state = self.evaluate(fingerprint)
        self.resolve_schema_pointer()

        if not self.config.generate_json_schema and not force:
            logger.debug(f"Schema generation disabled (schema is {state.value}), skipping")
            return False

        if state == SchemaState.UP_TO_DATE and not force:
            logger.debug("Schema is up to date")
            return False

        return self.regenerate(fingerprint)

    def regenerate(self, fingerprint: str) -> bool:
        schema_dir = self.schema_path.parent
        try:
            if not schema_dir.is_dir():
                logger.info("A folder for saving the schema hasn't been found! Creating one...")
                schema_dir.mkdir(parents=True, exist_ok=True)

            logger.info("Generating a new JSON schema...")
            rules = self.enumerator.describe_rules(self.localizer)
            document = self.builder.build(fingerprint, rules)
            write_json_atomic(self.schema_path, document)
        except OSError as e:
            logger.error(f"Failed to write schema to {self.schema_path}: {e}", exc_info=True)
            return False

        self.state = SchemaState.UP_TO_DATE
        logger.info(f"Wrote schema for {len(rules)} game rules to {self.schema_path}")
        return True
