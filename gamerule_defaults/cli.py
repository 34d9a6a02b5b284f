import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from gamerule_defaults.host.localization import LanguageTable
from gamerule_defaults.host.rules import RuleCatalog, RuleCatalogError
from gamerule_defaults.services.config_manager import ModConfigManager
from gamerule_defaults.services.config_store import ConfigError
from gamerule_defaults.settings import get_config_dir
from gamerule_defaults.utils.logger_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sync the default game rules config and its JSON schema with a rule catalog."
    )
    parser.add_argument("--rules", type=Path, required=True, help="JSON rule catalog file")
    parser.add_argument("--lang", type=Path, default=None, help="Language file for rule titles")
    parser.add_argument(
        "--config-dir", type=Path, default=None, help="Directory holding config and schema"
    )
    parser.add_argument(
        "--force-schema", action="store_true", help="Regenerate the schema even if up to date"
    )
    action = parser.add_mutually_exclusive_group()
    action.add_argument(
        "--capture", type=Path, default=None,
        help="JSON snapshot {rule: value}; its differences from the defaults become the overrides",
    )
    action.add_argument("--reset", action="store_true", help="Clear all overrides")
    action.add_argument(
        "--show", action="store_true", help="Print the effective rule values as JSON"
    )
    parser.add_argument("--verbose", action="store_true", help="Log debug output")
    parser.add_argument("--log-file", type=Path, default=None, help="Also write logs to this file")
    return parser


def run(argv: Optional[List[str]] = None, configure_logging: bool = False) -> int:
    args = build_parser().parse_args(argv)
    if configure_logging:
        setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    config_dir = args.config_dir or get_config_dir()

    try:
        enumerator = RuleCatalog.from_file(args.rules)
        localizer = LanguageTable.from_file(args.lang) if args.lang else LanguageTable()
    except (OSError, ValueError) as e:
        # RuleCatalogError is a ValueError
        logger.error(f"Could not load host data: {e}")
        return 1

    manager = ModConfigManager(config_dir, enumerator, localizer)
    try:
        manager.init(force_schema=args.force_schema)

        if args.capture:
            with open(args.capture, "r", encoding="utf-8") as f:
                snapshot = json.load(f)
            if not isinstance(snapshot, dict):
                raise RuleCatalogError(f"Snapshot {args.capture} must be a JSON object")
            manager.update_config(snapshot)
        elif args.reset:
            manager.reset_defaults()
        elif args.show:
            print(json.dumps(manager.effective_rules(), indent=2, sort_keys=True))
    except ConfigError as e:
        logger.error(str(e))
        return 1
    except (OSError, ValueError) as e:
        logger.error(f"Failed: {e}")
        return 1

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Console entry point: reads .env, configures logging, then runs."""
    load_dotenv(find_dotenv(usecwd=True))
    return run(argv, configure_logging=True)
