import pytest

from gamerule_defaults.host.localization import LanguageTable
from gamerule_defaults.host.rules import RuleCatalog, RuleSpec
from gamerule_defaults.models.rule_descriptor import INT_MAX, INT_MIN, RuleKind
from gamerule_defaults.services.config_manager import ModConfigManager


@pytest.fixture
def rule_specs():
    return [
        RuleSpec(name="doMobSpawning", kind=RuleKind.BOOLEAN, default=True),
        RuleSpec(
            name="randomTickSpeed",
            kind=RuleKind.INTEGER,
            default=3,
            minimum=INT_MIN,
            maximum=INT_MAX,
        ),
        RuleSpec(
            name="playersSleepingPercentage",
            kind=RuleKind.INTEGER,
            default=100,
            minimum=0,
            maximum=100,
        ),
        RuleSpec(
            name="minecartMaxSpeed",
            kind=RuleKind.DOUBLE,
            default=8.0,
            minimum=0.1,
            maximum=float("inf"),
        ),
        RuleSpec(
            name="cartBehaviour",
            kind=RuleKind.ENUM,
            default="VANILLA",
            allowed_values=["VANILLA", "EXPERIMENTAL", "DISABLED"],
        ),
    ]


@pytest.fixture
def catalog(rule_specs):
    return RuleCatalog(rule_specs)


@pytest.fixture
def language():
    return LanguageTable(
        {
            "gamerule.doMobSpawning": "Spawn mobs",
            "gamerule.doMobSpawning.description": "Some entities might have separate rules",
            "gamerule.randomTickSpeed": "Random tick speed rate",
        }
    )


@pytest.fixture
def config_dir(tmp_path):
    return tmp_path / "config" / "boring_default_game_rules"


@pytest.fixture
def manager(config_dir, catalog, language):
    return ModConfigManager(config_dir, catalog, language)
