import json

import pytest

from gamerule_defaults.core.fingerprint import compute_fingerprint
from gamerule_defaults.models.mod_config import ModConfig
from gamerule_defaults.services import schema_sync
from gamerule_defaults.services.schema_sync import SchemaState, SchemaSynchronizer


@pytest.fixture
def schema_path(config_dir):
    return config_dir / "config.schema.json"


@pytest.fixture
def fingerprint(catalog):
    return compute_fingerprint(catalog.rule_names())


@pytest.fixture
def write_calls(monkeypatch):
    calls = []
    real_write = schema_sync.write_json_atomic

    def counting_write(path, data, *args, **kwargs):
        calls.append(path)
        return real_write(path, data, *args, **kwargs)

    monkeypatch.setattr(schema_sync, "write_json_atomic", counting_write)
    return calls


def _synchronizer(config, schema_path, catalog, language):
    return SchemaSynchronizer(config, schema_path, catalog, language)


def test_missing_schema_is_stale_and_gets_written(schema_path, catalog, language, fingerprint, write_calls):
    sync = _synchronizer(ModConfig(), schema_path, catalog, language)
    assert sync.evaluate(fingerprint) == SchemaState.STALE

    assert sync.sync(fingerprint) is True
    assert len(write_calls) == 1
    assert sync.state == SchemaState.UP_TO_DATE

    schema = json.loads(schema_path.read_text(encoding="utf-8"))
    assert schema["gameRulesHash"] == fingerprint
    assert set(schema["properties"]["default_game_rules"]["properties"]) == set(catalog.rule_names())


def test_second_sync_performs_no_write(schema_path, catalog, language, fingerprint, write_calls):
    config = ModConfig()
    assert _synchronizer(config, schema_path, catalog, language).sync(fingerprint) is True
    assert _synchronizer(config, schema_path, catalog, language).sync(fingerprint) is False
    assert _synchronizer(config, schema_path, catalog, language).sync(fingerprint) is False
    assert len(write_calls) == 1


def test_mismatched_fingerprint_overwrites(schema_path, catalog, language, write_calls):
    schema_path.parent.mkdir(parents=True)
    schema_path.write_text(json.dumps({"gameRulesHash": "abc"}), encoding="utf-8")

    sync = _synchronizer(ModConfig(), schema_path, catalog, language)
    assert sync.sync("xyz") is True
    assert len(write_calls) == 1
    assert json.loads(schema_path.read_text(encoding="utf-8"))["gameRulesHash"] == "xyz"


def test_matching_fingerprint_performs_zero_writes(schema_path, catalog, language, write_calls):
    schema_path.parent.mkdir(parents=True)
    schema_path.write_text(json.dumps({"gameRulesHash": "abc"}), encoding="utf-8")

    sync = _synchronizer(ModConfig(), schema_path, catalog, language)
    assert sync.sync("abc") is False
    assert write_calls == []


@pytest.mark.parametrize("content", ["not json", "[]", '{"title": "no hash"}', '{"gameRulesHash": 5}'])
def test_unusable_schema_is_stale(schema_path, catalog, language, content):
    schema_path.parent.mkdir(parents=True)
    schema_path.write_text(content, encoding="utf-8")
    sync = _synchronizer(ModConfig(), schema_path, catalog, language)
    assert sync.evaluate("abc") == SchemaState.STALE


def test_generation_disabled_writes_nothing(schema_path, catalog, language, fingerprint, write_calls):
    config = ModConfig(generate_json_schema=False)
    sync = _synchronizer(config, schema_path, catalog, language)
    assert sync.sync(fingerprint) is False
    assert sync.state == SchemaState.STALE
    assert write_calls == []
    assert not schema_path.exists()


def test_force_regenerates_even_when_up_to_date(schema_path, catalog, language, fingerprint, write_calls):
    config = ModConfig()
    _synchronizer(config, schema_path, catalog, language).sync(fingerprint)
    assert _synchronizer(config, schema_path, catalog, language).sync(fingerprint, force=True) is True
    assert len(write_calls) == 2


def test_generate_me_resolves_to_schema_uri_regardless_of_flag(schema_path, catalog, language, fingerprint):
    config = ModConfig(schema_pointer="GENERATE_ME", generate_json_schema=False)
    sync = _synchronizer(config, schema_path, catalog, language)
    sync.sync(fingerprint)
    assert config.schema_pointer == schema_path.resolve().as_uri()


def test_generate_me_maybe_with_generation_disabled_resolves_to_empty(schema_path, catalog, language, fingerprint):
    config = ModConfig(schema_pointer="GENERATE_ME_MAYBE", generate_json_schema=False)
    _synchronizer(config, schema_path, catalog, language).sync(fingerprint)
    assert config.schema_pointer == ""


def test_generate_me_maybe_with_generation_enabled_resolves_to_uri(schema_path, catalog, language, fingerprint):
    config = ModConfig(schema_pointer="GENERATE_ME_MAYBE")
    _synchronizer(config, schema_path, catalog, language).sync(fingerprint)
    assert config.schema_pointer == schema_path.resolve().as_uri()


def test_resolved_pointer_is_never_rewritten(schema_path, catalog, language):
    config = ModConfig(schema_pointer="file:///somewhere/else.json")
    sync = _synchronizer(config, schema_path, catalog, language)
    assert sync.resolve_schema_pointer() is False
    assert config.schema_pointer == "file:///somewhere/else.json"


def test_write_failure_is_logged_and_swallowed(schema_path, catalog, language, fingerprint, monkeypatch, caplog):
    def failing_write(path, data, *args, **kwargs):
        raise PermissionError("read-only file system")

    monkeypatch.setattr(schema_sync, "write_json_atomic", failing_write)
    sync = _synchronizer(ModConfig(), schema_path, catalog, language)

    assert sync.sync(fingerprint) is False
    assert sync.state == SchemaState.STALE
    assert "Failed to write schema" in caplog.text


def test_directory_creation_failure_keeps_existing_state(tmp_path, catalog, language, fingerprint, caplog):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("", encoding="utf-8")
    schema_path = blocker / "config.schema.json"

    sync = _synchronizer(ModConfig(), schema_path, catalog, language)
    assert sync.sync(fingerprint) is False
    assert blocker.read_text(encoding="utf-8") == ""


def test_schema_uses_localized_titles(schema_path, catalog, language, fingerprint):
    _synchronizer(ModConfig(), schema_path, catalog, language).sync(fingerprint)
    rules = json.loads(schema_path.read_text(encoding="utf-8"))["properties"]["default_game_rules"]["properties"]
    assert rules["doMobSpawning"]["title"] == "Spawn mobs"
    assert rules["doMobSpawning"]["description"] == "Some entities might have separate rules"
    assert "description" not in rules["randomTickSpeed"]
    # No translation: the key itself is used
    assert rules["cartBehaviour"]["title"] == "gamerule.cartBehaviour"


def test_undecodable_schema_is_stale_and_regenerated(schema_path, catalog, language, fingerprint):
    schema_path.parent.mkdir(parents=True)
    schema_path.write_bytes(b'{"gameRulesHash": "\xff\xfe"}')

    sync = _synchronizer(ModConfig(), schema_path, catalog, language)
    assert sync.evaluate(fingerprint) == SchemaState.STALE
    assert sync.sync(fingerprint) is True
    assert json.loads(schema_path.read_text(encoding="utf-8"))["gameRulesHash"] == fingerprint
