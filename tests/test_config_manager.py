"""Unit tests for configuration loading."""

from pathlib import Path

import pytest

from hashsum.config import (
    ConfigError,
    ConfigManager,
    HashsumConfig,
    resolve_with_precedence,
)


def test_missing_default_file_yields_defaults(home: Path) -> None:
    manager = ConfigManager(env={})

    config = manager.load()

    assert not (home / ".hashsum" / "config.yaml").exists()
    assert config == HashsumConfig()
    assert config.tools.list_command == ["ls", "-1a"]
    assert config.tools.hash_command == ["md5sum"]
    assert config.tools.classify_command == ["file", "-b"]
    assert config.pipeline.chunk_size == 200


def test_precedence_file_then_env_then_cli(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        "pipeline:\n  chunk_size: 64\n  pipe_size_bytes: 65536\nlogging:\n  level: INFO\n",
        encoding="utf-8",
    )
    env = {
        "HASHSUM__PIPELINE__CHUNK_SIZE": "128",
        "HASHSUM__TOOLS__HASH_COMMAND": "[sha256sum]",
        "UNRELATED": "ignored",
    }
    manager = ConfigManager(path, env=env)

    config = manager.load(cli_overrides={"logging.level": "DEBUG"})

    assert config.pipeline.pipe_size_bytes == 65536
    # Environment overrides the file; CLI overrides both.
    assert config.pipeline.chunk_size == 128
    assert config.tools.hash_command == ["sha256sum"]
    assert config.logging.level == "DEBUG"


def test_environment_overrides_use_section_and_field(home: Path) -> None:
    manager = ConfigManager(
        env={
            "HASHSUM__PIPELINE__CHUNK_SIZE": "8",
            "HASHSUM__TOOLS__SUPPRESS_HASH_STDERR": "false",
        }
    )

    config = manager.load()

    assert config.pipeline.chunk_size == 8
    assert config.tools.suppress_hash_stderr is False


def test_environment_override_for_unknown_section_raises(home: Path) -> None:
    manager = ConfigManager(env={"HASHSUM__REPORTING__FORMAT": "json"})

    with pytest.raises(ConfigError, match="Unknown configuration section 'reporting'"):
        manager.load()


def test_explicit_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        ConfigManager(tmp_path / "absent.yaml", env={}).load()


def test_non_mapping_yaml_raises(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("- not-a-mapping", encoding="utf-8")

    with pytest.raises(ConfigError):
        ConfigManager(path, env={}).load()


def test_malformed_yaml_raises(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("tools: [unclosed", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to parse"):
        ConfigManager(path, env={}).load()


def test_unknown_keys_are_rejected() -> None:
    with pytest.raises(ConfigError):
        resolve_with_precedence(defaults=HashsumConfig(), file_overrides={"tools": {"lister": "x"}})


def test_invalid_values_are_rejected() -> None:
    with pytest.raises(ConfigError):
        resolve_with_precedence(
            defaults=HashsumConfig(), file_overrides={"pipeline": {"chunk_size": "lots"}}
        )
    with pytest.raises(ConfigError):
        resolve_with_precedence(
            defaults=HashsumConfig(), cli_overrides={"tools.hash_command": []}
        )


def test_section_override_must_be_a_mapping() -> None:
    with pytest.raises(ConfigError, match="must be a mapping"):
        resolve_with_precedence(
            defaults=HashsumConfig(),
            cli_overrides={"logging": "DEBUG", "logging.level": "DEBUG"},
        )


def test_unknown_file_section_raises() -> None:
    with pytest.raises(ConfigError, match="Unknown configuration section 'llm'"):
        resolve_with_precedence(defaults=HashsumConfig(), file_overrides={"llm": {"model": "x"}})


def test_section_mapping_keeps_unmentioned_fields() -> None:
    config = resolve_with_precedence(
        defaults=HashsumConfig(),
        file_overrides={"tools": {"hash_command": ["sha1sum"]}},
        cli_overrides={"tools.classify_command": ["file", "-b", "-L"]},
    )

    assert config.tools.hash_command == ["sha1sum"]
    assert config.tools.classify_command == ["file", "-b", "-L"]
    assert config.tools.list_command == ["ls", "-1a"]
