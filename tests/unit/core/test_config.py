"""Unit tests for configuration loading.

Tests cover:
- YAML deep merge
- Base and environment YAML layering
- Environment variable overrides
- Database DSN assembly
- HOST/PORT and command line shorthands
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from gecko_recipes.core.config import Settings
from gecko_recipes.core.config.settings import DatabaseSettings
from gecko_recipes.core.config.yaml_source import (
    MultiYamlConfigSettingsSource,
    deep_merge,
    find_config_dir,
)


if TYPE_CHECKING:
    from pathlib import Path


pytestmark = pytest.mark.unit


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Create a config tree with one base file and a test override."""
    (tmp_path / "base").mkdir()
    (tmp_path / "base" / "database.yaml").write_text(
        "database:\n  host: base-host\n  port: 5432\n  name: recipes\n"
    )
    (tmp_path / "environments" / "test").mkdir(parents=True)
    (tmp_path / "environments" / "test" / "overrides.yaml").write_text(
        "database:\n  host: test-host\n"
    )
    return tmp_path


class TestDeepMerge:
    """Tests for deep_merge function."""

    def test_merges_nested_dicts(self) -> None:
        """Should keep untouched nested keys."""
        base = {"database": {"host": "a", "port": 1}, "app": {"debug": False}}
        override = {"database": {"host": "b"}}

        assert deep_merge(base, override) == {
            "database": {"host": "b", "port": 1},
            "app": {"debug": False},
        }

    def test_does_not_mutate_base(self) -> None:
        """Should return a new dict."""
        base = {"a": 1}
        deep_merge(base, {"a": 2})

        assert base == {"a": 1}


class TestFindConfigDir:
    """Tests for find_config_dir function."""

    def test_env_var_wins(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """Should use GECKO_CONFIG_DIR when set."""
        monkeypatch.setenv("GECKO_CONFIG_DIR", str(tmp_path))

        assert find_config_dir() == tmp_path


class TestMultiYamlSource:
    """Tests for MultiYamlConfigSettingsSource."""

    def test_environment_overrides_base(
        self, monkeypatch: pytest.MonkeyPatch, config_dir: Path
    ) -> None:
        """Should deep-merge the APP_ENV files over the base files."""
        monkeypatch.setenv("APP_ENV", "test")

        data = MultiYamlConfigSettingsSource(Settings, config_dir=config_dir)()

        assert data["database"] == {
            "host": "test-host",
            "port": 5432,
            "name": "recipes",
        }

    def test_missing_environment_dir(
        self, monkeypatch: pytest.MonkeyPatch, config_dir: Path
    ) -> None:
        """Should fall back to base values for an unknown environment."""
        monkeypatch.setenv("APP_ENV", "staging")

        data = MultiYamlConfigSettingsSource(Settings, config_dir=config_dir)()

        assert data["database"]["host"] == "base-host"


class TestSettings:
    """Tests for the Settings class."""

    def test_loads_yaml(
        self, monkeypatch: pytest.MonkeyPatch, config_dir: Path
    ) -> None:
        """Should read nested sections from YAML."""
        monkeypatch.setenv("GECKO_CONFIG_DIR", str(config_dir))
        monkeypatch.setenv("APP_ENV", "test")

        settings = Settings()

        assert settings.database.host == "test-host"
        assert settings.is_testing

    def test_env_overrides_yaml(
        self, monkeypatch: pytest.MonkeyPatch, config_dir: Path
    ) -> None:
        """Should let DATABASE__HOST override the YAML value."""
        monkeypatch.setenv("GECKO_CONFIG_DIR", str(config_dir))
        monkeypatch.setenv("APP_ENV", "test")
        monkeypatch.setenv("DATABASE__HOST", "env-host")

        assert Settings().database.host == "env-host"

    def test_dsn_from_sections(self) -> None:
        """Should assemble the DSN from the database section and password."""
        settings = Settings(
            DATABASE_URL=None,
            DATABASE_PASSWORD="s3cret",
            database=DatabaseSettings(
                host="db", port=6543, name="recipes", user="gecko"
            ),
        )

        assert settings.database_dsn == "postgresql://gecko:s3cret@db:6543/recipes"

    def test_dsn_without_user(self) -> None:
        """Should omit the auth part when no user is configured."""
        settings = Settings(
            DATABASE_URL=None,
            database=DatabaseSettings(host="db", port=5432, name="recipes"),
        )

        assert settings.database_dsn == "postgresql://db:5432/recipes"

    def test_database_url_wins(self) -> None:
        """Should use DATABASE_URL verbatim when set."""
        settings = Settings(DATABASE_URL="postgresql://elsewhere/db")

        assert settings.database_dsn == "postgresql://elsewhere/db"


class TestBindShorthands:
    """Tests for the HOST/PORT and flag shorthands."""

    def test_host_and_port_env(
        self, monkeypatch: pytest.MonkeyPatch, config_dir: Path
    ) -> None:
        """Should apply HOST and PORT over the server section."""
        monkeypatch.setenv("GECKO_CONFIG_DIR", str(config_dir))
        monkeypatch.setenv("SERVER__HOST", "10.0.0.1")
        monkeypatch.setenv("HOST", "0.0.0.0")
        monkeypatch.setenv("PORT", "9000")

        settings = Settings()

        assert settings.server.host == "0.0.0.0"
        assert settings.server.port == 9000

    def test_server_section_without_shorthands(
        self, monkeypatch: pytest.MonkeyPatch, config_dir: Path
    ) -> None:
        """Should keep server.host and server.port when HOST and PORT are unset."""
        monkeypatch.setenv("GECKO_CONFIG_DIR", str(config_dir))
        monkeypatch.delenv("HOST", raising=False)
        monkeypatch.delenv("PORT", raising=False)
        monkeypatch.setenv("SERVER__PORT", "8181")

        settings = Settings()

        assert settings.server.host == "127.0.0.1"
        assert settings.server.port == 8181

    def test_port_out_of_range(self) -> None:
        """Should reject a port outside 1..65535."""
        with pytest.raises(ValidationError):
            Settings(PORT=70000)

    def test_command_line_flags(
        self, monkeypatch: pytest.MonkeyPatch, config_dir: Path
    ) -> None:
        """Should read --host, --port and --database-url."""
        monkeypatch.setenv("GECKO_CONFIG_DIR", str(config_dir))
        monkeypatch.delenv("HOST", raising=False)
        monkeypatch.delenv("PORT", raising=False)

        settings = Settings(
            _cli_parse_args=[
                "--host",
                "0.0.0.0",
                "--port",
                "9000",
                "--database-url",
                "postgresql://elsewhere/db",
            ],
        )

        assert settings.server.host == "0.0.0.0"
        assert settings.server.port == 9000
        assert settings.database_dsn == "postgresql://elsewhere/db"
