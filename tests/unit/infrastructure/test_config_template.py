"""Tests for configuration template substitution and loading."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from user_manager.runtime.config.config_template import (
    apply_environment_overrides,
    load_env_file,
    load_templated_yaml,
    substitute_env_vars,
)
from user_manager.runtime.context import load_default_config


class TestSubstituteEnvVars:
    """Test cases for substitute_env_vars function."""

    def test_substitute_simple_var(self):
        with patch.dict(os.environ, {"DB_NAME": "users"}):
            assert substitute_env_vars("name: ${DB_NAME}") == "name: users"

    def test_substitute_with_default_when_unset(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("port: ${APP_PORT:-8080}") == "port: 8080"

    def test_environment_value_wins_over_default(self):
        with patch.dict(os.environ, {"APP_PORT": "9000"}):
            assert substitute_env_vars("port: ${APP_PORT:-8080}") == "port: 9000"

    def test_empty_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("file: ${LOG_FILE:-}") == "file: "

    def test_missing_required_var(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="DB_PASSWORD not set"):
                substitute_env_vars("password: ${DB_PASSWORD}")

    def test_missing_var_with_custom_message(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="set a password"):
                substitute_env_vars("password: ${DB_PASSWORD:?set a password}")

    def test_multiple_placeholders(self):
        with patch.dict(os.environ, {"APP_HOST": "0.0.0.0"}, clear=True):
            text = "${APP_HOST}:${APP_PORT:-8080}"
            assert substitute_env_vars(text) == "0.0.0.0:8080"

    def test_text_without_placeholders_unchanged(self):
        assert substitute_env_vars("plain: value") == "plain: value"


class TestApplyEnvironmentOverrides:
    def test_prefixed_variables_are_copied(self):
        with patch.dict(
            os.environ, {"PRODUCTION_DATABASE_URL": "postgresql://db/users"}, clear=True
        ):
            overridden = apply_environment_overrides("production")

            assert overridden == ["DATABASE_URL"]
            assert os.environ["DATABASE_URL"] == "postgresql://db/users"

    def test_other_environments_are_ignored(self):
        with patch.dict(os.environ, {"TEST_LOG_LEVEL": "DEBUG"}, clear=True):
            assert apply_environment_overrides("production") == []
            assert "LOG_LEVEL" not in os.environ


class TestLoadTemplatedYaml:
    """Test cases for load_templated_yaml function."""

    @pytest.fixture
    def sample_yaml_content(self) -> str:
        return """
config:
  app:
    environment: ${APP_ENVIRONMENT:-development}
    host: ${APP_HOST:-localhost}
    port: ${APP_PORT:-8080}
  logging:
    level: ${LOG_LEVEL:-INFO}
    file: ${LOG_FILE:-}
  database:
    url: ${DATABASE_URL:-sqlite:///./users.db}
    create_tables: ${DB_CREATE_TABLES:-true}
"""

    @pytest.fixture
    def config_file(self, tmp_path: Path, sample_yaml_content: str) -> Path:
        path = tmp_path / "config.yaml"
        path.write_text(sample_yaml_content)
        return path

    def test_load_templated_yaml_success(self, config_file: Path, tmp_path: Path):
        env_vars = {"APP_ENVIRONMENT": "test", "APP_PORT": "9000", "DB_CREATE_TABLES": "false"}

        with patch.dict(os.environ, env_vars, clear=True):
            config = load_templated_yaml(config_file, env_file=tmp_path / "missing.env")

        assert config.app.environment == "test"
        assert config.app.host == "localhost"
        assert config.app.port == 9000
        assert config.logging.file is None
        assert config.database.url == "sqlite:///./users.db"
        assert config.database.create_tables is False

    def test_env_file_is_loaded(self, config_file: Path, tmp_path: Path):
        env_file = tmp_path / ".env"
        env_file.write_text("DATABASE_URL=sqlite:///./from-dotenv.db\nLOG_LEVEL=DEBUG\n")

        with patch.dict(os.environ, {"LOG_LEVEL": "WARNING"}, clear=True):
            config = load_templated_yaml(config_file, env_file=env_file)

        assert config.database.url == "sqlite:///./from-dotenv.db"
        # Variables already set in the process environment are kept
        assert config.logging.level == "WARNING"

    def test_environment_prefixed_override(self, config_file: Path):
        env_vars = {
            "APP_ENVIRONMENT": "production",
            "PRODUCTION_DATABASE_URL": "postgresql://app:secret@db:5432/users",
        }

        with patch.dict(os.environ, env_vars, clear=True):
            config = load_templated_yaml(config_file, env_file=None)

        assert config.app.environment == "production"
        assert config.database.backend == "postgresql"

    def test_file_not_found(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_templated_yaml(tmp_path / "nope.yaml", env_file=None)

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("config:\n  app: [unclosed\n")

        with pytest.raises(ValueError, match="Error parsing YAML"):
            load_templated_yaml(path, env_file=None)

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        with pytest.raises(ValueError, match="Failed to parse YAML"):
            load_templated_yaml(path, env_file=None)

    def test_missing_config_section_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("other: value\n")

        with patch.dict(os.environ, {}, clear=True):
            config = load_templated_yaml(path, env_file=None)

        assert config.app.port == 8080
        assert config.database.url == "sqlite:///./users.db"

    def test_invalid_structure(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("config:\n  app:\n    port: not-a-number\n")

        with pytest.raises(ValueError, match="Invalid configuration"):
            load_templated_yaml(path, env_file=None)

    def test_missing_database_parts(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("config:\n  database:\n    url: ''\n    host: localhost\n")

        with pytest.raises(ValueError, match="user, password, name"):
            load_templated_yaml(path, env_file=None)

    def test_placeholders_in_comments_are_ignored(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "# ${UNDOCUMENTED_VAR} is only mentioned here\n"
            "config:\n"
            "  app:\n"
            "    # port: ${ANOTHER_UNSET_VAR}\n"
            "    port: ${APP_PORT:-8080}\n"
        )

        with patch.dict(os.environ, {}, clear=True):
            config = load_templated_yaml(path, env_file=None)

        assert config.app.port == 8080


PROJECT_ROOT = Path(__file__).resolve().parents[3]


class TestShippedConfiguration:
    """The config.yaml at the project root loads without any environment."""

    def test_loads_with_clean_environment(self):
        with patch.dict(os.environ, {}, clear=True):
            config = load_templated_yaml(PROJECT_ROOT / "config.yaml", env_file=None)

        assert config.app.environment == "development"
        assert config.app.port == 8080
        assert config.database.url == "sqlite:///./users.db"
        assert config.database.create_tables is True
        assert config.logging.file is None

    def test_load_default_config_reads_shipped_file(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        with patch.dict(
            os.environ, {"APP_CONFIG_FILE": str(PROJECT_ROOT / "config.yaml")}, clear=True
        ):
            config = load_default_config()

        assert config.database.backend == "sqlite"
        assert config.app.port == 8080


class TestLoadDefaultConfig:
    def test_env_file_is_loaded_before_locating_config(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "custom.yaml").write_text(
            "config:\n  app:\n    port: ${APP_PORT:-8080}\n"
        )
        (tmp_path / ".env").write_text("APP_CONFIG_FILE=custom.yaml\nAPP_PORT=9191\n")

        with patch.dict(os.environ, {}, clear=True):
            config = load_default_config()

        assert config.app.port == 9191

    def test_env_file_is_loaded_without_config_file(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".env").write_text("DATABASE_URL=sqlite://\n")

        with patch.dict(os.environ, {}, clear=True):
            config = load_default_config()
            assert os.environ["DATABASE_URL"] == "sqlite://"

        # Defaults, since no config file exists
        assert config.database.url == "sqlite:///./users.db"

    def test_load_env_file_missing(self, tmp_path: Path):
        assert load_env_file(tmp_path / ".env") is False
        assert load_env_file(None) is False
