"""
Unit tests for configuration.

Tests for:
- Environment accessor
- Settings loading and validation
- Database URL assembly
"""

import pytest

from rolekeeper.core.config import (
    DATABASE_POOL_SIZE,
    get_env,
    get_settings,
    load_settings,
)
from rolekeeper.core.errors import ConfigurationError, ErrorCode


# ==================== ENVIRONMENT ACCESSOR TESTS ====================

@pytest.mark.unit
class TestGetEnv:
    """Test the environment accessor."""

    def test_returns_bound_value(self, clean_env):
        """Test a bound variable is returned as-is."""
        clean_env.setenv("DATABASE_HOST", "localhost")

        assert get_env("DATABASE_HOST") == "localhost"

    def test_missing_variable(self, clean_env):
        """Test an unbound variable raises ConfigurationError naming it."""
        with pytest.raises(ConfigurationError) as exc_info:
            get_env("DATABASE_HOST")

        assert str(exc_info.value) == "Missing environment variable: DATABASE_HOST"
        assert exc_info.value.error_code == ErrorCode.MISSING_CONFIGURATION

    def test_empty_value(self, clean_env):
        """Test an empty value counts as missing."""
        clean_env.setenv("DATABASE_HOST", "")

        with pytest.raises(ConfigurationError):
            get_env("DATABASE_HOST")

    @pytest.mark.parametrize("key", [None, ""])
    def test_empty_key(self, key):
        """Test an empty key name is rejected."""
        with pytest.raises(ConfigurationError):
            get_env(key)


# ==================== SETTINGS TESTS ====================

@pytest.mark.unit
class TestLoadSettings:
    """Test settings loading."""

    def test_load_from_environment(self, database_env):
        """Test settings are read from the environment with defaults."""
        settings = load_settings()

        assert settings.database_host == "db.internal"
        assert settings.database_user == "rolekeeper"
        assert settings.database_password == "s3cret"
        assert settings.database_name == "rolekeeper"
        assert settings.database_port == 5432
        assert settings.log_level == "INFO"
        assert DATABASE_POOL_SIZE == 5

    @pytest.mark.parametrize("missing", ["DATABASE_HOST", "DATABASE_USER", "DATABASE_PASSWORD", "DATABASE_NAME"])
    def test_missing_required_variable(self, database_env, missing):
        """Test each required variable is enforced."""
        database_env.delenv(missing)

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings()

        assert missing in str(exc_info.value)

    def test_load_from_env_file(self, clean_env, tmp_path):
        """Test values are picked up from a .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text(
            "DATABASE_HOST=from-file\n"
            "DATABASE_USER=file-user\n"
            "DATABASE_PASSWORD=file-pass\n"
            "DATABASE_NAME=file-db\n"
        )

        settings = load_settings(str(env_file))

        assert settings.database_host == "from-file"
        assert settings.database_name == "file-db"

    def test_environment_overrides_env_file(self, database_env, tmp_path):
        """Test process environment wins over the .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text("DATABASE_HOST=from-file\n")

        settings = load_settings(str(env_file))

        assert settings.database_host == "db.internal"

    def test_invalid_log_level(self, database_env):
        """Test an unknown log level is a configuration error."""
        database_env.setenv("LOG_LEVEL", "chatty")

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings()

        assert exc_info.value.error_code == ErrorCode.INVALID_CONFIGURATION
        assert "LOG_LEVEL" in exc_info.value.details

    def test_invalid_port(self, database_env):
        """Test a non-numeric port is a configuration error."""
        database_env.setenv("DATABASE_PORT", "not-a-port")

        with pytest.raises(ConfigurationError):
            load_settings()

    def test_get_settings_is_cached(self, database_env):
        """Test get_settings returns the same instance."""
        assert get_settings() is get_settings()


@pytest.mark.unit
class TestDatabaseURL:
    """Test database URL assembly."""

    def test_url_from_parts(self, database_env):
        """Test the URL is built from the individual values."""
        settings = load_settings()
        url = settings.database_url

        assert url.drivername == "postgresql+psycopg2"
        assert url.host == "db.internal"
        assert url.port == 5432
        assert url.username == "rolekeeper"
        assert url.database == "rolekeeper"

    def test_password_special_characters(self, database_env):
        """Test passwords with URL metacharacters survive intact."""
        database_env.setenv("DATABASE_PASSWORD", "p@ss:w/rd")

        settings = load_settings()

        assert settings.database_url.password == "p@ss:w/rd"

    def test_safe_url_hides_password(self, database_env):
        """Test the loggable URL masks the password."""
        settings = load_settings()

        assert "s3cret" not in settings.database_url_safe
        assert "***" in settings.database_url_safe

    def test_custom_driver(self, database_env):
        """Test the driver can be switched, e.g. to MariaDB."""
        database_env.setenv("DATABASE_DRIVER", "mysql+pymysql")
        database_env.setenv("DATABASE_PORT", "3306")

        settings = load_settings()

        assert settings.database_url.drivername == "mysql+pymysql"
        assert settings.database_url.port == 3306
