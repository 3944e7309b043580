"""
Unit tests for Settings and DatabaseConfig resolution
"""
import json

import pytest
from pydantic import ValidationError as PydanticValidationError

from orderdesk.core.config import DatabaseConfig, Settings
from orderdesk.core.exceptions import ConfigurationError


def make_settings(**overrides):
    """Settings with every database source unset unless overridden"""
    values = {
        "_env_file": None,
        "DATABASE_URL": None,
        "DB_SECRET": None,
        "DB_HOST": None,
        "DB_PORT": None,
        "DB_NAME": None,
        "DB_USER": None,
        "DB_PASSWORD": None,
    }
    values.update(overrides)
    return Settings(**values)


class TestDatabaseConfigResolution:
    """Test get_database_config() precedence and validation"""

    def test_discrete_fields(self):
        settings = make_settings(DB_HOST="db.internal", DB_NAME="orders", DB_USER="app", DB_PASSWORD="pw")

        config = settings.get_database_config()

        assert config.host == "db.internal"
        assert config.port == 5432
        assert config.dbname == "orders"
        assert config.user == "app"
        assert config.password == "pw"
        assert config.sslmode == "prefer"
        assert config.connect_timeout == 10

    def test_database_url(self):
        settings = make_settings(DATABASE_URL="postgresql://app:pw@db.internal:5433/orders?sslmode=require")

        config = settings.get_database_config()

        assert config.host == "db.internal"
        assert config.port == 5433
        assert config.dbname == "orders"
        assert config.user == "app"
        assert config.password == "pw"
        assert config.sslmode == "require"

    def test_secret_document_uses_username_key(self):
        secret = json.dumps({
            "host": "cluster.example.com",
            "port": 5432,
            "dbname": "orderdesk",
            "username": "admin",
            "password": "s3cret",
        })
        settings = make_settings(DB_SECRET=secret)

        config = settings.get_database_config()

        assert config.host == "cluster.example.com"
        assert config.user == "admin"
        assert config.password == "s3cret"

    def test_explicit_fields_override_secret_and_url(self):
        settings = make_settings(
            DATABASE_URL="postgresql://url_user:pw@url-host:5432/url_db",
            DB_SECRET=json.dumps({"host": "secret-host", "dbname": "secret_db", "username": "secret_user"}),
            DB_HOST="explicit-host",
        )

        config = settings.get_database_config()

        assert config.host == "explicit-host"
        assert config.dbname == "secret_db"
        assert config.user == "secret_user"
        assert config.password == "pw"

    def test_missing_connection_parameters(self):
        settings = make_settings(DB_HOST="localhost")

        with pytest.raises(ConfigurationError) as exc_info:
            settings.get_database_config()

        assert exc_info.value.details == {"missing": "dbname,user"}

    def test_invalid_secret_json(self):
        settings = make_settings(DB_SECRET="{not json")

        with pytest.raises(ConfigurationError, match="DB_SECRET is not valid JSON"):
            settings.get_database_config()

    def test_secret_must_be_object(self):
        settings = make_settings(DB_SECRET='["host"]')

        with pytest.raises(ConfigurationError, match="JSON object"):
            settings.get_database_config()


class TestDatabaseConfig:
    """Test the immutable connection parameters"""

    def test_is_immutable(self, db_config):
        with pytest.raises(PydanticValidationError):
            db_config.host = "elsewhere"

    def test_password_hidden_from_repr(self, db_config):
        assert "secret" not in repr(db_config)

    def test_connect_kwargs_without_password(self):
        config = DatabaseConfig(host="localhost", dbname="orders", user="app")

        kwargs = config.connect_kwargs()

        assert "password" not in kwargs
        assert kwargs["connect_timeout"] == 10
        assert kwargs["sslmode"] == "prefer"


class TestAllowedOrigins:

    def test_comma_separated(self):
        settings = make_settings(ALLOWED_ORIGINS="http://localhost:3000, https://orders.example.com")
        assert settings.get_allowed_origins() == ["http://localhost:3000", "https://orders.example.com"]

    def test_json_array(self):
        settings = make_settings(ALLOWED_ORIGINS='["http://localhost:3000"]')
        assert settings.get_allowed_origins() == ["http://localhost:3000"]

    def test_default_allows_all(self):
        settings = make_settings(ALLOWED_ORIGINS="")
        assert settings.get_allowed_origins() == ["*"]
