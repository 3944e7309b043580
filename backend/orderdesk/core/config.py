"""
Centralized application configuration

Settings are read from the environment (and .env) once at startup. The
database part is resolved into an immutable DatabaseConfig that is passed
explicitly to every handler; nothing here is cached at module level.
"""
import json
from typing import Any, Dict, List, Optional

from psycopg2.extensions import parse_dsn
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from orderdesk.core.exceptions import ConfigurationError


class DatabaseConfig(BaseModel):
    """Connection parameters for the relational store (immutable)"""

    host: str
    port: int = 5432
    dbname: str
    user: str
    password: Optional[str] = Field(None, repr=False)
    sslmode: str = "prefer"
    connect_timeout: int = 10

    model_config = ConfigDict(frozen=True)

    def connect_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for psycopg2.connect"""
        kwargs = {
            "host": self.host,
            "port": self.port,
            "dbname": self.dbname,
            "user": self.user,
            "sslmode": self.sslmode,
            "connect_timeout": self.connect_timeout,
        }
        if self.password is not None:
            kwargs["password"] = self.password
        return kwargs


class Settings(BaseSettings):
    """Application settings (environment variables and .env)"""

    # API Settings
    API_TITLE: str = "OrderDesk API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Customers, products and order transactions over PostgreSQL"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "standard"

    # Database - either a full URL, a secret-store JSON document, or discrete fields
    DATABASE_URL: Optional[str] = None
    DB_SECRET: Optional[str] = None
    DB_HOST: Optional[str] = None
    DB_PORT: Optional[int] = None
    DB_NAME: Optional[str] = None
    DB_USER: Optional[str] = None
    DB_PASSWORD: Optional[str] = None
    DB_SSLMODE: str = "prefer"
    DB_CONNECT_TIMEOUT: int = 10

    # Row cap for list handlers
    QUERY_LIMIT: int = 100

    # CORS - Can be string (comma-separated) or JSON array
    # Example: "http://localhost:3000,https://yourdomain.com" or '["http://localhost:3000"]'
    ALLOWED_ORIGINS: Optional[str] = "*"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    def get_allowed_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        if not self.ALLOWED_ORIGINS:
            return ["*"]

        # Try JSON parse first (for array format)
        try:
            origins = json.loads(self.ALLOWED_ORIGINS)
            if isinstance(origins, list):
                return origins
        except (json.JSONDecodeError, ValueError):
            pass

        # Fall back to comma-separated string
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    def _secret_values(self) -> Dict[str, Any]:
        """Parse DB_SECRET ({"host", "port", "dbname", "username", "password"})"""
        if not self.DB_SECRET:
            return {}
        try:
            secret = json.loads(self.DB_SECRET)
        except (json.JSONDecodeError, ValueError) as e:
            raise ConfigurationError("DB_SECRET is not valid JSON") from e
        if not isinstance(secret, dict):
            raise ConfigurationError("DB_SECRET must be a JSON object")

        return {
            "host": secret.get("host"),
            "port": secret.get("port"),
            "dbname": secret.get("dbname") or secret.get("database"),
            "user": secret.get("username") or secret.get("user"),
            "password": secret.get("password"),
        }

    def _url_values(self) -> Dict[str, Any]:
        if not self.DATABASE_URL:
            return {}
        try:
            return parse_dsn(self.DATABASE_URL)
        except Exception as e:
            raise ConfigurationError("DATABASE_URL could not be parsed") from e

    def get_database_config(self) -> DatabaseConfig:
        """
        Resolve connection parameters into an immutable DatabaseConfig

        Precedence (lowest to highest): DATABASE_URL, DB_SECRET, discrete DB_* fields.

        Raises:
            ConfigurationError: if host, database name or user cannot be resolved
        """
        values: Dict[str, Any] = {}
        for source in (self._url_values(), self._secret_values()):
            values.update({k: v for k, v in source.items() if v not in (None, "")})

        explicit = {
            "host": self.DB_HOST,
            "port": self.DB_PORT,
            "dbname": self.DB_NAME,
            "user": self.DB_USER,
            "password": self.DB_PASSWORD,
        }
        values.update({k: v for k, v in explicit.items() if v not in (None, "")})

        missing = [name for name in ("host", "dbname", "user") if not values.get(name)]
        if missing:
            raise ConfigurationError(
                "Database connection is not configured",
                details={"missing": ",".join(missing)},
            )

        return DatabaseConfig(
            host=values["host"],
            port=int(values.get("port") or 5432),
            dbname=values["dbname"],
            user=values["user"],
            password=values.get("password"),
            sslmode=values.get("sslmode") or self.DB_SSLMODE,
            connect_timeout=int(values.get("connect_timeout") or self.DB_CONNECT_TIMEOUT),
        )
