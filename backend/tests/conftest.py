"""
Pytest fixtures and configuration for OrderDesk backend tests

Unit tests never touch a database: `mock_db` patches psycopg2.connect so the
real data access layer (connection scoping, unit of work, error
translation) runs against MagicMock connections and cursors.

Integration tests use TEST_DATABASE_URL and are skipped when it is not set.

Author: TM3
Date: 2026-10-14
"""
import os
from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from dotenv import load_dotenv

from orderdesk.core.config import DatabaseConfig, Settings

# Load environment variables for tests
load_dotenv()


@pytest.fixture
def db_config():
    """DatabaseConfig pointing nowhere; only used with mocked connections"""
    return DatabaseConfig(
        host="localhost",
        port=5432,
        dbname="orderdesk_test",
        user="tester",
        password="secret",
    )


@pytest.fixture
def settings():
    """Settings isolated from the environment and any .env file"""
    return Settings(
        _env_file=None,
        DATABASE_URL=None,
        DB_SECRET=None,
        DB_HOST="localhost",
        DB_NAME="orderdesk_test",
        DB_USER="tester",
        DB_PASSWORD="secret",
        LOG_LEVEL="WARNING",
        ALLOWED_ORIGINS="http://localhost:3000",
    )


@pytest.fixture
def mock_db():
    """
    Patch psycopg2.connect and hand back the fake connection and cursor

    Configure rows with `mock_db.cursor.fetchall.return_value` (or
    side_effect for several statements).
    """
    mock_conn = MagicMock(name="connection")
    mock_cursor = MagicMock(name="cursor")
    mock_conn.cursor.return_value = mock_cursor
    mock_cursor.fetchall.return_value = []

    with patch("orderdesk.core.database.psycopg2.connect", return_value=mock_conn) as mock_connect:
        yield SimpleNamespace(connect=mock_connect, conn=mock_conn, cursor=mock_cursor)


def executed_sql(mock_cursor):
    """List of (sql, params) sent to a mocked cursor"""
    return [
        (c.args[0], c.args[1] if len(c.args) > 1 else c.kwargs.get("vars"))
        for c in mock_cursor.execute.call_args_list
    ]


@pytest.fixture
def customer_row():
    return {
        'customer_id': '00001',
        'name': 'Customer 00001',
        'email': 'customer00001@example.com',
        'phone': '+1-555-137-1271',
        'address': '153 Oak Ave, City 7',
    }


@pytest.fixture
def product_row():
    return {
        'product_id': '00001',
        'name': 'Product 00001',
        'description': 'This is a description for product 00001',
        'price': Decimal('89.19'),
        'category': 'Books',
    }


@pytest.fixture
def order_row():
    return {
        'order_id': '0000001',
        'customer_id': '00001',
        'product_id': '00001',
        'quantity': 2,
        'order_date': date(2026, 10, 1),
        'customer_name': 'Customer 00001',
        'product_name': 'Product 00001',
    }


# ============================================================================
# Integration (real PostgreSQL)
# ============================================================================

@pytest.fixture(scope="session")
def integration_settings():
    """
    Settings for the integration database

    Scope: session. Skips when TEST_DATABASE_URL is not configured.
    """
    url = os.getenv("TEST_DATABASE_URL")
    if not url:
        pytest.skip("TEST_DATABASE_URL not configured")
    return Settings(_env_file=None, DATABASE_URL=url, DB_SECRET=None, LOG_LEVEL="WARNING")


@pytest.fixture(scope="session")
def integration_config(integration_settings):
    return integration_settings.get_database_config()
