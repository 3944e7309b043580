"""
Unit tests for schema bootstrap and seed scripts
"""
from pathlib import Path
from unittest.mock import MagicMock, patch

import psycopg2
import pytest
from sqlalchemy.exc import OperationalError as SAOperationalError

from orderdesk.core.database import Base
from orderdesk.core.exceptions import ConnectivityError, QueryError
from orderdesk.core.schema import create_schema, run_sql_files, run_sql_script

SEED_FILE = Path(__file__).resolve().parents[2] / "sql" / "seed_data.sql"


class TestSeedScripts:

    def test_script_runs_as_one_batch(self, mock_db, db_config):
        script = (
            "INSERT INTO customers VALUES ('00001', 'Ann', 'ann@example.com', NULL, NULL);\n"
            "INSERT INTO products VALUES ('00001', 'Lamp', '', 10.00, 'Home');\n"
        )
        mock_db.cursor.description = None

        run_sql_script(db_config, script)

        mock_db.cursor.execute.assert_called_once_with(script, None)
        mock_db.conn.commit.assert_called_once()

    def test_failing_script_is_rolled_back(self, mock_db, db_config):
        mock_db.cursor.execute.side_effect = psycopg2.ProgrammingError("syntax error at or near \"INSRT\"")

        with pytest.raises(QueryError):
            run_sql_script(db_config, "INSRT INTO customers VALUES (1);")

        mock_db.conn.commit.assert_not_called()
        mock_db.conn.rollback.assert_called_once()

    def test_empty_script_is_skipped(self, mock_db, db_config):
        run_sql_script(db_config, "   \n")

        mock_db.connect.assert_not_called()

    def test_run_sql_files(self, tmp_path, db_config):
        first = tmp_path / "01.sql"
        second = tmp_path / "02.sql"
        first.write_text("SELECT 1;")
        second.write_text("SELECT 2;")

        with patch("orderdesk.core.schema.run_sql_script") as mock_run:
            count = run_sql_files(db_config, [first, second])

        assert count == 2
        assert [c.args[1] for c in mock_run.call_args_list] == ["SELECT 1;", "SELECT 2;"]

    def test_bundled_seed_file_covers_all_tables(self):
        text = SEED_FILE.read_text(encoding="utf-8")

        assert "INSERT INTO customers" in text
        assert "INSERT INTO products" in text
        assert "INSERT INTO orders" in text


class TestCreateSchema:

    def test_registers_all_tables(self, db_config):
        mock_engine = MagicMock()

        with patch("orderdesk.core.schema.create_engine_for", return_value=mock_engine), \
                patch.object(type(Base.metadata), "create_all") as mock_create_all:
            create_schema(db_config)

        mock_create_all.assert_called_once_with(mock_engine)
        assert {"customers", "products", "orders"} <= set(Base.metadata.tables)
        mock_engine.dispose.assert_called_once()

    def test_connection_failure_is_translated(self, db_config):
        mock_engine = MagicMock()
        driver_error = psycopg2.OperationalError("Connection refused")
        failure = SAOperationalError("CREATE TABLE customers", {}, driver_error)

        with patch("orderdesk.core.schema.create_engine_for", return_value=mock_engine), \
                patch.object(type(Base.metadata), "create_all", side_effect=failure):
            with pytest.raises(ConnectivityError):
                create_schema(db_config)

        mock_engine.dispose.assert_called_once()
