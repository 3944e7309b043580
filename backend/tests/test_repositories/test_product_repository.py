"""
Unit tests for ProductRepository

These tests validate repository logic without requiring a database connection.
"""
from decimal import Decimal
from unittest.mock import MagicMock, patch

from orderdesk.domain.product import Product
from orderdesk.repositories.product_repository import ProductRepository


class TestProductRepository:
    """Test ProductRepository methods"""

    @patch('orderdesk.repositories.product_repository.execute')
    def test_find_all_returns_products(self, mock_execute, db_config, product_row):
        """Test find_all returns Product domain models"""
        # Arrange
        mock_execute.return_value = [product_row]

        # Act
        repo = ProductRepository(db_config)
        products = repo.find_all()

        # Assert
        assert len(products) == 1
        assert isinstance(products[0], Product)
        assert products[0].product_id == '00001'
        assert products[0].price == Decimal('89.19')

        config, query, params = mock_execute.call_args.args
        assert config is db_config
        assert "WHERE 1=1" in query
        assert "ORDER BY product_id" in query
        assert params == [100]

    @patch('orderdesk.repositories.product_repository.execute')
    def test_find_all_filters_by_id(self, mock_execute, db_config, product_row):
        mock_execute.return_value = [product_row]

        ProductRepository(db_config).find_all(product_id='00001', limit=25)

        query, params = mock_execute.call_args.args[1:]
        assert "product_id = %s" in query
        assert params == ['00001', 25]

    @patch('orderdesk.repositories.product_repository.execute')
    def test_find_all_returns_empty_list(self, mock_execute, db_config):
        mock_execute.return_value = []

        products = ProductRepository(db_config).find_all(product_id='99999')

        assert products == []

    @patch('orderdesk.repositories.product_repository.execute')
    def test_price_normalized_from_float(self, mock_execute, db_config, product_row):
        """Prices that arrive as float are converted without binary artifacts"""
        product_row['price'] = 19.99
        mock_execute.return_value = [product_row]

        product = ProductRepository(db_config).find_all()[0]

        assert product.price == Decimal('19.99')

    @patch('orderdesk.repositories.product_repository.execute')
    def test_null_description_becomes_empty(self, mock_execute, db_config, product_row):
        product_row['description'] = None
        mock_execute.return_value = [product_row]

        product = ProductRepository(db_config).find_all()[0]

        assert product.description == ""

    def test_exists(self):
        mock_cursor = MagicMock()
        mock_cursor.fetchall.return_value = [{'product_id': '00001'}]

        assert ProductRepository.exists(mock_cursor, '00001') is True
        mock_cursor.execute.assert_called_once_with(
            "SELECT product_id FROM products WHERE product_id = %s", ('00001',)
        )

    def test_exists_false(self):
        mock_cursor = MagicMock()
        mock_cursor.fetchall.return_value = []

        assert ProductRepository.exists(mock_cursor, '99999') is False
