"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest
from typing import Generator

from tests.factories import CatalogProductFactory
from tests.fakes import InMemoryCatalog

# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data: list = None, count: int = None):
        self.data = data or []
        self.count = count if count is not None else len(self.data)


class MockSupabaseQuery:
    """
    Mock Supabase query builder with chainable methods.

    eq() and limit() are applied to the table rows; update() mutates the
    matching rows in place so later selects see the change.
    """

    def __init__(self, table: "MockSupabaseTable"):
        self._table = table
        self._filters = []
        self._limit = None
        self._update = None

    def select(self, *args, **kwargs):
        return self

    def update(self, data):
        self._update = data
        return self

    def eq(self, column, value):
        self._filters.append((column, value))
        return self

    def limit(self, count):
        self._limit = count
        return self

    def _matching(self) -> list:
        return [
            row for row in self._table.rows
            if all(row.get(column) == value for column, value in self._filters)
        ]

    def execute(self) -> MockSupabaseResponse:
        self._table.client.executed.append(
            {"table": self._table.name, "filters": self._filters, "update": self._update, "limit": self._limit}
        )
        if self._table.client.error:
            raise self._table.client.error

        rows = self._matching()

        if self._update is not None:
            for row in rows:
                row.update(self._update)

        if self._limit is not None:
            rows = rows[:self._limit]

        return MockSupabaseResponse(data=[dict(row) for row in rows])


class MockSupabaseTable:
    """Mock Supabase table backed by a list of row dicts."""

    def __init__(self, client: "MockSupabaseClient", name: str, rows: list):
        self.client = client
        self.name = name
        self.rows = rows

    def select(self, *args, **kwargs):
        return MockSupabaseQuery(self).select(*args, **kwargs)

    def update(self, data):
        return MockSupabaseQuery(self).update(data)


class MockSupabaseClient:
    """Mock Supabase client."""

    def __init__(self):
        self._tables = {}
        self.executed = []
        self.error = None

    def set_table_data(self, table_name: str, data: list):
        """Configure rows for a table."""
        self._tables[table_name] = data

    def table(self, name: str) -> MockSupabaseTable:
        """Get mock table."""
        return MockSupabaseTable(self, name, self._tables.setdefault(name, []))


# ===================
# FIXTURES
# ===================

@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("products", [
                {"id": 1, "sku": "AA-1", ...}
            ])
    """
    return MockSupabaseClient()


@pytest.fixture
def catalog() -> InMemoryCatalog:
    """Empty in-memory catalog."""
    return InMemoryCatalog()


@pytest.fixture
def sample_products() -> list:
    """A simple product, a variable parent and one of its variations."""
    return [
        CatalogProductFactory.create(id=42, sku="TILE-42", stock_quantity=10),
        CatalogProductFactory.create_variable(id=100, sku="SHIRT"),
        CatalogProductFactory.create_variation(id=101, parent_id=100, sku="SHIRT-RED", stock_quantity=4),
    ]


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client_with_catalog(catalog) -> Generator:
    """
    FastAPI test client whose batch service uses the in-memory catalog.

    Usage:
        def test_endpoint(test_client_with_catalog, catalog):
            catalog.add(CatalogProductFactory.create(id=1))
            response = test_client_with_catalog.post("/stock-control/v1/stock", json={...})
    """
    from fastapi.testclient import TestClient
    from main import app
    from config import Settings, get_settings
    from routes.stock import get_stock_batch_service
    from services.stock_batch_service import StockBatchService

    service = StockBatchService(catalog=catalog)
    app.dependency_overrides[get_stock_batch_service] = lambda: service
    app.dependency_overrides[get_settings] = lambda: Settings(_env_file=None, debug=True, api_key=None)

    yield TestClient(app)

    app.dependency_overrides.clear()
