"""
Business logic services.

Each service handles one step of a stock update; StockBatchService ties
them together.
"""

from services.catalog_service import CatalogService, CatalogStore
from services.product_resolver import ProductResolver
from services.stock_mutator import StockMutator, stock_status_for
from services.stock_batch_service import StockBatchService

__all__ = [
    "CatalogService",
    "CatalogStore",
    "ProductResolver",
    "StockMutator",
    "stock_status_for",
    "StockBatchService",
]
