"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema
from models.catalog import (
    ProductType,
    StockStatus,
    CatalogProduct,
)
from models.stock import (
    StockMode,
    IdentifierType,
    ErrorCode,
    StepFailure,
    Identifier,
    NormalizedInput,
    ValidatedIntent,
    ProductContext,
    StockChange,
    ResultEntry,
    ErrorEntry,
    BatchResponse,
)

__all__ = [
    # Base
    "BaseSchema",

    # Catalog
    "ProductType",
    "StockStatus",
    "CatalogProduct",

    # Stock
    "StockMode",
    "IdentifierType",
    "ErrorCode",
    "StepFailure",
    "Identifier",
    "NormalizedInput",
    "ValidatedIntent",
    "ProductContext",
    "StockChange",
    "ResultEntry",
    "ErrorEntry",
    "BatchResponse",
]
