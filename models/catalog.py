"""
Catalog record schemas.

Rows come from the catalog table: products and their variations share one
table, distinguished by type.
"""

from pydantic import Field
from typing import Optional
from enum import Enum

from models.base import BaseSchema


class ProductType(str, Enum):
    """Catalog record kinds."""
    SIMPLE = "simple"
    VARIABLE = "variable"
    VARIATION = "variation"
    GROUPED = "grouped"
    EXTERNAL = "external"


class StockStatus(str, Enum):
    """Availability status shown to shoppers."""
    IN_STOCK = "instock"
    OUT_OF_STOCK = "outofstock"
    ON_BACKORDER = "onbackorder"


class CatalogProduct(BaseSchema):
    """
    A product or variation row.

    Variable products group variations and carry no stock of their own.
    """

    id: int = Field(..., gt=0, description="Product or variation ID")
    sku: Optional[str] = Field(None, description="Stock keeping unit")
    type: ProductType = Field(
        default=ProductType.SIMPLE,
        description="Record kind"
    )
    parent_id: Optional[int] = Field(
        None,
        description="Parent product ID for variations"
    )
    manage_stock: bool = Field(
        default=False,
        description="Whether stock_quantity is authoritative"
    )
    stock_quantity: Optional[int] = Field(
        None,
        description="Units on hand (None when stock is not managed)"
    )
    stock_status: StockStatus = Field(
        default=StockStatus.IN_STOCK,
        description="Availability status"
    )

    @property
    def is_variable(self) -> bool:
        """Check if this record is a variable parent."""
        return self.type == ProductType.VARIABLE
