"""
Stock mutator.

Writes an absolute quantity to one resolved record and keeps its
availability status in line with the new quantity.
"""

from typing import Union
import structlog

from models.catalog import CatalogProduct, StockStatus
from models.stock import ErrorCode, StepFailure, StockChange
from services.catalog_service import CatalogStore

logger = structlog.get_logger(__name__)


def stock_status_for(qty: int) -> StockStatus:
    """instock for any positive quantity, outofstock for zero."""
    return StockStatus.IN_STOCK if qty > 0 else StockStatus.OUT_OF_STOCK


class StockMutator:
    """Applies "set" operations through the catalog."""

    def __init__(self, catalog: CatalogStore):
        self.catalog = catalog

    def apply(self, product: CatalogProduct, qty: int) -> Union[StockChange, StepFailure]:
        """
        Set the stock of a record to qty.

        Steps:
            1. Read old stock
            2. Enable stock management if needed
            3. Write qty (absolute)
            4. Update stock status from qty
            5. Re-read for the authoritative new stock

        Returns:
            StockChange, or StepFailure(stock_update_failed) if the write
            did not land
        """
        old_stock = product.stock_quantity

        if not product.manage_stock:
            logger.info("enabling_manage_stock", product_id=product.id)
            self.catalog.set_manage_stock(product.id, True)

        updated = self.catalog.update_stock(product.id, qty)
        if updated is None:
            return StepFailure(
                code=ErrorCode.STOCK_UPDATE_FAILED,
                message="Stock update failed for this product."
            )

        self.catalog.update_stock_status(product.id, stock_status_for(qty))

        refreshed = self.catalog.get_product(product.id)
        new_stock = refreshed.stock_quantity if refreshed is not None else qty

        return StockChange(old_stock=old_stock, new_stock=new_stock)
