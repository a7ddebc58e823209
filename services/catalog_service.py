"""
Catalog store access.

The stock batch service talks to the catalog only through CatalogStore.
CatalogService implements it on top of the Supabase catalog table, where
products and variations share one table.
"""

from typing import Callable, Optional, Protocol
import structlog
from supabase import Client

from config import settings, get_supabase_client, ConnectionError
from models.catalog import CatalogProduct, StockStatus
from exceptions import DatabaseError

logger = structlog.get_logger(__name__)


class CatalogStore(Protocol):
    """Operations the stock core needs from the catalog."""

    def is_available(self) -> bool:
        ...

    def find_product_ids_by_sku(self, sku: str, limit: int) -> list[int]:
        ...

    def get_product(self, product_id: int) -> Optional[CatalogProduct]:
        ...

    def set_manage_stock(self, product_id: int, enabled: bool) -> None:
        ...

    def update_stock(self, product_id: int, qty: int) -> Optional[int]:
        ...

    def update_stock_status(self, product_id: int, status: StockStatus) -> None:
        ...


class CatalogService:
    """
    Supabase-backed catalog.

    The client is fetched lazily so an unconfigured or unreachable database
    shows up as is_available() == False instead of failing at startup.
    """

    def __init__(
        self,
        client_factory: Callable[[], Client] = get_supabase_client,
        table: Optional[str] = None
    ):
        self._client_factory = client_factory
        self.table = table or settings.catalog_table

    @property
    def db(self) -> Client:
        return self._client_factory()

    def is_available(self) -> bool:
        """Check if the catalog database can be reached."""
        try:
            self._client_factory()
            return True
        except ConnectionError as e:
            logger.warning("catalog_unavailable", error=str(e))
            return False

    # ===================
    # READ OPERATIONS
    # ===================

    def find_product_ids_by_sku(self, sku: str, limit: int = 3) -> list[int]:
        """
        Find product/variation IDs whose SKU matches exactly.

        Only fetches up to `limit` rows; the caller just needs to tell
        none / one / many apart.

        Args:
            sku: Exact SKU (case-sensitive)
            limit: Max rows to fetch

        Returns:
            Distinct positive IDs, in query order
        """
        logger.debug("finding_products_by_sku", sku=sku, limit=limit)

        try:
            result = (
                self.db.table(self.table)
                .select("id")
                .eq("sku", sku)
                .limit(limit)
                .execute()
            )
        except Exception as e:
            logger.error("find_products_by_sku_failed", sku=sku, error=str(e))
            raise DatabaseError("select", str(e))

        ids: list[int] = []
        for row in result.data or []:
            try:
                product_id = abs(int(row.get("id")))
            except (TypeError, ValueError):
                continue
            if product_id > 0 and product_id not in ids:
                ids.append(product_id)

        return ids

    def get_product(self, product_id: int) -> Optional[CatalogProduct]:
        """
        Get a product or variation by ID.

        Returns:
            CatalogProduct or None if not found
        """
        logger.debug("getting_catalog_product", product_id=product_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", product_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(
                "get_catalog_product_failed",
                product_id=product_id,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

        if not result.data:
            return None

        return CatalogProduct(**result.data[0])

    # ===================
    # WRITE OPERATIONS
    # ===================

    def set_manage_stock(self, product_id: int, enabled: bool) -> None:
        """Turn stock management on or off for a record."""
        logger.info("setting_manage_stock", product_id=product_id, enabled=enabled)

        try:
            (
                self.db.table(self.table)
                .update({"manage_stock": enabled})
                .eq("id", product_id)
                .execute()
            )
        except Exception as e:
            logger.error(
                "set_manage_stock_failed",
                product_id=product_id,
                error=str(e)
            )
            raise DatabaseError("update", str(e))

    def update_stock(self, product_id: int, qty: int) -> Optional[int]:
        """
        Write an absolute stock quantity.

        Returns:
            The stored quantity, or None if no row was updated
        """
        logger.info("updating_stock", product_id=product_id, qty=qty)

        try:
            result = (
                self.db.table(self.table)
                .update({"stock_quantity": qty})
                .eq("id", product_id)
                .execute()
            )
        except Exception as e:
            logger.error(
                "update_stock_failed",
                product_id=product_id,
                error=str(e)
            )
            raise DatabaseError("update", str(e))

        if not result.data:
            logger.warning("update_stock_no_rows", product_id=product_id)
            return None

        return result.data[0].get("stock_quantity", qty)

    def update_stock_status(self, product_id: int, status: StockStatus) -> None:
        """Set the availability status of a record."""
        status = StockStatus(status)
        logger.info(
            "updating_stock_status",
            product_id=product_id,
            status=status.value
        )

        try:
            (
                self.db.table(self.table)
                .update({"stock_status": status.value})
                .eq("id", product_id)
                .execute()
            )
        except Exception as e:
            logger.error(
                "update_stock_status_failed",
                product_id=product_id,
                error=str(e)
            )
            raise DatabaseError("update", str(e))
