"""
Test data factories.

Uses factory pattern to generate consistent catalog rows and request items.
"""

from typing import Optional


class CatalogProductFactory:
    """
    Factory for creating catalog row dicts.

    Usage:
        # Create with defaults
        product = CatalogProductFactory.create()

        # Create with overrides
        product = CatalogProductFactory.create(sku="AA-1", stock_quantity=3)

        # Create multiple
        products = CatalogProductFactory.create_batch(5)
    """

    _counter = 1000

    @classmethod
    def _next_counter(cls) -> int:
        cls._counter += 1
        return cls._counter

    @classmethod
    def create(
        cls,
        id: Optional[int] = None,
        sku: Optional[str] = None,
        type: str = "simple",
        parent_id: Optional[int] = None,
        manage_stock: bool = True,
        stock_quantity: Optional[int] = 0,
        stock_status: Optional[str] = None
    ) -> dict:
        """
        Create a single catalog row.

        Args:
            id: Product ID (auto-generated if not provided)
            sku: SKU (auto-generated if not provided)
            type: simple, variable, variation, grouped or external
            parent_id: Parent ID for variations
            manage_stock: Whether stock is managed
            stock_quantity: Units on hand
            stock_status: instock / outofstock (derived from quantity if not provided)

        Returns:
            Row dict matching the catalog table
        """
        counter = cls._next_counter()

        if stock_status is None:
            stock_status = "instock" if (stock_quantity or 0) > 0 else "outofstock"

        return {
            "id": id or counter,
            "sku": sku if sku is not None else f"SKU-{counter}",
            "type": type,
            "parent_id": parent_id,
            "manage_stock": manage_stock,
            "stock_quantity": stock_quantity,
            "stock_status": stock_status,
        }

    @classmethod
    def create_batch(cls, count: int, **overrides) -> list:
        """Create multiple rows with unique IDs and SKUs."""
        return [cls.create(**overrides) for _ in range(count)]

    @classmethod
    def create_variable(cls, **overrides) -> dict:
        """Variable parent: groups variations, no stock of its own."""
        overrides.setdefault("manage_stock", False)
        overrides.setdefault("stock_quantity", None)
        return cls.create(type="variable", **overrides)

    @classmethod
    def create_variation(cls, parent_id: int, **overrides) -> dict:
        """Variation of a variable parent."""
        return cls.create(type="variation", parent_id=parent_id, **overrides)

    @classmethod
    def create_unmanaged(cls, **overrides) -> dict:
        """Simple product that does not track stock yet."""
        overrides.setdefault("stock_quantity", None)
        overrides.setdefault("stock_status", "instock")
        return cls.create(manage_stock=False, **overrides)


class StockItemFactory:
    """Factory for request items."""

    @staticmethod
    def by_sku(sku: str, qty=1, **extra) -> dict:
        return {"sku": sku, "qty": qty, **extra}

    @staticmethod
    def by_id(product_id, qty=1, **extra) -> dict:
        return {"product_id": product_id, "qty": qty, **extra}
