"""
Product resolver.

Maps a validated identifier to exactly one leaf catalog record. Resolution is
strict: an SKU shared by several records, or a variable parent, is an error
for the caller to fix, never a guess.
"""

from typing import Optional, Union
import structlog

from config import settings
from models.stock import (
    ErrorCode,
    Identifier,
    IdentifierType,
    ProductContext,
    StepFailure,
)
from services.catalog_service import CatalogStore

logger = structlog.get_logger(__name__)


class ProductResolver:
    """Identifier → ProductContext lookups against the catalog."""

    def __init__(self, catalog: CatalogStore, sku_lookahead: Optional[int] = None):
        self.catalog = catalog
        self.sku_lookahead = sku_lookahead or settings.sku_lookahead

    def resolve(self, identifier: Identifier) -> Union[ProductContext, StepFailure]:
        """Dispatch on identifier type."""
        if identifier.type == IdentifierType.SKU:
            return self.resolve_by_sku(str(identifier.value))
        return self.resolve_by_id(int(identifier.value))

    def resolve_by_sku(self, sku: str) -> Union[ProductContext, StepFailure]:
        """
        Resolve a record by exact SKU.

        Fetches at most sku_lookahead matches, which is enough to tell
        none / one / many apart.

        Returns:
            ProductContext, or StepFailure with one of sku_not_found,
            ambiguous_sku, product_not_found, variable_parent_sku_not_allowed
        """
        matching_ids = self.catalog.find_product_ids_by_sku(sku, self.sku_lookahead)

        if not matching_ids:
            return StepFailure(
                code=ErrorCode.SKU_NOT_FOUND,
                message="No product or variation found for the provided SKU."
            )

        if len(matching_ids) > 1:
            logger.info("sku_ambiguous", sku=sku, matches=matching_ids)
            return StepFailure(
                code=ErrorCode.AMBIGUOUS_SKU,
                message="Provided SKU is ambiguous and matches multiple products. Use product_id instead."
            )

        product = self.catalog.get_product(matching_ids[0])
        if product is None:
            return StepFailure(
                code=ErrorCode.PRODUCT_NOT_FOUND,
                message="Product not found for the provided SKU."
            )

        if product.is_variable:
            return StepFailure(
                code=ErrorCode.VARIABLE_PARENT_SKU_NOT_ALLOWED,
                message="Parent variable product SKU is not allowed. Update a specific variation SKU instead."
            )

        return ProductContext(
            product_id=product.id,
            product=product,
            identifier=Identifier(type=IdentifierType.SKU, value=sku)
        )

    def resolve_by_id(self, product_id: int) -> Union[ProductContext, StepFailure]:
        """
        Resolve a record by ID.

        Returns:
            ProductContext, or StepFailure with one of invalid_product_id,
            product_not_found, variable_parent_product_id_not_allowed
        """
        if product_id <= 0:
            return StepFailure(
                code=ErrorCode.INVALID_PRODUCT_ID,
                message="product_id must be a positive integer."
            )

        product = self.catalog.get_product(product_id)
        if product is None:
            return StepFailure(
                code=ErrorCode.PRODUCT_NOT_FOUND,
                message="No product or variation found for the provided product_id."
            )

        if product.is_variable:
            return StepFailure(
                code=ErrorCode.VARIABLE_PARENT_PRODUCT_ID_NOT_ALLOWED,
                message="Parent variable product ID is not allowed. Update a specific variation ID instead."
            )

        return ProductContext(
            product_id=product.id,
            product=product,
            identifier=Identifier(type=IdentifierType.PRODUCT_ID, value=product_id)
        )
