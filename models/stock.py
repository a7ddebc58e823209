"""
Stock update schemas.

Covers the whole life of one batch: the sanitized echo of each raw item,
the validated intent, the resolved catalog handle, and the per-item
result/error entries that make up the response.
"""

from pydantic import Field
from typing import Any, Optional, Union
from enum import Enum

from models.base import BaseSchema
from models.catalog import CatalogProduct


class StockMode(str, Enum):
    """Supported stock operations. Absolute assignment only."""
    SET = "set"


class IdentifierType(str, Enum):
    """How an item names its target record."""
    SKU = "sku"
    PRODUCT_ID = "product_id"


class ErrorCode(str, Enum):
    """Machine-readable error codes returned in ErrorEntry.code."""

    # Request level
    INVALID_PAYLOAD = "invalid_payload"
    INVALID_ITEMS = "invalid_items"
    EMPTY_ITEMS = "empty_items"
    CATALOG_NOT_AVAILABLE = "catalog_not_available"

    # Item validation
    INVALID_ITEM = "invalid_item"
    INVALID_MODE = "invalid_mode"
    MISSING_QTY = "missing_qty"
    INVALID_QTY = "invalid_qty"
    MISSING_IDENTIFIER = "missing_identifier"
    AMBIGUOUS_IDENTIFIER = "ambiguous_identifier"
    INVALID_SKU = "invalid_sku"
    INVALID_PRODUCT_ID = "invalid_product_id"

    # Catalog resolution
    SKU_NOT_FOUND = "sku_not_found"
    AMBIGUOUS_SKU = "ambiguous_sku"
    PRODUCT_NOT_FOUND = "product_not_found"
    VARIABLE_PARENT_SKU_NOT_ALLOWED = "variable_parent_sku_not_allowed"
    VARIABLE_PARENT_PRODUCT_ID_NOT_ALLOWED = "variable_parent_product_id_not_allowed"

    # Mutation
    STOCK_UPDATE_FAILED = "stock_update_failed"

    # Faults
    INTERNAL_ERROR = "internal_error"


# ===================
# VALIDATION / RESOLUTION STEPS
# ===================

class StepFailure(BaseSchema):
    """
    Expected failure of one resolution step.

    Every step (mode, qty, identifier, catalog lookup, mutation) returns
    either its value or a StepFailure. Callers branch with isinstance.
    """

    code: ErrorCode
    message: str


class Identifier(BaseSchema):
    """Exactly one identifier per item."""

    type: IdentifierType
    value: Union[int, str]


class NormalizedInput(BaseSchema):
    """
    Sanitized echo of a raw item for responses and logs.

    Only keys present on the raw item are set; dump with exclude_unset.
    Never used to decide anything.
    """

    product_id: Optional[int] = None
    sku: Optional[str] = None
    qty: Any = None
    mode: Optional[str] = None

    def is_empty(self) -> bool:
        return not self.model_fields_set

    def to_dict(self) -> dict:
        return self.model_dump(exclude_unset=True)


class ValidatedIntent(BaseSchema):
    """An item that passed every check that does not need the catalog."""

    mode: StockMode = StockMode.SET
    qty: int = Field(..., ge=0)
    identifier: Identifier


class ProductContext(BaseSchema):
    """Resolved catalog handle, valid for the current request only."""

    product_id: int
    product: CatalogProduct
    identifier: Identifier


class StockChange(BaseSchema):
    """Stock before and after a successful write."""

    old_stock: Optional[int] = None
    new_stock: Optional[int] = None


# ===================
# RESPONSE ENTRIES
# ===================

class ResultEntry(BaseSchema):
    """One successfully updated item."""

    index: int
    input: dict[str, Any] = Field(default_factory=dict)
    resolved_product_id: int
    status: str = "updated"
    identifier: Identifier
    mode: StockMode = StockMode.SET
    old_stock: Optional[int] = None
    new_stock: Optional[int] = None

    def to_dict(self) -> dict:
        return self.model_dump()


class ErrorEntry(BaseSchema):
    """
    One failed item, or one request-level failure.

    Request-level errors have index and identifier set to None.
    """

    index: Optional[int] = None
    identifier: Optional[str] = None
    code: ErrorCode
    message: str
    input: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict:
        data = self.model_dump()
        if not data["input"]:
            data.pop("input")
        return data


class BatchResponse(BaseSchema):
    """
    Aggregate outcome of one batch.

    success is True iff errors is empty.
    """

    success: bool
    results: list[ResultEntry] = Field(default_factory=list)
    errors: list[ErrorEntry] = Field(default_factory=list)

    @classmethod
    def from_entries(
        cls,
        results: list[ResultEntry],
        errors: list[ErrorEntry]
    ) -> "BatchResponse":
        """Build the final response once all items are processed."""
        return cls(success=not errors, results=results, errors=errors)

    @classmethod
    def request_failure(cls, code: Union[ErrorCode, str], message: str) -> "BatchResponse":
        """Response for a failure that stops the batch before any item."""
        return cls.from_entries(
            results=[],
            errors=[ErrorEntry(code=code, message=message)]
        )

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "results": [entry.to_dict() for entry in self.results],
            "errors": [entry.to_dict() for entry in self.errors],
        }
