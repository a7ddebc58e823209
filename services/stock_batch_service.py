"""
Stock batch service.

Processes a list of "set stock" items one at a time, in input order. Each
item ends as exactly one ResultEntry or ErrorEntry; a failure or crash on one
item never stops the others.

Per item:
    Received → Normalized → IdentifierResolved → Mutated → Succeeded | Failed
"""

from typing import Any, Optional, Sequence, Union
import structlog

from models.stock import (
    BatchResponse,
    ErrorCode,
    ErrorEntry,
    NormalizedInput,
    ResultEntry,
    StepFailure,
    StockMode,
)
from services import item_normalizer
from services.catalog_service import CatalogStore
from services.product_resolver import ProductResolver
from services.stock_mutator import StockMutator


class StockBatchService:
    """
    Batch orchestration and aggregation.

    Built once at startup with its collaborators (see main.lifespan) and
    shared by every request. Holds no per-request state.
    """

    def __init__(
        self,
        catalog: CatalogStore,
        resolver: Optional[ProductResolver] = None,
        mutator: Optional[StockMutator] = None,
        logger: Optional[Any] = None
    ):
        self.catalog = catalog
        self.resolver = resolver or ProductResolver(catalog)
        self.mutator = mutator or StockMutator(catalog)
        self.logger = logger or structlog.get_logger(__name__)

    def process(
        self,
        items: Sequence[Any],
        default_mode: str = StockMode.SET.value
    ) -> BatchResponse:
        """
        Process every item and aggregate the outcome.

        Args:
            items: Raw items (anything; non-objects fail as invalid_item)
            default_mode: Mode for items that don't set one

        Returns:
            BatchResponse with success == (no errors)
        """
        if not self.catalog.is_available():
            self.logger.error("stock_batch_catalog_unavailable", items=len(items))
            return BatchResponse.request_failure(
                ErrorCode.CATALOG_NOT_AVAILABLE,
                "The product catalog is required to update stock."
            )

        self.logger.info("stock_batch_started", items=len(items), default_mode=default_mode)

        results: list[ResultEntry] = []
        errors: list[ErrorEntry] = []

        for index, item in enumerate(items):
            try:
                outcome = self._process_item(index, item, default_mode)
            except Exception as e:
                outcome = self._crashed(index, item, e)

            if isinstance(outcome, ResultEntry):
                results.append(outcome)
            else:
                errors.append(outcome)

        response = BatchResponse.from_entries(results, errors)

        self.logger.info(
            "stock_batch_completed",
            items=len(items),
            result_count=len(results),
            error_count=len(errors),
            success=response.success
        )

        return response

    # ===================
    # PER ITEM
    # ===================

    def _process_item(
        self,
        index: int,
        item: Any,
        default_mode: str
    ) -> Union[ResultEntry, ErrorEntry]:
        normalized = item_normalizer.normalize(item)

        intent = item_normalizer.validate(item, default_mode)
        if isinstance(intent, StepFailure):
            return self._failed(index, item, normalized, intent)

        context = self.resolver.resolve(intent.identifier)
        if isinstance(context, StepFailure):
            return self._failed(index, item, normalized, context)

        change = self.mutator.apply(context.product, intent.qty)
        if isinstance(change, StepFailure):
            return self._failed(index, item, normalized, change)

        entry = ResultEntry(
            index=index,
            input=normalized.to_dict(),
            resolved_product_id=context.product_id,
            identifier=context.identifier,
            mode=StockMode.SET,
            old_stock=change.old_stock,
            new_stock=change.new_stock
        )

        self.logger.info(
            "stock_item_updated",
            index=index,
            input=entry.input,
            product_id=context.product_id,
            old_stock=change.old_stock,
            new_stock=change.new_stock,
            mode=StockMode.SET.value
        )

        return entry

    def _failed(
        self,
        index: int,
        item: Any,
        normalized: NormalizedInput,
        failure: StepFailure
    ) -> ErrorEntry:
        entry = ErrorEntry(
            index=index,
            identifier=item_normalizer.identifier_label(item),
            code=failure.code,
            message=failure.message,
            input=None if normalized.is_empty() else normalized.to_dict()
        )

        self.logger.warning(
            "stock_item_failed",
            index=index,
            identifier=entry.identifier,
            code=entry.code,
            message=entry.message,
            input=normalized.to_dict()
        )

        return entry

    def _crashed(self, index: int, item: Any, exc: Exception) -> ErrorEntry:
        """
        Turn an unexpected exception into an internal_error entry.

        The label and echo come from the same raw item that just crashed, so
        either may fail again; the entry is then built without them.
        """
        try:
            identifier = item_normalizer.identifier_label(item)
            normalized = item_normalizer.normalize(item)
            echo = None if normalized.is_empty() else normalized.to_dict()
        except Exception as echo_error:
            identifier, echo = None, None
            self.logger.warning(
                "stock_item_echo_failed",
                index=index,
                error_type=type(echo_error).__name__
            )

        self.logger.error(
            "stock_item_exception",
            index=index,
            identifier=identifier,
            error=str(exc),
            error_type=type(exc).__name__,
            input=echo
        )

        return ErrorEntry(
            index=index,
            identifier=identifier,
            code=ErrorCode.INTERNAL_ERROR,
            message="Unexpected error while processing this item.",
            input=echo
        )
