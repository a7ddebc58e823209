"""
Stock control API routes.

POST /stock-control/v1/stock

Body is either one item's fields directly:
    {"sku": "AA-1", "qty": 5}
or a batch:
    {"items": [{"product_id": 42, "qty": 5}, ...], "mode": "set"}

Status codes:
    200: every item updated
    207: at least one item failed (body lists which)
    400: body could not be read as items
    200: unexpected fault, reported as a single internal_error entry
"""

import hmac
from typing import Any, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from fastapi.responses import JSONResponse
import structlog

from config import Settings, get_settings
from exceptions import (
    EmptyItemsError,
    InvalidItemsError,
    InvalidPayloadError,
    PayloadError,
)
from models.stock import BatchResponse, ErrorCode
from services.stock_batch_service import StockBatchService
from utils.text_utils import sanitize_text

logger = structlog.get_logger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


# ===================
# DEPENDENCIES
# ===================

def require_stock_manager(
    x_api_key: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings)
) -> None:
    """
    Only callers holding the stock manager API key may update stock.

    Raises:
        401: No key sent
        403: Wrong key
        503: No key configured (outside debug mode)
    """
    if not settings.api_key:
        if settings.debug:
            return
        logger.error("stock_api_key_not_configured")
        raise HTTPException(status_code=503, detail="Stock control API key is not configured")

    if not x_api_key:
        raise HTTPException(status_code=401, detail="Missing X-API-Key header")

    if not hmac.compare_digest(x_api_key.encode(), settings.api_key.encode()):
        logger.warning("stock_api_key_rejected")
        raise HTTPException(status_code=403, detail="Not allowed to update stock")


def get_stock_batch_service(request: Request) -> StockBatchService:
    """Batch service built at startup (see main.lifespan)."""
    return request.app.state.stock_batch_service


async def read_payload(request: Request) -> Any:
    """
    Read the request body.

    JSON first; if that is not an object and the request is form-encoded,
    the form fields are used instead. Anything unreadable becomes None.
    """
    try:
        payload = await request.json()
    except ValueError:
        payload = None

    if not isinstance(payload, dict):
        content_type = request.headers.get("content-type", "")
        if content_type.startswith(FORM_CONTENT_TYPES):
            form = await request.form()
            payload = dict(form)

    return payload


# ===================
# HELPERS
# ===================

def extract_items(payload: Any) -> list:
    """
    Turn the body into a list of raw items.

    Raises:
        InvalidPayloadError: Body is not an object
        InvalidItemsError: items is not a list
        EmptyItemsError: No items
    """
    if not isinstance(payload, dict):
        raise InvalidPayloadError()

    if payload.get("items") is not None:
        if not isinstance(payload["items"], list):
            raise InvalidItemsError()
        items = list(payload["items"])
    else:
        items = [payload]

    if not items:
        raise EmptyItemsError()

    return items


def resolve_default_mode(payload: dict, settings: Settings) -> str:
    """Batch-level mode, sanitized and lowercased."""
    if payload.get("mode") is not None:
        return sanitize_text(payload["mode"]).lower()
    return settings.default_mode


def log_summary(request: Request, items: int, response: BatchResponse) -> None:
    """Log one line per request with result totals."""
    logger.info(
        "stock_request_summary",
        client=request.client.host if request.client else None,
        method=request.method,
        route=request.url.path,
        items=items,
        result_count=len(response.results),
        error_count=len(response.errors),
        success=not response.errors
    )


# ===================
# ROUTES
# ===================

router = APIRouter(prefix="/stock-control/v1", tags=["Stock Control"])


@router.post(
    "/stock",
    dependencies=[Depends(require_stock_manager)],
    responses={
        207: {"description": "Some items failed"},
        400: {"description": "Request body could not be read as items"},
    },
)
def set_stock(
    request: Request,
    payload: Any = Depends(read_payload),
    service: StockBatchService = Depends(get_stock_batch_service),
    settings: Settings = Depends(get_settings)
):
    """
    Set absolute stock quantities by SKU or product ID.

    Every item is processed independently; see the module docstring for
    status codes.
    """
    try:
        try:
            items = extract_items(payload)
        except PayloadError as e:
            response = BatchResponse.request_failure(e.code, e.message)
            log_summary(request, 0, response)
            return JSONResponse(status_code=400, content=response.to_dict())

        mode = resolve_default_mode(payload, settings)
        response = service.process(items, mode)

        log_summary(request, len(items), response)

        status_code = 200 if response.success else 207
        return JSONResponse(status_code=status_code, content=response.to_dict())

    except Exception as e:
        logger.error(
            "stock_request_exception",
            error=str(e),
            error_type=type(e).__name__
        )

        response = BatchResponse.request_failure(
            ErrorCode.INTERNAL_ERROR,
            "Unexpected server error while processing the request."
        )
        log_summary(request, 0, response)

        return JSONResponse(status_code=200, content=response.to_dict())
