"""
Item normalizer.

Turns one raw request item into a ValidatedIntent or a StepFailure without
touching the catalog. Checks run in a fixed order and stop at the first
failure: shape, mode, qty, identifier.
"""

import re
from collections.abc import Mapping
from typing import Any, Union

from models.stock import (
    ErrorCode,
    Identifier,
    IdentifierType,
    NormalizedInput,
    StepFailure,
    StockMode,
    ValidatedIntent,
)
from utils.text_utils import MAX_INT, has_text, sanitize_text, to_absint

_DIGITS_RE = re.compile(r"[0-9]+")


def is_item(raw: Any) -> bool:
    """Items must be keyed mappings (JSON objects)."""
    return isinstance(raw, Mapping)


def normalize(raw: Any) -> NormalizedInput:
    """
    Build the sanitized echo of a raw item.

    Never fails. Missing or empty fields are left out; qty is echoed as an
    int, a trimmed string, or whatever was sent.
    """
    if not is_item(raw):
        return NormalizedInput()

    fields: dict[str, Any] = {}

    product_id = raw.get("product_id")
    if has_text(product_id) and isinstance(product_id, (str, int, float)):
        fields["product_id"] = to_absint(product_id)

    sku = sanitize_text(raw.get("sku"))
    if sku:
        fields["sku"] = sku

    if "qty" in raw:
        qty = raw["qty"]
        fields["qty"] = qty.strip() if isinstance(qty, str) else qty

    mode = sanitize_text(raw.get("mode")).lower()
    if mode:
        fields["mode"] = mode

    return NormalizedInput(**fields)


def identifier_label(raw: Any) -> Union[str, None]:
    """
    Best-effort label for logs and error entries.

    SKU wins when both identifiers are present.
    """
    if not is_item(raw):
        return None

    sku = sanitize_text(raw.get("sku"))
    if sku:
        return f"{IdentifierType.SKU.value}:{sku}"

    if has_text(raw.get("product_id")):
        return f"{IdentifierType.PRODUCT_ID.value}:{to_absint(raw['product_id'])}"

    return None


# ===================
# RESOLUTION STEPS
# ===================

def resolve_mode(raw: Mapping, default_mode: str) -> Union[str, StepFailure]:
    """Explicit item mode, else the batch default. Only "set" is accepted."""
    mode = default_mode

    if raw.get("mode") is not None:
        mode = sanitize_text(raw["mode"]).lower()

    if mode != StockMode.SET.value:
        return StepFailure(
            code=ErrorCode.INVALID_MODE,
            message='Only "set" mode is supported.'
        )

    return mode


def resolve_qty(raw: Mapping) -> Union[int, StepFailure]:
    """
    Read qty as a non-negative integer.

    Accepts a native int or a string of ASCII digits (surrounding
    whitespace allowed). Floats, bools, signed strings and null are invalid,
    and so is anything above MAX_INT, which the catalog cannot store.
    """
    if "qty" not in raw:
        return StepFailure(
            code=ErrorCode.MISSING_QTY,
            message="qty is required."
        )

    raw_qty = raw["qty"]
    qty = None

    if isinstance(raw_qty, int) and not isinstance(raw_qty, bool):
        qty = raw_qty
    elif isinstance(raw_qty, str) and _DIGITS_RE.fullmatch(raw_qty.strip()):
        digits = raw_qty.strip().lstrip("0") or "0"
        qty = int(digits) if len(digits) <= len(str(MAX_INT)) else MAX_INT + 1

    if qty is None or qty < 0:
        return StepFailure(
            code=ErrorCode.INVALID_QTY,
            message="qty must be an integer greater than or equal to 0."
        )

    if qty > MAX_INT:
        return StepFailure(
            code=ErrorCode.INVALID_QTY,
            message=f"qty must not exceed {MAX_INT}."
        )

    return qty


def resolve_identifier(raw: Mapping) -> Union[Identifier, StepFailure]:
    """
    Pick the single identifier an item provides.

    Both identifiers present is always ambiguous, whatever their values.
    """
    has_sku = has_text(raw.get("sku"))
    has_id = has_text(raw.get("product_id"))

    if not has_sku and not has_id:
        return StepFailure(
            code=ErrorCode.MISSING_IDENTIFIER,
            message="Provide either sku or product_id."
        )

    if has_sku and has_id:
        return StepFailure(
            code=ErrorCode.AMBIGUOUS_IDENTIFIER,
            message="Provide only one identifier: sku or product_id."
        )

    if has_sku:
        sku = sanitize_text(raw["sku"])
        if not sku:
            return StepFailure(
                code=ErrorCode.INVALID_SKU,
                message="sku must be a non-empty string."
            )
        return Identifier(type=IdentifierType.SKU, value=sku)

    product_id = to_absint(raw["product_id"])
    if product_id <= 0:
        return StepFailure(
            code=ErrorCode.INVALID_PRODUCT_ID,
            message="product_id must be a positive integer."
        )
    return Identifier(type=IdentifierType.PRODUCT_ID, value=product_id)


def validate(raw: Any, default_mode: str = StockMode.SET.value) -> Union[ValidatedIntent, StepFailure]:
    """
    Run every catalog-free check on one item.

    Returns:
        ValidatedIntent on success, otherwise the first StepFailure
    """
    if not is_item(raw):
        return StepFailure(
            code=ErrorCode.INVALID_ITEM,
            message="Each item must be an object."
        )

    mode = resolve_mode(raw, default_mode)
    if isinstance(mode, StepFailure):
        return mode

    qty = resolve_qty(raw)
    if isinstance(qty, StepFailure):
        return qty

    identifier = resolve_identifier(raw)
    if isinstance(identifier, StepFailure):
        return identifier

    return ValidatedIntent(mode=mode, qty=qty, identifier=identifier)
