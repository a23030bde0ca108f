"""Tagged request/response boundary for presentation layers.

A presentation layer (desktop app, web view, script) sends a JSON-like
payload tagged with ``op``. The payload is validated against an explicit
pydantic schema before anything reaches the ledger, and every outcome comes
back as an envelope::

    {"ok": True, "result": ...}
    {"ok": False, "error": {"type": "InvalidAmount", "message": "..."}}

dispatch never raises a LedgerError to its caller.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic import ValidationError as SchemaError

from pocketledger.dates import parse_month_key
from pocketledger.domain.models import Kind
from pocketledger.domain.validation import normalize_note, parse_amount, parse_category, parse_kind
from pocketledger.errors import InvalidRequest, LedgerError
from pocketledger.ledger import Ledger

logger = logging.getLogger(__name__)


class _BaseRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class _MonthRequest(_BaseRequest):
    ym: str

    @field_validator("ym", mode="before")
    @classmethod
    def _check_month(cls, value: Any) -> str:
        parse_month_key(value)
        return value


class AddRequest(_BaseRequest):
    op: Literal["add"]
    kind: Kind
    amount: Decimal
    category: str
    note: str | None = None

    @field_validator("kind", mode="before")
    @classmethod
    def _check_kind(cls, value: Any) -> Kind:
        return parse_kind(value)

    @field_validator("amount", mode="before")
    @classmethod
    def _check_amount(cls, value: Any) -> Decimal:
        return parse_amount(value)

    @field_validator("category", mode="before")
    @classmethod
    def _check_category(cls, value: Any) -> str:
        return parse_category(value)

    @field_validator("note")
    @classmethod
    def _normalize_note(cls, value: str | None) -> str | None:
        return normalize_note(value)


class ListRequest(_BaseRequest):
    op: Literal["list"]


class DeleteRequest(_BaseRequest):
    op: Literal["delete"]
    id: int


class MonthSummaryRequest(_MonthRequest):
    op: Literal["get_month_summary"]


class CategoryTotalsRequest(_MonthRequest):
    op: Literal["get_category_totals"]
    kind: Kind

    @field_validator("kind", mode="before")
    @classmethod
    def _check_kind(cls, value: Any) -> Kind:
        return parse_kind(value)


Request = Annotated[
    AddRequest | ListRequest | DeleteRequest | MonthSummaryRequest | CategoryTotalsRequest,
    Field(discriminator="op"),
]

_REQUEST_ADAPTER: TypeAdapter[Request] = TypeAdapter(Request)


def parse_request(payload: Any) -> Request:
    """Validate a raw payload into a typed request.

    Raises:
        LedgerError: The domain error (InvalidKind, InvalidAmount,
            InvalidCategory, InvalidMonthKey) raised by a field check, or
            InvalidRequest for any other schema violation.
    """
    try:
        return _REQUEST_ADAPTER.validate_python(payload)
    except SchemaError as e:
        for detail in e.errors():
            cause = detail.get("ctx", {}).get("error")
            if isinstance(cause, LedgerError):
                raise cause from e
        raise InvalidRequest(_describe_schema_error(e)) from e


def _describe_schema_error(error: SchemaError) -> str:
    parts = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"]) or "request"
        parts.append(f"{location}: {detail['msg']}")
    return "; ".join(parts)


def execute(ledger: Ledger, request: Request) -> Any:
    """Run a validated request against the ledger and return a JSON-ready result."""
    if isinstance(request, AddRequest):
        return ledger.add(request.kind, request.amount, request.category, request.note).to_dict()
    if isinstance(request, ListRequest):
        return [entry.to_dict() for entry in ledger.list()]
    if isinstance(request, DeleteRequest):
        return ledger.delete(request.id)
    if isinstance(request, MonthSummaryRequest):
        return ledger.month_summary(request.ym).to_dict()
    if isinstance(request, CategoryTotalsRequest):
        return [total.to_dict() for total in ledger.category_totals(request.ym, request.kind)]
    raise InvalidRequest(f"Unsupported request: {type(request).__name__}")


def error_response(error: LedgerError) -> dict[str, Any]:
    return {"ok": False, "error": {"type": type(error).__name__, "message": str(error)}}


def dispatch(ledger: Ledger, payload: Any) -> dict[str, Any]:
    """Validate and run one request payload.

    Args:
        ledger: Ledger to run against.
        payload: Mapping tagged with ``op``.

    Returns:
        Response envelope with either ``result`` or ``error``.
    """
    op = payload.get("op") if isinstance(payload, dict) else None
    try:
        request = parse_request(payload)
        logger.info("api.dispatch.start op=%s", request.op)
        result = execute(ledger, request)
    except LedgerError as e:
        logger.warning("api.dispatch.rejected op=%s error=%s", op, type(e).__name__)
        return error_response(e)

    logger.info("api.dispatch.done op=%s result_type=%s", op, type(result).__name__)
    return {"ok": True, "result": result}
