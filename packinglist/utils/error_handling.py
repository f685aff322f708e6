"""Centralized error handling utilities."""

import re
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from packinglist.exceptions import (
    BusinessLogicException,
    DocumentValidationException,
    DuplicateKeyException,
    MissingFieldException,
    TypeMismatchException,
)
from packinglist.schemas.common import ErrorResponseSchema

# Pydantic error types that mean "nothing usable was supplied"
MISSING_ERROR_TYPES = frozenset({"missing", "string_too_short", "too_short"})

DUPLICATE_DETAIL_RE = re.compile(r"Key \((\w+)\)=\((.*?)\) already exists")


def field_path(loc: Sequence[Any], prefix: str = "") -> str:
    """Join a pydantic error location into a dotted field path."""
    path = ".".join(str(x) for x in loc)
    if prefix and path:
        return f"{prefix}.{path}"
    return prefix or path


def translate_validation_error(
    error: ValidationError, prefix: str = ""
) -> DocumentValidationException:
    """Convert the first pydantic error into a domain validation exception.

    Absent, ``None`` or empty values become ``MissingFieldException``;
    everything else is a ``TypeMismatchException``.
    """
    first = error.errors()[0]
    field = field_path(first["loc"], prefix)

    if first["type"] in MISSING_ERROR_TYPES or first.get("input", ...) is None:
        return MissingFieldException(field)
    return TypeMismatchException(field, first["msg"])


def translate_integrity_error(error: IntegrityError) -> BusinessLogicException:
    """Map a database constraint violation to a domain exception."""
    error_msg = str(error.orig) if hasattr(error, "orig") else str(error)
    lowered = error_msg.lower()

    if "unique constraint failed" in lowered or "duplicate key" in lowered:
        if "carton_no" in lowered:
            return DuplicateKeyException("Carton", "carton_no", _duplicate_value(error, "carton_no"))
        return DuplicateKeyException("Packing list", "packing_no", _duplicate_value(error, "packing_no"))
    if "not null constraint failed" in lowered or "null value" in lowered:
        return MissingFieldException(_column_name(error_msg))
    return BusinessLogicException(
        "The operation violates a database constraint", "CONSTRAINT_VIOLATION"
    )


def to_error_response(error: BusinessLogicException) -> ErrorResponseSchema:
    """Build the error payload handed to outer layers."""
    field = error.field if isinstance(error, DocumentValidationException) else None
    return ErrorResponseSchema(error=error.message, error_code=error.error_code, field=field)


def _duplicate_value(error: IntegrityError, column: str) -> str | None:
    """Recover the offending value from the statement parameters or the driver message.

    Positional parameters (SQLite) and multi-row inserts do not say which
    value collided; those return None.
    """
    params = error.params
    if isinstance(params, (list, tuple)) and len(params) == 1:
        params = params[0]
    if isinstance(params, dict) and column in params:
        return str(params[column])

    # PostgreSQL: DETAIL:  Key (carton_no)=(1) already exists.
    match = DUPLICATE_DETAIL_RE.search(str(error.orig))
    if match and match.group(1) == column:
        return match.group(2)
    return None


def _column_name(error_msg: str) -> str:
    # SQLite: "NOT NULL constraint failed: cartons.style"
    # PostgreSQL: 'null value in column "style" ...'
    if '"' in error_msg:
        return error_msg.split('"')[1]
    if ":" in error_msg:
        return error_msg.rsplit(":", 1)[1].strip().split(".")[-1]
    return "unknown"
