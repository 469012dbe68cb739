"""
Shared plumbing for the client-side stores.
Precondition checks, input validation, response unwrapping and the toast
conventions live here so TeamStore and TaskStore resolve errors the same way.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from tasksquad.core.dependencies import StoreContext
from tasksquad.core.exceptions import InvalidInputError, RemoteError, ValidationError
from tasksquad.core.ports import Row, StoreResponse, ToastVariant
from tasksquad.schemas.user import CurrentUser

logger = logging.getLogger(__name__)

SchemaType = TypeVar("SchemaType", bound=BaseModel)

# pydantic error types that mean "required field absent or blank"
_EMPTY_FIELD_ERRORS = frozenset({"missing", "string_too_short"})


def _describe(error: Mapping[str, Any]) -> str:
    field = ".".join(str(part) for part in error["loc"])
    return f"{field}: {error['msg']}" if field else error["msg"]


class BaseStore:

    def __init__(self, context: StoreContext) -> None:
        self._ctx = context
        self._loading = True

    @property
    def loading(self) -> bool:
        return self._loading

    # ── Preconditions ─────────────────────────────────────────────────────────

    def _require_user(self) -> CurrentUser:
        user = self._ctx.user
        if user is None:
            raise ValidationError("No signed-in user")
        return user

    @staticmethod
    def _build(
        schema: type[SchemaType], data: SchemaType | Mapping[str, Any], *, table: str
    ) -> SchemaType:
        """
        Validate caller input against a writable schema.

        A missing or empty required field is a precondition and stays silent.
        Any other rejected value is reported to the user like a store failure.
        """
        if isinstance(data, schema):
            return data
        try:
            return schema.model_validate(data)
        except PydanticValidationError as exc:
            errors = exc.errors(include_url=False)
            if all(err["type"] in _EMPTY_FIELD_ERRORS for err in errors):
                raise ValidationError(f"Incomplete {schema.__name__}: {exc}") from exc
            raise InvalidInputError(
                "; ".join(_describe(err) for err in errors), table=table
            ) from exc

    # ── Responses ─────────────────────────────────────────────────────────────

    @staticmethod
    def _check(table: str, response: StoreResponse) -> list[Row]:
        if response.error is not None:
            raise RemoteError(response.error.message, table=table)
        return response.data

    def _parse_rows(
        self, schema: type[SchemaType], table: str, response: StoreResponse
    ) -> tuple[SchemaType, ...]:
        rows = self._check(table, response)
        try:
            return tuple(schema.model_validate(row) for row in rows)
        except PydanticValidationError as exc:
            raise RemoteError(
                f"Unexpected {table} payload: {exc.error_count()} invalid field(s)",
                table=table,
            ) from exc

    def _parse_one(
        self, schema: type[SchemaType], table: str, response: StoreResponse
    ) -> SchemaType:
        parsed = self._parse_rows(schema, table, response)
        if not parsed:
            raise RemoteError(f"No {table} row returned", table=table)
        return parsed[0]

    # ── Outcomes ──────────────────────────────────────────────────────────────

    def _skip(self, operation: str, exc: ValidationError) -> None:
        logger.debug("%s.%s skipped: %s", type(self).__name__, operation, exc.detail)

    def _succeed(self, message: str) -> None:
        self._ctx.notifier.notify("Success", message)

    def _fail(self, operation: str, exc: RemoteError | InvalidInputError) -> None:
        logger.warning(
            "%s.%s failed: table=%s: %s",
            type(self).__name__,
            operation,
            exc.table,
            exc.detail,
        )
        self._ctx.notifier.notify("Error", exc.detail, variant=ToastVariant.DESTRUCTIVE)
