"""Decoding of query response bodies into pages.

The service sends rows either as arrays (positional, described by the
``metadata`` object) or as objects keyed by column name. Both are
normalized to positional tuples aligned with the page's columns.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from ...core.constants import AUTH_FAILURE_STATUSES
from ...core.exceptions import AuthError, MalformedResponseError, QueryServiceError
from ...models import ColumnMeta, Page, PagePayload
from ...models.page import ColumnDescriptor
from ..rest.transport import Response


def extract_error_message(body: str) -> str:
    """Pull the human-readable error text out of a failed response body.

    Understands ``{"message": ...}``, ``[{"message": ...}, ...]`` and
    ``{"error": ...}``; anything else is returned as stripped text.
    """
    try:
        payload = json.loads(body)
    except ValueError:
        return body.strip()

    if isinstance(payload, list):
        messages = [_message_of(item) for item in payload]
        messages = [m for m in messages if m]
        if messages:
            return "; ".join(messages)
    else:
        message = _message_of(payload)
        if message:
            return message
    return body.strip()


def _message_of(item: Any) -> str | None:
    if not isinstance(item, dict):
        return None
    if item.get("message"):
        return str(item["message"])
    error = item.get("error")
    if isinstance(error, dict):
        return _message_of(error)
    if error:
        return str(error)
    return None


class PageParser:
    """Turns a successful response into a Page."""

    def parse(self, response: Response, schema: Sequence[ColumnMeta] | None = None) -> Page:
        """Decode ``response`` into a Page.

        Args:
            response: Successful response; its body is consumed
            schema: Columns recorded from the first page. Pages without their
                own metadata are aligned to it.

        Raises:
            MalformedResponseError: Body is not JSON, not an object, lacks the
                rows field, or holds rows that do not fit the columns
        """
        return self.parse_text(response.text(), schema)

    def parse_text(self, body: str, schema: Sequence[ColumnMeta] | None = None) -> Page:
        try:
            raw = json.loads(body)
        except ValueError as e:
            raise MalformedResponseError(f"Response body is not valid JSON: {e}") from e
        if not isinstance(raw, dict):
            raise MalformedResponseError(
                f"Expected a JSON object, got {type(raw).__name__}"
            )
        try:
            payload = PagePayload.model_validate(raw)
        except ValidationError as e:
            raise MalformedResponseError(f"Invalid page payload: {e}") from e

        declared = bool(payload.metadata)
        try:
            if declared:
                columns = self._declared_columns(payload.metadata)
            elif schema is not None:
                columns = tuple(schema)
            else:
                columns = self._inferred_columns(payload.rows[0]) if payload.rows else ()
        except ValidationError as e:
            raise MalformedResponseError(f"Invalid column metadata: {e}") from e

        rows = tuple(self._align_row(row, columns, i) for i, row in enumerate(payload.rows))
        continuation = payload.continuation
        return Page(
            rows=rows,
            columns=columns,
            declared=declared,
            done=payload.done,
            continuation=str(continuation) if continuation is not None else None,
        )

    def _declared_columns(self, metadata: dict[str, ColumnDescriptor]) -> tuple[ColumnMeta, ...]:
        indexed = list(enumerate(metadata.items()))
        # placeInOrder wins; entries without it keep their position in the object
        indexed.sort(
            key=lambda item: (
                item[1][1].place_in_order
                if item[1][1].place_in_order is not None
                else item[0]
            )
        )
        return tuple(
            ColumnMeta(
                name=name,
                declared_type=desc.type,
                ordinal=ordinal,
                type_code=desc.type_code,
            )
            for ordinal, (_, (name, desc)) in enumerate(indexed)
        )

    def _inferred_columns(self, first_row: Any) -> tuple[ColumnMeta, ...]:
        if isinstance(first_row, dict):
            names = list(first_row)
        elif isinstance(first_row, list):
            names = [f"col_{i}" for i in range(len(first_row))]
        else:
            raise MalformedResponseError(
                f"Row 0 must be an array or object, got {type(first_row).__name__}"
            )
        return tuple(ColumnMeta(name=name, ordinal=i) for i, name in enumerate(names))

    def _align_row(self, row: Any, columns: tuple[ColumnMeta, ...], index: int) -> tuple[Any, ...]:
        if isinstance(row, list):
            if len(row) != len(columns):
                raise MalformedResponseError(
                    f"Row {index} has {len(row)} values but {len(columns)} columns are defined"
                )
            return tuple(row)
        if isinstance(row, dict):
            lowered = {str(k).lower(): v for k, v in row.items()}
            unknown = sorted(set(lowered) - {col.name.lower() for col in columns})
            if unknown:
                # Absent keys read as null; unknown keys mean the columns changed
                raise MalformedResponseError(
                    f"Row {index} has fields {unknown} outside the result columns "
                    f"{[col.name for col in columns]}"
                )
            return tuple(
                row[col.name] if col.name in row else lowered.get(col.name.lower())
                for col in columns
            )
        raise MalformedResponseError(
            f"Row {index} must be an array or object, got {type(row).__name__}"
        )


def raise_for_response(response: Response) -> None:
    """Raise the typed error for an unsuccessful response.

    Consumes the body of unsuccessful responses only.

    Raises:
        AuthError: 401/403, message taken from the body
        QueryServiceError: Any other non-2xx status
    """
    if response.is_successful:
        return
    message = extract_error_message(response.text()) or response.reason
    if not message:
        message = f"HTTP {response.status}"
    if response.status in AUTH_FAILURE_STATUSES:
        raise AuthError(message, status_code=response.status)
    raise QueryServiceError(message, status_code=response.status)
