"""Page models: the decoded wire payload and the normalized page."""

from __future__ import annotations

from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    field_validator,
)

from .column import ColumnMeta


class ColumnDescriptor(BaseModel):
    """Type descriptor for one entry of the ``metadata`` object."""

    type: str | None = None
    place_in_order: int | None = Field(
        default=None, validation_alias=AliasChoices("placeInOrder", "place_in_order")
    )
    type_code: int | None = Field(
        default=None, validation_alias=AliasChoices("typeCode", "type_code")
    )

    model_config = ConfigDict(frozen=True, extra="ignore")


class PagePayload(BaseModel):
    """Wire schema of one query response body.

    Only ``data`` (or ``rows``) is required. Bookkeeping fields the service
    sends alongside (``rowCount``, ``queryId``, ``startTime`` ...) are ignored.
    """

    rows: list[Any] = Field(validation_alias=AliasChoices("data", "rows"))
    metadata: dict[str, ColumnDescriptor] | None = None
    done: StrictBool | None = None
    continuation: str | int | None = Field(
        default=None, validation_alias=AliasChoices("nextBatchId", "continuation")
    )

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("metadata", mode="before")
    @classmethod
    def expand_type_names(cls, v: Any) -> Any:
        """Accept ``{"col": "VARCHAR"}`` as shorthand for ``{"col": {"type": "VARCHAR"}}``."""
        if isinstance(v, dict):
            return {
                name: {"type": desc} if isinstance(desc, str) else desc
                for name, desc in v.items()
            }
        return v


class Page(BaseModel):
    """One HTTP response's worth of rows plus column metadata and continuation signal."""

    rows: tuple[tuple[Any, ...], ...] = ()
    columns: tuple[ColumnMeta, ...] = ()
    declared: bool = False
    done: bool | None = None
    continuation: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def row_count(self) -> int:
        """Number of rows in this page."""
        return len(self.rows)

    @property
    def has_more(self) -> bool:
        """Whether another page follows.

        Only an explicit ``done: false`` continues; an absent flag is terminal.
        """
        return self.done is False
