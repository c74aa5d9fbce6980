"""Unit tests for data models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from cdp.queryservice.models import CacheKey, ColumnMeta, Page, PagePayload


class TestCacheKey:
    """Test CacheKey identity semantics."""

    def test_value_equality_and_hash(self):
        a = CacheKey(host="h", tenant_id="t", dataset="d")
        b = CacheKey(host="h", tenant_id="t", dataset="d")

        assert a == b
        assert hash(a) == hash(b)
        assert {a: 1}[b] == 1

    def test_any_field_changes_identity(self):
        base = CacheKey(host="h", tenant_id="t")

        assert base != CacheKey(host="h", tenant_id="u")
        assert base != CacheKey(host="h", tenant_id="t", dataset="d")

    def test_frozen(self):
        key = CacheKey(host="h")
        with pytest.raises(ValidationError):
            key.host = "other"  # type: ignore[misc]

    def test_host_required(self):
        with pytest.raises(ValidationError):
            CacheKey(host="")


class TestColumnMeta:
    def test_same_shape_ignores_undeclared_type(self):
        declared = ColumnMeta(name="a", declared_type="VARCHAR", ordinal=0)
        undeclared = ColumnMeta(name="a", ordinal=0)

        assert declared.same_shape(undeclared)
        assert declared.same_shape(ColumnMeta(name="a", declared_type="varchar", ordinal=0))

    def test_same_shape_detects_changes(self):
        column = ColumnMeta(name="a", declared_type="VARCHAR", ordinal=0)

        assert not column.same_shape(ColumnMeta(name="b", declared_type="VARCHAR", ordinal=0))
        assert not column.same_shape(ColumnMeta(name="a", declared_type="VARCHAR", ordinal=1))
        assert not column.same_shape(ColumnMeta(name="a", declared_type="DECIMAL", ordinal=0))

    def test_negative_ordinal_rejected(self):
        with pytest.raises(ValidationError):
            ColumnMeta(name="a", ordinal=-1)


class TestPagePayload:
    """Test the wire schema."""

    def test_aliases(self):
        payload = PagePayload.model_validate(
            {"rows": [[1]], "nextBatchId": "b1", "done": False, "rowCount": 1}
        )

        assert payload.rows == [[1]]
        assert payload.continuation == "b1"
        assert payload.done is False

    def test_metadata_shorthand(self):
        payload = PagePayload.model_validate({"data": [], "metadata": {"a": "VARCHAR"}})

        assert payload.metadata["a"].type == "VARCHAR"
        assert payload.metadata["a"].place_in_order is None

    def test_done_must_be_boolean(self):
        with pytest.raises(ValidationError):
            PagePayload.model_validate({"data": [], "done": "true"})

    def test_rows_required(self):
        with pytest.raises(ValidationError):
            PagePayload.model_validate({"done": True})


class TestPage:
    @pytest.mark.parametrize("done,has_more", [(False, True), (True, False), (None, False)])
    def test_has_more(self, done, has_more):
        assert Page(done=done).has_more is has_more

    def test_row_count(self):
        assert Page(rows=((1,), (2,))).row_count == 2
