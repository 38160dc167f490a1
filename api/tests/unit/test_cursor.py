"""Tests for the cursor codec and result processing."""

import base64
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from marketplace.pagination.cursor import (
    CursorData,
    PaginatedResponse,
    encode_cursor,
    decode_cursor,
    build_order_clause,
    create_link_header,
    paginate_query_results
)


class TestCursorCodec:
    """Test encode_cursor / decode_cursor."""

    def test_round_trip_aware_timestamp(self):
        """Test that a timezone-aware timestamp survives encode/decode."""
        created_at = datetime(2024, 1, 2, 15, 30, 45, 123456, tzinfo=timezone.utc)

        decoded = decode_cursor(encode_cursor(created_at, "prod-001"))

        assert decoded == CursorData(created_at=created_at, id="prod-001")
        assert decoded.created_at == created_at
        assert decoded.id == "prod-001"

    def test_round_trip_naive_timestamp(self):
        """Test that a naive timestamp stays naive."""
        created_at = datetime(2024, 1, 2, 8, 0, 0, 500000)

        decoded = decode_cursor(encode_cursor(created_at, "b"))

        assert decoded.created_at == created_at
        assert decoded.created_at.tzinfo is None

    def test_round_trip_non_utc_offset(self):
        """Test that non-UTC offsets are preserved."""
        tz = timezone(timedelta(hours=-5))
        created_at = datetime(2024, 6, 1, 23, 59, 59, tzinfo=tz)

        decoded = decode_cursor(encode_cursor(created_at, "ckx9a"))

        assert decoded.created_at == created_at
        assert decoded.created_at.utcoffset() == timedelta(hours=-5)

    def test_encoding_is_deterministic(self):
        """Test that the same input always yields the same cursor."""
        created_at = datetime(2024, 1, 3, tzinfo=timezone.utc)

        assert encode_cursor(created_at, "c") == encode_cursor(created_at, "c")

    def test_string_timestamp_is_normalised(self):
        """Test that ISO strings encode like the equivalent datetime."""
        assert encode_cursor("2024-01-02", "b") == encode_cursor(datetime(2024, 1, 2), "b")
        assert encode_cursor("2024-01-02T00:00:00Z", "b") == encode_cursor(
            datetime(2024, 1, 2, tzinfo=timezone.utc), "b"
        )

    def test_cursor_is_url_safe(self):
        """Test that cursors contain only URL-safe characters and no padding."""
        allowed = set("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_")

        for i in range(50):
            created_at = datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(microseconds=i * 7919)
            cursor = encode_cursor(created_at, f"id~{i}?>")
            assert set(cursor) <= allowed, cursor

    def test_cursor_payload_format(self):
        """Test that the payload is the ISO timestamp and id joined by a colon."""
        created_at = datetime(2024, 1, 2, tzinfo=timezone.utc)
        cursor = encode_cursor(created_at, "b")

        padded = cursor + "=" * (-len(cursor) % 4)
        payload = base64.urlsafe_b64decode(padded).decode("utf-8")

        assert payload == "2024-01-02T00:00:00+00:00:b"

    def test_non_string_id_is_stringified(self):
        """Test that integer ids are encoded as text."""
        decoded = decode_cursor(encode_cursor(datetime(2024, 1, 1), 42))

        assert decoded.id == "42"

    def test_id_with_delimiter_rejected(self):
        """Test that ids containing the delimiter cannot be encoded."""
        with pytest.raises(ValueError, match="must not contain"):
            encode_cursor(datetime(2024, 1, 1), "user:42")

    @pytest.mark.parametrize("cursor", [
        "not-valid-base64!!!",
        "",
        None,
        "%%%%",
        "€uro",
        base64.urlsafe_b64encode(b"no delimiter here").decode("ascii"),
        base64.urlsafe_b64encode(b"not-a-date:abc").decode("ascii"),
        base64.urlsafe_b64encode(b"2024-01-01T00:00:00:").decode("ascii"),
        base64.urlsafe_b64encode(b":abc").decode("ascii"),
        base64.urlsafe_b64encode(b"\xff\xfe\xfd").decode("ascii"),
        base64.urlsafe_b64encode(b"2024-01-02T15:30:45.123456+00").decode("ascii"),
        base64.urlsafe_b64encode(b"2024-01-02T15:30:45Z:abc").decode("ascii"),
        encode_cursor(datetime(2024, 1, 2, 15, 30, 45, 123456, tzinfo=timezone.utc), "x")[:-3],
    ])
    def test_malformed_cursor_decodes_to_none(self, cursor):
        """Test that malformed cursors decode to None instead of raising."""
        assert decode_cursor(cursor) is None


class TestPaginateQueryResults:
    """Test paginate_query_results."""

    def _items(self, count):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        return [
            {"id": f"item-{i}", "created_at": base - timedelta(minutes=i)}
            for i in range(count)
        ]

    def test_full_page_has_next(self):
        """Test that a full page reports a next page with a cursor to its last item."""
        items = self._items(3)

        page = paginate_query_results(items, limit=3)

        assert page.items == items
        assert page.has_next_page is True
        assert page.next_cursor == encode_cursor(items[-1]["created_at"], items[-1]["id"])
        assert page.total_count is None

    def test_short_page_has_no_next(self):
        """Test that a short page has no next page or cursor."""
        page = paginate_query_results(self._items(2), limit=3)

        assert page.has_next_page is False
        assert page.next_cursor is None

    def test_empty_page(self):
        """Test that an empty page has no next page."""
        page = paginate_query_results([], limit=20, total_count=0)

        assert page.items == []
        assert page.has_next_page is False
        assert page.next_cursor is None
        assert page.total_count == 0

    def test_total_count_passed_through(self):
        """Test that total_count is attached unchanged."""
        page = paginate_query_results(self._items(1), limit=5, total_count=37)

        assert page.total_count == 37

    def test_lookahead_trims_extra_row(self):
        """Test lookahead mode with limit + 1 rows."""
        items = self._items(4)

        page = paginate_query_results(items, limit=3, lookahead=True)

        assert page.items == items[:3]
        assert page.has_next_page is True
        assert page.next_cursor == encode_cursor(items[2]["created_at"], items[2]["id"])

    def test_lookahead_exact_last_page(self):
        """Test lookahead mode reports no next page when the last page is exactly full."""
        items = self._items(3)

        page = paginate_query_results(items, limit=3, lookahead=True)

        assert page.items == items
        assert page.has_next_page is False
        assert page.next_cursor is None

    def test_attribute_items(self):
        """Test that items exposing attributes work like mappings."""
        created_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
        items = [SimpleNamespace(id="x", created_at=created_at)]

        page = paginate_query_results(items, limit=1)

        assert decode_cursor(page.next_cursor) == CursorData(created_at=created_at, id="x")


class TestPaginatedResponseSerialization:
    """Test the JSON shape of PaginatedResponse."""

    def test_camel_case_keys(self):
        """Test that responses serialise with camelCase keys."""
        page = PaginatedResponse(items=[1, 2], next_cursor="abc", has_next_page=True, total_count=10)

        data = page.model_dump(by_alias=True)

        assert data == {"items": [1, 2], "nextCursor": "abc", "hasNextPage": True, "totalCount": 10}

    def test_absent_metadata_is_omitted(self):
        """Test that nextCursor and totalCount are left out when absent."""
        page = PaginatedResponse(items=[], has_next_page=False)

        data = page.model_dump(by_alias=True)

        assert data == {"items": [], "hasNextPage": False}

    def test_accepts_camel_case_input(self):
        """Test that camelCase input populates the model."""
        page = PaginatedResponse.model_validate({"items": [], "hasNextPage": True, "nextCursor": "x"})

        assert page.has_next_page is True
        assert page.next_cursor == "x"


class TestSqlHelpers:
    """Test ORDER BY and Link header helpers."""

    def test_build_order_clause_desc(self):
        assert build_order_clause("desc") == "ORDER BY created_at DESC, id DESC"

    def test_build_order_clause_asc_with_prefix(self):
        assert build_order_clause("ASC", prefix="f.") == "ORDER BY f.created_at ASC, f.id ASC"

    def test_create_link_header(self):
        """Test Link header construction."""
        header = create_link_header(
            "http://testserver/v1/products",
            {"limit": "10", "cursor": "old", "q": "levi's 501"},
            next_cursor="abc-_"
        )

        assert header == '<http://testserver/v1/products?limit=10&q=levi%27s+501&cursor=abc-_>; rel="next"'

    def test_create_link_header_without_cursor(self):
        assert create_link_header("http://testserver/v1/products", {"limit": "10"}) is None
