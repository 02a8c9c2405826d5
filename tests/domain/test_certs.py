"""Tests for certificate cache parsing, filtering, and dashboard buckets."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

import pytest

from doomsday.domain.certs import dashboard_buckets, filter_items, parse_cache
from doomsday.domain.errors import APIError
from tests.conftest import NOW, cert


def _items():
    return parse_cache(
        {
            "content": [
                cert("month", 20),
                cert("expired", -1),
                cert("soon", 1),
                cert("week", 5),
                cert("fine", 90),
            ]
        }
    )


class TestParseCache:
    def test_sorted_by_expiry(self) -> None:
        names = [item.common_name for item in _items()]
        assert names == ["expired", "soon", "week", "month", "fine"]

    def test_empty_payload(self) -> None:
        assert parse_cache({}) == []
        assert parse_cache({"content": None}) == []

    @pytest.mark.parametrize(
        "payload",
        [
            {"content": [{"common_name": "x"}]},
            {"content": ["not-a-mapping"]},
            {"content": {"common_name": "x", "not_after": 1}},
            {"content": [{"common_name": "x", "not_after": "soon"}]},
        ],
    )
    def test_malformed_payload(self, payload: dict[str, Any]) -> None:
        with pytest.raises(APIError, match="unexpected cache payload"):
            parse_cache(payload)

    def test_paths_parsed(self) -> None:
        item = parse_cache({"content": [cert("a", 1, backend="credhub")]})[0]
        assert item.paths[0].backend == "credhub"
        assert item.paths[0].location == "secret/a"

    def test_row_flags_expired(self) -> None:
        rows = {item.common_name: item.to_row(NOW) for item in _items()}
        assert rows["expired"]["expired"] is True
        assert rows["soon"]["expired"] is False
        assert rows["soon"]["remaining_seconds"] == 24 * 60 * 60


class TestFilterItems:
    def test_no_filters(self) -> None:
        assert len(filter_items(_items(), NOW)) == 5

    def test_within(self) -> None:
        kept = filter_items(_items(), NOW, within=timedelta(days=7))
        assert [i.common_name for i in kept] == ["expired", "soon", "week"]

    def test_beyond(self) -> None:
        kept = filter_items(_items(), NOW, beyond=timedelta(days=7))
        assert [i.common_name for i in kept] == ["month", "fine"]

    def test_window(self) -> None:
        kept = filter_items(_items(), NOW, beyond=timedelta(days=2), within=timedelta(days=30))
        assert [i.common_name for i in kept] == ["week", "month"]


class TestDashboardBuckets:
    def test_bucketing(self) -> None:
        buckets, healthy = dashboard_buckets(_items(), NOW)
        assert [i.common_name for i in buckets["expired"]] == ["expired"]
        assert [i.common_name for i in buckets["48h"]] == ["soon"]
        assert [i.common_name for i in buckets["7d"]] == ["week"]
        assert [i.common_name for i in buckets["28d"]] == ["month"]
        assert healthy == 1

    def test_empty(self) -> None:
        buckets, healthy = dashboard_buckets([], NOW)
        assert all(not v for v in buckets.values())
        assert healthy == 0
