"""Tests for re-ordering enriched items into ranked order."""

import random
from dataclasses import dataclass

from storefront.services.catalog.assembler import resort_by_rank


@dataclass
class _Item:
    catalog_id: str
    tag: str = ""


def _ids(items):
    return [item.catalog_id for item in items]


def test_follows_ranked_order():
    items = [_Item("48"), _Item("108"), _Item("7")]

    result = resort_by_rank(items, ["108", "7", "48"])

    assert _ids(result) == ["108", "7", "48"]


def test_unranked_items_go_last_in_original_order():
    items = [_Item("x1"), _Item("48"), _Item("x2"), _Item("108"), _Item("x3")]

    result = resort_by_rank(items, ["108", "48"])

    assert _ids(result) == ["108", "48", "x1", "x2", "x3"]


def test_first_occurrence_wins_for_duplicate_ranked_ids():
    items = [_Item("a"), _Item("b")]

    result = resort_by_rank(items, ["b", "a", "b"])

    assert _ids(result) == ["b", "a"]


def test_rows_sharing_an_id_keep_their_relative_order():
    items = [_Item("a", "first"), _Item("b"), _Item("a", "second")]

    result = resort_by_rank(items, ["a", "b"])

    assert [(item.catalog_id, item.tag) for item in result] == [
        ("a", "first"),
        ("a", "second"),
        ("b", ""),
    ]


def test_custom_key():
    rows = [{"id": "2"}, {"id": "1"}]

    result = resort_by_rank(rows, ["1", "2"], key=lambda row: row["id"])

    assert result == [{"id": "1"}, {"id": "2"}]


def test_random_inputs_respect_partition_and_order():
    rng = random.Random(99)
    pool = [str(n) for n in range(30)]
    for _ in range(50):
        ranked = rng.sample(pool, rng.randint(0, 20))
        items = [_Item(catalog_id) for catalog_id in rng.sample(pool, rng.randint(0, 30))]

        result = resort_by_rank(items, ranked)

        ranked_set = set(ranked)
        flags = [item.catalog_id in ranked_set for item in result]
        assert flags == sorted(flags, reverse=True)
        ranked_part = [item.catalog_id for item in result if item.catalog_id in ranked_set]
        assert ranked_part == [cid for cid in ranked if cid in set(ranked_part)]
        unranked_part = [item.catalog_id for item in result if item.catalog_id not in ranked_set]
        assert unranked_part == [
            item.catalog_id for item in items if item.catalog_id not in ranked_set
        ]
