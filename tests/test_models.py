"""Tests for wardrobe domain types."""

from __future__ import annotations

import pytest

from styleai.storage.models import (
    Category,
    ClothingItem,
    InvalidRecordError,
    OutfitRecommendation,
    WeatherSnapshot,
    next_item_id,
)


def test_category_parse_accepts_only_known_labels() -> None:
    assert Category.parse("Pantaloni") is Category.PANTS
    assert Category.parse(Category.COATS) is Category.COATS
    with pytest.raises(ValueError):
        Category.parse("Rochii")


def test_category_coerce_defaults_to_tops() -> None:
    assert Category.coerce("Rochii") is Category.TOPS
    assert Category.coerce(None) is Category.TOPS
    assert Category.coerce("Jachete") is Category.JACKETS


def test_category_labels_cover_all_members() -> None:
    assert len(Category.labels()) == 8
    assert "Cap (Șapcă/Fes)" in Category.labels()


def test_created_items_are_clean_and_have_increasing_ids() -> None:
    first = ClothingItem.create("data:image/jpeg;base64,AA", Category.TOPS, "tricou alb")
    second = ClothingItem.create("data:image/jpeg;base64,AA", Category.PANTS, "blugi")

    assert first.is_clean and second.is_clean
    assert int(second.id) > int(first.id)


def test_next_item_id_never_repeats_for_same_timestamp() -> None:
    generated = {next_item_id(1_000) for _ in range(5)}

    assert len(generated) == 5


def test_record_round_trip(make_item) -> None:
    item = make_item("42", Category.HOODIES, is_clean=False)

    assert ClothingItem.from_record(item.to_record()) == item


def test_from_record_reports_missing_field(make_item) -> None:
    record = make_item("42").to_record()
    del record["isClean"]

    with pytest.raises(InvalidRecordError, match="isClean"):
        ClothingItem.from_record(record)


def test_from_record_rejects_boolean_timestamp(make_item) -> None:
    record = make_item("42").to_record()
    record["createdAt"] = True

    with pytest.raises(InvalidRecordError):
        ClothingItem.from_record(record)


def test_recommendation_resolve_skips_unknown_ids(make_item) -> None:
    items = [make_item("a"), make_item("b")]
    recommendation = OutfitRecommendation(selected_ids=["b", "x", "a"], name="n", reasoning="r")

    assert [item.id for item in recommendation.resolve(items)] == ["b", "a"]


def test_offline_weather_keeps_location() -> None:
    snapshot = WeatherSnapshot.offline("Iași")

    assert snapshot == WeatherSnapshot(temperature=0, condition="Offline", location="Iași")
    assert snapshot.describe() == "Iași: 0°C, Offline"
