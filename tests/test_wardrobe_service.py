"""Tests for the wardrobe service facade used by the front ends."""

from __future__ import annotations

import pytest
import pytest_mock

from styleai.api.genai_client import GenAIClient
from styleai.imggen.try_on import TryOnService
from styleai.logic import InvalidRequestError, StylistLogic
from styleai.services.wardrobe import WardrobeService
from styleai.storage.models import Category, Occasion, TryOnResult, ViewState
from styleai.storage.repository import WardrobeRepository


@pytest.fixture
def client(mocker: pytest_mock.MockerFixture):
    client = mocker.create_autospec(GenAIClient, instance=True)
    client.chat_json = mocker.AsyncMock()
    return client


@pytest.fixture
def try_on_service(mocker: pytest_mock.MockerFixture):
    service = mocker.create_autospec(TryOnService, instance=True)
    service.generate = mocker.AsyncMock(return_value=TryOnResult(image="data:image/png;base64,AA"))
    return service


@pytest.fixture
def service(repository: WardrobeRepository, client, try_on_service) -> WardrobeService:
    return WardrobeService(repository, StylistLogic(client, try_on_service))


@pytest.mark.asyncio
async def test_add_photo_classifies_and_stores(service: WardrobeService, client, photo: bytes) -> None:
    client.chat_json.return_value = {"category": "Încălțăminte", "description": "adidași albi"}

    item = await service.add_photo("u", photo)

    stored = service.store("u").items
    assert stored == [item]
    assert item.category is Category.FOOTWEAR


@pytest.mark.asyncio
async def test_views_group_and_count(service: WardrobeService, make_item) -> None:
    store = service.store("u")
    store.add(make_item("1", Category.PANTS))
    store.add(make_item("2", Category.TOPS, is_clean=False))
    store.add(make_item("3", Category.TOPS))

    wardrobe = service.view("u", ViewState.WARDROBE)
    laundry = service.view("u", ViewState.LAUNDRY)

    assert list(wardrobe.groups) == [Category.TOPS.value, Category.PANTS.value]
    assert wardrobe.total == 2
    assert laundry.total == 1
    assert wardrobe.dirty_count == laundry.dirty_count == 1


def test_non_listing_view_is_rejected(service: WardrobeService) -> None:
    with pytest.raises(InvalidRequestError):
        service.view("u", ViewState.TRENDS)


@pytest.mark.asyncio
async def test_toggle_and_remove(service: WardrobeService, make_item) -> None:
    service.store("u").add(make_item("1"))

    toggled = await service.toggle_clean("u", "1")
    assert toggled is not None and toggled.is_clean is False
    assert await service.toggle_clean("u", "missing") is None

    await service.remove("u", "1")
    assert service.store("u").items == []


@pytest.mark.asyncio
async def test_plan_outfit_refreshes_weather_and_resolves_items(
    service: WardrobeService, client, make_item
) -> None:
    service.store("u").add(make_item("1"))
    service.store("u").add(make_item("2", Category.PANTS))
    client.chat_json.side_effect = [
        {"temp": 22, "condition": "Însorit", "location": "Constanța"},
        {"selectedItemIds": ["2", "1"], "outfitName": "La mare", "reasoning": "E cald."},
    ]

    plan = await service.plan_outfit("u", "Constanta", Occasion.FRIENDS)

    assert plan.weather.location == "Constanța"
    assert plan.recommendation.name == "La mare"
    assert [item.id for item in plan.items] == ["2", "1"]


@pytest.mark.asyncio
async def test_try_on_rejects_unknown_items(service: WardrobeService, try_on_service, make_item) -> None:
    service.store("u").add(make_item("1"))

    with pytest.raises(InvalidRequestError):
        await service.try_on("u", "data:image/jpeg;base64,AA", ["1", "gone"])

    try_on_service.generate.assert_not_awaited()


@pytest.mark.asyncio
async def test_try_on_passes_selected_items(service: WardrobeService, try_on_service, make_item) -> None:
    service.store("u").add(make_item("1"))
    service.store("u").add(make_item("2"))

    result = await service.try_on("u", "data:image/jpeg;base64,AA", ["2", "2", "1"])

    assert result.image == "data:image/png;base64,AA"
    _, _, items = try_on_service.generate.await_args.args
    assert [item.id for item in items] == ["2", "1"]


@pytest.mark.asyncio
async def test_reset_clears_wardrobe(service: WardrobeService, make_item) -> None:
    service.store("u").add(make_item("1"))

    await service.reset("u")

    assert service.store("u").items == []
