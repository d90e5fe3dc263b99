"""Tests for the AI operations and their fallback policy."""

from __future__ import annotations

import pytest
import pytest_mock

from styleai.api.genai_client import GenAIClient, GenAIRequestError
from styleai.imggen.try_on import TryOnError, TryOnService
from styleai.logic import InvalidRequestError, StylistLogic
from styleai.storage.models import Category, Occasion, OutfitRecommendation, TryOnResult, WeatherSnapshot

WEATHER = WeatherSnapshot(temperature=18, condition="Senin", location="București")


@pytest.fixture
def client(mocker: pytest_mock.MockerFixture):
    client = mocker.create_autospec(GenAIClient, instance=True)
    client.chat_json = mocker.AsyncMock()
    client.chat_text = mocker.AsyncMock()
    return client


@pytest.fixture
def try_on_service(mocker: pytest_mock.MockerFixture):
    service = mocker.create_autospec(TryOnService, instance=True)
    service.generate = mocker.AsyncMock(return_value=TryOnResult(image="data:image/png;base64,AA"))
    return service


@pytest.fixture
def logic(client, try_on_service) -> StylistLogic:
    return StylistLogic(client, try_on_service)


@pytest.mark.asyncio
async def test_classify_returns_model_answer(logic: StylistLogic, client) -> None:
    client.chat_json.return_value = {"category": "Pantaloni", "description": "blugi albaștri drepți"}

    analysis = await logic.classify_item("data:image/jpeg;base64,AA")

    assert analysis.category is Category.PANTS
    assert analysis.description == "blugi albaștri drepți"


@pytest.mark.asyncio
async def test_classify_unknown_category_falls_back_to_tops(logic: StylistLogic, client) -> None:
    client.chat_json.return_value = {"category": "Rochii", "description": ""}

    analysis = await logic.classify_item("data:image/jpeg;base64,AA")

    assert analysis.category is Category.TOPS
    assert analysis.description == "Articol vestimentar"


@pytest.mark.asyncio
async def test_classify_failure_uses_defaults(logic: StylistLogic, client) -> None:
    client.chat_json.side_effect = GenAIRequestError("down")

    analysis = await logic.classify_item("data:image/jpeg;base64,AA")

    assert (analysis.category, analysis.description) == (Category.TOPS, "Articol nou")


@pytest.mark.asyncio
async def test_create_item_rejects_non_images(logic: StylistLogic, client) -> None:
    with pytest.raises(InvalidRequestError):
        await logic.create_item(b"definitely not an image")

    client.chat_json.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_item_builds_clean_item(logic: StylistLogic, client, photo: bytes) -> None:
    client.chat_json.return_value = {"category": "Hanorace", "description": "hanorac gri"}

    item = await logic.create_item(photo)

    assert item.image.startswith("data:image/jpeg;base64,")
    assert item.category is Category.HOODIES
    assert item.is_clean is True


@pytest.mark.asyncio
async def test_weather_fills_missing_fields(logic: StylistLogic, client) -> None:
    client.chat_json.return_value = {"temp": 7}

    snapshot = await logic.fetch_weather("Brașov")

    assert snapshot == WeatherSnapshot(temperature=7, condition="Indisponibil", location="Brașov")


@pytest.mark.asyncio
async def test_weather_failure_is_offline(logic: StylistLogic, client) -> None:
    client.chat_json.side_effect = GenAIRequestError("timeout")

    assert await logic.fetch_weather("Brașov") == WeatherSnapshot.offline("Brașov")


@pytest.mark.asyncio
async def test_weather_with_unparsable_temperature_is_offline(logic: StylistLogic, client) -> None:
    client.chat_json.return_value = {"temp": "cald", "condition": "Soare"}

    assert await logic.fetch_weather("Sibiu") == WeatherSnapshot.offline("Sibiu")


@pytest.mark.asyncio
@pytest.mark.parametrize("location", ["", "   "])
async def test_blank_location_is_rejected_before_calling(logic: StylistLogic, client, location: str) -> None:
    with pytest.raises(InvalidRequestError):
        await logic.fetch_weather(location)

    client.chat_json.assert_not_awaited()


@pytest.mark.asyncio
async def test_outfit_uses_only_clean_items(logic: StylistLogic, client, make_item) -> None:
    wardrobe = [make_item("a"), make_item("b", is_clean=False), make_item("c", Category.PANTS)]
    client.chat_json.return_value = {
        "selectedItemIds": ["a", "b", "ghost", "c", "a"],
        "outfitName": "Plimbare în parc",
        "reasoning": "Confortabil.",
    }

    recommendation = await logic.recommend_outfit(WEATHER, wardrobe, Occasion.CASUAL)

    assert recommendation == OutfitRecommendation(
        selected_ids=["a", "c"],
        name="Plimbare în parc",
        reasoning="Confortabil.",
    )
    prompt = client.chat_json.await_args.args[0][-1]["content"]
    assert "ID: b" not in prompt


@pytest.mark.asyncio
async def test_outfit_accepts_numeric_ids(logic: StylistLogic, client, make_item) -> None:
    wardrobe = [make_item("1700000000001"), make_item("1700000000002")]
    client.chat_json.return_value = {
        "selectedItemIds": [1700000000002, "1700000000001"],
        "outfitName": "Birou",
        "reasoning": "Sobru.",
    }

    recommendation = await logic.recommend_outfit(WEATHER, wardrobe, Occasion.OFFICE)

    assert recommendation.selected_ids == ["1700000000002", "1700000000001"]
    assert recommendation.name == "Birou"


@pytest.mark.asyncio
async def test_outfit_without_clean_clothes_falls_back(logic: StylistLogic, client, make_item) -> None:
    recommendation = await logic.recommend_outfit(WEATHER, [make_item("a", is_clean=False)], Occasion.SPORT)

    assert recommendation == OutfitRecommendation.fallback()
    client.chat_json.assert_not_awaited()


@pytest.mark.asyncio
async def test_outfit_with_incomplete_answer_falls_back(logic: StylistLogic, client, make_item) -> None:
    client.chat_json.return_value = {"outfitName": "?"}

    recommendation = await logic.recommend_outfit(WEATHER, [make_item("a")], Occasion.DATE)

    assert recommendation.name == "Eroare"
    assert recommendation.reasoning == "Verifică garderoba."


@pytest.mark.asyncio
async def test_try_on_requires_photo_and_items(logic: StylistLogic, try_on_service, make_item) -> None:
    with pytest.raises(InvalidRequestError):
        await logic.synthesize_try_on("u", None, [make_item("a")])
    with pytest.raises(InvalidRequestError):
        await logic.synthesize_try_on("u", "data:image/jpeg;base64,AA", [])
    with pytest.raises(InvalidRequestError):
        await logic.synthesize_try_on("u", "data:image/jpeg;base64,AA", [make_item("a", is_clean=False)])

    try_on_service.generate.assert_not_awaited()


@pytest.mark.asyncio
async def test_try_on_failure_propagates(logic: StylistLogic, try_on_service, make_item) -> None:
    try_on_service.generate.side_effect = TryOnError("no image")

    with pytest.raises(TryOnError):
        await logic.synthesize_try_on("u", "data:image/jpeg;base64,AA", [make_item("a")])


@pytest.mark.asyncio
async def test_try_on_returns_generated_image(logic: StylistLogic, try_on_service, make_item) -> None:
    result = await logic.synthesize_try_on("u", "data:image/jpeg;base64,AA", [make_item("a")])

    assert result.image == "data:image/png;base64,AA"
    try_on_service.generate.assert_awaited_once()


@pytest.mark.asyncio
async def test_trend_brief_fallbacks(logic: StylistLogic, client) -> None:
    client.chat_text.return_value = "Culorile pământii revin."
    assert await logic.fetch_trend_brief() == "Culorile pământii revin."

    client.chat_text.return_value = ""
    assert await logic.fetch_trend_brief() == "Indisponibil."

    client.chat_text.side_effect = GenAIRequestError("down")
    assert await logic.fetch_trend_brief() == "Nu s-au putut încărca trendurile."
