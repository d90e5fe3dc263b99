"""FastAPI entrypoint and HTTP routes."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import AsyncIterator

from fastapi import Depends, FastAPI, Header, Request, Response, status
from fastapi.exceptions import HTTPException
from fastapi.responses import JSONResponse
import uvicorn

from styleai.api.genai_client import GenAIClient
from styleai.config.settings import StyleAISettings, get_settings
from styleai.imggen.try_on import TryOnError
from styleai.imgproc.encoding import InvalidImageError, decode_data_uri, to_jpeg_data_uri
from styleai.logic import InvalidRequestError
from styleai.monitoring.logging import configure_logging
from styleai.services.wardrobe import WardrobeService
from styleai.storage.models import ViewState
from styleai.storage.repository import validate_user_id
from styleai.web.schemas import (
    AddItemRequest,
    OutfitRequest,
    OutfitResponse,
    TrendsResponse,
    TryOnRequest,
    TryOnResponse,
    WardrobeResponse,
    WeatherResponse,
)

logger = logging.getLogger(__name__)

DEFAULT_USER_ID = "local"


def get_service(request: Request) -> WardrobeService:
    return request.app.state.service


def get_user_id(x_user_id: str = Header(default=DEFAULT_USER_ID)) -> str:
    try:
        return validate_user_id(x_user_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


def create_app(
    service: WardrobeService | None = None,
    settings: StyleAISettings | None = None,
) -> FastAPI:
    """Initialise the FastAPI application.

    When ``service`` is omitted a :class:`GenAIClient` is opened for the
    lifetime of the app and the service is wired from ``settings``.
    """

    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if service is not None:
            yield
            return
        configure_logging(settings.log_level)
        client = GenAIClient(settings)
        app.state.service = WardrobeService.from_settings(settings, client)
        try:
            yield
        finally:
            await client.close()

    app = FastAPI(
        title="StyleAI API",
        version="0.1.0",
        docs_url="/docs" if settings.environment != "prod" else None,
        redoc_url="/redoc" if settings.environment != "prod" else None,
        lifespan=lifespan,
    )
    if service is not None:
        app.state.service = service

    @app.exception_handler(InvalidRequestError)
    async def invalid_request_handler(_: Request, exc: InvalidRequestError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

    @app.exception_handler(TryOnError)
    async def try_on_failed_handler(_: Request, exc: TryOnError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)})

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple health endpoint used for readiness probes."""

        return {"status": "ok"}

    @app.get("/wardrobe", response_model=WardrobeResponse, tags=["wardrobe"])
    async def list_wardrobe(
        view: ViewState = ViewState.WARDROBE,
        user_id: str = Depends(get_user_id),
        service: WardrobeService = Depends(get_service),
    ) -> WardrobeResponse:
        """Clean (``wardrobe``) or dirty (``laundry``) items grouped by category."""

        result = service.view(user_id, view)
        return WardrobeResponse(
            view=result.view.value,
            total=result.total,
            dirty_count=result.dirty_count,
            groups=[
                {"category": category, "items": [item.to_record() for item in items]}
                for category, items in result.groups.items()
            ],
        )

    @app.post("/wardrobe/items", status_code=status.HTTP_201_CREATED, tags=["wardrobe"])
    async def add_item(
        body: AddItemRequest,
        user_id: str = Depends(get_user_id),
        service: WardrobeService = Depends(get_service),
    ) -> dict:
        try:
            photo, _ = decode_data_uri(body.image)
        except InvalidImageError as exc:
            raise InvalidRequestError("Nicio imagine selectată.") from exc
        item = await service.add_photo(user_id, photo)
        logger.info("Added item %s (%s) for %s", item.id, item.category.value, user_id)
        return item.to_record()

    @app.delete("/wardrobe/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["wardrobe"])
    async def delete_item(
        item_id: str,
        user_id: str = Depends(get_user_id),
        service: WardrobeService = Depends(get_service),
    ) -> Response:
        await service.remove(user_id, item_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.post("/wardrobe/items/{item_id}/toggle", tags=["wardrobe"])
    async def toggle_item(
        item_id: str,
        user_id: str = Depends(get_user_id),
        service: WardrobeService = Depends(get_service),
    ) -> dict:
        item = await service.toggle_clean(user_id, item_id)
        if item is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Articol inexistent.")
        return item.to_record()

    @app.get("/weather", response_model=WeatherResponse, tags=["stylist"])
    async def weather(
        location: str = settings.default_location,
        service: WardrobeService = Depends(get_service),
    ) -> WeatherResponse:
        snapshot = await service.logic.fetch_weather(location)
        return WeatherResponse(**asdict(snapshot))

    @app.post("/outfit", response_model=OutfitResponse, tags=["stylist"])
    async def outfit(
        body: OutfitRequest,
        user_id: str = Depends(get_user_id),
        service: WardrobeService = Depends(get_service),
    ) -> OutfitResponse:
        plan = await service.plan_outfit(user_id, body.location, body.occasion)
        return OutfitResponse(
            weather=WeatherResponse(**asdict(plan.weather)),
            name=plan.recommendation.name,
            reasoning=plan.recommendation.reasoning,
            selected_ids=plan.recommendation.selected_ids,
            items=[item.to_record() for item in plan.items],
        )

    @app.post("/try-on", response_model=TryOnResponse, tags=["stylist"])
    async def try_on(
        body: TryOnRequest,
        user_id: str = Depends(get_user_id),
        service: WardrobeService = Depends(get_service),
    ) -> TryOnResponse:
        person_image = body.person_image
        if person_image:
            try:
                photo, _ = decode_data_uri(person_image)
                person_image = to_jpeg_data_uri(photo)
            except InvalidImageError as exc:
                raise InvalidRequestError("Poza ta nu este o imagine validă.") from exc
        result = await service.try_on(user_id, person_image, body.item_ids)
        return TryOnResponse(image=result.image, image_path=result.image_path)

    @app.get("/trends", response_model=TrendsResponse, tags=["stylist"])
    async def trends(service: WardrobeService = Depends(get_service)) -> TrendsResponse:
        return TrendsResponse(text=await service.logic.fetch_trend_brief())

    return app


def run() -> None:
    """Serve the API with uvicorn."""

    uvicorn.run(
        create_app(),
        host=os.getenv("STYLEAI_HOST", "127.0.0.1"),
        port=int(os.getenv("STYLEAI_PORT", "8000")),
    )


if __name__ == "__main__":
    run()
