"""
FastAPI application for itemkeeper.

Thin transport binding: builds pipeline requests from HTTP calls, runs the
pipeline, and maps pipeline failures to status codes. All rules live in
the pipelines.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from itemkeeper.auth.directory import IdentityDirectory, InMemoryDirectory
from itemkeeper.auth.tokens import TokenError, decode_identity_token
from itemkeeper.config import Settings, configure_logging, get_settings
from itemkeeper.core.models import User
from itemkeeper.integrations.sentry import capture_pipeline_failure, init_sentry
from itemkeeper.pipeline.exceptions import ServicePipelineException, ValidationException
from itemkeeper.services.items import (
    CreateItemRequest,
    CreateItemService,
    DeleteItemRequest,
    DeleteItemService,
    GetItemRequest,
    GetItemService,
    ListItemsRequest,
    ListItemsService,
    UpdateItemRequest,
    UpdateItemService,
)
from itemkeeper.storage import InMemoryItemStore, ItemStore


# =============================================================================
# Request Models
# =============================================================================


class CreateItemBody(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    message: str | None = None
    team_id: str | None = None
    access_level: str | None = None


class UpdateItemBody(BaseModel):
    message: str | None = None


# =============================================================================
# Error Mapping
# =============================================================================


def status_for_validation_failure(exc: ValidationException) -> int:
    """404 for a missing item, 403 for a denied access decision, else 400."""
    fields = {e.field for e in exc.result.errors}
    if "business.item" in fields:
        return 404
    if "business.permission" in fields:
        return 403
    return 400


async def _validation_failure(request: Request, exc: ValidationException) -> JSONResponse:
    body: dict[str, Any] = {"error": "Validation failed", "requestId": exc.get_context("requestId")}
    body.update(exc.result.to_api_response().model_dump())
    return JSONResponse(status_code=status_for_validation_failure(exc), content=body)


async def _pipeline_failure(request: Request, exc: ServicePipelineException) -> JSONResponse:
    # Server-side: no collaborator details in the body
    capture_pipeline_failure(exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "requestId": exc.get_context("requestId")},
    )


# =============================================================================
# Dependencies
# =============================================================================


optional_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(optional_bearer),
) -> User:
    if not credentials:
        raise HTTPException(status_code=401, detail="Authentication required")
    try:
        claims = decode_identity_token(credentials.credentials, request.app.state.settings)
    except TokenError as e:
        raise HTTPException(status_code=401, detail=str(e)) from e
    return await request.app.state.directory.resolve_user(claims)


# =============================================================================
# App Factory
# =============================================================================


def create_app(
    store: ItemStore | None = None,
    directory: IdentityDirectory | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the app around the given collaborators (in-memory by default)."""
    settings = settings or get_settings()
    store = store or InMemoryItemStore()
    directory = directory or InMemoryDirectory()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings)
        init_sentry(settings)
        yield

    app = FastAPI(
        title="itemkeeper",
        description="Items with individual, team and public access",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.directory = directory
    app.state.create_item = CreateItemService(store, directory, settings)
    app.state.list_items = ListItemsService(store, directory, settings)
    app.state.get_item = GetItemService(store, directory, settings)
    app.state.update_item = UpdateItemService(store, directory, settings)
    app.state.delete_item = DeleteItemService(store, directory, settings)

    app.add_exception_handler(ValidationException, _validation_failure)
    app.add_exception_handler(ServicePipelineException, _pipeline_failure)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "healthy"}

    @app.post("/items", status_code=201)
    async def create_item(
        body: CreateItemBody,
        request: Request,
        user: User = Depends(get_current_user),
    ) -> dict[str, Any]:
        return await request.app.state.create_item.execute(CreateItemRequest(
            user=user,
            message=body.message,
            team_id=body.team_id,
            access_level=body.access_level,
        ))

    @app.get("/items")
    async def list_items(
        request: Request,
        limit: int | None = None,
        sort_order: str | None = Query(None, alias="sortOrder"),
        last_evaluated_key: str | None = Query(None, alias="lastEvaluatedKey"),
        team_id: str | None = Query(None, alias="teamId"),
        user: User = Depends(get_current_user),
    ) -> dict[str, Any]:
        return await request.app.state.list_items.execute(ListItemsRequest(
            user=user,
            limit=limit,
            sort_order=sort_order,
            last_evaluated_key=last_evaluated_key,
            team_id=team_id,
        ))

    @app.get("/items/{item_id}")
    async def get_item(
        item_id: str,
        request: Request,
        user: User = Depends(get_current_user),
    ) -> dict[str, Any]:
        return await request.app.state.get_item.execute(GetItemRequest(user=user, item_id=item_id))

    @app.put("/items/{item_id}")
    async def update_item(
        item_id: str,
        body: UpdateItemBody,
        request: Request,
        user: User = Depends(get_current_user),
    ) -> dict[str, Any]:
        return await request.app.state.update_item.execute(UpdateItemRequest(
            user=user,
            item_id=item_id,
            message=body.message,
        ))

    @app.delete("/items/{item_id}")
    async def delete_item(
        item_id: str,
        request: Request,
        user: User = Depends(get_current_user),
    ) -> dict[str, Any]:
        return await request.app.state.delete_item.execute(DeleteItemRequest(user=user, item_id=item_id))

    return app
