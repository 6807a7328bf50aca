"""
Saved Search API Endpoints

Owner-scoped CRUD for saved searches plus usage tracking. The query and
conditions payloads are stored and replayed verbatim; nothing here runs them.
"""

from typing import List

import structlog
from fastapi import APIRouter, HTTPException

from app.api.dependencies import (
    SavedSearchCreateBody,
    SavedSearchServiceDep,
    SavedSearchUpdateBody,
    map_domain_exception_to_http,
)
from app.api.schemas.saved_search_schemas import (
    DeleteResponse,
    SavedSearchCreate,
    SavedSearchResponse,
    SavedSearchUpdate,
)
from app.core.dependencies import CurrentUserDep
from app.domain.exceptions import DomainException

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/saved-searches", tags=["saved-searches"])


def _internal_error(operation: str, message: str, exc: Exception) -> HTTPException:
    logger.error(
        message,
        operation=operation,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return HTTPException(status_code=500, detail=message)


def _json_body(schema) -> dict:
    # Bodies are parsed by dependencies, so the OpenAPI schema is declared here.
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": schema.model_json_schema()}},
        }
    }


@router.get("", response_model=List[SavedSearchResponse])
async def list_saved_searches(
    current_user: CurrentUserDep,
    saved_search_service: SavedSearchServiceDep,
) -> List[SavedSearchResponse]:
    """
    List the caller's saved searches, most used first.
    """
    try:
        saved_searches = await saved_search_service.list_saved_searches(
            user_id=current_user.user_id,
        )
        return [SavedSearchResponse.from_entity(entity) for entity in saved_searches]

    except DomainException as domain_exc:
        raise map_domain_exception_to_http(domain_exc)
    except HTTPException:
        raise
    except Exception as exc:
        raise _internal_error("list_saved_searches", "Failed to fetch saved searches", exc)


@router.post(
    "",
    response_model=SavedSearchResponse,
    openapi_extra=_json_body(SavedSearchCreate),
)
async def create_saved_search(
    request: SavedSearchCreateBody,
    current_user: CurrentUserDep,
    saved_search_service: SavedSearchServiceDep,
) -> SavedSearchResponse:
    """
    Save a named search for the caller.

    The owner is always the authenticated user. Names are unique per user;
    reusing one returns 409.
    """
    try:
        saved_search = await saved_search_service.create_saved_search(
            user_id=current_user.user_id,
            name=request.name,
            query=request.query,
            description=request.description,
            conditions=request.conditions,
        )
        return SavedSearchResponse.from_entity(saved_search)

    except DomainException as domain_exc:
        raise map_domain_exception_to_http(domain_exc)
    except HTTPException:
        raise
    except Exception as exc:
        raise _internal_error("create_saved_search", "Failed to create saved search", exc)


@router.put(
    "/{search_id}",
    response_model=SavedSearchResponse,
    openapi_extra=_json_body(SavedSearchUpdate),
)
async def update_saved_search(
    search_id: str,
    request: SavedSearchUpdateBody,
    current_user: CurrentUserDep,
    saved_search_service: SavedSearchServiceDep,
) -> SavedSearchResponse:
    """
    Replace name, description, query and conditions of a saved search.

    Returns 404 when the caller owns no search with this id.
    """
    try:
        saved_search = await saved_search_service.update_saved_search(
            saved_search_id=search_id,
            user_id=current_user.user_id,
            name=request.name,
            description=request.description,
            query=request.query,
            conditions=request.conditions,
        )
        return SavedSearchResponse.from_entity(saved_search)

    except DomainException as domain_exc:
        raise map_domain_exception_to_http(domain_exc)
    except HTTPException:
        raise
    except Exception as exc:
        raise _internal_error("update_saved_search", "Failed to update saved search", exc)


@router.delete("/{search_id}", response_model=DeleteResponse)
async def delete_saved_search(
    search_id: str,
    current_user: CurrentUserDep,
    saved_search_service: SavedSearchServiceDep,
) -> DeleteResponse:
    """
    Delete a saved search.

    Always acknowledges success, including for ids the caller does not own.
    """
    try:
        await saved_search_service.delete_saved_search(
            saved_search_id=search_id,
            user_id=current_user.user_id,
        )
        return DeleteResponse(success=True)

    except DomainException as domain_exc:
        raise map_domain_exception_to_http(domain_exc)
    except HTTPException:
        raise
    except Exception as exc:
        raise _internal_error("delete_saved_search", "Failed to delete saved search", exc)


@router.post("/{search_id}/use", response_model=SavedSearchResponse)
async def record_saved_search_usage(
    search_id: str,
    current_user: CurrentUserDep,
    saved_search_service: SavedSearchServiceDep,
) -> SavedSearchResponse:
    """
    Record that a saved search was run: bump use_count and stamp last_used.

    An id the caller does not own gives 404. Earlier releases answered it with
    a generic 500.
    """
    try:
        saved_search = await saved_search_service.record_usage(
            saved_search_id=search_id,
            user_id=current_user.user_id,
        )
        return SavedSearchResponse.from_entity(saved_search)

    except DomainException as domain_exc:
        raise map_domain_exception_to_http(domain_exc)
    except HTTPException:
        raise
    except Exception as exc:
        raise _internal_error("record_saved_search_usage", "Failed to update search usage", exc)
