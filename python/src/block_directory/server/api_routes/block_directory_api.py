"""
Block directory API endpoints.

Exposes the block directory search as a read-only collection endpoint.
"""

from typing import Any, Literal

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from ...catalog.models import CatalogQuery
from ...config import DirectorySettings
from ...directory.models import item_schema
from ...directory.permissions import CallerContext
from ...directory.service import BlockDirectoryService
from ...errors import BlockDirectoryError

NAMESPACE = "wp/v2"
REST_BASE = "block-directory"

router = APIRouter(prefix=f"/{NAMESPACE}/{REST_BASE}", tags=["block-directory"])


def get_directory_service(request: Request) -> BlockDirectoryService:
    """Resolve the service wired into the running app."""
    return request.app.state.directory_service


def get_caller(request: Request) -> CallerContext:
    """Resolve the caller using the host-provided resolver."""
    return request.app.state.caller_resolver(request)


def collection_params(settings: DirectorySettings) -> dict[str, Any]:
    """Describe the query arguments accepted by the search endpoint."""
    return {
        "context": {
            "description": "Scope under which the request is made; determines fields present in response.",
            "type": "string",
            "enum": ["view"],
            "default": "view"
        },
        "page": {
            "description": "Current page of the collection.",
            "type": "integer",
            "default": 1,
            "minimum": 1
        },
        "per_page": {
            "description": "Maximum number of items to be returned in result set.",
            "type": "integer",
            "default": settings.default_per_page,
            "minimum": 1,
            "maximum": settings.max_per_page
        },
        "term": {
            "description": "Limit result set to blocks matching the search term.",
            "type": "string",
            "required": True,
            "minLength": 1
        }
    }


@router.get("/search")
async def search_blocks(
    term: str = Query(..., min_length=1, description="Limit result set to blocks matching the search term."),
    page: int = Query(1, ge=1, description="Current page of the collection."),
    per_page: int | None = Query(None, ge=1,
                                 description="Maximum number of items to be returned in result set."),
    context: Literal["view"] = Query("view"),
    service: BlockDirectoryService = Depends(get_directory_service),
    caller: CallerContext = Depends(get_caller)
):
    """Search the block catalog for installable blocks."""
    settings = service.settings
    if per_page is None:
        per_page = settings.default_per_page
    elif per_page > settings.max_per_page:
        message = f"per_page must be between 1 and {settings.max_per_page}"
        raise BlockDirectoryError(message, code="rest_invalid_param", status_code=400,
                                  data={"params": {"per_page": message}})

    try:
        query = CatalogQuery(term=term, page=page, per_page=per_page,
                             max_per_page=settings.max_per_page)
    except ValueError as e:
        raise BlockDirectoryError(str(e), code="rest_invalid_param", status_code=400)

    result = await service.search(query, caller)

    return JSONResponse(
        content=result.to_response(),
        headers={
            "X-WP-Total": str(result.total),
            "X-WP-TotalPages": str(result.total_pages)
        }
    )


@router.options("/search")
async def describe_search(service: BlockDirectoryService = Depends(get_directory_service)):
    """Describe the search route, its arguments and the item schema."""
    return {
        "namespace": NAMESPACE,
        "methods": ["GET"],
        "endpoints": [
            {
                "methods": ["GET"],
                "args": collection_params(service.settings)
            }
        ],
        "schema": item_schema()
    }
