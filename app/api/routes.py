# app/api/routes.py
# JSON endpoints used by the page: run a search, read back the current result.

from fastapi import APIRouter, Request, HTTPException, status, Depends
import logging

# Local imports
from app.models.dto import ErrorResponse, SearchRequest, SearchResult
from app.services.errors import ExplorerError
from app.services.search_service import SearchSession

router = APIRouter()
logger = logging.getLogger(__name__)

# ----------------------------------------------------------------------
# Search session dependency
# ----------------------------------------------------------------------
def get_search_session(request: Request) -> SearchSession:
    """Return the process-wide search session built during startup.

    The session is missing when GEMINI_API_KEY was not configured.
    """
    session = getattr(request.app.state, "search_session", None)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=ErrorResponse(
                error="AI_SERVICE_UNCONFIGURED",
                detail="Dịch vụ AI chưa được cấu hình. Vui lòng đặt biến môi trường GEMINI_API_KEY.",
            ).model_dump(),
        )
    return session

# ----------------------------------------------------------------------
# Search Endpoint
# ----------------------------------------------------------------------
@router.post(
    "/search",
    response_model=SearchResult,
    responses={
        400: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def search(
    data: SearchRequest,
    session: SearchSession = Depends(get_search_session),
):
    """Resolve the place name, then list the points of interest around it."""
    try:
        return await session.search(data.query)
    except ExplorerError as e:
        logger.warning(f"Search for {data.query!r} failed with {e.code}: {e.message}")
        raise HTTPException(
            status_code=e.status_code,
            detail=ErrorResponse(error=e.code, detail=e.message).model_dump(),
        )

# ----------------------------------------------------------------------
# Current Result Endpoint
# ----------------------------------------------------------------------
@router.get(
    "/result",
    response_model=SearchResult,
    responses={503: {"model": ErrorResponse}},
)
async def current_result(session: SearchSession = Depends(get_search_session)):
    """Everything needed to render the map and the sidebar."""
    return session.state
