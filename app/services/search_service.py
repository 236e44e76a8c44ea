# app/services/search_service.py
# Holds the single live search result and runs the two lookups in sequence.

from typing import Optional

import structlog

from app.core.config import default_center, settings
from app.models.dto import Coordinates, SearchResult
from app.services.errors import EmptyQuery, ExplorerError, QueryTooLong
from app.services.geocoding import CoordinateResolver
from app.services.poi_service import POIService

logger = structlog.get_logger(__name__)

UNKNOWN_ERROR_MESSAGE = "Đã xảy ra lỗi không xác định. Vui lòng thử lại."


class SearchSession:
    """
    Drives one search at a time: resolve the place, then list nearby points.

    ``state`` is always replaced with a new SearchResult, never mutated. A
    failed search resets the center to the default location. Overlapping
    searches are not prevented; the last one to finish wins.
    """

    def __init__(
        self,
        resolver: CoordinateResolver,
        poi_service: POIService,
        fallback_center: Optional[Coordinates] = None,
    ):
        self.resolver = resolver
        self.poi_service = poi_service
        self.fallback_center = fallback_center or default_center()
        self.state = SearchResult(center=self.fallback_center)

    async def search(self, query: str) -> SearchResult:
        if not query or not query.strip():
            self.state = self.state.model_copy(update={"error": EmptyQuery.default_message})
            raise EmptyQuery()

        if len(query) > settings.MAX_QUERY_LENGTH:
            error = QueryTooLong(f"Tên địa điểm quá dài (tối đa {settings.MAX_QUERY_LENGTH} ký tự).")
            self.state = SearchResult(center=self.fallback_center, error=error.message, query=query)
            raise error

        self.state = SearchResult(center=self.state.center, is_loading=True, query=query)
        log = logger.bind(query=query)

        try:
            coords = await self.resolver.resolve(query)
            self.state = SearchResult(center=coords, is_loading=True, query=query)

            pois = await self.poi_service.list_points_of_interest(coords)
        except Exception as e:
            message = e.message if isinstance(e, ExplorerError) else UNKNOWN_ERROR_MESSAGE
            log.warning("search_failed", error=message, error_type=type(e).__name__)
            self.state = SearchResult(center=self.fallback_center, error=message, query=query)
            raise

        self.state = SearchResult(center=coords, points_of_interest=pois, query=query)
        log.info("search_completed", poi_count=len(pois))
        return self.state
