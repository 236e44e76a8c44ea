# app/services/poi_service.py
# Lists popular points of interest near a coordinate pair with one Gemini call.

from typing import Any, List, Optional

import structlog

from app.core.config import settings
from app.models.dto import Coordinates, PointOfInterest
from app.services.ai_client import TextCompletionClient
from app.services.errors import InvalidShape, MalformedJson, TransportFailure
from app.services.response_parsing import (
    POI_FAILURE_DEFAULT,
    POI_FAILURE_DETAILS,
    classify,
    is_finite_number,
    parse_json_payload,
)

logger = structlog.get_logger(__name__)

POI_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "name": {"type": "STRING", "description": "Tên của địa điểm ưa thích."},
            "description": {"type": "STRING", "description": "Mô tả ngắn gọn trong một câu."},
            "coordinates": {
                "type": "OBJECT",
                "properties": {
                    "lat": {"type": "NUMBER"},
                    "lng": {"type": "NUMBER"},
                },
                "required": ["lat", "lng"],
            },
        },
        "required": ["name", "description", "coordinates"],
    },
}

NOT_AN_ARRAY_MESSAGE = "Nhận được định dạng POI không hợp lệ từ mô hình AI (dự kiến là một mảng)."


def build_poi_prompt(coords: Coordinates, count: int = settings.POI_COUNT, country: str = settings.COUNTRY_NAME) -> str:
    return (
        f"Liệt kê chính xác {count} điểm ưa thích phổ biến và thú vị gần vĩ độ {coords.latitude}, "
        f"kinh độ {coords.longitude} ở {country}. Cung cấp một danh sách đa dạng "
        "(ví dụ: di tích lịch sử, kỳ quan thiên nhiên, điểm văn hóa). Đối với mỗi điểm, bao gồm tên, "
        "mô tả ngắn gọn trong một câu, và vĩ độ và kinh độ chính xác của nó. "
        "Phản hồi bằng một mảng JSON gồm các đối tượng."
    )


def normalize_poi(item: Any) -> Optional[PointOfInterest]:
    """Return a PointOfInterest for a well-formed entry, None for anything else."""
    if not isinstance(item, dict):
        return None
    name = item.get("name")
    description = item.get("description")
    coordinates = item.get("coordinates")
    if not isinstance(name, str) or not name.strip():
        return None
    if not isinstance(description, str):
        return None
    if not isinstance(coordinates, dict):
        return None
    lat = coordinates.get("lat")
    lng = coordinates.get("lng")
    if not (is_finite_number(lat) and is_finite_number(lng)):
        return None
    return PointOfInterest(
        name=name,
        description=description,
        coordinates=Coordinates(latitude=lat, longitude=lng),
    )


class POIService:
    """Service layer for the points of interest shown on the map.

    - Sends one prompt asking for ``POI_COUNT`` places near the coordinates.
    - An empty answer means "nothing found" and yields an empty list.
    - Malformed entries are dropped one by one; the rest keep the model's order.
    """

    def __init__(self, client: TextCompletionClient):
        self.client = client

    async def list_points_of_interest(self, coords: Coordinates) -> List[PointOfInterest]:
        prompt = build_poi_prompt(coords)
        try:
            raw_text = await self.client.generate_json(prompt, POI_SCHEMA)
        except TransportFailure as e:
            raise TransportFailure(
                classify(e.failure_text, POI_FAILURE_DETAILS, POI_FAILURE_DEFAULT),
                failure_text=e.failure_text,
                provider_status=e.provider_status,
            ) from e

        raw_text = (raw_text or "").strip()
        if not raw_text:
            logger.warning("poi_empty_response", lat=coords.latitude, lng=coords.longitude)
            return []

        try:
            results = parse_json_payload(raw_text)
        except MalformedJson:
            logger.error("poi_parse_failed", raw_text=raw_text)
            raise

        if not isinstance(results, list):
            logger.error("poi_not_an_array", result=results)
            raise InvalidShape(NOT_AN_ARRAY_MESSAGE)

        valid_pois: List[PointOfInterest] = []
        for item in results:
            poi = normalize_poi(item)
            if poi is None:
                logger.warning("poi_filtered_out", item=item)
                continue
            valid_pois.append(poi)

        logger.info("poi_listed", returned=len(results), kept=len(valid_pois))
        return valid_pois
