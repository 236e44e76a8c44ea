# app/services/geocoding.py
# Resolves a free-text place name in Vietnam to coordinates with one Gemini call.

import structlog

from app.core.config import settings
from app.models.dto import Coordinates
from app.services.ai_client import TextCompletionClient
from app.services.errors import EmptyResponse, InvalidShape, MalformedJson, TransportFailure
from app.services.response_parsing import (
    LOCATION_FAILURE_DEFAULT,
    LOCATION_FAILURE_DETAILS,
    classify,
    is_finite_number,
    parse_json_payload,
)

logger = structlog.get_logger(__name__)

LOCATION_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "lat": {"type": "NUMBER", "description": "Vĩ độ của địa điểm"},
        "lng": {"type": "NUMBER", "description": "Kinh độ của địa điểm"},
    },
    "required": ["lat", "lng"],
}

INVALID_COORDINATES_MESSAGE = "Nhận được định dạng tọa độ không hợp lệ từ mô hình AI."


def build_location_prompt(location_name: str, country: str = settings.COUNTRY_NAME) -> str:
    return (
        f'Cung cấp tọa độ địa lý (vĩ độ và kinh độ) cho địa điểm: "{location_name}, {country}". '
        'Vui lòng chỉ trả về một đối tượng JSON với các khóa "lat" và "lng".'
    )


class CoordinateResolver:
    """Turns a place name into Coordinates.

    - One remote call per lookup, never retried.
    - EmptyResponse, MalformedJson and InvalidShape propagate unchanged.
    - TransportFailure is re-raised with a message naming the place and a
      detail picked by :func:`classify`.
    """

    def __init__(self, client: TextCompletionClient):
        self.client = client

    async def resolve(self, location_name: str) -> Coordinates:
        prompt = build_location_prompt(location_name)
        try:
            raw_text = await self.client.generate_json(prompt, LOCATION_SCHEMA)
        except TransportFailure as e:
            detail = classify(e.failure_text, LOCATION_FAILURE_DETAILS, LOCATION_FAILURE_DEFAULT)
            raise TransportFailure(
                f"Không thể lấy tọa độ cho {location_name}. {detail}",
                failure_text=e.failure_text,
                provider_status=e.provider_status,
            ) from e

        raw_text = (raw_text or "").strip()
        if not raw_text:
            logger.error("coordinates_empty_response", location=location_name)
            raise EmptyResponse()

        try:
            result = parse_json_payload(raw_text)
        except MalformedJson:
            logger.error("coordinates_parse_failed", location=location_name, raw_text=raw_text)
            raise

        if not isinstance(result, dict):
            logger.error("coordinates_not_an_object", location=location_name, result=result)
            raise InvalidShape(INVALID_COORDINATES_MESSAGE)

        lat = result.get("lat")
        lng = result.get("lng")
        if not (is_finite_number(lat) and is_finite_number(lng)):
            logger.error("coordinates_invalid_values", location=location_name, result=result)
            raise InvalidShape(INVALID_COORDINATES_MESSAGE)

        logger.info("coordinates_resolved", location=location_name, lat=lat, lng=lng)
        return Coordinates(latitude=lat, longitude=lng)
