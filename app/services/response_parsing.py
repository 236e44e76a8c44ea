# app/services/response_parsing.py
"""Helpers shared by the coordinate resolver and the POI lister.

The model is asked for JSON through a response schema, but it still
occasionally wraps the payload in a markdown code fence, so every response
goes through :func:`strip_markdown_fences` before :func:`parse_json_payload`.
"""

import json
import math
import re
from typing import Any, Sequence, Tuple

from app.services.errors import MalformedJson

_FENCE_OPEN = re.compile(r"^```json\s*")
_FENCE_CLOSE = re.compile(r"```$")

NETWORK_DETAIL = "Lỗi mạng. Vui lòng kiểm tra kết nối internet của bạn."
INVALID_KEY_DETAIL = "API key không hợp lệ. Vui lòng đảm bảo biến môi trường GEMINI_API_KEY được đặt chính xác."
SERVER_DETAIL = "Lỗi máy chủ từ dịch vụ AI (lỗi 500). Vui lòng thử lại sau."

# (substring, message) pairs, matched in order against the lower-cased failure text.
LOCATION_FAILURE_DETAILS: Tuple[Tuple[str, str], ...] = (
    ("api key not valid", INVALID_KEY_DETAIL),
    ("403", "Lỗi xác thực (lỗi 403). Vui lòng kiểm tra API key và các quyền truy cập của nó (ví dụ: giới hạn IP hoặc referrer)."),
    ("400", "Yêu cầu không hợp lệ (lỗi 400). Tên địa điểm có thể không được chấp nhận."),
    ("500", SERVER_DETAIL),
    ("fetch", NETWORK_DETAIL),
    ("connect", NETWORK_DETAIL),
    ("timed out", NETWORK_DETAIL),
)
LOCATION_FAILURE_DEFAULT = "Địa điểm có thể không hợp lệ hoặc đã xảy ra lỗi kết nối."

POI_FAILURE_DETAILS: Tuple[Tuple[str, str], ...] = (
    ("api key not valid", INVALID_KEY_DETAIL),
    ("403", "Lỗi xác thực (lỗi 403). Vui lòng kiểm tra API key và các quyền truy cập của nó."),
    ("400", "Yêu cầu không hợp lệ (lỗi 400)."),
    ("500", SERVER_DETAIL),
    ("fetch", NETWORK_DETAIL),
    ("connect", NETWORK_DETAIL),
    ("timed out", NETWORK_DETAIL),
)
POI_FAILURE_DEFAULT = "Đã xảy ra lỗi khi truy xuất các điểm ưa thích."


def strip_markdown_fences(text: str) -> str:
    """Remove one leading ```json fence and one trailing ``` fence, then trim.

    A no-op on text that carries no fence.
    """
    text = _FENCE_OPEN.sub("", text.strip(), count=1)
    text = _FENCE_CLOSE.sub("", text, count=1)
    return text.strip()


def parse_json_payload(text: str) -> Any:
    """Strip fences and decode. Raises MalformedJson when the text is not JSON."""
    cleaned = strip_markdown_fences(text)
    try:
        return json.loads(cleaned)
    except ValueError as e:
        raise MalformedJson() from e


def is_finite_number(value: Any) -> bool:
    # bool is a subclass of int, but true/false are not coordinates
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        # json decodes long integer literals to arbitrary-precision ints
        return math.isfinite(float(value))
    except OverflowError:
        return False


def classify(failure_text: str, table: Sequence[Tuple[str, str]], default: str) -> str:
    """Pick the detail message for a transport failure.

    The first pair whose substring appears in the lower-cased ``failure_text``
    wins; ``default`` is returned when nothing matches.
    """
    lowered = (failure_text or "").lower()
    for needle, message in table:
        if needle in lowered:
            return message
    return default
