# app/services/errors.py
"""Error taxonomy for the place search.

Every error carries a machine-readable ``code``, the HTTP status the API
answers with, and a Vietnamese ``message`` shown to the user as-is.
"""
from typing import Optional

from fastapi import status


class ExplorerError(Exception):
    code = "EXPLORER_ERROR"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Đã xảy ra lỗi không xác định. Vui lòng thử lại."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class EmptyQuery(ExplorerError):
    code = "EMPTY_QUERY"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Vui lòng nhập tên địa điểm."


class QueryTooLong(ExplorerError):
    code = "QUERY_TOO_LONG"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Tên địa điểm quá dài."


class EmptyResponse(ExplorerError):
    """The model answered with nothing but whitespace."""
    code = "EMPTY_RESPONSE"
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Mô hình AI đã trả về một phản hồi trống."


class MalformedJson(ExplorerError):
    """Text was returned but it is not JSON."""
    code = "MALFORMED_JSON"
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Mô hình AI đã trả về phản hồi JSON không hợp lệ."


class InvalidShape(ExplorerError):
    """JSON parsed but has the wrong structure."""
    code = "INVALID_SHAPE"
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Nhận được định dạng dữ liệu không hợp lệ từ mô hình AI."


class TransportFailure(ExplorerError):
    """The remote call itself failed (network, auth, HTTP status from the provider).

    ``failure_text`` keeps the raw provider text so callers can classify it;
    ``message`` is what the user sees.
    """
    code = "TRANSPORT_FAILURE"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Không thể kết nối tới dịch vụ AI."

    def __init__(self, message: Optional[str] = None, failure_text: str = "", provider_status: Optional[int] = None):
        super().__init__(message)
        self.failure_text = failure_text
        self.provider_status = provider_status
