import pytest

from app.services.errors import MalformedJson
from app.services.response_parsing import (
    INVALID_KEY_DETAIL,
    LOCATION_FAILURE_DEFAULT,
    LOCATION_FAILURE_DETAILS,
    NETWORK_DETAIL,
    POI_FAILURE_DEFAULT,
    POI_FAILURE_DETAILS,
    classify,
    is_finite_number,
    parse_json_payload,
    strip_markdown_fences,
)


def test_strip_fences_removes_json_fence():
    assert strip_markdown_fences('```json\n{"lat": 1, "lng": 2}\n```') == '{"lat": 1, "lng": 2}'


def test_strip_fences_is_noop_on_clean_input():
    clean = '{"lat":1,"lng":2}'
    assert strip_markdown_fences(clean) == clean
    assert strip_markdown_fences(strip_markdown_fences(clean)) == clean


def test_fenced_and_clean_parse_identically():
    assert parse_json_payload('```json {"lat":1,"lng":2} ```') == parse_json_payload('{"lat":1,"lng":2}')


def test_strip_fences_keeps_internal_content():
    text = '{"note": "a ```json b"}'
    assert strip_markdown_fences(text) == text


def test_parse_rejects_non_json():
    with pytest.raises(MalformedJson):
        parse_json_payload("not json")


def test_parse_rejects_bare_fence():
    with pytest.raises(MalformedJson):
        parse_json_payload("```json\n```")


@pytest.mark.parametrize("value, expected", [
    (10.5, True),
    (106, True),
    (-0.0, True),
    (float("nan"), False),
    (float("inf"), False),
    (True, False),
    ("10.5", False),
    (None, False),
    (10 ** 400, False),
    (-(10 ** 400), False),
])
def test_is_finite_number(value, expected):
    assert is_finite_number(value) is expected


def test_classify_403_is_authorization_detail():
    detail = classify("403 PERMISSION_DENIED", LOCATION_FAILURE_DETAILS, LOCATION_FAILURE_DEFAULT)
    assert "403" in detail
    assert detail.startswith("Lỗi xác thực")


def test_classify_api_key_is_case_insensitive():
    detail = classify("400 INVALID_ARGUMENT. API Key Not Valid. Please pass a valid API key.",
                      POI_FAILURE_DETAILS, POI_FAILURE_DEFAULT)
    # first match wins even though "400" is also present
    assert detail == INVALID_KEY_DETAIL


def test_classify_falls_back_to_default():
    assert classify("something odd happened", LOCATION_FAILURE_DETAILS, LOCATION_FAILURE_DEFAULT) == LOCATION_FAILURE_DEFAULT
    assert classify("", POI_FAILURE_DETAILS, POI_FAILURE_DEFAULT) == POI_FAILURE_DEFAULT


def test_classify_network_errors():
    assert classify("TypeError: Failed to fetch", POI_FAILURE_DETAILS, POI_FAILURE_DEFAULT) == NETWORK_DETAIL
    assert classify("All connection attempts failed", POI_FAILURE_DETAILS, POI_FAILURE_DEFAULT) == NETWORK_DETAIL
    assert classify("The read operation timed out", POI_FAILURE_DETAILS, POI_FAILURE_DEFAULT) == NETWORK_DETAIL


def test_location_and_poi_tables_share_substring_order():
    assert [needle for needle, _ in LOCATION_FAILURE_DETAILS] == [needle for needle, _ in POI_FAILURE_DETAILS]
