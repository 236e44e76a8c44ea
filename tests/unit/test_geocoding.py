import pytest

from app.models.dto import Coordinates
from app.services.errors import EmptyResponse, InvalidShape, MalformedJson, TransportFailure
from app.services.geocoding import INVALID_COORDINATES_MESSAGE, LOCATION_SCHEMA, CoordinateResolver
from app.services.response_parsing import INVALID_KEY_DETAIL, LOCATION_FAILURE_DEFAULT


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [
    '{"lat": 10.5, "lng": 106.7}',
    '```json\n{"lat": 10.5, "lng": 106.7}\n```',
    '  ```json {"lat": 10.5, "lng": 106.7}```  ',
])
async def test_resolve_returns_coordinates(make_client, payload):
    resolver = CoordinateResolver(make_client(payload))
    assert await resolver.resolve("Vũng Tàu") == Coordinates(latitude=10.5, longitude=106.7)


@pytest.mark.asyncio
async def test_resolve_sends_prompt_and_schema(make_client):
    client = make_client('{"lat": 15.88, "lng": 108.33}')
    await CoordinateResolver(client).resolve("Hội An")

    prompt, schema = client.calls[0]
    assert '"Hội An, Việt Nam"' in prompt
    assert '"lat"' in prompt and '"lng"' in prompt
    assert schema is LOCATION_SCHEMA
    assert schema["required"] == ["lat", "lng"]


@pytest.mark.asyncio
async def test_resolve_accepts_integers(make_client):
    coords = await CoordinateResolver(make_client('{"lat": 16, "lng": 108}')).resolve("Đà Nẵng")
    assert coords.latitude == 16.0
    assert coords.longitude == 108.0


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", ["", "   \n\t ", None])
async def test_resolve_empty_response(make_client, payload):
    with pytest.raises(EmptyResponse):
        await CoordinateResolver(make_client(payload)).resolve("Huế")


@pytest.mark.asyncio
async def test_resolve_malformed_json(make_client):
    with pytest.raises(MalformedJson):
        await CoordinateResolver(make_client("not json")).resolve("Huế")


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [
    '{"lat": "x", "lng": 5}',
    '{"lat": 10.5}',
    '{"lat": true, "lng": 5}',
    '{"lat": NaN, "lng": 5}',
    '{"lat": 1' + '0' * 400 + ', "lng": 5}',
    '[10.5, 106.7]',
    'null',
    '42',
])
async def test_resolve_invalid_shape(make_client, payload):
    with pytest.raises(InvalidShape) as exc_info:
        await CoordinateResolver(make_client(payload)).resolve("Huế")
    assert exc_info.value.message == INVALID_COORDINATES_MESSAGE


@pytest.mark.asyncio
async def test_transport_failure_names_the_location(make_client):
    client = make_client(TransportFailure(failure_text="403 PERMISSION_DENIED. Forbidden", provider_status=403))
    with pytest.raises(TransportFailure) as exc_info:
        await CoordinateResolver(client).resolve("Huế")

    err = exc_info.value
    assert err.message.startswith("Không thể lấy tọa độ cho Huế. Lỗi xác thực (lỗi 403).")
    assert err.provider_status == 403
    assert err.failure_text == "403 PERMISSION_DENIED. Forbidden"


@pytest.mark.asyncio
async def test_transport_failure_invalid_key(make_client):
    client = make_client(TransportFailure(failure_text="API key not valid. Please pass a valid API key."))
    with pytest.raises(TransportFailure) as exc_info:
        await CoordinateResolver(client).resolve("Sa Pa")
    assert exc_info.value.message == f"Không thể lấy tọa độ cho Sa Pa. {INVALID_KEY_DETAIL}"


@pytest.mark.asyncio
async def test_transport_failure_generic(make_client):
    client = make_client(TransportFailure(failure_text="quota exhausted"))
    with pytest.raises(TransportFailure) as exc_info:
        await CoordinateResolver(client).resolve("Sa Pa")
    assert exc_info.value.message == f"Không thể lấy tọa độ cho Sa Pa. {LOCATION_FAILURE_DEFAULT}"
