import httpx
import pytest

from roadpulse.core.config import settings
from roadpulse.core.exceptions import ConfigurationError, NoRouteError, UpstreamError
from roadpulse.services.mapbox import MapboxDirectionsService

START = (-0.1276, 51.5072)
END = (-0.0877, 51.5155)


def make_service(handler, token="test-token"):
    return MapboxDirectionsService(
        access_token=token,
        base_url="https://api.mapbox.test",
        transport=httpx.MockTransport(handler),
    )


async def test_get_directions_requests_traffic_annotations(directions_payload):
    seen = {}

    def handler(request):
        seen["url"] = request.url
        return httpx.Response(200, json=directions_payload(["low", "heavy"]))

    service = make_service(handler)
    payload = await service.get_directions(START, END)
    await service.close()

    url = seen["url"]
    assert url.path == "/directions/v5/mapbox/driving-traffic/-0.1276,51.5072;-0.0877,51.5155"
    assert url.params["annotations"] == "congestion,duration"
    assert url.params["geometries"] == "geojson"
    assert url.params["overview"] == "full"
    assert url.params["access_token"] == "test-token"
    assert payload.routes[0].legs[0].annotation.congestion == ["low", "heavy"]


async def test_missing_token_is_configuration_error():
    service = make_service(lambda request: httpx.Response(200, json={}), token="")
    assert not service.is_available
    with pytest.raises(ConfigurationError):
        await service.get_directions(START, END)
    await service.close()


async def test_empty_routes_is_no_route():
    service = make_service(lambda request: httpx.Response(200, json={"code": "Ok", "routes": []}))
    with pytest.raises(NoRouteError):
        await service.get_directions(START, END)


async def test_missing_routes_key_is_no_route():
    service = make_service(lambda request: httpx.Response(200, json={"code": "Ok"}))
    with pytest.raises(NoRouteError):
        await service.get_directions(START, END)


async def test_no_route_code_is_no_route_even_on_error_status():
    body = {"code": "NoRoute", "message": "No route found"}
    service = make_service(lambda request: httpx.Response(422, json=body))
    with pytest.raises(NoRouteError):
        await service.get_directions(START, END)


async def test_no_segment_code_is_no_route():
    body = {"code": "NoSegment", "message": "No suitable edges near location", "routes": []}
    service = make_service(lambda request: httpx.Response(422, json=body))
    with pytest.raises(NoRouteError):
        await service.get_directions(START, END)


async def test_error_status_is_upstream_error():
    body = {"message": "Not Authorized - Invalid Token"}
    service = make_service(lambda request: httpx.Response(401, json=body))
    with pytest.raises(UpstreamError):
        await service.get_directions(START, END)


async def test_non_json_body_is_upstream_error():
    service = make_service(lambda request: httpx.Response(502, text="<html>Bad Gateway</html>"))
    with pytest.raises(UpstreamError):
        await service.get_directions(START, END)


async def test_malformed_route_is_upstream_error(directions_payload):
    body = directions_payload(["low"])
    del body["routes"][0]["duration"]
    service = make_service(lambda request: httpx.Response(200, json=body))
    with pytest.raises(UpstreamError):
        await service.get_directions(START, END)


async def test_transport_failure_is_upstream_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    service = make_service(handler)
    with pytest.raises(UpstreamError):
        await service.get_directions(START, END)


async def test_timeout_is_upstream_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    service = make_service(handler)
    with pytest.raises(UpstreamError):
        await service.get_directions(START, END)


def test_explicit_zero_timeout_is_kept():
    service = make_service(lambda request: httpx.Response(200, json={}))
    zero = MapboxDirectionsService(
        access_token="test-token",
        timeout=0,
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={})),
    )
    assert zero._client.timeout.read == 0
    assert service._client.timeout.read == settings.request_timeout_seconds


def test_no_route_is_not_an_upstream_error():
    assert not issubclass(NoRouteError, UpstreamError)
    assert issubclass(ConfigurationError, UpstreamError)
