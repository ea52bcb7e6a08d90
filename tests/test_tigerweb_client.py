from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from zip_coverage.acquisition import (
    TIGERWEB_ZCTA_CONFIG,
    ConnectionError,
    InvalidResponseError,
    NotFoundError,
    RateLimitConfig,
    ServerError,
    ServiceStatusError,
    TigerWebZctaClient,
)
from zip_coverage.acquisition.tigerweb_client import build_where_clause, normalize_feature

FAST_CONFIG = TIGERWEB_ZCTA_CONFIG.model_copy(
    update={"rate_limit": RateLimitConfig(min_request_interval=0)}
)


def _fetch(handler, zips):
    async def run():
        async with TigerWebZctaClient(
            FAST_CONFIG, transport=httpx.MockTransport(handler)
        ) as client:
            return await client.fetch_zip_features(zips)

    return asyncio.run(run())


def test_where_clause_quotes_each_zip() -> None:
    assert build_where_clause("ZCTA5", ["43201", "43085"]) == "ZCTA5 IN ('43201','43085')"


def test_where_clause_needs_zips() -> None:
    with pytest.raises(ValueError):
        build_where_clause("ZCTA5", [])


def test_normalize_feature_keeps_geometry_and_only_zip() -> None:
    geometry = {"type": "Point", "coordinates": [-83.0, 40.0]}
    feature = {
        "type": "Feature",
        "id": 7,
        "geometry": geometry,
        "properties": {"ZCTA5": 43201, "OBJECTID": 12, "NAME": "x"},
    }

    normalized = normalize_feature(feature, "ZCTA5")

    assert normalized["properties"] == {"zip": "43201"}
    assert normalized["geometry"] is geometry
    assert normalized["id"] == 7
    assert feature["properties"]["OBJECTID"] == 12


def test_normalize_feature_without_properties() -> None:
    assert normalize_feature({"type": "Feature", "geometry": None}, "ZCTA5")[
        "properties"
    ] == {"zip": ""}


def test_query_parameters_sent() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        return httpx.Response(200, json={"type": "FeatureCollection", "features": []})

    assert _fetch(handler, ["43201"]) == []

    url = seen["url"]
    assert url.path.endswith("/MapServer/7/query")
    assert url.params["where"] == "ZCTA5 IN ('43201')"
    assert url.params["outFields"] == "ZCTA5"
    assert url.params["returnGeometry"] == "true"
    assert url.params["outSR"] == "4326"
    assert url.params["f"] == "geojson"


def test_features_are_normalized() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "type": "FeatureCollection",
                "features": [
                    {
                        "type": "Feature",
                        "geometry": {"type": "Point", "coordinates": [0, 0]},
                        "properties": {"ZCTA5": " 43201 ", "GEOID": "43201"},
                    }
                ],
            },
        )

    features = _fetch(handler, ["43201"])

    assert features[0]["properties"] == {"zip": "43201"}


def test_server_error_carries_status_and_truncated_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="x" * 1000)

    with pytest.raises(ServerError) as excinfo:
        _fetch(handler, ["43201"])

    assert excinfo.value.status_code == 503
    assert excinfo.value.response_text == "x" * 200


def test_client_error_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, text="bad where clause")

    with pytest.raises(ServiceStatusError) as excinfo:
        _fetch(handler, ["43201"])

    assert excinfo.value.status_code == 400
    assert "bad where clause" in str(excinfo.value)


def test_not_found() -> None:
    with pytest.raises(NotFoundError):
        _fetch(lambda request: httpx.Response(404), ["43201"])


def test_non_feature_collection_rejected() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"error": {"code": 400}})

    with pytest.raises(InvalidResponseError):
        _fetch(handler, ["43201"])


@pytest.mark.parametrize(
    "features",
    [["oops"], {"43201": {"type": "Feature"}}, "oops", [None]],
)
def test_malformed_features_rejected(features) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200, json={"type": "FeatureCollection", "features": features}
        )

    with pytest.raises(InvalidResponseError):
        _fetch(handler, ["43201"])


def test_feature_without_property_object_has_blank_zip() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "type": "FeatureCollection",
                "features": [{"type": "Feature", "properties": ["x"], "geometry": None}],
            },
        )

    features = _fetch(handler, ["43201"])

    assert features[0]["properties"] == {"zip": ""}


def test_non_json_body_rejected() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    with pytest.raises(InvalidResponseError):
        _fetch(handler, ["43201"])


def test_transport_failure_is_connection_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(ConnectionError):
        _fetch(handler, ["43201"])


def test_client_requires_context_manager() -> None:
    client = TigerWebZctaClient(FAST_CONFIG)

    with pytest.raises(RuntimeError):
        asyncio.run(client.fetch_zip_features(["43201"]))


def test_null_features_treated_as_empty() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            content=json.dumps(
                {"type": "FeatureCollection", "features": None}
            ).encode(),
            headers={"Content-Type": "application/json"},
        )

    assert _fetch(handler, ["43201"]) == []
