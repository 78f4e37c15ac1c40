"""Unit tests for the AMap weather and flomo note tools."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

import _helpers
from tools.flomo import write_flomo_note
from tools.weather import fetch_weather

LIVE_WEATHER = {
    "status": "1",
    "count": "1",
    "info": "OK",
    "infocode": "10000",
    "lives": [{"province": "浙江", "city": "西湖区", "adcode": "330106", "weather": "晴", "temperature": "21"}],
}


def test_weather_requires_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(_helpers, "GAODE_API_KEY", "")
    result = asyncio.run(fetch_weather("330106"))
    assert "GAODE_API_KEY" in result["error"]


def test_weather_rejects_unknown_extensions(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(_helpers, "GAODE_API_KEY", "k")
    assert "error" in asyncio.run(fetch_weather("330106", "hourly"))


def test_weather_success(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(_helpers, "GAODE_API_KEY", "test-key")
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        return httpx.Response(200, json=LIVE_WEATHER)

    result = asyncio.run(fetch_weather("330106", transport=httpx.MockTransport(handler)))
    assert result["lives"][0]["weather"] == "晴"
    assert seen["url"].path == "/v3/weather/weatherInfo"
    assert seen["url"].params["city"] == "330106"
    assert seen["url"].params["key"] == "test-key"


def test_weather_amap_error_status(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(_helpers, "GAODE_API_KEY", "bad-key")
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, json={"status": "0", "info": "INVALID_USER_KEY", "infocode": "10001"})
    )
    result = asyncio.run(fetch_weather("330106", transport=transport))
    assert "INVALID_USER_KEY" in result["error"]


def test_weather_upstream_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(_helpers, "GAODE_API_KEY", "k")
    transport = httpx.MockTransport(lambda request: httpx.Response(503))
    assert "error" in asyncio.run(fetch_weather("330106", transport=transport))


def test_flomo_requires_api_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(_helpers, "FLOMO_API_URL", "")
    assert "flomo" in asyncio.run(write_flomo_note("hello"))["error"]


def test_flomo_rejects_empty_content() -> None:
    assert "error" in asyncio.run(write_flomo_note("  ", api_url="https://flomoapp.test/iwh/x/y/"))


def test_flomo_success_returns_memo_url() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"code": 0, "message": "已记录", "memo": {"slug": "MTIzNDU"}})

    result = asyncio.run(
        write_flomo_note(
            "今天 #天气 晴",
            api_url="https://flomoapp.test/iwh/x/y/",
            transport=httpx.MockTransport(handler),
        )
    )
    assert seen["body"] == {"content": "今天 #天气 晴"}
    assert result["url"] == "https://v.flomoapp.com/mine/?memo_id=MTIzNDU"
    assert result["url"] in result["message"]


def test_flomo_missing_slug_is_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(_helpers, "FLOMO_API_URL", "https://flomoapp.test/iwh/x/y/")
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"code": -1, "message": "无效的 token"}))
    result = asyncio.run(write_flomo_note("hello", transport=transport))
    assert "无效的 token" in result["error"]


def test_weather_non_object_body_is_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(_helpers, "GAODE_API_KEY", "k")
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=["x"]))
    result = asyncio.run(fetch_weather("330106", transport=transport))
    assert "list" in result["error"]


def test_flomo_non_object_body_is_error() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json="ok"))
    result = asyncio.run(
        write_flomo_note("hello", api_url="https://flomoapp.test/iwh/x/y/", transport=transport)
    )
    assert "str" in result["error"]
