"""Tests for HTTP-based adapters."""

import asyncio
import json

import httpx
import pytest

from nutrition_labels.adapters.analysis_client import HttpxAnalysisClient


def test_analysis_client_posts_ingredients() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"calories": 120, "yield": 1})

    transport = httpx.MockTransport(handler)
    async_client = httpx.AsyncClient(transport=transport)
    client = HttpxAnalysisClient(
        app_id="app-id",
        app_key="app-key",
        base_url="https://analysis.test",
        http_client=async_client,
    )

    result = asyncio.run(client.analyze_recipe("Salad", ["1 cup lettuce"]))

    assert result == {"calories": 120, "yield": 1}
    assert seen["path"] == "/api/nutrition-details"
    assert seen["params"] == {"app_id": "app-id", "app_key": "app-key"}
    assert seen["body"] == {"title": "Salad", "ingr": ["1 cup lettuce"]}
    asyncio.run(client.close())


def test_analysis_client_raises_on_error_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(555, json={"error": "low_quality"})

    transport = httpx.MockTransport(handler)
    client = HttpxAnalysisClient(
        app_id="app-id",
        app_key="app-key",
        base_url="https://analysis.test",
        http_client=httpx.AsyncClient(transport=transport),
    )

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.analyze_recipe("Salad", ["1 cup lettuce"]))


def test_analysis_client_create() -> None:
    client = HttpxAnalysisClient.create(
        app_id="app-id", app_key="app-key", base_url="https://analysis.test"
    )

    assert isinstance(client.http_client, httpx.AsyncClient)
    asyncio.run(client.close())
