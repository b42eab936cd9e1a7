"""Nutrition analysis API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class AnalysisClient(Protocol):
    """Interface for recipe nutrition analysis."""

    async def analyze_recipe(
        self, title: str, ingredients: list[str]
    ) -> dict[str, object]:
        """Analyze ingredient lines and return the raw API payload."""


@dataclass
class HttpxAnalysisClient(AnalysisClient):
    """HTTPX-backed client for the nutrition-details endpoint."""

    app_id: str
    app_key: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, app_id: str, app_key: str, base_url: str
    ) -> "HttpxAnalysisClient":
        """Create an analysis client with a managed httpx session."""
        return cls(
            app_id=app_id,
            app_key=app_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
        )

    async def analyze_recipe(
        self, title: str, ingredients: list[str]
    ) -> dict[str, object]:
        """Post ingredient lines for full nutrition analysis."""
        url = f"{self.base_url}/api/nutrition-details"
        response = await self.http_client.post(
            url,
            params={"app_id": self.app_id, "app_key": self.app_key},
            json={"title": title, "ingr": ingredients},
            timeout=15,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
