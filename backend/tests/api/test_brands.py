"""Tests for the brand catalog endpoints.

Tests cover:
- GET /api/brands: ordering by name, category filter, empty catalog
- GET /api/brands/{id}: found, not found (404 outcome, structured body)
- Storage failures mapped to 500 with a structured body
"""

import uuid
from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from brandshift.models import Brand


class TestListBrands:
    """Tests for GET /api/brands."""

    @pytest.mark.asyncio
    async def test_list_brands_ordered_by_name(
        self, async_client: AsyncClient, brands: list[Brand]
    ) -> None:
        response = await async_client.get("/api/brands")

        assert response.status_code == 200
        names = [b["name"] for b in response.json()]
        assert names == ["Airbnb", "Slack", "Spotify"]

    @pytest.mark.asyncio
    async def test_list_brands_by_category(
        self, async_client: AsyncClient, brands: list[Brand]
    ) -> None:
        response = await async_client.get("/api/brands", params={"category": "technology"})

        assert response.status_code == 200
        data = response.json()
        assert [b["name"] for b in data] == ["Slack", "Spotify"]
        assert all(b["category"] == "technology" for b in data)

    @pytest.mark.asyncio
    async def test_list_brands_unknown_category(
        self, async_client: AsyncClient, brands: list[Brand]
    ) -> None:
        response = await async_client.get("/api/brands", params={"category": "aerospace"})

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_list_brands_empty_catalog(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/api/brands")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_list_brands_storage_failure(self, async_client: AsyncClient) -> None:
        with patch(
            "brandshift.api.endpoints.brands.BrandService.list_brands",
            new=AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("db down"))),
        ):
            response = await async_client.get("/api/brands")

        assert response.status_code == 500
        data = response.json()
        assert data["code"] == "STORAGE_ERROR"
        assert "db down" not in data["error"]
        assert data["request_id"] == response.headers["X-Request-ID"]


class TestGetBrand:
    """Tests for GET /api/brands/{id}."""

    @pytest.mark.asyncio
    async def test_get_brand(
        self, async_client: AsyncClient, brands: list[Brand]
    ) -> None:
        spotify = brands[0]

        response = await async_client.get(f"/api/brands/{spotify.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == spotify.id
        assert data["name"] == "Spotify"
        assert data["industry"] == "Music Streaming"
        assert data["primary_color"] == "#1DB954"
        assert data["background_color"] == "#191414"
        assert data["website"] == "https://www.spotify.com"

    @pytest.mark.asyncio
    async def test_get_brand_without_primary_color(
        self, async_client: AsyncClient, brands: list[Brand]
    ) -> None:
        response = await async_client.get(f"/api/brands/{brands[2].id}")

        assert response.status_code == 200
        assert response.json()["primary_color"] is None

    @pytest.mark.asyncio
    async def test_get_brand_not_found(
        self, async_client: AsyncClient, brands: list[Brand]
    ) -> None:
        missing_id = str(uuid.uuid4())

        response = await async_client.get(f"/api/brands/{missing_id}")

        assert response.status_code == 404
        data = response.json()
        assert data["code"] == "NOT_FOUND"
        assert missing_id in data["error"]
        assert "request_id" in data

    @pytest.mark.asyncio
    @pytest.mark.parametrize("brand_id", ["1", "abc"])
    async def test_get_brand_non_uuid_id_not_found(
        self, async_client: AsyncClient, brands: list[Brand], brand_id: str
    ) -> None:
        response = await async_client.get(f"/api/brands/{brand_id}")

        assert response.status_code == 404
        data = response.json()
        assert data["code"] == "NOT_FOUND"
        assert data["error"] == f"Brand not found: {brand_id}"

    @pytest.mark.asyncio
    async def test_get_brand_storage_failure(self, async_client: AsyncClient) -> None:
        with patch(
            "brandshift.api.endpoints.brands.BrandService.get_brand",
            new=AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("db down"))),
        ):
            response = await async_client.get(f"/api/brands/{uuid.uuid4()}")

        assert response.status_code == 500
        assert response.json()["code"] == "STORAGE_ERROR"
