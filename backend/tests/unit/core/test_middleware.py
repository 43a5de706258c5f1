"""
Unit Tests for HTTP middleware
"""
import pytest
from fastapi import FastAPI, Request
from httpx import AsyncClient, ASGITransport

from sportsapp.core.config import settings
from sportsapp.core.middleware import RequestSizeLimitMiddleware, MULTIPART_OVERHEAD


def echo_app(max_size=None) -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestSizeLimitMiddleware, max_size=max_size)

    @app.post("/echo")
    async def echo(request: Request):
        return {"received": len(await request.body())}

    return app


async def post(app: FastAPI, **kwargs):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        return await client.post("/echo", **kwargs)


class TestRequestSizeLimit:

    @pytest.mark.asyncio
    async def test_body_over_limit_is_rejected(self):
        response = await post(echo_app(max_size=10), content=b"x" * 11)

        assert response.status_code == 413
        assert "Upload too large" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_body_at_limit_passes(self):
        response = await post(echo_app(max_size=10), content=b"x" * 10)

        assert response.status_code == 200
        assert response.json() == {"received": 10}

    @pytest.mark.asyncio
    async def test_default_limit_follows_max_upload_size(self):
        middleware = RequestSizeLimitMiddleware(FastAPI())

        assert middleware.max_size == settings.MAX_UPLOAD_SIZE + MULTIPART_OVERHEAD


@pytest.mark.asyncio
async def test_api_rejects_declared_oversized_upload(client: AsyncClient, auth_headers):
    too_big = settings.MAX_UPLOAD_SIZE + MULTIPART_OVERHEAD + 1

    response = await client.post(
        "/api/v1/posts",
        content=b"",
        headers={**auth_headers, "Content-Length": str(too_big), "Content-Type": "multipart/form-data; boundary=x"},
    )

    assert response.status_code == 413
