"""Tests for HTTP endpoints."""

import asyncio
import re

import pytest

from .conftest import VALID_TOKEN

SHORT_LINK = re.compile(r"^http://short\.ly/([A-Za-z0-9]{8})$")
SHORT_LY = {"host": "short.ly"}


async def put_shorter(client, headers=SHORT_LY, **params):
    return await client.put("/api", params=params, headers=headers)


class TestCreate:
    """Test PUT and POST /api."""

    async def test_put_generates_path_and_redirects(self, client):
        response = await client.put(
            "/api?token=validtoken&url=http%3A%2F%2Fexample.com",
            headers=SHORT_LY,
        )

        assert response.status_code == 200
        match = SHORT_LINK.match(response.text)
        assert match, response.text

        redirect = await client.get(f"/{match.group(1)}", follow_redirects=False)
        assert redirect.status_code == 302
        assert redirect.headers["location"] == "http://example.com"

    async def test_post_form(self, client, sample_urls):
        response = await client.post(
            "/api",
            data={"token": VALID_TOKEN, "url": sample_urls[0], "path": "form"},
            headers=SHORT_LY,
        )

        assert response.status_code == 200
        assert response.text == "http://short.ly/form"

        redirect = await client.get("/form", follow_redirects=False)
        assert redirect.headers["location"] == sample_urls[0]

    async def test_post_form_empty_path_is_generated(self, client, sample_urls):
        response = await client.post(
            "/api",
            data={"token": VALID_TOKEN, "url": sample_urls[0], "path": ""},
            headers=SHORT_LY,
        )

        assert response.status_code == 200
        assert SHORT_LINK.match(response.text)

    async def test_custom_path(self, client, sample_urls):
        response = await put_shorter(client, token=VALID_TOKEN, url=sample_urls[1], path="custom")

        assert response.status_code == 200
        assert response.text == "http://short.ly/custom"

    async def test_custom_path_with_space(self, client, sample_urls):
        response = await put_shorter(client, token=VALID_TOKEN, url=sample_urls[0], path="a b")

        assert response.status_code == 200
        assert response.text == "http://short.ly/a%20b"

        redirect = await client.get("/a%20b", follow_redirects=False)
        assert redirect.status_code == 302
        assert redirect.headers["location"] == sample_urls[0]

    async def test_reuse_path_replaces_url(self, client, sample_urls):
        await put_shorter(client, token=VALID_TOKEN, url=sample_urls[0], path="same")
        await put_shorter(client, token=VALID_TOKEN, url=sample_urls[1], path="same")

        redirect = await client.get("/same", follow_redirects=False)
        assert redirect.headers["location"] == sample_urls[1]

    async def test_bad_token(self, client):
        response = await client.put(
            "/api?token=badtoken&url=http%3A%2F%2Fexample.com",
            headers=SHORT_LY,
        )

        assert response.status_code == 401

    async def test_missing_token(self, client, sample_urls):
        response = await put_shorter(client, url=sample_urls[0])

        assert response.status_code == 401

    async def test_expired_token(self, client, service, sample_urls):
        await service.add_token("stale", -1)

        response = await put_shorter(client, token="stale", url=sample_urls[0])
        assert response.status_code == 401

    async def test_missing_url(self, client):
        response = await put_shorter(client, token=VALID_TOKEN)

        assert response.status_code == 400

    async def test_undecodable_url(self, client):
        response = await put_shorter(client, token=VALID_TOKEN, url="%FF")

        assert response.status_code == 400

    async def test_unparsable_host(self, client, sample_urls):
        response = await put_shorter(
            client,
            headers={"host": "short.ly:notaport"},
            token=VALID_TOKEN,
            url=sample_urls[0],
        )

        assert response.status_code == 400

    async def test_forwarded_host_and_proto(self, client, sample_urls):
        response = await put_shorter(
            client,
            headers={
                "host": "internal:1566",
                "x-forwarded-host": "short.ly",
                "x-forwarded-proto": "https",
            },
            token=VALID_TOKEN,
            url=sample_urls[0],
            path="fwd",
        )

        assert response.status_code == 200
        assert response.text == "https://short.ly/fwd"

    async def test_non_integer_seconds(self, client, sample_urls):
        response = await put_shorter(
            client, token=VALID_TOKEN, url=sample_urls[0], seconds="soon"
        )

        assert response.status_code == 400

    @pytest.mark.parametrize("seconds", [100_000_000_000_000, -100_000_000_000_000])
    async def test_out_of_range_seconds(self, client, sample_urls, seconds):
        response = await put_shorter(
            client, token=VALID_TOKEN, url=sample_urls[0], path="huge", seconds=seconds
        )

        assert response.status_code == 400
        assert (await client.get("/huge", follow_redirects=False)).status_code == 404

    async def test_storage_failure(self, client, service, sample_urls):
        await service.close()

        response = await put_shorter(client, token=VALID_TOKEN, url=sample_urls[0])

        assert response.status_code == 500
        assert "closed" not in response.text


class TestExpiry:
    """Test expiring shorters end to end."""

    async def test_expires_after_seconds(self, client):
        response = await client.put(
            "/api?token=validtoken&path=custom&seconds=1&url=http%3A%2F%2Fexample.com",
            headers=SHORT_LY,
        )
        assert response.status_code == 200

        live = await client.get("/custom", follow_redirects=False)
        assert live.status_code == 302

        await asyncio.sleep(1.2)

        expired = await client.get("/custom", follow_redirects=False)
        assert expired.status_code == 404

    @pytest.mark.parametrize("name", ["seconds", "ttl"])
    async def test_negative_lifetime_alias(self, client, sample_urls, name):
        response = await put_shorter(
            client, token=VALID_TOKEN, url=sample_urls[0], path="gone", **{name: -1}
        )
        assert response.status_code == 200

        expired = await client.get("/gone", follow_redirects=False)
        assert expired.status_code == 404


class TestResolve:
    """Test GET routes."""

    async def test_nonexistent(self, client):
        response = await client.get("/nonexistent", follow_redirects=False)

        assert response.status_code == 404

    async def test_nested_path(self, client, service, sample_urls):
        await service.insert_shorter("a/b", sample_urls[2])

        response = await client.get("/a/b", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == sample_urls[2]

    async def test_storage_failure(self, client, service):
        await service.close()

        response = await client.get("/anything", follow_redirects=False)
        assert response.status_code == 500

    async def test_landing_page(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "Link Shorter" in response.text

    async def test_health_check(self, client):
        response = await client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "healthy"
