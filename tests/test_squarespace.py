"""Tests for the Squarespace Commerce client."""

import json

import httpx
import pytest

from alttext.services.errors import SquarespaceError
from alttext.services.squarespace import SquarespaceClient, map_product

RAW_PRODUCT = {
    "id": "prod-1",
    "name": "Trail Runner",
    "description": "<p>Light</p>",
    "tags": ["shoes"],
    "images": [
        {
            "id": "img-0",
            "altText": "",
            "originalSize": {"url": "https://cdn.example.com/0.jpg", "width": 800, "height": 600},
        },
        {"id": "img-1", "altText": "Side view", "url": "https://cdn.example.com/1.jpg"},
    ],
}


class FakeApi:
    """Minimal product API keeping image alt texts in memory."""

    def __init__(self, product: dict, lose_writes: int = 0, fail_post: int | None = None):
        self.product = json.loads(json.dumps(product))
        self.lose_writes = lose_writes
        self.fail_post = fail_post
        self.posts: list[dict] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        assert request.headers["Authorization"] == "Bearer secret-token"
        if request.method == "GET":
            return httpx.Response(200, json=self.product)

        if self.fail_post:
            return httpx.Response(self.fail_post, text="server error")
        body = json.loads(request.content)
        self.posts.append(body)
        if self.lose_writes:
            # A concurrent writer's merge lands right after ours
            self.lose_writes -= 1
            return httpx.Response(200, json=self.product)
        alts = {img["id"]: img["altText"] for img in body["images"]}
        for img in self.product["images"]:
            img["altText"] = alts.get(img["id"], img.get("altText"))
        return httpx.Response(200, json=self.product)


def _client(api: FakeApi) -> SquarespaceClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(api.handler))
    return SquarespaceClient("secret-token", http_client=http_client)


def test_map_product():
    product = map_product(RAW_PRODUCT)

    assert product.title == "Trail Runner"
    assert product.images[0].url == "https://cdn.example.com/0.jpg"
    assert product.images[0].width == 800
    assert product.images[0].alt_text is None
    assert product.images[0].needs_alt_text is True
    assert product.images[1].url == "https://cdn.example.com/1.jpg"
    assert product.images[1].needs_alt_text is False


def test_map_product_defaults():
    product = map_product({"id": "p"})
    assert product.title == "Untitled"
    assert product.images == []
    assert product.tags == []


@pytest.mark.asyncio
async def test_get_product():
    product = await _client(FakeApi(RAW_PRODUCT)).get_product("prod-1")
    assert product.id == "prod-1"
    assert [img.id for img in product.images] == ["img-0", "img-1"]


@pytest.mark.asyncio
async def test_get_product_error():
    def handler(request):
        return httpx.Response(404, text="not found")

    client = SquarespaceClient(
        "secret-token", http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
    )
    with pytest.raises(SquarespaceError) as exc_info:
        await client.get_product("nope")
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_transport_error_becomes_squarespace_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = SquarespaceClient(
        "secret-token", http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
    )
    with pytest.raises(SquarespaceError):
        await client.get_product("prod-1")


@pytest.mark.asyncio
async def test_update_merges_into_full_image_list():
    api = FakeApi(RAW_PRODUCT)

    await _client(api).update_image_alt_text("prod-1", "img-0", "A red trail shoe")

    assert api.posts == [
        {
            "images": [
                {"id": "img-0", "altText": "A red trail shoe"},
                {"id": "img-1", "altText": "Side view"},
            ]
        }
    ]


@pytest.mark.asyncio
async def test_update_skips_write_when_text_already_live():
    api = FakeApi(RAW_PRODUCT)

    await _client(api).update_image_alt_text("prod-1", "img-1", "Side view")

    assert api.posts == []


@pytest.mark.asyncio
async def test_update_retries_when_write_is_overwritten():
    api = FakeApi(RAW_PRODUCT, lose_writes=1)

    await _client(api).update_image_alt_text("prod-1", "img-0", "A red trail shoe")

    assert len(api.posts) == 2
    assert api.product["images"][0]["altText"] == "A red trail shoe"


@pytest.mark.asyncio
async def test_update_gives_up_when_product_keeps_changing():
    api = FakeApi(RAW_PRODUCT, lose_writes=10)

    with pytest.raises(SquarespaceError):
        await _client(api).update_image_alt_text("prod-1", "img-0", "A red trail shoe")


@pytest.mark.asyncio
async def test_update_unknown_image():
    with pytest.raises(SquarespaceError):
        await _client(FakeApi(RAW_PRODUCT)).update_image_alt_text("prod-1", "img-9", "Text")


@pytest.mark.asyncio
async def test_update_post_failure():
    with pytest.raises(SquarespaceError) as exc_info:
        await _client(FakeApi(RAW_PRODUCT, fail_post=500)).update_image_alt_text(
            "prod-1", "img-0", "Text"
        )
    assert exc_info.value.status_code == 500
