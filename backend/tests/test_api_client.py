import asyncio
import json

import httpx
import pytest

from boganto.services import ApiError, BogantoApiClient
from boganto.utils.environment import resolve_environment


def _run(coro):
    return asyncio.run(coro)


def _client(settings, handler, hostname="boganto.com"):
    env = resolve_environment(hostname, settings)
    return BogantoApiClient(env=env, transport=httpx.MockTransport(handler))


BLOG = {
    "id": 1,
    "title": "Jujutsu Kaisen",
    "slug": "blog/jujutsu-kaisen",
    "featured_image": "https://boganto.com/uploads/blogs/jjk.png",
    "category": {"name": "Manga", "slug": "/category/manga"},
    "tags": ["shonen jump", " ", "tag/dark fantasy"],
}


def test_get_blogs_decorates_every_blog(settings):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        return httpx.Response(200, json={"blogs": [BLOG], "total": 1})

    async def go():
        async with _client(settings, handler) as api:
            return await api.get_blogs(page=2)

    data = _run(go())
    assert seen["url"] == "https://boganto.com/api/blogs?page=2"
    blog = data["blogs"][0]
    assert blog["slug"] == "jujutsu-kaisen"
    assert blog["path"] == "/blog/jujutsu-kaisen"
    assert blog["url"] == "https://boganto.com/blog/jujutsu-kaisen"
    assert blog["image_url"] == "https://boganto.com/uploads/blogs/jjk.png"
    assert blog["category"]["path"] == "/category/manga"
    assert blog["tag_paths"] == ["/tag/shonen%20jump", "/tag/dark%20fantasy"]
    assert data["total"] == 1


def test_relative_images_follow_the_environment(settings):
    blog = dict(BLOG, featured_image="/uploads/blogs/jjk.png")

    def handler(request):
        return httpx.Response(200, json={"blogs": [blog]})

    async def go(hostname):
        async with _client(settings, handler, hostname) as api:
            return (await api.get_blogs())["blogs"][0]["image_url"]

    assert _run(go("boganto.com")) == "/uploads/blogs/jjk.png"
    assert _run(go("localhost")) == "http://localhost:8000/uploads/blogs/jjk.png"


def test_get_blog_by_slug_never_doubles_the_prefix(settings):
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        return httpx.Response(200, json={"blog": BLOG})

    async def go():
        async with _client(settings, handler) as api:
            return await api.get_blog_by_slug("/blog/jujutsu-kaisen")

    data = _run(go())
    assert seen["path"] == "/api/blogs/slug/jujutsu-kaisen"
    assert data["blog"]["url"] == "https://boganto.com/blog/jujutsu-kaisen"


def test_get_blog_by_id_requires_blog_object(settings):
    def handler(request):
        return httpx.Response(200, json={"success": True})

    async def go():
        async with _client(settings, handler) as api:
            return await api.get_blog_by_id(3)

    with pytest.raises(ApiError, match="Invalid blog response format"):
        _run(go())


def test_http_errors_raise_api_error(settings):
    def handler(request):
        return httpx.Response(404, content=json.dumps({"error": "Blog not found"}))

    async def go():
        async with _client(settings, handler) as api:
            return await api.get_blog_by_slug("missing")

    with pytest.raises(ApiError) as exc:
        _run(go())
    assert exc.value.status_code == 404
    assert str(exc.value) == "Blog not found"


def test_banners_and_categories(settings):
    def handler(request):
        if request.url.path == "/api/banner":
            return httpx.Response(200, json={"banners": [{"id": 1, "image": "banners/a.webp"}]})
        return httpx.Response(200, json={"categories": [{"name": "Anime", "slug": "category/anime"}]})

    async def go():
        async with _client(settings, handler, "localhost") as api:
            return await api.get_banners(), await api.get_categories()

    banners, categories = _run(go())
    assert banners["banners"][0]["image_url"] == "http://localhost:8000/uploads/banners/a.webp"
    assert categories["categories"][0] == {"name": "Anime", "slug": "anime", "path": "/category/anime"}


def test_default_environment_is_resolved_from_settings():
    async def go():
        api = BogantoApiClient()
        try:
            return api.env.base_url
        finally:
            await api.aclose()

    assert _run(go()) == "https://boganto.com"


@pytest.mark.parametrize("body", [[BLOG], "ok", 3])
def test_non_object_bodies_raise_api_error(settings, body):
    def handler(request):
        return httpx.Response(200, json=body)

    async def go():
        async with _client(settings, handler) as api:
            return await api.get_blog_by_slug("jujutsu-kaisen")

    with pytest.raises(ApiError, match="Invalid response format"):
        _run(go())


def test_list_getters_reject_non_object_bodies(settings):
    def handler(request):
        return httpx.Response(200, json=[{"id": 1}])

    async def go():
        async with _client(settings, handler) as api:
            for call in (api.get_blogs, api.get_categories, api.get_banners):
                with pytest.raises(ApiError):
                    await call()

    _run(go())


def test_non_object_list_items_are_skipped(settings):
    def handler(request):
        return httpx.Response(200, json={"blogs": [BLOG, "noise", None]})

    async def go():
        async with _client(settings, handler) as api:
            return await api.get_blogs()

    blogs = _run(go())["blogs"]
    assert [b["slug"] for b in blogs] == ["jujutsu-kaisen"]


def test_blog_url_matches_route_builder(settings):
    from boganto.utils.routes import build_resource_url

    def handler(request):
        return httpx.Response(200, json={"blog": BLOG})

    async def go(hostname):
        async with _client(settings, handler, hostname) as api:
            return api.env, (await api.get_blog_by_slug("jujutsu-kaisen"))["blog"]["url"]

    for hostname in ("boganto.com", "localhost"):
        env, url = _run(go(hostname))
        assert url == build_resource_url("jujutsu-kaisen", env)
