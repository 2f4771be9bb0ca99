"""
博客内容 API 客户端
接口: GET {base_url}/api/blogs, /api/blogs/slug/{slug}, /api/categories, /api/banner

后端返回的 slug / 图片路径不保证规范，这里在展示前再做一次独立的规范化。
"""
import logging
from typing import Optional
from urllib.parse import quote

import httpx

from boganto.utils.assets import resolve_asset
from boganto.utils.environment import Environment, resolve_environment
from boganto.utils.identifiers import ResourceKind, normalize_identifier
from boganto.utils.image_paths import IMAGE_FIELDS
from boganto.utils.routes import build_resource_path, build_resource_url

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10.0


class ApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _error_detail(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(body, dict):
        for key in ("error", "detail", "message"):
            if body.get(key):
                return str(body[key])
    return resp.text or resp.reason_phrase


class BogantoApiClient:
    """内容 API 的异步客户端，base_url 由环境判定得出"""

    def __init__(
        self,
        env: Optional[Environment] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.env = env or resolve_environment()
        self._client = httpx.AsyncClient(
            base_url=self.env.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "BogantoApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, path: str, params: Optional[dict] = None) -> dict:
        resp = await self._client.get(path, params=params or None)
        if resp.status_code >= 400:
            detail = _error_detail(resp)
            logger.warning(f"[内容API] ❌ GET {path} 失败: {resp.status_code} {detail}")
            raise ApiError(detail, status_code=resp.status_code)
        try:
            data = resp.json()
        except ValueError as e:
            raise ApiError(f"Invalid response format: {path}", status_code=resp.status_code) from e
        # 所有接口都返回 JSON 对象
        if not isinstance(data, dict):
            raise ApiError(f"Invalid response format: {path}", status_code=resp.status_code)
        return data

    # ---------- 展示层规范化 ----------
    def present_blog(self, blog: dict) -> dict:
        """补充 path / url / image_url / 分类与标签路由，原字段保持不变"""
        item = dict(blog)
        slug = normalize_identifier(item.get("slug") or "", ResourceKind.SLUG)
        item["slug"] = slug
        item["path"] = build_resource_path(slug, ResourceKind.SLUG)
        item["url"] = build_resource_url(slug, self.env, ResourceKind.SLUG)
        image = next((item[f] for f in IMAGE_FIELDS if item.get(f)), None)
        item["image_url"] = resolve_asset(image, self.env)

        category = item.get("category")
        if isinstance(category, dict) and category.get("slug"):
            item["category"] = self.present_category(category)
        item["tag_paths"] = [
            build_resource_path(tag, ResourceKind.TAG)
            for tag in item.get("tags") or []
            if tag and tag.strip()
        ]
        return item

    def present_category(self, category: dict) -> dict:
        item = dict(category)
        item["slug"] = normalize_identifier(item.get("slug") or "", ResourceKind.CATEGORY)
        item["path"] = build_resource_path(item["slug"], ResourceKind.CATEGORY)
        return item

    def present_banner(self, banner: dict) -> dict:
        item = dict(banner)
        item["image_url"] = resolve_asset(item.get("image"), self.env)
        return item

    # ---------- 接口 ----------
    async def get_blogs(self, **params) -> dict:
        data = await self._get("/api/blogs", params)
        data["blogs"] = [self.present_blog(b) for b in data.get("blogs") or [] if isinstance(b, dict)]
        return data

    async def get_blog_by_slug(self, slug: str) -> dict:
        canonical = normalize_identifier(slug, ResourceKind.SLUG) or ""
        data = await self._get(f"/api/blogs/slug/{quote(canonical, safe='')}")
        if isinstance(data.get("blog"), dict):
            data["blog"] = self.present_blog(data["blog"])
        return data

    async def get_blog_by_id(self, blog_id: int) -> dict:
        data = await self._get(f"/api/blogs/{blog_id}")
        if not isinstance(data.get("blog"), dict):
            raise ApiError("Invalid blog response format")
        data["blog"] = self.present_blog(data["blog"])
        return data

    async def get_categories(self, **params) -> dict:
        data = await self._get("/api/categories", params)
        data["categories"] = [self.present_category(c) for c in data.get("categories") or [] if isinstance(c, dict)]
        return data

    async def get_banners(self) -> dict:
        data = await self._get("/api/banner")
        data["banners"] = [self.present_banner(b) for b in data.get("banners") or [] if isinstance(b, dict)]
        return data
