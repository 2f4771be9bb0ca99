"""链接 API：当前环境、规范路由、图片地址"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request

from boganto.models import AssetLink, EnvironmentInfo, ResourceLink
from boganto.utils.assets import resolve_asset
from boganto.utils.environment import Environment, request_hostname, resolve_environment
from boganto.utils.identifiers import ResourceKind, normalize_identifier
from boganto.utils.image_paths import clean_image_path
from boganto.utils.routes import build_resource_path, build_resource_url

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["links"])


def get_request_environment(request: Request) -> Environment:
    """依赖：按本次请求的主机名判定环境（每个请求重新计算）。"""
    hostname = request_hostname(
        request.headers.get("host"),
        request.headers.get("x-forwarded-host"),
    )
    return resolve_environment(hostname)


@router.get("/environment", response_model=EnvironmentInfo)
async def environment(env: Environment = Depends(get_request_environment)):
    """返回当前请求所处的环境及对应的 API / 站点地址。"""
    return EnvironmentInfo(
        context=env.context,
        base_url=env.base_url,
        site_url=env.site_url,
        is_local=env.is_local,
    )


@router.get("/links/{kind}", response_model=ResourceLink)
async def resource_link(
    kind: ResourceKind,
    identifier: str = Query("", description="原始 slug / 分类 / 标签，可能带多余前缀"),
    env: Environment = Depends(get_request_environment),
):
    """把原始标识符转换为规范路由，如 blog/one-piece -> /blog/one-piece"""
    canonical = normalize_identifier(identifier, kind) or ""
    if canonical != identifier:
        logger.info(f"[链接] 修正{kind.value}: {identifier!r} -> {canonical!r}")
    return ResourceLink(
        kind=kind,
        raw=identifier,
        canonical=canonical,
        path=build_resource_path(identifier, kind),
        url=build_resource_url(identifier, env, kind),
    )


@router.get("/assets", response_model=AssetLink)
async def asset_link(
    path: Optional[str] = Query(None, description="库中存储的图片路径"),
    env: Environment = Depends(get_request_environment),
):
    """返回图片的规范存库路径与当前环境下的访问地址。"""
    raw = path or ""
    return AssetLink(raw=raw, canonical=clean_image_path(raw), url=resolve_asset(raw, env))
