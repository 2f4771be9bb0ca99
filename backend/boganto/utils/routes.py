"""资源路由拼接：/blog/<slug>、/category/<slug>、/tag/<tag>"""
from typing import Optional
from urllib.parse import quote

from boganto.utils.environment import Environment
from boganto.utils.identifiers import ResourceKind, normalize_identifier

ROUTE_PREFIXES = {
    ResourceKind.SLUG: "blog",
    ResourceKind.CATEGORY: "category",
    ResourceKind.TAG: "tag",
}


def build_resource_path(identifier: Optional[str], kind: ResourceKind = ResourceKind.SLUG) -> str:
    """
    生成站内路由路径

    与运行环境无关：本地和线上由同一个前端路由处理，结果完全相同。
    标签先去空白再整体百分号编码；slug / 分类由生成环节保证路径安全，不再编码。

    Examples:
        >>> build_resource_path("blog/jujutsu-kaisen")
        '/blog/jujutsu-kaisen'
        >>> build_resource_path(" shonen jump ", ResourceKind.TAG)
        '/tag/shonen%20jump'
    """
    kind = ResourceKind(kind)
    value = identifier or ""
    if kind is ResourceKind.TAG:
        value = quote((normalize_identifier(value.strip(), kind) or "").strip(), safe="")
    else:
        value = normalize_identifier(value, kind) or ""
    return f"/{ROUTE_PREFIXES[kind]}/{value}"


def build_resource_url(
    identifier: Optional[str],
    env: Environment,
    kind: ResourceKind = ResourceKind.SLUG,
) -> str:
    """站点地址 + 路由路径，例如 https://boganto.com/blog/jujutsu-kaisen"""
    return f"{env.site_url}{build_resource_path(identifier, kind)}"
