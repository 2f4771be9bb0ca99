"""标识符规范化：去掉 slug / 分类 / 标签上多余的路由前缀。"""
import re
from enum import Enum
from typing import Optional


class ResourceKind(str, Enum):
    SLUG = "slug"
    CATEGORY = "category"
    TAG = "tag"


# 带斜杠开头的形式优先匹配
_PREFIXES = {
    ResourceKind.SLUG: ("/blog/", "blog/"),
    ResourceKind.CATEGORY: ("/category/", "category/"),
    ResourceKind.TAG: ("/tag/", "tag/"),
}

_SLUG_INVALID_RE = re.compile(r"[^a-z0-9-]+")
_SLUG_DASHES_RE = re.compile(r"-{2,}")


def _strip_once(value: str, prefixes: tuple) -> Optional[str]:
    for prefix in prefixes:
        if value.startswith(prefix):
            return value[len(prefix):]
    return None


def normalize_identifier(raw: Optional[str], kind: ResourceKind = ResourceKind.SLUG) -> Optional[str]:
    """
    去掉与资源类型对应的路由前缀，得到规范标识符

    只剥离本类型的前缀（slug 不会剥 category/），不做大小写或百分号解码。
    重复前缀（blog/blog/x）会剥到不再匹配为止，保证幂等。

    Examples:
        >>> normalize_identifier("/blog/one-piece", ResourceKind.SLUG)
        'one-piece'
        >>> normalize_identifier("category/manga", ResourceKind.SLUG)
        'category/manga'
    """
    if not raw:
        return raw
    prefixes = _PREFIXES[ResourceKind(kind)]
    value = raw
    while True:
        stripped = _strip_once(value, prefixes)
        if stripped is None:
            return value
        value = stripped


def generate_slug(text: Optional[str]) -> str:
    """标题转 slug：小写，非 [a-z0-9-] 的连续字符替换为单个 -"""
    if not text:
        return ""
    slug = _SLUG_INVALID_RE.sub("-", text.strip().lower())
    return _SLUG_DASHES_RE.sub("-", slug).strip("-")
