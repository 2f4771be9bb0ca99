"""图片路径规范化（读取/序列化时）。

库里统一存相对路径 uploads/<子目录>/<文件名>；历史数据里可能有
https://boganto.com/uploads/... 之类的绝对 URL，出库前一律修正。
"""
import re
from typing import Any, Iterable, Optional

from boganto.utils.assets import UPLOADS_PREFIX

IMAGE_FIELDS = ("image", "featured_image", "banner_image")

_SCHEME_HOST_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*://[^/]*")


def clean_image_path(image_path: Optional[str]) -> Optional[str]:
    """
    将库中的图片值统一为相对路径

    Examples:
        >>> clean_image_path("https://boganto.com/uploads/sub/x.png")
        'uploads/sub/x.png'
        >>> clean_image_path("/uploads/x.png")
        'uploads/x.png'
        >>> clean_image_path("") is None
        True
    """
    if not image_path:
        return None

    path = str(image_path).strip().replace("\\", "/")
    # 历史绝对 URL：去掉协议和域名
    path = _SCHEME_HOST_RE.sub("", path, count=1)
    path = path.lstrip("/")

    index = path.find(UPLOADS_PREFIX)
    if index >= 0:
        path = path[index:]

    return path or None


def sanitize_record(record: dict, fields: Iterable[str] = IMAGE_FIELDS) -> dict:
    """返回副本，其中出现的图片字段都已规范化。"""
    cleaned: dict[str, Any] = dict(record)
    for field in fields:
        if field in cleaned:
            cleaned[field] = clean_image_path(cleaned[field])
    return cleaned
