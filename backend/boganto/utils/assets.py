"""上传图片地址解析：把库里存的（可能不规范的）路径变成可访问的 URL。"""
import re
from typing import Optional

from boganto.utils.environment import Environment, ExecutionContext

UPLOADS_PREFIX = "uploads/"

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*:")


def is_absolute_url(value: Optional[str]) -> bool:
    """带协议（https:、data: 等）或协议相对（//cdn...）的地址"""
    if not value:
        return False
    value = value.strip()
    return bool(_SCHEME_RE.match(value)) or value.startswith("//")


def rebase_on_uploads(path: str) -> str:
    """从第一次出现的 uploads/ 开始截取；没有则补上 uploads/ 前缀。"""
    index = path.find(UPLOADS_PREFIX)
    if index >= 0:
        return path[index:]
    return f"{UPLOADS_PREFIX}{path}"


def resolve_asset(raw_path: Optional[str], env: Environment) -> str:
    """
    将图片路径解析为可获取的地址

    - 空值返回空字符串（调用方不渲染图片）
    - 已是绝对地址原样返回，不重复加前缀
    - 线上：同源提供静态文件，返回站点根路径 /uploads/...
    - 本地 / 显式覆盖：上传文件在独立后端端口，返回 <base_url>/uploads/...
    """
    if not raw_path:
        return ""
    raw = raw_path.strip()
    if not raw:
        return ""
    if is_absolute_url(raw):
        return raw

    path = raw.replace("\\", "/").lstrip("/")
    if not path:
        return ""
    relative = rebase_on_uploads(path)
    if env.context is ExecutionContext.PRODUCTION:
        return f"/{relative}"
    return f"{env.base_url}/{relative}"
