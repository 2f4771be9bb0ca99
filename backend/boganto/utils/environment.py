"""运行环境判定：本地开发 or 线上域名（反向代理之后）。

每次调用都重新计算，不做缓存；只检查传入的上下文，不发网络请求。
"""
import logging
from enum import Enum
from typing import Optional
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict

from boganto.config import Settings, get_settings

logger = logging.getLogger(__name__)

LOCAL_HOSTS = {"localhost", "127.0.0.1"}


class ExecutionContext(str, Enum):
    LOCAL = "local"
    PRODUCTION = "production"
    OVERRIDE = "override"


class Environment(BaseModel):
    """一次请求/渲染内有效的环境快照"""
    model_config = ConfigDict(frozen=True)

    context: ExecutionContext
    base_url: str  # API 与上传文件所在后端，无结尾斜杠
    site_url: str  # 前端路由所在站点，无结尾斜杠

    @property
    def is_local(self) -> Optional[bool]:
        # 显式覆盖时无法得知实际运行位置
        if self.context is ExecutionContext.OVERRIDE:
            return None
        return self.context is ExecutionContext.LOCAL


def _bare_hostname(hostname: str) -> str:
    """去掉端口并转小写：localhost:3000 -> localhost"""
    raw = hostname.strip()
    try:
        parsed = urlsplit(f"//{raw}").hostname
    except ValueError:
        parsed = None
    return (parsed or raw).lower()


def request_hostname(host: Optional[str], forwarded_host: Optional[str] = None) -> Optional[str]:
    """从请求头中取主机名，反向代理的 X-Forwarded-Host 优先。"""
    if forwarded_host:
        first = forwarded_host.split(",")[0].strip()
        if first:
            return first
    if host and host.strip():
        return host.strip()
    return None


def resolve_environment(
    hostname: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> Environment:
    """
    按优先级判定当前环境

    1. 配置了 api_base_url：无条件使用（OVERRIDE）
    2. 能拿到主机名：localhost / 127.0.0.1 为本地，其他一律线上
    3. 拿不到主机名（服务端渲染）：回落到线上地址

    Examples:
        >>> resolve_environment("localhost:3000").base_url
        'http://localhost:8000'
        >>> resolve_environment(None).context
        <ExecutionContext.PRODUCTION: 'production'>
    """
    settings = settings or get_settings()
    production = settings.production_base_url.rstrip("/")
    site_override = settings.site_url.strip().rstrip("/")

    override = settings.api_base_url.strip().rstrip("/")
    if override:
        return Environment(
            context=ExecutionContext.OVERRIDE,
            base_url=override,
            site_url=site_override or production,
        )

    if hostname and hostname.strip():
        if _bare_hostname(hostname) in LOCAL_HOSTS:
            return Environment(
                context=ExecutionContext.LOCAL,
                base_url=settings.local_base_url.rstrip("/"),
                site_url=site_override or settings.local_site_url.rstrip("/"),
            )
        logger.debug(f"[环境] 非本地主机名 {hostname}，使用线上地址")

    return Environment(
        context=ExecutionContext.PRODUCTION,
        base_url=production,
        site_url=site_override or production,
    )
