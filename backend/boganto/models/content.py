"""接口响应模型"""
from typing import Optional
from pydantic import BaseModel

from boganto.utils.environment import ExecutionContext
from boganto.utils.identifiers import ResourceKind


class EnvironmentInfo(BaseModel):
    context: ExecutionContext
    base_url: str
    site_url: str
    is_local: Optional[bool] = None


class ResourceLink(BaseModel):
    kind: ResourceKind
    raw: str
    canonical: str
    path: str
    url: str


class AssetLink(BaseModel):
    raw: str
    canonical: Optional[str] = None  # 后端规范化后的存库形式
    url: str  # 当前环境下可直接请求的地址


class UploadResponse(BaseModel):
    path: str  # 存库用相对路径
    url: str
