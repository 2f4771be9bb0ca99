"""应用配置 - 从环境变量读取"""
from pathlib import Path
from pydantic_settings import BaseSettings
from functools import lru_cache

# 支持从项目根目录的 .env 加载（当在 backend/ 下启动时）
_root_env = Path(__file__).resolve().parent.parent.parent / ".env"
_env_file = _root_env if _root_env.exists() else ".env"


class Settings(BaseSettings):
    # 部署环境
    # 显式覆盖的 API 地址，设置后无条件使用
    api_base_url: str = ""
    local_base_url: str = "http://localhost:8000"
    local_site_url: str = "http://localhost:3000"
    production_base_url: str = "https://boganto.com"
    # 前端站点地址（路由链接用），为空时按环境推断
    site_url: str = ""

    # 后端
    backend_host: str = "0.0.0.0"
    backend_port: int = 8000
    api_cors_origins: str = "http://localhost:5173,http://localhost:3000,https://boganto.com"

    # 上传（为空时使用 backend/uploads）
    uploads_dir: str = ""
    max_upload_size: int = 5 * 1024 * 1024

    class Config:
        env_file = _env_file
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
