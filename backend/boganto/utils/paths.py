"""项目路径常量，避免因工作目录不同导致文件读写错位。"""
from pathlib import Path

from boganto.config import get_settings

# .../boganto/backend
BACKEND_ROOT = Path(__file__).resolve().parents[2]

# 默认上传目录（与数据库中的 uploads/ 前缀一一对应）
UPLOADS_DIR = BACKEND_ROOT / "uploads"


def uploads_root() -> Path:
    """返回当前配置的上传根目录，并确保目录存在。"""
    configured = get_settings().uploads_dir.strip()
    root = Path(configured) if configured else UPLOADS_DIR
    root.mkdir(parents=True, exist_ok=True)
    return root
