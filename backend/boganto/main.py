import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from boganto.config import get_settings
from boganto.routers import links, uploads
from boganto.utils.paths import uploads_root

# 配置日志
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

logger = logging.getLogger(__name__)


def _allowed_origins(raw: str) -> list[str]:
    allowed = []
    for origin in raw.split(","):
        normalized = origin.strip().rstrip("/")
        if normalized:
            allowed.append(normalized)
    return allowed


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="Boganto Blog API",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_allowed_origins(settings.api_cors_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
        max_age=3600,
    )

    # 上传文件与库中的 uploads/ 相对路径一一对应
    upload_dir = uploads_root()
    app.mount("/uploads", StaticFiles(directory=str(upload_dir)), name="uploads")
    logger.info(f"[启动] 上传目录: {upload_dir}")

    app.include_router(links.router)
    app.include_router(uploads.router)

    @app.get("/")
    def root():
        return {"message": "Boganto Blog API", "docs": "/docs"}

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
