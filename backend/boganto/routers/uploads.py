"""上传 API：博客封面、横幅等图片"""
import logging
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from boganto.config import get_settings
from boganto.models import UploadResponse
from boganto.routers.links import get_request_environment
from boganto.utils.assets import resolve_asset
from boganto.utils.environment import Environment
from boganto.utils.uploads import UploadError, save_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/uploads", tags=["uploads"])


@router.post("", response_model=UploadResponse)
async def upload_image(
    file: UploadFile = File(...),
    subfolder: str = Form(""),
    env: Environment = Depends(get_request_environment),
):
    """上传一张图片，返回存库用的相对路径和当前环境下的访问地址。"""
    max_size = get_settings().max_upload_size
    # 最多多读 1 字节，足以判断是否超限
    data = await file.read(max_size + 1)
    try:
        path = save_upload(
            data,
            filename=file.filename,
            content_type=file.content_type,
            subfolder=subfolder,
            max_size=max_size,
        )
    except UploadError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    finally:
        await file.close()
    return UploadResponse(path=path, url=resolve_asset(path, env))
