"""图片上传落盘：校验类型与大小，生成唯一文件名，只返回相对路径。"""
import io
import logging
import os
import re
import struct
import time
import uuid
from pathlib import Path
from typing import Optional

from PIL import Image

from boganto.config import get_settings
from boganto.utils.assets import UPLOADS_PREFIX
from boganto.utils.logger_utils import log_upload_result
from boganto.utils.paths import uploads_root

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}
ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}
# Pillow 识别出的格式
ALLOWED_FORMATS = {"JPEG", "PNG", "GIF", "WEBP"}

_SUBFOLDER_SEGMENT_RE = re.compile(r"^[A-Za-z0-9_-]+$")


class UploadError(Exception):
    """上传被拒绝或失败，status_code 供路由转换为 HTTP 错误"""
    status_code = 400


class UnsupportedImageType(UploadError):
    status_code = 415


class UploadTooLarge(UploadError):
    status_code = 413


class InvalidUploadTarget(UploadError):
    status_code = 400


class UploadWriteError(UploadError):
    status_code = 500


def _normalize_content_type(content_type: Optional[str]) -> str:
    # image/png; charset=binary -> image/png
    return (content_type or "").split(";")[0].strip().lower()


def _normalize_subfolder(subfolder: Optional[str]) -> str:
    """子目录只允许字母数字、下划线和连字符组成的段，防止路径穿越。"""
    raw = (subfolder or "").strip().strip("/")
    if not raw:
        return ""
    segments = raw.split("/")
    for segment in segments:
        if not _SUBFOLDER_SEGMENT_RE.match(segment):
            raise InvalidUploadTarget(f"非法的上传子目录: {subfolder}")
    return "/".join(segments)


def generate_upload_filename(original_name: Optional[str], content_type: Optional[str]) -> str:
    """
    生成唯一文件名：随机串 + 时间戳 + 扩展名

    唯一性不依赖原始文件名；原扩展名不在白名单内时按 content-type 推断。

    Examples:
        >>> generate_upload_filename("cover.PNG", "image/png")
        '3f2a...e1_1760000000.png'
    """
    ext = Path(original_name or "").suffix.lower()
    if ext not in ALLOWED_EXTENSIONS:
        ext = ALLOWED_IMAGE_TYPES.get(_normalize_content_type(content_type), "")
    return f"{uuid.uuid4().hex}_{int(time.time())}{ext}"


def _verify_image(data: bytes) -> None:
    try:
        with Image.open(io.BytesIO(data)) as image:
            image_format = image.format
            image.verify()
    except Image.DecompressionBombError as e:
        # 头部声明的像素数超限，不再解码
        raise UploadTooLarge(f"图片尺寸过大: {e}") from e
    except (OSError, EOFError, SyntaxError, ValueError, IndexError, struct.error) as e:
        raise UnsupportedImageType(f"无法识别的图片内容: {e}") from e
    if image_format not in ALLOWED_FORMATS:
        raise UnsupportedImageType(f"不支持的图片格式: {image_format}")


def _validate(data: bytes, content_type: str, max_size: int) -> None:
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise UnsupportedImageType(f"不支持的文件类型: {content_type or '未知'}")
    if not data:
        raise UploadError("上传文件为空")
    if len(data) > max_size:
        raise UploadTooLarge(f"文件过大: {len(data)} 字节，上限 {max_size} 字节")
    _verify_image(data)


def save_upload(
    data: bytes,
    *,
    filename: Optional[str],
    content_type: Optional[str],
    subfolder: str = "",
    uploads_dir: Optional[Path] = None,
    max_size: Optional[int] = None,
) -> str:
    """
    校验并保存上传的图片

    Args:
        data: 文件内容
        filename: 原始文件名（只用于取扩展名）
        content_type: 客户端声明的 MIME 类型
        subfolder: uploads 下的子目录，如 "blogs"、"banners"
        uploads_dir: 上传根目录，默认取配置
        max_size: 大小上限，默认取配置

    Returns:
        存库用的相对路径 uploads/<子目录>/<文件名>，不含域名和开头斜杠

    Raises:
        UploadError: 类型、大小、目标目录不合法或写盘失败；失败时不会留下半写的文件
    """
    start_time = time.time()
    max_size = max_size if max_size is not None else get_settings().max_upload_size
    normalized_type = _normalize_content_type(content_type)

    try:
        _validate(data, normalized_type, max_size)
        folder = _normalize_subfolder(subfolder)
    except UploadError as e:
        log_upload_result(logger, False, time.time() - start_time, len(data or b""), error=str(e))
        raise

    root = uploads_dir if uploads_dir is not None else uploads_root()
    target_dir = root / folder if folder else root
    name = generate_upload_filename(filename, normalized_type)
    target = target_dir / name
    partial = target_dir / f"{name}.part"

    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        partial.write_bytes(data)
        os.replace(partial, target)
    except OSError as e:
        partial.unlink(missing_ok=True)
        logger.error(f"[上传] ❌ 写入文件失败 {target}: {e}", exc_info=True)
        raise UploadWriteError("保存上传文件失败") from e

    relative = f"{UPLOADS_PREFIX}{folder}/{name}" if folder else f"{UPLOADS_PREFIX}{name}"
    log_upload_result(logger, True, time.time() - start_time, len(data), relative)
    return relative
