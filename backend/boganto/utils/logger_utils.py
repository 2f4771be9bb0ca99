"""统一日志格式工具"""
import logging
from typing import Optional


def log_upload_result(
    logger: logging.Logger,
    success: bool,
    elapsed: float,
    size_bytes: int = 0,
    path: Optional[str] = None,
    error: Optional[str] = None,
) -> None:
    """
    记录上传结果日志

    Args:
        logger: 日志记录器
        success: 是否成功
        elapsed: 耗时（秒）
        size_bytes: 文件大小
        path: 存库的相对路径
        error: 错误信息

    Examples:
        >>> log_upload_result(logger, True, 0.02, 2048, "uploads/blogs/abc.png")
        [上传] ✅ 保存完成，耗时: 0.02s, 大小: 2.0 KB, 路径: uploads/blogs/abc.png
    """
    size_str = format_file_size(size_bytes)
    if success:
        path_str = f", 路径: {path}" if path else ""
        logger.info(
            f"[上传] ✅ 保存完成，耗时: {elapsed:.2f}s, 大小: {size_str}{path_str}"
        )
    else:
        error_str = f", 错误: {error}" if error else ""
        logger.warning(
            f"[上传] ❌ 已拒绝，耗时: {elapsed:.2f}s, 大小: {size_str}{error_str}"
        )


def format_file_size(size_bytes: int) -> str:
    """
    格式化文件大小

    Args:
        size_bytes: 字节数

    Returns:
        格式化的文件大小字符串

    Examples:
        >>> format_file_size(1024)
        '1.0 KB'
        >>> format_file_size(1536000)
        '1.5 MB'
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"
