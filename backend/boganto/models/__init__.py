from .content import (
    EnvironmentInfo,
    ResourceLink,
    AssetLink,
    UploadResponse,
)
__all__ = [
    "EnvironmentInfo",
    "ResourceLink",
    "AssetLink",
    "UploadResponse",
]
