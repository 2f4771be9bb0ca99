from .api_client import ApiError, BogantoApiClient

__all__ = [
    "ApiError",
    "BogantoApiClient",
]
