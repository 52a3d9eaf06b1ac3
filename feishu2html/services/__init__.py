from .auth_service import AuthService
from .errors import (
    ApiError,
    AuthenticationError,
    ConfigError,
    DocumentNotFoundError,
    FeishuApiError,
    InsufficientPermissionError,
    NetworkError,
    RateLimitError,
    is_retriable,
)
from .feishu_client import FeishuApiClient
from .file_writer import FileWriter
from .rate_limiter import RateLimiter
from .retry import with_retry

__all__ = [
    "ApiError",
    "AuthService",
    "AuthenticationError",
    "ConfigError",
    "DocumentNotFoundError",
    "FeishuApiClient",
    "FeishuApiError",
    "FileWriter",
    "InsufficientPermissionError",
    "NetworkError",
    "RateLimitError",
    "RateLimiter",
    "is_retriable",
    "with_retry",
]
