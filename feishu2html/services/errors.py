from __future__ import annotations

RATE_LIMIT_CODE = 99991400
NO_DOCUMENT_ACCESS_CODE = 99991663
MISSING_SCOPE_CODES = frozenset({99991668, 1770032})
NOT_FOUND_CODES = frozenset({1770002})
AUTH_CODES = frozenset({99991661, 99991671, 99991677})
RETRIABLE_STATUS_CODES = frozenset({500, 502, 503, 504})


class FeishuApiError(RuntimeError):
    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


class RateLimitError(FeishuApiError):
    def __init__(self, message: str = "接口请求频率超限", code: int | None = RATE_LIMIT_CODE) -> None:
        super().__init__(message, code)


class AuthenticationError(FeishuApiError):
    pass


class InsufficientPermissionError(FeishuApiError):
    pass


class DocumentNotFoundError(FeishuApiError):
    pass


class NetworkError(FeishuApiError):
    pass


class ApiError(FeishuApiError):
    """其它接口错误；``code`` 为飞书业务码或 HTTP 状态码。"""


class ConfigError(ValueError):
    pass


def describe_failure(
    operation: str, code: int | None, message: str, document_id: str | None = None
) -> str:
    lines = [operation, f"  错误码: {code}", f"  错误信息: {message}"]
    if document_id:
        lines.append(f"  文档 ID: {document_id}")
    lines.append("")
    lines.append("常见原因:")
    if code == NO_DOCUMENT_ACCESS_CODE:
        lines.append("  - 应用没有访问该文档的权限")
        lines.append("  - 请将文档分享给应用，或移动到应用可访问的空间")
    elif code in MISSING_SCOPE_CODES:
        lines.append("  - 应用缺少所需权限")
        lines.append("  - 请在开放平台为应用添加 docx:document 权限并发布版本")
        lines.append("  - 请确认文档已分享给应用")
    else:
        lines.append("  - 检查应用是否具备 docx:document 权限")
        lines.append("  - 检查应用是否已发布/启用")
        lines.append("  - 检查文档 ID 是否正确")
        lines.append("  - 检查应用是否有权访问该文档")
    return "\n".join(lines)


def error_for_code(
    operation: str, code: int, message: str, document_id: str | None = None
) -> FeishuApiError:
    """按飞书业务码映射到具体异常类型。"""
    if code == RATE_LIMIT_CODE:
        return RateLimitError(f"{operation}: {message}", code)
    text = describe_failure(operation, code, message, document_id)
    if code == NO_DOCUMENT_ACCESS_CODE or code in MISSING_SCOPE_CODES:
        return InsufficientPermissionError(text, code)
    if code in NOT_FOUND_CODES:
        return DocumentNotFoundError(text, code)
    if code in AUTH_CODES:
        return AuthenticationError(text, code)
    return ApiError(text, code)


def is_retriable(exc: BaseException) -> bool:
    if isinstance(exc, (NetworkError, RateLimitError)):
        return True
    if isinstance(exc, ApiError):
        return exc.code in RETRIABLE_STATUS_CODES
    return False


__all__ = [
    "ApiError",
    "AuthenticationError",
    "ConfigError",
    "DocumentNotFoundError",
    "FeishuApiError",
    "InsufficientPermissionError",
    "NetworkError",
    "RATE_LIMIT_CODE",
    "RateLimitError",
    "describe_failure",
    "error_for_code",
    "is_retriable",
]
