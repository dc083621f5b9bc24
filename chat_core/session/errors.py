"""失败请求的错误分类。"""

from typing import Optional

from chat_core.domain.exceptions import ApiError, RateLimitError
from chat_core.domain.models import ErrorInfo


RATE_LIMIT_FALLBACK = "Rate limit exceeded for this configuration."
SERVER_ERROR_FALLBACK = "Server error ({status})"
NETWORK_FALLBACK = "Chat request failed."


def _status_of(exc: BaseException) -> Optional[int]:
    if isinstance(exc, (ApiError, RateLimitError)):
        return exc.http_status
    return None


def classify_error(exc: BaseException) -> ErrorInfo:
    """把一次失败的请求映射为 ErrorInfo。

    - 带状态码 429 -> rate_limited
    - 带其他状态码 -> server_error
    - 没有状态码（连接失败等）-> network_failure

    展示文本优先使用服务端返回的 body，其次是传输层的错误信息，
    最后才是按类型给出的通用提示。
    """

    status = _status_of(exc)
    if isinstance(exc, RateLimitError) or status == 429:
        return ErrorInfo(kind="rate_limited", display_text=_display_text(exc, RATE_LIMIT_FALLBACK))
    if status is not None:
        fallback = SERVER_ERROR_FALLBACK.format(status=status)
        return ErrorInfo(kind="server_error", display_text=_display_text(exc, fallback))
    return ErrorInfo(kind="network_failure", display_text=_display_text(exc, NETWORK_FALLBACK))


def _display_text(exc: BaseException, fallback: str) -> str:
    body = getattr(exc, "body", "") or ""
    message = getattr(exc, "message", None) or str(exc)
    return body or message or fallback
