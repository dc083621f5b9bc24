"""统一业务异常模型。

传输层抛出的所有错误都继承自 BusinessError，
控制器据此把失败分类为 ErrorInfo 展示给用户。
"""

from typing import Optional


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "RATE_LIMIT"）。
        message: 用户可读错误信息。
        http_status: 对应的 HTTP 状态码；没有拿到响应时为 None。
        extra: 其他补充字段（例如 body、config_code 等）。
    """

    def __init__(self, code: str, message: str, http_status: Optional[int] = None, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)

    @property
    def body(self) -> str:
        """服务端返回的原始响应体（可能为空）。"""

        return self.extra.get("body") or ""


class NetworkError(BusinessError):
    """网络层错误，例如连接失败、DNS 解析失败等，没有状态码。"""


class ApiError(BusinessError):
    """远端返回非 2xx（且非 429）状态，或响应体无法解析时抛出。"""


class RateLimitError(BusinessError):
    """远端限流（HTTP 429），用户等待后可重试。"""


class ValidationError(BusinessError):
    """参数或配置校验失败。"""
