"""HTTP 聊天服务适配器。

本模块负责：

1. 接收统一的 ChatRequest。
2. 将其转换为聊天服务的 JSON 请求（configCode / scopeId 字段）。
3. 调用 HTTP 接口并把网络/限流/服务端错误包装为业务异常。
4. 将响应 JSON 解析为 ChatReply / WidgetConfig。

接口约定：
- GET  {api_url}/api/ai/chat/config/{config_code}
- POST {api_url}/api/ai/chat
"""

from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote

import httpx

from chat_core.config.settings import settings
from chat_core.domain.exceptions import ApiError, NetworkError, RateLimitError, ValidationError
from chat_core.domain.models import ChatReply, ChatRequest, WidgetConfig
from chat_core.infrastructure.logging.logger import logger


CONFIG_PATH = "/api/ai/chat/config/{code}"
CHAT_PATH = "/api/ai/chat"


class HttpChatTransport:
    """基于 httpx.AsyncClient 的聊天传输实现。"""

    name = "http"

    def __init__(self, cfg=settings, api_url: Optional[str] = None):
        # Settings 里包含 api_url、超时等配置
        self._settings = cfg
        self._api_url = (api_url or cfg.api_url).rstrip("/")

    async def fetch_config(self, config_code: str) -> WidgetConfig:
        """获取组件默认配置。任何失败都退化为空配置。"""

        code = quote(config_code or "DEFAULT", safe="")
        url = self._api_url + CONFIG_PATH.format(code=code)
        try:
            async with httpx.AsyncClient(timeout=self._settings.http_timeout, trust_env=False) as client:
                resp = await client.get(url)
        except httpx.RequestError as e:
            logger.warning("Config fetch failed", extra={"extra": {"url": url, "error_type": type(e).__name__}})
            return WidgetConfig()
        if not resp.is_success:
            logger.warning(
                "Config fetch returned error status",
                extra={"extra": {"url": url, "status": resp.status_code}},
            )
            return WidgetConfig()
        try:
            data = resp.json()
        except ValueError:
            return WidgetConfig()
        return self._parse_config(data)

    async def send_message(self, req: ChatRequest) -> ChatReply:
        """发送一条聊天消息。

        步骤：
        1. 构造请求 payload（session_token 缺省时不发送 scopeId）。
        2. 发送请求并捕获网络错误/限流/服务端错误。
        3. 解析响应为 ChatReply。
        """

        if not req.message:
            raise ValidationError(code="EMPTY_MESSAGE", message="message must not be empty")
        url = self._api_url + CHAT_PATH
        payload = self._build_payload(req)
        try:
            async with httpx.AsyncClient(timeout=self._settings.http_timeout, trust_env=False) as client:
                resp = await client.post(
                    url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.RequestError as e:
            # 网络错误：DNS 失败、连接被拒绝等
            raise NetworkError(code="NETWORK_ERROR", message=str(e))
        if not resp.is_success:
            body = resp.text or ""
            message = body or resp.reason_phrase or "Chat request failed"
            logger.warning(
                "Chat request returned error status",
                extra={"extra": {"status": resp.status_code, "config_code": req.config_code}},
            )
            if resp.status_code == 429:
                raise RateLimitError(code="RATE_LIMIT", message=message, http_status=429, body=body)
            raise ApiError(code="API_ERROR", message=message, http_status=resp.status_code, body=body)
        try:
            data = resp.json()
        except ValueError:
            raise ApiError(
                code="DECODE_ERROR",
                message="Chat response is not valid JSON",
                http_status=resp.status_code,
            )
        return self._parse_reply(data, resp.status_code)

    # ---- 辅助方法 ----

    def _build_payload(self, req: ChatRequest) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "message": req.message,
            "configCode": req.config_code,
        }
        if req.session_token:
            payload["scopeId"] = req.session_token
        return payload

    def _parse_reply(self, data: Any, status: int) -> ChatReply:
        if not isinstance(data, dict) or not isinstance(data.get("reply"), str):
            raise ApiError(
                code="DECODE_ERROR",
                message="Chat response is missing 'reply'",
                http_status=status,
            )
        token = data.get("scopeId")
        return ChatReply(
            reply=data["reply"],
            session_token=token if isinstance(token, str) and token else None,
            followups=self._parse_followups(data.get("followups")),
        )

    def _parse_config(self, data: Any) -> WidgetConfig:
        if not isinstance(data, dict):
            return WidgetConfig()
        intro = data.get("initialMessage")
        return WidgetConfig(
            initial_message=intro if isinstance(intro, str) and intro else None,
            followups=self._parse_followups(data.get("followups")),
        )

    @staticmethod
    def _parse_followups(raw: Any) -> Optional[Tuple[str, ...]]:
        """解析推荐问题列表，丢弃非字符串与空字符串项。"""

        if not isinstance(raw, list):
            return None
        return tuple(item for item in raw if isinstance(item, str) and item)
