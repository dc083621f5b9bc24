"""传输层抽象接口。

SessionController 不直接依赖具体的 HTTP 客户端，而是依赖此协议：

- fetch_config(config_code): 获取开场白与推荐问题，失败时退化为空配置，绝不抛错。
- send_message(req): 发送一条用户消息，失败时抛出 domain.exceptions 中的异常。

这样可以在测试中替换为内存实现，也可以接入其他协议（WebSocket 等）。
"""

from typing import Protocol

from chat_core.domain.models import ChatReply, ChatRequest, WidgetConfig


class ChatTransport(Protocol):
    """聊天传输客户端协议。"""

    name: str

    async def fetch_config(self, config_code: str) -> WidgetConfig:
        ...

    async def send_message(self, req: ChatRequest) -> ChatReply:
        """执行一次聊天调用。

        非成功状态抛出 RateLimitError / ApiError（带 http_status 与 body），
        连接失败抛出 NetworkError。
        """

        ...
