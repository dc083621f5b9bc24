"""聊天传输集成层。

该包下的模块负责：
- 定义传输抽象接口 (base)。
- 提供 HTTP 实现 (http_client)。
"""

from typing import Optional

from chat_core.config.settings import settings
from chat_core.providers.base import ChatTransport
from chat_core.providers.http_client import HttpChatTransport


def create_transport(api_url: Optional[str] = None) -> ChatTransport:
    """根据配置创建传输实例，api_url 缺省时取配置中的地址。"""

    return HttpChatTransport(settings, api_url=api_url)
