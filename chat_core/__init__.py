"""Chat Core 顶层包。

该包提供可嵌入聊天组件的核心实现，
包括回复文本渲染、会话控制、自动滚动策略、
HTTP 传输适配、配置加载与日志等能力。
"""

from chat_core.rendering.markup import render
from chat_core.session.controller import SessionController
from chat_core.api.service import create_session

__all__ = ["render", "SessionController", "create_session"]
