"""统一的会话数据模型。

本模块定义了聊天组件内部在控制器、传输层与展示层之间共享的数据结构：

- Turn: 一条对话消息（user/agent），创建后不可变。
- SessionState: 会话状态快照，供展示层只读消费。
- ErrorInfo: 分类后的错误信息，用于可关闭的错误提示。
- ChatRequest / ChatReply / WidgetConfig: 与远端聊天接口交换的数据。

传输层（如 HttpChatTransport）负责在 JSON 与这些模型之间做转换，
控制器只依赖这里的模型。
"""

from dataclasses import dataclass, field
from typing import Literal, Optional, Tuple


# 消息发送方
Speaker = Literal["user", "agent"]

# 错误分类：限流 / 服务端错误 / 网络失败
ErrorKind = Literal["rate_limited", "server_error", "network_failure"]


@dataclass(frozen=True)
class Turn:
    """一条对话消息。

    - speaker: 发送方，user 或 agent。
    - text: 原始文本；agent 消息在展示时才经过 markup 渲染。
    - is_intro: 是否为开场白（非请求产生的第一条 agent 消息）。
    """

    speaker: Speaker
    text: str
    is_intro: bool = False


@dataclass(frozen=True)
class ErrorInfo:
    """一次失败请求的分类结果。"""

    kind: ErrorKind
    display_text: str


@dataclass(frozen=True)
class SessionState:
    """会话状态快照。

    控制器每次变更后都会生成新的快照，消费者不能修改其中的内容。
    """

    transcript: Tuple[Turn, ...] = ()
    pending_followups: Tuple[str, ...] = ()
    session_token: Optional[str] = None
    is_awaiting_reply: bool = False
    last_error: Optional[ErrorInfo] = None


@dataclass
class ChatRequest:
    """一次发往远端的聊天请求。"""

    message: str
    config_code: str
    session_token: Optional[str] = None


@dataclass
class ChatReply:
    """远端聊天接口的成功响应。"""

    reply: str
    session_token: Optional[str] = None
    followups: Optional[Tuple[str, ...]] = None


@dataclass
class WidgetConfig:
    """远端为某个 config_code 提供的默认开场白与推荐问题。

    两个字段都缺省时表示“没有可用配置”，获取失败时也会返回空配置。
    """

    initial_message: Optional[str] = None
    followups: Optional[Tuple[str, ...]] = field(default=None)

    @property
    def is_empty(self) -> bool:
        return not self.initial_message and self.followups is None
