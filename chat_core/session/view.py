"""组件展示所需的视图模型。"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from chat_core.domain.models import SessionState
from chat_core.rendering.transcript import RenderedTurn, render_transcript


@dataclass(frozen=True)
class WidgetView:
    """一次渲染所需的全部数据。

    - turns: 已渲染的消息。
    - show_typing: 是否显示“正在输入”指示。
    - followups: 可点击的推荐问题；等待回复时隐藏。
    - error_text: 错误提示文本，None 表示没有错误。
    - input_enabled: 输入框是否可用（等待回复或显示错误时禁用）。
    """

    turns: List[RenderedTurn]
    show_typing: bool
    followups: Tuple[str, ...]
    error_text: Optional[str]
    input_enabled: bool


def build_view(state: SessionState) -> WidgetView:
    return WidgetView(
        turns=render_transcript(state.transcript),
        show_typing=state.is_awaiting_reply,
        followups=() if state.is_awaiting_reply else state.pending_followups,
        error_text=state.last_error.display_text if state.last_error else None,
        input_enabled=not state.is_awaiting_reply and state.last_error is None,
    )
