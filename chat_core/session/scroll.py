"""消息视口的自动滚动策略。

只有当用户在新消息追加前就“接近底部”时才跟随滚动，
这样向上翻看历史的用户不会被新回复拉回底部。
第一次填充对话（开场白/首条消息）时直接跳到底部，不使用动画。
"""

from typing import TYPE_CHECKING, Callable, Literal, Optional, Protocol

from chat_core.config.settings import settings
from chat_core.domain.models import SessionState

if TYPE_CHECKING:
    from chat_core.session.controller import SessionController


ScrollAction = Literal["none", "instant", "animated"]


class Viewport(Protocol):
    """可滚动的消息区域。"""

    def scroll_to_bottom(self, animated: bool) -> None:
        ...


class ScrollAnchor:
    """根据接近底部标记决定是否在追加消息后滚动。

    接近底部标记只在 on_viewport_scroll 时重新计算，不做定时轮询。
    """

    def __init__(self, viewport: Viewport, threshold: Optional[float] = None):
        self._viewport = viewport
        self._threshold = settings.scroll_threshold if threshold is None else threshold
        self._near_bottom = True
        self._did_initial_scroll = False

    @property
    def near_bottom(self) -> bool:
        return self._near_bottom

    @property
    def threshold(self) -> float:
        return self._threshold

    def on_viewport_scroll(self, scroll_height: float, scroll_top: float, client_height: float) -> bool:
        """视口滚动通知：重新计算接近底部标记并返回。"""

        distance = scroll_height - scroll_top - client_height
        self._near_bottom = distance < self._threshold
        return self._near_bottom

    def on_transcript_append(self) -> ScrollAction:
        """对话追加了一条消息后调用，返回实际执行的滚动动作。"""

        if not self._did_initial_scroll:
            self._did_initial_scroll = True
            self._viewport.scroll_to_bottom(animated=False)
            return "instant"
        if self._near_bottom:
            self._viewport.scroll_to_bottom(animated=True)
            return "animated"
        return "none"

    def attach(self, controller: "SessionController") -> Callable[[], None]:
        """订阅控制器的 turn_appended 事件，返回取消订阅的函数。"""

        def listener(event: str, state: SessionState) -> None:
            if event == "turn_appended":
                self.on_transcript_append()

        return controller.add_listener(listener)
