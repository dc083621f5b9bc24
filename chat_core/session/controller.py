"""会话控制器核心模块。

负责轮次管理、会话延续（session token）、推荐问题状态、
等待回复标记以及失败分类。所有状态只在事件循环线程上修改，
外部只能通过 state 读取不可变快照。
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Literal, Optional, Sequence, Set, Tuple

from chat_core.domain.models import ChatRequest, ErrorInfo, SessionState, Turn
from chat_core.infrastructure.logging.logger import logger
from chat_core.providers.base import ChatTransport
from chat_core.session.errors import classify_error


SessionEvent = Literal["turn_appended", "followups_changed", "awaiting_changed", "error_changed"]
Listener = Callable[[SessionEvent, SessionState], None]


class SessionController:
    """单个聊天组件实例的会话控制器。

    状态：
        - Idle: 没有请求在途，可以发送。
        - Sending: is_awaiting_reply 为 True，新的 send 会被拒绝（不排队）。
        - Error: last_error 不为空，与 Idle 并存，可单独关闭。

    close() 之后，尚未返回的 bootstrap / send 结果都会被忽略。
    实现方式是一个代数计数器：异步调用开始时记录当前值，恢复时比较。
    """

    def __init__(self, transport: ChatTransport, config_code: str):
        self._transport = transport
        self._config_code = config_code or "DEFAULT"
        self._transcript: Tuple[Turn, ...] = ()
        self._followups: Tuple[str, ...] = ()
        self._session_token: Optional[str] = None
        self._awaiting = False
        self._last_error: Optional[ErrorInfo] = None
        self._generation = 0
        self._closed = False
        self._listeners: List[Listener] = []
        self._tasks: Set["asyncio.Task[None]"] = set()

    # ---- 只读视图 ----

    @property
    def state(self) -> SessionState:
        return SessionState(
            transcript=self._transcript,
            pending_followups=self._followups,
            session_token=self._session_token,
            is_awaiting_reply=self._awaiting,
            last_error=self._last_error,
        )

    @property
    def config_code(self) -> str:
        return self._config_code

    @property
    def closed(self) -> bool:
        return self._closed

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """注册状态变更回调，返回取消注册的函数。"""

        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    # ---- 操作 ----

    def bootstrap(
        self,
        preset_intro: Optional[str] = None,
        preset_followups: Optional[Sequence[str]] = None,
    ) -> Optional["asyncio.Task[None]"]:
        """安装开场白与推荐问题。

        提供了 preset_intro 时同步安装；否则在当前事件循环上调度一次
        fetch_config，不阻塞调用方也不占用 send 的在途名额。

        Returns:
            调度的后台任务；同步安装或已关闭时返回 None。
        """

        if self._closed:
            return None
        if preset_intro:
            self._install_defaults(preset_intro, tuple(preset_followups or ()))
            return None
        task = asyncio.get_running_loop().create_task(self._load_remote_defaults(self._generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def send(self, text: str) -> bool:
        """发送一条用户消息。

        Returns:
            是否接受了本次发送。正在等待回复、文本为空或已关闭时返回 False。
        """

        if self._closed:
            return False
        if self._awaiting:
            self._log(logging.INFO, "Send rejected, reply pending")
            return False
        if not text or not text.strip():
            return False

        generation = self._generation
        self._append(Turn(speaker="user", text=text))
        self._set_followups(())
        self._set_awaiting(True)
        self._set_error(None)

        req = ChatRequest(message=text, config_code=self._config_code, session_token=self._session_token)
        self._log(logging.INFO, "Sending chat turn", has_session=bool(self._session_token))
        try:
            reply = await self._transport.send_message(req)
        except Exception as exc:  # noqa: BLE001 - 所有失败都要分类后展示给用户
            if generation != self._generation:
                self._log(logging.INFO, "Ignored late failure after close")
                return True
            info = classify_error(exc)
            self._log(
                logging.WARNING,
                "Chat turn failed",
                kind=info.kind,
                error_type=type(exc).__name__,
                status=getattr(exc, "http_status", None),
            )
            self._set_error(info)
        else:
            if generation != self._generation:
                self._log(logging.INFO, "Ignored late reply after close")
                return True
            if reply.session_token:
                self._session_token = reply.session_token
            self._append(Turn(speaker="agent", text=reply.reply))
            self._set_followups(tuple(reply.followups or ()))
            self._log(logging.INFO, "Received chat reply", followups=len(self._followups))
        finally:
            if generation == self._generation:
                self._set_awaiting(False)
        return True

    async def select_followup(self, text: str) -> bool:
        """点击推荐问题：先清空推荐，再以该文本发送。"""

        self._set_followups(())
        return await self.send(text)

    def dismiss_error(self) -> None:
        self._set_error(None)

    def close(self) -> None:
        """拆除控制器，之后返回的异步结果都被忽略。"""

        if self._closed:
            return
        self._closed = True
        self._generation += 1
        self._log(logging.INFO, "Session closed", pending_tasks=len(self._tasks))

    # ---- 内部实现 ----

    async def _load_remote_defaults(self, generation: int) -> None:
        try:
            cfg = await self._transport.fetch_config(self._config_code)
        except Exception as exc:  # noqa: BLE001 - 开场白是可选增强，失败时静默降级
            self._log(logging.WARNING, "Bootstrap config fetch failed", error_type=type(exc).__name__)
            return
        if generation != self._generation:
            self._log(logging.INFO, "Ignored late bootstrap result after close")
            return
        if cfg.is_empty:
            return
        self._install_defaults(cfg.initial_message, tuple(cfg.followups or ()))

    def _install_defaults(self, intro: Optional[str], followups: Tuple[str, ...]) -> None:
        if intro and not self._transcript:
            self._append(Turn(speaker="agent", text=intro, is_intro=True))
        # 用户已经开始对话后，不再用开场推荐覆盖
        if self._awaiting or any(t.speaker == "user" for t in self._transcript):
            return
        self._set_followups(followups)

    def _append(self, turn: Turn) -> None:
        self._transcript = self._transcript + (turn,)
        self._notify("turn_appended")

    def _set_followups(self, followups: Tuple[str, ...]) -> None:
        if followups == self._followups:
            return
        self._followups = followups
        self._notify("followups_changed")

    def _set_awaiting(self, value: bool) -> None:
        if value == self._awaiting:
            return
        self._awaiting = value
        self._notify("awaiting_changed")

    def _set_error(self, error: Optional[ErrorInfo]) -> None:
        if error == self._last_error:
            return
        self._last_error = error
        self._notify("error_changed")

    def _notify(self, event: SessionEvent) -> None:
        if not self._listeners:
            return
        snapshot = self.state
        for listener in list(self._listeners):
            try:
                listener(event, snapshot)
            except Exception:  # noqa: BLE001 - 单个监听器失败不能中断会话状态流转
                logger.exception(
                    "Session listener failed",
                    extra={"extra": {"config_code": self._config_code, "event": event}},
                )

    def _log(self, level: int, message: str, **fields: Any) -> None:
        payload: Dict[str, Any] = {"config_code": self._config_code}
        payload.update(fields)
        logger.log(level, message, extra={"extra": payload})
