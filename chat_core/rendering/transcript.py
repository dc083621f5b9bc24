"""对话记录的展示渲染。

agent 消息经过 markup 渲染；user 消息按纯文本原样展示，只做转义。
"""

from dataclasses import dataclass
from typing import Iterable, List

from chat_core.domain.models import Speaker, Turn
from chat_core.rendering.markup import escape_html, render


@dataclass(frozen=True)
class RenderedTurn:
    speaker: Speaker
    html: str
    is_intro: bool = False


def render_turn(turn: Turn) -> RenderedTurn:
    if turn.speaker == "agent":
        html = render(turn.text)
    else:
        html = escape_html(turn.text)
    return RenderedTurn(speaker=turn.speaker, html=html, is_intro=turn.is_intro)


def render_transcript(turns: Iterable[Turn]) -> List[RenderedTurn]:
    return [render_turn(t) for t in turns]
