"""会话控制层。

包含：
- controller: SessionController，管理轮次、会话 token、推荐问题与错误。
- errors: 失败请求的分类。
- scroll: 消息视口的自动滚动策略。
- view: 展示层视图模型。
"""

from chat_core.session.controller import SessionController
from chat_core.session.scroll import ScrollAnchor

__all__ = ["SessionController", "ScrollAnchor"]
