"""回复文本渲染。

包含：
- markup: 回复文本 -> 安全 HTML 的轻量渲染器。
- transcript: 整段对话记录的展示渲染。
"""

from chat_core.rendering.markup import escape_html, render

__all__ = ["escape_html", "render"]
