"""轻量级回复文本 -> HTML 渲染器。

不依赖 markdown 库，只识别聊天回复中常见的几种结构：

- 段落（空行分隔，段内单个换行保留为 <br>）
- 无序列表（每行以 "- " 开头）
- 有序列表（每行以 "1. " 这种编号开头）
- "1. 标题: - 条目 - 条目" 形式的编号小节
- **粗体**

块分类由 BLOCK_MATCHERS 中按顺序排列的纯函数完成，第一个命中的生效；
默认落到段落。所有原样展示的文本片段都先转义，再展开粗体，
因此输出可以直接插入页面而无需再次转义。
"""

import re
from dataclasses import dataclass
from typing import Callable, Literal, Optional, Tuple


BlockKind = Literal["section", "unordered", "ordered", "paragraph"]

_PARAGRAPH_BREAK = re.compile(r"\n\n+")
_SECTION = re.compile(r"\s*(\d+\.\s*[^:]+):\s*(.+)", re.S)
_NUMERIC_PREFIX = re.compile(r"\d+\.\s*")
_WRAPPED_BOLD = re.compile(r"\*\*(.*)\*\*")
_DASH_SEPARATOR = re.compile(r"\s*-\s+")
_UNORDERED_MARKER = re.compile(r"-\s+")
_ORDERED_MARKER = re.compile(r"\d+\.\s+")
_BOLD = re.compile(r"\*\*(.*?)\*\*")

# & 必须最先替换，避免二次转义
_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#039;"),
)


@dataclass(frozen=True)
class Block:
    """分类后的文本块。

    - kind: 块类型。
    - items: 列表条目（已去掉列表标记，未转义）。
    - heading: section 的标题（含编号前缀，已去掉外层 **）。
    - text: paragraph 的原始文本。
    """

    kind: BlockKind
    items: Tuple[str, ...] = ()
    heading: str = ""
    text: str = ""


def escape_html(text: str) -> str:
    """转义 & < > " ' 五个保留字符。"""

    for char, entity in _ESCAPES:
        text = text.replace(char, entity)
    return text


def _inline(text: str) -> str:
    return _BOLD.sub(r"<strong>\1</strong>", escape_html(text))


def _non_empty_lines(block: str) -> list[str]:
    return [line for line in (raw.strip() for raw in block.split("\n")) if line]


# ---- 块匹配器：输入原始块文本，命中时返回 Block，否则返回 None ----


def _match_section(block: str) -> Optional[Block]:
    m = _SECTION.fullmatch(block)
    if not m:
        return None
    rest = m.group(2).strip()
    if not rest:
        return None
    raw_heading = m.group(1).strip()
    prefix_match = _NUMERIC_PREFIX.match(raw_heading)
    prefix = prefix_match.group(0) if prefix_match else ""
    heading_text = raw_heading[len(prefix):]
    wrapped = _WRAPPED_BOLD.fullmatch(heading_text)
    if wrapped:
        heading_text = wrapped.group(1)
    items = tuple(item for item in (part.strip() for part in _DASH_SEPARATOR.split(rest)) if item)
    return Block(kind="section", heading=prefix + heading_text, items=items)


def _match_unordered(block: str) -> Optional[Block]:
    lines = _non_empty_lines(block)
    if not lines or not all(line.startswith("- ") for line in lines):
        return None
    return Block(kind="unordered", items=tuple(_UNORDERED_MARKER.sub("", line, count=1) for line in lines))


def _match_ordered(block: str) -> Optional[Block]:
    lines = _non_empty_lines(block)
    if not lines or not all(_ORDERED_MARKER.match(line) for line in lines):
        return None
    return Block(kind="ordered", items=tuple(_ORDERED_MARKER.sub("", line, count=1) for line in lines))


BLOCK_MATCHERS: Tuple[Callable[[str], Optional[Block]], ...] = (
    _match_section,
    _match_unordered,
    _match_ordered,
)


def classify_block(block: str) -> Block:
    """按 BLOCK_MATCHERS 顺序分类，第一个命中的生效，都未命中时视为段落。"""

    for matcher in BLOCK_MATCHERS:
        result = matcher(block)
        if result is not None:
            return result
    return Block(kind="paragraph", text=block)


def _list_items(items: Tuple[str, ...]) -> str:
    return "".join(f"<li>{_inline(item)}</li>" for item in items)


def emit_block(block: Block) -> str:
    """把分类后的块转换为 HTML 片段。"""

    if block.kind == "section":
        heading = escape_html(block.heading)
        return f"<p><strong>{heading}</strong></p><ul>{_list_items(block.items)}</ul>"
    if block.kind == "unordered":
        return f"<ul>{_list_items(block.items)}</ul>"
    if block.kind == "ordered":
        return f"<ol>{_list_items(block.items)}</ol>"
    return "<p>" + _inline(block.text).replace("\n", "<br>") + "</p>"


def render(text: str) -> str:
    """把回复文本渲染为可直接展示的 HTML。

    纯函数，不会抛错；空字符串渲染为空字符串。
    """

    if not text:
        return ""
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    return "".join(emit_block(classify_block(block)) for block in _PARAGRAPH_BREAK.split(normalized))
