"""行分类器。

对单行文本做纯函数判定：缩进宽度、是否标量序列项、键值拆分与空格裁剪。
只把空格 `' '` 视为缩进与裁剪字符，制表符等其他空白保持原样。
"""

from __future__ import annotations

from typing import Optional, Tuple

SEQUENCE_MARKER = "-"


def indentation_of(line: str) -> int:
    """返回首个非空格字符的下标；全空格行返回其长度。"""

    for i, ch in enumerate(line):
        if ch != " ":
            return i
    return len(line)


def trim(text: str) -> str:
    """仅去除首尾空格。"""

    return text.strip(" ")


def is_blank(line: str) -> bool:
    return not line.strip()


def is_scalar_sequence_item(line: str) -> bool:
    """判断是否为标量序列项（`- value`）。

    自左向右扫描：跳过空格，遇到序列标记记为已见；遇到其他字符时，
    返回此前是否见过标记。全空格或全标记的行不算标量项。

    参数:
        line: 原始行。

    返回值:
        bool: 是否为标量序列项。

    副作用:
        无。
    """

    marker_seen = False
    for ch in line:
        if ch == " ":
            continue
        if ch == SEQUENCE_MARKER:
            marker_seen = True
        else:
            return marker_seen
    return False


def starts_with_marker(line: str) -> bool:
    return trim(line).startswith(SEQUENCE_MARKER)


def split_key_value(line: str) -> Tuple[str, str]:
    """按第一个冒号拆分键与值，两部分均裁剪空格；无冒号时值为空串。"""

    key, sep, value = line.partition(":")
    if not sep:
        return trim(key), ""
    return trim(key), trim(value)


def scalar_item_value(line: str) -> str:
    """返回第一个序列标记之后的文本（已裁剪）。"""

    return trim(line.split(SEQUENCE_MARKER, 1)[-1])


def inline_item_content(line: str) -> Optional[str]:
    """提取 `- key: value` 形式序列项的首个键值行。

    参数:
        line: 以序列标记开头（忽略缩进）的行。

    返回值:
        Optional[str]: 标记之后的键值内容，按其在原行中的列位置重新缩进；
        若该行不是标记行，或标记后内容不是 `key: value` / `key:` 形式，返回 None。

    副作用:
        无。
    """

    indent = indentation_of(line)
    if not line.startswith(SEQUENCE_MARKER, indent):
        return None
    rest = line[indent + 1 :]
    content = trim(rest)
    if not rest.startswith(" ") or content.startswith(SEQUENCE_MARKER):
        return None
    if ": " not in content and not content.endswith(":"):
        return None
    column = indent + 1 + indentation_of(rest)
    return " " * column + content
