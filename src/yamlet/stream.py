"""多文档惰性读取器。

输入行流中可包含多个首尾相接的文档，文档之间以顶层序列标记行分隔：

    -
      name: Ann
    -
      name: Bob

读取器按需拉取：每次 `next()` 只消费到下一个分隔行或流结束为止，
消费方随时停止迭代都是安全的。
"""

from __future__ import annotations

import enum
import logging
from typing import Iterable, Iterator, List, Optional

from .blocks import Block, is_marker_at
from .lines import (
    indentation_of,
    inline_item_content,
    is_blank,
    is_scalar_sequence_item,
    scalar_item_value,
)
from .tree import Node, build_document

logger = logging.getLogger(__name__)


class ReaderState(enum.Enum):
    AWAITING_FIRST_SEPARATOR = "awaiting_first_separator"
    ACCUMULATING = "accumulating"
    EMITTING = "emitting"
    END_OF_STREAM = "end_of_stream"


class DocumentStream(Iterator[Node]):
    """按文档逐个产出通用树根节点的前向迭代器（不可重启）。

    参数:
        lines: 行迭代器（通常为打开的文件或 `str.splitlines()` 结果）。
        type_name: 目标类型名，透传给构建器用于错误诊断。

    副作用:
        迭代时消费 `lines`。
    """

    def __init__(self, lines: Iterable[str], type_name: Optional[str] = None) -> None:
        self._lines = iter(lines)
        self._type_name = type_name
        self._separator_indentation: Optional[int] = None
        self._pending: List[Node] = []
        self._buffer: List[str] = []
        self.state = ReaderState.AWAITING_FIRST_SEPARATOR
        self.emitted = 0

    def __iter__(self) -> "DocumentStream":
        return self

    def __next__(self) -> Node:
        while not self._pending:
            if self.state is ReaderState.END_OF_STREAM:
                raise StopIteration
            self._advance()
        node = self._pending.pop(0)
        self.emitted += 1
        logger.debug("emitting document #%d", self.emitted)
        return node

    def _advance(self) -> None:
        """读取行直到至少凑出一个文档（EMITTING）或流结束（END_OF_STREAM）。"""

        for raw in self._lines:
            line = raw.rstrip("\r\n")
            if is_blank(line):
                continue
            if self._separator_indentation is None:
                self._separator_indentation = indentation_of(line)
            if not is_marker_at(line, self._separator_indentation):
                self._buffer.append(line)
                self.state = ReaderState.ACCUMULATING
                continue

            # 分隔行：结束当前文档，并按标记后的内容开始下一个文档
            self._close_document()
            inline = inline_item_content(line)
            if inline is not None:
                self._buffer.append(inline)
            elif is_scalar_sequence_item(line):
                self._pending.append(scalar_item_value(line))
            if self._pending:
                self.state = ReaderState.EMITTING
                return
            self.state = ReaderState.ACCUMULATING

        self._close_document()
        self.state = ReaderState.END_OF_STREAM

    def _close_document(self) -> None:
        if not self._buffer:
            return
        block = Block.of(self._buffer)
        self._buffer = []
        self._pending.append(build_document(block, self._type_name))


def iter_documents(lines: Iterable[str], type_name: Optional[str] = None) -> Iterator[Node]:
    """`DocumentStream` 的函数式入口。"""

    return DocumentStream(lines, type_name)
