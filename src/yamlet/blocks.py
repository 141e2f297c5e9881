"""块结构：块类型、序列项切分与嵌套跨度提取。"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

from .errors import StructuralIndentationError
from .lines import (
    SEQUENCE_MARKER,
    indentation_of,
    inline_item_content,
    is_scalar_sequence_item,
    trim,
)


@dataclass(frozen=True)
class Block:
    """同一基准缩进下的一段连续行（构造后不可变）。

    属性:
        lines: 行元组，可包含缩进更深的嵌套行。
    """

    lines: Tuple[str, ...]

    @classmethod
    def of(cls, lines: Iterable[str]) -> "Block":
        return cls(tuple(lines))

    @property
    def indentation(self) -> int:
        """首行缩进即块的基准缩进；空块为 0。"""

        if not self.lines:
            return 0
        return indentation_of(self.lines[0])

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self.lines)

    def __getitem__(self, index: int) -> str:
        return self.lines[index]


def is_marker_at(line: str, indentation: int) -> bool:
    """该行在给定列上是否为序列标记。"""

    return indentation_of(line) == indentation and line.startswith(
        SEQUENCE_MARKER, indentation
    )


def is_sequence_block(block: Block) -> bool:
    """基准缩进上以序列标记开头的行多于一行时，块被视为序列。"""

    base = block.indentation
    return sum(1 for line in block if is_marker_at(line, base)) > 1


def check_step(line: str, base: int) -> None:
    """缩进差必须是偶数（两空格嵌套步长），否则抛出 StructuralIndentationError。"""

    if (indentation_of(line) - base) % 2 != 0:
        raise StructuralIndentationError(trim(line))


def segment_items(block: Block) -> List[Block]:
    """将序列块切分为每个序列项对应的子块。

    参数:
        block: 行共享同一基准缩进的块。

    返回值:
        List[Block]: 子块列表，按源顺序排列；不含空子块。

    副作用:
        无；缩进差为奇数时抛出 StructuralIndentationError。
    """

    base = block.indentation
    items: List[Block] = []
    current: List[str] = []

    def flush() -> None:
        if current:
            items.append(Block.of(current))
            current.clear()

    for line in block:
        check_step(line, base)
        if not is_marker_at(line, base):
            current.append(line)
            continue
        inline = inline_item_content(line)
        if inline is not None:
            flush()
            current.append(inline)
        elif is_scalar_sequence_item(line):
            flush()
            items.append(Block.of([line]))
        else:
            flush()
    flush()
    return items


def scoped_span(block: Block, start: int, owner_indentation: int) -> Block:
    """提取从 `start` 开始、缩进严格深于 `owner_indentation` 的最长连续行。

    参数:
        block: 所在块。
        start: 起始下标（通常为键所在行的下一行）。
        owner_indentation: 拥有该嵌套值的键（或序列项）的缩进。

    返回值:
        Block: 嵌套跨度；遇到缩进回到（或低于）所有者缩进的行即停止。

    副作用:
        无。
    """

    end = start
    while end < len(block) and indentation_of(block[end]) > owner_indentation:
        end += 1
    return Block(block.lines[start:end])
