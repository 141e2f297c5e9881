"""通用树与递归构建器。

通用树节点只有三种：标量（`str`，不做类型推断）、映射（保持插入顺序的
`dict`）与序列（`list`）。映射构建器与序列构建器互相递归，均以不可变的
`Block` 加显式下标推进，递归深度只取决于输入的嵌套深度。
"""

from __future__ import annotations

from typing import Dict, List, Optional, Union

from .blocks import Block, check_step, is_sequence_block, scoped_span, segment_items
from .errors import DuplicateKeyError, EmptyObjectError, StructuralIndentationError
from .lines import (
    indentation_of,
    is_scalar_sequence_item,
    scalar_item_value,
    split_key_value,
    starts_with_marker,
    trim,
)

Scalar = str
Node = Union[str, Dict[str, "Node"], List["Node"]]
MappingNode = Dict[str, Node]
SequenceNode = List[Node]

ANONYMOUS_KEY = ""


def build_mapping(block: Block, type_name: Optional[str] = None) -> MappingNode:
    """将统一缩进的块构建为映射。

    参数:
        block: 非空块；直接归属的行缩进必须等于首行缩进。
        type_name: 目标类型名，仅用于重复键错误的诊断信息。

    返回值:
        dict: 键到节点的有序映射。

    副作用:
        无；结构错误时立即抛出 StructuralIndentationError /
        DuplicateKeyError / EmptyObjectError。
    """

    if not block:
        raise EmptyObjectError()
    result: MappingNode = {}
    base = block.indentation
    i = 0
    while i < len(block):
        line = block[i]
        i += 1
        if indentation_of(line) != base:
            raise StructuralIndentationError(trim(line))

        key, value = split_key_value(line)
        if key in result:
            raise DuplicateKeyError(key, type_name)
        if value:
            result[key] = value
            continue
        # `- value` 行归入匿名键
        if is_scalar_sequence_item(line):
            result[ANONYMOUS_KEY] = scalar_item_value(line)
            continue

        span = scoped_span(block, i, base)
        if not span:
            raise EmptyObjectError(key)
        check_step(span[0], base)
        if starts_with_marker(span[0]):
            result[key] = build_sequence(span, type_name)
        else:
            result[key] = build_mapping(span, type_name)
        i += len(span)
    return result


def build_sequence(block: Block, type_name: Optional[str] = None) -> SequenceNode:
    """将块切分为序列项并逐项构建为嵌套序列或映射。空块返回空列表。"""

    if not block:
        return []
    values: SequenceNode = []
    for item in segment_items(block):
        if is_sequence_block(item):
            values.append(build_sequence(item, type_name))
        else:
            values.append(build_mapping(item, type_name))
    return values


def build_document(block: Block, type_name: Optional[str] = None) -> Node:
    """按块形状选择序列或映射构建。"""

    if is_sequence_block(block):
        return build_sequence(block, type_name)
    return build_mapping(block, type_name)
