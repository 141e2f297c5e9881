"""解析错误类型。

所有错误均继承 `YamlParseError`（同时也是 `ValueError`），由内部构建函数
立即抛出并一路传播到被调用的入口函数，不返回部分结果。
"""

from __future__ import annotations

from typing import Any, Mapping, Optional


class YamlParseError(ValueError):
    """解析失败的公共基类。"""


class StructuralIndentationError(YamlParseError):
    """行缩进与所在块的基准缩进不一致，或缩进差不是合法的嵌套步长。

    属性:
        line: 出错行（已去除首尾空格）。
    """

    def __init__(self, line: str) -> None:
        super().__init__(f"Invalid indentation at: {line}")
        self.line = line


class DuplicateKeyError(YamlParseError):
    """同一映射中出现重复键。

    属性:
        key: 重复的键。
        type_name: 目标类型名（若已知），便于诊断。
    """

    def __init__(self, key: str, type_name: Optional[str] = None) -> None:
        message = f"Duplicate key {key}"
        if type_name:
            message += f" for {type_name}"
        super().__init__(message)
        self.key = key
        self.type_name = type_name


class EmptyObjectError(YamlParseError):
    """尝试从空块构建映射。"""

    def __init__(self, key: Optional[str] = None) -> None:
        if key is None:
            super().__init__("Empty object")
        else:
            super().__init__(f"Empty object for key '{key}'")
        self.key = key


class MalformedLineError(YamlParseError):
    """工厂无法从映射构建实例（缺少必填字段、无匹配构造方式等）。

    属性:
        type_name: 目标类型名。
        fields: 传入工厂的字段映射。
        reason: 工厂给出的原始原因。
    """

    def __init__(
        self, type_name: str, fields: Mapping[str, Any], reason: str
    ) -> None:
        super().__init__(f"Cannot build {type_name} from {sorted(fields)}: {reason}")
        self.type_name = type_name
        self.fields = fields
        self.reason = reason
