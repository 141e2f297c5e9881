"""yamlet / 缩进式 YAML 子集解析包。

该包包含行分类器、块切分器、通用树构建器、多文档惰性读取器，以及将通用树
物化为类型化对象的桥接层与命令行入口。
"""

from .errors import (
    DuplicateKeyError,
    EmptyObjectError,
    MalformedLineError,
    StructuralIndentationError,
    YamlParseError,
)
from .parser import YamlParser, iter_trees, load_tree

__all__ = [
    "__version__",
    "get_version",
    "YamlParser",
    "load_tree",
    "iter_trees",
    "YamlParseError",
    "StructuralIndentationError",
    "DuplicateKeyError",
    "EmptyObjectError",
    "MalformedLineError",
]

__version__ = "0.1.0"


def get_version() -> str:
    """返回当前包版本号。

    返回值:
        str: 版本号字符串，例如 "0.1.0"。
    副作用:
        无副作用，仅读取内置常量。
    """

    return __version__
