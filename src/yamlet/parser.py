"""解析入口：单对象、列表、多文档流与目录（即时/惰性）。

输入源可以是:
    - `str`: 文本内容本身（不是路径）；
    - `pathlib.Path`: 文件路径，在调用（或惰性生成器）结束时关闭；
    - 任意可迭代文本行（例如已打开的文件对象），由调用方负责关闭。

示例:
    parser = YamlParser(ModelFactory(Person))
    people = parser.parse_list(Path("people.yaml"))
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generic, Iterable, Iterator, List, Optional, Type, TypeVar, Union

from .blocks import Block
from .bridge import FactoryRegistry, MappingFactory, ObjectFactory, materialize
from .bridge import registry as default_registry
from .lines import is_blank
from .settings import Settings
from .stream import DocumentStream
from .tree import MappingNode, Node, SequenceNode, build_mapping, build_sequence

logger = logging.getLogger(__name__)

T = TypeVar("T")
Source = Union[str, Path, Iterable[str]]


@contextmanager
def _open_lines(source: Source, encoding: str = "utf-8") -> Iterator[Iterable[str]]:
    """按输入源类型产出行迭代；路径源在退出时关闭文件。"""

    if isinstance(source, Path):
        with source.open("r", encoding=encoding) as handle:
            yield handle
    elif isinstance(source, str):
        yield source.splitlines()
    else:
        yield source


def _content_lines(lines: Iterable[str]) -> List[str]:
    """去除行尾换行并丢弃空白行。"""

    out: List[str] = []
    for raw in lines:
        line = raw.rstrip("\r\n")
        if not is_blank(line):
            out.append(line)
    return out


def load_tree(source: Source, encoding: str = "utf-8") -> MappingNode:
    """将单文档解析为通用映射（不做物化）。"""

    with _open_lines(source, encoding) as lines:
        return build_mapping(Block.of(_content_lines(lines)))


def iter_trees(source: Source, encoding: str = "utf-8") -> Iterator[Node]:
    """惰性产出多文档流中每个文档的通用树。"""

    with _open_lines(source, encoding) as lines:
        yield from DocumentStream(lines)


class YamlParser(Generic[T]):
    """面向单一目标类型的解析器。

    参数:
        factory: 目标类型工厂，负责由字段映射构建实例。
        settings: 运行配置；缺省时从环境变量加载。
    """

    def __init__(self, factory: ObjectFactory[T], settings: Optional[Settings] = None) -> None:
        self.factory = factory
        self.settings = settings or Settings.load()

    @classmethod
    def for_type(
        cls,
        target: Type[Any],
        registry: Optional[FactoryRegistry] = None,
        settings: Optional[Settings] = None,
    ) -> "YamlParser[Any]":
        """按类型从注册表解析工厂并构造解析器。

        参数:
            target: 目标类型；未注册的 Pydantic 模型自动使用 `ModelFactory`。
            registry: 工厂注册表，缺省为模块级注册表。
            settings: 运行配置。

        返回值:
            YamlParser: 解析器实例。

        副作用:
            无；无可用工厂时抛出 KeyError。
        """

        factory = (registry or default_registry).resolve(target)
        return cls(factory, settings)

    @classmethod
    def generic(cls, settings: Optional[Settings] = None) -> "YamlParser[Any]":
        """返回只产出通用字典的解析器。"""

        return cls(MappingFactory(), settings)

    @property
    def type_name(self) -> str:
        return self.factory.type_name

    def parse_object(self, source: Source) -> T:
        """解析单个文档为一个实例。

        参数:
            source: 输入源。

        返回值:
            T: 工厂构建的实例。

        副作用:
            路径源会被打开并在返回或抛错时关闭。
        """

        with _open_lines(source, self.settings.encoding) as lines:
            mapping = build_mapping(Block.of(_content_lines(lines)), self.type_name)
        return self.factory.build(mapping)

    def parse_list(self, source: Source) -> List[Any]:
        """解析顶层序列为实例列表（嵌套序列对应嵌套列表）。"""

        with _open_lines(source, self.settings.encoding) as lines:
            values: SequenceNode = build_sequence(
                Block.of(_content_lines(lines)), self.type_name
            )
        return materialize(values, self.factory)

    def parse_sequence(self, source: Source) -> Iterator[Any]:
        """惰性解析多文档流，按需逐个产出实例。

        参数:
            source: 输入源；路径源在生成器耗尽或关闭时关闭。

        返回值:
            Iterator: 每个文档对应一个实例（或实例列表）。

        副作用:
            迭代时读取输入源。
        """

        with _open_lines(source, self.settings.encoding) as lines:
            for node in DocumentStream(lines, self.type_name):
                yield materialize(node, self.factory)

    def folder_entries(self, folder: Union[str, Path]) -> List[Path]:
        """列出目录中扩展名匹配的文件，按文件名排序；目录不存在时为空。"""

        path = Path(folder)
        if not path.is_dir():
            logger.debug("folder %s does not exist", path)
            return []
        suffix = f".{self.settings.extension}"
        return sorted(
            (p for p in path.iterdir() if p.is_file() and p.suffix == suffix),
            key=lambda p: p.name,
        )

    def parse_folder_eager(self, folder: Union[str, Path]) -> List[T]:
        """即时解析目录下每个文件为一个实例，返回完整列表。"""

        return list(self.parse_folder_lazy(folder))

    def parse_folder_lazy(self, folder: Union[str, Path]) -> Iterator[T]:
        """惰性解析目录：首次拉取时列目录，之后每次拉取解析一个文件。

        参数:
            folder: 目录路径。

        返回值:
            Iterator[T]: 按文件名顺序产出的实例。

        副作用:
            读取文件系统；任一文件解析失败即中止，不做恢复。
        """

        for entry in self.folder_entries(folder):
            logger.debug("parsing %s as %s", entry, self.type_name)
            yield self.parse_object(entry)
