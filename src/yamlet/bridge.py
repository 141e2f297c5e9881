"""物化桥接层：将通用树转换为类型化实例。

解析引擎本身不关心如何构造目标类型，只依赖每个目标类型提供的
`build(fields) -> instance` 能力（`ObjectFactory`）。本模块提供：

- `materialize`: 映射交给工厂，序列逐项递归；
- `FunctionFactory`: 每个类型显式提供的构建函数；
- `ModelFactory`: 基于 Pydantic 模型声明（必填/可选字段与默认值）构建；
- `MappingFactory`: 原样返回字典，用于只需要通用树的场景；
- `FactoryRegistry`: 类型到工厂的注册表。
"""

from __future__ import annotations

from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    List,
    Mapping,
    Optional,
    Protocol,
    Type,
    TypeVar,
    runtime_checkable,
)

from pydantic import BaseModel, ValidationError

from .errors import MalformedLineError
from .tree import ANONYMOUS_KEY, Node

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)
M = TypeVar("M", bound=BaseModel)


@runtime_checkable
class ObjectFactory(Protocol[T_co]):
    """目标类型的构建能力。

    属性:
        type_name: 目标类型名，用于错误诊断。
    """

    type_name: str

    def build(self, fields: Mapping[str, Any]) -> T_co:
        """由字段映射构建实例；缺少必填字段时抛出 MalformedLineError。"""


def materialize(node: Node, factory: ObjectFactory[T]) -> Any:
    """将通用树节点物化。

    参数:
        node: 通用树节点。映射交给工厂构建；序列中的映射元素构建为实例、
            序列元素递归为嵌套列表；顶层标量（多文档流中的 `- value`）以
            `{"": value}` 交给工厂。
        factory: 目标类型工厂。

    返回值:
        Any: 实例，或（嵌套的）实例列表。

    副作用:
        调用工厂；工厂错误原样传播。
    """

    if isinstance(node, dict):
        return factory.build(node)
    if isinstance(node, list):
        return [materialize(item, factory) for item in node]
    return factory.build({ANONYMOUS_KEY: node})


def unwrap_anonymous(value: Any) -> Any:
    """将仅含匿名键的映射 `{"": x}` 递归还原为 `x`。"""

    if isinstance(value, dict):
        if len(value) == 1 and ANONYMOUS_KEY in value:
            return unwrap_anonymous(value[ANONYMOUS_KEY])
        return {k: unwrap_anonymous(v) for k, v in value.items()}
    if isinstance(value, list):
        return [unwrap_anonymous(v) for v in value]
    return value


class MappingFactory:
    """原样返回字段字典的工厂。"""

    type_name = "dict"

    def build(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        return dict(fields)


class FunctionFactory(Generic[T]):
    """包装显式构建函数的工厂。

    参数:
        type_name: 目标类型名。
        fn: 构建函数，接收字段映射返回实例；其抛出的 KeyError / TypeError /
            ValueError 会被转换为 MalformedLineError。
    """

    def __init__(self, type_name: str, fn: Callable[[Mapping[str, Any]], T]) -> None:
        self.type_name = type_name
        self._fn = fn

    def build(self, fields: Mapping[str, Any]) -> T:
        try:
            return self._fn(fields)
        except MalformedLineError:
            raise
        except (KeyError, TypeError, ValueError) as exc:
            raise MalformedLineError(self.type_name, fields, str(exc)) from exc


class ModelFactory(Generic[M]):
    """基于 Pydantic 模型的工厂。

    必填与可选字段、默认值以及嵌套模型均由模型声明决定；
    构建前先用 `unwrap_anonymous` 还原匿名标量项。
    """

    def __init__(self, model: Type[M]) -> None:
        self.model = model
        self.type_name = model.__name__

    def build(self, fields: Mapping[str, Any]) -> M:
        try:
            return self.model.model_validate(unwrap_anonymous(dict(fields)))
        except ValidationError as exc:
            raise MalformedLineError(self.type_name, fields, str(exc)) from exc


class FactoryRegistry:
    """记录可用的目标类型工厂。"""

    def __init__(self) -> None:
        self._factories: Dict[type, ObjectFactory[Any]] = {}

    def register(self, target: type, factory: ObjectFactory[Any]) -> ObjectFactory[Any]:
        """注册工厂；同一类型重复注册时抛出 ValueError。"""

        if target in self._factories:
            raise ValueError(f"Factory for '{target.__name__}' is already registered")
        self._factories[target] = factory
        return factory

    def get(self, target: type) -> ObjectFactory[Any]:
        try:
            return self._factories[target]
        except KeyError as exc:
            raise KeyError(f"No factory registered for '{target.__name__}'") from exc

    def resolve(self, target: type) -> ObjectFactory[Any]:
        """返回已注册工厂；未注册的 Pydantic 模型回退为 `ModelFactory`。

        参数:
            target: 目标类型。

        返回值:
            ObjectFactory: 可用工厂。

        副作用:
            无；两者皆不满足时抛出 KeyError。
        """

        if target in self._factories:
            return self._factories[target]
        if isinstance(target, type) and issubclass(target, BaseModel):
            return ModelFactory(target)
        return self.get(target)

    def __contains__(self, target: object) -> bool:
        return target in self._factories

    def names(self) -> List[str]:
        return [factory.type_name for factory in self._factories.values()]

    def clear(self) -> None:
        self._factories.clear()


registry = FactoryRegistry()


def register_factory(
    target: type, into: Optional[FactoryRegistry] = None
) -> Callable[[Callable[[Mapping[str, Any]], T]], Callable[[Mapping[str, Any]], T]]:
    """装饰器：把构建函数注册为 `target` 的工厂。"""

    def decorator(fn: Callable[[Mapping[str, Any]], T]) -> Callable[[Mapping[str, Any]], T]:
        owner = registry if into is None else into
        owner.register(target, FunctionFactory(target.__name__, fn))
        return fn

    return decorator
