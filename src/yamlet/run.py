"""命令行入口。

将文件或目录解析为通用树并以 JSON 打印到标准输出：
- `object`: 单文档映射；
- `list`: 顶层序列；
- `stream`: 多文档流，每个文档一行 JSON；
- `folder`: 目录下每个匹配文件一个映射。

示例:
    python -m yamlet.run object --path person.yaml
    python -m yamlet.run folder --dir configs --lazy
"""

from __future__ import annotations

import json as _json
import logging
from pathlib import Path
from typing import Any, Optional

import typer

from .errors import YamlParseError
from .parser import YamlParser
from .settings import Settings

app = typer.Typer(help="yamlet / 缩进式 YAML 子集解析 CLI")

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """按配置的级别初始化根日志。"""

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _parser(extension: Optional[str] = None) -> YamlParser[Any]:
    settings = Settings.load()
    if extension:
        settings = settings.model_copy(update={"extension": extension.lstrip(".")})
    configure_logging(settings.log_level)
    return YamlParser.generic(settings)


def _emit(obj: Any) -> None:
    typer.echo(_json.dumps(obj, ensure_ascii=False))


def _fail(exc: Exception) -> None:
    logger.debug("parse failed", exc_info=exc)
    typer.echo(f"error: {exc}", err=True)
    raise typer.Exit(code=1)


@app.command("object")
def parse_object(
    path: str = typer.Option(..., "--path", help="YAML 文件路径"),
) -> None:
    """解析单个文档并打印映射 JSON。"""

    parser = _parser()
    try:
        _emit(parser.parse_object(Path(path)))
    except (YamlParseError, OSError) as exc:
        _fail(exc)


@app.command("list")
def parse_list(
    path: str = typer.Option(..., "--path", help="YAML 文件路径"),
) -> None:
    """解析顶层序列并打印列表 JSON。"""

    parser = _parser()
    try:
        _emit(parser.parse_list(Path(path)))
    except (YamlParseError, OSError) as exc:
        _fail(exc)


@app.command("stream")
def parse_stream(
    path: str = typer.Option(..., "--path", help="多文档 YAML 文件路径"),
    limit: Optional[int] = typer.Option(None, "--limit", help="最多输出的文档数"),
) -> None:
    """惰性解析多文档流，每个文档输出一行 JSON。

    参数:
        path: 文件路径。
        limit: 可选上限；达到后停止拉取，不再读取剩余内容。

    返回值:
        无返回；逐行打印 JSON。

    副作用:
        读取文件系统。
    """

    parser = _parser()
    try:
        for count, doc in enumerate(parser.parse_sequence(Path(path)), start=1):
            _emit(doc)
            if limit is not None and count >= limit:
                break
    except (YamlParseError, OSError) as exc:
        _fail(exc)


@app.command("folder")
def parse_folder(
    folder: str = typer.Option(..., "--dir", help="目录路径"),
    lazy: bool = typer.Option(False, "--lazy", help="逐个文件解析并逐行输出"),
    extension: Optional[str] = typer.Option(
        None, "--extension", help="匹配的扩展名（默认取 YAMLET_EXTENSION 或 yaml）"
    ),
) -> None:
    """解析目录下按文件名排序的每个匹配文件。

    参数:
        folder: 目录路径。
        lazy: 为 True 时逐个输出，否则输出完整 JSON 列表。
        extension: 覆盖配置中的扩展名。

    返回值:
        无返回；打印 JSON。

    副作用:
        读取文件系统；任一文件出错即以退出码 1 结束。
    """

    parser = _parser(extension)
    try:
        if lazy:
            for doc in parser.parse_folder_lazy(folder):
                _emit(doc)
        else:
            _emit(parser.parse_folder_eager(folder))
    except (YamlParseError, OSError) as exc:
        _fail(exc)


def main() -> None:
    """CLI 入口包装。"""

    app()


if __name__ == "__main__":
    main()
