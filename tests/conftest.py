"""测试全局配置与公共 fixture。

将 `src` 目录加入 `sys.path`，以便在未打包安装时可直接导入包；
同时提供写入 YAML 文件的辅助 fixture。
"""

from __future__ import annotations

import sys
from pathlib import Path
from textwrap import dedent
from typing import Callable

import pytest

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


@pytest.fixture
def write_yaml(tmp_path: Path) -> Callable[[str, str], Path]:
    """返回一个写文件函数：`write(name, text)`，文本会先做 dedent。

    参数:
        tmp_path: pytest 临时目录。

    返回值:
        Callable: 写入后返回文件路径。

    副作用:
        在临时目录创建文件。
    """

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(dedent(text).lstrip("\n"), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """清除会影响默认配置的环境变量。"""

    for name in ("YAMLET_EXTENSION", "YAMLET_ENCODING", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
