"""运行配置（环境变量驱动）。

使用 Pydantic 定义配置 Schema 并禁止未知字段，`Settings.load()` 从环境变量
读取并给出默认值。

环境变量:
    YAMLET_EXTENSION: 目录解析时匹配的文件扩展名（默认 `yaml`）。
    YAMLET_ENCODING: 读取文件使用的编码（默认 `utf-8`）。
    LOG_LEVEL: 日志级别（默认 `INFO`）。
"""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, field_validator


class Settings(BaseModel):
    """解析器运行配置。

    参数:
        extension: 目录解析匹配的扩展名，不含前导点。
        encoding: 文件编码。
        log_level: 日志级别名。
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    extension: str = "yaml"
    encoding: str = "utf-8"
    log_level: str = "INFO"

    @field_validator("extension")
    @classmethod
    def _strip_dot(cls, value: str) -> str:
        return value.lstrip(".")

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @classmethod
    def load(cls) -> "Settings":
        """从环境变量加载配置。

        返回值:
            Settings: 配置对象。

        副作用:
            读取进程环境变量。
        """

        return cls(
            extension=os.getenv("YAMLET_EXTENSION", "yaml"),
            encoding=os.getenv("YAMLET_ENCODING", "utf-8"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
