"""解码器配置模型与加载。

使用 Pydantic 描述构造参数并在构造期完成校验；也支持从 YAML 设置文件
读取（例如 CLI 的 `--config`）。

副作用:
    `load_decoder_config` 会读取文件，其余函数无副作用。
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError, SourceReadError

DEFAULT_INDENT_UNIT_SIZE = 2
DEFAULT_DELIMITER = "/"
DEFAULT_ENCODING = "utf-8"


class DecoderConfig(BaseModel):
    """解码器配置（构造后不可变）。

    参数:
        indent_unit_size: 一个缩进层级对应的空格数，至少为 2。
        delimiter: 路径分隔符，非空。
        strict: 为 True 时畸形行抛出 `MalformedLineError` 而非静默降级。
        keep_value_colons: 为 True 时值中的冒号被保留（默认截断于首个冒号）。
        encoding: 读取文件/字节流时使用的字符集。
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    indent_unit_size: int = Field(default=DEFAULT_INDENT_UNIT_SIZE, ge=2)
    delimiter: str = Field(default=DEFAULT_DELIMITER, min_length=1)
    strict: bool = False
    keep_value_colons: bool = False
    encoding: str = Field(default=DEFAULT_ENCODING, min_length=1)


def _describe(err: ValidationError) -> str:
    parts = []
    for item in err.errors():
        loc = ".".join(str(p) for p in item.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {item.get('msg')}")
    return "; ".join(parts)


def build_config(**kwargs: Any) -> DecoderConfig:
    """构造并校验配置。

    参数:
        kwargs: `DecoderConfig` 字段。

    返回值:
        DecoderConfig: 校验通过的配置。

    副作用:
        无；校验失败时抛出 `ConfigurationError`。
    """

    try:
        return DecoderConfig(**kwargs)
    except ValidationError as exc:
        raise ConfigurationError(f"invalid decoder config: {_describe(exc)}") from exc


def merge_config(base: DecoderConfig, overrides: Mapping[str, Any]) -> DecoderConfig:
    """以 `overrides` 中非 None 的项覆盖 `base`，并重新校验。"""

    data: Dict[str, Any] = base.model_dump()
    data.update({k: v for k, v in overrides.items() if v is not None})
    return build_config(**data)


def load_decoder_config(path: Union[str, Path]) -> DecoderConfig:
    """从 YAML 设置文件加载解码器配置。

    参数:
        path: 设置文件路径，顶层须为映射（空文件视为全部默认）。

    返回值:
        DecoderConfig: 校验通过的配置。

    副作用:
        文件 IO；文件不可读抛出 `SourceReadError`，内容非法抛出
        `ConfigurationError`。
    """

    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(str(p), str(exc)) from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"{p}: not valid YAML: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{p}: settings must be a mapping, got {type(data).__name__}")
    return build_config(**data)
