"""keypath-yaml：把缩进结构的配置文本解码为扁平的“路径 → 值”表。

只支持映射、字符串标量与简单序列；嵌套结构以分隔符拼接的路径表示。
"""

from .config import DecoderConfig, build_config, load_decoder_config
from .decoder import Document, LineDecoder
from .errors import (
    ConfigurationError,
    KeypathYamlError,
    MalformedLineError,
    SourceReadError,
)
from .keypath import KeyPathTracker
from .sources import decode_file, decode_or_empty, decode_stream, dump, read_lines

__all__ = [
    "__version__",
    "get_version",
    "ConfigurationError",
    "DecoderConfig",
    "Document",
    "KeyPathTracker",
    "KeypathYamlError",
    "LineDecoder",
    "MalformedLineError",
    "SourceReadError",
    "build_config",
    "decode_file",
    "decode_or_empty",
    "decode_stream",
    "dump",
    "load_decoder_config",
    "read_lines",
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
