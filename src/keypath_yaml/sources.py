"""输入源：从文件路径或流读取文本行，并提供解码的便捷封装。

这里是解码核心之外的 I/O 协作者：负责字符集选择与读取失败的归类。
核心算法见 `decoder.LineDecoder`。
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO, Any, Iterable, Iterator, List, Optional, TextIO, Union

from .config import DEFAULT_ENCODING
from .decoder import Document, LineDecoder, is_skippable, split_lines
from .errors import SourceReadError

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]
Source = Union[PathLike, IO[Any]]


def _is_path(source: Any) -> bool:
    return isinstance(source, (str, os.PathLike))


def _describe(source: Any) -> str:
    if _is_path(source):
        return os.fspath(source)
    return str(getattr(source, "name", None) or repr(source))


def read_lines(source: Source, encoding: str = DEFAULT_ENCODING) -> List[str]:
    """读取输入源的全部文本行（不含行尾换行符）。

    参数:
        source: 文件路径、二进制流（按 `encoding` 解码）或文本流。
        encoding: 字符集名称，默认 UTF-8。

    返回值:
        List[str]: 文本行列表。

    副作用:
        读取文件或消费流；流由调用方负责关闭。失败时抛出 `SourceReadError`。
    """

    name = _describe(source)
    try:
        if _is_path(source):
            with open(source, "r", encoding=encoding) as f:
                text = f.read()
        else:
            data = source.read()  # type: ignore[union-attr]
            text = data.decode(encoding) if isinstance(data, bytes) else data
    except LookupError as exc:
        raise SourceReadError(name, f"unsupported encoding {encoding!r}") from exc
    except UnicodeDecodeError as exc:
        raise SourceReadError(name, f"cannot decode as {encoding}: {exc.reason}") from exc
    except OSError as exc:
        raise SourceReadError(name, exc.strerror or str(exc)) from exc
    lines = split_lines(text)
    logger.debug("read %d lines from %s", len(lines), name)
    return lines


def _decoder_or_default(decoder: Optional[LineDecoder]) -> LineDecoder:
    return decoder if decoder is not None else LineDecoder()


def decode_source(
    source: Source,
    encoding: str = DEFAULT_ENCODING,
    decoder: Optional[LineDecoder] = None,
) -> Document:
    """读取并解码任意输入源。

    参数:
        source: 文件路径或流。
        encoding: 字符集名称。
        decoder: 解码器实例，缺省使用默认配置。

    返回值:
        Document: 扁平的路径 → 值表。
    """

    return _decoder_or_default(decoder).decode(read_lines(source, encoding))


def decode_file(
    path: PathLike,
    encoding: str = DEFAULT_ENCODING,
    decoder: Optional[LineDecoder] = None,
) -> Document:
    """解码文件。"""

    return decode_source(path, encoding, decoder)


def decode_stream(
    stream: IO[Any],
    encoding: str = DEFAULT_ENCODING,
    decoder: Optional[LineDecoder] = None,
) -> Document:
    """解码二进制或文本流。"""

    return decode_source(stream, encoding, decoder)


def decode_or_empty(
    source: Source,
    encoding: str = DEFAULT_ENCODING,
    decoder: Optional[LineDecoder] = None,
) -> Document:
    """解码输入源；读取失败时返回空表。

    参数:
        source: 文件路径或流。
        encoding: 字符集名称。
        decoder: 解码器实例。

    返回值:
        Document: 解码结果；`SourceReadError` 时为 `{}`。

    副作用:
        读取失败记录 WARNING 日志。配置错误与严格模式错误照常抛出。
    """

    try:
        return decode_source(source, encoding, decoder)
    except SourceReadError as exc:
        logger.warning("decode failed, returning empty table: %s", exc)
        return {}


def iter_content_lines(lines: Iterable[str]) -> Iterator[str]:
    """产出既非空白也非注释的原始行。"""

    for raw in lines:
        line = raw.rstrip("\r\n")
        if not is_skippable(line):
            yield line


def dump(
    source: Source,
    encoding: str = DEFAULT_ENCODING,
    out: Optional[TextIO] = None,
) -> int:
    """原样输出输入源中的内容行（跳过空白与注释行），用于调试。

    参数:
        source: 文件路径或流。
        encoding: 字符集名称。
        out: 输出目标，默认标准输出。

    返回值:
        int: 输出的行数。

    副作用:
        写入 `out`；读取失败抛出 `SourceReadError`。
    """

    target = out if out is not None else sys.stdout
    count = 0
    for line in iter_content_lines(read_lines(source, encoding)):
        target.write(line + "\n")
        count += 1
    return count
