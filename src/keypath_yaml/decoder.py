"""行解码器：把缩进结构的配置文本解码为“路径 → 值”的扁平表。

逐行分类（注释/空行、序列项、映射项），由缩进宽度计算深度，驱动
`KeyPathTracker` 得到当前路径，并把标量值或待提交的序列写入结果表。

说明:
    - 深度 = 键前导空格数 // 缩进单位 + 1；同一文档内深度语义是累积的，
      解码结束前不会重置键栈。
    - 分割沿用历史行为：按分隔符切分全部字段并丢弃末尾空字段，因此
      `b:` 没有值部分，而 `a: x:y` 的值被截断为 `x`。
    - 畸形行的降级是具名策略（`BLANK_ITEM` / `TRUNCATED_VALUE`），严格模式
      下改为抛出 `MalformedLineError`。
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional, Union

from .config import (
    DEFAULT_DELIMITER,
    DEFAULT_INDENT_UNIT_SIZE,
    DecoderConfig,
    build_config,
)
from .errors import MalformedLineError
from .keypath import KeyPathTracker

logger = logging.getLogger(__name__)

Value = Union[str, List[str]]
Document = Dict[str, Value]

COMMENT_MARKER = "#"
SEQUENCE_MARKER = "-"
KEY_VALUE_SEPARATOR = ":"
QUOTE = '"'

# 降级策略名
BLANK_ITEM = "blank-item"
TRUNCATED_VALUE = "truncated-value"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_fields(text: str, sep: str) -> List[str]:
    """按 `sep` 切分全部字段并丢弃末尾的空字段（至少保留一个字段）。"""

    fields = text.split(sep)
    while len(fields) > 1 and fields[-1] == "":
        fields.pop()
    return fields


def split_lines(text: str) -> List[str]:
    """仅按 `\\n` / `\\r` / `\\r\\n` 分行；其他 Unicode 分隔符保留在行内。"""

    lines = _LINE_BREAK.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def is_skippable(line: str) -> bool:
    """空白行或以 `#` 开头的注释行。"""

    stripped = line.strip()
    return not stripped or stripped.startswith(COMMENT_MARKER)


def indent_width(segment: str) -> int:
    return len(segment) - len(segment.lstrip(" "))


class LineDecoder:
    """受限缩进配置格式的行解码器。

    参数:
        indent_unit_size: 一个缩进层级的空格数（>= 2，默认 2）。
        delimiter: 路径分隔符（非空，默认 `/`）。
        strict: 为 True 时畸形行抛出 `MalformedLineError`。
        keep_value_colons: 为 True 时保留值中的冒号，而非截断。
        config: 已校验的 `DecoderConfig`；提供时忽略其余参数。

    副作用:
        构造时校验配置，非法参数立即抛出 `ConfigurationError`。
        解码状态只存在于单次 `decode` 调用内，实例可复用，也可并发使用。
    """

    def __init__(
        self,
        indent_unit_size: int = DEFAULT_INDENT_UNIT_SIZE,
        delimiter: str = DEFAULT_DELIMITER,
        *,
        strict: bool = False,
        keep_value_colons: bool = False,
        config: Optional[DecoderConfig] = None,
    ) -> None:
        if config is None:
            config = build_config(
                indent_unit_size=indent_unit_size,
                delimiter=delimiter,
                strict=strict,
                keep_value_colons=keep_value_colons,
            )
        self.config = config

    @classmethod
    def from_config(cls, config: DecoderConfig) -> "LineDecoder":
        return cls(config=config)

    @property
    def indent_unit_size(self) -> int:
        return self.config.indent_unit_size

    @property
    def delimiter(self) -> str:
        return self.config.delimiter

    def depth_of(self, key_segment: str) -> int:
        """缩进单位个数（向下取整）加上基准层级 1。"""

        return indent_width(key_segment) // self.config.indent_unit_size + 1

    def decode(self, lines: Iterable[str]) -> Document:
        """按顺序解码文本行。

        参数:
            lines: 已解码为文本的行序列；行尾换行符会被去除。

        返回值:
            Document: 路径 → 字符串或字符串列表。

        副作用:
            无外部副作用；严格模式下可能抛出 `MalformedLineError`。
        """

        document: Document = {}
        tracker = KeyPathTracker(self.config.delimiter)
        pending: Optional[List[str]] = None
        current_path = ""

        try:
            for line_no, raw in enumerate(lines, start=1):
                line = raw.rstrip("\r\n")
                if is_skippable(line):
                    continue

                fields = split_fields(line, KEY_VALUE_SEPARATOR)
                key_segment = fields[0]
                depth = self.depth_of(key_segment)

                if key_segment.strip().startswith(SEQUENCE_MARKER):
                    if pending is None:
                        pending = []
                    pending.append(self._sequence_item(line, line_no))
                    continue

                if pending:
                    document[current_path] = list(pending)
                    pending = None

                current_path = tracker.advance(depth, key_segment)
                if len(fields) > 1:
                    document[current_path] = self._scalar_value(fields, line, line_no)

            if pending:
                document[current_path] = list(pending)
        finally:
            tracker.reset()

        logger.debug("decoded %d entries", len(document))
        return document

    def decode_text(self, text: str) -> Document:
        """解码整段文本。"""

        return self.decode(split_lines(text))

    def _sequence_item(self, line: str, line_no: int) -> str:
        parts = split_fields(line, SEQUENCE_MARKER)
        if len(parts) == 2:
            return parts[1].strip()
        self._degrade(BLANK_ITEM, line, line_no, f"expected one '-' field, got {len(parts) - 1}")
        return ""

    def _scalar_value(self, fields: List[str], line: str, line_no: int) -> str:
        if self.config.keep_value_colons:
            raw_value = line.partition(KEY_VALUE_SEPARATOR)[2]
        else:
            if len(fields) > 2:
                self._degrade(TRUNCATED_VALUE, line, line_no, "value contains ':'")
            raw_value = fields[1]
        return raw_value.strip().replace(QUOTE, "")

    def _degrade(self, policy: str, line: str, line_no: int, detail: str) -> None:
        if self.config.strict:
            raise MalformedLineError(line_no, line, policy, detail)
        logger.debug("line %d: %s (%s): %r", line_no, policy, detail, line)

    def __repr__(self) -> str:
        return (
            f"LineDecoder(indent_unit_size={self.config.indent_unit_size}, "
            f"delimiter={self.config.delimiter!r}, strict={self.config.strict})"
        )
