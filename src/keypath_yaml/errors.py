"""异常类型定义。

区分三类失败：构造期的配置错误、I/O 层的读取错误，以及仅在严格模式下
才会出现的畸形行错误。默认模式下畸形行按既定策略静默降级，不抛异常。
"""

from __future__ import annotations

from typing import Optional


class KeypathYamlError(Exception):
    """本包所有异常的基类。"""


class ConfigurationError(KeypathYamlError, ValueError):
    """解码器配置非法（缩进宽度过小、分隔符为空、未知配置键等）。"""


class SourceReadError(KeypathYamlError, OSError):
    """输入源不可读或编码不受支持。

    参数:
        source: 输入源描述（文件路径或流的 repr）。
        reason: 失败原因文本。
    """

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"cannot read {source}: {reason}")
        self.source = source
        self.reason = reason


class MalformedLineError(KeypathYamlError, ValueError):
    """严格模式下遇到会被降级处理的行。

    参数:
        line_no: 1 起始的行号。
        line: 原始行文本（已去掉行尾换行符）。
        policy: 触发的降级策略名（如 `blank-item` / `truncated-value`）。
    """

    def __init__(self, line_no: int, line: str, policy: str, detail: Optional[str] = None) -> None:
        msg = f"line {line_no}: {policy}: {line!r}"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)
        self.line_no = line_no
        self.line = line
        self.policy = policy
