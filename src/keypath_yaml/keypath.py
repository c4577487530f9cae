"""键路径栈：以“深度 → 键名”的扁平列表还原层级身份。"""

from __future__ import annotations

from typing import List, Tuple


class KeyPathTracker:
    """维护按嵌套深度索引的活动键栈，并渲染为分隔符拼接的路径。

    参数:
        delimiter: 路径分隔符，默认 `/`。

    副作用:
        仅在同一次解码会话内跨调用保存状态；解码结束时由调用方 `reset()`。
    """

    def __init__(self, delimiter: str = "/") -> None:
        self.delimiter = delimiter
        self._keys: List[str] = []

    @property
    def keys(self) -> Tuple[str, ...]:
        """当前键栈快照。"""

        return tuple(self._keys)

    @property
    def depth(self) -> int:
        return len(self._keys)

    @property
    def path(self) -> str:
        """当前路径；栈为空时为空串。"""

        return self.delimiter.join(self._keys)

    def advance(self, depth: int, key_name: str) -> str:
        """在 `depth` 处写入键名并返回新的完整路径。

        参数:
            depth: 由缩进计算出的非负嵌套层级。
            key_name: 键名，写入前去除首尾空白。

        返回值:
            str: 从栈底到栈顶以分隔符拼接的路径。

        副作用:
            丢弃 `depth` 之后的所有条目；若栈长度不足以容纳 `depth`，
            则直接追加到栈尾（容忍不规则缩进）。
        """

        if depth < 0:
            raise ValueError(f"depth must be non-negative: {depth}")
        key = key_name.strip()
        if depth < len(self._keys):
            self._keys[depth] = key
            del self._keys[depth + 1 :]
        else:
            self._keys.append(key)
        return self.path

    def reset(self) -> None:
        """清空键栈。"""

        self._keys.clear()

    def __repr__(self) -> str:
        return f"KeyPathTracker(delimiter={self.delimiter!r}, keys={self._keys!r})"
