"""命令行日志配置。"""

from __future__ import annotations

import logging
import sys
from typing import Optional

_LEVELS_BY_VERBOSE = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}

_HANDLER_MARK = "_keypath_yaml_handler"


def setup_logging(verbose_count: int = 0, logger_name: Optional[str] = None) -> logging.Logger:
    """按 `-v` 次数配置日志级别。

    参数:
        verbose_count: `-v` 出现次数；0 → WARNING，1 → INFO，>=2 → DEBUG。
        logger_name: 目标 logger 名称，缺省为根 logger。

    返回值:
        logging.Logger: 已配置的 logger。

    副作用:
        向 logger 添加一个 stderr handler；重复调用不会重复添加，
        只把已有 handler 重新指向当前的 `sys.stderr`。
    """

    level = _LEVELS_BY_VERBOSE.get(verbose_count, logging.DEBUG)
    logger = logging.getLogger(logger_name or "")
    logger.setLevel(level)

    marked = [h for h in logger.handlers if getattr(h, _HANDLER_MARK, False)]
    if marked:
        for h in marked:
            if isinstance(h, logging.StreamHandler):
                h.stream = sys.stderr
    else:
        handler = logging.StreamHandler(stream=sys.stderr)
        setattr(handler, _HANDLER_MARK, True)
        fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
        handler.setFormatter(logging.Formatter(fmt=fmt, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
    return logger
