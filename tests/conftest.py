"""测试全局配置与公共样例。

将 `src` 目录加入 `sys.path`，以便在未打包安装时可直接导入包；
同时提供常用的样例文档 fixture。
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


SAMPLE_DOCUMENT = """\
# 应用设置
app: demo
server:
  host: "127.0.0.1"
  port: 8080

  tls:
    enabled: false
plugins:
  - auth
  - cache
owner: "ops"
"""


EXPECTED_SAMPLE = {
    "app": "demo",
    "app/server/host": "127.0.0.1",
    "app/server/port": "8080",
    "app/server/tls/enabled": "false",
    "app/plugins": ["auth", "cache"],
    "app/owner": "ops",
}


@pytest.fixture
def sample_text() -> str:
    """带注释、空行、嵌套映射与序列的样例文档。"""

    return SAMPLE_DOCUMENT


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """把样例文档写入临时文件并返回路径。"""

    p = tmp_path / "settings.yml"
    p.write_text(SAMPLE_DOCUMENT, encoding="utf-8")
    return p


@pytest.fixture
def expected_sample() -> dict:
    """样例文档的期望解码结果（默认配置）。"""

    return dict(EXPECTED_SAMPLE)
