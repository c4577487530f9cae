"""命令行入口（解码/转储）。

提供两个子命令：
- `decode`：把缩进结构的配置文件解码为扁平的路径 → 值表并打印；
- `dump`：原样打印文件中的内容行（跳过空白与注释行）。

示例:
    python -m keypath_yaml.run decode settings.yml --delimiter . --format yaml
"""

from __future__ import annotations

import json as _json
from typing import Optional

import typer
import yaml as _yaml

from .config import DecoderConfig, load_decoder_config, merge_config
from .decoder import Document, LineDecoder
from .errors import ConfigurationError, MalformedLineError, SourceReadError
from .logging_utils import setup_logging
from .sources import decode_or_empty, decode_source, dump as dump_source

app = typer.Typer(help="keypath-yaml / 缩进配置扁平解码 CLI")

OUTPUT_FORMATS = ("json", "yaml", "lines")


def _render(document: Document, fmt: str) -> str:
    """按输出格式渲染解码结果。

    参数:
        document: 解码结果。
        fmt: `json` / `yaml` / `lines`。

    返回值:
        str: 待打印文本（不含末尾换行）。
    """

    if fmt == "json":
        return _json.dumps(document, ensure_ascii=False)
    if fmt == "yaml":
        return _yaml.safe_dump(
            document, allow_unicode=True, sort_keys=False, default_flow_style=False
        ).rstrip("\n")
    rows = []
    for key, value in document.items():
        shown = "[" + ", ".join(value) + "]" if isinstance(value, list) else value
        rows.append(f"{key}:{shown}")
    return "\n".join(rows)


def _fail(exc: Exception) -> None:
    typer.echo(f"error: {exc}", err=True)
    raise typer.Exit(code=1)


@app.command()
def decode(
    path: str = typer.Argument(..., help="待解码的配置文件路径"),
    encoding: Optional[str] = typer.Option(None, "--encoding", help="字符集（默认 utf-8）"),
    indent: Optional[int] = typer.Option(None, "--indent", help="一个缩进层级的空格数（>=2）"),
    delimiter: Optional[str] = typer.Option(None, "--delimiter", help="路径分隔符（默认 /）"),
    strict: Optional[bool] = typer.Option(
        None, "--strict/--lenient", help="畸形行报错而非静默降级"
    ),
    keep_value_colons: Optional[bool] = typer.Option(
        None, "--keep-value-colons/--truncate-values", help="保留值中的冒号"
    ),
    config: Optional[str] = typer.Option(None, "--config", help="解码器设置 YAML 文件"),
    fmt: str = typer.Option("json", "--format", help="输出格式: json/yaml/lines"),
    or_empty: bool = typer.Option(False, "--or-empty", help="读取失败时输出空表"),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="日志详细程度"),
) -> None:
    """解码配置文件并打印扁平表。

    参数:
        path: 配置文件路径。
        encoding/indent/delimiter/strict/keep_value_colons: 覆盖设置文件中的同名项。
        config: 可选的解码器设置 YAML 文件。
        fmt: 输出格式。
        or_empty: 为 True 时读取失败输出空表且退出码为 0。
        verbose: `-v` 次数。

    返回值:
        无返回；结果打印到标准输出。

    副作用:
        读取文件系统；配置非法时以参数错误退出，读取/严格模式失败时退出码为 1。
    """

    setup_logging(verbose, "keypath_yaml")
    if fmt not in OUTPUT_FORMATS:
        raise typer.BadParameter(f"未知输出格式: {fmt}. 可选: {list(OUTPUT_FORMATS)}")

    try:
        base = load_decoder_config(config) if config else DecoderConfig()
        cfg = merge_config(
            base,
            {
                "encoding": encoding,
                "indent_unit_size": indent,
                "delimiter": delimiter,
                "strict": strict,
                "keep_value_colons": keep_value_colons,
            },
        )
    except ConfigurationError as exc:
        raise typer.BadParameter(str(exc))
    except SourceReadError as exc:
        _fail(exc)
        return

    decoder = LineDecoder.from_config(cfg)
    try:
        if or_empty:
            document = decode_or_empty(path, cfg.encoding, decoder)
        else:
            document = decode_source(path, cfg.encoding, decoder)
    except (SourceReadError, MalformedLineError) as exc:
        _fail(exc)
        return
    typer.echo(_render(document, fmt))


@app.command()
def dump(
    path: str = typer.Argument(..., help="配置文件路径"),
    encoding: str = typer.Option("utf-8", "--encoding", help="字符集"),
) -> None:
    """原样打印内容行（跳过空白与注释行）。"""

    try:
        dump_source(path, encoding)
    except SourceReadError as exc:
        _fail(exc)


def main() -> None:
    """CLI 入口包装。"""

    app()


if __name__ == "__main__":
    main()
