"""畸形行降级策略与严格模式测试。"""

from __future__ import annotations

import logging

import pytest

from keypath_yaml.decoder import BLANK_ITEM, TRUNCATED_VALUE, LineDecoder
from keypath_yaml.errors import ConfigurationError, MalformedLineError


@pytest.mark.parametrize("item", ["  - a-b", "  -", "  - x - y"])
def test_malformed_sequence_item_contributes_blank(item: str):
    doc = LineDecoder().decode(["list:", "  - ok", item, "  - end"])
    assert doc == {"list": ["ok", "", "end"]}


def test_trailing_dash_is_not_malformed():
    assert LineDecoder().decode(["l:", "  - x-"]) == {"l": ["x"]}


def test_value_truncated_at_colon_by_default():
    doc = LineDecoder().decode(["url: http://host:8080/path"])
    assert doc == {"url": "http"}


def test_keep_value_colons_extracts_full_value():
    doc = LineDecoder(keep_value_colons=True).decode(['url: "http://host:8080/path"', "t: 12:30:"])
    assert doc == {"url": "http://host:8080/path", "url/t": "12:30:"}


def test_degradation_is_logged_at_debug(caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.DEBUG, logger="keypath_yaml.decoder"):
        LineDecoder().decode(["a: b:c", "l:", "  - x-y-z"])
    text = caplog.text
    assert TRUNCATED_VALUE in text and BLANK_ITEM in text


def test_strict_mode_reports_truncated_value():
    decoder = LineDecoder(strict=True)
    with pytest.raises(MalformedLineError) as ei:
        decoder.decode(["# c", "a: 1", "b: x:y"])
    err = ei.value
    assert err.line_no == 3
    assert err.policy == TRUNCATED_VALUE
    assert err.line == "b: x:y"


def test_strict_mode_reports_blank_item():
    with pytest.raises(MalformedLineError) as ei:
        LineDecoder(strict=True).decode(["l:", "  - a-b"])
    assert ei.value.policy == BLANK_ITEM
    assert ei.value.line_no == 2


def test_strict_mode_accepts_well_formed_input(sample_text: str):
    assert LineDecoder(strict=True).decode_text(sample_text) == LineDecoder().decode_text(sample_text)


def test_strict_with_keep_value_colons_does_not_raise():
    doc = LineDecoder(strict=True, keep_value_colons=True).decode(["t: 1:2"])
    assert doc == {"t": "1:2"}


@pytest.mark.parametrize(
    "kwargs",
    [
        {"indent_unit_size": 1},
        {"indent_unit_size": 0},
        {"delimiter": ""},
        {"delimiter": None},
    ],
)
def test_invalid_construction_fails_immediately(kwargs: dict):
    """非法配置在构造期即报错（而非首次使用时）。"""

    with pytest.raises(ConfigurationError):
        LineDecoder(**kwargs)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        LineDecoder(indent_unit_size=1)
