"""Logging and formatting helpers."""

from pixel_mask.utils import (
    default_workers,
    format_bbox,
    format_seconds_compact,
    key_value_pairs_to_string,
    print_config_line,
    warn,
)


def test_format_seconds_compact():
    assert format_seconds_compact(0.25) == "250.0ms"
    assert format_seconds_compact(2.5) == "2.500s"
    assert format_seconds_compact(75.0) == "1m 15.0s"


def test_format_bbox():
    assert format_bbox(3, 4, 10, 20) == "10x20+3+4"


def test_key_value_pairs():
    line = key_value_pairs_to_string([("Workers", 1234), ("Masked", False), ("Share", 0.5)])
    assert line == "Workers: 1,234  Masked: off  Share: 0.5"


def test_print_config_line_is_a_debug_line(capsys):
    print_config_line("rasterize", [("Workers", 2), ("Masked", True)])
    assert capsys.readouterr().out == "[debug] [rasterize] Workers: 2  Masked: on\n"


def test_warn_prefix(capsys):
    warn("careful")
    assert capsys.readouterr().out == "[warn] careful\n"


def test_default_workers_positive():
    assert default_workers() >= 1
