"""Tests for reading the module name from go.mod."""

import pytest

from go_design_metrics.core.module_info import read_module_name


@pytest.mark.parametrize(
    ("content", "expected"),
    [
        ("module github.com/org/mod\n\ngo 1.21\n", "github.com/org/mod"),
        ('module "github.com/org/quoted"\n', "github.com/org/quoted"),
        ("module example.com/x // comment\n", "example.com/x"),
        ("// header\n\nmodule\tmymod\n", "mymod"),
        ("go 1.21\n", ""),
        ("", ""),
    ],
)
def test_read_module_name(tmp_path, content, expected):
    (tmp_path / "go.mod").write_text(content)

    assert read_module_name(tmp_path) == expected


def test_missing_go_mod(tmp_path):
    assert read_module_name(tmp_path) == ""
