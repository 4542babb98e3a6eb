"""Tests for the `go list` package loader (subprocess mocked)."""

import json
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from go_design_metrics.core.exceptions import LoadError
from go_design_metrics.loaders import GoListPackageLoader, LoaderConfig
from go_design_metrics.loaders.go_list import iter_json_stream, package_from_go_list

CONFIG = LoaderConfig(module_root=Path("/src/mod"), module_name="example.com/mod")

GO_LIST_OUTPUT = (
    json.dumps(
        {
            "Dir": "/src/mod/a",
            "ImportPath": "example.com/mod/a",
            "Name": "a",
            "GoFiles": ["a.go", "util.go"],
            "Imports": ["fmt"],
        },
        indent="\t",
    )
    + "\n"
    + json.dumps(
        {
            "Dir": "/src/mod/b",
            "ImportPath": "example.com/mod/b",
            "Name": "b",
            "GoFiles": ["b.go"],
            "Imports": ["example.com/mod/a", "os"],
            "DepsErrors": [{"Err": "cannot find package"}],
        },
        indent="\t",
    )
    + "\n"
)


def _completed(stdout="", stderr="", returncode=0):
    return subprocess.CompletedProcess(
        args=["go"], returncode=returncode, stdout=stdout, stderr=stderr
    )


def test_iter_json_stream():
    objects = list(iter_json_stream(GO_LIST_OUTPUT))

    assert [o["ImportPath"] for o in objects] == [
        "example.com/mod/a",
        "example.com/mod/b",
    ]
    assert list(iter_json_stream("  \n")) == []


def test_package_from_go_list():
    package = package_from_go_list(
        {
            "Dir": "/src/mod/a",
            "ImportPath": "example.com/mod/a",
            "Name": "a",
            "GoFiles": ["a.go"],
            "Error": {"Err": "no Go files"},
        }
    )

    assert package.go_files == [Path("/src/mod/a/a.go")]
    assert package.imports == []
    assert package.errors == ["no Go files"]


@patch("go_design_metrics.loaders.go_list.subprocess.run")
def test_load_batch(mock_run):
    mock_run.return_value = _completed(stdout=GO_LIST_OUTPUT)

    packages = GoListPackageLoader().load(
        CONFIG, ["example.com/mod/a", "example.com/mod/b"]
    )

    cmd = mock_run.call_args.args[0]
    assert cmd == ["go", "list", "-e", "-json", "example.com/mod/a", "example.com/mod/b"]
    assert mock_run.call_args.kwargs["cwd"] == str(CONFIG.module_root)

    assert [p.id for p in packages] == ["example.com/mod/a", "example.com/mod/b"]
    assert packages[0].go_files == [Path("/src/mod/a/a.go"), Path("/src/mod/a/util.go")]
    assert packages[1].imports == ["example.com/mod/a", "os"]
    assert packages[1].errors == ["cannot find package"]


@patch("go_design_metrics.loaders.go_list.subprocess.run")
def test_empty_batch_does_not_run_go(mock_run):
    assert GoListPackageLoader().load(CONFIG, []) == []
    mock_run.assert_not_called()


@pytest.mark.parametrize(
    ("side_effect", "message"),
    [
        (FileNotFoundError("go"), "not found"),
        (subprocess.TimeoutExpired(cmd="go", timeout=1), "timed out"),
    ],
)
def test_go_invocation_failures(side_effect, message):
    with patch(
        "go_design_metrics.loaders.go_list.subprocess.run", side_effect=side_effect
    ):
        with pytest.raises(LoadError, match=message) as exc_info:
            GoListPackageLoader().load(CONFIG, ["example.com/mod/a"])

    assert exc_info.value.context["batch_start"] == "example.com/mod/a"


@patch("go_design_metrics.loaders.go_list.subprocess.run")
def test_non_zero_exit(mock_run):
    mock_run.return_value = _completed(stderr="go: bad pattern\n", returncode=1)

    with pytest.raises(LoadError, match="go: bad pattern"):
        GoListPackageLoader().load(CONFIG, ["example.com/mod/a"])


@patch("go_design_metrics.loaders.go_list.subprocess.run")
def test_garbled_output(mock_run):
    mock_run.return_value = _completed(stdout="{not json")

    with pytest.raises(LoadError, match="cannot decode go list output"):
        GoListPackageLoader().load(CONFIG, ["example.com/mod/a"])
