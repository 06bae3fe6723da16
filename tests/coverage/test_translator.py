"""End-to-end tests for gocov -> Istanbul conversion."""

import json
from pathlib import Path
from typing import Any

import pytest

from covbridge.core.errors import OffsetOutOfRangeError, SourceFileError
from covbridge.coverage import convert, dumps, parse_gocov, resolve_source_path

SAMPLE = "func f() {\n  x := 1\n}\n"

HANDLER = (
    "package a\n"  # 0..9
    "\n"  # 10
    "func h() {\n"  # 11..21
    "\t// coverage ignore next line\n"  # 22..51
    "\tpanic(1)\n"  # 52..61
    "\tok()\n"  # 62..67
    "}\n"  # 68..69
)


def _fn(name: str, file: str, start: int, end: int, statements: Any = None) -> dict[str, Any]:
    return {"Name": name, "File": file, "Start": start, "End": end, "Statements": statements}


def _stmt(start: int, end: int, reached: int) -> dict[str, int]:
    return {"Start": start, "End": end, "Reached": reached}


def _convert(packages: list[dict[str, Any]], base_dir: Path, **kwargs: Any) -> dict[str, Any]:
    document = parse_gocov({"Packages": packages})
    return convert(document, base_dir=base_dir, **kwargs).to_dict()


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    (tmp_path / "a.go").write_text(SAMPLE)
    (tmp_path / "handler.go").write_text(HANDLER)
    return tmp_path


class TestConvertSample:
    """Single package, single function."""

    def test_sample_function(self, workspace: Path) -> None:
        out = _convert(
            [{"Name": "pkg", "Functions": [_fn("f", "a.go", 0, 20, [_stmt(5, 10, 3)])]}],
            workspace,
        )

        path = str(workspace / "a.go")
        assert list(out) == [path]
        record = out[path]
        assert record["path"] == path
        assert record["fnMap"] == {
            "1": {
                "name": "f",
                "line": 1,
                "loc": {"start": {"line": 1, "column": 0}, "end": {"line": 3, "column": 1}},
                "skip": False,
            }
        }
        assert record["f"] == {"1": 1}
        assert record["statementMap"] == {
            "1": {
                "start": {"line": 1, "column": 5},
                "end": {"line": 1, "column": 10},
                "skip": False,
            }
        }
        assert record["s"] == {"1": 3}
        assert record["b"] == {}

    def test_null_statements_records_function_only(self, workspace: Path) -> None:
        out = _convert([{"Name": "pkg", "Functions": [_fn("f", "a.go", 0, 20)]}], workspace)

        record = out[str(workspace / "a.go")]
        assert len(record["fnMap"]) == 1
        assert record["statementMap"] == {}
        assert record["s"] == {}

    def test_reached_is_copied_verbatim(self, workspace: Path) -> None:
        stmts = [_stmt(13, 19, 0), _stmt(13, 19, 12345)]
        out = _convert([{"Name": "pkg", "Functions": [_fn("f", "a.go", 0, 20, stmts)]}], workspace)
        assert out[str(workspace / "a.go")]["s"] == {"1": 0, "2": 12345}


class TestConvertAcrossFunctions:
    def test_ids_are_dense_in_traversal_order(self, workspace: Path) -> None:
        functions = [
            _fn("f", "a.go", 0, 20, [_stmt(5, 10, 1), _stmt(13, 19, 2)]),
            _fn("g", "a.go", 11, 20, None),
            _fn("h", "a.go", 20, 21, [_stmt(20, 21, 3)]),
        ]
        out = _convert([{"Name": "pkg", "Functions": functions}], workspace)

        record = out[str(workspace / "a.go")]
        assert list(record["fnMap"]) == ["1", "2", "3"]
        assert [fn["name"] for fn in record["fnMap"].values()] == ["f", "g", "h"]
        assert list(record["statementMap"]) == ["1", "2", "3"]
        assert record["s"] == {"1": 1, "2": 2, "3": 3}

    def test_same_file_in_different_packages_shares_one_record(self, workspace: Path) -> None:
        packages = [
            {"Name": "pkg/one", "Functions": [_fn("f", "a.go", 0, 20, [_stmt(5, 10, 1)])]},
            {"Name": "pkg/two", "Functions": [_fn("g", "./a.go", 11, 20, [_stmt(13, 19, 0)])]},
        ]
        out = _convert(packages, workspace)

        assert list(out) == [str(workspace / "a.go")]
        record = out[str(workspace / "a.go")]
        assert [fn["name"] for fn in record["fnMap"].values()] == ["f", "g"]
        assert list(record["s"]) == ["1", "2"]

    def test_files_get_separate_records_and_counters(self, workspace: Path) -> None:
        functions = [
            _fn("f", "a.go", 0, 20, [_stmt(5, 10, 1)]),
            _fn("h", "handler.go", 11, 69, [_stmt(63, 67, 1)]),
        ]
        out = _convert([{"Name": "pkg", "Functions": functions}], workspace)

        assert set(out) == {str(workspace / "a.go"), str(workspace / "handler.go")}
        assert list(out[str(workspace / "handler.go")]["fnMap"]) == ["1"]
        assert list(out[str(workspace / "handler.go")]["statementMap"]) == ["1"]

    def test_package_name_not_in_output(self, workspace: Path) -> None:
        out = _convert(
            [{"Name": "very/unique/pkgname", "Functions": [_fn("f", "a.go", 0, 20)]}],
            workspace,
        )
        assert "very/unique/pkgname" not in json.dumps(out)


class TestIgnoreMarker:
    """Statements on the line after the marker are skipped."""

    def test_marker_skips_following_line_only(self, workspace: Path) -> None:
        stmts = [
            _stmt(53, 61, 0),  # "panic(1)" on line 5, after marker on line 4
            _stmt(63, 67, 4),  # "ok()" on line 6
            _stmt(23, 51, 0),  # the marker line itself
        ]
        out = _convert(
            [{"Name": "pkg", "Functions": [_fn("h", "handler.go", 11, 69, stmts)]}], workspace
        )

        record = out[str(workspace / "handler.go")]
        smap = record["statementMap"]
        assert smap["1"]["start"] == {"line": 5, "column": 1}
        assert smap["1"]["skip"] is True
        assert smap["2"]["start"] == {"line": 6, "column": 1}
        assert smap["2"]["skip"] is False
        assert smap["3"]["skip"] is False
        assert all(fn["skip"] is False for fn in record["fnMap"].values())

    def test_skip_uses_start_line_not_end_line(self, workspace: Path) -> None:
        # starts on line 4 (marker), ends on line 5
        out = _convert(
            [{"Name": "pkg", "Functions": [_fn("h", "handler.go", 11, 69, [_stmt(23, 61, 1)])]}],
            workspace,
        )
        assert out[str(workspace / "handler.go")]["statementMap"]["1"]["skip"] is False

    def test_custom_marker(self, workspace: Path) -> None:
        out = _convert(
            [{"Name": "pkg", "Functions": [_fn("h", "handler.go", 11, 69, [_stmt(23, 51, 1)])]}],
            workspace,
            ignore_marker="func h()",
        )
        # "func h()" is line 3, so line 4 is skipped
        assert out[str(workspace / "handler.go")]["statementMap"]["1"]["skip"] is True


class TestPathResolution:
    def test_relative_path_anchored_at_cwd_by_default(
        self, workspace: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(workspace)
        document = parse_gocov({"Packages": [{"Name": "p", "Functions": [_fn("f", "a.go", 0, 20)]}]})

        out = convert(document).to_dict()

        assert list(out) == [str(Path.cwd() / "a.go")]

    def test_absolute_file_is_kept(self, workspace: Path, tmp_path_factory: pytest.TempPathFactory) -> None:
        other = tmp_path_factory.mktemp("elsewhere")
        absolute = str(workspace / "a.go")

        out = _convert([{"Name": "p", "Functions": [_fn("f", absolute, 0, 20)]}], other)

        assert list(out) == [absolute]

    def test_resolve_normalizes_dot_segments(self) -> None:
        assert resolve_source_path("./pkg/../a.go", Path("/work")) == "/work/a.go"


class TestConvertFailures:
    """Any failure aborts the whole run."""

    def test_missing_source_file(self, workspace: Path) -> None:
        document = parse_gocov(
            {"Packages": [{"Name": "p", "Functions": [_fn("f", "missing.go", 0, 1)]}]}
        )
        with pytest.raises(SourceFileError):
            convert(document, base_dir=workspace)

    def test_offset_past_end_of_file(self, workspace: Path) -> None:
        document = parse_gocov(
            {"Packages": [{"Name": "p", "Functions": [_fn("f", "a.go", 0, 20, [_stmt(5, 500, 1)])]}]}
        )
        with pytest.raises(OffsetOutOfRangeError):
            convert(document, base_dir=workspace)

    def test_function_offset_past_end_of_file(self, workspace: Path) -> None:
        document = parse_gocov({"Packages": [{"Name": "p", "Functions": [_fn("f", "a.go", 0, 99)]}]})
        with pytest.raises(OffsetOutOfRangeError):
            convert(document, base_dir=workspace)


class TestDumps:
    def test_compact_json(self, workspace: Path) -> None:
        document = parse_gocov(
            {"Packages": [{"Name": "p", "Functions": [_fn("f", "a.go", 0, 20, [_stmt(5, 10, 3)])]}]}
        )
        text = dumps(convert(document, base_dir=workspace))

        assert " " not in text.replace(str(workspace), "")
        assert json.loads(text)[str(workspace / "a.go")]["s"] == {"1": 3}

    def test_non_ascii_path_written_unescaped(self, tmp_path: Path) -> None:
        src = tmp_path / "café"
        src.mkdir()
        (src / "a.go").write_text(SAMPLE)
        document = parse_gocov({"Packages": [{"Name": "p", "Functions": [_fn("f", "a.go", 0, 20)]}]})

        text = dumps(convert(document, base_dir=src))

        assert "café" in text
        assert "\\u00e9" not in text
        assert list(json.loads(text)) == [str(src / "a.go")]
