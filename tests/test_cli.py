"""Tests for the gsp command line interface."""

import io
import json
import sys
from pathlib import Path

import pytest

from gsp import __version__
from gsp.cli import build_parser, config_from_args, main
from gsp.config import OutputMode, RenderConfig, get_render_config


@pytest.fixture
def page(tmp_path: Path) -> Path:
    path = tmp_path / "page.gsp"
    path.write_text('>html lang="en" { >body { p.lead {- Hi @em{-there} } } }', encoding="utf-8")
    return path


def _stdin(monkeypatch: pytest.MonkeyPatch, data: bytes) -> None:
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data), encoding="utf-8"))


class TestArguments:
    def test_defaults(self) -> None:
        args = build_parser().parse_args([])
        assert args.files == []
        assert config_from_args(args) == RenderConfig()

    def test_flags(self) -> None:
        args = build_parser().parse_args(["-d", "-x", "-n", "a.gsp"])
        assert args.files == ["a.gsp"]
        assert config_from_args(args) == RenderConfig(
            mode=OutputMode.XML, doctype=False, newlines=True
        )

    def test_unknown_option_is_usage_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--bogus"])
        assert exc_info.value.code == 2

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestCompile:
    def test_file(self, page: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(page)]) == 0
        assert capsys.readouterr().out == (
            '<!DOCTYPE html><html lang="en"><body>'
            '<p class="lead">Hi <em>there</em></p></body></html>\n'
        )

    def test_no_doctype(self, page: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["-d", str(page)]) == 0
        assert capsys.readouterr().out.startswith('<html lang="en">')

    def test_xml(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "feed.gsp"
        path.write_text("feed { entry {} }", encoding="utf-8")
        assert main(["-x", str(path)]) == 0
        assert capsys.readouterr().out == "<feed><entry/></feed>\n"

    def test_newlines(self, page: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["-d", "-n", str(page)]) == 0
        assert capsys.readouterr().out == (
            '<html lang="en"><body><p class="lead">Hi <em>there</em></p></body>\n</html>\n\n'
        )

    def test_multiple_files_in_order(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        first = tmp_path / "a.gsp"
        second = tmp_path / "b.gsp"
        first.write_text("a {}", encoding="utf-8")
        second.write_text("b {}", encoding="utf-8")
        assert main(["-d", str(first), str(second)]) == 0
        assert capsys.readouterr().out == "<a>\n<b>\n"

    def test_stdin(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        _stdin(monkeypatch, b"p {- from stdin }")
        assert main(["-d"]) == 0
        assert capsys.readouterr().out == "<p>from stdin</p>\n"

    def test_dash_reads_stdin(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _stdin(monkeypatch, b"hr {}")
        assert main(["-d", "-"]) == 0
        assert capsys.readouterr().out == "<hr>\n"

    def test_ast(self, page: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--ast", str(page)]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["_type"] == "Document"
        assert data["children"][0]["name"] == "html"

    def test_config_restored_after_run(self, page: Path) -> None:
        main(["-x", "-d", str(page)])
        assert get_render_config() == RenderConfig()


class TestFailures:
    def test_syntax_error(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "bad.gsp"
        path.write_text("div {\n  9 {}\n}", encoding="utf-8")
        assert main([str(path)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith(f"gsp: {path}:2:3: syntax error")

    def test_unclosed_brace(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _stdin(monkeypatch, b"div {")
        assert main([]) == 1
        assert "missing a closing brace" in capsys.readouterr().err

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(tmp_path / "nope.gsp")]) == 1
        assert capsys.readouterr().err.startswith("gsp: ")

    def test_stops_at_first_failure(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        good = tmp_path / "good.gsp"
        bad = tmp_path / "bad.gsp"
        good.write_text("a {}", encoding="utf-8")
        bad.write_text("}", encoding="utf-8")
        assert main(["-d", str(good), str(bad), str(good)]) == 1
        assert capsys.readouterr().out == "<a>\n"
