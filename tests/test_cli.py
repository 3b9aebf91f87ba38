"""Tests for cli module."""

import io
import sys
from unittest.mock import patch

import pytest
from PIL import Image
from pixel_says.bubble import MASCOT
from pixel_says.cli import build_parser, main, read_messages, setup_logging

# --- Fixtures ---


@pytest.fixture
def image_path(tmp_path):
    """A 2x1 image: white then black, both opaque."""
    img = Image.new("RGBA", (2, 1), (0, 0, 0, 255))
    img.putpixel((0, 0), (255, 255, 255, 255))
    path = tmp_path / "pixels.png"
    img.save(path)
    return path


@pytest.fixture
def stdin(monkeypatch):
    def _set(text):
        monkeypatch.setattr(sys, "stdin", io.StringIO(text))

    return _set


# --- Tests for build_parser() ---


class TestBuildParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.width == 40
        assert args.image is None
        assert args.files is None
        assert args.mode == "truecolor"
        assert args.log_level == "WARNING"
        assert args.text == []

    def test_repeatable_files(self):
        args = build_parser().parse_args(["-f", "a.txt", "--files", "b.txt"])
        assert [str(f) for f in args.files] == ["a.txt", "b.txt"]

    @pytest.mark.parametrize("width", ["0", "-1", "abc"])
    def test_rejects_bad_width(self, width, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["-w", width])
        assert exc_info.value.code == 2

    def test_rejects_unknown_mode(self, capsys):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["-m", "sepia"])


# --- Tests for read_messages() ---


class TestReadMessages:
    def test_text_args_joined(self):
        args = build_parser().parse_args(["hello", "big", "world"])
        assert read_messages(args, io.StringIO("ignored")) == ["hello big world"]

    def test_files_win_over_text(self, tmp_path):
        path = tmp_path / "msg.txt"
        path.write_text("from file", encoding="utf-8")
        args = build_parser().parse_args(["-f", str(path), "ignored"])
        assert read_messages(args, io.StringIO("")) == ["from file"]

    def test_stdin_fallback(self):
        args = build_parser().parse_args([])
        assert read_messages(args, io.StringIO("piped\n")) == ["piped\n"]

    def test_missing_file(self, tmp_path):
        args = build_parser().parse_args(["-f", str(tmp_path / "nope.txt")])
        with pytest.raises(RuntimeError, match="Failed to read input to the program"):
            read_messages(args, io.StringIO(""))


# --- Tests for main() ---


class TestMain:
    def test_text_with_mascot(self, capsys):
        result = main(["Hello,", "world!"])
        captured = capsys.readouterr()

        assert result == 0
        assert captured.out == (
            " _______________\n"
            "< Hello, world! >\n"
            " ---------------" + MASCOT
        )
        assert captured.err == ""

    def test_width_flag(self, capsys):
        main(["-w", "5", "aaa bbb ccc"])
        lines = capsys.readouterr().out.split("\n")
        assert lines[:5] == [" _____", "/ aaa \\", "| bbb |", "\\ ccc /", " -----"]

    def test_reads_stdin(self, capsys, stdin):
        stdin("from   stdin\n")
        assert main([]) == 0
        assert "< from stdin >" in capsys.readouterr().out

    def test_each_file_gets_a_bubble(self, capsys, tmp_path):
        first = tmp_path / "one.txt"
        second = tmp_path / "two.txt"
        first.write_text("first", encoding="utf-8")
        second.write_text("second", encoding="utf-8")

        assert main(["-f", str(first), "-f", str(second)]) == 0
        out = capsys.readouterr().out
        assert out.index("< first >") < out.index("< second >")
        assert out.count("_~^~^~_") == 2

    @pytest.mark.parametrize(
        "mode,art",
        [
            ("monochrome", "██  \n"),
            ("invert", "  ██\n"),
            ("truecolor", "\x1b[38;2;255;255;255m██\x1b[0m\x1b[38;2;0;0;0m██\x1b[0m\n"),
        ],
    )
    def test_image_modes(self, capsys, image_path, mode, art):
        result = main(["-i", str(image_path), "-m", mode, "hi"])
        out = capsys.readouterr().out

        assert result == 0
        assert out == " ____\n< hi >\n ----\n        \\\n         \\\n" + art

    def test_missing_image(self, capsys, tmp_path):
        result = main(["-i", str(tmp_path / "missing.png"), "hi"])
        captured = capsys.readouterr()

        assert result == 1
        assert captured.err.startswith("error: Failed to display with image: Unable to load image")
        assert captured.out == ""

    def test_missing_input_file(self, capsys, tmp_path):
        result = main(["-f", str(tmp_path / "nope.txt")])
        captured = capsys.readouterr()

        assert result == 1
        assert "error: Failed to read input to the program" in captured.err

    def test_stdout_write_failure(self, capsys):
        with patch("pixel_says.cli.say", side_effect=BrokenPipeError("closed")):
            result = main(["hi"])

        assert result == 1
        assert "error: Failed to write stdout" in capsys.readouterr().err


class TestSetupLogging:
    def test_unknown_level_falls_back(self):
        with patch("pixel_says.cli.logging.basicConfig") as mock_config:
            setup_logging("chatty")
        assert mock_config.call_args.kwargs["level"] == 30
        assert mock_config.call_args.kwargs["stream"] is sys.stderr

    def test_debug_level(self):
        with patch("pixel_says.cli.logging.basicConfig") as mock_config:
            setup_logging("debug")
        assert mock_config.call_args.kwargs["level"] == 10
