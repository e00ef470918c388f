"""Tests for output sinks."""

import io

import pytest

from detimer.errors import SinkIOError
from detimer.sinks import FileSink, StreamSink, open_sink


class BrokenStream(io.StringIO):
    def write(self, text):
        raise OSError(5, "Input/output error")


class TestStreamSink:

    def test_writes_line_with_newline(self):
        stream = io.StringIO()
        sink = StreamSink(stream)
        sink.write("05:09")
        sink.write("05:08")
        assert stream.getvalue() == "05:09\n05:08\n"

    def test_defaults_to_stdout(self, capsys):
        StreamSink().write("00:01")
        assert capsys.readouterr().out == "00:01\n"

    def test_write_failure_is_sink_error(self):
        with pytest.raises(SinkIOError):
            StreamSink(BrokenStream()).write("00:01")


class TestFileSink:

    def test_truncates_on_open(self, tmp_path):
        path = tmp_path / "timer.txt"
        path.write_text("old content\n")
        FileSink(path)
        assert path.read_text() == ""

    def test_keeps_only_latest_line(self, tmp_path):
        path = tmp_path / "timer.txt"
        sink = FileSink(path)
        sink.write("00:02")
        sink.write("00:01")
        assert path.read_text(encoding="utf-8") == "00:01\n"

    def test_unwritable_path_fails_on_open(self, tmp_path):
        with pytest.raises(SinkIOError):
            FileSink(tmp_path / "missing" / "timer.txt")

    def test_path_property(self, tmp_path):
        assert FileSink(tmp_path / "t.txt").path == tmp_path / "t.txt"


class TestOpenSink:

    def test_none_is_stdout(self):
        assert isinstance(open_sink(None), StreamSink)

    def test_path_is_file(self, tmp_path):
        assert isinstance(open_sink(tmp_path / "out.txt"), FileSink)
        assert isinstance(open_sink(str(tmp_path / "out2.txt")), FileSink)
