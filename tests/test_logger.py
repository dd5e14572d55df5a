"""
Tests for the diagnostic logger and error types.
"""

import pytest
import tempfile
import os
import io
from pathlib import Path

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from rich.console import Console

from fsutils.errors import (
    ErrorKind,
    FsError,
    NotFoundError,
    PermissionDeniedError,
    AlreadyExistsError,
    translate,
)
from fsutils.logger import (
    ConsoleSink,
    DiagnosticEntry,
    DiagnosticLogger,
    JsonlSink,
    Level,
    NullSink,
)
from fsutils.result import OpResult, attempt
from fsutils.file_ops import FileOperator


class TestLevel:
    """Test Level enum."""

    def test_levels_ordered(self):
        assert Level.DEBUG.value < Level.INFO.value
        assert Level.INFO.value < Level.WARN.value
        assert Level.WARN.value < Level.ERROR.value

    def test_parse(self):
        assert Level.parse("info") == Level.INFO
        assert Level.parse(" Warning ") == Level.WARN
        assert Level.parse("ERROR") == Level.ERROR

    def test_parse_off(self):
        assert Level.parse(None) is None
        assert Level.parse("") is None
        assert Level.parse("off") is None

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            Level.parse("loud")


class TestDiagnosticLogger:
    """Test level filtering."""

    @pytest.fixture
    def entries(self):
        return []

    @pytest.fixture
    def sink(self, entries):
        class ListSink:
            def write(self, entry):
                entries.append(entry)
        return ListSink()

    def test_filters_below_level(self, sink, entries):
        logger = DiagnosticLogger(Level.INFO, sink)

        assert logger.debug("op", "hidden") is None
        logger.info("op", "shown")
        logger.error("op", "also shown")

        assert [e.message for e in entries] == ["shown", "also shown"]

    def test_disabled(self, sink, entries):
        logger = DiagnosticLogger(None, sink)

        logger.error("op", "nothing")

        assert entries == []
        assert not logger.enabled_for(Level.ERROR)

    def test_entry_fields(self, sink, entries):
        logger = DiagnosticLogger(Level.DEBUG, sink)

        entry = logger.info("copy", "Failed", paths=["a", "b"], error="boom")

        assert entry is entries[0]
        assert entry.level == "INFO"
        assert entry.operation == "copy"
        assert entry.paths == ["a", "b"]
        assert entry.error == "boom"

    def test_default_sink_is_null(self):
        logger = DiagnosticLogger(Level.DEBUG)

        assert isinstance(logger.sink, NullSink)
        assert logger.info("op", "dropped") is not None


class TestJsonlSink:
    """Test JsonlSink class."""

    @pytest.fixture
    def temp_log(self):
        """Create a temporary log file."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.jsonl', delete=False) as f:
            yield f.name
        os.unlink(f.name)

    @pytest.fixture
    def logger(self, temp_log):
        """Create a logger writing to the temp file."""
        return DiagnosticLogger(Level.DEBUG, JsonlSink(temp_log))

    def test_write_and_read_back(self, logger):
        logger.info("remove", "Failed on x", paths=["x"], error="No such file or directory")

        entries = logger.sink.get_recent()

        assert len(entries) == 1
        assert entries[0].operation == "remove"
        assert entries[0].paths == ["x"]

    def test_get_recent(self, logger):
        for i in range(5):
            logger.info("op", f"Action {i}")

        entries = logger.sink.get_recent(limit=3)

        assert len(entries) == 3
        assert entries[0].message == "Action 4"

    def test_get_recent_zero_limit(self, logger):
        for i in range(3):
            logger.info("op", f"Action {i}")

        assert logger.sink.get_recent(limit=0) == []
        assert logger.sink.get_recent(limit=-1) == []

    def test_read_only_sink_does_not_create_directory(self):
        with tempfile.TemporaryDirectory() as d:
            log_dir = os.path.join(d, "logs")
            sink = JsonlSink(os.path.join(log_dir, "fsutils.jsonl"), create_dirs=False)

            assert sink.get_recent() == []
            assert not os.path.exists(log_dir)

    def test_skips_corrupt_lines(self, logger, temp_log):
        logger.info("op", "good")
        with open(temp_log, "a", encoding="utf-8") as f:
            f.write("not json\n")

        entries = logger.sink.get_recent()

        assert [e.message for e in entries] == ["good"]

    def test_creates_parent_directory(self):
        with tempfile.TemporaryDirectory() as d:
            sink = JsonlSink(os.path.join(d, "logs", "fsutils.jsonl"))
            sink.write(DiagnosticEntry.create(Level.INFO, "op", "hi"))

            assert len(sink.get_recent()) == 1

    def test_missing_file(self):
        with tempfile.TemporaryDirectory() as d:
            sink = JsonlSink(os.path.join(d, "none.jsonl"))

            assert sink.get_recent() == []

    def test_operations_log_failures(self, logger):
        ops = FileOperator(logger=logger)

        with pytest.raises(NotFoundError):
            ops.remove("a_very_1234_unlikely_9876_filename")

        entry = logger.sink.get_recent()[0]
        assert entry.operation == "remove"
        assert entry.metadata["kind"] == "not_found"


class TestConsoleSink:
    """Test ConsoleSink class."""

    def test_renders_line(self):
        buffer = io.StringIO()
        sink = ConsoleSink(Console(file=buffer, width=200, color_system=None))

        sink.write(DiagnosticEntry.create(Level.INFO, "mkdir", "Failed on [x]", error="File exists"))

        output = buffer.getvalue()
        assert "mkdir: Failed on [x]" in output
        assert "(File exists)" in output


class TestErrors:
    """Test error translation."""

    def test_translate_not_found(self):
        error = translate("size", ["x"], FileNotFoundError(2, "No such file or directory", "x"))

        assert isinstance(error, NotFoundError)
        assert isinstance(error, FileNotFoundError)
        assert isinstance(error, OSError)
        assert error.kind == ErrorKind.NOT_FOUND
        assert error.reason == "No such file or directory"
        assert error.errno == 2

    def test_translate_permission(self):
        error = translate("remove", ["x"], PermissionError(13, "Permission denied"))

        assert isinstance(error, PermissionDeniedError)
        assert error.kind == ErrorKind.PERMISSION_DENIED

    def test_translate_exists(self):
        error = translate("mkdir", ["x"], FileExistsError(17, "File exists"))

        assert isinstance(error, AlreadyExistsError)
        assert error.kind == ErrorKind.ALREADY_EXISTS

    def test_translate_generic(self):
        error = translate("move", ["a", "b"], OSError(18, "Invalid cross-device link"))

        assert type(error) is FsError
        assert error.kind == ErrorKind.IO
        assert error.paths == ("a", "b")
        assert "move a, b" in str(error)

    def test_translate_keeps_fs_errors(self):
        original = NotFoundError("remove", ["x"])

        assert translate("remove", ["x"], original) is original

    def test_message_without_cause(self):
        error = NotFoundError("remove", [Path("x")])

        assert error.paths == ("x",)
        assert str(error) == "remove x: not found"


class TestAttempt:
    """Test result values."""

    def test_success(self):
        result = attempt(lambda a, b: a + b, 1, b=2)

        assert result.success
        assert result.value == 3
        assert result.kind is None
        assert result.unwrap() == 3

    def test_failure(self):
        ops = FileOperator(logger=DiagnosticLogger.disabled())

        result = attempt(ops.remove, "a_very_1234_unlikely_9876_filename")

        assert not result.success
        assert result.kind == ErrorKind.NOT_FOUND
        with pytest.raises(NotFoundError):
            result.unwrap()

    def test_other_exceptions_propagate(self):
        def boom():
            raise ValueError("not an fs error")

        with pytest.raises(ValueError):
            attempt(boom)

    def test_result_dataclass(self):
        result = OpResult(success=False, error=FsError("op", ["p"]))

        assert result.kind == ErrorKind.IO


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
