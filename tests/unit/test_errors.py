"""Unit tests for the errors module."""

from pathlib import Path

from configflow.models.common import ErrorRecord
from configflow.utils.errors import (
    ConfigFlowError,
    ConfigurationError,
    FrameworkConfigError,
    InvalidConfidenceError,
    InvalidTypeError,
    MatcherInitError,
    MissingFieldError,
    ParseFailedError,
    QueryCompileError,
    UnsupportedLanguageError,
)


class TestConfigFlowError:
    """Tests for base ConfigFlowError."""

    def test_basic_error(self):
        """Test basic error creation."""
        error = ConfigFlowError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.code == "UNKNOWN_ERROR"
        assert error.details == {}

    def test_to_error_record(self):
        """Test conversion to ErrorRecord model."""
        error = ConfigFlowError("Test error", code="TEST_ERROR", details={"key": "value"})
        record = error.to_error_record()

        assert isinstance(record, ErrorRecord)
        assert record.code == "TEST_ERROR"
        assert record.message == "Test error"
        assert record.details == {"key": "value"}
        assert str(record) == "[TEST_ERROR] Test error"


class TestFrameworkConfigErrors:
    """Tests for framework definition errors."""

    def test_missing_field(self):
        """Test MissingFieldError names the field."""
        error = MissingFieldError("queries[0].pattern")
        assert isinstance(error, FrameworkConfigError)
        assert error.code == "MISSING_FIELD"
        assert "queries[0].pattern" in str(error)

    def test_invalid_type(self):
        """Test InvalidTypeError carries field and expectation."""
        error = InvalidTypeError("queries", "list")
        assert isinstance(error, FrameworkConfigError)
        assert error.details == {"field": "queries", "expected": "list"}

    def test_invalid_confidence(self):
        """Test InvalidConfidenceError includes the literal."""
        error = InvalidConfidenceError("certain")
        assert isinstance(error, FrameworkConfigError)
        assert error.code == "INVALID_CONFIDENCE"
        assert "certain" in str(error)

    def test_generic(self):
        """Test the base framework error code."""
        assert FrameworkConfigError("bad").code == "INVALID_CONFIG"


class TestRunErrors:
    """Tests for errors raised during a discovery run."""

    def test_unsupported_language(self):
        """Test UnsupportedLanguageError."""
        error = UnsupportedLanguageError("go")
        assert error.code == "UNSUPPORTED_LANGUAGE"
        assert error.details["language"] == "go"

    def test_query_compile(self):
        """Test QueryCompileError names framework and query."""
        error = QueryCompileError("spring", "getter", "Invalid node type")
        assert error.code == "QUERY_COMPILE_ERROR"
        assert "spring" in str(error)
        assert "Invalid node type" in str(error)

    def test_parse_failed(self):
        """Test ParseFailedError."""
        error = ParseFailedError("src/app.js")
        assert error.code == "PARSE_FAILED"
        assert error.details == {"file_path": "src/app.js"}

    def test_matcher_init(self):
        """Test MatcherInitError."""
        error = MatcherInitError("ruby", "syntax")
        assert error.code == "MATCHER_INIT_ERROR"
        assert "ruby" in str(error)

    def test_configuration(self):
        """Test ConfigurationError with and without a key."""
        assert ConfigurationError("bad").details == {}
        error = ConfigurationError("bad depth", config_key="scan.max_depth")
        assert error.code == "CONFIG_ERROR"
        assert error.details == {"config_key": "scan.max_depth"}
        assert ConfigurationError("bad", path=Path("cf.yaml")).details == {"path": "cf.yaml"}
