from __future__ import annotations

import pytest

from depsplit.exceptions import (
    ConfigError,
    DepSplitError,
    FileOperationError,
    LockfileError,
    SourceURLError,
    UnresolvedDependencyError,
)


@pytest.mark.unit
class TestDepSplitError:
    """Tests for the base error."""

    def test_message_only(self) -> None:
        """Test an error without details prints its message."""
        assert str(DepSplitError("boom")) == "boom"

    def test_details_appended(self) -> None:
        """Test details are rendered as key=value pairs."""
        error = DepSplitError("boom", {"file": "Cargo.lock", "entry": 3})

        assert str(error) == "boom (file=Cargo.lock, entry=3)"

    def test_repr(self) -> None:
        """Test repr names the class and its fields."""
        assert repr(LockfileError("bad", entry=1)) == (
            "LockfileError(message='bad', details={'entry': 1})"
        )

    @pytest.mark.parametrize(
        "error_class",
        [ConfigError, FileOperationError, LockfileError, SourceURLError, UnresolvedDependencyError],
    )
    def test_hierarchy(self, error_class) -> None:
        """Test every error can be caught as DepSplitError."""
        assert issubclass(error_class, DepSplitError)


@pytest.mark.unit
class TestSubclassDetails:
    """Tests for the context stored by each subclass."""

    def test_lockfile_error(self) -> None:
        """Test LockfileError keeps the file and entry index."""
        error = LockfileError("Package entry has no name", file_path="Cargo.lock", entry=0)

        assert error.details == {"file": "Cargo.lock", "entry": 0}
        assert str(error) == "Package entry has no name (file=Cargo.lock, entry=0)"

    def test_unresolved_dependency_skips_missing_fields(self) -> None:
        """Test None fields are left out of details."""
        error = UnresolvedDependencyError("missing", package="a@1", dependency="b")

        assert error.details == {"package": "a@1", "dependency": "b"}
        assert error.version is None

    def test_config_error(self) -> None:
        """Test ConfigError exposes the path and option."""
        error = ConfigError("trim must be a bool", config_path="depsplit.toml", option="trim")

        assert error.details == {"path": "depsplit.toml", "option": "trim"}

    def test_source_url_error_shortens_long_sources(self) -> None:
        """Test very long locators are truncated in details only."""
        source = "git+https://example.com/" + "x" * 300

        error = SourceURLError("Cannot parse", source=source)

        assert error.source == source
        assert error.details["source"].endswith("...")
        assert len(error.details["source"]) == 203

    def test_file_operation_error(self) -> None:
        """Test the original error is kept and rendered."""
        cause = OSError("disk full")

        error = FileOperationError("write failed", file_path="out.dot", operation="write", original_error=cause)

        assert error.original_error is cause
        assert error.details == {"path": "out.dot", "operation": "write", "error": "disk full"}
