"""Unit tests for depsplit.core.loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from depsplit.core.loader import LockfileLoader
from depsplit.exceptions import LockfileError
from depsplit.models import Dependency, PackageRecord

V1_LOCKFILE = """\
[[package]]
name = "app"
version = "0.1.0"
dependencies = [
 "serde 1.0.130 (registry+https://github.com/rust-lang/crates.io-index)",
]

[[package]]
name = "serde"
version = "1.0.130"
source = "registry+https://github.com/rust-lang/crates.io-index"
"""

V3_LOCKFILE = """\
version = 3

[[package]]
name = "app"
version = "0.1.0"
dependencies = [
 "libc",
 "log 0.4.14",
]

[[package]]
name = "libc"
version = "0.2.99"
source = "registry+https://github.com/rust-lang/crates.io-index"

[[package]]
name = "log"
version = "0.4.14"
source = "registry+https://github.com/rust-lang/crates.io-index"
"""


@pytest.mark.unit
class TestLoadString:
    """Tests for LockfileLoader.load_string."""

    def test_v1_descriptors(self) -> None:
        records = LockfileLoader().load_string(V1_LOCKFILE)

        assert records == [
            PackageRecord(
                name="app",
                version="0.1.0",
                source="",
                dependencies=[
                    Dependency(
                        "serde",
                        "1.0.130",
                        "registry+https://github.com/rust-lang/crates.io-index",
                    )
                ],
            ),
            PackageRecord(
                name="serde",
                version="1.0.130",
                source="registry+https://github.com/rust-lang/crates.io-index",
                dependencies=[],
            ),
        ]

    def test_v3_descriptors(self) -> None:
        records = LockfileLoader().load_string(V3_LOCKFILE)

        assert [r.name for r in records] == ["app", "libc", "log"]
        assert records[0].dependencies == [
            Dependency("libc"),
            Dependency("log", "0.4.14"),
        ]

    def test_empty_document(self) -> None:
        assert LockfileLoader().load_string("") == []

    def test_invalid_toml(self) -> None:
        with pytest.raises(LockfileError, match="Invalid TOML") as exc_info:
            LockfileLoader().load_string("[[package]\nname =", source_name="bad.lock")

        assert exc_info.value.details["file"] == "bad.lock"

    def test_package_not_an_array(self) -> None:
        with pytest.raises(LockfileError, match="array of \\[\\[package\\]\\]"):
            LockfileLoader().load_string('package = "nope"\n')

    def test_missing_name(self) -> None:
        content = '[[package]]\nversion = "1.0.0"\n'

        with pytest.raises(LockfileError, match="has no name") as exc_info:
            LockfileLoader().load_string(content)

        assert exc_info.value.details["entry"] == 0

    def test_missing_version(self) -> None:
        content = '[[package]]\nname = "a"\nversion = "1"\n\n[[package]]\nname = "b"\n'

        with pytest.raises(LockfileError, match="'b' has no version") as exc_info:
            LockfileLoader().load_string(content)

        assert exc_info.value.details["entry"] == 1

    def test_non_string_source(self) -> None:
        content = '[[package]]\nname = "a"\nversion = "1"\nsource = 3\n'

        with pytest.raises(LockfileError, match="non-string source"):
            LockfileLoader().load_string(content)

    def test_dependencies_not_an_array(self) -> None:
        content = '[[package]]\nname = "a"\nversion = "1"\ndependencies = "b"\n'

        with pytest.raises(LockfileError, match="not an array"):
            LockfileLoader().load_string(content)

    def test_malformed_descriptors_are_skipped(self) -> None:
        content = (
            '[[package]]\nname = "a"\nversion = "1"\n'
            'dependencies = ["b 1 extra junk", 42, "c 2"]\n'
        )
        loader = LockfileLoader()

        records = loader.load_string(content)

        assert records[0].dependencies == [Dependency("c", "2")]
        assert loader.skipped == ["b 1 extra junk", "42"]

    def test_skipped_is_reset_between_loads(self) -> None:
        loader = LockfileLoader()
        loader.load_string('[[package]]\nname = "a"\nversion = "1"\ndependencies = ["x y z"]\n')

        loader.load_string(V1_LOCKFILE)

        assert loader.skipped == []

    def test_future_format_version_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        content = 'version = 9\n[[package]]\nname = "a"\nversion = "1"\n'

        with caplog.at_level("WARNING", logger="depsplit"):
            records = LockfileLoader().load_string(content)

        assert len(records) == 1
        assert "format version 9" in caplog.text


@pytest.mark.unit
class TestLoadFile:
    """Tests for LockfileLoader.load_file."""

    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "Cargo.lock"
        path.write_text(V1_LOCKFILE, encoding="utf-8")

        records = LockfileLoader().load_file(path)

        assert [r.name for r in records] == ["app", "serde"]

    def test_accepts_string_path(self, tmp_path: Path) -> None:
        path = tmp_path / "Cargo.lock"
        path.write_text(V3_LOCKFILE, encoding="utf-8")

        records = LockfileLoader().load_file(str(path))

        assert len(records) == 3

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(LockfileError, match="Cannot read lockfile"):
            LockfileLoader().load_file(tmp_path / "missing.lock")

    def test_invalid_content_names_file(self, tmp_path: Path) -> None:
        path = tmp_path / "Cargo.lock"
        path.write_text("not = [valid", encoding="utf-8")

        with pytest.raises(LockfileError) as exc_info:
            LockfileLoader().load_file(path)

        assert exc_info.value.details["file"] == str(path)
