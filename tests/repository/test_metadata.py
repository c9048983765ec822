"""Tests for package index generation."""

import gzip
from pathlib import Path
from unittest.mock import patch

import pytest

from repo_builder.models import RepositoryLayout
from repo_builder.repository.arch_dirs import ensure_arch_dirs
from repo_builder.repository.metadata import MetadataGenerator
from repo_builder.utils.error_handling import CommandError, RepositoryBuildError


@pytest.fixture
def layout(tmp_path):
    """Layout with an initialized amd64 directory."""
    layout = RepositoryLayout(root=tmp_path / "ubuntu", component_path=Path("dists/xenial/org/3.4/multiverse"))
    ensure_arch_dirs(layout.working_dir, ["amd64"])
    return layout


class TestMetadataGenerator:
    """Tests for MetadataGenerator."""

    def test_scan_invocation(self, layout, make_runner):
        """Test the scanner runs from the repository root with a relative path."""
        runner = make_runner({"dpkg-scanpackages": (0, b"Package: foo\n")})

        MetadataGenerator(runner).regenerate_index(layout, "amd64")

        assert runner.calls == [
            {
                "program": "dpkg-scanpackages",
                "args": ["--multiversion", "dists/xenial/org/3.4/multiverse/binary-amd64"],
                "cwd": layout.root,
                "combine_output": False,
            }
        ]

    def test_writes_index_and_compressed_index(self, layout, make_runner):
        """Test Packages holds the scan output and Packages.gz its compression."""
        output = b"Package: foo\nVersion: 1.0\nFilename: dists/xenial/org/3.4/multiverse/binary-amd64/foo.deb\n\n"
        runner = make_runner({"dpkg-scanpackages": (0, output)})

        result = MetadataGenerator(runner).regenerate_index(layout, "amd64")

        arch_dir = layout.arch_dir("amd64")
        assert result == output
        assert (arch_dir / "Packages").read_bytes() == output
        assert gzip.decompress((arch_dir / "Packages.gz").read_bytes()) == output

    def test_regeneration_replaces_previous_index(self, layout, make_runner):
        """Test a rebuild fully replaces the old index."""
        arch_dir = layout.arch_dir("amd64")
        (arch_dir / "Packages").write_bytes(b"Package: old\n" * 100)

        MetadataGenerator(make_runner({"dpkg-scanpackages": (0, b"Package: new\n")})).regenerate_index(
            layout, "amd64"
        )

        assert (arch_dir / "Packages").read_bytes() == b"Package: new\n"

    def test_scan_failure_writes_nothing(self, layout, make_runner):
        """Test a failed scan leaves both index files untouched."""
        arch_dir = layout.arch_dir("amd64")
        (arch_dir / "Packages").write_bytes(b"Package: previous\n")
        previous_gz = (arch_dir / "Packages.gz").read_bytes()
        runner = make_runner({"dpkg-scanpackages": (2, b"dpkg-scanpackages: error: binary dir not found")})

        with pytest.raises(CommandError) as exc_info:
            MetadataGenerator(runner).regenerate_index(layout, "amd64")

        assert exc_info.value.returncode == 2
        assert "binary dir not found" in str(exc_info.value)
        assert (arch_dir / "Packages").read_bytes() == b"Package: previous\n"
        assert (arch_dir / "Packages.gz").read_bytes() == previous_gz

    def test_scan_failure_creates_nothing(self, tmp_path, make_runner):
        """Test a failed scan does not create index files."""
        layout = RepositoryLayout(root=tmp_path, component_path=Path("dists/xenial/org/3.4/multiverse"))
        layout.arch_dir("amd64").mkdir(parents=True)

        with pytest.raises(CommandError):
            MetadataGenerator(make_runner({"dpkg-scanpackages": (1, b"")})).regenerate_index(layout, "amd64")

        assert list(layout.arch_dir("amd64").iterdir()) == []

    def test_write_failure_wrapped(self, layout, make_runner):
        """Test failures writing Packages are wrapped with the path."""
        runner = make_runner({"dpkg-scanpackages": (0, b"Package: foo\n")})

        with patch("repo_builder.repository.metadata.write_file", side_effect=OSError("read-only file system")):
            with pytest.raises(RepositoryBuildError, match="problem writing packages file"):
                MetadataGenerator(runner).regenerate_index(layout, "amd64")

    def test_compression_failure_wrapped(self, layout, make_runner):
        """Test failures writing Packages.gz are wrapped."""
        runner = make_runner({"dpkg-scanpackages": (0, b"Package: foo\n")})

        with patch(
            "repo_builder.repository.metadata.gzip_and_write_to_file",
            side_effect=RepositoryBuildError("writing compressed file"),
        ):
            with pytest.raises(RepositoryBuildError, match="compressing the 'Packages' file"):
                MetadataGenerator(runner).regenerate_index(layout, "amd64")
