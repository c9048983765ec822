"""
Tests for Release manifest generation.
"""

from pathlib import Path

import pytest

from repo_builder.models import BuildConfig, RepositoryLayout, TemplatesConfig
from repo_builder.repository.release import ReleaseManifestBuilder, render_release_header
from repo_builder.utils.error_handling import (
    CommandError,
    ReleaseTemplateError,
    RepositoryBuildError,
    TemplateNotFoundError,
)

EXPECTED_HEADER = "Origin: mongodb\nCodename: xenial\nArchitectures: amd64 arm64\nComponents: multiverse\n"


@pytest.fixture
def layout(tmp_path):
    """Layout with an existing component directory."""
    layout = RepositoryLayout(root=tmp_path / "ubuntu", component_path=Path("dists/xenial/org/3.4/multiverse"))
    layout.working_dir.mkdir(parents=True)
    return layout


class TestRenderReleaseHeader:
    """Test Release header rendering."""

    def test_substitutes_distro_fields(self, build_config, distro):
        """Test code name, component and space-joined architectures are filled in."""
        header = render_release_header(build_config.release_template("org"), distro)

        assert header == EXPECTED_HEADER

    def test_unknown_placeholder(self, distro):
        """Test an unknown placeholder is a template error."""
        with pytest.raises(ReleaseTemplateError, match="unknown placeholder"):
            render_release_header("Suite: ${suite}\n", distro)

    def test_malformed_template(self, distro):
        """Test a malformed placeholder is a template error."""
        with pytest.raises(ReleaseTemplateError):
            render_release_header("Codename: ${code_name\n", distro)

    def test_literal_text_kept(self, distro):
        """Test templates without placeholders are returned unchanged."""
        assert render_release_header("Origin: mongodb\n", distro) == "Origin: mongodb\n"


class TestReleaseManifestBuilder:
    """Test ReleaseManifestBuilder."""

    def test_writes_header_and_release_output(self, build_config, runner, output_store, layout, distro):
        """Test the Release file is the rendered header followed by the command output."""
        release_file = ReleaseManifestBuilder(build_config, runner, output_store).build_manifest(layout, distro)

        assert release_file == layout.release_file
        assert release_file == layout.root / "dists/xenial/org/3.4/Release"
        assert release_file.read_bytes() == EXPECTED_HEADER.encode() + b"Origin: test\n"
        assert (release_file.stat().st_mode & 0o777) == 0o644

    def test_release_command_invocation(self, build_config, runner, output_store, layout, distro):
        """Test apt-ftparchive runs in the component directory with combined output."""
        ReleaseManifestBuilder(build_config, runner, output_store).build_manifest(layout, distro)

        calls = runner.calls_for("apt-ftparchive")
        assert len(calls) == 1
        assert calls[0]["args"] == ["release", "../"]
        assert Path(calls[0]["cwd"]) == layout.working_dir
        assert calls[0]["combine_output"] is True

    def test_output_recorded(self, build_config, runner, output_store, layout, distro):
        """Test the release output is recorded under the working directory key."""
        ReleaseManifestBuilder(build_config, runner, output_store).build_manifest(layout, distro)

        assert output_store.get(f"sign-release-file-{layout.working_dir}") == "Origin: test\n"

    def test_missing_template_runs_nothing(self, runner, output_store, layout, distro):
        """Test a missing edition template fails before the release command."""
        config = BuildConfig(templates=TemplatesConfig(deb={}), distros=[distro])

        with pytest.raises(TemplateNotFoundError, match="no 'Release' template defined for org"):
            ReleaseManifestBuilder(config, runner, output_store).build_manifest(layout, distro)

        assert runner.calls == []
        assert not layout.release_file.exists()

    def test_bad_template_runs_nothing(self, runner, output_store, layout, distro):
        """Test a template that fails to render fails before the release command."""
        config = BuildConfig(templates=TemplatesConfig(deb={"org": "Suite: ${suite}\n"}), distros=[distro])

        with pytest.raises(ReleaseTemplateError):
            ReleaseManifestBuilder(config, runner, output_store).build_manifest(layout, distro)

        assert runner.calls == []

    def test_command_failure_writes_nothing(self, build_config, output_store, layout, distro, make_runner):
        """Test a failing release command leaves no Release file and records nothing."""
        runner = make_runner({"apt-ftparchive": (100, b"E: some error")})

        with pytest.raises(CommandError) as exc_info:
            ReleaseManifestBuilder(build_config, runner, output_store).build_manifest(layout, distro)

        assert "generating Release content for" in str(exc_info.value)
        assert "E: some error" in str(exc_info.value)
        assert exc_info.value.returncode == 100
        assert not layout.release_file.exists()
        assert len(output_store) == 0

    def test_write_failure_wrapped(self, build_config, runner, output_store, layout, distro, mocker):
        """Test a failing write is reported as a build error."""
        mocker.patch("repo_builder.repository.release.write_file", side_effect=PermissionError("read-only"))

        with pytest.raises(RepositoryBuildError, match="writing Release file to disk"):
            ReleaseManifestBuilder(build_config, runner, output_store).build_manifest(layout, distro)

    def test_existing_release_replaced(self, build_config, runner, output_store, layout, distro):
        """Test an existing Release file is overwritten."""
        layout.release_file.write_bytes(b"stale\n")

        ReleaseManifestBuilder(build_config, runner, output_store).build_manifest(layout, distro)

        assert layout.release_file.read_bytes().startswith(b"Origin: mongodb\n")
