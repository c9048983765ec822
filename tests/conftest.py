"""
Test fixtures and fakes for repo-builder tests.

The repository pipeline talks to external tools, the notary service and
the index page builder through protocols; the fakes here stand in for
them and record how they were called.
"""

import os
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

import pytest
import respx

from repo_builder.models import BuildConfig, CommandResult, DistroSpec, NotaryConfig, TemplatesConfig
from repo_builder.utils import OutputStore

RELEASE_TEMPLATE = "Origin: mongodb\nCodename: ${code_name}\nArchitectures: ${architectures}\nComponents: ${component}\n"

# Component directory of the sample repository, relative to the local root
SAMPLE_REPO = "ubuntu/dists/xenial/mongodb-org/3.4"


class RecordingRunner:
    """
    Command runner that records calls and returns canned results.

    Responses are keyed by program name; a response is either a
    (returncode, stdout) tuple or a callable receiving (args, cwd).
    """

    def __init__(self, responses: Optional[Dict[str, Union[Tuple[int, bytes], Callable]]] = None) -> None:
        self.responses = responses or {}
        self.calls: List[Dict] = []

    def run(
        self,
        program: str,
        args: Sequence[str],
        cwd: Optional[Union[str, os.PathLike]] = None,
        *,
        combine_output: bool = False,
    ) -> CommandResult:
        self.calls.append({"program": program, "args": list(args), "cwd": cwd, "combine_output": combine_output})

        response = self.responses.get(program, (0, b""))
        if callable(response):
            response = response(list(args), cwd)
        returncode, stdout = response

        return CommandResult(
            args=[program, *args],
            cwd=Path(cwd) if cwd is not None else None,
            returncode=returncode,
            stdout=stdout,
        )

    def calls_for(self, program: str) -> List[Dict]:
        return [call for call in self.calls if call["program"] == program]


class FakeSigner:
    """Signer that records calls and whether the file existed when signing."""

    def __init__(self, error: Optional[Exception] = None) -> None:
        self.error = error
        self.calls: List[Dict] = []

    def sign(self, file_path, extension: str, overwrite: bool) -> None:
        file_path = Path(file_path)
        self.calls.append(
            {
                "path": file_path,
                "extension": extension,
                "overwrite": overwrite,
                "existed": file_path.is_file(),
            }
        )
        if self.error is not None:
            raise self.error
        file_path.with_name(f"{file_path.name}.{extension}").write_bytes(b"signature")


class FakeIndexBuilder:
    """Index page builder that records calls."""

    def __init__(self, error: Optional[Exception] = None) -> None:
        self.error = error
        self.calls: List[Tuple[Path, str]] = []

    def build_index_page(self, directory, bucket: str) -> None:
        self.calls.append((Path(directory), bucket))
        if self.error is not None:
            raise self.error


@pytest.fixture
def distro():
    """Sample distro with two architectures."""
    return DistroSpec(
        name="ubuntu1604",
        code_name="xenial",
        component="multiverse",
        edition="org",
        architectures=["amd64", "arm64"],
        bucket="repo.example.org",
        repos=[SAMPLE_REPO],
    )


@pytest.fixture
def build_config(distro):
    """Build configuration with a template for the sample distro's edition."""
    return BuildConfig(
        templates=TemplatesConfig(deb={"org": RELEASE_TEMPLATE}),
        distros=[distro],
        notary=NotaryConfig(url="https://notary.example.com", key_name="server-3.4"),
    )


@pytest.fixture
def output_store():
    """Empty output store."""
    return OutputStore()


@pytest.fixture
def runner():
    """Runner emitting a one-package index and a one-line Release body."""
    return RecordingRunner(
        {
            "dpkg-scanpackages": (0, b"Package: foo\n"),
            "apt-ftparchive": (0, b"Origin: test\n"),
        }
    )


@pytest.fixture
def signer():
    """Recording signer."""
    return FakeSigner()


@pytest.fixture
def index_builder():
    """Recording index page builder."""
    return FakeIndexBuilder()


@pytest.fixture
def local_root(tmp_path):
    """Empty local root for repository trees."""
    root = tmp_path / "repo-local"
    root.mkdir()
    return root


@pytest.fixture
def component_dir(local_root, distro):
    """Component directory of the sample repository (not created)."""
    return local_root / SAMPLE_REPO / distro.component


@pytest.fixture
def package_file(tmp_path):
    """A built package file."""
    path = tmp_path / "build" / "mongodb-org_3.4.1_amd64.deb"
    path.parent.mkdir()
    path.write_bytes(b"!<arch>\ndebian-binary")
    return path


@pytest.fixture
def config_file(tmp_path):
    """TOML configuration file matching the sample distro."""
    path = tmp_path / "config.toml"
    path.write_text(
        f'''verify_placeholders = false

[templates.deb]
org = """{RELEASE_TEMPLATE}"""

[[distros]]
name = "ubuntu1604"
code_name = "xenial"
component = "multiverse"
edition = "org"
architectures = ["amd64", "arm64"]
bucket = "repo.example.org"
repos = ["{SAMPLE_REPO}"]

[notary]
url = "https://notary.example.com"
key_name = "server-3.4"
''',
        encoding="utf-8",
    )
    return path


@pytest.fixture
def make_runner():
    """Factory for recording runners with custom responses."""
    return RecordingRunner


@pytest.fixture
def mock_notary():
    """respx router for the sample notary service."""
    with respx.mock(base_url="https://notary.example.com", assert_all_called=False) as router:
        yield router
