"""Unit tests for installer.py."""

import io
import stat
import tarfile

import pytest

from ssofetch.config import ArtifactSettings
from ssofetch.exceptions import SsofetchError, UnsupportedPlatformError
from ssofetch.installer import install_binary, select_artifact

BINARY = b"#!/bin/sh\necho geekbot\n"


def _make_tarball(path, members):
    with tarfile.open(path, "w:gz") as tar:
        for name, data in members.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            tar.addfile(info, io.BytesIO(data))
    return path


@pytest.fixture(autouse=True)
def no_xattr(mocker):
    return mocker.patch("ssofetch.installer.remove_quarantine")


def test_select_artifact_for_apple_silicon():
    spec = select_artifact(ArtifactSettings(), machine="arm64")

    assert spec.machine == "arm64"
    assert spec.target == "aarch64-apple-darwin"
    assert spec.url.endswith("/v0.1.0/geekbot-v0.1.0-aarch64-apple-darwin.tar.gz")
    assert spec.filename == "geekbot-v0.1.0-aarch64-apple-darwin.tar.gz"
    assert spec.sha256 == "PLACEHOLDER_SHA256_ARM64"


def test_select_artifact_for_intel_with_version():
    spec = select_artifact(ArtifactSettings(), version="0.2.0", machine="AMD64")

    assert spec.machine == "x86_64"
    assert spec.url.endswith("/v0.2.0/geekbot-v0.2.0-x86_64-apple-darwin.tar.gz")


def test_select_artifact_unsupported_cpu():
    with pytest.raises(UnsupportedPlatformError):
        select_artifact(ArtifactSettings(), machine="sparc64")


def test_select_artifact_missing_target():
    with pytest.raises(UnsupportedPlatformError, match="x86_64"):
        select_artifact(ArtifactSettings(targets={"arm64": "darwin-arm64"}), machine="x86_64")


def test_install_raw_binary(tmp_path, no_xattr):
    """Test a bare binary is copied and made executable."""
    downloaded = tmp_path / "witco-cli-darwin-arm64"
    downloaded.write_bytes(BINARY)
    bin_dir = tmp_path / "bin"

    installed = install_binary(downloaded, "witco-cli", bin_dir)

    assert installed == bin_dir / "witco-cli"
    assert installed.read_bytes() == BINARY
    assert stat.S_IMODE(installed.stat().st_mode) == 0o755
    no_xattr.assert_called_once_with(downloaded)


def test_install_from_tarball(tmp_path):
    """Test the shallowest file named like the binary is taken from the archive."""
    archive = _make_tarball(tmp_path / "geekbot-v0.1.0-aarch64-apple-darwin.tar.gz", {
        "geekbot-v0.1.0/docs/geekbot-cli/README": b"docs",
        "geekbot-v0.1.0/geekbot-cli": BINARY,
        "geekbot-v0.1.0/LICENSE": b"MIT",
    })

    installed = install_binary(archive, "geekbot-cli", tmp_path / "bin")

    assert installed.read_bytes() == BINARY


def test_install_existing_binary_is_replaced(tmp_path):
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    (bin_dir / "geekbot-cli").write_text("old placeholder")
    downloaded = tmp_path / "geekbot-cli"
    downloaded.write_bytes(BINARY)

    assert install_binary(downloaded, "geekbot-cli", bin_dir).read_bytes() == BINARY


def test_install_tarball_without_binary(tmp_path):
    archive = _make_tarball(tmp_path / "release.tar.gz", {"README": b"nothing here"})

    with pytest.raises(SsofetchError, match="geekbot-cli not found"):
        install_binary(archive, "geekbot-cli", tmp_path / "bin")


def test_install_corrupt_tarball(tmp_path):
    archive = tmp_path / "release.tgz"
    archive.write_bytes(b"not gzip")

    with pytest.raises(SsofetchError, match="Could not unpack"):
        install_binary(archive, "geekbot-cli", tmp_path / "bin")


def test_install_into_unwritable_location(tmp_path):
    """Test filesystem errors surface as SsofetchError."""
    downloaded = tmp_path / "geekbot-cli"
    downloaded.write_bytes(BINARY)
    blocker = tmp_path / "blocker"
    blocker.write_text("plain file")

    with pytest.raises(SsofetchError, match="Could not install geekbot-cli"):
        install_binary(downloaded, "geekbot-cli", blocker / "bin")
