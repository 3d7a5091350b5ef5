"""
SSOFETCH Installer.

Picks the artifact for the host CPU and places the downloaded binary into
the bin directory. Archives (``.tar.gz``/``.tgz``) are unpacked and searched
for the binary by name; any other artifact is the binary itself.
"""

import logging
import shutil
import tarfile
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ssofetch.config import ArtifactSettings
from ssofetch.exceptions import SsofetchError, UnsupportedPlatformError
from ssofetch.helpers import detect_machine, remove_quarantine

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIXES = (".tar.gz", ".tgz")


@dataclass(frozen=True)
class ArtifactSpec:
    machine: str
    target: str
    url: str
    sha256: Optional[str]

    @property
    def filename(self) -> str:
        return self.url.split("?", 1)[0].rsplit("/", 1)[-1]


def select_artifact(
    artifact: ArtifactSettings,
    version: Optional[str] = None,
    machine: Optional[str] = None,
) -> ArtifactSpec:
    """Resolve URL and expected checksum for the host (or given) CPU."""
    key = detect_machine(machine)
    target = artifact.targets.get(key)
    if target is None:
        raise UnsupportedPlatformError(f"No artifact target configured for {key}")
    return ArtifactSpec(
        machine=key,
        target=target,
        url=artifact.url_for(target, version),
        sha256=artifact.sha256.get(key),
    )


def is_archive(path: Path) -> bool:
    return path.name.endswith(ARCHIVE_SUFFIXES)


def extract_binary(archive: Path, binary_name: str, workdir: Path) -> Path:
    """Unpack a tarball into ``workdir`` and return the file named ``binary_name``."""
    try:
        with tarfile.open(archive, "r:gz") as tar:
            tar.extractall(workdir, filter="data")
    except (tarfile.TarError, OSError) as e:
        raise SsofetchError(f"Could not unpack {archive.name}: {e}") from e

    matches = sorted(p for p in workdir.rglob(binary_name) if p.is_file())
    if not matches:
        raise SsofetchError(f"{binary_name} not found inside {archive.name}")
    # shallowest match wins, e.g. ./geekbot-cli over ./docs/geekbot-cli
    return min(matches, key=lambda p: len(p.relative_to(workdir).parts))


def install_binary(downloaded: Path, binary_name: str, bin_dir: Path) -> Path:
    """Copy the binary into ``bin_dir`` as ``binary_name`` with mode 0755."""
    with tempfile.TemporaryDirectory(prefix="ssofetch-") as tmp:
        source = downloaded
        if is_archive(downloaded):
            source = extract_binary(downloaded, binary_name, Path(tmp))

        remove_quarantine(source)
        target = bin_dir / binary_name
        try:
            bin_dir.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, target)
            target.chmod(0o755)
        except OSError as e:
            raise SsofetchError(f"Could not install {binary_name} into {bin_dir}: {e}") from e

    logger.debug("Installed %s", target)
    return target
