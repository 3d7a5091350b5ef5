"""
SSOFETCH Shared Utility Functions.

This module contains utility functions used across multiple CLI commands
and modules to avoid circular imports.
"""

import logging
import os
import platform
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from ssofetch.exceptions import ExecutableNotFoundError, UnsupportedPlatformError

logger = logging.getLogger(__name__)

# platform.machine() spellings -> artifact table keys
MACHINE_ALIASES = {
    "arm64": "arm64",
    "aarch64": "arm64",
    "x86_64": "x86_64",
    "amd64": "x86_64",
}


def get_app_path(exe_name: str = "aws") -> str:
    """Find the full path to an executable.

    Homebrew installs its own ``awscli`` under ``$HOMEBREW_PREFIX/bin``; that
    copy wins over whatever else is on PATH.

    Args:
        exe_name: Name of the executable to find

    Returns:
        Full path to the executable

    Raises:
        ExecutableNotFoundError: If executable is not found
        ValueError: If executable name is invalid
    """
    if not exe_name or not exe_name.strip():
        raise ValueError(f"Invalid executable name provided: {exe_name!r}")

    prefix = os.environ.get("HOMEBREW_PREFIX")
    if prefix:
        candidate = Path(prefix) / "bin" / exe_name
        if candidate.is_file() and os.access(candidate, os.X_OK):
            logger.debug("Using %s from HOMEBREW_PREFIX", candidate)
            return str(candidate)

    path = shutil.which(exe_name)
    if path is None:
        raise ExecutableNotFoundError(
            f"{exe_name} not found in system PATH. Please ensure it is installed and in your PATH."
        )
    logger.debug("Using executable: %s", path)
    return path


def run_command(
    argv: Sequence[str],
    env: Optional[dict[str, str]] = None,
    capture: bool = True,
) -> subprocess.CompletedProcess:
    """Run an external command without raising on a non-zero exit.

    With ``capture=False`` the child inherits the terminal, which interactive
    commands such as ``aws sso login`` need.
    """
    argv = list(argv)
    logger.debug("Running: %s", " ".join(shlex.quote(a) for a in argv))

    merged_env = os.environ.copy()
    if env:
        merged_env.update(env)

    if capture:
        result = subprocess.run(argv, env=merged_env, capture_output=True, text=True, check=False)
    else:
        result = subprocess.run(argv, env=merged_env, check=False)

    logger.debug("Exit code: %s", result.returncode)
    output = ((result.stdout or "") + (result.stderr or "")).strip() if capture else ""
    if output:
        logger.debug("Output: %s", output)
    return result


def aws_cli_version(aws_path: str) -> str:
    """Return the ``aws --version`` banner, e.g. ``aws-cli/2.15.0 Python/3.11.6 ...``."""
    result = run_command([aws_path, "--version"])
    if result.returncode != 0:
        raise ExecutableNotFoundError(f"{aws_path} is not a working AWS CLI: {result.stderr.strip()}")
    # AWS CLI v1 printed its version on stderr
    return (result.stdout or result.stderr).strip()


def detect_machine(machine: Optional[str] = None) -> str:
    """Normalize the host CPU name to ``arm64`` or ``x86_64``."""
    raw = (machine or platform.machine()).lower()
    try:
        return MACHINE_ALIASES[raw]
    except KeyError:
        raise UnsupportedPlatformError(f"No artifact is published for CPU architecture {raw!r}") from None


def remove_quarantine(path: Path) -> None:
    """Strip the macOS quarantine attribute from a downloaded file.

    Best effort: the attribute is often absent, and ``xattr`` only exists on macOS.
    """
    if platform.system() != "Darwin":
        return
    xattr = shutil.which("xattr")
    if xattr is None:
        return
    run_command([xattr, "-d", "com.apple.quarantine", str(path)])
