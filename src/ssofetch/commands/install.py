"""
SSOFETCH Install Command.

Runs the whole authenticate-then-fetch sequence and places the binary in
the bin directory.
"""

import tempfile
from pathlib import Path
from typing import Optional

import typer

from ssofetch.aws_utils import generate_presigned_url
from ssofetch.commands.login import load_config, prepare_session
from ssofetch.config import is_placeholder
from ssofetch.download import download_artifact, verify_checksum
from ssofetch.exceptions import SsofetchError
from ssofetch.installer import install_binary, select_artifact
from ssofetch.ui import render_banner, render_status


def install(
    version: Optional[str] = typer.Option(None, "--version", help="Release to install (default: from config)"),
    bin_dir: Optional[Path] = typer.Option(None, "--bin-dir", "-b", help="Install directory (default: $HOMEBREW_PREFIX/bin)"),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="AWS profile to use"),
    confirm: bool = typer.Option(False, "--yes", "-y", help="Overwrite an existing binary without asking"),
):
    """Authenticate with AWS SSO, download the release from S3 and install it."""
    try:
        config_manager, config = load_config(profile)
        artifact = config.artifact
        release = version or artifact.version
        spec = select_artifact(artifact, version=release)
        target_dir = bin_dir or config.install.resolve_bin_dir()
        destination = target_dir / artifact.binary_name

        render_banner(
            f"Installing {artifact.name} v{release}",
            subtitle=spec.url,
            bullets=[f"Profile: {config.aws.profile}", f"Destination: {destination}"],
        )

        if destination.exists() and not confirm:
            if not typer.confirm(f"{destination} already exists. Replace it?"):
                render_status("Install cancelled.", "warning")
                raise typer.Exit(0)

        prepare_session(config_manager, config, show_version=True)

        presigned = generate_presigned_url(
            config_manager.aws_config_file,
            config.aws.profile,
            spec.url,
            expires_in=config.install.presign_expires_in,
            default_region=config.aws.region,
        )

        with tempfile.TemporaryDirectory(prefix="ssofetch-") as tmp:
            downloaded = download_artifact(
                presigned,
                Path(tmp) / spec.filename,
                chunk_size=config.install.chunk_size,
                timeout=config.install.timeout,
            )
            if is_placeholder(spec.sha256):
                render_status(f"No pinned SHA256 for {spec.machine}; skipping verification", "warning")
            else:
                render_status(f"SHA256 verified: {verify_checksum(downloaded, spec.sha256)}", "success")

            installed = install_binary(downloaded, artifact.binary_name, target_dir)
    except SsofetchError as e:
        render_status(str(e), "error")
        raise typer.Exit(1)

    render_status(f"Successfully installed {artifact.binary_name} v{release} to {installed}", "success")
    typer.echo(f"Run '{artifact.binary_name} --help' to get started")
