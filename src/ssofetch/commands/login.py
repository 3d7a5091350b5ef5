"""
SSOFETCH Authentication and Fetch Commands.

This module provides the commands that establish the AWS SSO session and
fetch single objects from the private release bucket.
"""

from pathlib import Path
from typing import Optional

import typer

from ssofetch.aws_utils import (
    ensure_authenticated,
    ensure_aws_config,
    generate_presigned_url,
    parse_s3_url,
)
from ssofetch.config import ConfigManager, SsofetchConfig, get_config_manager
from ssofetch.download import download_artifact, verify_checksum
from ssofetch.exceptions import SsofetchError
from ssofetch.helpers import aws_cli_version, get_app_path
from ssofetch.ui import render_status


def load_config(profile: Optional[str] = None) -> tuple[ConfigManager, SsofetchConfig]:
    """Load configuration and apply the ``--profile`` override."""
    config_manager = get_config_manager()
    config = config_manager.load()
    if profile is not None:
        config = config.model_copy(deep=True)
        config.aws.profile = profile
    return config_manager, config


def prepare_session(
    config_manager: ConfigManager,
    config: SsofetchConfig,
    show_version: bool = False,
) -> str:
    """Ensure the private AWS config exists and the SSO session is valid.

    With ``show_version`` the AWS CLI version is reported before anything
    is written. Returns the path of the AWS CLI used for login.
    """
    aws_path = get_app_path("aws")
    if show_version:
        render_status(f"AWS CLI: {aws_cli_version(aws_path)}", "success")
    config_file = config_manager.aws_config_file

    if ensure_aws_config(config_file, config.aws):
        render_status(f"AWS config created at {config_file}", "success")
    else:
        render_status(f"AWS config already exists at {config_file}")

    if ensure_authenticated(aws_path, config_file, config.aws.profile):
        render_status("AWS SSO authentication successful", "success")
    else:
        render_status("Already authenticated with AWS SSO", "success")
    return aws_path


def login(
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="AWS profile to use"),
):
    """Create the private AWS profile if needed and sign in with AWS SSO."""
    try:
        config_manager, config = load_config(profile)
        prepare_session(config_manager, config)
    except SsofetchError as e:
        render_status(str(e), "error")
        raise typer.Exit(1)


def presign(
    url: str = typer.Argument(..., help="S3 object URL (https://<bucket>.s3.<region>.amazonaws.com/<key> or s3://<bucket>/<key>)"),
    expires_in: Optional[int] = typer.Option(None, "--expires-in", "-e", min=1, help="URL lifetime in seconds"),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="AWS profile to use"),
):
    """Print a presigned download URL for a private S3 object."""
    try:
        config_manager, config = load_config(profile)
        parse_s3_url(url)
        prepare_session(config_manager, config)
        presigned = generate_presigned_url(
            config_manager.aws_config_file,
            config.aws.profile,
            url,
            expires_in=expires_in or config.install.presign_expires_in,
            default_region=config.aws.region,
        )
    except SsofetchError as e:
        render_status(str(e), "error")
        raise typer.Exit(1)

    typer.echo(presigned)


def fetch(
    url: str = typer.Argument(..., help="S3 object URL to download"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Destination file (default: object name in the current directory)"),
    sha256: Optional[str] = typer.Option(None, "--sha256", help="Expected SHA256 of the object"),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="AWS profile to use"),
):
    """Download a private S3 object through a presigned URL and verify it."""
    try:
        config_manager, config = load_config(profile)
        location = parse_s3_url(url)
        destination = output or Path.cwd() / Path(location.key).name
        prepare_session(config_manager, config)

        presigned = generate_presigned_url(
            config_manager.aws_config_file,
            config.aws.profile,
            url,
            expires_in=config.install.presign_expires_in,
            default_region=config.aws.region,
        )
        download_artifact(
            presigned,
            destination,
            chunk_size=config.install.chunk_size,
            timeout=config.install.timeout,
        )
        try:
            digest = verify_checksum(destination, sha256)
        except SsofetchError:
            destination.unlink(missing_ok=True)
            raise
    except SsofetchError as e:
        render_status(str(e), "error")
        raise typer.Exit(1)

    if digest:
        render_status(f"SHA256 verified: {digest}", "success")
    render_status(f"Saved {location.uri} to {destination}", "success")
