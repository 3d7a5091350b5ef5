# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
AWS utilities for SSOFETCH.

This module provides the AWS side of the authenticate-then-fetch sequence:
writing the tool-private SSO profile, checking and refreshing the SSO
session, and turning S3 object URLs into short-lived presigned URLs.

Functions:
    ensure_aws_config: Write the private AWS config file if it is absent
    user_is_authenticated: Check if the profile has valid AWS credentials
    ensure_authenticated: Log in through ``aws sso login`` when needed
    parse_s3_url: Split an S3 URL into bucket, key and region
    generate_presigned_url: Presign an S3 object URL for download
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import unquote

import boto3
import botocore.session
import typer
from botocore.config import Config
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    NoCredentialsError,
    ProfileNotFound,
    TokenRetrievalError,
    UnauthorizedSSOTokenError,
)

from ssofetch.config import AwsSettings
from ssofetch.exceptions import AuthenticationError, InvalidS3UrlError, PresignError, SsofetchError
from ssofetch.helpers import run_command

logger = logging.getLogger(__name__)

_REGIONAL_URL = re.compile(r"^https://([^.]+)\.s3\.([^.]+)\.amazonaws\.com/(.+)$")
_GLOBAL_URL = re.compile(r"^https://([^.]+)\.s3\.amazonaws\.com/(.+)$")
_S3_URI = re.compile(r"^s3://([^/]+)/(.+)$")


@dataclass(frozen=True)
class S3Location:
    bucket: str
    key: str
    region: Optional[str] = None

    @property
    def uri(self) -> str:
        return f"s3://{self.bucket}/{self.key}"


def render_aws_config(aws: AwsSettings) -> str:
    """Render the ``sso-session`` and ``profile`` sections for the AWS CLI."""
    return (
        f"[sso-session {aws.session_name}]\n"
        f"sso_start_url = {aws.sso_start_url}\n"
        f"sso_region = {aws.sso_region}\n"
        f"sso_registration_scopes = {aws.registration_scopes}\n"
        f"\n"
        f"[profile {aws.profile}]\n"
        f"sso_account_id = {aws.account_id}\n"
        f"sso_session = {aws.session_name}\n"
        f"sso_role_name = {aws.role_name}\n"
        f"region = {aws.region}\n"
        f"duration_seconds = {aws.duration_seconds}\n"
        f"output = {aws.output_format}\n"
    )


def ensure_aws_config(config_file: Path, aws: AwsSettings) -> bool:
    """
    Write the SSO profile to a tool-private AWS config file.

    The user's own ``~/.aws/config`` is never touched, and an existing file
    is left exactly as it is.

    Args:
        config_file: Location of the private AWS config file
        aws: Profile and SSO session settings

    Returns:
        bool: True if the file was created, False if it already existed
    """
    if config_file.exists():
        logger.debug("AWS config already exists at %s", config_file)
        return False

    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_file.write_text(render_aws_config(aws))
    except OSError as e:
        raise SsofetchError(f"Could not write AWS config to {config_file}: {e}") from e
    logger.debug("Created AWS config at %s", config_file)
    return True


def aws_cli_env(config_file: Path) -> dict[str, str]:
    """Environment that points the AWS CLI at the private config file."""
    return {"AWS_CONFIG_FILE": str(config_file)}


def create_session(config_file: Path, profile: str, region: Optional[str] = None) -> boto3.Session:
    """Build a boto3 session that reads the private config file instead of ``~/.aws/config``."""
    core = botocore.session.Session()
    core.set_config_variable("config_file", str(config_file))
    return boto3.Session(botocore_session=core, profile_name=profile, region_name=region)


def user_is_authenticated(config_file: Path, profile: str) -> bool:
    """Check if user is authenticated with AWS using the specified profile."""
    try:
        session = create_session(config_file, profile)
        sts = session.client("sts")
        ident = sts.get_caller_identity()
        logger.debug("Authenticated as %s in account %s", ident.get("Arn"), ident.get("Account"))
        return True
    except ProfileNotFound:
        typer.secho(f"Profile '{profile}' is not defined in {config_file}.", fg=typer.colors.YELLOW)
        return False
    except (NoCredentialsError, TokenRetrievalError, UnauthorizedSSOTokenError):
        typer.secho("No valid SSO session found.", fg=typer.colors.YELLOW)
        return False
    except ClientError as e:
        error_code = e.response["Error"]["Code"]
        if error_code in ("UnauthorizedSSOToken", "ExpiredToken", "InvalidClientTokenId"):
            typer.secho("Credentials expired or invalid.", fg=typer.colors.YELLOW)
        else:
            typer.secho(f"Error getting token: {e}", fg=typer.colors.YELLOW)
        return False
    except BotoCoreError as e:
        typer.secho(f"Unexpected error during authentication: {e}", fg=typer.colors.YELLOW)
        return False


def sso_login(aws_path: str, config_file: Path, profile: str) -> bool:
    """Run the interactive ``aws sso login`` flow. Opens the user's browser."""
    result = run_command(
        [aws_path, "sso", "login", "--profile", profile],
        env=aws_cli_env(config_file),
        capture=False,
    )
    return result.returncode == 0


def ensure_authenticated(aws_path: str, config_file: Path, profile: str) -> bool:
    """
    Make sure the profile holds a valid SSO session, logging in if needed.

    Args:
        aws_path: Path to the AWS CLI executable
        config_file: Location of the private AWS config file
        profile: AWS profile name to authenticate

    Returns:
        bool: True if a login was performed, False if the session was already valid

    Raises:
        AuthenticationError: If the login fails or the new session does not verify
    """
    if user_is_authenticated(config_file, profile):
        return False

    typer.secho("AWS SSO authentication required. This will open your browser...", fg=typer.colors.BLUE)
    if not sso_login(aws_path, config_file, profile):
        raise AuthenticationError("AWS SSO login failed")

    if not user_is_authenticated(config_file, profile):
        raise AuthenticationError("AWS SSO authentication verification failed")
    return True


def parse_s3_url(url: str) -> S3Location:
    """
    Split an S3 object URL into its parts.

    Accepts ``https://<bucket>.s3.<region>.amazonaws.com/<key>``,
    ``https://<bucket>.s3.amazonaws.com/<key>`` and ``s3://<bucket>/<key>``.

    Raises:
        InvalidS3UrlError: If the URL matches none of these forms
    """
    url = url.strip()
    match = _REGIONAL_URL.match(url)
    if match:
        bucket, region, key = match.groups()
        return S3Location(bucket=bucket, key=unquote(key), region=region)

    for pattern in (_GLOBAL_URL, _S3_URI):
        match = pattern.match(url)
        if match:
            bucket, key = match.groups()
            return S3Location(bucket=bucket, key=unquote(key))

    raise InvalidS3UrlError(f"Invalid S3 URL format: {url}")


def generate_presigned_url(
    config_file: Path,
    profile: str,
    url: str,
    expires_in: int = 900,
    default_region: Optional[str] = None,
) -> str:
    """
    Generate a presigned GET URL for an S3 object.

    Args:
        config_file: Location of the private AWS config file
        profile: AWS profile whose credentials sign the URL
        url: S3 object URL in any form ``parse_s3_url`` accepts
        expires_in: URL lifetime in seconds (default: 900)
        default_region: Region used when the URL does not name one

    Returns:
        The presigned HTTPS URL

    Raises:
        InvalidS3UrlError: If the URL is not an S3 object URL
        PresignError: If signing fails
    """
    location = parse_s3_url(url)
    region = location.region or default_region
    try:
        session = create_session(config_file, profile, region=region)
        s3 = session.client("s3", config=Config(signature_version="s3v4"))
        presigned = s3.generate_presigned_url(
            "get_object",
            Params={"Bucket": location.bucket, "Key": location.key},
            ExpiresIn=expires_in,
        )
    except (BotoCoreError, ClientError) as e:
        raise PresignError(f"Failed to generate presigned URL: {e}") from e

    logger.debug("Presigned %s for %ss", location.uri, expires_in)
    return presigned
