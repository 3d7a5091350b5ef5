# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
SSOFETCH Command Line Interface.

This module provides the main CLI interface for SSOFETCH, a tool that
installs a private CLI binary released to a private S3 bucket. It handles
AWS SSO authentication, presigned URL generation, verified downloads and
installation into the Homebrew bin directory.

Main Commands:
    install: Authenticate, download the release and install the binary
    login: Create the private AWS profile and sign in with AWS SSO
    presign: Print a presigned URL for an S3 object
    fetch: Download and verify a single S3 object
    doctor: Check prerequisites
    config: Show configuration (show, path)
"""

from typing import Optional

import typer

from ssofetch import __version__
from ssofetch.commands import (
    config_app,
    doctor,
    fetch,
    install,
    login,
    presign,
)
from ssofetch.logging_utils import configure_logging


app = typer.Typer(no_args_is_help=True)


def _version_callback(value: bool):
    if value:
        typer.echo(f"ssofetch {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show AWS CLI commands and diagnostics"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """Install private CLI releases from S3 using AWS SSO."""
    configure_logging(verbose)


# Register commands from modules
app.command()(install)
app.command()(login)
app.command()(presign)
app.command()(fetch)
app.command()(doctor)
app.add_typer(config_app, name="config")


if __name__ == "__main__":
    app()
