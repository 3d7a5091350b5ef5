"""
SSOFETCH Configuration Commands.

Read-only views of the effective settings; edit ``settings.toml`` or set
``SSOFETCH_*`` environment variables to change them.
"""

import typer

from ssofetch.commands.login import load_config
from ssofetch.config import get_config_manager
from ssofetch.exceptions import SsofetchError
from ssofetch.ui import render_card, render_status

config_app = typer.Typer(help="Show SSOFETCH configuration")


@config_app.command("show")
def show():
    """Show the effective configuration."""
    try:
        config_manager, config = load_config()
    except SsofetchError as e:
        render_status(str(e), "error")
        raise typer.Exit(1)

    aws, artifact, install = config.aws, config.artifact, config.install
    render_card("AWS", [
        ("Profile", aws.profile),
        ("SSO session", aws.session_name),
        ("SSO start URL", aws.sso_start_url),
        ("SSO region", aws.sso_region),
        ("Account", aws.account_id),
        ("Role", aws.role_name),
        ("Region", aws.region),
    ])
    render_card("Artifact", [
        ("Name", artifact.name),
        ("Binary", artifact.binary_name),
        ("Version", artifact.version),
        ("URL", artifact.url),
        *((f"Target ({machine})", target) for machine, target in artifact.targets.items()),
        *((f"SHA256 ({machine})", checksum) for machine, checksum in artifact.sha256.items()),
    ])
    render_card("Install", [
        ("Bin dir", str(install.resolve_bin_dir())),
        ("Presign lifetime", f"{install.presign_expires_in}s"),
    ], footer=f"Settings file: {config_manager.settings_file}")


@config_app.command("path")
def path():
    """Print the location of the private AWS config file."""
    typer.echo(str(get_config_manager().aws_config_file))
