"""
SSOFETCH Prerequisite Checks.

Reports whether the AWS CLI, the private AWS config and the SSO session
are in place, without logging in or writing anything.
"""

import typer

from ssofetch.aws_utils import user_is_authenticated
from ssofetch.commands.login import load_config
from ssofetch.exceptions import SsofetchError
from ssofetch.helpers import aws_cli_version, detect_machine, get_app_path
from ssofetch.ui import render_status


def doctor():
    """Check the AWS CLI, the private AWS config and the SSO session."""
    healthy = True

    try:
        config_manager, config = load_config()
    except SsofetchError as e:
        render_status(str(e), "error")
        raise typer.Exit(1)

    try:
        aws_path = get_app_path("aws")
        render_status(f"AWS CLI found at {aws_path}: {aws_cli_version(aws_path)}", "success")
    except SsofetchError as e:
        render_status(str(e), "error", footer="Install it with: brew install awscli")
        healthy = False

    try:
        machine = detect_machine()
        target = config.artifact.targets.get(machine)
        if target:
            render_status(f"Platform {machine} -> {target}", "success")
        else:
            render_status(f"No artifact target configured for {machine}", "error")
            healthy = False
    except SsofetchError as e:
        render_status(str(e), "error")
        healthy = False

    config_file = config_manager.aws_config_file
    if config_file.exists():
        render_status(f"AWS config present at {config_file}", "success")
        if user_is_authenticated(config_file, config.aws.profile):
            render_status(f"SSO session valid for profile '{config.aws.profile}'", "success")
        else:
            render_status("No valid SSO session", "warning", footer="Run 'ssofetch login' to sign in.")
    else:
        render_status(f"AWS config not created yet ({config_file})", "warning",
                      footer="It is written on the first 'ssofetch login' or 'ssofetch install'.")

    if not healthy:
        raise typer.Exit(1)
