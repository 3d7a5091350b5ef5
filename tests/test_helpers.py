"""Unit tests for helpers.py."""

import subprocess

import pytest

from ssofetch.exceptions import ExecutableNotFoundError, UnsupportedPlatformError
from ssofetch.helpers import aws_cli_version, detect_machine, get_app_path, remove_quarantine, run_command


def test_get_app_path_prefers_homebrew_prefix(tmp_path, monkeypatch):
    """Test the Homebrew-managed AWS CLI wins over PATH."""
    aws = tmp_path / "bin" / "aws"
    aws.parent.mkdir()
    aws.write_text("#!/bin/sh\n")
    aws.chmod(0o755)
    monkeypatch.setenv("HOMEBREW_PREFIX", str(tmp_path))

    assert get_app_path("aws") == str(aws)


def test_get_app_path_falls_back_to_path(mocker):
    mocker.patch("shutil.which", return_value="/usr/local/bin/aws")

    assert get_app_path("aws") == "/usr/local/bin/aws"


def test_get_app_path_not_found(mocker):
    mocker.patch("shutil.which", return_value=None)

    with pytest.raises(ExecutableNotFoundError, match="aws not found"):
        get_app_path("aws")


def test_get_app_path_rejects_blank_name():
    with pytest.raises(ValueError):
        get_app_path("  ")


def test_run_command_merges_environment(mocker):
    mock_run = mocker.patch(
        "subprocess.run",
        return_value=subprocess.CompletedProcess(args=[], returncode=0, stdout="ok", stderr=""),
    )

    result = run_command(["aws", "sts", "get-caller-identity"], env={"AWS_CONFIG_FILE": "/tmp/aws-config"})

    assert result.returncode == 0
    env = mock_run.call_args.kwargs["env"]
    assert env["AWS_CONFIG_FILE"] == "/tmp/aws-config"
    assert "PATH" in env


def test_aws_cli_version(mocker):
    mocker.patch(
        "subprocess.run",
        return_value=subprocess.CompletedProcess(
            args=[], returncode=0, stdout="aws-cli/2.15.0 Python/3.11.6 Darwin/23.1.0\n", stderr=""
        ),
    )

    assert aws_cli_version("/opt/homebrew/bin/aws") == "aws-cli/2.15.0 Python/3.11.6 Darwin/23.1.0"


def test_aws_cli_version_broken_cli(mocker):
    mocker.patch(
        "subprocess.run",
        return_value=subprocess.CompletedProcess(args=[], returncode=127, stdout="", stderr="boom"),
    )

    with pytest.raises(ExecutableNotFoundError, match="boom"):
        aws_cli_version("/opt/homebrew/bin/aws")


@pytest.mark.parametrize("raw,expected", [
    ("arm64", "arm64"),
    ("aarch64", "arm64"),
    ("x86_64", "x86_64"),
    ("AMD64", "x86_64"),
])
def test_detect_machine(raw, expected):
    assert detect_machine(raw) == expected


def test_detect_machine_unsupported():
    with pytest.raises(UnsupportedPlatformError, match="ppc64le"):
        detect_machine("ppc64le")


def test_remove_quarantine_only_on_macos(mocker, tmp_path):
    mocker.patch("platform.system", return_value="Linux")
    mock_run = mocker.patch("ssofetch.helpers.run_command")

    remove_quarantine(tmp_path / "geekbot-cli")

    mock_run.assert_not_called()


def test_remove_quarantine_on_macos(mocker, tmp_path):
    mocker.patch("platform.system", return_value="Darwin")
    mocker.patch("shutil.which", return_value="/usr/bin/xattr")
    mock_run = mocker.patch("ssofetch.helpers.run_command")

    remove_quarantine(tmp_path / "geekbot-cli")

    mock_run.assert_called_once_with(
        ["/usr/bin/xattr", "-d", "com.apple.quarantine", str(tmp_path / "geekbot-cli")]
    )
