"""Shared fixtures for SSOFETCH tests."""

import pytest

from ssofetch import config as config_module
from ssofetch.config import ENV_OVERRIDES, ConfigManager


STATIC_PROFILE = """\
[profile ssofetch-test]
aws_access_key_id = testing
aws_secret_access_key = testing
region = us-east-1
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep tests away from the real ~/.aws and the caller's overrides."""
    for name in ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("HOMEBREW_PREFIX", raising=False)
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    monkeypatch.setenv("SSOFETCH_HOME", str(tmp_path / "ssofetch-home"))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "no-credentials"))


@pytest.fixture
def config_manager(tmp_path, monkeypatch):
    """A config manager rooted in a temporary directory, used by every command."""
    manager = ConfigManager(config_dir=tmp_path / "ssofetch-home")
    monkeypatch.setattr(config_module, "_config_manager", manager)
    return manager


@pytest.fixture
def static_aws_config(tmp_path):
    """A private AWS config holding a profile with static test keys."""
    path = tmp_path / "aws-config"
    path.write_text(STATIC_PROFILE)
    return path
