"""
SSOFETCH Configuration.

Settings are resolved from built-in defaults, an optional read-only
``settings.toml`` in the tool directory, and ``SSOFETCH_*`` environment
variables, in increasing order of precedence. The only file this tool ever
writes is the private AWS config next to that settings file.
"""

import os
import re
import tomllib
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from ssofetch.exceptions import ConfigError


PLACEHOLDER_PREFIX = "PLACEHOLDER"
_SHA256_RE = re.compile(r"^[0-9a-f]{64}$")

# env var -> (section, field)
ENV_OVERRIDES = {
    "SSOFETCH_PROFILE": ("aws", "profile"),
    "SSOFETCH_SSO_SESSION": ("aws", "session_name"),
    "SSOFETCH_SSO_START_URL": ("aws", "sso_start_url"),
    "SSOFETCH_SSO_REGION": ("aws", "sso_region"),
    "SSOFETCH_ACCOUNT_ID": ("aws", "account_id"),
    "SSOFETCH_ROLE_NAME": ("aws", "role_name"),
    "SSOFETCH_REGION": ("aws", "region"),
    "SSOFETCH_ARTIFACT_VERSION": ("artifact", "version"),
    "SSOFETCH_ARTIFACT_URL": ("artifact", "url"),
    "SSOFETCH_BIN_DIR": ("install", "bin_dir"),
    "SSOFETCH_PRESIGN_EXPIRES": ("install", "presign_expires_in"),
}


def is_placeholder(checksum: Optional[str]) -> bool:
    """Return True when a checksum is unset or still a placeholder value."""
    return not checksum or checksum.startswith(PLACEHOLDER_PREFIX)


class AwsSettings(BaseModel):
    """SSO session and profile written to the private AWS config file."""

    profile: str = "geekbot-cli"
    session_name: str = "witco"
    sso_start_url: str = "https://witco.awsapps.com/start"
    sso_region: str = "us-east-2"
    registration_scopes: str = "sso:account:access"
    account_id: str = "558529356944"
    role_name: str = "infra-developer"
    region: str = "us-east-1"
    duration_seconds: int = 43200
    output_format: str = "json"

    @field_validator("account_id")
    @classmethod
    def _check_account_id(cls, value: str) -> str:
        if not re.fullmatch(r"\d{12}", value):
            raise ValueError(f"AWS account id must be 12 digits, got {value!r}")
        return value


class ArtifactSettings(BaseModel):
    """Which object to fetch from the release bucket and how to check it."""

    name: str = "Geekbot CLI"
    binary_name: str = "geekbot-cli"
    version: str = "0.1.0"
    url: str = (
        "https://mgt-wc-geekbot-cli-releases.s3.us-east-1.amazonaws.com/"
        "v{version}/geekbot-v{version}-{target}.tar.gz"
    )
    targets: dict[str, str] = Field(default_factory=lambda: {
        "arm64": "aarch64-apple-darwin",
        "x86_64": "x86_64-apple-darwin",
    })
    sha256: dict[str, str] = Field(default_factory=lambda: {
        "arm64": "PLACEHOLDER_SHA256_ARM64",
        "x86_64": "PLACEHOLDER_SHA256_AMD64",
    })

    @field_validator("sha256")
    @classmethod
    def _check_checksums(cls, value: dict[str, str]) -> dict[str, str]:
        normalized = {}
        for machine, checksum in value.items():
            if not is_placeholder(checksum):
                checksum = checksum.strip().lower()
                if not _SHA256_RE.match(checksum):
                    raise ValueError(f"Invalid sha256 for {machine}: {checksum!r}")
            normalized[machine] = checksum
        return normalized

    def url_for(self, target: str, version: Optional[str] = None) -> str:
        """Render the artifact URL template for a target triple."""
        return self.url.format(version=version or self.version, target=target)


class InstallSettings(BaseModel):
    """Local install behaviour."""

    bin_dir: Optional[str] = None
    presign_expires_in: int = 900
    chunk_size: int = 1024 * 64
    timeout: int = 60

    @field_validator("presign_expires_in", "chunk_size", "timeout")
    @classmethod
    def _check_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive integer")
        return value

    def resolve_bin_dir(self) -> Path:
        """Return the directory the binary is installed into."""
        if self.bin_dir:
            return Path(self.bin_dir).expanduser()
        prefix = os.environ.get("HOMEBREW_PREFIX")
        if prefix:
            return Path(prefix) / "bin"
        return Path.home() / ".local" / "bin"


class SsofetchConfig(BaseModel):
    """Top-level settings object."""

    aws: AwsSettings = Field(default_factory=AwsSettings)
    artifact: ArtifactSettings = Field(default_factory=ArtifactSettings)
    install: InstallSettings = Field(default_factory=InstallSettings)


class ConfigManager:
    """Loads settings and knows where the tool-private files live."""

    SETTINGS_FILE = "settings.toml"
    AWS_CONFIG_FILE = "aws-config"

    def __init__(self, config_dir: Optional[Path] = None, slug: str = "geekbot"):
        if config_dir is None:
            home = os.environ.get("SSOFETCH_HOME")
            config_dir = Path(home) if home else Path.home() / f".homebrew-{slug}"
        self.config_dir = Path(config_dir).expanduser()
        self._config: Optional[SsofetchConfig] = None

    @property
    def settings_file(self) -> Path:
        return self.config_dir / self.SETTINGS_FILE

    @property
    def aws_config_file(self) -> Path:
        return self.config_dir / self.AWS_CONFIG_FILE

    def _read_settings_file(self) -> dict[str, Any]:
        if not self.settings_file.exists():
            return {}
        try:
            with open(self.settings_file, "rb") as f:
                return tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Could not read {self.settings_file}: {e}") from e

    @staticmethod
    def _apply_env(data: dict[str, Any]) -> dict[str, Any]:
        for env_name, (section, field) in ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value:
                data.setdefault(section, {})[field] = value
        return data

    def load(self, reload: bool = False) -> SsofetchConfig:
        """Return the effective configuration, cached after the first call."""
        if self._config is not None and not reload:
            return self._config

        data = self._apply_env(self._read_settings_file())
        try:
            self._config = SsofetchConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e
        return self._config


_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Return the process-wide configuration manager."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager
