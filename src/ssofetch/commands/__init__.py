"""
SSOFETCH Commands Package.

This package contains all SSOFETCH CLI commands organized as separate modules
for better maintainability and modularity.
"""

from .login import login, presign, fetch
from .install import install
from .doctor import doctor
from .config import config_app

__all__ = ["login", "presign", "fetch", "install", "doctor", "config_app"]
