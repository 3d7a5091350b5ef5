# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
SSOFETCH - AWS SSO authenticated installer for private S3 releases.

A Python CLI tool that signs in to AWS IAM Identity Center through the AWS
CLI, presigns release artifacts stored in a private S3 bucket, downloads
them with checksum verification and installs the binary.
"""

__version__ = "0.1.0"
