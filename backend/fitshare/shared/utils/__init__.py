"""
Utilities Package

Common utility functions and helpers.

Contents:
=========
- security: Password hashing and JWT management
- files: Object key generation and public file URLs

Usage:
======
    from fitshare.shared.utils.security import SecurityUtils
    from fitshare.shared.utils.files import build_file_url
"""

from fitshare.shared.utils.security import SecurityUtils
from fitshare.shared.utils.files import (
    build_file_url,
    file_extension,
    generate_object_key,
    is_safe_key,
)

__all__ = [
    "SecurityUtils",
    "build_file_url",
    "file_extension",
    "generate_object_key",
    "is_safe_key",
]
