"""
gemha-settings — package root.

File: src/gemha_settings/__init__.py
Last updated: 2026-10-18

Purpose
- Resolve GeMHa settings documents into immutable, validated settings profiles.

Functional requirements
- Must not have side effects at import time (no document loading, no logging init).

Key interfaces
- ``build_profile`` / ``load_profile`` for every profile kind.
- Typed errors rooted at ``SettingsError``.
"""

from gemha_settings.profiles import (
    PROFILE_KINDS,
    build_profile,
    load_profile,
)
from gemha_settings.resolution.errors import (
    InvalidFieldFormat,
    InvalidFieldValue,
    MissingRequiredField,
    ProfileAssemblyError,
    SchemaViolation,
    SettingsError,
    SourceUnavailable,
)

__version__ = "1.0.0"

__all__ = [
    "InvalidFieldFormat",
    "InvalidFieldValue",
    "MissingRequiredField",
    "PROFILE_KINDS",
    "ProfileAssemblyError",
    "SchemaViolation",
    "SettingsError",
    "SourceUnavailable",
    "__version__",
    "build_profile",
    "load_profile",
]
