"""Environment configuration values that may live in files.

Any variable ending in ``_FILE`` names a file whose contents become the
value of the variable without the suffix, the convention used for Docker
and Kubernetes secrets.

Usage:
    from fileenv import FileEnvResolver

    resolver = FileEnvResolver()
    values = resolver.resolve({"foo": "abc123", "bar_FILE": "/run/secrets/bar"})

With pydantic-settings, wrap the env source in FileEnvSettingsSource.
"""

from fileenv.config.models import DEFAULT_SUFFIX, LoggingConfig, ResolverConfig
from fileenv.errors import (
    ConflictError,
    EncodingError,
    FileAccessError,
    FileEnvError,
    FileEnvErrorKind,
)
from fileenv.resolver import FileEnvResolver, strip_trailing_newline
from fileenv.settings_source import FileEnvSettingsSource
from fileenv.sources import EntrySource, EnvironEntrySource, MappingEntrySource

__all__ = [
    "DEFAULT_SUFFIX",
    "ConflictError",
    "EncodingError",
    "EntrySource",
    "EnvironEntrySource",
    "FileAccessError",
    "FileEnvError",
    "FileEnvErrorKind",
    "FileEnvResolver",
    "FileEnvSettingsSource",
    "LoggingConfig",
    "MappingEntrySource",
    "ResolverConfig",
    "strip_trailing_newline",
]
