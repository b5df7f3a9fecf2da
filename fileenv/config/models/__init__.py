"""Configuration model exports.

    from fileenv.config.models import LoggingConfig, ResolverConfig
"""

from fileenv.config.models.observability import LogFormat, LoggingConfig, LogLevel
from fileenv.config.models.resolver import DEFAULT_SUFFIX, ResolverConfig

__all__ = [
    "DEFAULT_SUFFIX",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "ResolverConfig",
]
