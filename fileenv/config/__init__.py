"""Configuration for the file-backed environment resolver.

Configuration is code-level only:

    from fileenv.config import ResolverConfig

    config = ResolverConfig(suffix="_PATH")
"""

from fileenv.config.models import DEFAULT_SUFFIX, LoggingConfig, ResolverConfig

__all__ = ["DEFAULT_SUFFIX", "LoggingConfig", "ResolverConfig"]
