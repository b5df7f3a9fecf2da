"""Observability helpers: structured logging with secret redaction."""

from fileenv.observability.logging import (
    SecretRedactor,
    get_logger,
    setup_logging,
    setup_logging_from_config,
)

__all__ = [
    "SecretRedactor",
    "get_logger",
    "setup_logging",
    "setup_logging_from_config",
]
