"""Resolution error hierarchy for file-backed environment values.

All errors inherit from FileEnvError, which is a pydantic-settings
SettingsError so failures surface through the normal settings
construction path. Each error carries the offending key and, where a
file was involved, the attempted path. File contents never appear in
error text.
"""

from enum import Enum
from typing import Any

from pydantic_settings import SettingsError


class FileEnvErrorKind(str, Enum):
    """Machine-readable error kinds for resolution failures."""

    CONFLICT = "CONFLICT"
    """Both a direct and a file-backed definition exist for one key."""

    FILE_ACCESS = "FILE_ACCESS"
    """The referenced file is missing, unreadable, or not a regular file."""

    ENCODING = "ENCODING"
    """The referenced file is not valid text in the expected encoding."""


class FileEnvError(SettingsError):
    """Base exception for file-backed environment resolution errors."""

    kind: FileEnvErrorKind

    def __init__(
        self,
        message: str,
        key: str,
        env_key: str | None = None,
        path: str | None = None,
    ) -> None:
        self.message = message
        self.key = key
        self.env_key = env_key
        self.path = path
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Structured view for log events and diagnostics."""
        return {
            "kind": self.kind.value,
            "key": self.key,
            "env_key": self.env_key,
            "path": self.path,
        }


class ConflictError(FileEnvError):
    """Raised when a key is defined more than once.

    ``other_key`` is the competing definition. It is a direct key unless
    ``other_is_indirect`` is set, which covers two suffixed spellings of one
    key and keys that would name a file reference (``BAR_FILE_FILE``).
    """

    kind = FileEnvErrorKind.CONFLICT

    def __init__(
        self,
        key: str,
        other_key: str,
        indirect_key: str,
        *,
        other_is_indirect: bool = False,
    ) -> None:
        self.other_key = other_key
        self.other_is_indirect = other_is_indirect
        self.indirect_key = indirect_key
        if other_is_indirect and other_key == key:
            message = (
                f"`{indirect_key}` would define `{key}`, which is itself a file "
                f"reference; remove `{indirect_key}`"
            )
        else:
            message = (
                f"Conflicting definitions for `{key}`: both `{other_key}` and "
                f"`{indirect_key}` are set; remove one of them"
            )
        super().__init__(message, key=key, env_key=indirect_key)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["other_key"] = self.other_key
        data["other_is_indirect"] = self.other_is_indirect
        return data


class FileAccessError(FileEnvError):
    """Raised when the file referenced by a suffixed key cannot be read."""

    kind = FileEnvErrorKind.FILE_ACCESS

    def __init__(self, key: str, env_key: str, path: str, reason: str) -> None:
        self.reason = reason
        super().__init__(
            f"Could not read `{path}` from `{env_key}` (for `{key}`): {reason}",
            key=key,
            env_key=env_key,
            path=path,
        )

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["reason"] = self.reason
        return data


class EncodingError(FileEnvError):
    """Raised when the referenced file is not valid text."""

    kind = FileEnvErrorKind.ENCODING

    def __init__(self, key: str, env_key: str, path: str, encoding: str) -> None:
        self.encoding = encoding
        super().__init__(
            f"File `{path}` from `{env_key}` (for `{key}`) is not valid "
            f"{encoding} text",
            key=key,
            env_key=env_key,
            path=path,
        )

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["encoding"] = self.encoding
        return data
