"""Resolution of file-backed environment values.

A key ending in the suffix marker (``_FILE`` by default) holds a path
instead of a value. The resolver reads that file and emits its contents
under the key without the suffix, the convention used for Docker and
Kubernetes secret mounts:

    API_KEY=abc123            ->  api_key = "abc123"
    API_KEY_FILE=/run/key     ->  api_key = <contents of /run/key>

Resolution is all-or-nothing. A key defined both ways is a conflict,
never settled by precedence.
"""

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING

from fileenv.config.models import DEFAULT_SUFFIX, ResolverConfig
from fileenv.errors import ConflictError, EncodingError, FileAccessError
from fileenv.observability.logging import get_logger

if TYPE_CHECKING:
    from fileenv.sources import EntrySource

logger = get_logger(__name__)

Entries = Mapping[str, str] | Iterable[tuple[str, str]]


def strip_trailing_newline(text: str) -> str:
    """Remove exactly one trailing line terminator (``\\r\\n``, ``\\n`` or ``\\r``)."""
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith(("\n", "\r")):
        return text[:-1]
    return text


class FileEnvResolver:
    """Rewrites suffixed entries into the contents of the files they name.

    Stateless apart from its configuration; every call to ``resolve`` is an
    independent pass over the entries it is given.
    """

    def __init__(
        self,
        suffix: str = DEFAULT_SUFFIX,
        *,
        case_sensitive: bool = False,
        encoding: str = "utf-8",
    ) -> None:
        config = ResolverConfig(
            suffix=suffix, case_sensitive=case_sensitive, encoding=encoding
        )
        self._config = config
        self._suffix = config.suffix if config.case_sensitive else config.suffix.lower()

    @classmethod
    def from_config(cls, config: ResolverConfig) -> "FileEnvResolver":
        return cls(
            config.suffix,
            case_sensitive=config.case_sensitive,
            encoding=config.encoding,
        )

    @property
    def config(self) -> ResolverConfig:
        return self._config

    @property
    def suffix(self) -> str:
        return self._config.suffix

    def _fold(self, key: str) -> str:
        return key if self._config.case_sensitive else key.lower()

    def is_indirect(self, key: str) -> bool:
        """Whether ``key`` carries the suffix marker and names something."""
        return len(key) > len(self._suffix) and self._fold(key).endswith(self._suffix)

    def base_key(self, key: str) -> str:
        """Strip the suffix marker from an indirect key."""
        if not self.is_indirect(key):
            raise ValueError(f"Key `{key}` does not end with `{self.suffix}`")
        return key[: -len(self._suffix)]

    def resolve(self, entries: Entries) -> dict[str, str]:
        """Resolve one snapshot of entries.

        Args:
            entries: Mapping or iterable of (key, value) pairs from the
                wrapped provider. Never mutated.

        Returns:
            New mapping with direct entries unchanged and indirect entries
            replaced by file contents under their base key.

        Raises:
            ConflictError: A base key is defined both directly and via a file
            FileAccessError: A referenced file cannot be read
            EncodingError: A referenced file is not valid text
        """
        items = dict(entries.items() if isinstance(entries, Mapping) else entries)

        direct: dict[str, str] = {}
        indirect: dict[str, str] = {}
        for key, value in items.items():
            if self.is_indirect(key):
                indirect[key] = value
            else:
                direct[key] = value

        # All conflicts are reported before any file is touched
        direct_by_folded = {self._fold(key): key for key in direct}
        targets: dict[str, tuple[str, str]] = {}
        claimed: dict[str, str] = {}
        for env_key in sorted(indirect):
            base = self.base_key(env_key)
            if self.is_indirect(base):
                # BAR_FILE_FILE would emit a literal BAR_FILE
                logger.warning("file_env_conflict", key=base, other_key=base, env_key=env_key)
                raise ConflictError(base, base, env_key, other_is_indirect=True)
            folded = self._fold(base)
            direct_key = direct_by_folded.get(folded)
            other = direct_key or claimed.get(folded)
            if other is not None:
                logger.warning("file_env_conflict", key=base, other_key=other, env_key=env_key)
                raise ConflictError(base, other, env_key, other_is_indirect=direct_key is None)
            claimed[folded] = env_key
            targets[base] = (env_key, indirect[env_key])

        resolved = dict(direct)
        for base in sorted(targets):
            env_key, path = targets[base]
            resolved[base] = self._read(base, env_key, path)

        logger.debug(
            "file_env_resolution_complete",
            direct_count=len(direct),
            indirect_count=len(targets),
        )
        return resolved

    def resolve_source(self, source: "EntrySource") -> dict[str, str]:
        """Resolve the entries enumerated by any EntrySource."""
        return self.resolve(source.entries())

    def _read(self, key: str, env_key: str, path: str) -> str:
        try:
            raw = Path(path).read_bytes()
        except OSError as e:
            reason = e.strerror or type(e).__name__
            logger.warning(
                "file_env_read_failed", key=key, env_key=env_key, path=path, reason=reason
            )
            raise FileAccessError(key, env_key, path, reason) from e
        except ValueError as e:
            # Embedded NUL bytes in the path
            logger.warning("file_env_read_failed", key=key, env_key=env_key, path=path)
            raise FileAccessError(key, env_key, path, "invalid path") from e

        try:
            text = raw.decode(self._config.encoding)
        except UnicodeDecodeError:
            logger.warning(
                "file_env_decode_failed",
                key=key,
                env_key=env_key,
                path=path,
                encoding=self._config.encoding,
            )
            raise EncodingError(key, env_key, path, self._config.encoding) from None

        text = strip_trailing_newline(text)
        logger.debug("file_env_resolved", key=key, env_key=env_key, path=path, length=len(text))
        return text
