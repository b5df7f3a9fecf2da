"""pydantic-settings source for file-backed environment values.

Wraps an EnvSettingsSource and rewrites its entries before pydantic-settings
parses them, so ``APP_API_KEY_FILE=/run/secrets/api_key`` fills the same
field as ``APP_API_KEY``:

    class Settings(BaseSettings):
        model_config = SettingsConfigDict(env_prefix="APP_")

        api_key: str

        @classmethod
        def settings_customise_sources(
            cls, settings_cls, init_settings, env_settings, dotenv_settings, file_secret_settings
        ):
            return (init_settings, FileEnvSettingsSource(settings_cls, env_settings))

Only variables inside the wrapped source's prefix are resolved. Without a
prefix, every ``*_FILE`` variable in the process environment is read,
so a unique prefix is strongly recommended.

Fields with a ``validation_alias`` are looked up by pydantic-settings
without the env prefix. Their ``_FILE`` variants fall outside the prefix
and are not resolved, so such fields can only be set directly.
"""

import copy
from collections.abc import Iterable
from typing import Any

from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, EnvSettingsSource, PydanticBaseSettingsSource

from fileenv.config.models import DEFAULT_SUFFIX
from fileenv.observability.logging import get_logger
from fileenv.resolver import FileEnvResolver

logger = get_logger(__name__)


class FileEnvSettingsSource(PydanticBaseSettingsSource):
    """Settings source reading values from the environment or from files it points to.

    The field ``foo`` is read either from ``FOO`` or from the file named by
    ``FOO_FILE`` (prefix included). Setting both is an error.

    Use ``only``/``ignore`` on this source rather than filtering the wrapped
    env source, otherwise the suffixed variants are not filtered with their
    base keys.
    """

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        env_settings: EnvSettingsSource | None = None,
        *,
        suffix: str = DEFAULT_SUFFIX,
        case_sensitive: bool | None = None,
        resolver: FileEnvResolver | None = None,
        only: Iterable[str] | None = None,
        ignore: Iterable[str] = (),
    ) -> None:
        super().__init__(settings_cls)
        self.env_settings = env_settings or EnvSettingsSource(settings_cls)
        if resolver is not None:
            resolver_case = resolver.config.case_sensitive
            if case_sensitive is not None and case_sensitive != resolver_case:
                raise ValueError(
                    f"case_sensitive={case_sensitive} does not match the resolver's "
                    f"case_sensitive={resolver_case}"
                )
            case_sensitive = resolver_case
        elif case_sensitive is None:
            case_sensitive = bool(self.env_settings.case_sensitive)
        self.case_sensitive = case_sensitive
        self.resolver = resolver or FileEnvResolver(suffix, case_sensitive=case_sensitive)
        self._only = None if only is None else frozenset(self._fold(k) for k in only)
        self._ignore = frozenset(self._fold(k) for k in ignore)
        self._raw_env_vars: dict[str, str | None] = dict(self.env_settings.env_vars)

    @classmethod
    def from_env(
        cls, env_settings: EnvSettingsSource, **kwargs: Any
    ) -> "FileEnvSettingsSource":
        """Build from an existing EnvSettingsSource, keeping its settings class."""
        return cls(env_settings.settings_cls, env_settings, **kwargs)

    def only(self, keys: Iterable[str]) -> "FileEnvSettingsSource":
        """Restrict to the given keys and their suffixed counterparts."""
        restricted = copy.copy(self)
        allowed = frozenset(self._fold(k) for k in keys)
        restricted._only = allowed if self._only is None else self._only & allowed
        return restricted

    def ignore(self, keys: Iterable[str]) -> "FileEnvSettingsSource":
        """Drop the given keys and their suffixed counterparts."""
        restricted = copy.copy(self)
        restricted._ignore = self._ignore | {self._fold(k) for k in keys}
        return restricted

    def _fold(self, key: str) -> str:
        return key if self.case_sensitive else key.lower()

    @property
    def _prefix(self) -> str:
        return self._fold(self.env_settings.env_prefix or "")

    def _is_selected(self, key: str) -> bool:
        name = self._fold(key)
        if self.resolver.is_indirect(name):
            name = self.resolver.base_key(name)
        if self._only is not None and name not in self._only:
            return False
        return name not in self._ignore

    def resolved_env_vars(self) -> dict[str, str | None]:
        """Resolve the namespaced snapshot of the wrapped source's variables.

        Raises:
            FileEnvError: On any conflict, unreadable file or bad encoding
        """
        prefix = self._prefix
        passthrough: dict[str, str | None] = {}
        namespaced: dict[str, str] = {}
        for name, value in self._raw_env_vars.items():
            folded = self._fold(name)
            if not folded.startswith(prefix):
                passthrough[name] = value
                continue
            if not self._is_selected(name[len(prefix):]):
                continue
            if value is None:
                passthrough[name] = value
            else:
                namespaced[name] = value

        resolved: dict[str, str | None] = dict(passthrough)
        resolved.update(self.resolver.resolve(namespaced))
        return resolved

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return self.env_settings.get_field_value(field, field_name)

    def __call__(self) -> dict[str, Any]:
        resolved = self.resolved_env_vars()
        self.env_settings.env_vars = resolved
        try:
            data = self.env_settings()
        finally:
            self.env_settings.env_vars = self._raw_env_vars
        logger.debug(
            "file_env_source_loaded",
            settings=self.settings_cls.__name__,
            fields=sorted(data),
        )
        return data

    def __repr__(self) -> str:
        return (
            f"FileEnvSettingsSource(env_prefix={self.env_settings.env_prefix!r}, "
            f"suffix={self.resolver.suffix!r})"
        )
