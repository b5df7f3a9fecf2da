"""Entry sources the resolver can consume.

Anything that can enumerate (key, value) pairs satisfies EntrySource, so
the resolver never depends on a concrete provider.
"""

import os
from collections.abc import Iterable, Mapping
from typing import Protocol, runtime_checkable


@runtime_checkable
class EntrySource(Protocol):
    """Enumerates normalized (key, raw value) pairs."""

    def entries(self) -> Iterable[tuple[str, str]]:
        ...


class MappingEntrySource:
    """Entries taken from an in-memory mapping."""

    def __init__(self, mapping: Mapping[str, str]) -> None:
        self._mapping = dict(mapping)

    def entries(self) -> Iterable[tuple[str, str]]:
        return list(self._mapping.items())


class EnvironEntrySource:
    """Prefix-filtered environment variables.

    Names starting with ``prefix`` are kept and the prefix is stripped.
    Keys are lower-cased unless ``case_sensitive`` is set, in which case
    the prefix must match exactly too.
    """

    def __init__(
        self,
        prefix: str = "",
        *,
        environ: Mapping[str, str] | None = None,
        case_sensitive: bool = False,
    ) -> None:
        self.prefix = prefix
        self.case_sensitive = case_sensitive
        self._environ = environ

    def entries(self) -> Iterable[tuple[str, str]]:
        environ = os.environ if self._environ is None else self._environ
        prefix = self.prefix if self.case_sensitive else self.prefix.lower()
        result: list[tuple[str, str]] = []
        for name, value in environ.items():
            folded = name if self.case_sensitive else name.lower()
            if not folded.startswith(prefix):
                continue
            key = folded[len(prefix):]
            if key:
                result.append((key, value))
        return result
