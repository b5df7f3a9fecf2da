"""Unit tests for entry sources."""

import pytest

from fileenv.sources import EntrySource, EnvironEntrySource, MappingEntrySource


class TestMappingEntrySource:
    """Tests for MappingEntrySource."""

    def test_entries(self) -> None:
        """Entries mirror the mapping."""
        source = MappingEntrySource({"a": "1", "b_file": "/x"})
        assert dict(source.entries()) == {"a": "1", "b_file": "/x"}

    def test_snapshot(self) -> None:
        """Later changes to the mapping are not seen."""
        mapping = {"a": "1"}
        source = MappingEntrySource(mapping)
        mapping["b"] = "2"
        assert dict(source.entries()) == {"a": "1"}

    def test_satisfies_protocol(self) -> None:
        """MappingEntrySource is an EntrySource."""
        assert isinstance(MappingEntrySource({}), EntrySource)


class TestEnvironEntrySource:
    """Tests for EnvironEntrySource."""

    def test_prefix_stripped_and_lowercased(self) -> None:
        """Prefixed names are kept, stripped and case-folded."""
        source = EnvironEntrySource(
            "APP_",
            environ={"APP_FOO": "1", "APP_BAR_FILE": "/x", "OTHER": "2"},
        )
        assert dict(source.entries()) == {"foo": "1", "bar_file": "/x"}

    def test_prefix_case_insensitive(self) -> None:
        """The prefix matches regardless of case by default."""
        source = EnvironEntrySource("app_", environ={"APP_FOO": "1"})
        assert dict(source.entries()) == {"foo": "1"}

    def test_case_sensitive(self) -> None:
        """Case-sensitive sources keep names and require an exact prefix."""
        source = EnvironEntrySource(
            "APP_",
            environ={"APP_Foo": "1", "app_bar": "2"},
            case_sensitive=True,
        )
        assert dict(source.entries()) == {"Foo": "1"}

    def test_bare_prefix_skipped(self) -> None:
        """A variable equal to the prefix has no key."""
        source = EnvironEntrySource("APP_", environ={"APP_": "1"})
        assert list(source.entries()) == []

    def test_no_prefix(self) -> None:
        """Without a prefix every variable is an entry."""
        source = EnvironEntrySource(environ={"A": "1", "B": "2"})
        assert dict(source.entries()) == {"a": "1", "b": "2"}

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The process environment is used when no mapping is given."""
        monkeypatch.setenv("FILEENV_SOURCE_TEST_TOKEN_FILE", "/run/secrets/token")
        source = EnvironEntrySource("FILEENV_SOURCE_TEST_")
        assert dict(source.entries()) == {"token_file": "/run/secrets/token"}

    def test_satisfies_protocol(self) -> None:
        """EnvironEntrySource is an EntrySource."""
        assert isinstance(EnvironEntrySource(), EntrySource)
