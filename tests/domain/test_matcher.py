"""Tests for name pattern compilation and matching."""

import dataclasses
from concurrent.futures import ThreadPoolExecutor

import pytest

from doomctl.domain.errors import InvalidPatternError, ParseErrorCode
from doomctl.domain.matcher import MATCH_ALL, MatchKind, compile_pattern

NAMES = ["", "a", "app.log", ".hidden", "core.1", "with space.txt", "ünïcode.tmp"]


class TestWildcards:
    @pytest.mark.parametrize("name", NAMES)
    def test_star_matches_everything(self, name: str) -> None:
        assert compile_pattern("*").matches(name) is True

    @pytest.mark.parametrize("name", [n for n in NAMES if n])
    def test_empty_pattern_matches_nothing(self, name: str) -> None:
        assert compile_pattern("").matches(name) is False

    def test_star_is_shared_instance(self) -> None:
        assert compile_pattern("*") is MATCH_ALL
        assert MATCH_ALL.kind is MatchKind.ALL


class TestRegex:
    def test_searches_anywhere(self) -> None:
        m = compile_pattern(r"\.log")
        assert m.kind is MatchKind.REGEX
        assert m.matches("app.log")
        assert m.matches("app.log.gz")
        assert not m.matches("app.txt")

    def test_anchored(self) -> None:
        m = compile_pattern(r"\.log$")
        assert m.matches("app.log")
        assert not m.matches("app.log.gz")

    def test_exact_string(self) -> None:
        m = compile_pattern("x.log")
        assert m.matches("x.log")
        assert not m.matches("y.txt")

    def test_case_sensitive(self) -> None:
        assert not compile_pattern("^LOG").matches("log.txt")

    def test_invalid_regex_fails_at_compile_time(self) -> None:
        with pytest.raises(InvalidPatternError) as excinfo:
            compile_pattern("invalid[regex")
        assert excinfo.value.code == ParseErrorCode.INVALID_PATTERN
        assert excinfo.value.value == "invalid[regex"

    def test_explicit_regex_prefix(self) -> None:
        m = compile_pattern("re:^core$")
        assert m.kind is MatchKind.REGEX
        assert m.matches("core")
        assert not m.matches("core.1")

    def test_explicit_regex_prefix_still_validated(self) -> None:
        with pytest.raises(InvalidPatternError):
            compile_pattern("re:*.tmp")


class TestGlob:
    def test_leading_star_reads_as_glob(self) -> None:
        m = compile_pattern("*.tmp")
        assert m.kind is MatchKind.GLOB
        assert m.matches("build.tmp")
        assert m.matches(".tmp")
        assert not m.matches("build.tmp.bak")

    def test_explicit_glob_prefix(self) -> None:
        m = compile_pattern("glob:data_??.csv")
        assert m.kind is MatchKind.GLOB
        assert m.matches("data_01.csv")
        assert not m.matches("data_1.csv")

    def test_glob_prefix_with_brackets(self) -> None:
        m = compile_pattern("glob:[ab]*.log")
        assert m.matches("a1.log")
        assert not m.matches("c1.log")


class TestMatcherSharing:
    def test_frozen(self) -> None:
        m = compile_pattern(r"\.log$")
        with pytest.raises(dataclasses.FrozenInstanceError):
            m.pattern = "x"  # type: ignore[misc]

    def test_concurrent_matches_agree_with_serial(self) -> None:
        m = compile_pattern(r"^file_\d*[02468]\.dat$")
        names = [f"file_{i}.dat" for i in range(2000)]
        serial = [m.matches(n) for n in names]
        with ThreadPoolExecutor(max_workers=8) as pool:
            parallel = list(pool.map(m.matches, names))
        assert parallel == serial
        assert sum(serial) == 1000
