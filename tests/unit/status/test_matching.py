"""Unit tests for glob matching."""

from wcstatus.status import PatternMatcher, build_exclude_list, get_matcher


class TestBuildExcludeList:
    def test_disabled_patterns_become_negations(self) -> None:
        patterns = build_exclude_list({"**/build": True, "**/build/keep": False})
        assert patterns == ("**/build", "!**/build/keep")

    def test_empty(self) -> None:
        assert build_exclude_list({}) == ()


class TestPatternMatcher:
    def test_empty_matcher_is_falsy_and_matches_nothing(self) -> None:
        matcher = PatternMatcher(())

        assert not matcher
        assert matcher.matches("anything") is False

    def test_slashless_pattern_matches_basename_at_any_depth(self) -> None:
        matcher = PatternMatcher(("*.log",))

        assert matcher.matches("out.log") is True
        assert matcher.matches("build/deep/out.log") is True
        assert matcher.matches("out.txt") is False

    def test_double_star_spans_directories(self) -> None:
        matcher = PatternMatcher(("**/node_modules",))

        assert matcher.matches("node_modules") is True
        assert matcher.matches("web/node_modules") is True
        assert matcher.matches("web/node_modules/pkg/index.js") is True

    def test_dot_files_are_matched(self) -> None:
        matcher = PatternMatcher(("*.swp",))
        assert matcher.matches(".hidden.swp") is True

    def test_negation_reincludes(self) -> None:
        matcher = PatternMatcher(("*.log", "!keep.log"))

        assert matcher.matches("build/out.log") is True
        assert matcher.matches("keep.log") is False

    def test_negation_alone_matches_nothing(self) -> None:
        matcher = PatternMatcher(("!keep.log",))
        assert matcher.matches("keep.log") is False

    def test_later_positive_pattern_reexcludes(self) -> None:
        matcher = PatternMatcher(("*.log", "!keep.log", "keep.*"))
        assert matcher.matches("keep.log") is True

    def test_windows_separators(self) -> None:
        matcher = PatternMatcher(("build/**",))
        assert matcher.matches("build\\out\\a.o") is True

    def test_patterns_property(self) -> None:
        assert PatternMatcher(("a", "!b")).patterns == ("a", "!b")


class TestGetMatcher:
    def test_cached_per_pattern_tuple(self) -> None:
        assert get_matcher(("*.tmp",)) is get_matcher(("*.tmp",))

    def test_different_patterns_different_matchers(self) -> None:
        assert get_matcher(("*.tmp",)) is not get_matcher(("*.bak",))
