"""Glob matching for exclusion and ignore patterns using pathspec.

Patterns follow gitignore-style semantics: a pattern without a slash matches
the base name at any depth, ``**`` spans directories, and dot files are
matched like any other name. A leading ``!`` negates a pattern.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from functools import lru_cache

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from wcstatus.status._paths import to_posix


@dataclass(frozen=True, slots=True)
class _CompiledPattern:
    pattern: str
    is_exclusion: bool
    spec: PathSpec


def build_exclude_list(files_exclude: Mapping[str, bool]) -> tuple[str, ...]:
    """Turn a workspace exclude map into an ordered pattern list.

    Enabled patterns are kept as-is; disabled ones become negations so they
    can re-include a path excluded by an earlier pattern.

    Args:
        files_exclude: Mapping of glob pattern to enabled flag.

    Returns:
        Tuple of patterns in mapping order.
    """
    return tuple(
        pattern if enabled else f"!{pattern}"
        for pattern, enabled in files_exclude.items()
    )


class PatternMatcher:
    """Ordered list of glob patterns evaluated against status paths.

    Evaluation walks the patterns in order. A positive pattern is only
    consulted while the path is unmatched, and a negated one only while it is
    matched; the last consulted pattern decides.

    Example:
        >>> matcher = PatternMatcher(("*.log", "!keep.log"))
        >>> matcher.matches("build/out.log")
        True
        >>> matcher.matches("keep.log")
        False
    """

    __slots__ = ("_compiled", "_patterns")

    def __init__(self, patterns: Sequence[str]) -> None:
        """Compile the patterns.

        Args:
            patterns: Glob patterns, optionally prefixed with "!".
        """
        self._patterns: tuple[str, ...] = tuple(patterns)
        self._compiled: tuple[_CompiledPattern, ...] = tuple(
            _compile(pattern) for pattern in self._patterns if pattern.strip("!")
        )

    @property
    def patterns(self) -> tuple[str, ...]:
        """The source patterns."""
        return self._patterns

    def __bool__(self) -> bool:
        return bool(self._compiled)

    def matches(self, path: str) -> bool:
        """Check a relative status path against the pattern list.

        Args:
            path: Path relative to the working-copy root.

        Returns:
            True if the path ends up matched.
        """
        if not self._compiled:
            return False

        candidate = to_posix(path)
        matched = False
        for compiled in self._compiled:
            if matched != compiled.is_exclusion:
                continue
            hit = compiled.spec.match_file(candidate)
            matched = not hit if compiled.is_exclusion else hit
        return matched


def _compile(pattern: str) -> _CompiledPattern:
    is_exclusion = pattern.startswith("!")
    clean = pattern[1:] if is_exclusion else pattern
    return _CompiledPattern(
        pattern=pattern,
        is_exclusion=is_exclusion,
        spec=PathSpec.from_lines(GitWildMatchPattern, [clean]),
    )


@lru_cache(maxsize=32)
def get_matcher(patterns: tuple[str, ...]) -> PatternMatcher:
    """Return a cached matcher for a pattern tuple.

    Configuration is re-read before every status pass, so the same pattern
    tuple is compiled once and reused across passes.

    Args:
        patterns: Glob patterns, optionally prefixed with "!".

    Returns:
        A compiled PatternMatcher.
    """
    return PatternMatcher(patterns)
