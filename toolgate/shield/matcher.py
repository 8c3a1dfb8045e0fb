"""Sensitive-path matcher for ToolGate — classifies file-tool targets.

Rules are a small closed set of tagged variants instead of opaque regexes,
so the listing shown to the operator is derived from the same data used for
matching. Paths are matched exactly as the tool invocation supplies them:
no symlink resolution, no case folding, no separator normalization.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum


class PatternKind(str, Enum):
    """How a :class:`SensitivePattern` is applied to a path."""

    EXACT_NAME = "exact_name"
    NAME_PREFIX = "name_prefix"
    CONTAINS_SEGMENT = "contains_segment"


def _basename(path: str) -> str:
    return path.rsplit("/", 1)[-1]


@dataclass(frozen=True)
class SensitivePattern:
    """A single path rule."""

    kind: PatternKind
    value: str
    description: str = ""

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Sensitive pattern value must not be empty")

    def matches(self, path: str) -> bool:
        if self.kind == PatternKind.EXACT_NAME:
            return _basename(path) == self.value
        if self.kind == PatternKind.NAME_PREFIX:
            name = _basename(path)
            return name.startswith(self.value) and len(name) > len(self.value)
        return self.value in path

    def __str__(self) -> str:
        if self.kind == PatternKind.EXACT_NAME:
            text = f"filename is {self.value}"
        elif self.kind == PatternKind.NAME_PREFIX:
            text = f"filename starts with {self.value}"
        else:
            text = f"path contains {self.value}"
        if self.description:
            text += f"  ({self.description})"
        return text


class SensitivePatternSet:
    """Ordered, immutable set of :class:`SensitivePattern` rules.

    A path is sensitive iff any rule matches. Evaluation short-circuits on
    the first match; rule order never changes the boolean result.
    """

    def __init__(self, patterns: Iterable[SensitivePattern]):
        self._patterns: tuple[SensitivePattern, ...] = tuple(patterns)

    def is_sensitive(self, path: str) -> bool:
        return any(pattern.matches(path) for pattern in self._patterns)

    def first_match(self, path: str) -> SensitivePattern | None:
        """Return the first rule matching *path*, or None."""
        for pattern in self._patterns:
            if pattern.matches(path):
                return pattern
        return None

    def extend(self, patterns: Iterable[SensitivePattern]) -> SensitivePatternSet:
        """Return a new set with *patterns* appended; duplicates are dropped."""
        merged = list(self._patterns)
        for pattern in patterns:
            if pattern not in merged:
                merged.append(pattern)
        return SensitivePatternSet(merged)

    def describe(self) -> list[str]:
        """Human-readable rule descriptions, in evaluation order."""
        return [str(pattern) for pattern in self._patterns]

    @property
    def patterns(self) -> tuple[SensitivePattern, ...]:
        return self._patterns

    def __iter__(self) -> Iterator[SensitivePattern]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)


DEFAULT_PATTERNS = SensitivePatternSet(
    [
        SensitivePattern(PatternKind.EXACT_NAME, ".env", ".env files"),
        SensitivePattern(PatternKind.NAME_PREFIX, ".env.", ".env.local, .env.production, etc."),
        SensitivePattern(PatternKind.EXACT_NAME, ".envrc", "direnv"),
        SensitivePattern(PatternKind.NAME_PREFIX, ".envrc.", ".envrc.local, etc."),
        SensitivePattern(PatternKind.CONTAINS_SEGMENT, "/.ssh/", "SSH directory"),
        SensitivePattern(PatternKind.CONTAINS_SEGMENT, "/.aws/", "AWS config directory"),
        SensitivePattern(PatternKind.CONTAINS_SEGMENT, "/.gnupg/", "GPG directory"),
    ]
)


def is_sensitive(path: str) -> bool:
    """Check *path* against the default blocklist."""
    return DEFAULT_PATTERNS.is_sensitive(path)
