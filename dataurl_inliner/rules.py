"""Rule Model - Immutable eligibility rules resolved once at configuration time."""

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple, Union

from dataurl_inliner.constants import DEFAULT_LIMIT
from dataurl_inliner.processors import normalize_extensions

RuleEntry = Union[str, re.Pattern]


# Matchers
@dataclass(frozen=True)
class LiteralRule:
    """Case-sensitive substring match."""

    text: str

    def matches(self, reference: str) -> bool:
        return self.text in reference


@dataclass(frozen=True)
class PatternRule:
    """Regular expression search; case handling comes from the pattern's own flags."""

    pattern: re.Pattern

    def matches(self, reference: str) -> bool:
        return self.pattern.search(reference) is not None


Matcher = Union[LiteralRule, PatternRule]


def build_matchers(entries: Optional[Union[RuleEntry, Iterable[RuleEntry]]]) -> Optional[Tuple[Matcher, ...]]:
    """Resolve include/exclude entries into matchers, None when unset."""
    if entries is None:
        return None
    if isinstance(entries, (str, re.Pattern)):
        entries = [entries]

    matchers = []
    for entry in entries:
        if isinstance(entry, re.Pattern):
            matchers.append(PatternRule(entry))
        elif isinstance(entry, str):
            matchers.append(LiteralRule(entry))
        else:
            raise TypeError(f"Rule entries must be str or compiled patterns, got {type(entry).__name__}")

    return tuple(matchers) or None


def any_match(matchers: Sequence[Matcher], reference: str) -> bool:
    return any(m.matches(reference) for m in matchers)


# Configuration
@dataclass(frozen=True)
class RuleConfig:
    """Read-only rule set shared by every document transform of a pipeline."""

    remote: bool = False
    extensions: Optional[Tuple[str, ...]] = None
    include: Optional[Tuple[Matcher, ...]] = None
    exclude: Optional[Tuple[Matcher, ...]] = None
    limit: Optional[int] = DEFAULT_LIMIT

    @classmethod
    def build(
        cls,
        remote: bool = False,
        extensions: Optional[Union[str, Sequence[str]]] = None,
        include: Optional[Union[RuleEntry, Iterable[RuleEntry]]] = None,
        exclude: Optional[Union[RuleEntry, Iterable[RuleEntry]]] = None,
        limit: Optional[int] = DEFAULT_LIMIT,
    ) -> "RuleConfig":
        normalized = tuple(normalize_extensions(extensions)) if extensions else None
        return cls(
            remote=bool(remote),
            extensions=normalized or None,
            include=build_matchers(include),
            exclude=build_matchers(exclude),
            limit=limit,
        )
