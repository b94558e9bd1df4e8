"""Candidate sources for the completion prompt.

History is already ordered newest first, so a candidate source pins both
display sorting and recently-used cycling off. Filtering narrows the list
but never changes the relative order of what is left.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


def matches(pattern: str, candidate: str) -> bool:
    """Substring or in-order subsequence match, case-insensitive.

    E.g. 'cdtm' matches 'cd /tmp'.
    """
    if not pattern:
        return True

    pattern_lower = pattern.lower()
    c_lower = candidate.lower()
    if pattern_lower in c_lower:
        return True

    idx = 0
    for char in pattern_lower:
        idx = c_lower.find(char, idx)
        if idx == -1:
            return False
        idx += 1
    return True


@dataclass(frozen=True)
class CandidateSource:
    """Fixed candidate list with presentation overrides."""

    candidates: tuple[str, ...] = ()
    sort: bool = False
    cycle_sort: bool = False

    def filter(self, pattern: str) -> list[str]:
        """Candidates matching pattern, in their original order."""
        return [c for c in self.candidates if matches(pattern, c)]

    def contains(self, value: str) -> bool:
        return value in self.candidates

    def __len__(self) -> int:
        return len(self.candidates)

    def __bool__(self) -> bool:
        return bool(self.candidates)


def make_candidate_source(sequence: Iterable[str]) -> CandidateSource:
    """Wrap a history sequence for the completion prompt without reordering."""
    return CandidateSource(candidates=tuple(sequence), sort=False, cycle_sort=False)
