"""Substring filtering of test cases by description."""

from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from unittask.framework.models import TestCase


def matches(description: str, terms: Iterable[str]) -> bool:
    """Check whether every term occurs in the description (case-sensitive)."""
    return all(term in description for term in terms)


@dataclass(frozen=True)
class FilterSpec:
    """An ordered set of terms a test description must all contain."""

    terms: tuple[str, ...] = ()

    @classmethod
    def from_terms(cls, terms: Sequence[str] | None) -> "FilterSpec":
        return cls(tuple(terms or ()))

    def matches(self, description: str) -> bool:
        return matches(description, self.terms)

    def predicate(self) -> Callable[[TestCase], bool]:
        """Predicate suitable for TestFramework.filter_tests."""
        return lambda test_case: self.matches(test_case.description)

    def __bool__(self) -> bool:
        return bool(self.terms)

    def __str__(self) -> str:
        return ", ".join(self.terms)
