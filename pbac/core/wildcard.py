"""
Wildcard-or-value tokens.

A WildcardToken is a tagged union: either the wildcard marker "*" or a
concrete payload. The same token type wraps plain segments, action
tokens and scoped-action tokens; parsing and matching of the payload
are supplied per concrete instantiation as plain callables.
"""

import operator
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, Protocol, TypeVar

from pbac.core.identifiers import require_segment

WILDCARD = "*"

T = TypeVar("T")
IdentifierT = TypeVar("IdentifierT")


@dataclass(frozen=True)
class WildcardToken(Generic[T]):
    """Either the wildcard marker (value is None) or a concrete value."""
    value: Optional[T] = None

    @property
    def is_wildcard(self) -> bool:
        return self.value is None

    @classmethod
    def wildcard(cls) -> "WildcardToken[T]":
        return cls()

    @classmethod
    def of(cls, value: T) -> "WildcardToken[T]":
        """A concrete value; None is reserved for the wildcard."""
        if value is None:
            raise ValueError("WildcardToken.of() requires a value; use wildcard()")
        return cls(value)

    @classmethod
    def parse(cls, raw: str, parse_value: Callable[[str], T]) -> "WildcardToken[T]":
        """
        "*" short-circuits to the wildcard; anything else is handed to
        parse_value, whose errors propagate unchanged.
        """
        if raw == WILDCARD:
            return cls.wildcard()
        return cls.of(parse_value(raw))

    def is_match(self, target: Any, match_value: Callable[[T, Any], bool]) -> bool:
        if self.is_wildcard:
            return True
        return match_value(self.value, target)

    def __str__(self) -> str:
        return WILDCARD if self.is_wildcard else str(self.value)


def parse_segment(raw: str) -> WildcardToken[str]:
    """A single document segment: "*" or a non-empty literal."""
    return WildcardToken.parse(raw, require_segment)


def segment_matches(token: WildcardToken[str], segment: str) -> bool:
    """Exact, case-sensitive comparison unless the token is a wildcard."""
    return token.is_match(segment, operator.eq)


class Element(Protocol[IdentifierT]):
    """
    Shared contract of policy documents: parse from text, match
    against a concrete identifier of type IdentifierT.
    """

    @classmethod
    def parse(cls, value: str) -> "Element[IdentifierT]":
        ...

    def is_match(self, identifier: IdentifierT) -> bool:
        ...
