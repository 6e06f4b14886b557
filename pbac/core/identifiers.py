"""
Concrete request identifiers.

    scope:verb:resource   → ScopedAction
    verb:resource         → Action
    scope:resource        → ScopedResource

Splitting happens at the FIRST colon for each level of nesting:
"scope:verb:resource" splits into "scope" and "verb:resource", and the
remainder is split again. No escaping of ":" is supported, so the
input must hold exactly the expected number of segments.

Every segment must be non-empty. A blank segment raises
ElementParseError carrying that (empty) segment; a missing separator
raises ElementParseError carrying the whole input.
"""

from dataclasses import dataclass
from typing import Tuple

from pbac.core.exceptions import ElementParseError

SEPARATOR = ":"


def split_element(value: str) -> Tuple[str, str]:
    """
    Split at the first separator.

    Returns (head, tail) unvalidated; raises ElementParseError(value)
    if there is no separator at all.
    """
    head, sep, tail = value.partition(SEPARATOR)
    if not sep:
        raise ElementParseError(value)
    return head, tail


def require_segment(value: str) -> str:
    """
    Return value unchanged if it is exactly one non-empty segment.

    A segment still holding a separator means the input had more
    segments than expected; the first blank piece is reported if there
    is one ("scope::resource" → ""), otherwise the whole segment.
    """
    if not value:
        raise ElementParseError(value)
    if SEPARATOR in value:
        pieces = value.split(SEPARATOR)
        raise ElementParseError(next((p for p in pieces if not p), value))
    return value


@dataclass(frozen=True)
class Action:
    """The verb:resource part of a scoped action."""
    verb: str
    resource: str

    @classmethod
    def parse(cls, value: str) -> "Action":
        verb, resource = split_element(value)
        return cls(
            verb=require_segment(verb),
            resource=require_segment(resource),
        )

    def __str__(self) -> str:
        return f"{self.verb}{SEPARATOR}{self.resource}"


@dataclass(frozen=True)
class ScopedAction:
    """A concrete requested action, e.g. account:Get:account-123."""
    scope: str
    action: Action

    @classmethod
    def parse(cls, value: str) -> "ScopedAction":
        scope, action = split_element(value)
        scope = require_segment(scope)
        return cls(scope=scope, action=Action.parse(action))

    def __str__(self) -> str:
        return f"{self.scope}{SEPARATOR}{self.action}"


@dataclass(frozen=True)
class ScopedResource:
    """A concrete target resource, e.g. account:account-123."""
    scope: str
    resource: str

    @classmethod
    def parse(cls, value: str) -> "ScopedResource":
        scope, resource = split_element(value)
        return cls(
            scope=require_segment(scope),
            resource=require_segment(resource),
        )

    def __str__(self) -> str:
        return f"{self.scope}{SEPARATOR}{self.resource}"
