"""
Policy-side documents.

Documents mirror the identifiers in pbac.core.identifiers, but every
field may independently be a wildcard, and the whole expression may
collapse to a single top-level "*".

All action document shapes:

    *
    scope:verb:resource     *:verb:resource
    scope:verb:*            *:verb:*
    scope:*:resource        *:*:resource
    scope:*                 *:*

All resource document shapes:

    *
    scope:resource          *:resource
    scope:*                 *:*

Wildcards are whole-segment only; "acc*" is a literal.
"""

from dataclasses import dataclass

from pbac.core.identifiers import SEPARATOR, Action, ScopedAction, ScopedResource, split_element
from pbac.core.wildcard import WildcardToken, parse_segment, segment_matches


@dataclass(frozen=True)
class ActionToken:
    """verb:resource with per-segment wildcards."""
    verb: WildcardToken[str]
    resource: WildcardToken[str]

    @classmethod
    def parse(cls, value: str) -> "ActionToken":
        verb, resource = split_element(value)
        return cls(verb=parse_segment(verb), resource=parse_segment(resource))

    def is_match(self, action: Action) -> bool:
        return (
            segment_matches(self.verb, action.verb)
            and segment_matches(self.resource, action.resource)
        )

    def __str__(self) -> str:
        return f"{self.verb}{SEPARATOR}{self.resource}"


@dataclass(frozen=True)
class ScopedActionToken:
    """scope:<action> where <action> may itself be a single wildcard."""
    scope: WildcardToken[str]
    action: WildcardToken[ActionToken]

    @classmethod
    def parse(cls, value: str) -> "ScopedActionToken":
        scope, action = split_element(value)
        scope_token = parse_segment(scope)
        return cls(
            scope=scope_token,
            action=WildcardToken.parse(action, ActionToken.parse),
        )

    def is_match(self, scoped_action: ScopedAction) -> bool:
        return (
            segment_matches(self.scope, scoped_action.scope)
            and self.action.is_match(scoped_action.action, ActionToken.is_match)
        )

    def __str__(self) -> str:
        return f"{self.scope}{SEPARATOR}{self.action}"


@dataclass(frozen=True)
class ActionDocument:
    """Matches ScopedAction identifiers."""
    scoped_action: WildcardToken[ScopedActionToken]

    @classmethod
    def parse(cls, value: str) -> "ActionDocument":
        return cls(WildcardToken.parse(value, ScopedActionToken.parse))

    @classmethod
    def wildcard(cls) -> "ActionDocument":
        return cls(WildcardToken.wildcard())

    def is_match(self, scoped_action: ScopedAction) -> bool:
        return self.scoped_action.is_match(scoped_action, ScopedActionToken.is_match)

    def __str__(self) -> str:
        return str(self.scoped_action)


@dataclass(frozen=True)
class ScopedResourceToken:
    scope: WildcardToken[str]
    resource: WildcardToken[str]

    @classmethod
    def parse(cls, value: str) -> "ScopedResourceToken":
        scope, resource = split_element(value)
        return cls(scope=parse_segment(scope), resource=parse_segment(resource))

    def is_match(self, scoped_resource: ScopedResource) -> bool:
        return (
            segment_matches(self.scope, scoped_resource.scope)
            and segment_matches(self.resource, scoped_resource.resource)
        )

    def __str__(self) -> str:
        return f"{self.scope}{SEPARATOR}{self.resource}"


@dataclass(frozen=True)
class ResourceDocument:
    """Matches ScopedResource identifiers."""
    scoped_resource: WildcardToken[ScopedResourceToken]

    @classmethod
    def parse(cls, value: str) -> "ResourceDocument":
        return cls(WildcardToken.parse(value, ScopedResourceToken.parse))

    @classmethod
    def wildcard(cls) -> "ResourceDocument":
        return cls(WildcardToken.wildcard())

    def is_match(self, scoped_resource: ScopedResource) -> bool:
        return self.scoped_resource.is_match(scoped_resource, ScopedResourceToken.is_match)

    def __str__(self) -> str:
        return str(self.scoped_resource)
