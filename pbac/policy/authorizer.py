"""
Authorization decision.

Combination rule:
    1. A policy is a candidate iff any of its action documents matches
       the requested action AND any of its resource documents matches
       any of the requested resources.
    2. Any Deny candidate      → (Deny, all Deny candidates)
    3. Else any Allow candidate → (Allow, all Allow candidates)
    4. Else                    → (Deny, [])   implicit deny

Every policy is evaluated; there is no early exit on first match.
The outcome does not depend on policy order; only the order of the
returned list follows the input.
"""

import logging
from typing import Iterable, List, Sequence, Tuple

from pbac.core.identifiers import ScopedAction, ScopedResource
from pbac.core.wildcard import Element, IdentifierT
from pbac.policy.policy import Effect, Policy

logger = logging.getLogger(__name__)


def matches_any(
    documents: Iterable[Element[IdentifierT]],
    identifiers: Sequence[IdentifierT],
) -> bool:
    """True if any document matches any identifier."""
    return any(
        document.is_match(identifier)
        for document in documents
        for identifier in identifiers
    )


def is_candidate(
    policy: Policy,
    scoped_action: ScopedAction,
    scoped_resources: Sequence[ScopedResource],
) -> bool:
    """True if both the action and at least one resource are covered."""
    return (
        matches_any(policy.actions, [scoped_action])
        and matches_any(policy.resources, scoped_resources)
    )


def is_authorized(
    policies: Iterable[Policy],
    scoped_action: ScopedAction,
    scoped_resources: Iterable[ScopedResource],
) -> Tuple[Effect, List[Policy]]:
    """
    Decide a request against a policy set.

    Never raises. Returns (effect, matching policies of the winning effect).
    """
    scoped_resources = list(scoped_resources)

    candidates = [
        policy for policy in policies
        if is_candidate(policy, scoped_action, scoped_resources)
    ]

    denied = [p for p in candidates if p.effect is Effect.DENY]
    if denied:
        logger.debug(
            "Explicit deny for %s: %d denying of %d candidate policies",
            scoped_action, len(denied), len(candidates),
        )
        return Effect.DENY, denied

    allowed = [p for p in candidates if p.effect is Effect.ALLOW]
    if allowed:
        logger.debug(
            "Allow for %s: %d allowing policies", scoped_action, len(allowed),
        )
        return Effect.ALLOW, allowed

    logger.debug("Implicit deny for %s: no matching policy", scoped_action)
    return Effect.DENY, []
