"""
pbac Policy Engine

The Policy Decision Point (PDP) combines policy matches into one
authorization decision.

Components:
- Policy: statement with effect, action and resource documents
- is_authorized: deny-overrides-allow, implicit deny by default
- PolicyEngine: loaded policy set (YAML/dict) with decision stats
"""

from pbac.policy.policy import Effect, Policy, Principal
from pbac.policy.authorizer import is_authorized
from pbac.policy.engine import PolicyEngine, load_policies

__all__ = [
    "Effect",
    "Policy",
    "Principal",
    "is_authorized",
    "PolicyEngine",
    "load_policies",
]
