"""
pbac/__init__.py

pbac: Policy-Based Access Control decision engine

IAM-style model:
    scoped identifiers    scope:verb:resource, scope:resource
    policy documents      the same syntax, per-segment "*" wildcards
    combination rule      deny overrides allow, implicit deny by default
"""

__version__ = "0.1.0"

from pbac.core.exceptions import PbacError, ElementParseError, PolicyError
from pbac.core.identifiers import Action, ScopedAction, ScopedResource
from pbac.core.wildcard import WILDCARD, Element, WildcardToken
from pbac.core.documents import ActionDocument, ResourceDocument
from pbac.policy import (
    Effect,
    Policy,
    Principal,
    PolicyEngine,
    is_authorized,
    load_policies,
)

__all__ = [
    # Identifiers
    "Action",
    "ScopedAction",
    "ScopedResource",
    # Documents
    "ActionDocument",
    "ResourceDocument",
    "Element",
    "WildcardToken",
    # Policies
    "Effect",
    "Policy",
    "Principal",
    "PolicyEngine",
    # Decision
    "is_authorized",
    "load_policies",
    # Errors
    "PbacError",
    "ElementParseError",
    "PolicyError",
    # Constants
    "WILDCARD",
]
