"""
Policy statements.

A Policy is one statement: an effect, the action documents it covers,
the resource documents it covers, and the principals it names.
Principals are carried for the caller's benefit; the authorizer
never consults them.

Config form (dict / YAML):

    id: read-own-account          # optional
    description: ...              # optional
    effect: Allow                 # Allow | Deny
    actions: ["account:Get:*"]    # string or list, non-empty
    resources: ["account:*"]      # string or list
    principals: ["user:JohnSmith"]
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple

from pbac.core.canonical import canonical_hash
from pbac.core.documents import ActionDocument, ResourceDocument
from pbac.core.exceptions import PolicyError


class Effect(Enum):
    """Outcome polarity of a policy"""
    ALLOW = "Allow"
    DENY = "Deny"

    @classmethod
    def from_str(cls, value: Any) -> "Effect":
        """Case-insensitive lookup: "allow", "Allow" and "ALLOW" are equal."""
        if isinstance(value, str):
            for effect in cls:
                if effect.value.lower() == value.lower():
                    return effect
        raise PolicyError(
            "Unknown policy effect",
            {"effect": repr(value), "expected": "Allow|Deny"},
        )


@dataclass(frozen=True)
class Principal:
    """An opaque principal reference, e.g. user:JohnSmith"""
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Policy:
    """
    A single policy statement. Read-only during evaluation.

    Document and principal collections are stored as tuples, so a
    Policy is hashable and cannot be mutated after construction.
    """
    actions: Tuple[ActionDocument, ...]
    effect: Effect
    resources: Tuple[ResourceDocument, ...]
    principals: Tuple[Principal, ...] = ()
    policy_id: Optional[str] = None
    description: str = ""

    def __post_init__(self):
        object.__setattr__(self, "actions", tuple(self.actions))
        object.__setattr__(self, "resources", tuple(self.resources))
        object.__setattr__(self, "principals", tuple(self.principals))

    @property
    def policy_hash(self) -> str:
        """Deterministic fingerprint of the statement for audit trails."""
        return canonical_hash(self.to_dict())

    def to_dict(self) -> dict:
        data = {
            "effect": self.effect.value,
            "actions": [str(a) for a in self.actions],
            "resources": [str(r) for r in self.resources],
            "principals": [str(p) for p in self.principals],
        }
        if self.policy_id is not None:
            data["id"] = self.policy_id
        if self.description:
            data["description"] = self.description
        return data

    @staticmethod
    def from_dict(data: dict) -> "Policy":
        """
        Load a statement from its config form.

        Raises PolicyError for structural problems and lets
        ElementParseError from malformed documents propagate.
        """
        if not isinstance(data, dict):
            raise PolicyError(
                "Policy statement must be a mapping",
                {"type": type(data).__name__},
            )

        policy_id = data.get("id")
        context = {"policy_id": policy_id} if policy_id is not None else {}

        if "effect" not in data:
            raise PolicyError("Policy is missing 'effect'", context)
        effect = Effect.from_str(data["effect"])

        actions = _string_list(data.get("actions"), "actions", context)
        if not actions:
            raise PolicyError("Policy must declare at least one action", context)

        resources = _string_list(data.get("resources"), "resources", context)
        principals = _string_list(data.get("principals"), "principals", context)

        return Policy(
            actions=tuple(ActionDocument.parse(a) for a in actions),
            effect=effect,
            resources=tuple(ResourceDocument.parse(r) for r in resources),
            principals=tuple(Principal(p) for p in principals),
            policy_id=policy_id,
            description=data.get("description", ""),
        )


def _string_list(value: Any, key: str, context: dict) -> List[str]:
    """A single string or a list of strings; None means empty."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    raise PolicyError(
        f"Policy '{key}' must be a string or a list of strings",
        {**context, key: repr(value)},
    )
