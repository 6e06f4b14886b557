"""
Policy engine: a loaded, read-only policy set plus decision statistics.

The engine parses request strings, delegates the decision to
is_authorized, and counts outcomes. Decisions are not cached.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Iterable, List, Tuple, Union

import yaml

from pbac.core.canonical import canonical_hash
from pbac.core.exceptions import PolicyError
from pbac.core.identifiers import ScopedAction, ScopedResource
from pbac.policy.authorizer import is_authorized
from pbac.policy.policy import Effect, Policy

logger = logging.getLogger(__name__)


def load_policies(data: Any) -> List[Policy]:
    """
    Parse policy config into Policy objects.

    Accepts a list of statements or a mapping with a "policies" key.
    All-or-nothing: the first invalid statement raises.
    """
    if isinstance(data, dict):
        if "policies" not in data:
            raise PolicyError("Policy config mapping is missing 'policies'")
        data = data["policies"]

    if data is None:
        return []

    if not isinstance(data, list):
        raise PolicyError(
            "Policy config must be a list of statements",
            {"type": type(data).__name__},
        )

    return [Policy.from_dict(item) for item in data]


class PolicyEngine:
    """
    Policy Decision Point over an immutable policy set.

    Safe to share across threads: the policy set is never mutated and
    the decision counters are guarded by a lock.
    """

    def __init__(self, policies: Iterable[Policy]):
        self.policies: Tuple[Policy, ...] = tuple(policies)
        self._decision_count = {effect.value: 0 for effect in Effect}
        self._lock = threading.Lock()

    @classmethod
    def from_dict(cls, data: Any) -> "PolicyEngine":
        return cls(load_policies(data))

    @classmethod
    def from_yaml(cls, policy_file: Union[str, Path]) -> "PolicyEngine":
        """Load the policy set from a YAML file."""
        policy_file = Path(policy_file)
        try:
            # binary: undecodable input surfaces as yaml.reader.ReaderError
            with open(policy_file, "rb") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise PolicyError(
                "Cannot read policy file",
                {"path": str(policy_file), "error": e.strerror or str(e)},
            ) from e
        except yaml.YAMLError as e:
            raise PolicyError(
                "Policy file is not valid YAML",
                {"path": str(policy_file), "error": str(e)},
            ) from e

        engine = cls.from_dict(data)
        logger.info(
            "Loaded %d policies from %s", len(engine.policies), policy_file,
        )
        return engine

    @property
    def policy_set_hash(self) -> str:
        """Fingerprint of the whole set, in order."""
        return canonical_hash({"policies": [p.to_dict() for p in self.policies]})

    def authorize(
        self,
        action: Union[str, ScopedAction],
        resources: Union[str, ScopedResource, Iterable[Union[str, ScopedResource]]],
    ) -> Tuple[Effect, List[Policy]]:
        """
        Decide a request given as strings or parsed identifiers.

        A single resource may be passed on its own instead of in a list.

        Raises ElementParseError for malformed request strings; the
        decision itself never fails.
        """
        if isinstance(action, str):
            action = ScopedAction.parse(action)
        if isinstance(resources, (str, ScopedResource)):
            resources = [resources]
        scoped_resources = [
            ScopedResource.parse(r) if isinstance(r, str) else r
            for r in resources
        ]

        effect, matched = is_authorized(self.policies, action, scoped_resources)

        with self._lock:
            self._decision_count[effect.value] += 1

        return effect, matched

    def get_policy_stats(self) -> dict:
        """Get policy evaluation statistics."""
        with self._lock:
            counts = self._decision_count.copy()
        return {
            "policy_count": len(self.policies),
            "policy_set_hash": self.policy_set_hash,
            "total_decisions": sum(counts.values()),
            "decisions_by_effect": counts,
        }
