"""
pbac: Basic Usage Example

Demonstrates:
- Parsing request identifiers
- Building policies in code
- Loading policies from YAML
- Deny overrides allow, implicit deny
"""

from pathlib import Path

from pbac import (
    ActionDocument,
    Effect,
    Policy,
    PolicyEngine,
    ResourceDocument,
    ScopedAction,
    ScopedResource,
    is_authorized,
)


def main():
    """Basic pbac usage."""

    print("="*60)
    print("pbac: Basic Usage Example")
    print("="*60)
    print()

    # 1️⃣ Policies in code
    print("1️⃣ Building policies in code...")
    policies = [
        Policy(
            actions=[ActionDocument.parse("account:*")],
            effect=Effect.ALLOW,
            resources=[ResourceDocument.parse("account:*")],
            policy_id="allow-accounts",
        ),
        Policy(
            actions=[ActionDocument.parse("account:Delete:*")],
            effect=Effect.DENY,
            resources=[ResourceDocument.parse("account:root")],
            policy_id="protect-root",
        ),
    ]

    requests = [
        ("account:Get:account-123", ["account:account-123"]),
        ("account:Delete:root", ["account:root"]),
        ("billing:Get:invoice-1", ["billing:invoice-1"]),
    ]

    for action, resources in requests:
        effect, matched = is_authorized(
            policies,
            ScopedAction.parse(action),
            [ScopedResource.parse(r) for r in resources],
        )
        ids = ", ".join(p.policy_id for p in matched) or "implicit"
        print(f"  {action:<28} → {effect.value:<5} ({ids})")
    print()

    # 2️⃣ Policies from YAML
    print("2️⃣ Loading policies from YAML...")
    engine = PolicyEngine.from_yaml(Path(__file__).parent / "policies.yaml")
    effect, matched = engine.authorize("account:Update:JohnSmith", ["account:JohnSmith"])
    print(f"  account:Update:JohnSmith → {effect.value}")
    print(f"  Stats: {engine.get_policy_stats()}")
    print()


if __name__ == "__main__":
    main()
