"""
tests/test_engine.py

PolicyEngine: YAML loading, string-level authorize, stats.
"""

import pytest

from pbac.core.exceptions import ElementParseError, PolicyError
from pbac.core.identifiers import ScopedAction, ScopedResource
from pbac.policy.engine import PolicyEngine
from pbac.policy.policy import Effect


POLICY_YAML = """
policies:
  - id: read-accounts
    effect: Allow
    actions: ["account:Get:*"]
    resources: ["account:*"]

  - id: protect-root
    effect: Deny
    actions: ["account:*"]
    resources: ["account:root"]
"""


@pytest.fixture
def policy_file(tmp_path):
    path = tmp_path / "policies.yaml"
    path.write_text(POLICY_YAML)
    return path


@pytest.fixture
def engine(policy_file):
    return PolicyEngine.from_yaml(policy_file)


class TestLoading:

    def test_from_yaml(self, engine):
        assert [p.policy_id for p in engine.policies] == ["read-accounts", "protect-root"]

    def test_from_yaml_accepts_str_path(self, policy_file):
        assert len(PolicyEngine.from_yaml(str(policy_file)).policies) == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(PolicyError) as exc_info:
            PolicyEngine.from_yaml(tmp_path / "missing.yaml")
        assert "missing.yaml" in exc_info.value.details["path"]

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("policies: [unclosed")
        with pytest.raises(PolicyError):
            PolicyEngine.from_yaml(path)

    def test_empty_file_is_empty_policy_set(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert PolicyEngine.from_yaml(path).policies == ()

    def test_non_utf8_file(self, tmp_path):
        path = tmp_path / "binary.yaml"
        path.write_bytes(b"policies:\n  - id: \xff\xfe\n")
        with pytest.raises(PolicyError) as exc_info:
            PolicyEngine.from_yaml(path)
        assert "binary.yaml" in exc_info.value.details["path"]

    def test_malformed_document_in_file(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- effect: Allow\n  actions: ['account::Get']\n  resources: ['*']\n")
        with pytest.raises(ElementParseError):
            PolicyEngine.from_yaml(path)

    def test_from_dict(self):
        engine = PolicyEngine.from_dict([
            {"effect": "Allow", "actions": "*", "resources": "*"},
        ])
        assert len(engine.policies) == 1


class TestAuthorize:

    def test_allow_from_strings(self, engine):
        effect, matched = engine.authorize("account:Get:alice", ["account:alice"])

        assert effect is Effect.ALLOW
        assert [p.policy_id for p in matched] == ["read-accounts"]

    def test_deny_overrides(self, engine):
        effect, matched = engine.authorize("account:Get:root", ["account:root"])

        assert effect is Effect.DENY
        assert [p.policy_id for p in matched] == ["protect-root"]

    def test_implicit_deny(self, engine):
        assert engine.authorize("billing:Get:x", ["billing:x"]) == (Effect.DENY, [])

    def test_accepts_parsed_identifiers(self, engine):
        effect, _ = engine.authorize(
            ScopedAction.parse("account:Get:alice"),
            [ScopedResource.parse("account:alice")],
        )
        assert effect is Effect.ALLOW

    def test_malformed_request_raises(self, engine):
        with pytest.raises(ElementParseError) as exc_info:
            engine.authorize("account::", ["account:alice"])
        assert exc_info.value.token == ""

    def test_single_resource_string(self, engine):
        effect, matched = engine.authorize("account:Get:alice", "account:alice")

        assert effect is Effect.ALLOW
        assert [p.policy_id for p in matched] == ["read-accounts"]

    def test_single_parsed_resource(self, engine):
        effect, _ = engine.authorize(
            "account:Get:root", ScopedResource.parse("account:root"),
        )
        assert effect is Effect.DENY

    def test_malformed_resource_raises(self, engine):
        with pytest.raises(ElementParseError):
            engine.authorize("account:Get:alice", ["account"])


class TestStats:

    def test_counts_decisions(self, engine):
        engine.authorize("account:Get:alice", ["account:alice"])
        engine.authorize("account:Get:root", ["account:root"])
        engine.authorize("billing:Get:x", ["billing:x"])

        stats = engine.get_policy_stats()

        assert stats["policy_count"] == 2
        assert stats["total_decisions"] == 3
        assert stats["decisions_by_effect"] == {"Allow": 1, "Deny": 2}

    def test_failed_parse_not_counted(self, engine):
        with pytest.raises(ElementParseError):
            engine.authorize("", [])
        assert engine.get_policy_stats()["total_decisions"] == 0

    def test_policy_set_hash_is_stable(self, policy_file):
        first = PolicyEngine.from_yaml(policy_file).policy_set_hash
        second = PolicyEngine.from_yaml(policy_file).policy_set_hash
        assert first == second
        assert len(first) == 64

    def test_policy_set_hash_depends_on_order(self, engine):
        reversed_engine = PolicyEngine(reversed(engine.policies))
        assert reversed_engine.policy_set_hash != engine.policy_set_hash
