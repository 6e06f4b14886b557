"""
tests/test_identifiers.py

Identifier parsing: scope:verb:resource and scope:resource.

Laws:
  - Split at the first colon per nesting level.
  - Every segment is non-empty; an empty segment is rejected with
    that empty segment as the token, never a generic error.
  - A missing separator reports the whole input as the token.
"""

from dataclasses import FrozenInstanceError

import pytest

from pbac.core.exceptions import ElementParseError, PbacError
from pbac.core.identifiers import Action, ScopedAction, ScopedResource


class TestScopedAction:

    def test_parse_scope_verb_resource(self):
        actual = ScopedAction.parse("scope:verb:resource")

        assert actual == ScopedAction(
            scope="scope",
            action=Action(verb="verb", resource="resource"),
        )

    def test_parse_realistic_action(self):
        actual = ScopedAction.parse("account:Get:account-123")

        assert actual.scope == "account"
        assert actual.action.verb == "Get"
        assert actual.action.resource == "account-123"

    def test_segments_are_case_preserving(self):
        actual = ScopedAction.parse("Account:GET:Res")
        assert str(actual) == "Account:GET:Res"

    def test_asterisk_is_an_ordinary_literal(self):
        actual = ScopedAction.parse("scope:verb:*")
        assert actual.action.resource == "*"

    @pytest.mark.parametrize("raw", ["", "scope:", "scope::", "::", ":verb:resource", "scope:verb:"])
    def test_empty_segment_rejected_with_empty_token(self, raw):
        with pytest.raises(ElementParseError) as exc_info:
            ScopedAction.parse(raw)
        assert exc_info.value.token == ""

    def test_double_colon_rejected(self):
        with pytest.raises(ElementParseError) as exc_info:
            ScopedAction.parse("scope::resource")
        assert exc_info.value.token == ""

    def test_missing_separator_reports_whole_input(self):
        with pytest.raises(ElementParseError) as exc_info:
            ScopedAction.parse("scope")
        assert exc_info.value.token == "scope"

    def test_missing_action_separator_reports_remainder(self):
        with pytest.raises(ElementParseError) as exc_info:
            ScopedAction.parse("scope:verb")
        assert exc_info.value.token == "verb"

    def test_extra_segment_rejected(self):
        with pytest.raises(ElementParseError) as exc_info:
            ScopedAction.parse("scope:verb:resource:extra")
        assert exc_info.value.token == "resource:extra"

    def test_parse_error_is_a_pbac_error(self):
        with pytest.raises(PbacError):
            ScopedAction.parse("")

    def test_immutable(self):
        action = ScopedAction.parse("scope:verb:resource")
        with pytest.raises(FrozenInstanceError):
            action.scope = "other"


class TestAction:

    def test_parse_verb_resource(self):
        assert Action.parse("verb:resource") == Action(verb="verb", resource="resource")

    @pytest.mark.parametrize("raw", [":resource", "verb:", ":"])
    def test_empty_segment_rejected(self, raw):
        with pytest.raises(ElementParseError) as exc_info:
            Action.parse(raw)
        assert exc_info.value.token == ""


class TestScopedResource:

    def test_parse_scope_resource(self):
        assert ScopedResource.parse("account:account-123") == ScopedResource(
            scope="account", resource="account-123",
        )

    @pytest.mark.parametrize("raw", ["", "scope:", ":resource", "scope::resource", "::"])
    def test_empty_segment_rejected_with_empty_token(self, raw):
        with pytest.raises(ElementParseError) as exc_info:
            ScopedResource.parse(raw)
        assert exc_info.value.token == ""

    def test_missing_separator_reports_whole_input(self):
        with pytest.raises(ElementParseError) as exc_info:
            ScopedResource.parse("account-123")
        assert exc_info.value.token == "account-123"

    def test_str_renders_canonical_form(self):
        assert str(ScopedResource.parse("account:JohnSmith")) == "account:JohnSmith"


class TestElementParseError:

    def test_message_carries_token(self):
        error = ElementParseError("")
        assert error.token == ""
        assert "token=''" in str(error)
