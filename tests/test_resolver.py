"""FlowResolver tests — branch rules first, then sequential flow."""

import logging

import pytest

from formflow.models.field import FormField
from formflow.resolver import FlowResolver, display_value, resolve_next

from helpers.builders import choice, form, rule, text


@pytest.fixture
def resolver():
    return FlowResolver()


def _fields(*fields):
    return form(*fields).fields


# =====================================================================
# Default sequential flow
# =====================================================================


class TestDefaultFlow:
    """No rule matched: next field in order, or terminate on the last."""

    def test_advances_to_next(self, resolver):
        fields = _fields(text("A"), text("B"), text("C"))
        res = resolver.resolve(fields[0], "x", fields)
        assert res.action == "advance"
        assert res.index == 1

    def test_last_field_terminates(self, resolver):
        fields = _fields(text("A"), text("B"))
        res = resolver.resolve(fields[1], "x", fields)
        assert res.action == "terminate"
        assert res.reason == "end_of_form"

    def test_single_field_form_terminates(self, resolver):
        fields = _fields(text("A"))
        assert resolver.resolve(fields[0], None, fields).reason == "end_of_form"

    def test_unmatched_answer_uses_default(self, resolver):
        fields = _fields(choice("Q", ["Yes", "No"], rules=[rule("No", "SUBMIT")]), text("B"))
        res = resolver.resolve(fields[0], "Yes", fields)
        assert res.action == "advance" and res.index == 1

    def test_field_not_in_list_raises(self, resolver):
        fields = _fields(text("A"))
        with pytest.raises(ValueError, match="not found"):
            resolver.resolve(text("Z"), "x", fields)


# =====================================================================
# Branch rules
# =====================================================================


class TestBranchRules:
    """Matched rule decides the destination."""

    def test_submit_terminates_with_rule_reason(self, resolver):
        fields = _fields(choice("Q", ["Yes", "No"], rules=[rule("No", "SUBMIT")]), text("B"))
        res = resolver.resolve(fields[0], "No", fields)
        assert res.action == "terminate"
        assert res.reason == "rule"

    def test_forward_jump(self, resolver):
        fields = _fields(
            choice("Q", ["a", "b"], rules=[rule("b", "D")]), text("B"), text("C"), text("D"),
        )
        res = resolver.resolve(fields[0], "b", fields)
        assert res.action == "jump"
        assert (res.index, res.field_id) == (3, "D")

    def test_backward_jump(self, resolver):
        fields = _fields(text("A"), text("B"), choice("Q", ["again"], rules=[rule("again", "A")]))
        res = resolver.resolve(fields[2], "again", fields)
        assert res.action == "jump" and res.index == 0

    def test_self_reference_jumps_onto_itself(self, resolver):
        fields = _fields(text("A"), choice("Q", ["loop"], rules=[rule("loop", "Q")]), text("C"))
        res = resolver.resolve(fields[1], "loop", fields)
        assert res.action == "jump" and res.index == 1

    def test_dangling_destination_falls_back(self, resolver, caplog):
        """Unknown destination behaves like no rule matched, with a warning."""
        fields = _fields(choice("Q", ["x"], rules=[rule("x", "ghost")]), text("B"))
        with caplog.at_level(logging.WARNING, logger="formflow.resolver"):
            res = resolver.resolve(fields[0], "x", fields)
        assert res.action == "advance" and res.index == 1
        assert "ghost" in caplog.text

    def test_dangling_on_last_field_terminates(self, resolver):
        fields = _fields(text("A"), choice("Q", ["x"], rules=[rule("x", "ghost")]))
        res = resolver.resolve(fields[1], "x", fields)
        assert res.action == "terminate" and res.reason == "end_of_form"

    def test_match_is_exact(self, resolver):
        """Trigger comparison is case- and whitespace-sensitive."""
        fields = _fields(choice("Q", ["No"], rules=[rule("No", "SUBMIT")]), text("B"))
        assert resolver.resolve(fields[0], "no", fields).action == "advance"
        assert resolver.resolve(fields[0], "No ", fields).action == "advance"

    def test_numeric_answer_matches_label(self, resolver):
        fields = _fields(choice("Q", ["1", "2"], rules=[rule("2", "SUBMIT")]), text("B"))
        assert resolver.resolve(fields[0], 2, fields).action == "terminate"
        assert resolver.resolve(fields[0], 2.0, fields).action == "terminate"


# =====================================================================
# Fields whose rules never apply
# =====================================================================


class TestIgnoredRules:
    """Rules only apply to single-choice select fields."""

    def test_text_field_rules_ignored(self, resolver):
        fields = _fields(text("A", rules=[rule("x", "SUBMIT")]), text("B"))
        assert resolver.resolve(fields[0], "x", fields).action == "advance"

    def test_multi_select_rules_ignored(self, resolver):
        fields = _fields(
            choice("M", ["a", "b"], multiple=True, rules=[rule("a", "SUBMIT")]), text("B"),
        )
        assert resolver.resolve(fields[0], ["a"], fields).action == "advance"
        assert resolver.resolve(fields[0], "a", fields).action == "advance"

    def test_rating_rules_ignored(self, resolver):
        fields = _fields(FormField(id="R", kind="rating", logic_rules=[rule("5", "SUBMIT")]), text("B"))
        assert resolver.resolve(fields[0], 5, fields).action == "advance"

    def test_empty_answer_never_matches(self, resolver):
        fields = _fields(choice("Q", ["None"], rules=[rule("None", "SUBMIT")]), text("B"))
        assert resolver.match_rule(fields[0], None) is None


# =====================================================================
# Helpers
# =====================================================================


def test_match_rule_first_wins(resolver):
    f = choice("Q", ["a", "b"], rules=[rule("b", "X"), rule("a", "Y")])
    assert resolver.match_rule(f, "a").destination_id == "Y"


def test_display_value():
    assert display_value("abc") == "abc"
    assert display_value(3) == "3"
    assert display_value(3.0) == "3"
    assert display_value(2.5) == "2.5"


def test_resolve_next_shorthand():
    fields = _fields(text("A"), text("B"))
    assert resolve_next(fields[0], "x", fields).index == 1
