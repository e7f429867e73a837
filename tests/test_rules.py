"""Tests for single rules and replacement templates."""

import re

import pytest

from userextract import ConfigError, Rule, RuleOutcome, RuleResult
from userextract.extraction.template import ReplacementTemplate


# ---------------------------------------------------------------------------
# Replacement templates
# ---------------------------------------------------------------------------


def _expand(pattern, template, text):
    compiled = re.compile(pattern)
    return ReplacementTemplate(template, compiled).expand(compiled.fullmatch(text))


class TestReplacementTemplate:
    def test_numbered_group(self):
        assert _expand(r"(\w+)@(\w+)", "$2/$1", "alice@REALM") == "REALM/alice"

    def test_group_zero_is_whole_match(self):
        assert _expand(r"(\w+)@\w+", "<$0>", "alice@REALM") == "<alice@REALM>"

    def test_literal_text_only(self):
        assert _expand(r".*", "guest", "anything") == "guest"

    def test_empty_template(self):
        assert _expand(r"(.*)", "", "bob") == ""

    def test_named_group(self):
        assert _expand(r"(?P<name>\w+)@(?P<realm>\w+)", "${realm}_${name}", "bob@CORP") == "CORP_bob"

    def test_escaped_dollar_is_literal(self):
        assert _expand(r"(\w+)", r"\$1", "carol") == "$1"

    def test_escaped_backslash_is_literal(self):
        assert _expand(r"(\w+)", r"dom\\$1", "carol") == "dom\\carol"

    def test_multi_digit_reference_stays_within_group_count(self):
        # One group: "$12" is group 1 followed by a literal "2"
        assert _expand(r"(\w+)", "$12", "dave") == "dave2"

    def test_multi_digit_reference_uses_existing_group(self):
        pattern = "".join(f"({c})" for c in "abcdefghijkl")
        assert _expand(pattern, "$12", "abcdefghijkl") == "l"

    def test_unmatched_optional_group_expands_empty(self):
        assert _expand(r"(\w+)(@\w+)?", "$1$2", "erin") == "erin"

    def test_group_out_of_range_rejected(self):
        with pytest.raises(ConfigError, match="has no group 2"):
            ReplacementTemplate("$2", re.compile(r"(\w+)"))

    def test_default_template_without_groups_rejected(self):
        with pytest.raises(ConfigError, match="has no group 1"):
            ReplacementTemplate("$1", re.compile(r"\w+"))

    def test_unknown_named_group_rejected(self):
        with pytest.raises(ConfigError, match="no group named 'realm'"):
            ReplacementTemplate("${realm}", re.compile(r"(?P<name>\w+)"))

    def test_unterminated_named_group_rejected(self):
        with pytest.raises(ConfigError, match="missing"):
            ReplacementTemplate("${name", re.compile(r"(?P<name>\w+)"))

    def test_trailing_dollar_rejected(self):
        with pytest.raises(ConfigError, match="illegal group reference"):
            ReplacementTemplate("user$", re.compile(r"(\w+)"))

    def test_dollar_followed_by_letter_rejected(self):
        with pytest.raises(ConfigError, match="illegal group reference"):
            ReplacementTemplate("$x", re.compile(r"(\w+)"))

    def test_trailing_backslash_rejected(self):
        with pytest.raises(ConfigError, match="escaped"):
            ReplacementTemplate("user\\", re.compile(r"(\w+)"))

    def test_source_is_kept(self):
        template = ReplacementTemplate("${name}", re.compile(r"(?P<name>\w+)"))
        assert template.source == "${name}"


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


class TestRuleConstruction:
    def test_defaults(self):
        rule = Rule(r"(.*)")
        assert rule.user == "$1"
        assert rule.allow is True
        assert rule.pattern.pattern == "(.*)"

    def test_invalid_regex_fails_at_construction(self):
        with pytest.raises(ConfigError, match="Invalid rule pattern"):
            Rule(r"(unclosed")

    def test_non_string_pattern_rejected(self):
        with pytest.raises(ConfigError):
            Rule(None)

    def test_bad_template_fails_at_construction(self):
        with pytest.raises(ConfigError):
            Rule(r"(\w+)", user="$3")

    def test_deny_rule_does_not_need_groups(self):
        rule = Rule(r"admin@.*", allow=False)
        assert rule.allow is False
        assert rule.user == "$1"

    def test_non_string_template_rejected(self):
        with pytest.raises(ConfigError):
            Rule(r"(.*)", user=None, allow=False)

    @pytest.mark.parametrize("allow", ["false", 0, 1, None])
    def test_non_boolean_allow_rejected(self, allow):
        with pytest.raises(ConfigError, match="allow flag must be a boolean"):
            Rule(r"(admin)@.*", allow=allow)

    def test_to_dict(self):
        rule = Rule(r"(\w+)@X", user="u_$1", allow=True)
        assert rule.to_dict() == {"pattern": r"(\w+)@X", "user": "u_$1", "allow": True}

    def test_equality_and_hash(self):
        assert Rule(r"(.*)") == Rule(r"(.*)", "$1", True)
        assert Rule(r"(.*)") != Rule(r"(.*)", "$1", False)
        assert len({Rule(r"(.*)"), Rule(r"(.*)")}) == 1

    def test_repr(self):
        assert "allow=False" in repr(Rule(r"(x)", allow=False))

    def test_immutable(self):
        rule = Rule(r"(.*)")
        with pytest.raises(AttributeError):
            rule.allow = False


class TestRuleExtract:
    def test_extracts_first_group(self):
        rule = Rule(r"(\w+)@EXAMPLE\.COM")
        assert rule.extract("alice@EXAMPLE.COM") == RuleResult(RuleOutcome.EXTRACTED, "alice")

    def test_no_match(self):
        result = Rule(r"(\w+)@EXAMPLE\.COM").extract("alice@OTHER.COM")
        assert result.outcome == RuleOutcome.NO_MATCH
        assert result.user is None
        assert result.is_terminal is False

    def test_match_is_whole_string(self):
        rule = Rule(r"(\w+)@EXAMPLE\.COM")
        assert rule.extract("alice@EXAMPLE.COM.evil.org").outcome == RuleOutcome.NO_MATCH
        assert rule.extract("xalice@EXAMPLE.COM ").outcome == RuleOutcome.NO_MATCH

    def test_anchored_pattern(self):
        rule = Rule(r"^(\w+)@EXAMPLE\.COM$")
        assert rule.extract("alice@EXAMPLE.COM").user == "alice"

    def test_denied(self):
        result = Rule(r"admin@.*", user="", allow=False).extract("admin@EXAMPLE.COM")
        assert result.outcome == RuleOutcome.DENIED
        assert result.is_terminal is True

    def test_deny_rule_does_not_match(self):
        result = Rule(r"admin@.*", user="", allow=False).extract("alice@EXAMPLE.COM")
        assert result.outcome == RuleOutcome.NO_MATCH

    def test_empty_result(self):
        result = Rule(r"(.*)", user="").extract("bob")
        assert result.outcome == RuleOutcome.EMPTY
        assert result.is_terminal is True

    def test_whitespace_only_result_is_empty(self):
        assert Rule(r"(\s*)x").extract("   x").outcome == RuleOutcome.EMPTY

    def test_result_is_trimmed(self):
        result = Rule(r"(\w+)", user="  $1  ").extract("carol")
        assert result.user == "carol"

    def test_empty_principal(self):
        assert Rule(r"(\w+)").extract("").outcome == RuleOutcome.NO_MATCH
        assert Rule(r"(.*)").extract("").outcome == RuleOutcome.EMPTY

    def test_non_string_principal_rejected(self):
        with pytest.raises(TypeError):
            Rule(r"(.*)").extract(None)
