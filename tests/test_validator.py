import re

import pytest

from dataurl_inliner.rules import LiteralRule, PatternRule, RuleConfig, build_matchers
from dataurl_inliner.validator import EligibilityValidator, is_remote


def eligible(reference, **options):
    return EligibilityValidator(RuleConfig.build(**options)).is_eligible(reference)


class TestIsRemote:

    def test_http_and_https(self):
        assert is_remote("http://example.com/a.png")
        assert is_remote("HTTPS://EXAMPLE.COM/a.png")

    def test_local_paths(self):
        assert not is_remote("images/a.png")
        assert not is_remote("/static/a.png")
        assert not is_remote("//cdn.example.com/a.png")
        assert not is_remote("https://")


class TestRuleMatchers:

    def test_resolves_entry_kinds_once(self):
        matchers = build_matchers(["assets", re.compile(r"\.png$")])
        assert matchers == (LiteralRule("assets"), PatternRule(re.compile(r"\.png$")))

    def test_single_entry(self):
        assert build_matchers("assets") == (LiteralRule("assets"),)

    def test_unset_and_empty(self):
        assert build_matchers(None) is None
        assert build_matchers([]) is None

    def test_rejects_other_types(self):
        with pytest.raises(TypeError):
            build_matchers([42])

    def test_literal_is_case_sensitive(self):
        assert not LiteralRule("Assets").matches("assets/a.png")

    def test_pattern_uses_own_flags(self):
        assert PatternRule(re.compile(r"\.PNG$", re.IGNORECASE)).matches("a.png")
        assert not PatternRule(re.compile(r"\.PNG$")).matches("a.png")

    def test_rule_config_is_immutable(self):
        rules = RuleConfig.build(extensions="png")
        assert rules.extensions == (".png",)
        with pytest.raises(AttributeError):
            rules.remote = True

    def test_default_limit(self):
        assert RuleConfig().limit == 4096
        assert RuleConfig.build().limit == 4096


class TestEligibility:

    def test_empty_reference_rejected(self):
        assert not eligible("")
        assert not eligible(None)

    def test_local_without_rules(self):
        assert eligible("image.jpg")

    def test_remote_requires_flag(self):
        assert not eligible("https://example.com/image.jpg")
        assert eligible("https://example.com/image.jpg", remote=True, extensions=[".jpg", ".jpeg", ".png"])

    def test_local_with_extensions(self):
        assert eligible("image.jpg", extensions=[".jpg", ".jpeg", ".png"])

    def test_unsupported_extension(self):
        assert not eligible("font.woff", extensions=[".png", "svg"])
        assert not eligible("photo.jpg", extensions=[".png"])

    def test_extension_with_query(self):
        assert eligible("icon.svg?v=3", extensions="svg")

    def test_include_literal(self):
        assert eligible("assets/image.jpg", include=["assets"])
        assert not eligible("static/image.jpg", include=["assets"])

    def test_include_pattern(self):
        assert not eligible("assets/image.jpg", include=re.compile(r"\*\.png$", re.IGNORECASE))
        assert eligible("assets/image.JPG", include=re.compile(r"\.jpg$", re.IGNORECASE))

    def test_exclude_literal(self):
        assert not eligible("assets/image.jpg", exclude=["assets"])

    def test_exclude_pattern_no_match(self):
        assert eligible("assets/image.jpg", exclude=re.compile(r"\*\.png$", re.IGNORECASE))

    def test_include_miss_rejects_before_exclude(self):
        assert not eligible("assets/image.jpg", include=re.compile(r"\*\.jpg$"), exclude=["static"])

    def test_exclude_wins_over_include(self):
        assert not eligible("assets/image.jpg", include=["assets"], exclude=[re.compile(r"\.jpg$")])
