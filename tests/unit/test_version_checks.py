"""
Unit tests for version extraction and vulnerable range classification.

Tests:
- Readme and stylesheet extraction patterns
- Boundary semantics (fixed bound is patched, introduced bound is vulnerable)
- Open ranges on either side
- Unversioned and unparseable documents
- Bound validation and enum preconditions
"""

import pytest

from wpfinger.constants import SourceKind, Verdict
from wpfinger.exceptions import InvalidVersionBound, WPFingerError
from wpfinger.scanner.version_checks import VulnerabilityEvaluator, classify, extract_version
from wpfinger.scanner.versions import InvalidVersion, compare_versions, is_valid_version


@pytest.fixture
def evaluator():
    return VulnerabilityEvaluator()


PLUGIN_README = """=== Contact Form ===
Contributors: someone
Tags: contact, form
Requires at least: 4.0
Tested up to: 5.9
Stable tag: 2.6.6
License: GPLv2 or later
"""

THEME_STYLE = """/*
Theme Name: Twenty Twenty
Author: the WordPress team
Version: 1.5.2
Text Domain: twentytwenty
*/
"""


class TestExtractVersion:

    def test_readme_stable_tag(self):
        assert extract_version(PLUGIN_README, SourceKind.README) == "2.6.6"

    def test_readme_version_line(self):
        assert extract_version("Version: 3.1.0-beta", SourceKind.README) == "3.1.0-beta"

    def test_readme_is_case_insensitive(self):
        assert extract_version("STABLE TAG: 1.2", SourceKind.README) == "1.2"

    def test_readme_skips_trunk(self):
        body = "Stable tag: trunk\nVersion: 1.4.0\n"
        assert extract_version(body, SourceKind.README) == "1.4.0"

    def test_readme_trunk_only(self):
        assert extract_version("Stable tag: trunk", SourceKind.README) is None

    def test_readme_first_match_wins(self):
        body = "Version: 1.0.0\nStable tag: 2.0.0\n"
        assert extract_version(body, SourceKind.README) == "1.0.0"

    def test_stylesheet_version_header(self):
        assert extract_version(THEME_STYLE, SourceKind.STYLESHEET) == "1.5.2"

    def test_stylesheet_ignores_stable_tag(self):
        assert extract_version("Stable tag: 2.0", SourceKind.STYLESHEET) is None

    def test_unknown_source_kind_fails_fast(self):
        with pytest.raises(TypeError):
            extract_version("Version: 1.0", "changelog")


class TestClassify:

    @pytest.mark.parametrize("version,fixed,introduced,expected", [
        # Open range on both sides
        ("2.6.6", None, None, Verdict.APPEARS),
        # Fixed bound only
        ("2.6.6", "2.6.6", None, Verdict.SAFE),
        ("2.6.5", "2.6.6", None, Verdict.APPEARS),
        ("3.0.0", "2.6.6", None, Verdict.SAFE),
        # Introduced bound only
        ("1.5.0", None, "1.5.0", Verdict.APPEARS),
        ("1.4.9", None, "1.5.0", Verdict.SAFE),
        ("9.0", None, "1.5.0", Verdict.APPEARS),
        # Both bounds
        ("1.0.0", "2.0.0", "1.5.0", Verdict.SAFE),
        ("1.9.9", "2.0.0", "1.5.0", Verdict.APPEARS),
        ("1.5.0", "2.0.0", "1.5.0", Verdict.APPEARS),
        ("2.0.0", "2.0.0", "1.5.0", Verdict.SAFE),
    ])
    def test_range_boundaries(self, version, fixed, introduced, expected):
        assert classify(version, fixed, introduced) == expected

    def test_injected_comparator(self):
        calls = []

        def comparator(a, b):
            calls.append((a, b))
            return -1

        assert classify("x", "y", "z", comparator) == Verdict.SAFE
        assert calls == [("x", "y"), ("x", "z")]


class TestVulnerabilityEvaluator:

    def test_unbounded_range_appears(self, evaluator):
        assert evaluator.evaluate("Stable tag: 2.6.6", SourceKind.README) == Verdict.APPEARS

    def test_equal_to_fixed_is_safe(self, evaluator):
        assert evaluator.evaluate("Stable tag: 2.6.6", SourceKind.README, "2.6.6") == Verdict.SAFE

    def test_below_fixed_appears(self, evaluator):
        assert evaluator.evaluate("Stable tag: 2.6.5", SourceKind.README, "2.6.6") == Verdict.APPEARS

    def test_below_introduced_is_safe(self, evaluator):
        assert evaluator.evaluate("Stable tag: 1.0.0", SourceKind.README, "2.0.0", "1.5.0") == Verdict.SAFE

    def test_inside_range_appears(self, evaluator):
        assert evaluator.evaluate("Stable tag: 1.9.9", SourceKind.README, "2.0.0", "1.5.0") == Verdict.APPEARS

    @pytest.mark.parametrize("fixed,introduced", [
        (None, None),
        ("2.0.0", None),
        (None, "1.0.0"),
        ("2.0.0", "1.0.0"),
    ])
    def test_no_version_is_detected_regardless_of_bounds(self, evaluator, fixed, introduced):
        verdict = evaluator.evaluate("no version info here", SourceKind.README, fixed, introduced)
        assert verdict == Verdict.DETECTED

    def test_stylesheet_source(self, evaluator):
        assert evaluator.evaluate(THEME_STYLE, SourceKind.STYLESHEET, "1.6.0") == Verdict.APPEARS

    @pytest.mark.parametrize("body,fixed,expected", [
        ("Stable tag: 1.4.2-custom", "2.0.0", Verdict.APPEARS),
        ("Stable tag: 1.4.2-custom", "1.4.1", Verdict.SAFE),
        # Hyphenated suffix is a pre-release of 2.0, not a post-release
        ("Stable tag: 2.0-1", "2.0", Verdict.APPEARS),
        ("Stable tag: 1.0.x", "1.0", Verdict.APPEARS),
        ("Version: 5.2rc1", "5.2", Verdict.APPEARS),
    ])
    def test_suffixed_versions_are_classified(self, evaluator, body, fixed, expected):
        assert evaluator.evaluate(body, SourceKind.README, fixed) == expected

    @pytest.mark.parametrize("fixed", [None, "1.0"])
    def test_token_without_digits_is_detected(self, evaluator, fixed):
        assert evaluator.evaluate("Version: abc", SourceKind.STYLESHEET, fixed) == Verdict.DETECTED

    def test_invalid_fixed_bound_raises(self, evaluator):
        with pytest.raises(InvalidVersionBound) as exc_info:
            evaluator.evaluate("Stable tag: 1.0", SourceKind.README, fixed_version="not a version")
        assert exc_info.value.role == "fixed"
        assert exc_info.value.bound == "not a version"

    def test_invalid_introduced_bound_raises_even_without_version(self, evaluator):
        with pytest.raises(InvalidVersionBound):
            evaluator.evaluate("nothing here", SourceKind.README, introduced_version="???")

    def test_invalid_bound_is_a_value_error(self):
        assert issubclass(InvalidVersionBound, ValueError)
        assert issubclass(InvalidVersionBound, WPFingerError)

    def test_unknown_source_kind_raises(self, evaluator):
        with pytest.raises(TypeError):
            evaluator.evaluate("Version: 1.0", "style")


class TestCompareVersions:

    @pytest.mark.parametrize("a,b,expected", [
        ("1.0", "1.0.0", 0),
        ("1.9.9", "1.10.0", -1),
        ("2.6.6", "2.6.5", 1),
        ("1.0.0-beta", "1.0.0", -1),
        ("2.0-1", "2.0", -1),
        ("1.0.x", "1.0", -1),
        ("1.4.2-custom", "1.4.2", -1),
        ("1.4.2-custom", "1.4.1", 1),
        ("1.0a1", "1.0b1", -1),
        ("5.2rc1", "5.2", -1),
        ("1.10", "1.9", 1),
    ])
    def test_ordering(self, a, b, expected):
        assert compare_versions(a, b) == expected

    def test_invalid_version_raises(self):
        with pytest.raises(InvalidVersion):
            compare_versions("1.2 beta", "1.2")

    def test_is_valid_version(self):
        assert is_valid_version("5.2.1")
        assert is_valid_version("1.0.x")
        assert not is_valid_version("trunk")
        assert not is_valid_version("1.2!")
