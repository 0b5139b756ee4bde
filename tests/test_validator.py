"""Tests for validator module."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from publisher.front_matter import post_from_markdown
from validator import (
    find_duplicate_titles,
    sanitize_tag,
    sanitize_tags,
    validate_post,
    validate_posts,
)

NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


class TestValidatePost:
    def test_clean_post_is_valid(self, make_post) -> None:
        result = validate_post(make_post(), now=NOW)
        assert result.is_valid
        assert result.errors == []
        assert result.warnings == []

    def test_missing_title_is_error(self, make_post) -> None:
        result = validate_post(make_post(title=""), now=NOW)
        assert not result.is_valid
        assert result.errors == ["Title is required and cannot be empty"]

    def test_whitespace_description_is_error(self, make_post) -> None:
        result = validate_post(make_post(description="   "), now=NOW)
        assert not result.is_valid
        assert "Description is required and cannot be empty" in result.errors

    def test_missing_pub_datetime_is_error(self, make_post) -> None:
        result = validate_post(make_post(pub_datetime=None), now=NOW)
        assert result.errors == ["Publication date is required"]

    def test_mod_before_pub_is_error(self, make_post) -> None:
        post = make_post(mod_datetime=datetime(2023, 12, 31, tzinfo=timezone.utc))
        result = validate_post(post, now=NOW)
        assert result.errors == ["Modified date cannot be before publication date"]

    def test_mod_after_pub_is_fine(self, make_post) -> None:
        post = make_post(mod_datetime=datetime(2024, 2, 1, tzinfo=timezone.utc))
        assert validate_post(post, now=NOW).is_valid

    def test_errors_in_rule_order(self, make_post) -> None:
        result = validate_post(make_post(title="", description="", pub_datetime=None), now=NOW)
        assert result.errors == [
            "Title is required and cannot be empty",
            "Description is required and cannot be empty",
            "Publication date is required",
        ]

    def test_long_title_is_warning_only(self, make_post) -> None:
        result = validate_post(make_post(title="t" * 150), now=NOW)
        assert result.is_valid
        assert result.errors == []
        assert any("longer than recommended" in w and "100" in w for w in result.warnings)

    def test_description_length_warnings(self, make_post) -> None:
        assert "Description is longer than recommended (200 characters)" in validate_post(
            make_post(description="d" * 201), now=NOW).warnings
        assert "Description is shorter than recommended (50 characters)" in validate_post(
            make_post(description="short"), now=NOW).warnings

    def test_tag_count_warnings(self, make_post) -> None:
        assert "Post should have at least one tag" in validate_post(make_post(tags=[]), now=NOW).warnings
        many = [f"t{i}" for i in range(11)]
        assert "Too many tags (recommended: 3-5 tags)" in validate_post(make_post(tags=many), now=NOW).warnings

    def test_future_non_draft_warns(self, make_post) -> None:
        post = make_post(pub_datetime=NOW + timedelta(days=3))
        assert "Publication date is in the future for a non-draft post" in validate_post(post, now=NOW).warnings

    def test_future_draft_does_not_warn(self, make_post) -> None:
        post = make_post(pub_datetime=NOW + timedelta(days=3), draft=True)
        assert validate_post(post, now=NOW).warnings == []


class TestValidatePosts:
    def test_keyed_by_id_in_input_order(self, make_post) -> None:
        results = validate_posts([make_post("b"), make_post("a", title="")], now=NOW)
        assert list(results) == ["b", "a"]
        assert results["b"].is_valid
        assert not results["a"].is_valid


class TestFindDuplicateTitles:
    def test_groups_normalized_titles(self, make_post) -> None:
        first = make_post("1", title="Intro")
        second = make_post("2", title="intro ")
        other = make_post("3", title="Other")
        dups = find_duplicate_titles([first, second, other])
        assert list(dups) == ["intro"]
        assert dups["intro"] == [first, second]

    def test_no_duplicates(self, make_post) -> None:
        assert find_duplicate_titles([make_post("1"), make_post("2")]) == {}


class TestSanitizeTag:
    def test_basic(self) -> None:
        assert sanitize_tag("Hello World!") == "hello-world"

    def test_collapses_hyphens_and_spaces(self) -> None:
        assert sanitize_tag("  Web  --  Dev ") == "web-dev"

    def test_strips_non_ascii(self) -> None:
        assert sanitize_tag("Café") == "caf"

    def test_sanitize_tags_drops_empty(self) -> None:
        assert sanitize_tags(["Hello World!", "   "]) == ["hello-world"]

    def test_sanitize_tags_drops_symbol_only(self) -> None:
        assert sanitize_tags(["!!!", "Python"]) == ["python"]


class TestValidateLoadedPost:
    def test_date_only_mod_datetime(self) -> None:
        post = post_from_markdown(
            "---\ntitle: T\ndescription: D\npubDatetime: 2024-03-02T09:00:00Z\n"
            "modDatetime: 2024-03-05\ntags: [a]\n---\n",
            "p",
        )
        result = validate_post(post, now=NOW)
        assert "Modified date cannot be before publication date" not in result.errors

    def test_date_only_mod_before_pub(self) -> None:
        post = post_from_markdown(
            "---\ntitle: T\ndescription: D\npubDatetime: 2024-03-02T09:00:00Z\n"
            "modDatetime: 2024-03-02\ntags: [a]\n---\n",
            "p",
        )
        result = validate_post(post, now=NOW)
        assert result.errors == ["Modified date cannot be before publication date"]
