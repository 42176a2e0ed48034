"""Tests for search query composition."""

import pytest

from slackreader.services.query_modifiers import (
    SearchFilters,
    SearchSurface,
    append_modifiers,
    apply_scope,
    build_search_query,
    with_sigil,
)


class TestBuildSearchQuery:
    def test_no_filters_returns_base_unchanged(self):
        assert build_search_query("hello", SearchFilters()) == "hello"

    def test_modifier_order_is_fixed(self):
        filters = SearchFilters(
            has_pins=True,
            channel="general",
            to_user="bob",
            from_user="alice",
            date_to="2025-02-01",
            date_from="2025-01-01",
            has_links=True,
        )
        assert build_search_query("report", filters) == (
            "report after:2025-01-01 before:2025-02-01 from:@alice to:@bob "
            "in:#general has:link has:pin"
        )

    def test_date_bounds_only_when_present(self):
        only_from = build_search_query("x", SearchFilters(date_from="2025-01-01"))
        assert "after:2025-01-01" in only_from
        assert "before:" not in only_from

        only_to = build_search_query("x", SearchFilters(date_to="2025-01-31"))
        assert "before:2025-01-31" in only_to
        assert "after:" not in only_to

    def test_empty_strings_count_as_absent(self):
        filters = SearchFilters(date_from="", from_user="", channel="")
        assert build_search_query("x", filters) == "x"

    @pytest.mark.parametrize(
        "filters, expected",
        [
            (SearchFilters(from_user="@alice"), "q from:@alice"),
            (SearchFilters(to_user="@bob"), "q to:@bob"),
            (SearchFilters(channel="#general"), "q in:#general"),
        ],
    )
    def test_no_double_sigils(self, filters, expected):
        assert build_search_query("q", filters) == expected

    def test_content_flags_are_cumulative(self):
        filters = SearchFilters(
            has_links=True, has_files=True, has_images=True, has_stars=True, has_pins=True
        )
        assert build_search_query("q", filters) == (
            "q has:link has:file has:image has:star has:pin"
        )

    def test_modifier_already_in_base_is_not_repeated(self):
        query = build_search_query("q has:link", SearchFilters(has_links=True))
        assert query == "q has:link"

    def test_deterministic(self):
        filters = SearchFilters(from_user="alice", has_files=True)
        assert build_search_query("q", filters) == build_search_query("q", filters)


class TestAppendModifiers:
    def test_appends_in_order(self):
        assert append_modifiers("q", "is:dm", "-in:#*") == "q is:dm -in:#*"

    def test_nothing_new_leaves_query_untouched(self):
        assert append_modifiers("q is:mpim", "is:mpim") == "q is:mpim"

    def test_repeated_modifier_emitted_once(self):
        assert append_modifiers("q", "is:private", "is:private") == "q is:private"


class TestApplyScope:
    def test_dm_without_target_excludes_channels(self):
        query = apply_scope("hello", SearchSurface.DIRECT_MESSAGE)
        assert query.endswith("is:dm -in:#*")
        assert "in:@" not in query

    def test_dm_with_target(self):
        assert apply_scope("hello", SearchSurface.DIRECT_MESSAGE, "alice") == "hello in:@alice"
        assert apply_scope("hello", SearchSurface.DIRECT_MESSAGE, "@alice") == "hello in:@alice"

    def test_mpim_ignores_member_list(self):
        scoped = apply_scope("hello", SearchSurface.MULTI_PARTY, "alice,bob")
        assert scoped == "hello is:mpim"
        assert apply_scope("hello", SearchSurface.MULTI_PARTY) == "hello is:mpim"

    def test_private_channel(self):
        assert apply_scope("q", SearchSurface.PRIVATE_CHANNEL) == "q is:private"
        assert apply_scope("q", SearchSurface.PRIVATE_CHANNEL, "secret") == "q in:#secret"

    def test_public_target_supersedes_blanket_scope(self):
        query = apply_scope("q", SearchSurface.PUBLIC_CHANNEL, "general")
        assert "in:#general" in query
        assert "is:public" not in query

    def test_generic_adds_nothing(self):
        assert apply_scope("q", SearchSurface.GENERIC, "ignored") == "q"


def test_with_sigil():
    assert with_sigil("alice", "@") == "@alice"
    assert with_sigil("@alice", "@") == "@alice"
    assert with_sigil("general", "#") == "#general"
