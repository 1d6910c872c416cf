"""
Unit tests for category/tag filters and facet listings.
"""

import pytest

from kb_search.models import Guide
from kb_search.search.filters import filter_by_category, filter_by_tags, get_categories, get_tags

pytestmark = pytest.mark.unit


class TestFilters:
    """Test collection filters"""

    def test_filter_by_category_case_insensitive(self, guides):
        ids = [g.id for g in filter_by_category(guides, "accounts")]
        assert ids == ["pw-reset", "mfa"]

    def test_filter_by_category_empty_keeps_all(self, guides):
        assert filter_by_category(guides, "") == guides
        assert filter_by_category(guides, None) == guides

    def test_filter_by_tags_any_match(self, guides):
        ids = [g.id for g in filter_by_tags(guides, ["NETWORK", "mfa"])]
        assert ids == ["vpn", "mfa", "printer"]

    def test_filter_by_tags_empty_keeps_all(self, guides):
        assert filter_by_tags(guides, []) == guides
        assert filter_by_tags(guides, None) == guides

    def test_filter_by_tags_no_match(self, guides):
        assert filter_by_tags(guides, ["kubernetes"]) == []


class TestFacets:
    """Test category and tag listings"""

    def test_get_categories_sorted_unique(self, guides):
        assert get_categories(guides) == ["Accounts", "Hardware", "Network"]

    def test_get_tags_sorted_unique(self, guides):
        assert get_tags(guides) == [
            "active-directory", "mfa", "network", "password", "printer", "remote", "security", "vpn",
        ]

    def test_empty_collection(self):
        assert get_categories([]) == []
        assert get_tags([Guide(id="bare")]) == []
