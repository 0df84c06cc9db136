import os
import sys

# Ensure project root is on sys.path for imports when running tests directly
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from blog_porter.utils.categories import parse_categories_field, split_primary_category


def test_single_category_with_html_entity_is_normalized():
    assert parse_categories_field("Tips &amp; Tricks") == ["Tips & Tricks"]


def test_multiple_categories_pipe_separator_and_entities():
    raw = "Tips &amp; Tricks|Plant Care|Pots &amp; Planters"
    assert parse_categories_field(raw) == ["Tips & Tricks", "Plant Care", "Pots & Planters"]


def test_fallback_to_comma_separator():
    assert parse_categories_field("News, Events") == ["News", "Events"]


def test_deduplication_and_whitespace_trimming_order_preserved():
    assert parse_categories_field("Care| care |Care") == ["Care"]


def test_primary_category_and_extra_folded_into_tags():
    category, tags = split_primary_category(["Care", "Indoor", "tips"], ["tips", "water"], "General")
    assert category == "Care"
    assert tags == ["tips", "water", "Indoor"]


def test_default_category_when_none_given():
    assert split_primary_category([], ["a"], "General") == ("General", ["a"])
    assert split_primary_category(["  "], [], "General") == ("General", [])
