import os
import sys

# Ensure project root is on sys.path for imports when running tests directly
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest

from blog_porter.extractors import ParserDefaults, parse_source, parse_wxr
from blog_porter.extractors.wxr_reader import list_post_items, load_document
from blog_porter.migrators import ImportBatch
from blog_porter.models.blog_post import PostStatus
from blog_porter.utils.errors import NoValidPostsError, ParseError

WXR = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"
  xmlns:excerpt="http://wordpress.org/export/{version}/excerpt/"
  xmlns:content="http://purl.org/rss/1.0/modules/content/"
  xmlns:dc="http://purl.org/dc/elements/1.1/"
  xmlns:wp="http://wordpress.org/export/{version}/">
<channel>
  <title>Old blog</title>
  {items}
</channel>
</rss>
"""

POST = """
  <item>
    <title>Watering Basics</title>
    <dc:creator><![CDATA[Maria]]></dc:creator>
    <content:encoded><![CDATA[<p>Water &amp; light <img src="https://cdn.example.com/a.jpg"></p>]]></content:encoded>
    <excerpt:encoded><![CDATA[Short intro]]></excerpt:encoded>
    <wp:post_name><![CDATA[watering-basics]]></wp:post_name>
    <wp:post_date><![CDATA[2024-01-15 10:00:00]]></wp:post_date>
    <wp:status><![CDATA[publish]]></wp:status>
    <wp:post_type><![CDATA[post]]></wp:post_type>
    <category domain="category" nicename="plant-care"><![CDATA[Plant Care]]></category>
    <category domain="category" nicename="indoor"><![CDATA[Indoor]]></category>
    <category domain="post_tag" nicename="tips"><![CDATA[tips]]></category>
    <category domain="post_tag" nicename="water"><![CDATA[water]]></category>
  </item>
"""

DRAFT_POST = """
  <item>
    <title>Unfinished</title>
    <pubDate>Mon, 15 Jan 2024 10:00:00 +0000</pubDate>
    <content:encoded><![CDATA[<p>Some words about soil.</p>]]></content:encoded>
    <wp:status><![CDATA[draft]]></wp:status>
    <wp:post_type><![CDATA[post]]></wp:post_type>
  </item>
"""

PAGE = """
  <item>
    <title>About us</title>
    <content:encoded><![CDATA[<p>We sell plants.</p>]]></content:encoded>
    <wp:status><![CDATA[publish]]></wp:status>
    <wp:post_type><![CDATA[page]]></wp:post_type>
  </item>
"""


def build(*items, version="1.2"):
    return WXR.format(version=version, items="".join(items))


def test_extracts_post_fields():
    (post,) = parse_wxr(build(POST))
    assert post.title == "Watering Basics"
    assert post.author == "Maria"
    assert post.content.startswith("<p>Water &amp; light")
    assert post.excerpt == "Short intro"
    assert post.slug_hint == "watering-basics"
    assert post.publish_date == "2024-01-15T10:00:00"
    assert post.status is PostStatus.PUBLISHED


def test_first_category_is_primary_and_rest_fold_into_tags():
    (post,) = parse_wxr(build(POST))
    assert post.category == "Plant Care"
    assert post.tags == ["tips", "water", "Indoor"]


def test_defaults_and_fallbacks():
    (post,) = parse_wxr(build(DRAFT_POST), ParserDefaults(author="Team", category="News"))
    assert post.status is PostStatus.DRAFT
    assert post.author == "Team"
    assert post.category == "News"
    assert post.tags == []
    # falls back to pubDate and to an excerpt derived from the content
    assert post.publish_date == "2024-01-15T10:00:00"
    assert post.excerpt == "Some words about soil."


def test_only_post_items_are_returned():
    drafts = parse_wxr(build(PAGE, POST, DRAFT_POST))
    assert [d.title for d in drafts] == ["Watering Basics", "Unfinished"]


def test_page_only_export_yields_no_drafts():
    drafts = parse_wxr(build(PAGE))
    assert drafts == []
    with pytest.raises(NoValidPostsError, match="No valid posts found"):
        ImportBatch(drafts)


def test_item_without_title_or_content_is_skipped():
    untitled = POST.replace("<title>Watering Basics</title>", "<title></title>")
    empty = DRAFT_POST.replace("<p>Some words about soil.</p>", "")
    assert parse_wxr(build(untitled, empty)) == []


def test_older_wxr_namespace_versions_are_read():
    (post,) = parse_wxr(build(POST, version="1.1"))
    assert post.slug_hint == "watering-basics"
    assert post.excerpt == "Short intro"


def test_attachment_url_is_the_starting_featured_image():
    item = POST.replace(
        "<wp:post_type>",
        "<wp:attachment_url><![CDATA[https://example.com/cover.png]]></wp:attachment_url>\n    <wp:post_type>",
    )
    (post,) = parse_wxr(build(item))
    assert post.featured_image_url == "https://example.com/cover.png"


def test_localized_postmeta():
    item = POST.replace(
        "</item>",
        "<wp:postmeta><wp:meta_key><![CDATA[title_ar]]></wp:meta_key>"
        "<wp:meta_value><![CDATA[أساسيات الري]]></wp:meta_value></wp:postmeta></item>",
    )
    (post,) = parse_wxr(build(item))
    assert post.title_localized == "أساسيات الري"


def test_invalid_xml_raises_parse_error():
    with pytest.raises(ParseError):
        parse_wxr('<?xml version="1.0"?><rss><channel><item></channel>')


def test_reader_can_list_every_item():
    doc = load_document(build(PAGE, POST))
    assert [i.post_type for i in list_post_items(doc, post_type=None)] == ["page", "post"]
    assert [i.title for i in list_post_items(doc)] == ["Watering Basics"]


def test_parse_source_detects_wxr():
    parsed = parse_source(build(POST))
    assert parsed.format.value == "wordpress-xml"
    assert len(parsed.records) == 1
    assert parsed.ignored_columns == []


def test_description_only_item_uses_it_for_content_and_excerpt():
    rss_item = """
  <item>
    <title>Feed entry</title>
    <description><![CDATA[<p>Posted from the feed reader.</p>]]></description>
    <wp:status><![CDATA[publish]]></wp:status>
    <wp:post_type><![CDATA[post]]></wp:post_type>
  </item>
"""
    (post,) = parse_wxr(build(rss_item))
    assert post.content == "<p>Posted from the feed reader.</p>"
    assert post.excerpt == "Posted from the feed reader."


def test_long_description_excerpt_is_cut():
    body = " ".join(["sentence"] * 40)
    rss_item = f"""
  <item>
    <title>Long entry</title>
    <content:encoded><![CDATA[<p>Full body</p>]]></content:encoded>
    <description><![CDATA[{body}]]></description>
    <wp:post_type><![CDATA[post]]></wp:post_type>
  </item>
"""
    (post,) = parse_wxr(build(rss_item))
    assert post.content == "<p>Full body</p>"
    assert post.excerpt.endswith("…")
    assert len(post.excerpt) <= 161
