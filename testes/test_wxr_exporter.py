import os
import sys

# Ensure project root is on sys.path for imports when running tests directly
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import xml.etree.ElementTree as ET
from datetime import datetime

from blog_porter.exporters import WxrExporter, cdata, export_wxr
from blog_porter.extractors import parse_wxr
from blog_porter.migrators import DuckDBPostStore
from blog_porter.models.blog_post import CanonicalRecord, PostStatus

WP = "{http://wordpress.org/export/1.2/}"


def record(slug, **overrides):
    fields = dict(
        title="Watering & Light",
        content="<p>Water <b>weekly</b> &amp; keep in shade.</p>",
        excerpt="Water weekly",
        publish_date="2024-03-02T08:30:00",
        author="Ann",
        category="Plant Care",
        tags=["tips", "indoor plants"],
        status="publish",
        slug=slug,
    )
    fields.update(overrides)
    return CanonicalRecord(**fields)


def test_cdata_splits_terminator():
    assert cdata("a]]>b") == "<![CDATA[a]]]]><![CDATA[>b]]>"
    assert cdata(None) == "<![CDATA[]]>"


def test_document_is_well_formed_and_carries_channel():
    text = export_wxr(
        [record("watering-light")],
        site_title="Plant Shop",
        base_url="https://shop.test/",
        generated_at=datetime(2024, 5, 1, 12, 0, 0),
    )
    root = ET.fromstring(text)
    channel = root.find("channel")
    assert channel.findtext("title") == "Plant Shop"
    assert channel.findtext("link") == "https://shop.test"
    assert channel.findtext("pubDate") == "Wed, 01 May 2024 12:00:00 +0000"
    assert channel.findtext(f"{WP}wxr_version") == "1.2"
    item = channel.find("item")
    assert item.findtext("link") == "https://shop.test/blog/watering-light"
    assert item.findtext(f"{WP}post_date") == "2024-03-02 08:30:00"
    assert item.findtext(f"{WP}status") == "publish"
    assert item.findtext(f"{WP}post_id") == "1"


def test_tricky_content_survives_round_trip():
    content = "<p>a &amp; b</p><script>if (x]]>y) {}</script>"
    (post,) = parse_wxr(export_wxr([record("tricky", content=content)]))
    assert post.content == content
    assert post.title == "Watering & Light"


def test_round_trip_preserves_fields():
    source = record(
        "watering-light",
        title_localized="الري والضوء",
        content_localized="<p>اسق النبات</p>",
        excerpt_localized="اسق",
        resolved_featured_image="https://cdn.test/fern.jpg",
    )
    draft_source = record("draft-post", title="Drafty", status="draft", tags=[], category="News")
    first, second = parse_wxr(export_wxr([source, draft_source]))

    assert first.title == source.title
    assert first.content == source.content
    assert first.excerpt == source.excerpt
    assert first.slug_hint == "watering-light"
    assert first.publish_date == "2024-03-02T08:30:00"
    assert first.author == "Ann"
    assert first.category == "Plant Care"
    assert first.tags == ["tips", "indoor plants"]
    assert first.status is PostStatus.PUBLISHED
    assert first.featured_image_url == "https://cdn.test/fern.jpg"
    assert first.title_localized == "الري والضوء"
    assert first.content_localized == "<p>اسق النبات</p>"
    assert first.excerpt_localized == "اسق"

    assert second.status is PostStatus.DRAFT
    assert second.category == "News"
    assert second.tags == []
    assert second.featured_image_url is None


def test_tag_nicenames():
    root = ET.fromstring(export_wxr([record("x", tags=["Indoor Plants"])]))
    terms = root.find("channel").find("item").findall("category")
    assert [(t.get("domain"), t.get("nicename"), t.text) for t in terms] == [
        ("category", "plant-care", "Plant Care"),
        ("post_tag", "indoor-plants", "Indoor Plants"),
    ]


def test_empty_export_is_still_valid():
    root = ET.fromstring(export_wxr([]))
    assert root.find("channel").findall("item") == []


def test_exporter_reads_store_in_insertion_order(tmp_path):
    with DuckDBPostStore() as store:
        store.insert(record("second-first", title="Zeta"))
        store.insert(record("first-second", title="Alpha"))
        exporter = WxrExporter(store, site_title="Shop", base_url="https://shop.test")
        out = tmp_path / "export.xml"
        assert exporter.export_to_file(str(out)) == 2
        posts = parse_wxr(out.read_text(encoding="utf-8"))
        assert [p.title for p in posts] == ["Zeta", "Alpha"]
        items = ET.fromstring(exporter.export()).find("channel").findall("item")
        assert all(item.findtext(f"{WP}post_id") for item in items)
