"""
WXR serialization of canonical records.

The output is a WordPress eXtended RSS 1.2 document that
:func:`blog_porter.extractors.parse_wxr` (and WordPress itself) can import
again.  Every free-text value is wrapped in CDATA so markup and ampersands
survive untouched.
"""

from __future__ import annotations

from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Iterable, List, Optional
from xml.sax.saxutils import escape, quoteattr

from blog_porter.migrators.post_store import PostStore
from blog_porter.migrators.slug_allocator import slug_base
from blog_porter.models.blog_post import CanonicalRecord
from blog_porter.utils.dates import parse_iso, utc_now

WXR_VERSION = "1.2"

NAMESPACES = {
    "excerpt": "http://wordpress.org/export/1.2/excerpt/",
    "content": "http://purl.org/rss/1.0/modules/content/",
    "wfw": "http://wellformedweb.org/CommentAPI/",
    "dc": "http://purl.org/dc/elements/1.1/",
    "wp": "http://wordpress.org/export/1.2/",
}

LOCALIZED_META = (
    ("title_ar", "title_localized"),
    ("content_ar", "content_localized"),
    ("excerpt_ar", "excerpt_localized"),
)


def cdata(text: Optional[str]) -> str:
    # split any ']]>' so the section stays well-formed
    safe = (text or "").replace("]]>", "]]]]><![CDATA[>")
    return f"<![CDATA[{safe}]]>"


def _rfc2822(moment: datetime) -> str:
    return format_datetime(moment.replace(tzinfo=timezone.utc))


def _postmeta(key: str, value: str) -> str:
    return (
        "      <wp:postmeta>\n"
        f"        <wp:meta_key>{cdata(key)}</wp:meta_key>\n"
        f"        <wp:meta_value>{cdata(value)}</wp:meta_value>\n"
        "      </wp:postmeta>\n"
    )


def render_item(record: CanonicalRecord, *, base_url: str, post_id: str) -> str:
    """Serialize one record as an ``<item>`` block."""
    link = escape(f"{base_url.rstrip('/')}/blog/{record.slug}")
    published = parse_iso(record.publish_date)
    wp_date = published.strftime("%Y-%m-%d %H:%M:%S")
    lines: List[str] = [
        "    <item>\n",
        f"      <title>{cdata(record.title)}</title>\n",
        f"      <link>{link}</link>\n",
        f"      <pubDate>{_rfc2822(published)}</pubDate>\n",
        f"      <dc:creator>{cdata(record.author)}</dc:creator>\n",
        f'      <guid isPermaLink="false">{link}</guid>\n',
        f"      <description>{cdata(record.excerpt)}</description>\n",
        f"      <content:encoded>{cdata(record.content)}</content:encoded>\n",
        f"      <excerpt:encoded>{cdata(record.excerpt)}</excerpt:encoded>\n",
        f"      <wp:post_id>{escape(post_id)}</wp:post_id>\n",
        f"      <wp:post_date>{cdata(wp_date)}</wp:post_date>\n",
        f"      <wp:post_date_gmt>{cdata(wp_date)}</wp:post_date_gmt>\n",
        f"      <wp:post_name>{cdata(record.slug)}</wp:post_name>\n",
        f"      <wp:status>{cdata(record.status.wxr_value)}</wp:status>\n",
        f"      <wp:post_type>{cdata('post')}</wp:post_type>\n",
    ]
    if record.resolved_featured_image:
        lines.append(f"      <wp:attachment_url>{cdata(record.resolved_featured_image)}</wp:attachment_url>\n")
    lines.append(
        f'      <category domain="category" nicename={quoteattr(slug_base(record.category))}>'
        f"{cdata(record.category)}</category>\n"
    )
    for tag in record.tags:
        lines.append(
            f'      <category domain="post_tag" nicename={quoteattr(slug_base(tag))}>{cdata(tag)}</category>\n'
        )
    for meta_key, attr in LOCALIZED_META:
        value = getattr(record, attr)
        if value:
            lines.append(_postmeta(meta_key, value))
    lines.append("    </item>\n")
    return "".join(lines)


def export_wxr(
    records: Iterable[CanonicalRecord],
    *,
    site_title: str = "Blog",
    base_url: str = "https://example.com",
    language: str = "en-US",
    generated_at: Optional[datetime] = None,
) -> str:
    """Serialize ``records`` into a complete WXR document."""
    stamp = _rfc2822(generated_at or utc_now())
    site = escape(base_url.rstrip("/"))
    xmlns = "\n".join(f'  xmlns:{prefix}="{uri}"' for prefix, uri in NAMESPACES.items())
    parts: List[str] = [
        '<?xml version="1.0" encoding="UTF-8"?>\n',
        f'<rss version="2.0"\n{xmlns}>\n',
        "  <channel>\n",
        f"    <title>{cdata(site_title)}</title>\n",
        f"    <link>{site}</link>\n",
        "    <description>Blog Export</description>\n",
        f"    <pubDate>{stamp}</pubDate>\n",
        f"    <language>{escape(language)}</language>\n",
        f"    <wp:wxr_version>{WXR_VERSION}</wp:wxr_version>\n",
        f"    <wp:base_site_url>{site}</wp:base_site_url>\n",
        f"    <wp:base_blog_url>{site}</wp:base_blog_url>\n",
    ]
    for index, record in enumerate(records, start=1):
        parts.append(render_item(record, base_url=base_url, post_id=record.id or str(index)))
    parts.append("  </channel>\n</rss>\n")
    return "".join(parts)


class WxrExporter:
    """Exports everything in a store as one WXR document."""

    def __init__(self, store: PostStore, **channel: str) -> None:
        self.store = store
        self.channel = channel

    def export(self, generated_at: Optional[datetime] = None) -> str:
        return export_wxr(self.store.list_all(), generated_at=generated_at, **self.channel)

    def export_to_file(self, out_path: str) -> int:
        """Write the export to ``out_path`` and return the number of posts."""
        records = self.store.list_all()
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(export_wxr(records, **self.channel))
        return len(records)
