"""
Sample import files, one per supported source format.

Operators download one of these, fill it in and upload it back; each sample
is also a minimal valid input for its parser.
"""

from __future__ import annotations

from typing import Dict, Tuple

from blog_porter.extractors.format_detector import SourceFormat

WXR_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"
  xmlns:excerpt="http://wordpress.org/export/1.2/excerpt/"
  xmlns:content="http://purl.org/rss/1.0/modules/content/"
  xmlns:dc="http://purl.org/dc/elements/1.1/"
  xmlns:wp="http://wordpress.org/export/1.2/"
>
<channel>
  <item>
    <title>Sample Blog Post</title>
    <dc:creator><![CDATA[Author Name]]></dc:creator>
    <content:encoded><![CDATA[<p>Your blog content goes here with HTML formatting.</p>]]></content:encoded>
    <excerpt:encoded><![CDATA[Brief excerpt of the blog post.]]></excerpt:encoded>
    <wp:post_name><![CDATA[sample-blog-post]]></wp:post_name>
    <wp:post_date><![CDATA[2024-01-15 10:00:00]]></wp:post_date>
    <wp:status><![CDATA[publish]]></wp:status>
    <wp:post_type><![CDATA[post]]></wp:post_type>
    <category domain="category"><![CDATA[Plant Care]]></category>
    <category domain="post_tag"><![CDATA[tips]]></category>
    <category domain="post_tag"><![CDATA[indoor plants]]></category>
  </item>
</channel>
</rss>
"""

WORDPRESS_CSV_TEMPLATE = (
    "post_title,post_content,post_excerpt,post_name,post_date,post_author,post_status,category,tags,featured_image\n"
    '"Sample Blog Post","<p>Your blog content with HTML.</p>","Brief excerpt","sample-blog-post",'
    '"2024-01-15 10:00:00","Author Name","publish","Plant Care","tips,indoor plants","https://example.com/image.jpg"\n'
)

STANDARD_CSV_TEMPLATE = (
    "title,title_ar,content,content_ar,excerpt,excerpt_ar,slug,author,category,tags,status,featured_image,date\n"
    '"Sample Blog Post","مقال نموذجي","<p>Your blog content with HTML.</p>","<p>محتوى المدونة</p>",'
    '"Brief excerpt","مقتطف مختصر","sample-blog-post","Author Name","Plant Care","tips,indoor plants",'
    '"published","https://example.com/image.jpg","2024-01-15"\n'
)

TEMPLATES: Dict[SourceFormat, Tuple[str, str]] = {
    SourceFormat.WXR: ("wordpress_export_template.xml", WXR_TEMPLATE),
    SourceFormat.WORDPRESS_CSV: ("wordpress_csv_template.csv", WORDPRESS_CSV_TEMPLATE),
    SourceFormat.STANDARD_CSV: ("blog_import_template.csv", STANDARD_CSV_TEMPLATE),
}


def template_for(source_format: SourceFormat) -> Tuple[str, str]:
    """Return ``(filename, text)`` of the sample file for ``source_format``."""
    return TEMPLATES[source_format]
