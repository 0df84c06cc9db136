"""
WordPress eXtended RSS (WXR) schema reader.

Everything that knows about the XML library lives here: the rest of the
pipeline only sees :class:`WxrItem` values returned by
:func:`list_post_items`.  Namespaces are matched by URI family rather than a
fixed prefix map, so exports declaring ``export/1.0/``, ``1.1`` or ``1.2``
read the same.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from blog_porter.utils.errors import ParseError

CONTENT_NS = "http://purl.org/rss/1.0/modules/content/"
DC_NS = "http://purl.org/dc/elements/1.1/"


@dataclass
class WxrItem:
    """Raw string values of one ``<item>`` element."""

    title: str = ""
    content: str = ""
    excerpt: str = ""
    description: str = ""
    post_name: str = ""
    post_date: str = ""
    pub_date: str = ""
    creator: str = ""
    status: str = ""
    post_type: str = ""
    attachment_url: str = ""
    # (domain, label) pairs in document order
    categories: List[Tuple[str, str]] = field(default_factory=list)
    postmeta: Dict[str, str] = field(default_factory=dict)

    def terms(self, domain: str) -> List[str]:
        return [label for d, label in self.categories if d == domain and label.strip()]


def _split_tag(tag: str) -> Tuple[str, str]:
    if tag.startswith("{"):
        uri, _, local = tag[1:].partition("}")
        return uri, local
    return "", tag


def _prefix(uri: str) -> str:
    if uri == CONTENT_NS:
        return "content"
    if uri == DC_NS:
        return "dc"
    if "wordpress.org/export/" in uri:
        return "excerpt" if uri.rstrip("/").endswith("excerpt") else "wp"
    return ""


def _text(element: ET.Element) -> str:
    return "".join(element.itertext()).strip()


def load_document(text: str) -> ET.Element:
    """Parse WXR text into its root element, raising :class:`ParseError`."""
    try:
        return ET.fromstring(text.lstrip("\ufeff").lstrip())
    except ET.ParseError as exc:
        raise ParseError(f"Invalid WordPress XML: {exc}") from exc


_FIELDS = {
    ("", "title"): "title",
    ("", "pubDate"): "pub_date",
    ("", "description"): "description",
    ("content", "encoded"): "content",
    ("excerpt", "encoded"): "excerpt",
    ("dc", "creator"): "creator",
    ("wp", "post_name"): "post_name",
    ("wp", "post_date"): "post_date",
    ("wp", "status"): "status",
    ("wp", "post_type"): "post_type",
    ("wp", "attachment_url"): "attachment_url",
}


def _read_item(element: ET.Element) -> WxrItem:
    item = WxrItem()
    for child in element:
        uri, local = _split_tag(child.tag)
        key = (_prefix(uri), local)
        if key in _FIELDS:
            setattr(item, _FIELDS[key], _text(child))
        elif key == ("", "category"):
            item.categories.append((child.get("domain", ""), _text(child)))
        elif key == ("wp", "postmeta"):
            meta_key, meta_value = "", ""
            for meta in child:
                _, meta_local = _split_tag(meta.tag)
                if meta_local == "meta_key":
                    meta_key = _text(meta)
                elif meta_local == "meta_value":
                    meta_value = _text(meta)
            if meta_key:
                item.postmeta[meta_key] = meta_value
    return item


def list_post_items(doc: ET.Element, post_type: Optional[str] = "post") -> List[WxrItem]:
    """Return the ``<item>`` entries of ``doc`` whose post type is ``post_type``.

    Pass ``post_type=None`` to get every item.
    """
    items: List[WxrItem] = []
    for element in doc.iter("item"):
        item = _read_item(element)
        if post_type is None or item.post_type == post_type:
            items.append(item)
    return items
