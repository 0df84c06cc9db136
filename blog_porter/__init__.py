"""
Top-level package for the blog content import/export utility.

This package bundles everything required to move blog posts between
external export files (WordPress WXR XML, WordPress-style CSV and the
generic blog CSV schema) and the storefront post store, and back out to
WXR.  Modules are split into subpackages:

* :mod:`blog_porter.extractors` – format detection and the file parsers
* :mod:`blog_porter.enrichers` – reading time, featured image and excerpts
* :mod:`blog_porter.migrators` – post stores, slug allocation, batch import
* :mod:`blog_porter.exporters` – WXR serialization
* :mod:`blog_porter.utils` – errors, structured logging and report files

Orchestration and configuration live in :mod:`blog_porter.import_tool`.
"""

__version__ = "0.1.0"
