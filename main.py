"""
Entry point for the blog import/export tool.

Examples::

    python main.py preview docs/export.xml
    python main.py import docs/posts.csv
    python main.py export --out exports/blog.xml
    python main.py template standard-csv
"""

import argparse
import os
import sys

from blog_porter.extractors import SourceFormat
from blog_porter.import_tool import BlogImportTool
from blog_porter.templates import template_for
from blog_porter.utils.errors import BlogImportError

CONFIG_FILE = "config/import_config.json"


def _print_progress(percent: int, processed: int, total: int) -> None:
    print(f"Importing... {percent}% ({processed}/{total})")


def cmd_detect(tool: BlogImportTool, args: argparse.Namespace) -> int:
    parsed = tool.load_file(args.file)
    print(parsed.format.label)
    return 0


def cmd_preview(tool: BlogImportTool, args: argparse.Namespace) -> int:
    parsed = tool.load_file(args.file)
    if not parsed.records:
        return 1
    limit = args.rows or int(tool.config["import"]["preview_rows"])
    print(f"{len(parsed.records)} Blog Posts Found [{parsed.format.label}]")
    print(tool.preview(parsed, limit).to_string(index=False))
    if len(parsed.records) > limit:
        print(f"+{len(parsed.records) - limit} more posts")
    return 0


def cmd_import(tool: BlogImportTool, args: argparse.Namespace) -> int:
    result = tool.import_file(args.file, on_progress=_print_progress)
    print(f"{result.succeeded} posts imported successfully, {result.failed} failed.")
    for error in result.errors:
        print(f"  - {error}")
    return 0 if result.failed == 0 else 2


def cmd_export(tool: BlogImportTool, args: argparse.Namespace) -> int:
    tool.export_to_file(args.out)
    return 0


def cmd_template(tool: BlogImportTool, args: argparse.Namespace) -> int:
    filename, text = template_for(SourceFormat(args.format))
    out_path = os.path.join(args.dir, filename)
    os.makedirs(args.dir, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(text)
    tool.log_message(f"Template written to {out_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Import and export blog posts.")
    parser.add_argument("--config", default=CONFIG_FILE, help="Path to the JSON configuration file.")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("detect", help="Print the detected format of an export file.")
    p.add_argument("file")
    p.set_defaults(func=cmd_detect)

    p = sub.add_parser("preview", help="Parse an export file and show the first posts.")
    p.add_argument("file")
    p.add_argument("--rows", type=int, default=None)
    p.set_defaults(func=cmd_preview)

    p = sub.add_parser("import", help="Import an export file into the store.")
    p.add_argument("file")
    p.set_defaults(func=cmd_import)

    p = sub.add_parser("export", help="Export every stored post to WordPress XML.")
    p.add_argument("--out", default=None)
    p.set_defaults(func=cmd_export)

    p = sub.add_parser("template", help="Write a sample file for an input format.")
    p.add_argument("format", choices=[f.value for f in SourceFormat])
    p.add_argument("--dir", default="docs")
    p.set_defaults(func=cmd_template)
    return parser


def main(argv=None) -> int:
    """
    Main function to run the blog import/export tool.
    """
    args = build_parser().parse_args(argv)
    tool = BlogImportTool(config_file=args.config)
    try:
        return args.func(tool, args)
    except BlogImportError as e:
        tool.log_message(str(e), level="ERROR")
        return 1
    finally:
        tool.close()


if __name__ == "__main__":
    sys.exit(main())
