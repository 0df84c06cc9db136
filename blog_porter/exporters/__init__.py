"""
Exporters turning stored posts back into external formats.
"""

from .wxr_exporter import WxrExporter, cdata, export_wxr

__all__ = ["WxrExporter", "cdata", "export_wxr"]
