"""Exporters for assignment results."""

from linkgroups.export.json import dumps_info_json, export_json, make_info_json

__all__ = ["dumps_info_json", "export_json", "make_info_json"]
