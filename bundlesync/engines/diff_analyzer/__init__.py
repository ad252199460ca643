"""Diff analyzer — find modules whose transfer schema changed in a unified diff."""

from bundlesync.engines.diff_analyzer.parser import MARKER_FILENAME, parse_modules_from_diff

__all__ = ["MARKER_FILENAME", "parse_modules_from_diff"]
