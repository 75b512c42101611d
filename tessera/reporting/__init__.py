"""Reporting utilities for tessera."""

from .sinks import CsvSink, JsonlSink
from .summary import write_summary

__all__ = ["CsvSink", "JsonlSink", "write_summary"]
