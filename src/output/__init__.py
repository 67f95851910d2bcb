"""Output module for generating preprocessing reports."""

from .json_writer import JSONWriter, create_output_report, summarize

__all__ = ["JSONWriter", "create_output_report", "summarize"]
