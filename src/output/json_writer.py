"""JSON output writer for preprocessing results.

This module renders the Line records and LineIssue diagnostics produced
by the preprocessor as JSON, with options for formatting and filtering.
"""

import copy
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, TextIO

from preprocessor import PreProcessor


class JSONWriter:
    """Writes preprocessing reports to JSON format.

    Supports various output options including:
    - Pretty printing with configurable indentation
    - Output to file or string
    - Dropping comment lines or raw line text from the report
    """

    def __init__(
        self,
        pretty_print: bool = True,
        indent: int = 2,
        sort_keys: bool = True,
        include_comments: bool = True,
        include_raw_text: bool = False,
    ):
        """Initialize the JSON writer.

        Args:
            pretty_print: Whether to format JSON with indentation
            indent: Number of spaces for indentation
            sort_keys: Whether to sort dictionary keys
            include_comments: Whether to keep comment lines in the report
            include_raw_text: Whether to keep the original text of each line
        """
        self.pretty_print = pretty_print
        self.indent = indent if pretty_print else None
        self.sort_keys = sort_keys
        self.include_comments = include_comments
        self.include_raw_text = include_raw_text

    def write(self, data: Dict[str, Any], output_path: Optional[Path] = None) -> str:
        """Write a report to JSON.

        Args:
            data: Report dictionary
            output_path: Optional path to write file (if None, returns string)

        Returns:
            JSON string
        """
        json_str = json.dumps(
            self._filter_data(data),
            indent=self.indent,
            sort_keys=self.sort_keys,
            ensure_ascii=False,
            default=self._json_serializer,
        )

        if output_path:
            output_path.write_text(json_str, encoding="utf-8")

        return json_str

    def write_to_stream(self, data: Dict[str, Any], stream: TextIO) -> None:
        """Write a report to a stream.

        Args:
            data: Report dictionary
            stream: Output stream (file object)
        """
        json.dump(
            self._filter_data(data),
            stream,
            indent=self.indent,
            sort_keys=self.sort_keys,
            ensure_ascii=False,
            default=self._json_serializer,
        )

    def _filter_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Filter data based on writer options.

        Args:
            data: Original data dictionary

        Returns:
            Filtered data dictionary
        """
        if self.include_comments and self.include_raw_text:
            return data

        filtered = copy.deepcopy(data)

        if isinstance(filtered.get("lines"), list):
            lines = filtered["lines"]
            if not self.include_comments:
                lines = [line for line in lines if not line.get("is_comment")]
            if not self.include_raw_text:
                for line in lines:
                    line.pop("raw_text", None)
            filtered["lines"] = lines

        return filtered

    def _json_serializer(self, obj: Any) -> Any:
        """Custom JSON serializer for special types.

        Args:
            obj: Object to serialize

        Returns:
            JSON-serializable representation
        """
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, Path):
            return str(obj)
        if hasattr(obj, "to_dict"):
            return obj.to_dict()

        raise TypeError(f"Object of type {type(obj)} is not JSON serializable")

    def format_compact(self, data: Dict[str, Any]) -> str:
        """Format data in compact single-line JSON.

        Args:
            data: Report dictionary

        Returns:
            Compact JSON string
        """
        return json.dumps(
            self._filter_data(data),
            separators=(",", ":"),
            sort_keys=self.sort_keys,
            ensure_ascii=False,
            default=self._json_serializer,
        )


def summarize(pre_processor: PreProcessor) -> Dict[str, int]:
    """Count line kinds and issues of a completed run."""
    lines = pre_processor.pre_processed_lines
    return {
        "total_lines": pre_processor.line_counter,
        "comment_lines": sum(1 for line in lines if line.is_comment),
        "continuation_lines": sum(1 for line in lines if line.is_continuation),
        "code_lines": sum(1 for line in lines if line.has_code),
        "issue_count": pre_processor.issue_count,
    }


def create_output_report(
    pre_processor: PreProcessor,
    source_path: Optional[Path] = None,
    include_details: bool = True,
) -> Dict[str, Any]:
    """Create a report dictionary from a completed preprocessing run.

    Lines always carry their raw text here; JSONWriter drops it unless
    asked to keep it.

    Args:
        pre_processor: PreProcessor whose pre_process() has run
        source_path: Source file the lines came from, if any
        include_details: Whether to include per-line records and issues

    Returns:
        Report dictionary
    """
    report: Dict[str, Any] = {
        "source": str(source_path) if source_path else None,
        "analysis_date": datetime.now().isoformat(),
        "summary": summarize(pre_processor),
    }

    if include_details:
        report["lines"] = [
            line.to_dict(include_raw_text=True)
            for line in pre_processor.pre_processed_lines
        ]
        report["issues"] = [issue.to_dict() for issue in pre_processor.iter_issues()]

    return report
