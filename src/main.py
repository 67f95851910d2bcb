"""Main entry point for the COBOL line preprocessor.

This module provides the CLI interface for preprocessing COBOL programs.
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Optional

import yaml

from api import PreProcessingError, PreProcessOptions, preprocess_file, read_source_lines
from output import JSONWriter, create_output_report
from preprocessor import EmptyInputError, PreProcessor

__version__ = "0.1.0"


def setup_logging(level: str = "INFO", quiet: bool = False) -> None:
    """Configure logging.

    Args:
        level: Logging level string (DEBUG, INFO, WARNING, ERROR)
        quiet: If True, suppress all output except errors
    """
    if quiet:
        level = "ERROR"
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary
    """
    default_config = {
        "source": {"encoding": "utf-8"},
        "output": {
            "pretty_print": True,
            "indent_size": 2,
            "include_comments": True,
            "include_raw_text": False,
        },
        "logging": {"level": "INFO"},
    }

    if config_path and config_path.exists():
        with open(config_path, "r") as f:
            user_config = yaml.safe_load(f)
            if user_config:
                # Merge user config with defaults
                for key, value in user_config.items():
                    if isinstance(value, dict) and key in default_config:
                        default_config[key].update(value)
                    else:
                        default_config[key] = value

    return default_config


def _apply_config_log_level(config: dict, args) -> None:
    """Use the configured log level unless -v or -q was given."""
    if args.verbose or args.quiet:
        return
    level = config.get("logging", {}).get("level", "INFO")
    logging.getLogger().setLevel(getattr(logging, str(level).upper(), logging.INFO))


def preprocess_cobol_file(
    source_path: Path,
    config: Optional[dict] = None,
    include_details: bool = True,
) -> dict:
    """Preprocess a COBOL source file into a report dictionary.

    Args:
        source_path: Path to COBOL source file
        config: Configuration dictionary
        include_details: Whether to include per-line records and issues

    Returns:
        Report dictionary with execution timing

    Raises:
        FileNotFoundError: If source file doesn't exist
        EmptyInputError: If the file has no non-blank line
    """
    start_time = time.perf_counter()
    config = config or load_config()
    logger = logging.getLogger(__name__)

    encoding = config.get("source", {}).get("encoding", "utf-8")
    pre_processor = PreProcessor(read_source_lines(source_path, encoding))
    pre_processor.pre_process()
    logger.info(
        f"Preprocessed {pre_processor.line_counter} lines "
        f"with {pre_processor.issue_count} issues"
    )

    output = create_output_report(pre_processor, source_path, include_details)
    output["execution_time_seconds"] = round(time.perf_counter() - start_time, 4)
    return output


def handle_preprocess(args) -> int:
    """Handle the preprocess subcommand.

    Args:
        args: Parsed arguments

    Returns:
        Exit code
    """
    logger = logging.getLogger(__name__)

    # Validate input
    if not args.source.exists():
        logger.error(f"Source file not found: {args.source}")
        return 1

    if not args.source.is_file():
        logger.error(f"Source path is not a file: {args.source}")
        return 1

    if args.output_dir:
        try:
            args.output_dir.mkdir(parents=True, exist_ok=True)
            logger.info(f"Output directory: {args.output_dir}")
        except OSError as e:
            logger.error(f"Failed to create output directory: {e}")
            return 1

    try:
        config = load_config(args.config)
    except yaml.YAMLError as e:
        logger.error(f"Invalid configuration file: {e}")
        return 1
    _apply_config_log_level(config, args)

    try:
        output = preprocess_cobol_file(
            source_path=args.source,
            config=config,
            include_details=not args.summary_only,
        )
    except EmptyInputError as e:
        logger.error(f"Preprocessing failed: {e}")
        return 1

    output_config = config.get("output", {})
    writer = JSONWriter(
        pretty_print=output_config.get("pretty_print", True) and not args.compact,
        indent=output_config.get("indent_size", 2),
        include_comments=output_config.get("include_comments", True) and not args.no_comments,
        include_raw_text=output_config.get("include_raw_text", False) or args.include_raw_text,
    )

    if args.output_dir:
        output_filename = args.output_filename.format(program_name=args.source.stem)
        output_path = args.output_dir / output_filename
        writer.write(output, output_path)
        if not args.quiet:
            print(f"Report written to: {output_path}")
            print(f"Execution time: {output['execution_time_seconds']:.4f} seconds")
    elif args.compact:
        print(writer.format_compact(output))
    else:
        print(writer.write(output))

    return 0


def handle_check(args) -> int:
    """Handle the check subcommand.

    Prints one line per issue and exits non-zero when any issue exists.

    Args:
        args: Parsed arguments

    Returns:
        Exit code
    """
    logger = logging.getLogger(__name__)

    try:
        config = load_config(args.config)
    except yaml.YAMLError as e:
        logger.error(f"Invalid configuration file: {e}")
        return 1
    _apply_config_log_level(config, args)

    options = PreProcessOptions(encoding=config.get("source", {}).get("encoding", "utf-8"))
    try:
        result = preprocess_file(args.source, options)
    except (FileNotFoundError, PreProcessingError) as e:
        logger.error(str(e))
        return 1

    for issue in result.issues:
        print(f"{args.source}: {issue}")

    if not args.quiet:
        print(f"{result.line_count} lines checked, {len(result.issues)} issues found")

    return 1 if result.has_issues else 0


def _add_common_arguments(parser) -> None:
    """Add source, configuration and logging arguments to a subparser."""
    parser.add_argument(
        "source",
        type=Path,
        help="Path to COBOL source file",
    )

    config_group = parser.add_argument_group("Configuration")
    config_group.add_argument(
        "-c", "--config",
        type=Path,
        help="Path to configuration file (YAML)",
    )

    logging_group = parser.add_argument_group("Logging")
    logging_group.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    logging_group.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress all output except errors",
    )


def create_preprocess_parser(subparsers):
    """Create the preprocess subcommand parser.

    Args:
        subparsers: Subparsers object from main parser
    """
    preprocess_parser = subparsers.add_parser(
        "preprocess",
        help="Classify source lines and write a JSON report",
        description="Classify each line of a fixed-format COBOL source and report "
                    "sequence numbers, indicators, code areas and format issues.",
    )
    preprocess_parser.set_defaults(func=handle_preprocess)
    _add_common_arguments(preprocess_parser)

    output_group = preprocess_parser.add_argument_group("Output Options")
    output_group.add_argument(
        "-o", "--output-dir",
        type=Path,
        help="Output directory for the JSON report (default: stdout)",
    )
    output_group.add_argument(
        "--output-filename",
        default="{program_name}-lines.json",
        help="Output filename pattern (default: {program_name}-lines.json)",
    )
    output_group.add_argument(
        "--compact",
        action="store_true",
        help="Write single-line JSON",
    )
    output_group.add_argument(
        "--summary-only",
        action="store_true",
        help="Only output the summary counts",
    )
    output_group.add_argument(
        "--include-raw-text",
        action="store_true",
        help="Include the original text of each line",
    )
    output_group.add_argument(
        "--no-comments",
        action="store_true",
        help="Leave comment lines out of the report",
    )


def create_check_parser(subparsers):
    """Create the check subcommand parser.

    Args:
        subparsers: Subparsers object from main parser
    """
    check_parser = subparsers.add_parser(
        "check",
        help="Report format issues and exit non-zero if any are found",
        description="Check a fixed-format COBOL source for invalid sequence "
                    "numbers and indicator characters.",
    )
    check_parser.set_defaults(func=handle_check)
    _add_common_arguments(check_parser)


def main():
    """Main CLI entry point."""
    # Backwards compatibility: if first arg is not a subcommand, assume 'preprocess'
    subcommands = ['preprocess', 'check']
    if len(sys.argv) > 1 and sys.argv[1] not in subcommands + ['-h', '--help', '--version']:
        sys.argv.insert(1, 'preprocess')

    parser = argparse.ArgumentParser(
        prog="cobol-preprocess",
        description="COBOL Line Preprocessor - Classifies the lines of fixed-format COBOL programs and reports column format issues.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  preprocess  Classify source lines and write a JSON report (default)
  check       Report format issues, exit 1 if any are found

Examples:
  %(prog)s preprocess source.cob -o ./output
  %(prog)s source.cob -o ./output  # backwards compatible
  %(prog)s check source.cob

For more information on a command, use: %(prog)s <command> --help
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        dest="command",
        metavar="<command>",
    )

    create_preprocess_parser(subparsers)
    create_check_parser(subparsers)

    args = parser.parse_args()

    # Show help if no command specified
    if not args.command:
        parser.print_help()
        sys.exit(0)

    if args.verbose and args.quiet:
        parser.error("--verbose and --quiet cannot be used together")

    log_level = "DEBUG" if args.verbose else "INFO"
    setup_logging(log_level, quiet=args.quiet)

    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
