"""Main CLI entry point for the slim-xml command-line tool.

Provides reformatting, tag lookup, statistics and parse checking for XML files.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from slim_xml import __version__
from slim_xml.scanner import element_span, value_span
from slim_xml.shared import (
    ConfigError,
    ConfigValidationError,
    DocumentConfig,
    OutputMode,
    XmlError,
    configure_logging,
    get_logger,
)
from slim_xml.tools import PerformanceProfiler
from slim_xml.tree import XmlDocument

logger = get_logger(__name__, None, "cli")
OUTPUT_FORMATS = ("text", "json")


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self) -> None:
        self.document_config = DocumentConfig()
        self.output_format = "text"

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON file.

        The file holds a ``DocumentConfig`` dictionary, optionally with an
        ``output_format`` key for the reporting commands.

        Raises:
            ConfigError: If the file cannot be read or holds invalid settings
        """
        config = cls()
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ConfigError(f"Could not load config file {config_path}: {e}") from e

        config.document_config = DocumentConfig.from_dict(data)
        config.output_format = data.get("output_format", config.output_format)
        if config.output_format not in OUTPUT_FORMATS:
            raise ConfigValidationError(
                f"output_format must be one of {list(OUTPUT_FORMATS)}",
                field_name="output_format",
                suggestions=list(OUTPUT_FORMATS),
            )
        return config


def load_cli_config(args: argparse.Namespace) -> CLIConfig:
    """Load the --config file of a command.

    The logging level from the file is applied unless --verbose or --quiet was
    given on the command line.
    """
    if not args.config:
        return CLIConfig()
    config = CLIConfig.from_file(args.config)
    if not (args.verbose or args.quiet):
        configure_logging(config.document_config.logging_level)
    return config


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="slim-xml",
        description="Minimal XML document parser and formatter"
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Format command
    format_parser = subparsers.add_parser("format", help="Reformat an XML file")
    format_parser.add_argument("path", type=Path, help="XML file to reformat")
    layout = format_parser.add_mutually_exclusive_group()
    layout.add_argument(
        "--indent", "-i",
        action="store_true",
        help="Indented output, one element per line"
    )
    layout.add_argument(
        "--compact",
        action="store_true",
        help="Compact output without inserted whitespace"
    )
    format_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    format_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )

    # Query command
    query_parser = subparsers.add_parser(
        "query", help="Print the content of a tag without building a tree"
    )
    query_parser.add_argument("path", type=Path, help="XML file to search")
    query_parser.add_argument("tag", help="Tag name to look up")
    query_parser.add_argument(
        "--offset",
        type=int,
        default=0,
        help="Character offset to start searching from"
    )
    query_parser.add_argument(
        "--element", "-e",
        action="store_true",
        help="Print the whole element instead of its content"
    )

    # Stats command
    stats_parser = subparsers.add_parser("stats", help="Show document statistics")
    stats_parser.add_argument("paths", nargs="+", type=Path, help="XML files")
    stats_parser.add_argument(
        "--format", "-f",
        choices=list(OUTPUT_FORMATS),
        help="Output format (default: output_format from --config, else text)"
    )
    stats_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )
    stats_parser.add_argument(
        "--profile", "-p",
        action="store_true",
        help="Include parse and serialize timings"
    )

    # Check command
    check_parser = subparsers.add_parser("check", help="Check that XML files parse")
    check_parser.add_argument("paths", nargs="+", type=Path, help="XML files")

    return parser


def collect_statistics(
    path: Path,
    profile: bool = False,
    document_config: Optional[DocumentConfig] = None,
) -> Dict[str, Any]:
    """Parse one file and describe it."""
    try:
        document = XmlDocument.from_file(path, document_config)
    except XmlError as e:
        return {"file": str(path), "success": False, "error": str(e)}

    result: Dict[str, Any] = {
        "file": str(path),
        "success": True,
        "root": document.root.name,
        "statistics": document.statistics().to_dict(),
    }
    if profile:
        profiler = PerformanceProfiler()
        session = profiler.profile_serialize(document)
        result["profile"] = session.to_dict()
    return result


def format_statistics(results: List[Dict[str, Any]], format_type: str) -> str:
    """Format statistics results for output."""
    if format_type == "json":
        return json.dumps(results, indent=2)

    lines = []
    for result in results:
        if not result["success"]:
            lines.append(f"✗ {result['file']}")
            lines.append(f"   Error: {result['error']}")
            continue

        stats = result["statistics"]
        lines.append(f"✓ {result['file']} (root: {result['root']})")
        lines.append(
            f"   Elements: {stats['element_count']}, "
            f"Attributes: {stats['attribute_count']}, "
            f"Max depth: {stats['max_depth']}"
        )
        if "profile" in result:
            lines.append(
                f"   Serialize time: {result['profile']['total_duration_ms']:.2f}ms"
            )
    return "\n".join(lines)


def cmd_format(args: argparse.Namespace) -> int:
    """Handle format command."""
    config = load_cli_config(args)
    document = XmlDocument.from_file(args.path, config.document_config)

    if args.indent:
        document.output_mode = OutputMode.INDENTED
    elif args.compact:
        document.output_mode = OutputMode.COMPACT

    if args.output:
        document.save_to_file(args.output)
        print(f"Written to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(document.to_string())
    return 0


def cmd_query(args: argparse.Namespace) -> int:
    """Handle query command."""
    try:
        xml_data = args.path.read_text(encoding="utf-8")
    except OSError as e:
        print(f"Could not open xml file {args.path}: {e.strerror}", file=sys.stderr)
        return 1

    element_text = element_span(xml_data, args.tag, args.offset)
    if not element_text:
        print(f"Tag not found: {args.tag}", file=sys.stderr)
        return 1
    if args.element:
        print(element_text)
    else:
        print(value_span(xml_data, args.tag, args.offset))
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    """Handle stats command."""
    config = load_cli_config(args)
    results = [
        collect_statistics(path, args.profile, config.document_config)
        for path in args.paths
    ]
    print(format_statistics(results, args.format or config.output_format))
    return 0 if all(result["success"] for result in results) else 1


def cmd_check(args: argparse.Namespace) -> int:
    """Handle check command."""
    failures = 0
    for path in args.paths:
        try:
            XmlDocument.from_file(path)
        except XmlError as e:
            failures += 1
            print(f"✗ {path}: {e}")
        else:
            print(f"✓ {path}")

    print(f"Checked {len(args.paths)} files, {failures} failed", file=sys.stderr)
    return 0 if failures == 0 else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        configure_logging("ERROR")

    handlers = {
        "format": cmd_format,
        "query": cmd_query,
        "stats": cmd_stats,
        "check": cmd_check,
    }
    try:
        return handlers[args.command](args)
    except (XmlError, ConfigError) as e:
        logger.error("Command failed", extra={"command": args.command})
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
