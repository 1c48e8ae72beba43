"""
Command-line interface for StatusCharts package.

Provides argparse-based CLI with subcommands for creating a unit's summary
panel, a standalone timeline status grid, and summary panels for many units.

Usage:
    status-charts panel --metrics metrics.csv --series abundance.csv --attributes chilko.yaml --output chilko.png
    status-charts timeline --metrics metrics.csv --output timeline.png --start-year 2000
    status-charts batch --metrics all_metrics.csv --series all_abundance.csv --attributes units.csv --output-dir panels/
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .api import create_summary_panel, create_timeline_chart
from .batch import DEFAULT_UNIT_COLUMN, BatchPanelGenerator
from .config import Config, get_default_config
from .constants import DEFAULT_TIMELINE_METRICS
from .data import attribute_records, load_attributes, load_table
from .exceptions import StatusChartsError
from .logging_config import get_logger, setup_logging

logger = get_logger("cli")


def setup_logging_from_args(args: argparse.Namespace) -> None:
    """
    Configure logging based on command-line arguments.
    
    Args:
        args: Parsed command-line arguments with verbose, quiet, log_file
    """
    if getattr(args, 'silent', False):
        verbosity = -2  # ERROR
    elif getattr(args, 'quiet', False):
        verbosity = -1  # WARNING
    elif getattr(args, 'verbose', False):
        verbosity = 1  # DEBUG
    else:
        verbosity = 0  # INFO
    
    setup_logging(verbosity=verbosity, log_file=getattr(args, 'log_file', None))


def parse_year(year_str: str) -> int:
    """
    Parse a four-digit year argument.
    
    Raises:
        argparse.ArgumentTypeError: If the value is not a plausible year
    """
    try:
        year = int(year_str)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid year: {year_str}")
    if not 1000 <= year <= 9999:
        raise argparse.ArgumentTypeError(f"Invalid year: {year_str}. Expected YYYY")
    return year


def load_config(args: argparse.Namespace) -> Config:
    """
    Build the configuration from --config plus command-line overrides.
    
    Raises:
        ConfigurationError: If the file or an override is invalid
    """
    config_path = getattr(args, "config", None)
    if config_path is None:
        config = get_default_config()
    else:
        try:
            config = Config.load_from_file(config_path)
        except FileNotFoundError as e:
            print(f"Error loading config from {config_path}: {e}", file=sys.stderr)
            sys.exit(1)
    
    if getattr(args, "dpi", None):
        config.default_dpi = args.dpi
    if getattr(args, "background_color", None):
        config.background_color = args.background_color
    config.validate()
    return config


def _cli_print(args: argparse.Namespace, *values: object, **kwargs) -> None:
    """Print unless --silent was provided."""
    if getattr(args, "silent", False):
        return
    print(*values, **kwargs)


def _report_saved(args: argparse.Namespace, kind: str, output_path: str) -> None:
    if getattr(args, "silent", False):
        print(str(output_path))
    else:
        print(f"Success! {kind} saved to: {output_path}")


def cmd_panel(args: argparse.Namespace) -> int:
    """Handle 'panel' subcommand."""
    _cli_print(args, f"Creating summary panel from {args.metrics}")
    
    try:
        config = load_config(args)
        metrics = load_table(args.metrics)
        series = load_table(args.series)
        attributes = load_attributes(args.attributes)
        
        output_path = create_summary_panel(
            metrics,
            series,
            attributes,
            output_path=args.output,
            config=config,
            metric_start_year=args.start_year,
            metric_end_year=args.end_year,
            timeline_metrics=None if args.no_timeline else config_timeline(args),
        )
        
        _report_saved(args, "Panel", output_path)
        return 0
        
    except StatusChartsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        logger.debug("Unexpected error details", exc_info=True)
        return 1


def cmd_timeline(args: argparse.Namespace) -> int:
    """Handle 'timeline' subcommand."""
    _cli_print(args, f"Creating timeline from {args.metrics}")
    
    try:
        config = load_config(args)
        metrics = load_table(args.metrics)
        
        output_path = create_timeline_chart(
            metrics,
            metrics=config_timeline(args),
            title=args.title,
            start_year=args.start_year,
            end_year=args.end_year,
            output_path=args.output,
            config=config,
        )
        
        _report_saved(args, "Timeline", output_path)
        return 0
        
    except StatusChartsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        logger.debug("Unexpected error details", exc_info=True)
        return 1


def cmd_batch(args: argparse.Namespace) -> int:
    """Handle 'batch' subcommand."""
    _cli_print(args, f"Generating panels into {args.output_dir}")
    
    try:
        config = load_config(args)
        metrics = load_table(args.metrics)
        series = load_table(args.series)
        attributes = attribute_records(load_table(args.attributes), args.unit_column)
        
        batch = BatchPanelGenerator(
            metrics_table=metrics,
            series_table=series,
            attributes=attributes,
            output_dir=Path(args.output_dir),
            config=config,
            unit_column=args.unit_column,
            image_format=args.format,
        )
        result = batch.generate(
            args.units or None,
            show_progress=not (getattr(args, "quiet", False) or getattr(args, "silent", False)),
        )
        
        successful = len(result['successful_panels'])
        total = successful + len(result['failed_units'])
        success_rate = successful / total * 100 if total > 0 else 0
        
        if getattr(args, "silent", False):
            print(str(args.output_dir))
        else:
            print("\nBatch generation complete!")
            print(f"  Successful: {successful}/{total} ({success_rate:.1f}%)")
            print(f"  Total time: {result['total_time']:.1f}s")
            print(f"  Output directory: {args.output_dir}")
        
        if result['failed_units']:
            _cli_print(args, f"  Failed units: {result['failed_units']}")
        
        return 0 if successful > 0 else 1
        
    except StatusChartsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        logger.debug("Unexpected error details", exc_info=True)
        return 1


def config_timeline(args: argparse.Namespace) -> Optional[List[dict]]:
    """Timeline rows from --timeline-metrics, or the default rows."""
    path = getattr(args, "timeline_metrics", None)
    if path is None:
        return DEFAULT_TIMELINE_METRICS
    
    rows = load_table(path)
    return rows.to_dict(orient="records")


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="status-charts",
        description="Generate status assessment charts for monitored units",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    
    def _add_common_args(p: argparse.ArgumentParser) -> None:
        """Add options accepted after every subcommand."""
        p.add_argument(
            "-v", "--verbose",
            action="store_true",
            help="Enable DEBUG logging"
        )
        p.add_argument(
            "-q", "--quiet",
            action="store_true",
            help="Suppress INFO logging (WARNING+ only)"
        )
        p.add_argument(
            "--silent",
            action="store_true",
            help="Suppress most console output (prints only final output path(s))"
        )
        p.add_argument(
            "--log-file",
            type=str,
            help="Write logs to file"
        )
        p.add_argument(
            "--config",
            type=str,
            help="Config file path (YAML/JSON)"
        )
        p.add_argument(
            "--dpi",
            type=int,
            help="Override DPI setting"
        )
        p.add_argument(
            "--background-color",
            type=str,
            default=None,
            help="Figure background color (Matplotlib color spec, e.g. 'white')",
        )
    
    def _add_year_args(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--start-year",
            type=parse_year,
            help="First year of the timeline (default: from the data)"
        )
        p.add_argument(
            "--end-year",
            type=parse_year,
            help="Last year shown (default: from the data)"
        )
        p.add_argument(
            "--timeline-metrics",
            type=str,
            help="CSV with label,dataCol[,font] rows replacing the default timeline rows"
        )
    
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    
    # ========================================================================
    # panel subcommand
    # ========================================================================
    parser_panel = subparsers.add_parser(
        "panel",
        help="Create the summary panel for one unit"
    )
    _add_common_args(parser_panel)
    parser_panel.add_argument(
        "--metrics",
        type=str,
        required=True,
        help="Metric table CSV (Year, LongTrend, PercChange, status columns)"
    )
    parser_panel.add_argument(
        "--series",
        type=str,
        required=True,
        help="Abundance table CSV (Year, Escapement_Wild)"
    )
    parser_panel.add_argument(
        "--attributes",
        type=str,
        required=True,
        help="Unit attributes file (YAML/JSON)"
    )
    parser_panel.add_argument(
        "--output",
        type=str,
        required=True,
        help="Output file path"
    )
    parser_panel.add_argument(
        "--no-timeline",
        action="store_true",
        help="Omit the timeline status grid"
    )
    _add_year_args(parser_panel)
    parser_panel.set_defaults(func=cmd_panel)
    
    # ========================================================================
    # timeline subcommand
    # ========================================================================
    parser_timeline = subparsers.add_parser(
        "timeline",
        help="Create a standalone timeline status grid"
    )
    _add_common_args(parser_timeline)
    parser_timeline.add_argument(
        "--metrics",
        type=str,
        required=True,
        help="Metric table CSV with a Year column"
    )
    parser_timeline.add_argument(
        "--output",
        type=str,
        required=True,
        help="Output file path"
    )
    parser_timeline.add_argument(
        "--title",
        type=str,
        default="Metrics & Status",
        help="Chart title (default: 'Metrics & Status')"
    )
    _add_year_args(parser_timeline)
    parser_timeline.set_defaults(func=cmd_timeline)
    
    # ========================================================================
    # batch subcommand
    # ========================================================================
    parser_batch = subparsers.add_parser(
        "batch",
        help="Create summary panels for many units"
    )
    _add_common_args(parser_batch)
    parser_batch.add_argument(
        "--metrics",
        type=str,
        required=True,
        help="Metric table CSV for all units"
    )
    parser_batch.add_argument(
        "--series",
        type=str,
        required=True,
        help="Abundance table CSV for all units"
    )
    parser_batch.add_argument(
        "--attributes",
        type=str,
        required=True,
        help="Attribute table CSV with one row per unit"
    )
    parser_batch.add_argument(
        "--output-dir",
        type=str,
        required=True,
        help="Output directory for panels"
    )
    parser_batch.add_argument(
        "--unit-column",
        type=str,
        default=DEFAULT_UNIT_COLUMN,
        help=f"Unit id column in all three tables (default: {DEFAULT_UNIT_COLUMN})"
    )
    parser_batch.add_argument(
        "--units",
        nargs="+",
        help="Only generate these unit ids"
    )
    parser_batch.add_argument(
        "--format",
        type=str,
        default="png",
        help="Image format (default: png)"
    )
    parser_batch.set_defaults(func=cmd_batch)
    
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    
    # Check if subcommand was provided
    if not hasattr(args, 'func'):
        parser.print_help()
        return 1
    
    setup_logging_from_args(args)
    
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
