"""
Command-line interface for the dashboard data pipeline.

Usage:
    adoption-dashboard summarize --input <file.csv> [options]
    adoption-dashboard options --input <file.csv>
    adoption-dashboard export --input <file.csv> [--country X] [--max-year N]
"""

import argparse
import json
import sys

from dotenv import load_dotenv

from adoption_dashboard.config import load_settings
from adoption_dashboard.core.coercion import CoercionPolicy
from adoption_dashboard.core.errors import DashboardError
from adoption_dashboard.core.models import AggregationRequest, FilterParams
from adoption_dashboard.observability.logger import get_logger
from adoption_dashboard.pipeline import DashboardPipeline
from adoption_dashboard.readers import to_csv


logger = get_logger(__name__)


def build_pipeline(args) -> DashboardPipeline:
    """Load settings, apply CLI overrides and read the input file."""
    settings = load_settings(args.config)
    if args.policy:
        settings = settings.model_copy(update={"coercion_policy": CoercionPolicy(args.policy)})

    pipeline = DashboardPipeline(settings)
    pipeline.load_file(args.input)
    return pipeline


def build_request(args, pipeline: DashboardPipeline) -> AggregationRequest:
    """Configured default selection with any CLI flags laid over it."""
    defaults = pipeline.settings.default_request()
    return AggregationRequest(
        metric=getattr(args, "metric", None) or defaults.metric,
        group_by=getattr(args, "group_by", None) or defaults.group_by,
        cross_tab_by=getattr(args, "cross_tab_by", None) or defaults.cross_tab_by,
        filters=FilterParams(
            country=args.country if args.country is not None else defaults.filters.country,
            max_year=args.max_year if args.max_year is not None else defaults.filters.max_year,
        ),
    )


def summarize_command(args) -> int:
    """Print the full dashboard view as JSON."""
    pipeline = build_pipeline(args)
    view = pipeline.build_view(build_request(args, pipeline))
    print(json.dumps(view.model_dump(mode="json"), indent=args.indent))
    return 0


def options_command(args) -> int:
    """Print the available filter options as JSON."""
    pipeline = build_pipeline(args)
    options = pipeline.aggregator.filter_options(pipeline.require_dataset())
    print(json.dumps(options.model_dump(mode="json"), indent=args.indent))
    return 0


def export_command(args) -> int:
    """Print the filtered records as CSV."""
    pipeline = build_pipeline(args)
    filtered = pipeline.filtered(build_request(args, pipeline))
    sys.stdout.write(to_csv(filtered))
    return 0


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--input", required=True, help="CSV file to load")
    parser.add_argument("--config", help="Dashboard YAML configuration (default: $DASHBOARD_CONFIG)")
    parser.add_argument(
        "--policy",
        choices=[policy.value for policy in CoercionPolicy],
        help="Coercion policy override",
    )


def add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--country", help="Country to keep, or 'All'")
    parser.add_argument("--max-year", type=int, help="Inclusive year ceiling")


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="adoption-dashboard",
        description="AI adoption dashboard data pipeline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Full view with the configured defaults
  adoption-dashboard summarize --input data/ai_adoption.csv

  # Job loss per industry in Germany up to 2022
  adoption-dashboard summarize --input data/ai_adoption.csv \\
      --metric "Job Loss Due to AI (%)" --country Germany --max-year 2022

  # Filtered rows as CSV
  adoption-dashboard export --input data/ai_adoption.csv --country USA
        """
    )
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    summarize_parser = subparsers.add_parser("summarize", help="Compute the dashboard view")
    add_common_arguments(summarize_parser)
    add_filter_arguments(summarize_parser)
    summarize_parser.add_argument("--metric", help="Metric column to plot")
    summarize_parser.add_argument("--group-by", dest="group_by", help="Column the line series are split by")
    summarize_parser.add_argument("--cross-tab-by", dest="cross_tab_by", help="Column the bar chart is split by")
    summarize_parser.set_defaults(func=summarize_command)

    options_parser = subparsers.add_parser("options", help="List filter options")
    add_common_arguments(options_parser)
    options_parser.set_defaults(func=options_command)

    export_parser = subparsers.add_parser("export", help="Write filtered records as CSV")
    add_common_arguments(export_parser)
    add_filter_arguments(export_parser)
    export_parser.set_defaults(func=export_command)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    load_dotenv()
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except (DashboardError, OSError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}", extra={"error_type": type(e).__name__})
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
