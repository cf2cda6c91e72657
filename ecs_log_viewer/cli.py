"""
Command line entry point.

Usage:
    ecs-log-viewer [options]

Examples:
    ecs-log-viewer -t my-service -c web -d 1h
    ecs-log-viewer -t my-service -c web --fields @timestamp,@message --format csv -o logs.csv
    ecs-log-viewer --cluster prod -f ERROR
    ecs-log-viewer -t my-service -c web --stream
    ecs-log-viewer -t my-service -c web -w
"""

import argparse
import logging
import sys
from typing import List, Optional

import click
from pydantic import ValidationError as PydanticValidationError

from . import __version__
from .app import LogViewerApp
from .config import LogViewerConfig
from .exceptions import LogViewerError
from .models import OutputFormat

logger = logging.getLogger(__name__)


def split_fields(values: Optional[List[str]]) -> Optional[List[str]]:
    """Flatten repeated, comma-separated --fields values."""
    if not values:
        return None
    return [field.strip() for value in values for field in value.split(",") if field.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ecs-log-viewer",
        description="Interactive tool for viewing AWS ECS container logs with advanced filtering capabilities",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        "-p", "--profile",
        help="AWS profile name to use for authentication (env: AWS_PROFILE)"
    )

    parser.add_argument(
        "-r", "--region",
        help="AWS region where your ECS clusters are located (env: AWS_REGION)"
    )

    parser.add_argument(
        "-d", "--duration",
        help="Time range to fetch logs from (e.g., 24h, 1h, 30m). Default: 24h"
    )

    parser.add_argument(
        "-f", "--filter",
        default="",
        help="Filter pattern to search for in log messages"
    )

    parser.add_argument(
        "-t", "--taskdef",
        help="ECS task definition family name. Prompted interactively if omitted"
    )

    parser.add_argument(
        "-c", "--container",
        help="Container name within the task definition. Prompted interactively if omitted"
    )

    parser.add_argument(
        "--cluster",
        help="Pick the task definition from the running tasks of this cluster"
    )

    parser.add_argument(
        "--fields",
        action="append",
        help="Comma-separated list of log fields to display (e.g., @timestamp,@message). Default: @message"
    )

    parser.add_argument(
        "-o", "--output",
        help="Output file path for saving logs. Defaults to stdout"
    )

    parser.add_argument(
        "--format",
        default=OutputFormat.SIMPLE.value,
        help="Output format (simple, csv, json). 'simple' can only be used with exactly one field"
    )

    parser.add_argument(
        "--no-header",
        action="store_true",
        help="Omit the header row in csv output"
    )

    parser.add_argument(
        "-w", "--web",
        action="store_true",
        help="Open logs in the AWS CloudWatch Console instead of viewing in terminal"
    )

    parser.add_argument(
        "--stream",
        action="store_true",
        help="Read log streams directly instead of running a Logs Insights query"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def build_config(args: argparse.Namespace) -> LogViewerConfig:
    """Map parsed arguments onto a configuration; unset flags keep env/defaults."""
    overrides = {
        'filter_pattern': args.filter,
        'output_format': args.format,
        'write_header': not args.no_header,
    }
    if args.profile:
        overrides['profile_name'] = args.profile
    if args.region:
        overrides['region_name'] = args.region
    if args.duration:
        overrides['duration'] = args.duration
    fields = split_fields(args.fields)
    if fields:
        overrides['fields'] = fields
    if args.debug:
        overrides['enable_debug_logging'] = True
    return LogViewerConfig(**overrides)


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        stream=sys.stderr
    )
    # botocore is very chatty at DEBUG
    logging.getLogger("botocore").setLevel(logging.INFO if debug else logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the viewer and return the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        config = build_config(args)
    except PydanticValidationError as e:
        configure_logging(args.debug)
        for error in e.errors():
            logger.error(error['msg'].removeprefix("Value error, "))
        return 1
    except LogViewerError as e:
        # raised by defaults read from the environment
        configure_logging(args.debug)
        logger.error(str(e))
        return 1

    configure_logging(config.enable_debug_logging)

    try:
        app = LogViewerApp(config)
        app.run(
            taskdef=args.taskdef,
            container=args.container,
            cluster=args.cluster,
            output=args.output,
            web=args.web,
            stream=args.stream
        )
    except LogViewerError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"failed to write output: {e}")
        return 1
    except (KeyboardInterrupt, EOFError, click.Abort):
        logger.error("Operation cancelled by user")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
