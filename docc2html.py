#!/usr/bin/env python3
"""
DocC Archive to Static HTML Export Tool - Main CLI Entry Point

Converts one or more ``.doccarchive`` bundles into a static website that
mirrors the archive's folder hierarchy and can be served by any web server.
"""

import argparse
import logging
import sys
from typing import List, Optional

import yaml

from config_loader import ConfigLoader, get_nested
from errors import Docc2HtmlError, UsageError
from exporters import FileSystemExportTarget
from logger import LOGGER_NAME, log_options, log_section, setup_logging
from models import ExitCode, ExportOptions
from orchestrator import ExportOrchestrator, ExportReportFormatter

__version__ = "1.0.0"


class ExportArgumentParser(argparse.ArgumentParser):
    """Argument parser reporting bad input as a UsageError instead of exiting."""

    def error(self, message):
        raise UsageError(message)


def create_argument_parser() -> ExportArgumentParser:
    """Create and configure the argument parser for CLI."""
    parser = ExportArgumentParser(
        prog='docc2html',
        usage='%(prog)s [-f/--force] <docc archive folders...> <target folder>',
        description="Export DocC documentation archives as static HTML sites",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Export a single archive
  docc2html SlothCreator.doccarchive /tmp/SlothCreator/

  # Overwrite/merge an existing target, keep hashed resource names
  docc2html -f --keep-hash SlothCreator.doccarchive /tmp/SlothCreator/

  # Several archives into one site, verbose logging
  docc2html -v A.doccarchive B.doccarchive /tmp/site/
        """
    )

    parser.add_argument(
        'paths',
        nargs='*',
        metavar='path',
        help='Archive bundle paths followed by the target directory'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '-f', '--force',
        action='store_true',
        help='Overwrite/merge target directories and files'
    )

    parser.add_argument(
        '-s', '--silent',
        action='store_true',
        help='Silent logging (errors only)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose logging'
    )

    parser.add_argument(
        '--keep-hash',
        action='store_true',
        help='Keep hashes in resource names'
    )

    parser.add_argument(
        '--config',
        type=str,
        help='Path to configuration YAML file'
    )

    parser.add_argument(
        '--no-index',
        action='store_true',
        help='Do not generate <name>/index.html landing pages'
    )

    parser.add_argument(
        '--no-api-docs',
        action='store_true',
        help='Skip the documentation folder'
    )

    parser.add_argument(
        '--no-tutorials',
        action='store_true',
        help='Skip the tutorials folder'
    )

    parser.add_argument(
        '--no-system-css',
        action='store_true',
        help='Do not copy the stylesheets shipped in the archive'
    )

    parser.add_argument(
        '--log-file',
        type=str,
        help='Also write log output to this file'
    )

    parser.add_argument(
        '--report',
        type=str,
        help='Write a JSON export report to this file'
    )

    return parser


def load_configuration(args: argparse.Namespace) -> dict:
    """Load the optional config file and merge CLI arguments over it."""
    config = {}
    if args.config:
        try:
            config = ConfigLoader.load(args.config)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise UsageError(f"Configuration error: {e}") from e

    config = ConfigLoader.merge_with_args(config, args)

    try:
        ConfigLoader.validate(config)
    except ValueError as e:
        raise UsageError(f"Configuration error: {e}") from e

    return config


def run_export(config: dict, archive_paths: List[str], target_path: str,
               logger: logging.Logger) -> int:
    """Execute the export pipeline and report its outcome."""
    options = ExportOptions.from_config(config)
    log_options(options, archive_paths, target_path)

    orchestrator = ExportOrchestrator(
        target=FileSystemExportTarget(target_path),
        archive_paths=archive_paths,
        options=options
    )
    report = orchestrator.export()

    formatter = ExportReportFormatter()
    if (get_nested(config, 'logging.level') or '').upper() != 'ERROR':
        print("\n" + formatter.format_console_report(report))

    report_path = get_nested(config, 'report.path')
    if report_path:
        formatter.export_json_report(report, report_path)

    if report.total_errors:
        logger.warning(f"Export completed with {report.total_errors} errors")
    else:
        logger.info("Export completed successfully")

    return ExitCode.SUCCESS


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_argument_parser()

    # Flags may appear anywhere; the target is the last non-flag argument
    try:
        args = parser.parse_intermixed_args(argv)
    except UsageError as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return e.exit_code

    if len(args.paths) < 2:
        parser.print_usage()
        return ExitCode.NOT_ENOUGH_ARGUMENTS

    archive_paths = args.paths[:-1]
    target_path = args.paths[-1]

    setup_logging(verbose=args.verbose, silent=args.silent)
    logger = logging.getLogger(LOGGER_NAME)

    try:
        config = load_configuration(args)

        # Reconfigure logging with config file settings
        setup_logging(
            verbose=args.verbose,
            silent=args.silent,
            log_file=get_nested(config, 'logging.file'),
            level=get_nested(config, 'logging.level')
        )

        log_section("DocC to HTML Export")
        logger.info(f"Version: {__version__}")

        return run_export(config, archive_paths, target_path, logger)

    except UsageError as e:
        logger.error(str(e))
        return e.exit_code
    except Docc2HtmlError as e:
        # Already logged where it was raised
        logger.debug(f"Export aborted: {e}")
        return e.exit_code
    except KeyboardInterrupt:
        logger.error("Export interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return ExitCode.UNEXPECTED_ERROR


if __name__ == "__main__":
    sys.exit(main())
