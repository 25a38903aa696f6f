#!/usr/bin/env python3
"""
CLI Router for the RTSP redirect resolver.

Parses ``<format> sources...`` and dispatches to the one-shot or live command.
"""

import argparse
import logging
import sys
from typing import Optional, List

# Load environment variables first
import rtsp_resolver.env_loader  # noqa: F401  Auto-loads .env file

from commands import get_command, EXIT_OK, EXIT_ERROR, EXIT_USAGE
from rtsp_resolver.config import OutputMode, get_config_manager, parse_output_mode
from rtsp_resolver.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

HELP_WORDS = {'-h', '--help', 'help', '?'}


class CLIRouter:
    """
    CLI router for resolver commands.

    Command structure:
    - python run.py args rtsp://127.0.0.1/stream1 ~/local_broadcasts.json
    - python run.py json https://mybroadcast.com/broadcasts --output out.json
    - python run.py http:8123:3600 rtsp://127.0.0.1/stream1
    """

    def __init__(self):
        """Initialize CLI router."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the main argument parser."""
        parser = argparse.ArgumentParser(
            prog='rtsp-redirect-resolver',
            description="Resolve RTSP stream addresses to their final destination after redirects",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self._get_examples_text()
        )

        parser.add_argument(
            'format',
            metavar='format',
            help='Output format: args, nl, json, csv or http:<port>:<refresh_interval_seconds>'
        )
        parser.add_argument(
            'sources',
            nargs='*',
            help='Stream addresses, JSON/CSV files or http(s) URLs returning a JSON array'
        )
        parser.add_argument('--output', '-o', default=None, help='Output file for json/csv formats')
        parser.add_argument('--verbose', '-v', action='store_true', help='Verbose output')

        return parser

    def _get_examples_text(self) -> str:
        """Get examples text for help."""
        return """
formats:
  args  - prints all final sources in a single row, separated by a single space
  nl    - prints all final sources one per line
  json  - writes the original -> final mapping to redirect_sources.json
  csv   - writes (original, final) rows to redirect_sources.csv
  http:<port>:<refresh_interval_seconds>
        - serves the mapping on 'GET localhost:<port>/', re-resolving every
          <refresh_interval_seconds>

supported sources:
  http|https - fetches a url returning a JSON array and adds it to the input list
  json       - parses a local file containing a JSON array
  rtsp|rtsps - adds the address itself to the input list
  csv        - parses a local CSV file (first column)

examples:
  rtsp-redirect-resolver args rtsp://127.0.0.1/stream1 https://mybroadcast.com/broadcasts ~/local_broadcasts.json
  rtsp-redirect-resolver http:8123:3600 rtsp://127.0.0.1/stream1 https://mybroadcast.com/broadcasts
"""

    def route_command(self, args: Optional[List[str]] = None) -> int:
        """
        Route command to appropriate handler.

        Args:
            args: Command line arguments (uses sys.argv if None)

        Returns:
            Exit code
        """
        try:
            if args is None:
                args = sys.argv[1:]

            if not args or args[0] in HELP_WORDS:
                self.parser.print_help()
                return EXIT_OK

            parsed_args = self.parser.parse_args(args)
            return self._handle_command(parsed_args)

        except SystemExit as e:
            # argparse calls sys.exit() on error or help
            return e.code if e.code is not None else EXIT_OK
        except Exception as e:
            logger.error(f"CLI routing error: {e}", exc_info=True)
            return EXIT_ERROR

    def _handle_command(self, args: argparse.Namespace) -> int:
        """Validate the format, then dispatch to the matching command."""
        try:
            mode, live_settings = parse_output_mode(args.format)
            if not args.sources:
                raise ConfigurationError('sources', "at least one source is required")
            get_config_manager().update_logging(verbose=args.verbose)
        except ConfigurationError as e:
            logger.error(str(e))
            self.parser.print_usage(sys.stderr)
            return EXIT_USAGE

        args.live_settings = live_settings
        command_name = 'serve' if mode is OutputMode.HTTP else 'resolve'
        logger.debug(f"Handling {mode.value} with {len(args.sources)} source arguments")

        command = get_command(command_name)
        return command.execute(mode.value, args)


def main(args: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code
    """
    # Set up logging
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Create and use router
    router = CLIRouter()
    try:
        return router.route_command(args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


if __name__ == '__main__':
    exit_code = main()
    sys.exit(exit_code)
