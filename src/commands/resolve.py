#!/usr/bin/env python3
"""
One-shot resolution command.

Runs a single refresh cycle and prints or writes the resulting snapshot.
"""

import asyncio
import logging
from argparse import Namespace
from typing import List

from rtsp_resolver.config import OutputMode
from rtsp_resolver.formatters import format_joined, write_csv, write_json
from rtsp_resolver.models import Source
from rtsp_resolver.orchestrator import AggregationOrchestrator

from .base import BaseCommand, EXIT_OK

logger = logging.getLogger(__name__)

SEPARATORS = {
    OutputMode.ARGS: " ",
    OutputMode.NEW_LINES: "\n",
}


class ResolveCommand(BaseCommand):
    """Resolve every source once and emit args, nl, json or csv output."""

    def execute(self, mode: str, args: Namespace) -> int:
        """Execute one-shot resolution for ``mode``."""
        try:
            output_mode = OutputMode(mode)

            providers = self.build_providers(args.sources)
            if not providers:
                self.logger.warning("No usable sources given, nothing to resolve")
                return EXIT_OK

            orchestrator = AggregationOrchestrator(providers)
            asyncio.run(orchestrator.refresh_and_resolve())
            snapshot = orchestrator.snapshot()

            if output_mode in SEPARATORS:
                print(format_joined(snapshot, SEPARATORS[output_mode]))
            elif output_mode is OutputMode.JSON:
                self._write_file(snapshot, output_mode, getattr(args, 'output', None) or self.config.output.json_path)
            elif output_mode is OutputMode.CSV:
                self._write_file(snapshot, output_mode, getattr(args, 'output', None) or self.config.output.csv_path)
            else:
                raise ValueError(f"Mode '{mode}' is not a one-shot output mode")

            return EXIT_OK

        except Exception as e:
            return self.handle_error(e, f"resolve {mode}")

    def _write_file(self, snapshot: List[Source], output_mode: OutputMode, path: str) -> None:
        with open(path, 'w', encoding='utf-8', newline='') as f:
            if output_mode is OutputMode.JSON:
                write_json(snapshot, f)
            else:
                write_csv(snapshot, f)
        self.logger.info(f"Wrote {len(snapshot)} sources to {path}")
