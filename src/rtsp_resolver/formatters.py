#!/usr/bin/env python3
"""
Output formatting for resolved source snapshots.
"""

import csv
import json
from typing import Dict, IO, Iterable, List

from .models import Source


def format_joined(sources: Iterable[Source], separator: str) -> str:
    """Join resolved addresses with ``separator`` (unresolved ones stay empty)."""
    return separator.join(source.resolved for source in sources)


def sources_to_mapping(sources: Iterable[Source]) -> Dict[str, str]:
    """Convert a snapshot to an original -> resolved dict."""
    return {source.original: source.resolved for source in sources}


def sources_to_rows(sources: Iterable[Source]) -> List[List[str]]:
    return [[source.original, source.resolved] for source in sources]


def write_json(sources: Iterable[Source], fp: IO[str]) -> None:
    """Write the snapshot as a JSON object mapping original to resolved."""
    json.dump(sources_to_mapping(sources), fp, ensure_ascii=False)
    fp.write("\n")


def read_json_mapping(fp: IO[str]) -> Dict[str, str]:
    """Read a mapping written by ``write_json``."""
    mapping = json.load(fp)
    if not isinstance(mapping, dict):
        raise ValueError(f"Expected JSON object, got {type(mapping).__name__}")
    return {str(original): str(resolved) for original, resolved in mapping.items()}


def write_csv(sources: Iterable[Source], fp: IO[str]) -> None:
    """Write the snapshot as (original, resolved) CSV rows."""
    writer = csv.writer(fp, lineterminator="\n")
    writer.writerows(sources_to_rows(sources))
