#!/usr/bin/env python3
"""
RTSP redirect resolver.

Aggregates stream addresses from heterogeneous providers, resolves each one
to its final destination by following RTSP redirects, and republishes the
original -> resolved mapping.
"""

from .models import Source
from .registry import SourceRegistry
from .resolver import RedirectResolver
from .orchestrator import AggregationOrchestrator, CycleStats
from .scheduler import RefreshScheduler, SchedulerState

__version__ = "1.0.0"

__all__ = [
    'Source', 'SourceRegistry', 'RedirectResolver', 'AggregationOrchestrator',
    'CycleStats', 'RefreshScheduler', 'SchedulerState'
]
