#!/usr/bin/env python3
"""
Command endpoints for the RTSP redirect resolver.

One-shot output modes are handled by ResolveCommand, live mode by
ServeCommand.
"""

from typing import Dict, Type
from .base import BaseCommand, EXIT_OK, EXIT_ERROR, EXIT_USAGE
from .resolve import ResolveCommand
from .serve import ServeCommand

# Command registry for easy extension
COMMANDS: Dict[str, Type[BaseCommand]] = {
    'resolve': ResolveCommand,
    'serve': ServeCommand,
}

def get_command(command_name: str) -> BaseCommand:
    """Get a command instance by name."""
    if command_name not in COMMANDS:
        available = ', '.join(COMMANDS.keys())
        raise ValueError(f"Unknown command '{command_name}'. Available: {available}")

    command_class = COMMANDS[command_name]
    return command_class()
