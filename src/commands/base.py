#!/usr/bin/env python3
"""
Base command class for the modular command architecture.

Provides common functionality and interface that all commands inherit.
Uses dependency injection for better testability and maintainability.
"""

import logging
from abc import ABC, abstractmethod
from argparse import Namespace
from typing import Iterable, List

from rtsp_resolver.container import get_container
from rtsp_resolver.exceptions import ConfigurationError, ResolverError, ServeError
from rtsp_resolver.providers import SourceProvider

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2


class BaseCommand(ABC):
    """
    Base class for all command endpoints.

    Provides provider construction and error handling shared by the one-shot
    and live commands. Uses the dependency injection container for services.
    """

    def __init__(self, container=None):
        """
        Initialize base command with dependency injection container.

        Args:
            container: Optional container instance. If None, uses global container.
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self._container = container or get_container()

    @property
    def config(self):
        """Get configuration from container."""
        return self._container.get('config')

    @property
    def provider_factory(self):
        """Get a provider factory from container."""
        return self._container.get('provider_factory')

    def build_providers(self, addresses: Iterable[str]) -> List[SourceProvider]:
        """Create one provider per supported address."""
        return self.provider_factory.create_all(addresses)

    @abstractmethod
    def execute(self, mode: str, args: Namespace) -> int:
        """
        Execute the command for the given output mode.

        Args:
            mode: Output mode value (e.g. 'json', 'http')
            args: Parsed command line arguments

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        pass

    def handle_error(self, error: Exception, context: str = "") -> int:
        """
        Standard error handling for commands.

        Args:
            error: The exception that occurred
            context: Additional context about where the error occurred

        Returns:
            Appropriate exit code
        """
        error_msg = f"{context}: {error}" if context else str(error)
        if isinstance(error, ResolverError):
            self.logger.debug(f"Error details: {error.to_dict()}")

        if isinstance(error, ConfigurationError):
            self.logger.error(error_msg)
            return EXIT_USAGE
        if isinstance(error, ServeError):
            self.logger.error(error_msg)
            return EXIT_ERROR

        self.logger.error(error_msg, exc_info=True)
        return EXIT_ERROR
