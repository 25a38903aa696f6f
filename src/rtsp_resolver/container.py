#!/usr/bin/env python3
"""
Dependency Injection Container

Hands commands their configuration, redirect resolver and provider factory
without scattering construction logic through the command layer.
"""

import logging
import threading
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)


class Container:
    """Simple dependency injection container with singleton and factory services."""

    def __init__(self):
        """Initialize empty container."""
        self._factories: Dict[str, Callable[[], Any]] = {}
        self._singleton_names = set()
        self._singletons: Dict[str, Any] = {}
        self._lock = threading.RLock()

    def register_singleton(self, service_name: str, factory: Callable[[], Any]) -> None:
        """Register a service created once on first use and reused afterwards."""
        with self._lock:
            self._factories[service_name] = factory
            self._singleton_names.add(service_name)
            self._singletons.pop(service_name, None)

    def register_factory(self, service_name: str, factory: Callable[[], Any]) -> None:
        """Register a service created anew on every ``get``."""
        with self._lock:
            self._factories[service_name] = factory
            self._singleton_names.discard(service_name)
            self._singletons.pop(service_name, None)

    def register_instance(self, service_name: str, instance: Any) -> None:
        """Register a pre-built instance (handy for tests)."""
        with self._lock:
            self._singletons[service_name] = instance

    def get(self, service_name: str) -> Any:
        """
        Get service instance by name.

        Raises:
            KeyError: If service is not registered
        """
        with self._lock:
            if service_name in self._singletons:
                return self._singletons[service_name]

            if service_name not in self._factories:
                raise KeyError(f"Service '{service_name}' not registered")

            instance = self._factories[service_name]()
            if service_name in self._singleton_names:
                self._singletons[service_name] = instance
                logger.debug(f"Created singleton instance for '{service_name}'")
            return instance


# Global container instance
_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get global container instance (thread-safe singleton)."""
    global _container
    if _container is None:
        with _container_lock:
            if _container is None:
                _container = Container()
                _setup_default_services(_container)
    return _container


def reset_container() -> None:
    """Reset global container (useful for testing)."""
    global _container
    with _container_lock:
        _container = None


def _setup_default_services(container: Container) -> None:
    """Set up default service registrations with configuration injection."""

    def create_config():
        from .config import get_config
        return get_config()

    def create_redirect_resolver():
        from .resolver import RedirectResolver
        config = container.get('config')
        return RedirectResolver(
            timeout=config.resolver.rtsp_timeout,
            max_redirects=config.resolver.rtsp_max_redirects,
            user_agent=config.resolver.user_agent,
            verify_tls=config.resolver.verify_tls
        )

    def create_provider_factory():
        from .providers import ProviderFactory
        config = container.get('config')
        return ProviderFactory(
            resolver=container.get('redirect_resolver'),
            fetch_timeout=config.resolver.remote_fetch_timeout,
            user_agent=config.resolver.user_agent
        )

    container.register_singleton('config', create_config)
    container.register_singleton('redirect_resolver', create_redirect_resolver)
    container.register_factory('provider_factory', create_provider_factory)

    logger.debug("Default services registered in container")
