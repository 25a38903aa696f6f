#!/usr/bin/env python3
"""
Standardized exception hierarchy for the RTSP redirect resolver.

Per-source and per-provider errors are caught and logged where they occur;
only configuration and serving errors propagate to the command layer.
"""

from typing import Optional, Dict, Any


class ResolverError(Exception):
    """Base exception for all resolver errors."""
    
    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        """
        Initialize base exception.
        
        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            context: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'context': self.context
        }


# Input errors
class AddressError(ResolverError):
    """Stream address cannot be parsed or uses an unsupported scheme."""
    
    def __init__(self, address: str, issue: str):
        message = f"Invalid stream address {address!r}: {issue}"
        context = {
            'address': address,
            'issue': issue
        }
        super().__init__(message, context=context)


# Provider-related exceptions
class ProviderError(ResolverError):
    """Base exception for source provider errors."""
    pass


class ProviderFetchError(ProviderError):
    """Failed to read provider input (file or remote endpoint)."""
    
    def __init__(self, location: str, original_error: Exception):
        message = f"Failed to read sources from {location}: {original_error}"
        context = {
            'location': location,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


class ProviderDecodeError(ProviderError):
    """Provider input was read but could not be decoded into addresses."""
    
    def __init__(self, source_format: str, issue: str):
        message = f"Failed to decode {source_format} sources: {issue}"
        context = {
            'source_format': source_format,
            'issue': issue
        }
        super().__init__(message, context=context)


# Resolution-related exceptions
class ResolutionError(ResolverError):
    """Base exception for redirect resolution errors."""
    pass


class ResolutionConnectionError(ResolutionError):
    """Failed to connect to the stream server."""
    
    def __init__(self, url: str, original_error: Exception):
        message = f"Failed to connect to {url}: {original_error}"
        context = {
            'url': url,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


class ResolutionTimeoutError(ResolutionError):
    """No definitive response before the resolution timeout."""
    
    def __init__(self, url: str, timeout_seconds: float):
        message = f"Timeout resolving {url} after {timeout_seconds}s"
        context = {
            'url': url,
            'timeout_seconds': timeout_seconds
        }
        super().__init__(message, context=context)


class ResolutionProtocolError(ResolutionError):
    """Server answered with an error status or a malformed response."""
    
    def __init__(self, url: str, issue: str, status_code: Optional[int] = None):
        message = f"Protocol error from {url}: {issue}"
        context = {
            'url': url,
            'issue': issue,
            'status_code': status_code
        }
        super().__init__(message, context=context)
        self.status_code = status_code


# Startup/serving exceptions
class ConfigurationError(ResolverError):
    """Configuration or command-line parameters are invalid."""
    
    def __init__(self, config_key: str, issue: str):
        message = f"Configuration error for {config_key}: {issue}"
        context = {
            'config_key': config_key,
            'issue': issue
        }
        super().__init__(message, context=context)


class ServeError(ResolverError):
    """Live endpoint could not be started."""
    
    def __init__(self, host: str, port: int, original_error: Exception):
        message = f"Cannot serve on {host}:{port}: {original_error}"
        context = {
            'host': host,
            'port': port,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)
