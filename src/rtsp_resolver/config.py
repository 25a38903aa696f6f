#!/usr/bin/env python3
"""
Centralized Configuration Manager

Provides a single source of truth for application configuration, including
environment variables, defaults, validation and output mode selection.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .env_loader import get_env_bool, get_env_float, get_env_int, get_env_var
from .exceptions import ConfigurationError
from .rtsp import DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


class OutputMode(Enum):
    """Supported output shapes."""
    ARGS = "args"
    NEW_LINES = "nl"
    JSON = "json"
    CSV = "csv"
    HTTP = "http"


@dataclass
class LiveModeSettings:
    """Parameters of ``http:<port>:<refresh_interval_seconds>``."""
    port: int
    interval_seconds: int


@dataclass
class ResolverConfig:
    """Network behaviour of providers and the redirect resolver."""
    remote_fetch_timeout: float = 5
    rtsp_timeout: float = 15
    rtsp_max_redirects: int = 10
    user_agent: str = DEFAULT_USER_AGENT
    verify_tls: bool = True


@dataclass
class OutputConfig:
    """One-shot output destinations."""
    json_path: str = "redirect_sources.json"
    csv_path: str = "redirect_sources.csv"


@dataclass
class ServerConfig:
    """Live endpoint settings."""
    host: str = "0.0.0.0"
    shutdown_timeout: float = 10.0


@dataclass
class Config:
    """Master configuration container."""
    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    
    # Logging
    log_level: str = "INFO"
    verbose_logging: bool = False


def parse_output_mode(selector: str) -> Tuple[OutputMode, Optional[LiveModeSettings]]:
    """
    Parse the output mode argument.
    
    Args:
        selector: ``args``, ``nl``, ``json``, ``csv`` or ``http:<port>:<seconds>``
        
    Returns:
        Tuple of mode and, for live mode, its settings
        
    Raises:
        ConfigurationError: If the mode is unknown or its parameters are malformed
    """
    if selector == OutputMode.HTTP.value or selector.startswith(OutputMode.HTTP.value + ':'):
        return OutputMode.HTTP, _parse_live_settings(selector)
    
    for mode in OutputMode:
        if mode is not OutputMode.HTTP and selector == mode.value:
            return mode, None
    
    supported = ', '.join(mode.value for mode in OutputMode)
    raise ConfigurationError('format', f"unknown format {selector!r} (supported: {supported})")


def _parse_live_settings(selector: str) -> LiveModeSettings:
    parts = selector.split(':')
    if len(parts) != 3:
        raise ConfigurationError('format', f"expected http:<port>:<refresh_interval_seconds>, got {selector!r}")
    
    _, port_str, interval_str = parts
    try:
        port = int(port_str)
    except ValueError:
        raise ConfigurationError('port', f"not an integer: {port_str!r}")
    try:
        interval = int(interval_str)
    except ValueError:
        raise ConfigurationError('refresh_interval_seconds', f"not an integer: {interval_str!r}")
    
    if not 0 <= port <= 65535:
        raise ConfigurationError('port', f"out of range: {port}")
    if interval < 1:
        raise ConfigurationError('refresh_interval_seconds', "must be at least 1 second")
    
    return LiveModeSettings(port=port, interval_seconds=interval)


class ConfigManager:
    """Manages application configuration with validation and environment loading."""
    
    def __init__(self):
        self._config: Optional[Config] = None
    
    def get_config(self, force_reload: bool = False) -> Config:
        """
        Get application configuration.
        
        Args:
            force_reload: Force reloading configuration from environment
            
        Returns:
            Complete configuration object
        """
        if self._config is None or force_reload:
            self._config = self._build_config()
        return self._config
    
    def _build_config(self) -> Config:
        """Build configuration from environment variables."""
        resolver_config = ResolverConfig(
            remote_fetch_timeout=get_env_float('REMOTE_FETCH_TIMEOUT', 5),
            rtsp_timeout=get_env_float('RTSP_TIMEOUT', 15),
            rtsp_max_redirects=get_env_int('RTSP_MAX_REDIRECTS', 10),
            user_agent=get_env_var('RTSP_USER_AGENT', DEFAULT_USER_AGENT),
            verify_tls=get_env_bool('RTSP_TLS_VERIFY', True)
        )
        server_config = ServerConfig(
            host=get_env_var('LIVE_HOST', '0.0.0.0'),
            shutdown_timeout=get_env_float('LIVE_SHUTDOWN_TIMEOUT', 10.0)
        )
        output_config = OutputConfig(
            json_path=get_env_var('JSON_OUTPUT_PATH', 'redirect_sources.json'),
            csv_path=get_env_var('CSV_OUTPUT_PATH', 'redirect_sources.csv')
        )
        
        config = Config(
            resolver=resolver_config,
            output=output_config,
            server=server_config,
            log_level=get_env_var('LOG_LEVEL', 'INFO').upper(),
            verbose_logging=get_env_bool('VERBOSE_LOGGING', False)
        )
        
        self._validate_config(config)
        return config
    
    def _validate_config(self, config: Config) -> None:
        """Validate configuration values."""
        errors = []
        
        if config.resolver.remote_fetch_timeout <= 0:
            errors.append("REMOTE_FETCH_TIMEOUT must be positive")
        
        if config.resolver.rtsp_timeout <= 0:
            errors.append("RTSP_TIMEOUT must be positive")
        
        if config.resolver.rtsp_max_redirects < 0:
            errors.append("RTSP_MAX_REDIRECTS must not be negative")
        
        if config.server.shutdown_timeout < 0:
            errors.append("LIVE_SHUTDOWN_TIMEOUT must not be negative")
        
        if config.log_level not in VALID_LOG_LEVELS:
            errors.append(f"LOG_LEVEL must be one of: {', '.join(VALID_LOG_LEVELS)}")
        
        if errors:
            raise ConfigurationError('environment', '; '.join(errors))
        
        logger.debug("Configuration validation passed")
    
    def update_logging(self, verbose: bool = False) -> None:
        """Configure logging based on current configuration."""
        config = self.get_config()
        
        level_name = 'DEBUG' if verbose else config.log_level
        numeric_level = getattr(logging, level_name)
        logging.getLogger().setLevel(numeric_level)
        
        # Configure format
        if config.verbose_logging:
            format_str = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
        else:
            format_str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        
        # Update existing handlers
        for handler in logging.getLogger().handlers:
            handler.setLevel(numeric_level)
            formatter = logging.Formatter(format_str, datefmt='%Y-%m-%d %H:%M:%S')
            handler.setFormatter(formatter)


# Global configuration manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def get_config() -> Config:
    """Get application configuration."""
    return get_config_manager().get_config()


def reset_config() -> None:
    """Reset configuration manager (useful for testing)."""
    global _config_manager
    _config_manager = None
