"""Configuration adapters."""

from subway_lines.adapters.config.app_config import AppConfig
from subway_lines.adapters.config.line_configuration_loader import LineConfigurationLoader

__all__ = ["AppConfig", "LineConfigurationLoader"]
