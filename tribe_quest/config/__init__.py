"""
Tribe Quest Configuration.

Environment variables, settings, and logging configuration.
"""

from tribe_quest.config.log_config import configure_logging
from tribe_quest.config.settings import Settings, get_settings

__all__ = ["Settings", "configure_logging", "get_settings"]
