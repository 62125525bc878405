"""
Configuration module for the booking calendar.
"""
from .settings import (
    CalendarSettings,
    RateTierSetting,
    get_config,
    load_config,
    reload_config
)

__all__ = [
    'CalendarSettings',
    'RateTierSetting',
    'get_config',
    'load_config',
    'reload_config'
]
