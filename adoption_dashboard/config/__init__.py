"""
Dashboard configuration loading.
"""

from .settings import (
    DEFAULT_METRICS,
    ColumnSettings,
    DashboardSettings,
    DefaultSelection,
    SettingsLoader,
    load_settings,
)

__all__ = [
    "DEFAULT_METRICS",
    "ColumnSettings",
    "DashboardSettings",
    "DefaultSelection",
    "SettingsLoader",
    "load_settings",
]
