"""User settings and preferences."""

from .manager import SETTINGS_METADATA, SettingsManager
from .models import Setting
from .schemas import ReadingSettings, SettingKey, SettingResponse

__all__ = [
    "SETTINGS_METADATA",
    "SettingsManager",
    "Setting",
    "ReadingSettings",
    "SettingKey",
    "SettingResponse",
]
