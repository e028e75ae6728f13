from .manager import SettingsManager
from .models import Settings
from .storage import JsonSettingsStore, SettingsStore

__all__ = ["JsonSettingsStore", "Settings", "SettingsManager", "SettingsStore"]
