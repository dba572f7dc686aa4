# Core modules

from .config import settings, get_settings, Settings
from .session import BrowseSessionManager, BrowseSession

__all__ = ["settings", "get_settings", "Settings", "BrowseSessionManager", "BrowseSession"]
