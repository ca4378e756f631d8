from config.settings import AriSettings, Settings, TimeoutSettings, get_settings

__all__ = ["AriSettings", "Settings", "TimeoutSettings", "get_settings"]
