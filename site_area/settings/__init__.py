"""Settings profiles and resolution."""

from .loader import PROFILES_DIR, SettingsLike, load_settings, resolve_settings

__all__ = ["load_settings", "resolve_settings", "SettingsLike", "PROFILES_DIR"]
