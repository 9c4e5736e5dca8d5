from .base import Settings
from .loaders import load_file
from .models import ManifestSettings, load_settings
from .setup import setup_logging

__all__ = [
    "Settings",
    "ManifestSettings",
    "load_file",
    "load_settings",
    "setup_logging",
]
