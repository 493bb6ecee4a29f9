from .config import Settings, load_settings
from .session import AudioBackend, ChordSession

__all__ = ["AudioBackend", "ChordSession", "Settings", "load_settings"]
