from .selector import Selector
from .store import ConfigEntry, ConfigStore

__all__ = ["ConfigEntry", "ConfigStore", "Selector"]
