# Core modules

from .config import settings, get_settings
from .events import EventDispatcher, StoreEvent, log_store_event

__all__ = ["settings", "get_settings", "EventDispatcher", "StoreEvent", "log_store_event"]
