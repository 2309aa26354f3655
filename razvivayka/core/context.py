"""
razvivayka/core/context.py

Purpose: Process-wide application state

- Built once at startup and handed to handlers, scheduler and routes
- Replaces module-level user and menu maps
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from razvivayka.core.config import Settings
from razvivayka.db.store import UserStore
from razvivayka.services.ephemeral_service import EphemeralMessageQueue
from razvivayka.services.menu_service import MenuSessionTracker
from razvivayka.utils.time_utils import utc_now


@dataclass
class AppContext:
    settings: Settings
    store: UserStore
    transport: Any = None
    menus: MenuSessionTracker = field(default_factory=MenuSessionTracker)
    ephemeral: EphemeralMessageQueue = field(default_factory=EphemeralMessageQueue)
    scheduler: Optional[Any] = None
    telegram_app: Optional[Any] = None
    started_at: Any = field(default_factory=utc_now)

    @classmethod
    def from_settings(cls, settings: Settings, transport=None) -> "AppContext":
        return cls(settings=settings, store=UserStore(settings.DATA_FILE), transport=transport)
