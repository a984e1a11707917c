# =============================================================================
# core/session/ - Logout Flag & Session Guards
# =============================================================================
# - storage.py: Key/value persistence boundary (local storage, cookies)
# - flags.py: LogoutFlagStore, the only writer of the logout flag
# - guards.py: Navigation, visibility and mount-time guards
# - banner.py: Login page banner selection
# =============================================================================

from .banner import login_banner
from .flags import LogoutFlagStore, LogoutFlagWriteError
from .guards import (
    MountGuard,
    NavigationWatcher,
    PageEvents,
    SessionGuard,
    SessionGuardProvider,
    VisibilityWatcher,
)
from .storage import KeyValueStorage, MemoryStorage, StorageUnavailableError

__all__ = [
    "login_banner",
    "LogoutFlagStore",
    "LogoutFlagWriteError",
    "MountGuard",
    "NavigationWatcher",
    "PageEvents",
    "SessionGuard",
    "SessionGuardProvider",
    "VisibilityWatcher",
    "KeyValueStorage",
    "MemoryStorage",
    "StorageUnavailableError",
]
