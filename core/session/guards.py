# =============================================================================
# core/session/guards.py - Client-Side Session Guards
# =============================================================================
# Three independent watchers that keep a logged-out user from seeing cached
# protected pages:
#
# - NavigationWatcher: back/forward navigation ("popstate")
# - VisibilityWatcher: tab regains focus ("visibilitychange")
# - MountGuard: every protected page mount, before anything renders
#
# All three consult the same LogoutFlagStore and the same PUBLIC_ROUTES.
# A public path clears the flag; a protected path with the flag set sends the
# user to /login?session=expired. Each watcher redirects at most once per
# flag: it settles back to idle once the flag reads clear, and start() or a
# remount resets it.
#
# If the flag cannot be read the guards fail open: the error is logged and
# the page is treated as not logged out, so a broken storage never locks a
# user out for good.
#
# Usage:
#   provider = SessionGuardProvider(store, navigator, events)
#   content = provider.protected_page(render_orders_page)
# =============================================================================

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Any, Callable, Protocol, TypeVar

from core.models.session import GuardState
from core.routes import PUBLIC_ROUTES, SESSION_EXPIRED_REDIRECT, is_public_route
from core.session.flags import LogoutFlagStore
from core.session.storage import StorageUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")

POPSTATE = "popstate"
VISIBILITY_CHANGE = "visibilitychange"


# =============================================================================
# Collaborators
# =============================================================================

class Navigator(Protocol):
    """The router: knows the current path and can navigate."""

    @property
    def pathname(self) -> str:
        ...

    def push(self, url: str) -> None:
        ...


Listener = Callable[..., None]


class PageEvents:
    """
    Listener registry for page-level events.

    Mirrors addEventListener/removeEventListener on the browser window and
    document. Listeners run synchronously, in registration order.
    """

    def __init__(self):
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def add_listener(self, event: str, listener: Listener) -> None:
        self._listeners[event].append(listener)

    def remove_listener(self, event: str, listener: Listener) -> None:
        listeners = self._listeners.get(event, [])
        if listener in listeners:
            listeners.remove(listener)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, []))

    def dispatch(self, event: str, **payload: Any) -> None:
        """Call every listener for `event` with the payload as keyword args."""
        # Copy so a listener may unsubscribe while being called
        for listener in list(self._listeners.get(event, [])):
            listener(**payload)


# =============================================================================
# Guards
# =============================================================================

class SessionGuard:
    """
    Shared check-and-redirect logic.

    Subclasses decide when check() runs. The public route set is held as an
    attribute so tests can assert it is the shared PUBLIC_ROUTES object.
    """

    name = "session-guard"

    def __init__(
        self,
        store: LogoutFlagStore,
        navigator: Navigator,
        redirect_url: str = SESSION_EXPIRED_REDIRECT,
    ):
        self.store = store
        self.navigator = navigator
        self.redirect_url = redirect_url
        self.public_routes = PUBLIC_ROUTES
        self.state = GuardState.IDLE

    def _logged_out(self) -> bool:
        try:
            return self.store.was_logged_out()
        except StorageUnavailableError as e:
            logger.error(f"[{self.name}] Could not read logout flag, allowing page: {e.message}")
            return False

    def _clear_flags(self) -> None:
        try:
            self.store.clear_logout_flags()
        except StorageUnavailableError as e:
            logger.error(f"[{self.name}] Could not clear logout flag: {e.message}")

    def check(self) -> bool:
        """
        Run the check for the navigator's current path.

        Returns:
            True if a redirect to the login page was issued (or is already
            under way), False if the current page may be shown
        """
        path = self.navigator.pathname

        if is_public_route(path, self.public_routes):
            self._clear_flags()
            self.state = GuardState.IDLE
            return False

        if not self._logged_out():
            self.state = GuardState.IDLE
            return False

        # Already on its way to the login page for this flag
        if self.state is GuardState.REDIRECTING:
            return True

        self.state = GuardState.REDIRECTING
        logger.info(f"[{self.name}] Stale session on {path}, redirecting to {self.redirect_url}")
        self.navigator.push(self.redirect_url)
        return True

    def reset(self) -> None:
        """Forget a previous redirect; the next check reads the flag afresh."""
        self.state = GuardState.IDLE


class _EventWatcher(SessionGuard, ABC):
    """A guard that runs its check when a page event fires."""

    event = ""

    def __init__(
        self,
        store: LogoutFlagStore,
        navigator: Navigator,
        events: PageEvents,
        redirect_url: str = SESSION_EXPIRED_REDIRECT,
    ):
        super().__init__(store, navigator, redirect_url)
        self.events = events
        self.active = False

    def start(self) -> None:
        self.reset()
        if not self.active:
            self.events.add_listener(self.event, self.handle_event)
            self.active = True

    def stop(self) -> None:
        if self.active:
            self.events.remove_listener(self.event, self.handle_event)
            self.active = False
        self.reset()

    @abstractmethod
    def handle_event(self, **payload: Any) -> None:
        ...

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False


class NavigationWatcher(_EventWatcher):
    """Checks the flag on back/forward navigation."""

    name = "navigation-watcher"
    event = POPSTATE

    def handle_event(self, **payload: Any) -> None:
        self.check()


class VisibilityWatcher(_EventWatcher):
    """Checks the flag when the tab becomes visible again. Hiding is a no-op."""

    name = "visibility-watcher"
    event = VISIBILITY_CHANGE

    def handle_event(self, visible: bool = True, **payload: Any) -> None:
        if visible:
            self.check()


class MountGuard(SessionGuard):
    """
    Gates the first render of a page.

    On a protected path nothing is rendered until the flag has been read,
    so a logged-out user never sees a flash of protected content.
    """

    name = "mount-guard"

    def mount(self, render: Callable[[], T]) -> T | None:
        """
        Check the flag, then render.

        Args:
            render: Produces the page content

        Returns:
            The rendered content, or None when a redirect was issued
        """
        if is_public_route(self.navigator.pathname, self.public_routes):
            self.check()
            return render()

        self.state = GuardState.CHECKING
        if self.check():
            return None

        return render()


# =============================================================================
# Provider
# =============================================================================

class SessionGuardProvider:
    """
    Hands out guards bound to one flag store, router and event source.

    This is the single place the dashboard shell gets its session guards
    from; pages never touch the flag storage directly.
    """

    def __init__(self, store: LogoutFlagStore, navigator: Navigator, events: PageEvents):
        self.store = store
        self.navigator = navigator
        self.events = events
        self.navigation = NavigationWatcher(store, navigator, events)
        self.visibility = VisibilityWatcher(store, navigator, events)
        self.mount_guard = MountGuard(store, navigator)

    @property
    def guards(self) -> tuple[SessionGuard, ...]:
        return (self.navigation, self.visibility, self.mount_guard)

    def start(self) -> None:
        """Subscribe both event watchers."""
        self.navigation.start()
        self.visibility.start()

    def stop(self) -> None:
        """Unsubscribe both event watchers."""
        self.navigation.stop()
        self.visibility.stop()

    def protected_page(self, render: Callable[[], T]) -> T | None:
        """
        Mount a page behind all three guards.

        Runs the mount-time check and, if the page renders, starts the
        navigation and visibility watchers for its lifetime. Starting resets
        both watchers, so a page mounted after a fresh login guards again.
        """
        content = self.mount_guard.mount(render)
        if content is not None:
            self.start()
        return content
